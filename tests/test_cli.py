from __future__ import annotations

import json
import textwrap
from pathlib import Path

from hypertoon.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def test_cli_encodes_json_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "data.json", '{"a": 1, "tags": ["x", "y"]}')

    result = cli_runner.invoke(cli, ["encode", str(target)])

    assert result.exit_code == 0
    assert result.output == "a: 1\ntags[2]: x,y\n"


def test_cli_encode_reads_stdin(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["encode", "-"], input='{"nested": {"b": true}}')

    assert result.exit_code == 0
    assert result.output == "nested:\n    b: true\n"


def test_cli_encode_honours_indent_option(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "data.json", '{"nested": {"b": 1}}')

    result = cli_runner.invoke(cli, ["encode", "--indent-spaces", "2", str(target)])

    assert result.exit_code == 0
    assert result.output == "nested:\n  b: 1\n"


def test_cli_encode_uses_pyproject_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path, "pyproject.toml", "[tool.hypertoon]\nindent_spaces = 1\n")
    target = _write(tmp_path, "data.json", '{"nested": {"b": 1}}')

    result = cli_runner.invoke(cli, ["encode", str(target)])

    assert result.exit_code == 0
    assert result.output == "nested:\n b: 1\n"


def test_cli_encode_rejects_invalid_json(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "broken.json", "{not json")

    result = cli_runner.invoke(cli, ["encode", str(target)])

    assert result.exit_code == 1
    assert "not valid JSON" in result.output


def test_cli_encode_rejects_invalid_override(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "data.json", '{"a": 1}')

    result = cli_runner.invoke(cli, ["encode", "--indent-spaces", "0", str(target)])

    assert result.exit_code == 2
    assert "indent_spaces" in result.output


def test_cli_encode_non_object_prints_nothing(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "list.json", "[1, 2]")

    result = cli_runner.invoke(cli, ["encode", str(target)])

    assert result.exit_code == 0
    assert result.output == ""


def test_cli_decodes_notation_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "data.toon",
        """
        users[2]{id,name}:
            1,Ada
            2,Lin
        active: true
        """,
    )

    result = cli_runner.invoke(cli, ["decode", str(target)])

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "users": [{"id": 1, "name": "Ada"}, {"id": 2, "name": "Lin"}],
        "active": True,
    }
    assert result.output.startswith("{\n  ")


def test_cli_decode_output_options(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "data.toon", "name: café\n")

    result = cli_runner.invoke(cli, ["decode", "--json-indent", "0", "--ensure-ascii", str(target)])

    assert result.exit_code == 0
    assert result.output == '{\n"name": "caf\\u00e9"\n}\n'


def test_cli_decode_reads_stdin(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["decode", "-"], input="a: 1\n")

    assert result.exit_code == 0
    assert json.loads(result.output) == {"a": 1}


def test_cli_rejects_files_over_size_limit(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HYPERTOON_MAX_FILE_SIZE", "4")
    target = _write(tmp_path, "data.toon", "key: value\n")

    result = cli_runner.invoke(cli, ["decode", str(target)])

    assert result.exit_code == 1
    assert "exceeds the maximum allowed size" in result.output


def test_cli_rejects_invalid_size_env(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HYPERTOON_MAX_FILE_SIZE", "lots")
    target = _write(tmp_path, "data.toon", "key: value\n")

    result = cli_runner.invoke(cli, ["decode", str(target)])

    assert result.exit_code == 1
    assert "HYPERTOON_MAX_FILE_SIZE" in result.output


def test_cli_rejects_invalid_utf8(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "binary.toon"
    target.write_bytes(b"key: \xff\xfe\n")

    result = cli_runner.invoke(cli, ["decode", str(target)])

    assert result.exit_code == 1
    assert "Invalid UTF-8" in result.output


def test_cli_rejects_missing_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["decode", str(tmp_path / "missing.toon")])

    assert result.exit_code == 2


def test_cli_verbose_logs_dropped_lines(cli_runner, tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "data.toon", "a: 1\nno separator here\n")

    with caplog.at_level("DEBUG", logger="hypertoon"):
        result = cli_runner.invoke(cli, ["--verbose", "decode", str(target)])

    assert result.exit_code == 0
    assert json.loads(result.output) == {"a": 1}
    assert "no separator here" in caplog.text
