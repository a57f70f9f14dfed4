"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_INDENT_SPACES, DEFAULT_MAX_FILE_SIZE


@dataclass
class ToonConfig:
    """Configuration for encoding notation and rendering decoded JSON.

    Attributes:
        indent_spaces: Spaces per nesting level in encoded notation.
        json_indent: Indentation of JSON printed by ``hypertoon decode``;
            None prints compact JSON on one line.
        ensure_ascii: Whether printed JSON escapes non-ASCII characters.
        max_file_size: Maximum input file size in bytes accepted by the CLI.

    Examples:
        ToonConfig(indent_spaces=2, json_indent=None)
    """

    # Encoding
    indent_spaces: int = DEFAULT_INDENT_SPACES

    # JSON output
    json_indent: int | None = 2
    ensure_ascii: bool = False

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`indent_spaces` must be a positive integer")
    """


def load_config(search_path: Path) -> ToonConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.hypertoon]`` table from `pyproject.toml` and the ``[hypertoon]``
    or ``[tool.hypertoon]`` table from `.hypertoon.toml` when present. Returns
    default values when no configuration is found. TOML files that cannot be
    read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ToonConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("data"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "hypertoon")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".hypertoon.toml",
            table_paths=[("hypertoon",), ("tool", "hypertoon")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ToonConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> ToonConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ToonConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return ToonConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ToonConfig) -> None:
    """Validate a `ToonConfig` instance.

    Raises:
        ConfigError: If a numeric setting is not a positive integer or
            `ensure_ascii` is not a boolean.

    Examples:
        validate_config(ToonConfig(indent_spaces=2))
    """
    _ensure_integers(
        {
            "indent_spaces": config.indent_spaces,
            "max_file_size": config.max_file_size,
            **({"json_indent": config.json_indent} if config.json_indent is not None else {}),
        }
    )
    _ensure_positive(
        {
            "indent_spaces": config.indent_spaces,
            "max_file_size": config.max_file_size,
        }
    )
    if config.json_indent is not None and config.json_indent < 0:
        raise ConfigError("`json_indent` must not be negative")
    if not isinstance(config.ensure_ascii, bool):
        raise ConfigError("`ensure_ascii` must be a boolean")


def apply_overrides(config: ToonConfig, **overrides: object) -> ToonConfig:
    """Apply override values to a `ToonConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ToonConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        ConfigError: If an override name is not defined on `ToonConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config

    known = {field.name for field in fields(ToonConfig)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration option(s): {', '.join(unknown)}")
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ToonConfig:
    """Load, override, and validate configuration.

    Examples:
        config = build_config(Path.cwd(), indent_spaces=2)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
