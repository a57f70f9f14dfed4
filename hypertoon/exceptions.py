"""Package-specific exception types."""

from __future__ import annotations


class ToonError(ValueError):
    """Base class for hypertoon errors."""


class InvalidInputError(ToonError):
    """Raised when `encode` receives a string that is not valid JSON text.

    Args:
        reason: Description of the JSON decoding failure.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Input string is not valid JSON: {self.reason}"
