"""Error types raised by the pure analysis layer."""

from __future__ import annotations


class FormatError(ValueError):
    """Raised when provider data does not match the expected shape or format."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description of the problem.
            field: Optional dotted path of the offending field (e.g. `attrs.dateOfBirth`).
        """

        super().__init__(message if field is None else f"{field}: {message}")
        self.field = field
