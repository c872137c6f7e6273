"""Exception raised for structurally invalid Link Set input."""

from typing import Optional


class ParsingException(ValueError):
    """Raised when a Link Set document violates the RFC 9264 JSON shape.

    Carries the best available position of the offending token. Both
    ``line`` and ``column`` are 1-based and ``None`` when the failure
    happened before tokenizing (e.g. ``None`` or empty input).
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.reason = message
        self.line = line
        self.column = column
        if line is not None and column is not None:
            message = f"Invalid linkset JSON at line {line}, column {column}: {message}"
        super().__init__(message)
