"""Error types raised by the compliance engine."""


class UIComplianceError(Exception):
    """Base class for engine errors."""


class ConfigurationError(UIComplianceError, ValueError):
    """Raised when a Configuration value is invalid. Surfaces at construction time."""


class ParseError(UIComplianceError):
    """Source text could not be parsed into a markup AST."""

    def __init__(self, message: str, line: int = 1, column: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.message} (line {self.line}, column {self.column})"
