"""Custom exceptions for jsonmatch."""


class JsonMatchError(Exception):
    """Base exception for jsonmatch errors."""
    pass


class DecodeError(JsonMatchError):
    """Raised when a document is not valid JSON."""
    def __init__(self, message: str, line: int = None, column: int = None, reason: str = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.reason = reason


class ConfigError(JsonMatchError):
    """Raised when comparison options cannot be built."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
