"""Error types raised by jotbox.

Every error carries a one-line message suitable for the status bar.
"""

from typing import Optional


class JotboxError(Exception):
    """Base class for all recoverable jotbox errors."""


class ParseError(JotboxError):
    """A record could not be decoded."""


class MissingHeader(ParseError):
    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        msg = "Every record needs a header section (demarcated by ---)"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class MissingHeaderField(ParseError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Header is missing the '{name}' field")


class UnrecognizedVariant(ParseError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Unknown note type {name!r}; expected Task, Journal, Research or Event"
        )


class MalformedField(ParseError):
    def __init__(self, name: str, cause: str) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f"Malformed '{name}' field: {cause}")


class WrongVariant(JotboxError):
    def __init__(self, expected, actual) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a {expected} note, got {actual}")


class NotFound(JotboxError):
    def __init__(self, category, note_id: int) -> None:
        self.category = category
        self.note_id = note_id
        super().__init__(f"No {category} entry with ID {note_id}")


class InvariantViolation(JotboxError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StorageError(JotboxError):
    """A record could not be read, written or removed."""

    def __init__(self, action: str, path: str, cause: Optional[BaseException] = None) -> None:
        self.action = action
        self.path = path
        self.cause = cause
        reason = f": {cause.strerror or cause}" if isinstance(cause, OSError) else ""
        super().__init__(f"Could not {action} {path}{reason}")


class ConfigError(JotboxError):
    pass
