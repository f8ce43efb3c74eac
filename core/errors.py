"""Errors raised by the project store and command layer."""

from enum import Enum


class ErrorKind(str, Enum):
    """Error categories reported to the front end."""

    NO_ACTIVE_PROJECT = "no_active_project"
    NOT_FOUND = "not_found"
    NO_PATH = "no_path"
    IO_ERROR = "io_error"
    PARSE_ERROR = "parse_error"
    INVALID_PATH = "invalid_path"
    UNKNOWN_COMMAND = "unknown_command"


class StoreError(Exception):
    """Base class for every recoverable store failure."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoActiveProjectError(StoreError):
    kind = ErrorKind.NO_ACTIVE_PROJECT

    def __init__(self, message: str = "No active project"):
        super().__init__(message)


class NotFoundError(StoreError):
    """A season, episode, page, character or script ID did not resolve."""

    kind = ErrorKind.NOT_FOUND


class NoPathError(StoreError):
    kind = ErrorKind.NO_PATH

    def __init__(self, message: str = "Project has not been saved yet (Use Save As)"):
        super().__init__(message)


class StoreIOError(StoreError):
    """Filesystem failure. The originating ``OSError`` is the ``__cause__``."""

    kind = ErrorKind.IO_ERROR


class ParseError(StoreError):
    kind = ErrorKind.PARSE_ERROR


class InvalidPathError(StoreError):
    kind = ErrorKind.INVALID_PATH


class UnknownCommandError(StoreError):
    kind = ErrorKind.UNKNOWN_COMMAND
