"""Nova Store Core Modules"""

from .errors import (
    ErrorKind,
    StoreError,
    NoActiveProjectError,
    NotFoundError,
    NoPathError,
    StoreIOError,
    ParseError,
    InvalidPathError,
    UnknownCommandError,
)
from .store import ProjectStore
from .commands import Commands, Success, Failure, CommandResult
from .integrity import IntegrityIssue, IssueKind, check_project

__all__ = [
    "ErrorKind",
    "StoreError",
    "NoActiveProjectError",
    "NotFoundError",
    "NoPathError",
    "StoreIOError",
    "ParseError",
    "InvalidPathError",
    "UnknownCommandError",
    "ProjectStore",
    "Commands",
    "Success",
    "Failure",
    "CommandResult",
    "IntegrityIssue",
    "IssueKind",
    "check_project",
]
