"""Error kinds raised by the catalog pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class ErrorKind(str, Enum):
    TRANSIENT_FETCH = "transient_fetch"
    NOT_FOUND = "not_found"
    REFRESH_FAILURE = "refresh_failure"
    STARTUP_FAILURE = "startup_failure"


class ComponentFinderError(Exception):
    """Base class; ``kind`` lets callers branch without inspecting messages."""

    kind: ErrorKind


class TransientFetchError(ComponentFinderError):
    """A single directory listing or file download failed."""

    kind = ErrorKind.TRANSIENT_FETCH

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class NotFoundError(ComponentFinderError):
    """A component or category name is unknown to the current snapshot."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, name: str, suggestions: Sequence[str] = (), *, what: str = "Component") -> None:
        super().__init__(f'{what} "{name}" not found')
        self.name = name
        self.suggestions = list(suggestions)


class RefreshFailure(ComponentFinderError):
    kind = ErrorKind.REFRESH_FAILURE


class StartupFailure(ComponentFinderError):
    kind = ErrorKind.STARTUP_FAILURE
