"""Error taxonomy for the settings store.

Every failure raised by loading, saving, validating or mutating settings
derives from :class:`SettingsError`. Integrity failures additionally derive
from ``ValueError`` so callers that only care about "bad data" can catch that.
"""
from __future__ import annotations

from typing import Optional


class SettingsError(Exception):
    """Base class for settings store failures."""


class SettingsFileError(SettingsError):
    """A settings file is missing, unreadable or could not be written."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class SettingsParseError(SettingsError, ValueError):
    """A settings file holds malformed content."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class ValidationError(SettingsError, ValueError):
    """Loaded or pending settings violate an integrity rule."""


class NoBoardsError(ValidationError):
    """The dataset defines no boards at all."""


class DuplicateNameError(ValidationError):
    def __init__(self, message: str, kind: str, name: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.name = name
        self.source = source


class DanglingReferenceError(ValidationError):
    """A scheme, style, pad set or board reference has no target."""

    def __init__(self, message: str, kind: str, name: str, owner: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.name = name
        self.owner = owner


class MissingIconError(ValidationError):
    def __init__(self, message: str, icon: str, owner: str) -> None:
        super().__init__(message)
        self.icon = icon
        self.owner = owner


class BoardInUseError(ValidationError):
    """A board cannot be removed while other entities still point at it."""

    def __init__(self, message: str, board: str, referenced_by: str) -> None:
        super().__init__(message)
        self.board = board
        self.referenced_by = referenced_by


class EntityNotFoundError(SettingsError, LookupError):
    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} '{name}' not found")
        self.kind = kind
        self.name = name


class EntityExistsError(SettingsError):
    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} '{name}' already exists")
        self.kind = kind
        self.name = name


def with_context(exc: SettingsError, prefix: str) -> SettingsError:
    """Return a copy of ``exc`` whose message is prefixed with ``prefix``.

    Typed attributes are preserved so callers can still inspect what failed.
    """

    clone = exc.__class__.__new__(exc.__class__)
    clone.__dict__.update(exc.__dict__)
    clone.args = (f"{prefix}: {exc}",)
    return clone
