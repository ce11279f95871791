"""Error taxonomy for chart retrieval.

Every failure raised by chartget is a ``ChartGetError`` tagged with an
``ErrorKind``, so callers can tell a failed pull from a failed load without
matching on message text. Failures that originate in a collaborator (the
registry client, the archive writer, the archive loader) keep the original
exception on ``cause`` and chain it with ``raise ... from``; the message is
the collaborator's own message, unchanged.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_REFERENCE = "invalid_reference"
    MISSING_VERSION = "missing_version"
    PULL_FAILED = "pull_failed"
    LOAD_FAILED = "load_failed"
    SERIALIZE_FAILED = "serialize_failed"
    ARCHIVE = "archive"
    REGISTRY = "registry"
    SCHEME_NOT_SUPPORTED = "scheme_not_supported"


class ChartGetError(Exception):
    """Base error carrying a kind and, when wrapped, the original cause."""

    kind: ErrorKind = ErrorKind.REGISTRY

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    @classmethod
    def wrap(cls, cause: BaseException) -> ChartGetError:
        """Build an error of this kind around a collaborator failure."""
        return cls(str(cause) or type(cause).__name__, cause=cause)

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


class InvalidReferenceError(ChartGetError):
    kind = ErrorKind.INVALID_REFERENCE


class MissingVersionError(ChartGetError):
    kind = ErrorKind.MISSING_VERSION


class PullFailedError(ChartGetError):
    kind = ErrorKind.PULL_FAILED


class LoadFailedError(ChartGetError):
    kind = ErrorKind.LOAD_FAILED


class SerializeFailedError(ChartGetError):
    kind = ErrorKind.SERIALIZE_FAILED


class ArchiveError(ChartGetError):
    kind = ErrorKind.ARCHIVE


class RegistryError(ChartGetError):
    kind = ErrorKind.REGISTRY


class SchemeNotSupportedError(ChartGetError):
    kind = ErrorKind.SCHEME_NOT_SUPPORTED

