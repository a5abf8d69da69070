"""Structured errors raised by the filesystem core.

Every failure carries a **kind** (what went wrong, machine-readable) and
a human-readable message.  Callers such as the command table catch the
common base class, report ``str(error)`` to the user, and carry on:
an error aborts only the operation that raised it.

- **WrongKindError**: an operation met the wrong content variant
  (reading a directory, listing a plain file).
- **NotFoundError**: a name or path segment does not exist.
- **NameCollisionError**: the target name is already taken by an entry
  that cannot be overwritten.
- **InvalidArgumentsError**: wrong argument count or shape.
- **NotEmptyError**: a directory still has children and cannot be
  removed without recursion.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Machine-readable category of a filesystem failure."""

    WRONG_KIND = "wrong_kind"
    NOT_FOUND = "not_found"
    NAME_COLLISION = "name_collision"
    INVALID_ARGUMENTS = "invalid_arguments"
    NOT_EMPTY = "not_empty"


class FsError(Exception):
    """Base class for every filesystem failure.

    Subclasses pin ``kind`` so a handler can branch on the category
    without an ``isinstance`` ladder.
    """

    kind: ErrorKind


class WrongKindError(FsError):
    """Raise when an operation is applied to the wrong content variant."""

    kind = ErrorKind.WRONG_KIND


class NotFoundError(FsError):
    """Raise when a named entry or path segment does not exist."""

    kind = ErrorKind.NOT_FOUND


class NameCollisionError(FsError):
    """Raise when a name is already bound to an incompatible entry."""

    kind = ErrorKind.NAME_COLLISION


class InvalidArgumentsError(FsError):
    """Raise when an operation receives the wrong arguments."""

    kind = ErrorKind.INVALID_ARGUMENTS


class NotEmptyError(FsError):
    """Raise when removing a directory that still has children."""

    kind = ErrorKind.NOT_EMPTY
