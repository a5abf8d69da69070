"""Nodes and their two content variants.

Models the Unix split between identity and content:

- **Node**: the unit of identity.  It owns an inode number, a display
  name, and exactly one content variant chosen at creation.

- **PlainFile**: content holding an ordered list of text tokens.

- **Directory**: content holding a name → ``DirEntry`` table.  Every
  directory carries the two reserved entries ``.`` (itself) and ``..``
  (its parent).  Entries store inode numbers, never node objects, so the
  self and parent links cannot form reference cycles; the arena that
  maps numbers back to nodes lives in the filesystem state.

- **NodeAllocator**: hands out inode numbers.  Numbers start at 1 and
  are never reused, even after a node is removed.

Operations that only make sense for one variant are available on
``Node`` for both; calling one on the wrong variant raises
``WrongKindError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from itertools import count
from typing import TYPE_CHECKING, TypeAlias

from py_inodefs.fs.errors import InvalidArgumentsError, WrongKindError
from py_inodefs.logging import LogLevel

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from py_inodefs.logging import Logger


class FileType(StrEnum):
    """The kind of content a node holds."""

    FILE = "file"
    DIRECTORY = "directory"


CURRENT_DIR = "."
PARENT_DIR = ".."
RESERVED_NAMES = frozenset({CURRENT_DIR, PARENT_DIR})

FIRST_INODE = 1


@dataclass(frozen=True)
class DirEntry:
    """One row of a directory table.

    ``inode_number`` is None only for the reserved entries of a
    directory that has not been bound yet.
    """

    file_type: FileType
    inode_number: int | None = None


class PlainFile:
    """Text content stored as an ordered list of tokens."""

    def __init__(self) -> None:
        """Create an empty file."""
        self._tokens: list[str] = []

    def read(self) -> list[str]:
        """Return a copy of the current tokens."""
        return list(self._tokens)

    def replace(self, tokens: Iterable[str]) -> None:
        """Overwrite the content.

        An empty token sequence is stored as a single empty token, the
        representation of an explicitly empty file.
        """
        self._tokens = list(tokens) or [""]

    def size(self) -> int:
        """Return the character count, counting one separator between tokens."""
        if not self._tokens:
            return 0
        return sum(len(token) for token in self._tokens) + len(self._tokens) - 1


class Directory:
    """A table of named entries plus the ``.`` and ``..`` links.

    A fresh directory has both reserved entries unbound.  It must be
    bound with ``bind()`` before any path walk goes through it.
    """

    def __init__(self, allocator: NodeAllocator) -> None:
        """Create a directory whose children come from *allocator*."""
        self._allocator = allocator
        self._entries: dict[str, DirEntry] = {
            CURRENT_DIR: DirEntry(FileType.DIRECTORY),
            PARENT_DIR: DirEntry(FileType.DIRECTORY),
        }

    @property
    def is_bound(self) -> bool:
        """Return True once both reserved entries point at real nodes."""
        return all(self._entries[name].inode_number is not None for name in RESERVED_NAMES)

    def bind(self, self_ino: int, parent_ino: int) -> None:
        """Point ``.`` at *self_ino* and ``..`` at *parent_ino*."""
        self._entries[CURRENT_DIR] = DirEntry(FileType.DIRECTORY, self_ino)
        self._entries[PARENT_DIR] = DirEntry(FileType.DIRECTORY, parent_ino)

    def entries(self) -> dict[str, DirEntry]:
        """Return a copy of the entry table, ordered by name."""
        return dict(sorted(self._entries.items()))

    def replace(self, entries: Mapping[str, DirEntry]) -> None:
        """Store *entries* as the new table.

        Callers read with ``entries()``, change the copy, and write it
        back here.  Nothing guards against an interleaved writer; the
        last write wins.

        Once the directory is bound, ``.`` and ``..`` may not change;
        only ``bind()`` moves them.

        Raises:
            InvalidArgumentsError: If a reserved entry is missing, is not
                a directory entry, or was changed after binding.

        """
        missing = sorted(RESERVED_NAMES - entries.keys())
        if missing:
            msg = f"Entry table is missing {', '.join(missing)}"
            raise InvalidArgumentsError(msg)
        misfiled = sorted(
            n for n in RESERVED_NAMES if entries[n].file_type is not FileType.DIRECTORY
        )
        if misfiled:
            msg = f"{', '.join(misfiled)} must be directory entries"
            raise InvalidArgumentsError(msg)
        if self.is_bound:
            changed = sorted(n for n in RESERVED_NAMES if entries[n] != self._entries[n])
            if changed:
                msg = f"Cannot rebind {', '.join(changed)} through replace()"
                raise InvalidArgumentsError(msg)
        self._entries = dict(entries)

    def create_child_file(self, name: str) -> Node:
        """Allocate an unlinked plain-file node called *name*."""
        return self._allocator.create(FileType.FILE, name)

    def create_child_directory(self, name: str) -> Node:
        """Allocate an unlinked, unbound directory node called *name*."""
        return self._allocator.create(FileType.DIRECTORY, name)

    def size(self) -> int:
        """Return the number of entries, reserved ones included."""
        return len(self._entries)


Content: TypeAlias = PlainFile | Directory


class Node:
    """An inode: identity, display name, and one fixed content variant."""

    def __init__(self, inode_number: int, content: Content, name: str = "") -> None:
        """Create a node.  Use ``NodeAllocator.create`` to get a fresh number."""
        self._inode_number = inode_number
        self._content = content
        self._name = name

    def __repr__(self) -> str:
        """Show number, kind, and name."""
        return f"Node(inode_number={self._inode_number}, {self.file_type}, name={self._name!r})"

    @property
    def inode_number(self) -> int:
        """Return the node's identity."""
        return self._inode_number

    @property
    def name(self) -> str:
        """Return the display name."""
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        """Change the display name (lookup never uses it)."""
        self._name = value

    @property
    def content(self) -> Content:
        """Return the content variant."""
        return self._content

    @property
    def file_type(self) -> FileType:
        """Return which variant this node holds."""
        match self._content:
            case PlainFile():
                return FileType.FILE
            case Directory():
                return FileType.DIRECTORY

    @property
    def is_directory(self) -> bool:
        """Return True for directory nodes."""
        return self.file_type is FileType.DIRECTORY

    def size(self) -> int:
        """Return the variant's size metric."""
        return self._content.size()

    # -- Plain-file operations ------------------------------------------------

    def read(self) -> list[str]:
        """Return the file's tokens.

        Raises:
            WrongKindError: If this node is a directory.

        """
        return self._as_file().read()

    def replace_tokens(self, tokens: Iterable[str]) -> None:
        """Overwrite the file's tokens.

        Raises:
            WrongKindError: If this node is a directory.

        """
        self._as_file().replace(tokens)

    # -- Directory operations -------------------------------------------------

    def entries(self) -> dict[str, DirEntry]:
        """Return a copy of the directory table.

        Raises:
            WrongKindError: If this node is a plain file.

        """
        return self._as_directory().entries()

    def replace_entries(self, entries: Mapping[str, DirEntry]) -> None:
        """Store a new directory table.

        Raises:
            WrongKindError: If this node is a plain file.
            InvalidArgumentsError: If a reserved entry is missing or changed.

        """
        self._as_directory().replace(entries)

    def bind(self, self_ino: int, parent_ino: int) -> None:
        """Bind the directory's ``.`` and ``..`` entries.

        Raises:
            WrongKindError: If this node is a plain file.

        """
        self._as_directory().bind(self_ino, parent_ino)

    def create_child_file(self, name: str) -> Node:
        """Allocate an unlinked plain-file child.

        Raises:
            WrongKindError: If this node is a plain file.

        """
        return self._as_directory().create_child_file(name)

    def create_child_directory(self, name: str) -> Node:
        """Allocate an unlinked directory child.

        Raises:
            WrongKindError: If this node is a plain file.

        """
        return self._as_directory().create_child_directory(name)

    def _as_file(self) -> PlainFile:
        match self._content:
            case PlainFile():
                return self._content
            case Directory():
                msg = f"{self._name}: is a directory"
                raise WrongKindError(msg)

    def _as_directory(self) -> Directory:
        match self._content:
            case Directory():
                return self._content
            case PlainFile():
                msg = f"{self._name}: is a plain file"
                raise WrongKindError(msg)


class NodeAllocator:
    """Issue monotonically increasing inode numbers and build nodes.

    Same pattern as PID generation: an ``itertools.count`` hands out the
    next number, so a number is never issued twice.
    """

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create an allocator whose first node gets ``FIRST_INODE``."""
        self._counter = count(start=FIRST_INODE)
        self._logger = logger

    def create(self, file_type: FileType, name: str = "") -> Node:
        """Allocate a number and build an empty node of *file_type*."""
        inode_number = next(self._counter)
        content: Content
        match file_type:
            case FileType.FILE:
                content = PlainFile()
            case FileType.DIRECTORY:
                content = Directory(self)
        if self._logger is not None:
            self._logger.log(
                LogLevel.DEBUG,
                f"inode {inode_number}, type = {file_type}",
                source="fs",
            )
        return Node(inode_number, content, name)
