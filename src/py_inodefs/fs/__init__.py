"""Filesystem core: nodes, directories, path resolution, and errors.

Re-exports public symbols so callers can write::

    from py_inodefs.fs import FilesystemState, NotFoundError
"""

from py_inodefs.fs.errors import (
    ErrorKind,
    FsError,
    InvalidArgumentsError,
    NameCollisionError,
    NotEmptyError,
    NotFoundError,
    WrongKindError,
)
from py_inodefs.fs.node import (
    CURRENT_DIR,
    PARENT_DIR,
    DirEntry,
    Directory,
    FileType,
    Node,
    NodeAllocator,
    PlainFile,
)
from py_inodefs.fs.paths import is_absolute, path_segments, split
from py_inodefs.fs.state import DirListing, FilesystemState, ListingRow, ReadOutcome

__all__ = [
    "CURRENT_DIR",
    "PARENT_DIR",
    "DirEntry",
    "DirListing",
    "Directory",
    "ErrorKind",
    "FileType",
    "FilesystemState",
    "FsError",
    "InvalidArgumentsError",
    "ListingRow",
    "NameCollisionError",
    "Node",
    "NodeAllocator",
    "NotEmptyError",
    "NotFoundError",
    "PlainFile",
    "ReadOutcome",
    "WrongKindError",
    "is_absolute",
    "path_segments",
    "split",
]
