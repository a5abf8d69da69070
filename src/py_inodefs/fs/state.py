"""Filesystem state: the node arena, root, working directory, and operations.

Every node that is linked into the tree lives in one arena, a
``dict[int, Node]`` keyed by inode number.  Directory entries (``.`` and
``..`` included) store inode numbers, so following a link is an arena
lookup and the tree never holds a reference cycle.

Path resolution walks one segment at a time from a starting directory:

- A leading ``/`` starts at the root, anything else at the given base.
- Empty segments (``//``, trailing ``/``) are skipped.
- Each segment must name a **directory** entry of the current node.
  ``.`` and ``..`` are ordinary directory entries, so ``../x`` needs no
  special case.

Creating operations resolve every segment except the last, which is the
new name.  All lookups finish before the first mutation, so a failed
operation leaves the tree untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from py_inodefs.config import Settings
from py_inodefs.fs.errors import (
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
    RESERVED_NAMES,
    DirEntry,
    FileType,
    Node,
    NodeAllocator,
)
from py_inodefs.fs.paths import PATH_SEPARATOR, is_absolute, path_segments, split_last
from py_inodefs.logging import Logger, LogLevel

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

ROOT_NAME = "/"


@dataclass(frozen=True)
class ListingRow:
    """One line of a directory listing."""

    inode_number: int
    size: int
    name: str

    def __str__(self) -> str:
        """Format as right-aligned number and size columns, then the name."""
        return f"{self.inode_number:>6}{self.size:>6}  {self.name}"


@dataclass(frozen=True)
class DirListing:
    """A directory header followed by one row per entry."""

    header: str
    rows: list[ListingRow] = field(default_factory=list)

    @property
    def names(self) -> list[str]:
        """Return the entry names in listing order."""
        return [row.name for row in self.rows]

    def __str__(self) -> str:
        """Format as ``header:`` followed by the rows."""
        return "\n".join([f"{self.header}:", *(str(row) for row in self.rows)])


@dataclass(frozen=True)
class ReadOutcome:
    """The result of reading one name: either text or the error it raised."""

    name: str
    text: str | None = None
    error: FsError | None = None

    @property
    def ok(self) -> bool:
        """Return True if the read succeeded."""
        return self.error is None


class FilesystemState:
    """An in-memory tree with a root and a current working directory.

    The constructor builds the root directory (its own parent, named
    ``/``) and makes it the working directory, so every instance is
    ready for use.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a filesystem holding only the root directory.

        Args:
            settings: Prompt and trace configuration.
            logger: Where to record events; by default a fresh logger
                whose threshold follows ``settings.trace``.

        """
        self._settings = settings if settings is not None else Settings()
        self._logger = logger if logger is not None else Logger(min_level=self._settings.log_level)
        self._prompt = self._settings.prompt
        self._allocator = NodeAllocator(logger=self._logger)
        self._nodes: dict[int, Node] = {}

        root = self._allocator.create(FileType.DIRECTORY, ROOT_NAME)
        root.bind(root.inode_number, root.inode_number)
        self._nodes[root.inode_number] = root
        self._root = root
        self._cwd = root
        self._logger.log(LogLevel.DEBUG, f"root = inode {root.inode_number}", source="fs")

    # -- Accessors ------------------------------------------------------------

    @property
    def root(self) -> Node:
        """Return the root directory node."""
        return self._root

    @property
    def cwd(self) -> Node:
        """Return the current working directory node."""
        return self._cwd

    @property
    def settings(self) -> Settings:
        """Return the settings this filesystem was created with."""
        return self._settings

    @property
    def logger(self) -> Logger:
        """Return the event log."""
        return self._logger

    @property
    def prompt(self) -> str:
        """Return the shell prompt."""
        return self._prompt

    @prompt.setter
    def prompt(self, value: str) -> None:
        """Change the shell prompt."""
        self._prompt = value

    @property
    def node_count(self) -> int:
        """Return the number of linked nodes, root included."""
        return len(self._nodes)

    def node(self, inode_number: int) -> Node:
        """Return the linked node with *inode_number*.

        Raises:
            NotFoundError: If no linked node has that number.

        """
        node = self._nodes.get(inode_number)
        if node is None:
            msg = f"inode {inode_number}: not found"
            raise NotFoundError(msg)
        return node

    # -- Path resolution ------------------------------------------------------

    def walk(self, base: Node, path: str) -> list[Node]:
        """Resolve *path* and return every directory visited, in order.

        The first element is the starting directory (root for absolute
        paths, *base* otherwise); the last is the target.

        Raises:
            NotFoundError: If a segment is missing or names a plain file.

        """
        self._require_linked(base)
        start = self._root if is_absolute(path) else base
        return self._walk_segments(start, path_segments(path), path)

    def resolve(self, base: Node, path: str) -> Node:
        """Resolve *path* to a directory node.

        Raises:
            NotFoundError: If a segment is missing or names a plain file.

        """
        return self.walk(base, path)[-1]

    def _walk_segments(self, start: Node, segments: list[str], path: str) -> list[Node]:
        visited = [start]
        current = start
        for segment in segments:
            entry = current.entries().get(segment)
            if entry is None or entry.file_type is not FileType.DIRECTORY:
                msg = f"{path}: no such directory"
                raise NotFoundError(msg)
            current = self._target(entry)
            visited.append(current)
        return visited

    def _resolve_parent(self, base: Node, path: str) -> tuple[Node, str]:
        """Resolve all but the last segment; return (parent, last name)."""
        self._require_linked(base)
        parents, name = split_last(path)
        if not name:
            msg = f"{path!r}: missing name"
            raise InvalidArgumentsError(msg)
        start = self._root if is_absolute(path) else base
        parent = self._walk_segments(start, parents, path)[-1]
        return parent, name

    def _require_linked(self, node: Node) -> None:
        """Reject a node handle that is not (or no longer) in this tree."""
        if self._nodes.get(node.inode_number) is not node:
            msg = f"{node.name or node.inode_number}: no longer in the tree"
            raise NotFoundError(msg)

    def _target(self, entry: DirEntry) -> Node:
        if entry.inode_number is None:
            msg = "directory is not bound"
            raise NotFoundError(msg)
        node = self._nodes.get(entry.inode_number)
        if node is None:
            msg = f"inode {entry.inode_number}: not found"
            raise NotFoundError(msg)
        return node

    def _link(self, parent: Node, child: Node) -> None:
        """Register *child* in the arena and add it to *parent*'s table."""
        entries = parent.entries()
        entries[child.name] = DirEntry(child.file_type, child.inode_number)
        self._nodes[child.inode_number] = child
        parent.replace_entries(entries)

    # -- Files ----------------------------------------------------------------

    def create_file(self, dir_node: Node, name: str, tokens: Iterable[str] = ()) -> Node:
        """Create a plain file or overwrite an existing one.

        An existing plain file keeps its inode number; only its tokens
        change.  No tokens means an empty file.

        Args:
            dir_node: Directory that relative names are resolved from.
            name: File name, optionally preceded by directory segments.
            tokens: The new content.

        Raises:
            NameCollisionError: If *name* is an existing directory.
            NotFoundError: If a leading directory segment is missing.
            InvalidArgumentsError: If *name* has no final segment.

        """
        parent, leaf = self._resolve_parent(dir_node, name)
        data = list(tokens)
        entry = parent.entries().get(leaf)

        if entry is not None:
            if entry.file_type is FileType.DIRECTORY:
                msg = f"{leaf}: is a directory"
                raise NameCollisionError(msg)
            node = self._target(entry)
            node.replace_tokens(data)
            self._logger.log(LogLevel.INFO, f"overwrote {self.path_of(parent, leaf)}", source="fs")
            return node

        node = parent.create_child_file(leaf)
        node.replace_tokens(data)
        self._link(parent, node)
        self._logger.log(LogLevel.INFO, f"created file {self.path_of(parent, leaf)}", source="fs")
        return node

    def read_file(self, dir_node: Node, name: str) -> str:
        """Return the tokens of the file *name* in *dir_node*, space-joined.

        Only *dir_node*'s own entries are searched; *name* is matched
        exactly, not walked as a path.

        Raises:
            NotFoundError: If no entry is called *name*.
            WrongKindError: If *name* is a directory.

        """
        self._require_linked(dir_node)
        entry = dir_node.entries().get(name)
        if entry is None:
            msg = f"{name}: file not found"
            raise NotFoundError(msg)
        if entry.file_type is FileType.DIRECTORY:
            msg = f"{name}: cannot read directories"
            raise WrongKindError(msg)
        return " ".join(self._target(entry).read())

    def read_files(self, dir_node: Node, names: Iterable[str]) -> list[ReadOutcome]:
        """Read every name independently; a failure does not stop the rest."""
        outcomes: list[ReadOutcome] = []
        for name in names:
            try:
                outcomes.append(ReadOutcome(name=name, text=self.read_file(dir_node, name)))
            except FsError as e:
                outcomes.append(ReadOutcome(name=name, error=e))
        return outcomes

    # -- Directories ----------------------------------------------------------

    def make_directory(self, base: Node, path: str) -> Node:
        """Create a directory; every leading segment must already exist.

        Raises:
            NotFoundError: If an intermediate directory is missing.
            NameCollisionError: If the final name is already taken.
            InvalidArgumentsError: If *path* has no final segment.

        """
        parent, name = self._resolve_parent(base, path)
        if name in parent.entries():
            msg = f"{name}: already exists"
            raise NameCollisionError(msg)

        node = parent.create_child_directory(name)
        node.bind(node.inode_number, parent.inode_number)
        self._link(parent, node)
        self._logger.log(LogLevel.INFO, f"created directory {self.path_of(node)}", source="fs")
        return node

    def change_directory(self, path: str | None = None) -> Node:
        """Make the directory at *path* the working directory.

        With no path the working directory returns to the root.

        Raises:
            NotFoundError: If *path* does not name a directory.

        """
        self._cwd = self._root if path is None else self.resolve(self._cwd, path)
        return self._cwd

    def list_dir(self, dir_node: Node, path: str | None = None) -> DirListing:
        """List a directory's entries with their inode numbers and sizes.

        Without *path* the header is *dir_node*'s display name; with one,
        the resolved directory is listed under its absolute path.

        Raises:
            NotFoundError: If *path* does not name a directory.

        """
        if path is None:
            self._require_linked(dir_node)
            return self._listing(dir_node, dir_node.name)
        target = self.resolve(dir_node, path)
        return self._listing(target, self.path_of(target))

    def list_recursive(self, dir_node: Node, path: str | None = None) -> list[DirListing]:
        """List a directory and every directory below it, depth first.

        Raises:
            NotFoundError: If *path* does not name a directory.

        """
        start = self.resolve(dir_node, "" if path is None else path)
        return [self._listing(node, self.path_of(node)) for node in self._subtree(start)]

    def _listing(self, dir_node: Node, header: str) -> DirListing:
        rows: list[ListingRow] = []
        for name, entry in dir_node.entries().items():
            node = self._target(entry)
            rows.append(ListingRow(inode_number=node.inode_number, size=node.size(), name=name))
        return DirListing(header=header, rows=rows)

    def _children(self, dir_node: Node) -> list[tuple[str, DirEntry]]:
        return [(n, e) for n, e in dir_node.entries().items() if n not in RESERVED_NAMES]

    def _subtree(self, dir_node: Node, *, files: bool = False) -> Iterator[Node]:
        """Yield *dir_node* and its descendants in pre-order.

        Uses an explicit stack, so depth is not limited by recursion.
        Plain files are included only when *files* is set.
        """
        stack = [dir_node]
        while stack:
            node = stack.pop()
            yield node
            if not node.is_directory:
                continue
            children = [
                self._target(entry)
                for _, entry in self._children(node)
                if files or entry.file_type is FileType.DIRECTORY
            ]
            stack.extend(reversed(children))

    def path_of(self, dir_node: Node, leaf: str | None = None) -> str:
        """Rebuild the absolute path of *dir_node* by following ``..``.

        Args:
            dir_node: The directory to locate.
            leaf: Optional child name appended to the result.

        Raises:
            NotFoundError: If *dir_node* is no longer in the tree.

        """
        self._require_linked(dir_node)
        names: list[str] = []
        node = dir_node
        while node.inode_number != self._root.inode_number:
            names.append(node.name)
            node = self._target(node.entries()[PARENT_DIR])
        names.reverse()
        if leaf is not None:
            names.append(leaf)
        return PATH_SEPARATOR + PATH_SEPARATOR.join(names)

    # -- Removal --------------------------------------------------------------

    def remove(self, dir_node: Node, path: str, *, recursive: bool = False) -> int:
        """Unlink the entry at *path* and reclaim its node.

        Directories must be empty unless *recursive* is set, in which
        case the whole subtree is reclaimed.  Inode numbers of removed
        nodes are never issued again.  If the working directory was
        inside the removed subtree, it moves back to the root.

        Returns:
            The number of nodes reclaimed.

        Raises:
            NotFoundError: If the entry or a leading segment is missing.
            InvalidArgumentsError: If *path* names ``.``, ``..``, or root.
            NotEmptyError: If a non-empty directory is removed without
                *recursive*.

        """
        parent, name = self._resolve_parent(dir_node, path)
        if name in (CURRENT_DIR, PARENT_DIR):
            msg = f"{name}: cannot remove"
            raise InvalidArgumentsError(msg)

        entries = parent.entries()
        entry = entries.get(name)
        if entry is None:
            msg = f"{path}: no such file or directory"
            raise NotFoundError(msg)
        node = self._target(entry)
        if node.is_directory and self._children(node) and not recursive:
            msg = f"{path}: directory not empty"
            raise NotEmptyError(msg)

        removed_path = self.path_of(parent, name)
        doomed = list(self._subtree(node, files=True))
        del entries[name]
        parent.replace_entries(entries)
        for victim in doomed:
            del self._nodes[victim.inode_number]
            self._logger.log(LogLevel.DEBUG, f"reclaimed inode {victim.inode_number}", source="fs")
        if self._cwd.inode_number not in self._nodes:
            self._cwd = self._root
        self._logger.log(
            LogLevel.INFO,
            f"removed {removed_path} ({len(doomed)} node(s))",
            source="fs",
        )
        return len(doomed)
