"""Command table: named filesystem operations over argument lists.

A caller hands over a command name and its arguments (or a whole line,
split on whitespace) and gets back a string.  The table owns no I/O; reading
input, printing output, and deciding when to stop belong to whoever
drives it.

- ``dispatch(name, args)`` runs one command and lets ``FsError``
  propagate, for callers that want the structured error.
- ``execute(line)`` never raises a filesystem error.  A failure is
  logged and reported as ``"<command>: <message>"``.

Commands always work relative to the filesystem's current working
directory.
"""

from collections.abc import Callable
from typing import TypeAlias

from py_inodefs.fs.errors import FsError, InvalidArgumentsError, NotFoundError
from py_inodefs.fs.state import FilesystemState
from py_inodefs.logging import LogLevel

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

_WORD_SEPARATOR = " "


def _check_arity(
    args: list[str],
    usage: str,
    *,
    minimum: int = 0,
    maximum: int | None = None,
) -> None:
    """Raise InvalidArgumentsError unless *args* has an allowed length."""
    if len(args) < minimum or (maximum is not None and len(args) > maximum):
        msg = f"usage: {usage}"
        raise InvalidArgumentsError(msg)


class CommandTable:
    """Dispatch command names to filesystem operations."""

    def __init__(self, state: FilesystemState) -> None:
        """Create a command table bound to *state*."""
        self._state = state

        # Command dispatch table: maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "cat": self._cmd_cat,
            "cd": self._cmd_cd,
            "help": self._cmd_help,
            "ls": self._cmd_ls,
            "lsr": self._cmd_lsr,
            "make": self._cmd_make,
            "mkdir": self._cmd_mkdir,
            "prompt": self._cmd_prompt,
            "pwd": self._cmd_pwd,
            "rm": self._cmd_rm,
            "rmr": self._cmd_rmr,
        }

    @property
    def state(self) -> FilesystemState:
        """Return the filesystem the commands operate on."""
        return self._state

    @property
    def command_names(self) -> list[str]:
        """Return the known command names, sorted."""
        return sorted(self._commands)

    def dispatch(self, name: str, args: list[str]) -> str:
        """Run command *name* with *args* and return its output.

        Raises:
            NotFoundError: If *name* is not a known command.
            FsError: Whatever the underlying operation raises.

        """
        handler = self._commands.get(name)
        if handler is None:
            msg = f"{name}: no such command"
            raise NotFoundError(msg)
        return handler(args)

    def execute(self, line: str) -> str:
        """Split *line* into words, run the command, and report failures."""
        words = line.split()
        if not words:
            return ""
        name, args = words[0], words[1:]
        try:
            return self.dispatch(name, args)
        except FsError as e:
            return self._report(name, e)

    def _report(self, name: str, error: FsError) -> str:
        message = f"{name}: {error}"
        self._state.logger.log(LogLevel.ERROR, f"{message} [{error.kind}]", source="shell")
        return message

    # -- Handlers ---------------------------------------------------------------

    def _cmd_help(self, args: list[str]) -> str:
        """List available commands."""
        _check_arity(args, "help", maximum=0)
        return "Available commands: " + ", ".join(self.command_names)

    def _cmd_cat(self, args: list[str]) -> str:
        """Print files from the working directory, one line per name."""
        _check_arity(args, "cat <name>...", minimum=1)
        lines: list[str] = []
        for outcome in self._state.read_files(self._state.cwd, args):
            if outcome.error is None:
                lines.append(outcome.text or "")
            else:
                lines.append(self._report("cat", outcome.error))
        return "\n".join(lines)

    def _cmd_cd(self, args: list[str]) -> str:
        """Change the working directory (root when no path is given)."""
        _check_arity(args, "cd [path]", maximum=1)
        self._state.change_directory(args[0] if args else None)
        return ""

    def _cmd_ls(self, args: list[str]) -> str:
        """List a directory."""
        _check_arity(args, "ls [path]", maximum=1)
        path = args[0] if args else None
        return str(self._state.list_dir(self._state.cwd, path))

    def _cmd_lsr(self, args: list[str]) -> str:
        """List a directory and everything below it."""
        _check_arity(args, "lsr [path]", maximum=1)
        path = args[0] if args else None
        listings = self._state.list_recursive(self._state.cwd, path)
        return "\n".join(str(listing) for listing in listings)

    def _cmd_make(self, args: list[str]) -> str:
        """Create or overwrite a file with the remaining words as content."""
        _check_arity(args, "make <name> [word...]", minimum=1)
        self._state.create_file(self._state.cwd, args[0], args[1:])
        return ""

    def _cmd_mkdir(self, args: list[str]) -> str:
        """Create a directory."""
        _check_arity(args, "mkdir <path>", minimum=1, maximum=1)
        self._state.make_directory(self._state.cwd, args[0])
        return ""

    def _cmd_prompt(self, args: list[str]) -> str:
        """Set the prompt to the given words."""
        _check_arity(args, "prompt <word>...", minimum=1)
        self._state.prompt = _WORD_SEPARATOR.join(args) + _WORD_SEPARATOR
        return ""

    def _cmd_pwd(self, args: list[str]) -> str:
        """Print the working directory's absolute path."""
        _check_arity(args, "pwd", maximum=0)
        return self._state.path_of(self._state.cwd)

    def _cmd_rm(self, args: list[str]) -> str:
        """Remove a file or an empty directory."""
        _check_arity(args, "rm <path>", minimum=1, maximum=1)
        self._state.remove(self._state.cwd, args[0])
        return ""

    def _cmd_rmr(self, args: list[str]) -> str:
        """Remove a file or a directory with everything below it."""
        _check_arity(args, "rmr <path>", minimum=1, maximum=1)
        self._state.remove(self._state.cwd, args[0], recursive=True)
        return ""
