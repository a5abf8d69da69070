"""Tests for the command table.

Commands map a name and an argument list onto filesystem operations and
return strings.  ``dispatch`` raises structured errors; ``execute``
reports them as text and keeps going.
"""

import pytest

from py_inodefs.commands import CommandTable
from py_inodefs.fs.errors import ErrorKind, FsError, InvalidArgumentsError, NotFoundError
from py_inodefs.fs.state import FilesystemState


@pytest.fixture
def shell() -> CommandTable:
    """Return a command table over a fresh filesystem."""
    return CommandTable(FilesystemState())


class TestDispatch:
    """Verify routing and argument checks."""

    def test_unknown_command_raises(self, shell: CommandTable) -> None:
        """Unknown names fail with NotFound."""
        with pytest.raises(NotFoundError, match="frobnicate"):
            shell.dispatch("frobnicate", [])

    @pytest.mark.parametrize(
        ("name", "args"),
        [
            ("ls", ["a", "b"]),
            ("lsr", ["a", "b"]),
            ("cd", ["a", "b"]),
            ("mkdir", []),
            ("mkdir", ["a", "b"]),
            ("make", []),
            ("cat", []),
            ("pwd", ["x"]),
            ("rm", []),
            ("rmr", []),
            ("prompt", []),
            ("help", ["x"]),
        ],
    )
    def test_wrong_argument_count_raises(
        self, shell: CommandTable, name: str, args: list[str]
    ) -> None:
        """Each command rejects an argument count it cannot use."""
        with pytest.raises(InvalidArgumentsError, match="usage") as excinfo:
            shell.dispatch(name, args)
        assert excinfo.value.kind is ErrorKind.INVALID_ARGUMENTS

    def test_help_lists_commands(self, shell: CommandTable) -> None:
        """help names every command."""
        output = shell.dispatch("help", [])
        for name in shell.command_names:
            assert name in output


class TestExecute:
    """Verify line execution and error reporting."""

    def test_blank_line_is_a_no_op(self, shell: CommandTable) -> None:
        """Empty input produces no output."""
        assert shell.execute("   ") == ""

    def test_extra_spaces_are_ignored(self, shell: CommandTable) -> None:
        """Runs of spaces do not produce empty arguments."""
        shell.execute("make   f.txt   hello    world")
        assert shell.execute("cat f.txt") == "hello world"

    def test_tabs_separate_words(self, shell: CommandTable) -> None:
        """Tabs and mixed whitespace split words like spaces do."""
        shell.execute("make\tf.txt \thello\t\tworld")
        assert shell.execute("cat\tf.txt") == "hello world"
        assert shell.execute("mkdir\ta") == ""
        assert "a" in shell.state.list_dir(shell.state.root).names

    def test_failure_is_reported_not_raised(self, shell: CommandTable) -> None:
        """execute() turns a structured error into text."""
        assert shell.execute("cd nope") == "cd: nope: no such directory"

    def test_unknown_command_is_reported(self, shell: CommandTable) -> None:
        """Unknown commands are reported, not raised."""
        assert shell.execute("frobnicate") == "frobnicate: frobnicate: no such command"

    def test_session_continues_after_failure(self, shell: CommandTable) -> None:
        """A failed command does not affect the next one."""
        shell.execute("mkdir a/b")
        shell.execute("mkdir a")
        assert shell.execute("pwd") == "/"
        assert "a" in shell.state.list_dir(shell.state.root).names


class TestFileCommands:
    """Verify make and cat."""

    def test_make_then_cat(self, shell: CommandTable) -> None:
        """make stores the words; cat joins them with spaces."""
        shell.execute("make f.txt hello world")
        assert shell.execute("cat f.txt") == "hello world"

    def test_make_empty_file(self, shell: CommandTable) -> None:
        """make with only a name creates an empty file."""
        shell.execute("make empty")
        assert shell.execute("cat empty") == ""

    def test_make_over_directory_is_reported(self, shell: CommandTable) -> None:
        """Collisions are reported with the command name."""
        shell.execute("mkdir a")
        assert shell.execute("make a data") == "make: a: is a directory"

    def test_cat_reports_each_failure_inline(self, shell: CommandTable) -> None:
        """Every name gets its own line, good or bad."""
        shell.execute("mkdir dir")
        shell.execute("make f one two")
        output = shell.execute("cat ghost dir f")
        assert output.splitlines() == [
            "cat: ghost: file not found",
            "cat: dir: cannot read directories",
            "one two",
        ]

    def test_cat_reads_from_working_directory(self, shell: CommandTable) -> None:
        """cat looks in the working directory only."""
        shell.execute("mkdir a")
        shell.execute("make a/note inside")
        assert shell.execute("cat note") == "cat: note: file not found"
        shell.execute("cd a")
        assert shell.execute("cat note") == "inside"


class TestDirectoryCommands:
    """Verify mkdir, cd, pwd, ls, and lsr."""

    def test_cd_and_pwd(self, shell: CommandTable) -> None:
        """pwd follows cd."""
        shell.execute("mkdir a")
        shell.execute("mkdir a/b")
        shell.execute("cd a/b")
        assert shell.execute("pwd") == "/a/b"
        shell.execute("cd ..")
        assert shell.execute("pwd") == "/a"
        shell.execute("cd")
        assert shell.execute("pwd") == "/"

    def test_ls_root(self, shell: CommandTable) -> None:
        """ls prints the header then one row per entry."""
        shell.execute("mkdir a")
        lines = shell.execute("ls").splitlines()
        assert lines[0] == "/:"
        assert [line.split()[-1] for line in lines[1:]] == [".", "..", "a"]

    def test_ls_path_uses_absolute_header(self, shell: CommandTable) -> None:
        """ls with a path heads the listing with the absolute path."""
        shell.execute("mkdir a")
        shell.execute("mkdir a/b")
        assert shell.execute("ls a/b").splitlines()[0] == "/a/b:"

    def test_ls_row_format(self, shell: CommandTable) -> None:
        """Rows show inode number and size in fixed-width columns."""
        shell.execute("make f.txt hello world")
        lines = shell.execute("ls").splitlines()
        assert "     2    11  f.txt" in lines

    def test_lsr(self, shell: CommandTable) -> None:
        """lsr lists every directory below the start."""
        shell.execute("mkdir a")
        shell.execute("mkdir a/b")
        headers = [line for line in shell.execute("lsr").splitlines() if line.endswith(":")]
        assert headers == ["/:", "/a:", "/a/b:"]


class TestRemoveCommands:
    """Verify rm and rmr."""

    def test_rm_file(self, shell: CommandTable) -> None:
        """rm unlinks a file."""
        shell.execute("make f x")
        assert shell.execute("rm f") == ""
        assert shell.execute("cat f") == "cat: f: file not found"

    def test_rm_non_empty_directory_is_reported(self, shell: CommandTable) -> None:
        """rm refuses non-empty directories; rmr removes them."""
        shell.execute("mkdir a")
        shell.execute("make a/f x")
        assert shell.execute("rm a") == "rm: a: directory not empty"
        assert shell.execute("rmr a") == ""
        assert shell.state.list_dir(shell.state.root).names == [".", ".."]

    def test_lsr_and_rmr_on_a_deep_tree(self, shell: CommandTable) -> None:
        """lsr and rmr handle chains deeper than the interpreter stack."""
        depth = 1100
        node = shell.state.root
        for _ in range(depth):
            node = shell.state.make_directory(node, "d")
        headers = [line for line in shell.execute("lsr").splitlines() if line.endswith(":")]
        assert len(headers) == depth + 1
        assert shell.execute("rmr d") == ""
        assert shell.state.node_count == 1


class TestPrompt:
    """Verify the prompt command."""

    def test_prompt_joins_words(self, shell: CommandTable) -> None:
        """The new prompt is the words plus a trailing space."""
        shell.execute("prompt my fs>")
        assert shell.state.prompt == "my fs> "


def test_dispatch_errors_carry_kind(shell: CommandTable) -> None:
    """Errors raised through dispatch are structured."""
    shell.dispatch("mkdir", ["a"])
    with pytest.raises(FsError) as excinfo:
        shell.dispatch("make", ["a"])
    assert excinfo.value.kind is ErrorKind.NAME_COLLISION
