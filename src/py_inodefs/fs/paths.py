"""Path and argument splitting.

``split`` is the low-level tokenizer: it keeps every empty token, so
``"a//b"`` splits into ``["a", "", "b"]``.  Path walking is stricter:
``path_segments`` drops the empty segments produced by leading,
trailing, or doubled slashes, so ``"/a//b/"`` walks exactly ``a`` then
``b``.  Whether the walk starts at the root or the working directory is
decided separately by ``is_absolute``.
"""

PATH_SEPARATOR = "/"


def split(text: str, delimiter: str) -> list[str]:
    """Split *text* at every occurrence of *delimiter*.

    Examples::

        split("", "/")       → [""]
        split("abc", "/")    → ["abc"]
        split("a//b", "/")   → ["a", "", "b"]

    """
    return text.split(delimiter)


def path_segments(path: str) -> list[str]:
    """Return the non-empty slash-delimited segments of *path*."""
    return [segment for segment in split(path, PATH_SEPARATOR) if segment]


def is_absolute(path: str) -> bool:
    """Return True if *path* is resolved from the root."""
    return path.startswith(PATH_SEPARATOR)


def split_last(path: str) -> tuple[list[str], str]:
    """Split *path* into (parent segments, final name).

    Examples::

        "a/b/c"  → (["a", "b"], "c")
        "/new"   → ([], "new")
        "/"      → ([], "")

    """
    segments = path_segments(path)
    if not segments:
        return ([], "")
    return (segments[:-1], segments[-1])
