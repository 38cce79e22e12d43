"""Capture standard input as newline-terminated text."""

import sys
from typing import Iterable, Union


def stdin_lines() -> Iterable[Union[str, bytes]]:
    """Return standard input as raw bytes lines when it has a binary buffer."""
    return getattr(sys.stdin, "buffer", sys.stdin)


def read_input(stream: Iterable[Union[str, bytes]]) -> str:
    """Read a stream line by line until end of stream.

    Each line keeps its content, loses its original terminator ("\\n" or
    "\\r\\n") and gets exactly one "\\n" appended. Bytes lines are decoded
    as UTF-8, with invalid sequences replaced by U+FFFD.

    Args:
        stream: Text or binary stream, usually standard input

    Returns:
        All lines joined into one string
    """
    lines = []
    for line in stream:
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        lines.append(line + "\n")
    return "".join(lines)
