"""Text forms of pairs and fixed-size arrays, plus small file and shell helpers."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar

T = TypeVar("T")
U = TypeVar("U")


def format_pair(pair: tuple[Any, Any]) -> str:
    """Render a pair as ``(first, second)``."""
    first, second = pair
    return f"({first}, {second})"


def _strip_delimiters(text: str, opening: str, closing: str) -> str:
    body = text.strip()
    if not body.startswith(opening):
        raise ValueError(f"expected {opening!r} at the start of {text!r}")
    if len(body) < 2 or not body.endswith(closing):
        raise ValueError(f"expected {closing!r} at the end of {text!r}")
    return body[1:-1]


def parse_pair(text: str, convert: Callable[[str], T] = int) -> tuple[T, T]:
    """Read a pair written as ``(first, second)``.

    Both halves go through ``convert``. Raises ValueError when the
    parentheses or the separating comma are missing.
    """
    inner = _strip_delimiters(text, "(", ")")
    first, separator, second = inner.partition(",")
    if not separator:
        raise ValueError(f"expected ',' between the values of {text!r}")
    return convert(first.strip()), convert(second.strip())


def format_array(values: Iterable[Any]) -> str:
    """Render values as ``[a, b, c]``; an empty array is ``[]``."""
    return "[" + ", ".join(str(value) for value in values) + "]"


def parse_array(
    text: str, size: int, convert: Callable[[str], T] = int
) -> list[T]:
    """Read exactly ``size`` values written as ``[a, b, c]``.

    Raises ValueError when the brackets are missing or the number of
    values differs from ``size``.
    """
    if size < 0:
        raise ValueError("array size must not be negative")
    inner = _strip_delimiters(text, "[", "]")
    if size == 0:
        if inner.strip():
            raise ValueError(f"expected an empty array, got {text!r}")
        return []
    items = inner.split(",")
    if len(items) != size:
        raise ValueError(f"expected {size} values, got {len(items)} in {text!r}")
    return [convert(item.strip()) for item in items]


def file_exists(filename: str | os.PathLike[str]) -> bool:
    """True if the file exists and can be opened for reading."""
    path = Path(filename)
    return path.is_file() and os.access(path, os.R_OK)


def run_command(command: str) -> int:
    """Run a command through the system shell and return its exit status."""
    return subprocess.run(command, shell=True, check=False).returncode