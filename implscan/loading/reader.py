"""Read source files into line sequences."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Sequence

from ..errors import SourceReadError
from ..models import SourceFile

DEFAULT_ENCODING = "utf-8-sig"

SourceReader = Callable[[Path], SourceFile]


def read_source(path: Path, encoding: str = DEFAULT_ENCODING) -> SourceFile:
    """Return the file's lines with ``\\r\\n``, ``\\r`` and ``\\n`` endings stripped."""
    try:
        with path.open("r", encoding=encoding, newline=None) as handle:
            lines = tuple(line.rstrip("\n") for line in handle)
    except (OSError, UnicodeDecodeError) as error:
        raise SourceReadError(f"Failed to read {path}: {error}", path) from error
    return SourceFile(path=path, lines=lines)


def read_sources(paths: Sequence[Path], reader: SourceReader, *, max_workers: int = 1) -> list[SourceFile]:
    """Read every path, returning files in the order of ``paths``.

    The earliest failing read, in path order, is re-raised after the pool shuts down.
    """
    if max_workers <= 1 or len(paths) <= 1:
        return [reader(path) for path in paths]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(reader, paths))


__all__ = ["DEFAULT_ENCODING", "SourceReader", "read_source", "read_sources"]
