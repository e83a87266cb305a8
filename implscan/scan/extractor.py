"""Extract implementing member bodies from C# source lines.

This is a line heuristic, not a parser. A file "implements" an interface when
some line, with whitespace removed, contains ``:IName`` or ``,IName``. A
member body starts on the line after the first line mentioning the member
name and runs until the line before the next line that mentions ``public`` or
``private``. Nested types, multi-line signatures and generics are not
understood.
"""

from __future__ import annotations

from typing import Sequence

from ..logging import get_logger
from ..models import ResultRecord, SourceFile, SourceLocation
from .index import InterfaceIndex

LOGGER = get_logger(__name__)

NAMESPACE_KEYWORD = "namespace "
CLASS_KEYWORD = "class "
MEMBER_MARKERS = ("public", "private")

# Reported by the boundary scan when no terminating line exists.
NOT_FOUND_END = 0


def _strip_whitespace(line: str) -> str:
    return "".join(line.split())


def implements_interface(lines: Sequence[str], interface_name: str) -> bool:
    """Return whether any line lists ``interface_name`` in an inheritance list."""
    patterns = (":" + interface_name, "," + interface_name)
    for line in lines:
        compact = _strip_whitespace(line)
        if any(pattern in compact for pattern in patterns):
            return True
    return False


def find_namespace(lines: Sequence[str]) -> str | None:
    """Return the namespace of the first ``namespace`` line, or ``None``."""
    for line in lines:
        if NAMESPACE_KEYWORD in line:
            tokens = line.split()
            return tokens[-1].replace(";", "") if len(tokens) > 1 else ""
    return None


def find_class_name(lines: Sequence[str], interface_name: str) -> str:
    """Return the class declared on the first line mentioning the interface.

    The same line is used for every member of the interface, so a file with
    several implementing classes attributes all records to the first one.
    """
    class_line = next((line for line in lines if interface_name in line), None)
    if class_line is None or CLASS_KEYWORD not in class_line:
        return ""
    tokens = class_line.split(CLASS_KEYWORD, 1)[1].split()
    return tokens[0] if tokens else ""


def find_signature_line(lines: Sequence[str], member_name: str) -> int:
    """Return the index of the first line containing ``member_name``, or -1."""
    for index, line in enumerate(lines):
        if member_name in line:
            return index
    return -1


def find_body_end(lines: Sequence[str], start_line: int, *, eof_fallback: bool = False) -> int:
    """Return the index of the last line of a body starting at ``start_line``.

    The scan begins one line past ``start_line`` and stops at the first line
    containing ``public`` or ``private``; the end is the line before it. When
    no such line exists the result is ``NOT_FOUND_END``, or the last line's
    index with ``eof_fallback``.
    """
    for index in range(start_line + 1, len(lines)):
        line = lines[index]
        if any(marker in line for marker in MEMBER_MARKERS):
            return index - 1
    if eof_fallback:
        return len(lines) - 1
    return NOT_FOUND_END


def slice_body(lines: Sequence[str], start_line: int, end_line: int) -> str:
    """Join lines ``[start_line, end_line)``; empty when the range is inverted."""
    if end_line <= start_line:
        return ""
    return "\n".join(lines[start_line:end_line])


def extract_member(
    source: SourceFile,
    *,
    interface_name: str,
    namespace_name: str,
    class_name: str,
    member_name: str,
    eof_fallback: bool = False,
) -> ResultRecord:
    lines = source.lines
    start_line = find_signature_line(lines, member_name) + 1
    end_line = find_body_end(lines, start_line, eof_fallback=eof_fallback)
    return ResultRecord(
        interface_name=interface_name,
        namespace_name=namespace_name,
        class_name=class_name,
        member_name=member_name,
        body=slice_body(lines, start_line, end_line),
        location=SourceLocation(path=str(source.path), start_line=start_line, end_line=end_line),
    )


def extract_implementations(
    source: SourceFile,
    interface_names: Sequence[str],
    index: InterfaceIndex,
    *,
    eof_fallback: bool = False,
) -> list[ResultRecord]:
    """Return one record per member of every interface ``source`` implements."""
    records: list[ResultRecord] = []
    lines = source.lines
    for name in interface_names:
        if not implements_interface(lines, name):
            continue
        namespace_name = find_namespace(lines)
        if namespace_name is None:
            LOGGER.debug("%s implements %s but has no namespace line; skipping", source.path, name)
            continue
        declaration = index.get(name)
        if declaration is None:
            LOGGER.debug("%s implements %s but no declaration was indexed; skipping", source.path, name)
            continue
        class_name = find_class_name(lines, name)
        for member_name in declaration.member_names:
            records.append(
                extract_member(
                    source,
                    interface_name=name,
                    namespace_name=namespace_name,
                    class_name=class_name,
                    member_name=member_name,
                    eof_fallback=eof_fallback,
                )
            )
    return records


__all__ = [
    "NOT_FOUND_END",
    "extract_implementations",
    "extract_member",
    "find_body_end",
    "find_class_name",
    "find_namespace",
    "find_signature_line",
    "implements_interface",
    "slice_body",
]
