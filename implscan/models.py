"""Data model shared by the index builder, the extractor and the writer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A source file as an ordered, line-ending-stripped sequence of lines."""

    path: Path
    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class InterfaceDeclaration:
    """Member names an interface declares, in file order, duplicates kept."""

    interface_name: str
    member_names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Where an extracted body sits in its file.

    Line numbers are 0-based indices exactly as the boundary scan computes
    them. ``end_line`` may be smaller than ``start_line`` when the scan never
    found a terminating line.
    """

    path: str
    start_line: int
    end_line: int

    def to_dict(self) -> dict[str, object]:
        return {"path": self.path, "startLine": self.start_line, "endLine": self.end_line}


@dataclass(frozen=True, slots=True)
class ResultRecord:
    """One interface member implemented by one class in one file."""

    interface_name: str
    namespace_name: str
    class_name: str
    member_name: str
    body: str
    location: SourceLocation

    def to_dict(self) -> dict[str, object]:
        """Return the serialized form with its stable field order."""
        return {
            "interfaceName": self.interface_name,
            "namespace": self.namespace_name,
            "className": self.class_name,
            "memberName": self.member_name,
            "body": self.body,
            "location": self.location.to_dict(),
        }


__all__ = ["InterfaceDeclaration", "ResultRecord", "SourceFile", "SourceLocation"]
