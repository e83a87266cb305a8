"""Build the per-project interface index."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

from ..logging import get_logger
from ..models import InterfaceDeclaration, SourceFile

LOGGER = get_logger(__name__)

INTERFACE_KEYWORD = "interface "


def member_name_of(line: str) -> str:
    """Return the last whitespace token before the first ``(`` of a line."""
    tokens = line.split("(", 1)[0].split()
    return tokens[-1] if tokens else ""


def declares_interface(lines: Sequence[str], interface_name: str) -> bool:
    needle = INTERFACE_KEYWORD + interface_name
    return any(needle in line for line in lines)


def collect_member_names(lines: Sequence[str]) -> tuple[str, ...]:
    """Return a member name for every parenthesis-bearing line of a file.

    Every such line counts, not only those inside the interface block.
    """
    return tuple(member_name_of(line) for line in lines if "(" in line)


@dataclass(slots=True)
class InterfaceIndex:
    """Interface declarations keyed by interface name.

    The first declaration registered for a name wins; later ones are ignored.
    """

    declarations: dict[str, InterfaceDeclaration] = field(default_factory=dict)

    def register(self, declaration: InterfaceDeclaration) -> bool:
        if declaration.interface_name in self.declarations:
            return False
        self.declarations[declaration.interface_name] = declaration
        return True

    def get(self, interface_name: str) -> InterfaceDeclaration | None:
        return self.declarations.get(interface_name)

    def __contains__(self, interface_name: object) -> bool:
        return interface_name in self.declarations

    def __iter__(self) -> Iterator[InterfaceDeclaration]:
        return iter(self.declarations.values())

    def __len__(self) -> int:
        return len(self.declarations)

    def as_dict(self) -> dict[str, list[str]]:
        return {name: list(decl.member_names) for name, decl in self.declarations.items()}


def build_interface_index(files: Iterable[SourceFile], interface_names: Sequence[str]) -> InterfaceIndex:
    """Index the members of each requested interface declared in ``files``."""
    index = InterfaceIndex()
    for source in files:
        for name in interface_names:
            if not declares_interface(source.lines, name):
                continue
            declaration = InterfaceDeclaration(interface_name=name, member_names=collect_member_names(source.lines))
            if index.register(declaration):
                LOGGER.debug("Indexed %s with %d member(s) from %s", name, len(declaration.member_names), source.path)
            else:
                LOGGER.debug("Ignoring duplicate declaration of %s in %s", name, source.path)
    return index


__all__ = [
    "InterfaceIndex",
    "build_interface_index",
    "collect_member_names",
    "declares_interface",
    "member_name_of",
]
