"""Discover projects and their source files from a solution, project or directory."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from ..errors import SolutionLoadError
from ..logging import get_logger
from ..paths import is_ignored, relative_posix, resolve_relative

LOGGER = get_logger(__name__)

SOLUTION_SUFFIX = ".sln"
PROJECT_SUFFIX = ".csproj"
REGULAR_SUFFIX = ".cs"
SCRIPT_SUFFIX = ".csx"
BUILD_OUTPUT_DIRS = frozenset({"bin", "obj"})

_PROJECT_LINE_RE = re.compile(
    r'^\s*Project\("\{[^}]*\}"\)\s*=\s*"(?P<name>[^"]*)"\s*,\s*"(?P<path>[^"]*)"\s*,\s*"\{[^}]*\}"\s*$'
)


@dataclass(frozen=True, slots=True)
class ProjectEntry:
    file_path: str
    is_regular_source: bool


@dataclass(slots=True)
class Project:
    name: str
    path: Path
    entries: list[ProjectEntry] = field(default_factory=list)

    def source_paths(self) -> list[Path]:
        """Return the regular source files in project order, skipping empty paths."""
        return [Path(entry.file_path) for entry in self.entries if entry.is_regular_source and entry.file_path]


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _is_build_output(root: Path, path: Path) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        return False
    return any(part.lower() in BUILD_OUTPUT_DIRS for part in parts[:-1])


def _glob_sources(root: Path, pattern: str = "**/*") -> list[Path]:
    found: list[Path] = []
    for path in root.glob(pattern):
        if not path.is_file() or path.suffix.lower() not in (REGULAR_SUFFIX, SCRIPT_SUFFIX):
            continue
        if _is_build_output(root, path):
            continue
        found.append(path.resolve())
    return sorted(found)


def _split_items(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(";") if part.strip()]


def _expand_include(project_dir: Path, item: str) -> list[Path]:
    if "*" in item or "?" in item:
        return _glob_sources(project_dir, item.replace("\\", "/"))
    return [resolve_relative(project_dir, item)]


def _parse_project_xml(project_path: Path) -> ET.Element:
    try:
        return ET.parse(project_path).getroot()
    except ET.ParseError as error:
        raise SolutionLoadError(f"Failed to parse {project_path}: {error}", project_path) from error
    except OSError as error:
        raise SolutionLoadError(f"Failed to read {project_path}: {error}", project_path) from error


def _is_sdk_style(root: ET.Element) -> bool:
    if root.get("Sdk"):
        return True
    return any(_local_name(element.tag) == "Sdk" or element.get("Sdk") for element in root.iter())


def _collect_project_files(project_path: Path) -> list[Path]:
    """Return the compile items of a project file in evaluation order."""
    project_dir = project_path.parent
    root = _parse_project_xml(project_path)
    selected: dict[Path, None] = {}
    if _is_sdk_style(root):
        for path in _glob_sources(project_dir):
            selected[path] = None
    removals: list[str] = []
    for element in root.iter():
        if _local_name(element.tag) != "Compile":
            continue
        for item in _split_items(element.get("Include")):
            for path in _expand_include(project_dir, item):
                selected.setdefault(path, None)
        removals.extend(item.replace("\\", "/") for item in _split_items(element.get("Remove")))
    if removals:
        selected = {
            path: None for path in selected if not is_ignored(relative_posix(project_dir, path), removals)
        }
    return list(selected)


def _entries_for(project_dir: Path, files: Iterable[Path], ignore: Sequence[str]) -> list[ProjectEntry]:
    entries: list[ProjectEntry] = []
    for path in files:
        if is_ignored(relative_posix(project_dir, path), ignore):
            LOGGER.debug("Ignoring %s", path)
            continue
        entries.append(ProjectEntry(file_path=str(path), is_regular_source=path.suffix.lower() == REGULAR_SUFFIX))
    return entries


def load_project(project_path: Path, ignore: Sequence[str] = (), *, name: str | None = None) -> Project:
    """Load one ``.csproj`` file."""
    if not project_path.is_file():
        raise SolutionLoadError(f"Project file not found: {project_path}", project_path)
    project_path = project_path.resolve()
    files = _collect_project_files(project_path)
    project = Project(
        name=name or project_path.stem,
        path=project_path,
        entries=_entries_for(project_path.parent, files, ignore),
    )
    LOGGER.debug("Project %s: %d file(s)", project.name, len(project.entries))
    return project


def parse_solution(solution_path: Path) -> list[tuple[str, Path]]:
    """Return ``(name, project path)`` for every C# project listed in a solution."""
    try:
        text = solution_path.read_text(encoding="utf-8-sig")
    except OSError as error:
        raise SolutionLoadError(f"Failed to read {solution_path}: {error}", solution_path) from error
    projects: list[tuple[str, Path]] = []
    for line in text.splitlines():
        match = _PROJECT_LINE_RE.match(line)
        if not match:
            continue
        raw_path = match.group("path")
        if not raw_path.lower().endswith(PROJECT_SUFFIX):
            continue
        projects.append((match.group("name"), resolve_relative(solution_path.parent, raw_path)))
    return projects


def _load_directory(directory: Path, ignore: Sequence[str]) -> list[Project]:
    project_files = sorted(
        path.resolve()
        for path in directory.rglob(f"*{PROJECT_SUFFIX}")
        if path.is_file() and not _is_build_output(directory, path)
    )
    if project_files:
        return [load_project(path, ignore) for path in project_files]
    directory = directory.resolve()
    return [
        Project(
            name=directory.name,
            path=directory,
            entries=_entries_for(directory, _glob_sources(directory), ignore),
        )
    ]


def load_solution(path: Path | str, ignore: Sequence[str] = ()) -> list[Project]:
    """Return the projects behind a ``.sln``, a ``.csproj`` or a source directory."""
    target = Path(path).expanduser()
    if target.is_dir():
        projects = _load_directory(target, ignore)
    elif not target.is_file():
        raise SolutionLoadError(f"Solution path not found: {target}", target)
    elif target.suffix.lower() == SOLUTION_SUFFIX:
        projects = [load_project(project_path, ignore, name=name) for name, project_path in parse_solution(target)]
    elif target.suffix.lower() == PROJECT_SUFFIX:
        projects = [load_project(target, ignore)]
    else:
        raise SolutionLoadError(f"Unsupported solution path: {target}", target)
    if not projects:
        LOGGER.warning("No projects found in %s", target)
    return projects


__all__ = ["Project", "ProjectEntry", "load_project", "load_solution", "parse_solution"]
