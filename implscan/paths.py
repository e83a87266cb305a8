"""Path helper utilities."""

from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Iterable


def _normalize_relative(path: str) -> str:
    """Return a forward-slashed relative path without leading separators."""
    return path.replace("\\", "/").lstrip("/")


def resolve_relative(base: Path, raw: str) -> Path:
    """Resolve a solution- or project-relative path that may use backslashes."""
    candidate = Path(raw.strip().replace("\\", "/"))
    if candidate.is_absolute():
        return candidate.resolve()
    return (base / _normalize_relative(raw.strip())).resolve()


def relative_posix(root: Path, target: Path) -> str:
    """Return ``target`` relative to ``root`` as a posix string when possible."""
    try:
        return target.relative_to(root).as_posix()
    except ValueError:
        return target.as_posix()


def _glob_variants(pattern: str) -> set[str]:
    """Expand a glob so each ``**/`` may also match zero directories, as in MSBuild."""
    variants = {pattern}
    pending = [pattern]
    while pending:
        current = pending.pop()
        index = current.find("**/")
        while index != -1:
            candidate = current[:index] + current[index + 3 :]
            if candidate not in variants:
                variants.add(candidate)
                pending.append(candidate)
            index = current.find("**/", index + 1)
    return variants


def is_ignored(relative_path: str, patterns: Iterable[str]) -> bool:
    for pattern in patterns:
        if not pattern:
            continue
        normalized = pattern.replace("\\", "/")
        if any(fnmatch.fnmatch(relative_path, variant) for variant in _glob_variants(normalized)):
            return True
    return False


__all__ = ["is_ignored", "relative_posix", "resolve_relative"]
