"""Run the index-then-extract pipeline over every project of a solution."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Sequence

from .config import ScrapeConfig
from .loading.reader import SourceReader, read_source, read_sources
from .loading.solution import Project, load_solution
from .logging import get_logger
from .models import ResultRecord, SourceFile
from .output.writer import write_records
from .scan.extractor import extract_implementations
from .scan.index import InterfaceIndex, build_interface_index

LOGGER = get_logger(__name__)


def scrape_files(
    files: Sequence[SourceFile],
    interface_names: Sequence[str],
    *,
    eof_fallback: bool = False,
) -> tuple[InterfaceIndex, list[ResultRecord]]:
    """Index every file, then extract from every file, in order."""
    index = build_interface_index(files, interface_names)
    records: list[ResultRecord] = []
    for source in files:
        records.extend(extract_implementations(source, interface_names, index, eof_fallback=eof_fallback))
    return index, records


def scrape_projects(
    projects: Sequence[Project],
    interface_names: Sequence[str],
    *,
    reader: SourceReader = read_source,
    eof_fallback: bool = False,
    max_workers: int = 1,
) -> list[ResultRecord]:
    """Return the records of all projects, concatenated in project order.

    Each project gets its own interface index, built from all of its files
    before any of them is extracted.
    """
    records: list[ResultRecord] = []
    for project in projects:
        files = read_sources(project.source_paths(), reader, max_workers=max_workers)
        index, project_records = scrape_files(files, interface_names, eof_fallback=eof_fallback)
        LOGGER.info(
            "Project %s: %d file(s), %d interface(s) indexed, %d record(s)",
            project.name,
            len(files),
            len(index),
            len(project_records),
        )
        records.extend(project_records)
    return records


def build_project_indexes(
    projects: Sequence[Project],
    interface_names: Sequence[str],
    *,
    reader: SourceReader = read_source,
    max_workers: int = 1,
) -> dict[str, InterfaceIndex]:
    """Return each project's interface index keyed by project name."""
    indexes: dict[str, InterfaceIndex] = {}
    for project in projects:
        files = read_sources(project.source_paths(), reader, max_workers=max_workers)
        indexes[project.name] = build_interface_index(files, interface_names)
    return indexes


def scrape_solution(config: ScrapeConfig) -> list[ResultRecord]:
    """Load the configured solution and return its records without writing them."""
    projects = load_solution(config.solution, config.ignore)
    reader = partial(read_source, encoding=config.encoding)
    return scrape_projects(
        projects,
        config.interfaces,
        reader=reader,
        eof_fallback=config.eof_fallback,
        max_workers=config.max_workers,
    )


def run(config: ScrapeConfig) -> list[ResultRecord]:
    """Scrape the configured solution and write the records to the output path."""
    LOGGER.info("Scanning %s for %s", config.solution, ", ".join(config.interfaces) or "(no interfaces)")
    records = scrape_solution(config)
    destination = Path(config.output).expanduser()
    write_records(records, destination, wrap_items=config.wrap_items)
    LOGGER.info("Wrote %d record(s) to %s", len(records), destination)
    return records


__all__ = ["build_project_indexes", "run", "scrape_files", "scrape_projects", "scrape_solution"]
