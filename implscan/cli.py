"""Command-line interface for ImplScan."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import List, Optional

import orjson
import typer

from .config import ScrapeConfig, load_yaml_config, merge_config, split_interface_names
from .errors import ImplScanError
from .loading.reader import read_source
from .loading.solution import load_solution
from .logging import configure_logging, get_logger
from .pipeline import build_project_indexes, run

app = typer.Typer(help="Extract the member bodies of classes implementing named C# interfaces.")
LOGGER = get_logger(__name__)

PROMPTS = {
    "solution": "Enter solution path",
    "output": "Enter output path",
    "interfaces": "Enter interface names, separated by comma",
}


@app.callback()
def main() -> None:
    """ImplScan CLI root."""
    return None


def _prompt_missing(merged: dict[str, object]) -> None:
    for key, prompt in PROMPTS.items():
        value = merged.get(key)
        if value is None or value == "" or value == []:
            merged[key] = typer.prompt(prompt)


def _resolve_config(config_file: Optional[Path], cli_options: dict[str, object]) -> ScrapeConfig:
    file_values = load_yaml_config(config_file)
    probe = _prompt_candidates(file_values, cli_options)
    _prompt_missing(probe)
    for key in PROMPTS:
        cli_options[key] = probe[key]
    try:
        return merge_config(file_values, cli_options)
    except ValueError as error:
        raise typer.BadParameter(str(error)) from error


def _prompt_candidates(file_values: dict[str, object], cli_options: dict[str, object]) -> dict[str, object]:
    """Return the value each prompted setting would take before prompting."""
    candidates: dict[str, object] = {
        "solution": file_values.get("solution", file_values.get("solution_file")),
        "output": file_values.get("output"),
        "interfaces": file_values.get("interfaces", file_values.get("inspect_interfaces")),
    }
    for key in PROMPTS:
        if cli_options.get(key) is not None:
            candidates[key] = cli_options[key]
    return candidates


@app.command("scrape")
def scrape(
    solution: Optional[str] = typer.Option(None, help="Path to a .sln, a .csproj or a source directory."),
    output: Optional[str] = typer.Option(None, help="Destination JSON file."),
    interfaces: Optional[str] = typer.Option(None, help="Comma-separated interface names."),
    config_file: Optional[Path] = typer.Option(None, "--config", help="YAML config file (defaults to ./implscan.yaml)."),
    ignore: Optional[List[str]] = typer.Option(None, help="Project-relative glob of files to skip; repeatable."),
    encoding: Optional[str] = typer.Option(None, help="Source file encoding."),
    eof_fallback: Optional[bool] = typer.Option(
        None,
        "--eof-fallback/--no-eof-fallback",
        help="End an unterminated body at the last line instead of reporting line 0.",
    ),
    wrap_items: Optional[bool] = typer.Option(None, "--wrap-items/--no-wrap-items", help='Wrap records as {"items": [...]}.'),
    max_workers: Optional[int] = typer.Option(None, min=1, help="Threads used to read a project's files."),
    log_level: Optional[str] = typer.Option(None, help="Log level (default INFO)."),
) -> None:
    cli_options: dict[str, object] = {
        "solution": solution,
        "output": output,
        "interfaces": split_interface_names(interfaces) if interfaces is not None else None,
        "ignore": list(ignore or []),
        "encoding": encoding,
        "eof_fallback": eof_fallback,
        "wrap_items": wrap_items,
        "max_workers": max_workers,
        "log_level": log_level,
    }
    config = _resolve_config(config_file, cli_options)
    configure_logging(config.log_level)
    try:
        run(config)
    except ImplScanError as error:
        LOGGER.error("%s", error)
        raise typer.Exit(code=1) from error
    typer.echo("Done")


@app.command("interfaces")
def interfaces_command(
    solution: Optional[str] = typer.Option(None, help="Path to a .sln, a .csproj or a source directory."),
    interfaces: Optional[str] = typer.Option(None, help="Comma-separated interface names."),
    config_file: Optional[Path] = typer.Option(None, "--config", help="YAML config file (defaults to ./implscan.yaml)."),
    ignore: Optional[List[str]] = typer.Option(None, help="Project-relative glob of files to skip; repeatable."),
    encoding: Optional[str] = typer.Option(None, help="Source file encoding."),
    log_level: Optional[str] = typer.Option(None, help="Log level."),
) -> None:
    """Print the member names indexed for each interface, per project."""
    file_values = load_yaml_config(config_file)
    settings = _prompt_candidates(
        file_values,
        {"solution": solution, "interfaces": split_interface_names(interfaces) if interfaces is not None else None},
    )
    if not settings["solution"] or not settings["interfaces"]:
        raise typer.BadParameter("--solution and --interfaces are required unless set in the config file")
    try:
        config = merge_config(
            file_values,
            {
                "solution": settings["solution"],
                "output": file_values.get("output") or "",
                "interfaces": settings["interfaces"],
                "ignore": list(ignore or []),
                "encoding": encoding,
                "log_level": log_level,
            },
        )
    except ValueError as error:
        raise typer.BadParameter(str(error)) from error
    configure_logging(config.log_level, quiet=True)
    try:
        projects = load_solution(config.solution, config.ignore)
        indexes = build_project_indexes(
            projects,
            config.interfaces,
            reader=partial(read_source, encoding=config.encoding),
            max_workers=config.max_workers,
        )
    except ImplScanError as error:
        LOGGER.error("%s", error)
        raise typer.Exit(code=1) from error
    payload = {name: index.as_dict() for name, index in indexes.items()}
    typer.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))


__all__ = ["app"]
