"""Logging utilities."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO", *, quiet: bool = False, rich_tracebacks: bool = True) -> RichHandler:
    """Route all records through one rich handler on stderr.

    ``quiet`` is for commands that print their result on stdout: the handler
    drops timestamps and passes only warnings and errors, whatever ``level``
    the loggers run at.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=rich_tracebacks,
        markup=False,
        show_path=False,
        show_time=not quiet,
    )
    if quiet:
        handler.setLevel(logging.WARNING)
    logging.basicConfig(level=level.upper(), format="%(message)s", handlers=[handler], force=True)
    return handler


def get_logger(name: str, *extra_names: str) -> logging.Logger:
    """Return a namespaced logger."""
    namespace = ".".join([name, *extra_names]) if extra_names else name
    return logging.getLogger(namespace)


__all__ = ["configure_logging", "get_logger"]
