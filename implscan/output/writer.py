"""Serialize result records to JSON."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Sequence

import orjson

from ..errors import OutputWriteError
from ..models import ResultRecord


def dump_records(records: Sequence[ResultRecord], *, wrap_items: bool = False) -> bytes:
    """Return the indented JSON document for ``records``."""
    items = [record.to_dict() for record in records]
    payload: object = {"items": items} if wrap_items else items
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE)


def write_records(records: Sequence[ResultRecord], destination: Path, *, wrap_items: bool = False) -> None:
    """Write ``records`` to ``destination`` through a temporary file and a rename."""
    data = dump_records(records, wrap_items=wrap_items)
    temp_name: str | None = None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "wb", dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp", delete=False
        ) as handle:
            temp_name = handle.name
            handle.write(data)
        os.replace(temp_name, destination)
    except OSError as error:
        if temp_name is not None and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise OutputWriteError(f"Failed to write {destination}: {error}", destination) from error


__all__ = ["dump_records", "write_records"]
