"""Tests for result serialization."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from implscan.errors import OutputWriteError
from implscan.models import ResultRecord, SourceLocation
from implscan.output.writer import dump_records, write_records


def _record(member: str = "Bar", body: str = "doWork();") -> ResultRecord:
    return ResultRecord(
        interface_name="IFoo",
        namespace_name="NS",
        class_name="Baz",
        member_name=member,
        body=body,
        location=SourceLocation(path="src/Baz.cs", start_line=3, end_line=4),
    )


def test_field_order_is_stable() -> None:
    payload = json.loads(dump_records([_record()]))
    assert list(payload[0]) == ["interfaceName", "namespace", "className", "memberName", "body", "location"]
    assert list(payload[0]["location"]) == ["path", "startLine", "endLine"]


def test_wrapped_items_envelope() -> None:
    payload = json.loads(dump_records([_record("A"), _record("B")], wrap_items=True))
    assert [item["memberName"] for item in payload["items"]] == ["A", "B"]


def test_write_records_creates_parent_and_leaves_no_temp_files(tmp_path: Path) -> None:
    destination = tmp_path / "nested" / "out.json"
    write_records([_record(body="line one\nline two")], destination)
    payload = json.loads(destination.read_text(encoding="utf-8"))
    assert payload[0]["body"] == "line one\nline two"
    assert destination.read_text(encoding="utf-8").endswith("\n")
    assert [path.name for path in destination.parent.iterdir()] == ["out.json"]


def test_write_records_replaces_existing_file(tmp_path: Path) -> None:
    destination = tmp_path / "out.json"
    destination.write_text("stale", encoding="utf-8")
    write_records([], destination)
    assert json.loads(destination.read_text(encoding="utf-8")) == []


def test_unwritable_destination_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(OutputWriteError):
        write_records([_record()], blocker / "out.json")
