"""Tests for implementation detection and body boundary scanning."""

from __future__ import annotations

from pathlib import Path

import pytest

from implscan.models import InterfaceDeclaration, SourceFile
from implscan.scan.extractor import (
    NOT_FOUND_END,
    extract_implementations,
    find_body_end,
    find_class_name,
    find_namespace,
    find_signature_line,
    implements_interface,
    slice_body,
)
from implscan.scan.index import InterfaceIndex


def _index(name: str, *members: str) -> InterfaceIndex:
    index = InterfaceIndex()
    index.register(InterfaceDeclaration(interface_name=name, member_names=members))
    return index


def _boundary_lines(terminator: str) -> list[str]:
    lines = ["namespace NS;", "class Impl : IFoo", "{"]
    lines.extend("    // filler" for _ in range(7))
    lines.extend(["    void Bar()", "    {", "        Work();", "    }", terminator, "}"])
    return lines


@pytest.mark.parametrize(
    "line",
    [
        "public class Impl : IFoo",
        "public class Impl:IFoo",
        "public class Impl : Base, IFoo",
        "public class Impl : Base ,\tIFoo",
    ],
)
def test_inheritance_list_is_detected(line: str) -> None:
    assert implements_interface([line], "IFoo")


def test_plain_mention_is_not_an_implementation() -> None:
    assert not implements_interface(["private IFoo _foo;", "var x = new Wrapper(IFoo);"], "IFoo")


def test_namespace_detection() -> None:
    assert find_namespace(["using System;", "namespace Sample.Core", "{"]) == "Sample.Core"
    assert find_namespace(["namespace Sample.App;"]) == "Sample.App"
    assert find_namespace(["using System;", "class A {}"]) is None


def test_class_name_from_first_line_mentioning_interface() -> None:
    lines = ["namespace NS;", "public sealed class Worker : IFoo, IDisposable", "{", "}"]
    assert find_class_name(lines, "IFoo") == "Worker"


def test_class_name_empty_when_first_mention_is_not_a_class_line() -> None:
    lines = ["// implements IFoo", "public class Worker : IFoo", "{", "}"]
    assert find_class_name(lines, "IFoo") == ""


def test_signature_line_not_found() -> None:
    assert find_signature_line(["a", "b"], "Missing") == -1


def test_body_ends_before_next_member() -> None:
    lines = _boundary_lines("    public void Next()")
    assert find_signature_line(lines, "Bar") == 10
    end = find_body_end(lines, 11)
    assert end == 13
    assert slice_body(lines, 11, end) == "    {\n        Work();"


def test_body_scan_reports_sentinel_when_unterminated() -> None:
    lines = _boundary_lines("    void Next()")
    assert find_body_end(lines, 11) == NOT_FOUND_END == 0
    assert slice_body(lines, 11, 0) == ""


def test_body_scan_eof_fallback() -> None:
    lines = _boundary_lines("    void Next()")
    end = find_body_end(lines, 11, eof_fallback=True)
    assert end == len(lines) - 1
    assert slice_body(lines, 11, end) == "    {\n        Work();\n    }\n    void Next()"


def test_record_for_terminated_body() -> None:
    source = SourceFile(path=Path("Impl.cs"), lines=tuple(_boundary_lines("    private int _count;")))
    records = extract_implementations(source, ["IFoo"], _index("IFoo", "Bar"))
    assert len(records) == 1
    record = records[0]
    assert record.interface_name == "IFoo"
    assert record.namespace_name == "NS"
    assert record.class_name == "Impl"
    assert record.member_name == "Bar"
    assert record.body == "    {\n        Work();"
    assert (record.location.path, record.location.start_line, record.location.end_line) == ("Impl.cs", 11, 13)


def test_record_for_unterminated_body_keeps_degenerate_range() -> None:
    source = SourceFile(path=Path("Impl.cs"), lines=tuple(_boundary_lines("    void Next()")))
    record = extract_implementations(source, ["IFoo"], _index("IFoo", "Bar"))[0]
    assert record.body == ""
    assert record.location.start_line == 11
    assert record.location.end_line == 0


def test_missing_namespace_emits_nothing() -> None:
    source = SourceFile(
        path=Path("Impl.cs"),
        lines=("class Impl : IFoo", "{", "    public void Bar()", "    {", "    }", "    public void Baz()", "}"),
    )
    assert extract_implementations(source, ["IFoo"], _index("IFoo", "Bar")) == []


def test_unindexed_interface_emits_nothing() -> None:
    source = SourceFile(path=Path("Impl.cs"), lines=tuple(_boundary_lines("    public void Next()")))
    assert extract_implementations(source, ["IFoo"], InterfaceIndex()) == []


def test_unimplemented_interface_emits_nothing() -> None:
    source = SourceFile(path=Path("Impl.cs"), lines=tuple(_boundary_lines("    public void Next()")))
    assert extract_implementations(source, ["IBar"], _index("IBar", "Bar")) == []


def test_member_missing_from_file_starts_at_line_zero() -> None:
    lines = ("namespace NS;", "class Impl : IFoo", "{", "    public void Other()", "}")
    source = SourceFile(path=Path("Impl.cs"), lines=lines)
    record = extract_implementations(source, ["IFoo"], _index("IFoo", "Absent"))[0]
    assert record.location.start_line == 0
    assert record.location.end_line == 2
    assert record.body == "namespace NS;\nclass Impl : IFoo"


def test_class_name_is_reused_for_every_class_in_file() -> None:
    lines = (
        "namespace NS;",
        "class First : IFoo",
        "{",
        "    public void Bar()",
        "    {",
        "    }",
        "}",
        "class Second : IFoo",
        "{",
        "    public void Baz()",
        "    {",
        "    }",
        "}",
    )
    source = SourceFile(path=Path("Both.cs"), lines=lines)
    records = extract_implementations(source, ["IFoo"], _index("IFoo", "Bar", "Baz"))
    assert [(record.class_name, record.member_name) for record in records] == [("First", "Bar"), ("First", "Baz")]


def test_records_follow_interface_then_member_order() -> None:
    lines = (
        "namespace NS;",
        "class Impl : IA, IB",
        "{",
        "    public void B1()",
        "    public void A1()",
        "    public void A2()",
        "}",
    )
    index = _index("IA", "A1", "A2")
    index.register(InterfaceDeclaration(interface_name="IB", member_names=("B1",)))
    records = extract_implementations(SourceFile(path=Path("Impl.cs"), lines=lines), ["IB", "IA"], index)
    assert [(record.interface_name, record.member_name) for record in records] == [
        ("IB", "B1"),
        ("IA", "A1"),
        ("IA", "A2"),
    ]
