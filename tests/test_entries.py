from __future__ import annotations

from pathlib import Path

import pytest

from snapmark.adapters.markdown import parse_snapshot
from snapmark.core.entries import (
    SnapshotDocument,
    SnapshotEntry,
    build_entries_key,
    clean_heading,
    reduce_entries,
)
from snapmark.core.exceptions import SnapshotErrorKind, SnapshotParseError


def _reduce(text: str) -> dict[str, SnapshotEntry]:
    return reduce_entries(parse_snapshot(Path("doc.test.md"), text))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("`name`", "name"),
        ("`  spaced  `", "spaced"),
        ("plain", "plain"),
        ("``double``", "`double`"),
        ("`leading only", "leading only"),
        (" `name` ", "`name`"),
    ],
)
def test_clean_heading(raw: str, expected: str) -> None:
    assert clean_heading(raw) == expected


def test_build_entries_key_joins_with_hash() -> None:
    assert build_entries_key("suite", "0") == "suite#0"
    # Unescaped names can collide.
    assert build_entries_key("a#b", "c") == build_entries_key("a", "b#c")


def test_named_entries_are_reduced() -> None:
    entries = _reduce(
        "# `doc.test.md`\n\n## `parses`\n\n### `1`\n\n```json\n{}\n```\n\n"
        "### `2`\n\n```\n[]\n```\n"
    )

    assert entries == {
        "parses#1": SnapshotEntry("parses", "1", "json", "{}", used=False),
        "parses#2": SnapshotEntry("parses", "2", None, "[]", used=False),
    }


def test_bare_code_block_uses_implicit_name() -> None:
    entries = _reduce("# title\n\n## `single`\n\n```\nonly\n```\n")

    assert list(entries) == ["single#0"]
    assert entries["single#0"].value == "only"
    assert entries["single#0"].entry_name == "0"


def test_bare_block_followed_by_named_entries() -> None:
    entries = _reduce("## t\n\n```\nbare\n```\n\n### `extra`\n\n```\nnamed\n```\n")

    assert entries["t#0"].value == "bare"
    assert entries["t#extra"].value == "named"


def test_duplicate_entry_names_keep_last_value() -> None:
    entries = _reduce("## t\n\n### `x`\n\n```\nfirst\n```\n\n### `x`\n\n```\nsecond\n```\n")

    assert len(entries) == 1
    assert entries["t#x"].value == "second"


def test_multiple_tests_are_scoped_separately() -> None:
    entries = _reduce("## one\n\n```\n1\n```\n\n## two\n\n### `a`\n\n```\n2\n```\n")

    assert set(entries) == {"one#0", "two#a"}
    assert entries["two#a"].test_name == "two"


def test_nodes_outside_tests_are_ignored() -> None:
    entries = _reduce("# title\n\n```\nstray\n```\n\n#### deep\n\n## t\n\n```\nkept\n```\n")

    assert list(entries) == ["t#0"]


def test_heading_without_code_block_raises() -> None:
    with pytest.raises(SnapshotParseError) as excinfo:
        _reduce("# title\n\n## test\n\n### entry\n")

    error = excinfo.value
    assert error.kind is SnapshotErrorKind.EXPECTED_CODE_BLOCK_AFTER_HEADING
    assert error.path == Path("doc.test.md")
    assert error.line == 5


def test_heading_followed_by_heading_raises() -> None:
    with pytest.raises(SnapshotParseError):
        _reduce("## test\n\n### first\n\n### second\n\n```\nx\n```\n")


def test_reduction_leaves_parsed_nodes_intact() -> None:
    parsed = parse_snapshot(None, "## t\n\n```\nvalue\n```\n")
    before = list(parsed.nodes)

    reduce_entries(parsed)

    assert parsed.nodes == before


def test_document_entry_helpers() -> None:
    document = SnapshotDocument()
    entry = SnapshotEntry("t", "0", None, "v")

    document.put_entry(entry)

    assert document.raw == ""
    assert document.get_entry("t", "0") is entry
    assert document.get_entry("t", "1") is None
