"""Snapshot document model and the reduction of parsed nodes into entries."""

from __future__ import annotations

from dataclasses import dataclass, field

from snapmark.adapters.markdown import CodeBlock, Heading, ParsedSnapshot

from .exceptions import SnapshotErrorKind


IMPLICIT_ENTRY_NAME = "0"


@dataclass(slots=True)
class SnapshotEntry:
    """A single captured expectation."""

    test_name: str
    entry_name: str
    language: str | None
    value: str
    used: bool = False


@dataclass(slots=True)
class SnapshotDocument:
    """Raw text and reduced entries of one snapshot file."""

    raw: str = ""
    entries: dict[str, SnapshotEntry] = field(default_factory=dict)

    def get_entry(self, test_name: str, entry_name: str) -> SnapshotEntry | None:
        return self.entries.get(build_entries_key(test_name, entry_name))

    def put_entry(self, entry: SnapshotEntry) -> None:
        self.entries[build_entries_key(entry.test_name, entry.entry_name)] = entry


def build_entries_key(test_name: str, entry_name: str) -> str:
    """Return the composite key identifying an entry inside a document.

    Names are not escaped: a test name containing ``#`` may collide with
    another test's entry name.
    """
    return f"{test_name}#{entry_name}"


def clean_heading(text: str) -> str:
    """Strip one surrounding pair of backticks and whitespace from a heading."""
    if text.startswith("`"):
        text = text[1:]
    if text.endswith("`"):
        text = text[:-1]
    return text.strip()


def reduce_entries(parsed: ParsedSnapshot) -> dict[str, SnapshotEntry]:
    """Group the parsed nodes into entries keyed by test and entry name.

    Level-2 headings open a test, level-3 headings name the code block that
    must follow them, and a bare code block directly under a test is stored
    under the implicit name ``"0"``. Anything else closes the current test.
    """
    nodes = parsed.nodes
    entries: dict[str, SnapshotEntry] = {}
    cursor = 0

    while cursor < len(nodes):
        node = nodes[cursor]
        cursor += 1

        if not isinstance(node, Heading) or node.level != 2:
            continue

        test_name = clean_heading(node.text)

        while cursor < len(nodes):
            current = nodes[cursor]

            if isinstance(current, Heading) and current.level == 3:
                entry_name = clean_heading(current.text)
                code_block = nodes[cursor + 1] if cursor + 1 < len(nodes) else None
                if not isinstance(code_block, CodeBlock):
                    raise parsed.unexpected(
                        SnapshotErrorKind.EXPECTED_CODE_BLOCK_AFTER_HEADING, current.loc
                    )
                cursor += 2
                entries[build_entries_key(test_name, entry_name)] = SnapshotEntry(
                    test_name=test_name,
                    entry_name=entry_name,
                    language=code_block.language,
                    value=code_block.text,
                )
                continue

            if isinstance(current, CodeBlock):
                cursor += 1
                entries[build_entries_key(test_name, IMPLICIT_ENTRY_NAME)] = SnapshotEntry(
                    test_name=test_name,
                    entry_name=IMPLICIT_ENTRY_NAME,
                    language=current.language,
                    value=current.text,
                )
                continue

            break

    return entries


__all__ = [
    "IMPLICIT_ENTRY_NAME",
    "SnapshotDocument",
    "SnapshotEntry",
    "build_entries_key",
    "clean_heading",
    "reduce_entries",
]
