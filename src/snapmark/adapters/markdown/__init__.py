"""Markdown tokenization for snapshot documents.

Snapshot files only use a tiny subset of Markdown: ATX headings and fenced
code blocks. The grammar is handled by ``markdown-it-py``; this adapter maps
its top-level block tokens onto :class:`Heading` and :class:`CodeBlock` nodes
and keeps track of where each node starts so structural errors can point at
the offending line.

Code block bodies are copied from the original text rather than from the
tokens, because markdown-it rewrites CR line endings and NUL characters
before tokenizing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re

from markdown_it import MarkdownIt
from markdown_it.token import Token

from snapmark.core.exceptions import SnapshotErrorKind, SnapshotParseError


__all__ = [
    "CodeBlock",
    "Heading",
    "ParsedSnapshot",
    "SnapshotNode",
    "SourceLocation",
    "parse_snapshot",
]


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a node in the snapshot text (1-based line, 0-based column)."""

    path: Path | None
    line: int
    column: int = 0


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    text: str
    loc: SourceLocation


@dataclass(frozen=True, slots=True)
class CodeBlock:
    language: str | None
    text: str
    loc: SourceLocation


SnapshotNode = Heading | CodeBlock


@dataclass(slots=True)
class ParsedSnapshot:
    """Tokenizer output together with the untouched input text."""

    path: Path | None
    input: str
    nodes: list[SnapshotNode] = field(default_factory=list)

    def unexpected(self, kind: SnapshotErrorKind, loc: SourceLocation) -> SnapshotParseError:
        """Build a structural error located in this document."""
        return SnapshotParseError(kind, path=self.path, line=loc.line, column=loc.column)


_PARSER = MarkdownIt("commonmark")
_SOURCE_LINE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+\Z")


def parse_snapshot(path: Path | None, text: str) -> ParsedSnapshot:
    """Tokenize ``text`` into the heading and code block nodes it contains."""
    parsed = ParsedSnapshot(path=path, input=text)
    tokens = _PARSER.parse(text)
    source_lines = _SOURCE_LINE.findall(text)
    # Documents checked out with CRLF endings close every fence with "\r\n".
    closing_break = "\r\n" if source_lines and source_lines[0].endswith("\r\n") else "\n"

    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if token.level != 0:
            continue

        if token.type == "heading_open":
            inline = tokens[index] if index < len(tokens) else None
            content = inline.content if inline is not None and inline.type == "inline" else ""
            parsed.nodes.append(
                Heading(
                    level=int(token.tag[1:]),
                    text=content,
                    loc=_location(path, token.map),
                )
            )
            continue

        if token.type == "fence":
            parsed.nodes.append(
                CodeBlock(
                    language=token.info.strip() or None,
                    text=_fence_body(token, source_lines, closing_break),
                    loc=_location(path, token.map),
                )
            )

    return parsed


def _location(path: Path | None, line_map: list[int] | None) -> SourceLocation:
    line = line_map[0] + 1 if line_map else 1
    return SourceLocation(path=path, line=line)


def _fence_body(token: Token, source_lines: list[str], closing_break: str) -> str:
    """Return the verbatim text between the fences of a ``fence`` token."""
    content = token.content
    if token.map:
        count = content.count("\n") + (1 if content and not content.endswith("\n") else 0)
        start = token.map[0]
        opening = source_lines[start]
        indent = len(opening) - len(opening.lstrip(" "))

        body: list[str] = []
        for line in source_lines[start + 1 : start + 1 + count]:
            stripped = line.lstrip(" ")
            body.append(line[min(indent, len(line) - len(stripped)) :])
        content = "".join(body)

    # The last line break belongs to the closing fence.
    if content.endswith(closing_break):
        return content[: -len(closing_break)]
    if content.endswith("\n"):
        return content[:-1]
    return content
