"""Block-level Markdown grouping for search answers.

Search output is plain Markdown (no LaTeX). It is split on blank lines into
paragraphs. Inside a paragraph, headers stand alone, consecutive list items of
the same kind are collected into one list block, and the remaining lines are
joined into a text block.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel

HEADER_RE = re.compile(r"^(#{1,6})\s+(.*)$")
UNORDERED_ITEM_RE = re.compile(r"^[-*+]\s+")
ORDERED_ITEM_RE = re.compile(r"^\d+\.\s+")
LINK_RE = re.compile(r"\[(.*?)\]\((.*?)\)")


class BlockKind(str, Enum):
    HEADER = "header"
    PARAGRAPH = "paragraph"
    UNORDERED_LIST = "unordered_list"
    ORDERED_LIST = "ordered_list"


class MarkdownBlock(BaseModel):
    """One rendered block. ``lines`` holds list items or paragraph lines."""

    kind: BlockKind
    lines: List[str]
    level: Optional[int] = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def parse_header(line: str) -> Optional[Tuple[int, str]]:
    """Return ``(level, content)`` for an ATX header line, else ``None``."""
    match = HEADER_RE.match(line.strip())
    if not match:
        return None
    return len(match.group(1)), match.group(2)


def extract_links(line: str) -> List[Tuple[str, str]]:
    """All ``[label](url)`` links in ``line`` as ``(label, url)`` pairs."""
    return [(m.group(1), m.group(2)) for m in LINK_RE.finditer(line)]


def _list_kind(line: str) -> Optional[BlockKind]:
    if UNORDERED_ITEM_RE.match(line):
        return BlockKind.UNORDERED_LIST
    if ORDERED_ITEM_RE.match(line):
        return BlockKind.ORDERED_LIST
    return None


def split_blocks(text: str) -> List[MarkdownBlock]:
    """Split Markdown ``text`` into header, list and paragraph blocks."""
    blocks: List[MarkdownBlock] = []
    paragraphs = [p.strip() for p in text.split("\n\n")]

    for paragraph in filter(None, paragraphs):
        group: List[str] = []
        items: List[str] = []
        list_kind: Optional[BlockKind] = None

        def flush() -> None:
            nonlocal group, items, list_kind
            if group:
                blocks.append(MarkdownBlock(kind=BlockKind.PARAGRAPH, lines=group))
                group = []
            if items and list_kind is not None:
                blocks.append(MarkdownBlock(kind=list_kind, lines=items))
                items = []
                list_kind = None

        for raw in paragraph.split("\n"):
            line = raw.strip()
            if not line:
                continue
            header = parse_header(line)
            if header is not None:
                flush()
                blocks.append(MarkdownBlock(kind=BlockKind.HEADER, lines=[header[1]], level=header[0]))
                continue
            kind = _list_kind(line)
            if kind is not None:
                if kind is not list_kind:
                    flush()
                    list_kind = kind
                items.append(line)
                continue
            if items:
                flush()
            group.append(line)
        flush()

    return blocks
