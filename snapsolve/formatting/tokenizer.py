"""Markdown and LaTeX segmentation.

Solutions come back from the vision model as Markdown with embedded LaTeX.
``tokenize_math`` splits such text into Markdown, inline-math and block-math
segments with a single left-to-right scan.

Delimiter rules:

- ``$$`` is checked before ``$``, so ``$$x$$`` is one block, never two empty
  inline spans.
- A block runs to the next ``$$``. Any single ``$`` inside it is part of the
  LaTeX.
- An inline span runs to the next ``$``.
- ``\\$`` is an escaped dollar and never opens or closes math.
- An opener without a matching closer is kept as literal Markdown.
- Markdown segments that are only whitespace are dropped.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Union

from pydantic import BaseModel


class SegmentKind(str, Enum):
    """Kind of a parsed text segment."""

    MARKDOWN = "markdown"
    INLINE_MATH = "inline_math"
    BLOCK_MATH = "block_math"


class Segment(BaseModel):
    """A contiguous piece of the input text."""

    kind: SegmentKind
    value: str

    @property
    def is_inline(self) -> bool:
        return self.kind is not SegmentKind.BLOCK_MATH


class InlineRun(BaseModel):
    """Consecutive Markdown and inline-math segments laid out as one flow."""

    segments: List[Segment]


class BlockMath(BaseModel):
    """A display-math segment laid out on its own line."""

    segment: Segment


LayoutItem = Union[InlineRun, BlockMath]


def _find_closer(text: str, delimiter: str, start: int) -> int:
    """Index of the next unescaped ``delimiter`` at or after ``start``, or -1."""
    i = start
    while True:
        i = text.find(delimiter, i)
        if i == -1:
            return -1
        if i > 0 and text[i - 1] == "\\":
            i += 1
            continue
        return i


def tokenize_math(text: str) -> List[Segment]:
    """Split ``text`` into Markdown, inline-math and block-math segments.

    Args:
        text: Markdown text with ``$...$`` and ``$$...$$`` LaTeX spans

    Returns:
        Segments in input order
    """
    segments: List[Segment] = []
    markdown_start = 0
    i = 0
    n = len(text)

    def flush_markdown(end: int) -> None:
        chunk = text[markdown_start:end]
        if chunk.strip():
            segments.append(Segment(kind=SegmentKind.MARKDOWN, value=chunk))

    while i < n:
        ch = text[i]
        if ch == "\\" and i + 1 < n and text[i + 1] == "$":
            i += 2
            continue
        if ch != "$":
            i += 1
            continue

        if text.startswith("$$", i):
            close = _find_closer(text, "$$", i + 2)
            if close != -1:
                flush_markdown(i)
                segments.append(Segment(kind=SegmentKind.BLOCK_MATH, value=text[i + 2 : close]))
                i = markdown_start = close + 2
                continue
            # unterminated block opener: literal
            i += 2
            continue

        close = _find_closer(text, "$", i + 1)
        if close != -1:
            flush_markdown(i)
            segments.append(Segment(kind=SegmentKind.INLINE_MATH, value=text[i + 1 : close]))
            i = markdown_start = close + 1
            continue
        i += 1

    flush_markdown(n)
    return segments


def group_segments(segments: List[Segment]) -> List[LayoutItem]:
    """Group segments for layout.

    Consecutive Markdown and inline-math segments are collected into one
    :class:`InlineRun`; each block-math segment becomes its own
    :class:`BlockMath`.
    """
    items: List[LayoutItem] = []
    run: List[Segment] = []
    for segment in segments:
        if segment.is_inline:
            run.append(segment)
            continue
        if run:
            items.append(InlineRun(segments=run))
            run = []
        items.append(BlockMath(segment=segment))
    if run:
        items.append(InlineRun(segments=run))
    return items
