from __future__ import annotations

import pytest

from snapsolve.formatting.tokenizer import (
    BlockMath,
    InlineRun,
    Segment,
    SegmentKind,
    group_segments,
    tokenize_math,
)

MD = SegmentKind.MARKDOWN
INLINE = SegmentKind.INLINE_MATH
BLOCK = SegmentKind.BLOCK_MATH


def _pairs(text: str) -> list[tuple[SegmentKind, str]]:
    return [(s.kind, s.value) for s in tokenize_math(text)]


def test_inline_math_between_markdown() -> None:
    assert _pairs("Solve $x^2$ please") == [(MD, "Solve "), (INLINE, "x^2"), (MD, " please")]


def test_block_math_takes_precedence_over_inline() -> None:
    assert _pairs("$$x+1$$") == [(BLOCK, "x+1")]
    assert _pairs("a $$b$$ c $d$") == [(MD, "a "), (BLOCK, "b"), (MD, " c "), (INLINE, "d")]


def test_single_dollar_inside_block_is_literal() -> None:
    assert _pairs("$$a $b$ c$$") == [(BLOCK, "a $b$ c")]


def test_block_followed_directly_by_inline() -> None:
    assert _pairs("$$x$$$y$") == [(BLOCK, "x"), (INLINE, "y")]


@pytest.mark.parametrize("text", ["price is $5", "open $$block", "no math here"])
def test_unterminated_opener_stays_markdown(text: str) -> None:
    assert _pairs(text) == [(MD, text)]


def test_escaped_dollar_is_not_a_delimiter() -> None:
    assert _pairs(r"costs \$5 and $x$") == [(MD, r"costs \$5 and "), (INLINE, "x")]
    assert _pairs(r"$a\$b$") == [(INLINE, r"a\$b")]


def test_whitespace_only_markdown_is_dropped() -> None:
    assert _pairs("$a$ $b$\n") == [(INLINE, "a"), (INLINE, "b")]
    assert tokenize_math("") == []
    assert tokenize_math("   ") == []


def test_segment_is_inline() -> None:
    assert Segment(kind=MD, value="x").is_inline
    assert Segment(kind=INLINE, value="x").is_inline
    assert not Segment(kind=BLOCK, value="x").is_inline


def test_group_segments_isolates_block_math() -> None:
    items = group_segments(tokenize_math("Intro $x$ text $$y = 2$$ after"))

    assert [type(i) for i in items] == [InlineRun, BlockMath, InlineRun]
    assert [s.value for s in items[0].segments] == ["Intro ", "x", " text "]
    assert items[1].segment.value == "y = 2"
    assert [s.value for s in items[2].segments] == [" after"]


def test_group_segments_consecutive_blocks() -> None:
    items = group_segments(tokenize_math("$$a$$$$b$$"))
    assert [type(i) for i in items] == [BlockMath, BlockMath]
    assert group_segments([]) == []
