"""
Text formatting for solver and search answers.

- ``tokenizer``: Markdown / inline LaTeX / block LaTeX segmentation
- ``markdown_blocks``: header, list and paragraph grouping
- ``sources``: citation extraction for search answers
"""

from .markdown_blocks import BlockKind, MarkdownBlock, extract_links, parse_header, split_blocks
from .sources import clean_search_output, extract_source
from .tokenizer import BlockMath, InlineRun, Segment, SegmentKind, group_segments, tokenize_math

__all__ = [
    "BlockKind",
    "BlockMath",
    "InlineRun",
    "MarkdownBlock",
    "Segment",
    "SegmentKind",
    "clean_search_output",
    "extract_links",
    "extract_source",
    "group_segments",
    "parse_header",
    "split_blocks",
    "tokenize_math",
]
