"""Helpers for the Markdown answers returned by the search endpoint."""

from __future__ import annotations

import re
from typing import Optional, Tuple

SOURCE_RE = re.compile(r"\(\[(.*?)\]\((.*?)\)\)")
COORDINATES_RE = re.compile(r"\d+\.\d+,\s*\d+\.\d+")

SEARCH_PROMPT_PREFIX = "include links as source. output as markdown: "


def extract_source(text: str) -> Optional[Tuple[str, str]]:
    """Return ``(label, url)`` of the first ``([label](url))`` citation."""
    match = SOURCE_RE.search(text)
    if match is None:
        return None
    return match.group(1), match.group(2)


def clean_search_output(text: str) -> str:
    """Drop coordinate pairs and parenthesised citations from an answer."""
    return SOURCE_RE.sub("", COORDINATES_RE.sub("", text))
