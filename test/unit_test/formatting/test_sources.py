from __future__ import annotations

from snapsolve.formatting.sources import SEARCH_PROMPT_PREFIX, clean_search_output, extract_source


def test_extract_source_returns_first_citation() -> None:
    text = "Paris is the capital ([Wikipedia](https://en.wikipedia.org/wiki/Paris)) ([Other](https://x))"
    assert extract_source(text) == ("Wikipedia", "https://en.wikipedia.org/wiki/Paris")


def test_extract_source_none_without_citation() -> None:
    assert extract_source("[bare](https://link) is not a citation") is None


def test_clean_search_output_strips_coordinates_and_citations() -> None:
    text = "Located at 48.8566, 2.3522 in France ([Wiki](https://w))"
    assert clean_search_output(text) == "Located at  in France "


def test_prompt_prefix() -> None:
    assert SEARCH_PROMPT_PREFIX == "include links as source. output as markdown: "
