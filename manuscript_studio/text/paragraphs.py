"""Paragraph density checks and the review sentinel."""

from __future__ import annotations

from dataclasses import dataclass

from .latex import HEURISTIC_STAGES, collapse_blank_lines, collapse_whitespace

SENTINEL = "[NEEDS_PARAGRAPH_ANALYSIS]"
SENTINEL_PREFIX = SENTINEL + "\n"

MIN_PARAGRAPH_BREAKS = 2
MAX_UNBROKEN_WORDS = 200


@dataclass(frozen=True)
class TextStats:
    words: int
    characters: int


def count_paragraph_breaks(text: str) -> int:
    return text.count("\n\n")


def count_words(text: str) -> int:
    return len(text.split())


def needs_paragraph_analysis(text: str) -> bool:
    """Return True when *text* looks like one long unbroken block."""

    return (
        count_paragraph_breaks(text) < MIN_PARAGRAPH_BREAKS
        and count_words(text) > MAX_UNBROKEN_WORDS
    )


def has_sentinel(text: str) -> bool:
    return text.startswith(SENTINEL_PREFIX) or text == SENTINEL


def strip_sentinel(text: str) -> str:
    if text.startswith(SENTINEL_PREFIX):
        return text[len(SENTINEL_PREFIX):]
    if text == SENTINEL:
        return ""
    return text


def mark_dense_text(text: str) -> str:
    """Prefix the sentinel line to converted *text* if it needs paragraph review."""

    text = strip_sentinel(text)
    if needs_paragraph_analysis(text):
        return SENTINEL_PREFIX + text
    return text


def suggest_paragraph_breaks(text: str) -> str:
    """Re-run the paragraph-break heuristics over plain text.

    The result is re-checked for density, so it carries the sentinel again
    only if the heuristics could not find enough breaks.
    """

    text = strip_sentinel(text)
    for _name, func in HEURISTIC_STAGES:
        text = func(text)
    text = collapse_whitespace(collapse_blank_lines(text))
    return mark_dense_text(text)


def text_stats(text: str) -> TextStats:
    text = strip_sentinel(text)
    return TextStats(words=count_words(text), characters=len(text))


__all__ = [
    "MAX_UNBROKEN_WORDS",
    "MIN_PARAGRAPH_BREAKS",
    "SENTINEL",
    "SENTINEL_PREFIX",
    "TextStats",
    "count_paragraph_breaks",
    "count_words",
    "has_sentinel",
    "mark_dense_text",
    "needs_paragraph_analysis",
    "strip_sentinel",
    "suggest_paragraph_breaks",
    "text_stats",
]
