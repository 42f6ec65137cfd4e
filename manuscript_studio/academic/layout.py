"""Block and line classification shared by the formatter and the auditor."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable, List, Optional, Sequence

from .styles import StyleProfile

BLANK_LINE_RE = re.compile(r"\n(?:[ \t]*\n)+")
LEADING_BLANK_LINES_RE = re.compile(r"^(?:[ \t]*\n)+")
MARKED_HEADING_RE = re.compile(r"^[ \t]*(#+)[ \t]+(\S.*?)[ \t]*$")
QUOTE_LINE_RE = re.compile(r"^[ \t]*(?:>[ \t]*)+(.*)$")
_HEADING_PUNCTUATION_RE = re.compile(r"[.,;!?()\[\]\"]|:$")
_SENTENCE_END_RE = re.compile(r"[.,;:!\"')\]]$")


@dataclass(frozen=True)
class ReferenceSection:
    """Line indices of a reference list: heading, first entry, and one past the last entry."""

    heading: int
    start: int
    end: int


def leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def split_blocks(text: str) -> List[str]:
    """Split on blank lines, dropping whitespace-only blocks."""

    return [
        LEADING_BLANK_LINES_RE.sub("", block).rstrip()
        for block in BLANK_LINE_RE.split(text)
        if block.strip()
    ]


def is_capitalized_heading(line: str) -> bool:
    stripped = line.strip()
    if not stripped or len(stripped.split()) > 10:
        return False
    if _HEADING_PUNCTUATION_RE.search(stripped):
        return False
    if not (stripped[0].isupper() or stripped[0].isdigit()):
        return False
    long_words = [word for word in stripped.split() if word[0].isalpha() and len(word) > 3]
    return all(word[0].isupper() for word in long_words)


def is_heading_line(line: str) -> bool:
    """A short line that opens like a title and does not end like a sentence.

    Used for blocks that hold nothing but that line, which is how the
    formatter leaves ``##`` and deeper headings once their markers are gone.
    """

    stripped = line.strip()
    if not stripped or len(stripped.split()) > 10:
        return False
    if not (stripped[0].isupper() or stripped[0].isdigit()):
        return False
    return not _SENTENCE_END_RE.search(stripped)


def is_marked_heading(line: str, profile: StyleProfile) -> bool:
    """Return True for ``#`` headings and headings already centred by the formatter."""

    if MARKED_HEADING_RE.match(line):
        return True
    return bool(line.strip()) and leading_spaces(line) >= profile.heading_indent


def starts_with_heading(block: str, profile: StyleProfile) -> bool:
    """A block opens with a heading if its first line is marked or centred,
    if the whole block is a single heading line, or if a flush capitalized
    heading line sits directly on top of body text."""

    first, _, rest = block.partition("\n")
    if is_marked_heading(first, profile):
        return True
    if rest.strip():
        return leading_spaces(first) == 0 and is_capitalized_heading(first)
    return is_heading_line(first)


def is_quote_block(block: str, profile: StyleProfile) -> bool:
    lines = [line for line in block.split("\n") if line.strip()]
    return bool(lines) and all(
        QUOTE_LINE_RE.match(line) or profile.block_quote_indent <= leading_spaces(line) < profile.heading_indent
        for line in lines
    )


def reference_heading_re(headings: Iterable[str]) -> re.Pattern:
    labels = "|".join(re.escape(heading) for heading in headings)
    return re.compile(rf"^[ \t]*(?:#+[ \t]*)?(?:{labels})[ \t]*:?[ \t]*$", re.IGNORECASE)


def locate_reference_section(lines: Sequence[str], profile: StyleProfile) -> Optional[ReferenceSection]:
    """Find the first reference list heading and the entries that follow it.

    Entries run over consecutive non-blank lines (blank lines right after the
    heading are skipped) and stop at a blank line or at the next heading,
    including a flush capitalized one such as ``Appendix Notes``.
    """

    heading_re = reference_heading_re(profile.reference_headings)
    for index, line in enumerate(lines):
        if not heading_re.match(line):
            continue
        start = index + 1
        while start < len(lines) and not lines[start].strip():
            start += 1
        end = start
        while end < len(lines) and lines[end].strip():
            if heading_re.match(lines[end]) or MARKED_HEADING_RE.match(lines[end]):
                break
            if lines[end].strip().isupper() or leading_spaces(lines[end]) >= profile.heading_indent:
                break
            if leading_spaces(lines[end]) == 0 and is_capitalized_heading(lines[end]):
                break
            end += 1
        return ReferenceSection(heading=index, start=start, end=end)
    return None


def has_reference_heading(text: str, profile: StyleProfile) -> bool:
    heading_re = reference_heading_re(profile.reference_headings)
    return any(heading_re.match(line) for line in text.split("\n"))


__all__ = [
    "MARKED_HEADING_RE",
    "QUOTE_LINE_RE",
    "ReferenceSection",
    "has_reference_heading",
    "is_capitalized_heading",
    "is_heading_line",
    "is_marked_heading",
    "is_quote_block",
    "leading_spaces",
    "locate_reference_section",
    "split_blocks",
    "starts_with_heading",
]
