"""PDF manuscript ingestion."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
import logging
import re
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from pypdf import PdfReader

from . import DEFAULT_TITLE, Chapter, ChapterIdGenerator, default_id_generator
from ..text.latex import collapse_whitespace, normalize_quotes
from ..text.paragraphs import mark_dense_text

LOGGER = logging.getLogger(__name__)

_KEYWORD_HEADING_RE = re.compile(r"^(chapter|part|section)\b", re.I)
_ROMAN_HEADING_RE = re.compile(r"^[IVXLCM]+\.\s+\S")
_PAGE_NUMBER_RE = re.compile(r"(?:page\s+)?\d+(?:\s*(?:/|of)\s*\d+)?", re.I)


@dataclass
class HeadingRules:
    """What counts as a chapter heading on a PDF text line."""

    min_length: int = 6
    patterns: Sequence[str] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.min_length < 1:
            raise ValueError("min_length must be positive")
        self._compiled = [re.compile(pattern, re.I) for pattern in self.patterns]

    def matches(self, line: str) -> bool:
        if len(line) < self.min_length:
            return False
        return (
            any(pattern.search(line) for pattern in self._compiled)
            or line.isupper()
            or bool(_KEYWORD_HEADING_RE.match(line))
            or bool(_ROMAN_HEADING_RE.match(line))
        )


def repeated_edge_lines(pages: Sequence[str], share: float = 0.4) -> Set[str]:
    """Return first/last lines that recur on enough pages to be running heads or feet."""

    if len(pages) < 2:
        return set()
    counts: Counter = Counter()
    for text in pages:
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if lines:
            counts.update({lines[0], lines[-1]})
    needed = max(2, int(len(pages) * share))
    return {line for line, seen in counts.items() if seen >= needed}


def join_wrapped_lines(lines: Sequence[str]) -> str:
    """Rebuild paragraphs from extracted lines.

    A line that ends a sentence and is followed by a capitalised line closes
    its paragraph; every other line break is treated as wrapping.
    """

    text = "\n".join(line.strip() for line in lines)
    text = re.sub(r"(\w)-\n(\w)", r"\1\2", text)
    text = re.sub(r"([.!?][\"')]?)\n(?=[A-Z\"])", r"\1\n\n", text)
    text = re.sub(r"(?<!\n)\n(?!\n)", " ", text)
    return collapse_whitespace(normalize_quotes(text))


class PdfLoader:
    """Split a PDF manuscript into chapters at lines that look like headings."""

    def __init__(
        self,
        *,
        rules: Optional[HeadingRules] = None,
        repeated_share: float = 0.4,
        id_generator: Optional[ChapterIdGenerator] = None,
    ) -> None:
        self.rules = rules or HeadingRules()
        self.repeated_share = repeated_share
        self.id_generator = id_generator or default_id_generator

    def load(self, path: str) -> List[Chapter]:
        pages = [page.extract_text() or "" for page in PdfReader(path).pages]
        chapters = [self._chapter(title, body) for title, body in self._sections(pages) if body]
        if not chapters and any(text.strip() for text in pages):
            LOGGER.warning("No headings found in %s; importing as a single chapter.", path)
            chapters = [self._chapter(DEFAULT_TITLE, pages)]
        LOGGER.debug("Read %d chapters from %d PDF pages", len(chapters), len(pages))
        return chapters

    def _sections(self, pages: Sequence[str]) -> Iterator[Tuple[str, List[str]]]:
        title: Optional[str] = None
        body: List[str] = []
        for line in self._body_lines(pages):
            if self.rules.matches(line):
                if title:
                    yield title, body
                title, body = line, []
            elif title:
                body.append(line)
        if title:
            yield title, body

    def _body_lines(self, pages: Sequence[str]) -> Iterator[str]:
        running = repeated_edge_lines(pages, self.repeated_share)
        for text in pages:
            for line in text.splitlines():
                line = line.strip()
                if line and line not in running and not _PAGE_NUMBER_RE.fullmatch(line):
                    yield line

    def _chapter(self, title: str, lines: Sequence[str]) -> Chapter:
        return Chapter(
            id=self.id_generator.next_id(),
            title=title,
            content=mark_dense_text(join_wrapped_lines(lines)),
        )


__all__ = ["HeadingRules", "PdfLoader", "join_wrapped_lines", "repeated_edge_lines"]
