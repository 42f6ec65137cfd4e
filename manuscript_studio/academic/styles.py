"""Citation and layout parameters for the supported academic styles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os
import re
from typing import Callable, Dict, Optional, Tuple

STYLE_ENV_VAR = "MANUSCRIPT_STYLE"

# (Name, Year[, p./pp. N[-M]]) with any spacing around the punctuation.
CITATION_RE = re.compile(
    r"\(\s*(?P<name>[A-ZÀ-Þ][^()]*?)\s*,?\s*(?P<year>\d{4}[a-z]?)"
    r"(?:\s*,?\s*(?P<marker>pp?)\.?\s*(?P<first>\d+)(?:\s*[-–—]\s*(?P<last>\d+))?)?\s*\)"
)
YEAR_PARENTHETICAL_RE = re.compile(r"\([^()]*\b\d{4}[a-z]?\b[^()]*\)")
MLA_CITATION_RE = re.compile(r"\((?P<name>[A-ZÀ-Þ](?:[^()\d]*[^\s,\d()])?) \d+(?:-\d+)?\)")


class StyleKind(str, Enum):
    APA = "apa"
    MLA = "mla"

    @classmethod
    def parse(cls, value: "StyleKind | str") -> "StyleKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unsupported style {value!r}; expected one of: {choices}") from None

    @property
    def label(self) -> str:
        return self.value.upper()


def _author(match: re.Match[str]) -> str:
    return re.sub(r"\s+", " ", match.group("name"))


def _pages(match: re.Match[str]) -> Optional[str]:
    if match.group("first") is None:
        return None
    if match.group("last"):
        return f"{match.group('first')}-{match.group('last')}"
    return match.group("first")


def render_apa_citation(match: re.Match[str]) -> str:
    citation = f"({_author(match)}, {match.group('year')}"
    pages = _pages(match)
    if pages is not None:
        citation += f", pp. {pages}" if "-" in pages else f", p. {pages}"
    return citation + ")"


def render_mla_citation(match: re.Match[str]) -> str:
    pages = _pages(match)
    if pages is None:
        # MLA cites by page; a year-only citation has nothing to rewrite to.
        return match.group(0)
    return f"({_author(match)} {pages})"


@dataclass(frozen=True)
class StyleProfile:
    """Per-style layout parameters shared by the formatter and the auditor."""

    kind: StyleKind
    reference_headings: Tuple[str, ...]
    render_citation: Callable[[re.Match[str]], str]
    canonical_citation: re.Pattern
    paragraph_indent: int = 4
    block_quote_indent: int = 8
    heading_indent: int = 32
    hanging_indent: int = 4

    @property
    def preferred_reference_heading(self) -> str:
        return self.reference_headings[0]

    def rewrite_citations(self, text: str) -> str:
        return CITATION_RE.sub(self.render_citation, text)

    def is_canonical(self, citation: str) -> bool:
        return self.canonical_citation.fullmatch(citation) is not None


PROFILES: Dict[StyleKind, StyleProfile] = {
    StyleKind.APA: StyleProfile(
        kind=StyleKind.APA,
        reference_headings=("References", "Bibliography", "Works Cited"),
        render_citation=render_apa_citation,
        canonical_citation=re.compile(
            r"\([A-ZÀ-Þ](?:[^()]*?[^\s,])?, \d{4}[a-z]?(?:, p\. \d+|, pp\. \d+-\d+)?\)"
        ),
    ),
    StyleKind.MLA: StyleProfile(
        kind=StyleKind.MLA,
        reference_headings=("Works Cited", "References", "Bibliography"),
        render_citation=render_mla_citation,
        canonical_citation=MLA_CITATION_RE,
    ),
}


def get_profile(style: "StyleKind | str") -> StyleProfile:
    return PROFILES[StyleKind.parse(style)]


def default_style() -> StyleKind:
    """Return the style named by ``MANUSCRIPT_STYLE``, or APA."""

    return StyleKind.parse(os.getenv(STYLE_ENV_VAR, StyleKind.APA.value))


__all__ = [
    "CITATION_RE",
    "PROFILES",
    "STYLE_ENV_VAR",
    "StyleKind",
    "StyleProfile",
    "YEAR_PARENTHETICAL_RE",
    "default_style",
    "get_profile",
    "render_apa_citation",
    "render_mla_citation",
]
