"""Read-only checks of a chapter against an academic style."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import List, Optional

from ..text.latex import normalize_line_endings
from ..text.paragraphs import strip_sentinel
from .layout import (
    has_reference_heading,
    is_quote_block,
    leading_spaces,
    locate_reference_section,
    split_blocks,
    starts_with_heading,
)
from .styles import CITATION_RE, YEAR_PARENTHETICAL_RE, StyleKind, get_profile

LOGGER = logging.getLogger(__name__)

EXCERPT_LENGTH = 40


@dataclass(frozen=True)
class FormatIssue:
    description: str
    suggested_fix: Optional[str] = None


def _excerpt(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= EXCERPT_LENGTH:
        return text
    return text[:EXCERPT_LENGTH].rstrip() + "..."


class FormatAuditor:
    """Report where a text departs from the layout of one style."""

    def __init__(self, style: "StyleKind | str" = StyleKind.APA) -> None:
        self.profile = get_profile(style)

    def audit(self, content: str) -> List[FormatIssue]:
        text = normalize_line_endings(strip_sentinel(content))
        if not text.strip():
            return []
        body = self._without_references(text)
        issues: List[FormatIssue] = []
        issues.extend(self.check_paragraphs(body))
        issues.extend(self.check_citations(body))
        issues.extend(self.check_reference_section(text))
        if "\t" in text:
            issues.append(FormatIssue("Use spaces instead of tabs for indentation"))
        if re.search(r"\n{4,}", text):
            issues.append(
                FormatIssue("Excessive line breaks found", "Separate paragraphs with one blank line")
            )
        LOGGER.debug("Audit (%s) found %d issues", self.profile.kind.label, len(issues))
        return issues

    def check_paragraphs(self, text: str) -> List[FormatIssue]:
        indent = " " * self.profile.paragraph_indent
        issues: List[FormatIssue] = []
        for number, block in enumerate(split_blocks(text), start=1):
            # Body text may follow a heading without a blank line in between.
            while block and starts_with_heading(block, self.profile):
                block = block.partition("\n")[2].lstrip("\n")
            if not block or is_quote_block(block, self.profile):
                continue
            first = block.split("\n", 1)[0]
            if leading_spaces(first) == len(indent) and not first[len(indent)].isspace():
                continue
            issues.append(
                FormatIssue(
                    f"Paragraph {number} should begin with a {len(indent)}-space indent: "
                    f"\"{_excerpt(first)}\"",
                    indent + first.lstrip(),
                )
            )
        return issues

    def check_citations(self, text: str) -> List[FormatIssue]:
        issues: List[FormatIssue] = []
        for match in YEAR_PARENTHETICAL_RE.finditer(text):
            citation = match.group(0)
            if self.profile.is_canonical(citation):
                continue
            fix = self.profile.rewrite_citations(citation)
            issues.append(
                FormatIssue(
                    f"Citation {citation} does not follow {self.profile.kind.label} format",
                    fix if fix != citation and self.profile.is_canonical(fix) else None,
                )
            )
        return issues

    def check_reference_section(self, text: str) -> List[FormatIssue]:
        if not CITATION_RE.search(text) or has_reference_heading(text, self.profile):
            return []
        heading = self.profile.preferred_reference_heading
        return [
            FormatIssue(
                f"Document appears to have citations but no {heading} section",
                f"Add a \"{heading}\" heading followed by the cited works",
            )
        ]

    def _without_references(self, text: str) -> str:
        lines = text.split("\n")
        section = locate_reference_section(lines, self.profile)
        if section is None:
            return text
        return "\n".join(lines[: section.heading] + [""] + lines[section.end :])


def validate_academic_format(content: str, style: "StyleKind | str" = StyleKind.APA) -> List[FormatIssue]:
    return FormatAuditor(style).audit(content)


__all__ = ["FormatAuditor", "FormatIssue", "validate_academic_format"]
