"""Structural APA/MLA formatting for plain-text chapters.

Every step here moves whitespace and punctuation around; none of them changes
a word. Each step can be applied on its own and applying it twice gives the
same result as applying it once. :meth:`AcademicFormatter.format_document`
runs them in an order where that also holds for the whole pipeline: the
reference list and headings are settled first so the paragraph step can
recognise and keep them.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..text.latex import normalize_line_endings
from ..text.paragraphs import strip_sentinel
from .layout import (
    MARKED_HEADING_RE,
    QUOTE_LINE_RE,
    is_quote_block,
    locate_reference_section,
    split_blocks,
    starts_with_heading,
)
from .styles import StyleKind, get_profile

LOGGER = logging.getLogger(__name__)


class AcademicFormatter:
    """Apply the structural conventions of one academic style."""

    def __init__(self, style: "StyleKind | str" = StyleKind.APA) -> None:
        self.profile = get_profile(style)

    @property
    def style(self) -> StyleKind:
        return self.profile.kind

    def format_document(self, content: str) -> str:
        text = normalize_line_endings(strip_sentinel(content))
        if not text.strip():
            return ""
        text = self.format_references(text)
        text = self.format_headings(text)
        text = self.format_quotes(text)
        text = self.format_paragraphs(text)
        text = self.format_citations(text)
        LOGGER.debug("Formatted %d characters as %s", len(text), self.style.label)
        return text

    # Paragraphs -----------------------------------------------------------------
    def format_paragraphs(self, content: str) -> str:
        lines = content.split("\n")
        section = locate_reference_section(lines, self.profile)
        if section is None:
            return "\n\n".join(self._format_blocks(content))
        before = "\n".join(lines[: section.heading])
        references = "\n".join(lines[section.heading : section.end]).rstrip()
        after = "\n".join(lines[section.end :])
        blocks = self._format_blocks(before) + [references] + self._format_blocks(after)
        return "\n\n".join(blocks)

    def _format_blocks(self, text: str) -> List[str]:
        formatted: List[str] = []
        for block in split_blocks(text):
            while block:
                head, block = self._split_heading(block)
                if head is not None:
                    formatted.append(head)
                    continue
                if is_quote_block(block, self.profile):
                    formatted.append(block)
                else:
                    formatted.append(" " * self.profile.paragraph_indent + block.lstrip())
                block = ""
        return formatted

    def _split_heading(self, block: str) -> Tuple[Optional[str], str]:
        if not starts_with_heading(block, self.profile):
            return None, block
        first, _, rest = block.partition("\n")
        return first.rstrip(), rest.lstrip("\n")

    # Headings -------------------------------------------------------------------
    def format_headings(self, content: str) -> str:
        """Drop ``#`` markers, leaving every heading on a block of its own."""

        lines: List[str] = []
        after_heading = False
        for line in content.split("\n"):
            match = MARKED_HEADING_RE.match(line)
            if match:
                if lines and lines[-1].strip():
                    lines.append("")
                # Only the top level is centred; deeper levels sit flush left.
                indent = self.profile.heading_indent if len(match.group(1)) == 1 else 0
                lines.append(" " * indent + match.group(2))
                after_heading = True
                continue
            if after_heading and line.strip():
                lines.append("")
            after_heading = False
            lines.append(line)
        return "\n".join(lines)

    # Citations ------------------------------------------------------------------
    def format_citations(self, content: str) -> str:
        return self.profile.rewrite_citations(content)

    # Block quotes ---------------------------------------------------------------
    def format_quotes(self, content: str) -> str:
        indent = " " * self.profile.block_quote_indent
        lines = []
        for line in content.split("\n"):
            match = QUOTE_LINE_RE.match(line)
            if match:
                quoted = match.group(1).rstrip()
                line = indent + quoted if quoted else ""
            lines.append(line)
        return "\n".join(lines)

    # Reference list -------------------------------------------------------------
    def format_references(self, content: str) -> str:
        lines = content.split("\n")
        section = locate_reference_section(lines, self.profile)
        if section is None or section.start == section.end:
            return content
        entries = self._reference_entries(lines[section.start : section.end])
        entries.sort(key=lambda entry: entry[0].casefold())
        hanging = " " * self.profile.hanging_indent
        rendered = [
            "\n".join([first, *(hanging + line for line in continuation)])
            for first, *continuation in entries
        ]
        result = lines[: section.heading] + [lines[section.heading].rstrip(), "", *rendered]
        rest = lines[section.end :]
        while rest and not rest[0].strip():
            rest.pop(0)
        if rest:
            result += ["", *rest]
        LOGGER.debug("Ordered %d reference entries", len(entries))
        return "\n".join(result)

    def _reference_entries(self, lines: List[str]) -> List[List[str]]:
        entries: List[List[str]] = []
        margin = min(len(line) - len(line.lstrip()) for line in lines)
        for line in lines:
            stripped = line.strip()
            if entries and len(line) - len(line.lstrip()) > margin:
                entries[-1].append(stripped)
            else:
                entries.append([stripped])
        return entries


def format_apa(content: str) -> str:
    return AcademicFormatter(StyleKind.APA).format_document(content)


def format_mla(content: str) -> str:
    return AcademicFormatter(StyleKind.MLA).format_document(content)


__all__ = ["AcademicFormatter", "format_apa", "format_mla"]
