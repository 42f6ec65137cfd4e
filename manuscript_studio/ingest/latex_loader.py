"""LaTeX ingestion utilities."""

from __future__ import annotations

import logging
from pathlib import Path
import re
from typing import List, Optional

from . import DEFAULT_TITLE, Chapter, ChapterIdGenerator, default_id_generator
from ..text.latex import ARGUMENT, LatexConverter, strip_comments
from ..text.paragraphs import mark_dense_text

LOGGER = logging.getLogger(__name__)

SECTION_RE = re.compile(r"\\(chapter|section|part)\*?(?:\[[^\]]*\])?" + ARGUMENT)


class LatexLoader:
    """Split LaTeX source into chapters at ``\\chapter``, ``\\section`` and ``\\part``."""

    def __init__(
        self,
        *,
        converter: Optional[LatexConverter] = None,
        id_generator: Optional[ChapterIdGenerator] = None,
        default_title: str = DEFAULT_TITLE,
    ) -> None:
        self.converter = converter or LatexConverter()
        self.id_generator = id_generator or default_id_generator
        self.default_title = default_title

    def load(self, path: str) -> List[Chapter]:
        """Load chapters from the ``.tex`` file at *path*."""

        source = Path(path).read_text(encoding="utf-8", errors="replace")
        return self.load_text(source)

    def load_text(self, source: str) -> List[Chapter]:
        source = strip_comments(source)
        markers = list(SECTION_RE.finditer(source))
        if not markers:
            LOGGER.debug("No sectioning commands found; importing as a single chapter.")
            return [self._chapter(self.default_title, source, convert_title=False)]

        preamble = source[: markers[0].start()]
        if self.converter.convert(preamble):
            LOGGER.debug("Discarding %d characters before the first section.", len(preamble))

        chapters: List[Chapter] = []
        for idx, marker in enumerate(markers):
            end = markers[idx + 1].start() if idx + 1 < len(markers) else len(source)
            body = source[marker.end():end]
            chapters.append(self._chapter(marker.group(2).strip(), body))
        LOGGER.debug("Segmented source into %d chapters.", len(chapters))
        return chapters

    def _chapter(self, title: str, body: str, *, convert_title: bool = True) -> Chapter:
        if convert_title:
            title = self.converter.convert(title)
        content = mark_dense_text(self.converter.convert(body))
        return Chapter(id=self.id_generator.next_id(), title=title, content=content)


__all__ = ["LatexLoader", "SECTION_RE"]
