"""The editable chapter list behind the desktop editor.

Operations never raise for user mistakes such as deleting the last chapter
or formatting an empty one; they return a :class:`WorkspaceMessage` the
caller can show in a status bar or dialog instead.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .academic import AcademicFormatter, FormatIssue, StyleKind, validate_academic_format
from .importer import ManuscriptImporter
from .ingest import Chapter, ChapterIdGenerator, default_id_generator
from .text.paragraphs import TextStats, suggest_paragraph_breaks, text_stats

LOGGER = logging.getLogger(__name__)

INFO = "info"
WARNING = "warning"
ERROR = "error"


@dataclass(frozen=True)
class WorkspaceMessage:
    kind: str
    text: str


class ChapterWorkspace:
    """Ordered chapters plus the id of the one being edited."""

    def __init__(
        self,
        chapters: Optional[Sequence[Chapter]] = None,
        *,
        id_generator: Optional[ChapterIdGenerator] = None,
        importer: Optional[ManuscriptImporter] = None,
    ) -> None:
        self._next_id = id_generator or default_id_generator
        self.importer = importer or ManuscriptImporter(id_generator=self._next_id)
        self.chapters: List[Chapter] = list(chapters or [])
        if not self.chapters:
            self.chapters.append(Chapter(id=self._next_id(), title="Introduction"))
        self.active_id: str = self.chapters[0].id

    # Lookup ---------------------------------------------------------------------
    def find(self, chapter_id: str) -> Optional[Chapter]:
        return next((chapter for chapter in self.chapters if chapter.id == chapter_id), None)

    @property
    def active(self) -> Chapter:
        return self.find(self.active_id) or self.chapters[0]

    def select(self, chapter_id: str) -> Optional[WorkspaceMessage]:
        if self.find(chapter_id) is None:
            return WorkspaceMessage(WARNING, f"No chapter with id {chapter_id}")
        self.active_id = chapter_id
        return None

    # Editing ----------------------------------------------------------------------
    def add_chapter(self) -> Chapter:
        """Append an empty chapter named after its position and make it active."""

        chapter = Chapter(id=self._next_id(), title=f"Chapter {len(self.chapters) + 1}")
        self.chapters.append(chapter)
        self.active_id = chapter.id
        return chapter

    def update_chapter(
        self, chapter_id: str, *, title: Optional[str] = None, content: Optional[str] = None
    ) -> Optional[WorkspaceMessage]:
        chapter = self.find(chapter_id)
        if chapter is None:
            return WorkspaceMessage(WARNING, f"No chapter with id {chapter_id}")
        if title is not None:
            chapter.title = title
        if content is not None:
            chapter.content = content
        return None

    def delete_chapter(self, chapter_id: str) -> Optional[WorkspaceMessage]:
        if len(self.chapters) <= 1:
            return WorkspaceMessage(WARNING, "A manuscript needs at least one chapter")
        chapter = self.find(chapter_id)
        if chapter is None:
            return WorkspaceMessage(WARNING, f"No chapter with id {chapter_id}")
        self.chapters.remove(chapter)
        if self.active_id == chapter_id:
            self.active_id = self.chapters[0].id
        return None

    def import_documents(self, files: Sequence[Tuple[str, str]]) -> WorkspaceMessage:
        """Replace the chapter list with chapters parsed from ``(name, text)`` pairs.

        The current chapters are kept when nothing could be imported.
        """

        return self._replace_chapters(self.importer.import_sources(files), len(files))

    def import_files(self, paths: Sequence[Path]) -> WorkspaceMessage:
        """Like :meth:`import_documents` but reads LaTeX, text, EPUB or PDF files from disk."""

        try:
            result = self.importer.import_paths(paths)
        except (OSError, ValueError) as exc:
            LOGGER.warning("Import failed: %s", exc)
            return WorkspaceMessage(ERROR, str(exc))
        return self._replace_chapters(result.chapters, len(result.sources))

    def _replace_chapters(self, chapters: List[Chapter], file_count: int) -> WorkspaceMessage:
        if not chapters:
            return WorkspaceMessage(WARNING, "No chapters found in the imported files")
        self.chapters = chapters
        self.active_id = chapters[0].id
        flagged = sum(1 for chapter in chapters if chapter.needs_paragraph_analysis)
        LOGGER.info("Imported %d chapters from %d files", len(chapters), file_count)
        text = f"Imported {len(chapters)} chapters"
        if flagged:
            text += f"; {flagged} need paragraph review"
        return WorkspaceMessage(INFO, text)

    # Formatting -------------------------------------------------------------------
    def format_chapter(
        self, chapter_id: str, style: "StyleKind | str | None" = StyleKind.APA
    ) -> WorkspaceMessage:
        """Rewrite a chapter in place.

        ``style=None`` runs the paragraph-break heuristics instead of an
        academic style.
        """

        chapter = self.find(chapter_id)
        if chapter is None:
            return WorkspaceMessage(WARNING, f"No chapter with id {chapter_id}")
        if not chapter.clean_content.strip():
            return WorkspaceMessage(INFO, "Add some content before formatting")
        if style is None:
            chapter.content = suggest_paragraph_breaks(chapter.content)
            if chapter.needs_paragraph_analysis:
                return WorkspaceMessage(WARNING, "Could not find enough paragraph breaks")
            return WorkspaceMessage(INFO, "Paragraph breaks suggested")
        try:
            formatter = AcademicFormatter(style)
        except ValueError as exc:
            return WorkspaceMessage(ERROR, str(exc))
        chapter.content = formatter.format_document(chapter.content)
        return WorkspaceMessage(INFO, f"Formatted as {formatter.style.label}")

    def audit_chapter(self, chapter_id: str, style: "StyleKind | str" = StyleKind.APA) -> List[FormatIssue]:
        chapter = self.find(chapter_id)
        if chapter is None:
            return []
        return validate_academic_format(chapter.content, style)

    def stats(self, chapter_id: Optional[str] = None) -> TextStats:
        chapter = self.find(chapter_id) if chapter_id else self.active
        return text_stats(chapter.content if chapter else "")


__all__ = ["ChapterWorkspace", "WorkspaceMessage", "INFO", "WARNING", "ERROR"]
