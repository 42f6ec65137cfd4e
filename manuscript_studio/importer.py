"""Shared import logic used by both the desktop editor and the CLI.

Raw ``(filename, text)`` pairs go through :meth:`ManuscriptImporter.import_sources`;
files on disk go through :meth:`ManuscriptImporter.import_paths`, which reads
LaTeX and plain text itself and hands EPUB and PDF manuscripts to their
loaders. Reading and writing files happens here and nowhere in the text
pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
import re
import time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .ingest import DEFAULT_TITLE, Chapter, ChapterIdGenerator, default_id_generator
from .ingest.epub_loader import EpubLoader
from .ingest.latex_loader import LatexLoader
from .ingest.pdf_loader import PdfLoader
from .text.latex import ConversionOptions, LatexConverter

__all__ = [
    "ImportOptions",
    "ImportResult",
    "ManuscriptImporter",
    "UnsupportedFormatError",
    "chapter_manifest",
    "export_chapters",
]

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".tex", ".ltx", ".latex", ".txt"}
SUPPORTED_SUFFIXES = TEXT_SUFFIXES | {".epub", ".pdf"}


class UnsupportedFormatError(ValueError):
    """Raised for input files whose extension no loader handles."""


@dataclass
class ImportOptions:
    """Options that control how manuscripts become chapters."""

    default_title: str = DEFAULT_TITLE
    encoding: str = "utf-8"
    paragraph_heuristics: bool = True
    strip_empty: bool = True
    suffixes: frozenset = field(default_factory=lambda: frozenset(SUPPORTED_SUFFIXES))

    def __post_init__(self) -> None:
        if not self.default_title.strip():
            raise ValueError("default_title must not be empty")
        unknown = set(self.suffixes) - SUPPORTED_SUFFIXES
        if unknown:
            raise ValueError(f"Unsupported suffixes: {', '.join(sorted(unknown))}")


@dataclass
class ImportResult:
    """Outcome of importing files from disk."""

    chapters: List[Chapter]
    sources: List[Path]
    flagged_chapters: int
    elapsed_seconds: float


class ManuscriptImporter:
    """Turn LaTeX sources and manuscripts into an ordered chapter list."""

    def __init__(
        self,
        options: Optional[ImportOptions] = None,
        *,
        id_generator: Optional[ChapterIdGenerator] = None,
    ) -> None:
        self.options = options or ImportOptions()
        self.id_generator = id_generator or default_id_generator
        converter = LatexConverter(
            ConversionOptions(paragraph_heuristics=self.options.paragraph_heuristics)
        )
        self.latex_loader = LatexLoader(
            converter=converter,
            id_generator=self.id_generator,
            default_title=self.options.default_title,
        )

    # Public API -----------------------------------------------------------------
    def import_sources(self, files: Sequence[Tuple[str, str]]) -> List[Chapter]:
        """Segment each ``(filename, raw_text)`` pair, keeping input order."""

        chapters: List[Chapter] = []
        for name, raw_text in files:
            imported = self.latex_loader.load_text(raw_text)
            if name and len(imported) == 1 and imported[0].title == self.options.default_title:
                imported[0].title = re.sub(r"\.tex$", "", name, flags=re.IGNORECASE)
            logger.debug("Imported %d chapters from %s", len(imported), name or "<text>")
            chapters.extend(imported)
        return chapters

    def import_paths(self, paths: Iterable[Path]) -> ImportResult:
        start_time = time.perf_counter()
        sources: List[Path] = []
        chapters: List[Chapter] = []
        for path in map(Path, paths):
            if not path.exists():
                raise FileNotFoundError(f"Input file does not exist: {path}")
            suffix = path.suffix.lower()
            if suffix not in self.options.suffixes:
                raise UnsupportedFormatError(f"Unsupported file type: {path.suffix or path.name}")
            if suffix == ".epub":
                loaded = EpubLoader(
                    strip_empty=self.options.strip_empty, id_generator=self.id_generator
                ).load(str(path))
            elif suffix == ".pdf":
                loaded = PdfLoader(id_generator=self.id_generator).load(str(path))
            else:
                loaded = self.import_sources([(path.name, self._load_text(path))])
            logger.info("Loaded %s (%d chapters)", path.name, len(loaded))
            sources.append(path)
            chapters.extend(loaded)

        flagged = sum(1 for chapter in chapters if chapter.needs_paragraph_analysis)
        if flagged:
            logger.info("%d chapters need paragraph review", flagged)
        return ImportResult(
            chapters=chapters,
            sources=sources,
            flagged_chapters=flagged,
            elapsed_seconds=time.perf_counter() - start_time,
        )

    # Input handling --------------------------------------------------------------
    def _load_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.options.encoding)
        except UnicodeDecodeError:
            logger.warning("Failed to decode %s as %s; attempting latin-1", path, self.options.encoding)
            return path.read_text(encoding="latin-1")


def _slug(title: str) -> str:
    return re.sub(r"[^\w]+", "-", title).strip("-").lower() or "chapter"


def chapter_manifest(chapters: Sequence[Chapter]) -> List[Dict[str, object]]:
    return [
        {
            "id": chapter.id,
            "title": chapter.title,
            "needs_paragraph_analysis": chapter.needs_paragraph_analysis,
            "content": chapter.clean_content,
        }
        for chapter in chapters
    ]


def export_chapters(chapters: Sequence[Chapter], output_dir: Path) -> List[Path]:
    """Write one ``NN-title.txt`` file per chapter plus a ``chapters.json`` manifest."""

    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for number, chapter in enumerate(chapters, start=1):
        path = output_dir / f"{number:02d}-{_slug(chapter.title)}.txt"
        path.write_text(chapter.clean_content + "\n", encoding="utf-8")
        written.append(path)
    manifest_path = output_dir / "chapters.json"
    manifest_path.write_text(json.dumps(chapter_manifest(chapters), indent=2), encoding="utf-8")
    logger.info("Wrote %d chapters to %s", len(written), output_dir)
    return written
