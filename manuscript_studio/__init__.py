"""Core package for Manuscript Studio."""

from __future__ import annotations

from .academic import (
    AcademicFormatter,
    FormatAuditor,
    FormatIssue,
    StyleKind,
    format_apa,
    format_mla,
    generate_title_page,
    validate_academic_format,
)
from .importer import ImportOptions, ImportResult, ManuscriptImporter, UnsupportedFormatError
from .ingest import Chapter, ChapterIdGenerator
from .text.latex import ConversionOptions, LatexConverter, latex_to_text
from .workspace import ChapterWorkspace, WorkspaceMessage

__all__ = [
    "AcademicFormatter",
    "Chapter",
    "ChapterIdGenerator",
    "ChapterWorkspace",
    "ConversionOptions",
    "FormatAuditor",
    "FormatIssue",
    "ImportOptions",
    "ImportResult",
    "LatexConverter",
    "ManuscriptImporter",
    "StyleKind",
    "UnsupportedFormatError",
    "WorkspaceMessage",
    "format_apa",
    "format_mla",
    "generate_title_page",
    "latex_to_text",
    "validate_academic_format",
]

__version__ = "0.1.0"
