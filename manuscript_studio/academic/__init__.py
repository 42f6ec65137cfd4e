"""Academic style formatting and auditing."""

from .auditor import FormatAuditor, FormatIssue, validate_academic_format
from .formatter import AcademicFormatter, format_apa, format_mla
from .styles import StyleKind, StyleProfile, default_style, get_profile
from .title_page import generate_title_page

__all__ = [
    "AcademicFormatter",
    "FormatAuditor",
    "FormatIssue",
    "StyleKind",
    "StyleProfile",
    "default_style",
    "format_apa",
    "format_mla",
    "generate_title_page",
    "get_profile",
    "validate_academic_format",
]
