"""Command line interface for Manuscript Studio."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import List, Optional

from . import __version__
from .academic import AcademicFormatter, StyleKind, default_style, generate_title_page, validate_academic_format
from .importer import ImportOptions, ManuscriptImporter, chapter_manifest, export_chapters
from .text.paragraphs import strip_sentinel, suggest_paragraph_breaks

STYLE_CHOICES = [kind.value for kind in StyleKind]

# Exit status of ``audit`` when it reports problems.
ISSUES_FOUND = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="manuscript",
        description="Convert LaTeX manuscripts to plain-text chapters and apply APA/MLA layout.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print warnings and errors")
    parser.add_argument("--version", action="version", version=f"manuscript {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser("import", help="Split manuscripts into plain-text chapters")
    import_cmd.add_argument("inputs", nargs="+", type=Path, help="LaTeX, text, EPUB or PDF files")
    import_cmd.add_argument("--out", dest="output_dir", type=Path, help="Write one text file per chapter here")
    import_cmd.add_argument("--json", action="store_true", help="Print the chapters as JSON")
    import_cmd.add_argument(
        "--no-heuristics",
        dest="paragraph_heuristics",
        action="store_false",
        help="Skip the paragraph-break heuristics during conversion",
    )

    format_cmd = commands.add_parser("format", help="Apply an academic layout to a text file")
    format_cmd.add_argument("input_path", type=Path, help="Plain-text chapter")
    format_cmd.add_argument(
        "--style",
        choices=STYLE_CHOICES + ["none"],
        help="Academic style, or 'none' to only suggest paragraph breaks (default: $MANUSCRIPT_STYLE or apa)",
    )
    format_cmd.add_argument("--out", dest="output_path", type=Path, help="Destination file (default: stdout)")

    audit_cmd = commands.add_parser("audit", help="Report layout problems without changing the file")
    audit_cmd.add_argument("input_path", type=Path, help="Plain-text chapter")
    audit_cmd.add_argument("--style", choices=STYLE_CHOICES, help="Academic style to check against")

    title_cmd = commands.add_parser("title-page", help="Print a plain-text title page")
    title_cmd.add_argument("--title", required=True)
    title_cmd.add_argument("--author", required=True)
    title_cmd.add_argument("--institution", default="")
    title_cmd.add_argument("--style", choices=STYLE_CHOICES, help="Academic style of the title page")
    return parser


def configure_logging(verbose: bool, quiet: bool) -> None:
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def resolve_style(value: Optional[str]) -> StyleKind:
    return StyleKind.parse(value) if value else default_style()


def run_import(args: argparse.Namespace) -> int:
    importer = ManuscriptImporter(ImportOptions(paragraph_heuristics=args.paragraph_heuristics))
    result = importer.import_paths(args.inputs)
    if args.output_dir:
        export_chapters(result.chapters, args.output_dir)
    if args.json:
        print(json.dumps(chapter_manifest(result.chapters), indent=2))
    else:
        for number, chapter in enumerate(result.chapters, start=1):
            marker = " (needs paragraph review)" if chapter.needs_paragraph_analysis else ""
            print(f"{number:2d}. {chapter.title}{marker}")
    logging.getLogger(__name__).info(
        "Imported %d chapters in %.2fs", len(result.chapters), result.elapsed_seconds
    )
    return 0


def run_format(args: argparse.Namespace) -> int:
    text = args.input_path.read_text(encoding="utf-8")
    if args.style == "none":
        formatted = strip_sentinel(suggest_paragraph_breaks(text))
    else:
        formatted = AcademicFormatter(resolve_style(args.style)).format_document(text)
    if args.output_path:
        args.output_path.write_text(formatted + "\n", encoding="utf-8")
        logging.getLogger(__name__).info("Wrote %s", args.output_path)
    else:
        sys.stdout.write(formatted + "\n")
    return 0


def run_audit(args: argparse.Namespace) -> int:
    style = resolve_style(args.style)
    issues = validate_academic_format(args.input_path.read_text(encoding="utf-8"), style)
    if not issues:
        print(f"No {style.label} formatting issues found")
        return 0
    for issue in issues:
        print(f"- {issue.description}")
        if issue.suggested_fix:
            print(f"  fix: {issue.suggested_fix}")
    return ISSUES_FOUND


def run_title_page(args: argparse.Namespace) -> int:
    print(generate_title_page(args.title, args.author, args.institution, resolve_style(args.style)))
    return 0


COMMANDS = {
    "import": run_import,
    "format": run_format,
    "audit": run_audit,
    "title-page": run_title_page,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)
    try:
        return COMMANDS[args.command](args)
    except Exception as exc:
        logging.getLogger(__name__).error(str(exc))
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
