"""Plain-text title pages."""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from .styles import StyleKind, get_profile


def format_date(value: Date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def generate_title_page(
    title: str,
    author: str,
    institution: str,
    style: "StyleKind | str" = StyleKind.APA,
    date: Optional[Date] = None,
) -> str:
    """Return a title page for *title* laid out for *style*.

    APA centres every line below a few blank lines. MLA has no separate title
    page: the author block sits flush left and the title is centred beneath it.
    """

    profile = get_profile(style)
    centre = " " * profile.heading_indent
    dated = format_date(date or Date.today())
    if profile.kind is StyleKind.APA:
        lines = ["" for _ in range(5)]
        lines += [centre + title, "", "", centre + author, centre + institution, centre + dated]
    else:
        lines = [author, "Professor [Name]", "[Course]", dated, "", centre + title]
    return "\n".join(lines)


__all__ = ["format_date", "generate_title_page"]
