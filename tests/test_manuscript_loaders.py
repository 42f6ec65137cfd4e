from __future__ import annotations

import pytest
from ebooklib import epub

from manuscript_studio.ingest.epub_loader import html_to_text, toc_links
from manuscript_studio.ingest.pdf_loader import HeadingRules, join_wrapped_lines, repeated_edge_lines


def test_html_to_text_keeps_paragraphs_and_lists():
    markup = (
        "<html><head><title>Ignored</title></head><body>"
        "<h2>Part One</h2><p>A wrapped\nline &amp; more.</p>"
        "<ul><li>First</li><li>Second</li></ul></body></html>"
    )
    assert html_to_text(markup) == "Part One\n\nA wrapped line & more.\n\n• First\n• Second"


def test_toc_links_flattens_sections():
    toc = [
        epub.Link("intro.xhtml", "Intro", "intro"),
        (epub.Section("Part I", href="part1.xhtml"), [epub.Link("ch1.xhtml#top", "One", "one")]),
        (epub.Section("Appendices"), [epub.Link("app.xhtml", "Appendix", "app")]),
    ]
    assert list(toc_links(toc)) == [
        ("Intro", "intro.xhtml"),
        ("Part I", "part1.xhtml"),
        ("One", "ch1.xhtml#top"),
        ("Appendix", "app.xhtml"),
    ]


def test_heading_rules():
    rules = HeadingRules(patterns=[r"^Prologue$"])
    assert rules.matches("CHAPTER ONE")
    assert rules.matches("Chapter 3: The Return")
    assert rules.matches("IV. Results")
    assert rules.matches("Prologue")
    assert not rules.matches("An ordinary sentence.")
    assert not rules.matches("PART")
    with pytest.raises(ValueError):
        HeadingRules(min_length=0)


def test_running_heads_are_detected():
    pages = ["My Thesis\nText one.\n1", "My Thesis\nText two.\n2", "My Thesis\nText three.\n3"]
    assert repeated_edge_lines(pages) == {"My Thesis"}
    assert repeated_edge_lines(pages[:1]) == set()


def test_wrapped_lines_are_rejoined():
    lines = ["The experi-", "ment worked.", "Then it", "stopped."]
    assert join_wrapped_lines(lines) == "The experiment worked.\n\nThen it stopped."
