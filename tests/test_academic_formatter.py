from __future__ import annotations

import pytest

from manuscript_studio.academic import AcademicFormatter, StyleKind, format_apa, format_mla
from manuscript_studio.text.paragraphs import SENTINEL_PREFIX

CENTRE = " " * 32

DOCUMENT = (
    "# Introduction\n\n"
    "Prior work (Smith,2001) framed the problem. Later studies disagreed (Jones 2003 p 4).\n\n"
    "> A quoted passage that runs long.\n\n"
    "Background Notes\n\n"
    "Closing thoughts follow here.\n\n"
    "References\n"
    "Smith, J. (2001). Theory.\n"
    "Jones, K. (2003). Practice."
)


def test_empty_input_formats_to_empty_output():
    assert format_apa("") == ""
    assert format_mla("   \n") == ""
    assert format_apa(SENTINEL_PREFIX) == ""


def test_apa_citations():
    formatter = AcademicFormatter(StyleKind.APA)
    assert formatter.format_citations("The (Smith,2001) theory") == "The (Smith, 2001) theory"
    assert formatter.format_citations("(Smith 2001 p 12)") == "(Smith, 2001, p. 12)"
    assert formatter.format_citations("(Smith, 2001, p 12-15)") == "(Smith, 2001, pp. 12-15)"


def test_mla_citations():
    formatter = AcademicFormatter("mla")
    assert formatter.format_citations("(Smith, 2001, p. 12)") == "(Smith 12)"
    assert formatter.format_citations("(Smith, 2001)") == "(Smith, 2001)"


def test_paragraphs_get_first_line_indent():
    assert AcademicFormatter().format_paragraphs("First para.\n\nSecond para.") == (
        "    First para.\n\n    Second para."
    )


def test_top_level_headings_are_centred():
    assert AcademicFormatter().format_headings("# Methods\n## Sample") == CENTRE + "Methods\n\nSample"


@pytest.mark.parametrize(
    "source",
    ["## Data and methods\n\nWe sampled people.", "## Data and methods\nWe sampled people."],
)
def test_deeper_headings_stay_flush_and_apart_from_body(source):
    formatted = format_apa(source)

    assert formatted == "Data and methods\n\n    We sampled people."
    assert format_apa(formatted) == formatted


@pytest.mark.parametrize("style", list(StyleKind))
def test_heading_levels_through_the_whole_pipeline(style):
    text = (
        "# Method\n"
        "## Participants and setting\n"
        "We asked people.\n"
        "### Coding of answers\n"
        "Two raters coded them."
    )
    formatter = AcademicFormatter(style)
    formatted = formatter.format_document(text)

    assert formatted == (
        CENTRE + "Method\n\n"
        "Participants and setting\n\n"
        "    We asked people.\n\n"
        "Coding of answers\n\n"
        "    Two raters coded them."
    )
    assert formatter.format_document(formatted) == formatted


def test_block_quotes_are_indented():
    assert AcademicFormatter().format_quotes("> Quoted line") == " " * 8 + "Quoted line"


def test_references_are_sorted():
    text = "Body text here.\n\nReferences\nZeta, A. (2001). Title.\nAlpha, B. (1999). Other."
    assert AcademicFormatter().format_references(text) == (
        "Body text here.\n\nReferences\n\nAlpha, B. (1999). Other.\nZeta, A. (2001). Title."
    )


def test_reference_continuations_get_hanging_indent():
    text = "References\nZeta, A. (2001). A long\n    continued title.\nAlpha, B. (1999). Other."
    assert AcademicFormatter().format_references(text) == (
        "References\n\nAlpha, B. (1999). Other.\nZeta, A. (2001). A long\n    continued title."
    )


def test_reference_list_ends_at_a_capitalized_heading():
    text = "References\nZeta, A. (2001). Title.\nAlpha, B. (1999). Other.\nAppendix Notes\nExtra material."
    formatter = AcademicFormatter()

    assert formatter.format_references(text) == (
        "References\n\nAlpha, B. (1999). Other.\nZeta, A. (2001). Title.\n\nAppendix Notes\nExtra material."
    )
    formatted = formatter.format_document(text)
    assert formatted == (
        "References\n\nAlpha, B. (1999). Other.\nZeta, A. (2001). Title.\n\nAppendix Notes\n\n    Extra material."
    )
    assert formatter.format_document(formatted) == formatted


def test_full_document():
    formatted = format_apa(DOCUMENT)

    assert formatted == (
        CENTRE + "Introduction\n\n"
        "    Prior work (Smith, 2001) framed the problem. Later studies disagreed (Jones, 2003, p. 4).\n\n"
        + " " * 8 + "A quoted passage that runs long.\n\n"
        "Background Notes\n\n"
        "    Closing thoughts follow here.\n\n"
        "References\n\n"
        "Jones, K. (2003). Practice.\n"
        "Smith, J. (2001). Theory."
    )


@pytest.mark.parametrize("style", list(StyleKind))
def test_formatting_is_idempotent(style):
    formatter = AcademicFormatter(style)
    once = formatter.format_document(DOCUMENT)
    assert formatter.format_document(once) == once


def _words(text):
    return {word.strip("#>(),.") for word in text.split()} - {""}


def test_formatting_adds_no_words():
    assert _words(format_mla(DOCUMENT)) <= _words(DOCUMENT)
    assert _words(format_apa(DOCUMENT)) <= _words(DOCUMENT)


def test_unknown_style_is_rejected():
    with pytest.raises(ValueError):
        AcademicFormatter("chicago")
