from __future__ import annotations

import pytest

from manuscript_studio.text.latex import (
    ConversionOptions,
    LatexConverter,
    break_dialogue,
    break_sentences,
    break_transitions,
    latex_to_text,
    strip_commands,
    strip_comments,
    unwrap_emphasis,
)


def test_comments_are_removed_but_escaped_percent_survives():
    assert strip_comments("keep % drop\n50\\% stays") == "keep \n50\\% stays"


def test_comment_after_a_line_break_command_is_removed():
    assert strip_comments("First line\\\\% hidden remark\nSecond") == "First line\\\\\nSecond"
    assert strip_comments("Odd run \\\\\\% stays") == "Odd run \\\\\\% stays"

    text = latex_to_text("First line\\\\% hidden remark\nSecond")
    assert "hidden" not in text
    assert text == "First line\n\nSecond"


def test_nested_emphasis_is_fully_unwrapped():
    assert unwrap_emphasis(r"\textbf{\emph{x}} and \underline{y}") == "x and y"


def test_document_wrapper_and_preamble_are_removed():
    source = (
        "\\documentclass{article}\n\\usepackage[utf8]{inputenc}\n"
        "\\begin{document}\nHello \\textbf{bold} world.\n\\end{document}"
    )
    assert latex_to_text(source) == "Hello bold world."


def test_footnotes_become_parentheticals():
    assert latex_to_text("Text\\footnote{A note} here.") == "Text (A note) here."


def test_references_and_citations_use_placeholders():
    assert latex_to_text("See Figure~\\ref{fig:a} and \\cite{knuth}.") == "See Figure [REF] and [CITE]."
    assert latex_to_text("Intro\\label{sec:intro} text") == "Intro text"


def test_custom_placeholders():
    converter = LatexConverter(ConversionOptions(ref_placeholder="(ref)", cite_placeholder="(cite)"))
    assert converter.convert("see \\eqref{e1} and \\citep[p.~4]{k}") == "see (ref) and (cite)"


def test_placeholders_may_not_contain_commands():
    with pytest.raises(ValueError):
        ConversionOptions(ref_placeholder="\\ref")


def test_lists_become_bullets():
    source = "\\begin{itemize}\n\\item One\n\\item Two\n\\end{itemize}"
    assert latex_to_text(source) == "• One\n• Two"


def test_sentence_breaks_need_a_capital_on_the_next_line():
    assert break_sentences("First line.\nSecond line.") == "First line.\n\nSecond line."
    assert break_sentences("Apples, pears, etc.\nand more") == "Apples, pears, etc.\nand more"


def test_transition_phrases_open_paragraphs():
    assert break_transitions("It rained. However the game went on.") == (
        "It rained.\n\nHowever the game went on."
    )


def test_dialogue_exchanges_are_split():
    assert break_dialogue('"Hi." "Hello."') == '"Hi."\n\n"Hello."'


def test_escaped_characters_become_literal():
    assert strip_commands(r"\& \$5 \#1 \_x \{y\}") == "& $5 #1 _x {y}"


def test_output_has_no_commands_or_runs_of_blank_lines():
    source = r"""\begin{document}
\noindent Some \emph{styled} text with 50\% growth.\\
Next line~here.



\vspace{2em}
\begin{enumerate}\item[a)] First\end{enumerate}
\end{document}"""
    text = latex_to_text(source)
    assert "\\" not in text
    assert "\n\n\n" not in text
    assert "50% growth" in text
    assert "• a) First" in text


def test_heuristics_can_be_disabled():
    plain = LatexConverter(ConversionOptions(paragraph_heuristics=False))
    assert "break_sentences" not in [name for name, _ in plain.stages]
    assert plain.convert("One.\nTwo.") == "One.\nTwo."
    assert latex_to_text("One.\nTwo.") == "One.\n\nTwo."
