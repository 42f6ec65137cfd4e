"""LaTeX to plain-text conversion.

The converter is an ordered pipeline of small stages. Each stage is a plain
``str -> str`` function so it can be exercised on its own, but the order in
:data:`STAGES` matters: the paragraph heuristics expect emphasis wrappers and
quotes to be normalized already, the blank-line collapse must run after the
heuristics have inserted their breaks, and the generic command cleanup must
run last so it only ever sees commands nothing else recognized.
"""

from __future__ import annotations

from dataclasses import dataclass
import functools
import re
from typing import Callable, List, Tuple

Stage = Tuple[str, Callable[[str], str]]

# One brace argument, allowing a single level of nested braces.
ARGUMENT = r"\{((?:[^{}]|\{[^{}]*\})*)\}"

QUOTES = {
    "``": '"',
    "''": '"',
    "`": "'",
    "“": '"',
    "”": '"',
    "„": '"',
    "‘": "'",
    "’": "'",
}

TRANSITION_PHRASES = (
    "However",
    "Therefore",
    "Furthermore",
    "Moreover",
    "Additionally",
    "In contrast",
    "Meanwhile",
    "Subsequently",
    "Consequently",
    "Nevertheless",
    "Then",
    "Next",
    "Later",
    "Finally",
    "Suddenly",
    "But",
    "And then",
    "After that",
    "Soon",
    "Eventually",
    "At that moment",
    "The next day",
    "The following morning",
    "Years later",
    "Hours passed",
    "Back at",
    "Elsewhere",
    "At the same time",
)

_COMMENT_RE = re.compile(r"(?<!\\)((?:\\\\)*)%.*$", re.MULTILINE)
_PREAMBLE_RE = re.compile(r"\\(?:documentclass|usepackage)(?:\[[^\]]*\])?\{[^}]*\}")
_DOCUMENT_RE = re.compile(r"\\(?:begin|end)\{document\}")
_EMPHASIS_RE = re.compile(r"\\(?:textbf|textit|emph|underline)\{([^{}]*)\}")
_PARAGRAPH_HEADING_RE = re.compile(r"\\paragraph\*?\{[^}]*\}")
_PAR_RE = re.compile(r"\\par(?![A-Za-z])\s*")
_SENTENCE_BREAK_RE = re.compile(r"([.!?][ \t]*)\n(?=\s*[A-Z])")
_TRANSITION_RE = re.compile(
    r"([.!?])\s+("
    + "|".join(re.escape(p) for p in sorted(TRANSITION_PHRASES, key=len, reverse=True))
    + r")\s+"
)
_DIALOGUE_RE = re.compile(r'"\s+(?="[A-Z])')
_BLANK_LINES_RE = re.compile(r"\n\s*\n")
_LINE_BREAK_RE = re.compile(r"\\\\(?:\[[^\]]*\])?|\\newline(?![A-Za-z])")
_LABEL_RE = re.compile(r"\\label\{[^}]+\}")
_REF_RE = re.compile(r"\\(?:eq|page|auto)?ref\{[^}]+\}")
_CITE_RE = re.compile(r"\\cite[tp]?\*?(?:\[[^\]]*\])*\{[^}]+\}")
_LIST_DELIMITER_RE = re.compile(r"\\(?:begin|end)\{(?:itemize|enumerate|description)\}")
_ITEM_RE = re.compile(r"[ \t]*(?:\n[ \t]*)?\\item(?![A-Za-z])(?:\[([^\]]*)\])?\s*")
_FOOTNOTE_RE = re.compile(r"\\footnote" + ARGUMENT)
_COMMAND_WITH_ARGUMENT_RE = re.compile(r"\\[A-Za-z]+\*?(?:\[[^\]]*\])?(?=\{)")
_BARE_COMMAND_RE = re.compile(r"\\[A-Za-z]+\*?[ \t]*")
_BRACE_GROUP_RE = re.compile(r"(?<!\\)\{([^{}]*)\}")
_ESCAPED_CHARACTER_RE = re.compile(r"\\([%&$#_{}])")
_SPACING_COMMAND_RE = re.compile(r"\\[,;:! ]")


def _substitute_until_stable(pattern: re.Pattern[str], replacement: str, text: str) -> str:
    count = 1
    while count:
        text, count = pattern.subn(replacement, text)
    return text


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def strip_comments(text: str) -> str:
    """Remove ``%`` comments from a whole document.

    A ``%`` is escaped only after an odd run of backslashes; ``\\\\%`` is a
    line break followed by a comment.
    """

    return _COMMENT_RE.sub(r"\1", normalize_line_endings(text))


def strip_preamble(text: str) -> str:
    return _PREAMBLE_RE.sub("", text)


def strip_document_environment(text: str) -> str:
    return _DOCUMENT_RE.sub("", text)


def unwrap_emphasis(text: str) -> str:
    # Innermost wrappers go first, so nested emphasis needs several passes.
    return _substitute_until_stable(_EMPHASIS_RE, r"\1", text)


def normalize_quotes(text: str) -> str:
    for src, dst in QUOTES.items():
        text = text.replace(src, dst)
    return text


def convert_paragraph_commands(text: str) -> str:
    text = _PARAGRAPH_HEADING_RE.sub("\n\n", text)
    return _PAR_RE.sub("\n\n", text)


def break_sentences(text: str) -> str:
    """Open a paragraph where a sentence ends a source line and the next starts a new one."""

    return _SENTENCE_BREAK_RE.sub(r"\1\n\n", text)


def break_transitions(text: str) -> str:
    return _TRANSITION_RE.sub(r"\1\n\n\2 ", text)


def break_dialogue(text: str) -> str:
    return _DIALOGUE_RE.sub('"\n\n', text)


def collapse_blank_lines(text: str) -> str:
    return _BLANK_LINES_RE.sub("\n\n", text)


def convert_line_breaks(text: str) -> str:
    return _LINE_BREAK_RE.sub("\n", text)


def convert_references(text: str, *, ref_placeholder: str = "[REF]", cite_placeholder: str = "[CITE]") -> str:
    text = _LABEL_RE.sub("", text)
    text = _REF_RE.sub(lambda _match: ref_placeholder, text)
    return _CITE_RE.sub(lambda _match: cite_placeholder, text)


def convert_lists(text: str) -> str:
    def item(match: re.Match[str]) -> str:
        label = match.group(1)
        return f"\n• {label.strip()} " if label else "\n• "

    text = _LIST_DELIMITER_RE.sub("\n\n", text)
    return _ITEM_RE.sub(item, text)


def convert_footnotes(text: str) -> str:
    return _FOOTNOTE_RE.sub(r" (\1)", text)


def strip_commands(text: str) -> str:
    """Remove whatever commands are left and unwrap their brace arguments."""

    text = _COMMAND_WITH_ARGUMENT_RE.sub("", text)
    text = _BARE_COMMAND_RE.sub(" ", text)
    text = _SPACING_COMMAND_RE.sub(" ", text)
    text = _substitute_until_stable(_BRACE_GROUP_RE, r"\1", text)
    text = text.replace("~", " ")
    return _ESCAPED_CHARACTER_RE.sub(r"\1", text)


def collapse_whitespace(text: str) -> str:
    text = normalize_line_endings(text)
    text = re.sub(r"[\t \f\v\u00a0]+", " ", text)
    text = re.sub(r" ?\n ?", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


HEURISTIC_STAGES: Tuple[Stage, ...] = (
    ("break_sentences", break_sentences),
    ("break_transitions", break_transitions),
    ("break_dialogue", break_dialogue),
)

STAGES: Tuple[Stage, ...] = (
    ("strip_comments", strip_comments),
    ("strip_preamble", strip_preamble),
    ("strip_document_environment", strip_document_environment),
    ("unwrap_emphasis", unwrap_emphasis),
    ("normalize_quotes", normalize_quotes),
    ("convert_paragraph_commands", convert_paragraph_commands),
    *HEURISTIC_STAGES,
    ("collapse_blank_lines", collapse_blank_lines),
    ("convert_line_breaks", convert_line_breaks),
    ("convert_references", convert_references),
    ("convert_lists", convert_lists),
    ("convert_footnotes", convert_footnotes),
    ("strip_commands", strip_commands),
    ("collapse_whitespace", collapse_whitespace),
)


@dataclass
class ConversionOptions:
    """Configuration for :class:`LatexConverter`."""

    ref_placeholder: str = "[REF]"
    cite_placeholder: str = "[CITE]"
    paragraph_heuristics: bool = True

    def __post_init__(self) -> None:
        for name in ("ref_placeholder", "cite_placeholder"):
            if "\\" in getattr(self, name):
                raise ValueError(f"{name} must not contain a backslash")


class LatexConverter:
    """Turn a fragment of LaTeX source into plain text."""

    def __init__(self, options: ConversionOptions | None = None) -> None:
        self.options = options or ConversionOptions()

    @property
    def stages(self) -> List[Stage]:
        heuristic_names = {name for name, _ in HEURISTIC_STAGES}
        stages: List[Stage] = []
        for name, func in STAGES:
            if name in heuristic_names and not self.options.paragraph_heuristics:
                continue
            if name == "convert_references":
                func = functools.partial(
                    convert_references,
                    ref_placeholder=self.options.ref_placeholder,
                    cite_placeholder=self.options.cite_placeholder,
                )
            stages.append((name, func))
        return stages

    def convert(self, text: str) -> str:
        for _name, func in self.stages:
            text = func(text)
        return text


def latex_to_text(text: str) -> str:
    """Convert *text* with the default options."""

    return LatexConverter().convert(text)


__all__ = [
    "ConversionOptions",
    "HEURISTIC_STAGES",
    "LatexConverter",
    "STAGES",
    "TRANSITION_PHRASES",
    "break_dialogue",
    "break_sentences",
    "break_transitions",
    "collapse_blank_lines",
    "collapse_whitespace",
    "convert_footnotes",
    "convert_line_breaks",
    "convert_lists",
    "convert_paragraph_commands",
    "convert_references",
    "latex_to_text",
    "normalize_quotes",
    "strip_commands",
    "strip_comments",
    "strip_document_environment",
    "strip_preamble",
    "unwrap_emphasis",
]
