from __future__ import annotations

from manuscript_studio.text.paragraphs import (
    SENTINEL,
    SENTINEL_PREFIX,
    mark_dense_text,
    needs_paragraph_analysis,
    strip_sentinel,
    suggest_paragraph_breaks,
    text_stats,
)


def _words(count: int) -> str:
    return " ".join(["word"] * count)


def test_density_thresholds():
    assert needs_paragraph_analysis(_words(201))
    assert not needs_paragraph_analysis(_words(200))
    assert not needs_paragraph_analysis(_words(100) + "\n\n" + _words(100) + "\n\n" + _words(1))


def test_marking_is_idempotent():
    once = mark_dense_text(_words(300))
    assert once.startswith(SENTINEL_PREFIX)
    assert mark_dense_text(once) == once
    assert mark_dense_text("Short text.") == "Short text."


def test_strip_sentinel():
    assert strip_sentinel(SENTINEL_PREFIX + "Body") == "Body"
    assert strip_sentinel(SENTINEL) == ""
    assert strip_sentinel("Body") == "Body"


def test_suggested_breaks_clear_the_flag_when_they_succeed():
    dense = " ".join(["It rained all day long. However the game went on."] * 30)
    result = suggest_paragraph_breaks(SENTINEL_PREFIX + dense)

    assert not result.startswith(SENTINEL)
    assert result.count("\n\n") >= 2
    assert result.startswith("It rained all day long.\n\nHowever the game went on.")


def test_suggested_breaks_keep_the_flag_when_nothing_helps():
    assert suggest_paragraph_breaks(_words(250)).startswith(SENTINEL_PREFIX)


def test_stats_ignore_the_sentinel():
    stats = text_stats(SENTINEL_PREFIX + "Two words")
    assert (stats.words, stats.characters) == (2, 9)
