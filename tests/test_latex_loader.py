from __future__ import annotations

import random
import re

from manuscript_studio.ingest import DEFAULT_TITLE, ChapterIdGenerator
from manuscript_studio.ingest.latex_loader import LatexLoader
from manuscript_studio.text.paragraphs import SENTINEL_PREFIX

ID_RE = re.compile(r"^chapter_\d+_\d+_[0-9a-z]{9}$")


def test_splits_on_chapter_commands(id_generator):
    loader = LatexLoader(id_generator=id_generator)
    chapters = loader.load_text(r"\chapter{Intro}Hello world. \textbf{Bold} text.\chapter{Two}More.")

    assert [chapter.title for chapter in chapters] == ["Intro", "Two"]
    assert chapters[0].content == "Hello world. Bold text."
    assert chapters[1].content == "More."


def test_source_without_sections_is_one_chapter(id_generator):
    chapters = LatexLoader(id_generator=id_generator).load_text("Just a paragraph of text.")

    assert len(chapters) == 1
    assert chapters[0].title == DEFAULT_TITLE
    assert chapters[0].content == "Just a paragraph of text."


def test_text_before_first_section_is_discarded(id_generator):
    source = "\\documentclass{book}\nPreface text\n\\chapter{A}Body"
    chapters = LatexLoader(id_generator=id_generator).load_text(source)

    assert [chapter.title for chapter in chapters] == ["A"]
    assert "Preface" not in chapters[0].content


def test_section_variants_and_title_markup(id_generator):
    source = (
        "\\part{Overview}One.\n"
        "\\section*{Starred}Two.\n"
        "\\chapter[Short]{Long Title}Three.\n"
        "\\chapter{The \\emph{Big} Idea}Four."
    )
    chapters = LatexLoader(id_generator=id_generator).load_text(source)

    assert [chapter.title for chapter in chapters] == ["Overview", "Starred", "Long Title", "The Big Idea"]


def test_commented_out_sections_are_ignored(id_generator):
    chapters = LatexLoader(id_generator=id_generator).load_text("% \\chapter{Hidden}\n\\chapter{Shown}Text")

    assert [chapter.title for chapter in chapters] == ["Shown"]


def test_dense_chapters_are_flagged(id_generator):
    body = " ".join(["word"] * 250)
    chapters = LatexLoader(id_generator=id_generator).load_text("\\chapter{Dense}" + body)

    assert chapters[0].content.startswith(SENTINEL_PREFIX)
    assert chapters[0].needs_paragraph_analysis
    assert chapters[0].clean_content == body


def test_ids_are_unique_and_well_formed():
    loader = LatexLoader()
    chapters = loader.load_text("".join(f"\\section{{S{n}}}Text {n}." for n in range(50)))

    ids = [chapter.id for chapter in chapters]
    assert len(set(ids)) == 50
    assert all(ID_RE.match(chapter_id) for chapter_id in ids)


def test_reloading_identical_source_gives_fresh_ids():
    source = "\\chapter{One}First.\\chapter{Two}Second."

    first = LatexLoader().load_text(source)
    second = LatexLoader().load_text(source)
    again = LatexLoader().load_text(source)

    ids = [chapter.id for chapter in first + second + again]
    assert len(set(ids)) == len(ids) == 6
    assert [chapter.title for chapter in second] == ["One", "Two"]


def test_generators_with_different_starts_do_not_collide():
    def make(start):
        return ChapterIdGenerator(start=start, clock=lambda: 1700000000.0, rng=random.Random(7))

    source = "".join(f"\\section{{S{n}}}Text {n}." for n in range(20))
    first = LatexLoader(id_generator=make(1)).load_text(source)
    second = LatexLoader(id_generator=make(1000)).load_text(source)

    assert not {chapter.id for chapter in first} & {chapter.id for chapter in second}


def test_generators_with_different_seeds_do_not_collide():
    def make(seed):
        return ChapterIdGenerator(clock=lambda: 1700000000.0, rng=random.Random(seed))

    first, second = make(1), make(2)
    assert not {first.next_id() for _ in range(20)} & {second.next_id() for _ in range(20)}


def test_seeded_generators_repeat_the_same_ids():
    def make():
        return ChapterIdGenerator(clock=lambda: 1.5, rng=random.Random(42))

    first, second = make(), make()
    assert [first.next_id() for _ in range(3)] == [second() for _ in range(3)]
    assert first.next_id().startswith("chapter_1500_4_")


def test_load_reads_files(tmp_path, id_generator):
    path = tmp_path / "paper.tex"
    path.write_text("\\section{Method}We measured things.", encoding="utf-8")

    chapters = LatexLoader(id_generator=id_generator).load(str(path))

    assert chapters[0].title == "Method"
    assert chapters[0].content == "We measured things."
