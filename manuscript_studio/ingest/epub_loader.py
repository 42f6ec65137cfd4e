"""EPUB manuscript ingestion."""

from __future__ import annotations

import html
import logging
import re
from typing import Iterable, Iterator, List, Optional, Tuple

import ebooklib
from ebooklib import epub

from . import Chapter, ChapterIdGenerator, default_id_generator
from ..text.latex import collapse_whitespace, normalize_quotes
from ..text.paragraphs import mark_dense_text

LOGGER = logging.getLogger(__name__)

_BLOCK_END_RE = re.compile(r"</(p|div|h[1-6]|blockquote|ul|ol|section)>", re.I)


def html_to_text(markup: str) -> str:
    """Reduce XHTML chapter markup to plain text, keeping paragraph breaks."""

    markup = re.sub(r"<(script|style|head)[^>]*>.*?</\1>", "", markup, flags=re.S | re.I)
    markup = re.sub(r"<br[^>]*>", "\n", markup, flags=re.I)
    markup = re.sub(r"<li[^>]*>", "\n• ", markup, flags=re.I)
    markup = _BLOCK_END_RE.sub("\n\n", markup)
    text = html.unescape(re.sub(r"<[^>]+>", " ", markup))
    text = re.sub(r"\n[ \t]*\n\s*", "\n\n", text)
    # Source line wrapping is not content.
    text = re.sub(r"(?<!\n)[ \t]*\n(?![ \t]*[\n•])[ \t]*", " ", text)
    return collapse_whitespace(normalize_quotes(text))


def _label(value) -> str:
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    return " ".join((value or "").split())


def toc_links(toc: Iterable) -> Iterator[Tuple[str, str]]:
    """Yield ``(title, href)`` for every entry of an ebooklib TOC, depth first.

    Sections arrive as ``(Section, [children])`` pairs; a section that has its
    own href is a chapter too.
    """

    for node in toc:
        if isinstance(node, tuple) and len(node) == 2 and isinstance(node[1], (list, tuple)):
            section, children = node
            yield from toc_links([section])
            yield from toc_links(children)
        elif isinstance(node, (list, tuple)):
            yield from toc_links(node)
        elif getattr(node, "href", None):
            yield _label(node.title), node.href


class EpubLoader:
    """Turn an EPUB into chapters following its table of contents."""

    def __init__(
        self,
        *,
        strip_empty: bool = True,
        id_generator: Optional[ChapterIdGenerator] = None,
    ) -> None:
        self.strip_empty = strip_empty
        self.id_generator = id_generator or default_id_generator

    def load(self, path: str) -> List[Chapter]:
        book = epub.read_epub(path)
        chapters: List[Chapter] = []
        for number, (title, item) in enumerate(self._documents(book), start=1):
            text = html_to_text(item.get_content().decode("utf-8", errors="ignore"))
            if self.strip_empty and not text:
                LOGGER.debug("Skipping empty document %s", item.get_name())
                continue
            chapters.append(
                Chapter(
                    id=self.id_generator.next_id(),
                    title=title or f"Chapter {number}",
                    content=mark_dense_text(text),
                )
            )
        return chapters

    def _documents(self, book: epub.EpubBook) -> Iterator[Tuple[str, epub.EpubItem]]:
        links = list(toc_links(book.toc))
        if not links:
            LOGGER.warning("EPUB has no table of contents; using spine order.")
            links = [
                (item.get_name(), item.get_name())
                for item in book.get_items_of_type(ebooklib.ITEM_DOCUMENT)
                if not isinstance(item, epub.EpubNav)
            ]
        seen = set()
        for title, href in links:
            href = href.split("#", 1)[0]
            item = book.get_item_with_href(href)
            if href in seen or item is None:
                continue
            seen.add(href)
            yield title, item


__all__ = ["EpubLoader", "html_to_text", "toc_links"]
