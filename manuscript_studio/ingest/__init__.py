"""Content ingestion helpers for Manuscript Studio."""

from __future__ import annotations

from dataclasses import dataclass
import itertools
import random
import string
import threading
import time
from typing import Callable, Optional

from ..text.paragraphs import has_sentinel, strip_sentinel

DEFAULT_TITLE = "Imported Document"

_ALPHABET = string.digits + string.ascii_lowercase


@dataclass
class Chapter:
    """A titled unit of plain text in the working manuscript."""

    id: str
    title: str
    content: str = ""

    @property
    def needs_paragraph_analysis(self) -> bool:
        return has_sentinel(self.content)

    @property
    def clean_content(self) -> str:
        return strip_sentinel(self.content)


class ChapterIdGenerator:
    """Issue chapter identifiers that never repeat within a process.

    Identifiers combine a wall-clock timestamp, a monotonic counter and a
    random suffix. Pass ``start``, ``clock`` and ``rng`` to get a reproducible
    sequence.
    """

    def __init__(
        self,
        *,
        start: int = 1,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._counter = itertools.count(start)
        self._clock = clock
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            number = next(self._counter)
            suffix = "".join(self._rng.choice(_ALPHABET) for _ in range(9))
        return f"chapter_{int(self._clock() * 1000)}_{number}_{suffix}"

    __call__ = next_id


default_id_generator = ChapterIdGenerator()


__all__ = ["Chapter", "ChapterIdGenerator", "DEFAULT_TITLE", "default_id_generator"]
