from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from manuscript_studio.ingest import ChapterIdGenerator  # noqa: E402


@pytest.fixture
def id_generator() -> ChapterIdGenerator:
    return ChapterIdGenerator(clock=lambda: 1700000000.0, rng=random.Random(7))
