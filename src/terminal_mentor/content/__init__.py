"""Content catalog for the mentor shell."""

from __future__ import annotations

from .models import GlossaryEntry, Lab, QuizQuestion, Resource, Topic
from .store import ContentError, ContentStore, load_store, normalize_term

__all__ = [
    "ContentError",
    "ContentStore",
    "GlossaryEntry",
    "Lab",
    "QuizQuestion",
    "Resource",
    "Topic",
    "load_store",
    "normalize_term",
]
