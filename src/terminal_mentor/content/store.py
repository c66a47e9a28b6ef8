"""Content catalog loading and the read-only query interface.

The catalog is a JSON document bundled with the package (``catalog.json``)
or supplied through configuration. Records are validated once at load time;
afterwards the store only answers lookups, so the shell never needs to
handle malformed content mid-session.
"""

from __future__ import annotations

import json
import re
import unicodedata
from collections.abc import Iterable, Mapping, Sequence
from importlib import resources
from pathlib import Path
from typing import Any

from .models import GlossaryEntry, Lab, QuizQuestion, Resource, Topic

__all__ = [
    "CATALOG_PACKAGE",
    "CATALOG_FILENAME",
    "ContentError",
    "ContentStore",
    "load_store",
    "normalize_term",
]

CATALOG_PACKAGE = "terminal_mentor.content"
CATALOG_FILENAME = "catalog.json"

_WORD_RE = re.compile(r"[a-z0-9]+")


class ContentError(ValueError):
    """Raised when a catalog document is missing data or inconsistent."""


def normalize_term(value: str) -> str:
    """Lower-case, strip accents and collapse whitespace for lookups."""

    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(stripped.lower().split())


class ContentStore:
    """Immutable catalog of topics, glossary and study prompts."""

    def __init__(
        self,
        *,
        topics: Sequence[Topic],
        glossary: Sequence[GlossaryEntry] = (),
        study_roadmap: Sequence[str] = (),
        daily_suggestions: Sequence[str] = (),
        motivational_tips: Sequence[str] = (),
    ) -> None:
        self.topics: tuple[Topic, ...] = tuple(topics)
        self.glossary: tuple[GlossaryEntry, ...] = tuple(glossary)
        self.study_roadmap: tuple[str, ...] = tuple(study_roadmap)
        self.daily_suggestions: tuple[str, ...] = tuple(daily_suggestions)
        self.motivational_tips: tuple[str, ...] = tuple(motivational_tips)
        self._topic_index = _index_topics(self.topics)
        self._glossary_index = _index_glossary(self.glossary)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ContentStore":
        """Build a store from a decoded catalog document."""

        if not isinstance(raw, Mapping):
            raise ContentError("Catalog root must be a JSON object.")
        topics = [
            _topic_from_dict(item, position)
            for position, item in enumerate(_list_field(raw, "topics", "catalog"))
        ]
        if not topics:
            raise ContentError("Catalog must define at least one topic.")
        glossary = [
            _glossary_from_dict(item)
            for item in _list_field(raw, "glossary", "catalog", required=False)
        ]
        return cls(
            topics=topics,
            glossary=glossary,
            study_roadmap=_strings(raw, "roadmap", "catalog"),
            daily_suggestions=_strings(raw, "daily_suggestions", "catalog"),
            motivational_tips=_strings(raw, "motivational_tips", "catalog"),
        )

    def find_topic_by_alias(self, alias: str) -> Topic | None:
        """Return the topic whose id, title or alias equals ``alias``."""

        return self._topic_index.get(normalize_term(alias))

    def search_topics(self, term: str) -> list[Topic]:
        """Return topics mentioning ``term`` anywhere, in catalog order."""

        needle = normalize_term(term)
        if not needle:
            return []
        return [
            topic
            for topic in self.topics
            if any(needle in field for field in _searchable_fields(topic))
        ]

    def match_question_to_topic(self, free_text: str) -> Topic | None:
        """Pick the topic whose vocabulary best overlaps ``free_text``.

        Single-word vocabulary must match a whole word; phrases match as
        substrings. Ties go to the topic listed first.
        """

        text = normalize_term(free_text)
        words = set(_WORD_RE.findall(text))
        best: Topic | None = None
        best_score = 0
        for topic in self.topics:
            score = 0
            for candidate in _vocabulary(topic):
                if _WORD_RE.fullmatch(candidate):
                    score += candidate in words
                else:
                    score += candidate in text
            if score > best_score:
                best, best_score = topic, score
        return best

    def all_quiz_questions(self) -> list[QuizQuestion]:
        return [question for topic in self.topics for question in topic.quiz]

    def lookup_glossary(self, term: str) -> GlossaryEntry | None:
        return self._glossary_index.get(normalize_term(term))


def load_store(path: Path | None = None) -> ContentStore:
    """Load the catalog at ``path`` or the one bundled with the package."""

    if path is None:
        resource = resources.files(CATALOG_PACKAGE).joinpath(CATALOG_FILENAME)
        text = resource.read_text(encoding="utf-8")
        origin = f"bundled {CATALOG_FILENAME}"
    else:
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except FileNotFoundError as exc:
            raise ContentError(f"Catalog file not found: {path}") from exc
        origin = str(path)
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ContentError(f"Invalid JSON in {origin}: {exc}") from exc
    return ContentStore.from_mapping(raw)


def _index_topics(topics: Iterable[Topic]) -> dict[str, Topic]:
    index: dict[str, Topic] = {}
    seen_ids: set[str] = set()
    for topic in topics:
        if topic.id in seen_ids:
            raise ContentError(f"Duplicate topic id: {topic.id}")
        seen_ids.add(topic.id)
        for key in {normalize_term(topic.id), normalize_term(topic.title)} | {
            normalize_term(alias) for alias in topic.aliases
        }:
            owner = index.get(key)
            if owner is not None and owner.id != topic.id:
                raise ContentError(
                    f"Alias '{key}' is shared by topics '{owner.id}' and "
                    f"'{topic.id}'."
                )
            index[key] = topic
    return index


def _index_glossary(entries: Iterable[GlossaryEntry]) -> dict[str, GlossaryEntry]:
    index: dict[str, GlossaryEntry] = {}
    for entry in entries:
        for key in (entry.term, *entry.aliases):
            normalized = normalize_term(key)
            if normalized in index:
                raise ContentError(f"Duplicate glossary term: {key}")
            index[normalized] = entry
    return index


def _searchable_fields(topic: Topic) -> Iterable[str]:
    yield normalize_term(topic.id)
    yield normalize_term(topic.title)
    yield normalize_term(topic.summary)
    for value in (*topic.aliases, *topic.keywords):
        yield normalize_term(value)


def _vocabulary(topic: Topic) -> set[str]:
    terms = {topic.id, *topic.aliases, *topic.keywords}
    return {normalize_term(term) for term in terms if term.strip()}


def _topic_from_dict(raw: Any, position: int) -> Topic:
    if not isinstance(raw, Mapping):
        raise ContentError(f"Topic #{position} must be an object.")
    topic_id = _text(raw, "id", f"topic #{position}")
    where = f"topic '{topic_id}'"
    return Topic(
        id=topic_id,
        title=_text(raw, "title", where),
        summary=_text(raw, "summary", where),
        fundamentals=_strings(raw, "fundamentals", where),
        advanced=_strings(raw, "advanced", where),
        quick_wins=_strings(raw, "quick_wins", where),
        warning_signs=_strings(raw, "warning_signs", where),
        study_path=_strings(raw, "study_path", where),
        aliases=_strings(raw, "aliases", where, required=False),
        keywords=_strings(raw, "keywords", where, required=False),
        resources=tuple(
            Resource(
                title=_text(item, "title", f"{where} resource"),
                url=_text(item, "url", f"{where} resource"),
                description=_text(item, "description", f"{where} resource"),
            )
            for item in _list_field(raw, "resources", where, required=False)
        ),
        labs=tuple(
            _lab_from_dict(item, where)
            for item in _list_field(raw, "labs", where, required=False)
        ),
        quiz=tuple(
            _question_from_dict(item, topic_id)
            for item in _list_field(raw, "quiz", where, required=False)
        ),
    )


def _lab_from_dict(raw: Any, where: str) -> Lab:
    where = f"{where} lab"
    return Lab(
        title=_text(raw, "title", where),
        difficulty=_text(raw, "difficulty", where),
        time=_text(raw, "time", where),
        goal=_text(raw, "goal", where),
        steps=_strings(raw, "steps", where),
        checklist=_strings(raw, "checklist", where),
    )


def _question_from_dict(raw: Any, topic_id: str) -> QuizQuestion:
    where = f"topic '{topic_id}' quiz question"
    choices = _strings(raw, "choices", where, required=False)
    return QuizQuestion(
        prompt=_text(raw, "prompt", where),
        answer=_text(raw, "answer", where),
        explanation=_text(raw, "explanation", where),
        choices=choices or None,
        topic_id=topic_id,
    )


def _glossary_from_dict(raw: Any) -> GlossaryEntry:
    term = _text(raw, "term", "glossary entry")
    where = f"glossary entry '{term}'"
    return GlossaryEntry(
        term=term,
        definition=_text(raw, "definition", where),
        context=_text(raw, "context", where),
        aliases=_strings(raw, "aliases", where, required=False),
    )


def _text(raw: Any, key: str, where: str) -> str:
    if not isinstance(raw, Mapping):
        raise ContentError(f"Expected an object for {where}.")
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ContentError(f"{where} is missing '{key}'.")
    return value.strip()


def _list_field(
    raw: Mapping[str, Any], key: str, where: str, *, required: bool = True
) -> list[Any]:
    value = raw.get(key)
    if value is None and not required:
        return []
    if not isinstance(value, list):
        raise ContentError(f"{where} field '{key}' must be a list.")
    return value


def _strings(
    raw: Mapping[str, Any], key: str, where: str, *, required: bool = True
) -> tuple[str, ...]:
    items = _list_field(raw, key, where, required=required)
    for item in items:
        if not isinstance(item, str):
            raise ContentError(f"{where} field '{key}' must hold only strings.")
    values = tuple(item.strip() for item in items if item.strip())
    if required and not values:
        raise ContentError(f"{where} field '{key}' must not be empty.")
    return values
