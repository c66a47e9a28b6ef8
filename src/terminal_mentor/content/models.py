"""Immutable content records served by the content store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Resource:
    """External study resource attached to a topic."""

    title: str
    url: str
    description: str


@dataclass(frozen=True)
class Lab:
    """Guided hands-on exercise."""

    title: str
    difficulty: str
    time: str
    goal: str
    steps: tuple[str, ...]
    checklist: tuple[str, ...]


@dataclass(frozen=True)
class QuizQuestion:
    """Free-answer review question; ``choices`` are display-only hints."""

    prompt: str
    answer: str
    explanation: str
    choices: tuple[str, ...] | None = None
    topic_id: str | None = None


@dataclass(frozen=True)
class Topic:
    """Study topic with its lesson profile, resources, labs and quiz bank."""

    id: str
    title: str
    summary: str
    fundamentals: tuple[str, ...]
    advanced: tuple[str, ...]
    quick_wins: tuple[str, ...]
    warning_signs: tuple[str, ...]
    study_path: tuple[str, ...]
    aliases: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    resources: tuple[Resource, ...] = ()
    labs: tuple[Lab, ...] = ()
    quiz: tuple[QuizQuestion, ...] = ()


@dataclass(frozen=True)
class GlossaryEntry:
    """Glossary definition plus a sentence of usage context."""

    term: str
    definition: str
    context: str
    aliases: tuple[str, ...] = ()
