"""Command handlers for the mentor shell.

``CommandDispatcher.dispatch`` resolves a parsed command to its
``CommandKind``, runs the matching handler against the content store and
returns a ``Dispatch`` describing the output lines and any session effect
(start a quiz, reset the transcript). Handlers raise ``MentorError``
subclasses for learner mistakes; the dispatcher renders them as ordinary
output.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Mapping, Protocol, Sequence, TypeVar

from terminal_mentor.content.models import QuizQuestion, Topic
from terminal_mentor.content.store import ContentStore

from .commands import CommandKind, format_help_lines, resolve_command
from .errors import EmptyCatalogError, MentorError, NotFoundError, UsageError
from .parser import ParsedCommand
from .quiz import question_lines
from .stats import SessionStats

_T = TypeVar("_T")

TOPIC_ID_WIDTH = 12


class RandomSource(Protocol):
    def choice(self, seq: Sequence[_T]) -> _T: ...


@dataclass(frozen=True)
class Dispatch:
    """Outcome of one command."""

    kind: CommandKind
    lines: tuple[str, ...]
    start_quiz: QuizQuestion | None = None
    reset_history: bool = False
    error: str | None = None


Handler = Callable[[str, SessionStats], Dispatch]


class CommandDispatcher:
    """Route commands to handlers backed by a ``ContentStore``."""

    def __init__(
        self,
        store: ContentStore,
        *,
        rng: RandomSource | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.logger = logger or logging.getLogger(__name__)
        self._handlers: Mapping[CommandKind, Handler] = {
            CommandKind.HELP: self._help,
            CommandKind.TOPICS: self._topics,
            CommandKind.LESSON: self._lesson,
            CommandKind.RESOURCES: self._resources,
            CommandKind.LABS: self._labs,
            CommandKind.QUIZ: self._quiz,
            CommandKind.GLOSSARY: self._glossary,
            CommandKind.SEARCH: self._search,
            CommandKind.ROADMAP: self._roadmap,
            CommandKind.SUGGEST: self._suggest,
            CommandKind.STATUS: self._status,
            CommandKind.QUESTION: self._question,
            CommandKind.CLEAR: self._clear,
            CommandKind.UNKNOWN: self._unknown,
        }
        missing = set(CommandKind) - set(self._handlers)
        if missing:
            names = ", ".join(sorted(kind.value for kind in missing))
            raise RuntimeError(f"No handler registered for: {names}")

    def dispatch(self, command: ParsedCommand, stats: SessionStats) -> Dispatch:
        kind = resolve_command(command.command)
        # Unknown commands echo the token instead of consuming an argument.
        args = command.command if kind is CommandKind.UNKNOWN else command.args
        try:
            return self._handlers[kind](args, stats)
        except MentorError as exc:
            self.logger.info(
                "Recovered from %s on '%s'",
                exc.kind,
                command.raw,
                extra={"event": "recovered_error", "error_kind": exc.kind},
            )
            return Dispatch(kind, tuple(exc.lines()), error=exc.kind)

    # -- handlers -----------------------------------------------------------

    def _help(self, args: str, stats: SessionStats) -> Dispatch:
        return Dispatch(CommandKind.HELP, tuple(format_help_lines()))

    def _topics(self, args: str, stats: SessionStats) -> Dispatch:
        lines = ["Temas activos:"]
        for topic in self.store.topics:
            lines.append(
                f"{topic.id.ljust(TOPIC_ID_WIDTH)} | {topic.title} -> "
                f"{topic.summary}"
            )
        lines.append("Explora detalles con `lesson <tema>`.")
        return Dispatch(CommandKind.TOPICS, tuple(lines))

    def _lesson(self, args: str, stats: SessionStats) -> Dispatch:
        if not args:
            raise UsageError("Debes indicar un tema. Ejemplo: `lesson redes`")
        topic = self.store.find_topic_by_alias(args)
        if topic is None:
            matches = self.store.search_topics(args)
            if not matches:
                raise NotFoundError(
                    f'No encontré un tema llamado "{args}". Usa `topics` '
                    "para ver opciones."
                )
            raise NotFoundError(
                "No encontré coincidencia exacta. ¿Quizás buscas alguno de "
                "estos?",
                details=[f"- {match.id}: {match.title}" for match in matches],
                suggestions=[match.id for match in matches],
            )
        return Dispatch(CommandKind.LESSON, tuple(lesson_lines(topic)))

    def _resources(self, args: str, stats: SessionStats) -> Dispatch:
        topic = self.store.find_topic_by_alias(args) if args else None
        if topic is None:
            lines = ["🔗 Recursos recomendados por temática:"]
            for item in self.store.topics:
                lines.append(f"> {item.title}")
                lines.extend(
                    f"  - {resource.title}: {resource.url}"
                    for resource in item.resources
                )
            return Dispatch(CommandKind.RESOURCES, tuple(lines))
        lines = [f"Recursos para {topic.title}:"]
        lines.extend(
            f"- {resource.title}: {resource.url} ({resource.description})"
            for resource in topic.resources
        )
        return Dispatch(CommandKind.RESOURCES, tuple(lines))

    def _labs(self, args: str, stats: SessionStats) -> Dispatch:
        topic = self.store.find_topic_by_alias(args) if args else None
        if topic is None:
            lines = ["🧪 Laboratorios disponibles:"]
            for item in self.store.topics:
                for lab in item.labs:
                    lines.append(
                        f"[{item.title}] {lab.title} ({lab.difficulty} · "
                        f"{lab.time}) -> {lab.goal}"
                    )
            lines.append("Usa `labs <tema>` para ver pasos detallados.")
            return Dispatch(CommandKind.LABS, tuple(lines))
        if not topic.labs:
            raise NotFoundError(
                f"Aún no hay laboratorios documentados para {topic.title}."
            )
        lab = topic.labs[0]
        lines = [
            f"🧪 {lab.title} | Dificultad: {lab.difficulty} | "
            f"Duración: {lab.time}",
            f"Objetivo: {lab.goal}",
            "",
            "Pasos:",
            *_bullets(lab.steps),
            "",
            "Checklist de éxito:",
            *_bullets(lab.checklist),
        ]
        return Dispatch(CommandKind.LABS, tuple(lines))

    def _quiz(self, args: str, stats: SessionStats) -> Dispatch:
        topic = self.store.find_topic_by_alias(args) if args else None
        if topic is not None and topic.quiz:
            pool: Sequence[QuizQuestion] = topic.quiz
        else:
            pool = self.store.all_quiz_questions()
        if not pool:
            raise EmptyCatalogError("No hay preguntas disponibles por ahora.")
        question = self.rng.choice(pool)
        self.logger.info(
            "Quiz started",
            extra={"event": "quiz_start", "topic_id": question.topic_id},
        )
        return Dispatch(
            CommandKind.QUIZ,
            tuple(question_lines(question)),
            start_quiz=question,
        )

    def _glossary(self, args: str, stats: SessionStats) -> Dispatch:
        if not args:
            lines = [
                f"{entry.term}: {entry.definition}"
                for entry in self.store.glossary
            ]
            return Dispatch(CommandKind.GLOSSARY, tuple(lines))
        entry = self.store.lookup_glossary(args)
        if entry is None:
            raise NotFoundError(
                f'No encontré "{args}". Usa `glossary` para listar conceptos.'
            )
        return Dispatch(
            CommandKind.GLOSSARY,
            (f"{entry.term}: {entry.definition}", f"Contexto: {entry.context}"),
        )

    def _search(self, args: str, stats: SessionStats) -> Dispatch:
        if not args:
            raise UsageError("Incluye un término. Ejemplo: `search mitre`")
        matches = self.store.search_topics(args)
        if not matches:
            raise NotFoundError(
                f'No hay coincidencias para "{args}". Intenta con otro término.'
            )
        lines = [f"Resultados ({len(matches)}):"]
        lines.extend(
            f"{topic.id} -> {topic.title} | {topic.summary}" for topic in matches
        )
        return Dispatch(CommandKind.SEARCH, tuple(lines))

    def _roadmap(self, args: str, stats: SessionStats) -> Dispatch:
        lines = ["# Ruta sugerida de 6 semanas"]
        lines.extend(
            f"  {number}. {step}"
            for number, step in enumerate(self.store.study_roadmap, start=1)
        )
        return Dispatch(CommandKind.ROADMAP, tuple(lines))

    def _suggest(self, args: str, stats: SessionStats) -> Dispatch:
        lines = []
        if self.store.daily_suggestions:
            choice = self.rng.choice(self.store.daily_suggestions)
            lines.append(f"Actividad recomendada: {choice}")
        lines.append("Comparte conclusiones en tu bitácora personal.")
        return Dispatch(CommandKind.SUGGEST, tuple(lines))

    def _status(self, args: str, stats: SessionStats) -> Dispatch:
        lines = [stats.status_line()]
        if self.store.motivational_tips:
            lines.append(f"💡 {self.rng.choice(self.store.motivational_tips)}")
        return Dispatch(CommandKind.STATUS, tuple(lines))

    def _question(self, args: str, stats: SessionStats) -> Dispatch:
        if not args:
            raise UsageError(
                "Formula tu duda. Ejemplo: `question diferencia entre ids e ips`."
            )
        topic = self.store.match_question_to_topic(args)
        if topic is None:
            if not self.store.topics:
                raise NotFoundError(
                    "No hay temas cargados para orientar tu pregunta."
                )
            topic = self.store.topics[0]
        lines = [
            f"Tema sugerido: {topic.title}",
            f"Resumen: {topic.summary}",
            "",
            "Puntos clave:",
            *_bullets(topic.fundamentals[:3]),
            "",
            "Recomendación:",
            f"• Revisa la lección con `lesson {topic.id}`.",
            f"• Programa un laboratorio práctico con `labs {topic.id}`.",
        ]
        return Dispatch(CommandKind.QUESTION, tuple(lines))

    def _clear(self, args: str, stats: SessionStats) -> Dispatch:
        return Dispatch(
            CommandKind.CLEAR,
            ("Pantalla limpia. Continuemos.",),
            reset_history=True,
        )

    def _unknown(self, token: str, stats: SessionStats) -> Dispatch:
        return Dispatch(
            CommandKind.UNKNOWN,
            (
                f"Comando desconocido: {token}",
                "Escribe `help` para ver opciones disponibles.",
            ),
        )


def lesson_lines(topic: Topic) -> list[str]:
    """Render the full study profile of ``topic``."""

    return [
        f"== {topic.title.upper()} ==",
        topic.summary,
        "",
        "Fundamentos clave:",
        *_bullets(topic.fundamentals),
        "",
        "Nivel intermedio/avanzado:",
        *_bullets(topic.advanced),
        "",
        "Quick wins:",
        *_bullets(topic.quick_wins),
        "",
        "Alertas tempranas:",
        *_bullets(topic.warning_signs),
        "",
        "Ruta sugerida:",
        *_bullets(topic.study_path),
    ]


def _bullets(items: Sequence[str]) -> list[str]:
    return [f"• {item}" for item in items]
