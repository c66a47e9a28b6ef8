"""Finite-state machine for a single pending quiz question.

The machine has two states. *Idle* is represented by ``None``; *Active* is a
``PendingQuiz`` value. ``resolve_answer`` is the only transition out of the
Active state and is a pure function of the pending question, the current
stats and the learner's raw input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum

from terminal_mentor.content.models import QuizQuestion

from .errors import RepeatedHintError
from .stats import SessionStats

HINT_TOKENS = frozenset({"hint", "pista"})
SKIP_TOKENS = frozenset({"skip", "omitir"})
MAX_ATTEMPTS = 2

ANSWER_INSTRUCTIONS = (
    "Responde, pide `hint` para una pista o escribe `skip` para saltar."
)


class QuizOutcome(Enum):
    HINT = "hint"
    REPEATED_HINT = "repeated_hint"
    SKIPPED = "skipped"
    CORRECT = "correct"
    RETRY = "retry"
    FAILED = "failed"


@dataclass(frozen=True)
class PendingQuiz:
    """Active quiz state: the question plus retry and hint bookkeeping."""

    question: QuizQuestion
    attempts: int = 0
    revealed_hint: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.attempts < MAX_ATTEMPTS:
            raise ValueError(
                f"attempts must be between 0 and {MAX_ATTEMPTS - 1}."
            )

    def with_hint(self) -> "PendingQuiz":
        if self.revealed_hint:
            raise RepeatedHintError(
                "⚠️ Ya mostré una pista para esta pregunta. Intenta una respuesta."
            )
        return replace(self, revealed_hint=True)

    def with_miss(self) -> "PendingQuiz":
        return replace(self, attempts=self.attempts + 1)


@dataclass(frozen=True)
class QuizTransition:
    """Result of feeding one line of input to an active quiz."""

    outcome: QuizOutcome
    pending: PendingQuiz | None
    stats: SessionStats
    lines: tuple[str, ...]

    @property
    def resolved(self) -> bool:
        return self.pending is None


def hint_for(answer: str) -> str:
    """Reveal the first half of ``answer`` (rounded up) with an ellipsis."""

    return f"Pista: {answer[: math.ceil(len(answer) / 2)]}..."


def question_lines(question: QuizQuestion) -> list[str]:
    lines = [f"Pregunta: {question.prompt}"]
    if question.choices:
        lines.append(f"Opciones: {' | '.join(question.choices)}")
    lines.append(ANSWER_INSTRUCTIONS)
    return lines


def is_correct(question: QuizQuestion, raw: str) -> bool:
    return raw.strip().lower() == question.answer.strip().lower()


def resolve_answer(
    pending: PendingQuiz, stats: SessionStats, raw: str
) -> QuizTransition:
    """Apply one learner input to the pending question."""

    question = pending.question
    token = raw.strip().lower()

    if token in HINT_TOKENS:
        try:
            hinted = pending.with_hint()
        except RepeatedHintError as exc:
            return QuizTransition(
                QuizOutcome.REPEATED_HINT, pending, stats, tuple(exc.lines())
            )
        return QuizTransition(
            QuizOutcome.HINT, hinted, stats, (hint_for(question.answer),)
        )

    if token in SKIP_TOKENS:
        updated = stats.record_miss()
        return QuizTransition(
            QuizOutcome.SKIPPED,
            None,
            updated,
            (
                f"Pregunta omitida. Respuesta correcta: {question.answer}",
                f"Explicación: {question.explanation}",
                updated.status_line(),
            ),
        )

    if is_correct(question, token):
        updated = stats.record_correct()
        return QuizTransition(
            QuizOutcome.CORRECT,
            None,
            updated,
            (
                "✅ ¡Correcto!",
                question.explanation,
                updated.status_line(),
                "Escribe `quiz` para otra pregunta o explora con `lesson <tema>`.",
            ),
        )

    if pending.attempts + 1 >= MAX_ATTEMPTS:
        updated = stats.record_miss()
        return QuizTransition(
            QuizOutcome.FAILED,
            None,
            updated,
            (
                "❌ Respuesta incorrecta.",
                f"La respuesta correcta es: {question.answer}",
                question.explanation,
                updated.status_line(),
                "Puedes escribir `quiz` para intentar otra o `lesson <tema>` "
                "para repasar.",
            ),
        )

    return QuizTransition(
        QuizOutcome.RETRY,
        pending.with_miss(),
        stats,
        (
            "Respuesta incorrecta. Puedes intentar nuevamente, pedir `hint` "
            "o escribir `skip`.",
        ),
    )
