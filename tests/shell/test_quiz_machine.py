from __future__ import annotations

import pytest

from terminal_mentor.content.models import QuizQuestion
from terminal_mentor.shell.errors import RepeatedHintError
from terminal_mentor.shell.quiz import (
    PendingQuiz,
    QuizOutcome,
    hint_for,
    question_lines,
    resolve_answer,
)
from terminal_mentor.shell.stats import SessionStats

QUESTION = QuizQuestion(
    prompt="¿Qué protocolo usa un saludo de tres vías?",
    answer="TCP",
    explanation="TCP usa SYN, SYN-ACK y ACK.",
    choices=("TCP", "UDP"),
)


def test_question_lines_include_choices_and_instructions():
    lines = question_lines(QUESTION)

    assert lines[0] == f"Pregunta: {QUESTION.prompt}"
    assert lines[1] == "Opciones: TCP | UDP"
    assert "hint" in lines[2] and "skip" in lines[2]


def test_question_lines_without_choices():
    lines = question_lines(QuizQuestion("P", "a", "e"))

    assert len(lines) == 2


@pytest.mark.parametrize(
    ("answer", "expected"),
    [("TCP", "Pista: TC..."), ("443", "Pista: 44..."), ("hash", "Pista: ha...")],
)
def test_hint_reveals_half_rounded_up(answer, expected):
    assert hint_for(answer) == expected


@pytest.mark.parametrize("token", ["hint", "PISTA", " Hint "])
def test_hint_sets_flag_and_keeps_question(token):
    transition = resolve_answer(PendingQuiz(QUESTION), SessionStats(), token)

    assert transition.outcome is QuizOutcome.HINT
    assert transition.pending == PendingQuiz(QUESTION, revealed_hint=True)
    assert transition.lines == ("Pista: TC...",)


def test_second_hint_warns_without_changing_state():
    pending = PendingQuiz(QUESTION, attempts=1, revealed_hint=True)
    stats = SessionStats(answered=2, correct=1, streak=0)

    transition = resolve_answer(pending, stats, "hint")

    assert transition.outcome is QuizOutcome.REPEATED_HINT
    assert transition.pending is pending
    assert transition.stats is stats
    assert "Ya mostré una pista" in transition.lines[0]
    assert not any("TC" in line for line in transition.lines)


def test_with_hint_raises_when_already_revealed():
    with pytest.raises(RepeatedHintError):
        PendingQuiz(QUESTION, revealed_hint=True).with_hint()


@pytest.mark.parametrize("token", ["skip", "OMITIR"])
def test_skip_resolves_as_miss(token):
    stats = SessionStats(answered=1, correct=1, streak=1)

    transition = resolve_answer(PendingQuiz(QUESTION), stats, token)

    assert transition.outcome is QuizOutcome.SKIPPED
    assert transition.resolved
    assert transition.stats == SessionStats(answered=2, correct=1, streak=0)
    assert transition.lines[0] == "Pregunta omitida. Respuesta correcta: TCP"
    assert transition.lines[2] == transition.stats.status_line()


@pytest.mark.parametrize("answer", ["tcp", "TCP", "  Tcp "])
def test_correct_answer_is_case_insensitive(answer):
    stats = SessionStats(answered=3, correct=2, streak=2)

    transition = resolve_answer(PendingQuiz(QUESTION), stats, answer)

    assert transition.outcome is QuizOutcome.CORRECT
    assert transition.resolved
    assert transition.stats == SessionStats(answered=4, correct=3, streak=3)
    assert transition.lines[0] == "✅ ¡Correcto!"


def test_correct_after_hint_and_retry_still_scores():
    pending = PendingQuiz(QUESTION, attempts=1, revealed_hint=True)

    transition = resolve_answer(pending, SessionStats(), "tcp")

    assert transition.stats.correct == 1


def test_partial_answer_is_not_accepted():
    transition = resolve_answer(PendingQuiz(QUESTION), SessionStats(), "tc")

    assert transition.outcome is QuizOutcome.RETRY


def test_first_miss_allows_retry():
    stats = SessionStats(answered=1, correct=1, streak=1)

    transition = resolve_answer(PendingQuiz(QUESTION), stats, "udp")

    assert transition.outcome is QuizOutcome.RETRY
    assert transition.pending == PendingQuiz(QUESTION, attempts=1)
    assert transition.stats is stats
    assert "intentar nuevamente" in transition.lines[0]


def test_second_miss_fails_and_reveals_answer():
    pending = PendingQuiz(QUESTION, attempts=1, revealed_hint=True)
    stats = SessionStats(answered=1, correct=1, streak=1)

    transition = resolve_answer(pending, stats, "icmp")

    assert transition.outcome is QuizOutcome.FAILED
    assert transition.resolved
    assert transition.stats == SessionStats(answered=2, correct=1, streak=0)
    assert "La respuesta correcta es: TCP" in transition.lines


def test_pending_quiz_rejects_exhausted_attempts():
    with pytest.raises(ValueError):
        PendingQuiz(QUESTION, attempts=2)
