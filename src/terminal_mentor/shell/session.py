"""Session state and the per-line transition function.

``step`` is pure: it takes the current ``SessionState`` and one raw line and
returns the next state plus the lines to show. ``MentorSession`` is the thin
mutable owner used by the views; it also keeps the recall cursor and writes
the session log.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .commands import CommandKind
from .dispatcher import CommandDispatcher
from .history import (
    HistoryEntry,
    RecallCursor,
    append_entry,
    boot_history,
    remember,
)
from .parser import parse_command_line
from .quiz import PendingQuiz, QuizOutcome, resolve_answer
from .stats import SessionStats


@dataclass(frozen=True)
class SessionState:
    """Everything one learner session remembers."""

    history: tuple[HistoryEntry, ...] = field(default_factory=boot_history)
    stats: SessionStats = field(default_factory=SessionStats)
    pending: PendingQuiz | None = None
    recall: tuple[str, ...] = ()

    @property
    def quiz_active(self) -> bool:
        return self.pending is not None


@dataclass(frozen=True)
class Turn:
    """Result of submitting one line."""

    state: SessionState
    lines: tuple[str, ...] = ()
    accepted: bool = False
    command: CommandKind | None = None
    quiz_outcome: QuizOutcome | None = None
    reset: bool = False


def step(
    state: SessionState, raw: str, dispatcher: CommandDispatcher
) -> Turn:
    """Apply one submitted line to ``state``.

    Blank input is ignored. While a quiz is pending every line is treated
    as an answer, including lines that look like commands.
    """

    parsed = parse_command_line(raw)
    if parsed is None:
        return Turn(state)

    recall = remember(state.recall, parsed.raw)
    history = append_entry(state.history, "user", (parsed.raw,))

    if state.pending is not None:
        transition = resolve_answer(state.pending, state.stats, parsed.raw)
        history = append_entry(history, "assistant", transition.lines)
        next_state = SessionState(
            history=history,
            stats=transition.stats,
            pending=transition.pending,
            recall=recall,
        )
        return Turn(
            next_state,
            transition.lines,
            accepted=True,
            quiz_outcome=transition.outcome,
        )

    result = dispatcher.dispatch(parsed, state.stats)
    if result.reset_history:
        history = boot_history()
    pending = (
        PendingQuiz(result.start_quiz) if result.start_quiz is not None else None
    )
    history = append_entry(history, "assistant", result.lines)
    next_state = SessionState(
        history=history, stats=state.stats, pending=pending, recall=recall
    )
    return Turn(
        next_state,
        result.lines,
        accepted=True,
        command=result.kind,
        reset=result.reset_history,
    )


class MentorSession:
    """Mutable wrapper that owns the current ``SessionState``."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        *,
        state: SessionState | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.state = state or SessionState()
        self.logger = logger or logging.getLogger(__name__)
        self.cursor = RecallCursor()

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return self.state.history

    @property
    def stats(self) -> SessionStats:
        return self.state.stats

    @property
    def pending(self) -> PendingQuiz | None:
        return self.state.pending

    def submit(self, raw: str) -> Turn:
        turn = step(self.state, raw, self.dispatcher)
        self.state = turn.state
        if turn.accepted:
            self.cursor.reset()
            self._log_turn(turn)
        return turn

    def recall_older(self) -> str | None:
        return self.cursor.older(self.state.recall)

    def recall_newer(self) -> str | None:
        return self.cursor.newer(self.state.recall)

    def _log_turn(self, turn: Turn) -> None:
        stats = turn.state.stats
        if turn.quiz_outcome is not None:
            self.logger.info(
                "Quiz input: %s",
                turn.quiz_outcome.value,
                extra={
                    "event": "turn",
                    "quiz_outcome": turn.quiz_outcome.value,
                    "answered": stats.answered,
                    "correct": stats.correct,
                    "streak": stats.streak,
                },
            )
            if turn.state.pending is None:
                self.logger.info(
                    "Quiz resolved",
                    extra={
                        "event": "quiz_resolved",
                        "quiz_outcome": turn.quiz_outcome.value,
                    },
                )
            return
        command = turn.command.value if turn.command else None
        self.logger.info(
            "Command: %s", command, extra={"event": "turn", "command": command}
        )
        if turn.reset:
            self.logger.info("History reset", extra={"event": "history_reset"})
