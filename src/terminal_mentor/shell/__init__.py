from .commands import ALIASES, COMMAND_SPECS, CommandKind, resolve_command
from .dispatcher import CommandDispatcher, Dispatch
from .errors import (
    EmptyCatalogError,
    MentorError,
    NotFoundError,
    RepeatedHintError,
    UsageError,
)
from .history import BOOT_ENTRY, HistoryEntry, RecallCursor
from .parser import ParsedCommand, parse_command_line
from .quiz import PendingQuiz, QuizOutcome, QuizTransition, resolve_answer
from .session import MentorSession, SessionState, Turn, step
from .stats import SessionStats

__all__ = [
    "ALIASES",
    "COMMAND_SPECS",
    "CommandKind",
    "resolve_command",
    "CommandDispatcher",
    "Dispatch",
    "EmptyCatalogError",
    "MentorError",
    "NotFoundError",
    "RepeatedHintError",
    "UsageError",
    "BOOT_ENTRY",
    "HistoryEntry",
    "RecallCursor",
    "ParsedCommand",
    "parse_command_line",
    "PendingQuiz",
    "QuizOutcome",
    "QuizTransition",
    "resolve_answer",
    "MentorSession",
    "SessionState",
    "Turn",
    "step",
    "SessionStats",
]
