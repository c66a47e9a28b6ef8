"""Transcript entries and the command recall buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

Role = Literal["system", "user", "assistant"]

RECALL_LIMIT = 30

BOOT_LINES: tuple[str, ...] = (
    "Inicializando Terminal Mentor v1.0 ...",
    "🛡️ Asistente interactivo para aprender y practicar ciberseguridad.",
    "Escribe `help` para ver comandos disponibles o `topics` para explorar "
    "rutas de estudio.",
)


@dataclass(frozen=True)
class HistoryEntry:
    """One immutable block of the transcript."""

    id: str
    role: Role
    content: tuple[str, ...]


BOOT_ENTRY = HistoryEntry(id="boot-message", role="system", content=BOOT_LINES)


def boot_history() -> tuple[HistoryEntry, ...]:
    return (BOOT_ENTRY,)


def append_entry(
    history: Sequence[HistoryEntry], role: Role, lines: Sequence[str]
) -> tuple[HistoryEntry, ...]:
    """Return ``history`` with a new entry appended."""

    entry = HistoryEntry(
        id=f"entry-{len(history):04d}", role=role, content=tuple(lines)
    )
    return (*history, entry)


def remember(
    buffer: Sequence[str], line: str, *, limit: int = RECALL_LIMIT
) -> tuple[str, ...]:
    """Push ``line`` to the front of the recall buffer without duplicates."""

    return (line, *(item for item in buffer if item != line))[:limit]


class RecallCursor:
    """Up/down navigation over a most-recent-first recall buffer.

    ``index`` is ``None`` while the learner is typing a fresh line.
    ``older`` moves toward the oldest entry and stops there; ``newer`` moves
    back toward the newest and, past it, returns an empty string and resets
    the cursor.
    """

    def __init__(self) -> None:
        self.index: int | None = None

    def reset(self) -> None:
        self.index = None

    def older(self, buffer: Sequence[str]) -> str | None:
        if not buffer:
            return None
        target = 0 if self.index is None else min(self.index + 1, len(buffer) - 1)
        self.index = target
        return buffer[target]

    def newer(self, buffer: Sequence[str]) -> str | None:
        if self.index is None:
            return None
        if self.index <= 0:
            self.index = None
            return ""
        self.index = min(self.index - 1, len(buffer) - 1)
        if self.index < 0:
            self.index = None
            return ""
        return buffer[self.index]
