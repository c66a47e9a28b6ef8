"""Session score keeping."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SessionStats:
    """Answered/correct/streak counters, updated only by quiz resolution."""

    answered: int = 0
    correct: int = 0
    streak: int = 0

    def __post_init__(self) -> None:
        if min(self.answered, self.correct, self.streak) < 0:
            raise ValueError("Session counters cannot be negative.")
        if self.correct > self.answered:
            raise ValueError("correct cannot exceed answered.")

    @property
    def accuracy(self) -> int:
        """Whole-number percentage of correct answers, rounded half up."""

        if self.answered == 0:
            return 0
        return math.floor(self.correct / self.answered * 100 + 0.5)

    def record_correct(self) -> "SessionStats":
        return replace(
            self,
            answered=self.answered + 1,
            correct=self.correct + 1,
            streak=self.streak + 1,
        )

    def record_miss(self) -> "SessionStats":
        """Account for a skipped or failed question."""

        return replace(self, answered=self.answered + 1, streak=0)

    def status_line(self) -> str:
        return (
            f"📊 Sesión | Resueltas: {self.answered} | "
            f"Correctas: {self.correct} | Precisión: {self.accuracy}% | "
            f"Racha: {self.streak}"
        )
