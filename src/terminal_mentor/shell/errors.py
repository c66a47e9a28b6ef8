"""Recoverable errors raised while handling a single shell turn.

Handlers raise these instead of formatting failure text inline; the
dispatcher and the quiz machine turn them into assistant lines so the
session always stays interactive.
"""

from __future__ import annotations

from typing import Sequence


class MentorError(Exception):
    """Base class for errors rendered back to the learner."""

    kind = "mentor"

    def __init__(self, message: str, *, details: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.details = tuple(details)

    def lines(self) -> list[str]:
        return [self.message, *self.details]


class UsageError(MentorError):
    """A required argument was not supplied."""

    kind = "usage"


class NotFoundError(MentorError):
    """A topic, glossary term or search returned nothing usable."""

    kind = "not_found"

    def __init__(
        self,
        message: str,
        *,
        details: Sequence[str] = (),
        suggestions: Sequence[str] = (),
    ) -> None:
        super().__init__(message, details=details)
        self.suggestions = tuple(suggestions)


class EmptyCatalogError(MentorError):
    kind = "empty_catalog"


class RepeatedHintError(MentorError):
    kind = "repeated_hint"
