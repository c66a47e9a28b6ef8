"""Split raw terminal lines into a command token and its argument."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedCommand:
    """A non-empty submitted line split at the first whitespace run."""

    command: str
    args: str
    raw: str


def parse_command_line(raw: str | None) -> ParsedCommand | None:
    """Parse ``raw`` into a command, or ``None`` when nothing was typed.

    The command token is lower-cased for matching. The argument keeps its
    original case and is trimmed. No quoting or escaping is recognized.
    """

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    parts = text.split(maxsplit=1)
    head = parts[0]
    tail = parts[1] if len(parts) > 1 else ""
    return ParsedCommand(command=head.lower(), args=tail.strip(), raw=text)
