"""Rich line-mode REPL for the mentor shell.

Used with ``mentor start --plain`` or ``mode = "console"``. It has no
arrow-key recall; the terminal's own line editing is all the learner gets.
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from terminal_mentor.shell.config import DEFAULT_PROMPT
from terminal_mentor.shell.history import HistoryEntry
from terminal_mentor.shell.quiz import PendingQuiz
from terminal_mentor.shell.session import MentorSession

InputProvider = Callable[[], str]

HEADER = "Terminal Mentor · Aprendizaje guiado"
GOODBYE = "Sesión finalizada."

_ROLE_STYLES = {
    "system": "green",
    "user": "bold white",
    "assistant": "cyan",
}


def run_console_session(
    session: MentorSession,
    console: Console,
    input_provider: InputProvider | None = None,
    *,
    prompt: str = DEFAULT_PROMPT,
) -> int:
    """Drive ``session`` from ``input_provider`` until input runs out.

    Returns the number of accepted turns.
    """

    if input_provider is None:
        def input_provider() -> str:
            return console.input(f"[bold green]{prompt}[/] ")

    _render_transcript(console, session.history, prompt=prompt)
    turns = 0
    while True:
        if session.pending is not None:
            _render_pending(console, session.pending)
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print()
            console.print(Text(GOODBYE, style="bold yellow"))
            break
        turn = session.submit(raw)
        if not turn.accepted:
            continue
        turns += 1
        if turn.reset:
            console.clear()
            _render_transcript(console, session.history, prompt=prompt)
            continue
        _render_lines(console, turn.lines, style=_ROLE_STYLES["assistant"])
    return turns


def entry_lines(entry: HistoryEntry, *, prompt: str = DEFAULT_PROMPT) -> list[str]:
    """Plain-text rendering of one transcript entry."""

    if entry.role == "user":
        return [f"{prompt} {line}" for line in entry.content]
    return list(entry.content)


def pending_lines(pending: PendingQuiz) -> list[str]:
    question = pending.question
    banner = f"Pregunta activa: {question.prompt}"
    if question.choices:
        banner += f" → Opciones: {' | '.join(question.choices)}"
    return [
        banner,
        "Intenta responder, escribe hint para una pista o skip para saltar.",
    ]


def _render_transcript(
    console: Console, history: Iterable[HistoryEntry], *, prompt: str
) -> None:
    console.print(Rule(Text(HEADER, style="bold cyan")))
    for entry in history:
        _render_lines(
            console,
            entry_lines(entry, prompt=prompt),
            style=_ROLE_STYLES[entry.role],
        )


def _render_pending(console: Console, pending: PendingQuiz) -> None:
    _render_lines(console, pending_lines(pending), style="yellow")


def _render_lines(console: Console, lines: Sequence[str], *, style: str) -> None:
    for line in lines:
        console.print(Text(line, style=style))
