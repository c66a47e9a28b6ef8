"""Full-screen Textual terminal for the mentor shell."""

from __future__ import annotations

from typing import Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Input, RichLog, Static

from terminal_mentor.shell.config import DEFAULT_PROMPT
from terminal_mentor.shell.quiz import PendingQuiz
from terminal_mentor.shell.session import MentorSession
from terminal_mentor.shell.stats import SessionStats

from .console import HEADER, entry_lines, pending_lines

COMMAND_PLACEHOLDER = "Escribe un comando..."
ANSWER_PLACEHOLDER = "Responde la pregunta..."
MODE_BADGE = "Modo: Aprendizaje activo"

_ROLE_STYLES = {
    "system": "green",
    "user": "bold white",
    "assistant": "cyan",
}


def status_text(stats: SessionStats) -> str:
    return f"{MODE_BADGE}  ·  Sesión: {stats.answered} preguntas"


def banner_text(pending: PendingQuiz | None) -> str:
    if pending is None:
        return ""
    return "\n".join(pending_lines(pending))


def placeholder_for(pending: PendingQuiz | None) -> str:
    return ANSWER_PLACEHOLDER if pending is not None else COMMAND_PLACEHOLDER


class MentorTerminal(App):
    CSS_PATH = None
    CSS = """
#header { color: $accent; text-style: bold; }
#status { color: $text-muted; }
#transcript { height: 1fr; border: round $primary; }
#pending { color: $warning; }
#prompt-row { height: auto; }
#prompt { width: auto; color: $success; padding: 1 1 0 0; }
#command { width: 1fr; }
"""
    BINDINGS = [
        Binding("up", "recall_older", "Anterior", show=False, priority=True),
        Binding("down", "recall_newer", "Siguiente", show=False, priority=True),
        Binding("ctrl+c", "quit", "Salir"),
    ]

    def __init__(
        self, session: MentorSession, *, prompt: str = DEFAULT_PROMPT
    ) -> None:
        super().__init__()
        self.mentor = session
        self.prompt_text = prompt

    def compose(self) -> ComposeResult:
        yield Static(HEADER, id="header")
        yield Static(status_text(self.mentor.stats), id="status")
        yield RichLog(id="transcript", wrap=True, markup=False)
        yield Static(banner_text(self.mentor.pending), id="pending")
        with Horizontal(id="prompt-row"):
            yield Static(self.prompt_text, id="prompt")
            yield Input(
                placeholder=placeholder_for(self.mentor.pending), id="command"
            )

    def on_mount(self) -> None:
        self._render_history()
        self._focus_input()

    # Pure helpers (testable without running the App)
    def submit_line(self, raw: str) -> bool:
        """Feed ``raw`` to the session and refresh the widgets."""

        turn = self.mentor.submit(raw)
        if not turn.accepted:
            return False
        if turn.reset:
            self._render_history()
        else:
            log = self._transcript()
            if log is not None:
                self._write(log, [f"{self.prompt_text} {raw.strip()}"], "user")
                self._write(log, turn.lines, "assistant")
        self._refresh_chrome()
        return True

    def recall(self, older: bool) -> str | None:
        value = (
            self.mentor.recall_older() if older else self.mentor.recall_newer()
        )
        if value is None:
            return None
        field = self._input()
        if field is not None:
            field.value = value
            field.cursor_position = len(value)
        return value

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.input.value = ""
        self.submit_line(event.value)

    def action_recall_older(self) -> None:
        self.recall(older=True)

    def action_recall_newer(self) -> None:
        self.recall(older=False)

    def _render_history(self) -> None:
        log = self._transcript()
        if log is None:
            return
        log.clear()
        for entry in self.mentor.history:
            lines = entry_lines(entry, prompt=self.prompt_text)
            self._write(log, lines, entry.role)

    def _refresh_chrome(self) -> None:
        pending = self.mentor.pending
        try:
            self.query_one("#status", Static).update(
                status_text(self.mentor.stats)
            )
            self.query_one("#pending", Static).update(banner_text(pending))
        except NoMatches:
            return
        field = self._input()
        if field is not None:
            field.placeholder = placeholder_for(pending)

    def _focus_input(self) -> None:
        field = self._input()
        if field is not None:
            field.focus()

    def _transcript(self) -> RichLog | None:
        try:
            return self.query_one("#transcript", RichLog)
        except NoMatches:
            return None

    def _input(self) -> Input | None:
        try:
            return self.query_one("#command", Input)
        except NoMatches:
            return None

    @staticmethod
    def _write(log: RichLog, lines: Sequence[str], role: str) -> None:
        style = _ROLE_STYLES.get(role, "")
        for line in lines:
            log.write(Text(line, style=style))


def run_terminal_session(
    session: MentorSession, *, prompt: str = DEFAULT_PROMPT
) -> int:
    MentorTerminal(session, prompt=prompt).run()
    return 0
