from __future__ import annotations

from rich.console import Console

from terminal_mentor.content.models import QuizQuestion
from terminal_mentor.shell.history import BOOT_ENTRY, HistoryEntry
from terminal_mentor.shell.quiz import PendingQuiz
from terminal_mentor.shell.view import console as console_view


def make_provider(commands: list[str]):
    iterator = iter(commands)

    def _provider() -> str:
        return next(iterator)

    return _provider


def make_console() -> Console:
    return Console(record=True, width=200, force_terminal=True)


def test_console_session_renders_boot_and_output(make_session):
    session = make_session()
    console = make_console()

    turns = console_view.run_console_session(
        session, console, make_provider(["help", "", "topics"])
    )

    text = console.export_text()
    assert turns == 2
    assert console_view.HEADER in text
    assert BOOT_ENTRY.content[0] in text
    assert "Comandos disponibles:" in text
    assert "Temas activos:" in text
    assert text.rstrip().endswith(console_view.GOODBYE)


def test_console_session_shows_pending_reminder(make_session):
    session = make_session(0)
    console = make_console()

    console_view.run_console_session(
        session, console, make_provider(["quiz redes", "hint", "443"])
    )

    text = console.export_text()
    assert "Pregunta activa: ¿Qué puerto usa HTTPS por defecto? → Opciones: 80 | 443 | 8080" in text
    assert text.count("Pregunta activa:") == 2
    assert "✅ ¡Correcto!" in text
    assert session.stats.correct == 1


def test_console_session_redraws_after_clear(make_session):
    session = make_session()
    console = make_console()

    console_view.run_console_session(
        session, console, make_provider(["roadmap", "clear"])
    )

    text = console.export_text()
    assert text.count(BOOT_ENTRY.content[0]) == 2
    assert "Pantalla limpia. Continuemos." in text


def test_console_session_stops_on_interrupt(make_session):
    session = make_session()
    console = make_console()

    def interrupted() -> str:
        raise KeyboardInterrupt

    assert console_view.run_console_session(session, console, interrupted) == 0
    assert console_view.GOODBYE in console.export_text()


def test_console_session_default_provider_uses_prompt(make_session, monkeypatch):
    session = make_session()
    console = make_console()
    prompts = []
    answers = iter(["help"])

    def fake_input(prompt: str = "", **_kwargs) -> str:
        prompts.append(prompt)
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(console, "input", fake_input)

    console_view.run_console_session(session, console, prompt="alumno$")

    assert prompts and "alumno$" in prompts[0]


def test_entry_lines_prefix_user_input():
    entry = HistoryEntry(id="entry-0001", role="user", content=("help",))

    assert console_view.entry_lines(entry, prompt="yo$") == ["yo$ help"]
    assert console_view.entry_lines(BOOT_ENTRY) == list(BOOT_ENTRY.content)


def test_pending_lines_without_choices():
    pending = PendingQuiz(QuizQuestion("¿Qué es un SIEM?", "siem", "e"))

    lines = console_view.pending_lines(pending)

    assert lines[0] == "Pregunta activa: ¿Qué es un SIEM?"
