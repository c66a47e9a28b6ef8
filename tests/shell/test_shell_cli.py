from __future__ import annotations

import json

import pytest

from fixtures import sample_catalog

from terminal_mentor.shell import cli
from terminal_mentor.shell.config import InterfaceMode


class RecordingRunner:
    def __init__(self, lines=()):
        self.lines = list(lines)
        self.calls = []

    def __call__(self, session, load_result):
        self.calls.append((session, load_result))
        for line in self.lines:
            session.submit(line)
        return 0


def test_start_builds_session_and_writes_log(tmp_path):
    runner = RecordingRunner(["help", "quiz redes", "skip"])
    workspace = tmp_path / "ws"

    code = cli.main(["--workspace", str(workspace), "--plain"], runner=runner)

    assert code == 0
    session, load_result = runner.calls[0]
    assert load_result.config.mode is InterfaceMode.CONSOLE
    assert session.stats.answered == 1

    log_path = workspace / "logs" / cli.LOG_FILENAME
    records = [
        json.loads(line)
        for line in log_path.read_text(encoding="utf-8").splitlines()
    ]
    events = [record.get("extra", {}).get("event") for record in records]
    assert events[0] == "session_start"
    assert events[-1] == "session_end"
    assert "turn" in events


def test_start_uses_custom_catalog_and_seed(tmp_path, workspace):
    catalog = sample_catalog()
    catalog["topics"] = catalog["topics"][1:2]
    path = workspace.write_json("catalog.json", catalog)
    runner = RecordingRunner(["quiz", "xss"])

    code = cli.main(
        [
            "--workspace",
            str(tmp_path / "ws"),
            "--catalog",
            str(path),
            "--seed",
            "4",
        ],
        runner=runner,
    )

    assert code == 0
    session, load_result = runner.calls[0]
    assert load_result.config.seed == 4
    assert [topic.id for topic in session.dispatcher.store.topics] == ["web"]
    assert session.stats.correct == 1


def test_start_rejects_bad_catalog(tmp_path, workspace, capsys):
    path = workspace.write("broken.json", "{not json")

    code = cli.main(
        ["--workspace", str(tmp_path / "ws"), "--catalog", str(path)],
        runner=RecordingRunner(),
    )

    assert code == 1
    assert "Invalid JSON" in capsys.readouterr().err


def test_start_reports_config_errors_via_argparse(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(
            [
                "--workspace",
                str(tmp_path / "ws"),
                "--config",
                str(tmp_path / "missing.toml"),
            ],
            runner=RecordingRunner(),
        )

    assert excinfo.value.code == 2
    assert "Config file not found" in capsys.readouterr().err


def test_config_init_writes_template(tmp_path, capsys):
    code = cli.main(["config", "init", "--workspace", str(tmp_path / "ws")])

    target = tmp_path / "ws" / "config" / "mentor.toml"
    assert code == 0
    assert target.exists()
    assert "[interface]" in target.read_text(encoding="utf-8")
    assert str(target) in capsys.readouterr().out


def test_config_init_refuses_overwrite_without_force(tmp_path, capsys):
    target = tmp_path / "mentor.toml"
    target.write_text("# custom\n", encoding="utf-8")

    code = cli.main(["config", "init", "--path", str(target)])
    assert code == 1
    assert "already exists" in capsys.readouterr().err

    code = cli.main(["config", "init", "--path", str(target), "--force"])
    assert code == 0
    assert "[session]" in target.read_text(encoding="utf-8")


def test_default_runner_uses_console_mode(tmp_path, monkeypatch):
    calls = {}

    def fake_console(session, console, *, prompt):
        calls["prompt"] = prompt
        return 0

    monkeypatch.setattr(
        "terminal_mentor.shell.view.console.run_console_session", fake_console
    )
    monkeypatch.setenv("TERMINAL_MENTOR_PROMPT", "alumno$")

    code = cli.main(["--workspace", str(tmp_path / "ws"), "--plain"])

    assert code == 0
    assert calls["prompt"] == "alumno$"


def test_default_runner_uses_terminal_mode(tmp_path, monkeypatch):
    calls = {}

    def fake_terminal(session, *, prompt):
        calls["session"] = session
        return 0

    monkeypatch.setattr(
        "terminal_mentor.shell.view.terminal.run_terminal_session",
        fake_terminal,
    )

    code = cli.main(["--workspace", str(tmp_path / "ws")])

    assert code == 0
    assert calls["session"].stats.answered == 0
