from __future__ import annotations

import pytest

from terminal_mentor.shell.parser import ParsedCommand, parse_command_line


@pytest.mark.parametrize("raw", [None, "", "   ", "\t\n"])
def test_blank_input_produces_no_command(raw):
    assert parse_command_line(raw) is None


def test_command_is_lowercased_and_args_keep_case():
    parsed = parse_command_line("  LESSON  Redes Avanzadas  ")

    assert parsed == ParsedCommand(
        command="lesson", args="Redes Avanzadas", raw="LESSON  Redes Avanzadas"
    )


def test_splits_on_first_whitespace_run_only():
    parsed = parse_command_line("question\t diferencia   entre ids e ips")

    assert parsed is not None
    assert parsed.command == "question"
    assert parsed.args == "diferencia   entre ids e ips"


def test_single_token_has_empty_args():
    parsed = parse_command_line("help")

    assert parsed is not None
    assert parsed.args == ""


def test_quotes_are_not_interpreted():
    parsed = parse_command_line('search "mitre attack"')

    assert parsed is not None
    assert parsed.args == '"mitre attack"'
