from __future__ import annotations

import pytest

from terminal_mentor.core import config as core_config


def test_load_toml_reads_tables(workspace):
    path = workspace.write("a.toml", "[session]\nseed = 3\n")

    assert core_config.load_toml(path) == {"session": {"seed": 3}}


def test_load_toml_errors(workspace, tmp_path):
    with pytest.raises(core_config.ConfigError, match="not found"):
        core_config.load_toml(tmp_path / "missing.toml")

    broken = workspace.write("broken.toml", "[session\n")
    with pytest.raises(core_config.ConfigError, match="parse"):
        core_config.load_toml(broken)


def test_merge_defaults_overrides_known_keys():
    base = {"interface": {"mode": "tui", "prompt": "$"}, "logging": {"level": "INFO"}}

    core_config.merge_defaults(base, {"interface": {"mode": "console"}})

    assert base == {
        "interface": {"mode": "console", "prompt": "$"},
        "logging": {"level": "INFO"},
    }


def test_merge_defaults_rejects_unknown_and_mistyped_keys():
    with pytest.raises(core_config.ConfigError, match="interface.theme"):
        core_config.merge_defaults({"interface": {"mode": "tui"}}, {"interface": {"theme": "x"}})
    with pytest.raises(core_config.ConfigError, match="Expected table"):
        core_config.merge_defaults({"interface": {"mode": "tui"}}, {"interface": "tui"})
    with pytest.raises(core_config.ConfigError, match="not a table"):
        core_config.merge_defaults({"mode": "tui"}, {"mode": {"x": 1}})


def test_write_toml_template_respects_overwrite(tmp_path):
    target = tmp_path / "nested" / "mentor.toml"

    core_config.write_toml_template(target, template="a = 1\n")
    assert target.read_text(encoding="utf-8") == "a = 1\n"

    with pytest.raises(core_config.ConfigError, match="already exists"):
        core_config.write_toml_template(target, template="a = 2\n")

    core_config.write_toml_template(target, template="a = 2\n", overwrite=True)
    assert target.read_text(encoding="utf-8") == "a = 2\n"
