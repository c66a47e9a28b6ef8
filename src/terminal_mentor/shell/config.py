"""Configuration loader for ``mentor start``."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from terminal_mentor.core import config as core_config
from terminal_mentor.core import workspace as workspace_mod

CONFIG_FILENAME = "mentor.toml"
CONFIG_ENV = "TERMINAL_MENTOR_CONFIG"
TEMPLATE_PACKAGE = "terminal_mentor.shell"
TEMPLATE_FILENAME = "template.toml"
ENV_PREFIX = "TERMINAL_MENTOR_"

DEFAULT_PROMPT = "usuario@mentor:~$"
_DEFAULT_LOG_LEVEL = "INFO"


class MentorConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


class InterfaceMode(Enum):
    """How the session is presented."""

    TUI = "tui"
    CONSOLE = "console"

    @classmethod
    def from_value(cls, value: str) -> "InterfaceMode":
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        expected = ", ".join(member.value for member in cls)
        raise MentorConfigError(
            f"Unknown interface mode '{value}'. Expected one of: {expected}."
        )


@dataclass(frozen=True)
class MentorConfig:
    """Fully resolved settings for one session."""

    mode: InterfaceMode
    prompt: str
    catalog: Optional[Path]
    seed: Optional[int]
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of file/env options."""

    mode: Optional[InterfaceMode] = None
    prompt: Optional[str] = None
    catalog: Optional[Path] = None
    seed: Optional[int] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    config: MentorConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence CLI > env > TOML > defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    layout = workspace_mod.ensure_workspace(env=env_map, path=workspace_path)
    default_path = layout.path_for("config") / CONFIG_FILENAME
    requested_path = _resolve_config_path(
        config_path=config_path, env_map=env_map, default_path=default_path
    )

    options = _default_table()
    loaded_path: Optional[Path] = None
    if requested_path.exists():
        loaded_path = requested_path
        try:
            core_config.merge_defaults(
                options, core_config.load_toml(requested_path)
            )
        except core_config.ConfigError as exc:
            raise MentorConfigError(str(exc)) from exc
    elif config_path is not None or _parse_env_string(env_map, "CONFIG"):
        raise MentorConfigError(f"Config file not found: {requested_path}")

    mode = _resolve_mode(
        overrides.mode,
        _parse_env_string(env_map, "MODE"),
        options["interface"]["mode"],
    )
    prompt = _resolve_prompt(
        _pick_first(
            overrides.prompt,
            _parse_env_string(env_map, "PROMPT"),
            options["interface"]["prompt"],
        )
    )
    catalog = _resolve_catalog(
        _pick_first(
            overrides.catalog,
            _parse_env_string(env_map, "CATALOG"),
            options["content"]["catalog"],
        ),
        layout=layout,
    )
    seed = _resolve_seed(
        _pick_first(
            overrides.seed,
            _parse_env_string(env_map, "SEED"),
            options["session"]["seed"],
        )
    )
    log_level = _resolve_log_level(
        _pick_first(
            overrides.log_level,
            _parse_env_string(env_map, "LOG_LEVEL"),
            options["logging"]["level"],
        )
    )

    config = MentorConfig(
        mode=mode,
        prompt=prompt,
        catalog=catalog,
        seed=seed,
        log_level=log_level,
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def read_template() -> str:
    resource = resources.files(TEMPLATE_PACKAGE).joinpath(TEMPLATE_FILENAME)
    return resource.read_text(encoding="utf-8")


def write_template(path: Path, *, overwrite: bool = False) -> Path:
    """Write the packaged ``mentor.toml`` template to ``path``."""

    try:
        return core_config.write_toml_template(
            path, template=read_template(), overwrite=overwrite
        )
    except core_config.ConfigError as exc:
        raise MentorConfigError(str(exc)) from exc


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    return {
        "interface": {
            "mode": InterfaceMode.TUI.value,
            "prompt": DEFAULT_PROMPT,
        },
        "content": {"catalog": ""},
        "session": {"seed": -1},
        "logging": {"level": _DEFAULT_LOG_LEVEL},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = _parse_env_string(env_map, "CONFIG")
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _resolve_mode(
    override: Optional[InterfaceMode],
    env_value: Optional[str],
    file_value: object,
) -> InterfaceMode:
    if override is not None:
        return override
    candidate = env_value if env_value is not None else file_value
    if not isinstance(candidate, str):
        raise MentorConfigError("interface.mode must be a string.")
    return InterfaceMode.from_value(candidate)


def _resolve_prompt(candidate: object) -> str:
    if not isinstance(candidate, str) or not candidate.strip():
        raise MentorConfigError("interface.prompt must be a non-empty string.")
    return candidate.strip()


def _resolve_catalog(
    candidate: object, *, layout: workspace_mod.WorkspaceLayout
) -> Optional[Path]:
    if isinstance(candidate, str):
        if not candidate.strip():
            return None
        candidate = Path(candidate.strip())
    if not isinstance(candidate, Path):
        raise MentorConfigError("content.catalog must be a string path.")
    candidate = candidate.expanduser()
    if not candidate.is_absolute():
        return (layout.home / candidate).resolve()
    return candidate


def _resolve_seed(candidate: object) -> Optional[int]:
    if isinstance(candidate, bool):
        raise MentorConfigError("session.seed must be an integer.")
    if isinstance(candidate, str):
        try:
            candidate = int(candidate)
        except ValueError as exc:
            raise MentorConfigError(
                f"session.seed must be an integer, got '{candidate}'."
            ) from exc
    if not isinstance(candidate, int):
        raise MentorConfigError("session.seed must be an integer.")
    return candidate if candidate >= 0 else None


def _resolve_log_level(candidate: object) -> str:
    if not isinstance(candidate, str):
        raise MentorConfigError("logging.level must be a string.")
    level = candidate.strip()
    if not level:
        raise MentorConfigError("logging.level must be a non-empty string.")
    return level.upper()


def _parse_env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
