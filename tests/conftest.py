from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import ScriptedRandom, WorkspaceBuilder, sample_catalog  # noqa: E402

from terminal_mentor.content.store import ContentStore  # noqa: E402
from terminal_mentor.shell.dispatcher import CommandDispatcher  # noqa: E402
from terminal_mentor.shell.session import MentorSession  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Keep every test away from the real home workspace and user env."""

    for key in (
        "TERMINAL_MENTOR_CONFIG",
        "TERMINAL_MENTOR_MODE",
        "TERMINAL_MENTOR_PROMPT",
        "TERMINAL_MENTOR_CATALOG",
        "TERMINAL_MENTOR_SEED",
        "TERMINAL_MENTOR_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TERMINAL_MENTOR_HOME", str(tmp_path / "mentor-home"))


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    return WorkspaceBuilder(tmp_path)


@pytest.fixture
def store() -> ContentStore:
    return ContentStore.from_mapping(sample_catalog())


@pytest.fixture
def rng() -> ScriptedRandom:
    return ScriptedRandom()


@pytest.fixture
def dispatcher(store: ContentStore, rng: ScriptedRandom) -> CommandDispatcher:
    return CommandDispatcher(store, rng=rng)


@pytest.fixture
def make_session(
    store: ContentStore,
) -> Callable[..., MentorSession]:
    """Build a session whose random picks follow ``indices``."""

    def _factory(*indices: int) -> MentorSession:
        return MentorSession(
            CommandDispatcher(store, rng=ScriptedRandom(indices))
        )

    return _factory


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo ``configure_logger`` side effects so caplog keeps working."""

    yield
    logger = logging.getLogger("terminal_mentor")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
