"""CLI entry point for the interactive mentor session."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import Callable, Sequence

from rich.console import Console

from terminal_mentor.content.store import ContentError, load_store
from terminal_mentor.core import workspace as workspace_mod
from terminal_mentor.core.logging import configure_logger
from terminal_mentor.core.workspace import WorkspaceError

from .config import (
    CONFIG_FILENAME,
    ConfigOverrides,
    InterfaceMode,
    LoadResult,
    MentorConfigError,
    load_config,
    write_template,
)
from .dispatcher import CommandDispatcher
from .session import MentorSession

LOGGER_NAME = "terminal_mentor"
LOG_FILENAME = "mentor.log"

SessionRunner = Callable[[MentorSession, LoadResult], int]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mentor start",
        description=(
            "Open the Terminal Mentor session: an interactive terminal for "
            "studying cybersecurity topics, labs and quizzes."
        ),
        epilog=(
            "Run `mentor start config init` to scaffold the default "
            "mentor.toml template."
        ),
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Use the line-mode console instead of the full-screen terminal.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=(
            "Path to a TOML config file (defaults to the workspace config "
            "directory)."
        ),
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root used for config and log files.",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        help="Load topics, quizzes and glossary from this JSON catalog.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed quiz and suggestion selection for a repeatable session.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the logging level for the session log (defaults to INFO).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror session log records to stderr.",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    runner: SessionRunner | None = None,
) -> int:
    args_list = list(argv) if argv is not None else list(sys.argv[1:])

    if args_list[:1] == ["config"]:
        return _handle_config(args_list[1:])

    parser = _build_parser()
    args = parser.parse_args(args_list)

    overrides = ConfigOverrides(
        mode=InterfaceMode.CONSOLE if args.plain else None,
        catalog=args.catalog,
        seed=args.seed,
        log_level=args.log_level,
    )
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except (MentorConfigError, WorkspaceError) as exc:
        parser.error(str(exc))

    config = load_result.config
    logger, log_path = configure_logger(
        LOGGER_NAME,
        log_dir=load_result.layout.path_for("logs"),
        level=config.log_level,
        verbose=args.verbose,
        filename=LOG_FILENAME,
    )

    try:
        store = load_store(config.catalog)
    except ContentError as exc:
        logger.error("Catalog rejected: %s", exc, extra={"event": "startup"})
        sys.stderr.write(f"{exc}\n")
        return 1

    rng = random.Random(config.seed)
    session = MentorSession(CommandDispatcher(store, rng=rng))
    logger.info(
        "Session started",
        extra={
            "event": "session_start",
            "mode": config.mode.value,
            "catalog": str(config.catalog or "bundled"),
            "topics": len(store.topics),
            "log_path": str(log_path),
        },
    )

    run = runner or _run_session
    exit_code = run(session, load_result)
    stats = session.stats
    logger.info(
        "Session finished",
        extra={
            "event": "session_end",
            "answered": stats.answered,
            "correct": stats.correct,
        },
    )
    return exit_code


def _run_session(session: MentorSession, load_result: LoadResult) -> int:
    config = load_result.config
    if config.mode is InterfaceMode.CONSOLE:
        from .view.console import run_console_session

        run_console_session(session, Console(), prompt=config.prompt)
        return 0

    from .view.terminal import run_terminal_session

    return run_terminal_session(session, prompt=config.prompt)


def _handle_config(argv: Sequence[str]) -> int:
    parser = _build_config_parser()
    args = parser.parse_args(argv)
    return _handle_config_init(args)


def _build_config_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mentor start config",
        description="Manage the mentor.toml configuration file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        help="Write the default mentor.toml template.",
    )
    init_parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Destination for the config TOML (defaults to the workspace "
            "config directory)."
        ),
    )
    init_parser.add_argument(
        "--workspace",
        type=Path,
        help="Workspace root override used to resolve the default path.",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the destination if a config already exists.",
    )
    return parser


def _handle_config_init(args: argparse.Namespace) -> int:
    try:
        target = _resolve_config_target(args)
    except WorkspaceError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    try:
        written = write_template(target, overwrite=args.force)
    except MentorConfigError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    sys.stdout.write(f"Wrote mentor config to {written}\n")
    return 0


def _resolve_config_target(args: argparse.Namespace) -> Path:
    if args.path is not None:
        candidate = args.path.expanduser()
        if not candidate.is_absolute():
            candidate = (Path.cwd() / candidate).resolve()
        return candidate

    layout = workspace_mod.ensure_workspace(path=args.workspace)
    return layout.path_for("config") / CONFIG_FILENAME


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
