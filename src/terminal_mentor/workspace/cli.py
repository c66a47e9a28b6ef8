"""CLI entry point for workspace bootstrap."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Mapping, Sequence

from terminal_mentor.core import workspace as workspace_mod
from terminal_mentor.core.workspace import WorkspaceError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mentor init",
        description=(
            "Create the Terminal Mentor workspace with its config and logs "
            "directories."
        ),
    )
    parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Override the workspace root (defaults to TERMINAL_MENTOR_HOME "
            "or ~/.terminal-mentor)."
        ),
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output on success.",
    )
    return parser


def _status(created: Mapping[str, bool], key: str) -> str:
    return "created" if created.get(key, False) else "exists"


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        layout = workspace_mod.ensure_workspace(path=args.path)
    except WorkspaceError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    if args.quiet:
        return 0

    lines = [f"Workspace ready at {layout.home} ({_status(layout.created, 'home')})"]
    if layout.directories:
        lines.append("Subdirectories:")
        width = max(len(name) for name in layout.directories)
        for name, directory in layout.items():
            lines.append(
                f"  {name.ljust(width)}  {directory} "
                f"({_status(layout.created, name)})"
            )
    sys.stdout.write("\n".join(lines) + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
