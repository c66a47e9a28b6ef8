"""Shared testing fixtures for the terminal_mentor test suite."""

from .content import ScriptedRandom, sample_catalog  # noqa: F401
from .workspace import WorkspaceBuilder  # noqa: F401

__all__ = [
    "ScriptedRandom",
    "WorkspaceBuilder",
    "sample_catalog",
]
