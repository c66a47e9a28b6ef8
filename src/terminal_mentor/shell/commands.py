"""Command vocabulary of the mentor shell.

Every accepted token (canonical name or localized synonym) maps to a single
``CommandKind``. The dispatcher only ever branches on the enumeration.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Sequence


class CommandKind(Enum):
    HELP = "help"
    TOPICS = "topics"
    LESSON = "lesson"
    RESOURCES = "resources"
    LABS = "labs"
    QUIZ = "quiz"
    GLOSSARY = "glossary"
    SEARCH = "search"
    ROADMAP = "roadmap"
    SUGGEST = "suggest"
    STATUS = "status"
    QUESTION = "question"
    CLEAR = "clear"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CommandSpec:
    """Help-table row plus the synonyms that reach the same handler."""

    kind: CommandKind
    usage: str
    summary: str
    aliases: tuple[str, ...] = ()

    @property
    def tokens(self) -> tuple[str, ...]:
        return (self.kind.value, *self.aliases)


COMMAND_SPECS: Sequence[CommandSpec] = (
    CommandSpec(
        CommandKind.HELP, "help", "Muestra los comandos disponibles.", ("?", "ayuda")
    ),
    CommandSpec(
        CommandKind.TOPICS,
        "topics",
        "Lista temáticas principales y resumen.",
        ("temas",),
    ),
    CommandSpec(
        CommandKind.LESSON,
        "lesson <tema>",
        "Explica un tema en profundidad.",
        ("tema", "topic", "leccion", "lección"),
    ),
    CommandSpec(
        CommandKind.RESOURCES,
        "resources [tema]",
        "Recursos recomendados por tema.",
        ("recursos",),
    ),
    CommandSpec(
        CommandKind.LABS,
        "labs [tema]",
        "Laboratorios prácticos guiados.",
        ("lab", "laboratorios"),
    ),
    CommandSpec(
        CommandKind.QUIZ,
        "quiz [tema]",
        "Pregunta de repaso con opción a pista.",
        ("reto",),
    ),
    CommandSpec(
        CommandKind.GLOSSARY,
        "glossary <término>",
        "Definición rápida de conceptos.",
        ("glosario",),
    ),
    CommandSpec(
        CommandKind.QUESTION,
        "question <tu duda>",
        "Consulta libre con contexto.",
        ("pregunta",),
    ),
    CommandSpec(
        CommandKind.SEARCH,
        "search <palabra>",
        "Busca temas relacionados.",
        ("buscar",),
    ),
    CommandSpec(
        CommandKind.ROADMAP, "roadmap", "Ruta de aprendizaje sugerida.", ("ruta",)
    ),
    CommandSpec(
        CommandKind.SUGGEST,
        "suggest",
        "Actividad del día para practicar.",
        ("actividad",),
    ),
    CommandSpec(
        CommandKind.STATUS,
        "status",
        "Estadísticas de sesión y motivación.",
        ("estado",),
    ),
    CommandSpec(
        CommandKind.CLEAR,
        "clear",
        "Limpia el historial de la terminal.",
        ("cls", "limpiar"),
    ),
)


def _build_alias_table(specs: Sequence[CommandSpec]) -> dict[str, CommandKind]:
    table: dict[str, CommandKind] = {}
    for spec in specs:
        for token in spec.tokens:
            if token in table:
                raise ValueError(f"Command token '{token}' is registered twice.")
            table[token] = spec.kind
    return table


ALIASES: Mapping[str, CommandKind] = _build_alias_table(COMMAND_SPECS)

HELP_COLUMN_WIDTH = 18


def resolve_command(token: str) -> CommandKind:
    """Map a lower-cased command token to its kind (``UNKNOWN`` on miss)."""

    return ALIASES.get(token.strip().lower(), CommandKind.UNKNOWN)


def format_help_lines() -> list[str]:
    lines = ["Comandos disponibles:"]
    for spec in COMMAND_SPECS:
        lines.append(f"{spec.usage.ljust(HELP_COLUMN_WIDTH)} - {spec.summary}")
    return lines
