"""Diagnostics collected while transforming a single file.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..syntax import Node


class Severity(Enum):
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A manual follow-up item reported by a pass.

    Soft-aborts and unmapped assertions produce diagnostics; they never
    change the transformed output.
    """

    pass_name: str
    message: str
    severity: Severity = Severity.INFO
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        location = f"{self.line}:{self.column}: " if self.line is not None else ""
        return f"{location}[{self.pass_name}] {self.message}"


@dataclass
class TransformReport:
    """Per-run accumulation of diagnostics and per-pass change counts."""

    source_file: str = "<string>"
    diagnostics: list[Diagnostic] = field(default_factory=list)
    changes: dict[str, int] = field(default_factory=dict)

    def add(self, pass_name: str, message: str, severity: Severity = Severity.INFO, node: Node | None = None) -> None:
        position = node.position if node is not None else None
        line, column = position if position is not None else (None, None)
        self.diagnostics.append(Diagnostic(pass_name, message, severity, line, column))

    def record(self, pass_name: str, count: int) -> None:
        self.changes[pass_name] = self.changes.get(pass_name, 0) + count

    @property
    def total_changes(self) -> int:
        return sum(self.changes.values())

    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    def messages(self, severity: Severity | None = None) -> list[str]:
        """Diagnostics rendered as strings, prefixed with the source file.

        Only diagnostics of ``severity`` are rendered when one is given.
        """
        return [f"{self.source_file}:{d}" for d in self.diagnostics if severity is None or d.severity is severity]
