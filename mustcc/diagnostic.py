"""Diagnostics: errors in the user's code, with labels and notes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Union

from mustcc.common import Position
from mustcc.sources import SourceMap

Color = Union[str, tuple]


class Severity(Enum):
    """Severity of a diagnostic; any error aborts compilation."""

    ERROR = "error"
    WARNING = "warning"


def _no_message() -> str:
    return "<no message for this error>"


@dataclass
class Label:
    """A message attached to a span of source, produced lazily."""

    pos: Position
    msg: Callable[[], str] = field(default=_no_message)
    color: Color = "red"

    def with_msg(self, msg: Callable[[], str]) -> Label:
        return replace(self, msg=msg)

    @property
    def message(self) -> str:
        return self.msg()


@dataclass
class Diagnostic:
    """A report about the user's code."""

    severity: Severity
    pos: Position
    labels: list[Label] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @classmethod
    def error(cls, pos: Position) -> Diagnostic:
        return cls(Severity.ERROR, pos)

    def with_label(self, label: Label) -> Diagnostic:
        return replace(self, labels=[*self.labels, label])

    def with_note(self, note: str) -> Diagnostic:
        return replace(self, notes=[*self.notes, note])


class DiagnosticRenderer(ABC):
    """A sink that presents diagnostics to the user."""

    @abstractmethod
    def show(self, diag: Diagnostic, sources: SourceMap) -> None:
        """Present ``diag``; raises OSError if it cannot be shown."""