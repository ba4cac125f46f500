"""Renders diagnostics as text reports pointing into the source."""

from __future__ import annotations

import sys
from typing import TextIO

from mustcc.diagnostic import Color, Diagnostic, DiagnosticRenderer, Label, Severity
from mustcc.sources import SourceMap

_ANSI = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "bright_black": 90,
    "bright_red": 91,
    "bright_green": 92,
    "bright_yellow": 93,
    "bright_blue": 94,
    "bright_magenta": 95,
    "bright_cyan": 96,
    "bright_white": 97,
}

_HEADERS = {
    Severity.ERROR: ("Error", "red"),
    Severity.WARNING: ("Warning", "yellow"),
}


def _source(sources: SourceMap, filename: str) -> str:
    text = sources.get(filename)
    if text is None:
        raise FileNotFoundError(f"error renderer can't get source for {filename}")
    return text


def _line_bounds(text: str, offset: int) -> tuple[int, int, int]:
    """Line number (from 1), start and end offsets of the line holding ``offset``."""
    offset = max(0, min(offset, len(text)))
    line_no = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    line_end = text.find("\n", offset)
    if line_end == -1:
        line_end = len(text)
    return line_no, line_start, line_end


class ReportRenderer(DiagnosticRenderer):
    """Writes diagnostics as annotated source excerpts to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stderr
        isatty = getattr(self.stream, "isatty", None)
        self.color = bool(isatty and isatty())

    def _paint(self, text: str, color: Color) -> str:
        if not self.color:
            return text
        if isinstance(color, tuple):
            r, g, b = color
            code = f"38;2;{r};{g};{b}"
        elif color in _ANSI:
            code = str(_ANSI[color])
        else:
            return text
        return f"\x1b[{code}m{text}\x1b[0m"

    def _label_lines(self, sources: SourceMap, label: Label) -> list[str]:
        text = _source(sources, label.pos.filename)
        line_no, line_start, line_end = _line_bounds(text, label.pos.start)
        start = max(line_start, min(label.pos.start, len(text)))
        width = max(1, min(label.pos.end, line_end) - start)
        gutter = " " * len(str(line_no))
        marker = self._paint(f"{'^' * width} {label.message}", label.color)
        return [
            f" {line_no} | {text[line_start:line_end]}",
            f" {gutter} | {' ' * (start - line_start)}{marker}",
        ]

    def format(self, diag: Diagnostic, sources: SourceMap) -> str:
        """Build the report text for ``diag``."""
        text = _source(sources, diag.pos.filename)
        line_no, line_start, _ = _line_bounds(text, diag.pos.start)
        column = max(0, min(diag.pos.start, len(text)) - line_start) + 1
        kind, color = _HEADERS[diag.severity]
        lines = [f"{self._paint(kind, color)}: {diag.pos.filename}:{line_no}:{column}"]
        for label in diag.labels:
            lines.extend(self._label_lines(sources, label))
        for note in diag.notes:
            first, *rest = note.split("\n")
            lines.append(f"  = note: {first}")
            lines.extend(f"          {line}" for line in rest)
        return "\n".join(lines) + "\n"

    def show(self, diag: Diagnostic, sources: SourceMap) -> None:
        self.stream.write(self.format(diag, sources))