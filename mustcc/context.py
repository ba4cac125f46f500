"""The compilation context: collected diagnostics and loaded sources."""

from __future__ import annotations

from mustcc.diagnostic import Diagnostic, DiagnosticRenderer
from mustcc.errors import InternalError
from mustcc.sources import SourceMap


class Context:
    """Collects diagnostics during compilation and renders them at the end."""

    def __init__(self, renderer: DiagnosticRenderer) -> None:
        self.renderer = renderer
        self.diagnostics: list[Diagnostic] = []
        self.sources = SourceMap()
        self.err_count = 0

    def finish(self) -> int:
        """Render every collected diagnostic and return the number of errors."""
        pending, self.diagnostics = self.diagnostics, []
        for diag in pending:
            try:
                self.renderer.show(diag, self.sources)
            except OSError as exc:
                raise InternalError(f"Failed to show diagnostic: {exc}") from exc
        return self.err_count

    def report(self, diag: Diagnostic) -> None:
        self.err_count += 1
        self.diagnostics.append(diag)

    def add_source(self, filename: str, source: str) -> None:
        self.sources.add(filename, source)

    def get_source(self, filename: str) -> str | None:
        return self.sources.get(filename)