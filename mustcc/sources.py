"""A registry of source texts keyed by file name."""

from __future__ import annotations


class SourceMap:
    """Maps file names to the text loaded from them."""

    def __init__(self) -> None:
        self._map: dict[str, str] = {}

    def add(self, filename: str, source: str) -> None:
        """Register ``source`` under ``filename``; a name may be added only once."""
        if filename in self._map:
            raise ValueError("adding the same filepath twice to source map")
        self._map[filename] = source

    def get(self, filename: str) -> str | None:
        return self._map.get(filename)

    def __contains__(self, filename: object) -> bool:
        return filename in self._map

    def __len__(self) -> int:
        return len(self._map)