"""Shared syntax elements: positions, identifiers, paths, node ids and attributes."""

from __future__ import annotations

import itertools
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar, Iterable, Iterator


@dataclass(frozen=True)
class Position:
    """A span of characters inside a named source file."""

    filename: str
    start: int
    end: int

    @classmethod
    def nowhere(cls) -> Position:
        """A position that points at no real source."""
        return cls("<nowhere>", 0, 0)

    @classmethod
    def generator(cls, filename: str) -> PositionGenerator:
        """Return a factory of positions inside ``filename``."""
        return PositionGenerator(filename)


@dataclass(frozen=True)
class PositionGenerator:
    """Creates positions that all belong to one file."""

    filename: str

    def make(self, start: int, end: int) -> Position:
        return Position(self.filename, start, end)


_BUILTIN_TYPE_IDS = {
    "never": 0,
    "bool": 1,
    "order": 2,
    "u8": 3,
    "u16": 4,
    "u32": 5,
    "u64": 6,
    "usize": 7,
    "i8": 8,
    "i16": 9,
    "i32": 10,
    "i64": 11,
    "isize": 12,
}


@dataclass(frozen=True, order=True)
class NodeID:
    """Identifier of a top-level declaration."""

    id: int

    _counter: ClassVar[Iterator[int]] = itertools.count(65)

    @classmethod
    def new_global(cls) -> NodeID:
        """Create a fresh, never before used node id."""
        return cls(next(cls._counter))

    @classmethod
    def of_root(cls) -> NodeID:
        """The id of the root scope."""
        return cls(0)

    @classmethod
    def of_builtin_type(cls, name: str) -> NodeID:
        """The fixed id of a builtin type."""
        try:
            return cls(_BUILTIN_TYPE_IDS[name])
        except KeyError:
            raise ValueError(f"not a builtin name: {name}") from None


@dataclass(frozen=True)
class Ident:
    """A name together with where it was written."""

    data: str
    pos: Position

    def __str__(self) -> str:
        return self.data


@dataclass
class Path:
    """A ``::``-separated sequence of identifiers."""

    data: deque = field(default_factory=deque)

    def __post_init__(self) -> None:
        self.data = deque(self.data)

    def __str__(self) -> str:
        return "::".join(ident.data for ident in self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[Ident]:
        return iter(self.data)

    def copy(self) -> Path:
        return Path(self.data)

    def push_back(self, ident: Ident) -> Path:
        """Return a new path with ``ident`` appended."""
        return Path([*self.data, ident])

    def pop_back(self) -> Path:
        """Return a new path without its last segment."""
        return Path(list(self.data)[:-1])

    def try_last(self) -> Ident | None:
        return self.data[-1] if self.data else None

    def if_single(self) -> Ident | None:
        """The only segment of the path, or None if there are more or none."""
        return self.data[0] if len(self.data) == 1 else None

    def push_inplace(self, ident: Ident) -> None:
        self.data.append(ident)

    def pop_inplace(self) -> Ident | None:
        return self.data.pop() if self.data else None

    def pop_front_inplace(self) -> Ident | None:
        return self.data.popleft() if self.data else None

    def push_front_inplace(self, ident: Ident) -> None:
        self.data.appendleft(ident)


@dataclass
class RAttribute:
    """A raw attribute such as ``@attribute(arg1, arg2)``."""

    name: Ident
    pos: Position
    args: list[str] = field(default_factory=list)


class Visibility(Enum):
    PRIVATE = "private"
    PUBLIC = "public"


_INT_TYPES = ("U8", "U16", "U32", "U64", "USIZE", "I8", "I16", "I32", "I64", "ISIZE")


def _builtin_names() -> Iterable[str]:
    yield from (
        "T_NEVER",
        "T_UNIT",
        "C_UNIT",
        "T_BOOL",
        "C_TRUE",
        "C_FALSE",
        "T_ORDER",
        "C_LT",
        "C_EQ",
        "C_GT",
    )
    yield from (f"T_{tp}" for tp in _INT_TYPES)
    for op in ("ADD", "SUB", "MUL", "DIV", "CMP"):
        yield from (f"F_{tp}_{op}" for tp in _INT_TYPES)


BuiltinName = IntEnum(
    "BuiltinName",
    [(name, value) for value, name in enumerate(_builtin_names())],
    module=__name__,
)


@dataclass(frozen=True)
class Attribute:
    """A recognised attribute: ``builtin`` (with its name), ``extern`` or ``no_mangle``."""

    name: str
    builtin: BuiltinName | None = None

    _NAMES: ClassVar[frozenset] = frozenset({"builtin", "extern", "no_mangle"})

    def __post_init__(self) -> None:
        if self.name not in self._NAMES:
            raise ValueError(f"unknown attribute: {self.name}")
        if (self.name == "builtin") != (self.builtin is not None):
            raise ValueError("only the builtin attribute carries a builtin name")