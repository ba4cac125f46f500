"""Scopes of the module tree and the bindings they hold."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from mustcc.common import Ident, NodeID, Path, Visibility


class ScopeKind(Enum):
    ROOT = "root"
    MODULE = "module"
    ENUM = "enum"


class Kind(Enum):
    """What a name is bound to."""

    MODULE = "module"
    FUNC = "func"
    STRUCT = "struct"
    ENUM = "enum"
    CONS = "cons"
    BUILTIN_TYPE = "builtin_type"


@dataclass(frozen=True)
class Import:
    """An import waiting to be resolved inside a module."""

    path: Path
    alias: Optional[Ident]
    is_glob: bool
    vis: Visibility


@dataclass(frozen=True)
class Local:
    """A symbol declared in the scope itself."""

    node_id: NodeID


@dataclass(frozen=True)
class Imported:
    """A symbol brought in by an exact import."""

    node_id: NodeID


@dataclass(frozen=True)
class GlobImported:
    """A symbol brought in by a glob import."""

    node_id: NodeID


@dataclass
class Ambiguous:
    """A name bound to several distinct symbols."""

    ids: set[NodeID] = field(default_factory=set)


Symbol = Union[Local, Imported, GlobImported, Ambiguous]


@dataclass
class Binding:
    vis: Visibility
    kind: Kind
    sym: Symbol


@dataclass
class Scope:
    """A namespace: the root, a module or an enum."""

    kind: ScopeKind
    parent_id: Optional[NodeID] = None
    items: dict[str, Binding] = field(default_factory=dict)
    imports: list[Import] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.kind is ScopeKind.ROOT:
            if self.parent_id is not None:
                raise ValueError("the root scope has no parent")
        elif self.parent_id is None:
            raise ValueError(f"a {self.kind.value} scope needs a parent")
        if self.imports and self.kind is not ScopeKind.MODULE:
            raise ValueError("only module scopes hold imports")

    def parent(self) -> Optional[NodeID]:
        """The enclosing scope; only the root has none."""
        return None if self.kind is ScopeKind.ROOT else self.parent_id

    def copy(self) -> Scope:
        """A copy whose bindings can be changed without touching this scope."""
        return Scope(
            self.kind,
            self.parent_id,
            {name: deepcopy(binding) for name, binding in self.items.items()},
            list(self.imports),
        )