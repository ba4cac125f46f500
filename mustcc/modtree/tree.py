"""Syntax tree after modules are assembled into one tree with node ids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from mustcc.common import Ident, NodeID, Position, RAttribute, Visibility
from mustcc.modtree.scope_info import ScopeInfo
from mustcc.syntax import ExprNode, FnArg, RTypeNode


@dataclass
class Module:
    id: NodeID
    name: Ident
    pos: Position
    visibility: Visibility = Visibility.PRIVATE
    attributes: list[RAttribute] = field(default_factory=list)
    items: list[ModuleItem] = field(default_factory=list)

    @classmethod
    def empty(cls) -> Module:
        """A placeholder module with a fresh id and no items."""
        return cls(
            id=NodeID.new_global(),
            name=Ident("<unknown>", Position.nowhere()),
            pos=Position.nowhere(),
        )


@dataclass
class Func:
    id: NodeID
    name: Ident
    pos: Position
    visibility: Visibility = Visibility.PRIVATE
    attributes: list[RAttribute] = field(default_factory=list)
    type_params: list[Ident] = field(default_factory=list)
    args: list[FnArg] = field(default_factory=list)
    ret_type: Optional[RTypeNode] = None
    body: Optional[ExprNode] = None


@dataclass
class Struct:
    id: NodeID
    name: Ident
    pos: Position
    visibility: Visibility = Visibility.PRIVATE
    attributes: list[RAttribute] = field(default_factory=list)
    type_params: list[Ident] = field(default_factory=list)
    fields: list[tuple[Ident, RTypeNode]] = field(default_factory=list)


@dataclass
class Enum:
    id: NodeID
    name: Ident
    pos: Position
    visibility: Visibility = Visibility.PRIVATE
    attributes: list[RAttribute] = field(default_factory=list)
    type_params: list[Ident] = field(default_factory=list)
    constructors: list[Constructor] = field(default_factory=list)


@dataclass
class TupleConstructor:
    id: NodeID
    name: Ident
    pos: Position
    args: list[RTypeNode] = field(default_factory=list)
    attributes: list[RAttribute] = field(default_factory=list)


@dataclass
class StructConstructor:
    id: NodeID
    name: Ident
    pos: Position
    fields: list[tuple[Ident, RTypeNode]] = field(default_factory=list)
    attributes: list[RAttribute] = field(default_factory=list)


@dataclass
class Program:
    """The module tree together with the scopes of all its namespaces."""

    scope_info: ScopeInfo
    ast: Module


ModuleItem = Union[Module, Func, Struct, Enum]
Constructor = Union[TupleConstructor, StructConstructor]