"""Syntax tree produced by parsing the files of a project.

Files may still be undeclared at this stage; that is reported later, when
the module tree is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from mustcc.common import Ident, Path, Position, RAttribute, Visibility


def _check_usize(value: int, what: str) -> None:
    if not isinstance(value, int) or value < 0:
        raise ValueError(f"{what} must be a non-negative integer, got {value!r}")


# ==== Program ================================================================


@dataclass
class Program:
    """The parsed files of a project, keyed by their module path.

    ``foo/bar/mod.mst`` and ``foo/bar.mst`` both implement the module
    with path ``("foo", "bar")``.
    """

    file_map: dict[tuple[str, ...], Module] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.file_map = {tuple(key): module for key, module in self.file_map.items()}


# ==== Top level ==============================================================


@dataclass
class Module:
    """A module written inline: ``(pub) mod name { <items> }``."""

    name: Ident
    pos: Position
    visibility: Visibility = Visibility.PRIVATE
    attributes: list[RAttribute] = field(default_factory=list)
    items: list[ModuleItem] = field(default_factory=list)


@dataclass
class ModuleDecl:
    """A module implemented in a separate file: ``(pub) mod name;``."""

    name: Ident
    pos: Position
    visibility: Visibility = Visibility.PRIVATE
    attributes: list[RAttribute] = field(default_factory=list)


@dataclass
class Import:
    """An import: ``(pub) import foo::{bar::{test, baz as bas}, qux::*};``."""

    path: ImportPathNode
    pos: Position
    visibility: Visibility = Visibility.PRIVATE


@dataclass
class Func:
    """A function declaration; the body is absent for extern and builtin functions."""

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
    """A structure type declaration."""

    name: Ident
    pos: Position
    visibility: Visibility = Visibility.PRIVATE
    attributes: list[RAttribute] = field(default_factory=list)
    type_params: list[Ident] = field(default_factory=list)
    fields: list[tuple[Ident, RTypeNode]] = field(default_factory=list)


@dataclass
class Enum:
    """An enum type declaration."""

    name: Ident
    pos: Position
    visibility: Visibility = Visibility.PRIVATE
    attributes: list[RAttribute] = field(default_factory=list)
    type_params: list[Ident] = field(default_factory=list)
    constructors: list[Constructor] = field(default_factory=list)


@dataclass(frozen=True)
class ErrorItem:
    """A module item the parser could not recover."""


# ==== Import paths ===========================================================


@dataclass
class ImportPathNode:
    data: ImportPathData
    pos: Position


@dataclass(frozen=True)
class ImportAll:
    """Glob import of every item of a namespace: ``import std::*;``."""


@dataclass
class ImportExact:
    """One item with an optional alias: ``import std::io::println as pln;``."""

    name: Ident
    alias: Optional[Ident] = None


@dataclass
class ImportMany:
    """Several items of a namespace: ``import std::{io, mem, fs};``."""

    paths: list[ImportPathNode] = field(default_factory=list)


@dataclass
class ImportSegment:
    """A namespace segment followed by the rest of the path."""

    name: Ident
    rest: ImportPathNode


# ==== Function arguments =====================================================


@dataclass
class NamedArg:
    name: Ident
    tp: RTypeNode
    pos: Position
    is_mut: bool = False


@dataclass
class SelfArg:
    pos: Position
    is_mut: bool = False


@dataclass
class PtrSelfArg:
    pos: Position


@dataclass
class MutPtrSelfArg:
    pos: Position


# ==== Enum constructors ======================================================


@dataclass
class TupleConstructor:
    """A tuple variant, such as ``Sent(MsgID, String)``."""

    name: Ident
    pos: Position
    params: list[RTypeNode] = field(default_factory=list)
    attributes: list[RAttribute] = field(default_factory=list)


@dataclass
class StructConstructor:
    """A struct variant, such as ``Let { name: str, value: Val }``."""

    name: Ident
    pos: Position
    params: list[tuple[Ident, RTypeNode]] = field(default_factory=list)
    attributes: list[RAttribute] = field(default_factory=list)


# ==== Expressions ============================================================


@dataclass
class ExprNode:
    data: ExprData
    pos: Position


@dataclass(frozen=True)
class ErrorExpr:
    """An expression the parser could not recover."""


@dataclass
class VarExpr:
    path: Path


@dataclass
class NumberExpr:
    value: int

    def __post_init__(self) -> None:
        _check_usize(self.value, "numeric literal")


@dataclass
class CharExpr:
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or not 0 <= self.value <= 0xFF:
            raise ValueError(f"character literal must fit in a byte, got {self.value!r}")


@dataclass
class StringExpr:
    value: str


@dataclass
class TupleExpr:
    fields: list[ExprNode] = field(default_factory=list)


@dataclass
class ArrayInitExact:
    """``[1, 2, 3, 4, 5]``."""

    elements: list[ExprNode] = field(default_factory=list)


@dataclass
class ArrayInitRepeat:
    """``[42; 13]``."""

    element: ExprNode
    count: int

    def __post_init__(self) -> None:
        _check_usize(self.count, "array repeat count")


@dataclass
class IndexAccess:
    """``arr.(6)``."""

    array: ExprNode
    index: ExprNode


@dataclass
class FunCall:
    """A call; tuple variant constructors are calls too."""

    callee: ExprNode
    args: list[ExprNode] = field(default_factory=list)


@dataclass
class MethodCall:
    object: ExprNode
    method: Ident
    args: list[ExprNode] = field(default_factory=list)


@dataclass
class FieldAccess:
    object: ExprNode
    field: Ident


@dataclass
class ClosedBlock:
    """Semicolon-separated expressions whose value is unit."""

    exprs: list[ExprNode] = field(default_factory=list)


@dataclass
class OpenBlock:
    """Semicolon-separated expressions whose last one is the block's value."""

    exprs: list[ExprNode]
    last: ExprNode


@dataclass
class ReturnExpr:
    """Early return; without a value it returns unit."""

    value: Optional[ExprNode] = None


@dataclass
class LetExpr:
    name: Ident
    expr: ExprNode
    is_mut: bool = False
    tp: Optional[RTypeNode] = None


@dataclass
class MatchExpr:
    scrutinee: ExprNode
    clauses: list[MatchClause] = field(default_factory=list)


@dataclass
class RefExpr:
    expr: ExprNode


@dataclass
class RefMutExpr:
    expr: ExprNode


@dataclass
class DerefExpr:
    expr: ExprNode


@dataclass
class IfExpr:
    """If-then-else; a missing else branch is unit."""

    pred: ExprNode
    then: ExprNode
    otherwise: Optional[ExprNode] = None


@dataclass
class WhileExpr:
    pred: ExprNode
    body: ExprNode


@dataclass
class StructCons:
    path: Path
    fields: list[tuple[Ident, ExprNode]] = field(default_factory=list)


@dataclass
class AssignExpr:
    lval: ExprNode
    rval: ExprNode


@dataclass
class CastExpr:
    """``x as u8``."""

    expr: ExprNode
    tp: RTypeNode


@dataclass
class BuiltinExpr:
    """``@name(arg1, arg2)``."""

    name: Ident
    args: list[ExprNode] = field(default_factory=list)


# ==== Pattern matching =======================================================


@dataclass
class MatchClause:
    """``<pattern> => expr``."""

    pattern: PatternNode
    expr: ExprNode
    pos: Position


@dataclass
class PatternNode:
    data: PatternData
    pos: Position


@dataclass(frozen=True)
class WildcardPattern:
    """``_``: matches anything and discards it."""


@dataclass
class NumberPattern:
    value: int

    def __post_init__(self) -> None:
        _check_usize(self.value, "numeric pattern")


@dataclass
class VarPattern:
    name: Ident


@dataclass
class TuplePattern:
    items: list[PatternNode] = field(default_factory=list)


@dataclass
class TupleConsPattern:
    path: Path
    items: list[PatternNode] = field(default_factory=list)


# ==== Types ==================================================================


@dataclass
class RTypeNode:
    data: RTypeData
    pos: Position


@dataclass
class TypeVar:
    """A named type: ``usize``."""

    path: Path


@dataclass
class TupleType:
    items: list[RTypeNode] = field(default_factory=list)


@dataclass
class ArrayType:
    """``[5]i32``."""

    length: int
    element: RTypeNode

    def __post_init__(self) -> None:
        _check_usize(self.length, "array length")


@dataclass
class PtrType:
    target: RTypeNode


@dataclass
class MutPtrType:
    target: RTypeNode


@dataclass
class SliceType:
    element: RTypeNode


@dataclass
class MutSliceType:
    element: RTypeNode


@dataclass
class FunType:
    """``fn(i32, i32) -> bool``."""

    params: list[RTypeNode]
    ret: RTypeNode


@dataclass
class TypeApp:
    """``Vec<i32>``."""

    path: Path
    args: list[RTypeNode] = field(default_factory=list)


ModuleItem = Union[Module, ModuleDecl, Import, Func, Struct, Enum, ErrorItem]
ImportPathData = Union[ImportAll, ImportExact, ImportMany, ImportSegment]
FnArg = Union[NamedArg, SelfArg, PtrSelfArg, MutPtrSelfArg]
Constructor = Union[TupleConstructor, StructConstructor]
ExprData = Union[
    ErrorExpr, VarExpr, NumberExpr, CharExpr, StringExpr, TupleExpr,
    ArrayInitExact, ArrayInitRepeat, IndexAccess, FunCall, MethodCall,
    FieldAccess, ClosedBlock, OpenBlock, ReturnExpr, LetExpr, MatchExpr,
    RefExpr, RefMutExpr, DerefExpr, IfExpr, WhileExpr, StructCons,
    AssignExpr, CastExpr, BuiltinExpr,
]
PatternData = Union[
    WildcardPattern, NumberPattern, VarPattern, TuplePattern, TupleConsPattern
]
RTypeData = Union[
    TypeVar, TupleType, ArrayType, PtrType, MutPtrType, SliceType,
    MutSliceType, FunType, TypeApp,
]