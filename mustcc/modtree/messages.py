"""Diagnostics reported while building the module tree."""

from __future__ import annotations

from mustcc.common import Position
from mustcc.diagnostic import Diagnostic, Label


def _labelled(pos: Position, message: str) -> Diagnostic:
    return Diagnostic.error(pos).with_label(Label(pos).with_msg(lambda: message))


def missing_module(pos: Position, name: str) -> Diagnostic:
    return _labelled(pos, f"missing module: {name}")


def unbound_variable(pos: Position, name: str) -> Diagnostic:
    return _labelled(pos, f"unbound variable: {name}")


def ambiguous_symbol(pos: Position, name: str) -> Diagnostic:
    return _labelled(pos, f"{name} is ambiguous")


def cannot_import_from(pos: Position, name: str) -> Diagnostic:
    return _labelled(pos, f"cannot import from {name}")


def private_item(pos: Position, name: str) -> Diagnostic:
    return _labelled(pos, f"{name} is private")


def already_bound(pos: Position, name: str) -> Diagnostic:
    return _labelled(pos, f"{name} is already bound")