"""Resolution of imports across the module tree by fixed-point iteration."""

from __future__ import annotations

from mustcc.common import NodeID
from mustcc.context import Context
from mustcc.modtree import messages
from mustcc.modtree.scope import (
    Ambiguous,
    Binding,
    GlobImported,
    Import,
    Imported,
    Local,
    ScopeKind,
)
from mustcc.modtree.scope_info import PathError, ScopeInfo


def solve(ctx: Context, scope_info: ScopeInfo) -> ScopeInfo:
    """Return a copy of ``scope_info`` with every resolvable import bound.

    Imports are applied repeatedly until nothing changes, so imports of
    imported names are followed. Imports that still fail are reported to
    ``ctx``. The given ``scope_info`` is left untouched.
    """
    tree = scope_info.copy()
    changed = True
    while changed:
        snapshot = tree.copy()
        changed = False
        for scope_id, scope in tree.items():
            if scope.kind is not ScopeKind.MODULE:
                continue
            for import_ in scope.imports:
                changed |= _resolve_import(snapshot, scope.items, scope_id, import_)

    for scope_id, scope in tree.items():
        if scope.kind is not ScopeKind.MODULE:
            continue
        for import_ in scope.imports:
            _report_import_errors(ctx, tree, scope_id, import_)
    return tree


def _report_import_errors(
    ctx: Context, tree: ScopeInfo, scope_id: NodeID, import_: Import
) -> None:
    try:
        binding = tree.find_path(scope_id, import_.path, True)
    except PathError as exc:
        ctx.report(exc.diagnostic)
        return
    if import_.is_glob and tree.get(binding.sym.node_id) is None:
        name = import_.alias if import_.alias is not None else import_.path.try_last()
        ctx.report(
            messages.cannot_import_from(name.pos, name.data).with_note(
                "it is not a namespace"
            )
        )


def _add_candidate(sym: Ambiguous, node_id: NodeID) -> bool:
    if node_id in sym.ids:
        return False
    sym.ids.add(node_id)
    return True


def _resolve_import(
    tree: ScopeInfo, items: dict[str, Binding], scope_id: NodeID, import_: Import
) -> bool:
    """Apply one import to ``items``; return whether anything changed."""
    try:
        binding = tree.find_path(scope_id, import_.path, True)
    except PathError:
        return False
    target = binding.sym.node_id

    if not import_.is_glob:
        name = (
            import_.alias.data
            if import_.alias is not None
            else import_.path.try_last().data
        )
        existing = items.get(name)
        if existing is None:
            items[name] = Binding(import_.vis, binding.kind, Imported(target))
            return True
        sym = existing.sym
        if isinstance(sym, GlobImported):
            # an exact import shadows a glob import
            existing.sym = Imported(sym.node_id)
            return True
        if isinstance(sym, (Local, Imported)):
            if sym.node_id == target:
                return False
            existing.sym = Ambiguous({sym.node_id, target})
            return True
        return _add_candidate(sym, target)

    namespace = tree.get(target)
    if namespace is None:
        return False
    changed = False
    for name, member in sorted(namespace.items.items()):
        if isinstance(member.sym, Ambiguous):
            continue
        member_id = member.sym.node_id
        existing = items.get(name)
        if existing is None:
            items[name] = Binding(import_.vis, member.kind, GlobImported(member_id))
            changed = True
            continue
        sym = existing.sym
        if isinstance(sym, (Local, Imported)):
            # a glob import cannot shadow local or exact-imported names
            continue
        if isinstance(sym, GlobImported):
            if sym.node_id != member_id:
                existing.sym = Ambiguous({sym.node_id, member_id})
                changed = True
            continue
        changed |= _add_candidate(sym, member_id)
    return changed