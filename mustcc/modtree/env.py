"""State kept while the module tree is being built."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from mustcc import syntax
from mustcc.common import Ident, NodeID
from mustcc.context import Context
from mustcc.diagnostic import Diagnostic
from mustcc.errors import InternalError
from mustcc.modtree import messages
from mustcc.modtree.import_solve import solve
from mustcc.modtree.scope import Binding, Import, Local, Scope, ScopeKind
from mustcc.modtree.scope_info import ScopeInfo

_RESERVED = frozenset({"super", "self", "Self"})


class DuplicateItemError(Exception):
    """A name was declared twice in one scope; carries the diagnostic to report."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        text = "; ".join(label.message for label in diagnostic.labels)
        super().__init__(text or "item already bound")
        self.diagnostic = diagnostic


class ModTreeEnv:
    """Tracks the current namespace, all scopes and the files not yet loaded."""

    def __init__(self, file_map: Mapping[Iterable[str], syntax.Module]) -> None:
        self.scope_info = ScopeInfo()
        self.scope_info.insert(NodeID.of_root(), Scope(ScopeKind.ROOT))
        self._current_id = NodeID.of_root()
        self._current_path: list[str] = []
        self._file_map = {tuple(key): module for key, module in file_map.items()}

    def _current_scope(self) -> Scope:
        scope = self.scope_info.get(self._current_id)
        if scope is None:
            raise InternalError("current namespace has no scope")
        return scope

    def enter(self, name: str) -> None:
        """Make the namespace bound to ``name`` in the current scope current."""
        binding = self._current_scope().items.get(name)
        if binding is None or not isinstance(binding.sym, Local):
            raise InternalError(f"cannot enter namespace {name}")
        self._current_id = binding.sym.node_id
        self._current_path.append(name)

    def leave(self) -> None:
        """Return to the parent of the current namespace."""
        parent = self._current_scope().parent()
        if parent is None:
            raise InternalError("cannot leave from root")
        self._current_id = parent
        self._current_path.pop()

    def remove_module(self, path: Iterable[str]) -> Optional[syntax.Module]:
        """Take the file module with module path ``path``, if it is still there."""
        return self._file_map.pop(tuple(path), None)

    def add_item(self, name: Ident, binding: Binding) -> None:
        """Bind ``name`` in the current scope; raises DuplicateItemError if bound."""
        if name.data in _RESERVED:
            raise ValueError(f"{name.data} is a reserved name")
        items = self._current_scope().items
        if name.data in items:
            raise DuplicateItemError(messages.already_bound(name.pos, name.data))
        items[name.data] = binding

    def solve_imports(self, ctx: Context) -> ScopeInfo:
        return solve(ctx, self.scope_info)

    def current_module_id(self) -> NodeID:
        return self._current_id

    def add_scope(self, scope_id: NodeID, scope: Scope) -> None:
        self.scope_info.insert(scope_id, scope)

    def current_path(self) -> tuple[str, ...]:
        """Names of the namespaces entered so far, outermost first."""
        return tuple(self._current_path)

    def add_import(self, import_: Import) -> None:
        scope = self._current_scope()
        if scope.kind is not ScopeKind.MODULE:
            raise InternalError("imports can only be added to modules")
        scope.imports.append(import_)