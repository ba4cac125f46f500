"""All scopes of the module tree and path lookup through them."""

from __future__ import annotations

from copy import deepcopy
from typing import ItemsView, Optional

from mustcc.common import NodeID, Path, Visibility
from mustcc.diagnostic import Diagnostic
from mustcc.errors import InternalError
from mustcc.modtree import messages
from mustcc.modtree.scope import Ambiguous, Binding, Imported, Kind, Scope


class PathError(Exception):
    """A path could not be resolved; carries the diagnostic to report."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        text = "; ".join(label.message for label in diagnostic.labels)
        super().__init__(text or "path resolution failed")
        self.diagnostic = diagnostic


class ScopeInfo:
    """The scopes of every namespace, keyed by node id."""

    def __init__(self) -> None:
        self._data: dict[NodeID, Scope] = {}

    def insert(self, scope_id: NodeID, scope: Scope) -> None:
        self._data[scope_id] = scope

    def get(self, scope_id: NodeID) -> Optional[Scope]:
        return self._data.get(scope_id)

    def items(self) -> ItemsView[NodeID, Scope]:
        return self._data.items()

    def copy(self) -> ScopeInfo:
        """A copy whose scopes can be changed independently."""
        other = ScopeInfo()
        other._data = {scope_id: scope.copy() for scope_id, scope in self._data.items()}
        return other

    def __contains__(self, scope_id: object) -> bool:
        return scope_id in self._data

    def __len__(self) -> int:
        return len(self._data)

    def find_path(self, scope_id: NodeID, path: Path, private_guard: bool) -> Binding:
        """Return the binding that ``path`` names when looked up in ``scope_id``.

        ``private_guard`` allows one private access, as used for items of the
        same module or a parent. Ambiguous bindings are never returned; a
        ``PathError`` is raised instead, as for every other failure.
        """
        rest = path.copy()
        name = rest.pop_front_inplace()
        if name is None:
            raise ValueError("cannot resolve an empty path")
        namespace = self._data[scope_id]
        binding = namespace.items.get(name.data)

        if binding is None:
            if not private_guard:
                raise PathError(messages.unbound_variable(name.pos, name.data))
            if name.data == "super":
                parent = namespace.parent()
                if parent is None:
                    raise InternalError("the root scope has no parent")
                if not rest:
                    return Binding(Visibility.PRIVATE, Kind.MODULE, Imported(parent))
                return self.find_path(parent, rest, private_guard)
            rest.push_front_inplace(name)
            return self.find_path(NodeID.of_root(), rest, False)

        if binding.vis is Visibility.PRIVATE and not private_guard:
            raise PathError(messages.private_item(name.pos, name.data))

        if not rest:
            if isinstance(binding.sym, Ambiguous):
                raise PathError(messages.ambiguous_symbol(name.pos, name.data))
            return deepcopy(binding)

        if binding.kind is Kind.FUNC:
            raise PathError(
                messages.cannot_import_from(name.pos, name.data).with_note(
                    f"{name.data} is a function"
                )
            )
        if binding.kind is Kind.CONS:
            raise PathError(
                messages.cannot_import_from(name.pos, name.data).with_note(
                    f"{name.data} is an enum constructor"
                )
            )
        if binding.kind is Kind.BUILTIN_TYPE:
            raise InternalError(f"builtin type {name.data} cannot be a namespace")
        if isinstance(binding.sym, Ambiguous):
            raise PathError(messages.ambiguous_symbol(name.pos, name.data))

        next_guard = binding.kind in (Kind.STRUCT, Kind.ENUM)
        return self.find_path(binding.sym.node_id, rest, next_guard)