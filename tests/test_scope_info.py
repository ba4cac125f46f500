import pytest

from mustcc.common import Ident, NodeID, Path, Position, Visibility
from mustcc.modtree import messages
from mustcc.modtree.scope import Ambiguous, Binding, Imported, Kind, Local, Scope, ScopeKind
from mustcc.modtree.scope_info import PathError, ScopeInfo

POS = Position("src/main.mst", 0, 3)
PUB, PRIV = Visibility.PUBLIC, Visibility.PRIVATE


def path(*names):
    return Path([Ident(n, POS) for n in names])


def message(diag):
    return diag.labels[0].message


@pytest.fixture
def tree():
    root = NodeID.of_root()
    ids = {name: NodeID.new_global() for name in ("src", "foo", "bar", "m", "x", "y", "E", "Cons")}
    info = ScopeInfo()
    info.insert(root, Scope(ScopeKind.ROOT, items={
        "src": Binding(PUB, Kind.MODULE, Local(ids["src"])),
    }))
    info.insert(ids["src"], Scope(ScopeKind.MODULE, root, items={
        "foo": Binding(PUB, Kind.FUNC, Local(ids["foo"])),
        "bar": Binding(PRIV, Kind.FUNC, Local(ids["bar"])),
        "m": Binding(PRIV, Kind.MODULE, Local(ids["m"])),
        "E": Binding(PUB, Kind.ENUM, Local(ids["E"])),
        "amb": Binding(PUB, Kind.FUNC, Ambiguous({ids["x"], ids["y"]})),
        "Cons": Binding(PUB, Kind.CONS, Local(ids["Cons"])),
    }))
    info.insert(ids["m"], Scope(ScopeKind.MODULE, ids["src"], items={
        "x": Binding(PUB, Kind.FUNC, Local(ids["x"])),
        "y": Binding(PRIV, Kind.FUNC, Local(ids["y"])),
    }))
    info.insert(ids["E"], Scope(ScopeKind.ENUM, ids["src"], items={
        "Cons": Binding(PRIV, Kind.CONS, Local(ids["Cons"])),
    }))
    return info, ids


def test_find_local_item(tree):
    info, ids = tree
    binding = info.find_path(ids["src"], path("foo"), True)
    assert binding.sym == Local(ids["foo"])
    assert binding.kind is Kind.FUNC


def test_find_through_private_module(tree):
    info, ids = tree
    binding = info.find_path(ids["src"], path("m", "x"), True)
    assert binding.sym == Local(ids["x"])


def test_private_item_of_child_rejected(tree):
    info, ids = tree
    with pytest.raises(PathError) as err:
        info.find_path(ids["src"], path("m", "y"), True)
    assert message(err.value.diagnostic) == message(messages.private_item(POS, "y"))


def test_cannot_import_from_function(tree):
    info, ids = tree
    with pytest.raises(PathError) as err:
        info.find_path(ids["src"], path("foo", "z"), True)
    assert message(err.value.diagnostic) == message(messages.cannot_import_from(POS, "foo"))
    assert err.value.diagnostic.notes == ["foo is a function"]


def test_cannot_import_from_constructor(tree):
    info, ids = tree
    with pytest.raises(PathError) as err:
        info.find_path(ids["src"], path("Cons", "z"), True)
    assert err.value.diagnostic.notes == ["Cons is an enum constructor"]


def test_unbound_without_guard(tree):
    info, ids = tree
    with pytest.raises(PathError) as err:
        info.find_path(ids["src"], path("nope"), False)
    assert message(err.value.diagnostic) == message(messages.unbound_variable(POS, "nope"))


def test_unbound_with_guard_falls_back_to_root(tree):
    info, ids = tree
    with pytest.raises(PathError) as err:
        info.find_path(ids["m"], path("nope"), True)
    assert message(err.value.diagnostic) == message(messages.unbound_variable(POS, "nope"))


def test_ambiguous_symbol_rejected(tree):
    info, ids = tree
    with pytest.raises(PathError) as err:
        info.find_path(ids["src"], path("amb"), True)
    assert message(err.value.diagnostic) == message(messages.ambiguous_symbol(POS, "amb"))


def test_super_alone_names_parent(tree):
    info, ids = tree
    binding = info.find_path(ids["m"], path("super"), True)
    assert binding == Binding(PRIV, Kind.MODULE, Imported(ids["src"]))


def test_super_then_item(tree):
    info, ids = tree
    binding = info.find_path(ids["m"], path("super", "bar"), True)
    assert binding.sym == Local(ids["bar"])


def test_absolute_path_from_root(tree):
    info, ids = tree
    assert info.find_path(ids["m"], path("src", "foo"), True).sym == Local(ids["foo"])
    with pytest.raises(PathError):
        info.find_path(ids["m"], path("src", "bar"), True)


def test_enum_allows_private_constructor(tree):
    info, ids = tree
    binding = info.find_path(ids["src"], path("E", "Cons"), False)
    assert binding.sym == Local(ids["Cons"])


def test_find_path_leaves_argument_intact(tree):
    info, ids = tree
    query = path("m", "x")
    info.find_path(ids["src"], query, True)
    assert str(query) == "m::x"


def test_returned_binding_is_a_copy(tree):
    info, ids = tree
    binding = info.find_path(ids["src"], path("foo"), True)
    binding.sym = Local(ids["bar"])
    assert info.get(ids["src"]).items["foo"].sym == Local(ids["foo"])


def test_empty_path_rejected(tree):
    info, ids = tree
    with pytest.raises(ValueError):
        info.find_path(ids["src"], Path(), True)


def test_unknown_scope_rejected(tree):
    info, _ = tree
    with pytest.raises(KeyError):
        info.find_path(NodeID.new_global(), path("foo"), True)


def test_copy_is_independent(tree):
    info, ids = tree
    copied = info.copy()
    copied.get(ids["src"]).items.pop("foo")
    copied.get(ids["src"]).items["amb"].sym.ids.clear()
    assert "foo" in info.get(ids["src"]).items
    assert info.get(ids["src"]).items["amb"].sym.ids == {ids["x"], ids["y"]}
    assert {k for k, _ in copied.items()} == {k for k, _ in info.items()}


def test_get_missing_scope_is_none(tree):
    info, ids = tree
    assert info.get(NodeID.new_global()) is None
    assert info.get(ids["m"]).parent() == ids["src"]