import io

import pytest

from mustcc import syntax
from mustcc.common import Ident, NodeID, Path, Position, Visibility
from mustcc.context import Context
from mustcc.errors import InternalError
from mustcc.modtree.env import DuplicateItemError, ModTreeEnv
from mustcc.modtree.scope import (
    Binding,
    Import,
    Imported,
    Kind,
    Local,
    Scope,
    ScopeKind,
)
from mustcc.renderer import ReportRenderer

P = Position("env.mst", 0, 3)


def ident(name):
    return Ident(name, P)


def add_module(env, name, vis=Visibility.PUBLIC):
    nid = NodeID.new_global()
    env.add_item(ident(name), Binding(vis, Kind.MODULE, Local(nid)))
    env.add_scope(nid, Scope(ScopeKind.MODULE, parent_id=env.current_module_id()))
    return nid


def test_starts_at_root():
    env = ModTreeEnv({})
    assert env.current_module_id() == NodeID.of_root()
    assert env.current_path() == ()
    assert env.scope_info.get(NodeID.of_root()).kind is ScopeKind.ROOT


def test_enter_and_leave():
    env = ModTreeEnv({})
    nid = add_module(env, "foo")
    env.enter("foo")
    assert env.current_module_id() == nid
    assert env.current_path() == ("foo",)
    env.leave()
    assert env.current_module_id() == NodeID.of_root()
    assert env.current_path() == ()


def test_leave_from_root_fails():
    env = ModTreeEnv({})
    with pytest.raises(InternalError):
        env.leave()


def test_enter_imported_fails():
    env = ModTreeEnv({})
    env.add_item(
        ident("x"), Binding(Visibility.PUBLIC, Kind.MODULE, Imported(NodeID.new_global()))
    )
    with pytest.raises(InternalError):
        env.enter("x")


def test_duplicate_item_is_rejected():
    env = ModTreeEnv({})
    add_module(env, "foo")
    with pytest.raises(DuplicateItemError) as info:
        env.add_item(
            ident("foo"), Binding(Visibility.PUBLIC, Kind.FUNC, Local(NodeID.new_global()))
        )
    assert info.value.diagnostic.labels[0].message == "foo is already bound"


@pytest.mark.parametrize("name", ["super", "self", "Self"])
def test_reserved_names_are_rejected(name):
    env = ModTreeEnv({})
    with pytest.raises(ValueError):
        env.add_item(
            ident(name), Binding(Visibility.PUBLIC, Kind.FUNC, Local(NodeID.new_global()))
        )


def test_remove_module_takes_it_once():
    module = syntax.Module(ident("src"), P)
    env = ModTreeEnv({("src",): module})
    assert env.remove_module(["src"]) is module
    assert env.remove_module(["src"]) is None


def test_add_import_to_module():
    env = ModTreeEnv({})
    nid = add_module(env, "foo")
    env.enter("foo")
    imp = Import(Path([ident("bar")]), None, False, Visibility.PRIVATE)
    env.add_import(imp)
    assert env.scope_info.get(nid).imports == [imp]


def test_add_import_to_root_fails():
    env = ModTreeEnv({})
    imp = Import(Path([ident("bar")]), None, False, Visibility.PRIVATE)
    with pytest.raises(InternalError):
        env.add_import(imp)


def test_solve_imports_resolves():
    env = ModTreeEnv({})
    add_module(env, "a")
    env.enter("a")
    fid = NodeID.new_global()
    env.add_item(ident("f"), Binding(Visibility.PUBLIC, Kind.FUNC, Local(fid)))
    env.leave()
    bid = add_module(env, "b")
    env.enter("b")
    env.add_import(
        Import(Path([ident("a"), ident("f")]), None, False, Visibility.PRIVATE)
    )
    ctx = Context(ReportRenderer(io.StringIO()))
    result = env.solve_imports(ctx)
    assert result.get(bid).items["f"].sym == Imported(fid)
    assert ctx.err_count == 0