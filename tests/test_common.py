import pytest

from mustcc.common import (
    Attribute,
    BuiltinName,
    Ident,
    NodeID,
    Path,
    Position,
    Visibility,
)


def ident(name):
    return Ident(name, Position.nowhere())


def test_position_nowhere():
    pos = Position.nowhere()
    assert (pos.filename, pos.start, pos.end) == ("<nowhere>", 0, 0)


def test_generator_makes_positions_in_file():
    gen = Position.generator("main.mst")
    pos = gen.make(3, 7)
    assert pos == Position("main.mst", 3, 7)


def test_new_global_ids_increase_and_skip_reserved():
    a = NodeID.new_global()
    b = NodeID.new_global()
    assert a.id > 64
    assert b > a


def test_root_id():
    assert NodeID.of_root().id == 0


def test_builtin_type_ids():
    assert NodeID.of_builtin_type("never").id == 0
    assert NodeID.of_builtin_type("isize").id == 12


def test_builtin_type_unknown():
    with pytest.raises(ValueError, match="not a builtin name: foo"):
        NodeID.of_builtin_type("foo")


def test_path_display():
    path = Path([ident("std"), ident("io"), ident("println")])
    assert str(path) == "std::io::println"


def test_push_back_returns_new_path():
    path = Path([ident("a")])
    longer = path.push_back(ident("b"))
    assert str(longer) == "a::b"
    assert str(path) == "a"


def test_pop_back_and_empty():
    path = Path([ident("a"), ident("b")])
    assert str(path.pop_back()) == "a"
    assert len(Path().pop_back()) == 0


def test_try_last():
    assert Path().try_last() is None
    assert Path([ident("a"), ident("b")]).try_last().data == "b"


def test_if_single():
    assert Path([ident("x")]).if_single().data == "x"
    assert Path([ident("x"), ident("y")]).if_single() is None
    assert Path().if_single() is None


def test_inplace_operations():
    path = Path()
    path.push_inplace(ident("b"))
    path.push_front_inplace(ident("a"))
    path.push_inplace(ident("c"))
    assert str(path) == "a::b::c"
    assert path.pop_front_inplace().data == "a"
    assert path.pop_inplace().data == "c"
    assert [i.data for i in path] == ["b"]
    path.pop_inplace()
    assert path.pop_inplace() is None
    assert path.pop_front_inplace() is None


def test_copy_is_independent():
    path = Path([ident("a")])
    copy = path.copy()
    copy.push_inplace(ident("b"))
    assert len(path) == 1
    assert len(copy) == 2


def test_builtin_name_order():
    assert BuiltinName(0) is BuiltinName.T_NEVER
    values = [member.value for member in BuiltinName]
    assert values == sorted(values)
    assert len(set(values)) == len(values)
    assert BuiltinName(BuiltinName.F_U8_ADD.value) is BuiltinName.F_U8_ADD
    assert BuiltinName.T_ISIZE < BuiltinName.F_U8_ADD < BuiltinName.F_ISIZE_CMP


def test_attribute_validation():
    attr = Attribute("builtin", BuiltinName.T_BOOL)
    assert attr.builtin is BuiltinName.T_BOOL
    assert Attribute("extern").builtin is None
    with pytest.raises(ValueError):
        Attribute("builtin")
    with pytest.raises(ValueError):
        Attribute("no_mangle", BuiltinName.T_UNIT)
    with pytest.raises(ValueError):
        Attribute("inline")


def test_visibility_lookup_by_value():
    assert Visibility("private") is Visibility.PRIVATE
    assert Visibility("public") is Visibility.PUBLIC
    with pytest.raises(ValueError):
        Visibility("protected")