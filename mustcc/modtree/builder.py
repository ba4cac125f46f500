"""Assembles parsed files into one module tree and resolves its imports."""

from __future__ import annotations

from typing import Optional

from mustcc import syntax
from mustcc.common import NodeID, Path, Visibility
from mustcc.context import Context
from mustcc.errors import InternalError
from mustcc.modtree import messages, tree
from mustcc.modtree.env import DuplicateItemError, ModTreeEnv
from mustcc.modtree.scope import Binding, Import, Kind, Local, Scope, ScopeKind

_ROOT_MODULE = ("src",)


def translate(ctx: Context, prog: syntax.Program) -> tree.Program:
    """Build the module tree of ``prog`` starting from its ``src`` module."""
    env = ModTreeEnv(prog.file_map)
    module = env.remove_module(_ROOT_MODULE)
    if module is None:
        raise InternalError("failed to load root module")
    ast = _tr_module(ctx, env, module)
    scope_info = env.solve_imports(ctx)
    return tree.Program(scope_info, ast)


def generate_imports(import_: syntax.Import) -> list[Import]:
    """Flatten an import statement into one import per imported path."""
    imports: list[Import] = []
    _tr_import_path(import_.path, imports, Path(), import_.visibility)
    return imports


def _tr_import_path(
    node: syntax.ImportPathNode, imports: list[Import], path: Path, vis: Visibility
) -> None:
    data = node.data
    if isinstance(data, syntax.ImportExact):
        path.push_inplace(data.name)
        imports.append(Import(path.copy(), data.alias, False, vis))
        path.pop_inplace()
    elif isinstance(data, syntax.ImportAll):
        imports.append(Import(path.copy(), None, True, vis))
    elif isinstance(data, syntax.ImportSegment):
        path.push_inplace(data.name)
        _tr_import_path(data.rest, imports, path, vis)
        path.pop_inplace()
    elif isinstance(data, syntax.ImportMany):
        for sub in data.paths:
            _tr_import_path(sub, imports, path, vis)
    else:
        raise InternalError(f"unknown import path: {data!r}")


def _tr_module(ctx: Context, env: ModTreeEnv, module: syntax.Module) -> tree.Module:
    node_id = NodeID.new_global()
    binding = Binding(module.visibility, Kind.MODULE, Local(node_id))
    scope = Scope(ScopeKind.MODULE, parent_id=env.current_module_id())

    try:
        env.add_item(module.name, binding)
    except DuplicateItemError as exc:
        ctx.report(exc.diagnostic)
        return tree.Module.empty()

    env.add_scope(node_id, scope)
    env.enter(module.name.data)

    items: list[tree.ModuleItem] = []
    for item in module.items:
        if isinstance(item, syntax.Module):
            items.append(_tr_module(ctx, env, item))
        elif isinstance(item, syntax.ModuleDecl):
            loaded = env.remove_module((*env.current_path(), item.name.data))
            if loaded is None:
                ctx.report(messages.missing_module(item.pos, item.name.data))
                continue
            items.append(_tr_module(ctx, env, loaded))
        elif isinstance(item, syntax.Import):
            for import_ in generate_imports(item):
                env.add_import(import_)
        elif isinstance(item, syntax.Func):
            try:
                items.append(_tr_func(env, item))
            except DuplicateItemError as exc:
                ctx.report(exc.diagnostic)
        elif isinstance(item, syntax.Struct):
            struct = _tr_struct(ctx, env, item)
            if struct is not None:
                items.append(struct)
        elif isinstance(item, syntax.Enum):
            enum = _tr_enum(ctx, env, item)
            if enum is not None:
                items.append(enum)

    env.leave()

    return tree.Module(
        id=node_id,
        name=module.name,
        pos=module.pos,
        visibility=module.visibility,
        attributes=module.attributes,
        items=items,
    )


def _tr_enum(ctx: Context, env: ModTreeEnv, it: syntax.Enum) -> Optional[tree.Enum]:
    node_id = NodeID.new_global()
    vis = it.visibility
    scope = Scope(ScopeKind.ENUM, parent_id=env.current_module_id())

    try:
        env.add_item(it.name, Binding(vis, Kind.ENUM, Local(node_id)))
    except DuplicateItemError as exc:
        ctx.report(exc.diagnostic)
        return None

    env.add_scope(node_id, scope)
    env.enter(it.name.data)

    constructors: list[tree.Constructor] = []
    for cons in it.constructors:
        try:
            constructors.append(_tr_cons(env, cons, vis))
        except DuplicateItemError as exc:
            ctx.report(exc.diagnostic)

    env.leave()

    return tree.Enum(
        id=node_id,
        name=it.name,
        pos=it.pos,
        visibility=vis,
        attributes=it.attributes,
        type_params=it.type_params,
        constructors=constructors,
    )


def _tr_cons(
    env: ModTreeEnv, it: syntax.Constructor, vis: Visibility
) -> tree.Constructor:
    node_id = NodeID.new_global()
    env.add_item(it.name, Binding(vis, Kind.CONS, Local(node_id)))
    if isinstance(it, syntax.TupleConstructor):
        return tree.TupleConstructor(
            id=node_id,
            name=it.name,
            pos=it.pos,
            args=it.params,
            attributes=it.attributes,
        )
    return tree.StructConstructor(
        id=node_id,
        name=it.name,
        pos=it.pos,
        fields=it.params,
        attributes=it.attributes,
    )


def _tr_struct(
    ctx: Context, env: ModTreeEnv, it: syntax.Struct
) -> Optional[tree.Struct]:
    node_id = NodeID.new_global()
    try:
        env.add_item(it.name, Binding(it.visibility, Kind.STRUCT, Local(node_id)))
    except DuplicateItemError as exc:
        ctx.report(exc.diagnostic)
        return None
    return tree.Struct(
        id=node_id,
        name=it.name,
        pos=it.pos,
        visibility=it.visibility,
        attributes=it.attributes,
        type_params=it.type_params,
        fields=it.fields,
    )


def _tr_func(env: ModTreeEnv, it: syntax.Func) -> tree.Func:
    node_id = NodeID.new_global()
    env.add_item(it.name, Binding(it.visibility, Kind.FUNC, Local(node_id)))
    return tree.Func(
        id=node_id,
        name=it.name,
        pos=it.pos,
        visibility=it.visibility,
        attributes=it.attributes,
        type_params=it.type_params,
        args=it.args,
        ret_type=it.ret_type,
        body=it.body,
    )