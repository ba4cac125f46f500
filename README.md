# mustcc

Front-end building blocks for a compiler of the Must language: source
positions and diagnostics, the syntax tree of a parsed project, and the
construction of the module tree with resolution of imports.

## Modules

- `mustcc.common` – `Position` (with `Position.nowhere()` and
  `Position.generator(filename)`), `PositionGenerator`, `Ident`, `Path`
  (a `::`-separated sequence of identifiers), `NodeID` (fresh ids from
  `NodeID.new_global()`, the root id from `NodeID.of_root()`, fixed ids of
  builtin types from `NodeID.of_builtin_type(name)`), `RAttribute`,
  `Visibility`, `Attribute` and the `BuiltinName` catalogue.
- `mustcc.sources` – `SourceMap`, source texts by file name; adding the same
  file name twice raises `ValueError`.
- `mustcc.diagnostic` – `Diagnostic`, `Label` (its message is a callable,
  evaluated when shown), `Severity` and the abstract `DiagnosticRenderer`.
  `Diagnostic.error(pos)`, `with_label` and `with_note` build diagnostics,
  each returning a new value.
- `mustcc.renderer` – `ReportRenderer`, which writes a diagnostic as a header
  (`Error: file:line:column`), the source line of each label underlined with
  `^` and its message, and the notes. It writes to standard error unless
  given another stream, and colours the output only when the stream is a
  terminal. `format(diag, sources)` returns the text without writing it. A
  diagnostic whose file is not in the source map raises `FileNotFoundError`.
- `mustcc.context` – `Context`, which collects diagnostics with `report`,
  holds sources added with `add_source`, and on `finish()` renders all
  diagnostics and returns the number reported. A renderer failure is raised
  as `InternalError`.
- `mustcc.errors` – `InternalError` and the parse errors `InvalidToken`,
  `UnrecognizedEof`, `UnrecognizedToken` and `ExtraToken`, all subclasses of
  `ParsingError`; `to_diagnostic()` turns one into a `Diagnostic`, with an
  "Expected one of:" note where the expected tokens are known.
- `mustcc.syntax` – the syntax tree of a parsed project: `Program` (modules by
  module path), module items, import paths, expressions, patterns and types.
- `mustcc.modtree.scope`, `mustcc.modtree.scope_info` – scopes, bindings and
  `ScopeInfo`, whose `find_path(scope_id, path, private_guard)` looks up a
  path from a scope, honouring visibility and `super`, and raises
  `PathError` (carrying the diagnostic) for unbound, private or ambiguous
  names and for paths through functions or enum constructors.
- `mustcc.modtree.builder` – `translate(ctx, prog)` builds the module tree
  from the `("src",)` module, loads `mod name;` declarations from the file
  map, and gives every module, function, struct, enum and constructor a
  `NodeID` in its scope. `generate_imports(import_)` flattens one import
  statement into one import per path.
- `mustcc.modtree.import_solve` – `solve(ctx, scope_info)` applies imports
  until nothing changes. An exact import shadows a glob import, a glob import
  never shadows a local or exactly imported name, and conflicting names
  become ambiguous. Imports that still fail are reported to the context.
- `mustcc.modtree.env`, `mustcc.modtree.tree`, `mustcc.modtree.messages` –
  the state used while building, the resulting tree, and the diagnostics it
  reports ("missing module", "is already bound", and so on).

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Using it

```python
from mustcc import syntax
from mustcc.common import Ident, Position
from mustcc.context import Context
from mustcc.modtree.builder import translate
from mustcc.renderer import ReportRenderer

pos = Position("src/main.mst", 0, 0)
root = syntax.Module(
    name=Ident("src", pos),
    pos=pos,
    items=[syntax.Func(name=Ident("main", pos), pos=pos)],
)
program = syntax.Program({("src",): root})

ctx = Context(ReportRenderer())
ctx.add_source("src/main.mst", "fn main() {}")
result = translate(ctx, program)
errors = ctx.finish()
if errors:
    print(f"{errors} errors occurred, compilation aborted.")
```

`translate` returns a `mustcc.modtree.tree.Program` holding the module tree
(`ast`) and the resolved scopes (`scope_info`). It raises `InternalError` if
the file map has no `("src",)` module. Diagnostics can only be rendered for
files whose text was added to the context.

## What it does not do

The package works on syntax trees that are already built: it has no parser
that reads source files, and no command-line program. It does not check
types, lower programs to an intermediate form or produce object code.