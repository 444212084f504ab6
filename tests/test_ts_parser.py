from __future__ import annotations

import pytest

from tsclinic.node_types import (
    DefaultExport,
    ExportedDeclaration,
    ExportName,
    ImportName,
    ImportStatement,
    NamedExport,
    NamedReexport,
    NamespaceImport,
    NamespaceReexport,
    WildcardReexport,
)
from tsclinic.ts_parser import TypeScriptParser


@pytest.fixture(scope="module")
def parser():
    return TypeScriptParser()


def _one(parser, src: str, tsx: bool = False):
    stmts = parser.parse_source(src, tsx=tsx)
    assert len(stmts) == 1, stmts
    return stmts[0]


def test_default_and_named_imports(parser):
    stmt = _one(parser, "import React, { useState, FC as Component } from 'react';\n")
    assert stmt == ImportStatement(
        specifier="react",
        default=True,
        names=(ImportName("useState"), ImportName("FC", "Component")),
    )


def test_side_effect_import(parser):
    assert _one(parser, 'import "./polyfills";\n') == ImportStatement(specifier="./polyfills")


def test_namespace_import(parser):
    assert _one(parser, "import * as L from './lib';\n") == NamespaceImport(specifier="./lib", local="L")


def test_type_only_import_is_an_import(parser):
    stmt = _one(parser, "import type { Props } from './types';\n")
    assert stmt == ImportStatement(specifier="./types", names=(ImportName("Props"),))


def test_import_require(parser):
    stmt = _one(parser, "import fs = require('./fs');\n")
    assert stmt == ImportStatement(specifier="./fs", default=True)


def test_default_exports(parser):
    assert _one(parser, "export default App;\n") == DefaultExport()
    assert _one(parser, "export default function main() {}\n") == DefaultExport()
    assert _one(parser, "export default class {}\n") == DefaultExport()
    assert _one(parser, "export = config;\n") == DefaultExport()


def test_reexports(parser):
    assert _one(parser, "export * from './c';\n") == WildcardReexport(specifier="./c")
    assert _one(parser, "export * as utils from './utils';\n") == NamespaceReexport(
        specifier="./utils", name="utils"
    )
    assert _one(parser, "export { A, B as C } from './test';\n") == NamedReexport(
        specifier="./test", names=(ExportName("A"), ExportName("B", "C"))
    )


def test_bare_named_export(parser):
    src = "const a = 1; const b = 2;\nexport { a, b as c };\n"
    stmts = parser.parse_source(src)
    assert stmts == [NamedExport(names=(ExportName("a"), ExportName("b", "c")))]


def test_exported_declarations(parser):
    src = """
export const x = 1, y = 2;
export let z;
export function f() {}
export class K {}
export abstract class Base {}
export interface Props { a: string }
export type Id = string;
export enum Color { Red }
export namespace Geometry { export const pi = 3; }
export declare const injected: number;
const hidden = 0;
function local() {}
"""
    names = set()
    for stmt in parser.parse_source(src):
        assert isinstance(stmt, ExportedDeclaration)
        names.update(stmt.names)
    assert names == {"x", "y", "z", "f", "K", "Base", "Props", "Id", "Color", "Geometry", "injected"}


def test_destructured_exports(parser):
    src = "export const { a, b: renamed, c = 1, ...rest } = info;\nexport const [first, , [nested]] = list;\n"
    names = []
    for stmt in parser.parse_source(src):
        names.extend(stmt.names)
    assert sorted(names) == ["a", "c", "first", "nested", "renamed", "rest"]


def test_exported_import_alias(parser):
    src = "namespace N { export const B = 1; }\nexport import A = N.B;\n"
    assert parser.parse_source(src) == [ExportedDeclaration(kind="namespace", names=("A",))]


def test_tsx_file(parser):
    src = """
import { Button } from './Button';
export const App = () => <div><Button /></div>;
"""
    stmts = parser.parse_source(src, tsx=True)
    assert stmts[0] == ImportStatement(specifier="./Button", names=(ImportName("Button"),))
    assert stmts[1] == ExportedDeclaration(kind="variable", names=("App",))


def test_non_module_statements_ignored(parser):
    src = "const a = 1;\nconsole.log(a);\nif (a) { }\n"
    assert parser.parse_source(src) == []


def test_parse_file_uses_extension(tmp_path, parser):
    f = tmp_path / "view.tsx"
    f.write_text("export default () => <span />;\n", encoding="utf-8")
    assert parser.parse_file(str(f)) == [DefaultExport()]
