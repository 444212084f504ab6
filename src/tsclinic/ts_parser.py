"""
TypeScript parsing - wraps tree-sitter to reduce a file to its import/export statements.

Only top-level statements are inspected. ``.tsx`` files are parsed with the
TSX grammar, everything else with the plain TypeScript grammar. Syntax errors
never raise: tree-sitter keeps going and error nodes are simply skipped.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from .node_types import (
    DefaultExport,
    ExportedDeclaration,
    ExportName,
    ImportName,
    ImportStatement,
    NamedExport,
    NamedReexport,
    NamespaceImport,
    NamespaceReexport,
    Statement,
    WildcardReexport,
)

# declaration node type -> kind recorded on ExportedDeclaration
DECLARATION_KINDS: Dict[str, str] = {
    "lexical_declaration": "variable",
    "variable_declaration": "variable",
    "function_declaration": "function",
    "generator_function_declaration": "function",
    "function_signature": "function",
    "class_declaration": "class",
    "abstract_class_declaration": "class",
    "interface_declaration": "interface",
    "type_alias_declaration": "type",
    "enum_declaration": "enum",
    "internal_module": "namespace",
    "module": "namespace",
}

PATTERN_CONTAINERS = {"object_pattern", "array_pattern", "rest_pattern"}


def _text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _string_value(node: Optional[Node]) -> str:
    raw = _text(node)
    if len(raw) >= 2 and raw[0] in "'\"`" and raw[-1] == raw[0]:
        return raw[1:-1]
    return raw


def _has_token(node: Node, token: str) -> bool:
    return any(child.type == token for child in node.children)


def _module_name(node: Optional[Node]) -> str:
    # names in clauses may be identifiers or string literals: export { "a-b" as c }
    if node is not None and node.type == "string":
        return _string_value(node)
    return _text(node)


def binding_names(pattern: Optional[Node]) -> List[str]:
    """Identifiers bound by a declarator name, descending into destructuring patterns."""
    if pattern is None:
        return []
    kind = pattern.type
    if kind in ("identifier", "shorthand_property_identifier_pattern"):
        return [_text(pattern)]
    if kind == "pair_pattern":
        return binding_names(pattern.child_by_field_name("value"))
    if kind in ("object_assignment_pattern", "assignment_pattern"):
        return binding_names(pattern.child_by_field_name("left"))
    if kind in PATTERN_CONTAINERS:
        names: List[str] = []
        for child in pattern.named_children:
            names.extend(binding_names(child))
        return names
    return []


def _declared_names(decl: Node) -> List[str]:
    if decl.type in ("lexical_declaration", "variable_declaration"):
        names: List[str] = []
        for declarator in decl.named_children:
            if declarator.type == "variable_declarator":
                names.extend(binding_names(declarator.child_by_field_name("name")))
        return names
    name_node = decl.child_by_field_name("name")
    if name_node is None:
        return []
    if name_node.type == "string":
        # declare module "foo" {} names an external module, not a binding
        return []
    # namespace A.B {} binds A
    return [_text(name_node).split(".")[0]]


def _clause_names(clause: Node, spec_type: str) -> Tuple[Tuple[str, Optional[str]], ...]:
    pairs = []
    for spec in clause.named_children:
        if spec.type != spec_type:
            continue
        name = _module_name(spec.child_by_field_name("name"))
        alias_node = spec.child_by_field_name("alias")
        alias = _module_name(alias_node) if alias_node is not None else None
        if name:
            pairs.append((name, alias))
    return tuple(pairs)


class TypeScriptParser:
    """Parse TypeScript/TSX source into the statements the extractor understands."""

    def __init__(self) -> None:
        self._parsers: Dict[bool, Parser] = {}

    def _parser(self, tsx: bool) -> Parser:
        parser = self._parsers.get(tsx)
        if parser is None:
            capsule = (
                tree_sitter_typescript.language_tsx()
                if tsx
                else tree_sitter_typescript.language_typescript()
            )
            parser = Parser(Language(capsule))
            self._parsers[tsx] = parser
        return parser

    def parse_file(self, file_path: str) -> List[Statement]:
        source = Path(file_path).read_bytes()
        return self.parse_source(source, tsx=file_path.endswith(".tsx"))

    def parse_source(self, source, tsx: bool = False) -> List[Statement]:
        if isinstance(source, str):
            source = source.encode("utf-8")
        tree = self._parser(tsx).parse(source)
        statements: List[Statement] = []
        for node in tree.root_node.named_children:
            stmt = None
            if node.type == "import_statement":
                stmt = self._import(node)
            elif node.type == "export_statement":
                stmt = self._export(node)
            if stmt is not None:
                statements.append(stmt)
        return statements

    # --- import ---
    def _import(self, node: Node) -> Optional[Statement]:
        require = next((c for c in node.named_children if c.type == "import_require_clause"), None)
        if require is not None:
            # import x = require("./x") binds the module's `export =` value
            source = require.child_by_field_name("source")
            if source is None:
                source = next((c for c in require.named_children if c.type == "string"), None)
            if source is None:
                return None
            return ImportStatement(specifier=_string_value(source), default=True)

        source = node.child_by_field_name("source")
        if source is None:
            return None
        specifier = _string_value(source)
        clause = next((c for c in node.named_children if c.type == "import_clause"), None)
        if clause is None:
            # import "./polyfills"
            return ImportStatement(specifier=specifier)

        default = False
        namespace: Optional[str] = None
        names: Tuple[ImportName, ...] = ()
        for child in clause.named_children:
            if child.type == "identifier":
                default = True
            elif child.type == "namespace_import":
                ident = next((c for c in child.named_children if c.type == "identifier"), None)
                namespace = _text(ident)
            elif child.type == "named_imports":
                names = tuple(
                    ImportName(name, alias) for name, alias in _clause_names(child, "import_specifier")
                )
        if namespace is not None:
            return NamespaceImport(specifier=specifier, local=namespace, default=default)
        return ImportStatement(specifier=specifier, default=default, names=names)

    # --- export ---
    def _export(self, node: Node) -> Optional[Statement]:
        alias = next((c for c in node.named_children if c.type == "import_alias"), None)
        if alias is not None or _has_token(node, "import"):
            # export import A = N.B
            holder = alias if alias is not None else node
            ident = next((c for c in holder.named_children if c.type == "identifier"), None)
            if ident is None:
                return None
            return ExportedDeclaration(kind="namespace", names=(_text(ident),))

        if _has_token(node, "default") or _has_token(node, "="):
            # export default ... / export = ...
            return DefaultExport()

        source = node.child_by_field_name("source")
        if source is not None:
            specifier = _string_value(source)
            clause = next((c for c in node.named_children if c.type == "export_clause"), None)
            if clause is not None:
                names = tuple(
                    ExportName(name, alias) for name, alias in _clause_names(clause, "export_specifier")
                )
                return NamedReexport(specifier=specifier, names=names)
            ns = next((c for c in node.named_children if c.type == "namespace_export"), None)
            if ns is not None:
                ident = next((c for c in ns.named_children if c.type in ("identifier", "string")), None)
                return NamespaceReexport(specifier=specifier, name=_module_name(ident))
            return WildcardReexport(specifier=specifier)

        clause = next((c for c in node.named_children if c.type == "export_clause"), None)
        if clause is not None:
            names = tuple(ExportName(name, alias) for name, alias in _clause_names(clause, "export_specifier"))
            return NamedExport(names=names)

        decl = node.child_by_field_name("declaration")
        if decl is not None and decl.type == "ambient_declaration":
            # export declare const x: number
            decl = next((c for c in decl.named_children if c.type in DECLARATION_KINDS), None)
        if decl is None or decl.type not in DECLARATION_KINDS:
            return None
        return ExportedDeclaration(kind=DECLARATION_KINDS[decl.type], names=tuple(_declared_names(decl)))
