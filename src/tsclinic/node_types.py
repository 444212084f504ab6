"""
Data types shared by the parser, the extractor and the graph builder.

A parsed file is a list of top-level statements. Only statements with an
import/export shape are kept; everything else in a file body is irrelevant to
symbol accounting. The statement classes form a closed set matched in
``tsclinic.extractor``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple, Union

DEFAULT = "default"


@dataclass(frozen=True)
class ImportName:
    """``{ name as alias }`` inside an import clause."""

    name: str  # exported name in the target module
    alias: Optional[str] = None  # local binding, if renamed

    @property
    def local(self) -> str:
        return self.alias or self.name


@dataclass(frozen=True)
class ExportName:
    """``{ name as alias }`` inside an export clause."""

    name: str  # local (or, for re-exports, the target's) name
    alias: Optional[str] = None  # public name, if renamed

    @property
    def public(self) -> str:
        return self.alias or self.name


@dataclass(frozen=True)
class ImportStatement:
    """``import A, { b, c as d } from M`` (also ``import 'M'`` with no bindings)."""

    specifier: str
    default: bool = False
    names: Tuple[ImportName, ...] = ()


@dataclass(frozen=True)
class NamespaceImport:
    """``import * as X from M`` (optionally ``import A, * as X from M``)."""

    specifier: str
    local: str
    default: bool = False


@dataclass(frozen=True)
class DefaultExport:
    """``export default ...`` or ``export = ...``."""


@dataclass(frozen=True)
class NamedExport:
    """``export { a, b as c }`` without a module specifier."""

    names: Tuple[ExportName, ...] = ()


@dataclass(frozen=True)
class NamedReexport:
    """``export { a, b as c } from M``."""

    specifier: str
    names: Tuple[ExportName, ...] = ()


@dataclass(frozen=True)
class WildcardReexport:
    """``export * from M``."""

    specifier: str


@dataclass(frozen=True)
class NamespaceReexport:
    """``export * as ns from M``."""

    specifier: str
    name: str


@dataclass(frozen=True)
class ExportedDeclaration:
    """``export const|let|var|function|class|interface|type|enum|namespace ...``."""

    kind: str
    names: Tuple[str, ...] = ()


Statement = Union[
    ImportStatement,
    NamespaceImport,
    DefaultExport,
    NamedExport,
    NamedReexport,
    WildcardReexport,
    NamespaceReexport,
    ExportedDeclaration,
]


def specifier_of(stmt: Statement) -> Optional[str]:
    return getattr(stmt, "specifier", None)


@dataclass
class FileRecord:
    path: str
    exports: Optional[Set[str]] = None  # sealed once, after the file's own pass
    imports: Set[str] = field(default_factory=set)  # names consumed by other files
    # set when a namespace import reached this file before its exports were sealed
    wholly_used: bool = False

    @property
    def sealed(self) -> bool:
        return self.exports is not None

    def seal(self, exports: Iterable[str]) -> None:
        if self.exports is not None:
            raise RuntimeError(f"exports of {self.path} already computed")
        self.exports = set(exports)
        if self.wholly_used:
            self.imports |= self.exports

    def mark_used(self, names: Iterable[str]) -> None:
        self.imports.update(names)

    def mark_all_used(self) -> Set[str]:
        """Mark every export as consumed; returns the names known right now."""
        self.wholly_used = True
        current = set(self.exports or ())
        self.imports |= current
        return current

    def unused(self) -> List[str]:
        if not self.exports:
            return []
        return sorted(self.exports - self.imports)
