"""
Symbol extraction: what a file exports and what it consumes from each file it imports.

Extraction is interleaved with traversal. ``SymbolExtractor.steps`` yields the
target of every statement that names another module before classifying it;
the caller visits that target (depth-first) and then resumes, so the target's
export set is already sealed when its symbols have to be counted as used.
Usage is written straight into the target's ``FileRecord.imports``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Set

from .node_types import (
    DEFAULT,
    DefaultExport,
    ExportedDeclaration,
    ImportStatement,
    NamedExport,
    NamedReexport,
    NamespaceImport,
    NamespaceReexport,
    Statement,
    WildcardReexport,
    specifier_of,
)
from .resolver import SpecifierResolver, is_trackable

if TYPE_CHECKING:
    from .graph import DependencyGraph


@dataclass
class ExtractionResult:
    exports: Set[str] = field(default_factory=set)
    # resolved target path -> names this file consumes from it
    contributions: Dict[str, Set[str]] = field(default_factory=dict)

    def contribute(self, target: str, names: Iterable[str]) -> None:
        self.contributions.setdefault(target, set()).update(names)


class SymbolExtractor:
    def __init__(self, graph: "DependencyGraph", resolver: SpecifierResolver):
        self.graph = graph
        self.resolver = resolver

    def target_of(self, stmt: Statement, file_path: str) -> Optional[str]:
        """Resolve a statement's specifier; ``None`` when external or not trackable."""
        specifier = specifier_of(stmt)
        if specifier is None:
            return None
        target = self.resolver.resolve(specifier, file_path)
        if target is None or not is_trackable(target):
            return None
        return target

    def steps(
        self, file_path: str, statements: List[Statement], result: ExtractionResult
    ) -> Iterator[str]:
        """Apply ``statements`` to ``result`` in order.

        Each resolved import target is yielded just before its statement is
        applied. The consumer must have finished visiting that target before
        asking for the next step.
        """
        for stmt in statements:
            target = None
            if specifier_of(stmt) is not None:
                target = self.target_of(stmt, file_path)
                if target is None:
                    continue
                yield target
            self._apply(stmt, target, result)

    def _apply(self, stmt: Statement, target: Optional[str], result: ExtractionResult) -> None:
        if isinstance(stmt, NamespaceImport):
            # property accesses on the namespace are not tracked: everything counts as used
            result.contribute(target, self.graph.record(target).mark_all_used())
        elif isinstance(stmt, ImportStatement):
            names = [DEFAULT] if stmt.default else []
            names.extend(n.name for n in stmt.names)
            self._use(target, names, result)
        elif isinstance(stmt, DefaultExport):
            result.exports.add(DEFAULT)
        elif isinstance(stmt, NamedReexport):
            # counts as a use of the target's symbols; not re-published here
            self._use(target, [n.name for n in stmt.names], result)
        elif isinstance(stmt, WildcardReexport):
            forwarded = set(self.graph.record(target).exports or ())
            self._use(target, forwarded, result)
            result.exports |= forwarded
        elif isinstance(stmt, NamespaceReexport):
            result.contribute(target, self.graph.record(target).mark_all_used())
            result.exports.add(stmt.name)
        elif isinstance(stmt, NamedExport):
            result.exports.update(n.public for n in stmt.names)
        elif isinstance(stmt, ExportedDeclaration):
            result.exports.update(stmt.names)
        else:
            raise TypeError(f"unknown statement: {stmt!r}")

    def _use(self, target: str, names: Iterable[str], result: ExtractionResult) -> None:
        names = list(names)
        self.graph.record(target).mark_used(names)
        result.contribute(target, names)
