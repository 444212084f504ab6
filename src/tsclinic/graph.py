"""
Dependency graph construction.

``GraphBuilder`` walks the project depth-first from its entry points. Every
file is parsed once: the syntax cache is checked before parsing, so revisiting
a file (another importer, or an import cycle) only records the importer's
usage. Entry points are processed one after another in declaration order.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Set, Tuple

from .extractor import ExtractionResult, SymbolExtractor
from .node_types import FileRecord, Statement
from .resolver import SpecifierResolver


class DependencyGraph:
    """All traversal state: file records, entries, reached files and the syntax cache."""

    def __init__(self, files: Iterable[str] = ()):
        self.records: Dict[str, FileRecord] = {}
        for path in files:
            self.records.setdefault(path, FileRecord(path))
        # inventory order, used for reporting
        self.files: List[str] = list(self.records)
        self.entries: List[str] = []
        self.reached: Set[str] = set()
        self.syntax_cache: Dict[str, List[Statement]] = {}
        self.edges: Dict[Tuple[str, str], Set[str]] = {}

    def record(self, path: str) -> FileRecord:
        # trackable files outside the inventory (e.g. an alias pointing elsewhere) get a record on demand
        rec = self.records.get(path)
        if rec is None:
            rec = self.records[path] = FileRecord(path)
        return rec

    def add_entry(self, path: str) -> None:
        if path not in self.entries:
            self.entries.append(path)
        self.reached.add(path)

    def is_entry(self, path: str) -> bool:
        return path in self.entries

    def add_edge(self, importer: str, target: str, names: Iterable[str]) -> None:
        self.edges.setdefault((importer, target), set()).update(names)


class GraphBuilder:
    def __init__(
        self,
        resolver: SpecifierResolver,
        files: Iterable[str] = (),
        parser=None,
    ):
        if parser is None:
            from .ts_parser import TypeScriptParser

            parser = TypeScriptParser()
        self.resolver = resolver
        self.parser = parser
        self.graph = DependencyGraph(files)
        self.extractor = SymbolExtractor(self.graph, resolver)

    def build(self, entry_points: Iterable[str]) -> DependencyGraph:
        for entry in entry_points:
            path = self.resolver.resolve_entry(entry)
            self.graph.add_entry(path)
            self.visit(path)
        return self.graph

    def visit(self, path: str) -> None:
        """Parse and extract ``path`` and every file it reaches, depth-first.

        Open files sit on an explicit stack of extraction steps instead of the
        Python call stack, so long import chains are not limited by recursion depth.
        """
        stack: List[Tuple[str, Iterator[str], ExtractionResult]] = []
        self._open(path, stack)
        while stack:
            current, steps, result = stack[-1]
            target = next(steps, None)
            if target is None:
                stack.pop()
                self._close(current, result)
                continue
            self.graph.reached.add(target)
            self._open(target, stack)

    def _open(self, path: str, stack: list) -> None:
        if path in self.graph.syntax_cache:
            return
        statements = self.parser.parse_file(path)
        # cached before extraction so that import cycles stop here
        self.graph.syntax_cache[path] = statements
        result = ExtractionResult()
        stack.append((path, self.extractor.steps(path, statements, result), result))

    def _close(self, path: str, result: ExtractionResult) -> None:
        self.graph.record(path).seal(result.exports)
        for target, names in result.contributions.items():
            self.graph.add_edge(path, target, names)
