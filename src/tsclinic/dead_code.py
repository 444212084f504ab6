"""
Dead code analysis over the file-level dependency graph.

Two diffs run once traversal is complete:
 - unreachable files: the inventory minus every file reached from an entry point.
 - unused exports: for each reached, non-entry inventory file, the exported names
   no importer consumed. Entry files are skipped since their consumers live
   outside the analyzed tree.

Outputs a JSON report with the two listings plus the import edges that were
recorded, each annotated with the names consumed.
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config_loader import ProjectConfig
from .discovery import collect_source_files
from .graph import DependencyGraph, GraphBuilder
from .resolver import SpecifierResolver


@dataclass
class DeadCodeReport:
    root: str
    files: List[str] = field(default_factory=list)
    entries: List[str] = field(default_factory=list)
    reachable: List[str] = field(default_factory=list)
    unreachable: List[str] = field(default_factory=list)
    unused_exports: Dict[str, List[str]] = field(default_factory=dict)
    edges: Dict[Tuple[str, str], List[str]] = field(default_factory=dict)

    @property
    def has_findings(self) -> bool:
        return bool(self.unreachable or self.unused_exports)

    def relative(self, path: str) -> str:
        try:
            return Path(path).relative_to(self.root).as_posix()
        except ValueError:
            return path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": "1.0",
            "root": self.root,
            "summary": {
                "files_total": len(self.files),
                "entries": len(self.entries),
                "reachable": len(self.reachable),
                "unreachable": len(self.unreachable),
                "files_with_unused_exports": len(self.unused_exports),
                "unused_exports": sum(len(v) for v in self.unused_exports.values()),
            },
            "entries": list(self.entries),
            "unreachable": list(self.unreachable),
            "unused_exports": [
                {"file": path, "symbols": list(names)} for path, names in self.unused_exports.items()
            ],
            "edges": [
                {"src": src, "dst": dst, "symbols": list(names)}
                for (src, dst), names in sorted(self.edges.items())
            ],
        }


def find_unreachable_files(graph: DependencyGraph) -> List[str]:
    return [p for p in graph.files if p not in graph.reached]


def find_unused_exports(graph: DependencyGraph) -> Dict[str, List[str]]:
    unused: Dict[str, List[str]] = {}
    for path in graph.files:
        if path not in graph.reached or graph.is_entry(path):
            continue
        rec = graph.records[path]
        if not rec.exports or rec.imports >= rec.exports:
            continue
        unused[path] = rec.unused()
    return unused


def analyze_graph(graph: DependencyGraph, root: str) -> DeadCodeReport:
    return DeadCodeReport(
        root=root,
        files=list(graph.files),
        entries=list(graph.entries),
        reachable=sorted(graph.reached),
        unreachable=find_unreachable_files(graph),
        unused_exports=find_unused_exports(graph),
        edges={k: sorted(v) for k, v in graph.edges.items()},
    )


def build_graph(config: ProjectConfig, parser=None) -> DependencyGraph:
    """Inventory the project and traverse it from the configured entry points.

    Raises:
        ResolutionError: an in-tree specifier does not resolve to any file.
    """
    resolver = SpecifierResolver(config.root, config.alias)
    builder = GraphBuilder(resolver, collect_source_files(config), parser=parser)
    return builder.build(config.entry_points)


def analyze_dead_code(config: ProjectConfig, parser=None) -> DeadCodeReport:
    graph = build_graph(config, parser=parser)
    return analyze_graph(graph, os.path.normpath(os.path.abspath(config.root)))


def save_dead_code_report(report: DeadCodeReport, output_dir: Path) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    out = output_dir / "dead_code.json"
    out.write_text(json.dumps(report.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    return out


def explain_unused(graph: DependencyGraph, path: str) -> Optional[Dict[str, Any]]:
    """Exports, consumed names and importers of one reached file; ``None`` if unknown."""
    rec = graph.records.get(path)
    if rec is None:
        return None
    importers = {src: sorted(names) for (src, dst), names in graph.edges.items() if dst == path}
    return {
        "file": path,
        "entry": graph.is_entry(path),
        "reachable": path in graph.reached,
        "exports": sorted(rec.exports or ()),
        "imports": sorted(rec.imports),
        "unused": rec.unused(),
        "importers": importers,
    }
