from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .config_loader import ProjectConfig, load_config
from .dead_code import DeadCodeReport, analyze_graph, build_graph, save_dead_code_report


def analyze_project(
    config: Optional[ProjectConfig] = None,
    config_path: Optional[str] = None,
    output: Optional[str] = None,
    graph: bool = False,
    fmt: Optional[str] = None,
) -> DeadCodeReport:
    """Analyze a TypeScript project and return its dead code report.

    With ``output`` set, ``dead_code.json`` is written there (and the dependency
    graph is rendered when ``graph`` is true). A relative ``output`` is taken
    from the project root, as on the command line.
    """
    if config is None:
        config = load_config(Path(config_path) if config_path else None)
    dep_graph = build_graph(config)
    report = analyze_graph(dep_graph, os.path.normpath(os.path.abspath(config.root)))

    if output:
        out_dir = Path(output)
        if not out_dir.is_absolute():
            out_dir = Path(config.root) / out_dir
        save_dead_code_report(report, out_dir)
        if graph:
            from .graphviz_render import render_dependency_graph

            render_dependency_graph(report, str(out_dir / "dependency_graph"), fmt or config.format)
    return report
