from __future__ import annotations

from pathlib import PurePosixPath
from typing import Tuple

from graphviz import Digraph
from graphviz.backend import ExecutableNotFound

from .dead_code import DeadCodeReport

ENTRY_COLOR = "#90CAF9"  # blue
CLEAN_COLOR = "#4CAF50"  # green
UNUSED_COLOR = "#FFC107"  # amber
UNREACHABLE_COLOR = "#F44336"  # red


def _get_short_name(rel_path: str) -> str:
    """Get a shortened display name for a file - parent dir + file name."""
    parts = PurePosixPath(rel_path).parts
    return "/".join(parts[-2:]) if parts else rel_path


def _color_for(report: DeadCodeReport, path: str) -> str:
    if path in report.entries:
        return ENTRY_COLOR
    if path in report.unused_exports:
        return UNUSED_COLOR
    if path in report.unreachable:
        return UNREACHABLE_COLOR
    return CLEAN_COLOR


def render_dependency_graph(
    report: DeadCodeReport,
    output_base: str,
    fmt: str = "svg",
) -> Tuple[str, str]:
    """
    渲染文件依赖图：蓝色=入口，绿色=导出全部被使用，黄色=存在未使用导出，红色=不可达
    """
    dot = Digraph(
        "tsclinic",
        graph_attr={"rankdir": "LR", "splines": "spline", "label": "File Dependency Graph", "labelloc": "t"},
        node_attr={"shape": "box", "style": "rounded,filled", "fontname": "Helvetica"},
        edge_attr={"arrowhead": "vee"},
    )

    known = set(report.files)
    nodes = list(report.files)
    nodes.extend(p for p in report.reachable if p not in known)
    for path in nodes:
        label = _get_short_name(report.relative(path))
        unused = report.unused_exports.get(path)
        if unused:
            label += f"\nunused {len(unused)}"
        dot.node(path, label=label, fillcolor=_color_for(report, path))

    for (src, dst), names in sorted(report.edges.items()):
        # side-effect imports consume nothing
        style = "solid" if names else "dashed"
        dot.edge(src, dst, color="black", style=style, tooltip=" ".join(names))

    dot_path = f"{output_base}.dot"
    out_path = f"{output_base}.{fmt}"
    dot.save(dot_path)

    try:
        dot.render(output_base, format=fmt, cleanup=True)
    except ExecutableNotFound:
        # Only DOT written; caller should inform user
        out_path = ""
    return dot_path, out_path
