#!/usr/bin/env python3
"""
CLI entrypoint for tsclinic

  tsclinic                     analyze using ./tsclinic.yaml (or [tool.tsclinic])
  tsclinic --json              also write <output>/dead_code.json
  tsclinic --graph             also render <output>/dependency_graph.<format>
  tsclinic --explain FILE      show exports/usage/importers of one file
  tsclinic --init              generate tsclinic.yaml
  tsclinic --show-config       print the effective configuration

Exit codes: 0 ok, 1 findings with --fail-on-findings, 2 fatal error.
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .errors import TsClinicError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsclinic", description="Find unreachable files and unused exports in a TypeScript project"
    )
    parser.add_argument("--config", default=None, help="Path to config (YAML or pyproject.toml)")
    parser.add_argument("--output", default=None, help="Override output directory (default from config)")
    parser.add_argument("--json", action="store_true", help="Write dead_code.json to the output directory")
    parser.add_argument("--graph", action="store_true", help="Render the file dependency graph with Graphviz")
    parser.add_argument("--format", default=None, help="Graph output format (default from config)")
    parser.add_argument("--explain", default=None, metavar="FILE", help="Explain export usage of one file")
    parser.add_argument(
        "--fail-on-findings", action="store_true", help="Exit with status 1 when anything is reported"
    )
    parser.add_argument("--init", action="store_true", help="Generate tsclinic.yaml")
    parser.add_argument("--force", action="store_true", help="Overwrite existing tsclinic.yaml with --init")
    parser.add_argument("--show-config", action="store_true", help="Print the effective configuration")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.init:
        from .config_init import init_config

        init_config(force=args.force)
        return 0

    try:
        return _run(args)
    except TsClinicError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2


def _run(args: argparse.Namespace) -> int:
    from .config_loader import load_config
    from .dead_code import analyze_graph, build_graph, explain_unused, save_dead_code_report
    from .report import print_explain, print_report

    config = load_config(Path(args.config) if args.config else None)
    if args.show_config:
        from .config_init import show_config

        show_config(config)
        return 0

    graph = build_graph(config)
    report = analyze_graph(graph, os.path.normpath(os.path.abspath(config.root)))

    if args.explain:
        target = os.path.normpath(os.path.join(config.root, args.explain))
        info = explain_unused(graph, target)
        if info is None:
            print(f"❌ 文件不在分析范围内: {args.explain}", file=sys.stderr)
            return 2
        print_explain(report, info)
        return 0

    print_report(report)

    out_dir = Path(args.output or config.output)
    if not out_dir.is_absolute():
        out_dir = Path(config.root) / out_dir
    if args.json:
        out = save_dead_code_report(report, out_dir)
        print(f"\n💾 报告已保存: {out}")
    if args.graph:
        from .graphviz_render import render_dependency_graph

        out_dir.mkdir(parents=True, exist_ok=True)
        dot_path, rendered = render_dependency_graph(
            report, str(out_dir / "dependency_graph"), args.format or config.format
        )
        if rendered:
            print(f"🖼️  依赖图: {rendered}")
        else:
            print(f"⚠️  未找到 Graphviz 'dot' 可执行文件，仅生成 DOT: {dot_path}")

    if args.fail_on_findings and report.has_findings:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
