"""
控制台输出 - 打印不可达文件与未使用的导出
"""

from __future__ import annotations

from typing import Any, Dict

from .dead_code import DeadCodeReport


def print_report(report: DeadCodeReport) -> None:
    """打印分析结果（路径相对项目根目录）"""
    print(
        f"🔎 分析完成: {len(report.files)} 个文件, "
        f"{len(report.reachable)} 个可达, 入口 {len(report.entries)} 个"
    )

    if report.unreachable:
        print(f"\n🗑️  不可达文件 ({len(report.unreachable)}):")
        for path in report.unreachable:
            print(f"  - {report.relative(path)}")

    if report.unused_exports:
        print(f"\n📦 未使用的导出 ({len(report.unused_exports)} 个文件):")
        for path, names in report.unused_exports.items():
            print(f"  - {report.relative(path)} {' '.join(names)}")

    if not report.has_findings:
        print("✅ 没有发现不可达文件或未使用的导出")


def print_explain(report: DeadCodeReport, info: Dict[str, Any]) -> None:
    print(f"📄 {report.relative(info['file'])}")
    status = "入口" if info["entry"] else ("可达" if info["reachable"] else "不可达")
    print(f"  状态: {status}")
    print(f"  导出: {' '.join(info['exports']) or '-'}")
    print(f"  被使用: {' '.join(info['imports']) or '-'}")
    print(f"  未使用: {' '.join(info['unused']) or '-'}")
    if info["importers"]:
        print("  导入方:")
        for src, names in sorted(info["importers"].items()):
            print(f"    • {report.relative(src)}: {' '.join(names) or '(side effect)'}")
