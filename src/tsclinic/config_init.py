"""
配置初始化模块 - 生成和显示配置文件
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config_loader import ProjectConfig, save_example_config


def init_config(output_path: Optional[Path] = None, force: bool = False) -> Optional[Path]:
    """
    初始化配置文件

    Args:
        output_path: 输出路径，默认为当前目录下的 tsclinic.yaml
        force: 是否强制覆盖已存在的配置文件

    Returns:
        Path: 生成的配置文件路径；已存在且未指定 force 时返回 None
    """
    if output_path is None:
        output_path = Path("tsclinic.yaml")

    if output_path.exists() and not force:
        print(f"⚠️  配置文件已存在: {output_path}")
        print("   使用 --force 覆盖")
        return None

    save_example_config(output_path)

    print(f"✅ 配置文件已生成: {output_path}")
    print("\n💡 下一步操作:")
    print("1. 在 entry_points 中列出项目入口文件")
    print("2. 在 alias 中声明与 tsconfig paths 一致的路径别名")
    print("3. 运行 'tsclinic' 进行分析")
    return output_path


def show_config(config: ProjectConfig) -> None:
    """显示当前生效配置"""
    print("📋 当前生效配置:")
    print("━" * 60)
    if config.source:
        print(f"  📄 配置文件: {config.source}")
    print(f"  📂 项目根目录: {config.root}")
    print(f"  📂 扫描路径: {', '.join(config.paths)}")
    print(f"  📁 输出目录: {config.output}")
    print(f"  🖼️  图格式: {config.format}")

    print("\n📁 文件过滤:")
    print(f"  ✅ 包含: {', '.join(config.include)}")
    print(f"  ❌ 排除: {', '.join(config.exclude) or '-'}")

    print(f"\n🚪 入口文件 ({len(config.entry_points)}):")
    for entry in config.entry_points:
        print(f"  • {entry}")

    print(f"\n🔀 路径别名 ({len(config.alias)}):")
    for prefix, replacement in config.alias.items():
        print(f"  • {prefix} -> {replacement}")
    print("━" * 60)
