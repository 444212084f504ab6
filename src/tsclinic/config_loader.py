"""
配置加载器 - 支持YAML格式配置文件以及 pyproject.toml 中的 [tool.tsclinic]
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field

import yaml

try:  # py3.11+
    import tomllib as tomli
except ImportError:
    import tomli

from .errors import ConfigError, ConfigNotFoundError

CONFIG_CANDIDATES = (
    "tsclinic.yaml",
    "tsclinic.yml",
    ".tsclinic.yaml",
    ".tsclinic.yml",
    "pyproject.toml",  # 检查 [tool.tsclinic]
)


@dataclass
class ProjectConfig:
    """项目配置"""
    # 项目根目录：别名与入口均相对于它解析
    root: str = "."
    # 文件清单的扫描路径（相对 root）
    paths: List[str] = field(default_factory=lambda: ["src"])
    include: List[str] = field(default_factory=lambda: ["**/*.ts", "**/*.tsx"])
    exclude: List[str] = field(default_factory=lambda: [
        "**/node_modules/**", "**/build/**", "**/dist/**", "**/coverage/**"
    ])
    # 入口文件（按声明顺序遍历）
    entry_points: List[str] = field(default_factory=list)
    # 路径别名：前缀 -> 替换，按声明顺序匹配第一个
    alias: Dict[str, str] = field(default_factory=dict)
    output: str = "tsclinic_results"
    format: str = "svg"
    # 配置文件本身的位置（未从文件加载时为 None）
    source: Optional[str] = None


def load_config(config_path: Optional[Path] = None, cwd: Optional[Path] = None) -> ProjectConfig:
    """
    加载配置文件

    Args:
        config_path: 指定配置文件路径，如果为None则自动查找
        cwd: 自动查找的起始目录，默认当前目录

    Returns:
        ProjectConfig: 加载的配置

    Raises:
        ConfigNotFoundError: 没有找到任何配置
    """
    if config_path:
        return _load_config_file(Path(config_path))

    found_config = find_config_file(cwd)
    if found_config is None:
        base = Path(cwd) if cwd else Path(".")
        raise ConfigNotFoundError([base / name for name in CONFIG_CANDIDATES])
    return _load_config_file(found_config)


def find_config_file(cwd: Optional[Path] = None) -> Optional[Path]:
    """
    按优先级查找配置文件

    Returns:
        Path: 找到的配置文件路径，如果没找到返回None
    """
    base = Path(cwd) if cwd else Path(".")
    for name in CONFIG_CANDIDATES:
        candidate = base / name
        if candidate.exists():
            # 对于pyproject.toml，检查是否有[tool.tsclinic]配置
            if candidate.name == 'pyproject.toml':
                if _has_tsclinic_config(candidate):
                    return candidate
                continue
            return candidate
    return None


def _load_config_file(config_path: Path) -> ProjectConfig:
    """加载指定的配置文件"""
    if not config_path.exists():
        raise ConfigNotFoundError([config_path])

    suffix = config_path.suffix.lower()

    if suffix in ['.yaml', '.yml']:
        data = _load_yaml_config(config_path)
    elif suffix == '.toml':
        data = _load_toml_config(config_path)
    else:
        raise ValueError(f"不支持的配置文件格式: {suffix}")

    config = _parse_config_data(data or {}, base_dir=config_path.resolve().parent)
    config.source = str(config_path)
    return config


def _load_yaml_config(config_path: Path) -> Any:
    """加载YAML配置文件"""
    with config_path.open('r', encoding='utf-8') as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"无法解析配置文件 {config_path}: {e}") from e


def _load_toml_config(config_path: Path) -> Any:
    """加载TOML配置文件"""
    with config_path.open('rb') as f:
        try:
            data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"无法解析配置文件 {config_path}: {e}") from e

    # 检查是否是pyproject.toml格式
    if 'tool' in data and 'tsclinic' in data['tool']:
        return data['tool']['tsclinic']
    return data


def _has_tsclinic_config(pyproject_path: Path) -> bool:
    """检查pyproject.toml是否包含tsclinic配置"""
    try:
        with pyproject_path.open('rb') as f:
            data = tomli.load(f)
    except (OSError, tomli.TOMLDecodeError):
        return False
    return 'tool' in data and 'tsclinic' in data['tool']


def _str_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data[key]
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' 必须是列表")
    return [str(v) for v in value]


def _parse_config_data(data: Dict[str, Any], base_dir: Optional[Path] = None) -> ProjectConfig:
    """解析配置数据"""
    if not isinstance(data, dict):
        raise ConfigError("配置文件顶层必须是映射")
    config = ProjectConfig()

    root = Path(str(data.get('root', '.')))
    if base_dir is not None and not root.is_absolute():
        root = base_dir / root
    config.root = str(root.resolve())

    for key in ('paths', 'include', 'exclude'):
        if key in data:
            setattr(config, key, _str_list(data, key))

    # 兼容 JS 风格的 entryPoints
    entry_key = 'entry_points' if 'entry_points' in data else 'entryPoints'
    if entry_key in data:
        config.entry_points = _str_list(data, entry_key)

    if 'alias' in data:
        alias = data['alias'] or {}
        if not isinstance(alias, dict):
            raise ConfigError("'alias' 必须是 前缀 -> 路径 的映射")
        config.alias = {str(k): str(v) for k, v in alias.items()}

    if 'output' in data:
        config.output = str(data['output'])
    if 'format' in data:
        config.format = str(data['format'])

    return config


def create_example_config() -> str:
    """创建示例配置文件内容"""
    return """# tsclinic 配置文件
version: "1.0"

# 项目根目录（相对本文件）；别名和入口均相对于它解析
root: "."

# 参与分析的文件清单
paths:
  - "src"
include:
  - "**/*.ts"
  - "**/*.tsx"
exclude:
  - "**/node_modules/**"
  - "**/build/**"
  - "**/dist/**"
  - "**/coverage/**"

# 入口文件：从这里开始遍历，入口自身的导出不会被报告
entry_points:
  - "src/app.tsx"
  - "src/routes/index.ts"
  - "@/pages/notFound"

# 路径别名：按顺序匹配第一个前缀并替换一次
alias:
  "@/": "src/"

output: "tsclinic_results"
format: "svg"
"""


def save_example_config(output_path: Path = None) -> Path:
    """保存示例配置文件"""
    if output_path is None:
        output_path = Path("tsclinic.yaml")

    content = create_example_config()
    output_path.write_text(content, encoding='utf-8')

    return output_path
