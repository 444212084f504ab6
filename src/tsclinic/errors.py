"""
错误类型 - 所有错误均为致命错误，直接终止本次分析
"""

from __future__ import annotations

from typing import Optional


class TsClinicError(Exception):
    """Base class for every fatal tsclinic error."""


class ConfigError(TsClinicError):
    """配置文件内容无效"""


class ConfigNotFoundError(ConfigError):
    """未找到配置文件"""

    def __init__(self, searched: Optional[list] = None):
        self.searched = list(searched or [])
        names = ", ".join(str(p) for p in self.searched) or "tsclinic.yaml"
        super().__init__(
            f"Please create a config file in the project directory (looked for: {names})"
        )


class ResolutionError(TsClinicError):
    """A module specifier points at nothing on disk."""

    def __init__(self, specifier: str, candidate: str, importer: Optional[str] = None):
        self.specifier = specifier
        self.candidate = candidate
        self.importer = importer
        where = f" (imported from {importer})" if importer else ""
        super().__init__(f"File does not exist: {candidate} for '{specifier}'{where}")
