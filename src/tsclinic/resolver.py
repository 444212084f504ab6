"""
模块路径解析 - 将 import/export 的模块说明符解析为磁盘上的绝对文件路径
"""

from __future__ import annotations

import os
import re
from typing import Dict, Optional, Tuple

from .errors import ResolutionError

# Probed in this order when the bare path does not exist
EXTENSIONS: Tuple[str, ...] = (".ts", ".tsx", ".d.ts")
# Files participating in the graph (.d.ts included)
SOURCE_PATTERN = re.compile(r"\.tsx?$")


def is_trackable(path: str) -> bool:
    return bool(SOURCE_PATTERN.search(path))


def canonical(path: str) -> str:
    return os.path.normpath(os.path.abspath(path))


class SpecifierResolver:
    """Resolve module specifiers against a project root and an alias table.

    Alias prefixes are tried in table order and only the first match is
    substituted. Specifiers that are neither aliased nor relative are external
    and resolve to ``None``.
    """

    def __init__(self, root: str, alias: Optional[Dict[str, str]] = None):
        self.root = canonical(root)
        self.alias: Dict[str, str] = dict(alias or {})

    def replace_alias(self, specifier: str) -> Tuple[str, bool]:
        for prefix, replacement in self.alias.items():
            if specifier.startswith(prefix):
                return replacement + specifier[len(prefix):], True
        return specifier, False

    def resolve(self, specifier: str, from_file: str) -> Optional[str]:
        """Return the resolved path, or ``None`` for an external specifier.

        Raises:
            ResolutionError: the specifier is in-tree but no file matches.
        """
        target, replaced = self.replace_alias(specifier)
        if replaced:
            base = self.root
        elif target.startswith("."):
            base = os.path.dirname(from_file)
        else:
            return None
        return self.resolve_path(os.path.join(base, target), specifier, from_file)

    def resolve_entry(self, entry: str) -> str:
        """Entry points are resolved against the root whether or not they are relative."""
        target, _ = self.replace_alias(entry)
        return self.resolve_path(os.path.join(self.root, target), entry)

    def resolve_path(self, candidate: str, specifier: str, importer: Optional[str] = None) -> str:
        path = canonical(candidate)
        if os.path.isdir(path):
            return self.resolve_path(os.path.join(path, "index"), specifier, importer)
        if os.path.exists(path):
            return path
        for ext in EXTENSIONS:
            if os.path.exists(path + ext):
                return path + ext
        raise ResolutionError(specifier, path, importer)
