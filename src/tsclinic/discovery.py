"""
File inventory: every trackable source file under the configured paths.
"""
from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Iterable, List

from .config_loader import ProjectConfig
from .resolver import canonical, is_trackable


def _matches(rel: str, patterns: Iterable[str]) -> bool:
    for pat in patterns:
        if fnmatch.fnmatch(rel, pat):
            return True
        # "**/x" also matches "x" directly under the base
        if pat.startswith("**/") and fnmatch.fnmatch(rel, pat[3:]):
            return True
    return False


def collect_source_files(config: ProjectConfig) -> List[str]:
    """Return sorted, de-duplicated canonical paths of all trackable files."""
    root = Path(config.root)
    collected = set()
    for p in config.paths:
        base = root / p
        if not base.exists():
            continue
        if base.is_file():
            if is_trackable(base.name):
                collected.add(canonical(str(base)))
            continue
        for dirpath, dirnames, filenames in os.walk(base):
            # prune excluded dirs
            for d in list(dirnames):
                rel = Path(dirpath, d).relative_to(base).as_posix()
                if _matches(rel + "/", config.exclude):
                    dirnames.remove(d)
            for fn in filenames:
                if not is_trackable(fn):
                    continue
                rel = Path(dirpath, fn).relative_to(base).as_posix()
                if _matches(rel, config.exclude):
                    continue
                if config.include and not _matches(rel, config.include):
                    continue
                collected.add(canonical(os.path.join(dirpath, fn)))
    return sorted(collected)
