"""
tsclinic - Find unreachable files and unused exports in a TypeScript project

Simple API:

    from tsclinic import analyze_project

    # Analyze using ./tsclinic.yaml (or [tool.tsclinic] in pyproject.toml)
    report = analyze_project()
    print(report.unreachable)
    print(report.unused_exports)

    # Analyze and write dead_code.json + dependency graph
    report = analyze_project(config_path="web/tsclinic.yaml", output="analysis", graph=True)
"""


def analyze_project(*args, **kwargs):
    """Lazy import wrapper for analyze_project to avoid importing the parser at package import time."""
    from .api import analyze_project as _analyze_project

    return _analyze_project(*args, **kwargs)


from .errors import ConfigError, ConfigNotFoundError, ResolutionError, TsClinicError

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tsclinic")
except PackageNotFoundError:
    # Fallback for development/uninstalled package
    __version__ = "unknown"

__all__ = [
    "analyze_project",
    "ConfigError",
    "ConfigNotFoundError",
    "ResolutionError",
    "TsClinicError",
    "__version__",
]
