from __future__ import annotations

from pathlib import Path

import pytest

from tsclinic.config_loader import (
    create_example_config,
    find_config_file,
    load_config,
    save_example_config,
)
from tsclinic.discovery import collect_source_files
from tsclinic.errors import ConfigError, ConfigNotFoundError


def test_yaml_config_resolves_root_relative_to_file(write_tree):
    root = write_tree({
        "web/tsclinic.yaml": (
            "entry_points:\n  - src/app.tsx\n  - '@/pages/notFound'\n"
            "alias:\n  '@/lib/': src/shared/lib/\n  '@/': src/\n"
        ),
    })
    config = load_config(root / "web" / "tsclinic.yaml")
    assert config.root == str((root / "web").resolve())
    assert config.entry_points == ["src/app.tsx", "@/pages/notFound"]
    # declaration order is preserved
    assert list(config.alias) == ["@/lib/", "@/"]
    assert config.source == str(root / "web" / "tsclinic.yaml")


def test_js_style_entry_points_key(write_tree):
    root = write_tree({"tsclinic.yml": "entryPoints: [src/index.ts]\nroot: app\n"})
    config = load_config(root / "tsclinic.yml")
    assert config.entry_points == ["src/index.ts"]
    assert config.root == str((root / "app").resolve())


def test_pyproject_tool_table(write_tree):
    root = write_tree({
        "pyproject.toml": (
            "[project]\nname = 'x'\n\n"
            "[tool.tsclinic]\nentry_points = ['src/main.ts']\npaths = ['src', 'lib']\n\n"
            "[tool.tsclinic.alias]\n'~/' = 'src/'\n"
        ),
    })
    assert find_config_file(root) == root / "pyproject.toml"
    config = load_config(cwd=root)
    assert config.entry_points == ["src/main.ts"]
    assert config.paths == ["src", "lib"]
    assert config.alias == {"~/": "src/"}


def test_yaml_takes_precedence_over_pyproject(write_tree):
    root = write_tree({
        "pyproject.toml": "[tool.tsclinic]\nentry_points = ['a.ts']\n",
        "tsclinic.yaml": "entry_points: [b.ts]\n",
    })
    assert find_config_file(root) == root / "tsclinic.yaml"


def test_pyproject_without_table_is_ignored(write_tree):
    root = write_tree({"pyproject.toml": "[project]\nname = 'x'\n"})
    assert find_config_file(root) is None
    with pytest.raises(ConfigNotFoundError):
        load_config(cwd=root)


def test_missing_config_is_fatal(tmp_path):
    with pytest.raises(ConfigNotFoundError) as exc:
        load_config(cwd=tmp_path)
    assert tmp_path / "tsclinic.yaml" in exc.value.searched
    with pytest.raises(ConfigNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_invalid_alias_rejected(write_tree):
    root = write_tree({"tsclinic.yaml": "alias: ['@/']\n"})
    with pytest.raises(ConfigError):
        load_config(root / "tsclinic.yaml")


def test_unsupported_suffix(write_tree):
    root = write_tree({"tsclinic.json": "{}"})
    with pytest.raises(ValueError):
        load_config(root / "tsclinic.json")


def test_example_config_round_trips(tmp_path):
    path = save_example_config(tmp_path / "tsclinic.yaml")
    assert path.read_text(encoding="utf-8") == create_example_config()
    config = load_config(path)
    assert config.alias == {"@/": "src/"}
    assert "@/pages/notFound" in config.entry_points


def test_inventory_respects_exclude_and_extensions(write_tree):
    root = write_tree({
        "tsclinic.yaml": "entry_points: []\n",
        "src/a.ts": "",
        "src/b.tsx": "",
        "src/types.d.ts": "",
        "src/c.js": "",
        "src/style.css": "",
        "src/node_modules/pkg/index.ts": "",
        "src/dist/out.ts": "",
        "src/deep/er/d.ts": "",
        "other/e.ts": "",
    })
    config = load_config(root / "tsclinic.yaml")
    files = [Path(p).relative_to(root).as_posix() for p in collect_source_files(config)]
    assert files == ["src/a.ts", "src/b.tsx", "src/deep/er/d.ts", "src/types.d.ts"]
