from __future__ import annotations

import json

from tsclinic import analyze_project
from tsclinic.cli import main

PROJECT = {
    "tsclinic.yaml": "entry_points:\n  - src/main.ts\nalias:\n  '@/': src/\noutput: out\n",
    "src/main.ts": "import { used } from '@/lib'\n",
    "src/lib.ts": "export const used = 1\nexport const unused = 2\n",
    "src/orphan.ts": "export const o = 1\n",
}


def test_cli_prints_findings(write_tree, capsys):
    root = write_tree(PROJECT)
    assert main(["--config", str(root / "tsclinic.yaml")]) == 0
    out = capsys.readouterr().out
    assert "src/orphan.ts" in out
    assert "src/lib.ts unused" in out


def test_cli_fail_on_findings_and_json(write_tree, capsys):
    root = write_tree(PROJECT)
    code = main(["--config", str(root / "tsclinic.yaml"), "--json", "--fail-on-findings"])
    assert code == 1
    data = json.loads((root / "out" / "dead_code.json").read_text(encoding="utf-8"))
    assert data["summary"]["files_total"] == 3
    assert data["summary"]["unreachable"] == 1


def test_cli_clean_project_passes(write_tree, capsys):
    root = write_tree({
        "tsclinic.yaml": "entry_points: [src/main.ts]\n",
        "src/main.ts": "import * as lib from './lib'\n",
        "src/lib.ts": "export const a = 1\n",
    })
    assert main(["--config", str(root / "tsclinic.yaml"), "--fail-on-findings"]) == 0
    assert "✅" in capsys.readouterr().out


def test_cli_resolution_error_exits_2(write_tree, capsys):
    root = write_tree({
        "tsclinic.yaml": "entry_points: [src/main.ts]\n",
        "src/main.ts": "import { x } from './missing'\n",
    })
    assert main(["--config", str(root / "tsclinic.yaml")]) == 2
    captured = capsys.readouterr()
    assert "missing" in captured.err
    assert "src/main.ts" not in captured.out


def test_cli_missing_config_exits_2(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 2
    assert "tsclinic.yaml" in capsys.readouterr().err


def test_cli_explain(write_tree, capsys):
    root = write_tree(PROJECT)
    assert main(["--config", str(root / "tsclinic.yaml"), "--explain", "src/lib.ts"]) == 0
    out = capsys.readouterr().out
    assert "unused" in out
    assert "src/main.ts: used" in out


def test_cli_init_and_show_config(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["--init"]) == 0
    assert (tmp_path / "tsclinic.yaml").exists()
    # second init without --force keeps the file
    (tmp_path / "tsclinic.yaml").write_text("entry_points: [a.ts]\n", encoding="utf-8")
    assert main(["--init"]) == 0
    assert (tmp_path / "tsclinic.yaml").read_text(encoding="utf-8") == "entry_points: [a.ts]\n"
    assert main(["--show-config"]) == 0
    assert "a.ts" in capsys.readouterr().out


def test_analyze_project_api(write_tree):
    root = write_tree(PROJECT)
    report = analyze_project(config_path=str(root / "tsclinic.yaml"), output=str(root / "api_out"))
    assert report.has_findings
    assert [report.relative(p) for p in report.unreachable] == ["src/orphan.ts"]
    assert (root / "api_out" / "dead_code.json").exists()


def test_analyze_project_relative_output_under_root(write_tree, tmp_path_factory, monkeypatch):
    root = write_tree(PROJECT)
    elsewhere = tmp_path_factory.mktemp("cwd")
    monkeypatch.chdir(elsewhere)
    analyze_project(config_path=str(root / "tsclinic.yaml"), output="api_rel")
    assert (root / "api_rel" / "dead_code.json").exists()
    assert not (elsewhere / "api_rel").exists()


def test_cli_graph_writes_dot(write_tree, capsys):
    root = write_tree(PROJECT)
    assert main(["--config", str(root / "tsclinic.yaml"), "--graph", "--format", "svg"]) == 0
    dot = (root / "out" / "dependency_graph.dot").read_text(encoding="utf-8")
    assert "orphan.ts" in dot
    assert "#F44336" in dot  # unreachable colour
