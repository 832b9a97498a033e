"""End-to-end CLI integration tests.

Invokes flowtable as a subprocess to verify real command execution.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def _run_flowtable(*args: str, cwd: str | Path | None = None) -> subprocess.CompletedProcess:
    """Run flowtable as a subprocess."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "flowtable", *args],
        capture_output=True,
        text=True,
        cwd=cwd,
        env=env,
        timeout=120,
    )


class TestCLIHelp:
    """Test --help works for main and subcommands."""

    def test_main_help(self):
        result = _run_flowtable("--help")
        assert result.returncode == 0
        assert "flowtable" in result.stdout

    def test_render_help(self):
        result = _run_flowtable("render", "--help")
        assert result.returncode == 0
        assert "graph_file" in result.stdout

    def test_version(self):
        result = _run_flowtable("--version")
        assert result.returncode == 0
        assert result.stdout.startswith("flowtable ")


class TestRender:
    """Render real graph files end to end."""

    def test_render_nested_regions(self, tmp_path):
        graph = {
            "nodes": [
                {"id": "S1", "role": "start", "label": "Stage"},
                {"id": "S2", "role": "start", "parents": ["S1"], "label": "Parallel"},
                {"id": "A", "parents": ["S2"]},
                {"id": "E2", "role": "end", "start": "S2", "parents": ["A"]},
                {"id": "B", "parents": ["E2"]},
                {"id": "E1", "role": "end", "start": "S1", "parents": ["B"]},
                {"id": "Z", "parents": ["E1"]},
            ]
        }
        path = tmp_path / "run.json"
        path.write_text(json.dumps(graph))

        result = _run_flowtable("render", str(path), "--format", "json", cwd=tmp_path)

        assert result.returncode == 0, result.stderr
        rows = json.loads(result.stdout)["rows"]
        assert [(r["id"], r["depth"]) for r in rows] == [
            ("S1", 0),
            ("S2", 1),
            ("A", 2),
            ("B", 1),
            ("Z", 0),
        ]

    def test_render_empty_graph(self, tmp_path):
        path = tmp_path / "empty.toml"
        path.write_text("")

        result = _run_flowtable("render", str(path), cwd=tmp_path)

        assert result.returncode == 0
        assert result.stdout == ""

    def test_pinned_heads(self, tmp_path):
        graph = {"heads": ["A"], "nodes": [{"id": "A"}, {"id": "B", "parents": ["A"]}]}
        path = tmp_path / "pinned.json"
        path.write_text(json.dumps(graph))

        result = _run_flowtable("render", str(path), cwd=tmp_path)

        assert result.returncode == 0
        assert result.stdout.splitlines() == ["A"]
