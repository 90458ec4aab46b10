import json
import subprocess
import sys
from textwrap import dedent

import pytest
from click.testing import CliRunner

from yaml_diffkit.cli import main

MANIFEST = dedent(
    """
    from: {location: left.yaml, documents: [{}]}
    to: {location: right.yaml, documents: [{}]}
    diffs:
      - path: /spec/replicas
        details:
          - {kind: "~", from: 1, to: 3}
      - path: /metadata/labels/app
        details:
          - {kind: "+", to: web}
    """
)


@pytest.fixture
def manifest(tmp_path):
    path = tmp_path / "manifest.yaml"
    path.write_text(MANIFEST, encoding="utf-8")
    return path


def test_report_prints_json(manifest):
    result = CliRunner().invoke(main, ["report", str(manifest)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["summary"] == {"changes": 2}
    assert data["differences"][1] == {"path": "metadata.labels.app", "details": [{"kind": "+", "addition": '"web"'}]}


def test_report_filters_and_go_patch_style(manifest):
    result = CliRunner().invoke(
        main,
        ["report", str(manifest), "--exclude", "/metadata", "--use-go-patch-style"],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [d["path"] for d in data["differences"]] == ["/spec/replicas"]


def test_go_patch_style_from_environment(manifest):
    result = CliRunner().invoke(
        main,
        ["report", str(manifest)],
        env={"YAML_DIFFKIT_REPORT_USE_GO_PATCH_STYLE": "1"},
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["differences"][0]["path"] == "/spec/replicas"


def test_invalid_exclude_path_is_an_error(manifest):
    result = CliRunner().invoke(main, ["report", str(manifest), "--exclude", "metadata"])
    assert result.exit_code == 255
    assert "Go Patch" in result.output


def test_invalid_regexp_is_an_error(manifest):
    result = CliRunner().invoke(main, ["report", str(manifest), "--filter-regexp", "("])
    assert result.exit_code == 255


def test_set_exit_code(manifest):
    runner = CliRunner()
    assert runner.invoke(main, ["report", str(manifest), "--set-exit-code"]).exit_code == 1
    result = runner.invoke(main, ["report", str(manifest), "--set-exit-code", "--filter-regexp", "^/nothing"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"summary": {"changes": 0}}


def test_report_to_file_via_module(manifest, tmp_path):
    out = tmp_path / "report.json"
    cmd = [sys.executable, "-m", "yaml_diffkit.cli", "report", str(manifest), "-o", str(out)]
    subprocess.run(cmd, check=True)
    assert out.exists() and out.stat().st_size > 0
    assert json.loads(out.read_text(encoding="utf-8"))["summary"]["changes"] == 2
