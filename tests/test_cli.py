"""Tests for the chartget command-line interface."""

from pathlib import Path

from click.testing import CliRunner

from chartget.cli import main
from chartget.registry.local import LocalRegistryClient
from chartget.registry.reference import Reference

from conftest import make_chart

REPO = "registry.example.com/charts/mychart"


def _seed(registry_dir: Path, tag: str = "2.0.0", version: str = "2.0.0") -> None:
    LocalRegistryClient(registry_dir).push_chart(make_chart(version=version), Reference(REPO, tag))


def test_fetch_tagged_url(tmp_path):
    _seed(tmp_path / "reg")
    out = tmp_path / "out"

    result = CliRunner().invoke(
        main, ["fetch", f"oci://{REPO}:2.0.0", "-r", str(tmp_path / "reg"), "-o", str(out)]
    )

    assert result.exit_code == 0, result.output
    assert (out / "mychart-2.0.0.tgz").is_file()


def test_fetch_with_version(tmp_path):
    _seed(tmp_path / "reg", tag="stable", version="1.4.0")
    out = tmp_path / "out"

    result = CliRunner().invoke(
        main,
        ["fetch", f"oci://{REPO}", "--version", "stable", "-r", str(tmp_path / "reg"), "-o", str(out)],
    )

    assert result.exit_code == 0, result.output
    assert (out / "mychart-1.4.0.tgz").is_file()


def test_fetch_without_version_fails(tmp_path):
    result = CliRunner().invoke(main, ["fetch", f"oci://{REPO}", "-r", str(tmp_path)])

    assert result.exit_code == 1
    assert "missing_version" in result.output


def test_fetch_missing_chart_fails(tmp_path):
    result = CliRunner().invoke(main, ["fetch", f"oci://{REPO}:9.9.9", "-r", str(tmp_path)])

    assert result.exit_code == 1
    assert "pull_failed" in result.output


def test_resolve():
    result = CliRunner().invoke(main, ["resolve", "localhost:5000/charts/app:1.0"])

    assert result.exit_code == 0
    assert "localhost:5000/charts/app" in result.output
    assert "1.0" in result.output


def test_resolve_invalid():
    result = CliRunner().invoke(main, ["resolve", "localhost/charts/app:"])

    assert result.exit_code == 1
    assert "invalid_reference" in result.output


def test_push_and_tags(tmp_path):
    chart_dir = tmp_path / "web"
    chart_dir.mkdir()
    (chart_dir / "Chart.yaml").write_text("apiVersion: v2\nname: web\nversion: 0.3.0\n")
    (chart_dir / "values.yaml").write_text("image: nginx\n")
    registry_dir = str(tmp_path / "reg")

    result = CliRunner().invoke(main, ["push", str(chart_dir), "localhost/charts/web", "-r", registry_dir])
    assert result.exit_code == 0, result.output

    result = CliRunner().invoke(main, ["tags", "localhost/charts/web", "-r", registry_dir])
    assert result.exit_code == 0
    assert "0.3.0" in result.output


def test_tags_empty(tmp_path):
    result = CliRunner().invoke(main, ["tags", "localhost/charts/none", "-r", str(tmp_path)])

    assert result.exit_code == 0
    assert "No tags found" in result.output


def test_fetch_reports_unwritable_output(tmp_path):
    _seed(tmp_path / "reg")
    blocker = tmp_path / "out"
    blocker.write_text("not a directory")

    result = CliRunner().invoke(
        main, ["fetch", f"oci://{REPO}:2.0.0", "-r", str(tmp_path / "reg"), "-o", str(blocker)]
    )

    assert result.exit_code == 1
    assert "(io)" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
