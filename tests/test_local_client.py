"""Tests for the directory-backed registry client."""

import tempfile
from pathlib import Path

import pytest

from chartget.errors import InvalidReferenceError, PullFailedError, RegistryError
from chartget.registry.getter import RegistryGetter
from chartget.registry.local import LocalRegistryClient
from chartget.registry.reference import Reference

from conftest import make_chart

REPO = "localhost:5000/charts/mychart"


def test_push_and_load():
    with tempfile.TemporaryDirectory() as tmpdir:
        client = LocalRegistryClient(tmpdir)
        path = client.push_chart(make_chart(), Reference(REPO, "2.0.0"))

        assert path == Path(tmpdir) / "localhost_5000" / "charts" / "mychart" / "2.0.0.tgz"
        client.pull_chart(Reference(REPO, "2.0.0"))
        loaded = client.load_chart(Reference(REPO, "2.0.0"))
        assert loaded.qualified_id == "mychart@2.0.0"


def test_pull_missing_chart():
    with tempfile.TemporaryDirectory() as tmpdir:
        client = LocalRegistryClient(tmpdir)
        with pytest.raises(RegistryError) as excinfo:
            client.pull_chart(Reference(REPO, "9.9.9"))
        assert "not found" in str(excinfo.value)


def test_tag_is_required():
    with tempfile.TemporaryDirectory() as tmpdir:
        client = LocalRegistryClient(tmpdir)
        with pytest.raises(RegistryError):
            client.pull_chart(Reference(REPO))


def test_invalid_repository_is_rejected():
    with tempfile.TemporaryDirectory() as tmpdir:
        client = LocalRegistryClient(tmpdir)
        with pytest.raises(InvalidReferenceError):
            client.pull_chart(Reference("localhost/../escape", "1.0"))


def test_load_corrupt_archive():
    with tempfile.TemporaryDirectory() as tmpdir:
        client = LocalRegistryClient(tmpdir)
        path = client.push_chart(make_chart(), Reference(REPO, "1.0.0"))
        path.write_bytes(b"garbage")

        with pytest.raises(RegistryError):
            client.load_chart(Reference(REPO, "1.0.0"))


def test_list_tags():
    with tempfile.TemporaryDirectory() as tmpdir:
        client = LocalRegistryClient(tmpdir)
        assert client.list_tags(REPO) == []

        client.push_chart(make_chart(version="1.0.0"), Reference(REPO, "1.0.0"))
        client.push_chart(make_chart(version="2.0.0"), Reference(REPO, "latest"))
        client.push_chart(make_chart(version="2.0.0"), Reference(REPO, "2.0.0"))

        assert client.list_tags(REPO) == ["1.0.0", "2.0.0", "latest"]


def test_getter_end_to_end_with_floating_tag():
    with tempfile.TemporaryDirectory() as tmpdir:
        client = LocalRegistryClient(tmpdir)
        client.push_chart(make_chart(version="2.0.0"), Reference(REPO, "latest"))

        getter = RegistryGetter(client)
        response = getter.get_with_details(f"oci://{REPO}", "latest")

        assert response.filename == "mychart-2.0.0.tgz"


def test_getter_reports_missing_chart_as_pull_failure():
    with tempfile.TemporaryDirectory() as tmpdir:
        getter = RegistryGetter(LocalRegistryClient(tmpdir))
        with pytest.raises(PullFailedError) as excinfo:
            getter.get_with_details(f"oci://{REPO}:3.0.0")
        assert isinstance(excinfo.value.cause, RegistryError)


def test_satisfies_registry_client_protocol():
    from chartget.registry.client import RegistryClient

    with tempfile.TemporaryDirectory() as tmpdir:
        assert isinstance(LocalRegistryClient(tmpdir), RegistryClient)


def test_failed_push_leaves_no_temp_file(monkeypatch):
    def failing_replace(src, dst):
        raise OSError("device busy")

    monkeypatch.setattr("chartget.registry.local.os.replace", failing_replace)

    with tempfile.TemporaryDirectory() as tmpdir:
        client = LocalRegistryClient(tmpdir)
        with pytest.raises(OSError):
            client.push_chart(make_chart(), Reference(REPO, "1.0.0"))

        repo_dir = Path(tmpdir) / "localhost_5000" / "charts" / "mychart"
        assert list(repo_dir.iterdir()) == []


def test_push_tag_with_build_metadata():
    with tempfile.TemporaryDirectory() as tmpdir:
        client = LocalRegistryClient(tmpdir)
        client.push_chart(make_chart(), Reference(REPO, "2.0.0+build.5"))
        assert client.list_tags(REPO) == ["2.0.0+build.5"]
