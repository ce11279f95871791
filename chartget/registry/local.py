"""Local directory-backed registry client.

A simple, file-system-backed client for development and tests. Each
``repository:tag`` is stored as one chart archive:

    <root>/<host>/<path...>/<tag>.tgz

A colon in the host (a port) is stored as ``_``. There is no content
addressing, manifest or layer handling here.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from chartget.chart.archive import archive_bytes, load_archive
from chartget.chart.models import Chart
from chartget.errors import ArchiveError, RegistryError
from chartget.registry.reference import Reference, validate_repository

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".tgz"


class LocalRegistryClient:
    """Registry client that reads and writes chart archives under a directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def push_chart(self, chart: Chart, reference: Reference) -> Path:
        """Store *chart* under *reference*, replacing any existing archive."""
        path = self._archive_path(reference)
        payload = archive_bytes(chart)

        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(".tmp")
        try:
            temp_path.write_bytes(payload)
            os.replace(temp_path, path)
        finally:
            temp_path.unlink(missing_ok=True)

        logger.info("Pushed %s to %s", chart.qualified_id, reference.full_name)
        return path

    def pull_chart(self, reference: Reference) -> None:
        path = self._archive_path(reference)
        if not path.is_file():
            raise RegistryError(f"{reference.full_name}: not found")
        logger.debug("Found %s at %s", reference.full_name, path)

    def load_chart(self, reference: Reference) -> Chart:
        path = self._archive_path(reference)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise RegistryError(f"{reference.full_name}: {e.strerror or e}", cause=e) from e
        try:
            return load_archive(data)
        except ArchiveError as e:
            raise RegistryError(f"{reference.full_name}: {e.message}", cause=e) from e

    def list_tags(self, repository: str) -> list[str]:
        """List the tags stored for *repository*, sorted."""
        validate_repository(repository)
        repo_dir = self._repository_dir(repository)
        if not repo_dir.is_dir():
            return []
        return sorted(
            p.name[: -len(ARCHIVE_SUFFIX)]
            for p in repo_dir.iterdir()
            if p.is_file() and p.name.endswith(ARCHIVE_SUFFIX)
        )

    def _repository_dir(self, repository: str) -> Path:
        host, *path = repository.split("/")
        return self.root.joinpath(host.replace(":", "_"), *path)

    def _archive_path(self, reference: Reference) -> Path:
        if not reference.tag:
            raise RegistryError(f"{reference.full_name}: a tag is required")
        validate_repository(reference.repository)
        return self._repository_dir(reference.repository) / f"{reference.tag}{ARCHIVE_SUFFIX}"
