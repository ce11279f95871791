"""Chart archive serializer and loader.

Charts travel as gzip-compressed tarballs whose entries sit under a single
top-level ``<name>/`` directory, with ``Chart.yaml`` holding the metadata.
``write_archive`` produces byte-identical output for identical charts:
entries are sorted and every timestamp is pinned to zero.
"""

from __future__ import annotations

import gzip
import io
import logging
import posixpath
import tarfile
from pathlib import Path
from typing import BinaryIO

import yaml

from chartget.chart.models import METADATA_FILE, Chart, ChartMetadata
from chartget.errors import ArchiveError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def write_archive(chart: Chart, sink: BinaryIO) -> None:
    """Write the canonical ``.tgz`` representation of *chart* to *sink*."""
    chart.metadata.validate()
    if METADATA_FILE in chart.files:
        raise ArchiveError(f"{METADATA_FILE} is rendered from metadata and must not be in files")

    root = chart.name
    entries = [(METADATA_FILE, _render_metadata(chart.metadata))]
    for rel_path in sorted(chart.files):
        entries.append((_clean_member_path(rel_path), chart.files[rel_path]))

    with gzip.GzipFile(fileobj=sink, mode="wb", mtime=0) as gz:
        with tarfile.open(fileobj=gz, mode="w", format=tarfile.PAX_FORMAT) as tar:
            for rel_path, content in entries:
                info = tarfile.TarInfo(name=f"{root}/{rel_path}")
                info.size = len(content)
                info.mode = 0o644
                info.mtime = 0
                tar.addfile(info, io.BytesIO(content))

    logger.debug("Wrote archive for %s (%d files)", chart.qualified_id, len(entries))


def archive_bytes(chart: Chart) -> bytes:
    buf = io.BytesIO()
    write_archive(chart, buf)
    return buf.getvalue()


def _render_metadata(metadata: ChartMetadata) -> bytes:
    return yaml.safe_dump(metadata.to_dict(), sort_keys=False).encode("utf-8")


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_archive(data: bytes | BinaryIO) -> Chart:
    """Parse a chart archive back into a ``Chart``.

    Accepts raw bytes or a readable binary stream. The leading chart
    directory is stripped from every entry; absolute paths and ``..``
    components are rejected. Raises ``ArchiveError`` on any malformed input.
    """
    stream = io.BytesIO(data) if isinstance(data, (bytes, bytearray)) else data

    files: dict[str, bytes] = {}
    try:
        with tarfile.open(fileobj=stream, mode="r:gz") as tar:
            for member in tar:
                if not member.isfile():
                    continue
                rel_path = _strip_chart_dir(member.name)
                if not rel_path:
                    continue
                extracted = tar.extractfile(member)
                if extracted is None:
                    continue
                files[rel_path] = extracted.read()
    except (tarfile.TarError, OSError, EOFError) as e:
        raise ArchiveError(f"invalid chart archive: {e}", cause=e) from e

    raw_metadata = files.pop(METADATA_FILE, None)
    if raw_metadata is None:
        raise ArchiveError(f"chart archive has no {METADATA_FILE}")

    metadata = parse_metadata(raw_metadata)
    return Chart(metadata=metadata, files=files)


def parse_metadata(raw: bytes) -> ChartMetadata:
    """Parse and validate a ``Chart.yaml`` document.

    Every scalar is read as its literal text, so an unquoted ``version: 1.10``
    stays ``"1.10"`` instead of collapsing to the float ``1.1``.
    """
    try:
        parsed = yaml.load(raw, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise ArchiveError(f"invalid {METADATA_FILE}: {e}", cause=e) from e
    if not isinstance(parsed, dict):
        raise ArchiveError(f"{METADATA_FILE} must be a mapping")

    metadata = ChartMetadata.from_dict(parsed)
    metadata.validate()
    return metadata


def _strip_chart_dir(name: str) -> str:
    if name.startswith("/") or "\\" in name:
        raise ArchiveError(f"illegal path in chart archive: {name}")
    parts = [p for p in name.split("/") if p and p != "."]
    if ".." in parts:
        raise ArchiveError(f"chart archive entry escapes the chart directory: {name}")
    return "/".join(parts[1:])


def _clean_member_path(rel_path: str) -> str:
    cleaned = posixpath.normpath(rel_path.replace("\\", "/"))
    if cleaned.startswith("/") or cleaned == "." or cleaned.split("/")[0] == "..":
        raise ArchiveError(f"illegal chart file path: {rel_path}")
    return cleaned


# ---------------------------------------------------------------------------
# Chart directories
# ---------------------------------------------------------------------------


def load_directory(chart_dir: str | Path) -> Chart:
    """Load an unpacked chart directory (``Chart.yaml`` plus files)."""
    root = Path(chart_dir)
    metadata_path = root / METADATA_FILE
    if not metadata_path.is_file():
        raise ArchiveError(f"no {METADATA_FILE} found in {root}")

    metadata = parse_metadata(metadata_path.read_bytes())

    files: dict[str, bytes] = {}
    for path in sorted(root.rglob("*")):
        if not path.is_file() or path == metadata_path:
            continue
        files[path.relative_to(root).as_posix()] = path.read_bytes()

    return Chart(metadata=metadata, files=files)
