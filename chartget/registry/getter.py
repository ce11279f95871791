"""Registry getter — fetch charts from an OCI registry by ``oci://`` URL.

``get`` turns a tagged URL into a reference, pulls the chart through the
registry client, loads it and serializes it to its canonical archive bytes.
``get_with_details`` additionally accepts an explicit version for untagged
URLs and names the result after the version declared inside the chart, so a
floating tag such as ``latest`` never ends up in a filename.

When a URL already carries a tag, the tag wins and an explicit version is
ignored.
"""

from __future__ import annotations

import io
import logging
from urllib.parse import urlsplit, urlunsplit

from chartget.chart.archive import load_archive, write_archive
from chartget.errors import (
    InvalidReferenceError,
    LoadFailedError,
    MissingVersionError,
    PullFailedError,
    SerializeFailedError,
)
from chartget.getter.base import ChartResponse, Provider
from chartget.registry.client import ArchiveLoader, ArchiveWriter, RegistryClient
from chartget.registry.reference import (
    Reference,
    final_segment,
    parse_reference,
    split_tag,
    validate_tag,
)

logger = logging.getLogger(__name__)

OCI_SCHEME = "oci"


class RegistryGetter:
    """Getter backed by a registry client.

    Parameters
    ----------
    client : RegistryClient
        Performs the pull and load of a chart by reference.
    writer : ArchiveWriter
        Serializes a loaded chart to a binary sink.
    loader : ArchiveLoader
        Parses archive bytes back into a chart.
    """

    def __init__(
        self,
        client: RegistryClient,
        writer: ArchiveWriter = write_archive,
        loader: ArchiveLoader = load_archive,
    ) -> None:
        self.client = client
        self.writer = writer
        self.loader = loader

    def get(self, href: str) -> bytes:
        """Return the canonical archive bytes of the chart at *href*."""
        ref = resolve_url(href)

        # first pull the chart into local storage
        logger.debug("Pulling %s", ref.full_name)
        try:
            self.client.pull_chart(ref)
        except Exception as e:
            raise PullFailedError.wrap(e) from e

        # once we know we have it, load it up
        logger.debug("Loading %s", ref.full_name)
        try:
            chart = self.client.load_chart(ref)
        except Exception as e:
            raise LoadFailedError.wrap(e) from e

        # lastly, write the tarred and gzipped chart to the output buffer
        buf = io.BytesIO()
        try:
            self.writer(chart, buf)
        except Exception as e:
            raise SerializeFailedError.wrap(e) from e

        return buf.getvalue()

    def get_with_details(self, url: str, version: str = "") -> ChartResponse:
        """Fetch a chart and derive its output filename.

        *version* is appended as the tag only when *url* has none.
        """
        tagged_url = reconcile_url(url, version)
        content = self.get(tagged_url)

        try:
            chart = self.loader(content)
            chart.metadata.validate()
        except Exception as e:
            raise LoadFailedError.wrap(e) from e

        filename = self.filename(tagged_url, chart.metadata.version)
        logger.info("Retrieved %s as %s (%d bytes)", tagged_url, filename, len(content))
        return ChartResponse(chart_content=content, filename=filename)

    def filename(self, url: str, version: str) -> str:
        name, _ = split_tag(final_segment(urlsplit(url).path))
        return f"{name}-{version}.tgz"


def resolve_url(href: str) -> Reference:
    """Resolve an ``oci://host/path[:tag]`` URL into a ``Reference``."""
    try:
        parts = urlsplit(href)
    except ValueError as e:
        raise InvalidReferenceError(f"invalid URL '{href}': {e}", cause=e) from e
    host = parts.netloc.rpartition("@")[2]
    return parse_reference(host + parts.path)


def reconcile_url(url: str, version: str = "") -> str:
    """Return *url* with a tag, adding *version* as the tag when it has none.

    Raises ``MissingVersionError`` when neither is present.
    """
    parts = urlsplit(url)
    path = parts.path.rstrip("/")
    segment = final_segment(path)
    if not segment:
        raise InvalidReferenceError(f"URL '{url}' has no repository path")

    _, tag = split_tag(segment)
    if tag is not None:
        if version and version != tag:
            logger.debug("URL tag '%s' takes precedence over version '%s'", tag, version)
        if path != parts.path:
            return urlunsplit(parts._replace(path=path))
        return url

    if not version:
        raise MissingVersionError("no version or tag provided")

    validate_tag(version, reference=url)
    if "?" in version or "#" in version:
        raise InvalidReferenceError(f"version '{version}' cannot be used as a URL tag")
    return urlunsplit(parts._replace(path=f"{path}:{version}"))


def new_registry_getter_provider(
    client: RegistryClient,
    writer: ArchiveWriter = write_archive,
    loader: ArchiveLoader = load_archive,
) -> Provider:
    """Build the provider that serves ``oci://`` URLs from *client*."""
    return Provider(
        schemes=(OCI_SCHEME,),
        new=lambda: RegistryGetter(client, writer=writer, loader=loader),
    )
