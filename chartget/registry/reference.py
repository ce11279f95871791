"""Registry references — parsing ``host/path[:tag]`` strings.

The tag is looked for only in the final path segment, and that segment is
split on its *last* colon. A port in the registry host
(``localhost:5000/charts/app:1.0``) therefore never reads as a tag.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chartget.errors import InvalidReferenceError

# Any non-empty text free of path separators, whitespace and colons.
# Helm-style versions such as 1.0.0+build.5 are kept as given.
TAG_RE = re.compile(r"^[^/\\\s:]+$")

# Repository path components after the host: lower-case alphanumerics
# joined by single separators.
PATH_COMPONENT_RE = re.compile(r"^[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*$")

# Registry host, optionally with a port.
HOST_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9.-]*[A-Za-z0-9])?(?::[0-9]+)?$")


@dataclass(frozen=True)
class Reference:
    """A resolved artifact reference: repository plus optional tag."""

    repository: str
    tag: str | None = None

    @property
    def full_name(self) -> str:
        if self.tag is None:
            return self.repository
        return f"{self.repository}:{self.tag}"

    @property
    def name(self) -> str:
        """Base name of the repository (its final path segment)."""
        return self.repository.rsplit("/", 1)[-1]

    def with_tag(self, tag: str) -> Reference:
        return Reference(repository=self.repository, tag=tag)

    def __str__(self) -> str:
        return self.full_name


def split_tag(segment: str) -> tuple[str, str | None]:
    """Split a final path segment into ``(name, tag)`` on its last colon.

    ``tag`` is ``None`` when the segment has no colon, and ``""`` when the
    segment ends in a bare colon.
    """
    name, sep, tag = segment.rpartition(":")
    if not sep:
        return segment, None
    return name, tag


def final_segment(path: str) -> str:
    return path.rstrip("/").rsplit("/", 1)[-1]


def parse_reference(host_and_path: str) -> Reference:
    """Parse ``host/path[:tag]`` into a validated ``Reference``."""
    if not host_and_path:
        raise InvalidReferenceError("reference is empty")
    if any(c.isspace() for c in host_and_path):
        raise InvalidReferenceError(f"reference '{host_and_path}' contains whitespace")

    prefix, slash, segment = host_and_path.rpartition("/")
    name, tag = split_tag(segment)
    repository = f"{prefix}{slash}{name}"

    validate_repository(repository)
    if tag is not None:
        validate_tag(tag, reference=host_and_path)

    return Reference(repository=repository, tag=tag)


def validate_repository(repository: str) -> None:
    if not repository:
        raise InvalidReferenceError("repository is empty")

    host, *path = repository.split("/")
    if not HOST_RE.match(host):
        raise InvalidReferenceError(f"invalid registry host '{host}' in '{repository}'")
    if not path:
        raise InvalidReferenceError(f"repository '{repository}' has no path below the registry host")

    for component in path:
        if not component:
            raise InvalidReferenceError(f"repository '{repository}' has an empty path component")
        if not PATH_COMPONENT_RE.match(component):
            raise InvalidReferenceError(
                f"invalid path component '{component}' in repository '{repository}'"
            )


def validate_tag(tag: str, reference: str = "") -> None:
    where = f" in '{reference}'" if reference else ""
    if not tag:
        raise InvalidReferenceError(f"empty tag{where}")
    if not TAG_RE.match(tag):
        raise InvalidReferenceError(f"invalid tag '{tag}'{where}")
