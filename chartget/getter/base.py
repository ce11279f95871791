"""Getter contracts and scheme-based provider lookup.

A download layer holds a ``Providers`` list and asks it for the getter that
handles a URL's scheme, so registry-backed charts and any other source share
one "fetch by URL" interface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from chartget.errors import SchemeNotSupportedError


@dataclass(frozen=True)
class ChartResponse:
    """A retrieved chart archive and the filename it should be saved as."""

    chart_content: bytes
    filename: str


class Getter(Protocol):
    def get(self, href: str) -> bytes:
        ...

    def get_with_details(self, url: str, version: str = "") -> ChartResponse:
        ...


@dataclass(frozen=True)
class Provider:
    """Binds one or more URL schemes to a getter factory."""

    schemes: tuple[str, ...]
    new: Callable[[], Getter]

    def provides(self, scheme: str) -> bool:
        return scheme.lower() in self.schemes


class Providers(list):
    """Ordered collection of providers; the first match for a scheme wins."""

    def by_scheme(self, scheme: str) -> Getter:
        for provider in self:
            if provider.provides(scheme):
                return provider.new()
        raise SchemeNotSupportedError(f"scheme '{scheme}' not supported")

    def schemes(self) -> list[str]:
        return sorted({s for p in self for s in p.schemes})
