"""Collaborator contracts consumed by the registry getter.

The getter never talks to a registry or touches an archive format itself;
it drives objects that satisfy these protocols.
"""

from __future__ import annotations

from typing import BinaryIO, Callable, Protocol, runtime_checkable

from chartget.chart.models import Chart
from chartget.registry.reference import Reference


@runtime_checkable
class RegistryClient(Protocol):
    """Pulls charts into local storage and loads them from it.

    Authentication, transport options and retries all belong to the client.
    """

    def pull_chart(self, reference: Reference) -> None:
        """Ensure the chart for *reference* is available locally."""
        ...

    def load_chart(self, reference: Reference) -> Chart:
        """Materialize a previously pulled chart."""
        ...


ArchiveWriter = Callable[[Chart, BinaryIO], None]
ArchiveLoader = Callable[[bytes], Chart]
