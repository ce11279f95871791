"""Shared test fixtures."""

from __future__ import annotations

import pytest

from chartget.chart.models import Chart, ChartMetadata


class FakeRegistryClient:
    """Registry client that serves one chart and records every call."""

    def __init__(self, chart: Chart | None = None, pull_error=None, load_error=None):
        self.chart = chart
        self.pull_error = pull_error
        self.load_error = load_error
        self.calls: list[tuple[str, object]] = []

    def pull_chart(self, reference):
        self.calls.append(("pull", reference))
        if self.pull_error is not None:
            raise self.pull_error

    def load_chart(self, reference):
        self.calls.append(("load", reference))
        if self.load_error is not None:
            raise self.load_error
        return self.chart


def make_chart(name: str = "mychart", version: str = "2.0.0", **files: bytes) -> Chart:
    return Chart(
        metadata=ChartMetadata(name=name, version=version, description=f"The {name} chart"),
        files=files or {"values.yaml": b"replicaCount: 1\n"},
    )


@pytest.fixture
def chart() -> Chart:
    return make_chart()


@pytest.fixture
def fake_client(chart) -> FakeRegistryClient:
    return FakeRegistryClient(chart)
