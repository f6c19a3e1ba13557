"""Shared test fixtures for the graphsync test suite."""

from __future__ import annotations

from typing import Any

import pytest

from graphsync.config import GraphSyncConfig
from graphsync.reconcile import AttributeDiffer, SetReconciler


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self) -> None:
        self.increments: list[dict[str, Any]] = []
        self.timings: list[dict[str, Any]] = []
        self.gauges: list[dict[str, Any]] = []

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.timings.append({"name": name, "ms": ms, "tags": tags})

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.gauges.append({"name": name, "value": value, "tags": tags})


@pytest.fixture
def config() -> GraphSyncConfig:
    """Default configuration."""
    return GraphSyncConfig()


@pytest.fixture
def reconciler(config: GraphSyncConfig) -> SetReconciler:
    """Set reconciler using the default config."""
    return SetReconciler(config)


@pytest.fixture
def differ(config: GraphSyncConfig) -> AttributeDiffer:
    """Attribute differ using the default config."""
    return AttributeDiffer(config)


@pytest.fixture
def recording_metrics() -> RecordingMetricsHook:
    return RecordingMetricsHook()
