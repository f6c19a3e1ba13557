"""Tests for the MetricsHook protocol and its wiring through GraphSyncConfig.

Covers:
  - Protocol conformance (isinstance, structural subtyping)
  - NoopMetricsHook behaviour
  - Every documented metric name is emitted by the reconcilers
"""
from __future__ import annotations

import pytest

from graphsync.config import GraphSyncConfig
from graphsync.errors import GraphSyncUnreadableFieldError
from graphsync.models import FieldRule, Side
from graphsync.observability.metrics import MetricsHook, NoopMetricsHook
from graphsync.reconcile import AttributeDiffer, SetReconciler


class TestProtocol:
    def test_noop_satisfies_protocol(self):
        assert isinstance(NoopMetricsHook(), MetricsHook)

    def test_recording_hook_satisfies_protocol(self, recording_metrics):
        assert isinstance(recording_metrics, MetricsHook)

    def test_incomplete_object_rejected(self):
        class OnlyIncrement:
            def increment(self, name, value=1, tags=None):
                pass

        assert not isinstance(OnlyIncrement(), MetricsHook)


class TestNoopMetricsHook:
    def test_all_methods_return_none(self):
        hook = NoopMetricsHook()
        assert hook.increment("x") is None
        assert hook.increment("x", 5, tags={"a": "b"}) is None
        assert hook.timing("x", 1.5) is None
        assert hook.gauge("x", 3.0, tags={}) is None

    def test_no_instance_dict(self):
        with pytest.raises(AttributeError):
            NoopMetricsHook().extra = 1  # type: ignore[attr-defined]


class TestEmittedNames:
    def test_documented_metric_names(self, recording_metrics):
        config = GraphSyncConfig(metrics=recording_metrics)
        SetReconciler(config).plan(
            [{"remote_id": None, "status": "enabled"}],
            [{"remote_id": 3, "status": "enabled"}],
        )
        differ = AttributeDiffer(config)
        differ.to_update_on_remote({"a": 1}, {"b": 2}, [FieldRule("a", "b", Side.LOCAL)])
        with pytest.raises(GraphSyncUnreadableFieldError):
            differ.to_update_on_remote({}, {}, [FieldRule("a", "b", Side.LOCAL)])

        names = {m["name"] for m in recording_metrics.increments}
        names |= {m["name"] for m in recording_metrics.timings}
        assert names == {
            "graphsync.set_actions_total",
            "graphsync.reconcile_duration_ms",
            "graphsync.attribute_updates_total",
            "graphsync.rule_errors_total",
        }

    def test_default_config_uses_noop(self):
        # No hook configured: reconcilers must still run.
        plan = SetReconciler(GraphSyncConfig()).plan([], [])
        assert plan.is_noop
