"""Metrics hook protocol and no-op default implementation.

graphsync emits counters and timings from both reconcilers.  By default a
:class:`NoopMetricsHook` is used.  Supply any object satisfying
:class:`MetricsHook` through ``GraphSyncConfig(metrics=...)`` to route them
to StatsD, Prometheus, Datadog or anything else.

Emitted metric names:

* ``graphsync.set_actions_total``        -- counter, tag ``action``
* ``graphsync.reconcile_duration_ms``    -- timing, tag ``component``
* ``graphsync.attribute_updates_total``  -- counter, tag ``side``
* ``graphsync.rule_errors_total``        -- counter, tag ``code``
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict of string keys and values,
    translated by the implementation into its own tagging mechanism.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Metrics implementation that silently discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
