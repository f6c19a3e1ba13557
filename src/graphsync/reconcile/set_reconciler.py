"""Set reconciler: classify two entity collections into sync actions.

Given the local (desired) and remote (observed) versions of a collection,
e.g. the ad groups of one campaign::

    local  = [{"remote_id": 2, "status": "enabled"},
              {"remote_id": 4, "status": "paused"},
              {"remote_id": None, "status": "enabled"}]
    remote = [{"remote_id": 2, "status": "paused"},
              {"remote_id": 4, "status": "enabled"},
              {"remote_id": 9, "status": "enabled"}]

the reconciler answers: ``2`` must be enabled, ``4`` paused, ``9`` deleted
and the entity without an identifier created.

Identifiers are the only join key.  Statuses are compared lowercased; an
entity without a readable status never matches any status token.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from typing import Any, Optional, Union

from graphsync.access import make_accessor
from graphsync.config import GraphSyncConfig
from graphsync.models import ReconciliationPlan
from graphsync.observability import NoopMetricsHook, get_logger

from .identity import IdentifierIndex, normalize_identifier
from .status import canonical_status

log = get_logger("graphsync.reconcile", level=logging.WARNING)

Entities = Optional[Iterable[Any]]
IdentifierSpec = Union[str, Callable[[Any], Any], None]


class _Snapshot:
    """Identifiers, statuses and indexes of one call, read exactly once."""

    __slots__ = (
        "local", "local_ids", "local_index", "local_statuses",
        "remote", "remote_ids", "remote_index", "remote_statuses",
    )

    def __init__(
        self,
        local: Entities,
        remote: Entities,
        read_id: Callable[[Any], Any],
        status_field: str,
    ) -> None:
        self.local = list(local or ())
        self.remote = list(remote or ())
        self.local_ids = [normalize_identifier(read_id(e)) for e in self.local]
        self.remote_ids = [normalize_identifier(read_id(e)) for e in self.remote]
        self.local_statuses = [canonical_status(e, status_field) for e in self.local]
        self.remote_statuses = [canonical_status(e, status_field) for e in self.remote]
        # Ids are already read; index them through their position.
        self.local_index = IdentifierIndex(
            range(len(self.local)), self.local_ids.__getitem__
        )
        self.remote_index = IdentifierIndex(
            range(len(self.remote)), self.remote_ids.__getitem__
        )


class SetReconciler:
    """Classifies local and remote entities into reconciliation actions.

    Stateless: an instance only holds its configuration, so one reconciler
    can serve any number of calls and threads.  Every operation takes
    ``(local, remote, identifier=None)`` where *identifier* is a field name
    or a one-argument callable, defaulting to
    ``config.identifier_field``.

    Parameters
    ----------
    config:
        Status tokens, field names and metrics hook.  Defaults to
        :class:`GraphSyncConfig()`.
    """

    def __init__(self, config: GraphSyncConfig | None = None) -> None:
        self._config = config if config is not None else GraphSyncConfig()
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )

    # ── Public operations ───────────────────────────────────────────────

    def plan(
        self,
        local: Entities,
        remote: Entities,
        identifier: IdentifierSpec = None,
    ) -> ReconciliationPlan:
        """Run every classification once and return them together.

        Parameters
        ----------
        local:
            Desired-state entities.
        remote:
            Observed remote entities.
        identifier:
            Field name or callable reading the external identifier.

        Returns
        -------
        ReconciliationPlan
            One list per :class:`SyncAction`, in input order.
        """
        start = time.perf_counter()
        snap = self._snapshot(local, remote, identifier)
        to_delete = self._to_delete(snap)
        to_pause = self._pending_mutation(snap, self._config.paused_status)
        plan = ReconciliationPlan(
            to_create=self._to_create(snap),
            to_delete=to_delete,
            to_disable=list(to_delete),
            to_pause=to_pause,
            to_enable=self._pending_mutation(snap, self._config.enabled_status),
            remain_enabled=self._remain_enabled(snap, to_delete, to_pause),
            conflicting=self._conflicting(snap),
        )
        elapsed_ms = (time.perf_counter() - start) * 1000

        counts = plan.counts()
        for action, count in counts.items():
            if count:
                self._metrics.increment(
                    "graphsync.set_actions_total", count, tags={"action": action}
                )
        self._metrics.timing(
            "graphsync.reconcile_duration_ms", elapsed_ms, tags={"component": "set"}
        )
        log.debug(
            "set reconciliation planned",
            extra={"extra_fields": {
                "local": len(snap.local),
                "remote": len(snap.remote),
                **counts,
            }},
        )
        return plan

    def to_create(
        self,
        local: Entities,
        remote: Entities,
        identifier: IdentifierSpec = None,
    ) -> list[Any]:
        """Enabled local entities with no identifier or no remote counterpart."""
        return self._to_create(self._snapshot(local, remote, identifier))

    def to_delete(
        self,
        local: Entities,
        remote: Entities,
        identifier: IdentifierSpec = None,
    ) -> list[Any]:
        """Active remote entities whose identifier no local entity carries.

        Order follows *remote*.  Remote entities already ``deleted``,
        ``removed`` or ``disabled`` are left alone.
        """
        return self._to_delete(self._snapshot(local, remote, identifier))

    def to_disable(
        self,
        local: Entities,
        remote: Entities,
        identifier: IdentifierSpec = None,
    ) -> list[Any]:
        """Same entities as :meth:`to_delete`.

        Whether the entity is hard-deleted or soft-disabled is the caller's
        decision.
        """
        return self.to_delete(local, remote, identifier)

    def to_pause(
        self,
        local: Entities,
        remote: Entities,
        identifier: IdentifierSpec = None,
    ) -> list[Any]:
        """Paused local entities whose remote counterpart is not paused."""
        snap = self._snapshot(local, remote, identifier)
        return self._pending_mutation(snap, self._config.paused_status)

    def to_enable(
        self,
        local: Entities,
        remote: Entities,
        identifier: IdentifierSpec = None,
    ) -> list[Any]:
        """Enabled local entities whose remote counterpart is not enabled."""
        snap = self._snapshot(local, remote, identifier)
        return self._pending_mutation(snap, self._config.enabled_status)

    def remain_enabled(
        self,
        local: Entities,
        remote: Entities,
        identifier: IdentifierSpec = None,
    ) -> list[Any]:
        """Enabled local entities that are not being paused, deleted or disabled.

        They may need no call of their own, but their children still have
        to be reconciled, so callers walk into them.
        """
        snap = self._snapshot(local, remote, identifier)
        to_delete = self._to_delete(snap)
        to_pause = self._pending_mutation(snap, self._config.paused_status)
        return self._remain_enabled(snap, to_delete, to_pause)

    def conflicting(
        self,
        local: Entities,
        remote: Entities,
        identifier: IdentifierSpec = None,
    ) -> list[Any]:
        """Local entities with an identifier the remote side does not know."""
        return self._conflicting(self._snapshot(local, remote, identifier))

    # ── Classification ──────────────────────────────────────────────────

    def _snapshot(
        self,
        local: Entities,
        remote: Entities,
        identifier: IdentifierSpec,
    ) -> _Snapshot:
        read_id = make_accessor(
            identifier if identifier is not None else self._config.identifier_field
        )
        return _Snapshot(local, remote, read_id, self._config.status_field)

    def _to_create(self, snap: _Snapshot) -> list[Any]:
        enabled = self._config.enabled_status
        return [
            entity
            for entity, ident, status in zip(snap.local, snap.local_ids, snap.local_statuses)
            if status == enabled and (ident is None or ident not in snap.remote_index)
        ]

    def _to_delete(self, snap: _Snapshot) -> list[Any]:
        inactive = self._config.inactive_statuses
        return [
            entity
            for entity, ident, status in zip(snap.remote, snap.remote_ids, snap.remote_statuses)
            if status not in inactive and ident not in snap.local_index
        ]

    def _pending_mutation(self, snap: _Snapshot, target: str) -> list[Any]:
        result: list[Any] = []
        for entity, ident, status in zip(snap.local, snap.local_ids, snap.local_statuses):
            if ident is None or status != target:
                continue
            counterparts = snap.remote_index.lookup(ident)
            if any(snap.remote_statuses[pos] != target for pos in counterparts):
                result.append(entity)
        return result

    def _remain_enabled(
        self,
        snap: _Snapshot,
        to_delete: list[Any],
        to_pause: list[Any],
    ) -> list[Any]:
        # to_disable is to_delete, so excluding one excludes both.
        excluded = {id(entity) for entity in (*to_delete, *to_pause)}
        enabled = self._config.enabled_status
        return [
            entity
            for entity, status in zip(snap.local, snap.local_statuses)
            if status == enabled and id(entity) not in excluded
        ]

    def _conflicting(self, snap: _Snapshot) -> list[Any]:
        return [
            entity
            for entity, ident in zip(snap.local, snap.local_ids)
            if ident is not None and ident not in snap.remote_index
        ]

