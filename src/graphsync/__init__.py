"""graphsync -- reconcile a local desired-state graph with a remote one.

Public re-exports
-----------------

* **Engines:** :class:`SetReconciler`, :class:`AttributeDiffer`
* **Rules:** :class:`FieldRule`, :class:`PredicateRule`,
  :func:`rule_from_mapping`, :class:`StatusVocabulary`
* **Configuration:** :class:`GraphSyncConfig`
* **Errors:** Every :class:`GraphSyncError` subclass and :class:`ErrorCode`
* **Models:** :class:`Side`, :class:`SyncAction`, result dataclasses
* **Field access:** :data:`MISSING`, :class:`SupportsFieldLookup`

Usage::

    from graphsync import AttributeDiffer, FieldRule, SetReconciler, Side

    plan = SetReconciler().plan(local_ad_groups, remote_ad_groups)
    for ad_group in plan.to_create:
        ...

    rules = [FieldRule("daily_budget", "budget_amount", Side.LOCAL)]
    payload = AttributeDiffer().to_update_on_remote(ad_group, remote, rules)
"""

from __future__ import annotations

# ── Field access ───────────────────────────────────────────────────────
from graphsync.access import MISSING, SupportsFieldLookup

# ── Configuration ───────────────────────────────────────────────────────
from graphsync.config import DEFAULT_INACTIVE_STATUSES, GraphSyncConfig

# ── Errors ──────────────────────────────────────────────────────────────
from graphsync.errors import (
    ConfigurationError,
    ErrorCode,
    GraphSyncConfigurationError,
    GraphSyncError,
    GraphSyncInvalidCanonicalSideError,
    GraphSyncInvalidRuleError,
    GraphSyncUnreadableFieldError,
)

# ── Models ──────────────────────────────────────────────────────────────
from graphsync.models import (
    EntityUpdates,
    FieldRule,
    PredicateRule,
    ReconciliationPlan,
    Side,
    SyncAction,
    rule_from_mapping,
)

# ── Engines ─────────────────────────────────────────────────────────────
from graphsync.reconcile import AttributeDiffer, SetReconciler, StatusVocabulary

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Engines
    "SetReconciler",
    "AttributeDiffer",
    "StatusVocabulary",
    # Configuration
    "GraphSyncConfig",
    "DEFAULT_INACTIVE_STATUSES",
    # Errors
    "GraphSyncError",
    "ErrorCode",
    "GraphSyncConfigurationError",
    "ConfigurationError",
    "GraphSyncInvalidRuleError",
    "GraphSyncUnreadableFieldError",
    "GraphSyncInvalidCanonicalSideError",
    # Models -- rules
    "FieldRule",
    "PredicateRule",
    "rule_from_mapping",
    # Models -- enums and results
    "Side",
    "SyncAction",
    "ReconciliationPlan",
    "EntityUpdates",
    # Field access
    "MISSING",
    "SupportsFieldLookup",
]
