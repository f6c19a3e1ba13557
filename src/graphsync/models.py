"""Public data models for graphsync.

Enums, the two rule variants consumed by
:class:`~graphsync.reconcile.AttributeDiffer`, and the result dataclasses
returned by both reconcilers.  Rules are frozen so a rule set can be built
once at import time and shared between threads.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from graphsync.errors import GraphSyncInvalidRuleError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Side(str, Enum):
    """One side of a reconciled pair."""

    LOCAL = "local"
    """The desired-state graph, usually authored by a user."""

    REMOTE = "remote"
    """The actual-state graph as last observed from the external system."""


class SyncAction(str, Enum):
    """Reconciliation actions assigned by the set reconciler."""

    CREATE = "create"
    """Enabled locally, unknown remotely -- create it."""

    DELETE = "delete"
    """Live remotely, absent locally -- tear it down."""

    DISABLE = "disable"
    """Same entities as ``DELETE``; the caller soft-disables instead."""

    PAUSE = "pause"
    """Paused locally, not paused remotely."""

    ENABLE = "enable"
    """Enabled locally, not enabled remotely."""

    REMAIN_ENABLED = "remain_enabled"
    """Enabled locally and needing no call of its own; walk its children."""

    CONFLICTING = "conflicting"
    """Carries an identifier the remote side no longer knows about."""


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

DifferencePredicate = Callable[[Any, Any], bool]
"""``(local_value, remote_value) -> True`` when the values differ."""


@dataclass(frozen=True)
class FieldRule:
    """Compare two fields with ``!=``.

    Attributes
    ----------
    local_field:
        Field name read from the local entity.
    remote_field:
        Field name read from the remote entity.
    canonical_side:
        The side whose value wins when the fields differ.
    """

    local_field: str
    remote_field: str
    canonical_side: Side | str


@dataclass(frozen=True)
class PredicateRule:
    """Compare two fields with a caller-supplied predicate.

    The predicate fully owns the difference decision; ``!=`` is never
    consulted.  Useful to bridge vocabularies, e.g. local ``enabled``
    against remote ``ACTIVE`` (see
    :class:`~graphsync.reconcile.vocabulary.StatusVocabulary`).
    """

    local_field: str
    remote_field: str
    canonical_side: Side | str
    difference_predicate: DifferencePredicate


ReconciliationRule = Union[FieldRule, PredicateRule]


def rule_from_mapping(data: Mapping[str, Any]) -> ReconciliationRule:
    """Build the matching rule variant from a plain mapping.

    Expected keys: ``local_field``, ``remote_field``, ``canonical_side`` and
    optionally ``difference_predicate``.  A present predicate selects
    :class:`PredicateRule`; it must be callable.

    Raises
    ------
    GraphSyncInvalidRuleError
        A required key is missing or the predicate is not callable.
    """
    missing = [
        key for key in ("local_field", "remote_field", "canonical_side")
        if key not in data
    ]
    if missing:
        raise GraphSyncInvalidRuleError(
            message=f"Rule mapping is missing {', '.join(missing)}",
            context={"rule": dict(data), "field": missing[0]},
        )

    predicate = data.get("difference_predicate")
    if predicate is None:
        return FieldRule(
            local_field=data["local_field"],
            remote_field=data["remote_field"],
            canonical_side=data["canonical_side"],
        )
    if not callable(predicate):
        raise GraphSyncInvalidRuleError(
            message="difference_predicate must be callable",
            context={"rule": dict(data), "field": "difference_predicate"},
        )
    return PredicateRule(
        local_field=data["local_field"],
        remote_field=data["remote_field"],
        canonical_side=data["canonical_side"],
        difference_predicate=predicate,
    )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class ReconciliationPlan:
    """Every classification of one set reconciliation call.

    Each list keeps the order of the collection it was drawn from:
    ``to_delete`` / ``to_disable`` follow ``remote``, everything else
    follows ``local``.
    """

    to_create: list[Any] = field(default_factory=list)
    to_delete: list[Any] = field(default_factory=list)
    to_disable: list[Any] = field(default_factory=list)
    to_pause: list[Any] = field(default_factory=list)
    to_enable: list[Any] = field(default_factory=list)
    remain_enabled: list[Any] = field(default_factory=list)
    conflicting: list[Any] = field(default_factory=list)

    def for_action(self, action: SyncAction | str) -> list[Any]:
        """Return the entities classified under *action*."""
        action = SyncAction(action)
        if action in (SyncAction.REMAIN_ENABLED, SyncAction.CONFLICTING):
            return getattr(self, action.value)
        return getattr(self, f"to_{action.value}")

    def counts(self) -> dict[str, int]:
        """Number of entities per action, keyed by action value."""
        return {action.value: len(self.for_action(action)) for action in SyncAction}

    @property
    def is_noop(self) -> bool:
        """``True`` when no remote call is needed."""
        return not (
            self.to_create or self.to_delete or self.to_pause or self.to_enable
        )


@dataclass
class EntityUpdates:
    """Both update views of one matched local/remote pair.

    Attributes
    ----------
    on_local:
        Fields to write on the local entity (rules where remote is canonical).
    on_remote:
        Fields to write on the remote entity (rules where local is canonical).
    """

    on_local: dict[str, Any] = field(default_factory=dict)
    on_remote: dict[str, Any] = field(default_factory=dict)

    def for_side(self, side: Side | str) -> dict[str, Any]:
        return self.on_local if Side(side) is Side.LOCAL else self.on_remote

    @property
    def is_empty(self) -> bool:
        return not self.on_local and not self.on_remote
