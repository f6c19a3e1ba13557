"""Attribute differ: compute the update payload for one matched pair.

Given a local entity (e.g. an ad group model), its remote counterpart (e.g.
an API response object) and a rule set, the differ answers "which fields
must be written, on which side, with which value?"::

    rules = [
        FieldRule("daily_budget", "budget_amount", Side.LOCAL),
        FieldRule("name", "name", Side.LOCAL),
        FieldRule("review_state", "review_status", Side.REMOTE),
    ]
    differ = AttributeDiffer()
    differ.to_update_on_remote(ad_group, remote_ad_group, rules)
    # {"budget_amount": 50, "id": "remote-123"}

For every rule whose values differ, the non-canonical side receives the
canonical side's value under its own field name.  Attaching the target's
``id`` is a separate step applied to non-empty results only.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Any

from graphsync.access import MISSING, has_field, read_field
from graphsync.config import GraphSyncConfig
from graphsync.errors import (
    GraphSyncConfigurationError,
    GraphSyncInvalidCanonicalSideError,
    GraphSyncInvalidRuleError,
    GraphSyncUnreadableFieldError,
)
from graphsync.models import (
    EntityUpdates,
    FieldRule,
    PredicateRule,
    ReconciliationRule,
    Side,
)
from graphsync.observability import NoopMetricsHook, get_logger

log = get_logger("graphsync.reconcile", level=logging.WARNING)


def _canonical_side(rule: ReconciliationRule) -> Side:
    value = rule.canonical_side
    if isinstance(value, Side):
        return value
    if isinstance(value, str) and value in (Side.LOCAL.value, Side.REMOTE.value):
        return Side(value)
    raise GraphSyncInvalidCanonicalSideError(
        message=f"canonical_side must be 'local' or 'remote', got {value!r}",
        context={"rule": repr(rule), "value": value},
    )


def _coerce_side(side: Side | str) -> Side:
    try:
        return Side(side)
    except ValueError as exc:
        raise GraphSyncConfigurationError(
            message=f"side must be 'local' or 'remote', got {side!r}",
            context={"value": side},
            cause=exc,
        ) from exc


class AttributeDiffer:
    """Computes field updates between a local and a remote entity.

    Stateless: the entities and rules are passed to every call.

    Parameters
    ----------
    config:
        Supplies ``id_field`` and the metrics hook.  Defaults to
        :class:`GraphSyncConfig()`.
    """

    def __init__(self, config: GraphSyncConfig | None = None) -> None:
        self._config = config if config is not None else GraphSyncConfig()
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )

    # ── Public operations ───────────────────────────────────────────────

    def compute_updates_for(
        self,
        local_entity: Any,
        remote_entity: Any,
        rules: Iterable[ReconciliationRule],
        side: Side | str,
    ) -> dict[str, Any]:
        """Return the fields to write on *side* so it matches the canonical values.

        Parameters
        ----------
        local_entity:
            The local (desired-state) entity.
        remote_entity:
            The matched remote entity.
        rules:
            :class:`FieldRule` / :class:`PredicateRule` instances.  Later
            rules overwrite earlier ones when they target the same field.
        side:
            Which side's update map to compute.

        Returns
        -------
        dict[str, Any]
            ``{field: new_value}`` plus the target's ``id`` when any field
            changed.  Empty when nothing needs to change on *side*.

        Raises
        ------
        GraphSyncConfigurationError
            A rule is malformed.  Raised as soon as the rule is reached.
        """
        start = time.perf_counter()
        side = _coerce_side(side)
        entities = {Side.LOCAL: local_entity, Side.REMOTE: remote_entity}

        changes: dict[str, Any] = {}
        for rule in rules:
            changes.update(self._update_for_rule(rule, entities, side))

        self._attach_identity(changes, entities[side])

        if changes:
            self._metrics.increment(
                "graphsync.attribute_updates_total", tags={"side": side.value}
            )
        self._metrics.timing(
            "graphsync.reconcile_duration_ms",
            (time.perf_counter() - start) * 1000,
            tags={"component": "attribute"},
        )
        log.debug(
            "attribute diff computed",
            extra={"extra_fields": {"side": side.value, "fields": sorted(changes)}},
        )
        return changes

    def to_update_on_local(
        self,
        local_entity: Any,
        remote_entity: Any,
        rules: Iterable[ReconciliationRule],
    ) -> dict[str, Any]:
        """Fields to write on the local entity (rules where remote is canonical)."""
        return self.compute_updates_for(local_entity, remote_entity, rules, Side.LOCAL)

    def to_update_on_remote(
        self,
        local_entity: Any,
        remote_entity: Any,
        rules: Iterable[ReconciliationRule],
    ) -> dict[str, Any]:
        """Fields to write on the remote entity (rules where local is canonical)."""
        return self.compute_updates_for(local_entity, remote_entity, rules, Side.REMOTE)

    def diff(
        self,
        local_entity: Any,
        remote_entity: Any,
        rules: Iterable[ReconciliationRule],
    ) -> EntityUpdates:
        """Compute both update views in one call."""
        rules = list(rules)
        return EntityUpdates(
            on_local=self.to_update_on_local(local_entity, remote_entity, rules),
            on_remote=self.to_update_on_remote(local_entity, remote_entity, rules),
        )

    # ── Per-rule logic ──────────────────────────────────────────────────

    def _update_for_rule(
        self,
        rule: ReconciliationRule,
        entities: dict[Side, Any],
        side: Side,
    ) -> dict[str, Any]:
        canonical = self._validate(rule, entities)
        if side is canonical:
            # The canonical side never takes values from the other one;
            # validation above still applies.
            return {}

        local_value = read_field(entities[Side.LOCAL], rule.local_field)
        remote_value = read_field(entities[Side.REMOTE], rule.remote_field)
        if not self._differs(rule, local_value, remote_value):
            return {}

        target_field = rule.local_field if side is Side.LOCAL else rule.remote_field
        canonical_value = local_value if canonical is Side.LOCAL else remote_value
        return {target_field: canonical_value}

    @staticmethod
    def _differs(rule: ReconciliationRule, local_value: Any, remote_value: Any) -> bool:
        if isinstance(rule, PredicateRule):
            return bool(rule.difference_predicate(local_value, remote_value))
        return local_value != remote_value

    def _validate(self, rule: ReconciliationRule, entities: dict[Side, Any]) -> Side:
        """Check *rule* against both entities and return its canonical side."""
        try:
            if not isinstance(rule, (FieldRule, PredicateRule)):
                raise GraphSyncInvalidRuleError(
                    message=(
                        f"Expected FieldRule or PredicateRule, got {type(rule).__name__}; "
                        "use rule_from_mapping() for plain mappings"
                    ),
                    context={"rule": repr(rule)},
                )

            canonical = _canonical_side(rule)

            fields = {Side.LOCAL: rule.local_field, Side.REMOTE: rule.remote_field}
            for rule_side, field_name in fields.items():
                if not isinstance(field_name, str) or not field_name:
                    raise GraphSyncInvalidRuleError(
                        message=f"Rule has no {rule_side.value} field name",
                        context={"rule": repr(rule), "field": f"{rule_side.value}_field"},
                    )
                entity = entities[rule_side]
                if not has_field(entity, field_name):
                    raise GraphSyncUnreadableFieldError(
                        message=(
                            f"{rule_side.value.capitalize()} entity "
                            f"({type(entity).__name__}) does not expose {field_name!r}"
                        ),
                        context={
                            "side": rule_side.value,
                            "field": field_name,
                            "entity_type": type(entity).__name__,
                        },
                    )

            if isinstance(rule, PredicateRule) and not callable(rule.difference_predicate):
                raise GraphSyncInvalidRuleError(
                    message="difference_predicate must be callable",
                    context={"rule": repr(rule), "field": "difference_predicate"},
                )
        except GraphSyncConfigurationError as exc:
            code = getattr(exc.code, "value", exc.code)
            self._metrics.increment("graphsync.rule_errors_total", tags={"code": code})
            log.warning(
                "reconciliation rule rejected",
                extra={"extra_fields": {**exc.context, "code": code}},
            )
            raise
        return canonical

    # ── Identity ────────────────────────────────────────────────────────

    def _attach_identity(self, changes: dict[str, Any], target: Any) -> None:
        """Stamp the target's own id onto a non-empty update map."""
        if not changes:
            return
        ident = read_field(target, self._config.id_field)
        if ident is not MISSING:
            changes[self._config.id_field] = ident
