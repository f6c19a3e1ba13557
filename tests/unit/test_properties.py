"""Property-based tests for graphsync using Hypothesis.

These tests verify the invariants of both reconcilers over randomly
generated collections: disjointness of actions, exact identifier matching,
case-insensitive statuses, idempotence, and the difference rules of the
attribute differ.
"""

from __future__ import annotations

import copy

from hypothesis import given, settings
from hypothesis import strategies as st

from graphsync.models import FieldRule, PredicateRule, Side
from graphsync.reconcile import AttributeDiffer, SetReconciler

# ---------------------------------------------------------------------------
# Reusable strategies
# ---------------------------------------------------------------------------

_status_st = st.sampled_from(
    ["enabled", "paused", "deleted", "removed", "disabled", "created", "ENABLED", "Paused"]
)

_identifier_st = st.one_of(st.none(), st.just(""), st.integers(min_value=1, max_value=12))

_entity_st = st.fixed_dictionaries({
    "remote_id": _identifier_st,
    "status": _status_st,
})

_collection_st = st.lists(_entity_st, max_size=25)

_value_st = st.one_of(st.none(), st.integers(), st.text(max_size=5), st.booleans())


def _recase(status: str, mode: int) -> str:
    return (status.upper(), status.lower(), status.title())[mode]


# ---------------------------------------------------------------------------
# 1. Set reconciler
# ---------------------------------------------------------------------------


class TestSetReconcilerProperties:
    """Property-based tests for :class:`SetReconciler`."""

    @given(local=_collection_st, remote=_collection_st)
    def test_local_actions_are_disjoint(self, local, remote):
        """No local entity both needs creation and a status mutation."""
        plan = SetReconciler().plan(local, remote)
        create = {id(e) for e in plan.to_create}
        pause = {id(e) for e in plan.to_pause}
        enable = {id(e) for e in plan.to_enable}
        assert not create & pause
        assert not create & enable
        assert not pause & enable

    @given(local=_collection_st, remote=_collection_st)
    def test_delete_never_touches_local_entities(self, local, remote):
        plan = SetReconciler().plan(local, remote)
        local_ids = {id(e) for e in local}
        assert all(id(e) not in local_ids for e in plan.to_delete)

    @given(local=_collection_st, remote=_collection_st)
    def test_outputs_are_ordered_subsequences(self, local, remote):
        plan = SetReconciler().plan(local, remote)
        for subset, source in (
            (plan.to_create, local),
            (plan.to_pause, local),
            (plan.to_enable, local),
            (plan.remain_enabled, local),
            (plan.conflicting, local),
            (plan.to_delete, remote),
        ):
            positions = [next(i for i, e in enumerate(source) if e is s) for s in subset]
            assert positions == sorted(positions)

    @given(local=_collection_st, remote=_collection_st)
    def test_idempotent(self, local, remote):
        reconciler = SetReconciler()
        first = reconciler.plan(local, remote)
        second = reconciler.plan(local, remote)
        assert first == second

    @given(local=_collection_st, remote=_collection_st)
    def test_inputs_untouched(self, local, remote):
        before = copy.deepcopy((local, remote))
        SetReconciler().plan(local, remote)
        assert (local, remote) == before

    @given(
        local=_collection_st,
        remote=_collection_st,
        modes=st.lists(st.integers(min_value=0, max_value=2), min_size=50, max_size=50),
    )
    def test_status_case_is_irrelevant(self, local, remote, modes):
        recased_local = [
            {**e, "status": _recase(e["status"], modes[i % 50])} for i, e in enumerate(local)
        ]
        recased_remote = [
            {**e, "status": _recase(e["status"], modes[(i + 25) % 50])}
            for i, e in enumerate(remote)
        ]
        reconciler = SetReconciler()
        original = reconciler.plan(local, remote).counts()
        recased = reconciler.plan(recased_local, recased_remote).counts()
        assert original == recased

    @given(local=_collection_st, remote=_collection_st)
    def test_unidentified_entities_never_match(self, local, remote):
        plan = SetReconciler().plan(local, remote)
        for entity in local:
            if not entity["remote_id"]:
                assert not any(e is entity for e in plan.conflicting)
                if entity["status"].lower() == "enabled":
                    assert any(e is entity for e in plan.to_create)
                assert not any(e is entity for e in plan.to_pause)
                assert not any(e is entity for e in plan.to_enable)

    @given(local=_collection_st, remote=_collection_st)
    def test_conflicting_identifiers_absent_remotely(self, local, remote):
        remote_ids = {e["remote_id"] for e in remote if e["remote_id"]}
        plan = SetReconciler().plan(local, remote)
        expected = [e for e in local if e["remote_id"] and e["remote_id"] not in remote_ids]
        assert [id(e) for e in plan.conflicting] == [id(e) for e in expected]


# ---------------------------------------------------------------------------
# 2. Attribute differ
# ---------------------------------------------------------------------------


class TestAttributeDifferProperties:
    """Property-based tests for :class:`AttributeDiffer`."""

    @given(x=_value_st, y=_value_st, remote_id=st.integers())
    @settings(max_examples=200)
    def test_default_equality(self, x, y, remote_id):
        rule = FieldRule("x", "y", Side.LOCAL)
        result = AttributeDiffer().to_update_on_remote(
            {"x": x}, {"y": y, "id": remote_id}, [rule]
        )
        if x == y:
            assert result == {}
        else:
            assert result == {"y": x, "id": remote_id}

    @given(x=_value_st, y=_value_st)
    def test_canonical_side_never_updated(self, x, y):
        rule = FieldRule("x", "y", Side.LOCAL)
        assert AttributeDiffer().to_update_on_local({"x": x, "id": 1}, {"y": y}, [rule]) == {}

    @given(x=_value_st, y=_value_st)
    def test_always_different_predicate(self, x, y):
        rule = PredicateRule("x", "y", Side.REMOTE, lambda _a, _b: True)
        assert AttributeDiffer().to_update_on_local({"x": x}, {"y": y}, [rule]) == {"x": y}

    @given(x=_value_st, y=_value_st)
    def test_never_different_predicate(self, x, y):
        rule = PredicateRule("x", "y", Side.REMOTE, lambda _a, _b: False)
        differ = AttributeDiffer()
        assert differ.diff({"x": x, "id": 1}, {"y": y, "id": 2}, [rule]).is_empty
