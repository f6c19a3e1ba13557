"""Tests for reconcile/vocabulary.py."""

from __future__ import annotations

import pytest

from graphsync.reconcile.vocabulary import StatusVocabulary


@pytest.fixture
def vocabulary() -> StatusVocabulary:
    return StatusVocabulary({
        "ACTIVE": "enabled",
        "PAUSED": "paused",
        "DELETED": "removed",
        "ARCHIVED": "removed",
    })


class TestTranslation:
    def test_local_name_case_insensitive(self, vocabulary):
        assert vocabulary.local_name("active") == "enabled"
        assert vocabulary.local_name("Active") == "enabled"

    def test_unknown_remote_token(self, vocabulary):
        assert vocabulary.local_name("IN_REVIEW") is None
        assert vocabulary.local_name(None) is None

    def test_remote_name_first_spelling_wins(self, vocabulary):
        assert vocabulary.remote_name("removed") == "deleted"
        assert vocabulary.remote_name("ENABLED") == "active"
        assert vocabulary.remote_name(3) is None

    def test_contains(self, vocabulary):
        assert "archived" in vocabulary
        assert "draft" not in vocabulary


class TestStatusPredicate:
    def test_equivalent_tokens_not_different(self, vocabulary):
        differs = vocabulary.status_predicate()
        assert differs("enabled", "ACTIVE") is False
        assert differs("Removed", "archived") is False

    def test_mismatched_tokens_different(self, vocabulary):
        differs = vocabulary.status_predicate()
        assert differs("enabled", "PAUSED") is True

    def test_unknown_tokens_different(self, vocabulary):
        differs = vocabulary.status_predicate()
        assert differs("enabled", "IN_REVIEW") is True
        assert differs(None, "ACTIVE") is True
