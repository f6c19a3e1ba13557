"""Status vocabularies for bridging local and remote status tokens.

Remote services rarely speak the local vocabulary: a local ``enabled`` may
be ``ACTIVE`` on one service and ``ENABLED`` on another.  A
:class:`StatusVocabulary` holds the translation table and produces a
difference predicate for :class:`~graphsync.models.PredicateRule`::

    vocabulary = StatusVocabulary({"active": "enabled", "paused": "paused"})
    rule = PredicateRule(
        local_field="state",
        remote_field="status",
        canonical_side=Side.LOCAL,
        difference_predicate=vocabulary.status_predicate(),
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from graphsync.models import DifferencePredicate


class StatusVocabulary:
    """Case-insensitive mapping from remote status tokens to local ones.

    Parameters
    ----------
    remote_to_local:
        ``{remote_token: local_token}``.  Several remote tokens may map to
        the same local token (e.g. ``deleted`` and ``archived`` both to
        ``removed``).
    """

    __slots__ = ("_remote_to_local", "_local_to_remote")

    def __init__(self, remote_to_local: Mapping[str, str]) -> None:
        self._remote_to_local: dict[str, str] = {
            remote.lower(): local.lower() for remote, local in remote_to_local.items()
        }
        self._local_to_remote: dict[str, str] = {}
        for remote, local in self._remote_to_local.items():
            # First remote spelling wins when several map to one local token.
            self._local_to_remote.setdefault(local, remote)

    def local_name(self, remote_token: Any) -> str | None:
        """Translate a remote token, or ``None`` when it is unknown."""
        if not isinstance(remote_token, str):
            return None
        return self._remote_to_local.get(remote_token.lower())

    def remote_name(self, local_token: Any) -> str | None:
        """Translate a local token, or ``None`` when it is unknown."""
        if not isinstance(local_token, str):
            return None
        return self._local_to_remote.get(local_token.lower())

    def status_predicate(self) -> DifferencePredicate:
        """Return ``(local_value, remote_value) -> bool`` reporting a difference.

        The values differ when the translated remote token is unknown or is
        not the local token (compared case-insensitively).
        """

        def differs(local_value: Any, remote_value: Any) -> bool:
            translated = self.local_name(remote_value)
            if translated is None or not isinstance(local_value, str):
                return True
            return translated != local_value.lower()

        return differs

    def __contains__(self, remote_token: object) -> bool:
        return self.local_name(remote_token) is not None

    def __repr__(self) -> str:
        return f"StatusVocabulary({self._remote_to_local!r})"
