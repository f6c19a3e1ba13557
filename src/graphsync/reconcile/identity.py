"""Identifier normalisation and lookup indexes.

A falsy identifier is the convention for "never created remotely", so it
is normalised to ``None`` before any comparison.  ``None`` never joins: two
entities without an identifier are two independent entities, never the
same remote object.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any


def normalize_identifier(value: Any) -> Any:
    """Return *value*, or ``None`` when it is falsy.

    Plain truthiness decides, so an integer identifier ``0`` also counts as
    "no identifier".  Backends that hand out ``0`` as a real id must map it
    to a truthy value (e.g. ``str(id)``) in the identifier callable.
    """
    return value if value else None


def _is_hashable(value: Any) -> bool:
    # isinstance(x, Hashable) is not enough: a tuple of lists claims to be.
    try:
        hash(value)
    except TypeError:
        return False
    return True


class IdentifierIndex:
    """Maps identifiers to the entities carrying them.

    Hashable identifiers are looked up in a dict; unhashable ones (rare,
    e.g. list-valued composite keys) fall back to a linear equality scan.
    Entities without an identifier are never indexed.

    Parameters
    ----------
    entities:
        The collection to index.  Order is kept within each bucket.
    identifier:
        One-argument reader returning an entity's raw identifier.
    """

    __slots__ = ("_buckets", "_unhashable")

    def __init__(
        self,
        entities: Iterable[Any],
        identifier: Callable[[Any], Any],
    ) -> None:
        self._buckets: dict[Any, list[Any]] = {}
        self._unhashable: list[tuple[Any, Any]] = []
        for entity in entities:
            ident = normalize_identifier(identifier(entity))
            if ident is None:
                continue
            if _is_hashable(ident):
                self._buckets.setdefault(ident, []).append(entity)
            else:
                self._unhashable.append((ident, entity))

    def lookup(self, ident: Any) -> list[Any]:
        """Return every indexed entity whose identifier equals *ident*."""
        ident = normalize_identifier(ident)
        if ident is None:
            return []
        matches: list[Any] = []
        if _is_hashable(ident):
            matches.extend(self._buckets.get(ident, ()))
        matches.extend(entity for other, entity in self._unhashable if other == ident)
        return matches

    def __contains__(self, ident: Any) -> bool:
        return bool(self.lookup(ident))
