"""Status canonicalisation."""

from __future__ import annotations

from typing import Any

from graphsync.access import read_field


def canonical_status(entity: Any, status_field: str = "status") -> str | None:
    """Return the lowercased status of *entity*, or ``None``.

    Entities without a readable status, or whose status is not a string,
    are treated as status-absent: ``None`` never matches any token.
    """
    value = read_field(entity, status_field, None)
    if not isinstance(value, str):
        return None
    return value.lower()
