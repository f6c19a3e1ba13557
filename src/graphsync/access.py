"""Capability-based field access for heterogeneous entities.

The reconcilers never know the concrete type of the entities they compare:
local entities are usually domain models, remote ones API response objects
or plain dicts.  Every read goes through :func:`read_field`, which resolves
a field name in this order:

1. Objects implementing :class:`SupportsFieldLookup` answer for themselves.
   Returning :data:`MISSING` means "I do not expose this field".
2. :class:`~collections.abc.Mapping` instances expose their keys.
3. Anything else exposes its attributes.

Identifier accessors (see :func:`make_accessor`) may also be plain
callables, for identifiers that are derived rather than stored.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable


class _Missing:
    """Sentinel type for "field not exposed"."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()
"""Returned by field lookups when the entity does not expose a field."""


@runtime_checkable
class SupportsFieldLookup(Protocol):
    """Entities that resolve field names themselves."""

    def lookup_field(self, name: str) -> Any:
        """Return the value of *name*, or :data:`MISSING` if not exposed."""
        ...


def read_field(entity: Any, name: str, default: Any = MISSING) -> Any:
    """Read *name* from *entity*, returning *default* when not exposed.

    Parameters
    ----------
    entity:
        Any object, mapping, or :class:`SupportsFieldLookup` implementation.
    name:
        Field name to resolve.
    default:
        Value returned when *entity* does not expose *name*.

    Returns
    -------
    Any
        The field value (which may legitimately be ``None``) or *default*.
    """
    if isinstance(entity, SupportsFieldLookup):
        value = entity.lookup_field(name)
        return default if value is MISSING else value
    if isinstance(entity, Mapping):
        return entity[name] if name in entity else default
    return getattr(entity, name, default)


def has_field(entity: Any, name: str) -> bool:
    """Return ``True`` if *entity* exposes *name* (even with a ``None`` value)."""
    return read_field(entity, name) is not MISSING


def make_accessor(spec: str | Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Turn a field name or callable into a one-argument reader.

    A field name produces a reader returning ``None`` when the field is not
    exposed, so callers only ever see "a value" or "no value".
    """
    if callable(spec):
        return spec
    if not isinstance(spec, str) or not spec:
        raise TypeError(f"accessor must be a field name or a callable, got {spec!r}")

    def _read(entity: Any) -> Any:
        return read_field(entity, spec, None)

    _read.__name__ = f"read_{spec}"
    return _read
