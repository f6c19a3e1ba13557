"""Configuration for graphsync.

:class:`GraphSyncConfig` is a plain dataclass that captures every tuneable
knob of the reconcilers.  Instances are passed to both
:class:`~graphsync.reconcile.SetReconciler` and
:class:`~graphsync.reconcile.AttributeDiffer`; a reconciler built without a
config uses the defaults.

The module-level :data:`DEFAULT_INACTIVE_STATUSES` lists the status tokens
that mark a remote entity as already torn down.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Status token constants
# ---------------------------------------------------------------------------

DEFAULT_INACTIVE_STATUSES: tuple[str, ...] = ("deleted", "removed", "disabled")
"""Remote statuses that never need deleting or disabling again."""


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class GraphSyncConfig:
    """Complete configuration for the graphsync reconcilers.

    Every parameter has a default, so ``GraphSyncConfig()`` is a working
    configuration.

    Parameters
    ----------
    identifier_field:
        Field holding the externally assigned identifier.  Used by
        :class:`SetReconciler` when an operation is called without an
        explicit identifier accessor.
    status_field:
        Field holding the case-insensitive status token.
    enabled_status:
        Status token meaning "should be live remotely".  Drives
        ``to_create``, ``to_enable`` and ``remain_enabled``.
    paused_status:
        Status token meaning "should exist remotely but be paused".
    inactive_statuses:
        Remote statuses excluded from ``to_delete`` / ``to_disable``.
    id_field:
        Field attached to an :class:`AttributeDiffer` update map so the
        payload carries the identity of the entity it targets.
    metrics:
        A :class:`~graphsync.observability.MetricsHook`.  ``None`` means
        metrics are discarded.
    """

    # ── Identity ────────────────────────────────────────────────────────
    identifier_field: str = "remote_id"

    id_field: str = "id"

    # ── Status ──────────────────────────────────────────────────────────
    status_field: str = "status"

    enabled_status: str = "enabled"

    paused_status: str = "paused"

    inactive_statuses: tuple[str, ...] = field(
        default_factory=lambda: DEFAULT_INACTIVE_STATUSES,
    )

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    def __post_init__(self) -> None:
        """Validate and normalise configuration after initialization."""
        for name in ("identifier_field", "id_field", "status_field"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"{name} must be a non-empty string, got {value!r}")

        for name in ("enabled_status", "paused_status"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"{name} must be a non-empty string, got {value!r}")
            setattr(self, name, value.lower())

        if isinstance(self.inactive_statuses, str):
            raise ValueError(
                "inactive_statuses must be a collection of tokens, not a single string"
            )
        self.inactive_statuses = tuple(str(token).lower() for token in self.inactive_statuses)

        if self.enabled_status == self.paused_status:
            raise ValueError(
                f"enabled_status and paused_status must differ, both are {self.enabled_status!r}"
            )
        for name in ("enabled_status", "paused_status"):
            if getattr(self, name) in self.inactive_statuses:
                raise ValueError(f"{name} {getattr(self, name)!r} is listed as inactive")
