"""Error hierarchy for graphsync.

Every public error class inherits from :class:`GraphSyncError`. Each carries
a machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

The reconcilers perform no I/O, so the only errors they raise are
configuration errors: a malformed rule is a programming mistake and aborts
the calling operation.  Degraded entity data (missing status, missing
identifier) is normalised silently and never raises.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error graphsync can raise."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_RULE = "INVALID_RULE"
    UNREADABLE_FIELD = "UNREADABLE_FIELD"
    INVALID_CANONICAL_SIDE = "INVALID_CANONICAL_SIDE"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class GraphSyncError(Exception):
    """Base exception for all graphsync errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (_rebuild_error, (type(self), self.code, self.message, self.context, self.cause))


def _rebuild_error(
    cls: type[GraphSyncError],
    code: str,
    message: str,
    context: dict[str, Any],
    cause: Exception | None,
) -> GraphSyncError:
    err = Exception.__new__(cls)
    GraphSyncError.__init__(err, code=code, message=message, context=context, cause=cause)
    return err


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class GraphSyncConfigurationError(GraphSyncError):
    """A reconciliation rule or configuration is malformed.

    Always fatal: it indicates a mistake in rule authorship, not bad data.
    Subclasses narrow down which part of the rule is wrong.

    Context keys: ``rule``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        *,
        code: str = ErrorCode.CONFIGURATION_ERROR,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class GraphSyncInvalidRuleError(GraphSyncConfigurationError):
    """A rule is missing a field name or cannot be built from its mapping.

    Context keys: ``rule``, ``field``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            cause=cause,
            code=ErrorCode.INVALID_RULE,
        )


class GraphSyncUnreadableFieldError(GraphSyncConfigurationError):
    """A rule names a field that the entity on one side does not expose.

    Context keys: ``side``, ``field``, ``entity_type``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            cause=cause,
            code=ErrorCode.UNREADABLE_FIELD,
        )


class GraphSyncInvalidCanonicalSideError(GraphSyncConfigurationError):
    """A rule's canonical side is neither ``local`` nor ``remote``.

    Context keys: ``rule``, ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            cause=cause,
            code=ErrorCode.INVALID_CANONICAL_SIDE,
        )


ConfigurationError = GraphSyncConfigurationError
"""Short alias for :class:`GraphSyncConfigurationError`."""
