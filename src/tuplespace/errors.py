"""Exception hierarchy for tuplespace.

Every error raised by the library derives from :class:`TupleSpaceError` and
carries an :class:`ErrorCode` plus an optional :class:`ErrorContext`. Where a
standard exception type describes the failure as well (``IndexError`` for a
bad relation position, ``ValueError`` for bad configuration), the library
error also subclasses it so callers can catch either.

Nothing is retried: every operation is deterministic, so errors propagate
to the caller as soon as they are detected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Stable identifiers for library failures."""

    UNKNOWN = "E000"
    CAPACITY_EXCEEDED = "E100"
    POSITION_OUT_OF_RANGE = "E101"
    STAGE_CONFIGURATION = "E200"
    RELATION_INVALID = "E201"
    CONFIG_VALIDATION = "E300"
    MODEL_INVALID = "E301"


@dataclass
class ErrorContext:
    """Extra structured information attached to an error."""

    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.extra)


class TupleSpaceError(Exception):
    """Base class for all tuplespace errors."""

    default_code = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.context = context or ErrorContext()
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for machine-readable output."""
        return {
            "error": type(self).__name__,
            "code": self.code.value,
            "message": self.message,
            "context": self.context.to_dict(),
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class CapacityExceededError(TupleSpaceError, OverflowError):
    """Raised when a source holds more tuples than can be materialized."""

    default_code = ErrorCode.CAPACITY_EXCEEDED

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(
            f"Source produced more than {limit} tuples; it cannot be materialized",
            context=ErrorContext(extra={"limit": limit}),
        )


class PositionOutOfRangeError(TupleSpaceError, IndexError):
    """Raised when a relation position does not exist in a tuple."""

    default_code = ErrorCode.POSITION_OUT_OF_RANGE

    def __init__(
        self,
        position: int,
        arity: int,
        relation: Any | None = None,
    ) -> None:
        self.position = position
        self.arity = arity
        self.relation = relation
        message = f"Position {position} is out of range for a tuple of arity {arity}"
        if relation is not None:
            message += f" (relation {relation})"
        super().__init__(
            message,
            context=ErrorContext(extra={"position": position, "arity": arity}),
        )


class StageConfigurationError(TupleSpaceError, ValueError):
    """Raised when a selection stage is declared with an unusable arity."""

    default_code = ErrorCode.STAGE_CONFIGURATION


class RelationError(TupleSpaceError, ValueError):
    """Raised when a relation argument is not a list of integer positions."""

    default_code = ErrorCode.RELATION_INVALID


class ConfigValidationError(TupleSpaceError, ValueError):
    """Raised when a configuration value fails validation."""

    default_code = ErrorCode.CONFIG_VALIDATION

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        context: ErrorContext | None = None,
    ) -> None:
        self.field = field
        self.value = value
        context = context or ErrorContext()
        if field is not None:
            context.extra.setdefault("field", field)
        super().__init__(message, context=context)


class ModelError(TupleSpaceError, ValueError):
    """Raised when a model document cannot be turned into a generator."""

    default_code = ErrorCode.MODEL_INVALID


__all__ = [
    "CapacityExceededError",
    "ConfigValidationError",
    "ErrorCode",
    "ErrorContext",
    "ModelError",
    "PositionOutOfRangeError",
    "RelationError",
    "StageConfigurationError",
    "TupleSpaceError",
]
