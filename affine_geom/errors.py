"""Error kinds for affine-geom.

GeometryError               — base class, carries an ``ErrorKind``
DimensionMismatchError      — operands of different dimension
ComponentIndexError         — component access outside [0, N)
InvalidWeightsError         — affine-combination weights rejected
UnsupportedOperationError   — affine-invalid operation (point + point, …)

Each concrete error also derives from the closest built-in exception so
callers can catch ``ValueError`` / ``IndexError`` / ``TypeError`` as usual.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed set of failure kinds raised by the geometry core."""

    DIMENSION_MISMATCH = "dimension_mismatch"
    INDEX_ERROR = "index_error"
    INVALID_WEIGHTS = "invalid_weights"
    UNSUPPORTED_OPERATION = "unsupported_operation"


class GeometryError(Exception):
    """Base error of the project."""

    kind: ErrorKind


class DimensionMismatchError(GeometryError, ValueError):
    """Operands of incompatible dimension."""

    kind = ErrorKind.DIMENSION_MISMATCH

    def __init__(self, expected: int, actual: int, message: Optional[str] = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            message or f"Dimension mismatch: expected {expected}, got {actual}."
        )


class ComponentIndexError(GeometryError, IndexError):
    """Component index outside the valid range."""

    kind = ErrorKind.INDEX_ERROR

    def __init__(self, index: int, dim: int) -> None:
        self.index = index
        self.dim = dim
        super().__init__(
            f"Component index {index} out of range for dimension {dim}."
        )


class InvalidWeightsError(GeometryError, ValueError):
    """Affine-combination weights are empty, mis-sized, or do not sum to one."""

    kind = ErrorKind.INVALID_WEIGHTS


class UnsupportedOperationError(GeometryError, TypeError):
    """Operation with no affine meaning (point + point, scalar * point, …)."""

    kind = ErrorKind.UNSUPPORTED_OPERATION

    def __init__(self, operation: str, message: Optional[str] = None) -> None:
        self.operation = operation
        super().__init__(message or f"Unsupported operation: {operation}.")
