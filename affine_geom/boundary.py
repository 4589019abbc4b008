"""Fixed-instantiation boundary for affine-geom.

Flat, status-returning entry points for exactly four concrete
instantiations:

    int2   — 2D, int64 components
    real2  — 2D, float64 components
    int3   — 3D, int64 components
    real3  — 3D, float64 components

Every entry point takes flat tuples of the fixed length (and plain ints or
floats) and returns a ``BoundaryResult``. No exception ever escapes: errors
from the geometry core are converted to a ``Status`` code here.

Entry points are registered in ``EXPORTS`` under
``<kind>_<instantiation>_<operation>``, e.g. ``point_real2_add_vector``,
and can be dispatched by name with ``call``.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatchError, ErrorKind, GeometryError
from .log import get_logger
from .point import Point, affine_combination
from .point import add as point_add
from .scalar import INT_DTYPE, REAL_DTYPE, fits_int64, is_real
from .vector import Vector

logger = get_logger(__name__)

Flat = Tuple[Any, ...]


class Status(IntEnum):
    """Status codes returned across the boundary."""

    OK = 0
    DIMENSION_MISMATCH = 1
    INDEX_ERROR = 2
    INVALID_WEIGHTS = 3
    UNSUPPORTED_OPERATION = 4
    INVALID_ARGUMENT = 5
    ARITHMETIC_ERROR = 6
    INTERNAL_ERROR = 7


_STATUS_BY_KIND: Dict[ErrorKind, Status] = {
    ErrorKind.DIMENSION_MISMATCH: Status.DIMENSION_MISMATCH,
    ErrorKind.INDEX_ERROR: Status.INDEX_ERROR,
    ErrorKind.INVALID_WEIGHTS: Status.INVALID_WEIGHTS,
    ErrorKind.UNSUPPORTED_OPERATION: Status.UNSUPPORTED_OPERATION,
}


@dataclass(frozen=True)
class BoundaryResult:
    """Outcome of one boundary call.

    ``value`` is a flat tuple, a single scalar, a bool, or None on failure.
    """

    status: Status
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.status is Status.OK


def status_for(exc: BaseException) -> Status:
    """Map an exception raised below the boundary onto a status code."""
    if isinstance(exc, GeometryError):
        return _STATUS_BY_KIND[exc.kind]
    if isinstance(exc, ArithmeticError):
        return Status.ARITHMETIC_ERROR
    if isinstance(exc, (TypeError, ValueError)):
        return Status.INVALID_ARGUMENT
    return Status.INTERNAL_ERROR


def _entry_point(func: Callable[..., Any]) -> Callable[..., BoundaryResult]:
    @functools.wraps(func)
    def wrapper(self: "Instantiation", *args: Any) -> BoundaryResult:
        try:
            # overflow or NaN from the real kernel is an error here, not a value
            with np.errstate(over="raise", invalid="raise", divide="raise"):
                value = func(self, *args)
        except Exception as exc:  # nothing may cross the boundary
            status = status_for(exc)
            if status is Status.INTERNAL_ERROR:
                logger.exception("%s.%s failed unexpectedly", self.name, func.__name__)
            else:
                logger.debug(
                    "%s.%s -> %s: %s", self.name, func.__name__, status.name, exc
                )
            return BoundaryResult(status)
        return BoundaryResult(Status.OK, value)

    return wrapper


class Instantiation:
    """One concrete (scalar, dimension) pair with its flat entry points."""

    VECTOR_OPS: Tuple[str, ...] = (
        "add", "sub", "neg", "scale", "dot", "norm_squared", "equals", "zero",
    )
    REAL_VECTOR_OPS: Tuple[str, ...] = ("divide", "norm", "normalized")
    POINT_OPS: Tuple[str, ...] = (
        "add_vector", "sub_vector", "sub", "equals", "affine_combination",
        "add_point", "origin", "distance_squared",
    )
    REAL_POINT_OPS: Tuple[str, ...] = ("distance",)

    def __init__(self, name: str, dim: int, dtype: np.dtype) -> None:
        self.name = name
        self.dim = dim
        self.dtype = dtype

    @property
    def is_real(self) -> bool:
        return is_real(self.dtype)

    # ------------------------------------------------------------------
    # Marshaling
    # ------------------------------------------------------------------

    def _scalar(self, value: Any) -> Any:
        if isinstance(value, (bool, np.bool_)):
            raise TypeError(f"{self.name}: booleans are not scalars")
        if isinstance(value, (int, np.integer)):
            value = int(value)
            if not fits_int64(value):
                raise ValueError(f"{self.name}: {value} does not fit in int64")
            return float(value) if self.is_real else value
        if isinstance(value, (float, np.floating)) and self.is_real:
            return float(value)
        raise TypeError(f"{self.name}: invalid scalar {value!r}")

    def _flat(self, values: Any) -> List[Any]:
        if not isinstance(values, (tuple, list)):
            raise TypeError(f"{self.name}: expected a flat tuple, got {type(values).__name__}")
        if len(values) != self.dim:
            raise DimensionMismatchError(self.dim, len(values))
        return [self._scalar(v) for v in values]

    def _vector(self, values: Any) -> Vector:
        return Vector(*self._flat(values), dtype=self.dtype)

    def _point(self, values: Any) -> Point:
        return Point(*self._flat(values), dtype=self.dtype)

    def _out(self, element: Any) -> Flat:
        return element.components()

    # ------------------------------------------------------------------
    # Vector entry points
    # ------------------------------------------------------------------

    @_entry_point
    def vector_add(self, a: Flat, b: Flat) -> Flat:
        return self._out(self._vector(a) + self._vector(b))

    @_entry_point
    def vector_sub(self, a: Flat, b: Flat) -> Flat:
        return self._out(self._vector(a) - self._vector(b))

    @_entry_point
    def vector_neg(self, a: Flat) -> Flat:
        return self._out(-self._vector(a))

    @_entry_point
    def vector_scale(self, a: Flat, factor: Any) -> Flat:
        return self._out(self._vector(a).scale(self._scalar(factor)))

    @_entry_point
    def vector_divide(self, a: Flat, divisor: Any) -> Flat:
        if not self.is_real:
            raise TypeError(f"{self.name}: division is only exported for real scalars")
        return self._out(self._vector(a) / self._scalar(divisor))

    @_entry_point
    def vector_dot(self, a: Flat, b: Flat) -> Any:
        return self._vector(a).dot(self._vector(b))

    @_entry_point
    def vector_norm_squared(self, a: Flat) -> Any:
        return self._vector(a).norm_squared()

    @_entry_point
    def vector_norm(self, a: Flat) -> float:
        return self._vector(a).norm()

    @_entry_point
    def vector_normalized(self, a: Flat) -> Flat:
        return self._out(self._vector(a).normalized())

    @_entry_point
    def vector_equals(self, a: Flat, b: Flat) -> bool:
        return self._vector(a) == self._vector(b)

    @_entry_point
    def vector_zero(self) -> Flat:
        return self._out(Vector.zero(self.dim, self.dtype))

    # ------------------------------------------------------------------
    # Point entry points
    # ------------------------------------------------------------------

    @_entry_point
    def point_add_vector(self, p: Flat, v: Flat) -> Flat:
        return self._out(self._point(p) + self._vector(v))

    @_entry_point
    def point_sub_vector(self, p: Flat, v: Flat) -> Flat:
        return self._out(self._point(p) - self._vector(v))

    @_entry_point
    def point_sub(self, p: Flat, q: Flat) -> Flat:
        return self._out(self._point(p) - self._point(q))

    @_entry_point
    def point_equals(self, p: Flat, q: Flat) -> bool:
        return self._point(p) == self._point(q)

    @_entry_point
    def point_affine_combination(self, points: Sequence[Flat], weights: Sequence[Any]) -> Flat:
        if not isinstance(points, (tuple, list)) or not isinstance(weights, (tuple, list)):
            raise TypeError(f"{self.name}: points and weights must be flat sequences")
        return self._out(
            affine_combination(
                [self._point(p) for p in points],
                [self._scalar(w) for w in weights],
            )
        )

    @_entry_point
    def point_add_point(self, p: Flat, q: Flat) -> Flat:
        return self._out(point_add(self._point(p), self._point(q)))

    @_entry_point
    def point_origin(self) -> Flat:
        return self._out(Point.origin(self.dim, self.dtype))

    @_entry_point
    def point_distance_squared(self, p: Flat, q: Flat) -> Any:
        return self._point(p).distance_squared(self._point(q))

    @_entry_point
    def point_distance(self, p: Flat, q: Flat) -> float:
        return self._point(p).distance(self._point(q))

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def vector_operations(self) -> Tuple[str, ...]:
        return self.VECTOR_OPS + (self.REAL_VECTOR_OPS if self.is_real else ())

    def point_operations(self) -> Tuple[str, ...]:
        return self.POINT_OPS + (self.REAL_POINT_OPS if self.is_real else ())

    def exports(self) -> Dict[str, Callable[..., BoundaryResult]]:
        table: Dict[str, Callable[..., BoundaryResult]] = {}
        for op in self.vector_operations():
            table[f"vector_{self.name}_{op}"] = getattr(self, f"vector_{op}")
        for op in self.point_operations():
            table[f"point_{self.name}_{op}"] = getattr(self, f"point_{op}")
        return table

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, dim={self.dim}, dtype={self.dtype})"


class Instantiation2(Instantiation):
    VECTOR_OPS = Instantiation.VECTOR_OPS + ("perp_dot",)

    def __init__(self, name: str, dtype: np.dtype) -> None:
        super().__init__(name, 2, dtype)

    @_entry_point
    def vector_perp_dot(self, a: Flat, b: Flat) -> Any:
        return self._vector(a).perp_dot(self._vector(b))


class Instantiation3(Instantiation):
    VECTOR_OPS = Instantiation.VECTOR_OPS + ("cross",)

    def __init__(self, name: str, dtype: np.dtype) -> None:
        super().__init__(name, 3, dtype)

    @_entry_point
    def vector_cross(self, a: Flat, b: Flat) -> Flat:
        return self._out(self._vector(a).cross(self._vector(b)))


INT2 = Instantiation2("int2", INT_DTYPE)
REAL2 = Instantiation2("real2", REAL_DTYPE)
INT3 = Instantiation3("int3", INT_DTYPE)
REAL3 = Instantiation3("real3", REAL_DTYPE)

INSTANTIATIONS: Tuple[Instantiation, ...] = (INT2, REAL2, INT3, REAL3)

EXPORTS: Dict[str, Callable[..., BoundaryResult]] = {}
for _inst in INSTANTIATIONS:
    EXPORTS.update(_inst.exports())


def call(name: str, *args: Any) -> BoundaryResult:
    """Dispatch an entry point by its exported name."""
    func: Optional[Callable[..., BoundaryResult]] = EXPORTS.get(name)
    if func is None:
        logger.debug("unknown entry point %r", name)
        return BoundaryResult(Status.UNSUPPORTED_OPERATION)
    # arity errors surface inside the guarded wrapper
    return func(*args)
