"""Affine transforms over homogeneous coordinates.

A ``Transform`` of N-dimensional space is an (N+1)x(N+1) matrix whose last
row is ``[0, ..., 0, 1]``. It acts on column vectors::

    t @ point    -> Point   (linear part, then translation)
    t @ vector   -> Vector  (linear part only)
    a @ b        -> Transform applying b first, then a

Vectors ignore the translation because their trailing homogeneous slot is 0.
"""

from __future__ import annotations

from typing import Any, List

import numpy as np

from .element import Element
from .errors import DimensionMismatchError, UnsupportedOperationError
from .point import Point
from .scalar import exact, normalize_dtype, resolve_dtype
from .vector import Vector


def _assemble(linear: np.ndarray, offset: np.ndarray) -> np.ndarray:
    n = len(offset)
    dt = normalize_dtype(np.result_type(linear, offset))
    data = np.zeros((n + 1, n + 1), dtype=dt)
    data[:-1, :-1] = linear
    data[:-1, -1] = offset
    data[-1, -1] = 1
    data.setflags(write=False)
    return data


def _factors(by: Any, operation: str) -> np.ndarray:
    if not isinstance(by, Vector):
        raise UnsupportedOperationError(
            operation, f"{operation} takes a Vector, got {type(by).__name__}."
        )
    return by.homogeneous()[:-1]


class Transform:
    """Immutable affine map stored as a homogeneous matrix.

    Parameters
    ----------
    rows  : N+1 rows of N+1 ints or floats; the last row must be
            ``[0, ..., 0, 1]``.
    dtype : optional storage dtype; inferred from the entries otherwise.
    """

    __slots__ = ("_matrix",)

    __array_ufunc__ = None

    def __init__(self, rows: Any, dtype: Any = None) -> None:
        rows = [list(r) for r in rows]
        size = len(rows)
        if size < 2 or any(len(r) != size for r in rows):
            raise ValueError(
                f"Transform needs a square matrix of at least 2x2, got {size} rows."
            )
        data = np.array(rows, dtype=resolve_dtype([v for r in rows for v in r], dtype))
        bottom = [0] * (size - 1) + [1]
        if data[-1].tolist() != bottom:
            raise ValueError(f"Last row must be {bottom}, got {data[-1].tolist()}.")
        self._matrix = _assemble(data[:-1, :-1], data[:-1, -1])

    @classmethod
    def _from_parts(cls, linear: np.ndarray, offset: np.ndarray) -> "Transform":
        obj = object.__new__(cls)
        obj._matrix = _assemble(linear, offset)
        return obj

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls, dim: int, dtype: Any = int) -> "Transform":
        if dim < 1:
            raise ValueError(f"dim must be >= 1, got {dim}")
        dt = normalize_dtype(dtype)
        return cls._from_parts(np.eye(dim, dtype=dt), np.zeros(dim, dtype=dt))

    @classmethod
    def scale(cls, by: Vector) -> "Transform":
        """Per-axis scaling by the components of ``by``."""
        factors = _factors(by, "scale")
        return cls._from_parts(np.diag(factors), np.zeros_like(factors))

    @classmethod
    def translate(cls, by: Vector) -> "Transform":
        """Translation of points by ``by``."""
        offset = _factors(by, "translate")
        return cls._from_parts(np.eye(len(offset), dtype=offset.dtype), offset)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return len(self._matrix) - 1

    @property
    def dtype(self) -> np.dtype:
        return self._matrix.dtype

    def matrix(self) -> np.ndarray:
        """Read-only (N+1)x(N+1) homogeneous matrix."""
        return self._matrix.view()

    @property
    def _linear(self) -> np.ndarray:
        return self._matrix[:-1, :-1]

    @property
    def _offset(self) -> np.ndarray:
        return self._matrix[:-1, -1]

    def is_identity(self) -> bool:
        return bool(np.array_equal(self._matrix, np.eye(self.dim + 1)))

    # ------------------------------------------------------------------
    # Application and composition
    # ------------------------------------------------------------------

    def apply(self, element: Element) -> Any:
        """Map a Point or Vector; the result has the same kind."""
        if not isinstance(element, (Point, Vector)):
            raise UnsupportedOperationError(
                "transform", f"Cannot transform {type(element).__name__}."
            )
        coords = element.coordinates.transformed(self._linear, self._offset)
        return element._wrap(coords)

    def then(self, other: "Transform") -> "Transform":
        """Transform applying ``self`` first, then ``other``."""
        return other.compose(self)

    def compose(self, other: "Transform") -> "Transform":
        """Transform applying ``other`` first, then ``self``."""
        if not isinstance(other, Transform):
            raise TypeError(f"Cannot compose with {type(other).__name__}")
        if other.dim != self.dim:
            raise DimensionMismatchError(self.dim, other.dim)
        linear = exact(np.matmul, self._linear, other._linear)
        offset = exact(
            np.add, exact(np.matmul, self._linear, other._offset), self._offset
        )
        return Transform._from_parts(linear, offset)

    def __matmul__(self, other: Any) -> Any:
        if isinstance(other, Transform):
            return self.compose(other)
        if isinstance(other, (Point, Vector)):
            return self.apply(other)
        return NotImplemented

    __call__ = apply

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return self._matrix.shape == other._matrix.shape and bool(
            np.array_equal(self._matrix, other._matrix)
        )

    def __hash__(self) -> int:
        return hash(tuple(self._matrix.ravel().tolist()))

    def tolist(self) -> List[List[Any]]:
        return self._matrix.tolist()

    def __repr__(self) -> str:
        return f"Transform({self._matrix.tolist()})"
