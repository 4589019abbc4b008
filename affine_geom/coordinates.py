"""Homogeneous coordinate storage for affine-geom.

A ``Coordinates`` value holds the N components of a point or vector plus one
trailing homogeneous slot in a single read-only numpy array of length N+1:

    vector (dx, dy)  ->  [dx, dy, 0]
    point  (x, y)    ->  [x,  y,  1]

With that layout ``point - point``, ``point + vector`` and affine
combinations are plain component-wise numpy arithmetic, and the trailing
slot of the result says what kind of element it is.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np

from .errors import ComponentIndexError, DimensionMismatchError
from .scalar import common_dtype, exact, normalize_dtype, resolve_dtype, to_python

VECTOR_WEIGHT = 0
POINT_WEIGHT = 1


class Coordinates:
    """Immutable N+1 homogeneous storage.

    Build instances with ``Coordinates.vector``, ``Coordinates.point`` or
    ``Coordinates.from_homogeneous``; the constructor takes ownership of an
    already-built array and only freezes it.
    """

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray) -> None:
        data.setflags(write=False)
        self._data = data

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def _build(cls, components: Iterable[Any], weight: int, dtype: Any) -> "Coordinates":
        values = list(components)
        if not values:
            raise ValueError("At least one component is required.")
        dt = resolve_dtype(values, dtype)
        data = np.empty(len(values) + 1, dtype=dt)
        data[:-1] = values
        data[-1] = weight
        return cls(data)

    @classmethod
    def vector(cls, components: Iterable[Any], dtype: Any = None) -> "Coordinates":
        """Storage for a displacement: trailing slot 0."""
        return cls._build(components, VECTOR_WEIGHT, dtype)

    @classmethod
    def point(cls, components: Iterable[Any], dtype: Any = None) -> "Coordinates":
        """Storage for a location: trailing slot 1."""
        return cls._build(components, POINT_WEIGHT, dtype)

    @classmethod
    def from_homogeneous(cls, values: Iterable[Any], dtype: Any = None) -> "Coordinates":
        """Storage from an explicit N+1 list whose last entry is 0 or 1."""
        values = list(values)
        if len(values) < 2:
            raise ValueError(
                f"Homogeneous form needs at least 2 entries, got {len(values)}."
            )
        if values[-1] not in (VECTOR_WEIGHT, POINT_WEIGHT):
            raise ValueError(
                "Trailing homogeneous coordinate must be 0 (vector) or 1 (point), "
                f"got {values[-1]!r}."
            )
        return cls(np.array(values, dtype=resolve_dtype(values, dtype)))

    @classmethod
    def weighted_sum(
        cls,
        items: Sequence["Coordinates"],
        weights: np.ndarray,
    ) -> "Coordinates":
        """Σ wᵢ·itemᵢ over the homogeneous form.

        The caller validates the weights. When their sum is not exactly 1
        (a tolerated real sum) the result is rescaled so the trailing slot
        is exactly the point weight again.
        """
        first = items[0]
        for other in items[1:]:
            first.check_same_dim(other)
        stacked = np.stack([c._data for c in items])
        data = exact(np.matmul, weights, stacked)
        total = data[-1]
        if total != POINT_WEIGHT:
            data = data / total
        return cls(data)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return len(self._data) - 1

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def weight(self) -> Any:
        """The trailing homogeneous slot (0 for vectors, 1 for points)."""
        return to_python(self._data[-1])

    def components(self) -> Tuple[Any, ...]:
        """The N components as built-in ints or floats."""
        return tuple(self._data[:-1].tolist())

    def homogeneous(self) -> np.ndarray:
        """Read-only view over all N+1 slots."""
        return self._data.view()

    def _index(self, index: Any) -> int:
        if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
            raise TypeError(f"Component index must be an integer, got {index!r}")
        i = int(index)
        n = self.dim
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise ComponentIndexError(int(index), n)
        return i

    def __getitem__(self, index: Any) -> Any:
        return to_python(self._data[self._index(index)])

    def with_component(self, index: Any, value: Any) -> "Coordinates":
        """Copy with component ``index`` replaced by ``value``.

        The reserved trailing slot is not addressable.
        """
        i = self._index(index)
        dt = common_dtype(self.dtype, resolve_dtype([value]))
        data = self._data.astype(dt, copy=True)
        data[i] = value
        return Coordinates(data)

    def as_dtype(self, dtype: Any) -> "Coordinates":
        return Coordinates(self._data.astype(normalize_dtype(dtype), copy=True))

    def is_zero(self) -> bool:
        return not np.any(self._data[:-1])

    # ------------------------------------------------------------------
    # Component-wise kernel
    # ------------------------------------------------------------------

    def _with_weight(self, body: np.ndarray) -> "Coordinates":
        """Storage holding ``body`` as its N components and this storage's
        trailing slot, copied rather than computed."""
        data = np.empty(len(body) + 1, dtype=normalize_dtype(body.dtype))
        data[:-1] = body
        data[-1] = self._data[-1]
        return Coordinates(data)

    def check_same_dim(self, other: "Coordinates") -> None:
        if other.dim != self.dim:
            raise DimensionMismatchError(self.dim, other.dim)

    def add(self, other: "Coordinates") -> "Coordinates":
        self.check_same_dim(other)
        return Coordinates(exact(np.add, self._data, other._data))

    def sub(self, other: "Coordinates") -> "Coordinates":
        self.check_same_dim(other)
        return Coordinates(exact(np.subtract, self._data, other._data))

    def neg(self) -> "Coordinates":
        return self._with_weight(exact(np.negative, self._data[:-1]))

    def scale(self, factor: Any) -> "Coordinates":
        resolve_dtype([factor])
        return self._with_weight(exact(np.multiply, self._data[:-1], factor))

    def divide(self, divisor: Any) -> "Coordinates":
        resolve_dtype([divisor])
        if divisor == 0:
            raise ZeroDivisionError("Division of coordinates by zero.")
        return self._with_weight(self._data[:-1] / divisor)

    def dot(self, other: "Coordinates") -> Any:
        self.check_same_dim(other)
        return to_python(exact(np.dot, self._data[:-1], other._data[:-1]))

    def transformed(self, linear: np.ndarray, offset: np.ndarray) -> "Coordinates":
        """Apply ``x -> linear @ x + offset``.

        The offset only moves points: a vector's trailing 0 would zero it
        in the homogeneous product, so it is skipped outright.
        """
        if linear.shape != (self.dim, self.dim):
            raise DimensionMismatchError(self.dim, linear.shape[0])
        body = exact(np.matmul, linear, self._data[:-1])
        if self._data[-1] == POINT_WEIGHT:
            body = exact(np.add, body, offset)
        return self._with_weight(body)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coordinates):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(
            np.array_equal(self._data, other._data)
        )

    def __hash__(self) -> int:
        return hash(tuple(self._data.tolist()))

    def tolist(self) -> List[Any]:
        return self._data.tolist()

    def __repr__(self) -> str:
        return f"Coordinates({self._data.tolist()}, dtype={self.dtype})"
