"""Point types and affine combinations for affine-geom.

Point   — location of any dimension N >= 1
Point2  — 2D specialization (``x``, ``y``)
Point3  — 3D specialization (``x``, ``y``, ``z``)

Supported arithmetic::

    point - point   -> Vector
    point + vector  -> Point
    vector + point  -> Point
    point - vector  -> Point

Everything else (point + point, scalar * point, -point, …) raises
``UnsupportedOperationError``. Weighted sums of points go through
``affine_combination``, which insists the weights sum to one.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, NoReturn, Optional, Sequence, Type

import numpy as np

from .coordinates import POINT_WEIGHT, Coordinates
from .element import Element
from .errors import InvalidWeightsError, UnsupportedOperationError
from .scalar import DEFAULT_WEIGHT_ATOL, resolve_dtype, to_python, weights_sum_to_one
from .vector import Vector


def _unsupported(operation: str, hint: str = "") -> NoReturn:
    message = f"Unsupported operation: {operation} has no affine meaning."
    if hint:
        message = f"{message} {hint}"
    raise UnsupportedOperationError(operation, message)


class Point(Element):
    """Affine-space element: homogeneous trailing slot 1.

    Parameters
    ----------
    *components : N ints or floats (N >= 1).
    dtype       : optional storage dtype; inferred from components otherwise.
    """

    __slots__ = ()

    def __new__(cls, *components: Any, dtype: Any = None) -> "Point":
        coords = Coordinates.point(components, dtype)
        if cls is Point:
            return cls._wrap(coords)
        return cls._from_coords(coords)

    @classmethod
    def _wrap(cls, coords: Coordinates) -> "Point":
        return _SPECIALIZED.get(coords.dim, Point)._from_coords(coords)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, *components: Any, dtype: Any = None) -> "Point":
        return cls(*components, dtype=dtype)

    @classmethod
    def from_list(cls, values: Any, dtype: Any = None) -> "Point":
        return cls(*values, dtype=dtype)

    @classmethod
    def from_homogeneous(cls, values: Iterable[Any], dtype: Any = None) -> "Point":
        """Point from an explicit N+1 list; the last entry must be 1."""
        coords = Coordinates.from_homogeneous(values, dtype)
        if coords.weight != POINT_WEIGHT:
            raise ValueError(
                "Not a valid point: homogeneous form must end with 1, "
                f"got {coords.weight!r}."
            )
        if cls is Point:
            return cls._wrap(coords)
        return cls._from_coords(coords)

    @classmethod
    def origin(cls, dim: Optional[int] = None, dtype: Any = int) -> "Point":
        if dim is None:
            if cls.DIM is None:
                raise TypeError("dim is required for the generic Point type.")
            dim = cls.DIM
        if dim < 1:
            raise ValueError(f"dim must be >= 1, got {dim}")
        return cls(*([0] * dim), dtype=dtype)

    def is_origin(self) -> bool:
        return self._coords.is_zero()

    # ------------------------------------------------------------------
    # Affine arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Any) -> Any:
        if isinstance(other, Vector):
            return self._wrap(self._coords.add(other.coordinates))
        if isinstance(other, Point):
            _unsupported("point + point", "Use affine_combination() for weighted sums.")
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, Point):
            return Vector._wrap(self._coords.sub(other.coordinates))
        if isinstance(other, Vector):
            return self._wrap(self._coords.sub(other.coordinates))
        return NotImplemented

    def __rsub__(self, other: Any) -> Any:
        if isinstance(other, Vector):
            _unsupported("vector - point")
        return NotImplemented

    def __mul__(self, other: Any) -> NoReturn:
        _unsupported("scalar * point", "Scale the displacement from a reference point instead.")

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> NoReturn:
        _unsupported("point / scalar")

    __rtruediv__ = __truediv__

    def __neg__(self) -> NoReturn:
        _unsupported("-point")

    def translate(self, vector: Vector) -> "Point":
        if not isinstance(vector, Vector):
            _unsupported(f"translate by {type(vector).__name__}", "Points translate by vectors.")
        return self + vector

    def distance_squared(self, other: "Point") -> Any:
        return sub(self, other).norm_squared()

    def distance(self, other: "Point") -> float:
        """Euclidean distance; real points only (see ``Vector.norm``)."""
        return sub(self, other).norm()


class Point2(Point):
    """2D location."""

    __slots__ = ()

    DIM = 2
    AXES = ("x", "y")

    @property
    def x(self) -> Any:
        return self._coords[0]

    @property
    def y(self) -> Any:
        return self._coords[1]


class Point3(Point):
    """3D location."""

    __slots__ = ()

    DIM = 3
    AXES = ("x", "y", "z")

    @property
    def x(self) -> Any:
        return self._coords[0]

    @property
    def y(self) -> Any:
        return self._coords[1]

    @property
    def z(self) -> Any:
        return self._coords[2]


_SPECIALIZED: Dict[int, Type[Point]] = {2: Point2, 3: Point3}


# ---------------------------------------------------------------------------
# Function forms
# ---------------------------------------------------------------------------


def add(a: Any, b: Any) -> Point:
    """Translate a point by a vector; accepts (point, vector) or (vector, point)."""
    if isinstance(a, Point) and isinstance(b, Point):
        _unsupported("point + point", "Use affine_combination() for weighted sums.")
    if isinstance(a, Point) and isinstance(b, Vector):
        return a + b
    if isinstance(a, Vector) and isinstance(b, Point):
        return b + a
    _unsupported(f"{type(a).__name__} + {type(b).__name__}")


def sub(p: Point, q: Point) -> Vector:
    """Displacement from ``q`` to ``p``."""
    if not (isinstance(p, Point) and isinstance(q, Point)):
        _unsupported(
            f"{type(p).__name__} - {type(q).__name__}",
            "Point difference needs two points.",
        )
    return p - q


def translate(p: Point, v: Vector) -> Point:
    if not isinstance(p, Point):
        _unsupported(f"translate {type(p).__name__}")
    return p.translate(v)


def distance(p: Point, q: Point) -> float:
    return sub(p, q).norm()


def distance_squared(p: Point, q: Point) -> Any:
    return sub(p, q).norm_squared()


# ---------------------------------------------------------------------------
# Affine combinations
# ---------------------------------------------------------------------------


def affine_combination(
    points: Sequence[Point],
    weights: Sequence[Any],
    *,
    atol: float = DEFAULT_WEIGHT_ATOL,
) -> Point:
    """Weighted sum ``Σ wᵢ·pᵢ`` of points whose weights sum to one.

    Parameters
    ----------
    points  : non-empty list of points, all of the same dimension.
    weights : one int or float weight per point.
    atol    : absolute tolerance on ``Σ wᵢ == 1`` for real weights;
              0.0 (the default) demands exact equality. Integer weights
              are always checked exactly.

    Returns
    -------
    The combined Point.

    Raises
    ------
    InvalidWeightsError       : empty input, length mismatch, or bad sum.
    DimensionMismatchError    : points of different dimensions.
    UnsupportedOperationError : a member of ``points`` is not a Point.
    """
    points = list(points)
    weights = list(weights)
    if not points:
        raise InvalidWeightsError("affine_combination needs at least one point.")
    if len(weights) != len(points):
        raise InvalidWeightsError(
            f"Got {len(points)} points but {len(weights)} weights."
        )
    for p in points:
        if not isinstance(p, Point):
            _unsupported(f"affine combination of {type(p).__name__}")
    first = points[0].coordinates
    for p in points[1:]:
        first.check_same_dim(p.coordinates)

    w = np.array(weights, dtype=resolve_dtype(weights))
    if not weights_sum_to_one(w, atol):
        raise InvalidWeightsError(
            f"Affine weights must sum to 1, got {to_python(w.sum())!r}."
        )
    return Point._wrap(Coordinates.weighted_sum([p.coordinates for p in points], w))


def centroid(points: Sequence[Point]) -> Point:
    """Equal-weight affine combination (the mean point)."""
    points = list(points)
    n = len(points)
    if n == 0:
        raise InvalidWeightsError("centroid needs at least one point.")
    weights: List[float] = [1.0 / n] * n
    # 1/n summed n times can miss 1 by a few ulps
    tolerance = n * float(np.finfo(np.float64).eps)
    return affine_combination(points, weights, atol=tolerance)
