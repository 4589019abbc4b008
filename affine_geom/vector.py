"""Vector types for affine-geom.

Vector   — displacement of any dimension N >= 1
Vector2  — 2D specialization (``dx``, ``dy``, ``perp_dot``)
Vector3  — 3D specialization (``dx``, ``dy``, ``dz``, ``cross``)

``Vector(...)`` picks the specialization from the number of components, and
every arithmetic result is specialized the same way, so a 3D vector is always
a ``Vector3``. ``cross`` exists only on ``Vector3``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type

import numpy as np

from .coordinates import Coordinates
from .element import Element
from .errors import DimensionMismatchError, UnsupportedOperationError
from .scalar import REAL_DTYPE, check_int64, exact, is_real, is_scalar


class Vector(Element):
    """Linear-space element: homogeneous trailing slot 0.

    Parameters
    ----------
    *components : N ints or floats (N >= 1).
    dtype       : optional storage dtype; inferred from components otherwise.
    """

    __slots__ = ()

    def __new__(cls, *components: Any, dtype: Any = None) -> "Vector":
        coords = Coordinates.vector(components, dtype)
        if cls is Vector:
            return cls._wrap(coords)
        return cls._from_coords(coords)

    @classmethod
    def _wrap(cls, coords: Coordinates) -> "Vector":
        return _SPECIALIZED.get(coords.dim, Vector)._from_coords(coords)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, *components: Any, dtype: Any = None) -> "Vector":
        return cls(*components, dtype=dtype)

    @classmethod
    def from_list(cls, values: Any, dtype: Any = None) -> "Vector":
        return cls(*values, dtype=dtype)

    @classmethod
    def _resolve_dim(cls, dim: Optional[int]) -> int:
        if dim is None:
            if cls.DIM is None:
                raise TypeError("dim is required for the generic Vector type.")
            return cls.DIM
        if dim < 1:
            raise ValueError(f"dim must be >= 1, got {dim}")
        return dim

    @classmethod
    def zero(cls, dim: Optional[int] = None, dtype: Any = int) -> "Vector":
        """The null vector."""
        n = cls._resolve_dim(dim)
        return cls(*([0] * n), dtype=dtype)

    @classmethod
    def unit(cls, axis: int, dim: Optional[int] = None, dtype: Any = int) -> "Vector":
        """Basis vector along ``axis``."""
        n = cls._resolve_dim(dim)
        return cls.zero(n, dtype).with_component(axis, 1)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _other_vector(self, other: Any, operation: str) -> "Vector":
        if not isinstance(other, Vector):
            raise UnsupportedOperationError(
                operation, f"{operation} needs two vectors, got {type(other).__name__}."
            )
        return other

    def __add__(self, other: Any) -> Any:
        # vector + point is resolved by Point.__radd__
        if not isinstance(other, Vector):
            return NotImplemented
        return self._wrap(self._coords.add(other._coords))

    def __sub__(self, other: Any) -> Any:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._wrap(self._coords.sub(other._coords))

    def __neg__(self) -> "Vector":
        return self._wrap(self._coords.neg())

    def __pos__(self) -> "Vector":
        return self

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, Vector):
            raise UnsupportedOperationError(
                "vector * vector", "Use dot() for the inner product."
            )
        if not is_scalar(other):
            return NotImplemented
        return self._wrap(self._coords.scale(other))

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Any:
        if not is_scalar(other):
            return NotImplemented
        return self._wrap(self._coords.divide(other))

    def scale(self, factor: Any) -> "Vector":
        if not is_scalar(factor):
            raise TypeError(f"Scale factor must be a scalar, got {factor!r}")
        return self._wrap(self._coords.scale(factor))

    def dot(self, other: "Vector") -> Any:
        """Sum of component-wise products."""
        return self._coords.dot(self._other_vector(other, "dot").coordinates)

    def norm_squared(self) -> Any:
        return self.dot(self)

    def norm(self) -> float:
        """Euclidean length; real vectors only.

        Integer vectors refuse to avoid a silently truncated or float-valued
        result; use ``norm_squared()`` or ``as_real().norm()``.
        """
        if not is_real(self.dtype):
            raise UnsupportedOperationError(
                "norm",
                "norm() needs real scalars; use norm_squared() or as_real().norm().",
            )
        return float(np.linalg.norm(self._coords.homogeneous()[:-1]))

    def normalized(self) -> "Vector":
        """Unit vector with the same direction."""
        n = self.norm()
        if n == 0.0:
            raise ZeroDivisionError("Cannot normalize the zero vector.")
        return self / n

    def is_zero(self) -> bool:
        return self._coords.is_zero()

    def as_real(self) -> "Vector":
        return self._wrap(self._coords.as_dtype(REAL_DTYPE))


class Vector2(Vector):
    """2D displacement."""

    __slots__ = ()

    DIM = 2
    AXES = ("dx", "dy")

    @property
    def dx(self) -> Any:
        return self._coords[0]

    @property
    def dy(self) -> Any:
        return self._coords[1]

    def perp_dot(self, other: "Vector2") -> Any:
        """Signed area of the parallelogram spanned by self and other.

        The scalar form of the cross product: positive when ``other`` is
        counter-clockwise from ``self``.
        """
        other = self._other_vector(other, "perp_dot")
        self._coords.check_same_dim(other.coordinates)
        area = self.dx * other.dy - self.dy * other.dx
        return check_int64(area) if isinstance(area, int) else area


class Vector3(Vector):
    """3D displacement."""

    __slots__ = ()

    DIM = 3
    AXES = ("dx", "dy", "dz")

    @property
    def dx(self) -> Any:
        return self._coords[0]

    @property
    def dy(self) -> Any:
        return self._coords[1]

    @property
    def dz(self) -> Any:
        return self._coords[2]

    def cross(self, other: "Vector3") -> "Vector3":
        """Standard right-handed cross product."""
        other = self._other_vector(other, "cross")
        self._coords.check_same_dim(other.coordinates)
        a = self._coords.homogeneous()[:-1]
        b = other.coordinates.homogeneous()[:-1]
        return self._wrap(Coordinates.vector(exact(np.cross, a, b).tolist()))


_SPECIALIZED: Dict[int, Type[Vector]] = {2: Vector2, 3: Vector3}


# ---------------------------------------------------------------------------
# Function forms
# ---------------------------------------------------------------------------


def _require_vector(value: Any, operation: str) -> Vector:
    if not isinstance(value, Vector):
        raise UnsupportedOperationError(
            operation, f"{operation} needs vectors, got {type(value).__name__}."
        )
    return value


def add(a: Vector, b: Vector) -> Vector:
    return _require_vector(a, "add") + _require_vector(b, "add")


def sub(a: Vector, b: Vector) -> Vector:
    return _require_vector(a, "sub") - _require_vector(b, "sub")


def neg(a: Vector) -> Vector:
    return -_require_vector(a, "neg")


def scale(a: Vector, factor: Any) -> Vector:
    return _require_vector(a, "scale").scale(factor)


def dot(a: Vector, b: Vector) -> Any:
    return _require_vector(a, "dot").dot(b)


def norm_squared(a: Vector) -> Any:
    return _require_vector(a, "norm_squared").norm_squared()


def norm(a: Vector) -> float:
    return _require_vector(a, "norm").norm()


def cross(a: Vector3, b: Vector3) -> Vector3:
    """Cross product of two 3D vectors."""
    _require_vector(a, "cross")
    if not isinstance(a, Vector3):
        raise DimensionMismatchError(3, a.dim, f"cross is only defined in 3D, got {a.dim}D.")
    return a.cross(b)
