"""Common base for the two nominal element types, Vector and Point.

Both wrap a ``Coordinates`` value; the kind of element is the wrapper
type, never a field callers inspect.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from .coordinates import Coordinates
from .errors import DimensionMismatchError


class Element:
    """Immutable N-dimensional element over homogeneous storage."""

    __slots__ = ("_coords",)

    DIM: Optional[int] = None
    AXES: Tuple[str, ...] = ()

    # numpy scalars on the left of an operator defer to our reflected methods
    __array_ufunc__ = None

    _coords: Coordinates

    @classmethod
    def _from_coords(cls, coords: Coordinates) -> Any:
        if cls.DIM is not None and coords.dim != cls.DIM:
            raise DimensionMismatchError(cls.DIM, coords.dim)
        obj = object.__new__(cls)
        object.__setattr__(obj, "_coords", coords)
        return obj

    @classmethod
    def _wrap(cls, coords: Coordinates) -> Any:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return self._coords.dim

    @property
    def dtype(self) -> np.dtype:
        return self._coords.dtype

    @property
    def coordinates(self) -> Coordinates:
        return self._coords

    def components(self) -> Tuple[Any, ...]:
        return self._coords.components()

    def homogeneous(self) -> np.ndarray:
        """Read-only N+1 array: components plus the trailing 0/1 slot."""
        return self._coords.homogeneous()

    def with_component(self, index: int, value: Any) -> Any:
        return self._wrap(self._coords.with_component(index, value))

    def __getitem__(self, index: int) -> Any:
        return self._coords[index]

    def __len__(self) -> int:
        return self._coords.dim

    def __iter__(self) -> Iterator[Any]:
        return iter(self._coords.components())

    def axis_names(self) -> Tuple[str, ...]:
        return self.AXES or tuple(f"c{i}" for i in range(self.dim))

    def to_list(self) -> List[Any]:
        return list(self._coords.components())

    def to_dict(self) -> Dict[str, Any]:
        return dict(zip(self.axis_names(), self._coords.components()))

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> Tuple[Any, Tuple[Any, ...]]:
        return (type(self), self._coords.components())

    def __eq__(self, other: object) -> bool:
        # The trailing slot differs between vectors and points, so a vector
        # never equals a point with the same components.
        if not isinstance(other, Element):
            return NotImplemented
        return self._coords == other._coords

    def __hash__(self) -> int:
        return hash(self._coords)

    def __repr__(self) -> str:
        body = ", ".join(repr(c) for c in self._coords.components())
        return f"{type(self).__name__}({body})"
