"""affine-geom — points and vectors over an affine space.

Locations (``Point``) and displacements (``Vector``) are distinct types over
one homogeneous numpy representation, for any dimension and for integer or
real scalars. ``Transform`` maps both through one homogeneous matrix.
``affine_geom.boundary`` exposes flat, status-returning entry
points for the 2D/3D integer/real instantiations.

Public API::

    from affine_geom import Point, Vector, affine_combination
"""

import logging

from .coordinates import Coordinates
from .errors import (
    ComponentIndexError,
    DimensionMismatchError,
    ErrorKind,
    GeometryError,
    InvalidWeightsError,
    UnsupportedOperationError,
)
from .point import Point, Point2, Point3, affine_combination, centroid, distance
from .transform import Transform
from .vector import Vector, Vector2, Vector3, cross, dot, norm, norm_squared

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "ComponentIndexError",
    "Coordinates",
    "DimensionMismatchError",
    "ErrorKind",
    "GeometryError",
    "InvalidWeightsError",
    "Point",
    "Point2",
    "Point3",
    "Transform",
    "UnsupportedOperationError",
    "Vector",
    "Vector2",
    "Vector3",
    "affine_combination",
    "centroid",
    "cross",
    "distance",
    "dot",
    "norm",
    "norm_squared",
]
