"""Unit tests for affine_geom.transform."""

import math

import pytest

from affine_geom.errors import DimensionMismatchError, UnsupportedOperationError
from affine_geom.point import Point, Point2
from affine_geom.scalar import INT_DTYPE, REAL_DTYPE
from affine_geom.transform import Transform
from affine_geom.vector import Vector, Vector2


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_identity_matrix():
    t = Transform.identity(2)
    assert t.tolist() == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
    assert t.dim == 2
    assert t.dtype == INT_DTYPE
    assert t.is_identity()


def test_identity_needs_positive_dim():
    with pytest.raises(ValueError, match="dim"):
        Transform.identity(0)


def test_scale_puts_factors_on_diagonal():
    t = Transform.scale(Vector(2, 3))
    assert t.tolist() == [[2, 0, 0], [0, 3, 0], [0, 0, 1]]


def test_translate_puts_offset_in_last_column():
    t = Transform.translate(Vector(5, -1))
    assert t.tolist() == [[1, 0, 5], [0, 1, -1], [0, 0, 1]]


def test_factories_take_vectors_only():
    with pytest.raises(UnsupportedOperationError):
        Transform.translate(Point(1, 2))
    with pytest.raises(UnsupportedOperationError):
        Transform.scale((2, 3))


def test_from_rows():
    t = Transform([[0, -1, 0], [1, 0, 0], [0, 0, 1]])
    assert t @ Vector(1, 0) == Vector(0, 1)


def test_rows_must_be_affine():
    with pytest.raises(ValueError, match="Last row"):
        Transform([[1, 0, 0], [0, 1, 0], [1, 0, 1]])


def test_rows_must_be_square():
    with pytest.raises(ValueError, match="square"):
        Transform([[1, 0], [0, 1], [0, 1]])


def test_matrix_is_read_only():
    m = Transform.identity(2).matrix()
    with pytest.raises(ValueError):
        m[0, 0] = 7


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def test_translate_moves_points():
    p = Transform.translate(Vector(5, -1)) @ Point(1, 1)
    assert isinstance(p, Point2)
    assert p == Point(6, 0)


def test_translate_leaves_vectors_alone():
    v = Transform.translate(Vector(5, -1)) @ Vector(1, 1)
    assert isinstance(v, Vector2)
    assert v == Vector(1, 1)


def test_scale_acts_on_points_and_vectors():
    t = Transform.scale(Vector(2, 3))
    assert t @ Point(1, 1) == Point(2, 3)
    assert t @ Vector(1, -1) == Vector(2, -3)


def test_apply_keeps_trailing_slot():
    t = Transform.translate(Vector(0.5, 0.5))
    assert (t @ Point(1.0, 1.0)).homogeneous()[-1] == 1
    assert (t @ Vector(1.0, 1.0)).homogeneous()[-1] == 0


def test_infinite_translation_skips_vectors():
    t = Transform.translate(Vector(math.inf, 0.0))
    assert t @ Vector(1.0, 2.0) == Vector(1.0, 2.0)
    moved = t @ Point(0.0, 0.0)
    assert moved.x == math.inf
    assert moved.homogeneous()[-1] == 1


def test_call_is_apply():
    t = Transform.translate(Vector(1, 1))
    assert t(Point(0, 0)) == t @ Point(0, 0)


def test_apply_dimension_mismatch():
    with pytest.raises(DimensionMismatchError):
        Transform.identity(3) @ Point(1, 2)


def test_apply_refuses_other_values():
    with pytest.raises(UnsupportedOperationError):
        Transform.identity(2).apply((1, 2))
    with pytest.raises(TypeError):
        Transform.identity(2) @ 3


def test_real_transform_promotes_integer_points():
    p = Transform.scale(Vector(0.5, 0.5)) @ Point(1, 3)
    assert p.dtype == REAL_DTYPE
    assert p == Point(0.5, 1.5)


def test_integer_overflow_raises():
    t = Transform.scale(Vector(2, 1))
    with pytest.raises(OverflowError):
        t @ Vector(2 ** 62, 0)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def test_compose_applies_right_operand_first():
    scale = Transform.scale(Vector(2, 2))
    move = Transform.translate(Vector(1, 0))
    p = Point(1, 1)
    assert (move @ scale) @ p == move @ (scale @ p) == Point(3, 2)
    assert (scale @ move) @ p == Point(4, 2)


def test_then_is_reversed_compose():
    scale = Transform.scale(Vector(2, 2))
    move = Transform.translate(Vector(1, 0))
    assert scale.then(move) == move @ scale


def test_translations_add_up():
    a = Transform.translate(Vector(1, 2))
    b = Transform.translate(Vector(3, 4))
    assert a @ b == Transform.translate(Vector(4, 6))


def test_identity_is_neutral():
    t = Transform([[2, 1, 5], [0, 3, -1], [0, 0, 1]])
    assert Transform.identity(2) @ t == t
    assert t @ Transform.identity(2) == t


def test_compose_dimension_mismatch():
    with pytest.raises(DimensionMismatchError):
        Transform.identity(2) @ Transform.identity(3)


# ---------------------------------------------------------------------------
# Value semantics
# ---------------------------------------------------------------------------


def test_equality_and_hash_across_dtypes():
    a = Transform.translate(Vector(1, 2))
    b = Transform.translate(Vector(1.0, 2.0))
    assert a == b
    assert hash(a) == hash(b)


def test_repr():
    assert repr(Transform.identity(1)) == "Transform([[1, 0], [0, 1]])"
