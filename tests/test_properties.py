"""Property-based tests for the point/vector algebra.

Integer components keep every law exact; magnitudes are bounded so 3D cross
and dot products stay well inside int64.
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from affine_geom import Point, Vector, affine_combination

coords = st.integers(min_value=-10_000, max_value=10_000)
dims = st.integers(min_value=1, max_value=6)


def vectors(n: int) -> st.SearchStrategy[Vector]:
    return st.lists(coords, min_size=n, max_size=n).map(lambda c: Vector(*c))


def points(n: int) -> st.SearchStrategy[Point]:
    return st.lists(coords, min_size=n, max_size=n).map(lambda c: Point(*c))


vector_pairs = dims.flatmap(lambda n: st.tuples(vectors(n), vectors(n)))
point_pairs = dims.flatmap(lambda n: st.tuples(points(n), points(n)))
point_vector_vector = dims.flatmap(
    lambda n: st.tuples(points(n), vectors(n), vectors(n))
)


# ---------------------------------------------------------------------------
# Vector laws
# ---------------------------------------------------------------------------


@given(vector_pairs)
def test_add_negated_is_sub(pair) -> None:
    a, b = pair
    zero = Vector.zero(a.dim)
    assert a + (zero - b) == a - b


@given(dims.flatmap(vectors))
def test_add_inverse_is_zero(a) -> None:
    assert (a + (-a)).is_zero()
    assert a + (-a) == Vector.zero(a.dim)


@given(vector_pairs)
def test_addition_commutes(pair) -> None:
    a, b = pair
    assert a + b == b + a


# ---------------------------------------------------------------------------
# Point laws
# ---------------------------------------------------------------------------


@given(point_pairs)
def test_difference_antisymmetric(pair) -> None:
    p, q = pair
    assert p - q == -(q - p)


@given(dims.flatmap(points))
def test_zero_displacement_round_trip(p) -> None:
    assert p + (p - p) == p
    assert (p - p).is_zero()


@given(point_pairs)
def test_difference_then_translate(pair) -> None:
    p, q = pair
    assert q + (p - q) == p


@given(point_vector_vector)
def test_translation_associative(triple) -> None:
    p, v, w = triple
    assert (p + v) + w == p + (v + w)


@given(dims.flatmap(points))
def test_single_point_combination(p) -> None:
    assert affine_combination([p], [1]) == p


@given(point_pairs, st.integers(min_value=-5, max_value=5))
def test_integer_combination_is_lerp(pair, k) -> None:
    p, q = pair
    assert affine_combination([p, q], [k, 1 - k]) == q + (p - q) * k


# ---------------------------------------------------------------------------
# 3D cross product
# ---------------------------------------------------------------------------


@given(vectors(3), vectors(3))
def test_cross_orthogonal(a, b) -> None:
    c = a.cross(b)
    assert c.dot(a) == 0
    assert c.dot(b) == 0


@given(vectors(3), vectors(3))
def test_cross_anti_commutative(a, b) -> None:
    assert a.cross(b) == -b.cross(a)


@given(vectors(3))
def test_cross_self_is_zero(a) -> None:
    assert a.cross(a).is_zero()
