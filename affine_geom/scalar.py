"""Scalar capability for affine-geom.

Coordinates are stored as numpy arrays of one of two scalar kinds:

integer — ``int64``; exact arithmetic, no square root (``norm`` refused)
real    — ``float64``; full arithmetic including ``norm``

Binary operations between the two kinds follow numpy promotion
(``int64`` with ``float64`` gives ``float64``). Integer arithmetic never
wraps: ``exact`` evaluates it on Python ints and raises ``OverflowError``
when a result leaves the int64 range.
"""

from __future__ import annotations

from typing import Any, Callable, Final, Iterable, List, Optional

import numpy as np

INT_DTYPE: Final[np.dtype] = np.dtype(np.int64)
REAL_DTYPE: Final[np.dtype] = np.dtype(np.float64)

INT64_MIN: Final[int] = int(np.iinfo(np.int64).min)
INT64_MAX: Final[int] = int(np.iinfo(np.int64).max)

# Absolute tolerance applied to the affine weight-sum check for real weights.
# 0.0 means exact equality with 1.
DEFAULT_WEIGHT_ATOL: Final[float] = 0.0


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def is_integer(dtype: Any) -> bool:
    return bool(np.issubdtype(np.dtype(dtype), np.integer))


def is_real(dtype: Any) -> bool:
    return bool(np.issubdtype(np.dtype(dtype), np.floating))


def _scalar_kind(value: Any) -> np.dtype:
    # bool is an int subclass; it is not a coordinate.
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"Booleans are not valid scalars: {value!r}")
    if isinstance(value, (int, np.integer)):
        return INT_DTYPE
    if isinstance(value, (float, np.floating)):
        return REAL_DTYPE
    raise TypeError(f"Not a real or integer scalar: {value!r}")


def is_scalar(value: Any) -> bool:
    """True for ints and floats (built-in or numpy), False for bools."""
    try:
        _scalar_kind(value)
    except TypeError:
        return False
    return True


def normalize_dtype(dtype: Any) -> np.dtype:
    """Map any numpy-understood integer/floating dtype onto int64/float64."""
    dt = np.dtype(dtype)
    if dt == np.bool_:
        raise TypeError("bool is not a scalar dtype")
    if is_integer(dt):
        return INT_DTYPE
    if is_real(dt):
        return REAL_DTYPE
    raise TypeError(f"Unsupported scalar dtype {dt}")


def resolve_dtype(values: Iterable[Any], dtype: Optional[Any] = None) -> np.dtype:
    """Pick the storage dtype for a list of components.

    Parameters
    ----------
    values : component values; every value must be an int or a float
             (built-in or numpy).
    dtype  : optional explicit dtype; integer dtypes refuse real values.

    Returns
    -------
    ``INT_DTYPE`` when every value is integral, otherwise ``REAL_DTYPE``.
    """
    kinds: List[np.dtype] = [_scalar_kind(v) for v in values]
    inferred = REAL_DTYPE if REAL_DTYPE in kinds else INT_DTYPE
    if dtype is None:
        return inferred
    explicit = normalize_dtype(dtype)
    if explicit == INT_DTYPE and inferred == REAL_DTYPE:
        raise TypeError("Real components cannot be stored with an integer dtype.")
    return explicit


def common_dtype(a: Any, b: Any) -> np.dtype:
    """Result dtype of a binary operation between two stored dtypes."""
    return normalize_dtype(np.result_type(a, b))


def to_python(value: Any) -> Any:
    """numpy scalar → built-in int / float."""
    return value.item() if isinstance(value, np.generic) else value


# ---------------------------------------------------------------------------
# Overflow-checked integer arithmetic
# ---------------------------------------------------------------------------


def fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def check_int64(result: Any) -> Any:
    """Narrow an exact integer result back to int64.

    ``result`` is an object array of Python ints or a single Python int.
    Returns an int64 array or a built-in int.

    Raises
    ------
    OverflowError : some value lies outside the int64 range.
    """
    if isinstance(result, np.ndarray):
        values = result.ravel().tolist()
    else:
        result = int(result)
        values = [result]
    for v in values:
        if not fits_int64(v):
            raise OverflowError(f"Integer result {v} does not fit in int64.")
    if isinstance(result, np.ndarray):
        return result.astype(INT_DTYPE)
    return result


def _is_integral(operand: Any) -> bool:
    if isinstance(operand, np.ndarray):
        return is_integer(operand.dtype)
    if isinstance(operand, (bool, np.bool_)):
        return False
    return isinstance(operand, (int, np.integer))


def _widen(operand: Any) -> Any:
    if isinstance(operand, np.ndarray):
        return operand.astype(object)
    return int(operand)


def exact(op: Callable[..., Any], *operands: Any) -> Any:
    """Apply a numpy kernel ``op`` without silent integer wraparound.

    When every operand is integral (int64 arrays or int scalars) the kernel
    runs on Python ints and the result is narrowed with ``check_int64``.
    Any real operand sends the call straight to ``op``.
    """
    if not all(_is_integral(o) for o in operands):
        return op(*operands)
    return check_int64(op(*(_widen(o) for o in operands)))


# ---------------------------------------------------------------------------
# Weight-sum policy
# ---------------------------------------------------------------------------


def weights_sum_to_one(weights: np.ndarray, atol: float = DEFAULT_WEIGHT_ATOL) -> bool:
    """Check that affine weights sum to the multiplicative identity.

    Integer weights are always compared exactly; ``atol`` only applies to
    real weights.
    """
    if atol < 0:
        raise ValueError(f"atol must be >= 0, got {atol}")
    if is_integer(weights.dtype):
        # Python ints: an int64 sum could wrap around to 1
        return sum(weights.tolist()) == 1
    total = weights.sum()
    if atol == 0.0:
        return bool(total == 1)
    return bool(abs(float(total) - 1.0) <= atol)
