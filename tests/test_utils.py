"""
Tests for the shared validation helpers and the public namespace.
"""

import jax.numpy as jnp
import pytest

import pdesuite
from pdesuite._src.exceptions import (
    DimensionMismatchError,
    InsufficientNodesError,
    InvalidSizeError,
    PDESuiteError,
)
from pdesuite._src.utils import (
    as_float_array,
    check_interval,
    check_length,
    check_size,
    map_to_interval,
    resolve_dtype,
)


def test_error_taxonomy():
    """Every library error is a PDESuiteError and a ValueError."""
    for err in [InvalidSizeError, DimensionMismatchError, InsufficientNodesError]:
        assert issubclass(err, PDESuiteError)
        assert issubclass(err, ValueError)


def test_check_size():
    """Integers at or above the minimum pass through as python ints."""
    assert check_size(4.0) == 4
    assert check_size(0, minimum=0) == 0
    with pytest.raises(InvalidSizeError):
        check_size(0)
    with pytest.raises(InvalidSizeError):
        check_size(1.5)


def test_check_length():
    """The last axis is compared; scalars never match."""
    check_length(jnp.ones((2, 5)), 5)
    with pytest.raises(DimensionMismatchError):
        check_length(jnp.ones((5, 2)), 5)
    with pytest.raises(DimensionMismatchError):
        check_length(jnp.asarray(1.0), 1)


def test_check_interval():
    """Empty or reversed intervals are rejected."""
    check_interval(-1.0, 1.0)
    with pytest.raises(ValueError):
        check_interval(0.0, 0.0)


def test_map_to_interval():
    """-1 ↦ x_min, 1 ↦ x_max."""
    assert jnp.allclose(map_to_interval(jnp.array([-1.0, 0.0, 1.0]), 2.0, 6.0), jnp.array([2.0, 4.0, 6.0]))


def test_dtype_resolution():
    """None is double precision in x64 mode; integers are promoted."""
    assert resolve_dtype(None) == jnp.float64
    assert resolve_dtype(jnp.float32) == jnp.float32
    assert as_float_array([1, 2, 3]).dtype == jnp.float64


def test_public_namespace():
    """Everything in __all__ is importable from the top-level package."""
    for name in pdesuite.__all__:
        assert hasattr(pdesuite, name), f"pdesuite.{name} missing"
