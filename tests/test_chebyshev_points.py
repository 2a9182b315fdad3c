"""
Tests for Chebyshev points, angles and barycentric weights.
"""

import jax.numpy as jnp
import pytest

from pdesuite._src.chebyshev.barycentric import bary_weights
from pdesuite._src.chebyshev.points import (
    cheb1_angles,
    cheb1_barywts,
    cheb1_pts,
    cheb2_angles,
    cheb2_barywts,
    cheb2_pts,
    cheb_pts,
)
from pdesuite._src.exceptions import InvalidSizeError, PDESuiteError

# ============================================================================
# Points
# ============================================================================


def test_cheb1_pts_exclude_endpoints():
    """1st kind: 5 strictly increasing points inside (-1, 1)."""
    x = cheb1_pts(5)
    assert x.shape == (5,)
    assert jnp.all(jnp.diff(x) > 0), "Nodes should be strictly increasing"
    assert jnp.all(jnp.abs(x) < 1.0)


def test_cheb2_pts_include_endpoints():
    """2nd kind: 5 strictly increasing points including -1 and 1."""
    x = cheb2_pts(5)
    assert x.shape == (5,)
    assert jnp.all(jnp.diff(x) > 0), "Nodes should be strictly increasing"
    assert x[0] == -1.0 and x[-1] == 1.0, f"endpoints are {x[0]}, {x[-1]}"


@pytest.mark.parametrize("n", [2, 7, 10, 33])
def test_cheb2_pts_match_cosine_formula(n):
    """xₖ = -cos(kπ/(n-1))."""
    k = jnp.arange(n)
    expected = -jnp.cos(k * jnp.pi / (n - 1))
    assert jnp.allclose(cheb2_pts(n), expected, atol=1e-14)


@pytest.mark.parametrize("n", [1, 4, 9, 32])
def test_cheb1_pts_match_cosine_formula(n):
    """xₖ = -cos((2k+1)π/(2n))."""
    k = jnp.arange(n)
    expected = -jnp.cos((2 * k + 1) * jnp.pi / (2 * n))
    assert jnp.allclose(cheb1_pts(n), expected, atol=1e-14)


@pytest.mark.parametrize("kind", [1, 2])
def test_points_are_antisymmetric(kind):
    """x[j] = -x[n-1-j] exactly, from the sine form."""
    x = cheb_pts(12, kind)
    assert jnp.all(x == -x[::-1])


def test_points_mapped_interval():
    """Mapped 2nd-kind points span [x_min, x_max]."""
    for x_min, x_max in [(0.0, 1.0), (-3.0, 5.0), (2.0, 2.5)]:
        x = cheb2_pts(9, x_min, x_max)
        assert jnp.isclose(x[0], x_min, atol=1e-14)
        assert jnp.isclose(x[-1], x_max, atol=1e-14)
        assert jnp.all(jnp.diff(x) > 0)


def test_points_single_point_is_midpoint():
    """n = 1 returns the midpoint of the interval for both kinds."""
    assert jnp.allclose(cheb1_pts(1, 0.0, 2.0), jnp.array([1.0]))
    assert jnp.allclose(cheb2_pts(1, 0.0, 2.0), jnp.array([1.0]))


def test_points_dtype_float32():
    """An explicit dtype is honoured."""
    x = cheb2_pts(8, dtype=jnp.float32)
    assert x.dtype == jnp.float32


def test_points_invalid_size():
    """n < 1 is an InvalidSizeError (also a ValueError)."""
    with pytest.raises(InvalidSizeError):
        cheb1_pts(0)
    with pytest.raises(ValueError):
        cheb2_pts(-3)
    with pytest.raises(PDESuiteError):
        cheb2_pts(2.5)


def test_points_invalid_interval_and_kind():
    """Reversed interval and unknown kind raise ValueError."""
    with pytest.raises(ValueError):
        cheb2_pts(5, 1.0, -1.0)
    with pytest.raises(ValueError):
        cheb_pts(5, kind=3)


# ============================================================================
# Angles
# ============================================================================


def test_cheb1_angles_values():
    """cheb1_angles(2) = [3π/4, π/4]."""
    assert jnp.allclose(cheb1_angles(2), jnp.array([3 * jnp.pi / 4, jnp.pi / 4]))


@pytest.mark.parametrize("n", [2, 5, 16])
def test_angles_map_to_points(n):
    """cos(θₖ) gives the increasing points of the same kind."""
    assert jnp.allclose(jnp.cos(cheb1_angles(n)), cheb1_pts(n), atol=1e-14)
    assert jnp.allclose(jnp.cos(cheb2_angles(n)), cheb2_pts(n), atol=1e-14)


def test_cheb2_angles_needs_two_points():
    """2nd-kind angles need two distinct endpoints."""
    with pytest.raises(InvalidSizeError):
        cheb2_angles(1)


# ============================================================================
# Barycentric weights
# ============================================================================


def test_cheb2_barywts_values():
    """±1 alternating, halved ends, last weight +1/2."""
    assert jnp.allclose(cheb2_barywts(5), jnp.array([0.5, -1.0, 1.0, -1.0, 0.5]))
    assert jnp.allclose(cheb2_barywts(4), jnp.array([-0.5, 1.0, -1.0, 0.5]))


def test_cheb1_barywts_values():
    """|wⱼ| = sin(θⱼ), alternating in sign, last weight positive."""
    n = 7
    w = cheb1_barywts(n)
    assert jnp.allclose(jnp.abs(w), jnp.sin(cheb1_angles(n)), atol=1e-15)
    assert w[-1] > 0
    assert jnp.all(w[1:] * w[:-1] < 0), "Weights should alternate in sign"


def test_barywts_single_point():
    """n = 1 gives the single weight 1."""
    assert jnp.allclose(cheb1_barywts(1), jnp.array([1.0]))
    assert jnp.allclose(cheb2_barywts(1), jnp.array([1.0]))


@pytest.mark.parametrize("n", [3, 9, 20])
def test_cheb2_barywts_match_general_weights(n):
    """Closed-form weights agree with the general product formula."""
    w_general = bary_weights(cheb2_pts(n))
    assert jnp.allclose(w_general, cheb2_barywts(n), atol=1e-12), (
        f"max error = {jnp.abs(w_general - cheb2_barywts(n)).max()}"
    )
