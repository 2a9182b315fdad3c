"""
Tests for Fornberg finite-difference weights and the uniform grid helper.
"""

import jax.numpy as jnp
import numpy as np
import pytest

from pdesuite._src.exceptions import InsufficientNodesError, PDESuiteError
from pdesuite._src.finite_difference.fornberg import fdm_grid, fornberg_calculate_wts

# ============================================================================
# Standard weights
# ============================================================================


def test_central_first_derivative():
    """Three-point centred stencil: [-1/2, 0, 1/2]."""
    c = fornberg_calculate_wts(1, 0.0, [-1.0, 0.0, 1.0])
    assert jnp.allclose(c, jnp.array([-0.5, 0.0, 0.5]), atol=1e-15)


def test_one_sided_second_derivative():
    """Forward stencil on [0, 1, 2, 3]: [2, -5, 4, -1]."""
    c = fornberg_calculate_wts(2, 0.0, [0.0, 1.0, 2.0, 3.0])
    assert jnp.allclose(c, jnp.array([2.0, -5.0, 4.0, -1.0]), atol=1e-13)


@pytest.mark.parametrize("order", [1, 2, 3])
def test_weights_sum_to_zero(order):
    """Derivative weights annihilate constants."""
    x = jnp.linspace(-0.3, 0.4, 7) ** 3
    c = fornberg_calculate_wts(order, 0.01, x)
    # clustered nodes give large weights, so compare against their size
    assert abs(float(c.sum())) < 1e-13 * float(jnp.abs(c).max()), f"sum = {c.sum()}"


def test_nonuniform_stencil_exact_for_polynomials():
    """Second derivative of x⁴ at 0.3 on five uneven nodes is 12 · 0.09."""
    x = jnp.array([0.0, 0.1, 0.35, 0.6, 1.0])
    c = fornberg_calculate_wts(2, 0.3, x)
    assert jnp.isclose(c @ x**4, 1.08, atol=1e-10), f"c @ x⁴ = {c @ x**4}"


def test_order_zero_is_interpolation():
    """Order 0 gives Lagrange interpolation weights."""
    x = np.array([0.0, 1.0, 3.0])
    c = fornberg_calculate_wts(0, 2.0, x)
    assert jnp.isclose(c.sum(), 1.0, atol=1e-14)
    assert jnp.isclose(c @ x**2, 4.0, atol=1e-13)
    assert jnp.allclose(fornberg_calculate_wts(0, 1.0, x), jnp.array([0.0, 1.0, 0.0]))


def test_weights_dtype():
    """An explicit dtype is honoured."""
    c = fornberg_calculate_wts(1, 0.0, [-1.0, 0.0, 1.0], dtype=jnp.float32)
    assert c.dtype == jnp.float32


def test_insufficient_nodes():
    """N ≤ order raises InsufficientNodesError, also a ValueError."""
    with pytest.raises(InsufficientNodesError):
        fornberg_calculate_wts(3, 0.0, [-1.0, 0.0, 1.0])
    with pytest.raises(ValueError):
        fornberg_calculate_wts(1, 0.0, [0.0])
    with pytest.raises(PDESuiteError):
        fornberg_calculate_wts(-1, 0.0, [0.0, 1.0])


def test_repeated_nodes_rejected():
    """A stencil with a repeated node has no weights."""
    with pytest.raises(ValueError, match="distinct"):
        fornberg_calculate_wts(1, 0.0, [-1.0, 0.0, 0.0, 1.0])
    with pytest.raises(ValueError, match="distinct"):
        fornberg_calculate_wts(1, 0.0, [-1.0, 1.0, -1.0], dfdx=True)


# ============================================================================
# Hermite weights
# ============================================================================


def test_hermite_third_derivative():
    """f⁽³⁾ of x⁵ at 0.2 from values and slopes at [-1, 0, 1] is 60 · 0.04."""
    x = jnp.array([-1.0, 0.0, 1.0])
    d, e = fornberg_calculate_wts(3, 0.2, x, dfdx=True)
    assert d.shape == e.shape == (3,)
    approx = d @ x**5 + e @ (5 * x**4)
    assert jnp.isclose(approx, 2.4, atol=1e-11), f"approximation = {approx}"


def test_hermite_first_derivative_at_node():
    """At a node, the Hermite first derivative is the given slope."""
    x = jnp.array([-1.0, 0.0, 1.0])
    d, e = fornberg_calculate_wts(1, 0.0, x, dfdx=True)
    assert jnp.allclose(d, 0.0, atol=1e-14)
    assert jnp.allclose(e, jnp.array([0.0, 1.0, 0.0]), atol=1e-14)


def test_hermite_insufficient_nodes():
    """Hermite weights need N > order/2 + 1."""
    with pytest.raises(InsufficientNodesError):
        fornberg_calculate_wts(4, 0.0, [-1.0, 0.0, 1.0], dfdx=True)


# ============================================================================
# fdm_grid
# ============================================================================


def test_fdm_grid_exact_spacing():
    """dx divides the interval: 11 points with spacing 0.1."""
    x = fdm_grid(0.0, 1.0, 0.1)
    assert x.shape == (11,)
    assert jnp.allclose(jnp.diff(x), 0.1, atol=1e-14)
    assert x[0] == 0.0 and x[-1] == 1.0


def test_fdm_grid_rounds_point_count():
    """dx = 0.3 on [0, 1] rounds to 4 points ending exactly at x_max."""
    x = fdm_grid(0.0, 1.0, 0.3)
    assert x.shape == (4,)
    assert x[-1] == 1.0


def test_fdm_grid_invalid_arguments():
    """Non-positive dx and reversed intervals raise ValueError."""
    with pytest.raises(ValueError):
        fdm_grid(0.0, 1.0, 0.0)
    with pytest.raises(ValueError):
        fdm_grid(1.0, 0.0, 0.1)
