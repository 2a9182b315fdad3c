"""
Tests for Kreiss–Oliger dissipation weights.
"""

import jax.numpy as jnp
import pytest

from pdesuite._src.finite_difference.dissipation import dissipation_order, dissipation_wts


@pytest.mark.parametrize("acc_order, expected", [(2, 4), (4, 6), (6, 8)])
def test_dissipation_order(acc_order, expected):
    """Accuracy order 2r - 2 needs dissipation of order 2r."""
    assert dissipation_order(acc_order) == expected


@pytest.mark.parametrize("acc_order", [0, 3, -2, 2.5])
def test_dissipation_order_rejects_odd_or_small(acc_order):
    """Only even orders ≥ 2 are accepted."""
    with pytest.raises(ValueError):
        dissipation_order(acc_order)


def test_dissipation_wts_second_order():
    """Order 2: [1, -2, 1] / 4."""
    assert jnp.allclose(dissipation_wts(2), jnp.array([0.25, -0.5, 0.25]))


def test_dissipation_wts_fourth_order():
    """Order 4: -[1, -4, 6, -4, 1] / 16."""
    expected = -jnp.array([1.0, -4.0, 6.0, -4.0, 1.0]) / 16
    assert jnp.allclose(dissipation_wts(4), expected)


@pytest.mark.parametrize("diss_order", [2, 4, 6, 8])
def test_dissipation_wts_properties(diss_order):
    """Weights are symmetric, sum to zero and damp the grid-scale mode."""
    w = dissipation_wts(diss_order)
    assert w.shape == (diss_order + 1,)
    assert jnp.allclose(w, w[::-1])
    assert jnp.isclose(w.sum(), 0.0, atol=1e-15)
    # u = (-1)^i seen from the stencil centre
    r = diss_order // 2
    u = (-1.0) ** (jnp.arange(diss_order + 1) - r)
    assert jnp.isclose(w @ u, -1.0), f"w @ u = {w @ u}"


def test_dissipation_wts_invalid_order():
    """Odd dissipation orders raise ValueError."""
    with pytest.raises(ValueError):
        dissipation_wts(3)
