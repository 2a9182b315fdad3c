"""
Tests for ChebyshevGrid1D.
"""

import jax
import jax.numpy as jnp
import pytest

from pdesuite._src.chebyshev.grid import ChebyshevGrid1D
from pdesuite._src.exceptions import DimensionMismatchError, InvalidSizeError

# ============================================================================
# Nodes
# ============================================================================


def test_chebyshev_grid_1d_gauss_lobatto_nodes():
    """Kind 2: n nodes including the endpoints ±L."""
    n, L = 9, 1.0
    grid = ChebyshevGrid1D.from_N_L(n=n, L=L)
    x = grid.x
    assert x.shape == (n,)
    assert jnp.isclose(x[0], -L, atol=1e-14), f"x[0]={x[0]} should be {-L}"
    assert jnp.isclose(x[-1], L, atol=1e-14), f"x[-1]={x[-1]} should be {L}"


def test_chebyshev_grid_1d_gauss_nodes():
    """Kind 1: n nodes, excludes endpoints."""
    n, L = 8, 1.0
    grid = ChebyshevGrid1D.from_N_L(n=n, L=L, kind=1)
    x = grid.x
    assert x.shape == (n,)
    assert not jnp.any(jnp.isclose(jnp.abs(x), L, atol=1e-8))


def test_chebyshev_grid_1d_node_ordering():
    """Nodes increase from x_min to x_max."""
    grid = ChebyshevGrid1D(17, x_min=-1.0, x_max=4.0)
    assert jnp.all(jnp.diff(grid.x) > 0), "Nodes should be monotonically increasing"


def test_chebyshev_grid_1d_node_symmetry():
    """Nodes are symmetric about the midpoint of the domain."""
    grid = ChebyshevGrid1D(11, x_min=1.0, x_max=6.0)
    x = grid.x
    assert jnp.allclose(x - 3.5, -(x[::-1] - 3.5), atol=1e-14)


def test_chebyshev_grid_1d_from_N_dx():
    """x_max = x_min + (n - 1) dx."""
    grid = ChebyshevGrid1D.from_N_dx(n=11, dx=0.5, x_min=2.0)
    assert grid.x_max == 7.0
    assert jnp.isclose(grid.x[0], 2.0, atol=1e-14)
    assert jnp.isclose(grid.x[-1], 7.0, atol=1e-14)


def test_chebyshev_grid_1d_invalid_arguments():
    """Bad sizes, kinds and intervals raise."""
    with pytest.raises(InvalidSizeError):
        ChebyshevGrid1D(0)
    with pytest.raises(ValueError):
        ChebyshevGrid1D(8, kind=0)
    with pytest.raises(ValueError):
        ChebyshevGrid1D(8, x_min=1.0, x_max=-1.0)


def test_chebyshev_grid_1d_check_consistency():
    """A constructed grid is consistent."""
    assert ChebyshevGrid1D(6, kind=1, x_min=0.0, x_max=1.0).check_consistency()


# ============================================================================
# Differentiation
# ============================================================================


@pytest.mark.parametrize("kind", [1, 2])
def test_chebyshev_grid_1d_D_shape_and_row_sum(kind):
    """D is n × n and annihilates constants."""
    grid = ChebyshevGrid1D(13, kind=kind)
    assert grid.D.shape == (13, 13)
    assert jnp.allclose(grid.D.sum(axis=1), 0.0, atol=1e-10)


def test_chebyshev_grid_1d_derivative_of_sin():
    """D sin = cos on [0, π]."""
    grid = ChebyshevGrid1D(24, x_min=0.0, x_max=jnp.pi)
    du = grid.D @ jnp.sin(grid.x)
    assert jnp.allclose(du, jnp.cos(grid.x), atol=1e-10), (
        f"max error = {jnp.abs(du - jnp.cos(grid.x)).max()}"
    )


# ============================================================================
# Transforms, interpolation and quadrature
# ============================================================================


@pytest.mark.parametrize("kind", [1, 2])
@pytest.mark.parametrize("n", [5, 80])
def test_chebyshev_grid_1d_transform_roundtrip(kind, n):
    """transform then inverse transform recovers the values."""
    grid = ChebyshevGrid1D(n, kind=kind, x_min=-2.0, x_max=3.0)
    u = jnp.exp(-grid.x**2)
    u_rec = grid.transform(grid.transform(u), inverse=True)
    assert jnp.allclose(u, u_rec, atol=1e-12), f"max error = {jnp.abs(u - u_rec).max()}"


def test_chebyshev_grid_1d_transform_of_linear_function():
    """On [0, 2], u = x is 1 + T₁(ξ)."""
    grid = ChebyshevGrid1D(6, x_min=0.0, x_max=2.0)
    c = grid.transform(grid.x)
    assert jnp.allclose(c, jnp.array([1.0, 1.0, 0.0, 0.0, 0.0, 0.0]), atol=1e-14)


def test_chebyshev_grid_1d_transform_is_jittable():
    """Grid methods can be traced."""
    grid = ChebyshevGrid1D(16)
    u = jnp.cos(grid.x)
    c = jax.jit(lambda u: grid.transform(u))(u)
    assert jnp.allclose(c, grid.transform(u), atol=1e-14)


def test_chebyshev_grid_1d_interpolate():
    """The interpolant matches a smooth function off the grid."""
    grid = ChebyshevGrid1D(24, kind=1, x_min=0.0, x_max=2.0)
    x0 = jnp.array([0.05, 0.7, 1.33, 1.99])
    p = grid.interpolate(jnp.exp(grid.x), x0)
    assert jnp.allclose(p, jnp.exp(x0), atol=1e-12)


@pytest.mark.parametrize("kind", [1, 2])
def test_chebyshev_grid_1d_integrate(kind):
    """∫₀^π sin x dx = 2."""
    grid = ChebyshevGrid1D(20, kind=kind, x_min=0.0, x_max=jnp.pi)
    assert jnp.isclose(grid.integrate(jnp.sin(grid.x)), 2.0, atol=1e-12)


def test_chebyshev_grid_1d_integrate_length_mismatch():
    """Wrong number of values raises DimensionMismatchError."""
    grid = ChebyshevGrid1D(8)
    with pytest.raises(DimensionMismatchError):
        grid.integrate(jnp.ones(7))
