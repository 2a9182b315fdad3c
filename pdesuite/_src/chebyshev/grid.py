"""
Chebyshev Grid
==============

A 1D Chebyshev collocation grid bundling the operators built in this
package: points, barycentric and quadrature weights, the first-derivative
matrix and the value ↔ coefficient transforms.

Key Concepts:
-------------
    • 1st kind (Gauss) nodes exclude the endpoints; 2nd kind
      (Gauss-Lobatto) nodes include them (suitable for Dirichlet BCs).
    • Nodes are mapped from [-1, 1] to [x_min, x_max] via
      x = (x_max + x_min)/2 + (x_max - x_min)/2 · ξ, so d/dx = 2/(x_max - x_min) d/dξ.
    • Everything is precomputed in __init__; the methods are pure JAX and can
      be used inside jit.

References:
-----------
[1] Trefethen, L. N. (2000). Spectral Methods in MATLAB. SIAM.
[2] Boyd, J. P. (2001). Chebyshev and Fourier Spectral Methods. Dover.
"""

import equinox as eqx
import jax.numpy as jnp
from jaxtyping import Array, Float
from loguru import logger

from pdesuite._src.chebyshev.barycentric import bary
from pdesuite._src.chebyshev.matrices import cheb_diffmat
from pdesuite._src.chebyshev.points import Kind, _check_kind, cheb_barywts, cheb_pts
from pdesuite._src.chebyshev.transforms import (
    Cheb1Coeffs2ValsOp,
    Cheb1Vals2CoeffsOp,
    Cheb2Coeffs2ValsOp,
    Cheb2Vals2CoeffsOp,
    cheb_quadwts,
)
from pdesuite._src.utils import as_float_array, check_interval, check_length, check_size


class ChebyshevGrid1D(eqx.Module):
    """
    1D Chebyshev grid on [x_min, x_max].

    Attributes:
    -----------
        n : int
            Number of grid points.
        kind : int
            1 (Gauss) or 2 (Gauss-Lobatto).
        x_min, x_max : float
            Physical domain.

    Example:
    --------
    >>> grid = ChebyshevGrid1D(32, kind=2, x_min=0.0, x_max=jnp.pi)
    >>> du = grid.D @ jnp.sin(grid.x)       # ≈ cos(x)
    >>> grid.integrate(jnp.sin(grid.x))      # ≈ 2
    """

    n: int
    kind: int
    x_min: float
    x_max: float
    _x: Array
    _barywts: Array
    _quadwts: Array
    _D: Array  # first-derivative matrix on [x_min, x_max], shape (n, n)
    _to_coeffs: eqx.Module
    _to_vals: eqx.Module

    def __init__(
        self,
        n: int,
        kind: Kind = 2,
        x_min: float = -1.0,
        x_max: float = 1.0,
        *,
        dtype=None,
    ):
        """
        Parameters:
        -----------
        n : int
            Number of grid points (≥ 1).
        kind : int
            1 or 2. Default 2.
        x_min, x_max : float
            Domain bounds. Default [-1, 1].
        dtype : optional
            Float type of the precomputed arrays.
        """
        _check_kind(kind)
        self.n = check_size(n)
        self.kind = kind
        self.x_min = float(x_min)
        self.x_max = float(x_max)
        check_interval(x_min, x_max)

        self._x = cheb_pts(n, kind, x_min, x_max, dtype=dtype)
        self._barywts = cheb_barywts(n, kind, dtype=dtype)
        self._quadwts = cheb_quadwts(n, kind, x_min, x_max, dtype=dtype)
        self._D = cheb_diffmat(n, kind, 1, x_min, x_max, dtype=dtype)
        if kind == 1:
            self._to_coeffs = Cheb1Vals2CoeffsOp(n, dtype=dtype)
            self._to_vals = Cheb1Coeffs2ValsOp(n, dtype=dtype)
        else:
            self._to_coeffs = Cheb2Vals2CoeffsOp(n, dtype=dtype)
            self._to_vals = Cheb2Coeffs2ValsOp(n, dtype=dtype)
        logger.debug(f"ChebyshevGrid1D: n={n}, kind={kind}, domain=[{x_min}, {x_max}]")

    # ------------------------------------------------------------------
    # Factory class methods
    # ------------------------------------------------------------------

    @classmethod
    def from_N_L(cls, n: int, L: float, kind: Kind = 2, *, dtype=None) -> "ChebyshevGrid1D":
        """
        Initialize on the symmetric domain [-L, L].

        Example:
        --------
        >>> grid = ChebyshevGrid1D.from_N_L(n=17, L=2.0)
        """
        return cls(n, kind, -L, L, dtype=dtype)

    @classmethod
    def from_N_dx(
        cls, n: int, dx: float, kind: Kind = 2, x_min: float = 0.0, *, dtype=None
    ) -> "ChebyshevGrid1D":
        """
        Initialize from the number of points and the average spacing.

        Computes: x_max = x_min + (n - 1) * dx
        """
        return cls(n, kind, x_min, x_min + (n - 1) * dx, dtype=dtype)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def x(self) -> Float[Array, "n"]:
        """Physical grid nodes, increasing from x_min to x_max."""
        return self._x

    @property
    def barywts(self) -> Float[Array, "n"]:
        """Barycentric weights of the nodes."""
        return self._barywts

    @property
    def quadwts(self) -> Float[Array, "n"]:
        """Quadrature weights on [x_min, x_max] (Fejér for kind 1, Clenshaw–Curtis for kind 2)."""
        return self._quadwts

    @property
    def D(self) -> Float[Array, "n n"]:
        """
        Chebyshev differentiation matrix on [x_min, x_max].

        Satisfies: (D @ u)ᵢ ≈ du/dx at xᵢ (exact for polynomials of degree < n).

        Rows sum to zero: D @ ones = 0 (derivative of constant = 0).
        """
        return self._D

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def transform(self, u: Array, inverse: bool = False) -> Array:
        """
        Chebyshev spectral transform (forward or inverse) along the last axis.

        Forward (physical → spectral): coefficients aₖ with u(x) = Σ aₖ Tₖ(ξ(x)).
        Inverse (spectral → physical): values at the grid nodes.

        Parameters:
        -----------
        u : Array [..., n]
            Physical-space values (forward) or spectral coefficients (inverse).
        inverse : bool
            If True, compute physical values from spectral coefficients.
        """
        if inverse:
            return self._to_vals(u)
        return self._to_coeffs(u)

    def interpolate(self, u: Array, x0) -> Array:
        """Evaluate the interpolant of the nodal values u at physical point(s) x0."""
        return bary(self._barywts, self._x, u, x0)

    def integrate(self, u: Array) -> Array:
        """∫_{x_min}^{x_max} u dx by interpolatory quadrature, along the last axis."""
        u = as_float_array(u)
        check_length(u, self.n, "u")
        return u @ self._quadwts

    # ------------------------------------------------------------------
    # Consistency check
    # ------------------------------------------------------------------

    def check_consistency(self) -> bool:
        """
        Verify that n ≥ 1 and x_min < x_max.

        Returns:
        --------
        bool
            True if consistent, raises ValueError otherwise.
        """
        errors = []
        if self.n < 1:
            errors.append(f"n must be ≥ 1, got n={self.n}")
        if not self.x_max > self.x_min:
            errors.append(f"x_max must be > x_min, got [{self.x_min}, {self.x_max}]")
        if errors:
            raise ValueError("\n".join(errors))
        return True
