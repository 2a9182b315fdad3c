"""
Chebyshev Differentiation and Integration Matrices
==================================================

Dense collocation operators acting on values at Chebyshev points.

Key Concepts:
-------------
    • Differentiation: D⁽ᵏ⁾ from the barycentric recursion on the kind's
      points, weights and angles, scaled by (2/(x_max - x_min))ᵏ.
    • Rectangular differentiation: n-point grid values → first derivative on
      the m-point 1st-kind grid, through the derivative of the Lagrange basis

          ℓⱼ'(y) = ℓⱼ(y) (Σₖ 1/(y - xₖ) - 1/(y - xⱼ))

    • Integration: Q = S · B · A (values → coefficients → integral
      coefficients → values), normalised to vanish at the first grid point
      and scaled by (x_max - x_min)/2.

References:
-----------
[1] Trefethen, L. N. (2000). Spectral Methods in MATLAB. SIAM.
[2] Driscoll, T. A. & Hale, N. (2016). Rectangular spectral collocation.
    IMA J. Numer. Anal. 36, 108–132.
[3] chebfun: @chebcolloc1/diffmat.m, @chebcolloc2/cumsummat.m, diffmat.m
"""

import numpy as np
from jaxtyping import Array, Float

from pdesuite._src.chebyshev.barycentric import _bary_diffmat, _barymat
from pdesuite._src.chebyshev.points import Kind, _angles, _barywts, _check_kind, _points
from pdesuite._src.chebyshev.transforms import (
    _analysis_matrix,
    _coeffs_cumsum_matrix,
    _synthesis_matrix,
)
from pdesuite._src.utils import (
    check_interval,
    check_size,
    derivative_scale,
    integral_scale,
    to_array,
)

# ============================================================================
# Internal numpy helpers (called once at construction time, not inside JIT)
# ============================================================================


def _diffmat(kind: Kind, n: int, k: int) -> np.ndarray:
    """k-th derivative matrix on the reference interval [-1, 1]."""
    if n == 1:
        return np.eye(1) if k == 0 else np.zeros((1, 1))
    return _bary_diffmat(_points(kind, n), _barywts(kind, n), k, _angles(kind, n))


def _rectdiff(kind: Kind, m: int, n: int) -> np.ndarray:
    """
    m × n first-derivative matrix from n kind-points to m 1st-kind points.

    Rows whose target coincides with a source node are copied from the
    square differentiation matrix.
    """
    if n == 1:
        return np.zeros((m, 1))
    x, w = _points(kind, n), _barywts(kind, n)
    y = _points(1, m)
    dY = y[:, None] - x[None, :]
    hit = dY == 0
    rows = hit.any(axis=1)

    D = np.zeros((m, n))
    free = ~rows
    if free.any():
        B = _barymat(y[free], x, w)
        inv = 1.0 / dY[free]
        D[free] = B * (inv.sum(axis=1, keepdims=True) - inv)
    if rows.any():
        D_square = _diffmat(kind, n, 1)
        D[rows] = D_square[hit[rows].argmax(axis=1)]
    return D


def _cumsummat(kind: Kind, n: int) -> np.ndarray:
    """
    Indefinite integration matrix on [-1, 1], zero at the first grid point.

    The (n+1)-th integral coefficient is dropped so the result stays square;
    Q is exact for polynomials of degree < n - 1.
    """
    if n == 1:
        return np.zeros((1, 1))
    S = _synthesis_matrix(kind, n)
    A = _analysis_matrix(kind, n)
    Q = S @ _coeffs_cumsum_matrix(n, truncate=True) @ A
    return Q - Q[0]


# ============================================================================
# Square differentiation matrices
# ============================================================================


def cheb_diffmat(
    n: int,
    kind: Kind = 2,
    k: int = 1,
    x_min: float = -1.0,
    x_max: float = 1.0,
    *,
    dtype=None,
) -> Float[Array, "n n"]:
    """
    k-th order Chebyshev differentiation matrix.

    Mathematical Formulation:
    -------------------------
    With f = [f(x₀), ..., f(x_{n-1})] at the kind's points,

        (D f)ᵢ ≈ f⁽ᵏ⁾(xᵢ)

    exactly whenever f is a polynomial of degree < n. Rows sum to zero.

    Parameters:
    -----------
    n : int
        Number of grid points (≥ 1).
    kind : int
        1 or 2. Default 2.
    k : int
        Derivative order (≥ 0). k = 0 gives the identity.
    x_min, x_max : float
        Physical interval. Default [-1, 1].

    Returns:
    --------
    D : Array [n, n]
    """
    _check_kind(kind)
    n = check_size(n)
    k = check_size(k, minimum=0, name="k")
    check_interval(x_min, x_max)
    D = _diffmat(kind, n, k) * derivative_scale(x_min, x_max) ** k
    return to_array(D, dtype)


def cheb1_diffmat(
    n: int, k: int = 1, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "n n"]:
    """
    Differentiation matrix on 1st-kind points.

    Example:
    --------
    >>> x = cheb1_pts(8)
    >>> D = cheb1_diffmat(8)
    >>> D @ x**3   # ≈ 3 x²
    """
    return cheb_diffmat(n, 1, k, x_min, x_max, dtype=dtype)


def cheb2_diffmat(
    n: int, k: int = 1, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "n n"]:
    """Differentiation matrix on 2nd-kind points."""
    return cheb_diffmat(n, 2, k, x_min, x_max, dtype=dtype)


# ============================================================================
# Rectangular differentiation matrices
# ============================================================================


def cheb_rectdiff(
    m: int,
    n: int,
    kind: Kind = 2,
    x_min: float = -1.0,
    x_max: float = 1.0,
    *,
    dtype=None,
) -> Float[Array, "m n"]:
    """
    Rectangular first-derivative matrix.

    Maps values on the n-point grid of the given kind to the first derivative
    of their interpolant on the m-point 1st-kind grid. With m = n - 1 this is
    the operator used by rectangular collocation, which leaves room for one
    boundary row in the assembled system.

    Parameters:
    -----------
    m : int
        Number of target (1st-kind) points.
    n : int
        Number of source points.
    kind : int
        Kind of the source grid. Default 2.
    x_min, x_max : float
        Physical interval shared by both grids.

    Returns:
    --------
    D : Array [m, n]
    """
    _check_kind(kind)
    m = check_size(m, name="m")
    n = check_size(n)
    check_interval(x_min, x_max)
    D = _rectdiff(kind, m, n) * derivative_scale(x_min, x_max)
    return to_array(D, dtype)


def cheb_rectdiff1(
    m: int, n: int, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "m n"]:
    """Rectangular derivative from an n-point 1st-kind grid to m 1st-kind points."""
    return cheb_rectdiff(m, n, 1, x_min, x_max, dtype=dtype)


def cheb_rectdiff2(
    m: int, n: int, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "m n"]:
    """Rectangular derivative from an n-point 2nd-kind grid to m 1st-kind points."""
    return cheb_rectdiff(m, n, 2, x_min, x_max, dtype=dtype)


# ============================================================================
# Integration matrices
# ============================================================================


def cheb_cumsummat(
    n: int,
    kind: Kind = 2,
    x_min: float = -1.0,
    x_max: float = 1.0,
    *,
    dtype=None,
) -> Float[Array, "n n"]:
    """
    Value-space indefinite integration matrix.

    (Q f)ᵢ ≈ ∫_{x₀}^{xᵢ} f(s) ds, so the first row of Q is exactly zero. For
    the 2nd kind x₀ = x_min; for the 1st kind x₀ is the first interior point.

    Restricted to grid functions that vanish at x₀, Q and the first-order
    differentiation matrix are mutual inverses.
    """
    _check_kind(kind)
    n = check_size(n)
    check_interval(x_min, x_max)
    Q = _cumsummat(kind, n) * integral_scale(x_min, x_max)
    return to_array(Q, dtype)


def cheb1_cumsummat(
    n: int, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "n n"]:
    """Integration matrix on 1st-kind points."""
    return cheb_cumsummat(n, 1, x_min, x_max, dtype=dtype)


def cheb2_cumsummat(
    n: int, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "n n"]:
    """
    Integration matrix on 2nd-kind points.

    Example:
    --------
    >>> x = cheb2_pts(16)
    >>> Q = cheb2_cumsummat(16)
    >>> Q @ jnp.cos(x)   # ≈ sin(x) - sin(-1)
    """
    return cheb_cumsummat(n, 2, x_min, x_max, dtype=dtype)


def cheb_coeffs_cumsummat(
    n: int, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "n n"]:
    """
    Coefficient-space indefinite integration matrix.

    Maps n Chebyshev coefficients of f to the first n coefficients of its
    integral from x_min; the highest coefficient of the exact integral is
    dropped. Use cheb_cumsum for the untruncated (n+1)-term result.
    """
    n = check_size(n)
    check_interval(x_min, x_max)
    B = _coeffs_cumsum_matrix(n, truncate=True) * integral_scale(x_min, x_max)
    return to_array(B, dtype)


def cheb_rectint(
    n: int,
    x_min: float = -1.0,
    x_max: float = 1.0,
    m: int | None = None,
    *,
    dtype=None,
) -> Float[Array, "m n"]:
    """
    Rectangular integration matrix.

    Mathematical Formulation:
    -------------------------
    Values on the n-point 2nd-kind grid are converted to coefficients,
    integrated without truncation (n + 1 coefficients) and evaluated on the
    m-point 1st-kind grid:

        R = T · B · A,   T[i, k] = Tₖ(yᵢ),  k = 0, ..., n

    so (R f)ᵢ = ∫_{x_min}^{yᵢ} f(s) ds exactly for polynomials of degree < n.
    The target grid matches cheb_rectdiff2, so integrated and differentiated
    terms of a rectangular collocation system land on the same m rows.

    Parameters:
    -----------
    n : int
        Number of source (2nd-kind) points.
    x_min, x_max : float
        Physical interval.
    m : int, optional
        Number of target (1st-kind) points. Defaults to n.

    Returns:
    --------
    R : Array [m, n]
    """
    n = check_size(n)
    m = n if m is None else check_size(m, name="m")
    check_interval(x_min, x_max)
    T = np.cos(np.outer(_angles(1, m), np.arange(n + 1)))
    R = T @ _coeffs_cumsum_matrix(n) @ _analysis_matrix(2, n)
    return to_array(R * integral_scale(x_min, x_max), dtype)
