"""
Barycentric Interpolation and Differentiation
=============================================

Key Concepts:
-------------
    • Second (true) barycentric formula:

          p(x₀) = Σⱼ (wⱼ fⱼ)/(x₀ - xⱼ)  /  Σⱼ wⱼ/(x₀ - xⱼ)

      stable for any x₀ and independent of a common scaling of w.
    • Differentiation matrix entries for i ≠ j:

          D⁽¹⁾ᵢⱼ = (wⱼ/wᵢ) / (xᵢ - xⱼ)
          D⁽ᵏ⁾ᵢⱼ = k/(xᵢ - xⱼ) · ((wⱼ/wᵢ) D⁽ᵏ⁻¹⁾ᵢᵢ - D⁽ᵏ⁻¹⁾ᵢⱼ)

      and the diagonal is always the negative row sum, so D·1 = 0 exactly.

References:
-----------
[1] Berrut, J.-P. & Trefethen, L. N. (2004). Barycentric Lagrange
    interpolation. SIAM Review 46, 501–517.
[2] Welfert, B. D. (1997). Generation of pseudospectral differentiation
    matrices I. SIAM J. Numer. Anal. 34, 1640–1657.
[3] chebfun: @chebtech2/bary.m, barymat.m, @chebcolloc/baryDiffMat.m
"""

import jax.numpy as jnp
import numpy as np
from jaxtyping import Array, Float

from pdesuite._src.exceptions import DimensionMismatchError, InvalidSizeError
from pdesuite._src.utils import as_float_array, check_size, to_array

# ============================================================================
# Internal numpy helpers (called once at construction time, not inside JIT)
# ============================================================================


def _negative_sum_diagonal(D: np.ndarray) -> None:
    """Overwrite the diagonal in place with the negative off-diagonal row sum."""
    np.fill_diagonal(D, 0.0)
    np.fill_diagonal(D, -D.sum(axis=1))


def _bary_weights(x: np.ndarray) -> np.ndarray:
    """
    Barycentric weights wⱼ = 1 / Πₖ≠ⱼ (xⱼ - xₖ) for arbitrary distinct nodes.

    Differences are scaled by the capacity C = (max x - min x)/4 of the
    interval and multiplied as a sum of logarithms, so the products neither
    overflow nor underflow for large n. The result is normalised to
    max |wⱼ| = 1.
    """
    n = x.shape[0]
    if n == 1:
        return np.ones(1)
    C = (x.max() - x.min()) / 4.0
    V = C * (x[None, :] - x[:, None])  # V[i, j] = C (xⱼ - xᵢ)
    np.fill_diagonal(V, 1.0)
    sign = np.prod(np.sign(V), axis=0)
    w = sign / np.exp(np.sum(np.log(np.abs(V)), axis=0))
    return w / np.max(np.abs(w))


def _barymat(y: np.ndarray, x: np.ndarray, w: np.ndarray) -> np.ndarray:
    """
    Interpolation matrix B[i, j] = ℓⱼ(yᵢ) from nodes x to targets y.

    Rows whose target coincides with a node are unit vectors.
    """
    dX = y[:, None] - x[None, :]
    hit = dX == 0
    rows = hit.any(axis=1)
    with np.errstate(divide="ignore", invalid="ignore"):
        B = w[None, :] / dX
    B[rows] = 0.0
    B[~rows] /= B[~rows].sum(axis=1, keepdims=True)
    B[rows] = hit[rows].astype(B.dtype)
    return B


def _bary_diffmat(
    x: np.ndarray, w: np.ndarray, k: int = 1, t: np.ndarray | None = None
) -> np.ndarray:
    """
    k-th order barycentric differentiation matrix.

    When the angles t (x = cos t) are supplied, node differences are formed by

        xᵢ - xⱼ = 2 sin((tᵢ + tⱼ)/2) sin((tⱼ - tᵢ)/2)

    and the lower half of the difference matrix is copied from the upper half
    by the point symmetry x_{N-1-i} = -xᵢ, which avoids cancellation in
    xᵢ - xⱼ for nearby Chebyshev points.
    """
    N = x.shape[0]
    if k == 0:
        return np.eye(N)
    if N == 1:
        return np.zeros((1, 1))

    if t is None:
        Dx = x[:, None] - x[None, :]
    else:
        Dx = 2.0 * np.sin((t[:, None] + t[None, :]) / 2) * np.sin((t[None, :] - t[:, None]) / 2)
        top = Dx[: (N + 1) // 2]
        Dx = np.vstack([Dx[: N // 2], -top[::-1, ::-1]])

    np.fill_diagonal(Dx, 1.0)
    Dxi = 1.0 / Dx  # Dxi[i, j] = 1/(xᵢ - xⱼ), 1 on the diagonal
    Dw = w[None, :] / w[:, None]  # Dw[i, j] = wⱼ/wᵢ
    np.fill_diagonal(Dw, 0.0)

    D = Dw * Dxi
    _negative_sum_diagonal(D)
    if k == 1:
        return D

    D = 2.0 * D * (np.diag(D)[:, None] - Dxi)
    _negative_sum_diagonal(D)

    for m in range(3, k + 1):
        D = m * Dxi * (Dw * np.diag(D)[:, None] - D)
        _negative_sum_diagonal(D)
    return D


def _as_nodes(x, name: str = "x") -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise DimensionMismatchError(f"{name} must be a vector, got shape {x.shape}")
    if x.shape[0] < 1:
        raise InvalidSizeError(f"{name} must contain at least one node")
    return x


# ============================================================================
# Public API
# ============================================================================


def bary(w: Array, x: Array, f: Array, x0) -> Array:
    """
    Evaluate a polynomial interpolant with the barycentric formula.

    Parameters:
    -----------
    w : Array [n]
        Barycentric weights.
    x : Array [n]
        Interpolation points (typically Chebyshev points).
    f : Array [n]
        Function values at the interpolation points.
    x0 : float or Array
        Point(s) at which to evaluate the interpolant.

    Returns:
    --------
    p : Array with the shape of x0
        Where x0 coincides with a node xⱼ the value fⱼ is returned exactly.

    Example:
    --------
    >>> x, w = cheb2_pts(16), cheb2_barywts(16)
    >>> bary(w, x, jnp.exp(x), 0.3)   # ≈ exp(0.3)
    """
    w, x, f = as_float_array(w), as_float_array(x), as_float_array(f)
    if w.ndim != 1 or not (w.shape == x.shape == f.shape):
        raise DimensionMismatchError(
            f"w, x and f must be vectors of equal length, got shapes "
            f"{w.shape}, {x.shape}, {f.shape}"
        )
    if x.shape[0] < 1:
        raise InvalidSizeError("bary needs at least one node")
    dtype = jnp.result_type(w, x, f, x0)
    w, x, f = w.astype(dtype), x.astype(dtype), f.astype(dtype)
    x0 = jnp.asarray(x0, dtype=dtype)
    if x.shape[0] == 1:
        return f[0] * jnp.ones_like(x0)

    diff = x0[..., None] - x
    hit = jnp.abs(diff) <= jnp.finfo(dtype).eps * jnp.abs(x)
    c = w / jnp.where(hit, 1.0, diff)
    p = jnp.sum(c * f, axis=-1) / jnp.sum(c, axis=-1)
    node = jnp.argmax(hit, axis=-1)
    return jnp.where(jnp.any(hit, axis=-1), f[node], p)


def bary_weights(x: Array, *, dtype=None) -> Float[Array, "n"]:
    """
    Barycentric weights for arbitrary distinct nodes x.

    Chebyshev points have closed-form weights (cheb1_barywts, cheb2_barywts)
    which should be preferred; this is the general fallback.
    """
    return to_array(_bary_weights(_as_nodes(x)), dtype)


def barymat(y: Array, x: Array, w: Array | None = None, *, dtype=None) -> Float[Array, "m n"]:
    """
    Barycentric interpolation matrix from nodes x to targets y.

    (B @ f)ᵢ is the value at yᵢ of the polynomial interpolating f at x.

    Parameters:
    -----------
    y : Array [m]
        Target points.
    x : Array [n]
        Interpolation nodes.
    w : Array [n], optional
        Barycentric weights for x; computed with bary_weights if omitted.

    Returns:
    --------
    B : Array [m, n]
    """
    y = _as_nodes(y, "y")
    x = _as_nodes(x)
    w = _bary_weights(x) if w is None else np.asarray(w, dtype=np.float64)
    if w.shape != x.shape:
        raise DimensionMismatchError(f"w must have shape {x.shape}, got {w.shape}")
    return to_array(_barymat(y, x, w), dtype)


def bary_diffmat(
    x: Array,
    w: Array | None = None,
    k: int = 1,
    t: Array | None = None,
    *,
    dtype=None,
) -> Float[Array, "n n"]:
    """
    Compute the barycentric differentiation matrix.

    Parameters:
    -----------
    x : Array [n]
        Distinct nodes.
    w : Array [n], optional
        Barycentric weights; computed with bary_weights if omitted.
    k : int
        Derivative order (≥ 0). Default 1.
    t : Array [n], optional
        Angles with x = cos(t). Pass them for Chebyshev points to form the
        node differences trigonometrically.

    Returns:
    --------
    D : Array [n, n]
        (D @ f)ᵢ is the k-th derivative at xᵢ of the interpolant of f.
        Every row sums to zero.
    """
    x = _as_nodes(x)
    k = check_size(k, minimum=0, name="k")
    w = _bary_weights(x) if w is None else np.asarray(w, dtype=np.float64)
    if w.shape != x.shape:
        raise DimensionMismatchError(f"w must have shape {x.shape}, got {w.shape}")
    if t is not None:
        t = np.asarray(t, dtype=np.float64)
        if t.shape != x.shape:
            raise DimensionMismatchError(f"t must have shape {x.shape}, got {t.shape}")
    return to_array(_bary_diffmat(x, w, k, t), dtype)
