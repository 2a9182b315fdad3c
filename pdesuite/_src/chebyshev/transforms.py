"""
Chebyshev Transforms
====================

Conversion between values at Chebyshev points and Chebyshev coefficients,
evaluation of coefficient series, and coefficient-space integration.

Key Concepts:
-------------
    • Chebyshev series: f(x) = Σₖ cₖ Tₖ(x),  Tₖ(cos θ) = cos(kθ)
    • Synthesis (coeffs → vals):  vⱼ = Σₖ cₖ Tₖ(xⱼ)          S[j, k] = cos(k θⱼ)
    • Analysis  (vals → coeffs):  c = A v,  A = S⁻¹ (discrete orthogonality)
    • 1st kind: DCT-II / DCT-III pair, computed through a length-2n FFT with a
      half-sample phase shift.
    • 2nd kind: DCT-I, computed through the even extension of length 2n-2.

Every function works along the last axis, so batches of vectors can be
transformed in a single call.

Performance Guide:
------------------
For repeated transforms of the same size build the operator once:

    >>> op = Cheb2Vals2CoeffsOp(n)
    >>> coeffs = op(values)

The operator stores the dense matrix for small n and the FFT phase vector
otherwise (see MATRIX_CUTOFF).

References:
-----------
[1] Trefethen, L. N. (2013). Approximation Theory and Approximation Practice.
[2] chebfun: @chebtech1/vals2coeffs.m, @chebtech2/coeffs2vals.m, clenshaw.m,
    @chebtech/cumsum.m
"""

from typing import Literal

import equinox as eqx
import jax
import jax.numpy as jnp
import numpy as np
from jaxtyping import Array, Float
from loguru import logger

from pdesuite._src.chebyshev.points import Kind, _angles, _check_kind
from pdesuite._src.exceptions import InvalidSizeError
from pdesuite._src.utils import (
    as_float_array,
    check_interval,
    check_length,
    check_size,
    integral_scale,
    resolve_dtype,
    to_array,
)

# sizes up to this use a dense matrix in the "auto" operators
MATRIX_CUTOFF = 64

Method = Literal["auto", "matrix", "fft"]

# ============================================================================
# Internal numpy helpers (called once at construction time, not inside JIT)
# ============================================================================


def _synthesis_matrix(kind: Kind, n: int) -> np.ndarray:
    """S[j, k] = Tₖ(xⱼ) = cos(k θⱼ)."""
    if n == 1:
        return np.ones((1, 1))
    theta = _angles(kind, n)
    return np.cos(np.outer(theta, np.arange(n)))


def _analysis_matrix(kind: Kind, n: int) -> np.ndarray:
    """
    Exact inverse of the synthesis matrix.

    1st kind (discrete orthogonality of Tₖ at Gauss nodes):
        A = (2/n) Sᵀ,  row 0 halved

    2nd kind (Gauss-Lobatto nodes, trapezoidal double prime sum):
        A = (2/(n-1)) Sᵀ,  columns 0, n-1 halved and rows 0, n-1 halved
    """
    if n == 1:
        return np.ones((1, 1))
    S = _synthesis_matrix(kind, n)
    if kind == 1:
        A = (2.0 / n) * S.T
        A[0] *= 0.5
    else:
        A = (2.0 / (n - 1)) * S.T
        A[:, [0, -1]] *= 0.5
        A[[0, -1]] *= 0.5
    return A


def _coeffs_cumsum_matrix(n: int, truncate: bool = False) -> np.ndarray:
    """
    Coefficient-space integration matrix B with b = B c.

    Using ∫Tₖ = T_{k+1}/(2(k+1)) - T_{k-1}/(2(k-1)):

        b₁ = c₀ - c₂/2
        bₖ = (c_{k-1} - c_{k+1}) / (2k),   k ≥ 2
        b₀ = Σ_{k≥1} (-1)^(k+1) bₖ        (integral vanishes at x = -1)

    Parameters:
    -----------
    n : int
        Number of input coefficients.
    truncate : bool
        If True drop b_n and return an n × n matrix (b₀ is then computed from
        the retained rows); otherwise return (n+1) × n.
    """
    B = np.zeros((n + 1, n))
    k = np.arange(1, n + 1)
    B[k, k - 1] = 1.0 / (2 * k)
    B[1, 0] = 1.0
    kk = np.arange(1, n - 1)
    B[kk, kk + 1] -= 1.0 / (2 * kk)
    if truncate:
        B = B[:n]
    v = (-1.0) ** np.arange(B.shape[0] - 1)
    B[0] = v @ B[1:]
    return B


def _moments(n: int) -> np.ndarray:
    """Exact integrals ∫₋₁¹ Tₖ(x) dx for k = 0, ..., n-1."""
    k = np.arange(n)
    m = np.zeros(n)
    even = k % 2 == 0
    m[even] = 2.0 / (1.0 - k[even] ** 2)
    return m


# ============================================================================
# FFT transforms (pure JAX, traceable)
# ============================================================================


def _complex_dtype(u: Array):
    real_dtype = jnp.result_type(u, jnp.float32)
    return real_dtype, jnp.result_type(real_dtype, jnp.complex64)


def _half_sample_phase(n: int, sign: float, real_dtype, complex_dtype) -> Array:
    """exp(sign · iπk/(2n)),  k = 0, ..., n-1"""
    k = jnp.arange(n, dtype=real_dtype)
    return jnp.exp((sign * 1j * jnp.pi * k / (2 * n)).astype(complex_dtype))


def _cheb1_vals2coeffs(u: Array, phase: Array | None = None) -> Array:
    """
    FFT-based DCT-II for 1st-kind points.

        c₀ = (1/n) Σⱼ uⱼ
        cₖ = (2/n) Σⱼ uⱼ cos(πk(2j+1)/(2n)),  k > 0

    with uⱼ ordered from x ≈ 1 down to x ≈ -1 (the reverse of the points).
    """
    n = u.shape[-1]
    if n == 1:
        return u
    real_dtype, complex_dtype = _complex_dtype(u)
    if phase is None:
        phase = _half_sample_phase(n, -1.0, real_dtype, complex_dtype)
    # zero-pad to length 2N, then apply the half-sample phase shift
    Y = jnp.fft.rfft(u[..., ::-1], n=2 * n, axis=-1)
    a = (Y[..., :n] * phase).real * (2.0 / n)
    return a.at[..., 0].multiply(0.5).astype(real_dtype)


def _cheb1_coeffs2vals(c: Array, phase: Array | None = None) -> Array:
    """
    FFT-based synthesis at 1st-kind points.

        u[j] = Re[Σₖ cₖ exp(iπk(2j+1)/(2n))]
             = Re[2n · IFFT_{2n}([h₀, ..., h_{n-1}, 0, ..., 0])[j]],  hₖ = cₖ exp(iπk/(2n))
    """
    n = c.shape[-1]
    if n == 1:
        return c
    real_dtype, complex_dtype = _complex_dtype(c)
    if phase is None:
        phase = _half_sample_phase(n, 1.0, real_dtype, complex_dtype)
    h = c.astype(complex_dtype) * phase
    y = jnp.fft.ifft(h, n=2 * n, axis=-1)
    u = (2 * n * y.real)[..., :n]
    return u[..., ::-1].astype(real_dtype)


def _cheb2_vals2coeffs(u: Array) -> Array:
    """
    FFT-based DCT-I for 2nd-kind points.

    Extend symmetrically to length 2N (N = n-1), take the rfft and normalise:
        a[k] = Re(C[k]) / N,  with a₀ and a_N halved to give cₖ.
    """
    n = u.shape[-1]
    if n == 1:
        return u
    N = n - 1
    # y = [u_0, u_1, ..., u_N, u_{N-1}, ..., u_1] with u ordered x = 1 → -1
    u = u[..., ::-1]
    y = jnp.concatenate([u, u[..., -2:0:-1]], axis=-1)
    a = jnp.fft.rfft(y, axis=-1).real / N
    return a.at[..., 0].multiply(0.5).at[..., N].multiply(0.5)


def _cheb2_coeffs2vals(c: Array) -> Array:
    """Inverse of _cheb2_vals2coeffs: irfft(N · a)[:N+1] with a₀, a_N doubled."""
    n = c.shape[-1]
    if n == 1:
        return c
    N = n - 1
    a = c.at[..., 0].multiply(2.0).at[..., N].multiply(2.0)
    y = jnp.fft.irfft(N * a + 0j, n=2 * N, axis=-1)
    return y[..., : N + 1][..., ::-1].astype(c.dtype)


def _fft_transform(kind: Kind, u: Array, inverse: bool, phase=None) -> Array:
    if kind == 1:
        if inverse:
            return _cheb1_coeffs2vals(u, phase)
        return _cheb1_vals2coeffs(u, phase)
    if inverse:
        return _cheb2_coeffs2vals(u)
    return _cheb2_vals2coeffs(u)


# ============================================================================
# Analysis / synthesis matrices
# ============================================================================


def cheb1_amat(n: int, *, dtype=None) -> Float[Array, "n n"]:
    """
    Analysis matrix A mapping values at n 1st-kind points to n coefficients.

    Parameters:
    -----------
    n : int
        Number of points/coefficients.
    dtype : optional
        Float type of the result.
    """
    return to_array(_analysis_matrix(1, check_size(n)), dtype)


def cheb1_smat(n: int, *, dtype=None) -> Float[Array, "n n"]:
    """
    Synthesis matrix S mapping n coefficients to values at n 1st-kind points.

    S[j, k] = Tₖ(xⱼ).
    """
    return to_array(_synthesis_matrix(1, check_size(n)), dtype)


def cheb2_amat(n: int, *, dtype=None) -> Float[Array, "n n"]:
    """
    Analysis matrix A mapping values at n 2nd-kind points to n coefficients.
    """
    return to_array(_analysis_matrix(2, check_size(n)), dtype)


def cheb2_smat(n: int, *, dtype=None) -> Float[Array, "n n"]:
    """
    Synthesis matrix S mapping n coefficients to values at n 2nd-kind points.
    """
    return to_array(_synthesis_matrix(2, check_size(n)), dtype)


# ============================================================================
# One-shot transforms
# ============================================================================


def cheb1_vals2coeffs(vals: Array) -> Float[Array, "... n"]:
    """
    Convert values at 1st-kind points into Chebyshev coefficients.

    For repeated calls of the same size prefer Cheb1Vals2CoeffsOp(n).
    """
    return _cheb1_vals2coeffs(as_float_array(vals))


def cheb1_coeffs2vals(coeffs: Array) -> Float[Array, "... n"]:
    """
    Convert Chebyshev coefficients to values at 1st-kind points.

    For repeated calls of the same size prefer Cheb1Coeffs2ValsOp(n).
    """
    return _cheb1_coeffs2vals(as_float_array(coeffs))


def cheb2_vals2coeffs(vals: Array) -> Float[Array, "... n"]:
    """
    Convert values at 2nd-kind points into Chebyshev coefficients.

    For repeated calls of the same size prefer Cheb2Vals2CoeffsOp(n).
    """
    return _cheb2_vals2coeffs(as_float_array(vals))


def cheb2_coeffs2vals(coeffs: Array) -> Float[Array, "... n"]:
    """
    Convert Chebyshev coefficients to values at 2nd-kind points.

    For repeated calls of the same size prefer Cheb2Coeffs2ValsOp(n).
    """
    return _cheb2_coeffs2vals(as_float_array(coeffs))


# ============================================================================
# Precomputed transform operators
# ============================================================================


def _plan(kind: Kind, n: int, inverse: bool, method: Method, dtype):
    """
    Precompute whichever representation the operator will apply.

    Returns:
    --------
    (n, method, matrix, phase)
        matrix is the dense S (inverse) or A (forward) for method="matrix",
        phase the half-sample shift for 1st-kind FFTs; unused entries are None.
    """
    _check_kind(kind)
    n = check_size(n)
    if method == "auto":
        method = "matrix" if n <= MATRIX_CUTOFF else "fft"
    if method not in ("matrix", "fft"):
        raise ValueError(f"method must be 'auto', 'matrix' or 'fft', got {method!r}")

    matrix, phase = None, None
    if method == "matrix":
        build = _synthesis_matrix if inverse else _analysis_matrix
        matrix = to_array(build(kind, n), dtype)
    elif kind == 1 and n > 1:
        real_dtype = resolve_dtype(dtype)
        _, complex_dtype = _complex_dtype(jnp.zeros((), real_dtype))
        phase = _half_sample_phase(n, 1.0 if inverse else -1.0, real_dtype, complex_dtype)

    direction = "coeffs2vals" if inverse else "vals2coeffs"
    logger.debug(f"cheb{kind} {direction} operator: n={n}, method={method}")
    return n, method, matrix, phase


def _apply(kind: Kind, inverse: bool, op, u: Array) -> Array:
    u = as_float_array(u)
    check_length(u, op.n)
    if op.method == "matrix":
        return u @ op._matrix.T
    return _fft_transform(kind, u, inverse, op._phase)


class Cheb1Coeffs2ValsOp(eqx.Module):
    """
    Precomputed map from n Chebyshev coefficients to values at n 1st-kind
    points.

    Example:
    --------
    >>> op = Cheb1Coeffs2ValsOp(n)
    >>> values = op(coeffs)
    """

    n: int
    method: str
    _matrix: Array | None
    _phase: Array | None

    def __init__(self, n: int, *, method: Method = "auto", dtype=None):
        self.n, self.method, self._matrix, self._phase = _plan(1, n, True, method, dtype)

    def __call__(self, coeffs: Array) -> Float[Array, "... n"]:
        return _apply(1, True, self, coeffs)


class Cheb1Vals2CoeffsOp(eqx.Module):
    """
    Precomputed map from values at n 1st-kind points to n Chebyshev
    coefficients.

    Example:
    --------
    >>> op = Cheb1Vals2CoeffsOp(n)
    >>> coeffs = op(values)
    """

    n: int
    method: str
    _matrix: Array | None
    _phase: Array | None

    def __init__(self, n: int, *, method: Method = "auto", dtype=None):
        self.n, self.method, self._matrix, self._phase = _plan(1, n, False, method, dtype)

    def __call__(self, vals: Array) -> Float[Array, "... n"]:
        return _apply(1, False, self, vals)


class Cheb2Coeffs2ValsOp(eqx.Module):
    """
    Precomputed map from n Chebyshev coefficients to values at n 2nd-kind
    points.
    """

    n: int
    method: str
    _matrix: Array | None
    _phase: Array | None

    def __init__(self, n: int, *, method: Method = "auto", dtype=None):
        self.n, self.method, self._matrix, self._phase = _plan(2, n, True, method, dtype)

    def __call__(self, coeffs: Array) -> Float[Array, "... n"]:
        return _apply(2, True, self, coeffs)


class Cheb2Vals2CoeffsOp(eqx.Module):
    """
    Precomputed map from values at n 2nd-kind points to n Chebyshev
    coefficients.
    """

    n: int
    method: str
    _matrix: Array | None
    _phase: Array | None

    def __init__(self, n: int, *, method: Method = "auto", dtype=None):
        self.n, self.method, self._matrix, self._phase = _plan(2, n, False, method, dtype)

    def __call__(self, vals: Array) -> Float[Array, "... n"]:
        return _apply(2, False, self, vals)


# ============================================================================
# Quadrature weights
# ============================================================================


def cheb_quadwts(
    n: int,
    kind: Kind = 2,
    x_min: float = -1.0,
    x_max: float = 1.0,
    *,
    dtype=None,
) -> Float[Array, "n"]:
    """
    Interpolatory quadrature weights so that ∫ f dx ≈ Σⱼ wⱼ f(xⱼ).

    Mathematical Formulation:
    -------------------------
    Integrating the interpolant exactly gives

        w = Aᵀ m,   mₖ = ∫₋₁¹ Tₖ dx = 2/(1-k²) (k even), 0 (k odd)

    where A is the analysis matrix. For the 1st kind this is Fejér's first
    rule, for the 2nd kind Clenshaw–Curtis. Weights are scaled by
    (x_max - x_min)/2.
    """
    _check_kind(kind)
    n = check_size(n)
    check_interval(x_min, x_max)
    w = _analysis_matrix(kind, n).T @ _moments(n)
    return to_array(w * integral_scale(x_min, x_max), dtype)


def cheb1_quadwts(
    n: int, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "n"]:
    """Fejér (1st rule) quadrature weights at 1st-kind points."""
    return cheb_quadwts(n, 1, x_min, x_max, dtype=dtype)


def cheb2_quadwts(
    n: int, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "n"]:
    """Clenshaw–Curtis quadrature weights at 2nd-kind points."""
    return cheb_quadwts(n, 2, x_min, x_max, dtype=dtype)


# ============================================================================
# Evaluation
# ============================================================================


def cheb_clenshaw(c: Array, x) -> Array:
    """
    Evaluate Σₖ cₖ Tₖ(x) with Clenshaw's algorithm.

    Mathematical Formulation:
    -------------------------
        b_{n} = b_{n+1} = 0
        bₖ = cₖ + 2x b_{k+1} - b_{k+2},   k = n-1, ..., 1
        f(x) = c₀ + x b₁ - b₂

    The recurrence never forms Tₖ(x) explicitly, which keeps it stable for
    long series.

    Parameters:
    -----------
    c : Array [n]
        Chebyshev coefficients c₀, ..., c_{n-1} (n ≥ 1).
    x : float or Array
        Evaluation point(s) in [-1, 1].

    Returns:
    --------
    f : Array with the shape of x
    """
    c = as_float_array(c)
    if c.ndim != 1 or c.shape[0] < 1:
        raise InvalidSizeError(f"c must be a non-empty vector, got shape {c.shape}")
    dtype = jnp.result_type(c, x)
    c = c.astype(dtype)
    x = jnp.asarray(x, dtype=dtype)
    if c.shape[0] == 1:
        return c[0] * jnp.ones_like(x)

    two_x = 2 * x

    def step(carry, ck):
        bk1, bk2 = carry
        bk = ck + two_x * bk1 - bk2
        return (bk, bk1), None

    zero = jnp.zeros_like(x)
    (bk1, bk2), _ = jax.lax.scan(step, (zero, zero), c[:0:-1])
    return c[0] + x * bk1 - bk2


def cheb_feval(f: Array, x) -> Array:
    """
    Evaluate a Chebyshev coefficient series at a point.

    Performance Notes:
    ------------------
    Clenshaw's algorithm: O(n) operations per point. Arrays of points are
    evaluated by broadcasting the same recurrence.
    """
    return cheb_clenshaw(f, x)


# ============================================================================
# Coefficient-space integration
# ============================================================================


def cheb_cumsum(f: Array) -> Float[Array, "... n1"]:
    """
    Indefinite integral of a Chebyshev series.

    Parameters:
    -----------
    f : Array [..., n]
        Chebyshev coefficients of the integrand.

    Returns:
    --------
    b : Array [..., n+1]
        Coefficients of the integral, normalised to vanish at x = -1.
    """
    c = as_float_array(f)
    if c.ndim == 0 or c.shape[-1] < 1:
        raise InvalidSizeError(f"f must be a non-empty vector, got shape {c.shape}")
    n = c.shape[-1]
    cp = jnp.concatenate([c, jnp.zeros(c.shape[:-1] + (2,), c.dtype)], axis=-1)
    k = jnp.arange(2, n + 1, dtype=c.dtype)
    b_hi = (cp[..., 1:n] - cp[..., 3 : n + 2]) / (2 * k)
    b1 = cp[..., :1] - cp[..., 2:3] / 2
    b = jnp.concatenate([b1, b_hi], axis=-1)
    # b₀ makes the integral vanish at x = -1, where Tₖ(-1) = (-1)ᵏ
    v = (-1.0) ** jnp.arange(n, dtype=c.dtype)
    b0 = jnp.sum(v * b, axis=-1, keepdims=True)
    return jnp.concatenate([b0, b], axis=-1)


class ChebCumsumOp(eqx.Module):
    """
    Precomputed indefinite integral in coefficient space.

    Stores the (n+1) × n matrix B of cheb_cumsum so that ChebCumsumOp(n)(f)
    equals cheb_cumsum(f) for any f of length n.

    Example:
    --------
    >>> op = ChebCumsumOp(n)
    >>> integral_coeffs = op(coeffs)   # length n + 1
    """

    n: int
    _B: Array

    def __init__(self, n: int, *, dtype=None):
        self.n = check_size(n)
        self._B = to_array(_coeffs_cumsum_matrix(self.n), dtype)
        logger.debug(f"cumsum operator: n={self.n}")

    def __call__(self, f: Array) -> Float[Array, "... n1"]:
        f = as_float_array(f)
        check_length(f, self.n, "f")
        return f @ self._B.T
