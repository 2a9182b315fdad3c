"""
Ultraspherical Spectral Operators
=================================

Sparse operators of the ultraspherical (Olver–Townsend) spectral method.
Chebyshev-T coefficients are differentiated into the C⁽ᵐ⁾ basis, where the
derivative is a single shifted diagonal, and the remaining terms of an
equation are brought into the same basis with banded conversion and
multiplication matrices.

Key Concepts:
-------------
    • Differentiation:  d^m/dx^m Tₖ = 2^(m-1) (m-1)! k C⁽ᵐ⁾_{k-m}
    • Conversion C⁽λ⁾ → C⁽λ⁺¹⁾ (two bands):

          λ = 0:  T₀ = C⁽¹⁾₀,  Tₖ = (C⁽¹⁾ₖ - C⁽¹⁾_{k-2}) / 2
          λ > 0:  C⁽λ⁾ₖ = λ/(λ+k) (C⁽λ⁺¹⁾ₖ - C⁽λ⁺¹⁾_{k-2})

    • Multiplication by f = Σ aₖ Tₖ:

          λ = 0:  Tⱼ Tₖ = (T_{j+k} + T_{|j-k|}) / 2       → Toeplitz + Hankel
          λ = 1:  Tⱼ Uₖ = (U_{j+k} + U_{k-j}) / 2,
                  U_{-m} = -U_{m-2}                        → Toeplitz - Hankel
          λ ≥ 2:  three-term recurrence of C⁽λ⁾ₖ applied to the matrix of
                  multiplication by x

Every operator is n × n, banded with a bandwidth independent of n (or of
the length of a for multiplication), and returned as scipy.sparse CSR.

References:
-----------
[1] Olver, S. & Townsend, A. (2013). A fast and well-conditioned spectral
    method. SIAM Review 55, 462–489.
[2] chebfun: @ultraS/convertmat.m, spconvert.m, diffmat.m, multmat.m,
    sphankel.m
"""

import math

import numpy as np
from loguru import logger
from scipy import sparse

from pdesuite._src.exceptions import InvalidSizeError
from pdesuite._src.utils import check_size

# ============================================================================
# Sparse assembly helpers
# ============================================================================


def _sptoeplitz(col: np.ndarray, row: np.ndarray) -> sparse.csr_matrix:
    """Sparse Toeplitz matrix with first column col and first row row."""
    n_rows, n_cols = col.shape[0], row.shape[0]
    diagonals, offsets = [], []
    for k in np.flatnonzero(col):
        length = min(n_rows - k, n_cols)
        if length > 0:
            diagonals.append(np.full(length, col[k]))
            offsets.append(-k)
    for k in np.flatnonzero(row[1:]) + 1:
        length = min(n_cols - k, n_rows)
        if length > 0:
            diagonals.append(np.full(length, row[k]))
            offsets.append(k)
    if not offsets:
        return sparse.csr_matrix((n_rows, n_cols))
    return sparse.diags(diagonals, offsets, shape=(n_rows, n_cols), format="csr")


def _embed(A: sparse.spmatrix, shape: tuple, row: int = 0, col: int = 0) -> sparse.csr_matrix:
    """Place A inside a zero matrix of the given shape at (row, col)."""
    A = sparse.coo_matrix(A)
    return sparse.coo_matrix(
        (A.data, (A.row + row, A.col + col)), shape=shape
    ).tocsr()


# ============================================================================
# Conversion and differentiation
# ============================================================================


def ultra_spconvert(n: int, lam: float, *, dtype=np.float64) -> sparse.csr_matrix:
    """
    Truncated conversion operator C⁽λ⁾ → C⁽λ⁺¹⁾.

    Parameters:
    -----------
    n : int
        Number of coefficients (≥ 1).
    lam : float
        Source basis parameter λ ≥ 0 (λ = 0 is Chebyshev T).

    Returns:
    --------
    S : csr_matrix [n, n]
        Nonzeros on the main diagonal and the second superdiagonal.

    Example:
    --------
    >>> ultra_spconvert(4, 0).toarray()
    array([[ 1. ,  0. , -0.5,  0. ],
           [ 0. ,  0.5,  0. , -0.5],
           [ 0. ,  0. ,  0.5,  0. ],
           [ 0. ,  0. ,  0. ,  0.5]])
    """
    n = check_size(n)
    if lam < 0:
        raise ValueError(f"lam must be ≥ 0, got lam={lam}")
    k = np.arange(n, dtype=np.float64)
    if lam == 0:
        main = np.full(n, 0.5)
        upper = np.full(max(n - 2, 0), -0.5)
    else:
        main = lam / (lam + k)
        upper = -lam / (lam + k[2:])
    main[0] = 1.0
    if n < 3:
        return sparse.diags([main], [0], shape=(n, n), format="csr", dtype=dtype)
    return sparse.diags([main, upper], [0, 2], shape=(n, n), format="csr", dtype=dtype)


def ultra_convertmat(n: int, K1: int, K2: int, *, dtype=np.float64) -> sparse.csr_matrix:
    """
    Conversion operator from the C⁽ᴷ¹⁾ basis to the C⁽ᴷ²⁾ basis.

    The product S_{K2-1} ··· S_{K1+1} S_{K1} of single-step conversions; its
    bandwidth is 2 (K2 - K1). K1 == K2 gives the identity.

    Parameters:
    -----------
    n : int
        Number of coefficients.
    K1, K2 : int
        Source and target basis parameters, 0 ≤ K1 ≤ K2.

    Returns:
    --------
    S : csr_matrix [n, n]
    """
    n = check_size(n)
    K1 = check_size(K1, minimum=0, name="K1")
    K2 = check_size(K2, minimum=0, name="K2")
    if K2 < K1:
        raise ValueError(f"cannot convert down from C^({K1}) to C^({K2})")
    S = sparse.identity(n, dtype=dtype, format="csr")
    for lam in range(K1, K2):
        S = ultra_spconvert(n, lam, dtype=dtype) @ S
    return S.tocsr()


def ultra_diffmat(n: int, m: int, *, dtype=np.float64) -> sparse.csr_matrix:
    """
    Differentiation operator from Chebyshev-T coefficients to C⁽ᵐ⁾ coefficients.

    D[k - m, k] = 2^(m-1) (m-1)! k, a single diagonal at offset m.
    m = 0 gives the identity.

    Parameters:
    -----------
    n : int
        Number of coefficients.
    m : int
        Order of differentiation (≥ 0).
    """
    n = check_size(n)
    m = check_size(m, minimum=0, name="m")
    if m == 0:
        return sparse.identity(n, dtype=dtype, format="csr")
    if m >= n:
        return sparse.csr_matrix((n, n), dtype=dtype)
    scale = 2.0 ** (m - 1) * math.factorial(m - 1)
    diag = scale * np.arange(m, n, dtype=np.float64)
    return sparse.diags([diag], [m], shape=(n, n), format="csr", dtype=dtype)


# ============================================================================
# Multiplication
# ============================================================================


def ultra_sphankel(r, *, dtype=np.float64) -> sparse.csr_matrix:
    """
    Sparse Hankel matrix H[p, q] = r[p + q] for p + q < len(r), zero below
    the anti-diagonal.

    Assembled by flipping the rows of the lower-triangular Toeplitz matrix
    whose first column is r reversed.
    """
    r = np.asarray(r, dtype=np.float64).ravel()
    n = r.shape[0]
    if n == 0:
        return sparse.csr_matrix((0, 0), dtype=dtype)
    T = _sptoeplitz(r[::-1], np.r_[r[-1], np.zeros(n - 1)])
    flip = sparse.coo_matrix(
        (np.ones(n), (np.arange(n), np.arange(n)[::-1])), shape=(n, n)
    )
    H = (flip @ T).tocsr()
    H.eliminate_zeros()
    return H.astype(dtype)


def ultra_multmat(a, lam: int, n: int | None = None, *, dtype=np.float64) -> sparse.csr_matrix:
    """
    Multiplication operator in the C⁽λ⁾ basis.

    Mathematical Formulation:
    -------------------------
    For f = Σₖ aₖ Tₖ, M is the n × n matrix with M c = coefficients of f·g in
    C⁽λ⁾ whenever c are the C⁽λ⁾ coefficients of g (truncated to n terms).

    λ = 0 and λ = 1 are assembled directly from Toeplitz and Hankel parts.
    For λ ≥ 2, a is converted to C⁽λ⁾ coefficients and M = Σₖ aₖ C⁽λ⁾ₖ(Mₓ)
    is summed with the three-term recurrence

        C⁽λ⁾_{k+1}(Mₓ) = [2(k+λ) Mₓ C⁽λ⁾ₖ(Mₓ) - (k+2λ-1) C⁽λ⁾_{k-1}(Mₓ)] / (k+1)

    on a 2n working size (to keep the truncated product exact), stopping
    once the remaining coefficients are below machine epsilon.

    Parameters:
    -----------
    a : array_like
        Chebyshev-T coefficients of the multiplier f.
    lam : int
        Basis parameter λ ≥ 0.
    n : int, optional
        Size of the operator. Defaults to len(a); a is zero-padded or
        truncated to n terms.

    Returns:
    --------
    M : csr_matrix [n, n]
    """
    a = np.asarray(a, dtype=np.float64).ravel()
    if a.shape[0] < 1:
        raise InvalidSizeError("multiplier coefficients must be non-empty")
    n = a.shape[0] if n is None else check_size(n)
    lam = check_size(lam, minimum=0, name="lam")
    logger.debug(f"ultraspherical multiplication: n={n}, lam={lam}, len(a)={a.shape[0]}")

    if a.shape[0] == 1:
        return (a[0] * sparse.identity(n, format="csr")).astype(dtype)
    a = np.r_[a, np.zeros(max(n - a.shape[0], 0))][:n]
    if n == 1:
        return sparse.csr_matrix([[a[0]]], dtype=dtype)

    if lam == 0:
        half = a / 2
        t = np.r_[a[0], half[1:]]
        M = _sptoeplitz(t, t)
        H = ultra_sphankel(half[1:])
        M = M + _embed(H, (n, n), row=1)
    elif lam == 1:
        t = np.r_[2 * a[0], a[1:]] / 2
        M = _sptoeplitz(t, t)
        if n > 2:
            H = ultra_sphankel(a[2:] / 2)
            M = M - _embed(H, (n, n))
    else:
        M = _ultra_multmat_recurrence(a, lam, n)

    M = M.tocsr()
    M.eliminate_zeros()
    return M.astype(dtype)


def _ultra_multmat_recurrence(a: np.ndarray, lam: int, n: int) -> sparse.csr_matrix:
    # a in C^(lam) coefficients
    a = ultra_convertmat(n, 0, lam) @ a
    m = 2 * n
    k = np.arange(m, dtype=np.float64)
    # Mx: multiplication by x, x C_k = [(k+1) C_{k+1} + (k+2λ-1) C_{k-1}] / (2(k+λ))
    lower = (k[:-1] + 1) / (2 * (k[:-1] + lam))
    upper = (k[1:] + 2 * lam - 1) / (2 * (k[1:] + lam))
    Mx = sparse.diags([lower, upper], [-1, 1], shape=(m, m), format="csr")

    M0 = sparse.identity(m, format="csr")
    M1 = 2 * lam * Mx
    M = a[0] * M0 + a[1] * M1
    eps = np.finfo(np.float64).eps
    for j in range(1, a.shape[0] - 1):
        M2 = (2 * (j + lam) / (j + 1)) * (Mx @ M1) - ((j + 2 * lam - 1) / (j + 1)) * M0
        M = M + a[j + 1] * M2
        M0, M1 = M1, M2
        tail = a[j + 2 :]
        if tail.size and np.all(np.abs(tail) < eps):
            break
    return M[:n, :n]
