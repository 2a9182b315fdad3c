"""
Chebyshev Points, Angles and Weights
====================================

Node sets of the 1st and 2nd kind on [-1, 1] (or a mapped interval) together
with their barycentric weights.

Key Concepts:
-------------
    • 1st kind (Gauss):         xₖ = -cos((2k+1)π/(2n)),  k = 0, ..., n-1
    • 2nd kind (Gauss-Lobatto): xₖ = -cos(kπ/(n-1)),      k = 0, ..., n-1
    • Points are returned in increasing order, so xₖ = cos(θₖ) with the
      angles θₖ returned in decreasing order.
    • 2nd-kind points include both endpoints, 1st-kind points neither.

References:
-----------
[1] Berrut, J.-P. & Trefethen, L. N. (2004). Barycentric Lagrange
    interpolation. SIAM Review 46, 501–517.
[2] chebfun: @chebtech1/chebpts.m, @chebtech2/chebpts.m, barywts.m
"""

from typing import Literal

import numpy as np
from jaxtyping import Array, Float

from pdesuite._src.utils import (
    check_interval,
    check_size,
    map_to_interval,
    to_array,
)

Kind = Literal[1, 2]

# ============================================================================
# Internal numpy helpers (called once at construction time, not inside JIT)
# ============================================================================


def _check_kind(kind: int) -> None:
    if kind not in (1, 2):
        raise ValueError(f"kind must be 1 or 2, got kind={kind}")


def _angles(kind: Kind, n: int) -> np.ndarray:
    """
    Angles θₖ (decreasing) such that cos(θₖ) are the increasing points.

    1st kind: θₖ = (2k+1)π/(2n),  k = n-1, ..., 0
    2nd kind: θₖ = kπ/(n-1),      k = n-1, ..., 0
    """
    k = np.arange(n - 1, -1, -1)
    if kind == 1:
        return np.pi * (2 * k + 1) / (2 * n)
    return np.pi * k / (n - 1)


def _points(kind: Kind, n: int) -> np.ndarray:
    """
    Increasing Chebyshev points on [-1, 1].

    Uses the sine form so the points are exactly antisymmetric about zero:

        1st kind: xₖ = sin(π(2k - n + 1)/(2n))
        2nd kind: xₖ = sin(π(2k - m)/(2m)),  m = n - 1
    """
    if n == 1:
        return np.zeros(1)
    if kind == 1:
        return np.sin(np.pi * np.arange(-n + 1, n, 2) / (2 * n))
    m = n - 1
    return np.sin(np.pi * np.arange(-m, m + 1, 2) / (2 * m))


def _barywts(kind: Kind, n: int) -> np.ndarray:
    """
    Closed-form barycentric weights, alternating in sign with a positive last
    entry.

        1st kind: wⱼ = ±sin(θⱼ)
        2nd kind: wⱼ = ±1, halved at both ends
    """
    if n == 1:
        return np.ones(1)
    if kind == 1:
        w = np.sin(_angles(1, n))
    else:
        w = np.ones(n)
        w[0] = 0.5
        w[-1] = 0.5
    w[-2::-2] = -w[-2::-2]
    return w


# ============================================================================
# Angles
# ============================================================================


def cheb_angles(n: int, kind: Kind = 2, *, dtype=None) -> Float[Array, "n"]:
    """
    Angles θₖ of the Chebyshev points of the given kind, in decreasing order.

    Parameters:
    -----------
    n : int
        Number of points (≥ 1 for the 1st kind, ≥ 2 for the 2nd kind).
    kind : int
        1 or 2. Default 2.
    dtype : optional
        Float type of the result.

    Returns:
    --------
    theta : Array [n]
    """
    _check_kind(kind)
    n = check_size(n, minimum=kind)
    return to_array(_angles(kind, n), dtype)


def cheb1_angles(n: int, *, dtype=None) -> Float[Array, "n"]:
    """
    Angles of the 1st-kind points: θₖ = (2k+1)π/(2n), k = n-1, ..., 0.

    Example:
    --------
    >>> cheb1_angles(2)   # [3π/4, π/4]
    """
    return cheb_angles(n, kind=1, dtype=dtype)


def cheb2_angles(n: int, *, dtype=None) -> Float[Array, "n"]:
    """
    Angles of the 2nd-kind points: θₖ = kπ/(n-1), k = n-1, ..., 0.

    Requires n ≥ 2; raises InvalidSizeError otherwise.
    """
    return cheb_angles(n, kind=2, dtype=dtype)


# ============================================================================
# Points
# ============================================================================


def cheb_pts(
    n: int,
    kind: Kind = 2,
    x_min: float = -1.0,
    x_max: float = 1.0,
    *,
    dtype=None,
) -> Float[Array, "n"]:
    """
    Chebyshev points of the given kind on [x_min, x_max].

    Mathematical Formulation:
    -------------------------
    Reference points xₖ = -cos(θₖ) on [-1, 1] are mapped affinely:

        x_mapped = (x_max + x_min)/2 + (x_max - x_min)/2 · xₖ

    so that -1 ↦ x_min and 1 ↦ x_max. n = 1 returns the midpoint.

    Parameters:
    -----------
    n : int
        Number of points (≥ 1).
    kind : int
        1 (excludes endpoints) or 2 (includes endpoints). Default 2.
    x_min, x_max : float
        Interval bounds. Default [-1, 1].
    dtype : optional
        Float type of the result.

    Returns:
    --------
    x : Array [n]
        Strictly increasing points.
    """
    _check_kind(kind)
    n = check_size(n)
    check_interval(x_min, x_max)
    return to_array(map_to_interval(_points(kind, n), x_min, x_max), dtype)


def cheb1_pts(
    n: int, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "n"]:
    """
    Chebyshev points of the 1st kind: xₖ = -cos((2k+1)π/(2n)), k = 0, ..., n-1.

    Example:
    --------
    >>> x = cheb1_pts(5)            # 5 points strictly inside (-1, 1)
    >>> x = cheb1_pts(5, 0.0, 2.0)  # the same points mapped to (0, 2)
    """
    return cheb_pts(n, 1, x_min, x_max, dtype=dtype)


def cheb2_pts(
    n: int, x_min: float = -1.0, x_max: float = 1.0, *, dtype=None
) -> Float[Array, "n"]:
    """
    Chebyshev points of the 2nd kind: xₖ = -cos(kπ/(n-1)), k = 0, ..., n-1.

    Includes both endpoints x_min and x_max when n ≥ 2.
    """
    return cheb_pts(n, 2, x_min, x_max, dtype=dtype)


# ============================================================================
# Barycentric weights
# ============================================================================


def cheb_barywts(n: int, kind: Kind = 2, *, dtype=None) -> Float[Array, "n"]:
    """
    Barycentric weights for the Chebyshev points of the given kind.

    The weights are invariant under the affine map to [x_min, x_max] up to a
    common factor, which cancels in the barycentric formula, so they are
    only defined on the reference interval.
    """
    _check_kind(kind)
    n = check_size(n)
    return to_array(_barywts(kind, n), dtype)


def cheb1_barywts(n: int, *, dtype=None) -> Float[Array, "n"]:
    """
    Barycentric weights for 1st-kind points: wⱼ = (-1)^(n-1-j) sin(θⱼ).

    See also: bary, cheb1_pts
    """
    return cheb_barywts(n, 1, dtype=dtype)


def cheb2_barywts(n: int, *, dtype=None) -> Float[Array, "n"]:
    """
    Barycentric weights for 2nd-kind points: wⱼ = (-1)^(n-1-j), halved at
    j = 0 and j = n-1.

    See also: bary, cheb2_pts
    """
    return cheb_barywts(n, 2, dtype=dtype)

