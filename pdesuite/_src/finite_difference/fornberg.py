"""
Finite-Difference Weights
=========================

Fornberg's algorithm for derivative weights of any order on arbitrary,
possibly non-uniform, stencils, and its Hermite variant that also uses
derivative values.

Key Concepts:
-------------
    • Standard:  f⁽ᵐ⁾(x₀) ≈ Σⱼ cⱼ f(xⱼ),                 requires N > m
    • Hermite:   f⁽ᵐ⁾(x₀) ≈ Σⱼ dⱼ f(xⱼ) + Σⱼ eⱼ f'(xⱼ),  requires N > m/2 + 1
    • The weight table C[j, s] = ℓⱼ⁽ˢ⁾(x₀), s = 0, ..., m, is built one node at
      a time, never forming a Vandermonde system.

References:
-----------
[1] Fornberg, B. (1988). Generation of finite difference formulas on
    arbitrarily spaced grids. Math. Comp. 51, 699–706.
[2] Fornberg, B. (1998). Calculation of weights in finite difference
    formulas. SIAM Review 40, 685–691.
[3] Fornberg, B. (2021). An algorithm for calculating Hermite-based finite
    difference weights. IMA J. Numer. Anal. 41, 801–813.
"""

import math

import jax.numpy as jnp
import numpy as np
from jaxtyping import Array, Float
from loguru import logger

from pdesuite._src.exceptions import DimensionMismatchError, InsufficientNodesError
from pdesuite._src.utils import check_interval, check_size, to_array


def _fornberg_table(order: int, x0: float, x: np.ndarray) -> np.ndarray:
    """
    Lagrange derivative table C[j, s] = ℓⱼ⁽ˢ⁾(x₀) for s = 0, ..., order.

    c1 and c2 carry the running products Πₖ (xᵢ - xₖ), so every update is a
    ratio of two products of comparable size.
    """
    N = x.shape[0]
    M = order
    C = np.zeros((N, M + 1))
    C[0, 0] = 1.0
    c1 = 1.0
    c4 = x[0] - x0
    for i in range(1, N):
        mn = min(i, M)
        c2 = 1.0
        c5 = c4
        c4 = x[i] - x0
        for j in range(i):
            c3 = x[i] - x[j]
            c2 *= c3
            if j == i - 1:
                for s in range(mn, 0, -1):
                    C[i, s] = c1 * (s * C[i - 1, s - 1] - c5 * C[i - 1, s]) / c2
                C[i, 0] = -c1 * c5 * C[i - 1, 0] / c2
            for s in range(mn, 0, -1):
                C[j, s] = (c4 * C[j, s] - s * C[j, s - 1]) / c3
            C[j, 0] = c4 * C[j, 0] / c3
        c1 = c2
    return C


def _hermite_weights(order: int, x0: float, x: np.ndarray, C: np.ndarray):
    """
    Hermite weights from the Taylor coefficients of ℓⱼ² about x₀.

    With hⱼ = (1 - 2ℓⱼ'(xⱼ)(x - xⱼ)) ℓⱼ² and gⱼ = (x - xⱼ) ℓⱼ²,
    dⱼ = hⱼ⁽ᵐ⁾(x₀) and eⱼ = gⱼ⁽ᵐ⁾(x₀).
    """
    N = x.shape[0]
    M = order
    fact = np.array([math.factorial(s) for s in range(M + 1)], dtype=np.float64)
    taylor = C / fact  # Taylor coefficients of ℓⱼ in powers of (x - x₀)

    # coefficients of ℓⱼ² up to (x - x₀)^M, with a leading zero column for the shift
    sq = np.zeros((N, M + 2))
    for k in range(M + 1):
        sq[:, k + 1] = np.sum(taylor[:, : k + 1] * taylor[:, k::-1], axis=1)

    dX = x[None, :] - x[:, None]  # dX[k, j] = xⱼ - xₖ
    np.fill_diagonal(dX, np.inf)
    dl = np.sum(1.0 / dX, axis=0)  # ℓⱼ'(xⱼ) = Σₖ≠ⱼ 1/(xⱼ - xₖ)

    E = sq[:, :-1] - (x - x0)[:, None] * sq[:, 1:]
    D = sq[:, 1:] - 2.0 * dl[:, None] * E
    return D[:, M] * fact[M], E[:, M] * fact[M]


def fornberg_calculate_wts(
    order: int,
    x0: float,
    x,
    dfdx: bool = False,
    *,
    dtype=None,
):
    """Finite-difference weights for the order-th derivative at x0

    Args:
        order (int): the derivative order (≥ 0)
        x0 (float): the point where the derivative is approximated
        x (array_like): the stencil nodes, distinct, any spacing; repeated
            nodes raise ValueError
        dfdx (bool, optional): also use derivative values at the nodes
            (Hermite finite differences). Defaults to False.
        dtype (optional): float type of the weights.

    Returns:
        c (Array): the weights of f(xⱼ), when dfdx is False
        (d, e) (tuple[Array, Array]): the weights of f(xⱼ) and f'(xⱼ),
            when dfdx is True

    Example:
        >>> fornberg_calculate_wts(1, 0.0, [-1.0, 0.0, 1.0])   # ≈ [-0.5, 0, 0.5]
    """
    order = check_size(order, minimum=0, name="order")
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise DimensionMismatchError(f"x must be a vector, got shape {x.shape}")
    if np.unique(x).shape[0] != x.shape[0]:
        raise ValueError(f"stencil nodes must be distinct, got x={x}")
    N = x.shape[0]
    x0 = float(x0)

    if dfdx:
        if not N > order / 2 + 1:
            raise InsufficientNodesError(
                f"Hermite weights of order {order} need more than {order / 2 + 1} nodes, got {N}"
            )
    elif not N > order:
        raise InsufficientNodesError(
            f"weights of order {order} need more than {order} nodes, got {N}"
        )
    logger.debug(f"fornberg weights: order={order}, x0={x0}, N={N}, dfdx={dfdx}")

    C = _fornberg_table(order, x0, x)
    if dfdx:
        d, e = _hermite_weights(order, x0, x, C)
        return to_array(d, dtype), to_array(e, dtype)

    c = C[:, order].copy()
    # round-off leaves a nonzero sum; derivative weights must annihilate constants
    if order != 0:
        c[N // 2] -= c.sum()
    return to_array(c, dtype)


def fdm_grid(x_min: float, x_max: float, dx: float, *, dtype=None) -> Float[Array, "n"]:
    """uniform grid from x_min to x_max with spacing close to dx

    Args:
        x_min (float): the first grid point
        x_max (float): the last grid point
        dx (float): the requested spacing (> 0)

    Returns:
        x (Array): round((x_max - x_min)/dx) + 1 equally spaced points
    """
    check_interval(x_min, x_max)
    if not dx > 0:
        raise ValueError(f"dx must be > 0, got dx={dx}")
    n = int(round((x_max - x_min) / dx)) + 1
    return to_array(np.linspace(x_min, x_max, n), dtype)
