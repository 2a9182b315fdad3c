"""
Kreiss–Oliger Dissipation
=========================

Artificial dissipation added to finite-difference right-hand sides to damp
grid-scale noise:

    ∂ₜu += (σ/h) · Σₖ wₖ u_{i-r+k},   k = 0, ..., 2r

with wₖ = (-1)^(r+1) (-1)ᵏ C(2r, k) / 2^(2r), i.e. the scaled 2r-th
undivided difference (-1)^(r+1) δ²ʳ / 2^(2r). A scheme of accuracy order
2r - 2 needs dissipation of order 2r so the damping does not lower its
accuracy.

References:
-----------
[1] Kreiss, H.-O. & Oliger, J. (1973). Methods for the approximate solution
    of time dependent problems. GARP Publication Series 10.
[2] Babiuc, M. et al. (2008). Implementation of standard testbeds for
    numerical relativity. Class. Quantum Grav. 25, 125012.
"""

import numpy as np
from jaxtyping import Array, Float
from scipy.special import comb

from pdesuite._src.utils import to_array


def _check_even(value: int, name: str) -> int:
    if int(value) != value or value < 2 or int(value) % 2 != 0:
        raise ValueError(f"{name} must be an even integer ≥ 2, got {name}={value}")
    return int(value)


def dissipation_order(acc_order: int) -> int:
    """dissipation order 2r for a scheme of accuracy order 2r - 2

    Args:
        acc_order (int): the even accuracy order of the finite differences

    Returns:
        diss_order (int): acc_order + 2
    """
    return _check_even(acc_order, "acc_order") + 2


def dissipation_wts(diss_order: int, *, dtype=None) -> Float[Array, "n"]:
    """Kreiss–Oliger stencil weights of the given (even) order

    Args:
        diss_order (int): the dissipation order 2r
        dtype (optional): float type of the weights.

    Returns:
        w (Array): the 2r + 1 symmetric weights; multiply by σ/h before use

    Example:
        >>> dissipation_wts(4)   # -[1, -4, 6, -4, 1] / 16
    """
    diss_order = _check_even(diss_order, "diss_order")
    r = diss_order // 2
    k = np.arange(diss_order + 1)
    w = (-1.0) ** (r + 1) * (-1.0) ** k * comb(diss_order, k) / 2.0**diss_order
    return to_array(w, dtype)
