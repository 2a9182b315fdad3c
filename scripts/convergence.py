"""
Convergence Study
=================

This script measures how fast the operators in `pdesuite` converge on a
smooth test function as the resolution grows.

Test Function:
--------------
  f(x) = exp(sin(πx)) on [x_min, x_max]

with derivative f'(x) = π cos(πx) f(x).

Measurements:
-------------
- **Chebyshev differentiation**: max |D f - f'| at the 2nd-kind points,
  with D = cheb2_diffmat(n). The error should fall geometrically with n.

- **Chebyshev integration**: max |Q f' - (f - f(x_min))| with
  Q = cheb2_cumsummat(n).

- **Finite differences**: max |Σ cⱼ f(xⱼ) - f'(xᵢ)| over the interior of a
  uniform grid of spacing 1/n, using a centred Fornberg stencil of the given
  accuracy order. The error should fall like n^(-acc_order).

Usage:
------
The script is run from the command line, with parameters controlled by `cyclopts`.

Example:
  python scripts/convergence.py --n-min 8 --n-max 64 --acc-order 4
"""

from typing import Annotated

import cyclopts
import jax
import jax.numpy as jnp
from jaxtyping import Array, Float
from loguru import logger

from pdesuite import (
    cheb2_cumsummat,
    cheb2_diffmat,
    cheb2_pts,
    fdm_grid,
    fornberg_calculate_wts,
)

# JAX configuration
jax.config.update("jax_enable_x64", True)

# Initialize the cyclopts app
app = cyclopts.App()


# ============================================================================
# 1. Test Function
# ============================================================================


def f(x: Float[Array, "N"]) -> Float[Array, "N"]:
    return jnp.exp(jnp.sin(jnp.pi * x))


def df(x: Float[Array, "N"]) -> Float[Array, "N"]:
    return jnp.pi * jnp.cos(jnp.pi * x) * f(x)


# ============================================================================
# 2. Error Measurements
# ============================================================================


def chebyshev_errors(n: int, x_min: float, x_max: float) -> tuple[float, float]:
    """Max error of the 2nd-kind differentiation and integration matrices."""
    x = cheb2_pts(n, x_min, x_max)
    D = cheb2_diffmat(n, 1, x_min, x_max)
    Q = cheb2_cumsummat(n, x_min, x_max)
    err_diff = jnp.max(jnp.abs(D @ f(x) - df(x)))
    err_int = jnp.max(jnp.abs(Q @ df(x) - (f(x) - f(x[0]))))
    return float(err_diff), float(err_int)


def finite_difference_error(n: int, x_min: float, x_max: float, acc_order: int) -> float:
    """Max error of a centred first-derivative stencil on a uniform grid."""
    x = fdm_grid(x_min, x_max, (x_max - x_min) / n)
    half = acc_order // 2
    # uniform grid: one set of weights serves every interior point
    offsets = jnp.arange(-half, half + 1) * (x[1] - x[0])
    c = fornberg_calculate_wts(1, 0.0, offsets)
    fx = f(x)
    interior = jnp.arange(half, x.shape[0] - half)
    windows = interior[:, None] + jnp.arange(-half, half + 1)[None, :]
    approx = fx[windows] @ c
    return float(jnp.max(jnp.abs(approx - df(x[interior]))))


# ============================================================================
# 3. Main Logic
# ============================================================================


@app.default
def run_convergence(
    n_min: Annotated[
        int, cyclopts.Option("--n-min", help="Smallest resolution.")
    ] = 8,
    n_max: Annotated[
        int, cyclopts.Option("--n-max", help="Largest resolution.")
    ] = 64,
    acc_order: Annotated[
        int, cyclopts.Option("--acc-order", help="Accuracy order of the finite-difference stencil (even).")
    ] = 4,
    x_min: Annotated[
        float, cyclopts.Option("--x-min", help="Left end of the interval.")
    ] = -1.0,
    x_max: Annotated[
        float, cyclopts.Option("--x-max", help="Right end of the interval.")
    ] = 1.0,
):
    """
    Print the error of each operator for n = n_min, 2 n_min, ... ≤ n_max.
    """
    logger.info("=" * 60)
    logger.info("pdesuite convergence study")
    logger.info("=" * 60)
    logger.info(f"Test function: exp(sin(pi x)) on [{x_min}, {x_max}]")

    n = n_min
    while n <= n_max:
        err_diff, err_int = chebyshev_errors(n, x_min, x_max)
        err_fd = finite_difference_error(n, x_min, x_max, acc_order)
        logger.info(
            f"n={n:5d}  cheb diff={err_diff:.3e}  cheb int={err_int:.3e}  "
            f"fd (order {acc_order})={err_fd:.3e}"
        )
        n *= 2

    logger.success("Convergence study complete!")


if __name__ == "__main__":
    app()
