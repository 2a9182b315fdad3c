import jax
import jax.numpy as jnp
import numpy as np
from jaxtyping import Array

from pdesuite._src.exceptions import DimensionMismatchError, InvalidSizeError


def resolve_dtype(dtype=None) -> np.dtype:
    """the floating point type an operator is returned in

    Args:
        dtype (optional): a requested float type. Defaults to None, which
            means double precision when JAX x64 mode is enabled and JAX's
            default float otherwise.

    Returns:
        dtype (np.dtype): the canonical JAX dtype
    """
    if dtype is None:
        dtype = jnp.float64
    return jax.dtypes.canonicalize_dtype(dtype)


def to_array(a: np.ndarray, dtype=None) -> Array:
    """casts a numpy helper result to a JAX array of the requested precision"""
    return jnp.asarray(a, dtype=resolve_dtype(dtype))


def check_size(n: int, minimum: int = 1, name: str = "n") -> int:
    """eagerly validates an integer size

    Args:
        n (int): the size to check
        minimum (int, optional): the smallest admissible value. Defaults to 1.
        name (str, optional): the argument name used in the message.

    Returns:
        n (int): the size as a python int
    """
    if int(n) != n:
        raise InvalidSizeError(f"{name} must be an integer, got {name}={n}")
    n = int(n)
    if n < minimum:
        raise InvalidSizeError(f"{name} must be ≥ {minimum}, got {name}={n}")
    return n


def check_length(u: Array, n: int, name: str = "input") -> None:
    """raises if the last axis of u does not have length n"""
    if u.ndim == 0 or u.shape[-1] != n:
        raise DimensionMismatchError(
            f"{name} must have length {n} along its last axis, got shape {u.shape}"
        )


def check_interval(x_min: float, x_max: float) -> None:
    if not x_max > x_min:
        raise ValueError(f"x_max must be > x_min, got [{x_min}, {x_max}]")


def map_to_interval(x: np.ndarray, x_min: float, x_max: float) -> np.ndarray:
    """affine map of reference points on [-1, 1] onto [x_min, x_max]

    Equation:
        x_mapped = (x_max + x_min)/2 + (x_max - x_min)/2 * x
    """
    return 0.5 * (x_max + x_min) + 0.5 * (x_max - x_min) * x


def derivative_scale(x_min: float, x_max: float) -> float:
    """chain-rule factor d/dx = 2/(x_max - x_min) d/dξ"""
    return 2.0 / (x_max - x_min)


def integral_scale(x_min: float, x_max: float) -> float:
    """chain-rule factor dx = (x_max - x_min)/2 dξ"""
    return 0.5 * (x_max - x_min)


def as_float_array(u) -> Array:
    """converts the input to a JAX array, promoting integers to the default float"""
    u = jnp.asarray(u)
    if not jnp.issubdtype(u.dtype, jnp.floating):
        u = u.astype(resolve_dtype(None))
    return u
