from pdesuite._src.finite_difference.dissipation import dissipation_order, dissipation_wts
from pdesuite._src.finite_difference.fornberg import fdm_grid, fornberg_calculate_wts

__all__ = [
    "dissipation_order",
    "dissipation_wts",
    "fdm_grid",
    "fornberg_calculate_wts",
]
