from loguru import logger

from pdesuite._src.chebyshev import (
    MATRIX_CUTOFF,
    Cheb1Coeffs2ValsOp,
    Cheb1Vals2CoeffsOp,
    Cheb2Coeffs2ValsOp,
    Cheb2Vals2CoeffsOp,
    ChebCumsumOp,
    ChebyshevGrid1D,
    bary,
    bary_diffmat,
    bary_weights,
    barymat,
    cheb1_amat,
    cheb1_angles,
    cheb1_barywts,
    cheb1_coeffs2vals,
    cheb1_cumsummat,
    cheb1_diffmat,
    cheb1_pts,
    cheb1_quadwts,
    cheb1_smat,
    cheb1_vals2coeffs,
    cheb2_amat,
    cheb2_angles,
    cheb2_barywts,
    cheb2_coeffs2vals,
    cheb2_cumsummat,
    cheb2_diffmat,
    cheb2_pts,
    cheb2_quadwts,
    cheb2_smat,
    cheb2_vals2coeffs,
    cheb_angles,
    cheb_barywts,
    cheb_clenshaw,
    cheb_coeffs_cumsummat,
    cheb_cumsum,
    cheb_cumsummat,
    cheb_diffmat,
    cheb_feval,
    cheb_pts,
    cheb_quadwts,
    cheb_rectdiff,
    cheb_rectdiff1,
    cheb_rectdiff2,
    cheb_rectint,
    ultra_convertmat,
    ultra_diffmat,
    ultra_multmat,
    ultra_sphankel,
    ultra_spconvert,
)
from pdesuite._src.exceptions import (
    DimensionMismatchError,
    InsufficientNodesError,
    InvalidSizeError,
    PDESuiteError,
)
from pdesuite._src.finite_difference import (
    dissipation_order,
    dissipation_wts,
    fdm_grid,
    fornberg_calculate_wts,
)

# library logging is opt-in: logger.enable("pdesuite")
logger.disable("pdesuite")

__all__ = [
    # Errors
    "PDESuiteError",
    "InvalidSizeError",
    "DimensionMismatchError",
    "InsufficientNodesError",
    # Chebyshev points and weights
    "cheb_angles",
    "cheb1_angles",
    "cheb2_angles",
    "cheb_pts",
    "cheb1_pts",
    "cheb2_pts",
    "cheb_barywts",
    "cheb1_barywts",
    "cheb2_barywts",
    "cheb_quadwts",
    "cheb1_quadwts",
    "cheb2_quadwts",
    # Chebyshev transforms
    "MATRIX_CUTOFF",
    "cheb1_amat",
    "cheb1_smat",
    "cheb2_amat",
    "cheb2_smat",
    "cheb1_vals2coeffs",
    "cheb1_coeffs2vals",
    "cheb2_vals2coeffs",
    "cheb2_coeffs2vals",
    "Cheb1Coeffs2ValsOp",
    "Cheb1Vals2CoeffsOp",
    "Cheb2Coeffs2ValsOp",
    "Cheb2Vals2CoeffsOp",
    "cheb_clenshaw",
    "cheb_feval",
    "cheb_cumsum",
    "ChebCumsumOp",
    # Barycentric
    "bary",
    "bary_weights",
    "barymat",
    "bary_diffmat",
    # Dense matrices
    "cheb_diffmat",
    "cheb1_diffmat",
    "cheb2_diffmat",
    "cheb_rectdiff",
    "cheb_rectdiff1",
    "cheb_rectdiff2",
    "cheb_cumsummat",
    "cheb1_cumsummat",
    "cheb2_cumsummat",
    "cheb_coeffs_cumsummat",
    "cheb_rectint",
    # Ultraspherical
    "ultra_spconvert",
    "ultra_convertmat",
    "ultra_diffmat",
    "ultra_sphankel",
    "ultra_multmat",
    # Grid
    "ChebyshevGrid1D",
    # Finite differences
    "fornberg_calculate_wts",
    "fdm_grid",
    "dissipation_order",
    "dissipation_wts",
]
