"""
Chebyshev spectral operators on [-1, 1] or a mapped interval.

Exported:
    points, angles, barycentric and quadrature weights
    value ↔ coefficient transforms and their precomputed operators
    Clenshaw evaluation and coefficient-space integration
    barycentric interpolation and differentiation
    dense differentiation and integration matrices
    sparse ultraspherical operators
    ChebyshevGrid1D
"""

from .barycentric import bary, bary_diffmat, bary_weights, barymat
from .grid import ChebyshevGrid1D
from .matrices import (
    cheb1_cumsummat,
    cheb1_diffmat,
    cheb2_cumsummat,
    cheb2_diffmat,
    cheb_coeffs_cumsummat,
    cheb_cumsummat,
    cheb_diffmat,
    cheb_rectdiff,
    cheb_rectdiff1,
    cheb_rectdiff2,
    cheb_rectint,
)
from .points import (
    cheb1_angles,
    cheb1_barywts,
    cheb1_pts,
    cheb2_angles,
    cheb2_barywts,
    cheb2_pts,
    cheb_angles,
    cheb_barywts,
    cheb_pts,
)
from .transforms import (
    MATRIX_CUTOFF,
    Cheb1Coeffs2ValsOp,
    Cheb1Vals2CoeffsOp,
    Cheb2Coeffs2ValsOp,
    Cheb2Vals2CoeffsOp,
    ChebCumsumOp,
    cheb1_amat,
    cheb1_coeffs2vals,
    cheb1_quadwts,
    cheb1_smat,
    cheb1_vals2coeffs,
    cheb2_amat,
    cheb2_coeffs2vals,
    cheb2_quadwts,
    cheb2_smat,
    cheb2_vals2coeffs,
    cheb_clenshaw,
    cheb_cumsum,
    cheb_feval,
    cheb_quadwts,
)
from .ultraspherical import (
    ultra_convertmat,
    ultra_diffmat,
    ultra_multmat,
    ultra_sphankel,
    ultra_spconvert,
)

__all__ = [
    "MATRIX_CUTOFF",
    "Cheb1Coeffs2ValsOp",
    "Cheb1Vals2CoeffsOp",
    "Cheb2Coeffs2ValsOp",
    "Cheb2Vals2CoeffsOp",
    "ChebCumsumOp",
    "ChebyshevGrid1D",
    "bary",
    "bary_diffmat",
    "bary_weights",
    "barymat",
    "cheb1_amat",
    "cheb1_angles",
    "cheb1_barywts",
    "cheb1_coeffs2vals",
    "cheb1_cumsummat",
    "cheb1_diffmat",
    "cheb1_pts",
    "cheb1_quadwts",
    "cheb1_smat",
    "cheb1_vals2coeffs",
    "cheb2_amat",
    "cheb2_angles",
    "cheb2_barywts",
    "cheb2_coeffs2vals",
    "cheb2_cumsummat",
    "cheb2_diffmat",
    "cheb2_pts",
    "cheb2_quadwts",
    "cheb2_smat",
    "cheb2_vals2coeffs",
    "cheb_angles",
    "cheb_barywts",
    "cheb_clenshaw",
    "cheb_coeffs_cumsummat",
    "cheb_cumsum",
    "cheb_cumsummat",
    "cheb_diffmat",
    "cheb_feval",
    "cheb_pts",
    "cheb_quadwts",
    "cheb_rectdiff",
    "cheb_rectdiff1",
    "cheb_rectdiff2",
    "cheb_rectint",
    "ultra_convertmat",
    "ultra_diffmat",
    "ultra_multmat",
    "ultra_sphankel",
    "ultra_spconvert",
]
