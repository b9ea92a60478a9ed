"""
Differential operators for 2D level set fields.

- FiniteDifferenceDerivatives / compute_derivatives: derivative provider
- GodunovNormalGradient / godunov_gradient_magnitude: upwind |∇φ| for normal motion
"""

from levelset_pde.operators.differential.derivatives import (
    AxisDerivatives,
    DerivativeBundle,
    FiniteDifferenceDerivatives,
    compute_derivatives,
)
from levelset_pde.operators.differential.godunov import GodunovNormalGradient, godunov_gradient_magnitude

__all__ = [
    "AxisDerivatives",
    "DerivativeBundle",
    "FiniteDifferenceDerivatives",
    "GodunovNormalGradient",
    "compute_derivatives",
    "godunov_gradient_magnitude",
]
