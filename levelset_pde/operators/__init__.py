"""
Finite difference operators for levelset_pde.

Conceptual Hierarchy:
    Stencils (operators/stencils/)
        ↓ (fixed coefficients, ghost padding)
    Differential Operators (operators/differential/)
        ↓ (derivative bundle, Godunov gradient)
    Interface update (level_set/)
"""

from levelset_pde.operators.differential import (
    AxisDerivatives,
    DerivativeBundle,
    FiniteDifferenceDerivatives,
    GodunovNormalGradient,
    compute_derivatives,
    godunov_gradient_magnitude,
)

__all__ = [
    "AxisDerivatives",
    "DerivativeBundle",
    "FiniteDifferenceDerivatives",
    "GodunovNormalGradient",
    "compute_derivatives",
    "godunov_gradient_magnitude",
]
