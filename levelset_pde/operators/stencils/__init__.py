"""
Finite Difference Stencils for levelset_pde.

Available Stencils:
    First-order derivatives:
        - gradient_central: 2nd-order, symmetric
        - gradient_forward: 1st-order, positive bias
        - gradient_backward: 1st-order, negative bias

    Second-order derivatives:
        - second_derivative: Standard 3-point stencil
        - cross_derivative: 4-point mixed stencil

    Utilities:
        - pad_with_ghosts / strip_ghosts: One-layer ghost cells

Usage:
    >>> from levelset_pde.operators.stencils import gradient_central, pad_with_ghosts
"""

from levelset_pde.operators.stencils.finite_difference import (
    BOUNDARY_MODES,
    cross_derivative,
    gradient_backward,
    gradient_central,
    gradient_forward,
    pad_with_ghosts,
    second_derivative,
    strip_ghosts,
)

__all__ = [
    "BOUNDARY_MODES",
    "cross_derivative",
    "gradient_backward",
    "gradient_central",
    "gradient_forward",
    "pad_with_ghosts",
    "second_derivative",
    "strip_ghosts",
]
