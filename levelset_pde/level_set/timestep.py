"""
CFL time step selection for the explicit interface update.

    maxSpeed = max( max(|Vₓ| + |Vᵧ|), max(|H_normal|) )
    dt       = α / (maxSpeed + 4b)

where α is the CFL coefficient and b the curvature coefficient. The 4b term
bounds the parabolic curvature operator (its stability limit scales with
1/h², folded into b by convention), so one global step covers all three
motions.

Invariant: dt · (maxSpeed + 4b) == α exactly (up to rounding).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from levelset_pde.utils.exceptions import validate_parameter_value

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from levelset_pde.types import VelocityField

CURVATURE_STABILITY_FACTOR = 4.0
_FLOAT_MAX = float(np.finfo(np.float64).max)


def max_wave_speed(velocity: VelocityField, normal_term: NDArray[np.float64]) -> float:
    """
    Largest local wave speed over the grid.

    Combines the advective bound |Vₓ| + |Vᵧ| and the magnitude of the normal
    motion term. Empty grids have speed 0.
    """
    if normal_term.size == 0:
        return 0.0
    advective = float(np.max(np.abs(velocity.x) + np.abs(velocity.y)))
    normal = float(np.max(np.abs(normal_term)))
    return max(advective, normal)


def stable_timestep(max_speed: float, curvature_coefficient: float, cfl_coefficient: float) -> float:
    """
    dt = cfl / (max_speed + 4 * curvature_coefficient).

    Raises:
        ConfigurationError: If curvature_coefficient <= 0, cfl_coefficient <= 0,
            or max_speed is negative or not finite
    """
    validate_parameter_value(
        curvature_coefficient,
        "curvature_coefficient",
        valid_range=(0.0, math.inf),
        component="stable_timestep",
        exclusive_lower=True,
    )
    validate_parameter_value(
        cfl_coefficient,
        "cfl_coefficient",
        valid_range=(0.0, math.inf),
        component="stable_timestep",
        exclusive_lower=True,
    )
    validate_parameter_value(max_speed, "max_speed", valid_range=(0.0, _FLOAT_MAX), component="stable_timestep")

    return cfl_coefficient / (max_speed + CURVATURE_STABILITY_FACTOR * curvature_coefficient)


def select_timestep(
    velocity: VelocityField,
    normal_term: NDArray[np.float64],
    curvature_coefficient: float,
    cfl_coefficient: float = 0.9,
) -> float:
    """
    Select the largest stable explicit time step.

    Args:
        velocity: External velocity components
        normal_term: H_normal = a|∇φ| on the grid
        curvature_coefficient: b > 0
        cfl_coefficient: α, stable in (0, 1) (default: 0.9)

    Returns:
        dt > 0
    """
    return stable_timestep(max_wave_speed(velocity, normal_term), curvature_coefficient, cfl_coefficient)
