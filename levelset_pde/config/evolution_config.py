"""
Interface update configuration classes.

This module provides configuration for one explicit level set step:
- InterfaceUpdateConfig: curvature and CFL coefficients, degenerate-gradient policy
- DerivativeConfig: grid spacing and boundary handling for the finite differences
"""

from __future__ import annotations

import warnings
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from levelset_pde.utils.exceptions import ConfigurationError
from levelset_pde.utils.ls_logging import get_logger

logger = get_logger(__name__)

DEFAULT_CFL_COEFFICIENT = 0.9


class InterfaceUpdateConfig(BaseModel):
    """
    Coefficients and policies for a single interface update.

    Attributes
    ----------
    curvature_coefficient : float
        Scale b of the mean curvature term. Must be strictly positive; a value
        of zero or below makes the explicit step unstable.
    cfl_coefficient : float
        Fraction of the stability limit used as the time step (default: 0.9).
        Values >= 1 are accepted with a UserWarning.
    degenerate_gradient : Literal["zero", "regularize"]
        Curvature at points with φx² + φy² = 0. "zero" contributes no curvature
        there; "regularize" adds gradient_epsilon² to every denominator.
    gradient_epsilon : float
        Regularization used by the "regularize" policy (default: 1e-10)
    check_finite : bool
        Reject NaN/Inf inputs and verify the new field is finite (default: True)
    """

    model_config = ConfigDict(validate_assignment=True, frozen=False)

    curvature_coefficient: float = Field(..., gt=0.0, description="Mean curvature coefficient b > 0")
    cfl_coefficient: float = Field(DEFAULT_CFL_COEFFICIENT, gt=0.0, description="CFL coefficient, stable in (0, 1)")
    degenerate_gradient: Literal["zero", "regularize"] = "zero"
    gradient_epsilon: float = Field(1e-10, gt=0.0)
    check_finite: bool = True

    @field_validator("cfl_coefficient")
    @classmethod
    def warn_unstable_cfl(cls, v: float) -> float:
        """Accept CFL coefficients >= 1 but flag them as stability-unsafe."""
        if v >= 1.0:
            msg = f"CFL coefficient {v} >= 1: explicit update stability is not guaranteed"
            warnings.warn(msg, UserWarning, stacklevel=2)
            logger.warning(msg)
        return v


class DerivativeConfig(BaseModel):
    """
    Finite difference settings for the default derivative provider.

    Attributes
    ----------
    spacing : tuple[float, float]
        Grid spacing (hx, hy) along axis 0 and axis 1 (default: (1.0, 1.0))
    boundary : Literal["extrapolate", "neumann", "periodic"]
        Ghost cell rule: linear extrapolation, copied edge value, or wrap-around
        (default: extrapolate)
    """

    model_config = ConfigDict(frozen=True)

    spacing: tuple[float, float] = (1.0, 1.0)
    boundary: Literal["extrapolate", "neumann", "periodic"] = "extrapolate"

    @field_validator("spacing")
    @classmethod
    def validate_spacing(cls, v: tuple[float, float]) -> tuple[float, float]:
        """Grid spacing must be positive along both axes."""
        if any(not h > 0 for h in v):
            raise ValueError(f"spacing must be positive along both axes, got {v}")
        return v


def build_config(model: type[BaseModel], component: str | None = None, **values) -> BaseModel:
    """
    Construct a config model, translating pydantic errors into ConfigurationError.

    Args:
        model: Config class to instantiate
        component: Name reported in the error message
        **values: Field values

    Raises:
        ConfigurationError: On the first invalid field
    """
    try:
        return model(**values)
    except ValidationError as err:
        first = err.errors()[0]
        parameter = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise ConfigurationError(
            parameter_name=parameter,
            provided_value=first.get("input"),
            component=component or model.__name__,
            reason=first["msg"],
        ) from err
