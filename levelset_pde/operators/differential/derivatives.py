"""
Finite difference derivative provider for 2D level set fields.

Computes, in one pass, every derivative the interface update needs:

    dx, dy:  forward (D⁺), backward (D⁻) and centered (D⁰) first differences
    dxx, dyy: 3-point second differences
    dxy:     4-point mixed difference

Conventions:
    The field is indexed phi[i, j] with axis 0 = x and axis 1 = y, matching
    np.meshgrid(x, y, indexing="ij"). Boundary values use one ghost layer
    (see operators/stencils/finite_difference.py).

References:
    - Osher & Fedkiw (2003): Level Set Methods and Dynamic Implicit Surfaces, Chapter 1.4, 3
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from levelset_pde.config import DerivativeConfig, build_config
from levelset_pde.operators.stencils.finite_difference import (
    cross_derivative,
    gradient_backward,
    gradient_central,
    gradient_forward,
    pad_with_ghosts,
    second_derivative,
    strip_ghosts,
)
from levelset_pde.utils.exceptions import DimensionMismatchError

if TYPE_CHECKING:
    from numpy.typing import NDArray


@dataclass(frozen=True)
class AxisDerivatives:
    """One-sided and centered first differences along one axis."""

    forward: NDArray[np.float64]
    backward: NDArray[np.float64]
    centered: NDArray[np.float64]


@dataclass(frozen=True)
class DerivativeBundle:
    """
    Per-step derivative data for a 2D field.

    Attributes:
        dx: First differences along axis 0
        dy: First differences along axis 1
        dxx: Second difference along axis 0
        dxy: Mixed difference
        dyy: Second difference along axis 1
    """

    dx: AxisDerivatives
    dy: AxisDerivatives
    dxx: NDArray[np.float64]
    dxy: NDArray[np.float64]
    dyy: NDArray[np.float64]

    @property
    def shape(self) -> tuple[int, ...]:
        return self.dxx.shape

    def centered_gradient_squared(self) -> NDArray[np.float64]:
        """φx² + φy² from the centered first differences."""
        return self.dx.centered**2 + self.dy.centered**2


class FiniteDifferenceDerivatives:
    """
    Default DerivativeProvider on a uniform 2D grid.

    Attributes:
        spacing: (hx, hy) grid spacing
        boundary: Ghost cell rule ("extrapolate", "neumann", "periodic")

    Example:
        >>> provider = FiniteDifferenceDerivatives(spacing=(0.1, 0.1))
        >>> d = provider(phi)
        >>> d.dx.backward  # D⁻x φ
    """

    def __init__(
        self,
        spacing: tuple[float, float] = (1.0, 1.0),
        boundary: str = "extrapolate",
    ):
        config = build_config(
            DerivativeConfig, component="FiniteDifferenceDerivatives", spacing=spacing, boundary=boundary
        )
        self.config = config
        self.spacing = config.spacing
        self.boundary = config.boundary

    def __call__(self, phi: NDArray[np.float64]) -> DerivativeBundle:
        """
        Compute the derivative bundle of phi.

        Raises:
            DimensionMismatchError: If phi is not 2-dimensional
        """
        phi = np.asarray(phi, dtype=np.float64)
        if phi.ndim != 2:
            raise DimensionMismatchError(
                array_name="phi",
                provided_shape=phi.shape,
                expected_shape=("Nx", "Ny"),
                component=type(self).__name__,
                context="level set field must be 2-dimensional",
            )

        if phi.size == 0:
            # Ghost padding cannot extend a zero-length axis
            empty = AxisDerivatives(np.zeros_like(phi), np.zeros_like(phi), np.zeros_like(phi))
            return DerivativeBundle(
                dx=empty, dy=empty, dxx=np.zeros_like(phi), dxy=np.zeros_like(phi), dyy=np.zeros_like(phi)
            )

        hx, hy = self.spacing
        padded = pad_with_ghosts(phi, self.boundary)

        def axis_derivatives(axis: int, h: float) -> AxisDerivatives:
            return AxisDerivatives(
                forward=strip_ghosts(gradient_forward(padded, axis=axis, h=h)),
                backward=strip_ghosts(gradient_backward(padded, axis=axis, h=h)),
                centered=strip_ghosts(gradient_central(padded, axis=axis, h=h)),
            )

        return DerivativeBundle(
            dx=axis_derivatives(0, hx),
            dy=axis_derivatives(1, hy),
            dxx=strip_ghosts(second_derivative(padded, axis=0, h=hx)),
            dxy=strip_ghosts(cross_derivative(padded, hx, hy)),
            dyy=strip_ghosts(second_derivative(padded, axis=1, h=hy)),
        )

    def __repr__(self) -> str:
        return f"FiniteDifferenceDerivatives(spacing={self.spacing}, boundary='{self.boundary}')"


def compute_derivatives(
    phi: NDArray[np.float64],
    spacing: tuple[float, float] = (1.0, 1.0),
    boundary: str = "extrapolate",
) -> DerivativeBundle:
    """Functional form of FiniteDifferenceDerivatives(spacing, boundary)(phi)."""
    return FiniteDifferenceDerivatives(spacing=spacing, boundary=boundary)(phi)
