"""
Level set snapshot container.

LevelSetFunction holds φ at one instant together with the derivative
provider used to differentiate it, and exposes the geometric quantities
read off the field between updates:

    n(x) = ∇φ/|∇φ|   outward unit normal (centered differences)
    κ(x) = ∇·n       mean curvature
    {|φ| < w}        band around the zero level set

The zero level set {x : φ(x) = 0} represents the interface.

References:
- Osher & Fedkiw (2003): Level Set Methods and Dynamic Implicit Surfaces, Chapter 1
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from levelset_pde.level_set.curvature import mean_curvature
from levelset_pde.operators.differential.derivatives import FiniteDifferenceDerivatives
from levelset_pde.utils.exceptions import DimensionMismatchError

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from levelset_pde.types import DerivativeProvider


class LevelSetFunction:
    """
    Container for a 2D level set function φ and derived quantities.

    Attributes:
        phi: Level set values on the grid, shape (Nx, Ny)
        derivative_provider: Provider used for normals and curvature

    Example:
        >>> # Circle with radius 0.3 centered at (0.5, 0.5)
        >>> phi = np.sqrt((X - 0.5) ** 2 + (Y - 0.5) ** 2) - 0.3
        >>> ls = LevelSetFunction(phi, FiniteDifferenceDerivatives(spacing=(dx, dx)))
        >>> interface = ls.interface_mask(width=2 * dx)
        >>> kappa = ls.get_curvature()[interface]  # ≈ 1/0.3
    """

    def __init__(
        self,
        phi: NDArray[np.float64],
        derivative_provider: DerivativeProvider | None = None,
    ):
        """
        Initialize level set function.

        Args:
            phi: Level set values, shape (Nx, Ny)
            derivative_provider: Derivative Provider (default: unit spacing)

        Raises:
            DimensionMismatchError: If phi is not 2-dimensional
        """
        phi = np.array(phi, dtype=np.float64)
        if phi.ndim != 2:
            raise DimensionMismatchError(
                array_name="phi",
                provided_shape=phi.shape,
                expected_shape=("Nx", "Ny"),
                component=type(self).__name__,
            )
        self.phi = phi
        self.derivative_provider = (
            derivative_provider if derivative_provider is not None else FiniteDifferenceDerivatives()
        )

    @property
    def dimension(self) -> int:
        """Spatial dimension of the level set."""
        return self.phi.ndim

    @property
    def shape(self) -> tuple[int, ...]:
        return self.phi.shape

    def interface_mask(self, width: float = 0.05) -> NDArray[np.bool_]:
        """
        Boolean mask of the band |φ| < width around the zero level set.

        Example:
            >>> mask = ls.interface_mask(width=3 * dx)
            >>> interface_phi = ls.phi[mask]
        """
        return np.abs(self.phi) < width

    def get_normal(self) -> NDArray[np.float64]:
        """
        Compute the unit normal field n = ∇φ/|∇φ| from centered differences.

        The normal points from negative to positive φ. Zero-gradient points
        get a zero normal.

        Returns:
            Normal field, shape (2, Nx, Ny); normal[0] is nₓ, normal[1] is nᵧ
        """
        d = self.derivative_provider(self.phi)
        grad_phi = np.array([d.dx.centered, d.dy.centered])
        grad_mag = np.linalg.norm(grad_phi, axis=0)

        normal = np.zeros_like(grad_phi)
        np.divide(grad_phi, grad_mag, out=normal, where=grad_mag > 0)
        return normal

    def get_curvature(self, degenerate: str = "zero") -> NDArray[np.float64]:
        """
        Compute mean curvature κ = ∇·(∇φ/|∇φ|).

        For a circle of radius R, κ = 1/R on the interface. Zero-gradient
        points follow the degenerate policy of mean_curvature().
        """
        return mean_curvature(self.derivative_provider(self.phi), degenerate=degenerate)

    def __repr__(self) -> str:
        """String representation for debugging."""
        phi_min, phi_max = self.phi.min(), self.phi.max()
        interface_count = np.sum(self.interface_mask())

        return (
            f"LevelSetFunction(\n"
            f"  dimension={self.dimension},\n"
            f"  shape={self.phi.shape},\n"
            f"  range=[{phi_min:.3f}, {phi_max:.3f}],\n"
            f"  interface_points={interface_count}\n"
            f")"
        )
