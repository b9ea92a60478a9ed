"""
Interface protocols for the level set update.

The interface update consumes two collaborators that callers may replace:

- DerivativeProvider: one-sided, centered and second derivatives of a field
- NormalGradientEngine: Godunov upwind |∇φ| for a signed normal speed

Both are structural protocols; any callable with the right signature works.

Usage:
    from levelset_pde.types import DerivativeProvider

    if not isinstance(provider, DerivativeProvider):
        raise TypeError("update_interface requires a DerivativeProvider")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, NamedTuple, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from levelset_pde.operators.differential.derivatives import DerivativeBundle


class VelocityField(NamedTuple):
    """External advection velocity sampled on the level set grid."""

    x: NDArray[np.float64]
    y: NDArray[np.float64]


@runtime_checkable
class DerivativeProvider(Protocol):
    """
    Computes all finite differences of a 2D field needed for one update.

    Required methods:
        __call__(phi): DerivativeBundle with forward/backward/centered first
            derivatives along both axes and dxx, dxy, dyy, each shaped like phi
    """

    def __call__(self, phi: NDArray[np.float64]) -> DerivativeBundle: ...


@runtime_checkable
class NormalGradientEngine(Protocol):
    """
    Computes the Godunov upwind gradient magnitude for motion in the normal direction.

    Required methods:
        __call__(phi, speed): |∇φ| with per-point upwinding decided by the
            sign of speed, shaped like phi
    """

    def __call__(self, phi: NDArray[np.float64], speed: NDArray[np.float64]) -> NDArray[np.float64]: ...


def as_velocity_field(velocity: Any) -> VelocityField:
    """
    Normalize a velocity argument to a VelocityField of float arrays.

    Accepts a VelocityField, any object with x and y attributes, a mapping with
    keys "x" and "y", or an (x, y) pair.

    Raises:
        TypeError: If velocity cannot be interpreted as two components
    """
    if isinstance(velocity, VelocityField):
        vx, vy = velocity
    elif isinstance(velocity, Mapping):
        if "x" not in velocity or "y" not in velocity:
            raise TypeError(f"Velocity mapping needs keys 'x' and 'y', got {sorted(velocity)}")
        vx, vy = velocity["x"], velocity["y"]
    elif hasattr(velocity, "x") and hasattr(velocity, "y"):
        vx, vy = velocity.x, velocity.y
    elif isinstance(velocity, (Sequence, np.ndarray)) and len(velocity) == 2:
        vx, vy = velocity
    else:
        raise TypeError(
            "velocity must be a VelocityField, a mapping with 'x' and 'y', or an (x, y) pair, "
            f"got {type(velocity).__name__}"
        )
    return VelocityField(np.asarray(vx, dtype=np.float64), np.asarray(vy, dtype=np.float64))


__all__ = [
    "DerivativeProvider",
    "NormalGradientEngine",
    "VelocityField",
    "as_velocity_field",
]
