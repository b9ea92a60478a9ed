"""
Finite Difference Stencils for levelset_pde.

Low-level stencil implementations used by the derivative provider. Stencils
operate on arrays with np.roll; boundary handling is done by padding the
field with one ghost layer first (pad_with_ghosts) and stripping it from the
result afterwards (strip_ghosts), so the wrap-around of np.roll only ever
touches ghost cells.

Stencil Types:
    - CENTRAL: 2nd-order accurate, symmetric, no directional bias
    - FORWARD: 1st-order accurate, uses u[i+1] - u[i]
    - BACKWARD: 1st-order accurate, uses u[i] - u[i-1]
    - SECOND: 3-point second derivative along one axis
    - CROSS: 4-point mixed derivative ∂²u/∂x∂y

Mathematical Background:
    Central:   ∂u/∂x   ≈ (u[i+1] - u[i-1]) / (2h)                         Error: O(h²)
    Forward:   ∂u/∂x   ≈ (u[i+1] - u[i]) / h                              Error: O(h)
    Backward:  ∂u/∂x   ≈ (u[i] - u[i-1]) / h                              Error: O(h)
    Second:    ∂²u/∂x² ≈ (u[i+1] - 2u[i] + u[i-1]) / h²                   Error: O(h²)
    Cross:     ∂²u/∂x∂y ≈ (u[i+1,j+1] - u[i+1,j-1] - u[i-1,j+1] + u[i-1,j-1]) / (4 hx hy)

Ghost Cells:
    extrapolate: g = 2u[0] - u[1]  (linear fields differentiate exactly up to the edge)
    neumann:     g = u[0]          (zero normal derivative)
    periodic:    g = u[-1]         (wrap-around)

Usage:
    >>> from levelset_pde.operators.stencils import gradient_forward, pad_with_ghosts
    >>> u_pad = pad_with_ghosts(u, "extrapolate")
    >>> du_dx = strip_ghosts(gradient_forward(u_pad, axis=0, h=0.1))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


BOUNDARY_MODES = ("extrapolate", "neumann", "periodic")


# =============================================================================
# First-Order Derivative Stencils
# =============================================================================


def gradient_central(u: NDArray, axis: int, h: float, xp: type = np) -> NDArray:
    """
    Central difference approximation for first derivative.

    Formula: ∂u/∂x ≈ (u[i+1] - u[i-1]) / (2h)

    Args:
        u: Input array
        axis: Axis along which to differentiate
        h: Grid spacing
        xp: Array module

    Returns:
        Approximation of ∂u/∂x with same shape as u

    Note:
        Uses periodic wrapping via np.roll. Pad with pad_with_ghosts() first
        for any other boundary rule.
    """
    return (xp.roll(u, -1, axis=axis) - xp.roll(u, 1, axis=axis)) / (2 * h)


def gradient_forward(u: NDArray, axis: int, h: float, xp: type = np) -> NDArray:
    """
    Forward difference approximation for first derivative.

    Formula: ∂u/∂x ≈ (u[i+1] - u[i]) / h

    Properties:
        - 1st-order accurate: O(h)
        - Biased in positive direction
        - Upwind choice for advection with negative velocity (v < 0)
    """
    return (xp.roll(u, -1, axis=axis) - u) / h


def gradient_backward(u: NDArray, axis: int, h: float, xp: type = np) -> NDArray:
    """
    Backward difference approximation for first derivative.

    Formula: ∂u/∂x ≈ (u[i] - u[i-1]) / h

    Properties:
        - 1st-order accurate: O(h)
        - Biased in negative direction
        - Upwind choice for advection with non-negative velocity (v >= 0)
    """
    return (u - xp.roll(u, 1, axis=axis)) / h


# =============================================================================
# Second-Order Derivative Stencils
# =============================================================================


def second_derivative(u: NDArray, axis: int, h: float, xp: type = np) -> NDArray:
    """
    Standard 3-point second derivative along one axis.

    Formula: ∂²u/∂x² ≈ (u[i+1] - 2u[i] + u[i-1]) / h²
    """
    return (xp.roll(u, -1, axis=axis) - 2 * u + xp.roll(u, 1, axis=axis)) / (h * h)


def cross_derivative(u: NDArray, hx: float, hy: float, xp: type = np) -> NDArray:
    """
    Mixed derivative ∂²u/∂x∂y on a 2D array (axis 0 = x, axis 1 = y).

    Formula: (u[i+1,j+1] - u[i+1,j-1] - u[i-1,j+1] + u[i-1,j-1]) / (4 hx hy)

    Computed as the central y-difference of the central x-difference, which
    expands to exactly the 4-point stencil above.
    """
    return gradient_central(gradient_central(u, axis=0, h=hx, xp=xp), axis=1, h=hy, xp=xp)


# =============================================================================
# Boundary Handling
# =============================================================================


def pad_with_ghosts(u: NDArray, mode: str = "extrapolate", xp: type = np) -> NDArray:
    """
    Pad every axis of u with one ghost layer.

    Args:
        u: Input array
        mode: "extrapolate", "neumann", or "periodic"
        xp: Array module

    Returns:
        Array with shape u.shape + 2 along every axis

    Raises:
        ValueError: If mode is unknown

    Example:
        >>> pad_with_ghosts(np.array([1.0, 2.0, 4.0]), "extrapolate")
        array([0., 1., 2., 4., 6.])
    """
    if mode == "extrapolate":
        # Odd reflection about the edge value: g = 2u[0] - u[1]
        return xp.pad(u, 1, mode="reflect", reflect_type="odd")
    elif mode == "neumann":
        return xp.pad(u, 1, mode="edge")
    elif mode == "periodic":
        return xp.pad(u, 1, mode="wrap")
    raise ValueError(f"Unknown boundary mode: {mode}. Use one of {BOUNDARY_MODES}")


def strip_ghosts(u: NDArray) -> NDArray:
    """Remove the one-cell ghost layer added by pad_with_ghosts()."""
    return u[tuple([slice(1, -1)] * u.ndim)]


__all__ = [
    "BOUNDARY_MODES",
    # First-order derivatives
    "gradient_central",
    "gradient_forward",
    "gradient_backward",
    # Second-order derivatives
    "second_derivative",
    "cross_derivative",
    # Boundary handling
    "pad_with_ghosts",
    "strip_ghosts",
]
