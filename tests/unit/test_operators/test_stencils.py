"""
Unit tests for finite difference stencil functions.

Tests the low-level stencil building blocks that the derivative provider
uses internally. The stencils themselves are pure array operations using
np.roll (periodic wrapping); ghost padding supplies the other boundary rules.
"""

import pytest

import numpy as np

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

# =============================================================================
# First-Order Gradient Stencils
# =============================================================================


class TestGradientCentral:
    """Tests for central difference gradient."""

    @pytest.mark.unit
    def test_linear_exact(self):
        """Central difference of linear function should be exact (periodic interior)."""
        n = 100
        x = np.linspace(0, 1, n, endpoint=False)
        h = x[1] - x[0]
        u = 3.0 * x + 1.0

        du = gradient_central(u, axis=0, h=h)
        # Wrap-around only corrupts the first and last entry
        np.testing.assert_allclose(du[2:-2], 3.0, atol=1e-10)

    @pytest.mark.unit
    def test_quadratic_exact(self):
        """Central difference of x^2 should give 2x (exact for polynomials up to degree 2)."""
        n = 100
        x = np.linspace(0, 1, n, endpoint=False)
        h = x[1] - x[0]
        u = x**2

        du = gradient_central(u, axis=0, h=h)
        np.testing.assert_allclose(du[2:-2], 2.0 * x[2:-2], atol=1e-10)

    @pytest.mark.unit
    def test_2d_axis1(self):
        """Should differentiate along axis 1 in 2D."""
        nx, ny = 20, 30
        x = np.linspace(0, 1, nx, endpoint=False)
        y = np.linspace(0, 1, ny, endpoint=False)
        dy = y[1] - y[0]
        X, Y = np.meshgrid(x, y, indexing="ij")

        u = X + Y**2  # du/dy = 2y
        du_dy = gradient_central(u, axis=1, h=dy)

        np.testing.assert_allclose(du_dy[:, 2:-2], 2.0 * Y[:, 2:-2], atol=1e-10)

    @pytest.mark.unit
    def test_preserves_shape(self):
        """Output should have same shape as input."""
        u = np.random.default_rng(0).standard_normal((40, 30))
        assert gradient_central(u, axis=0, h=0.1).shape == (40, 30)
        assert gradient_central(u, axis=1, h=0.1).shape == (40, 30)


class TestGradientOneSided:
    """Tests for forward and backward difference gradients."""

    @pytest.mark.unit
    def test_forward_formula(self):
        """Forward difference is (u[i+1] - u[i]) / h."""
        u = np.array([0.0, 1.0, 4.0, 9.0, 16.0])
        du = gradient_forward(u, axis=0, h=1.0)
        np.testing.assert_allclose(du[:-1], [1.0, 3.0, 5.0, 7.0])

    @pytest.mark.unit
    def test_backward_formula(self):
        """Backward difference is (u[i] - u[i-1]) / h."""
        u = np.array([0.0, 1.0, 4.0, 9.0, 16.0])
        du = gradient_backward(u, axis=0, h=1.0)
        np.testing.assert_allclose(du[1:], [1.0, 3.0, 5.0, 7.0])

    @pytest.mark.unit
    def test_forward_backward_shifted(self):
        """D⁺u[i] equals D⁻u[i+1] away from the wrap."""
        rng = np.random.default_rng(1)
        u = rng.standard_normal((12, 7))
        fwd = gradient_forward(u, axis=0, h=0.5)
        bwd = gradient_backward(u, axis=0, h=0.5)
        np.testing.assert_allclose(fwd[:-1, :], bwd[1:, :])

    @pytest.mark.unit
    def test_spacing_scales_result(self):
        """Halving h doubles the difference."""
        u = np.array([0.0, 2.0, 4.0, 6.0])
        np.testing.assert_allclose(gradient_forward(u, 0, 0.5)[:-1], 4.0)
        np.testing.assert_allclose(gradient_backward(u, 0, 0.5)[1:], 4.0)


# =============================================================================
# Second-Order Stencils
# =============================================================================


class TestSecondDerivative:
    """Tests for the 3-point second derivative."""

    @pytest.mark.unit
    def test_quadratic_exact(self):
        """Second derivative of x^2 is exactly 2."""
        x = np.linspace(0, 1, 50, endpoint=False)
        h = x[1] - x[0]
        d2u = second_derivative(x**2, axis=0, h=h)
        np.testing.assert_allclose(d2u[1:-1], 2.0, atol=1e-8)

    @pytest.mark.unit
    def test_linear_is_zero(self):
        """Second derivative of a linear function vanishes in the interior."""
        x = np.arange(10, dtype=float)
        np.testing.assert_allclose(second_derivative(5.0 * x - 2.0, axis=0, h=1.0)[1:-1], 0.0, atol=1e-12)


class TestCrossDerivative:
    """Tests for the 4-point mixed derivative."""

    @pytest.mark.unit
    def test_bilinear_exact(self):
        """∂²(xy)/∂x∂y = 1."""
        hx, hy = 0.1, 0.2
        x = np.arange(15) * hx
        y = np.arange(11) * hy
        X, Y = np.meshgrid(x, y, indexing="ij")

        uxy = cross_derivative(X * Y, hx, hy)
        np.testing.assert_allclose(uxy[1:-1, 1:-1], 1.0, atol=1e-10)

    @pytest.mark.unit
    def test_four_point_stencil(self):
        """Matches the explicit corner stencil at an interior point."""
        rng = np.random.default_rng(2)
        u = rng.standard_normal((6, 6))
        i, j = 2, 3
        expected = (u[i + 1, j + 1] - u[i + 1, j - 1] - u[i - 1, j + 1] + u[i - 1, j - 1]) / 4.0
        assert cross_derivative(u, 1.0, 1.0)[i, j] == pytest.approx(expected)

    @pytest.mark.unit
    def test_separable_is_zero(self):
        """A sum f(x) + g(y) has no mixed derivative."""
        X, Y = np.meshgrid(np.arange(8.0), np.arange(9.0), indexing="ij")
        uxy = cross_derivative(X**2 + np.sin(Y), 1.0, 1.0)
        np.testing.assert_allclose(uxy[1:-1, 1:-1], 0.0, atol=1e-12)


# =============================================================================
# Ghost Cells
# =============================================================================


class TestGhostCells:
    """Tests for pad_with_ghosts / strip_ghosts."""

    @pytest.mark.unit
    def test_extrapolate_1d(self):
        """Extrapolation continues the edge slope: g = 2u[0] - u[1]."""
        padded = pad_with_ghosts(np.array([1.0, 2.0, 4.0]), "extrapolate")
        np.testing.assert_allclose(padded, [0.0, 1.0, 2.0, 4.0, 6.0])

    @pytest.mark.unit
    def test_neumann_1d(self):
        """Neumann copies the edge value."""
        padded = pad_with_ghosts(np.array([1.0, 2.0, 4.0]), "neumann")
        np.testing.assert_allclose(padded, [1.0, 1.0, 2.0, 4.0, 4.0])

    @pytest.mark.unit
    def test_periodic_1d(self):
        """Periodic wraps around."""
        padded = pad_with_ghosts(np.array([1.0, 2.0, 4.0]), "periodic")
        np.testing.assert_allclose(padded, [4.0, 1.0, 2.0, 4.0, 1.0])

    @pytest.mark.unit
    @pytest.mark.parametrize("mode", BOUNDARY_MODES)
    def test_strip_inverts_pad(self, mode):
        """strip_ghosts(pad_with_ghosts(u)) returns u."""
        u = np.random.default_rng(3).standard_normal((5, 4))
        padded = pad_with_ghosts(u, mode)
        assert padded.shape == (7, 6)
        np.testing.assert_array_equal(strip_ghosts(padded), u)

    @pytest.mark.unit
    def test_extrapolated_linear_field_exact_at_edges(self):
        """With extrapolated ghosts one-sided differences of a plane are exact everywhere."""
        X, Y = np.meshgrid(np.arange(5.0), np.arange(4.0), indexing="ij")
        u = 2.0 * X - 3.0 * Y
        padded = pad_with_ghosts(u, "extrapolate")

        np.testing.assert_allclose(strip_ghosts(gradient_forward(padded, 0, 1.0)), 2.0)
        np.testing.assert_allclose(strip_ghosts(gradient_backward(padded, 0, 1.0)), 2.0)
        np.testing.assert_allclose(strip_ghosts(gradient_forward(padded, 1, 1.0)), -3.0)
        np.testing.assert_allclose(strip_ghosts(gradient_backward(padded, 1, 1.0)), -3.0)

    @pytest.mark.unit
    def test_unknown_mode_raises(self):
        """Unknown boundary mode is rejected."""
        with pytest.raises(ValueError, match="Unknown boundary mode"):
            pad_with_ghosts(np.zeros(3), "dirichlet")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
