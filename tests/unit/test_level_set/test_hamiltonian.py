"""
Unit tests for Hamiltonian assembly: upwind advection and normal motion.
"""

import pytest

import numpy as np

from levelset_pde.level_set.hamiltonian import advective_hamiltonian, normal_hamiltonian, upwind_derivative
from levelset_pde.operators.differential.derivatives import compute_derivatives
from levelset_pde.operators.differential.godunov import GodunovNormalGradient
from levelset_pde.types import VelocityField

# =============================================================================
# Upwind Advection
# =============================================================================


class TestUpwindDerivative:
    """Direction selection for the advective term."""

    @pytest.mark.unit
    def test_selects_by_velocity_sign(self, index_grid):
        """φ = i²: D⁻ = 2i - 1 for V >= 0, D⁺ = 2i + 1 for V < 0 (interior)."""
        I, _ = index_grid(6, 3)
        d = compute_derivatives(I**2)

        positive = upwind_derivative(d.dx, np.ones((6, 3)))
        negative = upwind_derivative(d.dx, -np.ones((6, 3)))

        np.testing.assert_allclose(positive[1:-1], (2 * I - 1)[1:-1])
        np.testing.assert_allclose(negative[1:-1], (2 * I + 1)[1:-1])

    @pytest.mark.unit
    def test_zero_velocity_uses_backward(self, index_grid):
        I, _ = index_grid(5, 2)
        d = compute_derivatives(I**2)
        np.testing.assert_array_equal(upwind_derivative(d.dx, np.zeros((5, 2))), d.dx.backward)


class TestAdvectiveHamiltonian:
    """H_extvel = Vx φx + Vy φy."""

    @pytest.mark.unit
    def test_plane_exact(self, index_grid, rng):
        """For a plane the upwind choice is irrelevant: H = V·∇φ."""
        I, J = index_grid(5, 6)
        vx = rng.uniform(-1.0, 1.0, size=(5, 6))
        vy = rng.uniform(-1.0, 1.0, size=(5, 6))
        H = advective_hamiltonian(VelocityField(vx, vy), compute_derivatives(2.0 * I + 3.0 * J))
        np.testing.assert_allclose(H, 2.0 * vx + 3.0 * vy)

    @pytest.mark.unit
    def test_quadratic_backward_differences(self, index_grid):
        """φ = i², Vx = 1: H equals the backward differences [1, 1, 3, 5, 7]."""
        I, _ = index_grid(5, 5)
        velocity = VelocityField(np.ones((5, 5)), np.zeros((5, 5)))
        H = advective_hamiltonian(velocity, compute_derivatives(I**2))
        np.testing.assert_allclose(H[:, 2], [1.0, 1.0, 3.0, 5.0, 7.0])

    @pytest.mark.unit
    def test_zero_velocity(self, index_grid):
        I, J = index_grid(4, 4)
        velocity = VelocityField(np.zeros((4, 4)), np.zeros((4, 4)))
        np.testing.assert_array_equal(advective_hamiltonian(velocity, compute_derivatives(I * J)), 0.0)


# =============================================================================
# Normal Motion
# =============================================================================


class TestNormalHamiltonian:
    """H_normal = a |∇φ|."""

    @pytest.mark.unit
    @pytest.mark.parametrize("a", [1.0, -1.0, 2.5])
    def test_plane(self, ramp_5x5, a):
        H = normal_hamiltonian(ramp_5x5, np.full((5, 5), a), GodunovNormalGradient())
        np.testing.assert_allclose(H, a)

    @pytest.mark.unit
    def test_zero_coefficient_disables(self, ramp_5x5):
        H = normal_hamiltonian(ramp_5x5, np.zeros((5, 5)), GodunovNormalGradient())
        np.testing.assert_array_equal(H, 0.0)

    @pytest.mark.unit
    def test_engine_receives_coefficient(self, ramp_5x5):
        """Any callable (phi, speed) engine is accepted."""
        calls = []

        def engine(phi, speed):
            calls.append(speed)
            return np.full_like(phi, 2.0)

        a = np.full((5, 5), -3.0)
        H = normal_hamiltonian(ramp_5x5, a, engine)

        np.testing.assert_allclose(H, -6.0)
        assert calls[0] is a


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
