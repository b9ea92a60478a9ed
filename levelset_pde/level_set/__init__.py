"""
Level set interface evolution.

Advances an implicit interface φ(x, y) = 0 under three combined motions:

    ∂φ/∂t + V·∇φ + a|∇φ| = b κ|∇φ|

Core Components:
- hamiltonian: upwind advective term and Godunov normal term
- curvature: κ|∇φ| and κ from centered derivatives
- timestep: CFL-bounded global time step
- update: LevelSetEvolver and update_interface (explicit Euler step)
- core: LevelSetFunction snapshot (normals, curvature, interface band)

References:
- Osher & Sethian (1988): Fronts propagating with curvature-dependent speed
- Osher & Fedkiw (2003): Level Set Methods and Dynamic Implicit Surfaces
"""

from levelset_pde.level_set.core import LevelSetFunction
from levelset_pde.level_set.curvature import curvature_term, mean_curvature
from levelset_pde.level_set.hamiltonian import advective_hamiltonian, normal_hamiltonian, upwind_derivative
from levelset_pde.level_set.timestep import max_wave_speed, select_timestep, stable_timestep
from levelset_pde.level_set.update import InterfaceStep, LevelSetEvolver, StepTerms, update_interface

__all__ = [
    # Update
    "InterfaceStep",
    "LevelSetEvolver",
    "StepTerms",
    "update_interface",
    # Snapshot
    "LevelSetFunction",
    # Components
    "advective_hamiltonian",
    "curvature_term",
    "max_wave_speed",
    "mean_curvature",
    "normal_hamiltonian",
    "select_timestep",
    "stable_timestep",
    "upwind_derivative",
]
