from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("levelset-pde")  # Matches the name in pyproject.toml
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .config import DEFAULT_CFL_COEFFICIENT, DerivativeConfig, InterfaceUpdateConfig  # noqa: E402
from .level_set import (  # noqa: E402
    InterfaceStep,
    LevelSetEvolver,
    LevelSetFunction,
    StepTerms,
    advective_hamiltonian,
    curvature_term,
    max_wave_speed,
    mean_curvature,
    normal_hamiltonian,
    select_timestep,
    update_interface,
)
from .operators import (  # noqa: E402
    DerivativeBundle,
    FiniteDifferenceDerivatives,
    GodunovNormalGradient,
    compute_derivatives,
    godunov_gradient_magnitude,
)
from .types import DerivativeProvider, NormalGradientEngine, VelocityField  # noqa: E402
from .utils.exceptions import (  # noqa: E402
    ConfigurationError,
    DimensionMismatchError,
    LevelSetError,
    NumericalInstabilityError,
)
from .utils.ls_logging import configure_logging, get_logger  # noqa: E402

__all__ = [
    "__version__",
    # Entry points
    "update_interface",
    "LevelSetEvolver",
    "InterfaceStep",
    "StepTerms",
    "LevelSetFunction",
    # Components
    "advective_hamiltonian",
    "normal_hamiltonian",
    "curvature_term",
    "mean_curvature",
    "max_wave_speed",
    "select_timestep",
    # Collaborators
    "DerivativeBundle",
    "DerivativeProvider",
    "FiniteDifferenceDerivatives",
    "GodunovNormalGradient",
    "NormalGradientEngine",
    "VelocityField",
    "compute_derivatives",
    "godunov_gradient_magnitude",
    # Configuration
    "DEFAULT_CFL_COEFFICIENT",
    "DerivativeConfig",
    "InterfaceUpdateConfig",
    # Errors
    "LevelSetError",
    "ConfigurationError",
    "DimensionMismatchError",
    "NumericalInstabilityError",
    # Logging
    "configure_logging",
    "get_logger",
]
