"""
Exception classes for levelset_pde with actionable error messages.

Every error raised by the interface update carries the component that
detected it, a suggested fix, a stable error code and the diagnostic
values that triggered it.
"""

from __future__ import annotations

from typing import Any

import numpy as np


class LevelSetError(Exception):
    """
    Base exception for level set evolution errors.

    The formatted message contains:
    - the component and a clear description
    - a suggested action for resolution
    - an error code
    - optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        component: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.component = component or "levelset_pde"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.component}] {message}"

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   - {key}: {value}"

        super().__init__(full_message)


class ConfigurationError(LevelSetError):
    """Exception raised when a coefficient or setting is invalid."""

    def __init__(
        self,
        parameter_name: str,
        provided_value: Any,
        expected_type: type | None = None,
        valid_range: tuple | None = None,
        component: str | None = None,
        reason: str | None = None,
    ):
        diagnostic_data = {
            "parameter": parameter_name,
            "provided_value": str(provided_value),
            "provided_type": type(provided_value).__name__,
        }

        if expected_type:
            diagnostic_data["expected_type"] = expected_type.__name__

        if valid_range:
            diagnostic_data["valid_range"] = f"[{valid_range[0]}, {valid_range[1]}]"

        if reason:
            diagnostic_data["reason"] = reason

        suggested_action = _generate_configuration_suggestions(
            parameter_name, provided_value, expected_type, valid_range
        )

        message = f"Invalid configuration for parameter '{parameter_name}'"

        super().__init__(
            message=message,
            component=component,
            suggested_action=suggested_action,
            error_code="INVALID_CONFIGURATION",
            diagnostic_data=diagnostic_data,
        )


class DimensionMismatchError(LevelSetError):
    """Exception raised when a grid does not have the expected shape."""

    def __init__(
        self,
        array_name: str,
        provided_shape: tuple,
        expected_shape: tuple,
        component: str | None = None,
        context: str | None = None,
    ):
        diagnostic_data = {
            "array_name": array_name,
            "provided_shape": str(provided_shape),
            "expected_shape": str(expected_shape),
            "dimension_mismatch": _describe_dimension_mismatch(provided_shape, expected_shape),
        }

        if context:
            diagnostic_data["context"] = context

        suggested_action = _generate_dimension_suggestions(array_name, provided_shape, expected_shape)

        message = f"Dimension mismatch for {array_name}"

        super().__init__(
            message=message,
            component=component,
            suggested_action=suggested_action,
            error_code="DIMENSION_MISMATCH",
            diagnostic_data=diagnostic_data,
        )


class NumericalInstabilityError(LevelSetError):
    """Exception raised when NaN or infinite values are detected."""

    def __init__(
        self,
        instability_type: str,
        problematic_values: dict[str, Any] | None = None,
        component: str | None = None,
    ):
        diagnostic_data: dict[str, Any] = {"instability_type": instability_type}

        if problematic_values:
            diagnostic_data.update(problematic_values)

        suggested_action = _generate_stability_suggestions(instability_type)

        message = f"Numerical instability detected: {instability_type}"

        super().__init__(
            message=message,
            component=component,
            suggested_action=suggested_action,
            error_code="NUMERICAL_INSTABILITY",
            diagnostic_data=diagnostic_data,
        )


# Helper functions for generating specific suggestions


def _generate_configuration_suggestions(
    parameter_name: str,
    provided_value: Any,
    expected_type: type | None,
    valid_range: tuple | None,
) -> str:
    """Generate specific suggestions for configuration errors."""

    suggestions = []

    if expected_type and not isinstance(provided_value, expected_type):
        suggestions.append(f"Convert {parameter_name} to {expected_type.__name__}")

    if valid_range and isinstance(provided_value, (int, float)):
        if provided_value < valid_range[0]:
            suggestions.append(f"Increase {parameter_name} to at least {valid_range[0]}")
        elif provided_value > valid_range[1]:
            suggestions.append(f"Decrease {parameter_name} to at most {valid_range[1]}")

    name = parameter_name.lower()
    if "curvature" in name and isinstance(provided_value, (int, float)) and provided_value <= 0:
        suggestions.append("Curvature coefficient must be strictly positive; use a small value such as 1e-8 to disable")

    if "cfl" in name and isinstance(provided_value, (int, float)):
        if provided_value <= 0:
            suggestions.append("CFL coefficient must be positive; 0.9 is the usual choice")
        elif provided_value >= 1:
            suggestions.append("Use a CFL coefficient in (0, 1) to guarantee stability")

    if "spacing" in name:
        suggestions.append("Grid spacing must be positive in both directions")

    return " | ".join(suggestions) if suggestions else f"Check {parameter_name} value and try again"


def _describe_dimension_mismatch(provided_shape: tuple, expected_shape: tuple) -> str:
    """Describe the specific nature of dimension mismatch."""

    if len(provided_shape) != len(expected_shape):
        return f"Wrong number of dimensions: got {len(provided_shape)}, expected {len(expected_shape)}"

    mismatches = []
    for i, (provided, expected) in enumerate(zip(provided_shape, expected_shape, strict=False)):
        if provided != expected:
            mismatches.append(f"axis {i}: got {provided}, expected {expected}")

    return " | ".join(mismatches)


def _generate_dimension_suggestions(array_name: str, provided_shape: tuple, expected_shape: tuple) -> str:
    """Generate specific suggestions for dimension errors."""

    if "velocity" in array_name.lower():
        return f"Sample both velocity components on the level set grid: shape {expected_shape}"

    if len(provided_shape) < len(expected_shape):
        return f"Add missing dimensions to {array_name}: reshape or expand to {expected_shape}"
    elif len(provided_shape) > len(expected_shape):
        return f"Remove extra dimensions from {array_name}: reshape to {expected_shape}"
    else:
        return f"Reshape {array_name} to match the level set grid: {expected_shape}"


def _generate_stability_suggestions(instability_type: str) -> str:
    """Generate suggestions for numerical stability issues."""

    if "nan" in instability_type.lower():
        return "Check for: 1) NaN entries in inputs, 2) Invalid initial level set, 3) CFL coefficient >= 1"
    elif "inf" in instability_type.lower():
        return "Reduce: 1) CFL coefficient, 2) Velocity or normal speed magnitudes"
    else:
        return "Check coefficients and consider a smaller CFL coefficient"


# Convenience functions for common error scenarios


def validate_array_dimensions(
    array: np.ndarray, expected_shape: tuple, array_name: str, component: str | None = None
):
    """Validate that array has expected dimensions."""
    if np.shape(array) != tuple(expected_shape):
        raise DimensionMismatchError(
            array_name=array_name,
            provided_shape=np.shape(array),
            expected_shape=tuple(expected_shape),
            component=component,
        )


def validate_parameter_value(
    value: Any,
    parameter_name: str,
    expected_type: type | tuple[type, ...] | None = None,
    valid_range: tuple | None = None,
    component: str | None = None,
    exclusive_lower: bool = False,
):
    """
    Validate parameter value and type.

    With exclusive_lower=True the lower end of valid_range is excluded, so
    (0, inf) with exclusive_lower rejects zero.
    """
    if expected_type and not isinstance(value, expected_type):
        raise ConfigurationError(
            parameter_name=parameter_name,
            provided_value=value,
            expected_type=expected_type if isinstance(expected_type, type) else None,
            component=component,
        )

    if valid_range and isinstance(value, (int, float, np.number)):
        low, high = valid_range
        below = value <= low if exclusive_lower else value < low
        # NaN fails every comparison
        if below or value > high or value != value:
            raise ConfigurationError(
                parameter_name=parameter_name,
                provided_value=value,
                valid_range=valid_range,
                component=component,
            )


def check_numerical_stability(array: np.ndarray, array_name: str, component: str | None = None):
    """Check array for NaN or Inf. Large finite values are valid level set data."""
    problematic_values: dict[str, Any] = {}

    if np.any(np.isnan(array)):
        problematic_values["nan_count"] = int(np.sum(np.isnan(array)))
        instability_type = "NaN values detected"
    elif np.any(np.isinf(array)):
        problematic_values["inf_count"] = int(np.sum(np.isinf(array)))
        instability_type = "Infinite values detected"
    else:
        return

    problematic_values["array_name"] = array_name

    raise NumericalInstabilityError(
        instability_type=instability_type,
        problematic_values=problematic_values,
        component=component,
    )
