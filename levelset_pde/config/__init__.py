"""Configuration models for level set interface updates."""

from __future__ import annotations

from .evolution_config import (
    DEFAULT_CFL_COEFFICIENT,
    DerivativeConfig,
    InterfaceUpdateConfig,
    build_config,
)

__all__ = [
    "DEFAULT_CFL_COEFFICIENT",
    "DerivativeConfig",
    "InterfaceUpdateConfig",
    "build_config",
]
