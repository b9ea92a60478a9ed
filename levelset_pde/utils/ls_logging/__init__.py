"""
Logging utilities for levelset_pde.

Usage:
    >>> from levelset_pde.utils.ls_logging import get_logger, configure_logging
    >>> logger = get_logger(__name__)
    >>> configure_logging(level="DEBUG")
    >>> logger.debug("Selected dt = 0.1")
"""

from __future__ import annotations

from .logger import (
    LevelSetFormatter,
    LevelSetLogger,
    configure_logging,
    get_logger,
    log_step_summary,
)

__all__ = [
    "LevelSetFormatter",
    "LevelSetLogger",
    "configure_logging",
    "get_logger",
    "log_step_summary",
]
