#!/usr/bin/env python3
"""
Logging Infrastructure for levelset_pde

Every module asks for its logger once (get_logger(__name__)); the shared
settings held by LevelSetLogger decide level, colours and an optional log
file for all of them. configure_logging() re-applies new settings to every
logger already handed out.
"""

from __future__ import annotations

import logging
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, ClassVar

import colorlog

_FORMAT = "%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


class LevelSetFormatter(colorlog.ColoredFormatter):
    """colorlog formatter; with use_colors=False the colour codes are blanked."""

    def __init__(self, use_colors: bool = False, include_location: bool = False):
        fmt = "%(log_color)s" + _FORMAT
        if include_location:
            fmt += " [%(filename)s:%(lineno)d]"
        super().__init__(fmt, datefmt=_DATEFMT, log_colors=_LEVEL_COLORS, no_color=not use_colors)
        self.use_colors = use_colors
        self.include_location = include_location


class LevelSetLogger:
    """
    Registry of package loggers sharing one class-level configuration.

    Lookups are lock-free once a logger exists; creation and reconfiguration
    hold the lock so no logger ever ends up with duplicate handlers.
    """

    _lock: ClassVar[threading.Lock] = threading.Lock()
    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _settings: ClassVar[dict[str, Any]] = {
        "level": logging.INFO,
        "log_file_path": None,
        "use_colors": True,
        "include_location": False,
    }

    @classmethod
    def configure(
        cls,
        level: str | int = "INFO",
        log_to_file: bool = False,
        log_file_path: str | Path | None = None,
        use_colors: bool = True,
        include_location: bool = False,
    ):
        """
        Configure global logging settings for levelset_pde.

        Args:
            level: Logging level name or number
            log_to_file: Also write records to a file
            log_file_path: Path to log file (default: ./logs/levelset_pde_<timestamp>.log)
            use_colors: Colour console output
            include_location: Append [file:line] to every record

        Raises:
            ValueError: If level is not a known logging level name
        """
        if isinstance(level, str):
            resolved = logging.getLevelName(level.upper())
            if not isinstance(resolved, int):
                raise ValueError(f"Unknown logging level '{level}'")
            level = resolved

        path = None
        if log_to_file:
            if log_file_path is None:
                timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                path = Path.cwd() / "logs" / f"levelset_pde_{timestamp}.log"
            else:
                path = Path(log_file_path)
            path.parent.mkdir(parents=True, exist_ok=True)

        with cls._lock:
            cls._settings.update(
                level=level, log_file_path=path, use_colors=use_colors, include_location=include_location
            )
            for logger in cls._loggers.values():
                cls._attach_handlers(logger)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Return the registered logger for name, creating it on first use."""
        logger = cls._loggers.get(name)
        if logger is not None:
            return logger

        with cls._lock:
            if name not in cls._loggers:
                logger = logging.getLogger(name)
                # Loggers configured elsewhere keep their handlers
                if not logger.handlers:
                    cls._attach_handlers(logger)
                cls._loggers[name] = logger
            return cls._loggers[name]

    @classmethod
    def _build_handlers(cls) -> list[logging.Handler]:
        settings = cls._settings
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(LevelSetFormatter(settings["use_colors"], settings["include_location"]))
        handlers: list[logging.Handler] = [console]

        if settings["log_file_path"] is not None:
            file_handler = logging.FileHandler(settings["log_file_path"])
            file_handler.setFormatter(LevelSetFormatter(False, settings["include_location"]))
            handlers.append(file_handler)
        return handlers

    @classmethod
    def _attach_handlers(cls, logger: logging.Logger):
        """Replace the handlers of logger with ones built from the current settings."""
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        level = cls._settings["level"]
        logger.setLevel(level)
        for handler in cls._build_handlers():
            handler.setLevel(level)
            logger.addHandler(handler)
        logger.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger for the current module.

    Args:
        name: Logger name (if None, uses calling module name)
    """
    if name is None:
        import inspect

        frame = inspect.currentframe()
        caller = frame.f_back if frame else None
        name = caller.f_globals.get("__name__", "levelset_pde") if caller else "levelset_pde"

    return LevelSetLogger.get_logger(name)


def configure_logging(**kwargs):
    """Configure global logging settings; see LevelSetLogger.configure for the keywords."""
    LevelSetLogger.configure(**kwargs)


def log_step_summary(logger: logging.Logger, step_info: dict[str, Any]):
    """Log one interface update as a single DEBUG line; floats in scientific notation."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    info_str = ", ".join(
        f"{key}={value:.3e}" if isinstance(value, float) else f"{key}={value}" for key, value in step_info.items()
    )
    logger.debug(f"Interface update: {info_str}")
