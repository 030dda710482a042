"""
Logging configuration for the Etymolens application.

This module sets up structured logging with both file and console outputs,
using different formats and levels for different handlers.
"""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from etymolens.config import LOG_CONFIG


def setup_logging(
    log_path: Optional[str] = "logs/etymolens.log",
    console_level: str = "INFO",
    file_level: str = "DEBUG"
) -> None:
    """
    Configure logging with both console and file handlers.

    Args:
        log_path: Path to log file, or None for console-only logging
        console_level: Minimum level for console output
        file_level: Minimum level for file output
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format=LOG_CONFIG["console_format"],
        level=console_level.upper(),
        colorize=True,
        backtrace=True,
        diagnose=False
    )

    if log_path:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=LOG_CONFIG["file_format"],
            level=file_level.upper(),
            rotation=LOG_CONFIG["rotation"],
            retention=LOG_CONFIG["retention"],
            compression=LOG_CONFIG["compression"],
            backtrace=True,
            diagnose=False
        )

    logger.info("Logging system initialized")


def log_method_call(method_name: str, **kwargs: Any) -> None:
    """Log a method call with its arguments."""
    logger.debug(
        f"Method call: {method_name}",
        method=method_name,
        arguments=kwargs
    )


def log_method_result(method_name: str, result: Any, duration: float) -> None:
    """Log a method's result and execution time."""
    logger.debug(
        f"Method result: {method_name} -> {result} ({duration:.3f}s)",
        method=method_name,
        result=result,
        duration=f"{duration:.3f}s"
    )
