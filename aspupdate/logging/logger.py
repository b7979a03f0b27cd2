"""
Logging infrastructure for aspupdate.

Provides structured logging with:
- Component-specific file sinks (detection, solver, update)
- Log rotation and retention
- Helpers for logging update-sequence operations
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from loguru import logger



class UpdateLogger:
    """
    Configures loguru sinks for the update workflow.

    Features:
    - Console sink at a configurable level
    - A main rotating log file plus per-component files
    - A separate error log (ERROR and above)
    """

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        rotation: str = "50 MB",
        retention: str = "2 weeks",
        level: str = "INFO",
        format_string: Optional[str] = None,
        enable_file_logging: bool = True,
        enable_console_logging: bool = True,
    ):
        """
        Initialize the logger.

        Args:
            log_dir: Directory for log files
            rotation: When to rotate log files
            retention: How long to keep old logs
            level: Default log level
            format_string: Custom format string
            enable_file_logging: Whether to log to files
            enable_console_logging: Whether to log to console
        """
        self.log_dir = log_dir or Path("logs")
        self.rotation = rotation
        self.retention = retention
        self.level = level

        self.format_string = format_string or (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

        # Records logged without a bound component still format cleanly
        logger.configure(extra={"component": "system"})
        logger.remove()

        if enable_console_logging:
            logger.add(
                sys.stderr,
                format=self.format_string,
                level=level,
                colorize=True,
            )

        if enable_file_logging:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._add_file_handlers()

        self.logger = logger.bind(component="system")

    def _add_file_handlers(self) -> None:
        """Add the main, per-component and error log files."""
        logger.add(
            self.log_dir / "aspupdate.log",
            format=self.format_string,
            level=self.level,
            rotation=self.rotation,
            retention=self.retention,
        )

        for component in ("detection", "solver", "update"):
            logger.add(
                self.log_dir / f"{component}.log",
                format=self.format_string,
                level="DEBUG",
                rotation=self.rotation,
                retention=self.retention,
                filter=_component_filter(component),
            )

        logger.add(
            self.log_dir / "errors.log",
            format=self.format_string,
            level="ERROR",
            rotation=self.rotation,
            retention=self.retention,
        )

    def get_logger(self, component: str) -> Any:
        """Get a logger bound to a specific component."""
        return logger.bind(component=component)


def _component_filter(component: str) -> Any:
    return lambda record: record["extra"].get("component") == component


def get_component_logger(component: str = "system") -> Any:
    """
    Get a component-specific logger.

    Args:
        component: Component name bound as ``extra["component"]``

    Returns:
        Logger instance

    Example:
        >>> log = get_component_logger("detection")
        >>> log.info("Detected conflicts", count=2)
    """
    return logger.bind(component=component)


def log_update_operation(logger_instance: Any, operation: str, **kwargs: Any) -> None:
    """
    Log an update-sequence operation.

    Args:
        logger_instance: Logger to use
        operation: Operation type (e.g., "program_add", "solution_accept")
        **kwargs: Additional context
    """
    logger_instance.debug(
        f"Update operation: {operation}",
        operation=operation,
        timestamp=datetime.now(timezone.utc).isoformat(),
        **kwargs,
    )


# Global logger instance
_update_logger: Optional[UpdateLogger] = None


def initialize_logging(
    log_dir: Optional[Path] = None, level: str = "INFO", **kwargs: Any
) -> UpdateLogger:
    """
    Initialize the logging system.

    This should be called once at application startup.

    Args:
        log_dir: Directory for log files
        level: Default log level
        **kwargs: Additional configuration for UpdateLogger

    Returns:
        Configured UpdateLogger instance
    """
    global _update_logger
    _update_logger = UpdateLogger(log_dir=log_dir, level=level, **kwargs)
    return _update_logger


def get_logger_instance() -> Optional[UpdateLogger]:
    """Get the global logger instance."""
    return _update_logger
