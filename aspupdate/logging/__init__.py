"""
Logging infrastructure for aspupdate.

Provides structured logging and decorators for tracking operations.
"""

from .logger import (
    UpdateLogger,
    get_component_logger,
    initialize_logging,
    get_logger_instance,
    log_update_operation,
)

from .decorators import (
    track_operation,
    performance_monitor,
)

__all__ = [
    # Logger
    "UpdateLogger",
    "get_component_logger",
    "initialize_logging",
    "get_logger_instance",
    "log_update_operation",
    # Decorators
    "track_operation",
    "performance_monitor",
]
