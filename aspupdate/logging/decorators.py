"""
Decorators for automatic logging of update operations.

These decorators enable traceability without cluttering business logic.
"""

import functools
import inspect
import time
from datetime import datetime, timezone
from typing import Any, Callable

from .logger import get_component_logger, log_update_operation


def track_operation(operation_type: str, component: str = "update") -> Callable:
    """
    Decorator to track an update-workflow operation.

    Logs the start, completion and failure of the wrapped call. Failures
    are re-raised unchanged.

    Args:
        operation_type: Type of operation (e.g., "detect", "solution_accept")
        component: Component the log records are bound to

    Example:
        >>> @track_operation("merge")
        ... def merge_sequence(self):
        ...     ...
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = get_component_logger(component)

            bound_args = signature.bind(*args, **kwargs)
            bound_args.apply_defaults()

            operation_id = datetime.now(timezone.utc).timestamp()
            log_update_operation(
                log,
                operation=operation_type,
                operation_id=operation_id,
                function=func.__name__,
                arguments={
                    k: str(v)[:100]
                    for k, v in bound_args.arguments.items()
                    if k != "self"
                },
            )

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log_update_operation(
                    log,
                    operation=f"{operation_type}_error",
                    operation_id=operation_id,
                    function=func.__name__,
                    error=str(e),
                    error_type=type(e).__name__,
                    success=False,
                )
                raise

            log_update_operation(
                log,
                operation=f"{operation_type}_complete",
                operation_id=operation_id,
                function=func.__name__,
                success=True,
            )
            return result

        return wrapper

    return decorator


def performance_monitor(threshold_ms: float = 1000.0, component: str = "system") -> Callable:
    """
    Decorator to monitor function performance.

    Logs a warning if execution exceeds the threshold.

    Args:
        threshold_ms: Warning threshold in milliseconds
        component: Component the log records are bound to
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = get_component_logger(component)
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception:
                elapsed_ms = (time.perf_counter() - start_time) * 1000
                log.debug(
                    f"Function failed: {func.__name__}",
                    function=func.__name__,
                    elapsed_ms=elapsed_ms,
                )
                raise

            elapsed_ms = (time.perf_counter() - start_time) * 1000
            if elapsed_ms > threshold_ms:
                log.warning(
                    f"Performance threshold exceeded: {func.__name__}",
                    function=func.__name__,
                    elapsed_ms=elapsed_ms,
                    threshold_ms=threshold_ms,
                )
            else:
                log.debug(
                    f"Function executed: {func.__name__}",
                    function=func.__name__,
                    elapsed_ms=elapsed_ms,
                )
            return result

        return wrapper

    return decorator
