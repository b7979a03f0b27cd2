"""
Exceptions raised by answer-set solvers.
"""


class SolverError(Exception):
    """Base exception for solver failures (grounding errors, bad input)."""

    pass


class SolverTimeoutError(SolverError):
    """Raised when solving exceeds the configured time limit."""

    def __init__(self, timeout_seconds: float):
        super().__init__(f"Solving exceeded the time limit of {timeout_seconds:.1f}s")
        self.timeout_seconds = timeout_seconds


class SolverInterrupted(SolverError):
    """Raised when a running solve call was interrupted by the caller."""

    pass
