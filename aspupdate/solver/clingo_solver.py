"""
Answer-set solver backed by the Clingo Python API.
"""

import threading
import time
from typing import List, Optional

import clingo

from aspupdate.config import SolverConfig, config
from aspupdate.logging import get_component_logger, performance_monitor
from aspupdate.symbolic import Program

from .base import AnswerSetSolver, SolveResult
from .errors import SolverError, SolverInterrupted, SolverTimeoutError

log = get_component_logger("solver")


class ClingoSolver(AnswerSetSolver):
    """
    Grounds and solves programs in-process with clingo.

    Solving runs asynchronously so that a time limit can be enforced and
    another thread can cancel the call via :meth:`interrupt`.

    Example:
        >>> solver = ClingoSolver()
        >>> result = solver.compute_models(parse_program("a. b :- a."))
        >>> result.models
        ['a, b']
    """

    def __init__(self, solver_config: Optional[SolverConfig] = None):
        self.config = solver_config or config.solver
        self._active: Optional[clingo.Control] = None
        self._lock = threading.Lock()
        self._interrupted = False

    @performance_monitor(threshold_ms=5000.0, component="solver")
    def compute_models(self, program: Program) -> SolveResult:
        """
        Compute every answer set of ``program``.

        Raises:
            SolverError: If the program is empty or fails to ground
            SolverTimeoutError: If solving exceeds the time limit
            SolverInterrupted: If :meth:`interrupt` cancelled the call
        """
        if program is None or program.is_empty:
            raise SolverError("Cannot solve an empty program")

        arguments = [str(self.config.max_models), *self.config.clingo_args]
        control = clingo.Control(arguments, logger=self._on_message, message_limit=20)

        start = time.perf_counter()
        try:
            control.add("base", [], program.to_asp())
            control.ground([("base", [])])
        except RuntimeError as e:
            log.error(f"Failed to ground program '{program.name}': {e}")
            raise SolverError(f"Grounding failed for '{program.name}': {e}") from e
        grounding_time_ms = (time.perf_counter() - start) * 1000

        models: List[str] = []

        def on_model(model: clingo.Model) -> None:
            symbols = sorted(str(symbol) for symbol in model.symbols(shown=True))
            models.append(", ".join(symbols))

        with self._lock:
            self._active = control
            self._interrupted = False

        start = time.perf_counter()
        try:
            with control.solve(on_model=on_model, async_=True) as handle:
                if not handle.wait(self.config.timeout_seconds):
                    handle.cancel()
                    log.warning(
                        f"Solving '{program.name}' timed out after "
                        f"{self.config.timeout_seconds}s"
                    )
                    raise SolverTimeoutError(self.config.timeout_seconds)
                result = handle.get()
        finally:
            with self._lock:
                self._active = None
        solving_time_ms = (time.perf_counter() - start) * 1000

        if self._interrupted:
            raise SolverInterrupted(f"Solving '{program.name}' was interrupted")

        log.debug(
            f"Solved '{program.name}': {len(models)} answer set(s) "
            f"in {solving_time_ms:.1f}ms"
        )
        return SolveResult(
            satisfiable=bool(result.satisfiable) and bool(models),
            models=models,
            grounding_time_ms=grounding_time_ms,
            solving_time_ms=solving_time_ms,
        )

    def interrupt(self) -> None:
        """Interrupt the running solve call, if there is one."""
        with self._lock:
            if self._active is not None:
                self._interrupted = True
                self._active.interrupt()
                log.info("Interrupted running solve call")

    def _on_message(self, code: clingo.MessageCode, message: str) -> None:
        log.debug(f"clingo [{code}]: {message.strip()}")
