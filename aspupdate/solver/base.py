"""
Solver interface used by the update workflow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from aspupdate.symbolic import Program


@dataclass
class SolveResult:
    """Result of computing the answer sets of a program."""

    satisfiable: bool
    models: List[str] = field(default_factory=list)  # Comma-joined literals per model
    grounding_time_ms: float = 0.0
    solving_time_ms: float = 0.0

    @property
    def model_count(self) -> int:
        return len(self.models)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "satisfiable": self.satisfiable,
            "models": self.models,
            "model_count": self.model_count,
            "grounding_time_ms": self.grounding_time_ms,
            "solving_time_ms": self.solving_time_ms,
        }


class AnswerSetSolver(ABC):
    """
    Computes every answer set of a ground program.

    Zero answer sets is reported as an unsatisfiable result, never as an
    error. Implementations raise ``SolverError`` when they cannot compute
    an answer at all.
    """

    @abstractmethod
    def compute_models(self, program: Program) -> SolveResult:
        """Compute the answer sets of ``program``."""

    def interrupt(self) -> None:
        """Cancel a running computation, if the solver supports it."""
