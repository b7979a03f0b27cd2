"""
Answer-set solver collaborators.
"""

from .errors import SolverError, SolverTimeoutError, SolverInterrupted
from .base import AnswerSetSolver, SolveResult
from .clingo_solver import ClingoSolver

__all__ = [
    "SolverError",
    "SolverTimeoutError",
    "SolverInterrupted",
    "AnswerSetSolver",
    "SolveResult",
    "ClingoSolver",
]
