"""
Conflict detection for update sequences.
"""

from .conflict_schemas import Conflict, OperationType, Solution
from .causal_rejection import CausalRejectionDetector, DetectionError

__all__ = [
    "Conflict",
    "OperationType",
    "Solution",
    "CausalRejectionDetector",
    "DetectionError",
]
