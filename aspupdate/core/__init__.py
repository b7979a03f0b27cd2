"""
Update-sequence workflow.
"""

from .results import AppliedOperation, DetectionResult, DetectionStatus
from .update_sequence import UpdateSequenceController, apply_solution

__all__ = [
    "AppliedOperation",
    "DetectionResult",
    "DetectionStatus",
    "UpdateSequenceController",
    "apply_solution",
]
