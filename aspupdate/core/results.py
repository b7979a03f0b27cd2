"""
Result values returned by the update-sequence controller.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from aspupdate.contradiction import Conflict, OperationType
from aspupdate.symbolic import AnswerSet, Rule


class DetectionStatus(str, Enum):
    """Outcome of a detection run."""

    OK = "ok"
    TOO_FEW_PROGRAMS = "too_few_programs"
    SOLVER_ERROR = "solver_error"
    UNPARSABLE_MODELS = "unparsable_models"
    INVALID_SOLUTION = "invalid_solution"


@dataclass
class DetectionResult:
    """
    Conflicts and answer sets of an update sequence.

    ``ok`` distinguishes a completed detection (possibly with no conflicts)
    from a failed one. ``consistent`` is False when the update program has
    no answer set at all.
    """

    status: DetectionStatus
    conflicts: List[Conflict] = field(default_factory=list)
    answer_sets: List[AnswerSet] = field(default_factory=list)
    consistent: bool = True
    message: str = ""

    @classmethod
    def failure(cls, status: DetectionStatus, message: str) -> "DetectionResult":
        return cls(status=status, consistent=False, message=message)

    @property
    def ok(self) -> bool:
        return self.status is DetectionStatus.OK

    @property
    def has_conflicts(self) -> bool:
        return self.ok and bool(self.conflicts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "consistent": self.consistent,
            "message": self.message,
            "conflicts": [conflict.to_dict() for conflict in self.conflicts],
            "answer_sets": [answer_set.to_list() for answer_set in self.answer_sets],
        }


@dataclass(frozen=True)
class AppliedOperation:
    """One entry of the controller's log of accepted rule operations."""

    rule: Rule
    operation: OperationType

    def to_dict(self) -> Dict[str, Any]:
        return {"operation": self.operation.value, "rule": self.rule.to_dict()}
