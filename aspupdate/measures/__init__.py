"""
Measures ranking candidate solutions.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .answer_set_measure import answer_set_distance
from .rule_measure import modification_distance, rule_distance


@dataclass
class SolutionScore:
    """Distances of a solution; None when a measure could not be computed."""

    answer_set_distance: Optional[int] = None
    rule_distance: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "answer_set_distance": self.answer_set_distance,
            "rule_distance": self.rule_distance,
        }


__all__ = [
    "SolutionScore",
    "answer_set_distance",
    "modification_distance",
    "rule_distance",
]
