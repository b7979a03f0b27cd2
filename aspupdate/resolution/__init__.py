"""
Strategies generating candidate solutions for conflicts.
"""

from .base import ResolutionStrategy, bodies_exclusive, rule_modifications
from .direct import DirectModificationStrategy
from .indirect import IndirectModificationStrategy
from .rejection_rule import RejectionRuleStrategy


def default_strategies():
    """The non-interactive strategies in the order they are applied."""
    return [
        DirectModificationStrategy(),
        IndirectModificationStrategy(),
        RejectionRuleStrategy(),
    ]


__all__ = [
    "ResolutionStrategy",
    "bodies_exclusive",
    "rule_modifications",
    "DirectModificationStrategy",
    "IndirectModificationStrategy",
    "RejectionRuleStrategy",
    "default_strategies",
]
