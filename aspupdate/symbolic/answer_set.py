"""
Answer sets: unordered literal sets returned by the solver.
"""

from dataclasses import dataclass
from typing import Collection, FrozenSet, Iterable, Iterator, List

from .literal import Literal


@dataclass(frozen=True)
class AnswerSet:
    """Immutable set of literals; iteration and rendering are sorted by text."""

    literals: FrozenSet[Literal] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "literals", frozenset(self.literals))

    @classmethod
    def of(cls, literals: Iterable[Literal]) -> "AnswerSet":
        return cls(frozenset(literals))

    def __len__(self) -> int:
        return len(self.literals)

    def __iter__(self) -> Iterator[Literal]:
        return iter(self.sorted())

    def __contains__(self, literal: object) -> bool:
        return literal in self.literals

    def sorted(self) -> List[Literal]:
        return sorted(self.literals, key=str)

    def restricted_to(self, base: Collection[Literal]) -> "AnswerSet":
        """Keep only literals in ``base``."""
        return AnswerSet(frozenset(literal for literal in self.literals if literal in base))

    def distance(self, other: "AnswerSet") -> int:
        """Size of the symmetric difference with ``other``."""
        return len(self.literals ^ other.literals)

    def to_list(self) -> List[str]:
        return [str(literal) for literal in self.sorted()]

    def __str__(self) -> str:
        return "{" + ", ".join(self.to_list()) + "}"
