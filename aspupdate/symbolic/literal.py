"""
Atoms and literals of ground extended logic programs.

An atom is a predicate applied to ground constants. A literal is an atom
that may carry classical negation (``-p(a)``). Default negation (``not``)
is not a property of the literal: it is expressed by placing the literal
in a rule's negative body.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple


@dataclass(frozen=True, eq=False)
class Atom:
    """
    Predicate symbol applied to an ordered tuple of ground terms.

    Two atoms are equal when their predicates match and they use the same
    set of terms; rendering keeps the original term order.
    """

    predicate: str
    terms: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "terms", tuple(self.terms))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Atom):
            return NotImplemented
        return self.predicate == other.predicate and frozenset(self.terms) == frozenset(
            other.terms
        )

    def __hash__(self) -> int:
        return hash((self.predicate, frozenset(self.terms)))

    @property
    def arity(self) -> int:
        return len(self.terms)

    def with_predicate(self, predicate: str) -> "Atom":
        """Return a copy using a different predicate symbol."""
        return Atom(predicate, self.terms)

    def __str__(self) -> str:
        if not self.terms:
            return self.predicate
        return f"{self.predicate}({','.join(self.terms)})"

    def __repr__(self) -> str:
        return f"Atom({self})"


@dataclass(frozen=True)
class Literal:
    """An atom with an optional classical negation sign."""

    atom: Atom
    negated: bool = False

    @classmethod
    def of(cls, predicate: str, *terms: str, negated: bool = False) -> "Literal":
        """
        Build a literal from a predicate and its terms.

        Example:
            >>> str(Literal.of("flies", "tweety", negated=True))
            '-flies(tweety)'
        """
        return cls(Atom(predicate, tuple(terms)), negated)

    @property
    def predicate(self) -> str:
        return self.atom.predicate

    @property
    def terms(self) -> Tuple[str, ...]:
        return self.atom.terms

    def complement(self) -> "Literal":
        """Return the literal with the opposite classical sign."""
        return Literal(self.atom, not self.negated)

    def is_complementary(self, other: "Literal") -> bool:
        """True if both literals share the atom but differ in classical negation."""
        return self.atom == other.atom and self.negated != other.negated

    def with_suffix(self, suffix: str) -> "Literal":
        """Return the literal with ``suffix`` appended to its predicate."""
        return Literal(self.atom.with_predicate(self.predicate + suffix), self.negated)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicate": self.predicate,
            "terms": list(self.terms),
            "negated": self.negated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Literal":
        return cls.of(data["predicate"], *data.get("terms", []), negated=data["negated"])

    def __str__(self) -> str:
        return f"-{self.atom}" if self.negated else str(self.atom)

    def __repr__(self) -> str:
        return f"Literal({self})"


def has_complementary_pair(first: Iterable[Literal], second: Iterable[Literal]) -> bool:
    """True if some literal of ``first`` is the classical complement of one in ``second``."""
    complements = {literal.complement() for literal in first}
    return any(literal in complements for literal in second)
