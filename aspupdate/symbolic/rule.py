"""
Rules of extended logic programs.

A rule has at most one head literal, an ordered positive body and an
ordered negative (default-negated) body. A rule without a head is a
constraint. Every rule carries a process-unique integer identifier used
for all structural operations and a separate display label.
"""

import itertools
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

from .literal import Literal

_rule_ids = itertools.count(1)

_RULE_CONSTANT = re.compile(r"^r(\d+)$")


def next_rule_id() -> int:
    """Allocate a fresh rule identifier."""
    return next(_rule_ids)


def rule_id_from_constant(constant: str) -> Optional[int]:
    """Recover a rule identifier from its ``r<id>`` constant, if it is one."""
    match = _RULE_CONSTANT.match(constant)
    return int(match.group(1)) if match else None


@dataclass(frozen=True, eq=False)
class Rule:
    """
    Immutable ELP rule.

    Equality and hashing are structural: identifier and label are ignored
    and body order does not matter.

    Example:
        >>> bird = Literal.of("bird", "tweety")
        >>> flies = Literal.of("flies", "tweety")
        >>> str(Rule(head=flies, body=(bird,)))
        'flies(tweety) :- bird(tweety).'
    """

    head: Optional[Literal] = None
    body: Tuple[Literal, ...] = ()
    neg_body: Tuple[Literal, ...] = ()
    label: int = 0
    rule_id: int = field(default_factory=next_rule_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", tuple(self.body))
        object.__setattr__(self, "neg_body", tuple(self.neg_body))

    def _key(self) -> Tuple[Optional[Literal], FrozenSet[Literal], FrozenSet[Literal]]:
        return (self.head, frozenset(self.body), frozenset(self.neg_body))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    @property
    def is_constraint(self) -> bool:
        return self.head is None

    @property
    def is_fact(self) -> bool:
        return self.head is not None and not self.body and not self.neg_body

    @property
    def is_empty(self) -> bool:
        return self.head is None and not self.body and not self.neg_body

    @property
    def meta_constant(self) -> str:
        """Constant naming this rule inside generated meta-programs."""
        return f"r{self.rule_id}"

    def literals(self) -> Tuple[Literal, ...]:
        """All literals of the rule: head, positive body, negative body."""
        head = (self.head,) if self.head is not None else ()
        return head + self.body + self.neg_body

    def complete_body(self) -> Tuple[Literal, ...]:
        return self.body + self.neg_body

    @property
    def literal_count(self) -> int:
        return len(self.literals())

    def has_complementary_head(self, other: "Rule") -> bool:
        """True if both rules have heads that are classical complements."""
        if self.head is None or other.head is None:
            return False
        return self.head.is_complementary(other.head)

    def extended(
        self, body: Iterable[Literal] = (), neg_body: Iterable[Literal] = ()
    ) -> "Rule":
        """Return a copy with literals appended to the bodies, keeping identifier and label."""
        return replace(
            self, body=self.body + tuple(body), neg_body=self.neg_body + tuple(neg_body)
        )

    def with_label(self, label: int) -> "Rule":
        return replace(self, label=label)

    def renumbered(self) -> "Rule":
        """Return a copy carrying a fresh identifier."""
        return replace(self, rule_id=next_rule_id())

    def to_asp(self) -> str:
        """Render the rule in clingo syntax."""
        body = [str(literal) for literal in self.body]
        body.extend(f"not {literal}" for literal in self.neg_body)
        if self.head is None:
            return f":- {', '.join(body)}."
        if not body:
            return f"{self.head}."
        return f"{self.head} :- {', '.join(body)}."

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "label": self.label,
            "head": self.head.to_dict() if self.head is not None else None,
            "body": [literal.to_dict() for literal in self.body],
            "neg_body": [literal.to_dict() for literal in self.neg_body],
            "text": self.to_asp(),
        }

    def __str__(self) -> str:
        return self.to_asp()

    def __repr__(self) -> str:
        return f"Rule(id={self.rule_id}, label={self.label}, {self.to_asp()!r})"
