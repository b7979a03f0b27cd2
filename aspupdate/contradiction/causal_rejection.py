"""
Conflict detection by causal rejection.

An older program P1 and a newer program P2 are compiled into a single
meta-program, the modified update program (MUP). Rules of P1 are
rejected whenever a rule of P2 with a complementary head is active, and
every rejection is recorded by a ``rej_cause`` literal naming both rules.
The answer sets of the MUP therefore reveal every pair of conflicting
rules that can fire together.
"""

import uuid
from typing import Dict, List, Optional, Sequence, Set, Tuple

from aspupdate.logging import get_component_logger, track_operation
from aspupdate.symbolic import (
    AnswerSet,
    Atom,
    Literal,
    Program,
    Rule,
    rule_id_from_constant,
)

from .conflict_schemas import Conflict

log = get_component_logger("detection")

OLDER_SUFFIX = "_1"
NEWER_SUFFIX = "_2"


class DetectionError(Exception):
    """Raised when the detector is given an unsupported update sequence."""

    pass


class CausalRejectionDetector:
    """
    Builds the modified update program and extracts conflicts from its answer sets.

    Meta predicates carry a random per-instance suffix so that they cannot
    clash with predicates of the user programs.

    Example:
        >>> detector = CausalRejectionDetector()
        >>> mup = detector.build_update_program([older, newer])
        >>> models = solver.compute_models(mup).models
        >>> conflicts = detector.extract_conflicts(
        ...     [older, newer], parse_answer_sets(models)
        ... )
    """

    def __init__(self) -> None:
        suffix = uuid.uuid4().hex[:8]
        self.rej_predicate = f"rej_{suffix}"
        self.rej_cause_predicate = f"rej_cause_{suffix}"
        self.active_predicate = f"active_{suffix}"

    @track_operation("build_update_program", component="detection")
    def build_update_program(self, sequence: Sequence[Program]) -> Program:
        """
        Compile an (older, newer) pair of programs into the MUP.

        Raises:
            DetectionError: If ``sequence`` does not hold exactly two programs
        """
        older, newer = self._check_pair(sequence)
        rules: List[Rule] = []

        for program in (older, newer):
            for rule in program:
                if rule.is_constraint:
                    rules.append(rule.renumbered())

        for rule in older:
            if rule.is_constraint:
                continue
            rules.append(
                Rule(
                    head=rule.head.with_suffix(OLDER_SUFFIX),
                    body=rule.body,
                    neg_body=rule.neg_body + (self._meta(self.rej_predicate, rule),),
                )
            )

        for rule in newer:
            if rule.is_constraint:
                continue
            rules.append(
                Rule(
                    head=rule.head.with_suffix(NEWER_SUFFIX),
                    body=rule.body,
                    neg_body=rule.neg_body,
                )
            )
            rules.append(
                Rule(
                    head=self._meta(self.active_predicate, rule),
                    body=rule.body,
                    neg_body=rule.neg_body,
                )
            )

        for old_rule in older:
            for new_rule in newer:
                if not old_rule.has_complementary_head(new_rule):
                    continue
                rej_cause = self._meta(self.rej_cause_predicate, old_rule, new_rule)
                rules.append(
                    Rule(
                        head=rej_cause,
                        body=old_rule.body + (self._meta(self.active_predicate, new_rule),),
                        neg_body=old_rule.neg_body,
                    )
                )
                rules.append(
                    Rule(head=self._meta(self.rej_predicate, old_rule), body=(rej_cause,))
                )

        for literal in self.literal_base(sequence):
            older_literal = literal.with_suffix(OLDER_SUFFIX)
            rules.append(Rule(head=older_literal, body=(literal.with_suffix(NEWER_SUFFIX),)))
            rules.append(Rule(head=literal, body=(older_literal,)))

        mup = Program.from_rules(f"mup({older.name},{newer.name})", rules).relabelled(0)
        log.info(
            f"Built update program for '{older.name}' <- '{newer.name}' "
            f"with {len(mup)} rules"
        )
        return mup

    def extract_conflicts(
        self, sequence: Sequence[Program], answer_sets: Sequence[AnswerSet]
    ) -> List[Conflict]:
        """
        Turn ``rej_cause`` literals of the MUP answer sets into Conflicts.

        Conflicts are deduplicated by rule pair; every answer set witnessing
        a pair is attached, stripped of meta literals.

        Raises:
            DetectionError: If ``sequence`` does not hold exactly two programs
        """
        older, newer = self._check_pair(sequence)
        base = set(self.literal_base(sequence))
        conflicts: Dict[Tuple[int, int], Conflict] = {}

        for answer_set in answer_sets:
            witness = answer_set.restricted_to(base)
            for literal in answer_set.sorted():
                pair = self._rule_pair(literal)
                if pair is None:
                    continue
                if pair in conflicts:
                    conflicts[pair].answer_sets.append(witness)
                    continue
                old_rule = older.get_rule(pair[0])
                new_rule = newer.get_rule(pair[1])
                if old_rule is None or new_rule is None:
                    log.warning(f"Rejection literal {literal} references unknown rules")
                    continue
                conflicts[pair] = Conflict(rules=(old_rule, new_rule), answer_sets=[witness])

        log.info(f"Extracted {len(conflicts)} conflict(s) from {len(answer_sets)} answer set(s)")
        return list(conflicts.values())

    def literal_base(self, sequence: Sequence[Program]) -> List[Literal]:
        """Literals used by any program of the pair, in order of first appearance."""
        seen: Set[Literal] = set()
        base: List[Literal] = []
        for program in sequence:
            for literal in program.literals():
                if literal not in seen:
                    seen.add(literal)
                    base.append(literal)
        return base

    def _rule_pair(self, literal: Literal) -> Optional[Tuple[int, int]]:
        if literal.negated or literal.predicate != self.rej_cause_predicate:
            return None
        if literal.atom.arity != 2:
            return None
        old_id = rule_id_from_constant(literal.terms[0])
        new_id = rule_id_from_constant(literal.terms[1])
        if old_id is None or new_id is None:
            return None
        return (old_id, new_id)

    @staticmethod
    def _meta(predicate: str, *rules: Rule) -> Literal:
        return Literal(Atom(predicate, tuple(rule.meta_constant for rule in rules)))

    @staticmethod
    def _check_pair(sequence: Sequence[Program]) -> Tuple[Program, Program]:
        if sequence is None or len(sequence) != 2:
            count = 0 if sequence is None else len(sequence)
            raise DetectionError(
                f"Causal rejection compares exactly two programs, got {count}"
            )
        return sequence[0], sequence[1]
