"""
Program model for ground extended logic programs.

Atoms, literals, rules, programs, answer sets and the text parser.
"""

from .errors import (
    ProgramError,
    InvalidRuleError,
    DuplicateRuleError,
    UnknownRuleError,
    ParseError,
)
from .literal import Atom, Literal, has_complementary_pair
from .rule import Rule, next_rule_id, rule_id_from_constant
from .program import Program, build_literal_index, merge_programs, next_free_label
from .answer_set import AnswerSet
from .elp_parser import (
    parse_program,
    parse_rules,
    parse_rule,
    parse_literal,
    parse_answer_set,
    parse_answer_sets,
)

__all__ = [
    # Errors
    "ProgramError",
    "InvalidRuleError",
    "DuplicateRuleError",
    "UnknownRuleError",
    "ParseError",
    # Model
    "Atom",
    "Literal",
    "has_complementary_pair",
    "Rule",
    "next_rule_id",
    "rule_id_from_constant",
    "Program",
    "build_literal_index",
    "merge_programs",
    "next_free_label",
    "AnswerSet",
    # Parser
    "parse_program",
    "parse_rules",
    "parse_rule",
    "parse_literal",
    "parse_answer_set",
    "parse_answer_sets",
]
