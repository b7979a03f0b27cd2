"""
Parser for ground extended logic programs.

Syntax:
- rules end with ``.``; several rules may share a line
- ``:-`` separates head and body; a missing head makes a constraint
- ``not`` prefixes a default-negated body literal
- ``-`` prefixes a classically negated literal
- ``%`` starts a comment running to the end of the line

Only the ground fragment is accepted: single-literal heads, constant
terms, no variables, disjunction or aggregates.
"""

import re
from typing import Iterable, List, Optional, Tuple

from loguru import logger

from .answer_set import AnswerSet
from .errors import DuplicateRuleError, ParseError
from .literal import Atom, Literal
from .program import Program
from .rule import Rule

_COMMENT = re.compile(r"%.*$", re.MULTILINE)
_LITERAL = re.compile(r"^(-)?\s*([a-z][A-Za-z0-9_]*)\s*(?:\((.*)\))?$", re.DOTALL)
_TERM = re.compile(r"^(?:[a-z][A-Za-z0-9_]*|0|[1-9][0-9]*)$")
_KEYWORDS = frozenset({"not"})
_NAF = re.compile(r"^not\s+(.+)$", re.DOTALL)


def split_top_level(text: str, separators: str = ",") -> List[str]:
    """
    Split ``text`` at separator characters that are not nested in parentheses.

    Raises:
        ParseError: If parentheses are unbalanced
    """
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ParseError("Unbalanced parentheses", text)
        if char in separators and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    if depth != 0:
        raise ParseError("Unbalanced parentheses", text)
    parts.append("".join(current))
    return parts


def parse_literal(text: str) -> Literal:
    """
    Parse a single (possibly classically negated) literal.

    Raises:
        ParseError: If the text is not a ground literal
    """
    stripped = text.strip()
    match = _LITERAL.match(stripped)
    if not match:
        raise ParseError("Malformed literal", stripped)
    negation, predicate, arguments = match.groups()
    if predicate in _KEYWORDS:
        raise ParseError(f"'{predicate}' is a keyword, not a predicate", stripped)
    terms: Tuple[str, ...] = ()
    if arguments is not None:
        raw_terms = [term.strip() for term in split_top_level(arguments)]
        for term in raw_terms:
            if term in _KEYWORDS or not _TERM.match(term):
                raise ParseError("Malformed term list", stripped)
        terms = tuple(raw_terms)
    return Literal(Atom(predicate, terms), negated=negation is not None)


def parse_rule(text: str, label: int = 0) -> Rule:
    """
    Parse one rule without its terminating dot.

    Raises:
        ParseError: On more than one ``:-``, several head literals, ``not``
            in the head, malformed literals or an empty rule
    """
    statement = text.strip()
    parts = statement.split(":-")
    if len(parts) > 2:
        raise ParseError("More than one ':-' in rule", statement)

    head_text = parts[0].strip()
    head: Optional[Literal] = None
    if head_text:
        head_parts = split_top_level(head_text, ",;|")
        if len(head_parts) > 1:
            raise ParseError("Rule heads may contain a single literal only", statement)
        if _NAF.match(head_text):
            raise ParseError("Default negation is not allowed in rule heads", statement)
        head = parse_literal(head_text)

    body: List[Literal] = []
    neg_body: List[Literal] = []
    if len(parts) == 2:
        body_text = parts[1].strip()
        if not body_text:
            raise ParseError("Empty rule body after ':-'", statement)
        for item in split_top_level(body_text):
            item = item.strip()
            naf = _NAF.match(item)
            if naf:
                neg_body.append(parse_literal(naf.group(1)))
            else:
                body.append(parse_literal(item))

    if head is None and not body and not neg_body:
        raise ParseError("Empty rule", statement)
    return Rule(head=head, body=tuple(body), neg_body=tuple(neg_body), label=label)


def parse_rules(text: str) -> List[Rule]:
    """
    Parse every rule of ``text``; rules are labelled by position.

    Raises:
        ParseError: On any malformed rule, or text after the last ``.``
    """
    content = _COMMENT.sub("", text)
    statements = content.split(".")
    trailing = statements.pop()
    if trailing.strip():
        raise ParseError("Missing terminating '.'", trailing.strip())

    rules: List[Rule] = []
    for statement in statements:
        if not statement.strip():
            continue
        rules.append(parse_rule(statement, label=len(rules)))
    return rules


def parse_program(text: Optional[str], name: str = "program") -> Program:
    """
    Parse ELP text into a Program.

    Structurally duplicate rules are skipped with a warning.

    Raises:
        ParseError: If the text is empty, contains no rules or is malformed

    Example:
        >>> program = parse_program("bird(tweety). flies(tweety) :- bird(tweety).", "kb")
        >>> len(program)
        2
    """
    if text is None or not _COMMENT.sub("", text).strip():
        raise ParseError("Program text is empty")

    rules = parse_rules(text)
    if not rules:
        raise ParseError("Program text contains no rules")

    program = Program(name)
    for rule in rules:
        try:
            program = program.with_rule(rule)
        except DuplicateRuleError:
            logger.warning(f"Skipping duplicate rule in '{name}': {rule.to_asp()}")
    return program


def parse_answer_set(text: str) -> AnswerSet:
    """
    Parse one answer set rendering such as ``"bird(tweety), -flies(tweety)"``.

    Literals may be separated by commas or whitespace. A blank string is
    the empty answer set.

    Raises:
        ParseError: If any literal is malformed
    """
    stripped = text.strip().strip("{}").strip()
    if not stripped:
        return AnswerSet()
    items = [item for item in split_top_level(stripped, ", \t\n") if item.strip()]
    return AnswerSet.of(parse_literal(item) for item in items)


def parse_answer_sets(models: Iterable[str]) -> List[AnswerSet]:
    """
    Parse solver output; unparseable entries are skipped with a warning.
    """
    answer_sets: List[AnswerSet] = []
    for model in models:
        try:
            answer_sets.append(parse_answer_set(model))
        except ParseError as e:
            logger.warning(f"Skipping unparseable answer set: {e}")
    return answer_sets
