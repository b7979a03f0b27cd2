"""
Exceptions raised by the program model and the ELP parser.
"""

from typing import Optional


class ProgramError(Exception):
    """Base exception for program-model operations."""

    pass


class InvalidRuleError(ProgramError):
    """Raised when a rule has neither a head nor a body."""

    pass


class DuplicateRuleError(ProgramError):
    """Raised when a structurally equal rule is already part of a program."""

    def __init__(self, message: str, rule_id: Optional[int] = None):
        super().__init__(message)
        self.rule_id = rule_id


class UnknownRuleError(ProgramError):
    """Raised when an operation references a rule identifier that is not present."""

    def __init__(self, rule_id: int, program_name: str = ""):
        where = f" in program '{program_name}'" if program_name else ""
        super().__init__(f"No rule with identifier {rule_id}{where}")
        self.rule_id = rule_id
        self.program_name = program_name


class ParseError(ProgramError):
    """Raised when ELP text cannot be parsed."""

    def __init__(self, message: str, line: Optional[str] = None):
        super().__init__(message if line is None else f"{message}: '{line}'")
        self.line = line
