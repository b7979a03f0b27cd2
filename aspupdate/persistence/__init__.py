"""
Persistence of programs.
"""

from .program_store import PersistenceError, ProgramStore

__all__ = ["PersistenceError", "ProgramStore"]
