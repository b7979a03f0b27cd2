"""
Command-line interface.
"""

from .commands import cli

__all__ = ["cli"]
