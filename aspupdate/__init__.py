"""
aspupdate: interactive updates of extended logic programs.

Detects contradictions between an older and a newer program with the
causal rejection method and proposes rule edits that resolve them.
"""

__version__ = "0.1.0"

from aspupdate.config import config

__all__ = ["config", "__version__"]
