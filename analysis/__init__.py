"""Pure analysis package for xpDashboard.

This package contains deterministic, testable computations that operate on
in-memory transaction records and return DTOs. It must not import Django or
perform any network I/O.
"""

from .transactions import summarize_audits, summarize_experience

__all__ = ["summarize_audits", "summarize_experience"]
