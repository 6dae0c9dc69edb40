"""
Shared utilities for cvpress.

Common functionality used across contexts:
- Logger setup
- LLM provider access
- PDF read-back
- Timestamps
"""

from cvpress.utils.timestamp import now

__all__ = ["now"]
