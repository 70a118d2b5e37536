"""
Exceptions raised by seqvariation.

All of them derive from ValueError so callers that already guard sequence
input with ``except ValueError`` keep working.

Author: Kevin R. Roy
"""

from typing import Optional


class ParseError(ValueError):
    """Edit text that matches none of the edit forms."""

    def __init__(self, text: str, message: Optional[str] = None):
        self.text = text
        super().__init__(message or f'Failed to parse edit "{text}"')


class ConstructionError(ValueError):
    """Edit, Variation or Haplotype built from invalid parts."""

    def __init__(self, message: str, edit=None, index: Optional[int] = None):
        self.edit = edit
        self.index = index
        super().__init__(message)


class UsageError(ValueError):
    """Comparison or membership test across different reference sequences."""
