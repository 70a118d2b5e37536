"""
Utility modules for seqvariation.

Author: Kevin R. Roy
"""

from .sequence import (
    GAP,
    is_gap,
    parse_cigar,
    ungap,
)

__all__ = [
    'GAP',
    'is_gap',
    'parse_cigar',
    'ungap',
]
