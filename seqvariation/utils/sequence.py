"""
Sequence manipulation utilities.

Author: Kevin R. Roy
"""

import re
from typing import List, Tuple

GAP = '-'

CIGAR_PATTERN = re.compile(r'(\d+)([MIDNSHP=X])')


def parse_cigar(cigar_str: str) -> List[Tuple[int, str]]:
    """Parse CIGAR string into list of (length, operation) tuples.

    CIGAR operations:
    - M: alignment match (can be match or mismatch)
    - I: insertion to reference
    - D: deletion from reference
    - N: skipped region from reference
    - S: soft clipping (sequence present but not aligned)
    - H: hard clipping (sequence not present)
    - P: padding
    - =: sequence match
    - X: sequence mismatch
    """
    return [(int(length), op) for length, op in CIGAR_PATTERN.findall(cigar_str)]


def is_gap(symbol: str, gap: str = GAP) -> bool:
    """Check if an alignment column symbol is a gap."""
    return symbol == gap


def ungap(aligned: str, gap: str = GAP) -> str:
    """Remove gap symbols from an aligned row."""
    return aligned.replace(gap, '')
