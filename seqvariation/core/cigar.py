"""
CIGAR operation utilities for pairwise alignments.

Author: Kevin R. Roy
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..utils.sequence import parse_cigar

# CIGAR operation codes (from pysam/SAM spec)
CIGAR_OPS = {
    0: 'M',   # Match/mismatch
    1: 'I',   # Insertion
    2: 'D',   # Deletion
    3: 'N',   # Skipped region (intron)
    4: 'S',   # Soft clip
    5: 'H',   # Hard clip
    6: 'P',   # Padding
    7: '=',   # Sequence match
    8: 'X',   # Sequence mismatch
}
CIGAR_CODES = {char: code for code, char in CIGAR_OPS.items()}

OP_MATCH = 0
OP_INSERT = 1
OP_DELETE = 2
OP_SKIP = 3
OP_SOFT_CLIP = 4
OP_HARD_CLIP = 5
OP_PAD = 6
OP_SEQ_MATCH = 7
OP_SEQ_MISMATCH = 8

# Reference position outside the aligned region
OP_UNALIGNED = -1

# Operations that consume reference bases
REF_CONSUMING_OPS = {0, 2, 3, 7, 8}  # M, D, N, =, X

# Operations that consume query (read) bases
QUERY_CONSUMING_OPS = {0, 1, 4, 7, 8}  # M, I, S, =, X

MATCH_OPS = {0, 7, 8}      # M, =, X
DELETE_OPS = {2, 3}        # D, N
CLIP_OPS = {4, 5, 6}       # S, H, P (never alignment columns)


@dataclass
class CigarOperation:
    """A single CIGAR operation with 0-based, half-open coordinates."""
    op_code: int
    op_char: str
    length: int
    ref_start: int
    ref_end: int
    query_start: int
    query_end: int

    @property
    def is_aligned(self) -> bool:
        """True for operations that produce alignment columns."""
        return self.op_code not in CLIP_OPS


def cigar_string_to_tuples(cigar: str) -> List[Tuple[int, int]]:
    """Convert a CIGAR string to pysam-style (op_code, length) tuples."""
    if cigar in ('', '*'):
        return []
    parsed = parse_cigar(cigar)
    if ''.join(f"{length}{op}" for length, op in parsed) != cigar:
        raise ValueError(f"Invalid CIGAR string: {cigar}")
    return [(CIGAR_CODES[op], length) for length, op in parsed]


def cigar_tuples_to_string(cigartuples: Iterable[Tuple[int, int]]) -> str:
    """Format (op_code, length) tuples as a CIGAR string."""
    return ''.join(f"{length}{CIGAR_OPS[op]}" for op, length in cigartuples)


def parse_cigar_to_operations(
    cigartuples: Iterable[Tuple[int, int]],
    ref_start: int = 0,
) -> List[CigarOperation]:
    """
    Expand CIGAR tuples into operations with coordinates.

    Args:
        cigartuples: (op_code, length) pairs, as in pysam's AlignedSegment.cigartuples
        ref_start: 0-based reference position of the first aligned base

    Returns:
        List of CigarOperation objects
    """
    operations = []
    ref_pos = ref_start
    query_pos = 0

    for op_code, length in cigartuples:
        if op_code not in CIGAR_OPS:
            raise ValueError(f"Unknown CIGAR operation code: {op_code}")
        if length < 1:
            raise ValueError(f"CIGAR operation {CIGAR_OPS[op_code]} has length {length}")

        ref_end = ref_pos + length if op_code in REF_CONSUMING_OPS else ref_pos
        query_end = query_pos + length if op_code in QUERY_CONSUMING_OPS else query_pos

        operations.append(CigarOperation(
            op_code=op_code,
            op_char=CIGAR_OPS[op_code],
            length=length,
            ref_start=ref_pos,
            ref_end=ref_end,
            query_start=query_pos,
            query_end=query_end,
        ))

        ref_pos = ref_end
        query_pos = query_end

    return operations

