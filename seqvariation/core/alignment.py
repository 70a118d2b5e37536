"""
Pairwise alignments of a query sequence against a reference.

The alignment itself is computed elsewhere (an aligner, pysam, or a pair of
gapped rows); this module only exposes what edit extraction and translation
need:
- the column stream of (query symbol or gap, reference symbol or gap)
- reference -> query coordinate mapping (ref2seq)
- whether the alignment starts or ends in a soft clip

Author: Kevin R. Roy
"""

from typing import Iterator, List, Optional, Tuple

import numpy as np
import pysam

from ..utils.sequence import GAP, ungap
from .cigar import (
    CIGAR_OPS,
    DELETE_OPS,
    MATCH_OPS,
    OP_DELETE,
    OP_HARD_CLIP,
    OP_INSERT,
    OP_SEQ_MATCH,
    OP_SEQ_MISMATCH,
    OP_SOFT_CLIP,
    OP_UNALIGNED,
    QUERY_CONSUMING_OPS,
    REF_CONSUMING_OPS,
    CigarOperation,
    cigar_string_to_tuples,
    cigar_tuples_to_string,
    parse_cigar_to_operations,
)


class PairwiseAlignment:
    """
    Alignment of `query` against `reference`.

    Coordinates follow pysam: `ref_start` is the 0-based reference position
    of the first aligned base, and query coordinates include soft-clipped
    bases. ref2seq() takes and returns 1-based positions.
    """

    def __init__(
        self,
        query: str,
        reference: str,
        cigartuples: List[Tuple[int, int]],
        ref_start: int = 0,
    ):
        self.query = query
        self.reference = reference
        self.ref_start = ref_start
        self.operations: List[CigarOperation] = parse_cigar_to_operations(cigartuples, ref_start)

        query_len = sum(op.length for op in self.operations if op.op_code in QUERY_CONSUMING_OPS)
        if query_len != len(query):
            raise ValueError(
                f"CIGAR {self.cigar} consumes {query_len} query bases, query has {len(query)}"
            )
        ref_end = self.operations[-1].ref_end if self.operations else ref_start
        if ref_start < 0 or ref_end > len(reference):
            raise ValueError(
                f"CIGAR {self.cigar} at {ref_start} runs past the reference (length {len(reference)})"
            )

        self._aligned = [op for op in self.operations if op.is_aligned]
        # Reference-consuming operations and their (exclusive, 0-based) ends,
        # for binary search in ref2seq
        self._ref_ops = [op for op in self._aligned if op.op_code in REF_CONSUMING_OPS]
        self._ref_ends = np.array([op.ref_end for op in self._ref_ops], dtype=np.int64)

    @classmethod
    def from_cigar(cls, query: str, reference: str, cigar: str, ref_start: int = 0) -> 'PairwiseAlignment':
        """Build from a CIGAR string, e.g. "3S10M2D5M"."""
        return cls(query, reference, cigar_string_to_tuples(cigar), ref_start)

    @classmethod
    def from_gapped(cls, aligned_query: str, aligned_reference: str, gap: str = GAP) -> 'PairwiseAlignment':
        """
        Build from two gapped rows of equal length, e.g. "AC--GT" / "ACTTGT".

        Columns that are gaps in both rows are skipped. Matches and
        mismatches become '=' and 'X' operations.
        """
        if len(aligned_query) != len(aligned_reference):
            raise ValueError(
                f"Aligned rows must be equal length: {len(aligned_query)} vs {len(aligned_reference)}"
            )

        cigartuples = []
        for q, r in zip(aligned_query, aligned_reference):
            if q == gap and r == gap:
                continue
            elif r == gap:
                op = OP_INSERT
            elif q == gap:
                op = OP_DELETE
            elif q == r:
                op = OP_SEQ_MATCH
            else:
                op = OP_SEQ_MISMATCH

            if cigartuples and cigartuples[-1][0] == op:
                cigartuples[-1] = (op, cigartuples[-1][1] + 1)
            else:
                cigartuples.append((op, 1))

        return cls(ungap(aligned_query, gap), ungap(aligned_reference, gap), cigartuples)

    @classmethod
    def from_aligned_segment(cls, read: pysam.AlignedSegment, reference: str) -> 'PairwiseAlignment':
        """
        Build from a pysam AlignedSegment.

        Args:
            read: Mapped read with a CIGAR and query sequence
            reference: Full sequence of the contig the read is mapped to
        """
        if read.is_unmapped or read.cigartuples is None:
            raise ValueError(f"Read {read.query_name} is not aligned")
        if read.query_sequence is None:
            raise ValueError(f"Read {read.query_name} has no query sequence")
        return cls(read.query_sequence, reference, read.cigartuples, read.reference_start)

    @property
    def cigartuples(self) -> List[Tuple[int, int]]:
        return [(op.op_code, op.length) for op in self.operations]

    @property
    def cigar(self) -> str:
        return cigar_tuples_to_string(self.cigartuples)

    @property
    def query_start(self) -> int:
        """Number of query bases before the first aligned column."""
        return self._aligned[0].query_start if self._aligned else 0

    @property
    def clipped_start(self) -> bool:
        """True if the alignment begins with a soft clip."""
        return self._terminal_op(self.operations) == OP_SOFT_CLIP

    @property
    def clipped_end(self) -> bool:
        """True if the alignment ends with a soft clip."""
        return self._terminal_op(reversed(self.operations)) == OP_SOFT_CLIP

    @staticmethod
    def _terminal_op(operations) -> Optional[int]:
        for op in operations:
            if op.op_code != OP_HARD_CLIP:
                return op.op_code
        return None

    def columns(self) -> Iterator[Tuple[str, str]]:
        """Yield (query symbol or gap, reference symbol or gap) per aligned column."""
        for op in self._aligned:
            if op.op_code in MATCH_OPS:
                for i in range(op.length):
                    yield self.query[op.query_start + i], self.reference[op.ref_start + i]
            elif op.op_code == OP_INSERT:
                for i in range(op.length):
                    yield self.query[op.query_start + i], GAP
            elif op.op_code in DELETE_OPS:
                for i in range(op.length):
                    yield GAP, self.reference[op.ref_start + i]

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return self.columns()

    def first_column(self) -> Optional[Tuple[str, str]]:
        return next(self.columns(), None)

    def ref2seq(self, pos: int) -> Tuple[int, int]:
        """
        Map a 1-based reference position to the query.

        Returns:
            Tuple of (query position, op_code). For a match/mismatch column the
            query position is the aligned base; for a deleted reference base it
            is the last query base before the gap (0 if none). Positions outside
            the aligned region return OP_UNALIGNED with the query position at
            the nearest alignment boundary.

        Raises:
            IndexError: If pos is not a reference position
        """
        if not 1 <= pos <= len(self.reference):
            raise IndexError(f"Reference position {pos} out of range 1..{len(self.reference)}")

        if not self._ref_ops or pos <= self._ref_ops[0].ref_start:
            return self.query_start, OP_UNALIGNED
        idx = int(np.searchsorted(self._ref_ends, pos, side='left'))
        if idx == len(self._ref_ops):
            return self._aligned[-1].query_end, OP_UNALIGNED

        op = self._ref_ops[idx]
        if op.op_code in MATCH_OPS:
            return op.query_start + (pos - op.ref_start), op.op_code
        return op.query_start, op.op_code

    def __repr__(self) -> str:
        return (
            f"PairwiseAlignment(cigar={self.cigar}, ref_start={self.ref_start}, "
            f"query_length={len(self.query)}, reference_length={len(self.reference)})"
        )


def is_match_op(op_code: int) -> bool:
    """True for match/mismatch operations (M, =, X)."""
    return op_code in MATCH_OPS


def is_delete_op(op_code: int) -> bool:
    """True for operations that skip reference bases (D, N)."""
    return op_code in DELETE_OPS


def op_name(op_code: int) -> str:
    if op_code == OP_UNALIGNED:
        return 'unaligned'
    return CIGAR_OPS.get(op_code, '?')
