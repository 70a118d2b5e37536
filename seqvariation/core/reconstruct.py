"""
Rebuild the mutant sequence of a Haplotype.

Author: Kevin R. Roy
"""

from typing import List, Optional

from .edits import Deletion, Insertion, Substitution


def reconstructed_length(haplotype) -> int:
    """Length of the sequence a Haplotype describes."""
    return len(haplotype.reference) + sum(edit.lendiff for edit in haplotype.edits)


def reconstruct(haplotype, buffer: Optional[List[str]] = None) -> str:
    """
    Apply a Haplotype's edits to its reference.

    Runs in time linear in the reference length plus the inserted sequence.

    Args:
        haplotype: Haplotype whose edits are applied left to right
        buffer: Optional list that is resized and filled with the output
            symbols in place

    Returns:
        The reconstructed sequence
    """
    ref = haplotype.reference
    length = reconstructed_length(haplotype)
    if buffer is None:
        buffer = []
    buffer[:] = [''] * length

    refpos = 0  # 0-based index of the next unconsumed reference symbol
    seqpos = 0
    for edit in haplotype.edits:
        m = edit.mutation
        # Insertions follow their anchor base, everything else starts at it
        stop = edit.position if isinstance(m, Insertion) else edit.position - 1
        span = stop - refpos
        buffer[seqpos:seqpos + span] = ref[refpos:stop]
        refpos = stop
        seqpos += span

        if isinstance(m, Substitution):
            buffer[seqpos] = m.symbol
            seqpos += 1
            refpos += 1
        elif isinstance(m, Deletion):
            refpos += m.length
        elif isinstance(m, Insertion):
            n = len(m.sequence)
            buffer[seqpos:seqpos + n] = m.sequence
            seqpos += n

    buffer[seqpos:] = ref[refpos:]
    return ''.join(buffer)
