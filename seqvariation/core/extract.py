"""
Extract edits from a pairwise alignment.

Walks the alignment column by column and emits substitutions, insertion
runs and deletion runs as Edits on the reference.

Author: Kevin R. Roy
"""

import logging
from typing import List

from ..utils.sequence import is_gap
from .edits import Deletion, Edit, Insertion, Substitution

logger = logging.getLogger(__name__)


def extract_edits(alignment, discard_clipped_indels: bool = True) -> List[Edit]:
    """
    Turn an alignment of an observed sequence against a reference into edits.

    Args:
        alignment: PairwiseAlignment with the observed sequence as query
        discard_clipped_indels: Drop an indel run that touches a terminal
            soft clip; clipped bases are not evidence of a called variant

    Returns:
        Edits in alignment order (not yet validated)
    """
    edits = []
    refpos = alignment.ref_start  # reference symbols consumed so far

    del_start = 0
    n_del = 0
    ins_anchor = 0
    ins_buffer = []
    # The run open at the first column touches a leading clip
    leading_run = True

    for seq_sym, ref_sym in alignment.columns():
        ref_gap = is_gap(ref_sym)
        seq_gap = is_gap(seq_sym)
        if not ref_gap:
            refpos += 1

        # Deletions
        if seq_gap:
            if n_del == 0:
                del_start = refpos
            n_del += 1
        elif n_del:
            _emit(edits, Edit(Deletion(n_del), del_start), leading_run, alignment, discard_clipped_indels)
            n_del = 0

        # Insertions follow the last consumed reference base
        if ref_gap:
            if not ins_buffer:
                ins_anchor = refpos
            ins_buffer.append(seq_sym)
        elif ins_buffer:
            _emit(edits, Edit(Insertion(''.join(ins_buffer)), ins_anchor), leading_run, alignment,
                  discard_clipped_indels)
            ins_buffer = []

        # Substitutions
        if not ref_gap and not seq_gap and seq_sym != ref_sym:
            edits.append(Edit(Substitution(seq_sym), refpos))

        if not (seq_gap or ref_gap):
            leading_run = False

    # Final indel, unless it runs into a clip at the end of the alignment
    if discard_clipped_indels and alignment.clipped_end:
        if n_del or ins_buffer:
            logger.debug(f"Discarding indel before 3' soft clip ({alignment.cigar})")
    else:
        if n_del:
            _emit(edits, Edit(Deletion(n_del), del_start), leading_run, alignment, discard_clipped_indels)
        if ins_buffer:
            _emit(edits, Edit(Insertion(''.join(ins_buffer)), ins_anchor), leading_run, alignment,
                  discard_clipped_indels)

    logger.debug(f"Extracted {len(edits)} edits from alignment {alignment.cigar}")
    return edits


def _emit(edits: List[Edit], edit: Edit, leading_run: bool, alignment, discard_clipped_indels: bool):
    if leading_run and discard_clipped_indels and alignment.clipped_start:
        logger.debug(f"Discarding {edit!r} after 5' soft clip ({alignment.cigar})")
        return
    edits.append(edit)
