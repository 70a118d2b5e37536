"""
Translate variations between reference sequences.

Given a Variation on an old reference and an alignment whose reference side
is the old reference and whose query side is the new reference, re-express
the Variation on the new reference.

Every translation has one of three outcomes:
- TRANSLATED: an equivalent Variation exists on the new reference
- NO_CHANGE: the new reference already carries the change, so nothing
  needs to be represented
- INAPPLICABLE: the change cannot be anchored unambiguously on the new
  reference

Author: Kevin R. Roy
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..utils.sequence import is_gap
from .alignment import PairwiseAlignment, is_delete_op, is_match_op, op_name
from .cigar import OP_UNALIGNED
from .edits import Deletion, Edit, Insertion, Substitution
from .exceptions import UsageError
from .haplotype import Haplotype
from .variation import Variation

logger = logging.getLogger(__name__)


class TranslationStatus(Enum):
    """Outcome categories of a translation."""
    TRANSLATED = 'translated'
    NO_CHANGE = 'no_change'
    INAPPLICABLE = 'inapplicable'


@dataclass
class TranslationResult:
    """Result of translating one Variation."""
    status: TranslationStatus
    variation: Optional[Variation] = None
    reason: str = ''

    @property
    def is_translated(self) -> bool:
        return self.status == TranslationStatus.TRANSLATED


@dataclass
class HaplotypeTranslation:
    """Result of translating every Variation of a Haplotype."""
    haplotype: Haplotype
    results: List[TranslationResult] = field(default_factory=list)

    @property
    def inapplicable(self) -> List[TranslationResult]:
        return [r for r in self.results if r.status == TranslationStatus.INAPPLICABLE]


def _translated(reference: str, edit: Edit) -> TranslationResult:
    return TranslationResult(TranslationStatus.TRANSLATED, Variation.unchecked(reference, edit))


def _no_change(reason: str) -> TranslationResult:
    return TranslationResult(TranslationStatus.NO_CHANGE, reason=reason)


def _inapplicable(reason: str) -> TranslationResult:
    return TranslationResult(TranslationStatus.INAPPLICABLE, reason=reason)


def translate(variation: Variation, alignment: PairwiseAlignment) -> TranslationResult:
    """
    Re-anchor a Variation on the query side of an alignment.

    Args:
        variation: Variation on the old reference
        alignment: Alignment of the new reference (query) against the old
            reference (reference)

    Returns:
        TranslationResult; the Variation is set only for TRANSLATED

    Raises:
        UsageError: If the alignment's reference is not the variation's reference
    """
    if variation.reference != alignment.reference:
        raise UsageError("Alignment reference must be the variation's reference")

    result = _translate(variation, alignment)
    logger.debug(
        f"Translated {variation}: {result.status.value}"
        + (f" -> {result.variation}" if result.variation is not None else f" ({result.reason})")
    )
    return result


def _translate(variation: Variation, alignment: PairwiseAlignment) -> TranslationResult:
    m = variation.mutation
    pos = variation.leftposition
    new_ref = alignment.query

    # Insertions before the first base cannot be mapped with ref2seq
    if pos == 0:
        column = alignment.first_column()
        if (column is None or is_gap(column[0]) or is_gap(column[1])
                or alignment.query_start != 0 or alignment.ref_start != 0):
            return _inapplicable("alignment does not start with an aligned base")
        return _translated(new_ref, Edit(m, 0))

    seqpos, op = alignment.ref2seq(pos)

    if isinstance(m, Substitution):
        if not is_match_op(op):
            return _inapplicable(f"position {pos} is {op_name(op)} in the new reference")
        if new_ref[seqpos - 1] == m.symbol:
            return _no_change(f"new reference already has {m.symbol} at {seqpos}")
        return _translated(new_ref, Edit(m, seqpos))

    elif isinstance(m, Deletion):
        stop, stop_op = alignment.ref2seq(pos + m.length - 1)
        if op == OP_UNALIGNED or stop_op == OP_UNALIGNED:
            return _inapplicable(f"deletion at {pos} extends outside the alignment")
        # A start inside a deleted run maps to the base before the run
        start = seqpos + int(is_delete_op(op))
        length = stop - start + 1
        if length <= 0:
            return _no_change("deleted bases are already absent from the new reference")
        return _translated(new_ref, Edit(Deletion(length), start))

    elif isinstance(m, Insertion):
        if not is_match_op(op):
            return _inapplicable(f"anchor {pos} is {op_name(op)} in the new reference")
        if not _next_base_adjacent(alignment, pos, seqpos):
            return _inapplicable(f"the new reference already has bases inserted after {pos}")
        return _translated(new_ref, Edit(m, seqpos))

    raise TypeError(f"Unknown mutation type: {type(m).__name__}")


def _next_base_adjacent(alignment: PairwiseAlignment, pos: int, seqpos: int) -> bool:
    # The gap after the anchor must not already hold new-reference bases
    if pos < len(alignment.reference):
        next_seqpos, _ = alignment.ref2seq(pos + 1)
        return next_seqpos == seqpos + 1
    return seqpos == len(alignment.query)


def translate_haplotype(haplotype: Haplotype, alignment: PairwiseAlignment) -> HaplotypeTranslation:
    """
    Translate every Variation of a Haplotype and regroup the results.

    NO_CHANGE and INAPPLICABLE variations are left out of the new Haplotype
    but kept in `results`.

    Raises:
        UsageError: If the alignment's reference is not the haplotype's reference
        ConstructionError: If translated variations collide on the new reference
    """
    results = [translate(v, alignment) for v in haplotype.variations()]
    translated = [r.variation for r in results if r.is_translated]
    new_haplotype = Haplotype.from_variations(alignment.query, translated)

    n_skipped = len(results) - len(translated)
    if n_skipped:
        logger.info(f"{n_skipped} of {len(results)} variations were not carried to the new reference")
    return HaplotypeTranslation(haplotype=new_haplotype, results=results)
