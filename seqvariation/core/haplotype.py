"""
Haplotypes: ordered, non-overlapping edit lists bound to one reference.

Edits are applied left to right by position. A Haplotype is only ever built
from an edit list in which no reference base is touched by more than one
edit and no two insertions share the same gap, so every Haplotype has a
single interpretation.

Author: Kevin R. Roy
"""

from typing import Iterable, Iterator, List, Sequence, Tuple, Union

from .edits import Deletion, Edit, Insertion, Substitution, parse_edit
from .exceptions import ConstructionError, UsageError
from .extract import extract_edits
from .reconstruct import reconstruct
from .variation import Variation, is_valid_edit


def validate_edits(reference: str, edits: Sequence[Edit]):
    """
    Check a sorted edit list against a reference.

    Walks the edits once, shrinking the window [lo, hi] of reference
    positions not yet consumed by an earlier edit.

    Raises:
        ConstructionError: Naming the first offending edit
    """
    if not reference:
        raise ConstructionError("Reference sequence must not be empty")

    lo, hi = 1, len(reference)
    last_insert_pos = None

    for index, edit in enumerate(edits):
        if not is_valid_edit(reference, edit):
            raise ConstructionError(
                f"Edit {index} ({edit!r}) is out of bounds for a reference of length {hi}",
                edit=edit, index=index,
            )

        pos = edit.position
        m = edit.mutation

        # A base may be substituted at most once
        if isinstance(m, Substitution):
            if not lo <= pos <= hi:
                raise _overlap_error(reference, edit, index)
            lo = pos + 1

        # Insertions consume no reference bases, but two insertions in the
        # same gap would have no defined order
        elif isinstance(m, Insertion):
            if not lo - 1 <= pos <= hi or pos == last_insert_pos:
                raise _overlap_error(reference, edit, index)
            last_insert_pos = pos

        elif isinstance(m, Deletion):
            if not (lo <= pos and pos + m.length - 1 <= hi):
                raise _overlap_error(reference, edit, index)
            lo = pos + m.length


def _overlap_error(reference: str, edit: Edit, index: int) -> ConstructionError:
    return ConstructionError(
        f"Edit {index} ({edit.to_string(reference)}) overlaps a preceding edit",
        edit=edit, index=index,
    )


class Haplotype:
    """
    A reference sequence plus a sorted, validated list of edits.

    Build one from edits (Edit objects or their text forms), from an
    alignment, or from Variations sharing the same reference:
        Haplotype("ACGT", ["C2T", "3AA"])
        Haplotype.from_alignment(alignment)
        Haplotype.from_variations(reference, variations)
    """

    __slots__ = ('_reference', '_edits')

    def __init__(self, reference: str, edits: Iterable[Union[Edit, str]] = ()):
        parsed = [e if isinstance(e, Edit) else parse_edit(e) for e in edits]
        parsed.sort(key=lambda e: e.sort_key)
        validate_edits(reference, parsed)
        self._reference = reference
        self._edits = tuple(parsed)

    @classmethod
    def unchecked(cls, reference: str, edits: Iterable[Edit]) -> 'Haplotype':
        """
        Build a Haplotype without sorting or validating its edits.

        The caller must already guarantee that the edits are sorted and
        non-overlapping.
        """
        obj = cls.__new__(cls)
        obj._reference = reference
        obj._edits = tuple(edits)
        return obj

    @classmethod
    def from_alignment(cls, alignment, discard_clipped_indels: bool = True) -> 'Haplotype':
        """
        Build the Haplotype of an alignment's query against its reference.

        Args:
            alignment: PairwiseAlignment (query = observed sequence)
            discard_clipped_indels: Drop indels that abut a terminal soft clip
        """
        edits = extract_edits(alignment, discard_clipped_indels=discard_clipped_indels)
        return cls(alignment.reference, edits)

    @classmethod
    def from_variations(cls, reference: str, variations: Iterable[Variation]) -> 'Haplotype':
        """Group Variations on the same reference into one Haplotype."""
        edits = []
        for variation in variations:
            if variation.reference != reference:
                raise UsageError(f"Variation {variation} is not defined on this reference")
            edits.append(variation.edit)
        return cls(reference, edits)

    @property
    def reference(self) -> str:
        return self._reference

    @property
    def edits(self) -> Tuple[Edit, ...]:
        return self._edits

    def variations(self) -> List[Variation]:
        """Split this Haplotype into one Variation per edit."""
        return [Variation(self._reference, e) for e in self._edits]

    def reconstruct(self) -> str:
        """Return the mutant sequence described by this Haplotype."""
        return reconstruct(self)

    def __contains__(self, variation: Variation) -> bool:
        if not isinstance(variation, Variation):
            return False
        if variation.reference != self._reference:
            raise UsageError("References must be equal")
        return any(variation.edit == edit for edit in self._edits)

    def __iter__(self) -> Iterator[Variation]:
        return iter(self.variations())

    def __len__(self) -> int:
        return len(self._edits)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Haplotype):
            return NotImplemented
        return self._reference == other._reference and self._edits == other._edits

    def __hash__(self) -> int:
        return hash((Haplotype, self._reference, self._edits))

    def __str__(self) -> str:
        n = len(self._edits)
        lines = [f"{type(self).__name__} with {n} edit{'' if n == 1 else 's'}:"]
        for edit in self._edits:
            lines.append(f"  {edit.to_string(self._reference)}")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        edits = ', '.join(e.to_string(self._reference) for e in self._edits)
        return f"Haplotype(reference_length={len(self._reference)}, edits=[{edits}])"
