"""
Single reference-bound mutations.

A Variation bundles one Edit with the reference it applies to and is
validated on construction. It is the unit used for membership tests,
parsing/printing and translation between references.

Author: Kevin R. Roy
"""

import logging
from typing import Optional, Union

from .alphabet import Alphabet
from .edits import (
    Deletion,
    Edit,
    Insertion,
    Mutation,
    Substitution,
    parse_edit,
    stated_reference_symbol,
)
from .exceptions import ConstructionError, UsageError

logger = logging.getLogger(__name__)


def is_valid_edit(reference: str, edit: Edit) -> bool:
    """
    Check that an edit lies within the bounds of a reference.

    - Substitution: 1 <= pos <= len(reference)
    - Insertion: 0 <= pos <= len(reference)
    - Deletion: the span pos..pos+L-1 lies within the reference
    """
    if not reference:
        return False
    m = edit.mutation
    pos = edit.position
    n = len(reference)
    if isinstance(m, Substitution):
        return 1 <= pos <= n
    elif isinstance(m, Insertion):
        return 0 <= pos <= n
    elif isinstance(m, Deletion):
        return 1 <= pos and pos + m.length - 1 <= n
    return False


class Variation:
    """
    A single change to a reference sequence.

    Construct from an Edit or from its text form:
        Variation("ACGT", "C2T")
        Variation("ACGT", "Δ2-3")
        Variation("ACGT", "2TT")

    Prefer Haplotype.variations() over building Edits by hand.
    """

    __slots__ = ('_reference', '_edit')

    def __init__(
        self,
        reference: str,
        edit: Union[Edit, str],
        alphabet: Optional[Alphabet] = None,
    ):
        if not isinstance(edit, Edit):
            text = str(edit)
            edit = parse_edit(text, alphabet)
            _warn_on_reference_mismatch(reference, edit, text)
        if not is_valid_edit(reference, edit):
            raise ConstructionError(
                f"Invalid variation: {edit!r} does not fit a reference of length {len(reference)}",
                edit=edit,
            )
        self._reference = reference
        self._edit = edit

    @classmethod
    def unchecked(cls, reference: str, edit: Edit) -> 'Variation':
        """
        Build a Variation without validating it.

        Only for producers that guarantee validity by construction (the
        translator); everything else should use the normal constructor.
        """
        obj = cls.__new__(cls)
        obj._reference = reference
        obj._edit = edit
        return obj

    @property
    def reference(self) -> str:
        return self._reference

    @property
    def edit(self) -> Edit:
        return self._edit

    @property
    def mutation(self) -> Mutation:
        return self._edit.mutation

    @property
    def leftposition(self) -> int:
        return self._edit.leftposition

    @property
    def rightposition(self) -> int:
        return self._edit.rightposition

    def refbases(self) -> str:
        """
        Reference bases of this variation, VCF REF style.

        Indels include one unmodified flanking base: the base before the
        event, or the base after it when the event starts the reference.
        """
        m = self.mutation
        pos = self.leftposition
        ref = self._reference
        if isinstance(m, Substitution):
            return ref[pos - 1]
        elif isinstance(m, Deletion):
            if pos == 1:
                return ref[0:m.length + 1]
            return ref[pos - 2:pos + m.length - 1]
        if pos == 0:
            return ref[0]
        return ref[pos - 1]

    def altbases(self) -> str:
        """Alternate bases of this variation, VCF ALT style (see refbases)."""
        m = self.mutation
        pos = self.leftposition
        ref = self._reference
        if isinstance(m, Substitution):
            return m.symbol
        elif isinstance(m, Deletion):
            if pos == 1:
                # Empty when the deletion runs to the end of the reference
                return ref[m.length:m.length + 1]
            return ref[pos - 2]
        if pos == 0:
            return m.sequence + ref[0]
        return ref[pos - 1] + m.sequence

    def vcf_position(self) -> int:
        """1-based position of the first base returned by refbases()."""
        m = self.mutation
        pos = self.leftposition
        if isinstance(m, Deletion):
            return pos if pos == 1 else pos - 1
        if isinstance(m, Insertion):
            return max(pos, 1)
        return pos

    def __eq__(self, other) -> bool:
        if not isinstance(other, Variation):
            return NotImplemented
        return self._reference == other._reference and self._edit == other._edit

    def __hash__(self) -> int:
        return hash((Variation, self._reference, self._edit))

    def __lt__(self, other: 'Variation') -> bool:
        if not isinstance(other, Variation):
            return NotImplemented
        if self._reference != other._reference:
            raise UsageError("Variations cannot be compared if their reference sequences aren't equal")
        return self.leftposition < other.leftposition

    def __str__(self) -> str:
        return self._edit.to_string(self._reference)

    def __repr__(self) -> str:
        return f"Variation({self})"


def _warn_on_reference_mismatch(reference: str, edit: Edit, text: str):
    stated = stated_reference_symbol(text)
    if stated is None or not is_valid_edit(reference, edit):
        return
    actual = reference[edit.position - 1]
    if stated != actual:
        logger.warning(
            f"Edit {text} states reference symbol {stated}, "
            f"but reference has {actual} at position {edit.position}"
        )
