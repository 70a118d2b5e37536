"""
Atomic edits: substitutions, deletions and insertions anchored on a reference.

Positions are 1-based reference coordinates:
- Substitution at pos: the reference base at pos is replaced
- Deletion of L at pos: reference bases pos..pos+L-1 are removed
- Insertion at pos: the inserted sequence follows reference base pos
  (pos 0 places it before the first base)

Text forms (tried in this order):
- Deletion:     "Δ<start>-<stop>", e.g. "Δ1-2"
- Insertion:    "<pos><bases>",    e.g. "11T"
- Substitution: "<ref><pos><alt>", e.g. "G16C"

Author: Kevin R. Roy
"""

import numbers
import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .alphabet import Alphabet
from .exceptions import ConstructionError, ParseError

DELETION_PATTERN = re.compile(r'^Δ(\d+)-(\d+)$')
INSERTION_PATTERN = re.compile(r'^(\d+)([A-Za-z]+)$')
SUBSTITUTION_PATTERN = re.compile(r'^([A-Za-z])(\d+)([A-Za-z])$')


@dataclass(frozen=True)
class Substitution:
    """Presence of `symbol` at a reference position stored on the Edit."""
    symbol: str

    def __post_init__(self):
        if not isinstance(self.symbol, str) or len(self.symbol) != 1:
            raise ConstructionError(f"Substitution must be a single symbol, got {self.symbol!r}")

    def __len__(self) -> int:
        return 1


@dataclass(frozen=True)
class Deletion:
    """Deletion of `length` reference symbols."""
    length: int

    def __post_init__(self):
        if isinstance(self.length, bool) or not isinstance(self.length, numbers.Integral) or self.length < 1:
            raise ConstructionError(f"Deletion must be at least 1 symbol, got {self.length!r}")
        object.__setattr__(self, 'length', int(self.length))

    def __len__(self) -> int:
        return self.length


@dataclass(frozen=True)
class Insertion:
    """Insertion of `sequence` after a reference position stored on the Edit."""
    sequence: str

    def __post_init__(self):
        if not isinstance(self.sequence, str) or not self.sequence:
            raise ConstructionError("Insertion must be at least 1 symbol")

    def __len__(self) -> int:
        return len(self.sequence)


Mutation = Union[Substitution, Deletion, Insertion]


@dataclass(frozen=True)
class Edit:
    """A mutation at a 1-based reference position."""
    mutation: Mutation
    position: int

    def __post_init__(self):
        if not isinstance(self.mutation, (Substitution, Deletion, Insertion)):
            raise ConstructionError(f"Unknown mutation type: {type(self.mutation).__name__}")
        if isinstance(self.position, bool) or not isinstance(self.position, numbers.Integral) or self.position < 0:
            raise ConstructionError(f"Edit position must be a non-negative integer, got {self.position!r}")
        # Frozen; store numpy integers as plain int
        object.__setattr__(self, 'position', int(self.position))

    @property
    def kind(self) -> str:
        if isinstance(self.mutation, Substitution):
            return 'substitution'
        elif isinstance(self.mutation, Deletion):
            return 'deletion'
        return 'insertion'

    @property
    def length(self) -> int:
        return len(self.mutation)

    @property
    def leftposition(self) -> int:
        return self.position

    @property
    def rightposition(self) -> int:
        if isinstance(self.mutation, Substitution):
            return self.position
        elif isinstance(self.mutation, Deletion):
            return self.position + self.mutation.length - 1
        return self.position + 1

    @property
    def lendiff(self) -> int:
        """Change in sequence length caused by this edit."""
        if isinstance(self.mutation, Substitution):
            return 0
        elif isinstance(self.mutation, Deletion):
            return -self.mutation.length
        return len(self.mutation.sequence)

    @property
    def sort_key(self) -> Tuple[int, int]:
        # An insertion follows its anchor base, so it sorts after a
        # substitution or deletion starting at the same position.
        return self.position, int(isinstance(self.mutation, Insertion))

    def to_string(self, reference: str) -> str:
        """Format the edit; substitutions need the reference base."""
        m = self.mutation
        if isinstance(m, Substitution):
            return f"{reference[self.position - 1]}{self.position}{m.symbol}"
        elif isinstance(m, Deletion):
            return f"Δ{self.position}-{self.position + m.length - 1}"
        return f"{self.position}{m.sequence}"

    def __repr__(self) -> str:
        m = self.mutation
        if isinstance(m, Substitution):
            return f"Edit(substitution {m.symbol} at {self.position})"
        elif isinstance(m, Deletion):
            return f"Edit(deletion of {m.length} at {self.position})"
        return f"Edit(insertion of {m.sequence} at {self.position})"


def parse_edit(text: str, alphabet: Optional[Alphabet] = None) -> Edit:
    """
    Parse an edit from its text form.

    Args:
        text: Edit text, e.g. "Δ1-2", "11T" or "G16C"
        alphabet: If given, inserted and substituted symbols must belong to it

    Returns:
        Parsed Edit

    Raises:
        ParseError: If the text matches no edit form
    """
    text = str(text)

    m = DELETION_PATTERN.match(text)
    if m:
        start, stop = int(m.group(1)), int(m.group(2))
        if stop < start:
            raise ParseError(text, f'Non-positive deletion length: "{text}"')
        return Edit(Deletion(stop - start + 1), start)

    m = INSERTION_PATTERN.match(text)
    if m:
        bases = m.group(2)
        _check_symbols(text, bases, alphabet)
        return Edit(Insertion(bases), int(m.group(1)))

    m = SUBSTITUTION_PATTERN.match(text)
    if m:
        symbol = m.group(3)
        _check_symbols(text, symbol, alphabet)
        return Edit(Substitution(symbol), int(m.group(2)))

    raise ParseError(text)


def stated_reference_symbol(text: str) -> Optional[str]:
    """Return the reference symbol written in a substitution, if any."""
    m = SUBSTITUTION_PATTERN.match(str(text))
    return m.group(1) if m else None


def _check_symbols(text: str, symbols: str, alphabet: Optional[Alphabet]):
    if alphabet is not None and not alphabet.contains(symbols):
        raise ParseError(text, f'Symbols "{symbols}" are not valid {alphabet.value}: "{text}"')
