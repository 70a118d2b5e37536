"""
Symbol alphabets for nucleotide and protein sequences.

Author: Kevin R. Roy
"""

from enum import Enum
from typing import Iterable, Optional

# IUPAC codes, upper and lower case
DNA_SYMBOLS = frozenset('ACGTMRWSYKVHDBNacgtmrwsykvhdbn')
RNA_SYMBOLS = frozenset('ACGUMRWSYKVHDBNacgumrwsykvhdbn')
PROTEIN_SYMBOLS = frozenset('ACDEFGHIKLMNPQRSTVWYBJZXOUacdefghiklmnpqrstvwybjzxou')


class Alphabet(Enum):
    """Supported sequence alphabets."""
    DNA = 'dna'
    RNA = 'rna'
    PROTEIN = 'protein'

    @property
    def symbols(self) -> frozenset:
        return {
            Alphabet.DNA: DNA_SYMBOLS,
            Alphabet.RNA: RNA_SYMBOLS,
            Alphabet.PROTEIN: PROTEIN_SYMBOLS,
        }[self]

    def contains(self, symbols: Iterable[str]) -> bool:
        """Check that every symbol belongs to this alphabet."""
        allowed = self.symbols
        return all(s in allowed for s in symbols)


def infer_alphabet(sequence: str) -> Optional[Alphabet]:
    """
    Guess the alphabet of a sequence.

    DNA is preferred over RNA, and RNA over protein, since the nucleotide
    alphabets are subsets of the protein letters.

    Returns:
        The narrowest matching Alphabet, or None if no alphabet fits
    """
    for alphabet in (Alphabet.DNA, Alphabet.RNA, Alphabet.PROTEIN):
        if alphabet.contains(sequence):
            return alphabet
    return None


def parse_alphabet(name: str) -> Optional[Alphabet]:
    """Parse an alphabet name; 'auto' (or empty) returns None."""
    name = (name or 'auto').strip().lower()
    if name == 'auto':
        return None
    try:
        return Alphabet(name)
    except ValueError:
        raise ValueError(f"Unknown alphabet: {name} (expected auto, dna, rna or protein)")
