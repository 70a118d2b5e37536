"""
Core variation modules for seqvariation.

Author: Kevin R. Roy
"""

from .alignment import (
    PairwiseAlignment,
    is_delete_op,
    is_match_op,
)
from .alphabet import (
    Alphabet,
    infer_alphabet,
    parse_alphabet,
)
from .cigar import (
    CigarOperation,
    cigar_string_to_tuples,
    cigar_tuples_to_string,
    parse_cigar_to_operations,
)
from .edits import (
    Deletion,
    Edit,
    Insertion,
    Substitution,
    parse_edit,
)
from .exceptions import (
    ConstructionError,
    ParseError,
    UsageError,
)
from .extract import extract_edits
from .haplotype import Haplotype, validate_edits
from .reconstruct import reconstruct, reconstructed_length
from .translate import (
    HaplotypeTranslation,
    TranslationResult,
    TranslationStatus,
    translate,
    translate_haplotype,
)
from .variation import Variation, is_valid_edit

__all__ = [
    # Edits
    'Substitution',
    'Deletion',
    'Insertion',
    'Edit',
    'parse_edit',
    # Alphabets
    'Alphabet',
    'infer_alphabet',
    'parse_alphabet',
    # Errors
    'ParseError',
    'ConstructionError',
    'UsageError',
    # Variations and haplotypes
    'Variation',
    'is_valid_edit',
    'Haplotype',
    'validate_edits',
    'reconstruct',
    'reconstructed_length',
    # Alignments
    'CigarOperation',
    'parse_cigar_to_operations',
    'cigar_string_to_tuples',
    'cigar_tuples_to_string',
    'PairwiseAlignment',
    'is_match_op',
    'is_delete_op',
    'extract_edits',
    # Translation
    'TranslationStatus',
    'TranslationResult',
    'HaplotypeTranslation',
    'translate',
    'translate_haplotype',
]
