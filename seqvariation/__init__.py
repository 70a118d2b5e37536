"""
seqvariation - canonical edit lists and reference switching for biological sequences.

Author: Kevin R. Roy
"""

__version__ = "0.1.0"
__author__ = "Kevin R. Roy"

from .config import VariationConfig
from .core import (
    Alphabet,
    ConstructionError,
    Deletion,
    Edit,
    Haplotype,
    Insertion,
    PairwiseAlignment,
    ParseError,
    Substitution,
    TranslationResult,
    TranslationStatus,
    UsageError,
    Variation,
    parse_edit,
    reconstruct,
    translate,
    translate_haplotype,
)

__all__ = [
    "Substitution",
    "Deletion",
    "Insertion",
    "Edit",
    "parse_edit",
    "Variation",
    "Haplotype",
    "PairwiseAlignment",
    "reconstruct",
    "translate",
    "translate_haplotype",
    "TranslationStatus",
    "TranslationResult",
    "ParseError",
    "ConstructionError",
    "UsageError",
    "Alphabet",
    "VariationConfig",
    "__version__",
]
