"""
I/O modules for seqvariation.

Author: Kevin R. Roy
"""

from .output import (
    VARIATION_COLUMNS,
    haplotypes_to_frame,
    variation_record,
    variations_to_frame,
    write_variations_tsv,
)

__all__ = [
    'VARIATION_COLUMNS',
    'variation_record',
    'variations_to_frame',
    'haplotypes_to_frame',
    'write_variations_tsv',
]
