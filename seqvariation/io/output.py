"""
Tabular output of variations.

Author: Kevin R. Roy
"""

import logging
from typing import IO, Iterable, List

import pandas as pd

from ..core.haplotype import Haplotype
from ..core.variation import Variation

logger = logging.getLogger(__name__)

VARIATION_COLUMNS = ['position', 'kind', 'length', 'edit', 'vcf_pos', 'ref', 'alt']


def variation_record(variation: Variation) -> dict:
    """One table row describing a Variation."""
    edit = variation.edit
    return {
        'position': edit.position,
        'kind': edit.kind,
        'length': edit.length,
        'edit': str(variation),
        'vcf_pos': variation.vcf_position(),
        'ref': variation.refbases(),
        'alt': variation.altbases(),
    }


def variations_to_frame(variations: Iterable[Variation]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per Variation.

    Accepts a Haplotype directly, since iterating one yields its Variations.
    """
    records = [variation_record(v) for v in variations]
    return pd.DataFrame(records, columns=VARIATION_COLUMNS)


def haplotypes_to_frame(haplotypes: Iterable[Haplotype], names: Iterable[str]) -> pd.DataFrame:
    """Stack the variation tables of several haplotypes with a 'name' column."""
    frames: List[pd.DataFrame] = []
    for name, haplotype in zip(names, haplotypes):
        df = variations_to_frame(haplotype)
        df.insert(0, 'name', name)
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=['name'] + VARIATION_COLUMNS)
    return pd.concat(frames, ignore_index=True)


def write_variations_tsv(df: pd.DataFrame, stream: IO[str]):
    """Write a variation table as tab-separated text to an open stream."""
    df.to_csv(stream, sep='\t', index=False)
    logger.debug(f"Wrote {len(df)} variation rows")
