"""
Configuration and sequence input handling for seqvariation.

Author: Kevin R. Roy
"""

import logging
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .core.alphabet import Alphabet, infer_alphabet, parse_alphabet
from .utils.sequence import GAP

# Regex to detect if string is a literal (possibly gapped) sequence
SEQUENCE_PATTERN = re.compile(r'^[A-Za-z*\-]+$')


def _sequence_pattern(gap: str) -> re.Pattern:
    if gap == GAP:
        return SEQUENCE_PATTERN
    return re.compile(rf'^[A-Za-z*{re.escape(gap)}]+$')


def is_sequence(s: str, gap: str = GAP) -> bool:
    """Check if string is a literal sequence (not a file path), gaps allowed."""
    return bool(s) and bool(_sequence_pattern(gap).match(s)) and not s.lower().endswith(('.fa', '.fasta'))


def parse_sequence_input(value: str, gap: str = GAP) -> str:
    """
    Parse sequence input - can be either a sequence string or a FASTA file path.

    Args:
        value: Either a sequence string or path to a FASTA file
        gap: Gap symbol allowed in a literal sequence

    Returns:
        The sequence, case preserved

    Examples:
        >>> parse_sequence_input("ACGT")
        'ACGT'
    """
    value = value.strip()

    if is_sequence(value, gap):
        return value

    path = Path(value)
    if not path.exists():
        raise ValueError(f"File not found: {value}")

    sequence = load_fasta(path)
    if not sequence:
        raise ValueError(f"No sequence found in FASTA file: {value}")
    return sequence


@dataclass
class VariationConfig:
    """Settings shared by the command-line tools."""
    alphabet: str = 'auto'  # 'auto', 'dna', 'rna' or 'protein'
    gap_symbol: str = GAP
    discard_clipped_indels: bool = True
    log_level: str = 'INFO'

    def __post_init__(self):
        for name in ('alphabet', 'gap_symbol', 'log_level'):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {value!r}")
        if not isinstance(self.discard_clipped_indels, bool):
            raise ValueError(
                f"discard_clipped_indels must be true or false, got {self.discard_clipped_indels!r}"
            )

        parse_alphabet(self.alphabet)
        if len(self.gap_symbol) != 1:
            raise ValueError(f"Gap symbol must be a single character, got {self.gap_symbol!r}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    def alphabet_for(self, reference: str) -> Optional[Alphabet]:
        """Configured alphabet, or the one inferred from the reference."""
        alphabet = parse_alphabet(self.alphabet)
        if alphabet is None:
            alphabet = infer_alphabet(reference)
        return alphabet

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'VariationConfig':
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in known})

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'VariationConfig':
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {path}")
        return cls.from_dict(data)


def _read_fasta_sequence(path: str) -> str:
    """Read first sequence from a FASTA file."""
    sequence = []
    with open(path) as f:
        for line in f:
            line = line.strip()
            if line.startswith('>'):
                if sequence:
                    break  # Only read first sequence
                continue
            sequence.append(line)
    return ''.join(sequence)


def load_fasta(path: Path) -> str:
    """Load sequence from FASTA file."""
    return _read_fasta_sequence(str(path))
