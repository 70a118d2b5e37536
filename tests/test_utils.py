"""Tests for seqvariation.utils module."""

import pytest

from seqvariation.utils.sequence import is_gap, parse_cigar, ungap


class TestParseCigar:
    """Test CIGAR string parsing."""

    def test_simple_cigar(self):
        """Test parsing a simple CIGAR."""
        assert parse_cigar("10M") == [(10, 'M')]

    def test_complex_cigar(self):
        """Test parsing a CIGAR with every operation type."""
        assert parse_cigar("3S5=1X2I4D1N1P2H") == [
            (3, 'S'), (5, '='), (1, 'X'), (2, 'I'), (4, 'D'), (1, 'N'), (1, 'P'), (2, 'H')
        ]

    def test_empty_cigar(self):
        assert parse_cigar("") == []


class TestGaps:
    """Test gap helpers."""

    def test_is_gap(self):
        assert is_gap('-')
        assert not is_gap('A')
        assert is_gap('.', gap='.')

    def test_ungap(self):
        assert ungap("AC--GT") == "ACGT"
        assert ungap("A.C", gap='.') == "AC"
        assert ungap("ACGT") == "ACGT"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
