"""Tests for seqvariation.core.edits module."""

import numpy as np
import pytest

from seqvariation.core.alphabet import Alphabet
from seqvariation.core.edits import (
    Deletion,
    Edit,
    Insertion,
    Substitution,
    parse_edit,
    stated_reference_symbol,
)
from seqvariation.core.exceptions import ConstructionError, ParseError


class TestMutations:
    """Test mutation construction."""

    def test_substitution(self):
        assert len(Substitution('A')) == 1

    def test_substitution_must_be_single_symbol(self):
        with pytest.raises(ConstructionError):
            Substitution('AC')
        with pytest.raises(ConstructionError):
            Substitution('')

    def test_deletion_length(self):
        assert len(Deletion(3)) == 3

    def test_zero_length_deletion_rejected(self):
        with pytest.raises(ConstructionError):
            Deletion(0)
        with pytest.raises(ConstructionError):
            Deletion(-2)

    def test_empty_insertion_rejected(self):
        with pytest.raises(ConstructionError):
            Insertion('')

    def test_negative_position_rejected(self):
        with pytest.raises(ConstructionError):
            Edit(Substitution('A'), -1)

    def test_numpy_integers_accepted(self):
        """Test positions and lengths taken from numpy arrays."""
        edit = Edit(Deletion(np.int64(2)), np.int64(3))
        assert edit == Edit(Deletion(2), 3)
        assert type(edit.position) is int
        assert type(edit.mutation.length) is int
        assert hash(edit) == hash(Edit(Deletion(2), 3))

    def test_non_integer_position_rejected(self):
        with pytest.raises(ConstructionError):
            Edit(Substitution('A'), 2.0)
        with pytest.raises(ConstructionError):
            Edit(Substitution('A'), True)

    def test_mutations_compare_by_value(self):
        assert Edit(Deletion(2), 4) == Edit(Deletion(2), 4)
        assert Edit(Deletion(2), 4) != Edit(Deletion(3), 4)
        assert len({Edit(Insertion('AC'), 1), Edit(Insertion('AC'), 1)}) == 1


class TestEditProperties:
    """Test derived edit properties."""

    def test_substitution_span(self):
        edit = Edit(Substitution('T'), 5)
        assert edit.kind == 'substitution'
        assert edit.leftposition == 5
        assert edit.rightposition == 5
        assert edit.lendiff == 0

    def test_deletion_span(self):
        edit = Edit(Deletion(3), 5)
        assert edit.kind == 'deletion'
        assert edit.rightposition == 7
        assert edit.lendiff == -3

    def test_insertion_span(self):
        edit = Edit(Insertion('GG'), 5)
        assert edit.kind == 'insertion'
        assert edit.rightposition == 6
        assert edit.lendiff == 2
        assert edit.length == 2

    def test_insertion_sorts_after_same_position(self):
        """An insertion follows its anchor base."""
        ins = Edit(Insertion('A'), 2)
        sub = Edit(Substitution('T'), 2)
        dele = Edit(Deletion(1), 3)
        ordered = sorted([dele, ins, sub], key=lambda e: e.sort_key)
        assert ordered == [sub, ins, dele]

    def test_repr(self):
        assert repr(Edit(Deletion(2), 2)) == "Edit(deletion of 2 at 2)"


class TestParseEdit:
    """Test parsing edits from text."""

    def test_parse_deletion(self):
        assert parse_edit("Δ1-2") == Edit(Deletion(2), 1)

    def test_parse_single_base_deletion(self):
        assert parse_edit("Δ7-7") == Edit(Deletion(1), 7)

    def test_parse_insertion(self):
        assert parse_edit("11T") == Edit(Insertion('T'), 11)

    def test_parse_insertion_before_first_base(self):
        assert parse_edit("0GG") == Edit(Insertion('GG'), 0)

    def test_parse_substitution(self):
        assert parse_edit("G16C") == Edit(Substitution('C'), 16)

    @pytest.mark.parametrize("text", ["", "foo", "1-2", "Δ1", "Δ-1-2", "G16", "16", "GC16T"])
    def test_malformed_text(self, text):
        with pytest.raises(ParseError) as exc_info:
            parse_edit(text)
        assert exc_info.value.text == text

    def test_reversed_deletion_bounds(self):
        with pytest.raises(ParseError, match="Non-positive deletion length"):
            parse_edit("Δ3-2")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_edit("nonsense!")

    def test_alphabet_check(self):
        assert parse_edit("3N", Alphabet.DNA) == Edit(Insertion('N'), 3)
        with pytest.raises(ParseError):
            parse_edit("3X", Alphabet.DNA)
        with pytest.raises(ParseError):
            parse_edit("A3U", Alphabet.DNA)
        assert parse_edit("A3U", Alphabet.RNA) == Edit(Substitution('U'), 3)

    def test_stated_reference_symbol(self):
        assert stated_reference_symbol("G16C") == 'G'
        assert stated_reference_symbol("16C") is None


class TestToString:
    """Test printing edits."""

    def test_print_substitution_uses_reference(self):
        assert Edit(Substitution('T'), 2).to_string("ACGT") == "C2T"

    def test_print_deletion(self):
        assert Edit(Deletion(2), 2).to_string("ACGT") == "Δ2-3"

    def test_print_insertion(self):
        assert Edit(Insertion('TT'), 2).to_string("ACGT") == "2TT"

    @pytest.mark.parametrize("text", ["Δ1-4", "0AC", "4G", "T4A", "A1C"])
    def test_printed_text_parses_back(self, text):
        assert parse_edit(text).to_string("ACGT") == text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
