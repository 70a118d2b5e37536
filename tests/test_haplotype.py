"""Tests for seqvariation.core.haplotype module."""

import pytest

from seqvariation.core.edits import Deletion, Edit, Insertion, Substitution
from seqvariation.core.exceptions import ConstructionError, ParseError, UsageError
from seqvariation.core.haplotype import Haplotype, validate_edits
from seqvariation.core.variation import Variation

REF = "ACGT"


class TestConstruction:
    """Test building and validating haplotypes."""

    def test_edits_are_sorted(self):
        h = Haplotype(REF, ["G3A", "A1T"])
        assert [e.position for e in h.edits] == [1, 3]

    def test_no_edits(self):
        h = Haplotype(REF)
        assert len(h) == 0
        assert h.reconstruct() == REF

    def test_empty_reference_rejected(self):
        with pytest.raises(ConstructionError):
            Haplotype("", [])

    def test_text_must_parse(self):
        with pytest.raises(ParseError):
            Haplotype(REF, ["C2T", "bogus"])

    def test_accepts_edit_objects(self):
        h = Haplotype(REF, [Edit(Substitution('T'), 2), "Δ3-4"])
        assert len(h) == 2

    def test_unchecked_keeps_edits_as_given(self):
        edits = [Edit(Substitution('A'), 1), Edit(Substitution('G'), 1)]
        h = Haplotype.unchecked(REF, edits)
        assert h.edits == tuple(edits)


class TestOverlapRejection:
    """Test that ambiguous edit lists are rejected."""

    def test_double_substitution_at_first_base(self):
        with pytest.raises(ConstructionError):
            Haplotype(REF, ["A1G", "A1T"])

    def test_double_substitution_inside_reference(self):
        with pytest.raises(ConstructionError):
            Haplotype(REF, ["C2G", "C2T"])

    def test_two_insertions_in_same_gap(self):
        with pytest.raises(ConstructionError):
            Haplotype(REF, ["2A", "2C"])

    def test_two_insertions_in_same_gap_around_substitution(self):
        with pytest.raises(ConstructionError):
            Haplotype(REF, ["2A", "C2T", "2C"])

    def test_out_of_bounds_deletion(self):
        with pytest.raises(ConstructionError):
            Haplotype(REF, ["Δ3-5"])

    def test_substitution_inside_deletion(self):
        with pytest.raises(ConstructionError):
            Haplotype(REF, ["Δ2-3", "G3T"])

    def test_insertion_inside_deletion(self):
        with pytest.raises(ConstructionError):
            Haplotype(REF, ["Δ2-3", "2A"])

    def test_overlapping_deletions(self):
        with pytest.raises(ConstructionError):
            Haplotype(REF, ["Δ1-2", "Δ2-3"])

    def test_error_names_offending_edit(self):
        with pytest.raises(ConstructionError) as exc_info:
            Haplotype(REF, ["A1G", "A1T"])
        assert exc_info.value.index == 1
        assert exc_info.value.edit.position == 1

    def test_insertion_right_after_deletion(self):
        h = Haplotype(REF, ["Δ2-3", "3A"])
        assert h.reconstruct() == "AAT"

    def test_substitution_then_insertion_at_same_base(self):
        h = Haplotype(REF, ["2A", "C2T"])
        assert h.reconstruct() == "ATAGT"

    def test_adjacent_deletions(self):
        h = Haplotype(REF, ["Δ1-2", "Δ3-4"])
        assert h.reconstruct() == ""

    def test_validate_edits_accepts_sorted_list(self):
        validate_edits(REF, [Edit(Insertion('G'), 0), Edit(Substitution('T'), 1), Edit(Deletion(3), 2)])


class TestVariations:
    """Test splitting into and grouping from variations."""

    def test_variations_round_trip(self):
        h = Haplotype(REF, ["A1T", "Δ2-3", "3GG"])
        assert Haplotype.from_variations(REF, h.variations()) == h

    def test_iteration_yields_variations(self):
        h = Haplotype(REF, ["C2T", "Δ3-4"])
        assert [str(v) for v in h] == ["C2T", "Δ3-4"]

    def test_from_variations_requires_same_reference(self):
        with pytest.raises(UsageError):
            Haplotype.from_variations(REF, [Variation("ACGA", "C2T")])

    def test_from_variations_validates(self):
        with pytest.raises(ConstructionError):
            Haplotype.from_variations(REF, [Variation(REF, "C2T"), Variation(REF, "C2G")])

    def test_membership(self):
        h = Haplotype(REF, ["C2T", "Δ3-4"])
        assert Variation(REF, "C2T") in h
        assert Variation(REF, "C2G") not in h
        assert Variation(REF, "Δ3-4") in h

    def test_membership_across_references(self):
        h = Haplotype(REF, ["C2T"])
        with pytest.raises(UsageError):
            Variation("ACGA", "C2T") in h


class TestDisplay:
    """Test text display of haplotypes."""

    def test_several_edits(self):
        h = Haplotype(REF, ["Δ3-4", "C2T"])
        assert str(h) == "Haplotype with 2 edits:\n  C2T\n  Δ3-4"

    def test_one_edit(self):
        assert str(Haplotype(REF, ["C2T"])) == "Haplotype with 1 edit:\n  C2T"

    def test_no_edits(self):
        assert str(Haplotype(REF)) == "Haplotype with 0 edits:"

    def test_equality_and_hash(self):
        a = Haplotype(REF, ["C2T", "4A"])
        b = Haplotype(REF, ["4A", "C2T"])
        assert a == b
        assert hash(a) == hash(b)
        assert a != Haplotype("ACGA", ["C2T", "4A"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
