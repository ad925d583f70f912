"""
Unit tests for bracket size and round naming.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from brackets.round_labels import (
    next_power_of_2,
    calculate_bracket_size,
    bracket_size_for_matches,
    calculate_total_rounds,
    entrants_in_round,
    get_round_label,
    get_round_name_with_label,
    get_round_name,
)


class TestBracketSize:
    """Tests for bracket size calculation."""

    def test_exact_power(self):
        """Test bracket size for exact power of 2."""
        assert calculate_bracket_size(8) == 8
        assert calculate_bracket_size(16) == 16
        assert calculate_bracket_size(2) == 2

    def test_rounds_up(self):
        """Test bracket size rounds up to next power of 2."""
        assert calculate_bracket_size(5) == 8
        assert calculate_bracket_size(9) == 16
        assert calculate_bracket_size(3) == 4
        assert calculate_bracket_size(17) == 32

    def test_degenerate_counts(self):
        """Zero, one and negative counts resolve to 1 without raising."""
        assert calculate_bracket_size(1) == 1
        assert calculate_bracket_size(0) == 1
        assert next_power_of_2(-4) == 1

    def test_large_counts(self):
        """Large counts are sized exactly, without float rounding."""
        n = 2 ** 53 + 1
        assert next_power_of_2(n) == 2 ** 54
        assert next_power_of_2(2 ** 53) == 2 ** 53
        assert calculate_total_rounds(2 ** 54) == 54
        assert calculate_total_rounds(2 ** 54 - 1) == 53

    def test_from_matches(self, single_elimination_matches):
        """Six distinct registrations make an 8 bracket."""
        assert bracket_size_for_matches(single_elimination_matches) == 8
        assert bracket_size_for_matches([]) == 1

    def test_total_rounds(self):
        """log2 of the bracket size, 0 below 2."""
        assert calculate_total_rounds(8) == 3
        assert calculate_total_rounds(16) == 4
        assert calculate_total_rounds(2) == 1
        assert calculate_total_rounds(1) == 0
        assert calculate_total_rounds(0) == 0


class TestRoundLabel:
    """Tests for short round tags."""

    def test_entrants_in_round(self):
        """Entrants halve every round."""
        assert entrants_in_round(16, 1) == 16
        assert entrants_in_round(16, 2) == 8
        assert entrants_in_round(16, 4) == 2

    def test_labels(self):
        """F, SF, QF, then R{n}."""
        assert get_round_label(16, 4) == "F"
        assert get_round_label(16, 3) == "SF"
        assert get_round_label(16, 2) == "QF"
        assert get_round_label(16, 1) == "R16"
        assert get_round_label(64, 1) == "R64"

    def test_label_out_of_range(self):
        """Rounds outside the bracket still produce a string."""
        assert get_round_label(8, 0) == "QF"
        assert get_round_label(8, 10) == "R0"

    def test_far_negative_round(self):
        """Rounds before the first are labelled like the first round."""
        assert entrants_in_round(16, -20000) == 16
        assert get_round_label(8, -20000) == "QF"
        assert get_round_name_with_label(16, -20000) == "Round -20000 (R16)"


class TestRoundNameWithLabel:
    """Tests for round names derived from bracket size."""

    def test_bracket_of_8(self):
        """Three rounds: QF, SF, Final."""
        assert get_round_name_with_label(8, 3) == "Final"
        assert get_round_name_with_label(8, 2) == "Semifinals"
        assert get_round_name_with_label(8, 1) == "Quarterfinals"

    def test_bracket_of_16(self):
        """Four rounds: the first is labelled with its size."""
        assert get_round_name_with_label(16, 4) == "Final"
        assert get_round_name_with_label(16, 3) == "Semifinals"
        assert get_round_name_with_label(16, 2) == "Quarterfinals"
        assert get_round_name_with_label(16, 1) == "Round 1 (R16)"

    def test_bracket_of_32(self):
        """Earlier rounds get generic names with their tags."""
        assert get_round_name_with_label(32, 1) == "Round 1 (R32)"
        assert get_round_name_with_label(32, 2) == "Round 2 (R16)"

    def test_bye_bracket_uses_rounded_size(self):
        """Five entries are labelled as an 8 bracket."""
        size = calculate_bracket_size(5)
        assert get_round_name_with_label(size, 1) == "Quarterfinals"
        assert get_round_name_with_label(size, 3) == "Final"

    def test_degenerate_sizes_do_not_raise(self):
        """Sizes of 0 or 1 and negative rounds still produce strings."""
        assert isinstance(get_round_name_with_label(1, 1), str)
        assert isinstance(get_round_name_with_label(0, 1), str)
        assert isinstance(get_round_name_with_label(8, -2), str)

    def test_stable_across_calls(self):
        """Same input, same label."""
        assert get_round_name_with_label(16, 2) == get_round_name_with_label(16, 2)


class TestRoundName:
    """Tests for names based on total rounds only."""

    def test_final_stages(self):
        """Last three rounds are named stages."""
        assert get_round_name(5, 5) == "Final"
        assert get_round_name(4, 5) == "Semifinals"
        assert get_round_name(3, 5) == "Quarterfinals"

    def test_round_of_n(self):
        """Further out, rounds are named by entrant count."""
        assert get_round_name(2, 5) == "Round of 16"
        assert get_round_name(1, 5) == "Round of 32"
        assert get_round_name(1, 6) == "Round of 64"

    def test_generic_round(self):
        """Beyond 64 the round number is used."""
        assert get_round_name(1, 7) == "Round 1"
