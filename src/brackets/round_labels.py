"""
Bracket size and round naming for elimination brackets.
"""
from typing import Iterable

from .organizer import count_registrations


def next_power_of_2(n: int) -> int:
    """Smallest power of 2 that is >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def calculate_bracket_size(num_registrations: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    return next_power_of_2(num_registrations)


def bracket_size_for_matches(matches: Iterable) -> int:
    """Bracket size from the distinct registrations found in a match list."""
    return calculate_bracket_size(count_registrations(matches))


def calculate_total_rounds(bracket_size: int) -> int:
    """Number of single elimination rounds for a bracket size."""
    if bracket_size < 2:
        return 0
    return bracket_size.bit_length() - 1


def entrants_in_round(bracket_size: int, round_num: int) -> int:
    """Entrants still alive at the start of a round (bracket_size / 2^(r-1)).

    Rounds before the first count as the first round.
    """
    return bracket_size >> max(round_num - 1, 0)


def get_round_label(bracket_size: int, round_num: int) -> str:
    """Short tag for a round: F, SF, QF, R16, R32..."""
    entrants = entrants_in_round(bracket_size, round_num)
    if entrants == 2:
        return "F"
    elif entrants == 4:
        return "SF"
    elif entrants == 8:
        return "QF"
    else:
        return f"R{entrants}"


def get_round_name_with_label(bracket_size: int, round_num: int) -> str:
    """Round name for a single elimination bracket of the given size.

    The last three rounds get their stage names; earlier rounds read
    "Round 1 (R16)". Sizes that are not a power of 2 should already have
    been rounded up with calculate_bracket_size().
    """
    rounds_from_final = calculate_total_rounds(bracket_size) - round_num
    if rounds_from_final == 0:
        return "Final"
    elif rounds_from_final == 1:
        return "Semifinals"
    elif rounds_from_final == 2:
        return "Quarterfinals"
    else:
        return f"Round {round_num} ({get_round_label(bracket_size, round_num)})"


def get_round_name(round_num: int, total_rounds: int) -> str:
    """Round name from its distance to the final, used by the bracket diagram."""
    rounds_from_final = total_rounds - round_num
    if rounds_from_final == 0:
        return "Final"
    elif rounds_from_final == 1:
        return "Semifinals"
    elif rounds_from_final == 2:
        return "Quarterfinals"
    elif rounds_from_final == 3:
        return "Round of 16"
    elif rounds_from_final == 4:
        return "Round of 32"
    elif rounds_from_final == 5:
        return "Round of 64"
    else:
        return f"Round {round_num}"
