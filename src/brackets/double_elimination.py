"""
Double elimination round naming and losers bracket configuration.

In double elimination:
- Winners Bracket: entries that haven't lost yet
- Losers Bracket: entries that have lost once; a second loss eliminates
- The losers bracket may start late: with a losers start of N rounds before
  the final, anyone losing earlier than that is eliminated outright
"""
from typing import Dict, List, Optional, Tuple

from .round_labels import calculate_total_rounds, get_round_label

DOUBLE_ELIMINATION = 'double-elimination'

# (rounds before final, label); None means full double elimination
LOSERS_BRACKET_START_OPTIONS = [
    (None, 'Full Double Elimination'),
    (2, 'QF'),
    (3, 'R16'),
    (4, 'R32'),
    (5, 'R64'),
]


class BracketConfigError(ValueError):
    """Raised for bracket settings that don't fit the event."""


def get_winners_round_name(bracket_size: int, round_num: int, total_rounds: Optional[int] = None) -> str:
    """Get the name for a winners bracket round.

    total_rounds defaults to the depth implied by bracket_size; renderers pass
    the number of rounds actually present in the winners bracket.
    """
    if total_rounds is None:
        total_rounds = calculate_total_rounds(bracket_size)
    rounds_from_final = total_rounds - round_num
    if rounds_from_final == 0:
        return "Winners Final"
    elif rounds_from_final == 1:
        return "Winners Semifinals"
    elif rounds_from_final == 2:
        return "Winners Quarterfinals"
    else:
        return f"Round {round_num} ({get_round_label(bracket_size, round_num)})"


def get_losers_round_name(round_num: int, total_losers_rounds: int) -> str:
    """Get the name for a losers bracket round (1-indexed)."""
    rounds_from_final = total_losers_rounds - round_num
    if rounds_from_final == 0:
        return "Losers Final"
    elif rounds_from_final == 1:
        return "Losers Semifinals"
    else:
        return f"Losers Round {round_num}"


def get_bracket_round_name(bracket: str, round_num: int, total_rounds: int, bracket_size: Optional[int] = None) -> str:
    if bracket == 'losers':
        return get_losers_round_name(round_num, total_rounds)
    if bracket_size is None:
        bracket_size = 2 ** max(total_rounds, 0)
    return get_winners_round_name(bracket_size, round_num, total_rounds)


def label_bracket_rounds(organized: Dict[str, Dict[int, List]], bracket_size: Optional[int] = None) -> List[Tuple[str, int, str]]:
    """
    Build the quick navigation list for a double elimination event.

    Takes the output of organize_matches_by_bracket_and_round() and returns
    (bracket, round, label) tuples, winners first, rounds ascending. Each
    side is labelled against the number of rounds it actually has.
    """
    labels = []
    for bracket in ('winners', 'losers'):
        rounds = sorted(organized.get(bracket, {}).keys())
        total_rounds = len(rounds)
        for round_num in rounds:
            labels.append((bracket, round_num,
                           get_bracket_round_name(bracket, round_num, total_rounds, bracket_size)))
    return labels


def validate_losers_start(event_format: str, rounds_before_final) -> None:
    """
    Check a losers bracket start setting against the event format.

    None (full double elimination) is always accepted. Anything else must be
    a positive integer on a double elimination event.
    """
    if rounds_before_final is None:
        return
    if isinstance(rounds_before_final, bool) or not isinstance(rounds_before_final, int):
        raise BracketConfigError('losersStartRoundsBeforeFinal must be an integer')
    if rounds_before_final <= 0:
        raise BracketConfigError('losersStartRoundsBeforeFinal must be positive')
    if event_format != DOUBLE_ELIMINATION:
        raise BracketConfigError(
            'losersStartRoundsBeforeFinal is only valid for double-elimination format')


def losers_start_round(total_winners_rounds: int, rounds_before_final: Optional[int]) -> int:
    """First winners round whose losers drop into the losers bracket."""
    if rounds_before_final is None:
        return 1
    return max(1, total_winners_rounds - rounds_before_final)


def describe_losers_start(rounds_before_final: Optional[int]) -> str:
    for value, label in LOSERS_BRACKET_START_OPTIONS:
        if value == rounds_before_final:
            return label
    return f"{rounds_before_final} rounds before final"
