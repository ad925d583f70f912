"""
Grouping of flat match lists into round, group and bracket buckets.

All functions are pure: they never mutate the matches they receive and
always return freshly built dicts. Bucket contents keep the order in which
matches were encountered; ordering buckets for display is left to the
helpers at the bottom of this module (or to the caller).
"""
from typing import Dict, Iterable, List, Optional

from .models import BRACKET_TYPES


def _round_of(match) -> int:
    # Upstream data should always carry a round; fall back to the first one.
    return match.round if match.round is not None else 1


def _group_of(match) -> Optional[str]:
    return match.group_id or None


def organize_matches_by_round(matches: Iterable) -> Dict[int, List]:
    """Group matches by round number.

    Every match lands in exactly one bucket. Rounds appear in the order they
    are first seen; use sorted_rounds() for display order.
    """
    by_round = {}
    for match in matches:
        by_round.setdefault(_round_of(match), []).append(match)
    return by_round


def organize_matches_by_round_and_group(matches: Iterable) -> Dict[int, Dict[Optional[str], List]]:
    """Group matches by round, then by group id.

    Matches without a group are collected under the None key, which is a
    regular bucket (the groups-format pool before heats are assigned).
    """
    by_round = {}
    for match in matches:
        by_group = by_round.setdefault(_round_of(match), {})
        by_group.setdefault(_group_of(match), []).append(match)
    return by_round


def organize_matches_by_bracket_and_round(matches: Iterable) -> Dict[str, Dict[int, List]]:
    """Group double elimination matches by bracket side, then by round.

    Only 'winners' and 'losers' matches are kept; anything else is skipped.
    """
    by_bracket = {}
    for match in matches:
        bracket = match.bracket_type
        if bracket not in BRACKET_TYPES:
            continue
        by_round = by_bracket.setdefault(bracket, {})
        by_round.setdefault(_round_of(match), []).append(match)
    return by_bracket


def sorted_rounds(mapping: Dict[int, object]) -> List[int]:
    """Round keys of a round-keyed mapping, ascending."""
    return sorted(mapping.keys())


def sort_matches_by_match_number(matches: Iterable) -> List:
    return sorted(matches, key=lambda m: m.match_number or 0)


def get_group_name(groups: Iterable, group_id: Optional[str]) -> Optional[str]:
    """Look up a group's display name; None for unknown or missing ids."""
    if group_id is None:
        return None
    for group in groups:
        if group.id == group_id:
            return group.name
    return None


def sort_group_ids(group_ids: Iterable[Optional[str]], groups: Iterable) -> List[Optional[str]]:
    """Order group ids for display: ungrouped first, then by group name."""
    groups = list(groups)
    group_ids = list(group_ids)
    named = [g for g in group_ids if g is not None]
    named.sort(key=lambda g: get_group_name(groups, g) or '')
    if len(named) < len(group_ids):
        return [None] + named
    return named


def is_bye_match(match) -> bool:
    """A bye has exactly one registration slot filled."""
    has1 = match.registration1_id is not None
    has2 = match.registration2_id is not None
    return has1 != has2


def visible_matches(matches: Iterable) -> List:
    """Drop byes that were already auto-advanced.

    Unplayed byes stay visible so pending advances can be seen.
    """
    return [m for m in matches if not (is_bye_match(m) and m.played)]


def count_registrations(matches: Iterable) -> int:
    """Number of distinct registrations appearing in either match slot."""
    registration_ids = set()
    for match in matches:
        if match.registration1_id:
            registration_ids.add(match.registration1_id)
        if match.registration2_id:
            registration_ids.add(match.registration2_id)
    return len(registration_ids)
