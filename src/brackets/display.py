"""
Render-ready match views for each event format.

`matches` is what should be shown (possibly filtered by the caller, e.g.
only unplayed matches) while `all_matches` decides the round structure, so
a round keeps its column even when none of its matches pass the filter.
Views are lists of plain dicts so they serialize to JSON as-is.
"""
import logging
from typing import Dict, List, Optional

from .double_elimination import (
    DOUBLE_ELIMINATION,
    describe_losers_start,
    get_losers_round_name,
    get_winners_round_name,
    label_bracket_rounds,
    losers_start_round,
    validate_losers_start,
)
from .organizer import (
    get_group_name,
    organize_matches_by_bracket_and_round,
    organize_matches_by_round,
    organize_matches_by_round_and_group,
    sort_group_ids,
    sort_matches_by_match_number,
    sorted_rounds,
    visible_matches,
)
from .round_labels import (
    bracket_size_for_matches,
    calculate_bracket_size,
    calculate_total_rounds,
    get_round_name_with_label,
)

logger = logging.getLogger(__name__)

EVENT_FORMATS = (
    'groups',
    'single-elimination',
    'groups-knockout',
    'double-elimination',
    'tests',
)

PLACEMENT_LABELS = {
    ('winner', 'first-place'): '1st place',
    ('loser', 'second-place'): '2nd place',
    ('winner', 'third-place'): '3rd place',
    ('loser', 'fourth-place'): '4th place',
}


def _match_dicts(matches) -> List[Dict]:
    return [m.to_dict() for m in matches]


def placement_label(match) -> Optional[str]:
    """Placement decided by a match, if any ('1st place', '2nd place', ...)."""
    if match is None:
        return None
    for (side, placement), label in PLACEMENT_LABELS.items():
        target = match.winner_to if side == 'winner' else match.loser_to
        if target == placement:
            return label
    return None


def _resolve_bracket_size(all_matches, registrations) -> int:
    if registrations:
        return calculate_bracket_size(len(registrations))
    return bracket_size_for_matches(all_matches)


def build_groups_view(matches, all_matches, groups) -> Dict:
    """Groups format: one entry per round, one column per group."""
    groups = list(groups or [])
    rounds = sorted_rounds(organize_matches_by_round(all_matches))
    organized = organize_matches_by_round_and_group(matches)

    view_rounds = []
    for round_num in rounds:
        round_map = organized.get(round_num, {})
        group_ids = sort_group_ids([g for g, ms in round_map.items() if ms], groups)
        columns = []
        for group_id in group_ids:
            group_name = get_group_name(groups, group_id)
            columns.append({
                'group_id': group_id,
                'title': f"Group {group_name}" if group_name else "No Group",
                'matches': _match_dicts(round_map[group_id]),
            })
        view_rounds.append({
            'round': round_num,
            'name': f"Round {round_num}",
            'groups': columns,
        })

    return {
        'format': 'groups',
        'rounds': view_rounds,
        'empty_message': None if view_rounds else 'No matches yet.',
    }


def build_single_elimination_view(matches, all_matches, registrations=None) -> Dict:
    """Single elimination: one column per round, named from the bracket size."""
    bracket_size = _resolve_bracket_size(all_matches, registrations)
    rounds = sorted_rounds(organize_matches_by_round(all_matches))
    organized = organize_matches_by_round(matches)

    view_rounds = []
    for round_num in rounds:
        view_rounds.append({
            'round': round_num,
            'name': get_round_name_with_label(bracket_size, round_num),
            'matches': _match_dicts(sort_matches_by_match_number(organized.get(round_num, []))),
        })

    return {
        'format': 'single-elimination',
        'bracket_size': bracket_size,
        'total_rounds': calculate_total_rounds(bracket_size),
        'rounds': view_rounds,
        'empty_message': None if view_rounds else 'No matches yet. Generate the bracket to begin.',
    }


def build_double_elimination_view(matches, all_matches, registrations=None,
                                  losers_start_rounds_before_final=None,
                                  hide_played_byes=True) -> Dict:
    """
    Double elimination: winners and losers sections, one column per round.

    Round structure comes from all_matches; each side is named against the
    number of rounds it actually contains.
    """
    bracket_size = _resolve_bracket_size(all_matches, registrations)
    if hide_played_byes:
        matches = visible_matches(matches)
    all_organized = organize_matches_by_bracket_and_round(all_matches)
    organized = organize_matches_by_bracket_and_round(matches)

    sections = []
    for bracket in ('winners', 'losers'):
        rounds = sorted_rounds(all_organized.get(bracket, {}))
        if not rounds:
            continue
        total_rounds = len(rounds)
        bracket_map = organized.get(bracket, {})
        columns = []
        for round_num in rounds:
            if bracket == 'winners':
                name = get_winners_round_name(bracket_size, round_num, total_rounds)
            else:
                name = get_losers_round_name(round_num, total_rounds)
            round_matches = sort_matches_by_match_number(bracket_map.get(round_num, []))
            columns.append({
                'round': round_num,
                'name': name,
                'placement': placement_label(round_matches[0]) if round_matches else None,
                'matches': _match_dicts(round_matches),
            })
        sections.append({
            'bracket': bracket,
            'title': f"{bracket.capitalize()} Bracket",
            'total_rounds': total_rounds,
            'rounds': columns,
        })

    total_winners_rounds = calculate_total_rounds(bracket_size)
    navigation = [
        {'bracket': bracket, 'round': round_num, 'label': label}
        for bracket, round_num, label in label_bracket_rounds(all_organized, bracket_size)
    ]

    return {
        'format': DOUBLE_ELIMINATION,
        'bracket_size': bracket_size,
        'losers_start': {
            'rounds_before_final': losers_start_rounds_before_final,
            'label': describe_losers_start(losers_start_rounds_before_final),
            'winners_round': losers_start_round(total_winners_rounds, losers_start_rounds_before_final),
        },
        'navigation': navigation,
        'brackets': sections,
        'empty_message': None if sections else 'No matches yet. Generate the bracket to begin.',
    }


def build_event_view(event_format, matches, all_matches=None, groups=None, registrations=None,
                     losers_start_rounds_before_final=None, hide_played_byes=True) -> Dict:
    """
    Build the match view for an event.

    Raises BracketConfigError when the losers bracket start setting doesn't
    fit the format; every other input yields a (possibly empty) view.
    """
    validate_losers_start(event_format, losers_start_rounds_before_final)
    matches = list(matches)
    all_matches = list(all_matches) if all_matches is not None else matches
    logger.debug('Building %s view for %d of %d matches', event_format, len(matches), len(all_matches))

    if event_format == 'groups':
        return build_groups_view(matches, all_matches, groups)
    if event_format == 'single-elimination':
        return build_single_elimination_view(matches, all_matches, registrations)
    if event_format == DOUBLE_ELIMINATION:
        return build_double_elimination_view(matches, all_matches, registrations,
                                             losers_start_rounds_before_final, hide_played_byes)
    return {
        'format': event_format,
        'rounds': [],
        'empty_message': 'No matches to display.',
    }
