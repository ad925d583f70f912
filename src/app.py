"""
Flask web application for the bracket organizer.
"""
import os
import time
import yaml
from flask import Flask, request, jsonify
from brackets.models import Match, Group, Registration
from brackets.display import EVENT_FORMATS, build_event_view
from brackets.double_elimination import LOSERS_BRACKET_START_OPTIONS
from brackets.round_labels import calculate_bracket_size, get_round_label, get_round_name_with_label

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('BRACKETS_DATA_DIR', os.path.join(BASE_DIR, 'data'))
SETTINGS_FILE = os.path.join(DATA_DIR, 'settings.yaml')

# Rate limiting for organize requests
# Structure: {identifier: [timestamp, timestamp, ...]}
_rate_limit_store = {}


def get_default_settings():
    """Return default settings."""
    return {
        'hide_played_byes': True,
        'rate_limit_per_minute': 60,
        'default_format': 'single-elimination',
    }


def load_settings():
    """Load settings from YAML file, filling in defaults for missing keys."""
    settings = get_default_settings()
    if not os.path.exists(SETTINGS_FILE):
        return settings
    try:
        with open(SETTINGS_FILE, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        app.logger.warning(f'Failed to parse {SETTINGS_FILE}: {e}')
        return settings
    if not isinstance(data, dict):
        return settings

    for key, value in data.items():
        if key not in settings:
            continue
        try:
            settings[key] = _check_setting(key, value)
        except ValueError as e:
            app.logger.warning(f'Ignoring {key} in {SETTINGS_FILE}: {e}')
    return settings


def _check_setting(key, value):
    """Validate one settings value, raising ValueError when it is unusable."""
    if key == 'hide_played_byes':
        if not isinstance(value, bool):
            raise ValueError(f'expected true or false, got {value!r}')
    if key == 'rate_limit_per_minute':
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f'expected a positive integer, got {value!r}')
    if key == 'default_format':
        if value not in EVENT_FORMATS:
            raise ValueError(f'unknown format {value!r}')
    return value


def check_rate_limit(identifier: str, max_requests: int, window_seconds: int = 60) -> bool:
    """Check if an identifier has exceeded its request budget.

    Args:
        identifier: Client identifier (IP address)
        max_requests: Maximum requests allowed inside the window
        window_seconds: Sliding window length

    Returns:
        True if rate limit NOT exceeded, False if exceeded
    """
    now = time.time()
    cutoff = now - window_seconds

    # Drop expired entries so the store doesn't grow with one-off clients
    for key in list(_rate_limit_store):
        _rate_limit_store[key] = [ts for ts in _rate_limit_store[key] if ts > cutoff]
        if not _rate_limit_store[key]:
            del _rate_limit_store[key]

    recent = _rate_limit_store.get(identifier, [])
    if len(recent) >= max_requests:
        return False

    recent.append(now)
    _rate_limit_store[identifier] = recent
    return True


def _parse_records(data, key, model):
    records = data.get(key)
    if records is None:
        return None
    if not isinstance(records, list):
        raise ValueError(f'{key} must be a list')
    if not all(isinstance(r, dict) for r in records):
        raise ValueError(f'{key} must contain objects')
    return [model.from_dict(r) for r in records]


@app.route('/api/organize', methods=['POST'])
def api_organize():
    """Organize an event's matches into the view for its format."""
    settings = load_settings()
    client_ip = request.remote_addr or 'unknown'
    if not check_rate_limit(client_ip, settings['rate_limit_per_minute']):
        app.logger.warning(f'Rate limit exceeded for {client_ip}')
        return jsonify({'success': False, 'error': 'Too many requests'}), 429

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'JSON body required'}), 400

    event_format = data.get('format', settings['default_format'])
    if event_format not in EVENT_FORMATS:
        return jsonify({'success': False, 'error': f'Unknown format: {event_format}'}), 400

    try:
        matches = _parse_records(data, 'matches', Match) or []
        all_matches = _parse_records(data, 'all_matches', Match)
        groups = _parse_records(data, 'groups', Group) or []
        registrations = _parse_records(data, 'registrations', Registration)
        view = build_event_view(
            event_format,
            matches,
            all_matches=all_matches,
            groups=groups,
            registrations=registrations,
            losers_start_rounds_before_final=data.get('losers_start_rounds_before_final'),
            hide_played_byes=settings['hide_played_byes'],
        )
    except ValueError as e:
        app.logger.warning(f'Rejected organize request: {e}')
        return jsonify({'success': False, 'error': str(e)}), 400

    app.logger.info(f'Organized {len(matches)} matches for {event_format} event')
    return jsonify({'success': True, 'view': view})


@app.route('/api/round-name', methods=['GET'])
def api_round_name():
    """Round name for a round number, given a participant count or bracket size."""
    round_num = request.args.get('round', type=int)
    if round_num is None:
        return jsonify({'success': False, 'error': 'round is required'}), 400

    participants = request.args.get('participants', type=int)
    bracket_size = request.args.get('bracket_size', type=int)
    if participants is not None:
        bracket_size = calculate_bracket_size(participants)
    if bracket_size is None:
        return jsonify({'success': False, 'error': 'bracket_size or participants is required'}), 400

    bracket_size = calculate_bracket_size(bracket_size)
    return jsonify({
        'success': True,
        'bracket_size': bracket_size,
        'name': get_round_name_with_label(bracket_size, round_num),
        'label': get_round_label(bracket_size, round_num),
    })


@app.route('/api/losers-start-options', methods=['GET'])
def api_losers_start_options():
    """Options for when the losers bracket starts in double elimination."""
    return jsonify({
        'success': True,
        'options': [{'value': value, 'label': label} for value, label in LOSERS_BRACKET_START_OPTIONS],
    })


if __name__ == '__main__':
    app.run(debug=True, port=5000)
