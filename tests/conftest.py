"""
Shared pytest fixtures for bracket organizer tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from brackets.models import Match, Group


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    """Point the app at a temporary settings.yaml (not created by default)."""
    import app as app_module
    path = tmp_path / "settings.yaml"
    monkeypatch.setattr(app_module, 'DATA_DIR', str(tmp_path))
    monkeypatch.setattr(app_module, 'SETTINGS_FILE', str(path))
    return path


@pytest.fixture
def client(settings_file, monkeypatch):
    """Create a test client with a clean rate limit store."""
    import app as app_module
    monkeypatch.setattr(app_module, '_rate_limit_store', {})
    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as client:
        yield client


@pytest.fixture
def groups():
    """Three heats, deliberately not in name order."""
    return [
        Group(id="g-c", name="C"),
        Group(id="g-a", name="A"),
        Group(id="g-b", name="B", completed=True),
    ]


@pytest.fixture
def group_matches():
    """Round robin matches across two groups plus an ungrouped match."""
    return [
        Match(id="m1", round=1, match_number=1, group_id="g-a", registration1_id="r1", registration2_id="r2"),
        Match(id="m2", round=1, match_number=2, group_id="g-b", registration1_id="r3", registration2_id="r4"),
        Match(id="m3", round=2, match_number=1, group_id=None, registration1_id="r1", registration2_id="r3"),
        Match(id="m4", round=1, match_number=3, group_id="g-a", registration1_id="r1", registration2_id="r5"),
    ]


@pytest.fixture
def single_elimination_matches():
    """Six entries in an 8 bracket: two first round byes."""
    return [
        Match(id="se-1", round=1, match_number=1, registration1_id="r1", registration2_id=None, played=True, winner_id="r1"),
        Match(id="se-2", round=1, match_number=2, registration1_id="r4", registration2_id="r5"),
        Match(id="se-3", round=1, match_number=3, registration1_id="r2", registration2_id=None, played=True, winner_id="r2"),
        Match(id="se-4", round=1, match_number=4, registration1_id="r3", registration2_id="r6"),
        Match(id="se-6", round=2, match_number=2, registration1_id="r2"),
        Match(id="se-5", round=2, match_number=1, registration1_id="r1"),
        Match(id="se-7", round=3, match_number=1, winner_to="first-place", loser_to="second-place"),
    ]


@pytest.fixture
def double_elimination_matches():
    """A 4 entry double elimination bracket."""
    return [
        Match(id="w1-1", round=1, match_number=1, bracket_type="winners", registration1_id="r1", registration2_id="r4"),
        Match(id="w1-2", round=1, match_number=2, bracket_type="winners", registration1_id="r2", registration2_id="r3"),
        Match(id="w2-1", round=2, match_number=1, bracket_type="winners", winner_to="first-place", loser_to="second-place"),
        Match(id="l1-1", round=1, match_number=1, bracket_type="losers"),
        Match(id="l2-1", round=2, match_number=1, bracket_type="losers", winner_to="third-place", loser_to="fourth-place"),
    ]
