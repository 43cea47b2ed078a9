"""Tests for the session data model."""

import json
from datetime import datetime

from models import Match, Player, SessionState


def test_session_state_survives_json(make_state, make_match):
    state = make_state("A", "B", "C", "D")
    state.players[0].wins = 1
    state.players[0].matches_played = 1
    state.matches = [make_match(1, ("a", "b"), ("c", "d"), winner="team1"), make_match(2, ("a", "c"), ("b", "d"))]
    state.next_match_id = 3

    restored = SessionState.from_dict(json.loads(json.dumps(state.to_dict())))

    assert restored == state
    assert restored.matches[0].team1 == ("a", "b")


def test_from_dict_defaults_next_match_id():
    data = {
        "players": [{"id": "a", "name": "A"}],
        "matches": [{"id": 4, "team1": ["a", "b"], "team2": ["c", "d"], "winner": None}],
    }

    state = SessionState.from_dict(data)

    assert state.next_match_id == 5
    assert state.players[0].matches_played == 0


def test_match_helpers():
    match = Match(id=1, team1=("a", "b"), team2=("c", "d"), created_at=datetime(2024, 1, 1))

    assert match.player_ids == ("a", "b", "c", "d")
    assert match.losing_team() == ()
    assert not match.is_finished

    match.winner = "team2"
    assert match.winning_team() == ("c", "d")
    assert match.losing_team() == ("a", "b")
    assert match.involves("c") and not match.involves("e")


def test_session_lookups():
    state = SessionState(players=[Player(id="a", name="Alice")])

    assert state.get_player("a").name == "Alice"
    assert state.get_player("zz") is None
    assert state.player_name("zz") == "(left)"
    assert state.latest_match is None
