"""Shared fixtures for the matchmaking tests."""

import random

import pytest

from models import Match, Player, SessionState


class FirstPick(random.Random):
    """Random source that always takes the first candidate(s)."""

    def choice(self, seq):
        return seq[0]

    def sample(self, population, k, **kwargs):
        return list(population)[:k]


@pytest.fixture
def make_player():
    def _make(name, wins=0, losses=0):
        return Player(
            id=name.lower(),
            name=name,
            wins=wins,
            losses=losses,
            matches_played=wins + losses
        )
    return _make


@pytest.fixture
def make_state(make_player):
    def _make(*names):
        return SessionState(players=[make_player(n) for n in names])
    return _make


@pytest.fixture
def make_match():
    def _make(match_id, team1, team2, winner=None):
        return Match(id=match_id, team1=tuple(team1), team2=tuple(team2), winner=winner)
    return _make


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def first_pick():
    return FirstPick()
