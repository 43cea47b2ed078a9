"""Tests for the pairing strategies."""

import random

import pytest

from errors import InsufficientPlayersError, RosterFullError
from matchmaking import (
    find_best_match,
    find_first_match,
    find_second_match,
    recent_player_ids,
    split_groups,
    win_rate,
)


def ids(lineup):
    return [p.id for p in lineup]


@pytest.mark.parametrize("size, expected", [(4, (2, 2)), (5, (3, 2)), (6, (3, 3)), (7, (4, 3))])
def test_split_groups_follows_size_table(make_state, size, expected):
    players = make_state(*"ABCDEFG"[:size]).players
    group_a, group_b = split_groups(players)

    assert (len(group_a), len(group_b)) == expected
    assert group_a + group_b == players


def test_split_groups_rejects_bad_sizes(make_state):
    with pytest.raises(InsufficientPlayersError):
        split_groups(make_state("A", "B", "C").players)
    with pytest.raises(RosterFullError):
        split_groups(make_state(*"ABCDEFGH").players)


def test_first_match_takes_one_player_from_each_group_per_team(make_state):
    players = make_state("A", "B", "C", "D").players

    for seed in range(25):
        t1p1, t1p2, t2p1, t2p2 = ids(find_first_match(players, random.Random(seed)))
        assert {t1p1, t2p1} == {"a", "b"}
        assert {t1p2, t2p2} == {"c", "d"}


@pytest.mark.parametrize("size", [4, 5, 6, 7])
def test_first_match_never_repeats_a_player(make_state, size):
    players = make_state(*"ABCDEFG"[:size]).players
    for seed in range(25):
        assert len(set(ids(find_first_match(players, random.Random(seed))))) == 4


def test_first_match_is_reproducible_with_a_seed(make_state):
    players = make_state(*"ABCDEFG").players
    assert ids(find_first_match(players, random.Random(7))) == ids(find_first_match(players, random.Random(7)))


def test_second_match_carries_a_loser_into_team2_slot1(make_state, make_match):
    players = make_state(*"ABCDEFG").players
    previous = make_match(1, ("a", "b"), ("c", "d"), winner="team1")

    for seed in range(25):
        lineup = ids(find_second_match(players, previous, random.Random(seed)))
        assert lineup[2] in {"c", "d"}
        assert set(lineup[:2] + lineup[3:]) <= {"e", "f", "g"}
        assert len(set(lineup)) == 4


@pytest.mark.parametrize("size", [4, 5, 6])
def test_second_match_tops_up_small_rosters(make_state, make_match, size):
    players = make_state(*"ABCDEF"[:size]).players
    previous = make_match(1, ("a", "b"), ("c", "d"), winner="team2")
    outsiders = {p.id for p in players} - {"a", "b", "c", "d"}

    for seed in range(25):
        lineup = ids(find_second_match(players, previous, random.Random(seed)))
        assert lineup[2] in {"a", "b"}
        assert len(set(lineup)) == 4
        assert outsiders <= set(lineup)


def test_second_match_falls_back_when_losers_left(make_state, make_match):
    players = make_state("A", "B", "C", "D", "E").players
    previous = make_match(1, ("a", "b"), ("x", "y"), winner="team1")

    lineup = ids(find_second_match(players, previous, random.Random(3)))
    assert len(set(lineup)) == 4
    assert set(lineup) <= {"a", "b", "c", "d", "e"}


def test_recent_player_ids_uses_trailing_window(make_match):
    history = [
        make_match(1, ("a", "b"), ("c", "d"), winner="team1"),
        make_match(2, ("e", "f"), ("g", "a"), winner="team1"),
        make_match(3, ("a", "b"), ("e", "f"), winner="team1"),
        make_match(4, ("a", "e"), ("b", "f"), winner="team1"),
    ]
    assert recent_player_ids(history) == {"a", "b", "e", "f", "g"}
    assert recent_player_ids(history, window=1) == {"a", "b", "e", "f"}
    assert recent_player_ids([]) == set()


def test_best_match_uses_opening_draw_when_four_are_rested(make_state, make_match):
    players = make_state(*"ABCDEFG").players
    history = [
        make_match(1, ("a", "b"), ("x", "y"), winner="team1"),
        make_match(2, ("c", "x"), ("y", "z"), winner="team2"),
    ]

    for seed in range(25):
        lineup = ids(find_best_match(players, history, random.Random(seed)))
        assert set(lineup) == {"d", "e", "f", "g"}
        assert {lineup[0], lineup[2]} == {"d", "e"}


def test_best_match_fields_every_rested_player(make_player, make_match):
    players = [
        make_player("A", wins=2, losses=2),
        make_player("B", wins=2, losses=1),
        make_player("C", wins=1, losses=2),
        make_player("D", wins=2, losses=1),
        make_player("E", wins=1),
        make_player("F", wins=1),
        make_player("G", losses=1),
    ]
    history = [
        make_match(1, ("e", "f"), ("g", "a"), winner="team1"),
        make_match(2, ("a", "b"), ("c", "d"), winner="team1"),
        make_match(3, ("a", "c"), ("b", "d"), winner="team2"),
        make_match(4, ("a", "d"), ("b", "c"), winner="team1"),
    ]

    for seed in range(25):
        lineup = ids(find_best_match(players, history, random.Random(seed)))
        assert len(set(lineup)) == 4
        assert {"e", "f", "g"} < set(lineup)


def test_balanced_match_prefers_players_not_yet_met(make_player, make_match, first_pick):
    players = [make_player(name, losses=n) for n, name in enumerate("ABCDEF", 1)]
    history = [
        make_match(1, ("a", "b"), ("c", "d"), winner="team1"),
        make_match(2, ("a", "c"), ("b", "d"), winner="team1"),
        make_match(3, ("b", "c"), ("e", "f"), winner="team1"),
    ]

    lineup = ids(find_best_match(players, history, first_pick))

    # a is first in group A, d first in group B; e and f never met either
    assert lineup == ["a", "e", "d", "f"]


def test_balanced_match_falls_back_to_random_fill(make_player, make_match, first_pick):
    players = [make_player(name, losses=n) for n, name in enumerate("ABCD", 1)]
    history = [
        make_match(1, ("a", "b"), ("c", "d"), winner="team1"),
        make_match(2, ("a", "c"), ("b", "d"), winner="team1"),
    ]

    lineup = ids(find_best_match(players, history, first_pick))
    assert lineup == ["a", "b", "c", "d"]


def test_win_rate_handles_no_games(make_player):
    assert win_rate(make_player("A")) == 0.0
    assert win_rate(make_player("B", wins=3, losses=1)) == 0.75
