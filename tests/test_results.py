"""Tests for applying, reporting and reverting results."""

import copy

import pytest

from errors import (
    CannotRevertFirstMatchError,
    InvalidWinnerError,
    MatchAlreadyDecidedError,
    MatchNotFoundError,
)
from matchmaking import (
    apply_result,
    create_next_match,
    report_winner,
    reset_results,
    revert_match,
    undo_result,
)


def records(state):
    return {p.id: (p.wins, p.losses, p.matches_played) for p in state.players}


def test_apply_result_updates_the_four_players(make_state, make_match):
    state = make_state("A", "B", "C", "D", "E")
    match = make_match(1, ("a", "b"), ("c", "d"))

    apply_result(match, "team2", state.players)

    assert match.winner == "team2"
    assert records(state) == {
        "a": (0, 1, 1),
        "b": (0, 1, 1),
        "c": (1, 0, 1),
        "d": (1, 0, 1),
        "e": (0, 0, 0),
    }


def test_apply_result_is_not_idempotent(make_state, make_match):
    state = make_state("A", "B", "C", "D")
    match = make_match(1, ("a", "b"), ("c", "d"))

    apply_result(match, "team1", state.players)
    apply_result(match, "team1", state.players)

    assert state.get_player("a").wins == 2


def test_apply_result_rejects_unknown_winner(make_state, make_match):
    state = make_state("A", "B", "C", "D")
    match = make_match(1, ("a", "b"), ("c", "d"))

    with pytest.raises(InvalidWinnerError):
        apply_result(match, "draw", state.players)
    assert match.winner is None
    assert all(p.matches_played == 0 for p in state.players)


def test_apply_result_skips_departed_players(make_state, make_match):
    state = make_state("A", "B", "C")
    match = make_match(1, ("a", "b"), ("c", "gone"))

    apply_result(match, "team1", state.players)

    assert records(state) == {"a": (1, 0, 1), "b": (1, 0, 1), "c": (0, 1, 1)}


def test_report_winner_only_counts_once(make_state, rng):
    state = make_state("A", "B", "C", "D")
    match = create_next_match(state, rng=rng)
    report_winner(state, match.id, "team1")

    with pytest.raises(MatchAlreadyDecidedError):
        report_winner(state, match.id, "team2")
    assert sum(p.wins for p in state.players) == 2
    assert match.winner == "team1"


def test_report_winner_unknown_match(make_state):
    with pytest.raises(MatchNotFoundError):
        report_winner(make_state("A", "B", "C", "D"), 99, "team1")


def test_report_winner_validates_before_mutating(make_state, rng):
    state = make_state("A", "B", "C", "D")
    match = create_next_match(state, rng=rng)

    with pytest.raises(InvalidWinnerError):
        report_winner(state, match.id, "team3")
    assert match.winner is None


@pytest.mark.parametrize("winner", ["team1", "team2"])
def test_apply_then_revert_restores_records(make_state, rng, winner):
    state = make_state(*"ABCDEF")
    first = create_next_match(state, rng=rng)
    report_winner(state, first.id, "team1")
    second = create_next_match(state, rng=rng)
    before = records(state)

    report_winner(state, second.id, winner)
    revert_match(state, second.id)

    assert records(state) == before
    assert state.matches == [first]


@pytest.mark.parametrize("played", [1, 2, 4])
def test_first_match_cannot_be_reverted(make_state, rng, played):
    state = make_state(*"ABCDE")
    for _ in range(played):
        match = create_next_match(state, rng=rng)
        report_winner(state, match.id, "team1")
    before = (records(state), [m.id for m in state.matches])

    with pytest.raises(CannotRevertFirstMatchError):
        revert_match(state, state.matches[0].id)
    assert (records(state), [m.id for m in state.matches]) == before


def test_revert_unknown_match(make_state, rng):
    state = make_state("A", "B", "C", "D")
    create_next_match(state, rng=rng)

    with pytest.raises(MatchNotFoundError):
        revert_match(state, 42)


def test_revert_removes_all_later_matches(make_state, rng):
    state = make_state(*"ABCDEFG")
    for _ in range(2):
        match = create_next_match(state, rng=rng)
        report_winner(state, match.id, "team2")
    snapshot = copy.deepcopy(records(state))

    for _ in range(2):
        match = create_next_match(state, rng=rng)
        report_winner(state, match.id, "team1")
    create_next_match(state, rng=rng)  # left open

    removed = revert_match(state, 3)

    assert [m.id for m in removed] == [3, 4, 5]
    assert [m.id for m in state.matches] == [1, 2]
    assert records(state) == snapshot
    assert state.latest_match.is_finished


def test_undo_result_ignores_open_match(make_state, make_match):
    state = make_state("A", "B", "C", "D")
    undo_result(make_match(1, ("a", "b"), ("c", "d")), state.players)
    assert all(p.matches_played == 0 for p in state.players)


def test_reset_results_keeps_roster(make_state, rng):
    state = make_state("A", "B", "C", "D", "E")
    match = create_next_match(state, rng=rng)
    report_winner(state, match.id, "team1")

    reset_results(state)

    assert state.matches == []
    assert [p.name for p in state.players] == ["A", "B", "C", "D", "E"]
    assert all((p.wins, p.losses, p.matches_played) == (0, 0, 0) for p in state.players)
