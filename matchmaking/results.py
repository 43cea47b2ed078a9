"""Applying, reporting and reverting match results."""

from typing import Iterable

from config import TEAMS
from errors import (
    CannotRevertFirstMatchError,
    InvalidWinnerError,
    MatchAlreadyDecidedError,
    MatchNotFoundError,
)
from models import Match, Player, SessionState
from utils import Colors, log


def apply_result(match: Match, winner: str, players: Iterable[Player]) -> None:
    """
    Record ``winner`` on the match and add the result to the four players.

    Not idempotent: applying the same match twice counts it twice. Use
    report_winner for a guarded call. Players no longer on the roster are
    skipped.
    """
    if winner not in TEAMS:
        raise InvalidWinnerError(winner)

    winners = set(match.team1 if winner == "team1" else match.team2)
    involved = set(match.player_ids)

    for player in players:
        if player.id not in involved:
            continue
        player.matches_played += 1
        if player.id in winners:
            player.wins += 1
        else:
            player.losses += 1

    match.winner = winner


def undo_result(match: Match, players: Iterable[Player]) -> None:
    """Exactly reverse apply_result for a decided match."""
    if not match.is_finished:
        return

    winners = set(match.winning_team())
    involved = set(match.player_ids)

    for player in players:
        if player.id not in involved:
            continue
        player.matches_played -= 1
        if player.id in winners:
            player.wins -= 1
        else:
            player.losses -= 1

    match.winner = None


def report_winner(state: SessionState, match_id: int, winner: str) -> Match:
    """Record the winner of a match exactly once."""
    match = state.get_match(match_id)
    if not match:
        raise MatchNotFoundError(match_id)
    if match.is_finished:
        raise MatchAlreadyDecidedError(match_id)
    if winner not in TEAMS:
        raise InvalidWinnerError(winner)

    apply_result(match, winner, state.players)
    log("RESULTS", f"Match #{match_id} won by {winner}", Colors.GREEN)
    return match


def revert_match(state: SessionState, match_id: int) -> list[Match]:
    """
    Revert a match and everything after it.

    The result of each removed match is undone, then history is truncated at
    ``match_id``. The first match of a session cannot be reverted. Returns the
    removed matches.
    """
    index = next((i for i, m in enumerate(state.matches) if m.id == match_id), None)
    if index is None:
        raise MatchNotFoundError(match_id)
    if index == 0:
        raise CannotRevertFirstMatchError(match_id)

    removed = state.matches[index:]
    for match in reversed(removed):
        undo_result(match, state.players)

    state.matches = state.matches[:index]
    log("RESULTS", f"Reverted {len(removed)} match(es) starting at #{match_id}", Colors.YELLOW)
    return removed


def reset_results(state: SessionState) -> None:
    """Clear match history and zero every player's record, keeping the roster."""
    for player in state.players:
        player.wins = 0
        player.losses = 0
        player.matches_played = 0
    state.matches = []
    log("RESULTS", f"Session restarted with {len(state.players)} player(s)", Colors.YELLOW)
