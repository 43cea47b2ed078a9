"""Rotation policy: decides which pairing strategy builds the next match."""

import random
from datetime import datetime
from typing import Optional, Sequence

from config import MIN_PLAYERS
from errors import InsufficientPlayersError, MatchInProgressError
from matchmaking.pairing import find_best_match, find_first_match, find_second_match
from models import Match, SessionState
from utils import Colors, log

FIRST = "first"
SECOND = "second"
BEST = "best"


def choose_strategy(history: Sequence[Match]) -> str:
    """Pick the strategy for the next match from the match history."""
    if not history:
        return FIRST
    if len(history) == 1 and history[0].is_finished:
        return SECOND
    return BEST


def can_create_match(state: SessionState) -> bool:
    """Whether a new match may be created right now."""
    if len(state.players) < MIN_PLAYERS:
        return False
    latest = state.latest_match
    return latest is None or latest.is_finished


def create_next_match(
    state: SessionState,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None
) -> Match:
    """Select four players, append the new match to history and return it."""
    size = len(state.players)
    if size < MIN_PLAYERS:
        raise InsufficientPlayersError(size)

    latest = state.latest_match
    if latest and not latest.is_finished:
        raise MatchInProgressError(latest.id)

    if rng is None:
        rng = random.Random()

    strategy = choose_strategy(state.matches)
    log("ROTATION", f"Creating match #{state.next_match_id} using {strategy} strategy", Colors.MAGENTA)

    if strategy == FIRST:
        lineup = find_first_match(state.players, rng)
    elif strategy == SECOND:
        lineup = find_second_match(state.players, state.matches[0], rng)
    else:
        lineup = find_best_match(state.players, state.matches, rng)

    team1_p1, team1_p2, team2_p1, team2_p2 = lineup
    match = Match(
        id=state.next_match_id,
        team1=(team1_p1.id, team1_p2.id),
        team2=(team2_p1.id, team2_p2.id),
        created_at=now or datetime.now()
    )
    state.matches.append(match)
    state.next_match_id += 1

    log(
        "ROTATION",
        f"  Match #{match.id}: {team1_p1.name} & {team1_p2.name} vs {team2_p1.name} & {team2_p2.name}",
        Colors.MAGENTA
    )
    return match
