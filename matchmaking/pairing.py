"""
Pairing strategies for picking four players and splitting them into two teams.

Every strategy returns a lineup ``(team1_p1, team1_p2, team2_p1, team2_p2)``
and never mutates players or history. Randomness comes from the ``rng``
argument so callers can seed it.

Groups are formed by slicing the roster in its given order: the first
``group A size`` players form group A, the rest group B. Each team takes one
player from each group.
"""

import random
from typing import Iterable, Sequence

from config import GROUP_SIZES, MIN_PLAYERS, RECENT_MATCH_WINDOW
from errors import InsufficientPlayersError, RosterFullError
from models import Match, Player
from utils import Colors, log

Lineup = tuple[Player, Player, Player, Player]


def win_rate(player: Player) -> float:
    """Fraction of matches won, 0 when the player has not played."""
    return player.wins / player.matches_played if player.matches_played else 0.0


def split_groups(players: Sequence[Player]) -> tuple[list[Player], list[Player]]:
    """Split players into group A and group B using the size table."""
    size = len(players)
    if size < MIN_PLAYERS:
        raise InsufficientPlayersError(size)
    if size not in GROUP_SIZES:
        raise RosterFullError(size)

    group_a_size, _ = GROUP_SIZES[size]
    return list(players[:group_a_size]), list(players[group_a_size:])


def recent_player_ids(history: Sequence[Match], window: int = RECENT_MATCH_WINDOW) -> set[str]:
    """Ids of every player in the last ``window`` matches."""
    if window <= 0:
        return set()
    recent = set()
    for match in history[-window:]:
        recent.update(match.player_ids)
    return recent


def _partner_ids(history: Iterable[Match], player_ids: set[str]) -> set[str]:
    """Ids of everyone who shared a match with any of ``player_ids``."""
    partners = set()
    for match in history:
        ids = set(match.player_ids)
        if ids & player_ids:
            partners.update(ids)
    return partners - player_ids


def _excluding(players: Iterable[Player], *picked: Player) -> list[Player]:
    picked_ids = {p.id for p in picked}
    return [p for p in players if p.id not in picked_ids]


def find_first_match(players: Sequence[Player], rng: random.Random) -> Lineup:
    """Opening match: one player from each group per team, drawn at random."""
    group_a, group_b = split_groups(players)

    team1_p1 = rng.choice(group_a)
    team1_p2 = rng.choice(group_b)
    team2_p1 = rng.choice(_excluding(group_a, team1_p1))
    team2_p2 = rng.choice(_excluding(group_b, team1_p2))

    log("PAIRING", f"first match: groups A={[p.name for p in group_a]} B={[p.name for p in group_b]}", Colors.CYAN)
    return team1_p1, team1_p2, team2_p1, team2_p2


def find_second_match(players: Sequence[Player], previous_match: Match, rng: random.Random) -> Lineup:
    """
    Second match: one player from the losing pair stays on court.

    The carried-over player takes team2 slot 1. Three players who sat out the
    first match fill team1 slot 1, team1 slot 2 and team2 slot 2 in draw
    order. Small rosters without three outsiders top up from the rest of the
    first match.
    """
    split_groups(players)

    by_id = {p.id: p for p in players}
    losing_team = [by_id[pid] for pid in previous_match.losing_team() if pid in by_id]
    if not losing_team:
        log("PAIRING", f"second match: no losing team in match #{previous_match.id}, falling back to best match", Colors.YELLOW)
        return find_best_match(players, [previous_match], rng)

    carried = rng.choice(losing_team)
    outsiders = [p for p in players if not previous_match.involves(p.id)]

    if len(outsiders) >= 3:
        selected = rng.sample(outsiders, 3)
    else:
        rest = _excluding([p for p in players if previous_match.involves(p.id)], carried)
        selected = rng.sample(outsiders, len(outsiders)) + rng.sample(rest, 3 - len(outsiders))

    log("PAIRING", f"second match: carrying {carried.name} from the losing team", Colors.CYAN)
    return selected[0], selected[1], carried, selected[2]


def find_best_match(
    players: Sequence[Player],
    history: Sequence[Match],
    rng: random.Random,
    window: int = RECENT_MATCH_WINDOW
) -> Lineup:
    """
    Subsequent matches.

    If at least four players sat out the last ``window`` matches, the opening
    strategy runs on just those players. Otherwise the balancing strategy
    runs on everyone.
    """
    split_groups(players)

    recent = recent_player_ids(history, window)
    rested = [p for p in players if p.id not in recent]
    if len(rested) >= MIN_PLAYERS:
        log("PAIRING", f"best match: {len(rested)} rested players, using opening draw", Colors.CYAN)
        return find_first_match(rested, rng)

    return _find_balanced_match(players, history, recent, rng)


def _find_balanced_match(
    players: Sequence[Player],
    history: Sequence[Match],
    recent: set[str],
    rng: random.Random
) -> Lineup:
    """
    Least-played, lowest win rate first.

    Players are sorted by (matches played, win rate) and split into groups.
    First slots are drawn from group A and group B, preferring rested players.
    Second slots go to rested players first, then to players who have never
    shared a match with either first-slot pick, in sorted order.
    """
    ordered = sorted(players, key=lambda p: (p.matches_played, win_rate(p)))
    group_a, group_b = split_groups(ordered)

    team1_p1 = rng.choice([p for p in group_a if p.id not in recent] or group_a)
    team2_p1 = rng.choice([p for p in group_b if p.id not in recent] or group_b)

    available = _excluding(ordered, team1_p1, team2_p1)
    partners = _partner_ids(history, {team1_p1.id, team2_p1.id})

    must_play = [p for p in available if p.id not in recent]
    unpaired = [p for p in available if p.id in recent and p.id not in partners]
    candidates = must_play + unpaired

    if len(candidates) >= 2:
        team1_p2, team2_p2 = candidates[:2]
    else:
        pool = _excluding(available, *candidates)
        team1_p2, team2_p2 = candidates + rng.sample(pool, 2 - len(candidates))

    log(
        "PAIRING",
        f"balanced match: {team1_p1.name} & {team1_p2.name} vs {team2_p1.name} & {team2_p2.name}",
        Colors.CYAN
    )
    return team1_p1, team1_p2, team2_p1, team2_p2
