"""Final standings for the end of a session."""

from typing import Iterable

from models import Player, PlayerStanding


def compute_final_standings(players: Iterable[Player]) -> list[PlayerStanding]:
    """
    Rank players by win rate, then wins, then fewest losses, then name.

    Everyone sharing the top win rate is ranked 1. Everyone else gets their
    1-indexed position, so a tie for first leaves a gap (80%, 80%, 60% ranks
    1, 1, 3). Only the players passed in are ranked.
    """
    standings = []
    for player in players:
        total = player.wins + player.losses
        win_rate = (player.wins * 100 / total) if total > 0 else 0.0
        standings.append(PlayerStanding(
            name=player.name,
            wins=player.wins,
            losses=player.losses,
            win_rate=win_rate,
            total_matches=total,
            rank=0
        ))

    standings.sort(key=lambda s: (-s.win_rate, -s.wins, s.losses, s.name.lower()))

    if standings:
        top_rate = standings[0].win_rate
        for position, standing in enumerate(standings, 1):
            standing.rank = 1 if standing.win_rate == top_rate else position

    return standings
