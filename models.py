"""Data models for the Shuttle Rotation Bot."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


def new_player_id() -> str:
    """Generate an opaque, session-stable player id."""
    return uuid.uuid4().hex


@dataclass
class Player:
    """Represents a player on the session roster."""

    id: str
    name: str
    wins: int = 0
    losses: int = 0
    matches_played: int = 0
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "wins": self.wins,
            "losses": self.losses,
            "matches_played": self.matches_played,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        return cls(
            id=data["id"],
            name=data["name"],
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            matches_played=data.get("matches_played", 0),
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else datetime.now(),
        )


@dataclass
class Match:
    """Represents one doubles match. Teams hold player ids."""

    id: int
    team1: tuple[str, str]
    team2: tuple[str, str]
    winner: Optional[str] = None  # 'team1', 'team2' or None while in progress
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def player_ids(self) -> tuple[str, str, str, str]:
        return (*self.team1, *self.team2)

    @property
    def is_finished(self) -> bool:
        return self.winner is not None

    def involves(self, player_id: str) -> bool:
        return player_id in self.player_ids

    def winning_team(self) -> tuple[str, ...]:
        if self.winner == "team1":
            return self.team1
        if self.winner == "team2":
            return self.team2
        return ()

    def losing_team(self) -> tuple[str, ...]:
        if self.winner == "team1":
            return self.team2
        if self.winner == "team2":
            return self.team1
        return ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "team1": list(self.team1),
            "team2": list(self.team2),
            "winner": self.winner,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Match":
        return cls(
            id=int(data["id"]),
            team1=tuple(data["team1"]),
            team2=tuple(data["team2"]),
            winner=data.get("winner"),
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else datetime.now(),
        )


@dataclass
class SessionState:
    """The roster and match history of one session, owned by the caller."""

    players: list[Player] = field(default_factory=list)
    matches: list[Match] = field(default_factory=list)
    next_match_id: int = 1

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_match(self, match_id: int) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    @property
    def latest_match(self) -> Optional[Match]:
        return self.matches[-1] if self.matches else None

    def player_name(self, player_id: str) -> str:
        """Name for display; players removed from the roster show as '(left)'."""
        player = self.get_player(player_id)
        return player.name if player else "(left)"

    def to_dict(self) -> dict:
        return {
            "players": [p.to_dict() for p in self.players],
            "matches": [m.to_dict() for m in self.matches],
            "next_match_id": self.next_match_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionState":
        matches = [Match.from_dict(m) for m in data.get("matches", [])]
        default_next = max((m.id for m in matches), default=0) + 1
        return cls(
            players=[Player.from_dict(p) for p in data.get("players", [])],
            matches=matches,
            next_match_id=data.get("next_match_id", default_next),
        )


@dataclass
class PlayerStanding:
    """A player's line in the final standings."""

    name: str
    wins: int
    losses: int
    win_rate: float  # percentage, 0-100
    total_matches: int
    rank: int


@dataclass
class CourtFee:
    """Court booking cost."""

    hourly_rate: float
    hours: float


@dataclass
class Shuttlecock:
    """Shuttlecocks used during the session."""

    quantity: int
    price_per_piece: float


@dataclass
class CustomExpense:
    """An extra expense, either for everyone or for the players in assigned_to."""

    id: str
    name: str
    amount: float
    assigned_to: list[str] = field(default_factory=list)
    is_shared: bool = True  # split among payers, otherwise each payer pays the full amount


@dataclass
class PlayerCost:
    """What a single player owes for the session."""

    name: str
    hours: float
    shared_cost: float
    custom_expenses: float
    total: float
