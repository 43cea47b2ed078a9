"""Roster management: adding, renaming and removing players."""

from typing import Optional

from config import MAX_NAME_LENGTH, MAX_PLAYERS
from errors import (
    DuplicateNameError,
    InvalidNameError,
    NameTooLongError,
    PlayerNotFoundError,
    RosterFullError,
)
from models import Player, SessionState, new_player_id
from utils import Colors, log


def _validate_name(state: SessionState, name: str, exclude_id: Optional[str] = None) -> str:
    """Return the cleaned name or raise a validation error."""
    name = (name or "").strip()
    if not name:
        raise InvalidNameError()
    if len(name) > MAX_NAME_LENGTH:
        raise NameTooLongError(name)

    lowered = name.lower()
    for player in state.players:
        if player.id != exclude_id and player.name.lower() == lowered:
            raise DuplicateNameError(name)
    return name


def add_player(state: SessionState, name: str) -> Player:
    """Append a new zero-stat player to the roster."""
    name = _validate_name(state, name)
    if len(state.players) >= MAX_PLAYERS:
        raise RosterFullError(len(state.players))

    player = Player(id=new_player_id(), name=name)
    state.players.append(player)
    log("ROSTER", f"Added {name} (id={player.id}, roster size={len(state.players)})", Colors.GREEN)
    return player


def rename_player(state: SessionState, player_id: str, name: str) -> Player:
    """Rename a player, keeping names unique."""
    player = state.get_player(player_id)
    if not player:
        raise PlayerNotFoundError(player_id)

    name = _validate_name(state, name, exclude_id=player_id)
    log("ROSTER", f"Renamed {player.name} -> {name}", Colors.GREEN)
    player.name = name
    return player


def remove_player(state: SessionState, player_id: str) -> Player:
    """
    Remove a player from the roster.

    Any unfinished match that includes the player is dropped from history.
    Finished matches keep their recorded result and simply reference an id
    that is no longer on the roster.
    """
    player = state.get_player(player_id)
    if not player:
        raise PlayerNotFoundError(player_id)

    state.players = [p for p in state.players if p.id != player_id]

    before = len(state.matches)
    state.matches = [
        m for m in state.matches
        if m.is_finished or not m.involves(player_id)
    ]
    dropped = before - len(state.matches)

    log("ROSTER", f"Removed {player.name} (roster size={len(state.players)})", Colors.YELLOW)
    if dropped:
        log("ROSTER", f"  Dropped {dropped} open match(es) involving {player.name}", Colors.YELLOW)
    return player


def find_player(state: SessionState, ref: str) -> Player:
    """Look up a player by id or case-insensitive name."""
    ref = (ref or "").strip()
    player = state.get_player(ref)
    if player:
        return player

    lowered = ref.lower()
    for player in state.players:
        if player.name.lower() == lowered:
            return player
    raise PlayerNotFoundError(ref)
