"""Helper utilities for the Shuttle Rotation Bot."""

import re
import discord
from typing import Optional

from config import EMBED_COLOR
from errors import InvalidCostInputError
from models import CustomExpense, Match, PlayerStanding, SessionState


def format_win_rate(win_rate: float) -> str:
    """Format win rate as percentage string."""
    return f"{win_rate:.1f}%"


def format_team(state: SessionState, team: tuple[str, ...]) -> str:
    """Format a team as 'Alice & Bob'."""
    return " & ".join(state.player_name(player_id) for player_id in team)


def format_match_line(state: SessionState, match: Match, number: Optional[int] = None) -> str:
    """Format a match as a single history line."""
    label = f"#{match.id}" if number is None else f"{number}."
    team1 = format_team(state, match.team1)
    team2 = format_team(state, match.team2)

    if match.winner == "team1":
        return f"`{label}` **{team1}** def. {team2}"
    if match.winner == "team2":
        return f"`{label}` **{team2}** def. {team1}"
    return f"`{label}` {team1} vs {team2} *(in progress)*"


def history_kept_note(state: SessionState) -> str:
    """Reminder shown after a roster change that earlier matches still count."""
    if not state.matches:
        return ""
    return "\nEarlier matches still count. Use **/restart** to start a fresh match sequence."


def format_standings_row(standing: PlayerStanding) -> str:
    """Format a single standings row."""
    rank_str = f"{standing.rank}."
    trophy = " 🏆" if standing.rank == 1 else ""
    record = f"{standing.wins}W/{standing.losses}L"

    return (
        f"`{rank_str:3}` **{standing.name}**{trophy} - "
        f"{format_win_rate(standing.win_rate)} ({record}, {standing.total_matches} played)"
    )


_HOURS_PATTERN = re.compile(r"([^,;=:]+?)\s*[=:]\s*(\d+(?:\.\d+)?)")
_EXPENSE_PATTERN = re.compile(
    r"^\s*([^=:@!]+?)\s*[=:]\s*(\d+(?:\.\d+)?)\s*(!?)\s*(?:@\s*(.*?))?\s*$"
)


def parse_hours(text: str) -> dict[str, float]:
    """
    Parse per-player hours, keyed by lowercased name.

    Supports:
    - Name=2 Name2=1.5
    - Name:2, Mary Ann:1.5

    Raises InvalidCostInputError if anything is left over.
    """
    hours: dict[str, float] = {}
    if not text:
        return hours

    for name, value in _HOURS_PATTERN.findall(text):
        hours[name.strip().lower()] = float(value)

    leftover = _HOURS_PATTERN.sub("", text)
    if re.sub(r"[\s,;]", "", leftover):
        raise InvalidCostInputError(text, "Use `Name=hours`, e.g. `Alice=2, Mary Ann=1.5`.")
    return hours


def parse_extras(text: str) -> list[CustomExpense]:
    """
    Parse extra expenses.

    Input: 'Drinks=120, Rackets=50!@Alice, Balls=90@Bob,Cara'

    - ``!`` after the amount: each payer pays the full amount
    - ``@names``: only those players pay; more names may follow after commas

    Assigned names are kept as typed; resolve them against the roster before use.
    """
    expenses: list[CustomExpense] = []
    if not text:
        return expenses

    for chunk in re.split(r"[,;]", text):
        if not chunk.strip():
            continue

        if not re.search(r"[=:]", chunk):
            # Another name for the previous expense's @ list
            if not expenses or not expenses[-1].assigned_to:
                raise InvalidCostInputError(chunk.strip(), "Use `Name=amount`, e.g. `Drinks=120`.")
            expenses[-1].assigned_to.append(chunk.strip())
            continue

        match = _EXPENSE_PATTERN.match(chunk)
        if not match:
            raise InvalidCostInputError(chunk.strip(), "Use `Name=amount`, e.g. `Drinks=120@Alice`.")

        name, amount, each_pays, assignees = match.groups()
        expenses.append(CustomExpense(
            id=f"extra-{len(expenses) + 1}",
            name=name.strip(),
            amount=float(amount),
            assigned_to=[assignees.strip()] if assignees and assignees.strip() else [],
            is_shared=not each_pays
        ))
    return expenses


def format_expense(expense: CustomExpense) -> str:
    """Format an expense as 'Drinks 120.00 (each) for Alice, Bob'."""
    text = f"{expense.name} {expense.amount:.2f}"
    if not expense.is_shared:
        text += " (each)"
    if expense.assigned_to:
        text += f" for {', '.join(expense.assigned_to)}"
    return text


def create_error_embed(title: str, description: str) -> discord.Embed:
    """Create a standardized error embed."""
    return discord.Embed(
        title=f"Error: {title}",
        description=description,
        color=discord.Color.red()
    )


def create_success_embed(title: str, description: str) -> discord.Embed:
    """Create a standardized success embed."""
    return discord.Embed(
        title=title,
        description=description,
        color=discord.Color.green()
    )


def create_info_embed(title: str, description: str = "") -> discord.Embed:
    """Create a standardized info embed."""
    return discord.Embed(
        title=title,
        description=description,
        color=EMBED_COLOR
    )


def truncate_string(text: str, max_length: int = 100) -> str:
    """Truncate string with ellipsis if too long."""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."
