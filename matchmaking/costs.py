"""
Cost split for a session.

The court fee is shared by hours played, shuttlecocks are shared equally, and
extra expenses follow their own rules:

- assigned + shared: split among the assigned players
- assigned + not shared: each assigned player pays the full amount
- unassigned + shared: split among everyone
- unassigned + not shared: everyone pays the full amount
"""

import re
from dataclasses import replace
from typing import Mapping, Sequence

from matchmaking.roster import find_player
from models import CourtFee, CustomExpense, PlayerCost, SessionState, Shuttlecock


def court_total(court_fee: CourtFee) -> float:
    return court_fee.hourly_rate * court_fee.hours


def shuttlecock_total(shuttlecock: Shuttlecock) -> float:
    return shuttlecock.quantity * shuttlecock.price_per_piece


def calculate_shared_costs(court_fee: CourtFee, shuttlecock: Shuttlecock) -> float:
    """Court fee plus shuttlecocks."""
    return court_total(court_fee) + shuttlecock_total(shuttlecock)


def _expense_share(expense: CustomExpense, name: str, player_count: int) -> float:
    if expense.assigned_to:
        if name not in expense.assigned_to:
            return 0.0
        return expense.amount / len(expense.assigned_to) if expense.is_shared else expense.amount
    if expense.is_shared:
        return expense.amount / player_count
    return expense.amount


def calculate_player_costs(
    player_hours: Sequence[tuple[str, float]],
    court_fee: CourtFee,
    shuttlecock: Shuttlecock,
    expenses: Sequence[CustomExpense] = ()
) -> list[PlayerCost]:
    """Work out what each player owes. ``player_hours`` is [(name, hours), ...]."""
    player_count = len(player_hours)
    total_hours = sum(hours for _, hours in player_hours)
    court_per_hour = court_total(court_fee) / total_hours if total_hours > 0 else 0.0
    shuttle_per_player = shuttlecock_total(shuttlecock) / player_count if player_count > 0 else 0.0

    costs = []
    for name, hours in player_hours:
        shared = hours * court_per_hour + shuttle_per_player
        extras = sum(_expense_share(e, name, player_count) for e in expenses)
        costs.append(PlayerCost(
            name=name,
            hours=hours,
            shared_cost=shared,
            custom_expenses=extras,
            total=shared + extras
        ))
    return costs


def resolve_player_hours(
    state: SessionState,
    custom_hours: Mapping[str, float],
    default_hours: float
) -> list[tuple[str, float]]:
    """
    Pair every roster player with their hours.

    ``custom_hours`` maps a name (any case) to hours; players not listed get
    ``default_hours``. Unknown names raise PlayerNotFoundError.
    """
    hours_by_id = {find_player(state, ref).id: hours for ref, hours in custom_hours.items()}
    return [(p.name, hours_by_id.get(p.id, default_hours)) for p in state.players]


def resolve_expenses(state: SessionState, expenses: Sequence[CustomExpense]) -> list[CustomExpense]:
    """Replace typed assignee names with roster names, dropping repeats."""
    resolved = []
    for expense in expenses:
        names = [find_player(state, ref).name for ref in expense.assigned_to]
        resolved.append(replace(expense, assigned_to=list(dict.fromkeys(names))))
    return resolved


def calculate_total_custom_expenses(expenses: Sequence[CustomExpense], total_players: int) -> float:
    """Total collected for extra expenses across all payers."""
    total = 0.0
    for expense in expenses:
        if expense.is_shared:
            total += expense.amount
        elif expense.assigned_to:
            total += expense.amount * len(expense.assigned_to)
        else:
            total += expense.amount * total_players
    return total


def calculate_total_cost(
    court_fee: CourtFee,
    shuttlecock: Shuttlecock,
    expenses: Sequence[CustomExpense],
    total_players: int
) -> float:
    """Everything collected for the session."""
    return calculate_shared_costs(court_fee, shuttlecock) + calculate_total_custom_expenses(expenses, total_players)


def all_players_pay_same(costs: Sequence[PlayerCost]) -> bool:
    """True when every player's total matches to within a cent."""
    if len(costs) <= 1:
        return True
    return all(abs(cost.total - costs[0].total) < 0.01 for cost in costs)


def format_phone_number(text: str) -> str:
    """Normalise a Thai mobile number for PromptPay: digits only, +66 becomes 0."""
    digits = re.sub(r"\D", "", text or "")
    if digits.startswith("66"):
        return "0" + digits[2:]
    return digits


def validate_promptpay(number: str) -> bool:
    """A PromptPay mobile number is 10 digits starting 06, 08 or 09."""
    if len(number) != 10 or not number.isdigit():
        return False
    return number[0] == "0" and number[1] in "689"
