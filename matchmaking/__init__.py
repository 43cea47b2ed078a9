"""Matchmaking and rotation engine for doubles sessions."""

from matchmaking.roster import add_player, find_player, remove_player, rename_player
from matchmaking.pairing import (
    find_best_match,
    find_first_match,
    find_second_match,
    recent_player_ids,
    split_groups,
    win_rate,
)
from matchmaking.rotation import can_create_match, choose_strategy, create_next_match
from matchmaking.results import apply_result, report_winner, reset_results, revert_match, undo_result
from matchmaking.standings import compute_final_standings
from matchmaking.costs import (
    all_players_pay_same,
    calculate_player_costs,
    calculate_total_cost,
    format_phone_number,
    resolve_expenses,
    resolve_player_hours,
    validate_promptpay,
)

__all__ = [
    "add_player",
    "find_player",
    "remove_player",
    "rename_player",
    "find_best_match",
    "find_first_match",
    "find_second_match",
    "recent_player_ids",
    "split_groups",
    "win_rate",
    "can_create_match",
    "choose_strategy",
    "create_next_match",
    "apply_result",
    "report_winner",
    "reset_results",
    "revert_match",
    "undo_result",
    "compute_final_standings",
    "all_players_pay_same",
    "calculate_player_costs",
    "calculate_total_cost",
    "format_phone_number",
    "resolve_expenses",
    "resolve_player_hours",
    "validate_promptpay",
]
