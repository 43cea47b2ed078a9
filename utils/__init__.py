"""Utility modules for the Shuttle Rotation Bot."""

# ANSI color codes for console output
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

def log(source: str, message: str, color: str = Colors.WHITE):
    """Print colored log with source tag."""
    print(f"{color}[{source}]{Colors.RESET} {message}")

from utils.helpers import (
    format_win_rate,
    format_team,
    format_match_line,
    format_standings_row,
    history_kept_note,
    parse_hours,
    parse_extras,
    format_expense,
    create_error_embed,
    create_info_embed,
    create_success_embed,
    truncate_string,
)

__all__ = [
    "Colors",
    "log",
    "format_win_rate",
    "format_team",
    "format_match_line",
    "format_standings_row",
    "history_kept_note",
    "parse_hours",
    "parse_extras",
    "format_expense",
    "create_error_embed",
    "create_info_embed",
    "create_success_embed",
    "truncate_string",
]
