"""Environment configuration for the Shuttle Rotation Bot."""

import os
from dataclasses import dataclass


@dataclass
class Config:
    """Bot configuration loaded from environment variables."""

    discord_token: str
    database_path: str
    next_match_delay: float = 1.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        token = os.getenv("DISCORD_TOKEN")
        if not token:
            raise ValueError("DISCORD_TOKEN environment variable is required")

        database_path = os.getenv("DATABASE_PATH", "shuttle_sessions.db")

        raw_delay = os.getenv("NEXT_MATCH_DELAY", "1.0")
        try:
            next_match_delay = float(raw_delay)
        except ValueError:
            raise ValueError(f"NEXT_MATCH_DELAY must be a number, got '{raw_delay}'")
        if next_match_delay < 0:
            raise ValueError("NEXT_MATCH_DELAY cannot be negative")

        return cls(
            discord_token=token,
            database_path=database_path,
            next_match_delay=next_match_delay,
        )


# Roster limits for a single court of doubles
MIN_PLAYERS = 4
MAX_PLAYERS = 7
MAX_NAME_LENGTH = 16

# Player count -> (group A size, group B size)
GROUP_SIZES = {
    4: (2, 2),
    5: (3, 2),
    6: (3, 3),
    7: (4, 3),
}

# Players seen in this many trailing matches count as "recently played"
RECENT_MATCH_WINDOW = 3

TEAMS = ("team1", "team2")

# Embed color (shuttlecock green)
EMBED_COLOR = 0x2ECC71
