"""
Exceptions for the matchmaking engine, each carrying a user-facing message.

Validation errors reject bad input, sequencing errors reject an operation that
is out of order. Neither changes session state.
"""

from config import MAX_NAME_LENGTH, MAX_PLAYERS, MIN_PLAYERS


class MatchmakingError(Exception):
    """Base exception for session and matchmaking errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or message


class ValidationError(MatchmakingError):
    """Input was rejected; nothing was changed."""


class SequencingError(MatchmakingError):
    """Operation is not allowed in the current session state."""


class DuplicateNameError(ValidationError):
    """Raised when a player name is already taken (case-insensitive)."""
    def __init__(self, name: str):
        super().__init__(
            f"Player name '{name}' already exists",
            f"A player called **{name}** is already on the roster."
        )
        self.name = name


class NameTooLongError(ValidationError):
    """Raised when a player name exceeds the length limit."""
    def __init__(self, name: str):
        super().__init__(
            f"Player name '{name}' is longer than {MAX_NAME_LENGTH} characters",
            f"Names can be at most {MAX_NAME_LENGTH} characters long."
        )
        self.name = name


class InvalidNameError(ValidationError):
    """Raised when a player name is blank."""
    def __init__(self):
        super().__init__("Player name is empty", "Please enter a player name.")


class RosterFullError(ValidationError):
    """Raised when the roster already holds the maximum number of players."""
    def __init__(self, size: int):
        super().__init__(
            f"Roster has {size} players, maximum is {MAX_PLAYERS}",
            f"Maximum {MAX_PLAYERS} players allowed."
        )
        self.size = size


class InsufficientPlayersError(ValidationError):
    """Raised when there are not enough players to make a match."""
    def __init__(self, size: int):
        super().__init__(
            f"Roster has {size} players, need at least {MIN_PLAYERS}",
            f"Need at least {MIN_PLAYERS} players to create a match."
        )
        self.size = size


class PlayerNotFoundError(ValidationError):
    """Raised when a player id or name is not on the roster."""
    def __init__(self, player_ref: str):
        super().__init__(
            f"Player '{player_ref}' not found",
            f"Could not find player **{player_ref}** on the roster."
        )
        self.player_ref = player_ref


class InvalidWinnerError(ValidationError):
    """Raised when a winner is not 'team1' or 'team2'."""
    def __init__(self, winner):
        super().__init__(
            f"Invalid winner {winner!r}",
            "Winner must be Team 1 or Team 2."
        )
        self.winner = winner


class InvalidCostInputError(ValidationError):
    """Raised when per-player hours or extra expenses cannot be parsed."""
    def __init__(self, text: str, hint: str):
        super().__init__(
            f"Could not parse cost input {text!r}",
            f"Could not read `{text}`. {hint}"
        )
        self.text = text


class MatchInProgressError(SequencingError):
    """Raised when a new match is requested before the current one is decided."""
    def __init__(self, match_id: int):
        super().__init__(
            f"Match {match_id} has no recorded winner",
            f"Match #{match_id} is still in progress. Report its winner first."
        )
        self.match_id = match_id


class CannotRevertFirstMatchError(SequencingError):
    """Raised when trying to revert the opening match of a session."""
    def __init__(self, match_id: int):
        super().__init__(
            f"Match {match_id} is the first match and cannot be reverted",
            "The first match of a session cannot be reverted."
        )
        self.match_id = match_id


class MatchNotFoundError(SequencingError):
    """Raised when a match id is not in the session history."""
    def __init__(self, match_id: int):
        super().__init__(
            f"Match {match_id} not found",
            f"Match #{match_id} is not in this session."
        )
        self.match_id = match_id


class MatchAlreadyDecidedError(SequencingError):
    """Raised when a winner is reported twice for the same match."""
    def __init__(self, match_id: int):
        super().__init__(
            f"Match {match_id} already has a winner",
            f"Match #{match_id} already has a result."
        )
        self.match_id = match_id
