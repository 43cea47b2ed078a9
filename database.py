"""Session store and async helpers for the Shuttle Rotation Bot."""

import json
import aiosqlite
from typing import Optional

from models import SessionState
from utils import Colors, log


def session_key(channel_id: int) -> str:
    """Storage key for the session running in a channel."""
    return f"session:{channel_id}"


class Database:
    """Async SQLite key-value store holding one JSON blob per session."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        """Establish database connection and initialize schema."""
        self._connection = await aiosqlite.connect(self.db_path)
        self._connection.row_factory = aiosqlite.Row
        await self._create_tables()

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    @property
    def conn(self) -> aiosqlite.Connection:
        """Get the active connection."""
        if not self._connection:
            raise RuntimeError("Database not connected")
        return self._connection

    async def _create_tables(self) -> None:
        """Create database tables if they don't exist."""
        await self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS session_store (
                key TEXT PRIMARY KEY,
                payload TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
        """)
        await self.conn.commit()

    async def load_session(self, key: str) -> SessionState:
        """Load a session, or an empty one if nothing is stored under key."""
        async with self.conn.execute(
            "SELECT payload FROM session_store WHERE key = ?",
            (key,)
        ) as cursor:
            row = await cursor.fetchone()

        if not row:
            log("DB", f"No session stored for {key}, starting fresh", Colors.BLUE)
            return SessionState()

        state = SessionState.from_dict(json.loads(row["payload"]))
        log("DB", f"Loaded {key}: {len(state.players)} players, {len(state.matches)} matches", Colors.BLUE)
        return state

    async def save_session(self, key: str, state: SessionState) -> None:
        """Overwrite the stored session with the given state."""
        payload = json.dumps(state.to_dict())
        await self.conn.execute("""
            INSERT INTO session_store (key, payload, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET
                payload = excluded.payload,
                updated_at = excluded.updated_at
        """, (key, payload))
        await self.conn.commit()
        log("DB", f"Saved {key}", Colors.BLUE)

    async def delete_session(self, key: str) -> bool:
        """Remove a stored session. Returns False if there was none."""
        async with self.conn.execute(
            "DELETE FROM session_store WHERE key = ?",
            (key,)
        ) as cursor:
            deleted = cursor.rowcount
        await self.conn.commit()
        return deleted > 0

    async def list_session_keys(self) -> list[str]:
        """Keys of all stored sessions, most recently updated first."""
        async with self.conn.execute(
            "SELECT key FROM session_store ORDER BY updated_at DESC, key"
        ) as cursor:
            return [row["key"] async for row in cursor]
