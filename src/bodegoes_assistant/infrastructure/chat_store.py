"""Chat persistence store.

Manages users, chat sessions, and messages in a dedicated SQLite file.
Every create is a single insert followed by a commit; nothing spans
more than one row.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path

from loguru import logger

from bodegoes_assistant.application.exceptions import (
    ConflictError,
    StorageError,
    ValidationError,
)
from bodegoes_assistant.domain.models import ChatSession, Message, User

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

# messages.session_id has no REFERENCES clause; the session link is not enforced.
_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    credential TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS chat_sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS messages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    session_id INTEGER NOT NULL,
    content TEXT NOT NULL,
    is_assistant BOOLEAN NOT NULL DEFAULT 0,
    timestamp TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_messages_session_id ON messages(session_id);
CREATE INDEX IF NOT EXISTS idx_chat_sessions_username ON chat_sessions(username);
"""


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _to_text(ts: datetime) -> str:
    # Fixed width so lexical order in SQL matches chronological order
    return ts.isoformat(timespec="microseconds")


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class SQLiteChatStore:
    """CRUD operations for users, chat sessions and messages."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.conn: sqlite3.Connection | None = None

    def connect(self) -> None:
        """Open (or create) the database and ensure the schema exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._guard("connect"):
            self.conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
            self.conn.row_factory = sqlite3.Row
            self.conn.execute("PRAGMA journal_mode=WAL")
            self.conn.executescript(_SCHEMA_SQL)
            self.conn.commit()
        logger.info("Chat DB ready at {}", self.db_path)

    def close(self) -> None:
        if self.conn:
            self.conn.close()
            self.conn = None

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        """Re-raise driver errors as ``StorageError``."""
        try:
            yield
        except sqlite3.Error as exc:
            logger.error("Storage failure during {}: {}", operation, exc)
            raise StorageError(f"{operation} failed: {exc}") from exc

    def _connection(self) -> sqlite3.Connection:
        if self.conn is None:
            raise StorageError("Chat store is not connected")
        return self.conn

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, username: str, credential: str) -> User:
        """Create a new user. Raises ``ConflictError`` if the name is taken."""
        conn = self._connection()
        with self._guard("create_user"):
            try:
                cursor = conn.execute(
                    "INSERT INTO users (username, credential) VALUES (?, ?)",
                    (username, credential),
                )
                conn.commit()
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise ConflictError(f"User '{username}' already exists") from exc
        logger.info("Created user {}", username)
        return User(id=cursor.lastrowid, username=username, credential=credential)

    def get_user(self, user_id: int) -> User | None:
        conn = self._connection()
        with self._guard("get_user"):
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return self._row_to_user(row) if row else None

    def get_user_by_name(self, username: str) -> User | None:
        conn = self._connection()
        with self._guard("get_user_by_name"):
            row = conn.execute(
                "SELECT * FROM users WHERE username = ?", (username,)
            ).fetchone()
        return self._row_to_user(row) if row else None

    # ------------------------------------------------------------------
    # Chat sessions
    # ------------------------------------------------------------------

    def create_chat_session(self, name: str) -> ChatSession:
        """Insert a session; the store assigns its id and creation time."""
        conn = self._connection()
        now = _utcnow()
        with self._guard("create_chat_session"):
            cursor = conn.execute(
                "INSERT INTO chat_sessions (username, created_at) VALUES (?, ?)",
                (name, _to_text(now)),
            )
            conn.commit()
        logger.info("Created chat session {} for {}", cursor.lastrowid, name)
        return ChatSession(id=cursor.lastrowid, name=name, created_at=now)

    def get_chat_session(self, session_id: int) -> ChatSession | None:
        """Return a session by ID, or None if not found."""
        conn = self._connection()
        with self._guard("get_chat_session"):
            row = conn.execute(
                "SELECT * FROM chat_sessions WHERE id = ?", (session_id,)
            ).fetchone()
        return self._row_to_session(row) if row else None

    def get_sessions_by_name(self, name: str) -> list[ChatSession]:
        conn = self._connection()
        with self._guard("get_sessions_by_name"):
            rows = conn.execute(
                "SELECT * FROM chat_sessions WHERE username = ? ORDER BY id ASC", (name,)
            ).fetchall()
        return [self._row_to_session(row) for row in rows]

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def create_message(
        self, session_id: int, content: str, is_assistant: bool = False
    ) -> Message:
        """Persist a message and return it.

        The session is not looked up first; an unknown *session_id* is
        stored as given.
        """
        if not content or not content.strip():
            raise ValidationError("Message content must not be empty")
        conn = self._connection()
        now = _utcnow()
        with self._guard("create_message"):
            cursor = conn.execute(
                "INSERT INTO messages (session_id, content, is_assistant, timestamp) "
                "VALUES (?, ?, ?, ?)",
                (session_id, content, 1 if is_assistant else 0, _to_text(now)),
            )
            conn.commit()
        return Message(
            id=cursor.lastrowid,
            session_id=session_id,
            content=content,
            is_assistant=is_assistant,
            timestamp=now,
        )

    def get_messages_by_session(self, session_id: int) -> list[Message]:
        """Return all messages in a session, oldest first (ties by insertion order)."""
        conn = self._connection()
        with self._guard("get_messages_by_session"):
            rows = conn.execute(
                "SELECT * FROM messages WHERE session_id = ? ORDER BY timestamp ASC, id ASC",
                (session_id,),
            ).fetchall()
        return [self._row_to_message(row) for row in rows]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(id=row["id"], username=row["username"], credential=row["credential"])

    @staticmethod
    def _row_to_session(row: sqlite3.Row) -> ChatSession:
        return ChatSession(
            id=row["id"],
            name=row["username"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    @staticmethod
    def _row_to_message(row: sqlite3.Row) -> Message:
        return Message(
            id=row["id"],
            session_id=row["session_id"],
            content=row["content"],
            is_assistant=bool(row["is_assistant"]),
            timestamp=datetime.fromisoformat(row["timestamp"]),
        )
