# -*- coding: utf-8 -*-
"""State storage: whole-object JSON values keyed by a fixed name per type."""

from __future__ import annotations

import copy
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from .app_db import db_conn, init_app_db

logger = logging.getLogger(__name__)

KEY_USER_DATA = "user_data"
KEY_USER_PROGRESS = "user_progress"
KEY_WORKOUT_SESSIONS = "workout_sessions"
KEY_DAILY_QUOTE = "daily_quote"
KEY_RANDOM_HISTORY = "random_exercise_history"
KEY_ACTIVE_SESSIONS = "active_workout_sessions"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class KeyValueRepository(Protocol):
    def load(self, key: str) -> Optional[Any]: ...

    def save(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...

    def keys(self) -> List[str]: ...


class InMemoryRepository:
    """Dict-backed repository. Values are deep-copied in and out."""

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}

    def load(self, key: str) -> Optional[Any]:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> List[str]:
        return sorted(self._data.keys())


class SQLiteRepository:
    """SQLite-backed repository; every save replaces the whole value atomically."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        init_app_db(db_path)

    def load(self, key: str) -> Optional[Any]:
        with db_conn(self.db_path) as conn:
            row = conn.execute("SELECT value_json FROM kv_state WHERE key = ?", (key,)).fetchone()
        if not row:
            return None
        try:
            return json.loads(row["value_json"])
        except json.JSONDecodeError as exc:
            logger.warning("Discarding corrupt stored value for %s: %s", key, exc)
            return None

    def save(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        with db_conn(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO kv_state (key, value_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value_json=excluded.value_json,
                    updated_at=excluded.updated_at
                """,
                (key, payload, _utc_now()),
            )

    def delete(self, key: str) -> None:
        with db_conn(self.db_path) as conn:
            conn.execute("DELETE FROM kv_state WHERE key = ?", (key,))

    def clear(self) -> None:
        with db_conn(self.db_path) as conn:
            conn.execute("DELETE FROM kv_state")
        logger.info("Cleared all stored state in %s", self.db_path)

    def keys(self) -> List[str]:
        with db_conn(self.db_path) as conn:
            rows = conn.execute("SELECT key FROM kv_state ORDER BY key").fetchall()
        return [r["key"] for r in rows]
