"""On-device key/value persistence backed by an embedded DuckDB file.

Values are stored as JSON text. The store is synchronous and never raises to
its callers: every failure is logged and reported as a no-op, so the in-memory
state stays authoritative for the rest of the session.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import duckdb

logger = logging.getLogger(__name__)

# Keys are namespaced per entity
KEY_USER_PREFERENCES = "user_preferences"
KEY_USER_PROFILE = "user_profile"
KEY_APP_OPENS = "app_opens"
KEY_DISCLAIMER_ACCEPTED = "simple_mode_disclaimer_accepted"
KEY_TRANSLATION_HISTORY = "ai_translation_history"

IN_MEMORY = ":memory:"


class LocalStore:
    """Synchronous JSON key/value store."""

    def __init__(self, db_path: str = IN_MEMORY):
        self.db_path = db_path
        self.conn: Optional[duckdb.DuckDBPyConnection] = None
        self._open()

    def _open(self) -> None:
        try:
            if self.db_path != IN_MEMORY:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = duckdb.connect(self.db_path)
            self.conn.execute(
                """
                CREATE TABLE IF NOT EXISTS local_kv (
                    key VARCHAR PRIMARY KEY,
                    value VARCHAR NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            logger.info(f"Local store initialized: {self.db_path}")
        except (duckdb.Error, OSError) as e:
            # Keep running from memory for this session
            logger.error(f"Local store unavailable at {self.db_path}: {e}")
            self.conn = None

    @property
    def available(self) -> bool:
        return self.conn is not None

    def read(self, key: str, default: Any = None) -> Any:
        """Return the decoded value for ``key``, or ``default`` when absent or unreadable."""
        if self.conn is None:
            return default

        try:
            row = self.conn.execute("SELECT value FROM local_kv WHERE key = ?", [key]).fetchone()
        except duckdb.Error as e:
            logger.error(f"Local read failed for '{key}': {e}")
            return default

        if row is None:
            return default

        try:
            return json.loads(row[0])
        except (TypeError, ValueError) as e:
            logger.warning(f"Discarding corrupt local value for '{key}': {e}")
            return default

    def write(self, key: str, value: Any) -> bool:
        """Persist ``value`` under ``key``. Returns False on any failure."""
        if self.conn is None:
            logger.error(f"Local write skipped for '{key}': store is closed")
            return False

        try:
            encoded = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Local write failed for '{key}': value is not JSON serializable ({e})")
            return False

        try:
            self.conn.execute(
                """
                INSERT INTO local_kv (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT (key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                [key, encoded],
            )
            return True
        except duckdb.Error as e:
            logger.error(f"Local write failed for '{key}': {e}")
            return False

    def remove(self, key: str) -> bool:
        if self.conn is None:
            return False
        try:
            self.conn.execute("DELETE FROM local_kv WHERE key = ?", [key])
            return True
        except duckdb.Error as e:
            logger.error(f"Local remove failed for '{key}': {e}")
            return False

    def keys(self) -> list[str]:
        if self.conn is None:
            return []
        try:
            return [row[0] for row in self.conn.execute("SELECT key FROM local_kv ORDER BY key").fetchall()]
        except duckdb.Error as e:
            logger.error(f"Local key listing failed: {e}")
            return []

    def close(self) -> None:
        if self.conn is not None:
            try:
                self.conn.close()
            except duckdb.Error as e:
                logger.warning(f"Error closing local store: {e}")
            finally:
                self.conn = None
