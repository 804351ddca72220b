"""Key-value settings stored inside the catalog database."""

from __future__ import annotations

import enum
import logging
import sqlite3
from typing import Any, Dict, Iterable, List, Tuple

from .sqlhelper import SqlError, TableDef, create_table, run_action, run_select

log = logging.getLogger(__name__)


class TrackChanges(enum.Enum):
    """How an integer array is compared with its stored value before writing."""

    IGNORE_ORDER = "ignore_order"
    RESPECT_ORDER = "respect_order"


class _SettingsTable(TableDef):
    id = "Id"
    value = "Value"

    def __init__(self) -> None:
        super().__init__("Settings")

    def sql_create(self) -> str:
        return "CREATE TABLE IF NOT EXISTS Settings (Id, Value)"

    sql_insert = "INSERT INTO Settings (Id, Value) VALUES (:Id, :Value)"
    sql_update = "UPDATE Settings SET Value = :Value WHERE Id = :Id"
    sql_check = "SELECT Id FROM Settings WHERE Id = ? LIMIT 1"
    sql_select = "SELECT Value FROM Settings WHERE Id = ?"


_TABLE = _SettingsTable()


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _to_bool(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (bytes, str)):
        text = _to_str(value).strip().lower()
        return text not in ("", "0", "false")
    return bool(value)


def _to_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(round(value))
    try:
        return int(_to_str(value).strip())
    except ValueError:
        return 0


class SettingsManager:
    """Reads and writes catalog-level settings in the Settings table."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection

    def prepare(self) -> None:
        create_table(self.connection, _TABLE)

    def read_settings(self, key_pattern: str) -> Dict[str, Any]:
        """All settings whose key matches an SQL LIKE pattern."""
        try:
            rows = run_select(
                self.connection,
                "SELECT Id, Value FROM Settings WHERE Id LIKE ?",
                (key_pattern,),
            )
        except SqlError as exc:
            log.warning("Unable to select setting %s: %s", key_pattern, exc)
            return {}
        return {_to_str(row[0]): row[1] for row in rows}

    def remove(self, key: str) -> None:
        try:
            run_action(self.connection, "DELETE FROM Settings WHERE Id = ?", (key,))
        except SqlError as exc:
            log.warning("Error while delete setting %s: %s", key, exc)
            raise

    def write_value(self, key: str, value: Any) -> None:
        try:
            exists = bool(run_select(self.connection, _TABLE.sql_check, (key,)))
        except SqlError as exc:
            log.warning("Unable to write setting %s: %s", key, exc)
            raise
        sql = _TABLE.sql_update if exists else _TABLE.sql_insert
        try:
            run_action(self.connection, sql, {_TABLE.id: key, _TABLE.value: value})
        except SqlError as exc:
            log.warning("Error while write setting %s: %s", key, exc)
            raise

    def _lookup(self, key: str) -> Tuple[bool, Any]:
        rows = run_select(self.connection, _TABLE.sql_select, (key,))
        if not rows:
            return False, None
        return True, rows[0][0]

    def read_value(self, key: str, default: Any = None) -> Any:
        try:
            found, value = self._lookup(key)
        except SqlError as exc:
            log.warning("Unable to read setting %s: %s", key, exc)
            return default
        return value if found else default

    def has_value(self, key: str) -> bool:
        try:
            found, _ = self._lookup(key)
        except SqlError as exc:
            log.warning("Unable to read setting %s: %s", key, exc)
            return False
        return found

    def _old_value(self, key: str) -> Tuple[bool, Any]:
        try:
            return self._lookup(key)
        except SqlError as exc:
            log.warning("Unable to read setting %s: %s", key, exc)
            return False, None

    def write_string(self, key: str, value: str) -> None:
        found, old = self._old_value(key)
        if not found or _to_str(old) != value:
            self.write_value(key, value)

    def read_string(self, key: str, default: str = "") -> str:
        return _to_str(self.read_value(key, default))

    def write_bool(self, key: str, value: bool) -> None:
        found, old = self._old_value(key)
        if not found or _to_bool(old) != bool(value):
            self.write_value(key, bool(value))

    def read_bool(self, key: str, default: bool = False) -> bool:
        return _to_bool(self.read_value(key, default))

    def write_int(self, key: str, value: int) -> None:
        found, old = self._old_value(key)
        if not found or _to_int(old) != value:
            self.write_value(key, int(value))

    def read_int(self, key: str, default: int = 0) -> int:
        return _to_int(self.read_value(key, default))

    def write_int_array(
        self,
        key: str,
        values: Iterable[int],
        track_changes: TrackChanges = TrackChanges.IGNORE_ORDER,
    ) -> None:
        """Store integers joined by ';', skipping the write when nothing changed."""
        values = list(values)
        if track_changes is TrackChanges.IGNORE_ORDER:
            if set(self.read_int_array(key)) == set(values):
                return

        text = ";".join(str(v) for v in values)

        if track_changes is TrackChanges.RESPECT_ORDER:
            if _to_str(self.read_value(key)) == text:
                return

        self.write_value(key, text)

    def read_int_array(self, key: str) -> List[int]:
        text = _to_str(self.read_value(key))
        if not text:
            return []
        result = []
        for part in text.split(";"):
            try:
                result.append(int(part.strip()))
            except ValueError:
                continue
        return result