"""Small helpers around sqlite3 used by the catalog storage managers."""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional, Union

Params = Optional[Union[Mapping[str, Any], Iterable[Any]]]


class SqlError(Exception):
    """Raised when a statement against the catalog database fails."""


def _error_text(sql: str, exc: BaseException) -> str:
    return f"{sql}\n\n{exc}"


def _quote(value: str) -> str:
    return "'" + str(value).replace("'", "''") + "'"


class TableDef(ABC):
    """Description of a table together with the statements commonly run on it."""

    def __init__(self, table_name: str) -> None:
        self.table_name = table_name

    @abstractmethod
    def sql_create(self) -> str:
        """Statement creating the table if it does not exist."""

    def sql_select_all(self) -> str:
        return f"SELECT * FROM {self.table_name}"

    def sql_count_all(self) -> str:
        return f"SELECT COUNT(Id) FROM {self.table_name}"

    def sql_select_by_id(self, key: Union[int, str]) -> str:
        if isinstance(key, int):
            return f"SELECT * FROM {self.table_name} WHERE Id = {key}"
        return f"SELECT * FROM {self.table_name} WHERE Id = {_quote(key)}"

    def sql_select_max_id(self) -> str:
        return f"SELECT MAX(Id) FROM {self.table_name}"

    def sql_check_id(self, key: Union[int, str]) -> str:
        if isinstance(key, int):
            return f"SELECT Id FROM {self.table_name} WHERE Id = {key} LIMIT 1"
        return f"SELECT Id FROM {self.table_name} WHERE Id = {_quote(key)} LIMIT 1"


def run_action(connection: sqlite3.Connection, sql: str, params: Params = None) -> int:
    """Execute a modifying statement and return the number of affected rows."""
    try:
        cursor = connection.execute(sql, () if params is None else params)
    except sqlite3.Error as exc:
        raise SqlError(_error_text(sql, exc)) from exc
    return cursor.rowcount


def run_select(connection: sqlite3.Connection, sql: str, params: Params = None) -> list:
    """Execute a query and return its rows, addressable by index or column name."""
    try:
        cursor = connection.cursor()
        cursor.row_factory = sqlite3.Row
        cursor.execute(sql, () if params is None else params)
        return cursor.fetchall()
    except sqlite3.Error as exc:
        raise SqlError(_error_text(sql, exc)) from exc


def _rollback(connection: sqlite3.Connection) -> None:
    try:
        connection.rollback()
    except sqlite3.Error:
        pass


def create_table(connection: sqlite3.Connection, table: TableDef) -> None:
    """Create the table; on failure roll back the current transaction."""
    try:
        run_action(connection, table.sql_create())
    except SqlError as exc:
        _rollback(connection)
        raise SqlError(f"Unable to create table '{table.table_name}'.\n\n{exc}") from exc


def add_column_if_not_exist(
    connection: sqlite3.Connection, table_name: str, column_name: str
) -> None:
    """Add a column to a table unless its CREATE statement already mentions it."""
    try:
        rows = run_select(
            connection,
            "SELECT * FROM sqlite_master WHERE type = 'table' AND name = ? AND sql LIKE ?",
            (table_name, f"%{column_name}%"),
        )
    except SqlError as exc:
        _rollback(connection)
        raise SqlError(
            f"Failed to check if column '{table_name}' exists in table "
            f"'{column_name}'.\n\n{exc}"
        ) from exc

    if rows:
        return

    try:
        run_action(connection, f"ALTER TABLE {table_name} ADD COLUMN {column_name}")
    except SqlError as exc:
        _rollback(connection)
        raise SqlError(
            f"Unable to add column '{column_name}' into table '{table_name}'.\n\n{exc}"
        ) from exc