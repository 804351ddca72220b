"""Storage of memos and their options in the Memo and MemoOptions tables."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .items import MemoItem, MemoUpdate, get_memo_type, plain_text_memo_type
from .sqlhelper import (
    SqlError,
    TableDef,
    add_column_if_not_exist,
    create_table,
    run_action,
    run_select,
)

log = logging.getLogger(__name__)


class _MemoTable(TableDef):
    id = "Id"
    parent = "Parent"
    title = "Title"
    type = "Type"
    data = "Data"
    created = "Created"
    updated = "Updated"
    station = "Station"

    sql_select_all_no_data = (
        "SELECT Id, Parent, Title, Type, Created, Updated, Station FROM Memo"
    )
    sql_select_data = "SELECT Data FROM Memo WHERE Id = ?"
    sql_insert = (
        "INSERT INTO Memo (Id, Parent, Title, Type, Data, Created, Updated, Station) "
        "VALUES (:Id, :Parent, :Title, :Type, :Data, :Created, :Updated, :Station)"
    )
    sql_update = (
        "UPDATE Memo SET Title = :Title, Data = :Data, Updated = :Updated, "
        "Station = :Station WHERE Id = :Id"
    )
    sql_delete = "DELETE FROM Memo WHERE Id = :Id"

    def __init__(self) -> None:
        super().__init__("Memo")

    def sql_create(self) -> str:
        return (
            "CREATE TABLE IF NOT EXISTS Memo ("
            "Id INTEGER PRIMARY KEY, "
            "Parent REFERENCES Folder(Id) ON DELETE CASCADE, "
            "Title, Type, Data, Created, Updated, Station)"
        )


class _MemoOptionsTable(TableDef):
    memo_id = "MemoId"
    name = "Name"
    value = "Value"

    sql_select = "SELECT Name, Value FROM MemoOptions WHERE MemoId = ?"
    sql_update = (
        "REPLACE INTO MemoOptions (MemoId, Name, Value) VALUES (:MemoId, :Name, :Value)"
    )

    def __init__(self) -> None:
        super().__init__("MemoOptions")

    def sql_create(self) -> str:
        return (
            "CREATE TABLE IF NOT EXISTS MemoOptions ("
            "MemoId REFERENCES Memo(Id) ON DELETE CASCADE, "
            "Name, Value)"
        )


_MEMOS = _MemoTable()
_OPTIONS = _MemoOptionsTable()


def _as_int(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(_as_str(value))
    except ValueError:
        return None


def _from_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass
class MemosResult:
    """Memos loaded without data, grouped by folder id and keyed by memo id."""

    items: Dict[int, List[MemoItem]] = field(default_factory=dict)
    all_memos: Dict[int, MemoItem] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)


class MemoManager:
    """Creates, updates, removes and loads memos."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection

    def prepare(self) -> None:
        create_table(self.connection, _MEMOS)
        for column in (_MEMOS.updated, _MEMOS.created, _MEMOS.station):
            add_column_if_not_exist(self.connection, _MEMOS.table_name, column)
        create_table(self.connection, _OPTIONS)

    def create(self, item: MemoItem) -> None:
        """Store a new memo, assigning it the next free id."""
        try:
            rows = run_select(self.connection, _MEMOS.sql_select_max_id())
        except SqlError as exc:
            raise SqlError(f"Unable to generate id for new memo.\n\n{exc}") from exc
        if not rows:
            raise SqlError("Unable to generate id for new memo.\n\n")

        item.id = _as_int(rows[0][0]) + 1
        memo_type = item.memo_type or plain_text_memo_type()
        params = {
            _MEMOS.parent: item.parent.id if item.parent is not None else 0,
            _MEMOS.id: item.id,
            _MEMOS.title: item.title,
            _MEMOS.type: memo_type.name,
            _MEMOS.data: item.data,
            _MEMOS.created: _from_datetime(item.created),
            _MEMOS.updated: _from_datetime(item.updated),
            _MEMOS.station: item.station,
        }
        try:
            run_action(self.connection, _MEMOS.sql_insert, params)
        except SqlError as exc:
            raise SqlError(f"Failed to create new memo.\n\n{exc}") from exc

    def select_all(self) -> MemosResult:
        try:
            rows = run_select(self.connection, _MEMOS.sql_select_all_no_data)
        except SqlError as exc:
            raise SqlError(f"Unable to load memos.\n\n{exc}") from exc

        result = MemosResult()
        for row in rows:
            item = MemoItem(
                id=_as_int(row[_MEMOS.id]),
                title=_as_str(row[_MEMOS.title]),
                memo_type=get_memo_type(_as_str(row[_MEMOS.type])),
                created=_to_datetime(row[_MEMOS.created]),
                updated=_to_datetime(row[_MEMOS.updated]),
                station=_as_str(row[_MEMOS.station]),
            )
            parent_id = _as_int(row[_MEMOS.parent])
            result.items.setdefault(parent_id, []).append(item)
            result.all_memos[item.id] = item
        return result

    def load(self, memo: MemoItem) -> None:
        """Read the memo's data and mark it loaded."""
        try:
            rows = run_select(self.connection, _MEMOS.sql_select_data, (memo.id,))
        except SqlError as exc:
            raise SqlError(f"Unable to load memo #{memo.id}.\n\n{exc}") from exc
        if not rows:
            raise SqlError(f"Memo #{memo.id} does not exist.")
        memo.data = _as_str(rows[0][_MEMOS.data])
        memo.is_loaded = True

    def update(self, item: MemoItem, update: MemoUpdate) -> None:
        params = {
            _MEMOS.id: item.id,
            _MEMOS.title: update.title,
            _MEMOS.data: update.data,
            _MEMOS.updated: _from_datetime(update.moment),
            _MEMOS.station: update.station,
        }
        run_action(self.connection, _MEMOS.sql_update, params)

    def remove(self, item: MemoItem) -> None:
        run_action(self.connection, _MEMOS.sql_delete, {_MEMOS.id: item.id})

    def count_all(self) -> int:
        rows = run_select(self.connection, _MEMOS.sql_count_all())
        return _as_int(rows[0][0]) if rows else 0

    def select_options(self, memo_id: int) -> Dict[str, Any]:
        """Options stored for a memo; empty when they cannot be read."""
        try:
            rows = run_select(self.connection, _OPTIONS.sql_select, (memo_id,))
        except SqlError as exc:
            log.warning("Unable to select options for memo %s: %s", memo_id, exc)
            return {}
        return {_as_str(row[_OPTIONS.name]): row[_OPTIONS.value] for row in rows}

    def update_option(self, memo_id: int, name: str, value: Any) -> None:
        params = {_OPTIONS.memo_id: memo_id, _OPTIONS.name: name, _OPTIONS.value: value}
        run_action(self.connection, _OPTIONS.sql_update, params)