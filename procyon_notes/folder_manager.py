"""Storage of catalog folders in the Folder table."""

from __future__ import annotations

import sqlite3
from typing import Any, Dict

from .items import FolderItem
from .sqlhelper import SqlError, TableDef, create_table, run_action, run_select


class _FolderTable(TableDef):
    id = "Id"
    parent = "Parent"
    title = "Title"

    sql_insert = "INSERT INTO Folder (Id, Parent, Title) VALUES (:Id, :Parent, :Title)"
    sql_rename = "UPDATE Folder SET Title = :Title WHERE Id = :Id"
    sql_delete = "DELETE FROM Folder WHERE Id = :Id"

    def __init__(self) -> None:
        super().__init__("Folder")

    def sql_create(self) -> str:
        return "CREATE TABLE IF NOT EXISTS Folder (Id INTEGER PRIMARY KEY, Parent, Title)"


_TABLE = _FolderTable()


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


class FolderManager:
    """Creates, renames, removes and loads folders."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection

    def prepare(self) -> None:
        create_table(self.connection, _TABLE)

    def create(self, folder: FolderItem) -> None:
        """Store a new folder, assigning it the next free id."""
        try:
            rows = run_select(self.connection, _TABLE.sql_select_max_id())
        except SqlError as exc:
            raise SqlError(f"Unable to generate id for new folder.\n\n{exc}") from exc
        if not rows:
            raise SqlError("Unable to generate id for new folder.\n\n")

        folder.id = _as_int(rows[0][0]) + 1
        params = {
            _TABLE.id: folder.id,
            _TABLE.parent: folder.parent.id if folder.parent is not None else 0,
            _TABLE.title: folder.title,
        }
        try:
            run_action(self.connection, _TABLE.sql_insert, params)
        except SqlError as exc:
            raise SqlError(f"Failed to create new folder.\n\n{exc}") from exc

    def rename(self, folder_id: int, title: str) -> None:
        run_action(self.connection, _TABLE.sql_rename, {_TABLE.id: folder_id, _TABLE.title: title})

    def remove(self, folder: FolderItem) -> None:
        """Delete a folder with all its subfolders in one transaction."""
        try:
            self.connection.execute("BEGIN")
        except sqlite3.Error as exc:
            raise SqlError(
                f"Unable to start transaction for removing folder #{folder.id}.\n\n{exc}"
            ) from exc
        try:
            self._remove_branch(folder, "")
        except SqlError:
            self.connection.rollback()
            raise
        self.connection.commit()

    def _remove_branch(self, folder: FolderItem, path: str) -> None:
        this_path = f"{path}/{folder.title}"
        for child in folder.children:
            if isinstance(child, FolderItem):
                self._remove_branch(child, this_path)
        try:
            run_action(self.connection, _TABLE.sql_delete, {_TABLE.id: folder.id})
        except SqlError as exc:
            raise SqlError(f"Failed to delete folder '{this_path}'.\n\n{exc}") from exc

    def select_all(self) -> Dict[int, FolderItem]:
        """All folders keyed by id, with parent and children links set."""
        try:
            rows = run_select(self.connection, _TABLE.sql_select_all())
        except SqlError as exc:
            raise SqlError(f"Unable to load folder list.\n\n{exc}") from exc

        items: Dict[int, FolderItem] = {}
        for row in rows:
            folder_id = _as_int(row[_TABLE.id])
            item = items.setdefault(folder_id, FolderItem())
            item.id = folder_id
            item.title = _as_str(row[_TABLE.title])
            parent_id = _as_int(row[_TABLE.parent])
            if parent_id > 0:
                parent = items.setdefault(parent_id, FolderItem())
                parent.children.append(item)
                item.parent = parent
        return items