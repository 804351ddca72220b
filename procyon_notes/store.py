"""Opening a catalog database and the managers working on it."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from typing import Any

from .folder_manager import FolderManager
from .memo_manager import MemoManager
from .settings_manager import SettingsManager
from .sqlhelper import SqlError


@dataclass
class CatalogStore:
    """An open catalog database with its folder, memo and settings managers."""

    connection: sqlite3.Connection
    folders: FolderManager = field(init=False)
    memos: MemoManager = field(init=False)
    settings: SettingsManager = field(init=False)

    def __post_init__(self) -> None:
        self.folders = FolderManager(self.connection)
        self.memos = MemoManager(self.connection)
        self.settings = SettingsManager(self.connection)

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "CatalogStore":
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


def open_database(file_name: str) -> CatalogStore:
    """Open or create a catalog file and make sure its tables exist."""
    try:
        connection = sqlite3.connect(str(file_name), isolation_level=None)
    except sqlite3.Error as exc:
        raise SqlError(f"Unable to open database connection.\n\n{exc}") from exc

    try:
        try:
            connection.execute("PRAGMA foreign_keys = ON;")
        except sqlite3.Error as exc:
            raise SqlError(f"Failed to enable foreign keys.\n\n{exc}") from exc

        try:
            connection.execute("BEGIN")
        except sqlite3.Error as exc:
            raise SqlError(
                f"Failed to begin transaction for setup database structure.\n\n{exc}"
            ) from exc

        store = CatalogStore(connection)
        store.folders.prepare()
        store.memos.prepare()
        store.settings.prepare()
        connection.commit()
    except SqlError:
        connection.close()
        raise
    return store