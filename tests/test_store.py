import sqlite3

import pytest

from procyon_notes.items import FolderItem
from procyon_notes.sqlhelper import SqlError
from procyon_notes.store import open_database


def test_tables_created():
    with open_database(":memory:") as store:
        names = {
            row[0]
            for row in store.connection.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            )
        }
        assert {"Folder", "Memo", "MemoOptions", "Settings"} <= names


def test_foreign_keys_enabled():
    with open_database(":memory:") as store:
        assert store.connection.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        assert not store.connection.in_transaction


def test_managers_share_connection():
    with open_database(":memory:") as store:
        assert store.folders.connection is store.connection
        assert store.memos.connection is store.connection
        assert store.settings.connection is store.connection


def test_context_manager_closes_connection():
    with open_database(":memory:") as store:
        connection = store.connection
    with pytest.raises(sqlite3.ProgrammingError):
        connection.execute("SELECT 1")


def test_data_persists_between_opens(tmp_path):
    path = tmp_path / "book.enot"
    with open_database(str(path)) as store:
        folder = FolderItem(title="saved")
        store.folders.create(folder)
        store.settings.write_string("UID", "abc")

    with open_database(str(path)) as store:
        assert store.folders.select_all()[folder.id].title == "saved"
        assert store.settings.read_string("UID") == "abc"


def test_unopenable_path_raises(tmp_path):
    with pytest.raises(SqlError, match="Unable to open database connection"):
        open_database(str(tmp_path / "missing" / "book.enot"))