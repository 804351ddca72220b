import sqlite3

import pytest

from procyon_notes.sqlhelper import (
    SqlError,
    TableDef,
    add_column_if_not_exist,
    create_table,
    run_action,
    run_select,
)


class FolderTable(TableDef):
    def __init__(self):
        super().__init__("Folder")

    def sql_create(self):
        return "CREATE TABLE IF NOT EXISTS Folder (Id INTEGER PRIMARY KEY, Parent, Title)"


class BrokenTable(TableDef):
    def __init__(self):
        super().__init__("Broken")

    def sql_create(self):
        return "CREATE TABLE Broken ("


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()


def _insert_folder(conn, folder_id, title):
    run_action(
        conn,
        "INSERT INTO Folder (Id, Parent, Title) VALUES (:Id, :Parent, :Title)",
        {"Id": folder_id, "Parent": 0, "Title": title},
    )


def test_table_def_statements(conn):
    table = FolderTable()
    assert table.sql_select_all() == "SELECT * FROM Folder"
    assert table.sql_count_all() == "SELECT COUNT(Id) FROM Folder"
    assert table.sql_select_max_id() == "SELECT MAX(Id) FROM Folder"

    create_table(conn, table)
    _insert_folder(conn, 3, "A")
    _insert_folder(conn, 8, "B")
    assert [row["Title"] for row in run_select(conn, table.sql_select_all())] == ["A", "B"]
    assert run_select(conn, table.sql_count_all())[0][0] == 2
    assert run_select(conn, table.sql_select_max_id())[0][0] == 8


def test_table_def_int_and_string_ids(conn):
    table = FolderTable()
    assert table.sql_select_by_id(5) == "SELECT * FROM Folder WHERE Id = 5"
    assert table.sql_select_by_id("UID") == "SELECT * FROM Folder WHERE Id = 'UID'"
    assert table.sql_check_id(7) == "SELECT Id FROM Folder WHERE Id = 7 LIMIT 1"
    assert table.sql_check_id("UID") == "SELECT Id FROM Folder WHERE Id = 'UID' LIMIT 1"

    create_table(conn, table)
    assert run_select(conn, table.sql_check_id(7)) == []
    _insert_folder(conn, 7, "Seven")
    assert len(run_select(conn, table.sql_check_id(7))) == 1
    assert run_select(conn, table.sql_select_by_id(7))[0]["Title"] == "Seven"


def test_table_def_is_abstract():
    with pytest.raises(TypeError):
        TableDef("Anything")


def test_create_table_and_roundtrip(conn):
    table = FolderTable()
    create_table(conn, table)
    affected = run_action(
        conn,
        "INSERT INTO Folder (Id, Parent, Title) VALUES (:Id, :Parent, :Title)",
        {"Id": 1, "Parent": 0, "Title": "Notes"},
    )
    assert affected == 1
    rows = run_select(conn, table.sql_select_all())
    assert len(rows) == 1
    assert rows[0]["Title"] == "Notes"
    assert rows[0]["Id"] == 1


def test_create_table_is_idempotent(conn):
    create_table(conn, FolderTable())
    create_table(conn, FolderTable())
    rows = run_select(conn, "SELECT name FROM sqlite_master WHERE type = 'table'")
    assert [row["name"] for row in rows] == ["Folder"]


def test_create_table_failure(conn):
    with pytest.raises(SqlError, match="Unable to create table 'Broken'"):
        create_table(conn, BrokenTable())


def test_run_action_error_contains_sql(conn):
    sql = "INSERT INTO Missing (Id) VALUES (1)"
    with pytest.raises(SqlError) as info:
        run_action(conn, sql)
    assert str(info.value).startswith(sql + "\n\n")


def test_run_select_error(conn):
    with pytest.raises(SqlError):
        run_select(conn, "SELECT * FROM Missing")


def test_add_column_if_not_exist(conn):
    create_table(conn, FolderTable())
    add_column_if_not_exist(conn, "Folder", "Updated")
    add_column_if_not_exist(conn, "Folder", "Updated")
    columns = [row["name"] for row in run_select(conn, "PRAGMA table_info(Folder)")]
    assert columns.count("Updated") == 1
    assert columns[-1] == "Updated"


def test_add_column_existing_does_nothing(conn):
    create_table(conn, FolderTable())
    before = [row["name"] for row in run_select(conn, "PRAGMA table_info(Folder)")]
    add_column_if_not_exist(conn, "Folder", "Title")
    after = [row["name"] for row in run_select(conn, "PRAGMA table_info(Folder)")]
    assert before == after


def test_add_column_missing_table(conn):
    with pytest.raises(SqlError, match="Unable to add column 'Updated' into table 'Nope'"):
        add_column_if_not_exist(conn, "Nope", "Updated")