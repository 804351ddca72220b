import sqlite3

import pytest

from procyon_notes.folder_manager import FolderManager
from procyon_notes.items import FolderItem
from procyon_notes.sqlhelper import SqlError


@pytest.fixture
def manager():
    connection = sqlite3.connect(":memory:", isolation_level=None)
    mgr = FolderManager(connection)
    mgr.prepare()
    yield mgr
    connection.close()


def _make(manager, title, parent=None):
    folder = FolderItem(title=title, parent=parent)
    manager.create(folder)
    if parent is not None:
        parent.children.append(folder)
    return folder


def test_create_assigns_increasing_ids(manager):
    first = _make(manager, "first")
    second = _make(manager, "second")
    assert first.id > 0
    assert second.id == first.id + 1


def test_select_all_restores_hierarchy(manager):
    top = _make(manager, "top")
    child = _make(manager, "child", top)
    other = _make(manager, "other")

    loaded = manager.select_all()
    assert set(loaded) == {top.id, child.id, other.id}
    assert loaded[child.id].parent is loaded[top.id]
    assert loaded[top.id].children == [loaded[child.id]]
    assert loaded[other.id].parent is None
    assert loaded[child.id].title == "child"


def test_rename(manager):
    folder = _make(manager, "old")
    manager.rename(folder.id, "new")
    assert manager.select_all()[folder.id].title == "new"


def test_remove_deletes_branch(manager):
    top = _make(manager, "top")
    child = _make(manager, "child", top)
    _make(manager, "grandchild", child)
    keep = _make(manager, "keep")

    manager.remove(top)

    assert list(manager.select_all()) == [keep.id]
    assert not manager.connection.in_transaction


def test_remove_inside_open_transaction_fails(manager):
    folder = _make(manager, "x")
    manager.connection.execute("BEGIN")
    with pytest.raises(SqlError, match="Unable to start transaction for removing folder"):
        manager.remove(folder)


def test_create_without_table_fails():
    connection = sqlite3.connect(":memory:", isolation_level=None)
    with pytest.raises(SqlError, match="Unable to generate id for new folder"):
        FolderManager(connection).create(FolderItem(title="x"))


def test_select_all_without_table_fails():
    connection = sqlite3.connect(":memory:", isolation_level=None)
    with pytest.raises(SqlError, match="Unable to load folder list"):
        FolderManager(connection).select_all()


def test_prepare_is_idempotent(manager):
    folder = _make(manager, "kept")
    manager.prepare()
    assert manager.select_all()[folder.id].title == "kept"