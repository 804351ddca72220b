from procyon_notes.items import (
    CatalogItem,
    FolderItem,
    MemoItem,
    MemoUpdate,
    get_memo_type,
    markdown_memo_type,
    memo_types,
    plain_text_memo_type,
    rich_text_memo_type,
)


def test_memo_type_names_and_titles():
    assert plain_text_memo_type().name == "plain_text"
    assert markdown_memo_type().name == "markdown"
    assert rich_text_memo_type().name == "rich_text"
    assert plain_text_memo_type().title == "Plain Text"
    assert markdown_memo_type().icon_path == ":/icon/memo_markdown"


def test_memo_types_are_singletons():
    assert plain_text_memo_type() is plain_text_memo_type()
    assert memo_types()["markdown"] is markdown_memo_type()


def test_memo_types_keys_sorted():
    assert list(memo_types()) == sorted(["plain_text", "markdown", "rich_text"])


def test_get_memo_type_known_and_unknown():
    assert get_memo_type("rich_text") is rich_text_memo_type()
    assert get_memo_type("whatever") is plain_text_memo_type()
    assert get_memo_type("") is plain_text_memo_type()


def test_path_of_nested_items():
    root = FolderItem(id=1, title="Work")
    sub = FolderItem(id=2, title="Projects", parent=root)
    root.children.append(sub)
    memo = MemoItem(id=3, title="Plan", parent=sub)
    sub.children.append(memo)
    assert memo.path() == "Work/Projects"
    assert sub.path() == "Work"
    assert root.path() == ""


def test_kind_checks():
    folder = FolderItem(title="F")
    memo = MemoItem(title="M")
    assert folder.is_folder() and not folder.is_memo()
    assert memo.is_memo() and not memo.is_folder()
    assert not CatalogItem().is_folder()


def test_items_compare_by_identity():
    a = MemoItem(id=1, title="Same")
    b = MemoItem(id=1, title="Same")
    assert a != b
    assert [a, b].index(b) == 1


def test_memo_defaults():
    memo = MemoItem()
    assert memo.is_loaded is False
    assert memo.data == ""
    assert memo.memo_type is None


def test_repr_does_not_recurse():
    root = FolderItem(id=1, title="Root")
    child = MemoItem(id=2, title="Child", parent=root)
    root.children.append(child)
    assert "Child" in repr(child)
    assert "Root" in repr(root)


def test_memo_update_defaults():
    update = MemoUpdate(title="T", data="D")
    assert update.moment is None
    assert update.station == ""