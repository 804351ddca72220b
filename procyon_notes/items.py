"""Catalog items: folders, memos and memo types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class MemoType:
    """A kind of memo content."""

    name: str
    title: str
    icon_path: str


_PLAIN_TEXT = MemoType("plain_text", "Plain Text", ":/icon/memo_plain_text")
_MARKDOWN = MemoType("markdown", "Markdown", ":/icon/memo_markdown")
_RICH_TEXT = MemoType("rich_text", "Rich Text", ":/icon/memo_rich_text")


def plain_text_memo_type() -> MemoType:
    return _PLAIN_TEXT


def markdown_memo_type() -> MemoType:
    return _MARKDOWN


def rich_text_memo_type() -> MemoType:
    return _RICH_TEXT


def memo_types() -> Dict[str, MemoType]:
    """All known memo types keyed by name, in name order."""
    types = (_PLAIN_TEXT, _MARKDOWN, _RICH_TEXT)
    return {t.name: t for t in sorted(types, key=lambda t: t.name)}


def get_memo_type(name: str) -> MemoType:
    """Memo type by name; unknown names fall back to plain text."""
    return memo_types().get(name, _PLAIN_TEXT)


@dataclass(eq=False)
class CatalogItem:
    """A node of the catalog tree."""

    id: int = 0
    title: str = ""
    parent: Optional["FolderItem"] = field(default=None, repr=False)

    def path(self) -> str:
        """Slash-separated titles of the item's ancestors, root first."""
        names: List[str] = []
        node = self.parent
        while node is not None:
            names.append(node.title)
            node = node.parent
        return "/".join(reversed(names))

    def is_folder(self) -> bool:
        return isinstance(self, FolderItem)

    def is_memo(self) -> bool:
        return isinstance(self, MemoItem)


@dataclass(eq=False)
class FolderItem(CatalogItem):
    """A folder holding memos and subfolders."""

    children: List[CatalogItem] = field(default_factory=list, repr=False)


@dataclass(eq=False)
class MemoItem(CatalogItem):
    """A memo; its data is only present once loaded."""

    memo_type: Optional[MemoType] = None
    data: str = ""
    station: str = ""
    is_loaded: bool = False
    created: Optional[datetime] = None
    updated: Optional[datetime] = None


@dataclass
class MemoUpdate:
    """New content for a memo."""

    title: str
    data: str
    moment: Optional[datetime] = None
    station: str = ""