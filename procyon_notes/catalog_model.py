"""A tree model presenting catalog items by row and parent index."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from .items import CatalogItem, FolderItem, MemoItem

if TYPE_CHECKING:
    from .catalog import Catalog


class Role(enum.Enum):
    """What kind of data is requested for an index."""

    DISPLAY = "display"
    USER = "user"
    DECORATION = "decoration"


@dataclass(frozen=True)
class ModelIndex:
    """Position of an item in the model; the default index is the invisible root."""

    row: int = -1
    column: int = -1
    item: Optional[CatalogItem] = None

    @property
    def is_valid(self) -> bool:
        return self.item is not None and self.row >= 0 and self.column >= 0


_ROOT = ModelIndex()


class CatalogModel:
    """Maps a catalog's tree to rows and parent indexes."""

    folder_icon = ":/icon/folder"
    memo_icon = ":/icon/memo_plain_text"

    def __init__(self, catalog: "Catalog") -> None:
        self.catalog = catalog

    def index(self, row: int, column: int, parent: Optional[ModelIndex] = None) -> ModelIndex:
        parent = parent or _ROOT
        if not parent.is_valid:
            children = self.catalog.items
        else:
            if not isinstance(parent.item, FolderItem):
                return ModelIndex()
            children = parent.item.children
        if 0 <= row < len(children):
            return ModelIndex(row, column, children[row])
        return ModelIndex()

    def parent(self, child: ModelIndex) -> ModelIndex:
        if not child.is_valid:
            return ModelIndex()
        parent_item = child.item.parent
        if parent_item is None:
            return ModelIndex()
        grand = parent_item.parent
        siblings = grand.children if grand is not None else self.catalog.items
        row = next((pos for pos, it in enumerate(siblings) if it is parent_item), -1)
        return ModelIndex(row, 0, parent_item)

    def row_count(self, parent: Optional[ModelIndex] = None) -> int:
        parent = parent or _ROOT
        if not parent.is_valid:
            return len(self.catalog.items)
        if isinstance(parent.item, FolderItem):
            return len(parent.item.children)
        return 0

    def column_count(self, parent: Optional[ModelIndex] = None) -> int:
        return 1

    def data(self, index: ModelIndex, role: Role) -> Any:
        if not index.is_valid:
            return None
        item = index.item
        if role is Role.DISPLAY:
            return item.title
        if role is Role.USER:
            return item.id
        if role is Role.DECORATION:
            if isinstance(item, FolderItem):
                return self.folder_icon
            if isinstance(item, MemoItem) and item.memo_type is not None:
                return item.memo_type.icon_path
            return self.memo_icon
        return None

    def find_index(self, item: CatalogItem, parent: Optional[ModelIndex] = None) -> ModelIndex:
        """Depth-first search for the index holding ``item``."""
        parent = parent or _ROOT
        for row in range(self.row_count(parent)):
            current = self.index(row, 0, parent)
            if current.item is item:
                return current
            found = self.find_index(item, current)
            if found.is_valid:
                return found
        return ModelIndex()

    def item_added(self, parent: Optional[ModelIndex] = None) -> ModelIndex:
        """Index of the item just appended as the last child of ``parent``."""
        parent = parent or _ROOT
        return self.index(self.row_count(parent) - 1, 0, parent)