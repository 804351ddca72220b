"""The catalog: a tree of folders and memos backed by a catalog database."""

from __future__ import annotations

import enum
import logging
import os
import uuid
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, Iterator, List, Optional

from .items import CatalogItem, FolderItem, MemoItem, MemoType, MemoUpdate
from .sqlhelper import SqlError
from .store import CatalogStore, open_database

log = logging.getLogger(__name__)

_KEY_UID = "UID"


class CatalogError(Exception):
    """Raised when a catalog operation fails."""


class CatalogEvent(enum.Enum):
    """Notifications a catalog sends about its memos."""

    MEMO_CREATED = "memo_created"
    MEMO_REMOVED = "memo_removed"
    MEMO_UPDATED = "memo_updated"


@contextmanager
def _as_catalog_error() -> Iterator[None]:
    try:
        yield
    except SqlError as exc:
        raise CatalogError(str(exc)) from exc


class Catalog:
    """An opened notebook file holding folders and memos."""

    def __init__(self, store: CatalogStore, file_name: str) -> None:
        self._store = store
        self.file_name = str(file_name)
        self.station = ""
        self.items: List[CatalogItem] = []
        self._all_memos: Dict[int, MemoItem] = {}
        self._all_folders: Dict[int, FolderItem] = {}
        self._listeners: Dict[CatalogEvent, List[Callable[[MemoItem], None]]] = {
            event: [] for event in CatalogEvent
        }

    @staticmethod
    def file_filter() -> str:
        return "Procyon Notebooks (*.enot);;All files (*.*)"

    @staticmethod
    def default_file_ext() -> str:
        return "enot"

    @classmethod
    def open(cls, file_name: str) -> "Catalog":
        """Open a notebook file and load its folder and memo tree."""
        with _as_catalog_error():
            store = open_database(file_name)
        try:
            with _as_catalog_error():
                folders = store.folders.select_all()
                memos = store.memos.select_all()
        except CatalogError:
            store.close()
            raise

        catalog = cls(store, file_name)
        for folder_id in sorted(folders):
            folder = folders[folder_id]
            catalog._all_folders[folder.id] = folder
            if folder.parent is None:
                catalog.items.append(folder)

        for warning in memos.warnings:
            log.warning("%s", warning)

        catalog._all_memos = dict(memos.all_memos)
        for folder_id in sorted(memos.items):
            group = memos.items[folder_id]
            if folder_id > 0:
                parent = folders.get(folder_id)
                if parent is None:
                    log.warning(
                        "Some memos are stored in folder #%s but that "
                        "is not found in the directory.",
                        folder_id,
                    )
                    for memo in group:
                        catalog._all_memos.pop(memo.id, None)
                    continue
                for memo in group:
                    memo.parent = parent
                    parent.children.append(memo)
            else:
                catalog.items.extend(group)
        return catalog

    @classmethod
    def create(cls, file_name: str) -> "Catalog":
        """Create a new empty notebook, replacing an existing file."""
        if os.path.exists(file_name):
            try:
                os.remove(file_name)
            except OSError as exc:
                raise CatalogError(
                    "Unable to overwrite existing file, probably it is locked."
                ) from exc
        with _as_catalog_error():
            store = open_database(file_name)
        return cls(store, file_name)

    def close(self) -> None:
        self._store.close()

    def connect(self, event: CatalogEvent, callback: Callable[[MemoItem], None]) -> None:
        """Call ``callback(memo)`` whenever ``event`` happens."""
        self._listeners[event].append(callback)

    def _emit(self, event: CatalogEvent, item: MemoItem) -> None:
        for callback in list(self._listeners[event]):
            callback(item)

    @staticmethod
    def _find(container: Dict[int, CatalogItem], item_id: int) -> Optional[CatalogItem]:
        if item_id <= 0:
            log.critical("Invalid folder or memo id %s", item_id)
            return None
        item = container.get(item_id)
        if item is None:
            log.critical(
                "Inconsistent state! Catalog does not contain folder or memo %s", item_id
            )
        return item

    def find_memo_by_id(self, memo_id: int) -> Optional[MemoItem]:
        return self._find(self._all_memos, memo_id)

    def find_folder_by_id(self, folder_id: int) -> Optional[FolderItem]:
        return self._find(self._all_folders, folder_id)

    def uid(self) -> str:
        return self._store.settings.read_string(_KEY_UID)

    def get_or_make_uid(self) -> str:
        """The catalog's unique id, generated and stored on first request."""
        value = self._store.settings.read_string(_KEY_UID)
        if not value:
            value = "{" + str(uuid.uuid4()) + "}"
            with _as_catalog_error():
                self._store.settings.write_string(_KEY_UID, value)
        return value

    def count_memos(self) -> int:
        with _as_catalog_error():
            return self._store.memos.count_all()

    def _siblings(self, item: CatalogItem) -> List[CatalogItem]:
        return item.parent.children if item.parent is not None else self.items

    @staticmethod
    def _discard(items: List[CatalogItem], item: CatalogItem) -> None:
        for pos, candidate in enumerate(items):
            if candidate is item:
                del items[pos]
                return

    def rename_folder(self, folder: FolderItem, title: str) -> None:
        with _as_catalog_error():
            self._store.folders.rename(folder.id, title)
        folder.title = title

    def create_folder(self, parent: Optional[FolderItem], title: str) -> FolderItem:
        """Create a folder under ``parent``, or at top level when it is None."""
        folder = FolderItem(title=title, parent=parent)
        with _as_catalog_error():
            self._store.folders.create(folder)
        self._siblings(folder).append(folder)
        self._all_folders[folder.id] = folder
        return folder

    def remove_folder(self, folder: FolderItem) -> None:
        """Remove a folder with all its subfolders and memos."""
        subitems = self.subitems_flat(folder)
        with _as_catalog_error():
            self._store.folders.remove(folder)

        self._discard(self._siblings(folder), folder)

        for subitem in subitems:
            if isinstance(subitem, FolderItem):
                self._all_folders.pop(subitem.id, None)
            elif isinstance(subitem, MemoItem):
                self._emit(CatalogEvent.MEMO_REMOVED, subitem)
                self._all_memos.pop(subitem.id, None)

        self._all_folders.pop(folder.id, None)

    def create_memo(self, parent: Optional[FolderItem], memo_type: MemoType) -> MemoItem:
        """Create an empty memo of the given type under ``parent``."""
        now = datetime.now()
        item = MemoItem(
            parent=parent,
            created=now,
            updated=now,
            station=self.station,
            memo_type=memo_type,
        )
        with _as_catalog_error():
            self._store.memos.create(item)
        self._siblings(item).append(item)
        self._all_memos[item.id] = item
        self._emit(CatalogEvent.MEMO_CREATED, item)
        return item

    def update_memo(self, item: MemoItem, update: MemoUpdate) -> None:
        """Store new title and data for a memo, stamping time and station."""
        update = replace(update, moment=datetime.now(), station=self.station)
        with _as_catalog_error():
            self._store.memos.update(item, update)
        item.title = update.title
        item.data = update.data
        item.updated = update.moment
        item.station = update.station
        self._emit(CatalogEvent.MEMO_UPDATED, item)

    def remove_memo(self, item: MemoItem) -> None:
        with _as_catalog_error():
            self._store.memos.remove(item)
        self._discard(self._siblings(item), item)
        self._all_memos.pop(item.id, None)
        self._emit(CatalogEvent.MEMO_REMOVED, item)

    def load_memo(self, item: MemoItem) -> None:
        with _as_catalog_error():
            self._store.memos.load(item)

    def subitems_flat(self, root: FolderItem) -> List[CatalogItem]:
        """All descendants of ``root``, each followed by its own descendants."""
        result: List[CatalogItem] = []
        for item in root.children:
            result.append(item)
            if isinstance(item, FolderItem):
                result.extend(self.subitems_flat(item))
        return result

    def memo_ids_flat(self, root: FolderItem) -> List[int]:
        """Ids of all memos found anywhere under ``root``."""
        ids: List[int] = []
        for item in root.children:
            if isinstance(item, FolderItem):
                ids.extend(self.memo_ids_flat(item))
            else:
                ids.append(item.id)
        return ids