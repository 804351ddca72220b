# procyon_notes

A library for keeping notebooks of memos. A notebook is a single SQLite
file. It holds a tree of folders and memos, and memos may also sit at the
top level. A memo is plain text, Markdown or rich text. Each notebook also
stores its own key/value settings.

The library needs only the standard library.

## Installation

```
pip install .
```

## Working with a notebook

```python
from procyon_notes.catalog import Catalog, CatalogEvent
from procyon_notes.items import markdown_memo_type, MemoUpdate

catalog = Catalog.create("notes.enot")   # new, empty; replaces an existing file
catalog.connect(CatalogEvent.MEMO_UPDATED, lambda memo: print("updated", memo.title))

folder = catalog.create_folder(None, "Ideas")          # None means top level
memo = catalog.create_memo(folder, markdown_memo_type())
catalog.update_memo(memo, MemoUpdate(title="First", data="# Hello"))
print(catalog.count_memos())
catalog.close()

catalog = Catalog.open("notes.enot")     # reopen later
for item in catalog.items:
    print(item.title, item.is_folder())
```

`Catalog.open` loads folders and memo headers (title, type and timestamps)
but not memo text. Call `catalog.load_memo(memo)` to read `memo.data`.
After that call, `memo.is_loaded` is true.

Other `Catalog` methods:

- `rename_folder` renames a folder.
- `remove_folder` removes a folder together with everything under it.
- `remove_memo` removes a single memo.
- `find_memo_by_id` and `find_folder_by_id` look an item up by its id.
- `subitems_flat` and `memo_ids_flat` walk a folder's contents.
- `uid` returns the notebook's stored unique id, if it has one.
- `get_or_make_uid` returns that id, creating and storing it first if needed.

A failed operation raises `CatalogError`. The events are `MEMO_CREATED`,
`MEMO_REMOVED` and `MEMO_UPDATED`. Each callback receives the affected
`MemoItem`. `remove_folder` sends `MEMO_REMOVED` for every memo inside the
folder.

## Modules

- `procyon_notes.items`: `FolderItem`, `MemoItem`, `MemoUpdate` and the
  memo types. The type functions are `plain_text_memo_type`,
  `markdown_memo_type` and `rich_text_memo_type`, plus `memo_types` and
  `get_memo_type`. `get_memo_type` falls back to plain text when it does
  not know a name.
- `procyon_notes.store`: `open_database(file_name)` opens or creates a
  notebook file, creates its tables and returns a `CatalogStore`. The
  store has `folders`, `memos` and `settings` managers and can be used as
  a context manager. The managers raise `SqlError` from
  `procyon_notes.sqlhelper` when a statement fails.
- `procyon_notes.settings_manager`: `SettingsManager` reads and writes the
  notebook's settings as strings, booleans, integers and integer arrays.
  `TrackChanges` controls whether the order of array values counts when
  deciding if a write is needed.
- `procyon_notes.memo_manager` and `procyon_notes.folder_manager`: table
  access for memos, per-memo options and folders.
- `procyon_notes.catalog_model`: `CatalogModel` is a read-only tree model
  over a catalog. It is addressed by `ModelIndex` and serves the `Role`
  values `DISPLAY`, `USER` and `DECORATION`. `DECORATION` returns an icon
  resource path.
- `procyon_notes.app_settings`: `AppSettings` holds application-wide
  options: memo font, word wrap and native menu bar. It loads them from
  and saves them to a mapping keyed by `"Category/name"`. Objects
  registered as `AppSettingsListener` are told when the Markdown CSS is
  replaced.
- `procyon_notes.theme`: `make_style_sheet` expands `$variable: value;`
  definitions and keeps the `windows:`, `linux:` or `macos:` lines for
  one platform. The module also has `load_text_resource` and
  `save_raw_style_sheet`.
- `procyon_notes.text_format`: `TextFormat` is a chainable builder that
  produces a `CharFormat`. `hyperlink_at` returns the link target of the
  first anchor `FormatRange` covering a position.

## What it does not do

This is a storage and support library only. It has no user interface,
memo editor, Markdown-to-HTML rendering, spell checking, syntax
highlighting, PDF export or command-line program. Timestamps are stored
as ISO 8601 strings.