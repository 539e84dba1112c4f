# ducklingdb

A small page-oriented storage engine. It has four layers:

- `ducklingdb.disk_manager.DiskManager` reads and writes fixed 4096-byte pages (`PAGE_SIZE`) in one database file. It can be used as a context manager, and `close()` closes the file. `read_page(page_id)` returns a `bytearray` and raises `EOFError` if the page lies past the end of the file. `write_page(page_id, page)` needs exactly `PAGE_SIZE` bytes. `allocate_page()` writes a zero-filled page and returns its id.
- `ducklingdb.slotted_page.SlottedPage` stores variable-length tuples inside one page-sized buffer. `SlottedPage.initialize(buf)` writes an empty header. `SlottedPage(buf)` opens a page that already holds a header. The class has `insert`, `read`, `update`, `delete`, `compact` and `largest_contiguous_free`. Iterating over a page yields `(slot, data)` for every live slot. A missing or deleted slot raises `KeyError`. Lack of room raises `PageFullError`.
- `ducklingdb.buffer_manager.BufferPoolManager` caches pages in a fixed number of `Frame` objects. `fetch_page` and `new_page` return a pinned frame, and `unpin_page(page_id, is_dirty)` releases one pin. When the pool is full, unpinned frames are evicted with a `ClockReplacer`. A dirty frame is written back to disk before its frame is reused. If every frame is pinned, `BufferPoolFullError` is raised.
- `ducklingdb.heap_file.HeapFile` keeps an unordered collection of tuples on top of the buffer pool. `insert_tuple(data)` returns a `TupleId(page_id, slot_id)`, and `read_tuple(tid)` returns the stored bytes.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage

```python
from ducklingdb.disk_manager import DiskManager
from ducklingdb.buffer_manager import BufferPoolManager
from ducklingdb.heap_file import HeapFile

with DiskManager("example.db") as disk:
    pool = BufferPoolManager(8, disk)
    heap = HeapFile(pool)

    tid = heap.insert_tuple(b"alice")
    print(heap.read_tuple(tid))  # b'alice'
```

You can also work with a slotted page directly on a page-sized buffer:

```python
from ducklingdb.slotted_page import SlottedPage

page = SlottedPage.initialize(bytearray(4096))
slot = page.insert(b"hello world")
page.update(slot, b"a longer replacement tuple")
page.compact()
for slot_id, data in page:
    print(slot_id, data)
```

## Command line

```
ducklingdb [db_path]
```

This command runs a walkthrough against a database file, which is `test.db` in the current directory by default. It writes and reads raw pages, drives the buffer pool and clock replacer, works with a slotted page and stores a few tuples in a heap file. It prints what happens at each step.

## Limitations

- The buffer pool has no flush operation. Dirty pages reach disk only when their frame is evicted, so changes still held in the pool are lost when the program ends.
- `DiskManager` does not look at the size of an existing file when it opens it. Page ids from `allocate_page()` begin at 1 on every open and can overwrite pages that are already there.
- `HeapFile` keeps its list of pages in memory only, so a heap file cannot be reopened. It offers no update, delete or scan of tuples.
- There is no query language, no index, no transactions and no server.