"""Command-line demonstration of the storage layers."""

from __future__ import annotations

import argparse
import sys
from contextlib import ExitStack

from .buffer_manager import BufferPoolManager, ClockReplacer
from .disk_manager import PAGE_SIZE, DiskManager
from .heap_file import HeapFile
from .slotted_page import PageFullError, SlottedPage


def _head(data) -> list[int]:
    return list(data[:16])


def _check_clock_replacer() -> None:
    replacer = ClockReplacer(3)
    for frame_id in range(3):
        replacer.unpin(frame_id)
    for frame_id in range(3):
        got = replacer.victim()
        if got != frame_id:
            raise RuntimeError(f"clock replacer chose {got}, expected {frame_id}")
        replacer.pin(frame_id)
    if replacer.victim() is not None:
        raise RuntimeError("clock replacer found a victim in an empty pool")
    print("ClockReplacer tests passed.")


def _disk_demo(dm: DiskManager) -> None:
    dm.write_page(0, bytes([2]) * PAGE_SIZE)
    dm.write_page(1, bytes([1]) * PAGE_SIZE)
    page = dm.read_page(0)
    print(f"Read page: {_head(page)}")


def _buffer_pool_demo(dm: DiskManager) -> None:
    bpm = BufferPoolManager(2, dm)
    print(f"Fetched page 0: {_head(bpm.fetch_page(0).data)}")
    print(f"Fetched page 1: {_head(bpm.fetch_page(1).data)}")


def _slotted_page_demo() -> None:
    page = SlottedPage.initialize(bytearray(PAGE_SIZE))
    id1 = page.insert(b"hello world")
    id2 = page.insert(b"database systems are fun")
    print(f"Inserted tuples SlotId({id1}) and SlotId({id2})")
    print(f'Read 1: "{page.read(id1).decode()}"')
    print(f'Read 2: "{page.read(id2).decode()}"')

    page.insert(b"another tuple")
    page.delete(id2)

    short = page.insert(b"short")
    try:
        page.update(short, b"this is much longer than short")
        updated = True
    except PageFullError:
        updated = False
    page.compact()
    if updated:
        print(f"Updated slot SlotId({short}) successfully.")
    else:
        print(f"Failed to update slot SlotId({short}).")
    for slot, data in page:
        print(f'Slot ID:SlotId({slot})- tuple: "{data.decode()}"')


def _heap_file_demo(dm: DiskManager) -> None:
    hf = HeapFile(BufferPoolManager(8, dm))
    print("Inserting tuples into HeapFile...")
    r1 = hf.insert_tuple(b"alice")
    r2 = hf.insert_tuple(b"bob")
    r3 = hf.insert_tuple(b"carol")
    print(f"Inserted RIDs: {r1} {r2} {r3}")
    print(f"get(r1) = {hf.read_tuple(r1).decode()}")


def main(argv=None) -> int:
    """Exercise the disk manager, buffer pool, slotted page and heap file."""
    parser = argparse.ArgumentParser(
        prog="ducklingdb", description="Run a walkthrough of the storage engine."
    )
    parser.add_argument(
        "db_path", nargs="?", default="test.db", help="database file to use"
    )
    args = parser.parse_args(argv)

    with ExitStack() as stack:
        dm = stack.enter_context(DiskManager(args.db_path))
        _disk_demo(dm)
        _check_clock_replacer()
        _buffer_pool_demo(dm)
        _slotted_page_demo()
        heap_dm = stack.enter_context(DiskManager(args.db_path))
        _heap_file_demo(heap_dm)
    return 0


if __name__ == "__main__":
    sys.exit(main())