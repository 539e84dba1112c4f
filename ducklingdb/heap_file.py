"""An unordered collection of tuples spread over slotted pages."""

from __future__ import annotations

from dataclasses import dataclass

from .buffer_manager import BufferPoolManager
from .slotted_page import PageFullError, SlottedPage


@dataclass(frozen=True)
class TupleId:
    """Location of a tuple: its page and its slot on that page."""

    page_id: int
    slot_id: int


class HeapFile:
    """Stores tuples on pages obtained through a buffer pool."""

    def __init__(self, buffer_pool_manager: BufferPoolManager):
        self._bpm = buffer_pool_manager
        self._pages: list[int] = []

    def _try_insert(self, page_id: int, data) -> int | None:
        frame = self._bpm.fetch_page(page_id)
        slot = None
        try:
            slot = SlottedPage(frame.data).insert(data)
            frame.is_dirty = True
        except PageFullError:
            pass
        finally:
            self._bpm.unpin_page(page_id, slot is not None)
        return slot

    def insert_tuple(self, data) -> TupleId:
        """Store data on the first page with room, adding a page if needed.

        Raises PageFullError if data does not fit even on an empty page.
        """
        for page_id in self._pages:
            slot = self._try_insert(page_id, data)
            if slot is not None:
                return TupleId(page_id, slot)

        page_id = self._bpm.disk_manager.allocate_page()
        frame = self._bpm.fetch_page(page_id)
        try:
            slot = SlottedPage.initialize(frame.data).insert(data)
            frame.is_dirty = True
        finally:
            self._bpm.unpin_page(page_id, frame.is_dirty)
        self._pages.append(page_id)
        return TupleId(page_id, slot)

    def read_tuple(self, tid) -> bytes:
        """Return the tuple at tid; raise KeyError if the slot holds none."""
        frame = self._bpm.fetch_page(tid.page_id)
        try:
            return SlottedPage(frame.data).read(tid.slot_id)
        finally:
            self._bpm.unpin_page(tid.page_id, False)