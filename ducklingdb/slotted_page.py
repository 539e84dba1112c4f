"""Variable-length tuple storage inside one page.

Layout: a six-byte header (free_start, free_end, num_slots, all little-endian
u16) at the front, tuple bytes growing upwards after it, and a slot directory
of (offset, length) entries growing downwards from the end of the page.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator

from .disk_manager import PAGE_SIZE

INVALID_SLOT = 0xFFFF
HEADER_SIZE = 6
SLOT_ENTRY_SIZE = 4

_HDR_FREE_START = 0
_HDR_FREE_END = 2
_HDR_NUM_SLOTS = 4
_U16 = struct.Struct("<H")
_SLOT = struct.Struct("<HH")


class PageFullError(Exception):
    """Raised when a page has no room for the requested data."""


class SlottedPage:
    """A view over a page buffer that stores tuples in numbered slots."""

    def __init__(self, buf):
        if len(buf) != PAGE_SIZE:
            raise ValueError(f"page buffer must be {PAGE_SIZE} bytes, got {len(buf)}")
        self._buf = buf

    @classmethod
    def initialize(cls, buf) -> SlottedPage:
        """Write an empty header into buf and return a page over it."""
        page = cls(buf)
        page._free_start = HEADER_SIZE
        page._free_end = PAGE_SIZE
        page._num_slots = 0
        return page

    def _get(self, pos: int) -> int:
        return _U16.unpack_from(self._buf, pos)[0]

    def _set(self, pos: int, value: int) -> None:
        _U16.pack_into(self._buf, pos, value)

    @property
    def _free_start(self) -> int:
        return self._get(_HDR_FREE_START)

    @_free_start.setter
    def _free_start(self, value: int) -> None:
        self._set(_HDR_FREE_START, value)

    @property
    def _free_end(self) -> int:
        return self._get(_HDR_FREE_END)

    @_free_end.setter
    def _free_end(self, value: int) -> None:
        self._set(_HDR_FREE_END, value)

    @property
    def _num_slots(self) -> int:
        return self._get(_HDR_NUM_SLOTS)

    @_num_slots.setter
    def _num_slots(self, value: int) -> None:
        self._set(_HDR_NUM_SLOTS, value)

    @staticmethod
    def _slot_position(slot: int) -> int:
        return PAGE_SIZE - (slot + 1) * SLOT_ENTRY_SIZE

    def _read_slot(self, slot: int) -> tuple[int, int]:
        return _SLOT.unpack_from(self._buf, self._slot_position(slot))

    def _write_slot(self, slot: int, offset: int, length: int) -> None:
        _SLOT.pack_into(self._buf, self._slot_position(slot), offset, length)

    def _live_slot(self, slot: int) -> tuple[int, int]:
        if not 0 <= slot < self._num_slots:
            raise KeyError(slot)
        offset, length = self._read_slot(slot)
        if length == INVALID_SLOT:
            raise KeyError(slot)
        return offset, length

    def insert(self, data) -> int:
        """Store data in a new slot and return the slot id."""
        num_slots = self._num_slots
        free_start = self._free_start
        free_end = self._free_end
        size = len(data)
        if free_start + size + SLOT_ENTRY_SIZE > free_end:
            raise PageFullError(f"no room for {size} bytes")
        self._buf[free_start:free_start + size] = data
        self._free_start = free_start + size
        self._num_slots = num_slots + 1
        self._free_end = free_end - SLOT_ENTRY_SIZE
        self._write_slot(num_slots, free_start, size)
        return num_slots

    def read(self, slot) -> bytes:
        """Return the tuple in slot; raise KeyError if it is absent or deleted."""
        offset, length = self._live_slot(slot)
        return bytes(self._buf[offset:offset + length])

    def __iter__(self) -> Iterator[tuple[int, bytes]]:
        """Yield (slot id, tuple) for every live slot, in slot order."""
        for slot in range(self._num_slots):
            offset, length = self._read_slot(slot)
            if length != INVALID_SLOT:
                yield slot, bytes(self._buf[offset:offset + length])

    def compact(self) -> None:
        """Move live tuples together so all free space is contiguous."""
        num_slots = self._num_slots
        live = [
            (slot, offset, length)
            for slot in range(num_slots)
            for offset, length in [self._read_slot(slot)]
            if length != INVALID_SLOT
        ]
        live.sort(key=lambda entry: entry[1])
        new_start = HEADER_SIZE
        for slot, old_offset, length in live:
            chunk = bytes(self._buf[old_offset:old_offset + length])
            self._buf[new_start:new_start + length] = chunk
            self._write_slot(slot, new_start, length)
            new_start += length
        self._free_start = new_start
        self._free_end = PAGE_SIZE - num_slots * SLOT_ENTRY_SIZE

    def largest_contiguous_free(self) -> int:
        """Size of the free gap between tuple data and the slot directory."""
        return max(self._free_end - self._free_start, 0)

    def update(self, slot, new_data) -> None:
        """Replace the tuple in slot, keeping its slot id.

        Raises KeyError for an absent or deleted slot and PageFullError when
        the new data does not fit even after compaction.
        """
        offset, length = self._live_slot(slot)
        size = len(new_data)
        if size <= length:
            self._buf[offset:offset + size] = new_data
            self._write_slot(slot, offset, size)
            return
        if self.largest_contiguous_free() < size:
            self.compact()
            if self.largest_contiguous_free() < size:
                raise PageFullError(f"no room for {size} bytes")
        new_offset = self._free_start
        self._buf[new_offset:new_offset + size] = new_data
        self._free_start = new_offset + size
        self._write_slot(slot, new_offset, size)

    def delete(self, slot) -> None:
        """Mark slot as deleted; raise KeyError if it is absent or deleted."""
        offset, _ = self._live_slot(slot)
        self._write_slot(slot, offset, INVALID_SLOT)