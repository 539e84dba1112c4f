"""An in-memory pool of page frames backed by a disk manager."""

from __future__ import annotations

from dataclasses import dataclass, field

from .disk_manager import PAGE_SIZE, DiskManager


@dataclass(eq=False)
class Frame:
    """One slot of the buffer pool: a page's bytes plus bookkeeping."""

    page_id: int = 0
    data: bytearray = field(default_factory=lambda: bytearray(PAGE_SIZE))
    is_dirty: bool = False
    pin_count: int = 0


class BufferPoolFullError(Exception):
    """Raised when every frame is pinned and none can be evicted."""


class ClockReplacer:
    """Chooses which unpinned frame to evict, sweeping a clock hand."""

    def __init__(self, pool_size):
        self._evictable = [False] * pool_size
        self._hand = 0

    def _check(self, frame_id: int) -> None:
        if not 0 <= frame_id < len(self._evictable):
            raise IndexError(f"frame id {frame_id} out of range")

    def victim(self) -> int | None:
        """Return an evictable frame id, or None if there is none."""
        size = len(self._evictable)
        for _ in range(2 * size):
            frame_id = self._hand
            self._hand = (self._hand + 1) % size
            if self._evictable[frame_id]:
                return frame_id
        return None

    def pin(self, frame_id) -> None:
        """Stop tracking frame_id as an eviction candidate."""
        self._check(frame_id)
        self._evictable[frame_id] = False

    def unpin(self, frame_id) -> None:
        """Track frame_id as an eviction candidate."""
        self._check(frame_id)
        self._evictable[frame_id] = True


class BufferPoolManager:
    """Caches pages in a fixed number of frames, writing dirty ones back on eviction."""

    def __init__(self, pool_size, disk_manager: DiskManager):
        self._frames = [Frame() for _ in range(pool_size)]
        self._page_table: dict[int, int] = {}
        self._replacer = ClockReplacer(pool_size)
        self.disk_manager = disk_manager
        self._free_list = list(range(pool_size))

    def _acquire_frame(self) -> int:
        if self._free_list:
            return self._free_list.pop()
        frame_id = self._replacer.victim()
        if frame_id is None:
            raise BufferPoolFullError("all frames are pinned")
        frame = self._frames[frame_id]
        if frame.is_dirty:
            self.disk_manager.write_page(frame.page_id, frame.data)
            frame.is_dirty = False
        self._page_table.pop(frame.page_id, None)
        return frame_id

    def _release_frame(self, frame_id: int) -> None:
        self._frames[frame_id] = Frame()
        self._replacer.pin(frame_id)
        self._free_list.append(frame_id)

    def _install(self, frame_id: int, page_id: int, data: bytearray) -> Frame:
        frame = self._frames[frame_id]
        frame.page_id = page_id
        frame.is_dirty = False
        frame.pin_count = 1
        frame.data[:] = data
        self._page_table[page_id] = frame_id
        self._replacer.pin(frame_id)
        return frame

    def new_page(self) -> Frame:
        """Allocate a fresh page on disk and return its pinned, zeroed frame."""
        frame_id = self._acquire_frame()
        try:
            page_id = self.disk_manager.allocate_page()
        except BaseException:
            self._release_frame(frame_id)
            raise
        return self._install(frame_id, page_id, bytearray(PAGE_SIZE))

    def fetch_page(self, page_id) -> Frame:
        """Return the pinned frame holding page_id, reading it from disk if needed."""
        frame_id = self._page_table.get(page_id)
        if frame_id is not None:
            frame = self._frames[frame_id]
            frame.pin_count += 1
            self._replacer.pin(frame_id)
            return frame
        frame_id = self._acquire_frame()
        try:
            data = self.disk_manager.read_page(page_id)
        except BaseException:
            self._release_frame(frame_id)
            raise
        return self._install(frame_id, page_id, data)

    def unpin_page(self, page_id, is_dirty) -> None:
        """Drop one pin on page_id, marking it dirty if requested.

        Raises KeyError if the page is not resident and ValueError if it is
        not pinned.
        """
        frame_id = self._page_table.get(page_id)
        if frame_id is None:
            raise KeyError(page_id)
        frame = self._frames[frame_id]
        if frame.pin_count == 0:
            raise ValueError(f"page {page_id} is not pinned")
        frame.pin_count -= 1
        if is_dirty:
            frame.is_dirty = True
        if frame.pin_count == 0:
            self._replacer.unpin(frame_id)