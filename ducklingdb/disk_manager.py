"""Page-granular access to a single database file."""

from __future__ import annotations

import os

PAGE_SIZE = 4096


class DiskManager:
    """Reads and writes fixed-size pages of a database file."""

    def __init__(self, file_path):
        flags = os.O_RDWR | os.O_CREAT | getattr(os, "O_BINARY", 0)
        fd = os.open(file_path, flags, 0o644)
        self._file = os.fdopen(fd, "r+b")
        self._num_pages = 0

    @property
    def num_pages(self) -> int:
        """Number of pages known to have been written or allocated."""
        return self._num_pages

    @staticmethod
    def _offset(page_id: int) -> int:
        if page_id < 0:
            raise ValueError(f"page id must be non-negative, got {page_id}")
        return page_id * PAGE_SIZE

    def read_page(self, page_id) -> bytearray:
        """Return the contents of a page; raise EOFError if it lies past the end."""
        self._file.seek(self._offset(page_id))
        data = self._file.read(PAGE_SIZE)
        if len(data) != PAGE_SIZE:
            raise EOFError(f"page {page_id} lies beyond the end of the file")
        return bytearray(data)

    def write_page(self, page_id, page) -> None:
        """Write a full page at the given page id and flush it."""
        if len(page) != PAGE_SIZE:
            raise ValueError(f"page must be {PAGE_SIZE} bytes, got {len(page)}")
        self._file.seek(self._offset(page_id))
        self._file.write(bytes(page))
        self._file.flush()
        self._num_pages = max(self._num_pages, page_id + 1)

    def allocate_page(self) -> int:
        """Reserve a new zero-filled page on disk and return its id."""
        new_page_id = self._num_pages + 1
        self._num_pages += 1
        self.write_page(new_page_id, bytes(PAGE_SIZE))
        return new_page_id

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def __enter__(self) -> DiskManager:
        return self

    def __exit__(self, *args) -> None:
        self.close()