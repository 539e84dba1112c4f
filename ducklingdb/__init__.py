"""Page-oriented storage engine: disk manager, buffer pool, slotted pages, heap files and a demo command."""

__version__ = "0.1.0"
__all__ = ["buffer_manager", "cli", "disk_manager", "heap_file", "slotted_page"]