"""
Shared ownership of an opened archive.

Every clone of an ArchiveAssetIo holds a share of one SharedArchive. The
archive is closed when the last share is released.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import threading

from arcio.core.base_archive import Archive
from arcio.core.logging import debug_print


class SharedArchive:
    """Reference-counted holder around a single Archive instance."""

    def __init__(self, archive: Archive):
        self._archive = archive
        self._shares = 1
        self._lock = threading.Lock()

    @property
    def archive(self) -> Archive:
        return self._archive

    @property
    def shares(self) -> int:
        return self._shares

    @property
    def closed(self) -> bool:
        return self._shares == 0

    def acquire(self) -> "SharedArchive":
        """Take another share. Raises ValueError if the archive is already closed."""
        with self._lock:
            if self._shares == 0:
                raise ValueError("I/O operation on closed archive.")
            self._shares += 1
        return self

    def release(self) -> None:
        """Drop a share, closing the archive once no shares remain."""
        with self._lock:
            if self._shares == 0:
                return
            self._shares -= 1
            last = self._shares == 0
        if last:
            debug_print(f"[SharedArchive.release] Closing {type(self._archive).__name__}", level=2)
            self._archive.close()
