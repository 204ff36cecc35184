"""
Base archive capability for ARCIO.
Defines the read-only interface that every archive backend must implement.

An archive is an immutable, already-opened container of named byte entries
addressed by flat string keys. It has no notion of directories; ARCIO
synthesizes those on top of the key space.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional, Set, Tuple


class EntryMetadata(NamedTuple):
    """Information about an entry in an archive."""
    key: str
    size: int
    modified: float
    is_file: bool = True


class Archive(ABC):
    """
    Base class for read-only archive backends.

    Backends must be safe for concurrent reads once opened. Concrete
    subclasses that define get_supported_extensions() are registered with
    ArchiveManager automatically, so ArchiveManager.open_archive() can pick
    them by file extension.
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # Only backends that declare their own extensions are openable by location
        if "get_supported_extensions" not in cls.__dict__:
            return
        from arcio.core.archive_manager import ArchiveManager
        for ext in cls.get_supported_extensions():
            ArchiveManager.register_archive(ext, cls)

    # --- Context management ---
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # --- Logging ---
    def _log(self, msg, level=1, exc=None):
        from arcio.core.logging import debug_print
        debug_print(f"{type(self).__name__}: {msg}", level=level, exc=exc)

    def __contains__(self, key):
        return self.fetch_entry(key) is not None

    def __len__(self):
        return len(self.entries())

    def keys(self) -> List[str]:
        """Entry keys in archive order."""
        return [key for key, _ in self.entries()]

    def close(self) -> None:
        """Release any resources held by the archive."""

    @classmethod
    def open(cls, location, config=None) -> "Archive":
        """
        Open the archive stored at location.

        Args:
            location: Filesystem path of the archive
            config: Optional ArchiveConfig; backends read the options they understand

        Raises:
            ArchiveOpenError: If the location cannot be read or fails validation
        """
        raise NotImplementedError(f"{cls.__name__} cannot be opened from a location.")

    @abstractmethod
    def fetch(self, key: str) -> bytes:
        """
        Read the full decoded payload of an entry.

        Args:
            key: Entry key

        Returns:
            The stored bytes

        Raises:
            MissingEntryError: If no entry has this key
            ArchiveIOError: If the byte source fails
            ArchiveError: For any other failure (corruption, decryption, ...)
        """
        pass

    @abstractmethod
    def fetch_entry(self, key: str) -> Optional[EntryMetadata]:
        """
        Look up an entry's metadata without reading its payload.

        Returns:
            EntryMetadata, or None if the entry doesn't exist
        """
        pass

    @abstractmethod
    def entries(self) -> List[Tuple[str, EntryMetadata]]:
        """
        List every file entry in archive order.

        Returns:
            List of (key, EntryMetadata) pairs
        """
        pass

    @classmethod
    def get_supported_extensions(cls) -> Set[str]:
        """
        Get the file extensions this backend opens.

        Returns:
            Set of supported extensions (with leading dot)
        """
        return set()
