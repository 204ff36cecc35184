"""
ArchiveManager for ARCIO.
Registry of archive backends by file extension, and the entry point for
opening an archive from a location.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
from typing import Dict, List, Optional

from arcio.core.errors import ArchiveError, ArchiveOpenError
from arcio.core.logging import debug_print


class ArchiveManager:
    """
    Central registry of archive backends.
    Provides registration, lookup (by extension and by path), deregistration, and opening.

    Usage example:
        ArchiveManager.register_archive('.zip', ZipArchive)
        archive_cls = ArchiveManager.get_archive('.zip')
        archive_cls2 = ArchiveManager.get_archive_for_path('assets.tar.gz')
        archive = ArchiveManager.open_archive('assets.zip', ArchiveConfig(verify=True))
        ArchiveManager.deregister_archive('.zip')
    """
    _registry: Dict[str, type] = {}

    @classmethod
    def register_archive(cls, ext: str, archive_cls: type):
        """
        Register a backend for a given extension.
        Args:
            ext: Archive extension (e.g., '.zip')
            archive_cls: Archive subclass able to open that extension
        """
        cls._registry[ext.lower()] = archive_cls

    @classmethod
    def deregister_archive(cls, ext: str):
        """
        Remove a backend from the registry.
        """
        cls._registry.pop(ext.lower(), None)

    @classmethod
    def get_archive(cls, ext: str) -> Optional[type]:
        """
        Get the backend class for a given extension.
        """
        return cls._registry.get(ext.lower())

    @classmethod
    def get_archive_for_path(cls, path) -> Optional[type]:
        """
        Resolve the backend for a given path, handling multi-extension (e.g., .tar.gz).
        Returns the backend class or None.
        """
        basename = os.path.basename(os.fsdecode(os.fspath(path))).lower()
        for ext in sorted(cls._registry.keys(), key=len, reverse=True):
            if basename.endswith(ext):
                return cls._registry[ext]
        return None

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        """
        Return a list of all registered archive extensions.
        """
        return sorted(cls._registry.keys())

    @classmethod
    def open_archive(cls, location, config=None):
        """
        Open the archive at location with the backend registered for its extension.

        Args:
            location: Filesystem path of the archive
            config: Optional ArchiveConfig, handed to the backend as-is

        Returns:
            An opened Archive

        Raises:
            ArchiveOpenError: If no backend handles the extension or opening fails
        """
        if isinstance(location, bytes):
            location = os.fsdecode(location)
        archive_cls = cls.get_archive_for_path(location)
        if archive_cls is None:
            debug_print(f"[ArchiveManager.open_archive] No backend for: {location}", level=1)
            raise ArchiveOpenError(location, "unsupported archive format")
        debug_print(f"[ArchiveManager.open_archive] Opening {location} with {archive_cls.__name__}", level=2)
        try:
            return archive_cls.open(location, config)
        except ArchiveOpenError:
            raise
        except (OSError, ArchiveError) as e:
            debug_print(f"[ArchiveManager.open_archive] Failed to open {location}: {e}", level=1, exc=e)
            raise ArchiveOpenError(location, e) from e
