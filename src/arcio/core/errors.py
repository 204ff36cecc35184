"""
Exception types for ARCIO.

Two families live here:

* Archive errors, raised by archive backends (``Archive.fetch`` and friends).
* Asset I/O errors, raised to the asset host by ``ArchiveAssetIo``. They are
  all ``OSError`` subclasses so hosts that catch ``OSError`` or
  ``FileNotFoundError`` keep working.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import errno
import os
from typing import Optional


# --- Archive errors ---

class ArchiveError(Exception):
    """Base class for every failure reported by an archive backend."""


class ArchiveOpenError(ArchiveError):
    """The archive could not be read or failed validation while opening."""

    def __init__(self, location, reason):
        self.location = location
        self.reason = reason
        super().__init__(f"Cannot open archive '{location}': {reason}")


class ArchiveIOError(ArchiveError):
    """The underlying byte source failed while reading."""

    def __init__(self, error: OSError):
        self.error = error
        super().__init__(f"I/O error while reading archive: {error}")


class MissingEntryError(ArchiveError, KeyError):
    """No entry with the given key exists in the archive."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self):
        return f"No entry '{self.key}' in archive"


class CorruptEntryError(ArchiveError):
    """Stored entry data failed its integrity check or could not be decompressed."""


class DecryptionError(ArchiveError):
    """Entry is encrypted and could not be decrypted with the configured password."""


# --- Asset I/O errors ---

class AssetIoError(OSError):
    """Base class for errors reported to the asset host."""


class AssetReadError(AssetIoError):
    """
    I/O-class failure while loading an asset.

    When the failure came from the byte source itself, ``error`` holds the
    original ``OSError``. Other archive failures are reduced to their message
    and ``error`` is None.
    """

    def __init__(self, message, error: Optional[OSError] = None):
        if error is not None and error.errno is not None:
            super().__init__(error.errno, message)
        else:
            super().__init__(message)
        self.error = error

    def __str__(self):
        return self.args[-1] if self.args else ""


class AssetNotFoundError(AssetIoError, FileNotFoundError):
    """The requested path is neither an entry nor a prefix of any entry."""

    def __init__(self, path):
        self.path = path
        super().__init__(errno.ENOENT, "Asset not found", os.fspath(path) if isinstance(path, os.PathLike) else path)


class PathWatchError(AssetIoError):
    """Change notification was requested; archives never change, so it is unsupported."""

    def __init__(self, path=None, message="Watching is not supported"):
        self.path = path
        if path is None:
            super().__init__(errno.ENOTSUP, message)
        else:
            super().__init__(errno.ENOTSUP, message, os.fspath(path) if isinstance(path, os.PathLike) else path)
