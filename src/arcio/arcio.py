"""
ARCIO: Archive Asset I/O

Serves assets to an asset-loading host straight out of a read-only archive.

The archive stores flat string keys only. This module presents them as a
hierarchy: a path is a file when a key equals it, and a directory when it is
a prefix of at least one key.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import arcio.archives
import asyncio
import threading
from concurrent.futures import Executor
from pathlib import PurePosixPath
from typing import Iterator, Optional

from .api.asset_io import AssetIo, FileType, Metadata
from .core.archive_manager import ArchiveManager
from .core.base_archive import Archive
from .core.config import ArchiveConfig, AssetIoConfig
from .core.errors import (
    ArchiveError,
    ArchiveIOError,
    AssetNotFoundError,
    AssetReadError,
    MissingEntryError,
    PathWatchError,
)
from .core.logging import debug_print
from .core.path_resolver import PathResolver
from .core.shared import SharedArchive

__version__ = '0.1.0'

READ_ONLY_WATCH_MESSAGE = "Archives are read only, so there are never any changes to watch"


class ArchiveAssetIo(AssetIo):
    """
    Asset source backed by a single read-only archive.

    Clones share one archive instance; the archive is closed when the last
    clone is closed. All operations are reads, so one instance (or many
    clones) can be used from any number of threads at once.

    Example:
        asset_io = ArchiveAssetIo.from_path('assets.zip')
        data = asyncio.run(asset_io.load('textures/a.png'))
        for path in asset_io.read_directory('textures'):
            print(path)
    """

    def __init__(self, archive: Archive, executor: Optional[Executor] = None):
        """
        Wrap an already-opened archive.

        Args:
            archive: Opened Archive; ownership passes to this adapter
            executor: Executor that runs load(); the event loop's default when None
        """
        self._init(SharedArchive(archive), executor)

    def _init(self, shared: SharedArchive, executor: Optional[Executor]):
        self._shared = shared
        self._executor = executor
        self._path_resolver = PathResolver()
        self._closed = False
        self._close_lock = threading.Lock()

    @classmethod
    def new(cls, archive: Archive, executor: Optional[Executor] = None) -> "ArchiveAssetIo":
        """Wrap an already-opened archive. Same as calling the class."""
        return cls(archive, executor=executor)

    @classmethod
    def from_path(cls, location, config: Optional[ArchiveConfig] = None,
                  executor: Optional[Executor] = None) -> "ArchiveAssetIo":
        """
        Open the archive at location and wrap it.

        Args:
            location: Filesystem path of the archive; its extension picks the backend
            config: Optional ArchiveConfig, forwarded to the backend unchanged
            executor: Executor that runs load()

        Raises:
            ArchiveOpenError: If the archive can't be read or fails validation
        """
        archive = ArchiveManager.open_archive(location, config if config is not None else ArchiveConfig())
        return cls(archive, executor=executor)

    @classmethod
    def from_config(cls, config: AssetIoConfig, executor: Optional[Executor] = None) -> "ArchiveAssetIo":
        """Open the archive described by an AssetIoConfig."""
        return cls.from_path(config.path, config.archive_config, executor=executor)

    # --- Shared ownership ---
    def clone(self) -> "ArchiveAssetIo":
        """
        Return another adapter over the same archive instance.
        Nothing is copied; the archive stays open until every clone is closed.
        """
        if self._closed:
            raise ValueError("I/O operation on closed ArchiveAssetIo.")
        other = type(self).__new__(type(self))
        other._init(self._shared.acquire(), self._executor)
        return other

    def __copy__(self):
        return self.clone()

    def __deepcopy__(self, memo):
        return self.clone()

    def close(self) -> None:
        """Release this adapter's share of the archive. Safe to call twice, from any thread."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._shared.release()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def archive(self) -> Archive:
        if self._closed:
            raise ValueError("I/O operation on closed ArchiveAssetIo.")
        return self._shared.archive

    def _log(self, msg, level=1, exc=None):
        debug_print(f"{type(self).__name__}: {msg}", level=level, exc=exc)

    # --- AssetIo ---
    async def load(self, path) -> bytes:
        """
        Load the full contents of the entry at path.

        The archive read runs on the executor. Cancelling the awaiting task
        discards the result but does not stop a read that already started.

        Raises:
            AssetNotFoundError: If the archive has no entry for path
            AssetReadError: If the byte source failed or the entry couldn't be decoded
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.load_sync, path)

    def load_sync(self, path) -> bytes:
        """Blocking version of load()."""
        archive = self.archive
        key = self._path_resolver.to_key(path)
        self._log(f"load {key!r}", level=3)
        try:
            return archive.fetch(key)
        except MissingEntryError:
            self._log(f"No entry for {key!r}", level=1)
            raise AssetNotFoundError(path) from None
        except ArchiveIOError as e:
            self._log(f"I/O error loading {key!r}: {e.error}", level=1, exc=e)
            raise AssetReadError(str(e.error), error=e.error) from e.error
        except ArchiveError as e:
            self._log(f"Failed to decode {key!r}: {e}", level=1, exc=e)
            raise AssetReadError(str(e)) from None
        except Exception as e:
            # Backends may leak decoder errors that are not ArchiveErrors
            self._log(f"Unexpected error loading {key!r}: {e}", level=1, exc=e)
            raise AssetReadError(str(e)) from None

    def read_directory(self, path) -> Iterator[PurePosixPath]:
        """
        List every entry stored under path, at any depth, in archive order.

        The listing is a raw string-prefix match and is taken eagerly. A path
        with no entries under it yields nothing.
        """
        archive = self.archive
        prefix = self._path_resolver.to_key(path)
        keys = self._path_resolver.filter_keys(archive.keys(), prefix)
        self._log(f"read_directory {prefix!r}: {len(keys)} entries", level=3)
        return iter([self._path_resolver.to_path(key) for key in keys])

    def get_metadata(self, path) -> Metadata:
        """
        Classify path. An exact entry is a file; otherwise a prefix of any
        entry is a directory.

        Raises:
            AssetNotFoundError: If path is neither
        """
        archive = self.archive
        key = self._path_resolver.to_key(path)
        if archive.fetch_entry(key) is not None:
            return Metadata(FileType.FILE)
        if any(self._path_resolver.matches(other, key) for other in archive.keys()):
            return Metadata(FileType.DIRECTORY)
        raise AssetNotFoundError(path)

    # Archives are read only
    def watch_path_for_changes(self, path) -> None:
        raise PathWatchError(path)

    def watch_for_changes(self) -> None:
        raise PathWatchError(None, READ_ONLY_WATCH_MESSAGE)

    def __repr__(self):
        state = "closed" if self._closed else type(self._shared.archive).__name__
        return f"<{type(self).__name__} {state}>"
