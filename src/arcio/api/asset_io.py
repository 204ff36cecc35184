"""
Asset I/O contract.

The interface an asset-loading host drives to read assets: load bytes for a
path, list the paths under a directory, classify a path as file or
directory, and (optionally) watch for changes.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import PurePosixPath
from typing import Iterator, NamedTuple

from arcio.core.errors import AssetNotFoundError


class FileType(Enum):
    FILE = "file"
    DIRECTORY = "directory"


class Metadata(NamedTuple):
    """What the host knows about a path."""
    file_type: FileType

    def is_file(self) -> bool:
        return self.file_type is FileType.FILE

    def is_dir(self) -> bool:
        return self.file_type is FileType.DIRECTORY


class AssetIo(ABC):
    """
    Base class for asset sources.

    load() is a coroutine; everything else is synchronous.
    """

    @abstractmethod
    async def load(self, path) -> bytes:
        """
        Load the full contents of the asset at path.

        Raises:
            AssetNotFoundError: If nothing is stored at path
            AssetReadError: If reading failed
        """
        pass

    @abstractmethod
    def read_directory(self, path) -> Iterator[PurePosixPath]:
        """
        Return the paths stored under the directory at path.
        """
        pass

    @abstractmethod
    def get_metadata(self, path) -> Metadata:
        """
        Classify path as a file or a directory.

        Raises:
            AssetNotFoundError: If path is neither
        """
        pass

    @abstractmethod
    def watch_path_for_changes(self, path) -> None:
        """Start watching path for changes."""
        pass

    @abstractmethod
    def watch_for_changes(self) -> None:
        """Start watching the whole source for changes."""
        pass

    def is_dir(self, path) -> bool:
        try:
            return self.get_metadata(path).is_dir()
        except AssetNotFoundError:
            return False

    def is_file(self, path) -> bool:
        try:
            return self.get_metadata(path).is_file()
        except AssetNotFoundError:
            return False
