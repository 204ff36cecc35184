"""
ZIP archive backend for ARCIO.
Provides read-only access to ZIP format archives (including .pak/.pk3 asset packs).

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import lzma
import os
import time
import zipfile
import zlib
from typing import BinaryIO, Dict, List, Optional, Set, Tuple, Union

from arcio.core.base_archive import Archive, EntryMetadata
from arcio.core.config import ArchiveConfig
from arcio.core.errors import (
    ArchiveError,
    ArchiveIOError,
    ArchiveOpenError,
    CorruptEntryError,
    DecryptionError,
    MissingEntryError,
)


def _zip_mtime(info: zipfile.ZipInfo) -> float:
    try:
        return time.mktime(info.date_time + (0, 0, -1))
    except (OverflowError, ValueError):
        return 0.0


class ZipArchive(Archive):
    """
    Backend for ZIP format archives.

    Directory records stored in the ZIP are not entries; only members that
    carry file content are listed or fetchable.

    Recognised ArchiveConfig options:
        verify: Check the CRC of every member while opening
        password: Password for encrypted members (str or bytes)
    """

    def __init__(self, source: Union[str, "os.PathLike[str]", BinaryIO], config: Optional[ArchiveConfig] = None):
        """
        Open a ZIP archive.

        Args:
            source: Path to the ZIP file, or a readable, seekable binary stream
            config: Optional ArchiveConfig

        Raises:
            ArchiveOpenError: If the source can't be read or isn't a valid ZIP
        """
        self.config = config if config is not None else ArchiveConfig()
        self.source = source
        self._location = source if isinstance(source, (str, bytes, os.PathLike)) else getattr(source, "name", "<stream>")
        try:
            self.zip_file = zipfile.ZipFile(source, "r")
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            self._log(f"Failed to open {self._location}: {e}", level=1, exc=e)
            raise ArchiveOpenError(self._location, e) from e

        password = self.config.get("password")
        if isinstance(password, str):
            password = password.encode("utf-8")
        self._password = password

        self._entries: Dict[str, EntryMetadata] = {}
        for info in self.zip_file.infolist():
            if info.is_dir():
                continue
            self._entries[info.filename] = EntryMetadata(
                key=info.filename,
                size=info.file_size,
                modified=_zip_mtime(info),
                is_file=True,
            )
        self._log(f"Opened {self._location} ({len(self._entries)} entries)", level=2)

        if self.config.get("verify"):
            self._verify()

    @classmethod
    def open(cls, location, config=None) -> "ZipArchive":
        return cls(location, config)

    @classmethod
    def get_supported_extensions(cls) -> Set[str]:
        return {'.zip', '.pak', '.pk3', '.jar'}

    def _verify(self) -> None:
        for key in self._entries:
            try:
                self.fetch(key)
            except ArchiveError as e:
                self.close()
                raise ArchiveOpenError(self._location, f"verification failed for '{key}': {e}") from e

    def fetch(self, key: str) -> bytes:
        if key not in self._entries:
            raise MissingEntryError(key)
        try:
            return self.zip_file.read(key, pwd=self._password)
        except KeyError:
            raise MissingEntryError(key)
        except NotImplementedError as e:
            raise CorruptEntryError(f"Unsupported entry '{key}': {e}") from e
        except RuntimeError as e:
            # zipfile reports missing/bad passwords as RuntimeError
            raise DecryptionError(f"Cannot decrypt '{key}': {e}") from e
        except (zipfile.BadZipFile, zlib.error, lzma.LZMAError, EOFError) as e:
            raise CorruptEntryError(f"Corrupt entry '{key}': {e}") from e
        except OSError as e:
            # bz2 reports bad compressed data as an OSError without errno
            if e.errno is None:
                raise CorruptEntryError(f"Corrupt entry '{key}': {e}") from e
            raise ArchiveIOError(e) from e

    def fetch_entry(self, key: str) -> Optional[EntryMetadata]:
        return self._entries.get(key)

    def entries(self) -> List[Tuple[str, EntryMetadata]]:
        return list(self._entries.items())

    def close(self) -> None:
        """Close the ZIP file."""
        if self.zip_file is not None:
            self.zip_file.close()
            self._log(f"Closed {self._location}", level=2)
