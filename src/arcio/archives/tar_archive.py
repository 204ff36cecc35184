"""
TAR archive backend for ARCIO.
Provides read-only access to TAR archives, plain or compressed with gzip, bzip2 or xz.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import gzip
import lzma
import os
import tarfile
import threading
import zlib
from typing import BinaryIO, Dict, List, Optional, Set, Tuple, Union

from arcio.core.base_archive import Archive, EntryMetadata
from arcio.core.config import ArchiveConfig
from arcio.core.errors import (
    ArchiveError,
    ArchiveIOError,
    ArchiveOpenError,
    CorruptEntryError,
    MissingEntryError,
)


class TarArchive(Archive):
    """
    Backend for TAR format archives.

    Only regular file members are entries. Directories, links and device
    nodes are skipped. Member reads share one underlying stream, so they are
    serialized with a lock.

    Recognised ArchiveConfig options:
        verify: Read every member once while opening
    """

    def __init__(self, source: Union[str, "os.PathLike[str]", BinaryIO], config: Optional[ArchiveConfig] = None):
        """
        Open a TAR archive. Compression is detected automatically.

        Args:
            source: Path to the TAR file, or a readable binary stream
            config: Optional ArchiveConfig

        Raises:
            ArchiveOpenError: If the source can't be read or isn't a valid TAR
        """
        self.config = config if config is not None else ArchiveConfig()
        self.source = source
        self._lock = threading.Lock()
        is_path = isinstance(source, (str, bytes, os.PathLike))
        self._location = source if is_path else getattr(source, "name", "<stream>")
        try:
            if is_path:
                self.tar_file = tarfile.open(source, "r:*")
            else:
                self.tar_file = tarfile.open(fileobj=source, mode="r:*")
            members = self.tar_file.getmembers()
        except (OSError, EOFError, tarfile.TarError) as e:
            self._log(f"Failed to open {self._location}: {e}", level=1, exc=e)
            raise ArchiveOpenError(self._location, e) from e

        self._members: Dict[str, tarfile.TarInfo] = {}
        self._entries: Dict[str, EntryMetadata] = {}
        for member in members:
            if not member.isfile():
                continue
            self._members[member.name] = member
            self._entries[member.name] = EntryMetadata(
                key=member.name,
                size=member.size,
                modified=float(member.mtime),
                is_file=True,
            )
        self._log(f"Opened {self._location} ({len(self._entries)} entries)", level=2)

        if self.config.get("verify"):
            self._verify()

    @classmethod
    def open(cls, location, config=None) -> "TarArchive":
        return cls(location, config)

    @classmethod
    def get_supported_extensions(cls) -> Set[str]:
        return {'.tar', '.tar.gz', '.tgz', '.tar.bz2', '.tbz2', '.tar.xz', '.txz'}

    def _verify(self) -> None:
        for key in self._entries:
            try:
                self.fetch(key)
            except ArchiveError as e:
                self.close()
                raise ArchiveOpenError(self._location, f"verification failed for '{key}': {e}") from e

    def fetch(self, key: str) -> bytes:
        member = self._members.get(key)
        if member is None:
            raise MissingEntryError(key)
        try:
            with self._lock:
                fileobj = self.tar_file.extractfile(member)
                if fileobj is None:
                    raise MissingEntryError(key)
                with fileobj:
                    data = fileobj.read()
        except (tarfile.TarError, EOFError, zlib.error, lzma.LZMAError, gzip.BadGzipFile) as e:
            raise CorruptEntryError(f"Corrupt entry '{key}': {e}") from e
        except OSError as e:
            # bz2 reports bad compressed data as an OSError without errno
            if e.errno is None:
                raise CorruptEntryError(f"Corrupt entry '{key}': {e}") from e
            raise ArchiveIOError(e) from e
        if len(data) != member.size:
            raise CorruptEntryError(f"Corrupt entry '{key}': expected {member.size} bytes, got {len(data)}")
        return data

    def fetch_entry(self, key: str) -> Optional[EntryMetadata]:
        return self._entries.get(key)

    def entries(self) -> List[Tuple[str, EntryMetadata]]:
        return list(self._entries.items())

    def close(self) -> None:
        """Close the TAR file."""
        if self.tar_file is not None:
            with self._lock:
                self.tar_file.close()
            self._log(f"Closed {self._location}", level=2)
