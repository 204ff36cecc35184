"""
In-memory archive backend for ARCIO.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import time
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from arcio.core.base_archive import Archive, EntryMetadata
from arcio.core.errors import MissingEntryError


class MemoryArchive(Archive):
    """
    Archive whose entries live in a dict, in insertion order.

    Useful for tests and for content generated at runtime. The entries are
    copied at construction and never change afterwards.
    """

    def __init__(self, entries: Union[Mapping[str, bytes], Iterable[Tuple[str, bytes]]] = ()):
        items = entries.items() if isinstance(entries, Mapping) else entries
        now = time.time()
        self._data: Dict[str, bytes] = {}
        self._entries: Dict[str, EntryMetadata] = {}
        for key, data in items:
            data = bytes(data)
            self._data[key] = data
            self._entries[key] = EntryMetadata(key=key, size=len(data), modified=now, is_file=True)

    def fetch(self, key: str) -> bytes:
        try:
            return self._data[key]
        except KeyError:
            raise MissingEntryError(key) from None

    def fetch_entry(self, key: str) -> Optional[EntryMetadata]:
        return self._entries.get(key)

    def entries(self) -> List[Tuple[str, EntryMetadata]]:
        return list(self._entries.items())

    def close(self) -> None:
        self._data = {}
        self._entries = {}
