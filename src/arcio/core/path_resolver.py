"""
Path resolution for ARCIO.
Translates the hierarchical logical paths used by the asset host into the
flat string keys stored in an archive, and back.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
from pathlib import PurePath, PurePosixPath
from typing import Iterable, List, Union

PathLike = Union[str, bytes, "os.PathLike"]


class PathResolver:
    """
    Resolves logical paths to archive keys.

    Conversion is plain string conversion: no '.'/'..' handling and no
    separator collapsing. Anything that cannot be represented as UTF-8 is
    replaced with U+FFFD, so distinct unrepresentable paths may map to the
    same key.
    """

    def to_key(self, path: PathLike) -> str:
        """
        Convert a logical path to an archive key.

        Args:
            path: str, bytes or path-like object

        Returns:
            Archive key string
        """
        if isinstance(path, PurePath):
            text = path.as_posix()
            # PurePath('') renders as '.'
            return "" if text == "." else self._lossy(text)
        path = os.fspath(path)
        if isinstance(path, bytes):
            return path.decode("utf-8", "replace")
        return self._lossy(path)

    def to_path(self, key: str) -> PurePosixPath:
        """
        Reinterpret an archive key as a logical path.
        """
        return PurePosixPath(key)

    @staticmethod
    def matches(key: str, prefix: str) -> bool:
        """
        Check whether an archive key lives under a prefix.
        This is a raw string prefix test, not a path-component test.
        """
        return key.startswith(prefix)

    def filter_keys(self, keys: Iterable[str], prefix: str) -> List[str]:
        """
        Keep the keys that start with prefix, preserving their order.
        """
        return [key for key in keys if self.matches(key, prefix)]

    @staticmethod
    def _lossy(text: str) -> str:
        try:
            text.encode("utf-8")
            return text
        except UnicodeEncodeError:
            pass
        # Undecodable bytes smuggled in by os.fsdecode, or stray surrogates
        try:
            raw = text.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError:
            raw = text.encode("utf-8", "surrogatepass")
        return raw.decode("utf-8", "replace")
