"""
Archive open options for ARCIO.

ArchiveConfig carries the options a backend understands when an archive is
opened (integrity verification, decryption password, ...). The asset I/O
adapter never interprets them; it only forwards the config to the backend.
Unset options fall back to GlobalConfig.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
from typing import Any, Dict, NamedTuple, Optional, Union

from arcio.core.global_config import GlobalConfig


class ArchiveConfig:
    """
    Per-open archive options with dict-style and attribute-style access.

    Examples:
        config = ArchiveConfig(verify=True)
        config.password = b"secret"
        config["verify"]          # True
        config.get("password")    # b"secret"
        config.reset("verify")    # back to GlobalConfig's value
    """

    def __init__(self, **options):
        object.__setattr__(self, "_overrides", dict(options))

    def set(self, key, value):
        self._overrides[key] = value

    def get(self, key, default=None):
        if key in self._overrides:
            return self._overrides[key]
        value = GlobalConfig.get(key)
        return default if value is None else value

    def reset(self, key=None):
        if key is None:
            self._overrides.clear()
        else:
            self._overrides.pop(key, None)

    def copy(self) -> "ArchiveConfig":
        return ArchiveConfig(**self._overrides)

    def as_dict(self) -> Dict[str, Any]:
        merged = {key: GlobalConfig.get(key) for key in GlobalConfig.keys() if key != "debug_level"}
        merged.update(self._overrides)
        return merged

    def __getattr__(self, key):
        if key.startswith("_"):
            raise AttributeError(key)
        return self.get(key)

    def __setattr__(self, key, value):
        self.set(key, value)

    def __getitem__(self, key):
        return self.get(key)

    def __setitem__(self, key, value):
        self.set(key, value)

    def __contains__(self, key):
        return key in self._overrides

    def __eq__(self, other):
        if not isinstance(other, ArchiveConfig):
            return NotImplemented
        return self._overrides == other._overrides

    def __repr__(self):
        shown = {k: ("***" if k == "password" and v is not None else v) for k, v in self._overrides.items()}
        return f"ArchiveConfig({shown!r})"


class AssetIoConfig(NamedTuple):
    """Bundle of the archive location to load and the ArchiveConfig to open it with."""
    path: Union[str, "os.PathLike[str]"]
    archive_config: Optional[ArchiveConfig] = None
