"""
ARCIO: Archive Asset I/O

A Python library that serves assets to an asset-loading host out of a
read-only archive, presenting the archive's flat keys as a directory tree.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT

Public API:
    - ArchiveAssetIo: the asset source. Build it with from_path() or wrap an opened Archive.
    - Archive backends: ZipArchive, TarArchive, MemoryArchive.
    - ArchiveConfig / AssetIoConfig / GlobalConfig: configuration.

Example usage:
    import asyncio
    from arcio import ArchiveAssetIo, ArchiveConfig
    asset_io = ArchiveAssetIo.from_path('assets.zip', ArchiveConfig(verify=True))
    data = asyncio.run(asset_io.load('textures/a.png'))
    paths = list(asset_io.read_directory('textures'))
    asset_io.get_metadata('textures').is_dir()
"""

import arcio.archives
from .arcio import ArchiveAssetIo
from .api.asset_io import AssetIo, FileType, Metadata
from .archives import MemoryArchive, TarArchive, ZipArchive
from .core.archive_manager import ArchiveManager
from .core.base_archive import Archive, EntryMetadata
from .core.config import ArchiveConfig, AssetIoConfig
from .core.errors import (
    ArchiveError,
    ArchiveIOError,
    ArchiveOpenError,
    AssetIoError,
    AssetNotFoundError,
    AssetReadError,
    CorruptEntryError,
    DecryptionError,
    MissingEntryError,
    PathWatchError,
)
from .core.global_config import GlobalConfig

__version__ = '0.1.0'
__all__ = [
    "ArchiveAssetIo",
    "AssetIo",
    "FileType",
    "Metadata",
    "Archive",
    "EntryMetadata",
    "MemoryArchive",
    "TarArchive",
    "ZipArchive",
    "ArchiveManager",
    "ArchiveConfig",
    "AssetIoConfig",
    "GlobalConfig",
    "ArchiveError",
    "ArchiveIOError",
    "ArchiveOpenError",
    "MissingEntryError",
    "CorruptEntryError",
    "DecryptionError",
    "AssetIoError",
    "AssetReadError",
    "AssetNotFoundError",
    "PathWatchError",
]
