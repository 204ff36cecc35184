"""
Tests for mapping archive failures onto asset I/O errors.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import asyncio
import errno

import pytest

from arcio import (
    ArchiveAssetIo,
    ArchiveIOError,
    AssetIoError,
    AssetNotFoundError,
    AssetReadError,
    CorruptEntryError,
    DecryptionError,
    MemoryArchive,
    MissingEntryError,
    PathWatchError,
)


class FailingArchive(MemoryArchive):
    """MemoryArchive whose fetch raises a preset error for some keys."""

    def __init__(self, entries, failures):
        super().__init__(entries)
        self.failures = failures

    def fetch(self, key):
        if key in self.failures:
            raise self.failures[key]
        return super().fetch(key)


@pytest.fixture
def asset_io():
    disk_error = OSError(errno.EIO, "Input/output error")
    archive = FailingArchive(
        {"ok.txt": b"fine", "disk.bin": b"", "crc.bin": b"", "secret.bin": b""},
        {
            "disk.bin": ArchiveIOError(disk_error),
            "crc.bin": CorruptEntryError("Bad CRC-32 for 'crc.bin'"),
            "secret.bin": DecryptionError("Bad password for 'secret.bin'"),
        },
    )
    adapter = ArchiveAssetIo(archive)
    yield adapter
    adapter.close()


def test_io_failure_surfaces_original_error(asset_io):
    with pytest.raises(AssetReadError) as info:
        asyncio.run(asset_io.load("disk.bin"))
    err = info.value
    assert isinstance(err.error, OSError)
    assert err.error.errno == errno.EIO
    assert err.errno == errno.EIO
    assert err.__cause__ is err.error
    assert str(err) == str(err.error)
    assert not isinstance(err, FileNotFoundError)


@pytest.mark.parametrize("path, message", [
    ("crc.bin", "Bad CRC-32 for 'crc.bin'"),
    ("secret.bin", "Bad password for 'secret.bin'"),
])
def test_other_failures_become_read_errors_with_message(asset_io, path, message):
    with pytest.raises(AssetReadError) as info:
        asset_io.load_sync(path)
    err = info.value
    assert str(err) == message
    assert err.error is None
    assert err.__cause__ is None
    assert err.__suppress_context__


def test_missing_entry_becomes_not_found(asset_io):
    with pytest.raises(AssetNotFoundError) as info:
        asyncio.run(asset_io.load("nope.txt"))
    assert info.value.path == "nope.txt"
    assert info.value.errno == errno.ENOENT
    assert info.value.filename == "nope.txt"


def test_successful_loads_are_unaffected(asset_io):
    assert asyncio.run(asset_io.load("ok.txt")) == b"fine"


def test_failures_are_not_partial_results(asset_io):
    # metadata still sees the failing entries as files
    assert asset_io.get_metadata("crc.bin").is_file()
    assert [str(p) for p in asset_io.read_directory("")] == ["ok.txt", "disk.bin", "crc.bin", "secret.bin"]


def test_error_hierarchy():
    assert issubclass(AssetNotFoundError, AssetIoError)
    assert issubclass(AssetNotFoundError, FileNotFoundError)
    assert issubclass(AssetReadError, OSError)
    assert issubclass(PathWatchError, AssetIoError)
    assert issubclass(MissingEntryError, KeyError)
    assert "nope" in str(MissingEntryError("nope"))
    assert PathWatchError("a/b").errno == errno.ENOTSUP


def test_unexpected_backend_errors_become_read_errors():
    archive = FailingArchive(
        {"broken.bin": b""},
        {"broken.bin": ValueError("decoder gave up on 'broken.bin'")},
    )
    with ArchiveAssetIo(archive) as adapter:
        with pytest.raises(AssetReadError) as info:
            asyncio.run(adapter.load("broken.bin"))
    err = info.value
    assert str(err) == "decoder gave up on 'broken.bin'"
    assert err.error is None
    assert err.__cause__ is None
    assert err.__suppress_context__
