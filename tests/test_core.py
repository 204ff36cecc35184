"""
Unit tests for ARCIO core pieces: configuration, logging, backend registry and shared ownership.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import unittest
import zipfile

import pytest

from arcio import (
    Archive,
    ArchiveConfig,
    ArchiveManager,
    ArchiveOpenError,
    AssetIoConfig,
    GlobalConfig,
    MemoryArchive,
    TarArchive,
    ZipArchive,
)
from arcio.core.logging import debug_print
from arcio.core.shared import SharedArchive


class TestConfig(unittest.TestCase):
    def setUp(self):
        GlobalConfig.reset()

    def tearDown(self):
        GlobalConfig.reset()

    def test_global_defaults(self):
        self.assertEqual(GlobalConfig.get("debug_level"), 0)
        self.assertFalse(GlobalConfig.get("verify"))
        self.assertIsNone(GlobalConfig.get("password"))
        self.assertIsNone(GlobalConfig.get("no_such_key"))

    def test_global_set_and_reset(self):
        GlobalConfig.set("verify", True)
        GlobalConfig.set_debug_level("3")
        self.assertTrue(GlobalConfig.get("verify"))
        self.assertEqual(GlobalConfig.get_debug_level(), 3)
        GlobalConfig.reset("verify")
        self.assertFalse(GlobalConfig.get("verify"))
        GlobalConfig.set("custom", 1)
        GlobalConfig.reset("custom")
        self.assertIsNone(GlobalConfig.get("custom"))

    def test_archive_config_falls_back_to_global(self):
        config = ArchiveConfig()
        self.assertFalse(config.verify)
        GlobalConfig.set("verify", True)
        self.assertTrue(config.verify)
        config.verify = False
        self.assertFalse(config["verify"])
        config.reset("verify")
        self.assertTrue(config.get("verify"))

    def test_archive_config_access_styles(self):
        config = ArchiveConfig(password="hunter2", magic=b"VfACH")
        self.assertEqual(config.password, "hunter2")
        self.assertEqual(config["magic"], b"VfACH")
        self.assertIn("magic", config)
        self.assertNotIn("verify", config)
        self.assertEqual(config.get("missing", 5), 5)
        self.assertNotIn("hunter2", repr(config))
        self.assertEqual(config.copy(), config)
        merged = config.as_dict()
        self.assertEqual(merged["password"], "hunter2")
        self.assertIn("verify", merged)
        config.reset()
        self.assertNotIn("magic", config)

    def test_asset_io_config(self):
        config = AssetIoConfig("assets.zip")
        self.assertEqual(config.path, "assets.zip")
        self.assertIsNone(config.archive_config)


def test_debug_print_respects_level(capsys):
    try:
        GlobalConfig.set_debug_level(2)
        debug_print("visible", level=2)
        debug_print("hidden", level=3)
    finally:
        GlobalConfig.reset("debug_level")
    out = capsys.readouterr().out
    assert "[ARCIO-DEBUG-2] visible" in out
    assert "hidden" not in out


def test_debug_print_traceback_at_level_four(capsys):
    try:
        GlobalConfig.set_debug_level(4)
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            debug_print("failed", level=1, exc=e)
    finally:
        GlobalConfig.reset("debug_level")
    out = capsys.readouterr().out
    assert "[ARCIO-DEBUG-1] failed" in out
    assert "RuntimeError: boom" in out


@pytest.mark.parametrize("path, expected", [
    ("assets.zip", ZipArchive),
    ("ASSETS.PK3", ZipArchive),
    ("dir/assets.pak", ZipArchive),
    ("assets.tar", TarArchive),
    ("assets.tar.gz", TarArchive),
    ("assets.txz", TarArchive),
    (b"assets.tar.gz", TarArchive),
    (b"dir/assets.zip", ZipArchive),
    ("assets.rar", None),
    ("assets", None),
])
def test_archive_for_path(path, expected):
    assert ArchiveManager.get_archive_for_path(path) is expected


def test_open_unsupported_format(tmp_path):
    path = tmp_path / "assets.rar"
    path.write_bytes(b"Rar!")
    with pytest.raises(ArchiveOpenError) as info:
        ArchiveManager.open_archive(path)
    assert "unsupported" in str(info.value)


def test_memory_archive_is_not_registered():
    assert MemoryArchive not in ArchiveManager._registry.values()


def test_custom_backend_registers_itself(tmp_path):
    opened = []

    class BlobArchive(MemoryArchive):
        @classmethod
        def get_supported_extensions(cls):
            return {'.blob'}

        @classmethod
        def open(cls, location, config=None):
            opened.append((location, config))
            return cls({"only": b"1"})

    try:
        assert ArchiveManager.get_archive('.BLOB') is BlobArchive
        assert '.blob' in ArchiveManager.get_supported_formats()
        config = ArchiveConfig(custom_option=42)
        archive = ArchiveManager.open_archive(tmp_path / "data.blob", config)
        assert archive.fetch("only") == b"1"
        # The config reaches the backend untouched
        assert opened[0][1] is config
    finally:
        ArchiveManager.deregister_archive('.blob')
    assert ArchiveManager.get_archive('.blob') is None


def test_backend_os_errors_become_open_errors(tmp_path):
    class BrokenArchive(MemoryArchive):
        @classmethod
        def get_supported_extensions(cls):
            return {'.broken'}

        @classmethod
        def open(cls, location, config=None):
            raise PermissionError(13, "Permission denied", str(location))

    try:
        with pytest.raises(ArchiveOpenError) as info:
            ArchiveManager.open_archive(tmp_path / "x.broken")
        assert isinstance(info.value.__cause__, PermissionError)
    finally:
        ArchiveManager.deregister_archive('.broken')


def test_archive_without_location_support():
    with pytest.raises(NotImplementedError):
        MemoryArchive.open("somewhere")


def test_from_path_forwards_config(tmp_path):
    path = tmp_path / "a.zip"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("x", b"x")
    archive = ZipArchive.open(path, ArchiveConfig(verify=True))
    assert archive.config.verify
    archive.close()


class ClosingArchive(MemoryArchive):
    closed = 0

    def close(self):
        type(self).closed += 1


def test_shared_archive_closes_on_last_release():
    shared = SharedArchive(ClosingArchive({"a": b"a"}))
    shared.acquire()
    assert shared.shares == 2
    shared.release()
    assert ClosingArchive.closed == 0
    assert not shared.closed
    shared.release()
    assert ClosingArchive.closed == 1
    assert shared.closed
    shared.release()
    assert ClosingArchive.closed == 1
    with pytest.raises(ValueError):
        shared.acquire()


def test_archive_base_is_abstract():
    with pytest.raises(TypeError):
        Archive()
