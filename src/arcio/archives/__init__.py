"""
Archive backends for ARCIO.
Importing this package registers every backend with ArchiveManager.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from .memory_archive import MemoryArchive
from .tar_archive import TarArchive
from .zip_archive import ZipArchive

__all__ = ["MemoryArchive", "TarArchive", "ZipArchive"]
