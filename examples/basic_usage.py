#!/usr/bin/env python3
"""
ARCIO Example Script

This script demonstrates the basic usage of the ARCIO library: open an
archive, browse it the way an asset server would, and load a few assets.

Author: Tim Hosking
GitHub: https://github.com/Munger
"""

import argparse
import asyncio
import sys

from arcio import ArchiveAssetIo, ArchiveConfig, ArchiveOpenError, AssetIoError, GlobalConfig


def list_contents(asset_io, path):
    """List every asset stored under a path."""
    print(f"\nListing contents of: {path or '<root>'}")
    print("-" * 50)

    try:
        metadata = asset_io.get_metadata(path)
    except AssetIoError as e:
        print(f"Error: {e}")
        return

    if metadata.is_file():
        entry = asset_io.archive.fetch_entry(str(path))
        print(f"File: {path} ({entry.size} bytes)")
        return

    for item in asset_io.read_directory(path):
        entry = asset_io.archive.fetch_entry(str(item))
        print(f"{item} ({entry.size} bytes)")


async def load_assets(asset_io, paths):
    """Load several assets concurrently and report their sizes."""
    results = await asyncio.gather(*(asset_io.load(p) for p in paths), return_exceptions=True)
    for path, result in zip(paths, results):
        if isinstance(result, Exception):
            print(f"{path}: {result}")
        else:
            print(f"{path}: {len(result)} bytes")


def main():
    parser = argparse.ArgumentParser(description="Browse an asset archive with ARCIO")
    parser.add_argument("archive", help="Path to a .zip/.pak/.tar[.gz|.bz2|.xz] archive")
    parser.add_argument("paths", nargs="*", help="Assets to load")
    parser.add_argument("--prefix", default="", help="Directory prefix to list")
    parser.add_argument("--verify", action="store_true", help="Verify every entry while opening")
    parser.add_argument("--debug", type=int, default=0, help="Debug level (0-4)")
    args = parser.parse_args()

    GlobalConfig.set_debug_level(args.debug)

    try:
        asset_io = ArchiveAssetIo.from_path(args.archive, ArchiveConfig(verify=args.verify))
    except ArchiveOpenError as e:
        print(f"Error: {e}")
        return 1

    with asset_io:
        list_contents(asset_io, args.prefix)
        if args.paths:
            print("\nLoading assets")
            print("-" * 50)
            asyncio.run(load_assets(asset_io, args.paths))
    return 0


if __name__ == "__main__":
    sys.exit(main())
