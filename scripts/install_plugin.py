#!/usr/bin/env python3
"""Install the plugin bundle into the local Stream Deck plugins directory.

Usage:
  python scripts/install_plugin.py [--symlink]

With --symlink the bundle is linked instead of copied, so edits show up after
restarting Stream Deck without reinstalling.
"""

from __future__ import annotations

import argparse
import os
import platform
import shutil
import sys
from pathlib import Path

PLUGIN_NAME = "com.jmolund.bf6stats.sdPlugin"
ROOT_DIR = Path(__file__).resolve().parent.parent
SOURCE_DIR = ROOT_DIR / PLUGIN_NAME
PACKAGE_DIR = ROOT_DIR / "bf6stats"


def get_plugins_directory(
    system: str | None = None,
    home: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Path:
    """Return the Stream Deck plugins directory for this OS.

    Raises:
        RuntimeError: Stream Deck does not run on this platform.
    """
    system = system or platform.system()
    home = home or Path.home()
    environ = os.environ if environ is None else environ
    if system == "Darwin":
        return home / "Library" / "Application Support" / "com.elgato.StreamDeck" / "Plugins"
    if system == "Windows":
        appdata = environ.get("APPDATA")
        if not appdata:
            raise RuntimeError("APPDATA is not set")
        return Path(appdata) / "Elgato" / "StreamDeck" / "Plugins"
    raise RuntimeError(f"Unsupported platform: {system}")


def remove_existing(dest: Path) -> None:
    if dest.is_symlink():
        dest.unlink()
    elif dest.exists():
        shutil.rmtree(dest)


def install(
    source: Path,
    plugins_dir: Path,
    *,
    symlink: bool = False,
    package_dir: Path | None = PACKAGE_DIR,
) -> Path:
    """Copy or link ``source`` into ``plugins_dir``, replacing an existing install.

    A copy also gets ``package_dir`` next to bin/ for the launchers. A
    symlinked bundle relies on the package being installed (``pip install -e .``).

    Raises:
        FileNotFoundError: ``plugins_dir`` does not exist (Stream Deck not installed).
    """
    if not plugins_dir.is_dir():
        raise FileNotFoundError(f"Stream Deck plugins directory not found: {plugins_dir}")
    dest = plugins_dir / source.name
    if dest.exists() or dest.is_symlink():
        print("Removing existing plugin...")
        remove_existing(dest)
    if symlink:
        print("Creating symlink for development...")
        dest.symlink_to(source, target_is_directory=True)
    else:
        print("Copying plugin files...")
        shutil.copytree(source, dest)
        if package_dir is not None:
            shutil.copytree(
                package_dir,
                dest / package_dir.name,
                ignore=shutil.ignore_patterns("__pycache__", "*.pyc"),
            )
    return dest


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Install the BF6 Stats plugin locally")
    parser.add_argument("--symlink", action="store_true", help="Link instead of copy")
    args = parser.parse_args(argv)

    print("Stream Deck BF6 Stats Plugin Installer\n")
    try:
        plugins_dir = get_plugins_directory()
        print(f"Source: {SOURCE_DIR}")
        print(f"Destination: {plugins_dir / PLUGIN_NAME}\n")
        install(SOURCE_DIR, plugins_dir, symlink=args.symlink)
    except (RuntimeError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Make sure Stream Deck software is installed.", file=sys.stderr)
        return 1

    print("\n✓ Installation complete!")
    print("Please restart Stream Deck to load the plugin.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
