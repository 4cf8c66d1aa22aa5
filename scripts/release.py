#!/usr/bin/env python3
"""Package the plugin bundle and optionally publish a GitHub release.

Usage:
  python scripts/release.py [--publish]

Creates dist/com.jmolund.bf6stats.streamDeckPlugin (a zip of the bundle).
--publish recreates release v<Version> with the gh CLI.
"""

from __future__ import annotations

import argparse
import json
import subprocess
import sys
import zipfile
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
PLUGIN_DIR = ROOT_DIR / "com.jmolund.bf6stats.sdPlugin"
DIST_DIR = ROOT_DIR / "dist"
PACKAGE_DIR = ROOT_DIR / "bf6stats"
PLUGIN_ID = "com.jmolund.bf6stats"
EXCLUDED_NAMES = frozenset({".DS_Store", "__pycache__"})


def read_version(plugin_dir: Path = PLUGIN_DIR) -> str:
    manifest = json.loads((plugin_dir / "manifest.json").read_text(encoding="utf-8"))
    return str(manifest["Version"])


def _include(path: Path, root: Path) -> bool:
    parts = path.relative_to(root).parts
    return path.is_file() and not EXCLUDED_NAMES.intersection(parts) and path.suffix != ".pyc"


def build_package(
    plugin_dir: Path = PLUGIN_DIR,
    dist_dir: Path = DIST_DIR,
    package_dir: Path | None = PACKAGE_DIR,
) -> Path:
    """Zip the bundle contents, replacing any previous package.

    The Python package is stored under its own name at the archive root,
    where the launchers in bin/ put it on PYTHONPATH.
    """
    dist_dir.mkdir(parents=True, exist_ok=True)
    output = dist_dir / f"{PLUGIN_ID}.streamDeckPlugin"
    output.unlink(missing_ok=True)
    with zipfile.ZipFile(output, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path in sorted(plugin_dir.rglob("*")):
            if _include(path, plugin_dir):
                archive.write(path, path.relative_to(plugin_dir).as_posix())
        if package_dir is not None:
            for path in sorted(package_dir.rglob("*")):
                if _include(path, package_dir):
                    name = path.relative_to(package_dir.parent).as_posix()
                    archive.write(path, name)
    return output


def release_notes(package_name: str) -> str:
    return f"""## Installation

1. Download `{package_name}`
2. Double-click the file to install
3. The plugin will appear in your Stream Deck app under "BF6 Stats"

## Features
- Display your Battlefield 6 player statistics on Stream Deck
"""


def publish(version: str, package: Path, dist_dir: Path = DIST_DIR) -> None:
    """Recreate the GitHub release for ``version`` with ``package`` attached.

    Raises:
        subprocess.CalledProcessError: gh failed to create the release.
    """
    tag = f"v{version}"
    notes_file = dist_dir / "release-notes.md"
    notes_file.write_text(release_notes(package.name), encoding="utf-8")
    try:
        exists = subprocess.run(
            ["gh", "release", "view", tag], capture_output=True, check=False
        )
        if exists.returncode == 0:
            print(f"Release {tag} already exists. Deleting...")
            subprocess.run(["gh", "release", "delete", tag, "-y"], check=True)
        subprocess.run(
            [
                "gh", "release", "create", tag, str(package),
                "--title", f"BF6 Stats {tag}",
                "--notes-file", str(notes_file),
            ],
            check=True,
        )
    finally:
        notes_file.unlink(missing_ok=True)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build the .streamDeckPlugin package")
    parser.add_argument("--publish", action="store_true", help="Publish a GitHub release")
    args = parser.parse_args(argv)

    version = read_version()
    print(f"Building {PLUGIN_ID} v{version}...\n")
    package = build_package()
    print(f"✓ Created: {package.relative_to(ROOT_DIR)}")

    if args.publish:
        print(f"\nPublishing release v{version} to GitHub...")
        try:
            publish(version, package)
        except (OSError, subprocess.CalledProcessError):
            print(
                "\nFailed to publish. Make sure gh CLI is installed and authenticated.",
                file=sys.stderr,
            )
            return 1
        print(f"\n✓ Published release v{version}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
