#!/usr/bin/env python3
"""Generate placeholder PNG icons for the plugin bundle.

Writes a vertical gradient (base colour darkening to 70% at the bottom) at
every size the manifest references.

Usage:
  python scripts/generate_icons.py [--out DIR]
"""

from __future__ import annotations

import argparse
import struct
import zlib
from pathlib import Path

PLUGIN_DIR = Path(__file__).resolve().parent.parent / "com.jmolund.bf6stats.sdPlugin"
IMAGES_DIR = PLUGIN_DIR / "images"

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
BACKGROUND = (26, 26, 46)  # #1a1a2e

ICONS: tuple[tuple[str, int], ...] = (
    ("action", 72),
    ("action@2x", 144),
    ("category", 28),
    ("category@2x", 56),
    ("plugin", 144),
    ("plugin@2x", 288),
)


def _chunk(kind: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(kind + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)


def create_png(width: int, height: int, color: tuple[int, int, int]) -> bytes:
    """Encode an 8-bit RGB gradient image."""
    # width, height, bit depth 8, colour type 2 (RGB), deflate, no filter, no interlace
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    rows = bytearray()
    for y in range(height):
        factor = 1 - (y / height) * 0.3
        pixel = bytes(int(c * factor) for c in color)
        rows.append(0)  # filter type: none
        rows.extend(pixel * width)
    return b"".join(
        (
            PNG_SIGNATURE,
            _chunk(b"IHDR", ihdr),
            _chunk(b"IDAT", zlib.compress(bytes(rows))),
            _chunk(b"IEND", b""),
        )
    )


def generate_icons(out_dir: Path = IMAGES_DIR) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for name, size in ICONS:
        path = out_dir / f"{name}.png"
        path.write_bytes(create_png(size, size, BACKGROUND))
        print(f"Created {path.name} ({size}x{size})")
        written.append(path)
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--out", type=Path, default=IMAGES_DIR, help="Output directory")
    args = parser.parse_args(argv)
    generate_icons(args.out)
    print("\nIcons generated successfully!")
    print("Note: These are basic placeholder icons. Replace them with custom artwork.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
