"""Tests for the icon, install and release scripts.

Scripts are loaded from their files since scripts/ is not a package.
"""

from __future__ import annotations

import importlib.util
import json
import struct
import zipfile
import zlib
from pathlib import Path
from types import ModuleType
from unittest.mock import patch

import pytest

_SCRIPTS = Path(__file__).parents[1] / "scripts"


def _load(name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(f"scripts_{name}", _SCRIPTS / f"{name}.py")
    if not (spec and spec.loader):
        raise AssertionError(f"Could not create spec for {name}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


generate_icons = _load("generate_icons")
install_plugin = _load("install_plugin")
release = _load("release")


def _chunks(data: bytes):
    offset = 8
    while offset < len(data):
        (length,) = struct.unpack(">I", data[offset : offset + 4])
        kind = data[offset + 4 : offset + 8]
        body = data[offset + 8 : offset + 8 + length]
        (crc,) = struct.unpack(">I", data[offset + 8 + length : offset + 12 + length])
        yield kind, body, crc
        offset += 12 + length


class TestGenerateIcons:
    def test_png_structure(self):
        png = generate_icons.create_png(4, 2, (26, 26, 46))
        assert png.startswith(b"\x89PNG\r\n\x1a\n")

        chunks = list(_chunks(png))
        assert [kind for kind, _, _ in chunks] == [b"IHDR", b"IDAT", b"IEND"]
        for kind, body, crc in chunks:
            assert zlib.crc32(kind + body) & 0xFFFFFFFF == crc

        width, height, depth, color_type = struct.unpack(">IIBB", chunks[0][1][:10])
        assert (width, height, depth, color_type) == (4, 2, 8, 2)

        raw = zlib.decompress(chunks[1][1])
        assert len(raw) == 2 * (1 + 4 * 3)
        assert raw[0] == 0
        assert raw[1:4] == bytes((26, 26, 46))
        # second row is darker
        assert raw[14:17] == bytes((22, 22, 39))

    def test_generates_all_sizes(self, tmp_path, capsys):
        written = generate_icons.generate_icons(tmp_path)
        assert sorted(p.name for p in written) == sorted(f"{n}.png" for n, _ in generate_icons.ICONS)
        plugin_png = (tmp_path / "plugin@2x.png").read_bytes()
        assert struct.unpack(">II", plugin_png[16:24]) == (288, 288)


class TestInstallPlugin:
    def _bundle(self, tmp_path: Path) -> Path:
        source = tmp_path / "src" / install_plugin.PLUGIN_NAME
        (source / "images").mkdir(parents=True)
        (source / "manifest.json").write_text("{}")
        (source / "images" / "action.png").write_bytes(b"png")
        return source

    def test_plugins_directory_per_platform(self, tmp_path):
        mac = install_plugin.get_plugins_directory("Darwin", home=tmp_path)
        assert mac == tmp_path / "Library" / "Application Support" / "com.elgato.StreamDeck" / "Plugins"
        win = install_plugin.get_plugins_directory("Windows", environ={"APPDATA": str(tmp_path)})
        assert win == tmp_path / "Elgato" / "StreamDeck" / "Plugins"
        with pytest.raises(RuntimeError):
            install_plugin.get_plugins_directory("Linux", home=tmp_path)

    def test_copy_install_replaces_existing(self, tmp_path, capsys):
        source = self._bundle(tmp_path)
        plugins = tmp_path / "Plugins"
        stale = plugins / source.name
        stale.mkdir(parents=True)
        (stale / "old.txt").write_text("old")

        dest = install_plugin.install(source, plugins)

        assert (dest / "manifest.json").exists()
        assert (dest / "images" / "action.png").read_bytes() == b"png"
        assert not (dest / "old.txt").exists()

    def test_symlink_install(self, tmp_path, capsys):
        source = self._bundle(tmp_path)
        plugins = tmp_path / "Plugins"
        plugins.mkdir()
        install_plugin.install(source, plugins)

        dest = install_plugin.install(source, plugins, symlink=True)

        assert dest.is_symlink()
        assert dest.resolve() == source.resolve()

    def test_copy_install_ships_package(self, tmp_path, capsys):
        source = self._bundle(tmp_path)
        package = tmp_path / "bf6stats"
        (package / "__pycache__").mkdir(parents=True)
        (package / "main.py").write_text("")
        (package / "__pycache__" / "main.cpython-312.pyc").write_bytes(b"pyc")
        plugins = tmp_path / "Plugins"
        plugins.mkdir()

        dest = install_plugin.install(source, plugins, package_dir=package)

        assert (dest / "bf6stats" / "main.py").exists()
        assert not (dest / "bf6stats" / "__pycache__").exists()

    def test_missing_plugins_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            install_plugin.install(self._bundle(tmp_path), tmp_path / "nope")


class TestRelease:
    def _bundle(self, tmp_path: Path) -> Path:
        plugin_dir = tmp_path / "bundle.sdPlugin"
        (plugin_dir / "images").mkdir(parents=True)
        (plugin_dir / "manifest.json").write_text(json.dumps({"Version": "1.2.3.0"}))
        (plugin_dir / "images" / "action.png").write_bytes(b"png")
        (plugin_dir / ".DS_Store").write_bytes(b"junk")
        (plugin_dir / "images" / ".DS_Store").write_bytes(b"junk")
        return plugin_dir

    def test_read_version(self, tmp_path):
        assert release.read_version(self._bundle(tmp_path)) == "1.2.3.0"

    def test_build_package_excludes_ds_store(self, tmp_path):
        dist = tmp_path / "dist"
        package = release.build_package(self._bundle(tmp_path), dist, package_dir=None)

        assert package.name == "com.jmolund.bf6stats.streamDeckPlugin"
        with zipfile.ZipFile(package) as archive:
            assert sorted(archive.namelist()) == ["images/action.png", "manifest.json"]

    def test_build_package_ships_manifest_code_paths(self, tmp_path):
        manifest = json.loads((release.PLUGIN_DIR / "manifest.json").read_text(encoding="utf-8"))
        package = release.build_package(dist_dir=tmp_path)

        with zipfile.ZipFile(package) as archive:
            names = set(archive.namelist())
        assert manifest["CodePathMac"] in names
        assert manifest["CodePathWin"] in names
        assert "bf6stats/main.py" in names
        assert "bf6stats/logs/event_templates.json" in names
        assert not any("__pycache__" in name or name.endswith(".pyc") for name in names)

    def test_publish_recreates_existing_release(self, tmp_path):
        package = tmp_path / "pkg.streamDeckPlugin"
        package.write_bytes(b"zip")
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append(cmd)
            if cmd[:3] == ["gh", "release", "create"]:
                notes = Path(cmd[cmd.index("--notes-file") + 1]).read_text()
                assert "pkg.streamDeckPlugin" in notes

            class _Result:
                returncode = 0

            return _Result()

        with patch.object(release.subprocess, "run", side_effect=fake_run):
            release.publish("1.2.3.0", package, tmp_path)

        assert [c[:3] for c in calls] == [
            ["gh", "release", "view"],
            ["gh", "release", "delete"],
            ["gh", "release", "create"],
        ]
        assert calls[2][3] == "v1.2.3.0"
        assert not (tmp_path / "release-notes.md").exists()
