# SPDX-License-Identifier: MIT
"""End-to-end tests for prepare and clean."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from yunos_common import ConfigParser
from yunos_prepare import CordovaProject, Locations, ManifestError, clean, prepare
from yunos_prepare.prepare import read_permissions


@pytest.fixture
def locations(yunos_project: Path) -> Locations:
    return Locations.for_platform(yunos_project / "platforms" / "yunos")


def _prepare(root: Path, locations: Locations) -> ConfigParser:
    return prepare(CordovaProject.from_root(root), locations)


def _manifest(locations: Locations) -> dict[str, Any]:
    return json.loads(locations.manifest.read_text(encoding="utf-8"))


def _snapshot(base: Path) -> dict[str, bytes]:
    return {
        p.relative_to(base).as_posix(): p.read_bytes()
        for p in sorted(base.rglob("*"))
        if p.is_file()
    }


class TestPrepare:
    """Tests for the full prepare pipeline."""

    def test_returns_merged_config(self, yunos_project: Path, locations: Locations) -> None:
        config = _prepare(yunos_project, locations)
        assert config.package_name() == "com.example.hello"
        assert config.path == locations.config_xml

    def test_manifest_identity(self, yunos_project: Path, locations: Locations) -> None:
        _prepare(yunos_project, locations)
        manifest = _manifest(locations)
        domain = manifest["domain"]
        assert domain["name"] == "com.example.hello"
        assert domain["version"] == "1.2.3"
        assert domain["version_code"] == 10203
        assert manifest["pages"][0]["uri"] == "page://com.example.hello/HelloYunOS"

    def test_manifest_display_and_user_agent(
        self, yunos_project: Path, locations: Locations
    ) -> None:
        _prepare(yunos_project, locations)
        page = _manifest(locations)["pages"][0]
        assert page["display"] == {
            "orientation": "landscape_left",
            "theme": "light",
            "fullscreen": True,
        }
        assert page["extension"]["web_app"] == {
            "start_url": "index.html",
            "append_user_agent": "HelloYunOS/1.0",
        }

    def test_manifest_permissions_and_events(
        self, yunos_project: Path, locations: Locations
    ) -> None:
        _prepare(yunos_project, locations)
        manifest = _manifest(locations)
        assert manifest["domain"]["permission"]["use_permission"] == [
            "yunos.permission.INTERNET",
            "yunos.permission.DEVICE",
            "yunos.permission.CAMERA",
        ]
        assert manifest["pages"][0]["events"] == [
            {"name": "launch"},
            {"name": "yunos.event.PUSH"},
        ]
        assert "events" not in manifest["pages"][1]

    def test_untouched_fields_preserved(self, yunos_project: Path, locations: Locations) -> None:
        _prepare(yunos_project, locations)
        manifest = _manifest(locations)
        assert manifest["domain"]["vendor"] == "keep-me"
        assert manifest["custom"] == {"keep": True}
        assert manifest["pages"][1] == {"uri": "page://com.yunos.template/Settings"}

    def test_icons_and_splashes(self, yunos_project: Path, locations: Locations) -> None:
        _prepare(yunos_project, locations)
        assert _snapshot(locations.res) == {
            "default/icon.png": b"default-icon",
            "mdpi/icon.png": b"mdpi-icon",
            "hdpi/icon.png": b"hdpi-icon",
            "default/splashScreen.png": b"default-splash",
            "hdpi/splashScreen.png": b"hdpi-splash",
        }
        page = _manifest(locations)["pages"][0]
        assert page["icon"] == "icon.png"
        assert page["splash"] == "splashScreen.png"

    def test_www_synchronized(self, yunos_project: Path, locations: Locations) -> None:
        _prepare(yunos_project, locations)
        assert set(_snapshot(locations.www)) == {"cordova.js", "index.html", "js/index.js"}

    def test_repeated_prepare_is_identical(
        self, yunos_project: Path, locations: Locations
    ) -> None:
        """Test that preparing twice leaves the platform project unchanged."""
        _prepare(yunos_project, locations)
        first = _snapshot(locations.root)
        _prepare(yunos_project, locations)
        assert _snapshot(locations.root) == first

    def test_no_icons_declared(self, yunos_project: Path, locations: Locations) -> None:
        config_xml = yunos_project / "config.xml"
        text = config_xml.read_text(encoding="utf-8")
        lines = [line for line in text.splitlines() if "<icon" not in line and "<splash" not in line]
        config_xml.write_text("\n".join(lines), encoding="utf-8")

        _prepare(yunos_project, locations)
        page = _manifest(locations)["pages"][0]
        assert "icon" not in page
        assert "splash" not in page
        assert not locations.res.exists()

    def test_missing_manifest(self, yunos_project: Path, locations: Locations) -> None:
        locations.manifest.unlink()
        with pytest.raises(ManifestError):
            _prepare(yunos_project, locations)


class TestReadPermissions:
    def test_reads_prefixed_names(self, yunos_project: Path, locations: Locations) -> None:
        config = _prepare(yunos_project, locations)
        permissions, events = read_permissions(config)
        assert permissions == ["yunos.permission.DEVICE", "yunos.permission.CAMERA"]
        assert events == ["yunos.event.PUSH"]


class TestClean:
    """Tests for clean."""

    def test_removes_prepared_files(self, yunos_project: Path, locations: Locations) -> None:
        _prepare(yunos_project, locations)
        assert clean(locations, yunos_project)
        assert list(locations.www.iterdir()) == []
        assert _snapshot(locations.res) == {}
        assert locations.manifest.exists()
        assert locations.config_xml.exists()

    def test_uses_platform_config_without_project_config(
        self, yunos_project: Path, locations: Locations
    ) -> None:
        _prepare(yunos_project, locations)
        (yunos_project / "config.xml").unlink()
        assert clean(locations, yunos_project)
        assert _snapshot(locations.res) == {}

    def test_nothing_prepared(self, yunos_project: Path, locations: Locations) -> None:
        assert clean(locations, yunos_project) is False

    def test_no_prepare_flag(self, yunos_project: Path, locations: Locations) -> None:
        _prepare(yunos_project, locations)
        assert clean(locations, yunos_project, no_prepare=True) is False
        assert (locations.www / "index.html").exists()
