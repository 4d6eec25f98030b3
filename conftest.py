# SPDX-License-Identifier: MIT
"""Shared fixtures: a Cordova application with a YunOS platform project."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

PROJECT_CONFIG_XML = """<?xml version='1.0' encoding='utf-8'?>
<widget id="com.example.hello" version="1.2.3" xmlns="http://www.w3.org/ns/widgets" xmlns:cdv="http://cordova.apache.org/ns/1.0">
    <name>HelloYunOS</name>
    <description>A sample Apache Cordova application</description>
    <author email="dev@example.com" href="http://example.com">Example Team</author>
    <content src="index.html" />
    <access origin="*" />
    <preference name="Orientation" value="landscape" />
    <preference name="Fullscreen" value="true" />
    <preference name="AppendUserAgent" value="HelloYunOS/1.0" />
    <icon src="res/icon.png" />
    <icon src="res/icon-48.png" width="48" height="48" />
    <splash src="res/splash.png" />
    <splash src="res/splash-hdpi.png" density="hdpi" />
    <feature name="Ignored">
        <param name="yunos-package" value="ignored:Service" />
    </feature>
    <platform name="yunos">
        <uses-permission yunos:name="yunos.permission.CAMERA" />
        <event yunos:name="yunos.event.PUSH" />
        <icon src="res/yunos-icon-72.png" width="72" />
    </platform>
</widget>
"""

DEFAULTS_XML = """<?xml version='1.0' encoding='utf-8'?>
<widget xmlns="http://www.w3.org/ns/widgets" xmlns:cdv="http://cordova.apache.org/ns/1.0">
    <name>Template</name>
    <preference name="loglevel" value="DEBUG" />
    <preference name="Orientation" value="portrait" />
    <feature name="Whitelist">
        <param name="yunos-package" value="whitelist:Whitelist" />
        <param name="onload" value="true" />
    </feature>
</widget>
"""

MANIFEST = {
    "domain": {
        "name": "com.yunos.template",
        "version": "0.0.1",
        "version_code": 1,
        "vendor": "keep-me",
        "permission": {"use_permission": ["yunos.permission.INTERNET"]},
    },
    "pages": [
        {
            "uri": "page://com.yunos.template/Template",
            "main": True,
            "display": {"orientation": "portrait", "theme": "light"},
            "extension": {"web_app": {"start_url": "index.html"}},
            "events": [{"name": "launch"}],
        },
        {"uri": "page://com.yunos.template/Settings"},
    ],
    "custom": {"keep": True},
}

PLATFORM_JSON = {
    "config_munge": {
        "files": {
            "config.xml": {
                "parents": {
                    "/*": [
                        {
                            "xml": (
                                '<feature name="Device">'
                                '<param name="yunos-package" value="device:Device" />'
                                "</feature>"
                            ),
                            "count": 1,
                        },
                        {
                            "xml": '<uses-permission yunos:name="yunos.permission.DEVICE" />',
                            "count": 1,
                        },
                    ]
                }
            }
        }
    },
    "installed_plugins": {"cordova-plugin-device": {}},
    "dependent_plugins": {},
}


def write_file(path: Path, content: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def yunos_project(tmp_path: Path) -> Path:
    """Create an application project with a prepared-for-nothing YunOS platform."""
    root = tmp_path / "hello"

    write_file(root / "config.xml", PROJECT_CONFIG_XML)
    write_file(root / "www" / "index.html", "<html><body>Hello</body></html>\n")
    write_file(root / "www" / "js" / "index.js", "console.log('hello');\n")
    write_file(root / "res" / "icon.png", b"default-icon")
    write_file(root / "res" / "icon-48.png", b"mdpi-icon")
    write_file(root / "res" / "yunos-icon-72.png", b"hdpi-icon")
    write_file(root / "res" / "splash.png", b"default-splash")
    write_file(root / "res" / "splash-hdpi.png", b"hdpi-splash")

    platform = root / "platforms" / "yunos"
    write_file(platform / "cordova" / "defaults.xml", DEFAULTS_XML)
    write_file(platform / "platform_www" / "cordova.js", "// cordova\n")
    write_file(platform / "manifest.json", json.dumps(MANIFEST, indent=4))
    write_file(platform / "yunos.json", json.dumps(PLATFORM_JSON, indent=2))

    return root
