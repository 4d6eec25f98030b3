# SPDX-License-Identifier: MIT
"""JSON Schema for the YunOS application manifest (manifest.json).

Only the fields the prepare step reads or writes are described; everything
else in the manifest is allowed and left alone.
"""

from __future__ import annotations

_STRING = {"type": "string"}

PAGE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "uri": _STRING,
        "main": {"type": "boolean"},
        "icon": _STRING,
        "splash": _STRING,
        "display": {
            "type": "object",
            "properties": {
                "orientation": _STRING,
                "fullscreen": {"type": "boolean"},
            },
        },
        "extension": {
            "type": "object",
            "properties": {
                "web_app": {
                    "type": "object",
                    "properties": {
                        "append_user_agent": _STRING,
                        "override_user_agent": _STRING,
                    },
                },
            },
        },
        "events": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name"],
                "properties": {"name": _STRING},
            },
        },
    },
}

MANIFEST_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "YunOS Manifest",
    "description": "Native application descriptor of a YunOS web application",
    "type": "object",
    "properties": {
        "domain": {
            "type": "object",
            "properties": {
                "name": _STRING,
                "version": _STRING,
                "version_code": {"type": "integer", "minimum": 0},
                "permission": {
                    "type": "object",
                    "properties": {
                        "use_permission": {"type": "array", "items": _STRING},
                    },
                },
            },
        },
        "pages": {"type": "array", "items": PAGE_SCHEMA},
    },
}


def get_manifest_schema() -> dict:
    """Return a copy of the manifest JSON schema."""
    return MANIFEST_SCHEMA.copy()
