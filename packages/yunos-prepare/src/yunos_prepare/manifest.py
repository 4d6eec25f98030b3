# SPDX-License-Identifier: MIT
"""Read-modify-write updates of the YunOS manifest.json.

Each ``update_*`` function applies one concern to an in-memory
:class:`Manifest` and touches nothing else, so fields the prepare step does
not manage survive unchanged. Parent objects are created on demand through
the ``Manifest`` accessors. Callers persist with :func:`patch_manifest`,
one load and save per step.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from jsonschema import Draft202012Validator, ValidationError

from .schema import MANIFEST_SCHEMA
from .versioncode import default_version_code

logger = logging.getLogger(__name__)

ORIENTATION_MAP = {
    "all": "auto",
    "default": "default",
    "landscape": "landscape_left",
    "portrait": "portrait",
}


class ManifestError(Exception):
    """Raised when manifest.json cannot be read or written."""

    pass


@dataclass(frozen=True, slots=True)
class ValidationErrorDetail:
    """Details about a single validation error.

    Attributes:
        field: JSON path to the invalid field (e.g. "pages[0].display")
        message: Human-readable error message
        value: The invalid value, if available
    """

    field: str
    message: str
    value: Any = None


class ManifestValidationError(ManifestError):
    """Raised when manifest.json does not match the expected structure."""

    def __init__(self, path: Path, errors: list[ValidationErrorDetail]):
        self.path = path
        self.errors = errors
        message = f"Invalid manifest {path}: {len(errors)} error(s)"
        if errors:
            message += f", {errors[0].field}: {errors[0].message}"
        super().__init__(message)


def _json_path_from_error(error: ValidationError) -> str:
    if not error.absolute_path:
        return "<root>"
    parts: list[str] = []
    for part in error.absolute_path:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        elif parts:
            parts.append(f".{part}")
        else:
            parts.append(str(part))
    return "".join(parts)


def _format_error_message(error: ValidationError) -> str:
    if error.validator == "type":
        return f"Expected {error.validator_value}, got {type(error.instance).__name__}"
    if error.validator == "required":
        return f"Missing required field: {', '.join(error.validator_value)}"
    if error.validator == "minimum":
        return f"Value must be at least {error.validator_value}"
    return error.message


def validate_manifest(data: Any) -> list[ValidationErrorDetail]:
    """Validate manifest data, returning the errors found (empty if valid)."""
    if not isinstance(data, dict):
        return [
            ValidationErrorDetail(
                field="<root>",
                message=f"Manifest must be an object, got {type(data).__name__}",
                value=data,
            )
        ]

    validator = Draft202012Validator(MANIFEST_SCHEMA)
    return [
        ValidationErrorDetail(
            field=_json_path_from_error(error),
            message=_format_error_message(error),
            value=error.instance if error.absolute_path else None,
        )
        for error in validator.iter_errors(data)
    ]


def _ensure_object(parent: dict[str, Any], key: str) -> dict[str, Any]:
    if parent.get(key) is None:
        parent[key] = {}
    return parent[key]


def _ensure_list(parent: dict[str, Any], key: str) -> list[Any]:
    if parent.get(key) is None:
        parent[key] = []
    return parent[key]


class Manifest:
    """A loaded manifest.json with create-if-absent accessors."""

    def __init__(self, data: Optional[dict[str, Any]] = None) -> None:
        self.data: dict[str, Any] = data if data is not None else {}

    def domain(self) -> dict[str, Any]:
        return _ensure_object(self.data, "domain")

    def pages(self) -> list[dict[str, Any]]:
        return _ensure_list(self.data, "pages")

    def first_page(self) -> dict[str, Any]:
        pages = self.pages()
        if not pages:
            pages.append({})
        return pages[0]

    def main_pages(self) -> list[dict[str, Any]]:
        return [page for page in self.pages() if page.get("main") is True]

    def display(self) -> dict[str, Any]:
        return _ensure_object(self.first_page(), "display")

    def web_app(self) -> dict[str, Any]:
        return _ensure_object(_ensure_object(self.first_page(), "extension"), "web_app")

    def existing_web_app(self) -> Optional[dict[str, Any]]:
        """Return ``pages[0].extension.web_app`` without creating it."""
        pages = self.data.get("pages") or []
        if not pages:
            return None
        extension = pages[0].get("extension")
        if extension is None:
            return None
        return extension.get("web_app")

    def permissions(self) -> list[str]:
        return _ensure_list(_ensure_object(self.domain(), "permission"), "use_permission")


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate a manifest file.

    Raises:
        ManifestError: If the file is missing or is not valid JSON
        ManifestValidationError: If the structure is wrong
    """
    path = Path(path)
    if not path.exists():
        raise ManifestError(f"manifest.json not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e

    errors = validate_manifest(data)
    if errors:
        raise ManifestValidationError(path, errors)
    return Manifest(data)


def save_manifest(manifest: Manifest, path: str | Path) -> None:
    """Write a manifest with four-space indentation."""
    with open(Path(path), "w", encoding="utf-8") as f:
        f.write(json.dumps(manifest.data, indent=4, ensure_ascii=False))


@contextmanager
def patch_manifest(path: str | Path) -> Iterator[Manifest]:
    """Load a manifest, yield it for changes, then write it back.

    Nothing is written if the body raises.
    """
    manifest = load_manifest(path)
    yield manifest
    save_manifest(manifest, path)


def update_identity(manifest: Manifest, package_name: str, name: str, version: str) -> None:
    """Set the domain identity, first page URI and version fields."""
    domain = manifest.domain()
    domain["name"] = package_name
    manifest.first_page()["uri"] = f"page://{package_name}/{name}"
    domain["version"] = version
    domain["version_code"] = default_version_code(version)


def update_orientation(manifest: Manifest, value: str) -> bool:
    """Map a config orientation onto the manifest.

    Unknown values leave the current orientation untouched.

    Returns:
        True if the orientation was written
    """
    orientation = ORIENTATION_MAP.get(value)
    if orientation is None:
        if value:
            logger.debug("Ignoring unsupported orientation %r", value)
        return False
    manifest.display()["orientation"] = orientation
    return True


def update_fullscreen(manifest: Manifest, value: str) -> None:
    manifest.display()["fullscreen"] = value == "true"


def _set_or_clear(target: dict[str, Any], key: str, value: str) -> None:
    if value:
        target[key] = value
    else:
        target.pop(key, None)


def update_user_agent(manifest: Manifest, append: str, override: str) -> None:
    """Write the user agent preferences into ``pages[0].extension.web_app``.

    A preference that is empty is removed from the manifest. When both are
    empty the block is only touched if it already exists.
    """
    if append or override:
        web_app = manifest.web_app()
    else:
        web_app = manifest.existing_web_app()
        if web_app is None:
            return

    _set_or_clear(web_app, "append_user_agent", append)
    _set_or_clear(web_app, "override_user_agent", override)


def update_permissions(
    manifest: Manifest,
    permissions: Iterable[str],
    events: Iterable[str],
) -> None:
    """Add permissions to the domain and events to every main page.

    Entries already present are skipped, so the update is idempotent.
    """
    use_permission = manifest.permissions()
    for permission in permissions:
        if permission and permission not in use_permission:
            use_permission.append(permission)

    events = [event for event in events if event]
    if not events:
        return

    for page in manifest.main_pages():
        page_events = _ensure_list(page, "events")
        for event in events:
            if not any(e.get("name") == event for e in page_events):
                page_events.append({"name": event})


def update_icon(manifest: Manifest, filename: Optional[str]) -> None:
    if filename:
        manifest.first_page()["icon"] = filename


def update_splash(manifest: Manifest, filename: Optional[str]) -> None:
    if filename:
        manifest.first_page()["splash"] = filename
