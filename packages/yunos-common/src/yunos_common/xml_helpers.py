# SPDX-License-Identifier: MIT
"""XML helpers for Cordova style configuration documents.

Documents are parsed so that namespace prefixes stay literal: an attribute
written as ``yunos:name`` in the source file is stored under the key
``"yunos:name"`` and the default ``xmlns`` namespace is dropped from tag
names. Namespace declarations are kept as plain attributes on the root
element so a parse/write cycle reproduces the same document. Comments
inside the root element are kept as comment nodes.

The module also provides the clobber merge used to fold a project's
``config.xml`` into the platform copy, and the graft/prune primitives used
to replay plugin config munges.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Optional

# Tags never merged from a source document into the platform document
MERGE_BLACKLIST = ("platform", "feature", "plugin", "engine")

# Tags that may appear only once in a document
MERGE_SINGLETONS = ("content", "author", "name")

_TAG_RE = re.compile(r"<(?![!?])/?([^\s/>]+)([^>]*)>")
_QUOTED_RE = re.compile(r"\"[^\"]*\"|'[^']*'")
_ATTR_PREFIX_RE = re.compile(r"([A-Za-z_][\w.-]*):[A-Za-z_][\w.-]*\s*=")
_ROOT_TAG_RE = re.compile(r"<(?![?!/])[^\s>/]+")
_QNAME_RE = re.compile(r"^\{(?P<uri>[^}]*)\}(?P<local>.+)$")
_RESERVED_PREFIXES = {"xml", "xmlns"}


class XmlError(Exception):
    """Raised when an XML document or fragment cannot be parsed."""

    pass


def _used_prefixes(text: str) -> set[str]:
    """Collect prefixes of tag and attribute names, skipping attribute values."""
    used: set[str] = set()
    for match in _TAG_RE.finditer(text):
        name, attributes = match.groups()
        if ":" in name:
            used.add(name.split(":", 1)[0])
        used.update(_ATTR_PREFIX_RE.findall(_QUOTED_RE.sub('""', attributes)))
    return used


def _declare_missing_prefixes(text: str) -> str:
    """Declare placeholder namespaces for prefixes the document never binds.

    Cordova documents often use ``yunos:name`` style attributes without an
    ``xmlns:yunos`` declaration, which expat rejects.
    """
    used = _used_prefixes(text) - _RESERVED_PREFIXES
    missing = sorted(p for p in used if f"xmlns:{p}=" not in text)
    if not missing:
        return text

    match = _ROOT_TAG_RE.search(text)
    if match is None:
        return text

    declarations = "".join(f' xmlns:{p}="urn:cordova-yunos:{p}"' for p in missing)
    return text[: match.end()] + declarations + text[match.end() :]


def _localize(name: str, prefixes: dict[str, str]) -> str:
    match = _QNAME_RE.match(name)
    if not match or match.group("uri") not in prefixes:
        return name
    prefix = prefixes[match.group("uri")]
    local = match.group("local")
    return f"{prefix}:{local}" if prefix else local


def _localize_tree(root: ET.Element, prefixes: dict[str, str]) -> None:
    for elem in root.iter():
        if isinstance(elem.tag, str):
            elem.tag = _localize(elem.tag, prefixes)
        if any(key.startswith("{") for key in elem.attrib):
            items = [(_localize(key, prefixes), value) for key, value in elem.attrib.items()]
            elem.attrib.clear()
            for key, value in items:
                elem.set(key, value)


class _CommentKeepingBuilder:
    """Parser target that keeps comments and records namespace prefixes.

    Comments outside the root element are still dropped.
    """

    def __init__(self) -> None:
        self._builder = ET.TreeBuilder(insert_comments=True)
        self.prefixes: dict[str, str] = {}

    def start_ns(self, prefix: str, uri: str) -> None:
        self.prefixes.setdefault(uri, prefix)

    def start(self, tag: str, attrib: dict[str, str]) -> ET.Element:
        return self._builder.start(tag, attrib)

    def end(self, tag: str) -> ET.Element:
        return self._builder.end(tag)

    def data(self, data: str) -> None:
        self._builder.data(data)

    def comment(self, text: str) -> ET.Element:
        return self._builder.comment(text)

    def close(self) -> ET.Element:
        return self._builder.close()


def _parse_text(text: str) -> tuple[ET.Element, dict[str, str]]:
    """Parse XML text, returning the root and a uri -> prefix map."""
    builder = _CommentKeepingBuilder()
    parser = ET.XMLParser(target=builder)
    try:
        parser.feed(_declare_missing_prefixes(text))
        root = parser.close()
    except ET.ParseError as e:
        raise XmlError(f"Invalid XML: {e}") from e

    if root is None:
        raise XmlError("Document has no root element")

    _localize_tree(root, builder.prefixes)
    return root, builder.prefixes


def parse_elementtree(path: str | Path) -> ET.ElementTree:
    """Parse an XML file with literal namespace prefixes.

    Args:
        path: Path to the XML file

    Returns:
        The parsed ElementTree

    Raises:
        FileNotFoundError: If the file doesn't exist
        XmlError: If the file is not well-formed XML
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"XML file not found: {path}")

    try:
        root, prefixes = _parse_text(path.read_text(encoding="utf-8"))
    except XmlError as e:
        raise XmlError(f"{path}: {e}") from e

    for uri, prefix in prefixes.items():
        root.set(f"xmlns:{prefix}" if prefix else "xmlns", uri)
    return ET.ElementTree(root)


def parse_fragment(text: str) -> ET.Element:
    """Parse a single-element XML fragment such as a recorded munge entry."""
    root, _ = _parse_text(f"<fragment>{text}</fragment>")
    children = [child for child in root if isinstance(child.tag, str)]
    if len(children) != 1:
        raise XmlError(f"Expected exactly one element in fragment, found {len(children)}")
    return children[0]


def write_elementtree(tree: ET.ElementTree, path: str | Path) -> None:
    """Write a document with four-space indentation and an XML declaration."""
    ET.indent(tree, space="    ")
    tree.write(Path(path), encoding="utf-8", xml_declaration=True)


def children_by_tag(elem: ET.Element, tag: str) -> list[ET.Element]:
    """Return direct children with the given literal tag.

    ElementTree's path syntax rejects ``prefix:tag`` names without a
    namespace map, so prefixed tags are matched by hand.
    """
    return [child for child in elem if child.tag == tag]


def _normalized_text(elem: ET.Element) -> str:
    return "".join((elem.text or "").split())


def _text_match(a: ET.Element, b: ET.Element) -> bool:
    return _normalized_text(a) == _normalized_text(b)


def _attrib_match(a: ET.Element, b: ET.Element) -> bool:
    return dict(a.attrib) == dict(b.attrib)


def equal_nodes(a: ET.Element, b: ET.Element) -> bool:
    """Deep structural equality ignoring insignificant whitespace."""
    if a.tag != b.tag or not _text_match(a, b) or not _attrib_match(a, b):
        return False
    a_children = list(a)
    b_children = list(b)
    if len(a_children) != len(b_children):
        return False
    return all(equal_nodes(x, y) for x, y in zip(a_children, b_children))


def _merge_attributes(src: ET.Element, dest: ET.Element, clobber: bool) -> None:
    for name, value in src.attrib.items():
        if clobber or not dest.get(name):
            dest.set(name, value)


def _merge_child(
    src_child: ET.Element,
    dest: ET.Element,
    platform: Optional[str],
    clobber: bool,
) -> None:
    tag = src_child.tag
    if not isinstance(tag, str) or tag in MERGE_BLACKLIST:
        return

    dest_child: Optional[ET.Element] = None
    should_merge = True

    if tag in MERGE_SINGLETONS:
        existing = children_by_tag(dest, tag)
        if existing:
            dest_child = existing[0]
            dest.remove(dest_child)
    else:
        # An identical child is moved to the end instead of duplicated
        for candidate in children_by_tag(dest, tag):
            if _text_match(src_child, candidate) and _attrib_match(src_child, candidate):
                dest_child = candidate
                dest.remove(candidate)
                should_merge = False
                break

    if dest_child is None:
        dest_child = ET.Element(tag)

    merge_xml(src_child, dest_child, platform, clobber and should_merge)
    dest.append(dest_child)


def _remove_duplicate_preferences(elem: ET.Element) -> None:
    preferences = [
        child
        for child in children_by_tag(elem, "preference")
        if child.get("name") is not None and child.get("value") is not None
    ]
    if not preferences:
        return

    values: dict[str, str] = {}
    for pref in preferences:
        values[pref.get("name", "")] = pref.get("value", "")
    for pref in preferences:
        elem.remove(pref)
    for name, value in values.items():
        ET.SubElement(elem, "preference", {"name": name, "value": value})


def merge_xml(
    src: ET.Element,
    dest: ET.Element,
    platform: Optional[str] = None,
    clobber: bool = False,
) -> None:
    """Merge ``src`` into ``dest`` in place.

    With ``clobber`` set, source attributes and text replace the destination
    ones. Children of ``<platform name="...">`` in the source are merged
    after the root children, so platform-scoped values take precedence.
    Preferences are de-duplicated by name afterwards, last value wins.

    Args:
        src: Element to merge from
        dest: Element to merge into
        platform: Platform whose scoped section is folded into ``dest``
        clobber: Whether source values overwrite conflicting ones
    """
    _merge_attributes(src, dest, clobber)
    if src.text and src.text.strip() and (clobber or not (dest.text or "").strip()):
        dest.text = src.text

    for child in list(src):
        _merge_child(child, dest, platform, clobber)

    if platform:
        for platform_elem in children_by_tag(src, "platform"):
            if platform_elem.get("name") != platform:
                continue
            for child in list(platform_elem):
                _merge_child(child, dest, platform, clobber)

    _remove_duplicate_preferences(dest)


def resolve_parent(root: ET.Element, selector: str) -> Optional[ET.Element]:
    """Resolve a munge selector against a document root.

    Absolute selectors start with ``/`` and name the root (or ``*``);
    anything else is an ElementTree path relative to the root.
    """
    if selector.startswith("/"):
        head, _, rest = selector[1:].partition("/")
        if head not in ("*", root.tag):
            return None
        if not rest:
            return root
        selector = rest

    try:
        return root.find(selector)
    except SyntaxError as e:
        raise XmlError(f"Invalid selector {selector!r}: {e}") from e


def graft_xml(root: ET.Element, nodes: Iterable[ET.Element], selector: str) -> bool:
    """Append ``nodes`` under the element matched by ``selector``.

    A node is skipped when an identical child already exists.

    Returns:
        False if the selector did not match anything
    """
    parent = resolve_parent(root, selector)
    if parent is None:
        return False

    for node in nodes:
        if any(equal_nodes(node, child) for child in children_by_tag(parent, node.tag)):
            continue
        parent.append(node)
    return True


def graft_xml_merge(root: ET.Element, nodes: Iterable[ET.Element], selector: str) -> bool:
    """Clobber-merge ``nodes`` into the element matched by ``selector``."""
    target = resolve_parent(root, selector)
    if target is None:
        return False

    for node in nodes:
        merge_xml(node, target, clobber=True)
    return True


def graft_xml_overwrite(root: ET.Element, nodes: Iterable[ET.Element], selector: str) -> bool:
    """Replace the attributes of the element matched by ``selector``."""
    target = resolve_parent(root, selector)
    if target is None:
        return False

    for node in nodes:
        target.attrib.clear()
        merge_xml(node, target, clobber=True)
    return True


def prune_xml_remove(root: ET.Element, nodes: Iterable[ET.Element], selector: str) -> bool:
    """Remove the attributes named by ``nodes`` from the selected element."""
    target = resolve_parent(root, selector)
    if target is None:
        return False

    for node in nodes:
        for name in node.attrib:
            target.attrib.pop(name, None)
    return True
