"""
Convert a parsed XML document into nested dicts and strings.

Attributes and child elements land in one mapping keyed by name. A key that
occurs once holds its value directly; a key that repeats under the same parent
holds a `Many` list with the values in document order. Callers that do not
care which shape they got use `as_list`.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Union
from xml.dom import minidom
from xml.dom.minidom import Node
from xml.parsers.expat import ExpatError

from errors import MalformedResponseError

NormalizedNode = Union[str, Dict[str, Any]]

_TEXT_TYPES = (Node.TEXT_NODE, Node.CDATA_SECTION_NODE)
_SKIPPED_TYPES = (
    Node.COMMENT_NODE,
    Node.PROCESSING_INSTRUCTION_NODE,
    Node.DOCUMENT_TYPE_NODE,
)


class Many(list):
    """Values of a key that occurred more than once under the same parent."""

    def __repr__(self) -> str:
        return f"Many({list.__repr__(self)})"


def as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, Many):
        return list(value)
    return [value]


def node_key(node: Node) -> str:
    # "#text" -> "text", "#cdata-section" -> "cdata-section"
    return re.sub(r"^#", "", node.nodeName)


def _content_children(node: Node) -> List[Node]:
    children = [c for c in node.childNodes if c.nodeType not in _SKIPPED_TYPES]
    texts = [c for c in children if c.nodeType in _TEXT_TYPES]
    if any(c.nodeType == Node.ELEMENT_NODE for c in children) or not any(
        c.nodeValue.strip() for c in texts
    ):
        # whitespace between elements, or inside an otherwise empty element, is layout
        children = [
            c for c in children
            if not (c.nodeType in _TEXT_TYPES and not c.nodeValue.strip())
        ]
    return children


def _insert(tree: Dict[str, Any], key: str, value: NormalizedNode) -> None:
    if key not in tree:
        tree[key] = value
    elif isinstance(tree[key], Many):
        tree[key].append(value)
    else:
        tree[key] = Many([tree[key], value])


def normalize(node: Node) -> NormalizedNode:
    """Normalize a DOM node (document, element or text) depth-first, attributes before children."""
    if node.nodeType in _TEXT_TYPES:
        return node.nodeValue

    tree: Dict[str, Any] = {}
    has_attributes = False
    if node.nodeType == Node.ELEMENT_NODE:
        for name, value in node.attributes.items():
            tree[name] = value
            has_attributes = True

    children = _content_children(node)
    if (
        node.nodeType == Node.ELEMENT_NODE
        and not has_attributes
        and children
        and all(c.nodeType in _TEXT_TYPES for c in children)
    ):
        return "".join(c.nodeValue for c in children)

    for child in children:
        _insert(tree, node_key(child), normalize(child))
    return tree


def parse_xml(text: str) -> minidom.Document:
    try:
        return minidom.parseString(text)
    except (ExpatError, ValueError) as exc:
        raise MalformedResponseError(f"Invalid XML document: {exc}") from exc


def xml_to_tree(text: str) -> NormalizedNode:
    return normalize(parse_xml(text))
