"""Helpers for building mdast trees and checking JATS output in tests."""

from typing import Any
from xml.etree.ElementTree import Element as XmlElement

from defusedxml.ElementTree import fromstring

from myst_jats.api import JatsResult, write_single_article_jats
from myst_jats.constants import JATS_DOCTYPE, JATS_NAMESPACES, XML_DECLARATION
from myst_jats.options import JatsOptions

_NAMESPACE_DECLARATIONS = " ".join(f'{key}="{value}"' for key, value in JATS_NAMESPACES.items())

# declaration written on the root of any output using xlink attributes
XLINK = f'xmlns:xlink="{JATS_NAMESPACES["xmlns:xlink"]}"'


def node(node_type: str, *children: dict[str, Any], **fields: Any) -> dict[str, Any]:
    """Build an mdast node mapping; children are only set when given."""
    result: dict[str, Any] = {"type": node_type, **fields}
    if children:
        result["children"] = list(children)
    return result


def text(value: str) -> dict[str, Any]:
    return {"type": "text", "value": value}


def paragraph(*children: dict[str, Any], **fields: Any) -> dict[str, Any]:
    return node("paragraph", *children, **fields)


def root(*children: dict[str, Any]) -> dict[str, Any]:
    return {"type": "root", "children": list(children)}


def write(*children: dict[str, Any], **option_fields: Any) -> JatsResult:
    """Write a root holding ``children`` with the given option fields."""
    return write_single_article_jats(root(*children), JatsOptions(**option_fields))


def body_xml(*children: dict[str, Any], **option_fields: Any) -> str:
    return write(*children, **option_fields).value


def parse_fragment(xml: str) -> XmlElement:
    """Parse XML that may use JATS namespace prefixes without declaring them."""
    return fromstring(f"<fragment {_NAMESPACE_DECLARATIONS}>{xml}</fragment>")[0]


def parse_document(xml: str) -> XmlElement:
    """Parse a full article, dropping the XML declaration and DOCTYPE lines."""
    for line in (XML_DECLARATION, JATS_DOCTYPE):
        if xml.startswith(line):
            xml = xml[len(line):].lstrip("\n")
    return fromstring(xml)
