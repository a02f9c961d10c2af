#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/jats/writer.py
"""Serialize an element tree to XML text with lxml.

The :class:`~myst_jats.jats.elements.Element` tree is converted to
``lxml.etree`` elements and written with :func:`lxml.etree.tostring`.

Formatting rules:

- attributes whose value is None are omitted
- elements without children are written self-closing
- ``prefix:name`` tags and attributes are resolved against the JATS
  namespaces; every prefix used in the tree is declared on its root element
- with ``spaces`` set, child elements go on their own indented lines. Mixed
  content (an element holding text, CDATA or phrase elements such as
  ``bold`` or ``xref``) and everything below it is
  left exactly as built, so indentation never changes the text of the article
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional

from lxml import etree

from myst_jats.constants import INLINE_TAGS, JATS_DOCTYPE, NAMESPACE_URIS, XML_DECLARATION, XML_NAMESPACE
from myst_jats.exceptions import RenderingError
from myst_jats.jats.elements import CDataNode, Element, TextNode, XmlNode

logger = logging.getLogger(__name__)

# characters not allowed anywhere in an XML 1.0 document
_INVALID_XML_CHARS = re.compile(r"[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _clean(value: str) -> str:
    cleaned = _INVALID_XML_CHARS.sub("", value)
    if len(cleaned) != len(value):
        logger.debug("Dropped %d character(s) not allowed in XML", len(value) - len(cleaned))
    return cleaned


def _qualify(name: str) -> str:
    """Return the lxml (Clark notation) name of a ``prefix:name`` tag or attribute."""
    prefix, sep, local = name.partition(":")
    if not sep:
        return name
    if prefix == "xml":
        return f"{{{XML_NAMESPACE}}}{local}"
    uri = NAMESPACE_URIS.get(prefix)
    if uri is None:
        raise RenderingError(f"Unknown namespace prefix '{prefix}' in '{name}'", rendering_stage="xml")
    return f"{{{uri}}}{local}"


def _iter_elements(node: Element) -> Iterator[Element]:
    yield node
    for child in node.elements or []:
        if isinstance(child, Element):
            yield from _iter_elements(child)


def _namespace_map(root: Element) -> dict[str, str]:
    """Collect the namespaces declared on, or used anywhere below, ``root``."""
    nsmap = {key[len("xmlns:"):]: value for key, value in _declarations(root).items()}
    for node in _iter_elements(root):
        for name in [node.name or "", *node.present_attributes()]:
            prefix, sep, _ = name.partition(":")
            if sep and prefix not in ("xml", "xmlns") and prefix in NAMESPACE_URIS:
                nsmap.setdefault(prefix, NAMESPACE_URIS[prefix])
    return nsmap


def _declarations(node: Element) -> dict[str, str]:
    return {key: value for key, value in node.present_attributes().items() if key.startswith("xmlns:")}


def _is_mixed(node: Element) -> bool:
    """Whether the children of ``node`` are phrase content that must stay inline."""
    return any(
        isinstance(child, (TextNode, CDataNode)) or (isinstance(child, Element) and child.name in INLINE_TAGS)
        for child in node.elements or []
    )


def _attach_text(parent: etree._Element, previous: Optional[etree._Element], runs: list[XmlNode]) -> None:
    """Put a run of text and CDATA after ``previous``, or first in ``parent``."""
    if not runs:
        return
    if previous is None and len(runs) == 1 and isinstance(runs[0], CDataNode) and "]]>" not in runs[0].cdata:
        parent.text = etree.CDATA(_clean(runs[0].cdata))
        return
    # a CDATA terminator in the payload, or CDATA in a tail, is written as escaped text
    value = _clean("".join(run.text if isinstance(run, TextNode) else run.cdata for run in runs))
    if previous is None:
        parent.text = value
    else:
        previous.tail = value


def _build(
    node: Element,
    parent: Optional[etree._Element],
    nsmap: Optional[dict[str, str]],
    space: Optional[str],
    level: int,
) -> etree._Element:
    if node.name is None:
        raise RenderingError("Cannot convert an unnamed element", rendering_stage="xml")
    attributes = {
        _qualify(key): _clean(value)
        for key, value in node.present_attributes().items()
        if not key.startswith("xmlns:")
    }
    if nsmap is None:
        nsmap = {key[len("xmlns:"):]: value for key, value in _declarations(node).items()}
    tag = _qualify(node.name)
    if parent is None:
        el = etree.Element(tag, attrib=attributes, nsmap=nsmap or None)
    else:
        el = etree.SubElement(parent, tag, attrib=attributes, nsmap=nsmap or None)

    mixed = _is_mixed(node)
    child_space = None if mixed else space
    runs: list[XmlNode] = []
    previous: Optional[etree._Element] = None
    for child in node.elements or []:
        if isinstance(child, Element):
            _attach_text(el, previous, runs)
            runs = []
            previous = _build(child, el, None, child_space, level + 1)
        else:
            runs.append(child)
    _attach_text(el, previous, runs)

    if child_space and len(el):
        el.text = "\n" + child_space * (level + 1)
        for sub in el:
            sub.tail = "\n" + child_space * (level + 1)
        el[-1].tail = "\n" + child_space * level
    return el


def to_lxml(node: Element, spaces: Optional[int] = None) -> etree._Element:
    """Convert an element tree to an ``lxml.etree`` element.

    Parameters
    ----------
    node : Element
        Named root of the tree
    spaces : int or None, default = None
        Indentation width written into whitespace-only text positions

    Raises
    ------
    RenderingError
        If the tree has an unnamed element or uses a namespace prefix
        outside the JATS namespaces

    """
    return _build(node, None, _namespace_map(node), " " * spaces if spaces else None, 0)


def to_xml(
    node: Element,
    spaces: Optional[int] = None,
    declaration: bool = False,
    doctype: Optional[str] = None,
) -> str:
    """Serialize an element tree to XML text.

    Parameters
    ----------
    node : Element
        Root of the tree. A nameless root writes each of its child elements
        in turn
    spaces : int or None, default = None
        Indentation width. None writes the whole tree on one line
    declaration : bool, default = False
        Prefix the output with the XML declaration
    doctype : str or None, default = None
        DOCTYPE line written after the declaration

    Returns
    -------
    str
        XML text

    Examples
    --------
        >>> from myst_jats.jats.elements import element, text_element
        >>> to_xml(element("p", None, text_element("bold", "a & b")))
        '<p><bold>a &amp; b</bold></p>'

    """
    if node.name is None:
        if any(not isinstance(child, Element) for child in node.elements or []):
            raise RenderingError("Text outside of an element cannot be serialized", rendering_stage="xml")
        roots = [child for child in node.elements or [] if isinstance(child, Element)]
    else:
        roots = [node]
    separator = "\n" if spaces else ""
    body = separator.join(etree.tostring(to_lxml(root, spaces), encoding="unicode") for root in roots)
    prolog = [line for line in (XML_DECLARATION if declaration else None, doctype) if line]
    if not prolog:
        return body
    return "\n".join([*prolog, body])


def to_jats_document(node: Element, spaces: Optional[int] = None) -> str:
    """Serialize a full article with the XML declaration and JATS 1.3 DOCTYPE."""
    return to_xml(node, spaces=spaces, declaration=True, doctype=JATS_DOCTYPE)


__all__ = ["to_lxml", "to_xml", "to_jats_document"]
