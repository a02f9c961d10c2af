#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/jats/elements.py
"""Output element tree model.

The JATS writer produces a small, generic XML tree made of three node kinds:

- :class:`Element`: a named XML element with attributes and ordered children
- :class:`TextNode`: a run of character data
- :class:`CDataNode`: a raw, unescaped CDATA section (math source only)

These are plain data holders. Building them is the job of
:class:`~myst_jats.jats.serializer.JatsSerializer`; turning them into text is
the job of :mod:`myst_jats.jats.writer`.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

Attributes = dict[str, Optional[str]]


@dataclass
class Element:
    """XML element.

    Parameters
    ----------
    name : str or None
        Tag name. Only the builder's root frame has no name
    attributes : dict or None, default = None
        Attribute mapping; entries whose value is None are omitted on output
    elements : list or None, default = None
        Ordered children. ``None`` marks a self-closing leaf

    """

    name: Optional[str]
    attributes: Optional[Attributes] = None
    elements: Optional[list[XmlNode]] = None

    @property
    def is_leaf(self) -> bool:
        return self.elements is None

    def present_attributes(self) -> dict[str, str]:
        """Return the attributes that will actually be written."""
        return {key: value for key, value in (self.attributes or {}).items() if value is not None}

    def find(self, name: str) -> Optional[Element]:
        """Return the first child element with the given tag name."""
        for child in self.elements or []:
            if isinstance(child, Element) and child.name == name:
                return child
        return None

    def find_all(self, name: str) -> list[Element]:
        """Return all child elements with the given tag name."""
        return [c for c in self.elements or [] if isinstance(c, Element) and c.name == name]

    def text_content(self) -> str:
        """Concatenate the text and CDATA of this element and its descendants."""
        parts: list[str] = []
        for child in self.elements or []:
            if isinstance(child, TextNode):
                parts.append(child.text)
            elif isinstance(child, CDataNode):
                parts.append(child.cdata)
            else:
                parts.append(child.text_content())
        return "".join(parts)


@dataclass
class TextNode:
    """Run of character data."""

    text: str


@dataclass
class CDataNode:
    """Raw CDATA payload."""

    cdata: str


XmlNode = Union[Element, TextNode, CDataNode]


def element(name: str, attributes: Optional[Attributes] = None, *children: XmlNode) -> Element:
    """Build a closed element in one call.

    Used by the front- and back-matter collaborators, which produce small,
    fixed structures rather than walking a document tree.

    """
    return Element(name=name, attributes=attributes, elements=list(children))


def text_element(name: str, text: str, attributes: Optional[Attributes] = None) -> Element:
    """Build an element holding a single text run."""
    return Element(name=name, attributes=attributes, elements=[TextNode(text)])


__all__ = ["Attributes", "Element", "TextNode", "CDataNode", "XmlNode", "element", "text_element"]
