#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/ast/nodes.py
"""AST node classes for scientific document representation.

This module defines the node hierarchy consumed by the JATS writer. The
hierarchy mirrors the MyST / mdast document model: every node carries a
``type`` tag (``"paragraph"``, ``"crossReference"``, ...) which is the key
used by the JATS handler table.

Node Hierarchy
--------------
All nodes inherit from :class:`Node`, which carries the fields shared by every
document construct:

    - ``identifier``: target of cross-references
    - ``label``: visible label (footnotes) or original reference label
    - ``enumerated`` / ``enumerator``: numbering assigned upstream

Parent nodes (:class:`Parent`) own an ordered ``children`` list. Literal nodes
(:class:`Literal`) own a raw string ``value``. The remaining nodes are leaves.

Node types that are not part of the known set are loaded as
:class:`GenericNode`, which keeps the original tag so the writer can report it
and carry on.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal as TypingLiteral, Optional

Alignment = TypingLiteral["left", "center", "right"]


@dataclass
class Node:
    """Base class for all AST nodes.

    Parameters
    ----------
    identifier : str or None, default = None
        Normalized identifier, the target of cross-references
    label : str or None, default = None
        Original label (visible label for footnotes, citation key for cites)
    enumerated : bool or None, default = None
        Whether the node is numbered. ``None`` means "not specified" and is
        treated as numbered when an enumerator is present
    enumerator : str or None, default = None
        Number assigned upstream (e.g. ``"2"``, ``"3.1"``)
    data : dict, default = empty dict
        Extra fields the node was loaded with that have no typed attribute

    """

    node_type: ClassVar[str] = ""

    identifier: Optional[str] = None
    label: Optional[str] = None
    enumerated: Optional[bool] = None
    enumerator: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def type(self) -> str:
        """Return the node-type tag used for handler dispatch."""
        return self.node_type


@dataclass
class Parent(Node):
    """Node with an ordered list of child nodes."""

    children: list[Node] = field(default_factory=list)


@dataclass
class Literal(Node):
    """Node holding a raw string value."""

    value: str = ""


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Root(Parent):
    """Root of a document tree."""

    node_type: ClassVar[str] = "root"


@dataclass
class Block(Parent):
    """Top-level grouping of content produced by block markers."""

    node_type: ClassVar[str] = "block"


@dataclass
class Section(Parent):
    """Section grouping a heading and the content that follows it.

    Sections are created by :func:`myst_jats.ast.transforms.basic_transformations`
    from the flat heading structure of a parsed document.

    Parameters
    ----------
    depth : int, default = 1
        Depth of the heading that opened this section

    """

    node_type: ClassVar[str] = "section"

    depth: int = 1


@dataclass
class Paragraph(Parent):
    """Paragraph containing inline content."""

    node_type: ClassVar[str] = "paragraph"


@dataclass
class Heading(Parent):
    """Heading node.

    Parameters
    ----------
    depth : int, default = 1
        Heading level (1-6, where 1 is most important)

    """

    node_type: ClassVar[str] = "heading"

    depth: int = 1

    def __post_init__(self) -> None:
        """Validate heading depth is between 1 and 6."""
        if not 1 <= self.depth <= 6:
            raise ValueError(f"Heading depth must be 1-6, got {self.depth}")


@dataclass
class Blockquote(Parent):
    """Block quotation."""

    node_type: ClassVar[str] = "blockquote"


@dataclass
class Attrib(Parent):
    """Attribution line of a quotation."""

    node_type: ClassVar[str] = "attrib"


@dataclass
class DefinitionList(Parent):
    """Definition list holding definition items (or loose terms/descriptions)."""

    node_type: ClassVar[str] = "definitionList"


@dataclass
class DefinitionItem(Parent):
    """A term together with its descriptions."""

    node_type: ClassVar[str] = "definitionItem"


@dataclass
class DefinitionTerm(Parent):
    node_type: ClassVar[str] = "definitionTerm"


@dataclass
class DefinitionDescription(Parent):
    node_type: ClassVar[str] = "definitionDescription"


@dataclass
class List(Parent):
    """Ordered or bullet list.

    Parameters
    ----------
    ordered : bool, default = False
        True for numbered lists
    start : int or None, default = None
        Starting number of an ordered list
    spread : bool or None, default = None
        Whether items are separated by blank lines

    """

    node_type: ClassVar[str] = "list"

    ordered: bool = False
    start: Optional[int] = None
    spread: Optional[bool] = None


@dataclass
class ListItem(Parent):
    node_type: ClassVar[str] = "listItem"

    spread: Optional[bool] = None


@dataclass
class ThematicBreak(Node):
    """Horizontal rule."""

    node_type: ClassVar[str] = "thematicBreak"


@dataclass
class Code(Literal):
    """Code block.

    Parameters
    ----------
    lang : str or None, default = None
        Programming language of the code
    meta : str or None, default = None
        Remainder of the info string

    """

    node_type: ClassVar[str] = "code"

    lang: Optional[str] = None
    meta: Optional[str] = None


@dataclass
class Math(Literal):
    """Display equation with LaTeX source in ``value``."""

    node_type: ClassVar[str] = "math"


@dataclass
class MystDirective(Parent):
    """Directive wrapper kept after directive expansion."""

    node_type: ClassVar[str] = "mystDirective"

    name: str = ""
    args: Optional[str] = None


@dataclass
class MystComment(Literal):
    node_type: ClassVar[str] = "mystComment"


@dataclass
class Comment(Literal):
    node_type: ClassVar[str] = "comment"


@dataclass
class Admonition(Parent):
    """Callout box (note, warning, tip...).

    Parameters
    ----------
    kind : str or None, default = None
        Admonition kind, e.g. ``"note"``

    """

    node_type: ClassVar[str] = "admonition"

    kind: Optional[str] = None


@dataclass
class AdmonitionTitle(Parent):
    node_type: ClassVar[str] = "admonitionTitle"


@dataclass
class Container(Parent):
    """Captioned container for figures, tables, quotes and code.

    Parameters
    ----------
    kind : str or None, default = None
        One of ``"figure"``, ``"table"``, ``"quote"``, ``"code"``

    """

    node_type: ClassVar[str] = "container"

    kind: Optional[str] = None


@dataclass
class Caption(Parent):
    node_type: ClassVar[str] = "caption"


@dataclass
class CaptionNumber(Parent):
    """Rendered number of a caption (e.g. "Figure 1")."""

    node_type: ClassVar[str] = "captionNumber"

    kind: Optional[str] = None


@dataclass
class Table(Parent):
    node_type: ClassVar[str] = "table"

    align: Optional[list[Optional[Alignment]]] = None


@dataclass
class TableHead(Parent):
    node_type: ClassVar[str] = "tableHead"


@dataclass
class TableBody(Parent):
    node_type: ClassVar[str] = "tableBody"


@dataclass
class TableFooter(Parent):
    node_type: ClassVar[str] = "tableFooter"


@dataclass
class TableRow(Parent):
    node_type: ClassVar[str] = "tableRow"


@dataclass
class TableCell(Parent):
    """Table cell with optional span and alignment.

    Parameters
    ----------
    header : bool, default = False
        True for header cells
    align : {'left', 'center', 'right'} or None, default = None
        Cell alignment
    colspan : int or None, default = None
        Number of columns this cell spans
    rowspan : int or None, default = None
        Number of rows this cell spans
    width : float or None, default = None
        Relative width of the column

    """

    node_type: ClassVar[str] = "tableCell"

    header: bool = False
    align: Optional[Alignment] = None
    colspan: Optional[int] = None
    rowspan: Optional[int] = None
    width: Optional[float] = None


@dataclass
class FootnoteDefinition(Parent):
    """Footnote body; ``identifier`` links it to its references."""

    node_type: ClassVar[str] = "footnoteDefinition"


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Literal):
    node_type: ClassVar[str] = "text"


@dataclass
class Strong(Parent):
    node_type: ClassVar[str] = "strong"


@dataclass
class Emphasis(Parent):
    node_type: ClassVar[str] = "emphasis"


@dataclass
class Underline(Parent):
    node_type: ClassVar[str] = "underline"


@dataclass
class Subscript(Parent):
    node_type: ClassVar[str] = "subscript"


@dataclass
class Superscript(Parent):
    node_type: ClassVar[str] = "superscript"


@dataclass
class Delete(Parent):
    """Struck-through text."""

    node_type: ClassVar[str] = "delete"


@dataclass
class Smallcaps(Parent):
    node_type: ClassVar[str] = "smallcaps"


@dataclass
class InlineCode(Literal):
    node_type: ClassVar[str] = "inlineCode"


@dataclass
class InlineMath(Literal):
    """Inline equation with LaTeX source in ``value``."""

    node_type: ClassVar[str] = "inlineMath"


@dataclass
class MystRole(Parent):
    node_type: ClassVar[str] = "mystRole"

    name: str = ""


@dataclass
class Break(Node):
    """Hard line break."""

    node_type: ClassVar[str] = "break"


@dataclass
class Link(Parent):
    """Hyperlink to an external resource.

    Parameters
    ----------
    url : str, default = ""
        Link target
    title : str or None, default = None
        Advisory title

    """

    node_type: ClassVar[str] = "link"

    url: str = ""
    title: Optional[str] = None


@dataclass
class Image(Node):
    """Image reference.

    Parameters
    ----------
    url : str, default = ""
        Image source, local path or remote URL
    alt : str or None, default = None
        Alternative text
    title : str or None, default = None
        Advisory title
    width : str or None, default = None
        Requested display width (e.g. ``"50%"``)
    align : {'left', 'center', 'right'} or None, default = None
        Requested alignment

    """

    node_type: ClassVar[str] = "image"

    url: str = ""
    alt: Optional[str] = None
    title: Optional[str] = None
    width: Optional[str] = None
    align: Optional[Alignment] = None


@dataclass
class CrossReference(Parent):
    """Reference to a numbered target in the same document.

    Parameters
    ----------
    kind : str or None, default = None
        Kind of the target: ``"heading"``, ``"figure"``, ``"equation"``,
        ``"table"`` or any custom kind

    """

    node_type: ClassVar[str] = "crossReference"

    kind: Optional[str] = None


@dataclass
class CiteGroup(Parent):
    node_type: ClassVar[str] = "citeGroup"

    kind: Optional[str] = None


@dataclass
class Cite(Parent):
    """Citation of a bibliography entry; ``label`` is the citation key."""

    node_type: ClassVar[str] = "cite"

    kind: Optional[str] = None
    partial: Optional[str] = None


@dataclass
class FootnoteReference(Node):
    node_type: ClassVar[str] = "footnoteReference"


# ============================================================================
# Fallback
# ============================================================================


@dataclass
class GenericNode(Node):
    """Node of a type the library does not model.

    Parameters
    ----------
    type_name : str, default = "unknown"
        The original node-type tag
    children : list of Node or None, default = None
        Children, when the original node had any
    value : str or None, default = None
        Literal value, when the original node had one

    """

    type_name: str = "unknown"
    children: Optional[list[Node]] = None
    value: Optional[str] = None

    @property
    def type(self) -> str:
        """Return the original node-type tag."""
        return self.type_name


NODE_CLASSES: dict[str, type[Node]] = {
    cls.node_type: cls
    for cls in (
        Root,
        Block,
        Section,
        Paragraph,
        Heading,
        Blockquote,
        Attrib,
        DefinitionList,
        DefinitionItem,
        DefinitionTerm,
        DefinitionDescription,
        List,
        ListItem,
        ThematicBreak,
        Code,
        Math,
        MystDirective,
        MystComment,
        Comment,
        Admonition,
        AdmonitionTitle,
        Container,
        Caption,
        CaptionNumber,
        Table,
        TableHead,
        TableBody,
        TableFooter,
        TableRow,
        TableCell,
        FootnoteDefinition,
        Text,
        Strong,
        Emphasis,
        Underline,
        Subscript,
        Superscript,
        Delete,
        Smallcaps,
        InlineCode,
        InlineMath,
        MystRole,
        Break,
        Link,
        Image,
        CrossReference,
        CiteGroup,
        Cite,
        FootnoteReference,
    )
}


def get_node_children(node: Node) -> list[Node]:
    """Return the children of a node (empty list for literals and leaves)."""
    children = getattr(node, "children", None)
    return list(children) if children is not None else []


def has_children(node: Node) -> bool:
    """Return True when the node carries a children list, even an empty one."""
    return getattr(node, "children", None) is not None


def get_node_value(node: Node) -> Optional[str]:
    """Return the literal value of a node, if it has one."""
    return getattr(node, "value", None)
