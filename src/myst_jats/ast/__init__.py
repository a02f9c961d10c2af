#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/ast/__init__.py
"""Abstract Syntax Tree (AST) module for scientific documents.

The module consists of several components:

- nodes: typed node classes, one per MyST/mdast node type
- serialization: loading trees from (and dumping them to) mdast JSON
- transforms: cloning, traversal and the pre-pass applied before JATS writing

Examples
--------
Build a small tree by hand:

    >>> from myst_jats.ast import Heading, Paragraph, Root, Text
    >>> root = Root(children=[
    ...     Heading(depth=1, children=[Text(value="Title")]),
    ...     Paragraph(children=[Text(value="Hello world")]),
    ... ])

"""

from __future__ import annotations

from myst_jats.ast.nodes import (
    NODE_CLASSES,
    Admonition,
    AdmonitionTitle,
    Alignment,
    Attrib,
    Block,
    Blockquote,
    Break,
    Caption,
    CaptionNumber,
    Cite,
    CiteGroup,
    Code,
    Comment,
    Container,
    CrossReference,
    DefinitionDescription,
    DefinitionItem,
    DefinitionList,
    DefinitionTerm,
    Delete,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    GenericNode,
    Heading,
    Image,
    InlineCode,
    InlineMath,
    Link,
    List,
    ListItem,
    Literal,
    Math,
    MystComment,
    MystDirective,
    MystRole,
    Node,
    Paragraph,
    Parent,
    Root,
    Section,
    Smallcaps,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableBody,
    TableCell,
    TableFooter,
    TableHead,
    TableRow,
    Text,
    ThematicBreak,
    Underline,
    get_node_children,
    get_node_value,
    has_children,
)
from myst_jats.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast

__all__ = [
    "NODE_CLASSES",
    "Admonition",
    "AdmonitionTitle",
    "Alignment",
    "Attrib",
    "Block",
    "Blockquote",
    "Break",
    "Caption",
    "CaptionNumber",
    "Cite",
    "CiteGroup",
    "Code",
    "Comment",
    "Container",
    "CrossReference",
    "DefinitionDescription",
    "DefinitionItem",
    "DefinitionList",
    "DefinitionTerm",
    "Delete",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "GenericNode",
    "Heading",
    "Image",
    "InlineCode",
    "InlineMath",
    "Link",
    "List",
    "ListItem",
    "Literal",
    "Math",
    "MystComment",
    "MystDirective",
    "MystRole",
    "Node",
    "Paragraph",
    "Parent",
    "Root",
    "Section",
    "Smallcaps",
    "Strong",
    "Subscript",
    "Superscript",
    "Table",
    "TableBody",
    "TableCell",
    "TableFooter",
    "TableHead",
    "TableRow",
    "Text",
    "ThematicBreak",
    "Underline",
    "get_node_children",
    "get_node_value",
    "has_children",
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
]
