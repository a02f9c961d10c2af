#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/ast/transforms.py
"""AST transformation and manipulation utilities.

This module provides the generic tree utilities used before a document is
handed to the JATS writer: deep cloning, traversal, node extraction, and the
normalization pre-pass :func:`basic_transformations`.

The pre-pass reshapes constructs whose parsed form does not line up with the
JATS element structure:

- ``block`` nodes at the top of the tree are dissolved into the root
- runs of definition terms and descriptions are grouped into definition items
- the caption of a quote container becomes the ``attrib`` of its blockquote
- top-level content is nested into ``section`` nodes following heading depth

Examples
--------
Prepare a copy of a tree for writing:

    >>> from myst_jats.ast import transforms
    >>> tree = transforms.clone_node(root)
    >>> transforms.basic_transformations(tree)

Collect all images:

    >>> images = transforms.extract_nodes(root, Image)

"""

from __future__ import annotations

import copy
import logging
from typing import Callable, Iterator, Type, TypeVar

from myst_jats.ast.nodes import (
    Attrib,
    Block,
    Blockquote,
    Caption,
    Container,
    DefinitionDescription,
    DefinitionItem,
    DefinitionList,
    DefinitionTerm,
    Heading,
    Node,
    Paragraph,
    Parent,
    Section,
    get_node_children,
)

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)


def clone_node(node: N) -> N:
    """Create a deep copy of an AST node.

    The writer always works on a clone so that the pre-pass never mutates a
    caller-owned tree.

    """
    return copy.deepcopy(node)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document (pre-)order."""
    yield node
    for child in get_node_children(node):
        yield from iter_nodes(child)


def extract_nodes(root: Node, node_type: Type[N] | None = None) -> list[N]:
    """Extract all nodes of a specific type from a tree.

    Parameters
    ----------
    root : Node
        Tree to search
    node_type : type or None, default = None
        Node class to extract (None for all nodes)

    Returns
    -------
    list of Node
        All matching nodes in document order

    """
    predicate: Callable[[Node], bool] = (lambda n: isinstance(n, node_type)) if node_type else (lambda n: True)
    return [n for n in iter_nodes(root) if predicate(n)]  # type: ignore[misc]


def lift_blocks(tree: Parent) -> None:
    """Replace top-level ``block`` nodes with their children."""
    lifted: list[Node] = []
    for child in tree.children:
        if isinstance(child, Block):
            lifted.extend(child.children)
        else:
            lifted.append(child)
    tree.children = lifted


def group_definition_items(tree: Node) -> None:
    """Wrap each definition term and its descriptions in a ``definitionItem``.

    Parsed definition lists hold a flat run of terms and descriptions, while
    ``def-list`` requires every term/definition pair inside a ``def-item``.

    """
    for dl in extract_nodes(tree, DefinitionList):
        grouped: list[Node] = []
        current: DefinitionItem | None = None
        for child in dl.children:
            if isinstance(child, DefinitionTerm):
                current = DefinitionItem(children=[child])
                grouped.append(current)
            elif isinstance(child, DefinitionDescription):
                if current is None:
                    current = DefinitionItem()
                    grouped.append(current)
                current.children.append(child)
            else:
                current = None
                grouped.append(child)
        dl.children = grouped


def quote_captions_to_attrib(tree: Node) -> None:
    """Move the caption of each quote container into its blockquote as ``attrib``."""
    for container in extract_nodes(tree, Container):
        if container.kind != "quote":
            continue
        quote = next((c for c in container.children if isinstance(c, Blockquote)), None)
        captions = [c for c in container.children if isinstance(c, Caption)]
        if quote is None or not captions:
            continue
        content: list[Node] = []
        for caption in captions:
            for child in caption.children:
                # paragraphs are not allowed inside attrib, keep their inline content
                content.extend(child.children if isinstance(child, Paragraph) else [child])
        quote.children.append(Attrib(children=content))
        container.children = [c for c in container.children if not isinstance(c, Caption)]


def nest_sections(tree: Parent) -> None:
    """Nest top-level content into sections following heading depth.

    Every top-level heading opens a ``section``; following content belongs to
    it until a heading of the same or a shallower depth. The heading's
    identifier moves to the section so the id is carried by ``sec``.

    """
    nested: list[Node] = []
    stack: list[Section] = []
    for child in tree.children:
        if isinstance(child, Heading):
            while stack and stack[-1].depth >= child.depth:
                stack.pop()
            section = Section(depth=child.depth, identifier=child.identifier, children=[child])
            child.identifier = None
            (stack[-1].children if stack else nested).append(section)
            stack.append(section)
        else:
            (stack[-1].children if stack else nested).append(child)
    tree.children = nested


def basic_transformations(tree: Parent) -> None:
    """Apply the in-place normalization pass that precedes JATS writing."""
    lift_blocks(tree)
    group_definition_items(tree)
    quote_captions_to_attrib(tree)
    nest_sections(tree)
    logger.debug("Normalized tree with %d top-level nodes", len(tree.children))


__all__ = [
    "clone_node",
    "iter_nodes",
    "extract_nodes",
    "lift_blocks",
    "group_definition_items",
    "quote_captions_to_attrib",
    "nest_sections",
    "basic_transformations",
]
