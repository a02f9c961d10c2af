#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/jats/serializer.py
"""Stack-based builder that turns a document tree into a JATS element tree.

:class:`JatsSerializer` walks the document tree once, dispatching each node
through a handler table (:data:`myst_jats.jats.handlers.DEFAULT_HANDLERS` by
default). Handlers never build elements directly; they call the builder
primitives below, which maintain a stack of open elements:

- :meth:`JatsSerializer.open_node` / :meth:`JatsSerializer.close_node`
- :meth:`JatsSerializer.add_leaf` for self-closing elements
- :meth:`JatsSerializer.text` and :meth:`JatsSerializer.add_cdata`
- :meth:`JatsSerializer.render_children` / :meth:`JatsSerializer.render_inline`

The root of the stack is a nameless frame that collects the body content.
Footnote definitions are built in a detached frame and kept aside in
:attr:`JatsSerializer.footnotes` for the back matter.

Examples
--------
A custom handler that wraps abbreviations in ``<abbrev>``:

    >>> def abbreviation(node, state, parent):
    ...     with state.element("abbrev", {"alt": node.data.get("title")}):
    ...         state.render_children(node)
    >>> handlers = {**DEFAULT_HANDLERS, "abbreviation": abbreviation}

"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional

from myst_jats.ast.nodes import Node, get_node_children, get_node_value, has_children
from myst_jats.constants import REFERENCE_TAGS, TAG_BODY
from myst_jats.diagnostics import DiagnosticCollector
from myst_jats.exceptions import RenderingError
from myst_jats.jats.elements import Attributes, CDataNode, Element, TextNode, XmlNode
from myst_jats.jats.handlers import DEFAULT_HANDLERS
from myst_jats.options.jats import JatsOptions

logger = logging.getLogger(__name__)

Handler = Callable[[Node, "JatsSerializer", Node], None]

_MISSING = object()


class JatsSerializer:
    """Builds the JATS body of one document.

    The whole tree is rendered on construction; afterwards the builder holds
    the body content in its root frame and the hoisted footnotes.

    Parameters
    ----------
    tree : Node
        Root of the (already normalized) document tree
    options : JatsOptions or None, default = None
        Writer options; only ``handlers`` is used while building
    diagnostics : DiagnosticCollector or None, default = None
        Collector receiving warnings and errors. A fresh one is created when
        omitted

    Attributes
    ----------
    stack : list of Element
        Open element frames, root first
    footnotes : list of Element
        Closed ``fn`` elements in document order
    data : dict
        Scratch space for contextual flags, see :meth:`scoped`

    """

    def __init__(
        self,
        tree: Node,
        options: Optional[JatsOptions] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        self.options = options or JatsOptions()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
        self.handlers: Mapping[str, Handler] = (
            self.options.handlers if self.options.handlers is not None else DEFAULT_HANDLERS
        )
        self.data: dict[str, Any] = {}
        self.stack: list[Element] = [Element(name=None, elements=[])]
        self.footnotes: list[Element] = []

        self.render_children(tree)
        if len(self.stack) > 1:
            logger.warning("Closing %d element(s) left open by handlers", len(self.stack) - 1)
            self._unwind(1)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def warn(self, message: str, node: Optional[Node] = None, source: Optional[str] = None, url: Optional[str] = None) -> None:
        self.diagnostics.warn(message, node=node, source=source, url=url)

    def error(self, message: str, node: Optional[Node] = None, source: Optional[str] = None, url: Optional[str] = None) -> None:
        self.diagnostics.error(message, node=node, source=source, url=url)

    # ------------------------------------------------------------------
    # Stack primitives
    # ------------------------------------------------------------------

    def top(self) -> Element:
        """Return the innermost open frame."""
        return self.stack[-1]

    def push_node(self, node: Optional[XmlNode]) -> Optional[XmlNode]:
        """Append a finished node to the children of the top frame.

        Nothing is appended when the top frame is a leaf.
        """
        top = self.top()
        if node is not None and top.elements is not None:
            top.elements.append(node)
        return node

    def text(self, value: Optional[str]) -> Optional[TextNode]:
        """Append character data to the top frame.

        Consecutive text is merged into the preceding text node. Empty
        values and leaf frames are ignored.

        Returns
        -------
        TextNode or None
            The node holding the text, or None when nothing was written

        """
        top = self.top()
        if not value or top.elements is None:
            return None
        if top.elements and isinstance(top.elements[-1], TextNode):
            last = top.elements[-1]
            last.text += value
            return last
        node = TextNode(value)
        top.elements.append(node)
        return node

    def add_cdata(self, value: Optional[str]) -> CDataNode:
        """Append a raw CDATA section (math source) to the top frame."""
        node = CDataNode(value or "")
        self.push_node(node)
        return node

    def open_node(self, name: str, attributes: Optional[Attributes] = None, is_leaf: bool = False) -> Element:
        """Push a new frame. Leaf frames cannot receive children."""
        node = Element(name=name, attributes=attributes, elements=None if is_leaf else [])
        self.stack.append(node)
        return node

    def close_node(self) -> Element:
        """Pop the top frame and append it to its parent.

        Raises
        ------
        RenderingError
            If only the root frame is left

        """
        if len(self.stack) < 2:
            raise RenderingError("Cannot close the root frame of the JATS builder", rendering_stage="close_node")
        node = self.stack.pop()
        self.push_node(node)
        return node

    def detach_node(self) -> Element:
        """Pop the top frame without attaching it anywhere."""
        if len(self.stack) < 2:
            raise RenderingError("Cannot detach the root frame of the JATS builder", rendering_stage="detach_node")
        return self.stack.pop()

    def add_leaf(self, name: str, attributes: Optional[Attributes] = None) -> Element:
        """Append a self-closing element."""
        self.open_node(name, attributes, is_leaf=True)
        return self.close_node()

    def _unwind(self, depth: int) -> None:
        while len(self.stack) > depth:
            self.close_node()

    # ------------------------------------------------------------------
    # Scoped helpers
    # ------------------------------------------------------------------

    @contextmanager
    def element(self, name: str, attributes: Optional[Attributes] = None) -> Iterator[Element]:
        """Open an element for the duration of a ``with`` block.

        On exit, the element and anything opened inside it are closed, on
        every exit path.
        """
        depth = len(self.stack)
        node = self.open_node(name, attributes)
        try:
            yield node
        finally:
            self._unwind(depth)

    @contextmanager
    def detached(self, name: str, attributes: Optional[Attributes] = None) -> Iterator[Element]:
        """Build an element that is taken off the stack instead of attached."""
        depth = len(self.stack)
        node = self.open_node(name, attributes)
        try:
            yield node
        finally:
            self._unwind(depth + 1)
            self.detach_node()

    @contextmanager
    def scoped(self, **flags: Any) -> Iterator[dict[str, Any]]:
        """Set scratch flags in :attr:`data` for one subtree.

        Previous values (or their absence) are restored on exit, so nested
        scopes see the outer value again once they end.

        Examples
        --------
            >>> with state.scoped(in_container=True):
            ...     state.render_children(node)

        """
        previous = {key: self.data.get(key, _MISSING) for key in flags}
        self.data.update(flags)
        try:
            yield self.data
        finally:
            for key, value in previous.items():
                if value is _MISSING:
                    self.data.pop(key, None)
                else:
                    self.data[key] = value

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def render_children(self, node: Node) -> None:
        """Dispatch every child of ``node`` through the handler table.

        Children without a handler are reported as errors and skipped.
        """
        for child in get_node_children(node):
            handler = self.handlers.get(child.type)
            if handler is None:
                self.error(f'Unhandled JATS conversion for node of "{child.type}"', child)
                continue
            handler(child, self, node)

    def render_inline(self, node: Node, name: str, attributes: Optional[Attributes] = None) -> Element:
        """Wrap the content of ``node`` in a single element.

        The node identifier becomes the ``id`` attribute, except on reference
        tags, which point at their target through ``rid`` instead. Explicit
        ``attributes`` take precedence.
        """
        merged: Attributes = {
            "id": node.identifier if node.identifier and name not in REFERENCE_TAGS else None,
        }
        merged.update(attributes or {})
        with self.element(name, merged) as el:
            if has_children(node):
                self.render_children(node)
            else:
                self.text(get_node_value(node))
        return el

    # ------------------------------------------------------------------
    # Result
    # ------------------------------------------------------------------

    def body(self) -> Element:
        """Return a ``body`` element holding the rendered content."""
        return Element(name=TAG_BODY, elements=list(self.stack[0].elements or []))


__all__ = ["Handler", "JatsSerializer"]
