#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/jats/handlers.py
"""Default handler table mapping document node types to JATS elements.

Every handler has the signature ``handler(node, state, parent)`` where
``state`` is the :class:`~myst_jats.jats.serializer.JatsSerializer` being
built and ``parent`` is the node whose children are being rendered.

Handlers only talk to the builder. Each one leaves the stack exactly as it
found it; the built-in ones open elements through
:meth:`~myst_jats.jats.serializer.JatsSerializer.element` or
:meth:`~myst_jats.jats.serializer.JatsSerializer.render_inline`, which close
on every exit path.

References for the element choices are in the JATS tag library:
https://jats.nlm.nih.gov/archiving/tag-library/1.3/

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from myst_jats.ast.nodes import (
    Cite,
    Code,
    Container,
    CrossReference,
    Image,
    Link,
    List,
    Node,
    TableCell,
)
from myst_jats.constants import (
    BREAK_ELEMENT_URL,
    REF_TYPE_BIBR,
    REF_TYPE_CUSTOM,
    REF_TYPE_DISP_FORMULA,
    REF_TYPE_FIG,
    REF_TYPE_FN,
    REF_TYPE_SEC,
    REF_TYPE_TABLE,
    TAG_XREF,
    RefType,
)
from myst_jats.jats.elements import Attributes

if TYPE_CHECKING:
    from myst_jats.jats.serializer import Handler, JatsSerializer

logger = logging.getLogger(__name__)

IN_CONTAINER = "in_container"

_REF_TYPES: dict[str, RefType] = {
    "heading": REF_TYPE_SEC,
    "figure": REF_TYPE_FIG,
    "equation": REF_TYPE_DISP_FORMULA,
    "table": REF_TYPE_TABLE,
}


def reference_kind_to_ref_type(kind: Optional[str]) -> RefType:
    """Map a cross-reference kind to a JATS ``ref-type``.

    Unknown kinds map to ``custom``.

    Examples
    --------
        >>> reference_kind_to_ref_type("equation")
        'disp-formula'
        >>> reference_kind_to_ref_type("proof")
        'custom'

    """
    return _REF_TYPES.get(kind or "", REF_TYPE_CUSTOM)


def render_label(node: Node, state: JatsSerializer, template: Callable[[str], str] = str) -> None:
    """Emit a ``label`` with the node's enumerator.

    Nothing is emitted when the node is explicitly not enumerated or has no
    enumerator.
    """
    if node.enumerated is not False and node.enumerator:
        with state.element("label"):
            state.text(template(node.enumerator))


# ============================================================================
# Text and block structure
# ============================================================================


def text(node: Node, state: JatsSerializer, parent: Node) -> None:
    state.text(getattr(node, "value", None))


def paragraph(node: Node, state: JatsSerializer, parent: Node) -> None:
    state.render_inline(node, "p")


def section(node: Node, state: JatsSerializer, parent: Node) -> None:
    state.render_inline(node, "sec")


def heading(node: Node, state: JatsSerializer, parent: Node) -> None:
    render_label(node, state)
    state.render_inline(node, "title")


def passthrough(node: Node, state: JatsSerializer, parent: Node) -> None:
    """Render the children only, without a wrapping element."""
    state.render_children(node)


def ignore(node: Node, state: JatsSerializer, parent: Node) -> None:
    """Produce no output. Used for comments, which are not archived."""


def code(node: Node, state: JatsSerializer, parent: Node) -> None:
    lang = node.lang if isinstance(node, Code) else None
    state.render_inline(node, "code", {"language": lang})


def list_(node: Node, state: JatsSerializer, parent: Node) -> None:
    ordered = isinstance(node, List) and node.ordered
    state.render_inline(node, "list", {"list-type": "ordered" if ordered else "bullet"})


def inline_math(node: Node, state: JatsSerializer, parent: Node) -> None:
    with state.element("inline-formula"):
        with state.element("tex-math"):
            state.add_cdata(getattr(node, "value", None))


def math(node: Node, state: JatsSerializer, parent: Node) -> None:
    with state.element("disp-formula", {"id": node.identifier}):
        render_label(node, state, lambda enumerator: f"({enumerator})")
        with state.element("tex-math"):
            state.add_cdata(getattr(node, "value", None))


def break_(node: Node, state: JatsSerializer, parent: Node) -> None:
    if parent.type == "paragraph":
        state.warn("There are no breaks allowed in paragraphs.", node, "break", url=BREAK_ELEMENT_URL)
        return
    state.add_leaf("break")


def link(node: Node, state: JatsSerializer, parent: Node) -> None:
    url = node.url if isinstance(node, Link) else None
    state.render_inline(node, "ext-link", {"ext-link-type": "uri", "xlink:href": url})


def admonition(node: Node, state: JatsSerializer, parent: Node) -> None:
    state.render_inline(node, "boxed-text", {"content-type": getattr(node, "kind", None)})


def admonition_title(node: Node, state: JatsSerializer, parent: Node) -> None:
    with state.element("caption"):
        state.render_inline(node, "title")


# ============================================================================
# Tables, figures and other containers
# ============================================================================


def table_cell(node: Node, state: JatsSerializer, parent: Node) -> None:
    if not isinstance(node, TableCell):
        state.render_inline(node, "td")
        return
    state.render_inline(
        node,
        "th" if node.header else "td",
        {
            "align": node.align or None,
            "colspan": str(node.colspan) if node.colspan else None,
            "rowspan": str(node.rowspan) if node.rowspan else None,
        },
    )


def image(node: Node, state: JatsSerializer, parent: Node) -> None:
    url = node.url if isinstance(node, Image) else getattr(node, "url", None)
    alt = node.alt if isinstance(node, Image) else None
    if url and url.startswith("http"):
        state.warn(f"Image URL is remote ({url})", node, "image")
    if state.data.get(IN_CONTAINER) and alt:
        with state.element("alt-text"):
            state.text(alt)
    # TODO: carry the image identifier once graphic ids are referenced by xref
    state.add_leaf("graphic", {"xlink:href": url})


def container(node: Node, state: JatsSerializer, parent: Node) -> None:
    kind = node.kind if isinstance(node, Container) else None
    with state.scoped(**{IN_CONTAINER: True}):
        if kind == "figure":
            state.render_inline(node, "fig")
        elif kind == "table":
            state.render_inline(node, "table-wrap")
        elif kind == "quote":
            # the caption was already moved into the blockquote as attrib
            state.render_children(node)
        elif kind == "code":
            state.render_inline(node, "boxed-text", {"content-type": kind})
        else:
            state.error(f"Unhandled container kind of {kind}", node, "container")
            state.render_children(node)


# ============================================================================
# References and footnotes
# ============================================================================


def cross_reference(node: Node, state: JatsSerializer, parent: Node) -> None:
    kind = node.kind if isinstance(node, CrossReference) else None
    attributes: Attributes = {"ref-type": reference_kind_to_ref_type(kind), "rid": node.identifier}
    if attributes["ref-type"] == REF_TYPE_CUSTOM and kind:
        attributes["custom-type"] = kind
    state.render_inline(node, TAG_XREF, attributes)


def cite(node: Node, state: JatsSerializer, parent: Node) -> None:
    label = node.label if isinstance(node, Cite) else None
    state.render_inline(node, TAG_XREF, {"ref-type": REF_TYPE_BIBR, "rid": label})


def footnote_reference(node: Node, state: JatsSerializer, parent: Node) -> None:
    state.add_leaf(TAG_XREF, {"ref-type": REF_TYPE_FN, "rid": node.identifier})


def footnote_definition(node: Node, state: JatsSerializer, parent: Node) -> None:
    with state.detached("fn", {"id": node.identifier}) as fn:
        with state.element("label"):
            state.text(node.label)
        state.render_children(node)
    state.footnotes.append(fn)


def _wrap(name: str) -> Handler:
    def handler(node: Node, state: JatsSerializer, parent: Node) -> None:
        state.render_inline(node, name)

    handler.__name__ = name.replace("-", "_")
    return handler


DEFAULT_HANDLERS: dict[str, Handler] = {
    "text": text,
    "paragraph": paragraph,
    "section": section,
    "heading": heading,
    "block": passthrough,
    "blockquote": _wrap("disp-quote"),
    "definitionList": _wrap("def-list"),
    "definitionItem": _wrap("def-item"),
    "definitionTerm": _wrap("term"),
    "definitionDescription": _wrap("def"),
    "code": code,
    "list": list_,
    "listItem": _wrap("list-item"),
    "thematicBreak": ignore,
    "inlineMath": inline_math,
    "math": math,
    "mystRole": passthrough,
    "mystDirective": passthrough,
    "mystComment": ignore,
    "comment": ignore,
    "strong": _wrap("bold"),
    "emphasis": _wrap("italic"),
    "underline": _wrap("underline"),
    "inlineCode": _wrap("monospace"),
    "subscript": _wrap("sub"),
    "superscript": _wrap("sup"),
    "delete": _wrap("strike"),
    "smallcaps": _wrap("sc"),
    "break": break_,
    "link": link,
    "admonition": admonition,
    "admonitionTitle": admonition_title,
    "attrib": _wrap("attrib"),
    "table": _wrap("table"),
    "tableHead": _wrap("thead"),
    "tableBody": _wrap("tbody"),
    "tableFooter": _wrap("tfoot"),
    "tableRow": _wrap("tr"),
    "tableCell": table_cell,
    "image": image,
    "container": container,
    "caption": _wrap("caption"),
    "captionNumber": _wrap("label"),
    "crossReference": cross_reference,
    "citeGroup": passthrough,
    "cite": cite,
    "footnoteReference": footnote_reference,
    "footnoteDefinition": footnote_definition,
}


__all__ = [
    "DEFAULT_HANDLERS",
    "IN_CONTAINER",
    "reference_kind_to_ref_type",
    "render_label",
]
