#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_jats_serializer.py
"""Unit tests for the JatsSerializer builder primitives."""

import logging

import pytest

from myst_jats.ast.nodes import Paragraph, Root, Strong, Text
from myst_jats.exceptions import RenderingError
from myst_jats.jats.elements import CDataNode, Element, TextNode
from myst_jats.jats.handlers import DEFAULT_HANDLERS
from myst_jats.jats.serializer import JatsSerializer
from myst_jats.options import JatsOptions


@pytest.fixture
def state() -> JatsSerializer:
    """Provide a builder over an empty document."""
    return JatsSerializer(Root())


@pytest.mark.unit
class TestStackPrimitives:
    """Tests for open/close/leaf primitives."""

    def test_initial_stack_has_root_frame(self, state) -> None:
        """Test the builder starts with a single nameless frame."""
        assert len(state.stack) == 1
        assert state.top().name is None
        assert state.top().elements == []

    def test_open_and_close(self, state) -> None:
        """Test closing a frame attaches it to its parent."""
        state.open_node("p", {"id": "a"})
        assert state.top().name == "p"
        closed = state.close_node()
        assert state.stack[0].elements == [closed]
        assert closed.attributes == {"id": "a"}

    def test_add_leaf(self, state) -> None:
        """Test leaves have no children list."""
        leaf = state.add_leaf("break")
        assert leaf.is_leaf
        assert state.stack[0].elements == [leaf]

    def test_close_root_raises(self, state) -> None:
        """Test closing the root frame is a programming error."""
        with pytest.raises(RenderingError):
            state.close_node()

    def test_detach_node(self, state) -> None:
        """Test detached frames are not attached to the parent."""
        state.open_node("fn")
        detached = state.detach_node()
        assert detached.name == "fn"
        assert state.stack[0].elements == []

    def test_push_node_ignores_leaf_top(self, state) -> None:
        """Test nothing can be appended to a leaf frame."""
        state.open_node("graphic", is_leaf=True)
        state.push_node(TextNode("x"))
        assert state.top().elements is None


@pytest.mark.unit
class TestTextPrimitives:
    """Tests for text and CDATA."""

    def test_text_merges_with_previous_text(self, state) -> None:
        """Test consecutive text becomes a single node."""
        state.open_node("p")
        first = state.text("Hello ")
        second = state.text("world")
        assert first is second
        assert state.top().elements == [TextNode("Hello world")]

    def test_text_after_element_is_new_node(self, state) -> None:
        """Test text is not merged across an element."""
        state.open_node("p")
        state.text("a")
        state.add_leaf("break")
        state.text("b")
        assert [type(e) for e in state.top().elements] == [TextNode, Element, TextNode]

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_text_is_ignored(self, state, value) -> None:
        """Test empty values write nothing."""
        assert state.text(value) is None
        assert state.top().elements == []

    def test_text_on_leaf_is_ignored(self, state) -> None:
        """Test text cannot be added to a leaf frame."""
        state.open_node("graphic", is_leaf=True)
        assert state.text("x") is None

    def test_add_cdata(self, state) -> None:
        """Test CDATA is appended raw."""
        state.open_node("tex-math")
        state.add_cdata("a < b")
        assert state.top().elements == [CDataNode("a < b")]


@pytest.mark.unit
class TestScopedHelpers:
    """Tests for the element and scoped context managers."""

    def test_element_closes_on_exception(self, state) -> None:
        """Test frames opened in a with block are closed when it raises."""
        with pytest.raises(RuntimeError):
            with state.element("p"):
                state.open_node("bold")
                raise RuntimeError("boom")
        assert len(state.stack) == 1
        p = state.stack[0].elements[0]
        assert p.name == "p"
        assert p.elements[0].name == "bold"

    def test_detached_element(self, state) -> None:
        """Test detached elements are returned and not attached."""
        with state.detached("fn", {"id": "fn1"}) as fn:
            state.text("note")
        assert fn.elements == [TextNode("note")]
        assert len(state.stack) == 1
        assert state.stack[0].elements == []

    def test_scoped_restores_previous_values(self, state) -> None:
        """Test scratch flags are restored after the scope."""
        state.data["outer"] = 1
        with state.scoped(outer=2, inner=True):
            assert state.data == {"outer": 2, "inner": True}
        assert state.data == {"outer": 1}

    def test_nested_scopes(self, state) -> None:
        """Test inner scopes restore the outer value."""
        with state.scoped(flag="outer"):
            with state.scoped(flag="inner"):
                assert state.data["flag"] == "inner"
            assert state.data["flag"] == "outer"
        assert "flag" not in state.data

    def test_scoped_restores_on_exception(self, state) -> None:
        """Test flags are cleared even when rendering raises."""
        with pytest.raises(ValueError):
            with state.scoped(flag=True):
                raise ValueError("boom")
        assert state.data == {}


@pytest.mark.unit
class TestRendering:
    """Tests for render_children, render_inline and handler dispatch."""

    def test_render_inline_sets_id(self, state) -> None:
        """Test the node identifier becomes id."""
        el = state.render_inline(Paragraph(identifier="p1", children=[Text(value="x")]), "p")
        assert el.attributes == {"id": "p1"}
        assert el.present_attributes() == {"id": "p1"}

    def test_render_inline_suppresses_id_on_xref(self, state) -> None:
        """Test reference tags never get an id."""
        el = state.render_inline(Strong(identifier="x1"), "xref", {"rid": "target"})
        assert el.present_attributes() == {"rid": "target"}

    def test_render_inline_attributes_override(self, state) -> None:
        """Test explicit attributes win over the identifier."""
        el = state.render_inline(Paragraph(identifier="p1"), "p", {"id": "other"})
        assert el.present_attributes() == {"id": "other"}

    def test_render_inline_uses_value_for_literals(self, state) -> None:
        """Test literal nodes write their value."""
        el = state.render_inline(Text(value="code"), "monospace")
        assert el.elements == [TextNode("code")]

    def test_children_keep_order(self) -> None:
        """Test output order equals input order."""
        tree = Root(children=[Paragraph(children=[Text(value=str(i))]) for i in range(5)])
        body = JatsSerializer(tree).body()
        assert [p.elements[0].text for p in body.elements] == ["0", "1", "2", "3", "4"]

    def test_custom_handlers_replace_table(self) -> None:
        """Test handlers given in options are used instead of the defaults."""

        def paragraph(node, state, parent):
            state.render_inline(node, "para")

        options = JatsOptions(handlers={**DEFAULT_HANDLERS, "paragraph": paragraph})
        body = JatsSerializer(Root(children=[Paragraph(children=[Text(value="x")])]), options).body()
        assert body.elements[0].name == "para"

    def test_unbalanced_handler_is_closed(self, caplog) -> None:
        """Test frames left open by handlers are closed at the end."""

        def paragraph(node, state, parent):
            state.open_node("p")
            state.render_children(node)

        options = JatsOptions(handlers={**DEFAULT_HANDLERS, "paragraph": paragraph})
        tree = Root(children=[Paragraph(children=[Text(value="a")]), Paragraph(children=[Text(value="b")])])
        with caplog.at_level(logging.WARNING, logger="myst_jats.jats.serializer"):
            state = JatsSerializer(tree, options)
        assert len(state.stack) == 1
        outer = state.body().elements[0]
        assert outer.name == "p"
        assert outer.elements[1].name == "p"
        assert "left open" in caplog.text

    def test_body_copies_root_content(self) -> None:
        """Test body wraps the root frame content."""
        state = JatsSerializer(Root(children=[Paragraph(children=[Text(value="x")])]))
        body = state.body()
        assert body.name == "body"
        assert body.elements is not state.stack[0].elements
        assert body.elements == state.stack[0].elements
