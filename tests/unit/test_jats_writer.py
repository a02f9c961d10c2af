#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_jats_writer.py
"""Unit tests for XML text output."""

import pytest
from utils import XLINK, body_xml, node, paragraph, parse_fragment, text

from myst_jats.constants import JATS_DOCTYPE, XML_DECLARATION
from myst_jats.exceptions import RenderingError
from myst_jats.jats.elements import CDataNode, Element, TextNode, element, text_element
from myst_jats.jats.writer import to_jats_document, to_lxml, to_xml


@pytest.mark.unit
class TestEscaping:
    """Tests for text and attribute escaping."""

    def test_text_escaping(self) -> None:
        """Test markup characters in text are escaped."""
        assert to_xml(text_element("p", "a < b & c > d")) == "<p>a &lt; b &amp; c &gt; d</p>"

    def test_attribute_escaping(self) -> None:
        """Test quotes are escaped in attributes."""
        xml = to_xml(element("ext-link", {"xlink:href": 'a"b&c'}))
        assert xml == f'<ext-link {XLINK} xlink:href="a&quot;b&amp;c"/>'

    def test_none_attributes_are_omitted(self) -> None:
        """Test attributes set to None are not written."""
        assert to_xml(element("td", {"align": None, "colspan": "2"})) == '<td colspan="2"/>'

    def test_cdata_is_raw(self) -> None:
        """Test CDATA content is not escaped."""
        assert to_xml(element("tex-math", None, CDataNode("a<b&c"))) == "<tex-math><![CDATA[a<b&c]]></tex-math>"

    def test_cdata_terminator_falls_back_to_text(self) -> None:
        """Test a payload holding a CDATA terminator is written as escaped text."""
        assert to_xml(element("tex-math", None, CDataNode("x]]>y"))) == "<tex-math>x]]&gt;y</tex-math>"

    def test_invalid_characters_are_dropped(self) -> None:
        """Test control characters not allowed in XML are removed."""
        assert to_xml(text_element("p", "a\x00b\x0bc")) == "<p>abc</p>"


@pytest.mark.unit
class TestNamespaces:
    """Tests for namespace prefixes."""

    def test_used_prefix_is_declared_on_root(self) -> None:
        """Test prefixes used below the root are declared once on it."""
        tree = element("body", None, element("p", None, element("ext-link", {"xlink:href": "a"}, TextNode("x"))))
        assert to_xml(tree) == f'<body {XLINK}><p><ext-link xlink:href="a">x</ext-link></p></body>'

    def test_prefixed_tags(self) -> None:
        """Test prefixed element names resolve to their namespace."""
        tree = element("permissions", None, element("ali:free_to_read"))
        el = to_lxml(tree)
        assert el[0].tag == "{http://www.niso.org/schemas/ali/1.0/}free_to_read"
        assert to_xml(tree) == (
            '<permissions xmlns:ali="http://www.niso.org/schemas/ali/1.0/"><ali:free_to_read/></permissions>'
        )

    def test_xml_lang(self) -> None:
        """Test xml:lang needs no declaration."""
        assert to_xml(element("article", {"xml:lang": "en"})) == '<article xml:lang="en"/>'

    def test_xmlns_attributes_become_declarations(self) -> None:
        """Test explicit xmlns attributes are declared even when unused."""
        xml = to_xml(element("article", {"xmlns:mml": "http://www.w3.org/1998/Math/MathML"}))
        assert xml == '<article xmlns:mml="http://www.w3.org/1998/Math/MathML"/>'

    def test_unknown_prefix(self) -> None:
        """Test prefixes outside the JATS namespaces are rejected."""
        with pytest.raises(RenderingError):
            to_xml(element("p", {"foo:bar": "x"}))


@pytest.mark.unit
class TestLayout:
    """Tests for self-closing elements and indentation."""

    def test_leaf_is_self_closing(self) -> None:
        """Test leaves are written self-closing."""
        assert to_xml(Element(name="break")) == "<break/>"

    def test_compact_output(self) -> None:
        """Test output is on one line without spaces."""
        tree = element("body", None, text_element("p", "x"), element("sec", None, text_element("title", "T")))
        assert to_xml(tree) == "<body><p>x</p><sec><title>T</title></sec></body>"

    def test_indented_output(self) -> None:
        """Test nested elements are indented."""
        tree = element("body", None, text_element("p", "x"), element("sec", None, text_element("title", "T")))
        expected = "<body>\n  <p>x</p>\n  <sec>\n    <title>T</title>\n  </sec>\n</body>"
        assert to_xml(tree, spaces=2) == expected

    def test_indent_width(self) -> None:
        """Test the indentation width follows spaces."""
        tree = element("body", None, text_element("p", "x"))
        assert to_xml(tree, spaces=4) == "<body>\n    <p>x</p>\n</body>"

    def test_mixed_content_is_not_indented(self) -> None:
        """Test elements holding text keep their children inline."""
        tree = element("body", None, element("p", None, TextNode("a "), text_element("bold", "b"), TextNode(" c")))
        assert to_xml(tree, spaces=2) == "<body>\n  <p>a <bold>b</bold> c</p>\n</body>"

    def test_nested_inline_elements_are_not_indented(self) -> None:
        """Test elements below mixed content stay inline at any depth."""
        xml = body_xml(
            paragraph(text("Hello "), node("strong", node("emphasis", text("b")), node("emphasis", text("c")))),
            spaces=2,
        )
        assert xml == "<body>\n  <p>Hello <bold><italic>b</italic><italic>c</italic></bold></p>\n</body>"
        assert "".join(parse_fragment(xml).find("p").itertext()) == "Hello bc"

    def test_title_holding_only_an_element(self) -> None:
        """Test a title whose only child is an element is not indented."""
        tree = element(
            "sec",
            None,
            element("title", None, text_element("italic", "Only")),
            text_element("p", "x"),
        )
        assert to_xml(tree, spaces=2) == "<sec>\n  <title><italic>Only</italic></title>\n  <p>x</p>\n</sec>"

    def test_zero_spaces_is_compact(self) -> None:
        """Test zero indentation writes a single line."""
        assert to_xml(element("body", None, text_element("p", "x")), spaces=0) == "<body><p>x</p></body>"

    def test_nameless_frame_writes_children(self) -> None:
        """Test a nameless element writes only its children."""
        assert to_xml(Element(name=None, elements=[text_element("p", "a")])) == "<p>a</p>"

    def test_document_prolog(self) -> None:
        """Test full documents get the declaration and doctype."""
        xml = to_jats_document(element("article"))
        assert xml == f"{XML_DECLARATION}\n{JATS_DOCTYPE}\n<article/>"
