#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast.py
"""Unit tests for AST nodes, JSON loading and the normalization pass."""

import pytest

from myst_jats.ast import (
    Attrib,
    Block,
    Blockquote,
    Caption,
    Container,
    DefinitionDescription,
    DefinitionItem,
    DefinitionList,
    DefinitionTerm,
    GenericNode,
    Heading,
    Image,
    Paragraph,
    Root,
    Section,
    TableCell,
    Text,
    ast_to_dict,
    dict_to_ast,
    json_to_ast,
)
from myst_jats.ast import transforms
from myst_jats.exceptions import ParsingError


@pytest.mark.unit
class TestNodes:
    """Tests for node classes."""

    def test_type_tags(self) -> None:
        """Test nodes expose their mdast type tag."""
        assert Paragraph().type == "paragraph"
        assert TableCell().type == "tableCell"

    def test_generic_node_keeps_tag(self) -> None:
        """Test unknown nodes keep the original tag."""
        assert GenericNode(type_name="abbreviation").type == "abbreviation"

    def test_heading_depth_validation(self) -> None:
        """Test heading depth must be 1-6."""
        with pytest.raises(ValueError):
            Heading(depth=7)


@pytest.mark.unit
class TestDictToAst:
    """Tests for loading mdast mappings."""

    def test_typed_fields_and_extras(self) -> None:
        """Test known fields are typed and the rest goes to data."""
        node = dict_to_ast(
            {
                "type": "image",
                "url": "a.png",
                "alt": "A",
                "position": {"start": {"line": 4}},
                "data": {"custom": 1},
            }
        )
        assert isinstance(node, Image)
        assert node.url == "a.png"
        assert node.data == {"position": {"start": {"line": 4}}, "custom": 1}

    def test_children_are_loaded(self) -> None:
        """Test children are converted recursively."""
        root = dict_to_ast({"type": "root", "children": [{"type": "paragraph", "children": [{"type": "text", "value": "x"}]}]})
        assert isinstance(root, Root)
        assert isinstance(root.children[0], Paragraph)
        assert root.children[0].children[0] == Text(value="x")

    def test_unknown_type_becomes_generic(self) -> None:
        """Test unknown node types load as GenericNode."""
        node = dict_to_ast({"type": "mystery", "value": "v", "extra": True})
        assert isinstance(node, GenericNode)
        assert node.type == "mystery"
        assert node.value == "v"
        assert node.children is None
        assert node.data == {"extra": True}

    def test_coercion(self) -> None:
        """Test numeric enumerators and string spans are normalized."""
        cell = dict_to_ast({"type": "tableCell", "colspan": "2", "children": []})
        heading = dict_to_ast({"type": "heading", "depth": 2, "enumerator": 3, "children": []})
        assert cell.colspan == 2
        assert heading.enumerator == "3"

    def test_missing_type_strict(self) -> None:
        """Test a mapping without type is rejected in strict mode."""
        with pytest.raises(ParsingError):
            dict_to_ast({"children": []})

    def test_missing_type_lenient(self) -> None:
        """Test a mapping without type loads as unknown when not strict."""
        assert dict_to_ast({"value": "x"}, strict_mode=False).type == "unknown"

    def test_invalid_field_value(self) -> None:
        """Test invalid values are reported as parsing errors."""
        with pytest.raises(ParsingError):
            dict_to_ast({"type": "heading", "depth": 9, "children": []})

    def test_invalid_json(self) -> None:
        """Test invalid JSON raises ParsingError."""
        with pytest.raises(ParsingError):
            json_to_ast("{not json")

    def test_ast_to_dict(self) -> None:
        """Test typed nodes convert back to mdast mappings."""
        data = {"type": "link", "url": "https://example.com", "children": [{"type": "text", "value": "x"}]}
        assert ast_to_dict(dict_to_ast(data)) == data


@pytest.mark.unit
class TestTransforms:
    """Tests for the normalization pass."""

    def test_clone_is_independent(self) -> None:
        """Test clones do not share children."""
        root = Root(children=[Paragraph(children=[Text(value="x")])])
        clone = transforms.clone_node(root)
        clone.children[0].children.append(Text(value="y"))
        assert len(root.children[0].children) == 1

    def test_extract_nodes(self) -> None:
        """Test nodes are collected in document order."""
        root = Root(children=[Paragraph(children=[Text(value="a")]), Paragraph(children=[Text(value="b")])])
        assert [t.value for t in transforms.extract_nodes(root, Text)] == ["a", "b"]

    def test_lift_blocks(self) -> None:
        """Test top-level blocks are dissolved."""
        root = Root(children=[Block(children=[Paragraph(), Paragraph()]), Paragraph()])
        transforms.lift_blocks(root)
        assert [c.type for c in root.children] == ["paragraph"] * 3

    def test_group_definition_items(self) -> None:
        """Test terms start new items and descriptions join them."""
        dl = DefinitionList(
            children=[
                DefinitionTerm(),
                DefinitionDescription(),
                DefinitionDescription(),
                DefinitionTerm(),
                DefinitionDescription(),
            ]
        )
        transforms.group_definition_items(Root(children=[dl]))
        assert [type(c) for c in dl.children] == [DefinitionItem, DefinitionItem]
        assert len(dl.children[0].children) == 3

    def test_quote_caption_to_attrib(self) -> None:
        """Test quote captions move into the blockquote."""
        quote = Blockquote(children=[Paragraph(children=[Text(value="Q")])])
        container = Container(
            kind="quote", children=[quote, Caption(children=[Paragraph(children=[Text(value="Author")])])]
        )
        transforms.quote_captions_to_attrib(Root(children=[container]))
        assert container.children == [quote]
        assert quote.children[-1] == Attrib(children=[Text(value="Author")])

    def test_figure_caption_is_untouched(self) -> None:
        """Test only quote containers are rewritten."""
        caption = Caption(children=[Paragraph()])
        container = Container(kind="figure", children=[Image(url="a.png"), caption])
        transforms.quote_captions_to_attrib(container)
        assert container.children[-1] is caption

    def test_nest_sections(self) -> None:
        """Test content is nested under headings by depth."""
        root = Root(
            children=[
                Paragraph(),
                Heading(depth=1, identifier="a"),
                Paragraph(),
                Heading(depth=2),
                Paragraph(),
                Heading(depth=1),
            ]
        )
        transforms.nest_sections(root)
        assert [c.type for c in root.children] == ["paragraph", "section", "section"]
        first = root.children[1]
        assert isinstance(first, Section)
        assert first.identifier == "a"
        assert first.children[0].identifier is None
        assert [c.type for c in first.children] == ["heading", "paragraph", "section"]
        assert first.children[2].depth == 2
