#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/ast/serialization.py
"""Conversion between mdast-style JSON and typed AST nodes.

Document trees arrive from upstream tooling as plain JSON in the mdast shape::

    {"type": "root", "children": [
        {"type": "paragraph", "children": [{"type": "text", "value": "Hi"}]}
    ]}

:func:`dict_to_ast` turns such a mapping into the typed nodes of
:mod:`myst_jats.ast.nodes`. Keys without a typed attribute (``position``,
``html_id``, ...) are kept in the node's ``data`` dict, and node types the
library does not model become :class:`~myst_jats.ast.nodes.GenericNode` so the
writer can report them instead of failing.

Examples
--------
Load a tree from JSON:

    >>> from myst_jats.ast.serialization import json_to_ast
    >>> root = json_to_ast('{"type": "root", "children": []}')
    >>> root.type
    'root'

"""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from typing import Any, Mapping

from myst_jats.ast.nodes import NODE_CLASSES, GenericNode, Node
from myst_jats.exceptions import ParsingError

logger = logging.getLogger(__name__)

_STRUCTURAL_KEYS = frozenset({"type", "children", "data"})

# Per-class field names, computed once; "data" and "children" are handled separately.
_CLASS_FIELDS: dict[type[Node], tuple[str, ...]] = {
    cls: tuple(f.name for f in fields(cls) if f.name not in _STRUCTURAL_KEYS) for cls in NODE_CLASSES.values()
}
_GENERIC_FIELDS: tuple[str, ...] = ("identifier", "label", "enumerated", "enumerator", "value")


def _coerce_field(name: str, value: Any) -> Any:
    """Normalize loosely typed JSON values for a few well-known fields."""
    if value is None:
        return None
    if name == "enumerator":
        return str(value)
    if name in ("colspan", "rowspan", "depth", "start") and isinstance(value, str) and value.isdigit():
        return int(value)
    return value


def _split_fields(data: Mapping[str, Any], known: tuple[str, ...]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a node mapping into typed keyword arguments and leftover extras."""
    kwargs: dict[str, Any] = {}
    extras: dict[str, Any] = {}
    for key, value in data.items():
        if key in _STRUCTURAL_KEYS:
            continue
        if key in known:
            kwargs[key] = _coerce_field(key, value)
        else:
            extras[key] = value
    nested = data.get("data")
    if isinstance(nested, Mapping):
        extras.update(nested)
    return kwargs, extras


def _deserialize_children(data: Mapping[str, Any], strict_mode: bool) -> list[Node]:
    children = data.get("children")
    if not isinstance(children, list):
        raise ParsingError(
            f"Node of type '{data.get('type')}' has non-list children: {type(children).__name__}",
            parsing_stage="children",
        )
    return [dict_to_ast(child, strict_mode=strict_mode) for child in children]


def dict_to_ast(data: Mapping[str, Any], strict_mode: bool = True) -> Node:
    """Convert an mdast-style mapping into a typed AST node.

    Parameters
    ----------
    data : Mapping
        Node mapping with at least a ``type`` key
    strict_mode : bool, default True
        If True, raise ParsingError for mappings without a ``type``.
        If False, log a warning and load them as ``GenericNode("unknown")``.

    Returns
    -------
    Node
        The typed node, with children converted recursively

    Raises
    ------
    ParsingError
        If the mapping is malformed (not a mapping, bad children, invalid
        field values), or has no ``type`` while ``strict_mode`` is True

    """
    if not isinstance(data, Mapping):
        raise ParsingError(f"Expected a node mapping, got {type(data).__name__}", parsing_stage="node")

    node_type = data.get("type")
    if not node_type or not isinstance(node_type, str):
        if strict_mode:
            raise ParsingError("Node mapping must contain a 'type' field", parsing_stage="node")
        logger.warning("Node mapping missing 'type' field, loading it as an unknown node")
        node_type = "unknown"

    cls = NODE_CLASSES.get(node_type)
    if cls is None:
        kwargs, extras = _split_fields(data, _GENERIC_FIELDS)
        children = _deserialize_children(data, strict_mode) if "children" in data else None
        return GenericNode(type_name=node_type, children=children, data=extras, **kwargs)

    kwargs, extras = _split_fields(data, _CLASS_FIELDS[cls])
    if "children" in data and any(f.name == "children" for f in fields(cls)):
        kwargs["children"] = _deserialize_children(data, strict_mode)
    elif "children" in data:
        extras["children"] = data["children"]

    try:
        return cls(data=extras, **kwargs)
    except (TypeError, ValueError) as e:
        raise ParsingError(f"Invalid '{node_type}' node: {e}", parsing_stage="node", original_error=e) from e


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a typed node back into an mdast-style mapping.

    Unset (None) fields are omitted; extras stored in ``data`` are restored as
    top-level keys.

    """
    result: dict[str, Any] = {"type": node.type}
    names = _CLASS_FIELDS.get(type(node), _GENERIC_FIELDS)
    for name in names:
        value = getattr(node, name, None)
        if value is not None:
            result[name] = value
    result.update(node.data)
    children = getattr(node, "children", None)
    if children is not None:
        result["children"] = [ast_to_dict(child) for child in children]
    return result


def json_to_ast(json_str: str, strict_mode: bool = True) -> Node:
    """Deserialize a JSON string to an AST node.

    Raises
    ------
    ParsingError
        If the JSON is invalid or describes a malformed tree

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParsingError(f"Invalid JSON: {e}", parsing_stage="json", original_error=e) from e
    return dict_to_ast(data, strict_mode=strict_mode)


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize an AST node to a JSON string."""
    return json.dumps(ast_to_dict(node), indent=indent, ensure_ascii=False)


__all__ = ["dict_to_ast", "ast_to_dict", "json_to_ast", "ast_to_json"]
