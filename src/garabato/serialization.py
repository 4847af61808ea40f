"""JSON round-trip for Garabato inline nodes.

Converts typed nodes to/from JSON-compatible dicts. Useful for:
- Caching parsed inline sequences
- Handing parse results to renderers in other processes
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from garabato import parse_inlines
    from garabato.serialization import to_json, from_json

    inlines = parse_inlines(None, "Hello **World**")
    restored = from_json(to_json(inlines))
    assert inlines == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from garabato.nodes import (
    CONTAINER_FIELDS,
    Code,
    Emph,
    Entity,
    Image,
    Inline,
    Inlines,
    LineBreak,
    Link,
    Math,
    RawHtml,
    Space,
    Str,
    Strong,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (Str, Space, LineBreak, Emph, Strong, Code, Link, Image, RawHtml, Entity, Math)
}


def to_dict(node: Inline) -> dict[str, Any]:
    """Convert an inline node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Nested inline sequences become lists of dicts.

    Args:
        node: Any Garabato inline node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, tuple):
            value = [to_dict(child) for child in value]
        result[f.name] = value
    return result


def from_dict(data: dict[str, Any]) -> Inline:
    """Reconstruct a typed inline node from a dict.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed inline node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    children_field = CONTAINER_FIELDS.get(node_cls)
    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        raw = data[f.name]
        if f.name == children_field:
            raw = tuple(from_dict(child) for child in raw)
        kwargs[f.name] = raw

    return node_cls(**kwargs)


def to_json(inlines: Inlines, *, indent: int | None = None) -> str:
    """Serialize an inline sequence to a JSON string.

    Args:
        inlines: Parse output (tuple of inline nodes).
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string (a list of node objects).

    """
    return json.dumps([to_dict(node) for node in inlines], sort_keys=True, indent=indent)


def from_json(data: str) -> Inlines:
    """Deserialize an inline sequence from a JSON string.

    Raises:
        ValueError: If the JSON is not a list of nodes.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a list of nodes, got {type(raw).__name__}"
        raise ValueError(msg)
    return tuple(from_dict(item) for item in raw)
