"""JSON Schema rewriting for backend compatibility.

Schemas are produced by pydantic, but everything here operates on plain
JSON trees (dicts, lists, leaves) so any schema source works.  A *pass* is
a function that edits one schema node in place; ``sanitize_schema`` walks
every node of a deep copy and applies each pass to it.

The walk only descends through keywords whose values are subschemas, so a
property that happens to be called ``format`` survives while the ``format``
keyword of a schema node does not.
"""

from __future__ import annotations

import copy
import json
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

# Keywords whose value is a single subschema.
_SCHEMA_KEYWORDS = (
    "items",
    "additionalProperties",
    "additionalItems",
    "unevaluatedItems",
    "unevaluatedProperties",
    "contains",
    "propertyNames",
    "not",
    "if",
    "then",
    "else",
)

# Keywords whose value is a list of subschemas.
_SCHEMA_LIST_KEYWORDS = ("anyOf", "oneOf", "allOf", "prefixItems")

# Keywords whose value maps names to subschemas.
_SCHEMA_MAP_KEYWORDS = (
    "properties",
    "patternProperties",
    "$defs",
    "definitions",
    "dependentSchemas",
)


def iter_subschemas(node: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield the direct child schema nodes of ``node``.

    Boolean schemas (``true``/``false``) are leaves and are skipped.
    """
    for key in _SCHEMA_KEYWORDS:
        child = node.get(key)
        if isinstance(child, dict):
            yield child
        elif key == "items" and isinstance(child, list):
            # Draft-4 tuple form.
            yield from (c for c in child if isinstance(c, dict))
    for key in _SCHEMA_LIST_KEYWORDS:
        children = node.get(key)
        if isinstance(children, list):
            yield from (c for c in children if isinstance(c, dict))
    for key in _SCHEMA_MAP_KEYWORDS:
        mapping = node.get(key)
        if isinstance(mapping, dict):
            yield from (c for c in mapping.values() if isinstance(c, dict))


def walk_schema(node: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield ``node`` and every schema node below it, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_subschemas(current))))


def is_object_schema(node: dict[str, Any]) -> bool:
    """Whether a schema node describes a JSON object."""
    kind = node.get("type")
    if kind == "object":
        return True
    if isinstance(kind, list) and "object" in kind:
        return True
    return "properties" in node


def remove_format(node: dict[str, Any]) -> None:
    """Drop the ``format`` annotation, which the backend rejects."""
    node.pop("format", None)


def forbid_additional_properties(node: dict[str, Any]) -> None:
    """Close object schemas; strict function calling requires it."""
    if is_object_schema(node):
        node["additionalProperties"] = False


DEFAULT_PASSES: tuple[Callable[[dict[str, Any]], None], ...] = (
    remove_format,
    forbid_additional_properties,
)


def sanitize_schema(
    schema: dict[str, Any],
    passes: Sequence[Callable[[dict[str, Any]], None]] = DEFAULT_PASSES,
) -> dict[str, Any]:
    """Return a rewritten copy of ``schema`` with every pass applied.

    Passes run against a node before its children are visited, so a pass
    that replaces a subschema (e.g. ``additionalProperties``) never has its
    discarded value walked.

    Args:
        schema: Root JSON Schema dict. Not modified.
        passes: Node rewrites to apply, in order.

    Returns:
        The sanitized deep copy.
    """
    result = copy.deepcopy(schema)
    stack = [result]
    while stack:
        node = stack.pop()
        for rewrite in passes:
            rewrite(node)
        stack.extend(iter_subschemas(node))
    return result


def input_schema_for(tp: Any) -> dict[str, Any]:
    """Sanitized JSON Schema for a capability input type."""
    return sanitize_schema(TypeAdapter(tp).json_schema())


def result_schema_for(tp: Any) -> dict[str, Any]:
    """Sanitized schema of the ``{"Ok": ...} | {"Err": str}`` envelope.

    Definitions referenced by the output type are hoisted to the root so
    that their ``#/$defs/...`` references stay valid.
    """
    output = TypeAdapter(tp).json_schema()
    defs = output.pop("$defs", None)
    schema: dict[str, Any] = {
        "oneOf": [
            {
                "type": "object",
                "properties": {"Ok": output},
                "required": ["Ok"],
            },
            {
                "type": "object",
                "properties": {"Err": {"type": "string"}},
                "required": ["Err"],
            },
        ],
    }
    if defs:
        schema["$defs"] = defs
    return sanitize_schema(schema)


def render_schema(schema: dict[str, Any]) -> str:
    """Compact JSON text of a schema, for embedding in descriptions."""
    return json.dumps(schema, separators=(",", ":"))
