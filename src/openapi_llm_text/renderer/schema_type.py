"""Single-line type descriptors for schema nodes."""

import json

from openapi_llm_text.parser.base import (
    ArrayNode,
    Composition,
    ObjectNode,
    Primitive,
    Reference,
    SchemaNode,
)
from openapi_llm_text.renderer.context import REQUEST_BODY, ContextKind, RenderContext

FORMATTED_KINDS = ("string", "integer", "number")

COMPOSITION_PREVIEW_LIMIT = 3


def render_type(node: SchemaNode | None, ctx: RenderContext) -> str:
    """Reduce a schema node to a type descriptor for the given context."""
    if node is None:
        return ctx.unknown

    if isinstance(node, Reference):
        return node.name or ctx.unknown

    if isinstance(node, Composition):
        if ctx.kind is ContextKind.REQUEST_BODY:
            branches = ", ".join(_preview_branch(b) for b in node.branches)
            return f"{node.kind}: [{branches}]"
        return ctx.unknown

    if isinstance(node, ArrayNode):
        if ctx.kind is ContextKind.PARAMETER or node.items is None:
            return "array"
        return f"Array of {item_type(node.items, ctx)}"

    if isinstance(node, ObjectNode):
        if ctx.include_properties and node.properties:
            return f"Object ({property_names(node, ctx.property_limit)})"
        return "object"

    return render_primitive(node, ctx)


def item_type(items: SchemaNode | None, ctx: RenderContext) -> str:
    """Descriptor of an array's items, without the `Array of` prefix."""
    if isinstance(items, Reference):
        return items.name or ctx.unknown
    if isinstance(items, ObjectNode):
        return "object"
    return render_type(items, ctx)


def render_primitive(node: Primitive, ctx: RenderContext) -> str:
    if node.kind not in FORMATTED_KINDS:
        return node.kind
    if node.enum:
        return f"{node.kind} {format_enum(node.enum)}"
    if ctx.include_format and node.format:
        return f"{node.kind} (format: {node.format})"
    return node.kind


def property_names(node: ObjectNode, limit: int | None = None) -> str:
    """Comma-joined property names in declaration order, `...`-suffixed past the limit."""
    names = list(node.properties)
    if limit is not None and len(names) > limit:
        return ", ".join(names[:limit]) + "..."
    return ", ".join(names)


def format_enum(values: list) -> str:
    return "[" + ", ".join(_enum_value(v) for v in values) + "]"


def _enum_value(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def _preview_branch(branch: SchemaNode | None) -> str:
    if isinstance(branch, Reference):
        return branch.name or REQUEST_BODY.unknown
    if isinstance(branch, ObjectNode) and branch.properties:
        return "{" + property_names(branch, COMPOSITION_PREVIEW_LIMIT) + "}"
    if isinstance(branch, Primitive):
        return branch.kind
    return "inline"
