"""Schema listing: one summary line plus an indented body per named schema.

Inline object branches of a top-level composition are not inlined. They
are registered as virtual schemas named `<parent>__inline__<n>` and listed
right after their parent.
"""

import logging

from openapi_llm_text.parser.base import (
    ArrayNode,
    Composition,
    ObjectNode,
    Primitive,
    Reference,
    SchemaNode,
)
from openapi_llm_text.renderer.context import SCHEMA_LISTING
from openapi_llm_text.renderer.schema_type import item_type, render_type

logger = logging.getLogger(__name__)

INDENT = "  "


class VirtualSchemaRegistry:
    """Virtual schemas registered while one parent schema is rendered."""

    def __init__(self, parent: str, taken: set[str]):
        self.parent = parent
        self.taken = taken
        self.schemas: dict[str, ObjectNode] = {}
        self._ordinal = 0

    def register(self, node: ObjectNode) -> str:
        while True:
            self._ordinal += 1
            name = f"{self.parent}__inline__{self._ordinal}"
            if name not in self.taken:
                break
        self.taken.add(name)
        self.schemas[name] = node
        logger.debug("Registered virtual schema %s", name)
        return name


def render_schemas(schemas: dict[str, SchemaNode | None]) -> list[str]:
    """Render the SCHEMAS section body for every named schema, in order."""
    lines: list[str] = []
    taken = set(schemas)

    for name, node in schemas.items():
        registry = VirtualSchemaRegistry(name, taken)
        lines.extend(render_named_schema(name, node, registry))
        for virtual_name, virtual_node in registry.schemas.items():
            lines.extend(render_named_schema(virtual_name, virtual_node))

    return lines


def render_named_schema(
    name: str,
    node: SchemaNode | None,
    registry: VirtualSchemaRegistry | None = None,
) -> list[str]:
    """Render one schema block, ending with a blank line.

    Without a registry (virtual schemas), no further virtual schemas are
    synthesized and inline object branches show as `inline`.
    """
    summary, body = _summarize(node, registry)
    return [f"{name}: {summary}", *(INDENT + line for line in body), ""]


def _summarize(node: SchemaNode | None, registry: VirtualSchemaRegistry | None) -> tuple[str, list[str]]:
    if isinstance(node, Composition):
        branches = ", ".join(_composition_branch(b, registry) for b in node.branches)
        return f"{node.kind} [{branches}]", []

    if isinstance(node, ArrayNode):
        return "array", [f"items: {item_type(node.items, SCHEMA_LISTING)}"]

    if isinstance(node, ObjectNode) and node.properties:
        body = []
        for prop_name, prop in node.properties.items():
            marker = "*" if prop_name in node.required else ""
            body.append(f"- {prop_name}{marker}: {property_type(prop)}")
        return "object", body

    return render_type(node, SCHEMA_LISTING), []


def _composition_branch(branch: SchemaNode | None, registry: VirtualSchemaRegistry | None) -> str:
    if isinstance(branch, Reference):
        return branch.name or SCHEMA_LISTING.unknown
    if isinstance(branch, ObjectNode) and registry is not None:
        return registry.register(branch)
    if isinstance(branch, Primitive):
        return branch.kind
    return "inline"


def property_type(prop: SchemaNode | None) -> str:
    """Type of one property line in the schema listing."""
    if isinstance(prop, Reference):
        return "object"

    if isinstance(prop, Composition):
        if len(prop.branches) == 1 and isinstance(prop.branches[0], Reference):
            return prop.branches[0].name or SCHEMA_LISTING.unknown
        branches = ", ".join(_property_branch(b) for b in prop.branches)
        return f"{prop.kind} [{branches}]"

    return render_type(prop, SCHEMA_LISTING)


def _property_branch(branch: SchemaNode | None) -> str:
    if isinstance(branch, Reference):
        return branch.name or SCHEMA_LISTING.unknown
    if isinstance(branch, Primitive):
        return branch.kind
    return "inline"
