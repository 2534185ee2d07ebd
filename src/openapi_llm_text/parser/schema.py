"""Conversion of raw schema mappings into SchemaNode models."""

from .base import ArrayNode, Composition, ObjectNode, Primitive, Reference, SchemaNode

COMPOSITION_KEYWORDS = ("allOf", "oneOf", "anyOf")


def parse_schema(raw) -> SchemaNode | None:
    """Parse one schema mapping.

    Returns None for anything without a recognizable shape, which renders
    as the context's unknown token.
    """
    if not isinstance(raw, dict):
        return None

    if "$ref" in raw:
        return Reference(ref=str(raw["$ref"]))

    for keyword in COMPOSITION_KEYWORDS:
        branches = raw.get(keyword)
        if isinstance(branches, list):
            return Composition(kind=keyword, branches=[parse_schema(b) for b in branches])

    schema_type = declared_type(raw)

    if schema_type == "array":
        return ArrayNode(items=parse_schema(raw.get("items")))

    properties = raw.get("properties")
    if schema_type == "object" or isinstance(properties, dict):
        properties = properties if isinstance(properties, dict) else {}
        required = raw.get("required")
        return ObjectNode(
            properties={str(name): parse_schema(prop) for name, prop in properties.items()},
            required=frozenset(str(r) for r in required) if isinstance(required, list) else frozenset(),
        )

    if schema_type:
        enum = raw.get("enum")
        return Primitive(
            kind=schema_type,
            format=str(raw["format"]) if raw.get("format") else None,
            enum=enum if isinstance(enum, list) and enum else None,
        )

    return None


def declared_type(raw: dict) -> str | None:
    """Return the declared `type`, taking the first non-null entry of a 3.1 type list."""
    schema_type = raw.get("type")
    if isinstance(schema_type, list):
        schema_type = next((t for t in schema_type if t != "null"), None)
    return schema_type if isinstance(schema_type, str) else None
