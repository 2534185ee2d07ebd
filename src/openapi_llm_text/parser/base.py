"""Unified data models for a normalized API document.

Both Swagger 2.0 and OpenAPI 3.x documents are converted into these
read-only models before rendering.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .refs import ref_name


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Reference(_Node):
    """A local `$ref` pointer; only its trailing segment is ever shown."""

    node: Literal["reference"] = "reference"
    ref: str

    @property
    def name(self) -> str:
        return ref_name(self.ref)


class Primitive(_Node):
    """Any schema with a declared scalar (or unrecognized) type."""

    node: Literal["primitive"] = "primitive"
    kind: str  # string / integer / number / boolean / file / ...
    format: str | None = None
    enum: list | None = None


class ArrayNode(_Node):
    node: Literal["array"] = "array"
    items: "SchemaNode | None" = None


class ObjectNode(_Node):
    node: Literal["object"] = "object"
    properties: dict[str, "SchemaNode | None"] = {}
    required: frozenset[str] = frozenset()


class Composition(_Node):
    node: Literal["composition"] = "composition"
    kind: str  # allOf / oneOf / anyOf
    branches: list["SchemaNode | None"]


SchemaNode = Annotated[
    Union[Reference, Primitive, ArrayNode, ObjectNode, Composition],
    Field(discriminator="node"),
]

ArrayNode.model_rebuild()
ObjectNode.model_rebuild()
Composition.model_rebuild()


class ParameterNode(_Node):
    """A single operation parameter (path, query, header, cookie, body, formData).

    OpenAPI 3.x parameters (and Swagger 2.0 body parameters) carry `schema`;
    other Swagger 2.0 parameters carry `declared_type` and `enum` directly.
    """

    name: str
    location: str
    required: bool = False
    description: str = ""
    schema_: SchemaNode | None = Field(default=None, alias="schema")
    declared_type: str | None = None
    enum: list | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Response(_Node):
    description: str = ""
    # media type -> schema; Swagger 2.0 responses use a single "" key
    content: dict[str, SchemaNode | None] = {}


class Operation(_Node):
    method: str  # GET / POST / PUT / ...
    path: str
    summary: str = ""
    parameters: list[ParameterNode] = []
    request_body: dict[str, SchemaNode | None] | None = None
    responses: dict[str, Response] = {}


class Server(_Node):
    url: str
    description: str = ""


class SecurityScheme(_Node):
    type: str
    scheme: str = ""
    location: str = ""  # apiKey "in"
    name: str = ""


class Document(_Node):
    """One logical shape for both Swagger 2.0 and OpenAPI 3.x documents."""

    title: str
    version: str
    description: str = ""
    servers: list[Server] = []
    operations: list[Operation] = []
    schemas: dict[str, SchemaNode | None] = {}
    security_schemes: dict[str, SecurityScheme] = {}
