"""OpenAPI / Swagger document normalizer.

Normalizes OpenAPI 3.x and Swagger 2.0 documents into one Document model.
Each source version gets an adapter that knows where its data lives; the
operation walk is shared.
"""

import logging

from .base import Document, Operation, ParameterNode, Response, SecurityScheme, Server
from .detect import SWAGGER_2, detect_version
from .refs import ReferenceResolver
from .schema import declared_type, parse_schema

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def _mapping(value) -> dict:
    return value if isinstance(value, dict) else {}


def _list(value) -> list:
    return value if isinstance(value, list) else []


def _text(value) -> str:
    return "" if value is None else str(value)


class SourceAdapter:
    """Locates the parts of one source document shape."""

    def __init__(self, doc: dict):
        self.doc = doc
        self.resolver = self._make_resolver()

    def _make_resolver(self) -> ReferenceResolver:
        raise NotImplementedError

    def servers(self) -> list[Server]:
        raise NotImplementedError

    def schemas(self) -> dict:
        raise NotImplementedError

    def security_schemes(self) -> dict:
        raise NotImplementedError

    def parameter(self, raw: dict) -> ParameterNode:
        raise NotImplementedError

    def request_body(self, operation: dict) -> dict | None:
        raise NotImplementedError

    def response(self, raw: dict) -> Response:
        raise NotImplementedError


class OpenApi3Adapter(SourceAdapter):
    """OpenAPI 3.0 / 3.1: reusable parts live under `components`."""

    def _make_resolver(self) -> ReferenceResolver:
        components = _mapping(self.doc.get("components"))
        return ReferenceResolver(
            parameters=_mapping(components.get("parameters")),
            request_bodies=_mapping(components.get("requestBodies")),
            responses=_mapping(components.get("responses")),
        )

    def servers(self) -> list[Server]:
        result = []
        for server in _list(self.doc.get("servers")):
            if isinstance(server, dict) and server.get("url"):
                result.append(Server(url=str(server["url"]), description=_text(server.get("description"))))
        return result

    def schemas(self) -> dict:
        return _mapping(_mapping(self.doc.get("components")).get("schemas"))

    def security_schemes(self) -> dict:
        return _mapping(_mapping(self.doc.get("components")).get("securitySchemes"))

    def parameter(self, raw: dict) -> ParameterNode:
        return ParameterNode(
            name=_text(raw.get("name")) or "unknown",
            location=_text(raw.get("in")) or "unknown",
            required=bool(raw.get("required", False)),
            description=_text(raw.get("description")),
            schema=parse_schema(raw.get("schema")),
        )

    def request_body(self, operation: dict) -> dict | None:
        if "requestBody" not in operation:
            return None
        body = self.resolver.request_body(operation["requestBody"])
        if body is None:
            return None
        return {
            str(media_type): parse_schema(_mapping(media).get("schema"))
            for media_type, media in _mapping(body.get("content")).items()
        }

    def response(self, raw: dict) -> Response:
        return Response(
            description=_text(raw.get("description")),
            content={
                str(media_type): parse_schema(_mapping(media).get("schema"))
                for media_type, media in _mapping(raw.get("content")).items()
            },
        )


class Swagger2Adapter(SourceAdapter):
    """Swagger 2.0: reusable parts live at the document root."""

    def _make_resolver(self) -> ReferenceResolver:
        return ReferenceResolver(
            parameters=_mapping(self.doc.get("parameters")),
            responses=_mapping(self.doc.get("responses")),
        )

    def servers(self) -> list[Server]:
        host = self.doc.get("host")
        if not host:
            return []
        schemes = _list(self.doc.get("schemes"))
        scheme = schemes[0] if schemes else "https"
        return [Server(url=f"{scheme}://{host}{_text(self.doc.get('basePath'))}")]

    def schemas(self) -> dict:
        return _mapping(self.doc.get("definitions"))

    def security_schemes(self) -> dict:
        return _mapping(self.doc.get("securityDefinitions"))

    def parameter(self, raw: dict) -> ParameterNode:
        fields = dict(
            name=_text(raw.get("name")) or "unknown",
            location=_text(raw.get("in")) or "unknown",
            required=bool(raw.get("required", False)),
            description=_text(raw.get("description")),
        )
        if "schema" in raw:
            return ParameterNode(schema=parse_schema(raw["schema"]), **fields)
        enum = raw.get("enum")
        return ParameterNode(
            declared_type=declared_type(raw),
            enum=enum if isinstance(enum, list) and enum else None,
            **fields,
        )

    def request_body(self, operation: dict) -> dict | None:
        # Body parameters stay in the parameter list for 2.0.
        return None

    def response(self, raw: dict) -> Response:
        content = {"": parse_schema(raw["schema"])} if "schema" in raw else {}
        return Response(description=_text(raw.get("description")), content=content)


def make_adapter(doc: dict) -> SourceAdapter:
    if detect_version(doc) == SWAGGER_2:
        return Swagger2Adapter(doc)
    return OpenApi3Adapter(doc)


def normalize(doc: dict) -> Document:
    """Normalize a decoded OpenAPI/Swagger mapping into a Document."""
    adapter = make_adapter(doc)
    info = _mapping(doc.get("info"))

    return Document(
        title=_text(info.get("title")) or "Untitled",
        version=_text(info.get("version")) or "unknown",
        description=_text(info.get("description")),
        servers=adapter.servers(),
        operations=_parse_operations(adapter, _mapping(doc.get("paths"))),
        schemas={str(name): parse_schema(raw) for name, raw in adapter.schemas().items()},
        security_schemes=_parse_security_schemes(adapter.security_schemes()),
    )


def _parse_operations(adapter: SourceAdapter, paths: dict) -> list[Operation]:
    operations = []

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            logger.debug("Skipping path %s: path item is not a mapping", path)
            continue
        path_params = _list(path_item.get("parameters"))

        for method, operation in path_item.items():
            if method not in HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                logger.debug("Skipping %s %s: operation is not a mapping", method.upper(), path)
                continue

            raw_params = _merge_parameters(adapter, path_params, _list(operation.get("parameters")))
            responses = {
                str(status): _parse_response(adapter, resp)
                for status, resp in _mapping(operation.get("responses")).items()
            }

            operations.append(
                Operation(
                    method=method.upper(),
                    path=str(path),
                    summary=_text(operation.get("summary")),
                    parameters=[adapter.parameter(p) for p in raw_params],
                    request_body=adapter.request_body(operation),
                    responses=responses,
                )
            )

    return operations


def _merge_parameters(adapter: SourceAdapter, path_params: list, op_params: list) -> list[dict]:
    """Resolve and merge path-level and operation parameters.

    A path-level parameter is replaced when the operation declares one with
    the same (name, in). Every operation parameter is kept, in order, after
    the remaining path-level ones. Unresolvable references are dropped.
    """
    operation = _resolve_parameters(adapter, op_params)
    overridden = {_parameter_key(p) for p in operation}
    inherited = []
    for param in _resolve_parameters(adapter, path_params):
        if _parameter_key(param) in overridden:
            logger.debug("Path parameter %s overridden by operation", _parameter_key(param))
            continue
        inherited.append(param)
    return inherited + operation


def _resolve_parameters(adapter: SourceAdapter, raw_params: list) -> list[dict]:
    resolved = (adapter.resolver.parameter(raw) for raw in raw_params)
    return [p for p in resolved if p is not None]


def _parameter_key(param: dict) -> tuple[str, str]:
    return _text(param.get("name")), _text(param.get("in"))


def _parse_response(adapter: SourceAdapter, raw) -> Response:
    resp = adapter.resolver.response(raw)
    if resp is None:
        return Response()
    return adapter.response(resp)


def _parse_security_schemes(schemes: dict) -> dict[str, SecurityScheme]:
    result = {}
    for name, scheme in schemes.items():
        if not isinstance(scheme, dict) or not scheme.get("type"):
            continue
        result[str(name)] = SecurityScheme(
            type=str(scheme["type"]),
            scheme=_text(scheme.get("scheme")).lower(),
            location=_text(scheme.get("in")),
            name=_text(scheme.get("name")),
        )
    return result
