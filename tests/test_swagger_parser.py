import json
import logging
from pathlib import Path

import yaml

from openapi_llm_text.parser.base import ArrayNode, ObjectNode, Primitive, Reference
from openapi_llm_text.parser.detect import OPENAPI_3, SWAGGER_2, detect_version
from openapi_llm_text.parser.refs import ReferenceResolver, ref_name
from openapi_llm_text.parser.swagger import normalize

FIXTURES = Path(__file__).parent / "fixtures"


def _petstore():
    return normalize(yaml.safe_load((FIXTURES / "petstore.yaml").read_text(encoding="utf-8")))


def _petstore_v2():
    return normalize(json.loads((FIXTURES / "petstore-v2.json").read_text(encoding="utf-8")))


class TestDetectVersion:
    def test_swagger_2(self):
        assert detect_version({"swagger": "2.0"}) == SWAGGER_2

    def test_openapi_3(self):
        assert detect_version({"openapi": "3.1.0"}) == OPENAPI_3

    def test_swagger_must_be_exact_string(self):
        assert detect_version({"swagger": 2.0}) == OPENAPI_3
        assert detect_version({"swagger": "2.0.1"}) == OPENAPI_3

    def test_no_version_field(self):
        assert detect_version({}) == OPENAPI_3


class TestReferenceResolver:
    def test_ref_name(self):
        assert ref_name("#/components/parameters/limit") == "limit"
        assert ref_name("#/definitions/") == ""

    def test_inline_node_passes_through(self):
        node = {"name": "q", "in": "query"}
        assert ReferenceResolver().parameter(node) is node

    def test_resolves_to_shared_node(self):
        target = {"name": "limit", "in": "query"}
        resolver = ReferenceResolver(parameters={"limit": target})
        assert resolver.parameter({"$ref": "#/components/parameters/limit"}) is target

    def test_missing_target(self):
        resolver = ReferenceResolver(parameters={})
        assert resolver.parameter({"$ref": "#/components/parameters/nope"}) is None

    def test_single_hop_only(self):
        resolver = ReferenceResolver(responses={
            "A": {"$ref": "#/components/responses/B"},
            "B": {"description": "real"},
        })
        assert resolver.response({"$ref": "#/components/responses/A"}) is None

    def test_non_mapping_node(self):
        assert ReferenceResolver().request_body("oops") is None


class TestOpenApi3Normalizer:
    def test_metadata(self):
        doc = _petstore()
        assert doc.title == "Swagger Petstore"
        assert doc.version == "1.0.0"
        assert doc.description == "A sample pet store"
        assert [s.url for s in doc.servers] == ["http://petstore.swagger.io/v1", "http://staging.petstore.io/v1"]
        assert doc.servers[1].description == "Staging"

    def test_operations_in_declaration_order(self):
        doc = _petstore()
        assert [(op.method, op.path) for op in doc.operations] == [
            ("GET", "/pets"),
            ("POST", "/pets"),
            ("GET", "/pets/{petId}"),
        ]

    def test_component_parameter_resolved(self):
        get_pets = _petstore().operations[0]
        status = get_pets.parameters[1]
        assert status.name == "status"
        assert status.schema_ == Primitive(kind="string", enum=["available", "pending", "sold"])

    def test_unresolved_parameter_dropped(self):
        post_pets = _petstore().operations[1]
        assert post_pets.parameters == []

    def test_path_level_parameters_merged(self):
        get_pet = _petstore().operations[2]
        assert [p.name for p in get_pet.parameters] == ["petId"]
        assert get_pet.parameters[0].required is True

    def test_request_body_reference_resolved(self):
        post_pets = _petstore().operations[1]
        assert post_pets.request_body == {"application/json": Reference(ref="#/components/schemas/NewPet")}

    def test_response_reference_resolved(self):
        post_pets = _petstore().operations[1]
        assert post_pets.responses["201"].description == "Null response"
        assert post_pets.responses["201"].content == {}

    def test_schemas_and_security(self):
        doc = _petstore()
        assert list(doc.schemas) == ["Pet", "NewPet", "Owner", "Pets", "Error"]
        assert doc.security_schemes["apiKey"].location == "header"
        assert doc.security_schemes["bearerAuth"].scheme == "bearer"

    def test_operation_overrides_path_parameter(self):
        doc = normalize({
            "openapi": "3.0.0",
            "info": {"title": "T", "version": "1"},
            "paths": {
                "/items/{id}": {
                    "parameters": [
                        {"name": "id", "in": "path", "schema": {"type": "string"}},
                        {"name": "trace", "in": "header", "schema": {"type": "string"}},
                    ],
                    "get": {
                        "parameters": [
                            {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}},
                            {"name": "q", "in": "query", "schema": {"type": "string"}},
                        ],
                    },
                }
            },
        })
        params = doc.operations[0].parameters
        assert [p.name for p in params] == ["trace", "id", "q"]
        assert params[1].schema_ == Primitive(kind="integer")
        assert params[1].required is True

    def test_repeated_operation_parameters_all_kept(self):
        doc = normalize({
            "openapi": "3.0.0",
            "paths": {
                "/x": {
                    "get": {
                        "parameters": [
                            {"in": "query", "description": "a"},
                            {"in": "query", "description": "b"},
                        ],
                    }
                }
            },
        })
        params = doc.operations[0].parameters
        assert [p.description for p in params] == ["a", "b"]
        assert [p.name for p in params] == ["unknown", "unknown"]

    def test_path_parameter_replaced_by_every_override(self):
        doc = normalize({
            "openapi": "3.0.0",
            "paths": {
                "/x": {
                    "parameters": [{"name": "tag", "in": "query", "description": "path"}],
                    "get": {
                        "parameters": [
                            {"name": "tag", "in": "query", "description": "first"},
                            {"name": "tag", "in": "query", "description": "second"},
                        ],
                    },
                }
            },
        })
        assert [p.description for p in doc.operations[0].parameters] == ["first", "second"]

    def test_skipped_operation_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="openapi_llm_text.parser.swagger"):
            doc = normalize({"openapi": "3.0.0", "paths": {"/x": {"get": "not a mapping"}}})
        assert doc.operations == []
        assert "Skipping GET /x" in caplog.text

    def test_non_method_keys_ignored(self):
        doc = normalize({
            "openapi": "3.0.0",
            "info": {"title": "T", "version": "1"},
            "paths": {"/x": {"summary": "path summary", "x-extra": {}, "get": {}}},
        })
        assert [op.method for op in doc.operations] == ["GET"]

    def test_unresolved_request_body_dropped(self):
        doc = normalize({
            "openapi": "3.0.0",
            "paths": {"/x": {"post": {"requestBody": {"$ref": "#/components/requestBodies/Gone"}}}},
        })
        assert doc.operations[0].request_body is None

    def test_missing_info_uses_placeholders(self):
        doc = normalize({"openapi": "3.0.0"})
        assert doc.title == "Untitled"
        assert doc.version == "unknown"
        assert doc.servers == []
        assert doc.operations == []


class TestSwagger2Normalizer:
    def test_base_url(self):
        assert [s.url for s in _petstore_v2().servers] == ["https://petstore.swagger.io/v2"]

    def test_base_url_uses_first_scheme(self):
        doc = normalize({"swagger": "2.0", "host": "api.x.com", "basePath": "/v1", "schemes": ["http"]})
        assert doc.servers[0].url == "http://api.x.com/v1"

    def test_base_url_defaults(self):
        doc = normalize({"swagger": "2.0", "host": "api.x.com"})
        assert doc.servers[0].url == "https://api.x.com"

    def test_no_host_no_servers(self):
        assert normalize({"swagger": "2.0", "basePath": "/v1"}).servers == []

    def test_declared_type_parameters(self):
        find = _petstore_v2().operations[0]
        status, tags, limit = find.parameters
        assert status.declared_type == "string"
        assert status.enum == ["available", "pending", "sold"]
        assert status.schema_ is None
        assert tags.declared_type == "array"
        assert limit.name == "limit"
        assert limit.description == "Max results"

    def test_body_parameter_keeps_schema(self):
        add_pet = _petstore_v2().operations[2]
        assert add_pet.parameters[0].location == "body"
        assert add_pet.parameters[0].schema_ == Reference(ref="#/definitions/Pet")
        assert add_pet.request_body is None

    def test_response_schema(self):
        find = _petstore_v2().operations[0]
        schema = find.responses["200"].content[""]
        assert isinstance(schema, ArrayNode)
        assert find.responses["400"].content == {}

    def test_top_level_response_reference(self):
        upload = _petstore_v2().operations[1]
        assert upload.responses["200"].content == {"": Reference(ref="#/definitions/ApiResponse")}

    def test_definitions(self):
        doc = _petstore_v2()
        assert isinstance(doc.schemas["Pet"], ObjectNode)
        assert [s.type for s in doc.security_schemes.values()] == ["oauth2", "apiKey", "basic"]
