"""Tests for the OpenAPI 3 to Swagger 2.0 converter."""

import pytest

from swagcli.swagger.converter import SwaggerV2Converter, convert_to_v2, rewrite_ref

PETSTORE = {
    "openapi": "3.1.0",
    "info": {"title": "Petstore", "version": "1.0", "summary": "Pets"},
    "servers": [{"url": "https://pets.example.com/api"}],
    "tags": [{"name": "pets"}],
    "paths": {
        "/pets/{petId}": {
            "parameters": [
                {"name": "petId", "in": "path", "required": True,
                 "schema": {"type": "integer"}},
            ],
            "get": {
                "operationId": "getPet",
                "tags": ["pets"],
                "parameters": [
                    {"name": "fields", "in": "query",
                     "schema": {"type": "array", "items": {"type": "string"}}},
                    {"name": "session", "in": "cookie", "schema": {"type": "string"}},
                    {"name": "X-Trace", "in": "header",
                     "schema": {"anyOf": [{"type": "string"}, {"type": "null"}]}},
                ],
                "responses": {
                    "200": {
                        "description": "A pet",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Pet"}
                            }
                        },
                    },
                    "404": {"$ref": "#/components/responses/NotFound"},
                },
            },
            "put": {
                "operationId": "updatePet",
                "requestBody": {
                    "required": True,
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/Pet"}
                        }
                    },
                },
                "responses": {"204": {"description": "Updated"}},
                "security": [{"bearer": []}],
            },
            "trace": {"responses": {"200": {"description": "echo"}}},
        },
        "/pets/{petId}/photo": {
            "post": {
                "requestBody": {
                    "content": {
                        "multipart/form-data": {
                            "schema": {
                                "type": "object",
                                "required": ["file"],
                                "properties": {
                                    "file": {"type": "string", "format": "binary"},
                                    "caption": {"type": "string"},
                                },
                            }
                        }
                    }
                },
                "responses": {"201": {"description": "Created"}},
            }
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": {"type": "integer"},
                    "owner": {
                        "anyOf": [{"$ref": "#/components/schemas/Owner"},
                                  {"type": "null"}]
                    },
                    "tag": {"type": ["string", "null"]},
                    "kind": {"const": "pet"},
                },
            },
            "Owner": {"type": "object", "properties": {"name": {"type": "string"}}},
        },
        "responses": {"NotFound": {"description": "Not found"}},
        "securitySchemes": {
            "bearer": {"type": "http", "scheme": "bearer"},
            "basic": {"type": "http", "scheme": "basic"},
            "oidc": {"type": "openIdConnect", "openIdConnectUrl": "https://x"},
        },
    },
}  # fmt: skip


@pytest.fixture
def swagger():
    return convert_to_v2(PETSTORE)


@pytest.mark.unit
class TestDocumentLevel:
    def test_header(self, swagger):
        assert swagger["swagger"] == "2.0"
        assert swagger["info"] == {"title": "Petstore", "version": "1.0"}
        assert swagger["tags"] == [{"name": "pets"}]

    def test_server_fields_from_servers(self, swagger):
        assert swagger["host"] == "pets.example.com"
        assert swagger["basePath"] == "/api"
        assert swagger["schemes"] == ["https"]

    def test_overrides_take_precedence(self):
        swagger = convert_to_v2(PETSTORE, host="api.example.com", base_path="/v1")

        assert swagger["host"] == "api.example.com"
        assert swagger["basePath"] == "/v1"

    def test_host_override_with_scheme(self):
        swagger = convert_to_v2(PETSTORE, host="http://localhost:8080")

        assert swagger["host"] == "localhost:8080"
        assert swagger["schemes"] == ["http"]

    def test_no_servers_no_overrides(self):
        swagger = convert_to_v2({"openapi": "3.0.3", "info": {}, "paths": {}})

        assert "host" not in swagger
        assert "basePath" not in swagger

    def test_definitions(self, swagger):
        pet = swagger["definitions"]["Pet"]

        assert pet["required"] == ["id"]
        assert pet["properties"]["owner"] == {
            "allOf": [{"$ref": "#/definitions/Owner"}],
            "x-nullable": True,
        }
        assert pet["properties"]["tag"] == {"type": "string", "x-nullable": True}
        assert pet["properties"]["kind"] == {"enum": ["pet"]}

    def test_security_definitions(self, swagger):
        assert swagger["securityDefinitions"] == {
            "bearer": {"type": "apiKey", "name": "Authorization", "in": "header"},
            "basic": {"type": "basic"},
        }

    def test_component_responses(self, swagger):
        assert swagger["responses"] == {"NotFound": {"description": "Not found"}}


@pytest.mark.unit
class TestOperations:
    def test_trace_dropped(self, swagger):
        assert set(swagger["paths"]["/pets/{petId}"]) == {"parameters", "get", "put"}

    def test_path_level_parameters(self, swagger):
        assert swagger["paths"]["/pets/{petId}"]["parameters"] == [
            {"name": "petId", "in": "path", "required": True, "type": "integer"}
        ]

    def test_parameters_flattened(self, swagger):
        params = swagger["paths"]["/pets/{petId}"]["get"]["parameters"]

        assert params == [
            {
                "name": "fields",
                "in": "query",
                "type": "array",
                "items": {"type": "string"},
                "collectionFormat": "multi",
            },
            {"name": "X-Trace", "in": "header", "type": "string", "x-nullable": True},
        ]

    def test_responses(self, swagger):
        get = swagger["paths"]["/pets/{petId}"]["get"]

        assert get["produces"] == ["application/json"]
        assert get["responses"]["200"] == {
            "description": "A pet",
            "schema": {"$ref": "#/definitions/Pet"},
        }
        assert get["responses"]["404"] == {"$ref": "#/responses/NotFound"}

    def test_body_parameter(self, swagger):
        put = swagger["paths"]["/pets/{petId}"]["put"]

        assert put["consumes"] == ["application/json"]
        assert put["parameters"] == [
            {
                "name": "body",
                "in": "body",
                "required": True,
                "schema": {"$ref": "#/definitions/Pet"},
            }
        ]
        assert put["security"] == [{"bearer": []}]

    def test_form_parameters(self, swagger):
        post = swagger["paths"]["/pets/{petId}/photo"]["post"]

        assert post["consumes"] == ["multipart/form-data"]
        assert post["parameters"] == [
            {"name": "file", "in": "formData", "required": True, "type": "file"},
            {"name": "caption", "in": "formData", "type": "string"},
        ]


@pytest.mark.unit
class TestSchemas:
    def test_exclusive_bounds(self):
        converter = SwaggerV2Converter({})

        assert converter.convert_schema(
            {"type": "number", "exclusiveMinimum": 0, "exclusiveMaximum": 10}
        ) == {
            "type": "number",
            "minimum": 0,
            "exclusiveMinimum": True,
            "maximum": 10,
            "exclusiveMaximum": True,
        }

    def test_examples_become_example(self):
        converter = SwaggerV2Converter({})

        assert converter.convert_schema({"type": "string", "examples": ["a", "b"]}) == {
            "type": "string",
            "example": "a",
        }

    def test_multiple_union_members_kept_as_extension(self):
        converter = SwaggerV2Converter({})

        out = converter.convert_schema({"oneOf": [{"type": "string"}, {"type": "integer"}]})

        assert out == {"x-oneOf": [{"type": "string"}, {"type": "integer"}]}

    def test_unknown_keywords_dropped(self):
        converter = SwaggerV2Converter({})

        assert converter.convert_schema({"type": "object", "$defs": {}, "if": {}}) == {
            "type": "object"
        }


@pytest.mark.parametrize(
    "ref, expected",
    [
        ("#/components/schemas/Pet", "#/definitions/Pet"),
        ("#/components/parameters/Limit", "#/parameters/Limit"),
        ("#/components/responses/NotFound", "#/responses/NotFound"),
        ("other.json#/Pet", "other.json#/Pet"),
    ],
)
def test_rewrite_ref(ref, expected):
    assert rewrite_ref(ref) == expected
