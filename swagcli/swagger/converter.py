"""
Conversion of OpenAPI 3.x documents to Swagger 2.0.

Swagger 2.0 cannot express everything OpenAPI 3 can. The conversion keeps
what has a direct counterpart and drops the rest:

- ``servers`` become ``host``/``basePath``/``schemes`` (first server only)
- ``requestBody`` becomes a ``body`` parameter, or ``formData`` parameters
  for form media types; response ``content`` becomes ``schema``
- media types are collected into per-operation ``consumes``/``produces``
- ``components`` sections move to ``definitions``, ``parameters``,
  ``responses`` and ``securityDefinitions``, and ``$ref``s follow them
- nullable unions (``anyOf`` with a ``null`` member, ``type`` lists)
  collapse to the non-null member plus ``x-nullable: true``
- cookie parameters, ``trace`` operations, callbacks, links and
  openIdConnect security schemes are dropped
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")

FORM_MEDIA_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

_REF_MAP = {
    "#/components/schemas/": "#/definitions/",
    "#/components/parameters/": "#/parameters/",
    "#/components/responses/": "#/responses/",
    "#/components/securitySchemes/": "#/securityDefinitions/",
}

# Schema keywords Swagger 2.0 understands
_SCHEMA_KEYS = frozenset(
    {
        "title", "description", "default", "format", "type", "enum", "pattern",
        "minLength", "maxLength", "minimum", "maximum", "exclusiveMinimum",
        "exclusiveMaximum", "multipleOf", "minItems", "maxItems", "uniqueItems",
        "minProperties", "maxProperties", "required", "readOnly", "xml",
        "externalDocs", "example", "discriminator",
    }
)  # fmt: skip

# Keywords allowed on non-body parameters, headers and their items
_SIMPLE_KEYS = (
    "type", "format", "items", "collectionFormat", "default", "enum", "pattern",
    "minLength", "maxLength", "minimum", "maximum", "exclusiveMinimum",
    "exclusiveMaximum", "multipleOf", "minItems", "maxItems", "uniqueItems",
    "x-nullable",
)  # fmt: skip

_OAUTH_FLOWS = (
    ("implicit", "implicit"),
    ("password", "password"),
    ("clientCredentials", "application"),
    ("authorizationCode", "accessCode"),
)


def rewrite_ref(ref: str) -> str:
    """Map an OpenAPI 3 component reference to its Swagger 2.0 location."""
    for old, new in _REF_MAP.items():
        if ref.startswith(old):
            return new + ref[len(old) :]
    return ref


def _extensions(obj: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in obj.items() if k.startswith("x-")}


def _is_null_schema(schema: Any) -> bool:
    return isinstance(schema, Mapping) and schema.get("type") == "null"


class SwaggerV2Converter:
    """
    Converts one OpenAPI 3 mapping to a Swagger 2.0 mapping.

    Example:
        converter = SwaggerV2Converter(openapi_dict)
        swagger = converter.convert(host="api.example.com", base_path="/v1")
    """

    def __init__(self, spec: Mapping[str, Any]) -> None:
        self._spec = spec
        self._components: Mapping[str, Any] = spec.get("components") or {}

    # References

    def resolve(self, obj: Any, depth: int = 0) -> Any:
        """Follow a local "#/components/..." reference (up to 10 hops)."""
        if not isinstance(obj, Mapping) or "$ref" not in obj or depth > 10:
            return obj
        ref = obj["$ref"]
        if not isinstance(ref, str) or not ref.startswith("#/"):
            return obj
        target: Any = self._spec
        for token in ref[2:].split("/"):
            token = token.replace("~1", "/").replace("~0", "~")
            if not isinstance(target, Mapping) or token not in target:
                return obj
            target = target[token]
        return self.resolve(target, depth + 1)

    # Schemas

    def convert_schema(self, schema: Any) -> Any:
        """Convert a JSON schema to the Swagger 2.0 schema subset."""
        if not isinstance(schema, Mapping):
            return schema
        if "$ref" in schema:
            return {"$ref": rewrite_ref(schema["$ref"])}

        for union in ("anyOf", "oneOf"):
            if union in schema:
                return self._convert_union(schema, union)

        out: dict[str, Any] = {}
        nullable = bool(schema.get("nullable"))

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            types = [t for t in schema_type if t != "null"]
            nullable = nullable or len(types) < len(schema_type)
            if types:
                out["type"] = types[0]
        elif schema_type == "null":
            nullable = True
        elif schema_type is not None:
            out["type"] = schema_type

        for key, value in schema.items():
            if key == "type":
                continue
            if key == "properties":
                out["properties"] = {
                    name: self.convert_schema(sub) for name, sub in value.items()
                }
            elif key in ("items", "additionalProperties"):
                out[key] = self.convert_schema(value)
            elif key == "allOf":
                out["allOf"] = [self.convert_schema(s) for s in value]
            elif key == "const":
                out["enum"] = [value]
            elif key == "examples" and isinstance(value, list) and value:
                out.setdefault("example", value[0])
            elif key in ("exclusiveMinimum", "exclusiveMaximum") and not isinstance(
                value, bool
            ):
                bound = "minimum" if key == "exclusiveMinimum" else "maximum"
                out[bound] = value
                out[key] = True
            elif key == "discriminator" and isinstance(value, Mapping):
                out["discriminator"] = value.get("propertyName")
            elif key == "contentMediaType" and "format" not in schema:
                out["format"] = "binary"
            elif key in _SCHEMA_KEYS or key.startswith("x-"):
                out.setdefault(key, value)

        if nullable:
            out["x-nullable"] = True
        return out

    def _convert_union(self, schema: Mapping[str, Any], union: str) -> dict[str, Any]:
        members = schema[union]
        others = [m for m in members if not _is_null_schema(m)]
        nullable = len(others) < len(members)
        rest = {k: v for k, v in schema.items() if k != union}

        if len(others) == 1:
            inner = self.convert_schema(others[0])
            if "$ref" in inner and (rest or nullable):
                out = {"allOf": [inner]}
            else:
                out = dict(inner)
        else:
            out = {f"x-{union}": [self.convert_schema(m) for m in others]}

        out.update(self.convert_schema(rest))
        if nullable:
            out["x-nullable"] = True
        return out

    def _collapse(self, schema: Any) -> Any:
        """Reduce a union with a single non-null member to that member, inlined."""
        if not isinstance(schema, Mapping):
            return schema
        for union in ("anyOf", "oneOf"):
            members = schema.get(union)
            if not members:
                continue
            others = [m for m in members if not _is_null_schema(m)]
            if len(others) != 1:
                return schema
            rest = {k: v for k, v in schema.items() if k != union}
            merged = {**self.resolve(others[0]), **rest}
            if len(others) < len(members):
                merged["nullable"] = True
            return merged
        return schema

    def _simple_schema(self, schema: Any) -> dict[str, Any]:
        """Flatten a schema into the keywords allowed outside of a body."""
        source = self._collapse(self.resolve(schema or {}))
        converted = self.convert_schema(source)
        out = {k: converted[k] for k in _SIMPLE_KEYS if k in converted}
        out.setdefault("type", "string")
        if out["type"] == "object":
            out["type"] = "string"
        if out["type"] == "array":
            items = self._simple_schema(source.get("items"))
            items.pop("x-nullable", None)
            out["items"] = items
        else:
            out.pop("items", None)
        return out

    # Parameters

    def convert_parameter(self, param: Mapping[str, Any]) -> dict[str, Any] | None:
        """Convert a non-body parameter; cookie parameters yield None."""
        if "$ref" in param:
            return {"$ref": rewrite_ref(param["$ref"])}
        location = param.get("in")
        if location == "cookie":
            return None

        out: dict[str, Any] = {"name": param.get("name"), "in": location}
        if param.get("description"):
            out["description"] = param["description"]
        if location == "path" or param.get("required"):
            out["required"] = True

        schema = param.get("schema")
        if schema is None and isinstance(param.get("content"), Mapping):
            schema = next(iter(param["content"].values()), {}).get("schema")
        out.update(self._simple_schema(schema))

        if out["type"] == "array":
            explode = param.get("explode", param.get("style", "form") == "form")
            multi = location in ("query", "formData") and explode
            out["collectionFormat"] = "multi" if multi else "csv"
        out.update(_extensions(param))
        return out

    def _convert_parameters(self, params: list[Any] | None) -> list[dict[str, Any]]:
        converted = (self.convert_parameter(p) for p in params or [])
        return [p for p in converted if p is not None]

    def _form_parameters(self, schema: Any) -> list[dict[str, Any]]:
        schema = self.resolve(schema or {})
        required = set(schema.get("required") or [])
        params = []
        for name, prop in (schema.get("properties") or {}).items():
            prop = self.resolve(prop)
            param: dict[str, Any] = {"name": name, "in": "formData"}
            if prop.get("description"):
                param["description"] = prop["description"]
            if name in required:
                param["required"] = True
            if prop.get("format") == "binary" or "contentMediaType" in prop:
                param["type"] = "file"
            else:
                param.update(self._simple_schema(prop))
                if param["type"] == "array":
                    param["collectionFormat"] = "multi"
            params.append(param)
        return params

    def _body_parameter(self, body: Mapping[str, Any]) -> list[dict[str, Any]]:
        content: Mapping[str, Any] = body.get("content") or {}
        form_type = next((t for t in content if t in FORM_MEDIA_TYPES), None)
        if form_type is not None:
            return self._form_parameters(content[form_type].get("schema"))

        media = _preferred_media(content)
        param: dict[str, Any] = {"name": "body", "in": "body"}
        if body.get("description"):
            param["description"] = body["description"]
        if body.get("required"):
            param["required"] = True
        schema = content[media].get("schema") if media else None
        param["schema"] = self.convert_schema(schema or {})
        return [param]

    # Responses

    def convert_response(self, response: Mapping[str, Any]) -> dict[str, Any]:
        """Convert one response object."""
        if "$ref" in response:
            return {"$ref": rewrite_ref(response["$ref"])}

        out: dict[str, Any] = {"description": response.get("description", "")}
        content: Mapping[str, Any] = response.get("content") or {}
        media = _preferred_media(content)
        if media is not None and "schema" in content[media]:
            out["schema"] = self.convert_schema(content[media]["schema"])

        examples = {
            t: m["example"]
            for t, m in content.items()
            if isinstance(m, Mapping) and "example" in m
        }
        if examples:
            out["examples"] = examples

        headers = response.get("headers") or {}
        if headers:
            out["headers"] = {}
            for name, header in headers.items():
                header = self.resolve(header)
                converted = self._simple_schema(header.get("schema"))
                if header.get("description"):
                    converted["description"] = header["description"]
                out["headers"][name] = converted
        out.update(_extensions(response))
        return out

    # Operations and paths

    def convert_operation(self, op: Mapping[str, Any]) -> dict[str, Any]:
        """Convert one operation object."""
        out: dict[str, Any] = {}
        for key in ("tags", "summary", "description", "externalDocs", "operationId"):
            if key in op:
                out[key] = op[key]

        body = self.resolve(op.get("requestBody")) if "requestBody" in op else None
        if body:
            consumes = list((body.get("content") or {}).keys())
            if consumes:
                out["consumes"] = consumes

        produces: list[str] = []
        for response in (op.get("responses") or {}).values():
            for media in (self.resolve(response).get("content") or {}):
                if media not in produces:
                    produces.append(media)
        if produces:
            out["produces"] = produces

        params = self._convert_parameters(op.get("parameters"))
        if body:
            params.extend(self._body_parameter(body))
        if params:
            out["parameters"] = params

        out["responses"] = {
            str(code): self.convert_response(resp)
            for code, resp in (op.get("responses") or {}).items()
        }
        if op.get("deprecated"):
            out["deprecated"] = True
        if "security" in op:
            out["security"] = op["security"]
        out.update(_extensions(op))
        return out

    def convert_paths(self, paths: Mapping[str, Any]) -> dict[str, Any]:
        """Convert the paths object."""
        out: dict[str, Any] = {}
        for path, item in paths.items():
            item = self.resolve(item)
            converted: dict[str, Any] = {}
            shared = self._convert_parameters(item.get("parameters"))
            if shared:
                converted["parameters"] = shared
            for method in HTTP_METHODS:
                if method in item:
                    converted[method] = self.convert_operation(item[method])
            converted.update(_extensions(item))
            out[path] = converted
        return out

    # Security

    def convert_security_scheme(
        self, scheme: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        """Convert a security scheme; unsupported kinds yield None."""
        kind = scheme.get("type")
        out: dict[str, Any] | None = None
        if kind == "apiKey" and scheme.get("in") in ("header", "query"):
            out = {"type": "apiKey", "name": scheme.get("name"), "in": scheme["in"]}
        elif kind == "http" and str(scheme.get("scheme", "")).lower() == "basic":
            out = {"type": "basic"}
        elif kind == "http" and str(scheme.get("scheme", "")).lower() == "bearer":
            out = {"type": "apiKey", "name": "Authorization", "in": "header"}
        elif kind == "oauth2":
            out = self._convert_oauth2(scheme.get("flows") or {})
        if out is not None and scheme.get("description"):
            out["description"] = scheme["description"]
        return out

    @staticmethod
    def _convert_oauth2(flows: Mapping[str, Any]) -> dict[str, Any] | None:
        for name, v2_name in _OAUTH_FLOWS:
            flow = flows.get(name)
            if flow is None:
                continue
            out: dict[str, Any] = {"type": "oauth2", "flow": v2_name}
            if "authorizationUrl" in flow:
                out["authorizationUrl"] = flow["authorizationUrl"]
            if "tokenUrl" in flow:
                out["tokenUrl"] = flow["tokenUrl"]
            out["scopes"] = dict(flow.get("scopes") or {})
            return out
        return None

    # Document

    def _server_fields(
        self, host: str | None, base_path: str | None
    ) -> dict[str, Any]:
        servers = self._spec.get("servers") or []
        url = servers[0].get("url", "") if servers else ""
        parts = urlsplit(url)

        out: dict[str, Any] = {}
        scheme = parts.scheme
        if host is not None:
            if "://" in host:
                host_parts = urlsplit(host)
                scheme, host = host_parts.scheme, host_parts.netloc
            out["host"] = host
        elif parts.netloc:
            out["host"] = parts.netloc

        if base_path is not None:
            out["basePath"] = base_path
        elif parts.path and parts.path != "/":
            out["basePath"] = parts.path.rstrip("/")
        if scheme:
            out["schemes"] = [scheme]
        return out

    def convert(
        self, host: str | None = None, base_path: str | None = None
    ) -> dict[str, Any]:
        """
        Convert the whole document.

        Args:
            host: Host override (takes precedence over servers)
            base_path: Base path override (takes precedence over servers)

        Returns:
            Swagger 2.0 mapping
        """
        spec = self._spec
        out: dict[str, Any] = {"swagger": "2.0", "info": dict(spec.get("info") or {})}
        out["info"].pop("summary", None)
        out.update(self._server_fields(host, base_path))

        for key in ("tags", "externalDocs"):
            if key in spec:
                out[key] = spec[key]

        out["paths"] = self.convert_paths(spec.get("paths") or {})

        components = self._components
        if components.get("schemas"):
            out["definitions"] = {
                n: self.convert_schema(s) for n, s in components["schemas"].items()
            }
        params = {
            n: p
            for n, p in (
                (n, self.convert_parameter(p))
                for n, p in (components.get("parameters") or {}).items()
            )
            if p is not None
        }
        if params:
            out["parameters"] = params
        if components.get("responses"):
            out["responses"] = {
                n: self.convert_response(r) for n, r in components["responses"].items()
            }
        security_defs = {
            n: s
            for n, s in (
                (n, self.convert_security_scheme(s))
                for n, s in (components.get("securitySchemes") or {}).items()
            )
            if s is not None
        }
        if security_defs:
            out["securityDefinitions"] = security_defs
        if "security" in spec:
            out["security"] = spec["security"]
        out.update(_extensions(spec))
        return out


def _preferred_media(content: Mapping[str, Any]) -> str | None:
    """Pick the JSON media type if present, else the first one."""
    if not content:
        return None
    for media in content:
        if media == "application/json" or media.endswith("+json"):
            return media
    return next(iter(content))


def convert_to_v2(
    spec: Mapping[str, Any], host: str | None = None, base_path: str | None = None
) -> dict[str, Any]:
    """Convert an OpenAPI 3 mapping to Swagger 2.0."""
    return SwaggerV2Converter(spec).convert(host=host, base_path=base_path)
