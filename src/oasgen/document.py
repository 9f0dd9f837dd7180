"""
OpenAPI 3.1 document models.

``Document`` owns the component registry: asking it for the schema of a type
registers every composite type reachable from it under
``components.schemas`` and returns either an inline schema or a reference.

References:

    https://spec.openapis.org/oas/v3.1.0#openapi-object
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .constants import CONTENT_TYPE_JSON, OPENAPI_VERSION
from .descriptors.descriptor import TypeDescriptor
from .descriptors.introspect import describe
from .dispatcher import SchemaDispatcher
from .exceptions.unsupported_method_error import UnsupportedMethodError
from .registry import ComponentRegistry
from .schema import Schema

LOGGER = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class _OpenApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Security requirement: scheme name to the scopes it needs.
SecurityRequirement = dict[str, list[str]]


class Contact(_OpenApiModel):
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None


class License(_OpenApiModel):
    name: str
    identifier: Optional[str] = None
    url: Optional[str] = None


class Info(_OpenApiModel):
    """Metadata about the API."""

    title: str = ""
    summary: Optional[str] = None
    description: Optional[str] = None
    terms_of_service: Optional[str] = Field(default=None, alias="termsOfService")
    contact: Optional[Contact] = None
    license: Optional[License] = None
    version: str = ""


class ServerVariable(_OpenApiModel):
    default: str
    enum: Optional[list[str]] = None
    description: Optional[str] = None


class Server(_OpenApiModel):
    url: str
    description: Optional[str] = None
    variables: Optional[dict[str, ServerVariable]] = None


class ExternalDocs(_OpenApiModel):
    url: str
    description: Optional[str] = None


class Tag(_OpenApiModel):
    name: str
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = Field(default=None, alias="externalDocs")


class Example(_OpenApiModel):
    summary: Optional[str] = None
    description: Optional[str] = None
    value: Optional[Any] = None
    external_value: Optional[str] = Field(default=None, alias="externalValue")


class Header(_OpenApiModel):
    """Header object; ``Parameter`` adds ``name`` and ``in``."""

    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allow_empty_value: Optional[bool] = Field(default=None, alias="allowEmptyValue")
    style: Optional[str] = None
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = Field(default=None, alias="allowReserved")
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    example: Optional[Any] = None
    examples: Optional[dict[str, Example]] = None
    content: Optional[dict[str, MediaType]] = None


class Encoding(_OpenApiModel):
    content_type: Optional[str] = Field(default=None, alias="contentType")
    headers: Optional[dict[str, Header]] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = Field(default=None, alias="allowReserved")


class MediaType(_OpenApiModel):
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    example: Optional[Any] = None
    examples: Optional[dict[str, Example]] = None
    encoding: Optional[dict[str, Encoding]] = None


class RequestBody(_OpenApiModel):
    description: Optional[str] = None
    content: dict[str, MediaType] = Field(default_factory=dict)
    required: Optional[bool] = None


class Link(_OpenApiModel):
    operation_ref: Optional[str] = Field(default=None, alias="operationRef")
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    parameters: Optional[dict[str, Any]] = None
    request_body: Optional[Any] = Field(default=None, alias="requestBody")
    description: Optional[str] = None
    server: Optional[Server] = None


class Response(_OpenApiModel):
    description: str = ""
    headers: Optional[dict[str, Header]] = None
    content: Optional[dict[str, MediaType]] = None
    links: Optional[dict[str, Link]] = None


class Parameter(Header):
    """A single operation parameter; ``in_`` is one of path/query/header/cookie."""

    name: str
    in_: str = Field(alias="in")


class OAuthFlow(_OpenApiModel):
    authorization_url: Optional[str] = Field(default=None, alias="authorizationUrl")
    token_url: Optional[str] = Field(default=None, alias="tokenUrl")
    refresh_url: Optional[str] = Field(default=None, alias="refreshUrl")
    scopes: dict[str, str] = Field(default_factory=dict)


class OAuthFlows(_OpenApiModel):
    implicit: Optional[OAuthFlow] = None
    password: Optional[OAuthFlow] = None
    client_credentials: Optional[OAuthFlow] = Field(default=None, alias="clientCredentials")
    authorization_code: Optional[OAuthFlow] = Field(default=None, alias="authorizationCode")


class SecurityScheme(_OpenApiModel):
    """One of apiKey, http, mutualTLS, oauth2 or openIdConnect."""

    type: str
    description: Optional[str] = None
    name: Optional[str] = None
    in_: Optional[str] = Field(default=None, alias="in")
    scheme: Optional[str] = None
    bearer_format: Optional[str] = Field(default=None, alias="bearerFormat")
    flows: Optional[OAuthFlows] = None
    open_id_connect_url: Optional[str] = Field(default=None, alias="openIdConnectUrl")


class Operation(_OpenApiModel):
    tags: Optional[list[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = Field(default=None, alias="externalDocs")
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    parameters: Optional[list[Parameter]] = None
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: Optional[dict[str, Response]] = None
    callbacks: Optional[dict[str, dict[str, PathItem]]] = None
    deprecated: Optional[bool] = None
    security: Optional[list[SecurityRequirement]] = None
    servers: Optional[list[Server]] = None


class PathItem(_OpenApiModel):
    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    servers: Optional[list[Server]] = None
    parameters: Optional[list[Parameter]] = None

    def set_operation(self, method: str, operation: Operation) -> None:
        """Attach ``operation`` under the given HTTP method."""
        key = method.lower()
        if key not in HTTP_METHODS:
            raise UnsupportedMethodError(method)
        setattr(self, key, operation)


class Components(_OpenApiModel):
    """Reusable objects; only ``schemas`` is filled by schema generation."""

    schemas: Optional[dict[str, Schema]] = None
    responses: Optional[dict[str, Response]] = None
    parameters: Optional[dict[str, Parameter]] = None
    examples: Optional[dict[str, Example]] = None
    request_bodies: Optional[dict[str, RequestBody]] = Field(default=None, alias="requestBodies")
    headers: Optional[dict[str, Header]] = None
    security_schemes: Optional[dict[str, SecurityScheme]] = Field(default=None, alias="securitySchemes")
    links: Optional[dict[str, Link]] = None
    callbacks: Optional[dict[str, dict[str, PathItem]]] = None
    path_items: Optional[dict[str, PathItem]] = Field(default=None, alias="pathItems")


# Resolve the forward references between headers, media types and operations.
for _model in (Header, Parameter, Encoding, MediaType, Response, Operation, PathItem, Components):
    _model.model_rebuild()


class Document(_OpenApiModel):
    """Root of an OpenAPI document."""

    openapi: str = OPENAPI_VERSION
    info: Optional[Info] = None
    json_schema_dialect: Optional[str] = Field(default=None, alias="jsonSchemaDialect")
    servers: Optional[list[Server]] = None
    paths: Optional[dict[str, PathItem]] = None
    webhooks: Optional[dict[str, PathItem]] = None
    components: Components = Field(default_factory=Components)
    security: Optional[list[SecurityRequirement]] = None
    tags: Optional[list[Tag]] = None
    external_docs: Optional[ExternalDocs] = Field(default=None, alias="externalDocs")

    _lock: Any = PrivateAttr(default_factory=threading.RLock)
    _registry: Optional[ComponentRegistry] = PrivateAttr(default=None)
    _dispatcher: Optional[SchemaDispatcher] = PrivateAttr(default=None)
    _registry_owner: Optional[Components] = PrivateAttr(default=None)

    @property
    def registry(self) -> ComponentRegistry:
        """Return the registry bound to ``components``."""
        return self._bind()[0]

    def schema_for(self, tp: Any) -> Schema:
        """Return the schema of a Python type, registering its components."""
        return self.type_schema(describe(tp))

    def type_schema(self, descriptor: Optional[TypeDescriptor]) -> Schema:
        """Return the schema of an already built descriptor."""
        with self._lock:
            registry, dispatcher = self._bind()
            LOGGER.debug("Generating schema for %r", descriptor)
            with registry.transaction():
                return dispatcher.type_schema(descriptor)

    def lookup_component(self, name: str) -> tuple[Optional[Schema], bool]:
        """Return a component by bare name."""
        return self.registry.lookup(name)

    def resolve(self, ref: str) -> tuple[Optional[Schema], bool]:
        """Return the component addressed by a ``#/components/schemas/`` path."""
        return self.registry.resolve(ref)

    def deref(self, schema: Schema) -> tuple[Optional[Schema], bool]:
        """Follow ``schema`` if it is a reference, otherwise return it as is."""
        if schema.ref:
            return self.resolve(schema.ref)
        return schema, True

    def schema_media(self, tp: Any) -> MediaType:
        return MediaType(schema_=self.schema_for(tp))

    def json_body(self, tp: Any, required: Optional[bool] = None) -> RequestBody:
        """Return a JSON request body for the type."""
        return RequestBody(content={CONTENT_TYPE_JSON: self.schema_media(tp)}, required=required)

    def responses_ok_json(self, tp: Any) -> dict[str, Response]:
        """Return a ``200`` JSON response map for the type."""
        return {"200": Response(description="OK", content={CONTENT_TYPE_JSON: self.schema_media(tp)})}

    def route(self, path: str, method: str, operation: Operation) -> Document:
        """Register ``operation`` under ``path`` and ``method``."""
        if self.paths is None:
            self.paths = {}
        item = self.paths.setdefault(path, PathItem())
        item.set_operation(method, operation)
        LOGGER.debug("Registered route %s %s", method.upper(), path)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the OpenAPI representation, omitting empty members."""
        out = self.model_dump(by_alias=True, exclude_none=True)
        components = out.get("components", {})
        if not components.get("schemas"):
            components.pop("schemas", None)
        if not components:
            out.pop("components", None)
        return out

    def _bind(self) -> tuple[ComponentRegistry, SchemaDispatcher]:
        if self._registry is None or self._registry_owner is not self.components:
            self._registry = ComponentRegistry(self.components)
            self._dispatcher = SchemaDispatcher(self._registry)
            self._registry_owner = self.components
        return self._registry, self._dispatcher


__all__ = [
    "Components",
    "Contact",
    "Document",
    "Encoding",
    "Example",
    "ExternalDocs",
    "HTTP_METHODS",
    "Header",
    "Info",
    "License",
    "Link",
    "MediaType",
    "OAuthFlow",
    "OAuthFlows",
    "Operation",
    "Parameter",
    "PathItem",
    "RequestBody",
    "Response",
    "SecurityRequirement",
    "SecurityScheme",
    "Server",
    "ServerVariable",
    "Tag",
]
