from __future__ import annotations

import threading

import pytest

import sample_types as st
from oasgen.constants import IN_PATH
from oasgen.document import (
    Components,
    Document,
    ExternalDocs,
    Header,
    Info,
    Link,
    OAuthFlow,
    OAuthFlows,
    Operation,
    Parameter,
    PathItem,
    Response,
    SecurityScheme,
    Server,
    ServerVariable,
)
from oasgen.exceptions import UnsupportedMethodError
from oasgen.schema import Schema


def _ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


def test_empty_document_omits_empty_members() -> None:
    assert Document().to_dict() == {"openapi": "3.1.0"}


def test_route_with_json_body_registers_components() -> None:
    doc = Document()
    returned = doc.route("/", "GET", Operation(request_body=doc.json_body(st.Outer)))

    assert returned is doc
    out = doc.to_dict()
    assert out["paths"] == {
        "/": {"get": {"requestBody": {"content": {"application/json": {"schema": _ref("sample_types.Outer")}}}}}
    }
    assert set(out["components"]["schemas"]) == {
        "sample_types.Outer",
        "sample_types.Inner",
        "sample_types.Pair",
        "list[sample_types.Pair]",
    }


def test_routes_share_path_items() -> None:
    doc = Document(info=Info(title="API documentation", version="v3"))
    doc.route("/ents", "post", Operation(request_body=doc.json_body(st.Inner, required=True)))
    doc.route("/ents", "get", Operation(responses=doc.responses_ok_json(list[st.Inner])))

    item = doc.paths["/ents"]
    assert item.post.request_body.required is True
    assert item.get.responses["200"].description == "OK"
    assert doc.to_dict()["info"] == {"title": "API documentation", "version": "v3"}


def test_route_rejects_unknown_methods() -> None:
    with pytest.raises(UnsupportedMethodError):
        Document().route("/", "FETCH", Operation())
    with pytest.raises(UnsupportedMethodError):
        PathItem().set_operation("CONNECT", Operation())


def test_parameters_serialize_with_openapi_keys() -> None:
    doc = Document()
    parameter = Parameter(name="id", in_=IN_PATH, required=True, schema_=doc.schema_for(st.HexId))
    doc.route("/ents/{id}", "get", Operation(parameters=[parameter], operation_id="getEnt"))

    operation = doc.to_dict()["paths"]["/ents/{id}"]["get"]
    assert operation["operationId"] == "getEnt"
    assert operation["parameters"] == [
        {
            "name": "id",
            "in": "path",
            "required": True,
            "schema": {"title": "sample_types.HexId", "type": ["string"], "format": "uuid"},
        }
    ]


def test_lookup_resolve_and_deref() -> None:
    doc = Document()
    ref = doc.schema_for(st.Pair)

    body, found = doc.deref(ref)
    assert found
    assert body.title == "sample_types.Pair"
    assert doc.lookup_component("sample_types.Pair") == (body, True)
    assert doc.resolve(ref.ref) == (body, True)

    inline = Schema(type=["string"])
    assert doc.deref(inline) == (inline, True)


def test_registry_follows_replaced_components() -> None:
    doc = Document()
    doc.schema_for(st.Pair)
    doc.components = Components()

    doc.schema_for(st.Inner)

    assert list(doc.components.schemas) == ["sample_types.Inner"]


def test_concurrent_requests_register_each_component_once() -> None:
    doc = Document()
    errors: list[BaseException] = []

    def worker() -> None:
        try:
            for _ in range(20):
                doc.schema_for(st.Outer)
        except BaseException as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(doc.components.schemas) == 4


def _api_document() -> Document:
    doc = Document(
        info=Info(title="Ents", version="v1"),
        servers=[
            Server(
                url="https://{host}/api",
                variables={"host": ServerVariable(default="example.com", enum=["example.com", "staging.example.com"])},
            )
        ],
        security=[{"bearer": []}],
    )
    doc.components.security_schemes = {
        "bearer": SecurityScheme(type="http", scheme="bearer", bearer_format="JWT"),
        "oauth": SecurityScheme(
            type="oauth2",
            flows=OAuthFlows(
                client_credentials=OAuthFlow(token_url="https://example.com/token", scopes={"read": "Read access"})
            ),
        ),
    }

    responses = doc.responses_ok_json(st.Pair)
    ok = responses["200"]
    ok.headers = {"X-Rate-Limit": Header(schema_=doc.schema_for(int))}
    ok.links = {"self": Link(operation_id="getPair", parameters={"id": "$response.body#/one_json"})}
    ok.content["application/json"].example = {"one_json": "a", "two_json": 1}

    doc.route(
        "/pairs/{id}",
        "get",
        Operation(
            operation_id="getPair",
            external_docs=ExternalDocs(url="https://example.com/docs"),
            security=[{"oauth": ["read"]}],
            servers=[Server(url="https://eu.example.com")],
            responses=responses,
            callbacks={
                "onEvent": {
                    "{$request.body#/callback}": PathItem(
                        post=Operation(responses={"200": Response(description="OK")})
                    )
                }
            },
        ),
    )
    return doc


def test_security_servers_and_response_details_serialize() -> None:
    out = _api_document().to_dict()

    assert out["servers"] == [
        {
            "url": "https://{host}/api",
            "variables": {"host": {"default": "example.com", "enum": ["example.com", "staging.example.com"]}},
        }
    ]
    assert out["security"] == [{"bearer": []}]
    assert out["components"]["securitySchemes"] == {
        "bearer": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
        "oauth": {
            "type": "oauth2",
            "flows": {
                "clientCredentials": {"tokenUrl": "https://example.com/token", "scopes": {"read": "Read access"}}
            },
        },
    }

    operation = out["paths"]["/pairs/{id}"]["get"]
    assert operation["security"] == [{"oauth": ["read"]}]
    assert operation["externalDocs"] == {"url": "https://example.com/docs"}
    assert operation["servers"] == [{"url": "https://eu.example.com"}]
    assert operation["callbacks"]["onEvent"]["{$request.body#/callback}"]["post"]["responses"] == {
        "200": {"description": "OK"}
    }

    ok = operation["responses"]["200"]
    assert ok["headers"] == {"X-Rate-Limit": {"schema": {"title": "int", "type": ["integer"]}}}
    assert ok["links"] == {"self": {"operationId": "getPair", "parameters": {"id": "$response.body#/one_json"}}}
    assert ok["content"]["application/json"] == {
        "schema": _ref("sample_types.Pair"),
        "example": {"one_json": "a", "two_json": 1},
    }


def test_document_round_trips_through_openapi_keys() -> None:
    out = _api_document().to_dict()

    assert Document.model_validate(out).to_dict() == out


def test_components_without_schemas_are_kept() -> None:
    doc = Document(components=Components(headers={"X-Trace": Header(description="Trace id")}))

    assert doc.to_dict() == {
        "openapi": "3.1.0",
        "components": {"headers": {"X-Trace": {"description": "Trace id"}}},
    }
