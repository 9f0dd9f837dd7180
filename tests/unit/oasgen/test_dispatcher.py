from __future__ import annotations

import datetime
import decimal
import queue
import uuid
from typing import Any, Callable, Optional

import numpy as np
import pytest

import sample_types as st
from oasgen import Document
from oasgen.exceptions import UnsupportedKindError, UnsupportedMapKeyError


def _ref(name: str) -> dict[str, Any]:
    return {"$ref": f"#/components/schemas/{name}"}


def _nullable_ref(title: str, name: str) -> dict[str, Any]:
    return {"title": title, "oneOf": [_ref(name), {"type": ["null"]}]}


def _generate(tp: Any) -> tuple[dict[str, Any], dict[str, Any]]:
    doc = Document()
    schema = doc.schema_for(tp)
    components = {name: body.to_dict() for name, body in (doc.components.schemas or {}).items()}
    return schema.to_dict(), components


PAIR_COMPONENT = {
    "title": "sample_types.Pair",
    "type": ["object"],
    "properties": {
        "one_json": {"title": "str", "type": ["string"]},
        "two_json": {"title": "int", "type": ["integer"]},
    },
}

OUTER_COMPONENTS = {
    "sample_types.Outer": {
        "title": "sample_types.Outer",
        "type": ["object"],
        "properties": {
            "embed_three": {
                "title": "sample_types.NullUuid",
                "type": ["string", "null"],
                "format": "uuid",
            },
            "outer_one": {"title": "str", "type": ["string"]},
            "outer_inner": _nullable_ref("Optional[sample_types.Inner]", "sample_types.Inner"),
            "outer_slice": _ref("list[sample_types.Pair]"),
        },
    },
    "sample_types.Inner": {
        "title": "sample_types.Inner",
        "type": ["object"],
        "properties": {"inner_two": {"title": "str", "type": ["string"]}},
    },
    "sample_types.Pair": PAIR_COMPONENT,
    "list[sample_types.Pair]": {
        "title": "list[sample_types.Pair]",
        "type": ["array", "null"],
        "items": _ref("sample_types.Pair"),
    },
}


@pytest.mark.parametrize(
    ("tp", "expected"),
    [
        (str, {"title": "str", "type": ["string"]}),
        (Optional[str], {"title": "Optional[str]", "type": ["string", "null"]}),
        (int, {"title": "int", "type": ["integer"]}),
        (int | None, {"title": "Optional[int]", "type": ["integer", "null"]}),
        (bool, {"title": "bool", "type": ["boolean"]}),
        (float, {"title": "float", "type": ["number"], "format": "double"}),
        (np.float32, {"title": "float32", "type": ["number"], "format": "float"}),
        (np.int8, {"title": "int8", "type": ["integer"]}),
        (np.int32, {"title": "int32", "type": ["integer"], "format": "int32"}),
        (np.uint32, {"title": "uint32", "type": ["integer"], "format": "int32"}),
        (np.int64, {"title": "int64", "type": ["integer"], "format": "int64"}),
        (np.uint64, {"title": "uint64", "type": ["integer"], "format": "int64"}),
        (st.Str, {"title": "sample_types.Str", "type": ["string"]}),
        (Optional[st.Str], {"title": "Optional[sample_types.Str]", "type": ["string", "null"]}),
    ],
)
def test_primitive_schemas_are_inline(tp: Any, expected: dict[str, Any]) -> None:
    schema, components = _generate(tp)

    assert schema == expected
    assert components == {}


@pytest.mark.parametrize(
    ("tp", "expected"),
    [
        (st.NullStr, {"title": "sample_types.NullStr", "type": ["string", "null"]}),
        (Optional[st.NullStr], {"title": "Optional[sample_types.NullStr]", "type": ["string", "null"]}),
        (st.NonNullStr, {"title": "sample_types.NonNullStr", "type": ["string"]}),
        (Optional[st.NonNullStr], {"title": "Optional[sample_types.NonNullStr]", "type": ["string", "null"]}),
        (st.IntStr, {"title": "sample_types.IntStr", "type": ["number"]}),
        (Optional[st.IntStr], {"title": "Optional[sample_types.IntStr]", "type": ["number", "null"]}),
        (st.IntStrPtr, {"title": "sample_types.IntStrPtr", "type": ["string"]}),
        (Optional[st.IntStrPtr], {"title": "Optional[sample_types.IntStrPtr]", "type": ["number", "null"]}),
        (st.Ternary, {"title": "sample_types.Ternary", "type": ["boolean", "null"]}),
        (Optional[st.Ternary], {"title": "Optional[sample_types.Ternary]", "type": ["boolean", "null"]}),
        (st.HexId, {"title": "sample_types.HexId", "type": ["string"], "format": "uuid"}),
        (
            Optional[st.HexId],
            {"title": "Optional[sample_types.HexId]", "type": ["string", "null"], "format": "uuid"},
        ),
        (st.NullUuid, {"title": "sample_types.NullUuid", "type": ["string", "null"], "format": "uuid"}),
        (
            st.NullTime,
            {"title": "sample_types.NullTime", "type": ["string", "null"], "format": "date-time"},
        ),
    ],
)
def test_encoder_output_decides_type_and_format(tp: Any, expected: dict[str, Any]) -> None:
    schema, components = _generate(tp)

    assert schema == expected
    assert components == {}


@pytest.mark.parametrize(
    ("tp", "expected"),
    [
        (
            datetime.datetime,
            {"title": "datetime.datetime", "type": ["string"], "format": "date-time"},
        ),
        (
            Optional[datetime.datetime],
            {"title": "Optional[datetime.datetime]", "type": ["string", "null"], "format": "date-time"},
        ),
        (datetime.date, {"title": "datetime.date", "type": ["string"], "format": "date"}),
        (datetime.time, {"title": "datetime.time", "type": ["string"], "format": "time"}),
        (datetime.timedelta, {"title": "datetime.timedelta", "type": ["string"], "format": "duration"}),
        (uuid.UUID, {"title": "uuid.UUID", "type": ["string"], "format": "uuid"}),
        (decimal.Decimal, {"title": "decimal.Decimal", "type": ["number"]}),
        (bytes, {"title": "bytes", "type": ["string"]}),
        (st.Color, {"title": "sample_types.Color", "type": ["string"]}),
        (st.Priority, {"title": "sample_types.Priority", "type": ["number"]}),
    ],
)
def test_standard_library_types(tp: Any, expected: dict[str, Any]) -> None:
    schema, _ = _generate(tp)

    assert schema == expected


def test_record_becomes_component() -> None:
    schema, components = _generate(st.Pair)

    assert schema == _ref("sample_types.Pair")
    assert components == {"sample_types.Pair": PAIR_COMPONENT}


def test_optional_record_wraps_reference_with_null() -> None:
    schema, components = _generate(Optional[st.Pair])

    assert schema == _nullable_ref("Optional[sample_types.Pair]", "sample_types.Pair")
    assert components == {"sample_types.Pair": PAIR_COMPONENT}


def test_record_skips_private_and_unrepresentable_fields() -> None:
    schema, components = _generate(st.UnitWith)

    assert schema == _ref("sample_types.UnitWith")
    assert components["sample_types.UnitWith"] == {
        "title": "sample_types.UnitWith",
        "type": ["object"],
        "properties": {
            "untagged": {"title": "int", "type": ["integer"]},
            "one_json": {"title": "str", "type": ["string"]},
        },
    }


def test_record_field_named_dash_is_skipped() -> None:
    _, components = _generate(st.Skipping)

    assert components["sample_types.Skipping"]["properties"] == {
        "kept": {"title": "str", "type": ["string"]},
    }


def test_embedded_non_record_keeps_its_field_name() -> None:
    _, components = _generate(st.WrapStr)

    assert components == {
        "sample_types.WrapStr": {
            "title": "sample_types.WrapStr",
            "type": ["object"],
            "properties": {"value": {"title": "sample_types.Str", "type": ["string"]}},
        }
    }


@pytest.mark.parametrize("tp", [st.Outer, Optional[st.Outer]])
def test_nested_records_flatten_embedded_fields(tp: Any) -> None:
    schema, components = _generate(tp)

    if tp is st.Outer:
        assert schema == _ref("sample_types.Outer")
    else:
        assert schema == _nullable_ref("Optional[sample_types.Outer]", "sample_types.Outer")
    assert components == OUTER_COMPONENTS


def test_pydantic_model_uses_aliases_and_exclusions() -> None:
    _, components = _generate(st.Account)

    assert components["sample_types.Account"] == {
        "title": "sample_types.Account",
        "type": ["object"],
        "properties": {
            "accountId": {"title": "uuid.UUID", "type": ["string"], "format": "uuid"},
            "balance": {"title": "decimal.Decimal", "type": ["number"]},
            "opened": {"title": "datetime.date", "type": ["string"], "format": "date"},
        },
    }


@pytest.mark.parametrize("tp", [list[str], Optional[list[str]]])
def test_list_is_nullable_component(tp: Any) -> None:
    schema, components = _generate(tp)

    assert schema == _ref("list[str]")
    assert components == {
        "list[str]": {
            "title": "list[str]",
            "type": ["array", "null"],
            "items": {"title": "str", "type": ["string"]},
        }
    }


def test_list_of_optional_items() -> None:
    _, components = _generate(list[Optional[str]])

    assert components["list[Optional[str]]"]["items"] == {
        "title": "Optional[str]",
        "type": ["string", "null"],
    }


@pytest.mark.parametrize("tp", [dict[str, int], Optional[dict[str, int]]])
def test_map_is_nullable_component(tp: Any) -> None:
    schema, components = _generate(tp)

    assert schema == _ref("dict[str, int]")
    assert components == {
        "dict[str, int]": {
            "title": "dict[str, int]",
            "type": ["object", "null"],
            "additionalProperties": {"title": "int", "type": ["integer"]},
        }
    }


def test_map_with_unrepresentable_values_has_no_additional_properties() -> None:
    _, components = _generate(dict[str, Callable[[], None]])

    assert list(components.values()) == [
        {"title": "dict[str, Callable]", "type": ["object", "null"]},
    ]


def test_map_with_non_string_keys_is_rejected() -> None:
    with pytest.raises(UnsupportedMapKeyError) as excinfo:
        Document().schema_for(dict[int, str])

    assert excinfo.value.key_types == ["integer"]


def test_fixed_array_bounds() -> None:
    schema, components = _generate(tuple[int, int, int])

    assert schema == _ref("tuple[int, int, int]")
    assert components == {
        "tuple[int, int, int]": {
            "title": "tuple[int, int, int]",
            "type": ["array"],
            "minItems": 3,
            "maxItems": 3,
            "items": {"title": "int", "type": ["integer"]},
        }
    }


def test_self_referential_record_terminates() -> None:
    schema, components = _generate(st.Node)

    assert schema == _ref("sample_types.Node")
    assert components == {
        "sample_types.Node": {
            "title": "sample_types.Node",
            "type": ["object"],
            "properties": {
                "value": {"title": "int", "type": ["integer"]},
                "children": _ref("list[sample_types.Node]"),
                "parent": _nullable_ref("Optional[sample_types.Node]", "sample_types.Node"),
            },
        },
        "list[sample_types.Node]": {
            "title": "list[sample_types.Node]",
            "type": ["array", "null"],
            "items": _ref("sample_types.Node"),
        },
    }


def test_repeated_requests_are_idempotent() -> None:
    doc = Document()
    first = doc.schema_for(st.Outer).to_dict()
    snapshot = {name: body.to_dict() for name, body in doc.components.schemas.items()}

    second = doc.schema_for(st.Outer).to_dict()

    assert first == second
    assert {name: body.to_dict() for name, body in doc.components.schemas.items()} == snapshot


def test_none_is_nullable_without_type() -> None:
    schema, components = _generate(None)

    assert schema == {"type": ["null"]}
    assert components == {}


@pytest.mark.parametrize("tp", [Any, Callable[[], None], queue.Queue, memoryview, int | str])
def test_unsupported_top_level_kinds(tp: Any) -> None:
    with pytest.raises(UnsupportedKindError):
        Document().schema_for(tp)


def test_mutually_recursive_records_terminate() -> None:
    schema, components = _generate(st.Ping)

    assert schema == _ref("sample_types.Ping")
    assert components == {
        "sample_types.Ping": {
            "title": "sample_types.Ping",
            "type": ["object"],
            "properties": {
                "pong": _nullable_ref("Optional[sample_types.Pong]", "sample_types.Pong"),
            },
        },
        "sample_types.Pong": {
            "title": "sample_types.Pong",
            "type": ["object"],
            "properties": {
                "ping": _nullable_ref("Optional[sample_types.Ping]", "sample_types.Ping"),
            },
        },
    }


def test_failed_generation_leaves_components_unchanged() -> None:
    doc = Document()
    doc.schema_for(st.Inner)
    before = {name: body.to_dict() for name, body in doc.components.schemas.items()}

    with pytest.raises(UnsupportedMapKeyError):
        doc.schema_for(st.Holder)

    assert {name: body.to_dict() for name, body in doc.components.schemas.items()} == before
    with pytest.raises(UnsupportedMapKeyError):
        doc.schema_for(st.BadMap)
    assert list(doc.components.schemas) == ["sample_types.Inner"]
