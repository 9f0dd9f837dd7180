from __future__ import annotations

import pytest

from oasgen.document import Components
from oasgen.exceptions import (
    DoubleReferenceError,
    MissingTitleError,
    RedundantComponentError,
    UnknownReferenceError,
)
from oasgen.registry import ComponentRegistry
from oasgen.schema import Schema, ref_schema


def _registry() -> ComponentRegistry:
    return ComponentRegistry(Components())


def test_reserve_creates_placeholder() -> None:
    registry = _registry()
    registry.reserve("Pair")

    body, found = registry.lookup("Pair")
    assert found
    assert body.to_dict() == {}
    assert "Pair" in registry


def test_reserve_rejects_empty_and_taken_names() -> None:
    registry = _registry()
    registry.reserve("Pair")

    with pytest.raises(MissingTitleError):
        registry.reserve("")
    with pytest.raises(RedundantComponentError):
        registry.reserve("Pair")


def test_fill_finalizes_once() -> None:
    registry = _registry()
    registry.reserve("Pair")
    registry.fill("Pair", Schema(title="Pair", type=["object"]))

    assert registry.lookup("Pair")[0].type == ["object"]
    with pytest.raises(RedundantComponentError):
        registry.fill("Pair", Schema(title="Pair"))


def test_lookup_missing_component() -> None:
    assert _registry().lookup("Nope") == (None, False)


def test_lookup_rejects_reference_bodies() -> None:
    registry = _registry()
    registry.schemas["Alias"] = ref_schema("Pair")

    with pytest.raises(DoubleReferenceError):
        registry.lookup("Alias")


def test_resolve_requires_component_schema_paths() -> None:
    registry = _registry()
    registry.reserve("Pair")

    assert registry.resolve("#/components/schemas/Pair")[1]
    assert registry.resolve("#/components/schemas/Other") == (None, False)
    with pytest.raises(UnknownReferenceError):
        registry.resolve("#/definitions/Pair")


def test_outlined_registers_body_and_leaves_reference() -> None:
    registry = _registry()
    schema = Schema(title="Pair")

    with registry.outlined("Pair", schema):
        assert registry.lookup("Pair")[0].to_dict() == {}
        schema.type_replace("object")

    assert schema.to_dict() == {"$ref": "#/components/schemas/Pair"}
    assert registry.lookup("Pair")[0].to_dict() == {"title": "Pair", "type": ["object"]}


def test_components_are_created_lazily() -> None:
    components = Components()
    registry = ComponentRegistry(components)

    assert components.schemas is None
    registry.reserve("Pair")
    assert list(components.schemas) == ["Pair"]


def test_outlined_discards_reservation_when_population_fails() -> None:
    registry = _registry()
    schema = Schema(title="Pair")

    with pytest.raises(RuntimeError):
        with registry.outlined("Pair", schema):
            raise RuntimeError("population failed")

    assert "Pair" not in registry
    registry.reserve("Pair")


def test_transaction_discards_everything_registered_inside() -> None:
    registry = _registry()
    registry.reserve("Kept")
    registry.fill("Kept", Schema(title="Kept", type=["object"]))

    with pytest.raises(RuntimeError):
        with registry.transaction():
            registry.reserve("Done")
            registry.fill("Done", Schema(title="Done", type=["object"]))
            registry.reserve("Pending")
            raise RuntimeError("generation failed")

    assert list(registry.schemas) == ["Kept"]
    registry.reserve("Pending")


def test_transaction_keeps_successful_registrations() -> None:
    registry = _registry()

    with registry.transaction():
        registry.reserve("Done")
        registry.fill("Done", Schema(title="Done"))

    assert "Done" in registry
