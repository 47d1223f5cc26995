import pytest
from entity_shapes.core.graph_builder import build_schema_graph
from entity_shapes.core.relations import resolve_relation
from entity_shapes.models.computed import OperationMode, Presence, ValueKind


@pytest.fixture
def order_graph():
    return build_schema_graph([
        {
            "name": "Customer",
            "columns": {
                "tenant": {"scalar_type": "varchar"},
                "number": {"scalar_type": "int"},
                "nickname": {"scalar_type": "varchar", "is_nullable": True},
            },
        },
        {
            "name": "Order",
            "columns": {"id": {"scalar_type": "int", "is_generated": True}},
            "relations": {
                "customer": {"target_schema": "Customer", "referenced_columns": ["tenant", "number"]},
            },
        },
    ])


@pytest.mark.parametrize("mode", [OperationMode.INSERT, OperationMode.CREATE])
def test_relation_is_optional_even_when_target_columns_are_required(order_graph, mode):
    relation = order_graph.get("Order").relations["customer"]
    spec = resolve_relation(relation, mode, order_graph)

    assert spec.presence is Presence.OPTIONAL
    assert spec.value_type.kind is ValueKind.REFERENCE
    assert spec.value_type.target == "Customer"


def test_reference_covers_only_referenced_columns(order_graph):
    relation = order_graph.get("Order").relations["customer"]
    ref = resolve_relation(relation, OperationMode.INSERT, order_graph).value_type.model

    assert ref.keys() == ["tenant", "number"]
    assert "nickname" not in ref
    assert ref["tenant"].value_type.scalar_type == "varchar"
    assert ref["number"].value_type.scalar_type == "int"
    assert all(spec.presence is Presence.REQUIRED for spec in ref.fields.values())


@pytest.mark.parametrize("mode", [OperationMode.ALL, OperationMode.VIRTUALS])
def test_relation_excluded_outside_write_modes(order_graph, mode):
    relation = order_graph.get("Order").relations["customer"]
    assert resolve_relation(relation, mode, order_graph) is None
