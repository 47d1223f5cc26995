"""Relation reference resolver — the value accepted in place of a related entity."""
from typing import Optional

from entity_shapes.core.presence import column_value_type
from entity_shapes.models.computed import (
    ComputedModel,
    FieldSpec,
    OperationMode,
    Presence,
    ValueKind,
    ValueType,
)
from entity_shapes.models.schema import RelationDefinition, SchemaGraph


def reference_model(relation: RelationDefinition, graph: SchemaGraph) -> ComputedModel:
    """Mapping that covers every referenced column, typed like the target's column."""
    target = graph.get(relation.target_schema)
    return ComputedModel(fields={
        name: FieldSpec(presence=Presence.REQUIRED, value_type=column_value_type(target.columns[name]))
        for name in relation.referenced_columns
    })


def resolve_relation(
    relation: RelationDefinition, mode: OperationMode, graph: SchemaGraph
) -> Optional[FieldSpec]:
    """
    Insert/create accept either a reference mapping or nothing at all, so the
    relation field is always optional. Other modes exclude relations here; read
    models get them only through an explicit relation loader.
    """
    if mode not in (OperationMode.INSERT, OperationMode.CREATE):
        return None
    return FieldSpec(
        presence=Presence.OPTIONAL,
        value_type=ValueType(
            kind=ValueKind.REFERENCE,
            target=relation.target_schema,
            model=reference_model(relation, graph),
        ),
    )
