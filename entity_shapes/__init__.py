"""
entity_shapes — field-presence shapes for entity data-access operations.

Computes, from a resolved schema graph, which fields are required or optional
when reading, creating or inserting a record, and unifies partial shapes.
"""
from entity_shapes.models.schema import (  # noqa: F401
    ColumnDefinition,
    EmbedDefinition,
    RelationDefinition,
    EntitySchema,
    SchemaGraph,
)
from entity_shapes.models.computed import (  # noqa: F401
    OperationMode,
    Presence,
    ValueKind,
    ValueType,
    FieldSpec,
    ComputedModel,
)
from entity_shapes.core.errors import EntityShapesError, SchemaIntegrityError, MergeConflictError  # noqa: F401
from entity_shapes.core.graph_builder import build_schema_graph  # noqa: F401
from entity_shapes.core.projector import ModelProjector, project  # noqa: F401
from entity_shapes.core.merger import merge_models, shape_of  # noqa: F401

__version__ = "1.0.0"
