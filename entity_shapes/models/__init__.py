from entity_shapes.models.schema import ColumnDefinition, EmbedDefinition, RelationDefinition, EntitySchema, SchemaGraph  # noqa: F401
from entity_shapes.models.computed import OperationMode, Presence, ValueKind, ValueType, FieldSpec, ComputedModel  # noqa: F401
from entity_shapes.models.connection import ConnectionRequest  # noqa: F401
from entity_shapes.models.requests import (  # noqa: F401
    GraphRegistration,
    GraphSummary,
    ProjectionRequest,
    MergeOperand,
    MergeRequest,
)
