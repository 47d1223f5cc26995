"""
Column presence resolver.

Projection rule table per operation mode:

    all       -> required (nullability shows in the value type, not in presence)
    insert    -> optional if the column has a default, is generated or is nullable
    create    -> same as insert
    virtuals  -> optional if generated, otherwise the column is excluded
"""
from typing import Optional

from entity_shapes.models.computed import OperationMode, Presence, ValueKind, ValueType
from entity_shapes.models.schema import ColumnDefinition


def resolve_column(column: ColumnDefinition, mode: OperationMode) -> Optional[Presence]:
    """Return the column's presence for ``mode``, or None when the mode excludes it."""
    if mode is OperationMode.ALL:
        return Presence.REQUIRED
    if mode in (OperationMode.INSERT, OperationMode.CREATE):
        store_can_supply = column.has_default or column.is_generated or column.is_nullable
        return Presence.OPTIONAL if store_can_supply else Presence.REQUIRED
    if mode is OperationMode.VIRTUALS:
        return Presence.OPTIONAL if column.is_generated else None
    raise ValueError(f"'{mode.value}' is not a projection mode")


def column_value_type(column: ColumnDefinition) -> ValueType:
    return ValueType(kind=ValueKind.SCALAR, scalar_type=column.scalar_type, nullable=column.is_nullable)
