"""
Model merger — unifies several computed models (or concrete values) into one shape.

The result holds the union of all field paths. A path present in several operands
is required as soon as one of them requires it, and its value types are unified:
this is "the record satisfies all of these shapes at once". Value types that
genuinely disagree raise MergeConflictError.

A concrete None is shaped as ``any`` and takes the other operand's type as is,
nullability included: merging None into a non-nullable column keeps it
non-nullable and logs a warning. Widening instead would make the merge depend
on operand grouping.
"""
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from entity_shapes.core.errors import MergeConflictError
from entity_shapes.models.computed import ComputedModel, FieldSpec, Presence, ValueKind, ValueType

logger = logging.getLogger(__name__)

Operand = Union[ComputedModel, Mapping[str, Any]]


def shape_of(value: Mapping[str, Any]) -> ComputedModel:
    """Shape of a concrete value mapping: every present key is required."""
    return ComputedModel(fields={
        name: FieldSpec(presence=Presence.REQUIRED, value_type=_value_type_of(item))
        for name, item in value.items()
    })


def _value_type_of(item: Any) -> ValueType:
    if item is None:
        return ValueType(kind=ValueKind.ANY, nullable=True)
    if isinstance(item, Mapping):
        return ValueType(kind=ValueKind.OBJECT, model=shape_of(item))
    return ValueType(kind=ValueKind.SCALAR)


def merge_models(operands: Sequence[Operand]) -> ComputedModel:
    merged: dict[str, FieldSpec] = {}
    for operand in operands:
        model = operand if isinstance(operand, ComputedModel) else shape_of(operand)
        _merge_into(merged, model, prefix="")
    return ComputedModel(fields=merged)


# ── Unification ───────────────────────────────────────────────────────────────

def _merge_into(merged: dict[str, FieldSpec], model: ComputedModel, prefix: str) -> None:
    for name, spec in model.fields.items():
        if name in merged:
            merged[name] = _merge_field(f"{prefix}{name}", merged[name], spec)
        else:
            merged[name] = spec


def _merge_field(path: str, left: FieldSpec, right: FieldSpec) -> FieldSpec:
    if Presence.REQUIRED in (left.presence, right.presence):
        presence = Presence.REQUIRED
    else:
        presence = Presence.OPTIONAL
    return FieldSpec(presence=presence, value_type=_unify(path, left.value_type, right.value_type))


def _unify(path: str, left: ValueType, right: ValueType) -> ValueType:
    if left.kind is ValueKind.ANY or right.kind is ValueKind.ANY:
        null, typed = (left, right) if left.kind is ValueKind.ANY else (right, left)
        if null.nullable and not typed.nullable and typed.kind is not ValueKind.ANY:
            logger.warning("Merge at %s: null value for non-nullable %s field", path, typed.kind.value)
        return typed

    kind = left.kind
    if left.kind != right.kind:
        # a concrete nested mapping may stand in for a relation reference
        obj = left if left.kind is ValueKind.OBJECT else right
        if {left.kind, right.kind} == {ValueKind.OBJECT, ValueKind.REFERENCE} and obj.target is None:
            kind = ValueKind.REFERENCE
        else:
            raise MergeConflictError(path, f"{left.kind.value} vs {right.kind.value}")

    target = _agree(path, "target schema", left.target, right.target)
    scalar_type = _agree(path, "scalar type", left.scalar_type, right.scalar_type)

    model = left.model if left.model is not None else right.model
    if left.model is not None and right.model is not None:
        nested: dict[str, FieldSpec] = dict(left.model.fields)
        _merge_into(nested, right.model, prefix=f"{path}.")
        model = ComputedModel(fields=nested)

    return ValueType(
        kind=kind,
        scalar_type=scalar_type,
        nullable=left.nullable and right.nullable,
        target=target,
        model=model,
    )


def _agree(path: str, what: str, left: Optional[str], right: Optional[str]) -> Optional[str]:
    if left is not None and right is not None and left != right:
        logger.debug("Merge conflict at %s: %s %r vs %r", path, what, left, right)
        raise MergeConflictError(path, f"{what} {left!r} vs {right!r}")
    return left if left is not None else right
