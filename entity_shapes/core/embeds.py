"""Embed projector — recurses into the embedded schema with the same mode."""
from typing import Callable

from entity_shapes.models.computed import (
    ComputedModel,
    FieldSpec,
    OperationMode,
    Presence,
    ValueKind,
    ValueType,
)
from entity_shapes.models.schema import EmbedDefinition


def _embed_presence(embed: EmbedDefinition, mode: OperationMode) -> Presence:
    if mode is OperationMode.ALL:
        return Presence.REQUIRED
    if mode in (OperationMode.INSERT, OperationMode.CREATE):
        return Presence.OPTIONAL if embed.is_nullable else Presence.REQUIRED
    if mode is OperationMode.VIRTUALS:
        # the nested virtual model may be empty; the embed is still wrapped
        return Presence.OPTIONAL
    raise ValueError(f"'{mode.value}' is not a projection mode")


def resolve_embed(
    embed: EmbedDefinition,
    mode: OperationMode,
    project: Callable[[str, OperationMode], ComputedModel],
) -> FieldSpec:
    """Wrap ``project(embed.target_schema, mode)`` under the embed's field; nested presences stay as computed."""
    return FieldSpec(
        presence=_embed_presence(embed, mode),
        value_type=ValueType(
            kind=ValueKind.OBJECT,
            target=embed.target_schema,
            nullable=embed.is_nullable,
            model=project(embed.target_schema, mode),
        ),
    )
