"""
Model projector — turns {schema, operation mode} into a computed model.

Each field of the schema is dispatched by kind: columns to the presence resolver,
embeds to the embed projector (recursively, same mode) and relations to the
relation reference resolver. Excluded fields are simply left out.
"""
import logging
from typing import Callable, Optional, Union

from entity_shapes.core.cache import ProjectionCache
from entity_shapes.core.embeds import resolve_embed
from entity_shapes.core.presence import column_value_type, resolve_column
from entity_shapes.core.relations import resolve_relation
from entity_shapes.models.computed import ComputedModel, FieldSpec, OperationMode
from entity_shapes.models.schema import EntitySchema, RelationDefinition, SchemaGraph

logger = logging.getLogger(__name__)

# Extension point for relations in read models: given a relation and the graph,
# return the field spec to include, or None to leave the relation out.
RelationLoader = Callable[[RelationDefinition, SchemaGraph], Optional[FieldSpec]]


class ModelProjector:
    def __init__(
        self,
        graph: SchemaGraph,
        cache: Optional[ProjectionCache] = None,
        relation_loader: Optional[RelationLoader] = None,
    ):
        self.graph = graph
        self.cache = cache
        self.relation_loader = relation_loader

    def project(self, schema: Union[EntitySchema, str], mode: OperationMode) -> ComputedModel:
        if isinstance(schema, str):
            schema = self.graph.get(schema)
        mode = OperationMode(mode)
        if mode is OperationMode.MERGE:
            raise ValueError("'merge' is not a projection mode; use merge_models() instead")

        # cache only schemas owned by the graph; a same-named stand-in must not share entries
        cache = self.cache if self.graph.schemas.get(schema.name) is schema else None
        key = (schema.name, mode)
        if cache is not None:
            cached = cache.get(key)
            if cached is not None:
                return cached

        model = self._project(schema, mode)
        logger.debug("Projected %s in %s mode (%d fields)", schema.name, mode.value, len(model))
        if cache is not None:
            cache.set(key, model)
        return model

    def _project(self, schema: EntitySchema, mode: OperationMode) -> ComputedModel:
        fields: dict[str, FieldSpec] = {}

        for name, column in schema.columns.items():
            presence = resolve_column(column, mode)
            if presence is not None:
                fields[name] = FieldSpec(presence=presence, value_type=column_value_type(column))

        for name, embed in schema.embeds.items():
            fields[name] = resolve_embed(embed, mode, self.project)

        for name, relation in schema.relations.items():
            if mode is OperationMode.ALL:
                spec = self.relation_loader(relation, self.graph) if self.relation_loader else None
            else:
                spec = resolve_relation(relation, mode, self.graph)
            if spec is not None:
                fields[name] = spec

        return ComputedModel(fields=fields)


def project(
    graph: SchemaGraph,
    schema: Union[EntitySchema, str],
    mode: OperationMode,
    relation_loader: Optional[RelationLoader] = None,
) -> ComputedModel:
    """Uncached one-shot projection of ``schema`` within ``graph``."""
    return ModelProjector(graph, relation_loader=relation_loader).project(schema, mode)
