"""
Shapes of the entity operations built on top of projection and merging.

    entity_model          what a read returns
    entity_model_partial  deep-partial read model
    create_params         what a create call accepts
    insert_params         what an insert call accepts
    created_model         what a create call returns: input plus store-computed virtuals
    inserted_model        what an insert call returns: input plus the full read model
    merged_model          what an entity merge returns
"""
from typing import Sequence, Union

from entity_shapes.core.merger import Operand, merge_models
from entity_shapes.core.projector import ModelProjector
from entity_shapes.models.computed import ComputedModel, OperationMode
from entity_shapes.models.schema import EntitySchema, SchemaGraph

SchemaArg = Union[EntitySchema, str]


def entity_model(graph: SchemaGraph, schema: SchemaArg) -> ComputedModel:
    return ModelProjector(graph).project(schema, OperationMode.ALL)


def entity_model_partial(graph: SchemaGraph, schema: SchemaArg) -> ComputedModel:
    return entity_model(graph, schema).partial()


def create_params(graph: SchemaGraph, schema: SchemaArg) -> ComputedModel:
    return ModelProjector(graph).project(schema, OperationMode.CREATE)


def insert_params(graph: SchemaGraph, schema: SchemaArg) -> ComputedModel:
    return ModelProjector(graph).project(schema, OperationMode.INSERT)


def created_model(graph: SchemaGraph, schema: SchemaArg, model: Operand) -> ComputedModel:
    virtuals = ModelProjector(graph).project(schema, OperationMode.VIRTUALS)
    return merge_models([model, virtuals])


def inserted_model(graph: SchemaGraph, schema: SchemaArg, model: Operand) -> ComputedModel:
    """Values the caller left out were filled in by the store, so the read model applies."""
    return merge_models([model, entity_model(graph, schema)])


def merged_model(models: Sequence[Operand]) -> ComputedModel:
    return merge_models(models)
