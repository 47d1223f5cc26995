"""POST /api/project and /api/merge — computed models for a registered graph."""
import logging
from fastapi import APIRouter, HTTPException

from entity_shapes.api.schemas import get_projector
from entity_shapes.core.errors import MergeConflictError
from entity_shapes.core.merger import merge_models
from entity_shapes.models.computed import ComputedModel, FieldSpec, OperationMode, ValueKind
from entity_shapes.models.requests import MergeRequest, ProjectionRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/project")
def project_schema(req: ProjectionRequest):
    projector = get_projector(req.graph)
    if req.schema_name not in projector.graph:
        raise HTTPException(404, detail=f"Schema '{req.schema_name}' not found in graph '{req.graph}'.")
    if req.mode is OperationMode.MERGE:
        raise HTTPException(400, detail="'merge' is not a projection mode; use /api/merge.")

    model = projector.project(req.schema_name, req.mode)
    if req.flat:
        return {path: _flat_entry(spec) for path, spec in model.paths().items()}
    return model


def _flat_entry(spec: FieldSpec) -> dict:
    data = spec.model_dump(mode="json")
    # embedded fields already have their own paths
    if spec.value_type.kind is ValueKind.OBJECT:
        data["value_type"]["model"] = None
    return data


@router.post("/merge", response_model=ComputedModel)
def merge(req: MergeRequest):
    try:
        return merge_models([op.resolved() for op in req.operands])
    except MergeConflictError as e:
        logger.info("Merge rejected: %s", e)
        raise HTTPException(409, detail={"message": str(e), "path": e.path})
