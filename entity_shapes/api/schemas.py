"""POST/GET/DELETE /api/schemas — registry of named, validated schema graphs."""
import logging
import threading
from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from entity_shapes.config import settings
from entity_shapes.core.cache import ProjectionCache
from entity_shapes.core.errors import SchemaIntegrityError
from entity_shapes.core.graph_builder import build_schema_graph
from entity_shapes.core.projector import ModelProjector
from entity_shapes.models.requests import GraphRegistration, GraphSummary
from entity_shapes.models.schema import SchemaGraph

router = APIRouter()
logger = logging.getLogger(__name__)

# In-memory registry: graph name → projector (owns the graph and its projection cache)
_graph_registry: dict[str, ModelProjector] = {}
# sync endpoints run in a thread pool; check-and-insert must be atomic
_registry_lock = threading.Lock()


def register_graph(name: str, graph: SchemaGraph) -> GraphSummary:
    cache = ProjectionCache(max_entries=settings.PROJECTION_CACHE_MAX_ENTRIES)
    with _registry_lock:
        if name in _graph_registry:
            raise HTTPException(409, detail=f"Graph '{name}' is already registered.")
        _graph_registry[name] = ModelProjector(graph, cache=cache)
    logger.info("Registered graph %s (%d schemas)", name, len(graph.schemas))
    return GraphSummary(name=name, schemas=graph.names())


def get_projector(name: str) -> ModelProjector:
    if name not in _graph_registry:
        raise HTTPException(404, detail=f"Graph '{name}' not found. Please register it first.")
    return _graph_registry[name]


def list_graphs() -> list[str]:
    return list(_graph_registry.keys())


@router.post("/schemas", response_model=GraphSummary, status_code=201)
def create_graph(req: GraphRegistration):
    try:
        graph = build_schema_graph(req.schemas)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        raise HTTPException(400, detail={"message": "Malformed schema definition", "errors": errors})
    except SchemaIntegrityError as e:
        raise HTTPException(400, detail={"message": "Schema graph integrity check failed", "problems": e.problems})
    return register_graph(req.name, graph)


@router.get("/schemas")
def get_graphs():
    result = []
    for name, projector in _graph_registry.items():
        result.append({
            "name": name,
            "schemas": projector.graph.names(),
            "cache": projector.cache.stats() if projector.cache else None,
        })
    return {"graphs": result}


@router.get("/schemas/{graph}")
def get_graph(graph: str):
    return get_projector(graph).graph


@router.delete("/schemas/{graph}")
def delete_graph(graph: str):
    with _registry_lock:
        if _graph_registry.pop(graph, None) is None:
            raise HTTPException(404, detail=f"Graph '{graph}' not found.")
    return {"message": f"Graph '{graph}' removed successfully."}
