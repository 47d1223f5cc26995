"""POST /api/reflect — connect to a database and register its tables as a schema graph."""
import logging
import time
from fastapi import APIRouter, HTTPException

from entity_shapes.api.schemas import register_graph
from entity_shapes.core.db_connector import reflect_schema_graph
from entity_shapes.core.errors import SchemaIntegrityError
from entity_shapes.models.connection import ConnectionRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/reflect", status_code=201)
def reflect(req: ConnectionRequest):
    """
    1. Validate DB connection
    2. Reflect tables, columns and foreign keys
    3. Register the resulting graph under req.graph_name
    """
    t0 = time.time()
    try:
        graph = reflect_schema_graph(req)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SchemaIntegrityError as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "problems": e.problems})

    summary = register_graph(req.graph_name, graph)
    return {
        **summary.model_dump(),
        "duration_seconds": round(time.time() - t0, 2),
    }
