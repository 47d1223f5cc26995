"""GET /api/health — liveness and registry summary."""
from fastapi import APIRouter

from entity_shapes import __version__
from entity_shapes.api.schemas import list_graphs

router = APIRouter()


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "version": __version__,
        "graphs": len(list_graphs()),
    }
