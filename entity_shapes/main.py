"""
Entity Shapes — field-presence contracts for entity data-access operations.
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from entity_shapes import __version__
from entity_shapes.api import health, schemas, reflect, projections
from entity_shapes.config import settings

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("entity_shapes")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Entity Shapes starting up…")
    yield
    logger.info("Entity Shapes shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="Entity Shapes",
    description="Computes which fields are required or optional per data-access operation.",
    version=__version__,
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(health.router,      prefix="/api")
app.include_router(schemas.router,     prefix="/api")
app.include_router(reflect.router,     prefix="/api")
app.include_router(projections.router, prefix="/api")
