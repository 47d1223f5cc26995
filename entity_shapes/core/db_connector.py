"""
Database connector — SQLAlchemy engine factory and schema graph reflection.
Supports SQLite and PostgreSQL. Tables become entity schemas, foreign keys become relations.
"""
import logging
from typing import Optional
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import OperationalError

from entity_shapes.core.graph_builder import build_schema_graph
from entity_shapes.models.connection import ConnectionRequest
from entity_shapes.models.schema import ColumnDefinition, EntitySchema, RelationDefinition, SchemaGraph

logger = logging.getLogger(__name__)


def create_engine_from_request(req: ConnectionRequest):
    """Build and test a SQLAlchemy engine from a ConnectionRequest."""
    url = req.get_sqlalchemy_url()
    engine = create_engine(url, pool_pre_ping=True)
    # Validate the connection immediately
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except OperationalError as e:
        engine.dispose()
        raise ValueError(f"Could not connect to database: {e}") from e
    return engine


def reflect_schema_graph(req: ConnectionRequest) -> SchemaGraph:
    """
    Reflect all tables from the target database into a validated SchemaGraph.
    Foreign keys pointing outside the reflected tables are skipped.
    """
    engine = create_engine_from_request(req)
    try:
        insp = inspect(engine)
        schema_name = _get_default_schema(req)
        table_names = insp.get_table_names(schema=schema_name)
        logger.info("Discovered %d tables in %s", len(table_names), req.graph_name)

        schemas: list[EntitySchema] = []
        for table_name in table_names:
            pk_cols = insp.get_pk_constraint(table_name, schema=schema_name).get("constrained_columns") or []
            columns = _reflect_columns(insp, table_name, schema_name, pk_cols)
            relations = _reflect_relations(insp, table_name, schema_name, set(table_names), set(columns))
            schemas.append(EntitySchema(name=table_name, columns=columns, relations=relations))
    finally:
        engine.dispose()

    return build_schema_graph(schemas)


# ── Reflection helpers ────────────────────────────────────────────────────────

def _reflect_columns(insp, table_name: str, schema: Optional[str], pk_cols: list[str]) -> dict[str, ColumnDefinition]:
    result = {}
    for col in insp.get_columns(table_name, schema=schema):
        data_type = str(col["type"]).upper()
        # Simplify long type strings
        if "(" in data_type:
            data_type = data_type.split("(")[0]
        result[col["name"]] = ColumnDefinition(
            name=col["name"],
            scalar_type=data_type,
            has_default=col.get("default") is not None,
            is_generated=_is_generated(col, data_type, pk_cols),
            is_nullable=bool(col.get("nullable", True)),
        )
    return result


def _is_generated(col: dict, data_type: str, pk_cols: list[str]) -> bool:
    if col.get("computed") or col.get("identity"):
        return True
    # single integer primary key: rowid alias on SQLite, serial on PostgreSQL
    return (
        pk_cols == [col["name"]]
        and "INT" in data_type
        and col.get("autoincrement", "auto") is not False
    )


def _reflect_relations(
    insp, table_name: str, schema: Optional[str], known_tables: set[str], taken: set[str]
) -> dict[str, RelationDefinition]:
    relations = {}
    taken = set(taken)
    for fk in insp.get_foreign_keys(table_name, schema=schema):
        target = fk["referred_table"]
        if target not in known_tables:
            logger.warning("Skipping FK %s -> %s: table not reflected", table_name, target)
            continue
        referred = list(fk["referred_columns"] or [])
        if not referred or None in referred:
            # bare "REFERENCES table" on SQLite: the target's primary key is implied
            referred = insp.get_pk_constraint(target, schema=schema).get("constrained_columns") or []
        name = _relation_name(fk["constrained_columns"], target, taken)
        taken.add(name)
        relations[name] = RelationDefinition(
            name=name,
            target_schema=target,
            referenced_columns=referred,
        )
    return relations


def _relation_name(constrained: list[str], referred_table: str, taken: set[str]) -> str:
    """customer_id → customer; composite or unconventional keys fall back to the referred table."""
    if len(constrained) == 1 and constrained[0].endswith("_id") and len(constrained[0]) > 3:
        name = constrained[0][:-3]
    else:
        name = referred_table
    while name in taken:
        name += "_ref"
    return name


def _get_default_schema(req: ConnectionRequest) -> Optional[str]:
    if req.db_type == "postgresql":
        return req.db_schema or "public"
    return None   # SQLite has no schema concept
