from entity_shapes.core.errors import EntityShapesError, SchemaIntegrityError, MergeConflictError  # noqa: F401
from entity_shapes.core.presence import resolve_column, column_value_type  # noqa: F401
from entity_shapes.core.relations import resolve_relation  # noqa: F401
from entity_shapes.core.embeds import resolve_embed  # noqa: F401
from entity_shapes.core.projector import ModelProjector, project  # noqa: F401
from entity_shapes.core.merger import merge_models, shape_of  # noqa: F401
from entity_shapes.core.graph_builder import build_schema_graph  # noqa: F401
from entity_shapes.core.db_connector import create_engine_from_request, reflect_schema_graph  # noqa: F401
