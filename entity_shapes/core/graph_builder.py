"""
Schema graph builder — validates entity schemas once, before any projection.

Every problem found is collected and reported together in a single
SchemaIntegrityError; the projector relies on these checks and never repeats them.
"""
import logging
from typing import Any, Iterable, Mapping, Union

from entity_shapes.core.errors import SchemaIntegrityError
from entity_shapes.models.schema import EntitySchema, SchemaGraph

logger = logging.getLogger(__name__)


def build_schema_graph(schemas: Iterable[Union[EntitySchema, Mapping[str, Any]]]) -> SchemaGraph:
    problems: list[str] = []
    by_name: dict[str, EntitySchema] = {}

    for raw in schemas:
        schema = raw if isinstance(raw, EntitySchema) else EntitySchema.model_validate(raw)
        if schema.name in by_name:
            problems.append(f"duplicate schema '{schema.name}'")
            continue
        by_name[schema.name] = schema

    for schema in by_name.values():
        problems.extend(_check_names(schema))
        problems.extend(_check_targets(schema, by_name))
    problems.extend(_check_embed_cycles(by_name))

    if problems:
        logger.warning("Rejected schema graph (%d problems)", len(problems))
        raise SchemaIntegrityError(problems)

    logger.info("Built schema graph with %d schemas", len(by_name))
    return SchemaGraph(schemas=by_name)


def _check_names(schema: EntitySchema) -> list[str]:
    problems = []
    seen: dict[str, str] = {}
    for section, defs in (("columns", schema.columns), ("embeds", schema.embeds), ("relations", schema.relations)):
        for key, definition in defs.items():
            if key != definition.name:
                problems.append(f"{schema.name}.{section}: key '{key}' does not match name '{definition.name}'")
            if key in seen:
                problems.append(f"{schema.name}: '{key}' is declared in both {seen[key]} and {section}")
            else:
                seen[key] = section
    return problems


def _check_targets(schema: EntitySchema, by_name: dict[str, EntitySchema]) -> list[str]:
    problems = []
    for embed in schema.embeds.values():
        if embed.target_schema not in by_name:
            problems.append(f"{schema.name}.{embed.name}: embeds unknown schema '{embed.target_schema}'")

    for relation in schema.relations.values():
        where = f"{schema.name}.{relation.name}"
        target = by_name.get(relation.target_schema)
        if target is None:
            problems.append(f"{where}: relates to unknown schema '{relation.target_schema}'")
            continue
        if not relation.referenced_columns:
            problems.append(f"{where}: no referenced columns")
        for col in relation.referenced_columns:
            if col not in target.columns:
                problems.append(f"{where}: column '{col}' does not exist on '{target.name}'")
    return problems


def _check_embed_cycles(by_name: dict[str, EntitySchema]) -> list[str]:
    """Depth-first search over embed edges; relations may cycle freely."""
    problems = []
    state: dict[str, str] = {}   # name -> "visiting" | "done"

    def visit(name: str, trail: list[str]) -> None:
        state[name] = "visiting"
        for embed in by_name[name].embeds.values():
            target = embed.target_schema
            if target not in by_name:
                continue
            if state.get(target) == "visiting":
                cycle = trail[trail.index(target):] + [target]
                problems.append("embed cycle: " + " -> ".join(cycle))
            elif target not in state:
                visit(target, trail + [target])
        state[name] = "done"

    for name in by_name:
        if name not in state:
            visit(name, [name])
    return problems
