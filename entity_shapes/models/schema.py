"""Pydantic schemas for entity definitions: columns, embeds, relations and the schema graph."""
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ColumnDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    scalar_type: str
    has_default: bool = False
    is_generated: bool = False
    is_nullable: bool = False


class EmbedDefinition(BaseModel):
    """A nested sub-schema; its field set is owned by ``target_schema``."""
    model_config = ConfigDict(frozen=True)

    name: str
    target_schema: str
    is_nullable: bool = False


class RelationDefinition(BaseModel):
    """A reference to another schema through a subset of its columns."""
    model_config = ConfigDict(frozen=True)

    name: str
    target_schema: str
    referenced_columns: list[str] = Field(default_factory=list)


class EntitySchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    columns: dict[str, ColumnDefinition] = Field(default_factory=dict)
    embeds: dict[str, EmbedDefinition] = Field(default_factory=dict)
    relations: dict[str, RelationDefinition] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _key_definitions_by_name(cls, data: Any) -> Any:
        """Accept lists of definitions, and mapping entries that omit ``name``."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for section in ("columns", "embeds", "relations"):
            raw = data.get(section)
            if isinstance(raw, list):
                data[section] = {
                    (d.get("name") if isinstance(d, dict) else d.name): d for d in raw
                }
            elif isinstance(raw, dict):
                data[section] = {
                    key: ({"name": key, **d} if isinstance(d, dict) and "name" not in d else d)
                    for key, d in raw.items()
                }
        return data

    def field_names(self) -> list[str]:
        return [*self.columns, *self.embeds, *self.relations]


class SchemaGraph(BaseModel):
    """Resolved set of entity schemas, keyed by schema name."""
    model_config = ConfigDict(frozen=True)

    schemas: dict[str, EntitySchema] = Field(default_factory=dict)

    def get(self, name: str) -> EntitySchema:
        try:
            return self.schemas[name]
        except KeyError:
            raise KeyError(f"Unknown schema '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self.schemas

    def names(self) -> list[str]:
        return sorted(self.schemas)
