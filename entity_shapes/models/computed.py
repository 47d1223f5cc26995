"""Pydantic schemas for computed models: the field-presence contract per operation."""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class OperationMode(str, Enum):
    ALL = "all"              # full read model
    CREATE = "create"        # input of a create call
    INSERT = "insert"        # input of a low-level insert call
    VIRTUALS = "virtuals"    # fields the store computes and returns
    MERGE = "merge"          # combinator over computed models, not a projection


class Presence(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"


class ValueKind(str, Enum):
    SCALAR = "scalar"
    OBJECT = "object"         # embedded sub-schema or concrete nested mapping
    REFERENCE = "reference"   # relation reference value
    ANY = "any"               # concrete None; unifies with every kind


class ValueType(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ValueKind
    scalar_type: Optional[str] = None     # None = unknown scalar type
    nullable: bool = False
    target: Optional[str] = None          # target schema of embeds and references
    model: Optional["ComputedModel"] = None


class FieldSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    presence: Presence
    value_type: ValueType

    @property
    def required(self) -> bool:
        return self.presence is Presence.REQUIRED


class ComputedModel(BaseModel):
    """
    Field-presence map produced for a schema and an operation mode.

    ``fields`` is nested: embeds and references carry their own computed model in
    ``value_type.model``. ``paths()`` gives the flat, dot-joined view.
    """
    model_config = ConfigDict(frozen=True)

    fields: dict[str, FieldSpec] = Field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __getitem__(self, name: str) -> FieldSpec:
        return self.fields[name]

    def __len__(self) -> int:
        return len(self.fields)

    def keys(self) -> list[str]:
        return list(self.fields)

    def paths(self, prefix: str = "") -> dict[str, FieldSpec]:
        """Flatten into ``{dot.path: FieldSpec}``. Embeds expand, references stay leaves."""
        flat: dict[str, FieldSpec] = {}
        for name, spec in self.fields.items():
            path = f"{prefix}{name}"
            flat[path] = spec
            vt = spec.value_type
            if vt.kind is ValueKind.OBJECT and vt.model is not None:
                flat.update(vt.model.paths(prefix=f"{path}."))
        return flat

    def presence_map(self) -> dict[str, Presence]:
        return {path: spec.presence for path, spec in self.paths().items()}

    def partial(self) -> "ComputedModel":
        """Deep-partial copy: every field at every depth becomes optional."""
        fields: dict[str, FieldSpec] = {}
        for name, spec in self.fields.items():
            vt = spec.value_type
            if vt.model is not None:
                vt = vt.model_copy(update={"model": vt.model.partial()})
            fields[name] = FieldSpec(presence=Presence.OPTIONAL, value_type=vt)
        return ComputedModel(fields=fields)


ValueType.model_rebuild()
FieldSpec.model_rebuild()
ComputedModel.model_rebuild()
