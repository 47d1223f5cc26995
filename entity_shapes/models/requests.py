"""Pydantic schemas for the HTTP API request and response bodies."""
from typing import Any, Optional
from pydantic import BaseModel, Field, model_validator

from entity_shapes.models.computed import ComputedModel, OperationMode


class GraphRegistration(BaseModel):
    name: str
    schemas: list[dict[str, Any]]


class GraphSummary(BaseModel):
    name: str
    schemas: list[str]


class ProjectionRequest(BaseModel):
    graph: str
    schema_name: str
    mode: OperationMode = OperationMode.ALL
    flat: bool = False   # return {dot.path: FieldSpec} instead of the nested model


class MergeOperand(BaseModel):
    """Either an already computed model or a concrete value mapping."""
    model: Optional[ComputedModel] = None
    value: Optional[dict[str, Any]] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "MergeOperand":
        if (self.model is None) == (self.value is None):
            raise ValueError("operand needs exactly one of 'model' or 'value'")
        return self

    def resolved(self) -> ComputedModel | dict[str, Any]:
        return self.model if self.model is not None else self.value


class MergeRequest(BaseModel):
    operands: list[MergeOperand] = Field(default_factory=list)
