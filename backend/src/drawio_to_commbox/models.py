"""Pydantic models for API responses. Serialized with camelCase aliases."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConvertStats(_CamelModel):
    nodes_count: int
    connections_count: int


class ConvertResponse(_CamelModel):
    success: Literal[True] = True
    xml: str
    mx_graph_model_xml: str
    filename: str
    mx_graph_model_filename: str
    stats: ConvertStats


class ErrorResponse(_CamelModel):
    success: Literal[False] = False
    error: str


class HealthResponse(_CamelModel):
    status: str = "OK"
    timestamp: str
    service: str


class ApiInfoResponse(_CamelModel):
    message: str
    endpoints: dict[str, str] = Field(default_factory=dict)
