"""Builder and stateless compilation schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class BuilderPartPayload(BaseModel):
    id: int = Field(ge=1)
    title: str | None = Field(default=None, max_length=255)
    content: str | None = Field(default=None, max_length=200000)
    is_included: bool | None = None


class BuilderSaveRequest(BaseModel):
    title: str = Field(default="", max_length=255)
    parts: list[BuilderPartPayload] = Field(default_factory=list)
    merge_data: bool = False


class BuilderPartResponse(BaseModel):
    id: int
    title: str
    content: str
    order_index: int
    is_required: bool
    sort_order: int
    is_included: bool = True


class BuilderStateResponse(BaseModel):
    contract_id: int | None = None
    title: str
    phase: str
    parts: list[BuilderPartResponse]
    available_parts: list[BuilderPartResponse]
    errors: dict[str, str] = Field(default_factory=dict)
    compiled_content: str


class CompilePart(BaseModel):
    title: str = ""
    content: str = ""
    order_index: int = 0


class CompileRequest(BaseModel):
    parts: list[CompilePart] = Field(default_factory=list)
    contract_data: dict[str, Any] = Field(default_factory=dict)
    related_data: dict[str, Any] = Field(default_factory=dict)
    framed: bool = False


class CompileResponse(BaseModel):
    html: str
