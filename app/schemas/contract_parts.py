"""Contract part request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ContractPartCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(default="", max_length=200000)
    is_required: bool = False
    sort_order: int | None = Field(default=None, ge=0)


class ContractPartUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, max_length=200000)
    is_required: bool | None = None
    sort_order: int | None = Field(default=None, ge=0)


class ContractPartResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    is_required: bool
    sort_order: int
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LinkedContractPartResponse(BaseModel):
    id: int
    title: str
    content: str
    is_required: bool
    sort_order: int
    order_index: int
    is_included: bool
    custom_content: str | None = None
