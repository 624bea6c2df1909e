"""Contract request/response schemas for API contracts."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class ContractCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    company_id: int | None = Field(default=None, ge=1)
    status: str | None = Field(default=None, min_length=2, max_length=32)
    start_date: date | None = None
    due_date: date | None = None
    projected_length: str | None = Field(default=None, max_length=120)
    platform: str | None = Field(default=None, max_length=64)
    client_name: str | None = Field(default=None, max_length=255)
    client_business: str | None = Field(default=None, max_length=255)
    company_address: str | None = Field(default=None, max_length=500)
    company_email: str | None = Field(default=None, max_length=320)
    milestone_ids: list[int] = Field(default_factory=list)
    product_ids: list[int] = Field(default_factory=list)


class ContractStatusUpdateRequest(BaseModel):
    status: str = Field(min_length=2, max_length=32)


class ContractPartsCloneRequest(BaseModel):
    source_contract_id: int = Field(ge=1)


class ContractResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    company_id: int | None = None
    status: str
    start_date: date | None = None
    due_date: date | None = None
    projected_length: str | None = None
    platform: str | None = None
    client_name: str | None = None
    client_business: str | None = None
    company_address: str | None = None
    company_email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CompiledContractResponse(BaseModel):
    contract_id: int
    framed: bool
    html: str
