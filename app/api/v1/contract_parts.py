"""Contract part library endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_contract_part_service
from app.schemas.contract_parts import (
    ContractPartCreateRequest,
    ContractPartResponse,
    ContractPartUpdateRequest,
)
from app.services.contract_part_service import ContractPartService

router = APIRouter(prefix="/contract-parts", tags=["contract-parts"])


@router.get("", response_model=list[ContractPartResponse])
def list_contract_parts(service: ContractPartService = Depends(get_contract_part_service)) -> list:
    return service.list_parts()


@router.post("", response_model=ContractPartResponse, status_code=status.HTTP_201_CREATED)
def create_contract_part(
    payload: ContractPartCreateRequest,
    service: ContractPartService = Depends(get_contract_part_service),
):
    return service.create_part(
        title=payload.title,
        content=payload.content,
        is_required=payload.is_required,
        sort_order=payload.sort_order,
    )


@router.post("/custom", response_model=ContractPartResponse, status_code=status.HTTP_201_CREATED)
def create_custom_contract_part(service: ContractPartService = Depends(get_contract_part_service)):
    return service.create_custom_part()


@router.get("/{part_id}", response_model=ContractPartResponse)
def get_contract_part(part_id: int, service: ContractPartService = Depends(get_contract_part_service)):
    part = service.get_part(part_id)
    if part is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Contract part not found: {part_id}")
    return part


@router.patch("/{part_id}", response_model=ContractPartResponse)
def update_contract_part(
    part_id: int,
    payload: ContractPartUpdateRequest,
    service: ContractPartService = Depends(get_contract_part_service),
):
    part = service.update_part(part_id, **payload.model_dump(exclude_unset=True))
    if part is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Contract part not found: {part_id}")
    return part
