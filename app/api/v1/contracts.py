"""Contract, builder and payment schedule endpoints for API v1."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.builder import state as builder
from app.builder.state import BuilderState
from app.core.dependencies import (
    get_builder_service,
    get_contract_service,
    get_payment_schedule_service,
    get_related_data_service,
)
from app.schemas.builder import BuilderPartResponse, BuilderSaveRequest, BuilderStateResponse
from app.schemas.contract_parts import LinkedContractPartResponse
from app.schemas.contracts import (
    CompiledContractResponse,
    ContractCreateRequest,
    ContractPartsCloneRequest,
    ContractResponse,
    ContractStatusUpdateRequest,
)
from app.schemas.payments import (
    PaymentGenerateRequest,
    PaymentResponse,
    PaymentScheduleResponse,
    ScheduleSummaryResponse,
)
from app.services.contract_builder_service import ContractBuilderService
from app.services.contract_service import ContractService
from app.services.payment_schedule_service import PaymentScheduleService
from app.services.related_data_service import RelatedDataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["contracts"])


def _not_found(contract_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Contract not found: {contract_id}")


def _state_response(state: BuilderState) -> BuilderStateResponse:
    return BuilderStateResponse(
        contract_id=state.contract_id,
        title=state.title,
        phase=state.phase,
        parts=[BuilderPartResponse(**part.as_dict()) for part in state.parts],
        available_parts=[BuilderPartResponse(**part.as_dict()) for part in state.available_parts],
        errors=dict(state.errors),
        compiled_content=builder.compiled_content(state),
    )


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
def create_contract(payload: ContractCreateRequest, service: ContractService = Depends(get_contract_service)):
    return service.create_contract(**payload.model_dump())


@router.get("", response_model=list[ContractResponse])
def list_contracts(
    contract_status: str = Query(default="draft", alias="status", min_length=2, max_length=32),
    service: ContractService = Depends(get_contract_service),
) -> list:
    return service.list_by_status(contract_status)


@router.get("/{contract_id}", response_model=ContractResponse)
def get_contract(contract_id: int, service: ContractService = Depends(get_contract_service)):
    contract = service.get_contract(contract_id)
    if contract is None:
        raise _not_found(contract_id)
    return contract


@router.patch("/{contract_id}/status", response_model=ContractResponse)
def update_contract_status(
    contract_id: int,
    payload: ContractStatusUpdateRequest,
    service: ContractService = Depends(get_contract_service),
):
    contract = service.update_status(contract_id, payload.status)
    if contract is None:
        raise _not_found(contract_id)
    return contract


@router.get("/{contract_id}/parts", response_model=list[LinkedContractPartResponse])
def list_contract_parts(
    contract_id: int,
    contracts: ContractService = Depends(get_contract_service),
    service: ContractBuilderService = Depends(get_builder_service),
) -> list:
    if contracts.get_contract(contract_id) is None:
        raise _not_found(contract_id)
    return service.fetch_contract_parts(contract_id)


@router.post("/{contract_id}/parts/clone", response_model=list[LinkedContractPartResponse])
def clone_contract_parts(
    contract_id: int,
    payload: ContractPartsCloneRequest,
    service: ContractBuilderService = Depends(get_builder_service),
) -> list:
    parts = service.clone_contract_parts(payload.source_contract_id, contract_id)
    if parts is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Contract not found: {payload.source_contract_id} or {contract_id}",
        )
    if parts is False:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Contract parts could not be cloned")
    return parts


@router.get("/{contract_id}/compiled", response_model=CompiledContractResponse)
def get_compiled_contract(
    contract_id: int,
    framed: bool = Query(default=False),
    service: ContractBuilderService = Depends(get_builder_service),
) -> CompiledContractResponse:
    html = service.compile_contract(contract_id, framed=framed)
    if html is None:
        raise _not_found(contract_id)
    return CompiledContractResponse(contract_id=contract_id, framed=framed, html=html)


@router.get("/{contract_id}/builder", response_model=BuilderStateResponse)
def get_builder_state(
    contract_id: int,
    service: ContractBuilderService = Depends(get_builder_service),
) -> BuilderStateResponse:
    state = service.load_initial_data(contract_id)
    if state is None:
        raise _not_found(contract_id)
    return _state_response(state)


@router.post("/{contract_id}/builder/save", response_model=ContractResponse)
def save_builder_state(
    contract_id: int,
    payload: BuilderSaveRequest,
    service: ContractBuilderService = Depends(get_builder_service),
    contracts: ContractService = Depends(get_contract_service),
    related: RelatedDataService = Depends(get_related_data_service),
):
    state = service.load_initial_data(contract_id)
    if state is None:
        raise _not_found(contract_id)

    library = {part.id: part for part in state.available_parts}
    unknown = [part.id for part in payload.parts if part.id not in library]
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown contract parts: {unknown}",
        )

    selected = []
    for part in payload.parts:
        current = state.find(part.id) or library[part.id]
        record = current.as_dict()
        record.update(part.model_dump(exclude_none=True))
        selected.append(record)

    state = builder.set_parts(builder.set_title(state, payload.title), selected)
    checked = builder.validate(state)
    if checked.errors:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=dict(checked.errors))

    contract_data = related_data = None
    if payload.merge_data:
        contract = contracts.get_contract(contract_id)
        contract_data = contract.template_fields()
        related_data = related.fetch_related_data(contract)

    saved = service.save_contract(state, contract_data, related_data)
    if saved is False:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Contract could not be saved")

    logger.info(
        "contracts.builder.saved",
        extra={"event": "contracts.builder.saved", "contract_id": contract_id, "merge_data": payload.merge_data},
    )
    return saved


@router.get("/{contract_id}/payments", response_model=list[PaymentResponse])
def list_payments(
    contract_id: int,
    contracts: ContractService = Depends(get_contract_service),
) -> list:
    contract = contracts.get_contract(contract_id)
    if contract is None:
        raise _not_found(contract_id)
    return sorted(contract.payments, key=lambda payment: (payment.order_index is None, payment.order_index or 0))


@router.post(
    "/{contract_id}/payments/generate",
    response_model=PaymentScheduleResponse,
    status_code=status.HTTP_201_CREATED,
)
def generate_payments(
    contract_id: int,
    payload: PaymentGenerateRequest,
    contracts: ContractService = Depends(get_contract_service),
    service: PaymentScheduleService = Depends(get_payment_schedule_service),
) -> PaymentScheduleResponse:
    contract = contracts.get_contract(contract_id)
    if contract is None:
        raise _not_found(contract_id)

    rows, summary = service.generate_for_contract(
        contract_id,
        list(contract.products),
        payload.billing_mode,
        start_date=payload.start_date or contract.start_date,
    )
    return PaymentScheduleResponse(
        payments=[PaymentResponse.model_validate(row) for row in rows],
        summary=ScheduleSummaryResponse.model_validate(summary),
    )
