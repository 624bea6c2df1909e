"""Pydantic schema package for API contracts."""

from app.schemas.builder import (
    BuilderPartPayload,
    BuilderPartResponse,
    BuilderSaveRequest,
    BuilderStateResponse,
    CompilePart,
    CompileRequest,
    CompileResponse,
)
from app.schemas.common import ErrorEnvelope
from app.schemas.contract_parts import (
    ContractPartCreateRequest,
    ContractPartResponse,
    ContractPartUpdateRequest,
    LinkedContractPartResponse,
)
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

__all__ = [
    "BuilderPartPayload",
    "BuilderPartResponse",
    "BuilderSaveRequest",
    "BuilderStateResponse",
    "CompilePart",
    "CompileRequest",
    "CompileResponse",
    "CompiledContractResponse",
    "ContractCreateRequest",
    "ContractPartCreateRequest",
    "ContractPartResponse",
    "ContractPartUpdateRequest",
    "ContractPartsCloneRequest",
    "ContractResponse",
    "ContractStatusUpdateRequest",
    "ErrorEnvelope",
    "LinkedContractPartResponse",
    "PaymentGenerateRequest",
    "PaymentResponse",
    "PaymentScheduleResponse",
    "ScheduleSummaryResponse",
]
