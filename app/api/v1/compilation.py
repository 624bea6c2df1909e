"""Stateless compilation endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter

from app.compiler import compile_content_with_data, compile_preview
from app.schemas.builder import CompilePart, CompileRequest, CompileResponse

router = APIRouter(prefix="/compile", tags=["compile"])


@router.post("/preview", response_model=CompileResponse)
def preview(parts: list[CompilePart]) -> CompileResponse:
    return CompileResponse(html=compile_preview([part.model_dump() for part in parts]))


@router.post("", response_model=CompileResponse)
def compile_with_data(payload: CompileRequest) -> CompileResponse:
    html = compile_content_with_data(
        [part.model_dump() for part in payload.parts],
        payload.contract_data,
        payload.related_data,
        framed=payload.framed,
    )
    return CompileResponse(html=html)
