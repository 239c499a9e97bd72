from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from app.dependencies import get_transform_service
from routers.responses import as_response
from schemas.generation import (
    ArticleRequest,
    ArticleWithH2sResponse,
    HeadlineArticleRequest,
    LeadRequest,
    LeadResponse,
    QuotesResponse,
)
from services import transforms
from services.transforms import TextTransformService

router = APIRouter(prefix="/generate", tags=["articles"])


@router.post("/lead", response_model=LeadResponse)
async def generate_lead(
    payload: LeadRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.LEAD, payload.as_fields()))


@router.post("/headline-lead", response_model=LeadResponse)
async def generate_headline_lead(
    payload: HeadlineArticleRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.HEADLINE_LEAD, payload.as_fields()))


@router.post("/h2s", response_model=ArticleWithH2sResponse)
async def generate_h2s(
    payload: ArticleRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.H2S, payload.as_fields()))


@router.post("/direct-quotes", response_model=QuotesResponse)
async def extract_direct_quotes(
    payload: ArticleRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.DIRECT_QUOTES, payload.as_fields()))
