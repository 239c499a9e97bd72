from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from app.dependencies import get_transform_service
from routers.responses import as_response
from schemas.generation import (
    AdjustHeadlineRequest,
    ArticleRequest,
    HeadlineArticleRequest,
    HeadlineRequest,
    HeadlinesResponse,
    HeadlineWorkshopRequest,
    HeadlineWorkshopResponse,
    LeveledHeadlinesResponse,
    PunchyVariantsResponse,
    ReviewResponse,
    SEOHeadlineResponse,
    SimilarHeadlinesResponse,
)
from services import headline_workshop, transforms
from services.transforms import TextTransformService

router = APIRouter(tags=["headlines"])


@router.post("/adjust-headline", response_model=HeadlinesResponse)
async def adjust_headline(
    payload: AdjustHeadlineRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.ADJUST_HEADLINE, payload.as_fields()))


@router.post("/check-accuracy", response_model=ReviewResponse)
async def check_accuracy(
    payload: HeadlineArticleRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.CHECK_ACCURACY, payload.as_fields()))


@router.post("/generate/headlines", response_model=HeadlinesResponse)
async def generate_headlines(
    payload: ArticleRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.HEADLINES, payload.as_fields()))


@router.post("/generate/no-colon-headlines", response_model=HeadlinesResponse)
async def generate_no_colon_headlines(
    payload: ArticleRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.NO_COLON_HEADLINES, payload.as_fields()))


@router.post("/generate/custom-headlines", response_model=HeadlinesResponse)
async def generate_custom_headlines(
    payload: ArticleRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.CUSTOM_HEADLINES, payload.as_fields()))


@router.post("/generate/similar-headlines", response_model=SimilarHeadlinesResponse)
async def generate_similar_headlines(
    payload: HeadlineRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.SIMILAR_HEADLINES, payload.as_fields()))


@router.post("/generate/punchy-variants", response_model=PunchyVariantsResponse)
async def generate_punchy_variants(
    payload: HeadlineRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.PUNCHY_VARIANTS, payload.as_fields()))


@router.post("/generate/seo-headline", response_model=SEOHeadlineResponse)
async def generate_seo_headline(
    payload: HeadlineRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.SEO_HEADLINE, payload.as_fields()))


@router.post("/generate/msn-headlines", response_model=LeveledHeadlinesResponse)
async def generate_msn_headlines(
    payload: ArticleRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.MSN_HEADLINES, payload.as_fields()))


@router.post("/generate/headline-workshop", response_model=HeadlineWorkshopResponse)
async def headline_workshop_step(
    payload: HeadlineWorkshopRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    fields = payload.as_fields()
    transform = headline_workshop.transform_for(payload.action)
    if transform is None:
        return as_response(headline_workshop.unknown_action(fields))
    return as_response(await service.run(transform, fields))
