from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.responses import JSONResponse

from app.dependencies import get_image_service, get_transform_service
from routers.responses import as_response
from schemas.generation import (
    AltTextResponse,
    ArticleRequest,
    GeneratedImageResponse,
    ImageIdeasResponse,
    ImageRequest,
    OptimizedPromptResponse,
    PromptRequest,
)
from services import transforms
from services.image_generator import ImageGenerationService
from services.transforms import TextTransformService

router = APIRouter(tags=["images"])


@router.post("/generate/image-ideas", response_model=ImageIdeasResponse)
async def generate_image_ideas(
    payload: ArticleRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.IMAGE_IDEAS, payload.as_fields()))


@router.post("/generate/optimize-prompt", response_model=OptimizedPromptResponse)
async def optimize_prompt(
    payload: PromptRequest,
    service: TextTransformService = Depends(get_transform_service),
) -> JSONResponse:
    return as_response(await service.run(transforms.OPTIMIZE_PROMPT, payload.as_fields()))


@router.post("/generate/dalle-image", response_model=GeneratedImageResponse)
async def generate_image(
    payload: ImageRequest,
    service: ImageGenerationService = Depends(get_image_service),
) -> JSONResponse:
    result = await service.generate(
        payload.prompt,
        description=payload.description,
        provider=payload.provider,
    )
    return as_response(result)


@router.post("/alt-text/generate", response_model=AltTextResponse)
async def generate_alt_text(
    image: UploadFile | None = File(default=None),
    service: ImageGenerationService = Depends(get_image_service),
) -> JSONResponse:
    content = await image.read() if image is not None else None
    content_type = image.content_type if image is not None else None
    return as_response(await service.describe_image(content, content_type))
