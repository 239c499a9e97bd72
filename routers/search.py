from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from app.dependencies import get_keyword_search_service
from routers.responses import as_response
from schemas.generation import KeywordSearchRequest, KeywordSearchResponse
from services.keyword_search import KeywordSearchService

router = APIRouter(prefix="/generate", tags=["search"])


@router.post("/keyword-search", response_model=KeywordSearchResponse)
async def keyword_search(
    payload: KeywordSearchRequest,
    service: KeywordSearchService = Depends(get_keyword_search_service),
) -> JSONResponse:
    return as_response(await service.search(payload.keywords))
