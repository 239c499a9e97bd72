from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from starlette.responses import JSONResponse

from app.dependencies import get_ratings_service
from routers.responses import as_response
from schemas.generation import AnalystRatingsResponse, TickerRequest
from services.analyst_ratings import AnalystRatingsService

router = APIRouter(prefix="/generate", tags=["ratings"])


@router.post("/analyst-ratings", response_model=AnalystRatingsResponse)
async def summarize_analyst_ratings(
    payload: TickerRequest,
    service: AnalystRatingsService = Depends(get_ratings_service),
) -> JSONResponse:
    return as_response(await service.summarize(payload.ticker))


@router.get("/analyst-ratings", response_model=AnalystRatingsResponse)
async def get_analyst_ratings(
    ticker: str | None = Query(default=None),
    service: AnalystRatingsService = Depends(get_ratings_service),
) -> JSONResponse:
    return as_response(await service.summarize(ticker))
