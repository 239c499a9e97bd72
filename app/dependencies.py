from __future__ import annotations

from fastapi import Depends, Request

from app.core.config import Settings
from services.analyst_ratings import AnalystRatingsService
from services.completion_client import CompletionClient
from services.image_generator import ImageGenerationService
from services.keyword_search import KeywordSearchService
from services.market_data import BenzingaClient
from services.transforms import TextTransformService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_completion_client(request: Request) -> CompletionClient | None:
    return request.app.state.completion_client


def get_gemini_client(request: Request) -> CompletionClient | None:
    return request.app.state.gemini_client


def get_market_data_client(request: Request) -> BenzingaClient | None:
    return request.app.state.market_data_client


def get_transform_service(
    client: CompletionClient | None = Depends(get_completion_client),
) -> TextTransformService:
    return TextTransformService(client)


def get_image_service(
    client: CompletionClient | None = Depends(get_completion_client),
    gemini: CompletionClient | None = Depends(get_gemini_client),
) -> ImageGenerationService:
    return ImageGenerationService(client, gemini)


def get_ratings_service(
    market_data: BenzingaClient | None = Depends(get_market_data_client),
    client: CompletionClient | None = Depends(get_completion_client),
) -> AnalystRatingsService:
    return AnalystRatingsService(market_data, client)


def get_keyword_search_service(
    settings: Settings = Depends(get_app_settings),
    market_data: BenzingaClient | None = Depends(get_market_data_client),
    client: CompletionClient | None = Depends(get_completion_client),
) -> KeywordSearchService:
    return KeywordSearchService(market_data, client, lookback_days=settings.news_lookback_days)
