from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from services.completion_client import GeneratedImage, ModelParams
from services.market_data import AnalystRating, NewsArticle


class FakeCompletionClient:
    """Stand-in for CompletionClient that replays canned replies."""

    def __init__(
        self,
        replies: list[str] | None = None,
        error: Exception | None = None,
        image: GeneratedImage | Exception | None = None,
    ) -> None:
        self.replies = list(replies or [])
        self.error = error
        self.image = image
        self.calls: list[tuple[list[dict[str, Any]], ModelParams]] = []
        self.image_calls: list[tuple[str, dict[str, Any]]] = []

    async def complete(self, prompt: str, params: ModelParams) -> str:
        return await self.complete_messages([{"role": "user", "content": prompt}], params)

    async def complete_messages(self, messages: list[dict[str, Any]], params: ModelParams) -> str:
        self.calls.append((messages, params))
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else ""

    async def generate_image(self, prompt: str, **kwargs: Any) -> GeneratedImage:
        self.image_calls.append((prompt, kwargs))
        if isinstance(self.image, Exception):
            raise self.image
        assert self.image is not None
        return self.image

    @property
    def last_prompt(self) -> str:
        messages, _ = self.calls[-1]
        return messages[-1]["content"]

    @property
    def last_params(self) -> ModelParams:
        return self.calls[-1][1]


class FakeMarketData:
    def __init__(
        self,
        ratings: list[AnalystRating] | None = None,
        error: Exception | None = None,
        ticker_news: dict[str, list[NewsArticle]] | None = None,
        news_pages: list[list[NewsArticle]] | None = None,
    ) -> None:
        self.ratings = ratings or []
        self.error = error
        self.ticker_news = ticker_news or {}
        self.news_pages = news_pages or []
        self.tickers: list[str] = []
        self.news_calls: list[dict[str, Any]] = []

    async def fetch_ratings(self, ticker: str) -> list[AnalystRating]:
        self.tickers.append(ticker)
        if self.error is not None:
            raise self.error
        return self.ratings

    async def fetch_news(
        self,
        *,
        tickers: str | None = None,
        page: int = 0,
        page_size: int = 100,
    ) -> list[NewsArticle]:
        self.news_calls.append({"tickers": tickers, "page": page})
        if self.error is not None:
            raise self.error
        if tickers:
            return self.ticker_news.get(tickers, [])
        return self.news_pages[page] if page < len(self.news_pages) else []


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        rate_limit="1000/minute",
        openai_api_key=None,
        gemini_api_key=None,
        benzinga_api_key=None,
    )


@pytest.fixture
def completion() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def market_data() -> FakeMarketData:
    return FakeMarketData()


@pytest.fixture
def client(settings: Settings, completion: FakeCompletionClient, market_data: FakeMarketData) -> TestClient:
    app = create_app(settings=settings, completion_client=completion, market_data_client=market_data)
    return TestClient(app)
