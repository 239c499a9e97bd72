from __future__ import annotations

import logging
from typing import Any

from services import prompts
from services.completion_client import CompletionClient, CompletionError, ModelParams
from services.market_data import BenzingaClient, MarketDataError, summarize_ratings
from services.transforms import TransformResult

logger = logging.getLogger(__name__)

RATINGS_PARAMS = ModelParams("gpt-4o-mini", 500, 0.7)
NO_RATINGS_MESSAGE = "No recent analyst ratings found for {ticker}."


def _empty() -> dict[str, Any]:
    return {"paragraph": "", "ratings": []}


class AnalystRatingsService:
    """Fetch recent rating actions for a ticker and have the model narrate them."""

    def __init__(
        self,
        market_data: BenzingaClient | None,
        completion: CompletionClient | None,
    ) -> None:
        self._market_data = market_data
        self._completion = completion

    async def summarize(self, ticker: str | None) -> TransformResult:
        symbol = (ticker or "").strip().upper()
        if not symbol:
            return TransformResult(400, {**_empty(), "error": "Ticker is required."})

        try:
            return await self._summarize(symbol)
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected error summarizing analyst ratings for %s", symbol)
            return TransformResult(500, {**_empty(), "error": "Failed to summarize analyst ratings."})

    async def _summarize(self, symbol: str) -> TransformResult:
        if self._market_data is None:
            logger.error("Analyst ratings requested but no Benzinga API key is configured")
            return TransformResult(500, {**_empty(), "error": "Failed to fetch analyst ratings."})

        try:
            ratings = await self._market_data.fetch_ratings(symbol)
        except MarketDataError:
            logger.exception("Analyst ratings fetch failed for %s", symbol)
            return TransformResult(500, {**_empty(), "error": "Failed to fetch analyst ratings."})

        if not ratings:
            return TransformResult(200, {**_empty(), "paragraph": NO_RATINGS_MESSAGE.format(ticker=symbol)})

        block = summarize_ratings(ratings, symbol)
        lines = block.splitlines()

        if self._completion is None:
            logger.error("Analyst ratings summary requested but no OpenAI API key is configured")
            return TransformResult(500, {**_empty(), "error": "Failed to summarize analyst ratings."})

        try:
            paragraph = await self._completion.complete(
                prompts.analyst_ratings_prompt(symbol, block),
                RATINGS_PARAMS,
            )
        except CompletionError:
            logger.exception("Analyst ratings summary failed for %s", symbol)
            return TransformResult(500, {**_empty(), "error": "Failed to summarize analyst ratings."})

        return TransformResult(200, {"paragraph": paragraph or block, "ratings": lines})
