from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

from services import prompts
from services.completion_client import CompletionClient, CompletionError, ModelParams
from services.market_data import BenzingaClient, MarketDataError, NewsArticle
from services.text_processing import CompletionParseError, parse_json_payload
from services.transforms import TransformResult

logger = logging.getLogger(__name__)

RANKING_PARAMS = ModelParams("gpt-4o-mini", 300, 0)
PAGE_SIZE = 100
MAX_CANDIDATES = 100
RESULT_LIMIT = 20
# Below this many ticker hits the recent-news pages are scanned as well.
MIN_TICKER_HITS = 50
EXCLUDED_CHANNELS = frozenset({"press-releases", "insights"})
NO_ARTICLES_MESSAGE = "No articles found for the given keywords"

TICKER_ALIASES = {
    "palantir": "PLTR",
    "tesla": "TSLA",
    "apple": "AAPL",
    "microsoft": "MSFT",
    "amazon": "AMZN",
    "nvidia": "NVDA",
    "google": "GOOGL",
    "meta": "META",
    "netflix": "NFLX",
}

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def ticker_candidates(keywords: str) -> list[str]:
    """Ticker symbols worth a direct news lookup for a search phrase."""
    tickers = []
    if keywords == keywords.upper() and len(keywords) <= 5:
        tickers.append(keywords)
    lowered = keywords.lower()
    tickers.extend(symbol for name, symbol in TICKER_ALIASES.items() if name in lowered)
    return list(dict.fromkeys(tickers))


def _is_recent(article: NewsArticle, cutoff: datetime, *, require_date: bool = False) -> bool:
    created = article.created_at
    if created is None:
        return not require_date
    return created >= cutoff


def _publishable(article: NewsArticle) -> bool:
    if "/insights/" in article.url:
        return False
    if any(channel.lower() in EXCLUDED_CHANNELS for channel in article.channels):
        return False
    return bool(article.title and article.url and article.created)


def _newest_first(articles: Iterable[NewsArticle]) -> list[NewsArticle]:
    return sorted(articles, key=lambda article: article.created_at or _EPOCH, reverse=True)


def article_payload(article: NewsArticle) -> dict[str, Any]:
    return {
        "id": article.id,
        "title": article.title,
        "url": article.url,
        "created": article.created,
        "teaser": article.teaser,
        "author": article.author or "Benzinga",
        "stocks": list(article.stocks),
        "tags": list(article.tags),
    }


def _empty() -> dict[str, Any]:
    return {"articles": [], "totalFound": 0}


class KeywordSearchService:
    """Find recent Benzinga stories about a phrase and keep the most relevant."""

    def __init__(
        self,
        market_data: BenzingaClient | None,
        completion: CompletionClient | None,
        lookback_days: int = 30,
        max_pages: int = 10,
    ) -> None:
        self._market_data = market_data
        self._completion = completion
        self._lookback_days = lookback_days
        self._max_pages = max_pages

    async def search(self, keywords: str | None) -> TransformResult:
        query = (keywords or "").strip()
        if not query:
            return TransformResult(200, {**_empty(), "error": "Keywords are required."})

        try:
            return await self._search(query)
        except Exception:  # noqa: BLE001
            logger.exception("Keyword search failed for %r", query)
            return TransformResult(500, {**_empty(), "error": "Failed to search articles."})

    async def _search(self, query: str) -> TransformResult:
        if self._market_data is None:
            logger.error("Keyword search requested but no Benzinga API key is configured")
            return TransformResult(500, {**_empty(), "error": "Failed to search articles."})

        candidates = await self.candidates(query)
        logger.info("Keyword search %r found %d candidate articles", query, len(candidates))
        if not candidates:
            return TransformResult(200, {**_empty(), "message": NO_ARTICLES_MESSAGE})

        selected = await self.rank(candidates, query)
        return TransformResult(
            200,
            {
                "articles": [article_payload(article) for article in selected],
                "totalFound": len(selected),
                "searchTerm": query,
            },
        )

    async def candidates(self, query: str) -> list[NewsArticle]:
        assert self._market_data is not None
        cutoff = datetime.now(timezone.utc) - timedelta(days=self._lookback_days)
        found: dict[str, NewsArticle] = {}

        def add(articles: Iterable[NewsArticle]) -> None:
            for article in articles:
                if article.url and article.url not in found:
                    found[article.url] = article

        for ticker in ticker_candidates(query):
            try:
                articles = await self._market_data.fetch_news(tickers=ticker, page_size=PAGE_SIZE)
            except MarketDataError:
                logger.warning("Ticker news lookup failed for %s", ticker, exc_info=True)
                continue
            add(article for article in articles if _is_recent(article, cutoff, require_date=True))

        if len(found) < MIN_TICKER_HITS:
            for page in range(self._max_pages):
                try:
                    articles = await self._market_data.fetch_news(page=page, page_size=PAGE_SIZE)
                except MarketDataError:
                    logger.warning("Recent news page %d failed", page, exc_info=True)
                    break
                if not articles:
                    break
                add(article for article in articles if _is_recent(article, cutoff) and article.mentions(query))
                if len(articles) < PAGE_SIZE:
                    break

        return [article for article in found.values() if _publishable(article)][:MAX_CANDIDATES]

    async def rank(self, articles: list[NewsArticle], query: str) -> list[NewsArticle]:
        """The model's pick of the most relevant articles, newest first.

        Small result sets are returned as found; when ranking is unavailable
        or its reply is unusable the first ``RESULT_LIMIT`` candidates stand in.
        """
        if len(articles) <= RESULT_LIMIT:
            return articles
        fallback = articles[:RESULT_LIMIT]
        if self._completion is None:
            return fallback

        messages = [
            {"role": "system", "content": prompts.KEYWORD_RANKING_SYSTEM},
            {
                "role": "user",
                "content": prompts.keyword_ranking_prompt(
                    query, [article.title for article in articles], RESULT_LIMIT
                ),
            },
        ]
        try:
            reply = await self._completion.complete_messages(messages, RANKING_PARAMS)
            picks = parse_json_payload(reply or "[]")
        except CompletionError:
            logger.exception("Relevance ranking failed for %r", query)
            return fallback
        except CompletionParseError:
            logger.warning("Relevance ranking reply was not JSON for %r", query)
            return fallback

        if not isinstance(picks, list):
            return fallback
        indexes = [
            pick
            for pick in picks
            if isinstance(pick, int) and not isinstance(pick, bool) and 1 <= pick <= len(articles)
        ]
        selected = [articles[index - 1] for index in dict.fromkeys(indexes)]
        if not selected:
            return fallback
        return _newest_first(selected)[:RESULT_LIMIT]
