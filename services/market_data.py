from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class MarketDataError(RuntimeError):
    """Raised when Benzinga data cannot be fetched or decoded."""


def _parse_price(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric price target: %r", value)
        return None


def _parse_date(value: Any) -> date | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        logger.debug("Unable to parse rating date: %s", value)
        return None


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


@dataclass(frozen=True)
class AnalystRating:
    ticker: str
    analyst: str
    action: str
    rating_current: str
    rating_prior: str
    pt_current: float | None
    pt_prior: float | None
    rated_on: date | None
    raw_date: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> AnalystRating:
        return cls(
            ticker=_text(payload.get("ticker")),
            analyst=_text(payload.get("analyst")),
            action=_text(payload.get("action_company")),
            rating_current=_text(payload.get("rating_current")),
            rating_prior=_text(payload.get("rating_prior")),
            pt_current=_parse_price(payload.get("pt_current")),
            pt_prior=_parse_price(payload.get("pt_prior")),
            rated_on=_parse_date(payload.get("date")),
            raw_date=_text(payload.get("date")),
        )


def format_rating_date(rating: AnalystRating) -> str:
    if rating.rated_on is None:
        return rating.raw_date
    return f"{rating.rated_on:%B} {rating.rated_on.day}"


def format_rating(rating: AnalystRating, ticker: str) -> str:
    line = (
        f"{format_rating_date(rating)}: {rating.analyst} rated {ticker} "
        f"{rating.action} {rating.rating_current}"
    )
    if rating.rating_prior and rating.rating_prior != rating.rating_current:
        line += f" (prior {rating.rating_prior})"
    if rating.pt_current is not None:
        line += f" and set a ${rating.pt_current:.2f} target"
        if rating.pt_prior is not None and rating.pt_prior != rating.pt_current:
            line += f" (prior ${rating.pt_prior:.2f})"
    return line


def summarize_ratings(ratings: list[AnalystRating], ticker: str, limit: int = 5) -> str:
    """Newest ``limit`` ratings, one formatted line each."""
    newest = sorted(ratings, key=lambda rating: rating.rated_on or date.min, reverse=True)
    return "\n".join(format_rating(rating, ticker) for rating in newest[:limit])


def _parse_created(value: str) -> datetime | None:
    if not value:
        return None
    try:
        created = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        try:
            created = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unable to parse article timestamp: %s", value)
            return None
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created


def _named(value: Any) -> str:
    if isinstance(value, dict):
        return _text(value.get("name"))
    return _text(value)


@dataclass(frozen=True)
class NewsArticle:
    id: str
    title: str
    url: str
    created: str
    teaser: str = ""
    body: str = ""
    author: str = ""
    channels: tuple[str, ...] = ()
    stocks: tuple[Any, ...] = ()
    tags: tuple[Any, ...] = ()

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> NewsArticle:
        channels = payload.get("channels")
        stocks = payload.get("stocks")
        tags = payload.get("tags")
        return cls(
            id=str(payload.get("id") or ""),
            title=_text(payload.get("title")) or _text(payload.get("headline")),
            url=_text(payload.get("url")),
            created=_text(payload.get("created")),
            teaser=_text(payload.get("teaser")),
            body=_text(payload.get("body")),
            author=_text(payload.get("author")),
            channels=tuple(_named(item) for item in channels) if isinstance(channels, list) else (),
            stocks=tuple(stocks) if isinstance(stocks, list) else (),
            tags=tuple(tags) if isinstance(tags, list) else (),
        )

    @property
    def created_at(self) -> datetime | None:
        return _parse_created(self.created)

    def mentions(self, keywords: str) -> bool:
        needle = keywords.lower()
        return any(needle in text.lower() for text in (self.title, self.teaser, self.body))


class BenzingaClient:
    """Fetch analyst rating actions and news stories from the Benzinga APIs."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.benzinga.com/api/v2.1/calendar/ratings",
        timeout: float = 10.0,
        lookback: str = "6m",
        transport: httpx.AsyncBaseTransport | None = None,
        news_url: str = "https://api.benzinga.com/api/v2/news",
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._news_url = news_url
        self._timeout = timeout
        self._lookback = lookback
        self._transport = transport

    async def _get(self, url: str, params: dict[str, Any], subject: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(
                    url,
                    params={"token": self._api_key, **params},
                    headers={"accept": "application/json"},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Benzinga returned %s for %s: %s",
                exc.response.status_code,
                subject,
                exc.response.text[:500],
            )
            raise MarketDataError(f"Benzinga request for {subject} was rejected.") from exc
        except httpx.HTTPError as exc:
            raise MarketDataError(f"Benzinga request for {subject} failed.") from exc
        return response

    @staticmethod
    def _records(response: httpx.Response, subject: str, key: str) -> list[dict[str, Any]]:
        body = response.text.strip()
        if not body or body.startswith("<"):
            logger.info("Benzinga returned no JSON body for %s", subject)
            return []

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Invalid JSON from Benzinga for %s: %s", subject, body[:500])
            raise MarketDataError(f"Invalid Benzinga payload for {subject}.") from exc

        if isinstance(payload, dict):
            payload = payload.get(key) or []
        if not isinstance(payload, list):
            return []
        return [item for item in payload if isinstance(item, dict)]

    async def fetch_ratings(self, ticker: str) -> list[AnalystRating]:
        params = {
            "parameters[tickers]": ticker,
            "parameters[range]": self._lookback,
        }
        response = await self._get(self._base_url, params, ticker)
        return [AnalystRating.from_payload(item) for item in self._records(response, ticker, "ratings")]

    async def fetch_news(
        self,
        *,
        tickers: str | None = None,
        page: int = 0,
        page_size: int = 100,
    ) -> list[NewsArticle]:
        params: dict[str, Any] = {"pageSize": page_size, "displayOutput": "full"}
        if tickers:
            params["tickers"] = tickers
        else:
            params["page"] = page
        subject = f"news ({tickers or f'page {page}'})"
        response = await self._get(self._news_url, params, subject)
        return [NewsArticle.from_payload(item) for item in self._records(response, subject, "articles")]
