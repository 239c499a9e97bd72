from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from services.market_data import (
    AnalystRating,
    BenzingaClient,
    MarketDataError,
    format_rating,
    summarize_ratings,
)


def _rating(**overrides):
    payload = {
        "ticker": "AAPL",
        "analyst": "Morgan Stanley",
        "action_company": "Upgrades",
        "rating_current": "Overweight",
        "rating_prior": "Equal-Weight",
        "pt_current": "250",
        "pt_prior": "220.5",
        "date": "2025-06-03",
    }
    payload.update(overrides)
    return AnalystRating.from_payload(payload)


def _client(handler):
    return BenzingaClient(api_key="test-token", transport=httpx.MockTransport(handler))


def test_format_rating_includes_both_transitions():
    line = format_rating(_rating(), "AAPL")

    assert line == (
        "June 3: Morgan Stanley rated AAPL Upgrades Overweight (prior Equal-Weight) "
        "and set a $250.00 target (prior $220.50)"
    )


def test_format_rating_omits_unchanged_prior_values():
    rating = _rating(action_company="Maintains", rating_prior="Overweight", pt_prior="250.00")

    assert format_rating(rating, "AAPL") == (
        "June 3: Morgan Stanley rated AAPL Maintains Overweight and set a $250.00 target"
    )


def test_format_rating_without_price_target():
    rating = _rating(pt_current="", pt_prior="")

    assert format_rating(rating, "AAPL").endswith("Overweight (prior Equal-Weight)")


def test_summarize_ratings_sorts_newest_first_and_keeps_five():
    ratings = [_rating(analyst=f"Firm {day}", date=f"2025-05-{day:02d}") for day in range(1, 8)]

    lines = summarize_ratings(ratings, "AAPL").split("\n")

    assert len(lines) == 5
    assert lines[0].startswith("May 7: Firm 7")
    assert lines[-1].startswith("May 3: Firm 3")


def test_fetch_ratings_sends_ticker_and_lookback():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=[{"ticker": "AAPL", "analyst": "Citi", "date": "2025-06-01"}])

    ratings = asyncio.run(_client(handler).fetch_ratings("AAPL"))

    assert seen["token"] == "test-token"
    assert seen["parameters[tickers]"] == "AAPL"
    assert seen["parameters[range]"] == "6m"
    assert [rating.analyst for rating in ratings] == ["Citi"]


def test_fetch_ratings_accepts_ratings_object():
    body = {"ratings": [{"ticker": "MSFT", "analyst": "UBS"}, "junk"]}

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=json.dumps(body))

    ratings = asyncio.run(_client(handler).fetch_ratings("MSFT"))

    assert [rating.analyst for rating in ratings] == ["UBS"]


def test_fetch_ratings_treats_html_body_as_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    assert asyncio.run(_client(handler).fetch_ratings("AAPL")) == []


def test_fetch_ratings_raises_on_error_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="invalid token")

    with pytest.raises(MarketDataError):
        asyncio.run(_client(handler).fetch_ratings("AAPL"))


def test_fetch_ratings_raises_on_invalid_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="{not json")

    with pytest.raises(MarketDataError):
        asyncio.run(_client(handler).fetch_ratings("AAPL"))


def test_fetch_ratings_wraps_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(MarketDataError) as excinfo:
        asyncio.run(_client(handler).fetch_ratings("AAPL"))

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_fetch_news_by_ticker_sends_full_output_params():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen.update(request.url.params)
        return httpx.Response(
            200,
            json=[
                {
                    "id": 101,
                    "title": "Palantir Lands Army Contract",
                    "url": "https://www.benzinga.com/news/101",
                    "created": "Wed, 17 Sep 2025 14:03:00 -0400",
                    "channels": [{"name": "News"}],
                    "stocks": [{"name": "PLTR"}],
                },
                "junk",
            ],
        )

    articles = asyncio.run(_client(handler).fetch_news(tickers="PLTR"))

    assert seen["path"] == "/api/v2/news"
    assert seen["token"] == "test-token"
    assert seen["tickers"] == "PLTR"
    assert seen["displayOutput"] == "full"
    assert "page" not in seen
    assert len(articles) == 1
    assert articles[0].id == "101"
    assert articles[0].channels == ("News",)
    assert articles[0].created_at.year == 2025


def test_fetch_news_pages_without_ticker():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=[])

    assert asyncio.run(_client(handler).fetch_news(page=3)) == []
    assert seen["page"] == "3"
    assert seen["pageSize"] == "100"
    assert "tickers" not in seen
