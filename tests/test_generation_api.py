from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from conftest import FakeCompletionClient, FakeMarketData
from services.completion_client import CompletionError, GeneratedImage
from services.market_data import AnalystRating, MarketDataError


def test_adjust_headline_end_to_end(client, completion):
    headlines = [
        "Fed Slashes Rates In Stunning Policy Reversal",
        "Powell Pulls The Trigger As Markets Roar",
        "Rate Cut Shock Sends Wall Street Scrambling",
    ]
    completion.replies.append("```json\n" + json.dumps({"headlines": headlines}) + "\n```")

    response = client.post(
        "/api/adjust-headline",
        json={
            "headline": "Fed Cuts Rates",
            "tweak": "make it more dramatic",
            "articleText": "The Federal Reserve lowered its benchmark rate by 50 basis points.",
        },
    )

    assert response.status_code == 200
    assert response.json() == {"headlines": headlines}
    assert all(0 < len(item.split()) < 12 for item in response.json()["headlines"])
    assert "make it more dramatic" in completion.last_prompt
    assert completion.last_params.model == "gpt-4o"
    assert completion.last_params.temperature == 0.7


@pytest.mark.parametrize(
    ("path", "body", "field", "empty"),
    [
        ("/api/adjust-headline", {"headline": "Fed Cuts Rates"}, "headlines", []),
        ("/api/check-accuracy", {"articleText": "Body"}, "suggestions", []),
        ("/api/generate/headlines", {}, "headlines", []),
        ("/api/generate/no-colon-headlines", {"articleText": "   "}, "headlines", []),
        ("/api/generate/custom-headlines", {"articleText": 42}, "headlines", []),
        ("/api/generate/similar-headlines", {}, "similar", []),
        ("/api/generate/punchy-variants", {"headline": ""}, "variants", []),
        ("/api/generate/seo-headline", {}, "seoHeadline", ""),
        ("/api/generate/msn-headlines", {}, "level1", []),
        ("/api/generate/lead", {"style": "shorter"}, "lead", ""),
        ("/api/generate/headline-lead", {"articleText": "Body"}, "lead", ""),
        ("/api/generate/h2s", {}, "articleWithH2s", ""),
        ("/api/generate/direct-quotes", {}, "quotes", []),
        ("/api/generate/image-ideas", {}, "ideas", []),
        ("/api/generate/optimize-prompt", {}, "optimizedPrompt", ""),
        ("/api/generate/dalle-image", {"description": "A bull"}, "imageUrl", ""),
    ],
)
def test_missing_required_field_returns_empty_result(client, completion, path, body, field, empty):
    response = client.post(path, json=body)

    assert response.status_code == 200
    assert response.json()[field] == empty
    assert response.json()["error"].endswith("is required.")
    assert completion.calls == []


@pytest.mark.parametrize(
    ("path", "body", "field"),
    [
        ("/api/generate/headlines", {"articleText": "Body"}, "headlines"),
        ("/api/generate/similar-headlines", {"headline": "H"}, "similar"),
        ("/api/generate/punchy-variants", {"headline": "H"}, "variants"),
        ("/api/generate/direct-quotes", {"articleText": "Body"}, "quotes"),
        ("/api/generate/msn-headlines", {"articleText": "Body"}, "level3"),
        ("/api/check-accuracy", {"headline": "H", "articleText": "Body"}, "suggestions"),
    ],
)
def test_array_fields_survive_upstream_failure(client, completion, path, body, field):
    completion.error = CompletionError("upstream 503: overloaded")

    response = client.post(path, json=body)

    assert response.status_code == 500
    assert response.json()[field] == []
    assert "overloaded" not in response.text


def test_unparseable_reply_returns_502(client, completion):
    completion.replies.append("I could not find quotes.")

    response = client.post("/api/generate/direct-quotes", json={"articleText": 'He said "wow".'})

    assert response.status_code == 502
    assert response.json()["quotes"] == []


@pytest.mark.parametrize(
    "request_kwargs",
    [
        {"content": b""},
        {"json": []},
        {"content": b"not json"},
    ],
    ids=["empty", "array", "not-json"],
)
def test_malformed_body_keeps_response_shape(client, completion, request_kwargs):
    response = client.post(
        "/api/generate/headlines",
        headers={"Content-Type": "application/json"},
        **request_kwargs,
    )

    assert response.status_code == 500
    assert response.json() == {"headlines": [], "error": "Invalid request body."}
    assert completion.calls == []


@pytest.mark.parametrize(
    ("path", "empty"),
    [
        ("/api/generate/msn-headlines", {"level1": [], "level2": [], "level3": []}),
        ("/api/generate/seo-headline", {"seoHeadline": ""}),
        ("/api/generate/analyst-ratings", {"paragraph": "", "ratings": []}),
        ("/api/generate/headline-workshop", {"headlines": [], "keyNames": []}),
        ("/api/generate/keyword-search", {"articles": [], "totalFound": 0}),
    ],
)
def test_malformed_body_uses_each_endpoint_shape(client, path, empty):
    response = client.post(path, content=b"{broken", headers={"Content-Type": "application/json"})

    assert response.status_code == 500
    assert response.json() == {**empty, "error": "Invalid request body."}


def test_numbered_headlines_endpoint(client, completion):
    completion.replies.append("1. Tesla Faces New Rivals\n2) Fed Holds Steady\n\n3 Oil Slides Again")

    response = client.post("/api/generate/no-colon-headlines", json={"articleText": "Body"})

    assert response.status_code == 200
    assert response.json() == {
        "headlines": ["Tesla Faces New Rivals", "Fed Holds Steady", "Oil Slides Again"]
    }


def test_msn_headlines_endpoint(client, completion):
    completion.replies.append(
        "LEVEL 1 (MODERATE):\n1. A\n2. B\n3. C\n\nLEVEL 2 (STRONG):\n1. D\n2. E\n3. F\n\n"
        "LEVEL 3 (MAXIMUM):\n1. G\n2. H\n3. I"
    )

    response = client.post("/api/generate/msn-headlines", json={"articleText": "Body"})

    assert response.json() == {
        "level1": ["A", "B", "C"],
        "level2": ["D", "E", "F"],
        "level3": ["G", "H", "I"],
    }


def test_generation_without_api_key_returns_500(settings):
    client = TestClient(create_app(settings=settings))

    response = client.post("/api/generate/headlines", json={"articleText": "Body"})

    assert response.status_code == 500
    assert response.json() == {"headlines": [], "error": "Failed to generate headlines."}


def test_dalle_image_with_alt_text(client, completion):
    completion.image = GeneratedImage(url="https://images.example/1.png", revised_prompt="A bronze bull")
    completion.replies.append("Bronze bull statue on a cobblestone street.")

    response = client.post(
        "/api/generate/dalle-image",
        json={"prompt": "Bull on Wall Street", "description": "A bronze bull statue"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "imageUrl": "https://images.example/1.png",
        "altText": "Bronze bull statue on a cobblestone street.",
        "revisedPrompt": "A bronze bull",
    }
    _, kwargs = completion.image_calls[0]
    assert kwargs == {"model": "dall-e-3", "size": "1792x1024", "quality": "hd", "style": "natural"}


def test_dalle_image_alt_text_failure_falls_back_to_description(client, completion):
    completion.image = GeneratedImage(url="https://images.example/2.png")
    completion.error = CompletionError("rate limited")

    response = client.post(
        "/api/generate/dalle-image",
        json={"prompt": "Bull on Wall Street", "description": "A bronze bull statue"},
    )

    assert response.status_code == 200
    assert response.json()["altText"] == "A bronze bull statue"


def test_dalle_image_failure_returns_500(client, completion):
    completion.image = CompletionError("Image generation returned no image URL.")

    response = client.post("/api/generate/dalle-image", json={"prompt": "Bull"})

    assert response.status_code == 500
    assert response.json() == {
        "imageUrl": "",
        "altText": "",
        "revisedPrompt": "",
        "error": "Failed to generate image.",
    }


def test_alt_text_upload(client, completion):
    completion.replies.append("A line chart showing shares   climbing through the afternoon")

    response = client.post(
        "/api/alt-text/generate",
        files={"image": ("chart.png", b"\x89PNG fake bytes", "image/png")},
    )

    assert response.status_code == 200
    assert response.json() == {"altText": "A line chart showing shares climbing through the afternoon."}
    messages, params = completion.calls[0]
    image_part = messages[1]["content"][1]
    assert image_part["image_url"]["url"].startswith("data:image/png;base64,")
    assert params.model == "gpt-4o"


def test_alt_text_upload_failure_uses_default(client, completion):
    completion.error = CompletionError("vision unavailable")

    response = client.post(
        "/api/alt-text/generate",
        files={"image": ("photo.jpg", b"jpeg bytes", "image/jpeg")},
    )

    assert response.json() == {"altText": "Image content"}


def test_alt_text_without_file(client):
    response = client.post("/api/alt-text/generate", data={"note": "no image"})

    assert response.status_code == 200
    assert response.json()["altText"] == ""


def _ratings_client(settings, completion, market_data):
    return TestClient(
        create_app(settings=settings, completion_client=completion, market_data_client=market_data)
    )


def test_analyst_ratings_requires_ticker(client):
    response = client.post("/api/generate/analyst-ratings", json={"ticker": "  "})

    assert response.status_code == 400
    assert response.json() == {"paragraph": "", "ratings": [], "error": "Ticker is required."}


def test_analyst_ratings_get_without_ticker(client, market_data):
    response = client.get("/api/generate/analyst-ratings")

    assert response.status_code == 400
    assert response.json()["paragraph"] == ""
    assert response.json()["ratings"] == []
    assert market_data.tickers == []


def test_analyst_ratings_without_results_skips_model(settings, completion):
    market_data = FakeMarketData(ratings=[])
    client = _ratings_client(settings, completion, market_data)

    response = client.post("/api/generate/analyst-ratings", json={"ticker": "aapl"})

    assert response.status_code == 200
    assert response.json()["paragraph"] == "No recent analyst ratings found for AAPL."
    assert market_data.tickers == ["AAPL"]
    assert completion.calls == []


def test_analyst_ratings_feeds_formatted_lines_to_model(settings, completion):
    rating = AnalystRating.from_payload(
        {
            "ticker": "NVDA",
            "analyst": "Bernstein",
            "action_company": "Upgrades",
            "rating_current": "Outperform",
            "rating_prior": "Market Perform",
            "pt_current": "150",
            "pt_prior": "120",
            "date": "2025-07-14",
        }
    )
    completion.replies.append("Analysts have turned more bullish on NVDA.")
    client = _ratings_client(settings, completion, FakeMarketData(ratings=[rating]))

    response = client.get("/api/generate/analyst-ratings", params={"ticker": "nvda"})

    line = (
        "July 14: Bernstein rated NVDA Upgrades Outperform (prior Market Perform) "
        "and set a $150.00 target (prior $120.00)"
    )
    assert response.status_code == 200
    assert response.json() == {
        "paragraph": "Analysts have turned more bullish on NVDA.",
        "ratings": [line],
    }
    assert line in completion.last_prompt


def test_analyst_ratings_market_data_failure_hides_detail(settings, completion):
    market_data = FakeMarketData(error=MarketDataError("token=secret rejected"))
    client = _ratings_client(settings, completion, market_data)

    response = client.post("/api/generate/analyst-ratings", json={"ticker": "AAPL"})

    assert response.status_code == 500
    assert response.json() == {
        "paragraph": "",
        "ratings": [],
        "error": "Failed to fetch analyst ratings.",
    }


def test_health_reports_configured_clients(settings):
    client = TestClient(create_app(settings=settings, completion_client=FakeCompletionClient()))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "openai": True, "gemini": False, "benzinga": False}
    assert response.headers["X-Content-Type-Options"] == "nosniff"
