from __future__ import annotations

import asyncio

from conftest import FakeCompletionClient
from services import transforms
from services.completion_client import CompletionError
from services.transforms import TextTransformService, quote_in_article


def _run(client, transform, fields):
    return asyncio.run(TextTransformService(client).run(transform, fields))


def test_missing_field_returns_empty_shape_without_calling_model():
    client = FakeCompletionClient(replies=["unused"])

    result = _run(client, transforms.ADJUST_HEADLINE, {"headline": "Fed Cuts Rates", "tweak": "  "})

    assert result.status_code == 200
    assert result.body == {"headlines": [], "error": "Tweak is required."}
    assert client.calls == []


def test_numbered_list_transform_truncates_to_cap():
    reply = "\n".join(f"{n}. Headline {n}" for n in range(1, 10))
    client = FakeCompletionClient(replies=[reply])

    result = _run(client, transforms.HEADLINES, {"article_text": "Stocks fell."})

    assert result.status_code == 200
    assert result.body == {"headlines": [f"Headline {n}" for n in range(1, 8)]}
    assert client.last_params.model == "gpt-4o-mini"
    assert client.last_params.max_tokens == 350


def test_adjust_headline_coerces_missing_array():
    client = FakeCompletionClient(replies=['{"headline": "not a list"}'])

    result = _run(
        client,
        transforms.ADJUST_HEADLINE,
        {"headline": "Fed Cuts Rates", "tweak": "shorter", "article_text": "The Fed cut rates."},
    )

    assert result.status_code == 200
    assert result.body == {"headlines": []}


def test_unparseable_json_reply_returns_502_with_empty_shape():
    client = FakeCompletionClient(replies=["Sure! Here are three headlines."])

    result = _run(
        client,
        transforms.ADJUST_HEADLINE,
        {"headline": "Fed Cuts Rates", "tweak": "shorter", "article_text": "The Fed cut rates."},
    )

    assert result.status_code == 502
    assert result.body["headlines"] == []


def test_upstream_failure_returns_500_with_generic_message():
    client = FakeCompletionClient(error=CompletionError("connection reset by peer"))

    result = _run(client, transforms.SIMILAR_HEADLINES, {"headline": "Apple Hits Record"})

    assert result.status_code == 500
    assert result.body == {"similar": [], "error": "Failed to generate similar headlines."}


def test_unexpected_exception_keeps_shape():
    client = FakeCompletionClient(error=KeyError("choices"))

    result = _run(client, transforms.LEAD, {"article_text": "Oil prices jumped."})

    assert result.status_code == 500
    assert result.body == {"lead": "", "error": "Failed to generate lead paragraph."}


def test_missing_client_returns_500():
    result = _run(None, transforms.H2S, {"article_text": "Body"})

    assert result.status_code == 500
    assert result.body["articleWithH2s"] == ""


def test_check_accuracy_requires_json_object():
    client = FakeCompletionClient(replies=['["just", "a", "list"]'])

    result = _run(client, transforms.CHECK_ACCURACY, {"headline": "H", "article_text": "A"})

    assert result.status_code == 502
    assert result.body["review"] == ""
    assert result.body["suggestions"] == []


def test_check_accuracy_parses_review():
    client = FakeCompletionClient(
        replies=['{"review": " Clear and engaging. ", "suggestions": ["Alt one", "Alt two"]}']
    )

    result = _run(client, transforms.CHECK_ACCURACY, {"headline": "H", "article_text": "A"})

    assert result.body == {"review": "Clear and engaging.", "suggestions": ["Alt one", "Alt two"]}


def test_lead_style_selects_template_and_defaults_to_normal():
    client = FakeCompletionClient(replies=["Short lead.", "Normal lead."])

    _run(client, transforms.LEAD, {"article_text": "Body", "style": "Shorter"})
    assert "under 20 words" in client.last_prompt

    _run(client, transforms.LEAD, {"article_text": "Body", "style": "sideways"})
    assert "broader industry shift" in client.last_prompt


def test_direct_quotes_are_verified_and_padded():
    article = 'The CEO called it "a game changer" and added "we are not done yet".'
    client = FakeCompletionClient(replies=['["A game changer", "invented quote"]'])

    result = _run(client, transforms.DIRECT_QUOTES, {"article_text": article})

    assert result.status_code == 200
    assert result.body == {"quotes": ["A game changer", "", ""]}
    assert client.last_params.temperature == 0.1


def test_direct_quotes_truncates_to_three():
    article = '"one two" "three four" "five six" "seven eight"'
    client = FakeCompletionClient(replies=['["one two", "three four", "five six", "seven eight"]'])

    result = _run(client, transforms.DIRECT_QUOTES, {"article_text": article})

    assert result.body["quotes"] == ["one two", "three four", "five six"]


def test_quote_in_article_accepts_curly_quotes():
    assert quote_in_article("record quarter", "She called it a “record quarter” on the call.")
    assert not quote_in_article("record quarter", "She called it a record quarter.")


def test_image_ideas_keep_only_complete_entries():
    reply = (
        '{"ideas": ['
        '{"title": "Chip Plant", "description": "Clean room", "prompt": "Ultra-realistic. No text or logos."},'
        '{"title": "Missing prompt", "description": "Nope"}'
        "]}"
    )
    client = FakeCompletionClient(replies=[reply])

    result = _run(client, transforms.IMAGE_IDEAS, {"article_text": "Intel opens a fab."})

    assert result.status_code == 200
    assert result.body == {
        "ideas": [
            {
                "title": "Chip Plant",
                "description": "Clean room",
                "prompt": "Ultra-realistic. No text or logos.",
            }
        ]
    }


def test_image_ideas_without_complete_entries_is_a_parse_failure():
    client = FakeCompletionClient(replies=['{"ideas": []}'])

    result = _run(client, transforms.IMAGE_IDEAS, {"article_text": "Intel opens a fab."})

    assert result.status_code == 502
    assert result.body["ideas"] == []


def test_optimize_prompt_degrades_to_original_prompt():
    client = FakeCompletionClient(error=CompletionError("timeout"))

    result = _run(client, transforms.OPTIMIZE_PROMPT, {"prompt": "Bull and bear on Wall Street"})

    assert result.status_code == 200
    assert result.body == {"optimizedPrompt": "Bull and bear on Wall Street"}


def test_optimize_prompt_empty_reply_keeps_original_prompt():
    client = FakeCompletionClient(replies=[""])

    result = _run(client, transforms.OPTIMIZE_PROMPT, {"prompt": "Futuristic city"})

    assert result.body == {"optimizedPrompt": "Futuristic city"}


def test_custom_headline_wraps_single_reply():
    client = FakeCompletionClient(replies=["  AI Bubble Is More Unhinged Than Dot-Com  "])

    result = _run(client, transforms.CUSTOM_HEADLINES, {"article_text": "Body"})

    assert result.body == {"headlines": ["AI Bubble Is More Unhinged Than Dot-Com"]}


def test_seo_headline_takes_first_line():
    client = FakeCompletionClient(replies=['"Apple Stock Surges On Earnings"\nSecond option'])

    result = _run(client, transforms.SEO_HEADLINE, {"headline": "Apple beats"})

    assert result.body == {"seoHeadline": "Apple Stock Surges On Earnings"}


def test_h2s_normalizes_headings():
    client = FakeCompletionClient(replies=["Lead paragraph.\n\n**big MOVE ahead**\n\nMore text."])

    result = _run(client, transforms.H2S, {"article_text": "Lead paragraph.\n\nMore text."})

    assert result.body == {"articleWithH2s": "Lead paragraph.\n\nBig Move Ahead\n\nMore text."}
