from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from services import prompts
from services.completion_client import CompletionClient, CompletionError, ModelParams
from services.text_processing import (
    CompletionParseError,
    normalize_headings,
    pad_items,
    parse_json_payload,
    parse_leveled_list,
    parse_numbered_list,
    string_items,
)

logger = logging.getLogger(__name__)

Fields = Mapping[str, str]
PromptBuilder = Callable[[Fields], str]
ReplyParser = Callable[[str, Fields], dict[str, Any]]

FIELD_LABELS = {
    "article_text": "Article text",
    "headline": "Headline",
    "tweak": "Tweak",
    "prompt": "Prompt",
    "ticker": "Ticker",
    "quote": "Quote",
    "selected_headline": "Selected headline",
    "enhancement_type": "Enhancement type",
    "keywords": "Keywords",
}


@dataclass(frozen=True)
class TransformResult:
    status_code: int
    body: dict[str, Any]


@dataclass(frozen=True)
class TextTransform:
    """One LLM-backed endpoint: which fields it needs, how it prompts, how it parses."""

    name: str
    required: tuple[str, ...]
    empty: Callable[[], dict[str, Any]]
    build_prompt: PromptBuilder
    params: ModelParams
    parse: ReplyParser
    failure_message: str
    # When set, an upstream failure answers 200 with this body instead of 500.
    degrade: Callable[[Fields], dict[str, Any]] | None = field(default=None)


def missing_field(transform: TextTransform, fields: Mapping[str, Any]) -> str | None:
    for name in transform.required:
        value = fields.get(name)
        if not isinstance(value, str) or not value.strip():
            return name
    return None


class TextTransformService:
    """Validate, prompt, call the model once and reshape the reply."""

    def __init__(self, client: CompletionClient | None) -> None:
        self._client = client

    async def run(self, transform: TextTransform, fields: Mapping[str, Any]) -> TransformResult:
        missing = missing_field(transform, fields)
        if missing is not None:
            label = FIELD_LABELS.get(missing, missing)
            return TransformResult(200, {**transform.empty(), "error": f"{label} is required."})

        values = {
            name: value.strip()
            for name, value in fields.items()
            if isinstance(value, str) and value.strip()
        }

        if self._client is None:
            logger.error("%s requested but no OpenAI API key is configured", transform.name)
            return self._failed(transform, values)

        try:
            text = await self._client.complete(transform.build_prompt(values), transform.params)
        except CompletionError:
            logger.exception("%s generation request failed", transform.name)
            return self._failed(transform, values)
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected error in %s", transform.name)
            return self._failed(transform, values)

        try:
            payload = transform.parse(text, values)
        except CompletionParseError as exc:
            logger.warning("%s reply could not be parsed (%s); raw reply: %r", transform.name, exc, text)
            return TransformResult(502, {**transform.empty(), "error": transform.failure_message})
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected error parsing %s reply; raw reply: %r", transform.name, text)
            return self._failed(transform, values)

        return TransformResult(200, {**transform.empty(), **payload})

    @staticmethod
    def _failed(transform: TextTransform, values: Fields) -> TransformResult:
        if transform.degrade is not None:
            return TransformResult(200, transform.degrade(values))
        return TransformResult(500, {**transform.empty(), "error": transform.failure_message})


def _empty_list(*names: str) -> Callable[[], dict[str, Any]]:
    return lambda: {name: [] for name in names}


def _empty_text(name: str) -> Callable[[], dict[str, Any]]:
    return lambda: {name: ""}


def _numbered(output: str, max_items: int) -> ReplyParser:
    return lambda text, _fields: {output: parse_numbered_list(text, max_items)}


def _passthrough(output: str) -> ReplyParser:
    return lambda text, _fields: {output: text.strip()}


def _parse_adjusted_headlines(text: str, _fields: Fields) -> dict[str, Any]:
    payload = parse_json_payload(text)
    headlines = payload.get("headlines") if isinstance(payload, dict) else None
    return {"headlines": string_items(headlines)[:3]}


def _parse_review(text: str, _fields: Fields) -> dict[str, Any]:
    payload = parse_json_payload(text)
    if not isinstance(payload, dict):
        raise CompletionParseError("Review reply is not a JSON object.")
    review = payload.get("review")
    return {
        "review": review.strip() if isinstance(review, str) else "",
        "suggestions": string_items(payload.get("suggestions")),
    }


def _parse_custom_headline(text: str, _fields: Fields) -> dict[str, Any]:
    headline = text.strip()
    return {"headlines": [headline] if headline else []}


def _parse_seo_headline(text: str, _fields: Fields) -> dict[str, Any]:
    lines = [line.strip().strip('"') for line in text.splitlines() if line.strip()]
    return {"seoHeadline": lines[0] if lines else ""}


def _parse_msn_headlines(text: str, _fields: Fields) -> dict[str, Any]:
    level1, level2, level3 = parse_leveled_list(text, levels=3, per_level=3)
    return {"level1": level1, "level2": level2, "level3": level3}


def _parse_h2s(text: str, _fields: Fields) -> dict[str, Any]:
    return {"articleWithH2s": normalize_headings(text.strip())}


def quote_in_article(quote: str, article_text: str) -> bool:
    bare = quote.strip().strip("\"“”")
    if not bare:
        return False
    pattern = "[\"“]" + re.escape(bare) + "[\"”]"
    return re.search(pattern, article_text, re.IGNORECASE) is not None


def _parse_direct_quotes(text: str, fields: Fields) -> dict[str, Any]:
    payload = parse_json_payload(text)
    if not isinstance(payload, list):
        raise CompletionParseError("Quotes reply is not a JSON array.")
    article_text = fields.get("article_text", "")
    quotes = [quote for quote in string_items(payload) if quote_in_article(quote, article_text)]
    return {"quotes": pad_items(quotes, 3)}


def _parse_image_ideas(text: str, _fields: Fields) -> dict[str, Any]:
    payload = parse_json_payload(text)
    ideas = payload.get("ideas") if isinstance(payload, dict) else None
    if not isinstance(ideas, list):
        raise CompletionParseError("Image ideas reply has no ideas array.")

    complete = []
    for idea in ideas:
        if not isinstance(idea, dict):
            continue
        entry = {key: idea.get(key) for key in ("title", "description", "prompt")}
        if all(isinstance(value, str) and value.strip() for value in entry.values()):
            complete.append({key: value.strip() for key, value in entry.items()})

    if not complete:
        raise CompletionParseError("Image ideas reply contained no complete ideas.")
    return {"ideas": complete[:3]}


def _parse_optimized_prompt(text: str, fields: Fields) -> dict[str, Any]:
    return {"optimizedPrompt": text.strip() or fields["prompt"]}


GPT_4O = "gpt-4o"
GPT_4O_MINI = "gpt-4o-mini"

ADJUST_HEADLINE = TextTransform(
    name="adjust-headline",
    required=("headline", "tweak", "article_text"),
    empty=_empty_list("headlines"),
    build_prompt=lambda f: prompts.adjust_headline_prompt(f["headline"], f["tweak"], f["article_text"]),
    params=ModelParams(GPT_4O, 700, 0.7),
    parse=_parse_adjusted_headlines,
    failure_message="Failed to adjust headline.",
)

CHECK_ACCURACY = TextTransform(
    name="check-accuracy",
    required=("headline", "article_text"),
    empty=lambda: {"review": "", "suggestions": []},
    build_prompt=lambda f: prompts.check_accuracy_prompt(f["headline"], f["article_text"]),
    params=ModelParams(GPT_4O_MINI, 400, 0.7),
    parse=_parse_review,
    failure_message="Failed to review headline context.",
)

HEADLINES = TextTransform(
    name="headlines",
    required=("article_text",),
    empty=_empty_list("headlines"),
    build_prompt=lambda f: prompts.headlines_prompt(f["article_text"]),
    params=ModelParams(GPT_4O_MINI, 350),
    parse=_numbered("headlines", 7),
    failure_message="Failed to generate headlines.",
)

NO_COLON_HEADLINES = TextTransform(
    name="no-colon-headlines",
    required=("article_text",),
    empty=_empty_list("headlines"),
    build_prompt=lambda f: prompts.no_colon_headlines_prompt(f["article_text"]),
    params=ModelParams(GPT_4O_MINI, 350),
    parse=_numbered("headlines", 3),
    failure_message="Failed to generate no colon headlines.",
)

CUSTOM_HEADLINES = TextTransform(
    name="custom-headlines",
    required=("article_text",),
    empty=_empty_list("headlines"),
    build_prompt=lambda f: prompts.custom_headline_prompt(f["article_text"]),
    params=ModelParams(GPT_4O, 100, 0.8),
    parse=_parse_custom_headline,
    failure_message="Failed to generate custom headlines.",
)

SIMILAR_HEADLINES = TextTransform(
    name="similar-headlines",
    required=("headline",),
    empty=_empty_list("similar"),
    build_prompt=lambda f: prompts.similar_headlines_prompt(f["headline"]),
    params=ModelParams(GPT_4O_MINI, 150),
    parse=_numbered("similar", 3),
    failure_message="Failed to generate similar headlines.",
)

PUNCHY_VARIANTS = TextTransform(
    name="punchy-variants",
    required=("headline",),
    empty=_empty_list("variants"),
    build_prompt=lambda f: prompts.punchy_variants_prompt(f["headline"]),
    params=ModelParams(GPT_4O_MINI, 200, 0.9),
    parse=_numbered("variants", 3),
    failure_message="Failed to generate punchy variants.",
)

SEO_HEADLINE = TextTransform(
    name="seo-headline",
    required=("headline",),
    empty=_empty_text("seoHeadline"),
    build_prompt=lambda f: prompts.seo_headline_prompt(f["headline"]),
    params=ModelParams(GPT_4O_MINI, 30),
    parse=_parse_seo_headline,
    failure_message="Failed to generate SEO headline.",
)

MSN_HEADLINES = TextTransform(
    name="msn-headlines",
    required=("article_text",),
    empty=_empty_list("level1", "level2", "level3"),
    build_prompt=lambda f: prompts.msn_headlines_prompt(f["article_text"]),
    params=ModelParams(GPT_4O, 1200, 0.8),
    parse=_parse_msn_headlines,
    failure_message="Failed to generate MSN headlines.",
)

LEAD = TextTransform(
    name="lead",
    required=("article_text",),
    empty=_empty_text("lead"),
    build_prompt=lambda f: prompts.lead_prompt(f["article_text"], f.get("style")),
    params=ModelParams(GPT_4O_MINI, 300, 0.7),
    parse=_passthrough("lead"),
    failure_message="Failed to generate lead paragraph.",
)

HEADLINE_LEAD = TextTransform(
    name="headline-lead",
    required=("article_text", "headline"),
    empty=_empty_text("lead"),
    build_prompt=lambda f: prompts.headline_lead_prompt(f["headline"], f["article_text"]),
    params=ModelParams(GPT_4O, 700, 0.7),
    parse=_passthrough("lead"),
    failure_message="Failed to generate headline lead.",
)

H2S = TextTransform(
    name="h2s",
    required=("article_text",),
    empty=_empty_text("articleWithH2s"),
    build_prompt=lambda f: prompts.h2_prompt(f["article_text"]),
    params=ModelParams(GPT_4O_MINI, 1000, 0.7),
    parse=_parse_h2s,
    failure_message="Failed to generate H2 headings.",
)

DIRECT_QUOTES = TextTransform(
    name="direct-quotes",
    required=("article_text",),
    empty=_empty_list("quotes"),
    build_prompt=lambda f: prompts.direct_quotes_prompt(f["article_text"]),
    params=ModelParams(GPT_4O_MINI, 150, 0.1),
    parse=_parse_direct_quotes,
    failure_message="Failed to extract direct quotes.",
)

IMAGE_IDEAS = TextTransform(
    name="image-ideas",
    required=("article_text",),
    empty=_empty_list("ideas"),
    build_prompt=lambda f: prompts.image_ideas_prompt(f["article_text"]),
    params=ModelParams(GPT_4O, 1500, 0.8),
    parse=_parse_image_ideas,
    failure_message="Failed to generate image ideas.",
)

OPTIMIZE_PROMPT = TextTransform(
    name="optimize-prompt",
    required=("prompt",),
    empty=_empty_text("optimizedPrompt"),
    build_prompt=lambda f: prompts.optimize_prompt_prompt(f["prompt"]),
    params=ModelParams(GPT_4O, 250, 0.7),
    parse=_parse_optimized_prompt,
    failure_message="Failed to optimize prompt.",
    degrade=lambda f: {"optimizedPrompt": f["prompt"]},
)
