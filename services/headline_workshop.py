"""Multi-step headline workshop.

An editor first asks for three hooky headlines, then iterates: weave a quote
into a new headline, enhance a chosen headline in a given direction, or ask
for a fresh single headline in that direction. Every step is an ordinary
text transform; the extra work here is picking the names a headline should
lead with and tidying the quote marks the model returns.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Mapping
from typing import Any

from services import prompts
from services.completion_client import ModelParams
from services.text_processing import strip_list_marker
from services.transforms import GPT_4O, Fields, TextTransform, TransformResult, missing_field

MAX_KEY_NAMES = 5

# People whose names are swapped out of headline openings.
ANALYST_NAMES = (
    "Oliver Rakau",
    "Florence Schmit",
    "Jensen Huang",
    "Lisa Su",
    "Cathie Wood",
    "Chamath Palihapitiya",
    "Elon Musk",
    "Mark Zuckerberg",
    "Tim Cook",
    "Satya Nadella",
    "Sundar Pichai",
)
PROMINENT_FIGURES = (
    "Donald Trump",
    "Joe Biden",
    "Barack Obama",
    "Hillary Clinton",
    "Mike Pence",
    "Kamala Harris",
    "Nancy Pelosi",
    "Mitch McConnell",
    "Chuck Schumer",
    "Jerome Powell",
    "Janet Yellen",
    "Larry Summers",
    "Jamie Dimon",
)
EXCLUDED_TERMS = frozenset(
    {
        "Also Read",
        "Also",
        "Read",
        "Atse",
        "ATSE",
        "1KOMMA5",
        "KOMMA5",
        "White House",
        "Congress",
        "Senate",
        "House",
        "Government",
        "Administration",
    }
)

_NAME = r"[A-Z][a-z]+ [A-Z][a-z]+"
_SPEAKER_VERBS = ("said", "expressed", "noted", "called", "offered", "assessed")

_SUBJECT_PATTERNS = (
    re.compile(rf"\b({_NAME})\s+(?:stated|announced|reported|said|confirmed)\b"),
    re.compile(rf"\b({_NAME})\s+(?:Inc|Corp|Company|Ltd|LLC|Group|Holdings)\b"),
    re.compile(r"\b([A-Z][a-z]+)\s+(?:stated|announced|reported|said|confirmed)\b"),
)
_ENTITY_PATTERNS = (
    re.compile(r"\b[A-Z]{2,5}\b"),
    re.compile(r"\b[A-Z][a-z]+ (?:Inc|Corp|Company|Ltd|LLC|Group|Holdings)\b"),
    re.compile(rf"\b{_NAME}\b"),
)
_TITLES = r"President|CEO|Director|Chairman|Founder|Communications Director|White House"
_TITLED_PATTERNS = (
    re.compile(rf"\b(?:former |ex-)?(?:{_TITLES})\s+({_NAME})\b"),
    re.compile(rf"\b({_NAME}),?\s+(?:former |ex-)?(?:{_TITLES})\b"),
)
_QUOTED_SPEAKER_PATTERNS = (
    re.compile(rf'"[^"]+"\s+({_NAME})\s+said'),
    re.compile(rf"({_NAME})\s+said\s+\"[^\"]+\""),
    *(re.compile(rf"({_NAME})\s+{verb}\s+[^,]+") for verb in _SPEAKER_VERBS[1:]),
)
_DIRECT_QUOTE = re.compile(rf'"[^"]+"\s+({_NAME})')
_FIRST_SPEAKER = re.compile(rf"({_NAME})\s+(?:offered|expressed|assessed|said|noted)")
_SPEAKER = re.compile(rf"({_NAME})\s+(?:{'|'.join(_SPEAKER_VERBS)})")


def extract_key_names(article_text: str) -> list[str]:
    """Up to five names or entities a headline should lead with, most important first."""
    counts: Counter[str] = Counter()

    for pattern in _SUBJECT_PATTERNS:
        for match in pattern.finditer(article_text):
            name = match.group(1)
            if 2 < len(name) < 50:
                # Subjects of a reporting verb carry a fixed bonus.
                counts[name] += 21

    for pattern in _ENTITY_PATTERNS:
        for match in pattern.finditer(article_text):
            if 2 < len(match.group(0)) < 50:
                counts[match.group(0)] += 1

    for pattern in (*_TITLED_PATTERNS, *_QUOTED_SPEAKER_PATTERNS):
        for match in pattern.finditer(article_text):
            name = match.group(1)
            if 5 < len(name) < 50:
                counts[name] += 1

    for match in _SPEAKER.finditer(article_text):
        if match.group(1) in counts:
            counts[match.group(1)] += 5
    for match in _DIRECT_QUOTE.finditer(article_text):
        if match.group(1) in counts:
            counts[match.group(1)] += 10
    for figure in PROMINENT_FIGURES:
        if figure in counts:
            counts[figure] += 50

    for name in (*ANALYST_NAMES, *EXCLUDED_TERMS):
        counts.pop(name, None)

    ranked = [name for name, _ in counts.most_common()]

    first_paragraph = article_text.split("\n", 1)[0] or article_text[:200]
    first_speaker = _FIRST_SPEAKER.search(first_paragraph)
    if first_speaker and first_speaker.group(1) in counts:
        lead = first_speaker.group(1)
        return [lead, *(name for name in ranked if name != lead)][:MAX_KEY_NAMES]

    return ranked[:MAX_KEY_NAMES]


def replace_analyst_names(headline: str) -> str:
    for name in ANALYST_NAMES:
        headline = re.sub(rf"^{re.escape(name)}(?::\s*|\s+)", "Analyst ", headline, flags=re.IGNORECASE)
    return headline


_APOSTROPHE = re.compile(r"(?<=\w)'(?=\w)")


def fix_headline_quotes(headline: str) -> str:
    """Single quotes around quoted phrases, and a closing mark for a dangling one."""
    cleaned = headline.replace("**", "").strip()
    cleaned = cleaned.strip('"“”').strip()
    cleaned = re.sub(r"[‘’]", "'", cleaned)
    cleaned = re.sub(r'["“]([^"“”]+)["”]', r"'\1'", cleaned)
    cleaned = re.sub(r'["“”]', "'", cleaned)
    quote_marks = cleaned.count("'") - len(_APOSTROPHE.findall(cleaned))
    if quote_marks % 2 == 1 and not cleaned.endswith("'"):
        cleaned += "'"
    return cleaned


def _empty() -> dict[str, Any]:
    return {"headlines": [], "keyNames": []}


def _empty_enhancement() -> dict[str, Any]:
    return {"enhancedHeadline": "", "originalHeadline": "", "enhancementType": "", "keyNames": []}


def _headlines(max_items: int):
    def parse(text: str, fields: Fields) -> dict[str, Any]:
        lines = (strip_list_marker(line).strip() for line in text.splitlines())
        headlines = [replace_analyst_names(line) for line in lines if line][:max_items]
        return {"headlines": headlines, "keyNames": extract_key_names(fields["article_text"])}

    return parse


def _parse_enhancement(text: str, fields: Fields) -> dict[str, Any]:
    original = fields["selected_headline"]
    return {
        "enhancedHeadline": fix_headline_quotes(text.strip() or original),
        "originalHeadline": original,
        "enhancementType": fields.get("enhancement_type", ""),
        "keyNames": extract_key_names(fields["article_text"]),
    }


def _instruction(fields: Fields, *, new_headline: bool) -> str:
    return prompts.enhancement_instruction(
        fields.get("enhancement_type"),
        fields.get("specific_quote"),
        fields.get("custom_enhancement"),
        new_headline=new_headline,
    )


GENERATE_INITIAL = TextTransform(
    name="headline-workshop:generate_initial",
    required=("article_text",),
    empty=_empty,
    build_prompt=lambda f: prompts.workshop_initial_prompt(
        f["article_text"], extract_key_names(f["article_text"])
    ),
    params=ModelParams(GPT_4O, 1200, 0.7, top_p=0.9, frequency_penalty=0.2, presence_penalty=0.2),
    parse=_headlines(3),
    failure_message="Failed to process headline workshop request.",
)

INCORPORATE_QUOTE = TextTransform(
    name="headline-workshop:incorporate_quote",
    required=("article_text", "quote"),
    empty=_empty,
    build_prompt=lambda f: prompts.workshop_quote_prompt(
        f["article_text"], f["quote"], extract_key_names(f["article_text"])
    ),
    params=ModelParams(GPT_4O, 500, 0.7, top_p=0.9, frequency_penalty=0.1, presence_penalty=0.1),
    parse=_headlines(1),
    failure_message="Failed to process headline workshop request.",
)

ENHANCE = TextTransform(
    name="headline-workshop:enhance",
    required=("article_text", "selected_headline"),
    empty=_empty_enhancement,
    build_prompt=lambda f: prompts.workshop_enhance_prompt(
        f["selected_headline"], _instruction(f, new_headline=False), f["article_text"]
    ),
    params=ModelParams(GPT_4O, 300, 0.6, top_p=0.9, frequency_penalty=0.1, presence_penalty=0.1),
    parse=_parse_enhancement,
    failure_message="Failed to process headline workshop request.",
)

GENERATE_NEW = TextTransform(
    name="headline-workshop:generate_new",
    required=("article_text", "enhancement_type"),
    empty=_empty,
    build_prompt=lambda f: prompts.workshop_new_prompt(
        f["article_text"], _instruction(f, new_headline=True), extract_key_names(f["article_text"])
    ),
    params=ModelParams(GPT_4O, 500, 0.7, top_p=0.9, frequency_penalty=0.1, presence_penalty=0.1),
    parse=_headlines(1),
    failure_message="Failed to process headline workshop request.",
)

ACTIONS = {
    "generate_initial": GENERATE_INITIAL,
    "incorporate_quote": INCORPORATE_QUOTE,
    "enhance": ENHANCE,
    "generate_new": GENERATE_NEW,
}


def transform_for(action: str | None) -> TextTransform | None:
    return ACTIONS.get((action or "").strip())


def unknown_action(fields: Mapping[str, Any]) -> TransformResult:
    """Reject for an action outside ``ACTIONS``; a missing article is reported first."""
    if missing_field(GENERATE_INITIAL, fields) is not None:
        return TransformResult(200, {**_empty(), "error": "Article text is required."})
    return TransformResult(200, {**_empty(), "error": "Invalid action specified."})
