"""Post-processing helpers shared by every generation endpoint.

Model replies are free text; these functions turn them into the small,
fixed shapes the API returns (lists of headlines, cleaned headings, JSON
payloads). None of them enforce the stylistic limits the prompts ask for;
they only trim, split and truncate.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
_LIST_MARKER = re.compile(r"^\s*\d+\s*[.)]?\s*")
_NUMBERED_LINE = re.compile(r"^\s*\d+\s*[.)]\s*\S")
_LEVEL_HEADER = re.compile(r"^[\s*#]*LEVEL\s+(\d+)\b", re.IGNORECASE)
_TERMINAL_PUNCTUATION = (".", "!", "?")
_MAX_HEADING_LENGTH = 30


class CompletionParseError(ValueError):
    """Raised when a model reply does not have the expected structure."""


def strip_code_fences(text: str) -> str:
    return _CODE_FENCE.sub("", text).strip()


def strip_list_marker(line: str) -> str:
    return _LIST_MARKER.sub("", line, count=1).strip()


def parse_numbered_list(text: str, max_items: int) -> list[str]:
    """Split a numbered reply ("1. Foo", "2) Bar", "3 Baz") into items."""
    items = [strip_list_marker(line) for line in text.splitlines()]
    return [item for item in items if item][:max_items]


def parse_json_payload(text: str) -> Any:
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise CompletionParseError(f"Reply is not valid JSON: {exc.msg}") from exc


def string_items(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def pad_items(items: list[str], size: int, fill: str = "") -> list[str]:
    trimmed = list(items[:size])
    return trimmed + [fill] * (size - len(trimmed))


def capitalize_words(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def clean_heading(line: str) -> str:
    return capitalize_words(line.replace("**", "").strip())


def is_heading_candidate(line: str) -> bool:
    if not line or len(line) > _MAX_HEADING_LENGTH:
        return False
    if line.endswith(_TERMINAL_PUNCTUATION):
        return False
    return line.isupper() or "**" in line


def normalize_headings(text: str) -> str:
    """Rewrite short shouted or bold lines as Title Case headings."""
    lines = text.split("\n")
    for index, raw in enumerate(lines):
        line = raw.strip()
        if is_heading_candidate(line):
            lines[index] = clean_heading(line)
    return "\n".join(lines)


def parse_leveled_list(text: str, levels: int, per_level: int) -> list[list[str]]:
    """Parse "LEVEL N" sections, each holding a numbered list.

    A level is kept only when it has exactly ``per_level`` items. When no
    section header is found at all, the reply is read as one flat numbered
    list and sliced into consecutive levels.
    """
    sections: dict[int, list[str]] = {}
    current: int | None = None
    for line in text.splitlines():
        header = _LEVEL_HEADER.match(line)
        if header:
            current = int(header.group(1))
            sections.setdefault(current, [])
            continue
        if current is not None and _NUMBERED_LINE.match(line):
            sections[current].append(strip_list_marker(line))

    if not any(sections.values()):
        flat = [
            item
            for item in (strip_list_marker(line) for line in text.splitlines())
            if item and not _LEVEL_HEADER.match(item)
        ][: levels * per_level]
        return [flat[n * per_level : (n + 1) * per_level] for n in range(levels)]

    parsed: list[list[str]] = []
    for level in range(1, levels + 1):
        items = [item for item in sections.get(level, []) if item][:per_level]
        parsed.append(items if len(items) == per_level else [])
    return parsed


def clean_alt_text(text: str, limit: int = 150) -> str:
    cleaned = re.sub(r"\s+", " ", text).strip(" ,")
    cleaned = cleaned[:limit].rstrip(" ,")
    if cleaned and not cleaned.endswith(_TERMINAL_PUNCTUATION):
        cleaned = cleaned[: limit - 1].rstrip(" ,") + "."
    return cleaned
