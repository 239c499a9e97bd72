from __future__ import annotations

import base64
import logging
import time
from typing import Any

from services import prompts
from services.completion_client import CompletionClient, CompletionError, ModelParams
from services.text_processing import clean_alt_text
from services.transforms import TransformResult

logger = logging.getLogger(__name__)

IMAGE_MODEL = "dall-e-3"
IMAGE_SIZE = "1792x1024"
IMAGE_QUALITY = "hd"
IMAGE_STYLE = "natural"

OPENAI_PROVIDER = "openai"
GEMINI_PROVIDER = "gemini"
CAPTION_PARAMS = {
    OPENAI_PROVIDER: ModelParams("gpt-4o-mini", 100, 0.3),
    GEMINI_PROVIDER: ModelParams("gemini-2.5-flash", 1024, 0.3),
}
VISION_PARAMS = ModelParams("gpt-4o", 100, 0.7)
DEFAULT_ALT_TEXT = "Image content"
MIN_VISION_ALT_TEXT = 10


def _empty_image() -> dict[str, Any]:
    return {"imageUrl": "", "altText": "", "revisedPrompt": ""}


class ImageGenerationService:
    """Generate article images and the accessibility text that goes with them."""

    def __init__(
        self,
        openai: CompletionClient | None,
        gemini: CompletionClient | None = None,
    ) -> None:
        self._openai = openai
        self._gemini = gemini

    async def generate(
        self,
        prompt: str | None,
        description: str | None = None,
        provider: str | None = None,
    ) -> TransformResult:
        if not prompt or not prompt.strip():
            return TransformResult(200, {**_empty_image(), "error": "Prompt is required."})

        if self._openai is None:
            logger.error("Image generation requested but no OpenAI API key is configured")
            return TransformResult(500, {**_empty_image(), "error": "Failed to generate image."})

        started_at = time.perf_counter()
        try:
            image = await self._openai.generate_image(
                prompt.strip(),
                model=IMAGE_MODEL,
                size=IMAGE_SIZE,
                quality=IMAGE_QUALITY,
                style=IMAGE_STYLE,
            )
        except Exception:  # noqa: BLE001
            logger.exception("Image generation failed")
            return TransformResult(500, {**_empty_image(), "error": "Failed to generate image."})
        logger.info("Image generated in %.1f seconds", time.perf_counter() - started_at)

        alt_text = ""
        if description and description.strip():
            alt_text = await self.caption(description.strip(), provider)

        return TransformResult(
            200,
            {
                "imageUrl": image.url,
                "altText": alt_text,
                "revisedPrompt": image.revised_prompt or "",
            },
        )

    def _caption_client(self, provider: str | None) -> tuple[CompletionClient | None, ModelParams]:
        if (provider or "").strip().lower() == GEMINI_PROVIDER:
            if self._gemini is not None:
                return self._gemini, CAPTION_PARAMS[GEMINI_PROVIDER]
            logger.warning("Gemini provider requested but not configured; using OpenAI")
        return self._openai, CAPTION_PARAMS[OPENAI_PROVIDER]

    async def caption(self, description: str, provider: str | None = None) -> str:
        """Alt text from a caller description; the description itself on any failure."""
        client, params = self._caption_client(provider)
        if client is None:
            return description
        try:
            alt_text = await client.complete(prompts.image_alt_text_prompt(description), params)
        except Exception:  # noqa: BLE001
            logger.exception("Alt-text generation failed with %s", params.model)
            return description
        return alt_text or description

    async def describe_image(self, image: bytes | None, content_type: str | None = None) -> TransformResult:
        if not image:
            return TransformResult(200, {"altText": "", "error": "No image file provided."})

        if self._openai is None:
            logger.warning("Vision alt text requested without an OpenAI API key")
            return TransformResult(200, {"altText": DEFAULT_ALT_TEXT})

        encoded = base64.b64encode(image).decode("ascii")
        messages = [
            {"role": "system", "content": prompts.VISION_ALT_TEXT_SYSTEM},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompts.VISION_ALT_TEXT_USER},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{content_type or 'image/jpeg'};base64,{encoded}"},
                    },
                ],
            },
        ]

        try:
            reply = await self._openai.complete_messages(messages, VISION_PARAMS)
        except CompletionError:
            logger.exception("Vision alt-text generation failed")
            return TransformResult(200, {"altText": DEFAULT_ALT_TEXT})

        if len(reply) <= MIN_VISION_ALT_TEXT:
            logger.info("Vision model returned insufficient alt text: %r", reply)
            return TransformResult(200, {"altText": DEFAULT_ALT_TEXT})

        alt_text = clean_alt_text(reply)
        if len(alt_text) < 3:
            alt_text = DEFAULT_ALT_TEXT
        return TransformResult(200, {"altText": alt_text})
