from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from openai import AsyncOpenAI, OpenAIError

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    """Raised when the generation API call fails or returns nothing usable."""


@dataclass(frozen=True)
class ModelParams:
    model: str
    max_tokens: int
    # None leaves the sampling option at the API default.
    temperature: float | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None


@dataclass(frozen=True)
class GeneratedImage:
    url: str
    revised_prompt: str | None = None


class CompletionClient:
    """Thin wrapper over the OpenAI chat-completions and images APIs.

    One attempt per call; the SDK's own retry loop is disabled.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def complete(self, prompt: str, params: ModelParams) -> str:
        return await self.complete_messages([{"role": "user", "content": prompt}], params)

    async def complete_messages(self, messages: list[dict[str, Any]], params: ModelParams) -> str:
        request: dict[str, Any] = {
            "model": params.model,
            "messages": messages,
            "max_tokens": params.max_tokens,
        }
        for option in ("temperature", "top_p", "frequency_penalty", "presence_penalty"):
            value = getattr(params, option)
            if value is not None:
                request[option] = value

        try:
            response = await self._client.chat.completions.create(**request)
        except OpenAIError as exc:
            raise CompletionError(f"Chat completion request failed ({params.model}).") from exc

        if not response.choices:
            raise CompletionError(f"Chat completion returned no choices ({params.model}).")

        content = response.choices[0].message.content or ""
        return content.strip()

    async def generate_image(
        self,
        prompt: str,
        *,
        model: str,
        size: str,
        quality: str,
        style: str,
    ) -> GeneratedImage:
        try:
            response = await self._client.images.generate(
                model=model,
                prompt=prompt,
                n=1,
                size=size,
                quality=quality,
                style=style,
            )
        except OpenAIError as exc:
            raise CompletionError(f"Image generation request failed ({model}).") from exc

        image = response.data[0] if response.data else None
        if image is None or not image.url:
            raise CompletionError("Image generation returned no image URL.")

        if image.revised_prompt:
            logger.info("Image prompt revised by %s: %s", model, image.revised_prompt)
        return GeneratedImage(url=image.url, revised_prompt=image.revised_prompt)
