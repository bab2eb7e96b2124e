"""OpenAI Responses API client for image editing."""

import base64
from collections.abc import Sequence
from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from nanoedit.domain.edits import ImagePart, ResponsePart, TextPart
from nanoedit.services.editing import ImageEditClient


@dataclass
class OpenAIImageClient(ImageEditClient):
    """Image edit client backed by the Responses API image_generation tool.

    The SDK client is built on first use so that a missing ``OPENAI_API_KEY``
    surfaces as a failed edit rather than a startup error.
    """

    client: AsyncOpenAI | None = None
    api_key: str | None = None
    http_client: httpx.AsyncClient | None = None

    @classmethod
    def create(
        cls, api_key: str | None, timeout_seconds: float
    ) -> "OpenAIImageClient":
        """Create an OpenAI image client with a managed httpx session."""
        return cls(
            api_key=api_key,
            http_client=httpx.AsyncClient(timeout=timeout_seconds),
        )

    async def edit(  # noqa: PLR0913
        self,
        *,
        model: str,
        image_data_url: str,
        prompt: str,
        size: str,
        quality: str,
    ) -> Sequence[ResponsePart]:
        """Call the Responses API and split its output into parts."""
        response = await self._resolve_client().responses.create(
            model=model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_image", "image_url": image_data_url},
                        {"type": "input_text", "text": prompt},
                    ],
                }
            ],
            tools=[
                {
                    "type": "image_generation",
                    "output_format": "png",
                    "size": size,
                    "quality": quality,
                }
            ],
            tool_choice={"type": "image_generation"},
        )
        return _parse_output(getattr(response, "output", None) or [])

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        if self.http_client is not None:
            await self.http_client.aclose()

    def _resolve_client(self) -> AsyncOpenAI:
        if self.client is None:
            self.client = AsyncOpenAI(
                api_key=self.api_key, http_client=self.http_client
            )
        return self.client


def _parse_output(output: Sequence[object]) -> list[ResponsePart]:
    """Map Responses API output items to image and text parts in order."""
    parts: list[ResponsePart] = []
    for item in output:
        item_type = getattr(item, "type", None)
        if item_type == "image_generation_call":
            result = getattr(item, "result", None)
            if result:
                parts.append(ImagePart(data=base64.b64decode(result)))
        elif item_type == "message":
            for content in getattr(item, "content", None) or []:
                text = getattr(content, "text", None)
                if text:
                    parts.append(TextPart(text=text))
    return parts
