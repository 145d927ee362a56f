"""Gemini REST API client for the HTML generator and image editor.

Calls the Generative Language ``generateContent`` endpoint with text prompts
and optional inline base64 image data.

Environment:
    GOOGLE_API_KEY: Google AI API key (required)

Usage:
    client = GeminiClient()
    html = await client.generate_text(prompt, temperature=0.7, max_output_tokens=4000)
    image = await client.generate_image("a red bicycle", reference_image=(png, "image/png"))
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .. import config

logger = logging.getLogger("pagegen.generation.gemini")


class GeminiClientError(Exception):
    """Raised when a Gemini API call fails."""


class GeminiNotConfiguredError(GeminiClientError):
    """Raised when no API key is available. Checked before any request."""


class GeminiResponseError(GeminiClientError):
    """Raised when the response carries no usable candidate."""


class GeminiClient:
    """Async Gemini REST client.

    Args:
        api_key: Google AI API key. Falls back to config.GOOGLE_API_KEY.
        model: Model identifier used in the endpoint path.
        base_url: API origin. Falls back to config.GEMINI_API_BASE.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.0-flash-exp",
        base_url: Optional[str] = None,
    ):
        self._api_key = api_key or config.GOOGLE_API_KEY
        if not self._api_key:
            raise GeminiNotConfiguredError(
                "AI service is not configured. Please set your Google AI API key "
                "(GOOGLE_API_KEY environment variable)."
            )
        self.model = model
        self._base_url = base_url or config.GEMINI_API_BASE
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            # No timeout: generation calls run as long as the provider needs
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"x-goog-api-key": self._api_key},
                timeout=None,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Make a POST request to the Gemini API."""
        client = await self._get_client()
        try:
            resp = await client.post(path, json=body)
        except httpx.HTTPError as e:
            raise GeminiClientError(f"Gemini API request failed: {e}") from e

        if resp.status_code == 429:
            raise GeminiClientError("Gemini API rate limit exceeded. Retry later.")
        if resp.status_code < 200 or resp.status_code >= 300:
            raise GeminiClientError(
                f"API error: {resp.status_code} {resp.text[:200]}"
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise GeminiResponseError("Gemini API returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise GeminiResponseError(
                f"Gemini API returned unexpected JSON ({type(data).__name__})"
            )
        return data

    async def generate_content(
        self,
        parts: List[Dict[str, Any]],
        generation_config: Optional[Dict[str, Any]] = None,
        model: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Issue one generateContent call and return the first candidate's parts.

        POST /v1beta/models/:model:generateContent

        Args:
            model: Per-call model override; defaults to self.model.
        """
        model = model or self.model
        body: Dict[str, Any] = {"contents": [{"parts": parts}]}
        if generation_config:
            body["generationConfig"] = generation_config

        data = await self._post(f"/v1beta/models/{model}:generateContent", body)

        candidates = data.get("candidates") or []
        if not isinstance(candidates, list):
            raise GeminiResponseError("Malformed AI response: candidates is not a list")
        if not candidates:
            raise GeminiResponseError("No response from AI")

        first = candidates[0]
        if not isinstance(first, dict):
            raise GeminiResponseError("Malformed AI response: candidate is not an object")
        content = first.get("content") or {}
        result_parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(result_parts, list):
            result_parts = []
        # Non-object parts carry nothing usable
        result_parts = [part for part in result_parts if isinstance(part, dict)]
        logger.info(
            f"generate_content: model={model}, parts_in={len(parts)}, "
            f"parts_out={len(result_parts)}"
        )
        return result_parts

    async def generate_text(
        self,
        prompt: str,
        image: Optional[Tuple[str, str]] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        model: Optional[str] = None,
    ) -> str:
        """Generate text from a prompt, optionally with one inline image.

        Args:
            prompt: Instruction text.
            image: Optional (base64_data, mime_type) pair sent after the prompt.
            temperature: Sampling temperature; provider default when None.
            max_output_tokens: Output length cap; provider default when None.
            model: Model for this call only; self.model when None.
        """
        parts: List[Dict[str, Any]] = [{"text": prompt}]
        if image is not None:
            data, mime_type = image
            parts.append({"inlineData": {"mimeType": mime_type, "data": data}})

        generation_config: Dict[str, Any] = {}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if max_output_tokens is not None:
            generation_config["maxOutputTokens"] = max_output_tokens

        result_parts = await self.generate_content(
            parts, generation_config or None, model=model
        )
        return _join_text(result_parts)

    async def generate_image(
        self,
        prompt: str,
        reference_image: Optional[Tuple[str, str]] = None,
        model: Optional[str] = None,
    ) -> str:
        """Generate an image; returns a data URI, or the text reply if no image came back.

        Args:
            prompt: Image instruction.
            reference_image: Optional (base64_data, mime_type) sent before the prompt.
            model: Model for this call only; self.model when None.
        """
        parts: List[Dict[str, Any]] = []
        if reference_image is not None:
            data, mime_type = reference_image
            parts.append({"inlineData": {"mimeType": mime_type, "data": data}})
        parts.append({"text": prompt})

        result_parts = await self.generate_content(
            parts, {"responseModalities": ["TEXT", "IMAGE"]}, model=model
        )

        for part in result_parts:
            inline = part.get("inlineData")
            if isinstance(inline, dict):
                return f"data:{inline.get('mimeType', 'image/png')};base64,{inline.get('data', '')}"

        return _join_text(result_parts)


def _join_text(parts: List[Dict[str, Any]]) -> str:
    return "".join(part.get("text", "") for part in parts)
