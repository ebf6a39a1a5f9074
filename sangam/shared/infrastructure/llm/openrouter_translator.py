"""Translator backed by an OpenAI-compatible chat completions endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from sangam.shared.config.languages import language_name
from sangam.shared.config.prompts import render_prompt
from sangam.shared.infrastructure.llm.base import TranslationError, Translator

logger = logging.getLogger(__name__)


class OpenRouterTranslator(Translator):
    """Single-shot translation over ``POST {base_url}/chat/completions``."""

    DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        app_name: str = "Sangam",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.app_name = app_name
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "X-Title": self.app_name}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _build_request(self, text: str, source_lang: str, target_lang: str) -> Dict[str, Any]:
        system_prompt = render_prompt(
            "translation_system",
            source_name=language_name(source_lang),
            target_name=language_name(target_lang),
        )
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": render_prompt("translation_user", text=text)},
            ],
        }

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        payload = self._build_request(text, source_lang, target_lang)
        try:
            response = await self._client.post("/chat/completions", json=payload, headers=self._headers())
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Translation request failed ({source_lang}->{target_lang}): {e}")
            raise TranslationError(str(e)) from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected translation response shape: {e}")
            raise TranslationError("Malformed response from translation provider") from e

        if not isinstance(content, str) or not content.strip():
            raise TranslationError("Empty response from translation provider")
        return content.strip()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
