"""
Provider factory for translation providers.

Centralizes provider creation and environment-driven configuration.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from sangam.shared.core.configuration import TranslationConfig
from sangam.shared.infrastructure.llm.base import Translator
from sangam.shared.infrastructure.llm.openrouter_translator import OpenRouterTranslator

logger = logging.getLogger(__name__)


# ============================================================================
# Provider Types
# ============================================================================


class ProviderType(str, Enum):
    """Supported translation provider types."""
    OPENROUTER = "openrouter"
    LM_STUDIO = "lm_studio"


# Local OpenAI-compatible servers need no key
DEFAULT_BASE_URLS: dict[str, str] = {
    ProviderType.OPENROUTER.value: OpenRouterTranslator.DEFAULT_BASE_URL,
    ProviderType.LM_STUDIO.value: "http://localhost:1234/v1",
}


# ============================================================================
# Provider Factory
# ============================================================================


class ProviderFactory:
    """Factory for creating translator instances."""

    @staticmethod
    def normalize(name: str) -> ProviderType:
        normalized = name.strip().lower().replace("-", "_")
        try:
            return ProviderType(normalized)
        except ValueError:
            raise ValueError(
                f"Unsupported provider type: {name}. "
                f"Supported: {[p.value for p in ProviderType]}"
            ) from None

    @staticmethod
    def create(config: TranslationConfig, app_name: str = "Sangam") -> Translator:
        """Create a translator from configuration.

        Raises:
            ValueError: If the provider is not supported
        """
        provider_type = ProviderFactory.normalize(config.provider)
        return OpenRouterTranslator(
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url or DEFAULT_BASE_URLS[provider_type.value],
            timeout=config.timeout,
            app_name=app_name,
        )

    @staticmethod
    def create_from_config(config: TranslationConfig) -> Optional[Translator]:
        """Create a translator, or None when it cannot be configured.

        OpenRouter requires an API key; without one the translator screen
        reports a translation error instead of crashing.
        """
        try:
            provider_type = ProviderFactory.normalize(config.provider)
        except ValueError as e:
            logger.warning(f"Translator disabled: {e}")
            return None

        if provider_type == ProviderType.OPENROUTER and not config.api_key:
            logger.warning("Translator disabled: OPENROUTER_API_KEY is not set")
            return None

        return ProviderFactory.create(config)
