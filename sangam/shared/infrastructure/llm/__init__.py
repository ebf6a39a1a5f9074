"""
LLM Interface - translation provider abstraction layer.

Supports OpenRouter and local OpenAI-compatible servers (LM Studio).
"""

from sangam.shared.infrastructure.llm.base import TranslationError, Translator
from sangam.shared.infrastructure.llm.openrouter_translator import OpenRouterTranslator
from sangam.shared.infrastructure.llm.provider_factory import ProviderFactory, ProviderType

__all__ = [
    # Base
    "Translator",
    "TranslationError",
    # Factory
    "ProviderFactory",
    "ProviderType",
    # Providers
    "OpenRouterTranslator",
]
