"""Translator contract."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TranslationError(Exception):
    """The translation call failed or produced no text."""


class Translator(ABC):
    """Translates text between language codes."""

    @abstractmethod
    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Return the translated text.

        Raises:
            TranslationError: On transport failure or an empty result
        """

    async def close(self) -> None:
        """Release transport resources."""
