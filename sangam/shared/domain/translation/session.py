"""State behind the AI translator screen."""

from __future__ import annotations

import logging
from typing import Optional

from sangam.shared.config.languages import AUTO_DETECT
from sangam.shared.domain.models import TranslationHistoryItem
from sangam.shared.domain.translation.history import TranslationHistory
from sangam.shared.infrastructure.llm.base import TranslationError, Translator

logger = logging.getLogger(__name__)

# Localised through the string table by the view
INPUT_ERROR_KEY = "ai_input_error"
TRANSLATION_ERROR_KEY = "ai_error"


class TranslatorSession:
    """Input, output and language selection for one visit to the translator.

    Failures never raise to the caller: they set ``error`` and leave the input
    in place so the user can retry.
    """

    def __init__(
        self,
        translator: Optional[Translator],
        history: TranslationHistory,
        source_lang: str = "en",
        target_lang: str = "hi",
    ) -> None:
        self.translator = translator
        self.history = history
        self.input = ""
        self.output = ""
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.error: Optional[str] = None
        self.is_translating = False

    async def translate(self) -> bool:
        if not self.input.strip():
            self.error = INPUT_ERROR_KEY
            return False

        self.error = None
        self.output = ""
        self.is_translating = True
        text, source, target = self.input, self.source_lang, self.target_lang
        try:
            if self.translator is None:
                raise TranslationError("No translation provider configured")
            result = await self.translator.translate(text, source, target)
        except TranslationError as e:
            logger.error(f"Translation failed ({source}->{target}): {e}")
            self.error = TRANSLATION_ERROR_KEY
            return False
        finally:
            self.is_translating = False

        self.output = result
        self.history.add(TranslationHistoryItem(input=text, output=result, source=source, target=target))
        return True

    def swap(self) -> bool:
        """Swap source and target. Auto-detect cannot become a target."""
        if self.source_lang == AUTO_DETECT:
            return False
        self.source_lang, self.target_lang = self.target_lang, self.source_lang
        return True

    def clear(self) -> None:
        self.input = ""
        self.output = ""
        self.error = None

    def restore(self, item: TranslationHistoryItem) -> None:
        self.input = item.input
        self.output = item.output
        self.source_lang = item.source_lang
        self.target_lang = item.target_lang

    def clear_history(self) -> None:
        self.history.clear()
