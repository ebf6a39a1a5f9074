from .history import DEFAULT_HISTORY_LIMIT, TranslationHistory
from .session import INPUT_ERROR_KEY, TRANSLATION_ERROR_KEY, TranslatorSession

__all__ = [
    "DEFAULT_HISTORY_LIMIT",
    "INPUT_ERROR_KEY",
    "TRANSLATION_ERROR_KEY",
    "TranslationHistory",
    "TranslatorSession",
]
