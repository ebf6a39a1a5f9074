"""Bounded, most-recent-first translation history cached on the device."""

from __future__ import annotations

import logging
from typing import List

from pydantic import ValidationError

from sangam.shared.domain.models import TranslationHistoryItem
from sangam.shared.infrastructure.persistence import KEY_TRANSLATION_HISTORY, LocalStore

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 3


class TranslationHistory:
    def __init__(self, local: LocalStore, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self.local = local
        self.limit = limit
        self._items: List[TranslationHistoryItem] = []

    @property
    def items(self) -> List[TranslationHistoryItem]:
        return list(self._items)

    def load(self) -> List[TranslationHistoryItem]:
        raw = self.local.read(KEY_TRANSLATION_HISTORY)
        if not isinstance(raw, list):
            if raw is not None:
                logger.warning("Stored translation history is not a list; starting empty")
            self._items = []
            return self.items

        items: List[TranslationHistoryItem] = []
        for entry in raw:
            try:
                items.append(TranslationHistoryItem.model_validate(entry))
            except ValidationError:
                logger.warning("Skipping malformed translation history entry")
        self._items = items[: self.limit]
        return self.items

    def add(self, item: TranslationHistoryItem) -> List[TranslationHistoryItem]:
        """Prepend ``item``, dropping the oldest entries beyond the limit."""
        self._items = [item, *self._items][: self.limit]
        self.local.write(KEY_TRANSLATION_HISTORY, [entry.to_document() for entry in self._items])
        return self.items

    def clear(self) -> None:
        self._items = []
        self.local.remove(KEY_TRANSLATION_HISTORY)

    def __len__(self) -> int:
        return len(self._items)
