"""Prompt templates for the Sangam translator using Jinja2."""

from __future__ import annotations

from typing import Any, Dict, Optional

from jinja2 import DictLoader, Environment, StrictUndefined

TEMPLATES: Dict[str, str] = {
    "translation_system": (
        "You are an expert, fluent language translator specializing in Indian languages. "
        "Translate the following text from {{ source_name }} to {{ target_name }}. "
        "Only return the translated text without any explanation or conversational elements."
    ),
    "translation_user": 'Translate: "{{ text }}"',
}


class PromptManager:
    """Renders named prompt templates."""

    def __init__(self, templates: Optional[Dict[str, str]] = None) -> None:
        self.env = Environment(
            loader=DictLoader(templates or TEMPLATES),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=False,
        )

    def render(self, name: str, **context: Any) -> str:
        return self.env.get_template(name).render(**context)


_prompt_manager: Optional[PromptManager] = None


def get_prompt_manager() -> PromptManager:
    global _prompt_manager
    if _prompt_manager is None:
        _prompt_manager = PromptManager()
    return _prompt_manager


def render_prompt(name: str, **context: Any) -> str:
    return get_prompt_manager().render(name, **context)


__all__ = ["PromptManager", "render_prompt", "get_prompt_manager", "TEMPLATES"]
