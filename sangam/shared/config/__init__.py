"""
Shared Config Module
====================

Structure:
- prompts/: Jinja2 templates for the translation provider
- settings/: packaged YAML defaults
"""

from sangam.shared.config.prompts import (
    PromptManager,
    render_prompt,
    get_prompt_manager,
)

__all__ = [
    "PromptManager",
    "render_prompt",
    "get_prompt_manager",
]
