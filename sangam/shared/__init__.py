"""
Sangam Shared Kernel
====================

Architecture:
- core: EventBus, channels, configuration
- infrastructure: Technical adapters (local DuckDB store, remote documents, translation)
- domain: Business logic (identity, sync, theme, navigation, onboarding, translation)
"""

__version__ = "1.0.0"

__all__ = []
