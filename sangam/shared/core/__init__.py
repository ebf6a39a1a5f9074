"""
Shared Core Module
==================

Event system, subscription channels, background task tracking and configuration.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Subscriptions and background work
from .channel import Channel, Unsubscribe
from .tasks import BackgroundTasks

# Configuration
from .configuration import (
    ConfigManager,
    SystemConfig,
    ValidationLevel,
    load_config,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Subscriptions
    "Channel",
    "Unsubscribe",
    "BackgroundTasks",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "ValidationLevel",
    "load_config",
]
