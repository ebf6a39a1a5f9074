"""Backend selection from the injected connection blob."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from sangam.shared.core.configuration import RemoteConfig
from sangam.shared.infrastructure.remote.base import RemoteBackend
from sangam.shared.infrastructure.remote.http import HttpBackend
from sangam.shared.infrastructure.remote.memory import create_memory_backend

logger = logging.getLogger(__name__)


class BackendType(str, Enum):
    """Supported remote backend types."""
    HTTP = "http"
    MEMORY = "memory"


def connect_backend(config: RemoteConfig) -> Optional[RemoteBackend]:
    """Create the remote backend, or None to run disconnected.

    A missing or malformed connection blob is a supported state, never an error
    for the caller.
    """
    settings = config.connection_settings()
    if settings is None:
        logger.warning("Remote connection config not found. App will run in a disconnected state.")
        return None

    backend_name = str(settings.get("backend", BackendType.HTTP.value)).strip().lower()
    try:
        backend_type = BackendType(backend_name)
    except ValueError:
        logger.error(
            f"Unsupported remote backend '{backend_name}'. "
            f"Supported: {[b.value for b in BackendType]}"
        )
        return None

    if backend_type == BackendType.MEMORY:
        logger.info("Using in-process remote backend")
        return create_memory_backend(settings.get("tokens"))

    base_url = settings.get("base_url")
    if not base_url:
        logger.error("Remote connection config has no base_url; running disconnected")
        return None

    return HttpBackend(
        base_url=str(base_url),
        api_key=settings.get("api_key"),
        timeout=config.request_timeout,
    )
