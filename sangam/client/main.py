"""Sangam client - Main application entry point."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from dotenv import load_dotenv

import flet as ft
from sangam.client.state import AppContext, AppState
from sangam.client.ui.platform_theme import FletOsThemeSource
from sangam.client.ui.shell import build_shell
from sangam.shared.core.configuration import LoggingConfig, SystemConfig, ValidationLevel, load_config

# Load environment variables from .env file in project root
PROJECT_ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(dotenv_path=PROJECT_ROOT / ".env")

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(config: LoggingConfig) -> Path:
    """Rotating file log at the configured level, console at WARNING and above."""
    logs_dir = Path(config.log_dir)
    if not logs_dir.is_absolute():
        logs_dir = PROJECT_ROOT / logs_dir
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = logs_dir / "sangam.log"

    file_log_level = LOG_LEVELS.get(config.level.upper(), logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)
    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    ))
    root_logger.addHandler(console_handler)

    # Suppress verbose third-party library logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("flet").setLevel(logging.WARNING)
    logging.getLogger("flet_controls").setLevel(logging.WARNING)
    logging.getLogger("flet_transport").setLevel(logging.WARNING)
    logging.getLogger("fletx.core.state").setLevel(logging.CRITICAL)  # Observer errors during shutdown

    logger.info(f"Logging configured: file={log_file_path}, console=WARNING+")
    return log_file_path


CONFIG: SystemConfig = load_config(validation_level=ValidationLevel.LENIENT)
configure_logging(CONFIG.logging)


async def main(page: ft.Page) -> None:
    """Main Flet application entry point."""
    logger.info("Initializing Sangam...")
    page.title = "Sangam"
    page.padding = 0

    context = AppContext.create(CONFIG)
    state = AppState(context, os_theme=FletOsThemeSource(page))

    # First frame comes from local state only
    page.views.append(build_shell(page, state))
    page.update()

    await state.initialize()

    async def on_disconnect(e) -> None:
        await context.close()

    page.on_disconnect = on_disconnect
    logger.info("Application initialized successfully")


if __name__ == "__main__":
    if CONFIG.ui.flet_web_mode:
        port = CONFIG.ui.flet_port
        logger.info(f"Starting Flet app in WEB mode on port {port}")
        ft.run(main, view=ft.AppView.FLET_APP_WEB, port=port, host="127.0.0.1")
    else:
        logger.info("Starting Flet app in DESKTOP mode")
        ft.run(main, view=ft.AppView.FLET_APP)
