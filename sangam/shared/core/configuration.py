"""
Configuration Management System for the Sangam client

Centralized configuration with a 4-tier precedence hierarchy:
environment → project → user → packaged defaults.
"""

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

PACKAGED_SETTINGS_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class RemoteConfig(BaseModel):
    """Remote document service connection, injected by the hosting environment"""
    model_config = ConfigDict(extra='forbid')

    # Raw JSON blob; absence means the client runs disconnected
    connection: Optional[str] = Field(default=None, description="Connection configuration blob (JSON)")
    bootstrap_token: Optional[str] = Field(default=None, description="One-time identity bootstrap token")
    request_timeout: float = Field(default=15.0, ge=1.0, le=120.0, description="HTTP request timeout (seconds)")

    def connection_settings(self) -> Optional[Dict[str, Any]]:
        """Parse the connection blob, returning None when absent or malformed."""
        if not self.connection or not self.connection.strip():
            return None
        try:
            settings = json.loads(self.connection)
        except json.JSONDecodeError as e:
            logger.error(f"Remote connection blob is not valid JSON: {e}")
            return None
        if not isinstance(settings, dict):
            logger.error("Remote connection blob must be a JSON object")
            return None
        return settings


class StorageConfig(BaseModel):
    """On-device persistence"""
    model_config = ConfigDict(extra='forbid')

    db_path: str = Field(default="data/db/sangam_local.duckdb", description="Local key/value database file")


class TranslationConfig(BaseModel):
    """Translation provider settings"""
    model_config = ConfigDict(extra='forbid')

    provider: str = Field(default="openrouter", description="Translation provider")
    api_key: Optional[str] = Field(default=None, description="Provider API key")
    base_url: Optional[str] = Field(default=None, description="Provider base URL")
    model: str = Field(default="google/gemini-2.5-flash", description="Model identifier")
    timeout: float = Field(default=60.0, ge=1.0, le=300.0, description="Request timeout (seconds)")
    history_limit: int = Field(default=3, ge=1, le=50, description="Translation history entries kept")


class UIConfig(BaseModel):
    """UI and behaviour timing"""
    model_config = ConfigDict(extra='forbid')

    flet_web_mode: bool = Field(default=False, description="Enable web mode")
    flet_port: int = Field(default=8550, ge=1024, le=65535, description="Web server port")

    fallback_language: str = Field(default="en", min_length=2, description="Language used when none is stored")
    onboarding_confirm_delay: float = Field(default=1.5, ge=0.0, le=10.0, description="Confirmation overlay after onboarding (seconds)")
    document_load_timeout: float = Field(default=3.0, ge=0.1, le=60.0, description="Fallback before the document loader is hidden (seconds)")
    app_version: str = Field(default="1.0.0", description="Version reported with feedback")


class LoggingConfig(BaseModel):
    """Logging configuration"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="DEBUG", description="File log level")
    log_dir: str = Field(default="data/logs", description="Directory for rotating log files")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024, description="Rotate after this many bytes")
    backup_count: int = Field(default=5, ge=0, le=50, description="Rotated files kept")


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Metadata
    schema_version: int = Field(default=1, description="Configuration schema version")


# Environment variable → (section, key, type)
ENV_MAP: Dict[str, tuple] = {
    'SANGAM_REMOTE_CONFIG': ('remote', 'connection', str),
    'SANGAM_INITIAL_AUTH_TOKEN': ('remote', 'bootstrap_token', str),
    'SANGAM_DB_PATH': ('storage', 'db_path', str),
    'SANGAM_FALLBACK_LANGUAGE': ('ui', 'fallback_language', str),
    'TRANSLATION_PROVIDER': ('translation', 'provider', str),
    'OPENROUTER_API_KEY': ('translation', 'api_key', str),
    'OPENROUTER_BASE_URL': ('translation', 'base_url', str),
    'OPENROUTER_MODEL': ('translation', 'model', str),
    'LOG_LEVEL': ('logging', 'level', str),
    'FLET_WEB_MODE': ('ui', 'flet_web_mode', bool),
    'FLET_PORT': ('ui', 'flet_port', int),
}


class ConfigManager:
    """Centralized configuration manager with 4-tier precedence hierarchy"""

    def __init__(self, config_dir: Optional[Path] = None, defaults_path: Optional[Path] = None):
        self.config_dir = config_dir or (Path.cwd() / "config")
        self.defaults_path = defaults_path or (PACKAGED_SETTINGS_DIR / "defaults.yaml")
        self._system_config: Optional[SystemConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None
        self._project_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {file_path}: top level must be a mapping")
            return {}
        return data

    def _save_yaml_file(self, file_path: Path, data: Dict[str, Any]) -> bool:
        """Save configuration to YAML file"""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
            return True
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to save {file_path}: {e}")
            return False

    def _load_system_defaults(self) -> SystemConfig:
        """Load packaged default configuration"""
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.defaults_path)

            try:
                self._system_config = SystemConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed: {e}")
                self._system_config = SystemConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _load_project_config(self) -> Dict[str, Any]:
        if self._project_config is None:
            self._project_config = self._load_yaml_file(self.config_dir / "project.yaml")
        return self._project_config

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → project → user → defaults"""
        merged = self._load_system_defaults().model_dump()
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._load_project_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key, value_type) in ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue

            if value_type is bool:
                converted: Any = value.lower() in ('true', '1', 'yes', 'on')
            elif value_type is int:
                try:
                    converted = int(value)
                except ValueError:
                    logger.warning(f"Ignoring {env_key}: expected an integer, got {value!r}")
                    continue
            else:
                converted = value

            overrides.setdefault(section, {})[config_key] = converted

        return overrides

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_user_config(self, config_updates: Dict[str, Any]) -> bool:
        """Persist user-level configuration updates"""
        user_path = self.config_dir / "user.yaml"
        existing_config = self._load_yaml_file(user_path)
        self._deep_merge(existing_config, config_updates)

        success = self._save_yaml_file(user_path, existing_config)
        if success:
            self._user_config = None
        return success


def load_config(
    config_dir: Optional[Path] = None,
    validation_level: ValidationLevel = ValidationLevel.STRICT,
) -> SystemConfig:
    """Build a configuration snapshot for one process start."""
    return ConfigManager(config_dir).get_config(validation_level)
