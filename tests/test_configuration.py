"""Tests for layered configuration loading."""

import pytest
import yaml

from sangam.shared.core.configuration import ENV_MAP, ConfigManager, SystemConfig, ValidationLevel


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_MAP:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


def test_packaged_defaults(clean_env, tmp_path):
    config = ConfigManager(config_dir=tmp_path).get_config()
    assert config.ui.fallback_language == "en"
    assert config.ui.onboarding_confirm_delay == 1.5
    assert config.ui.document_load_timeout == 3.0
    assert config.ui.app_version == "1.0.0"
    assert config.translation.history_limit == 3
    assert config.remote.connection_settings() is None


def test_precedence_env_over_project_over_user(clean_env, tmp_path):
    write_yaml(tmp_path / "user.yaml", {"ui": {"fallback_language": "hi", "flet_port": 9000}})
    write_yaml(tmp_path / "project.yaml", {"ui": {"fallback_language": "mr"}})
    clean_env.setenv("SANGAM_FALLBACK_LANGUAGE", "gu")

    config = ConfigManager(config_dir=tmp_path).get_config()

    assert config.ui.fallback_language == "gu"
    assert config.ui.flet_port == 9000


def test_env_type_conversion(clean_env, tmp_path):
    clean_env.setenv("FLET_WEB_MODE", "true")
    clean_env.setenv("FLET_PORT", "8600")
    clean_env.setenv("SANGAM_REMOTE_CONFIG", '{"backend": "memory"}')

    config = ConfigManager(config_dir=tmp_path).get_config()

    assert config.ui.flet_web_mode is True
    assert config.ui.flet_port == 8600
    assert config.remote.connection_settings() == {"backend": "memory"}


def test_strict_validation_raises(clean_env, tmp_path):
    write_yaml(tmp_path / "user.yaml", {"ui": {"flet_port": 1}})
    with pytest.raises(ValueError):
        ConfigManager(config_dir=tmp_path).get_config(ValidationLevel.STRICT)


def test_lenient_validation_falls_back_to_defaults(clean_env, tmp_path):
    write_yaml(tmp_path / "user.yaml", {"ui": {"unknown_option": True}})
    config = ConfigManager(config_dir=tmp_path).get_config(ValidationLevel.LENIENT)
    assert config == SystemConfig()


def test_save_user_config_merges(clean_env, tmp_path):
    manager = ConfigManager(config_dir=tmp_path)
    assert manager.save_user_config({"translation": {"model": "local/model"}})
    assert manager.save_user_config({"translation": {"history_limit": 5}})

    config = manager.get_config()
    assert config.translation.model == "local/model"
    assert config.translation.history_limit == 5
