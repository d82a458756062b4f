"""Tests for the INI settings file."""

import pytest

from lastfm_client.exceptions import ConfigurationError
from lastfm_client.models.config import DEFAULT_BASE_URL, AppSettings
from lastfm_client.storage.config_manager import ConfigManager


@pytest.fixture
def manager(tmp_path):
    return ConfigManager(tmp_path / "lastfm-client" / "config.ini")


def test_missing_file(manager):
    with pytest.raises(ConfigurationError, match="init"):
        manager.load_settings()


def test_save_and_load(manager):
    manager.save_settings(AppSettings(api_key="k", shared_secret="s%cret"))

    settings = manager.load_settings()

    assert settings.api_key == "k"
    assert settings.shared_secret == "s%cret"
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.session_key == ""


def test_update_keeps_other_values(manager):
    manager.save_settings(AppSettings(api_key="k", shared_secret="s"))

    updated = manager.update_settings(session_key="SK", username="alice")

    assert updated.session_key == "SK"
    reloaded = manager.load_settings()
    assert reloaded.api_key == "k"
    assert reloaded.session_key == "SK"
    assert reloaded.username == "alice"


def test_unknown_keys_are_ignored(manager):
    manager.config_file_path.parent.mkdir(parents=True)
    manager.config_file_path.write_text(
        "[DEFAULT]\napi_key = k\nshared_secret = s\nquality = 6\n", encoding="utf-8"
    )

    settings = manager.load_settings()

    assert settings.api_key == "k"


def test_unparsable_file(manager):
    manager.config_file_path.parent.mkdir(parents=True)
    manager.config_file_path.write_text("api_key = k\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="parsing"):
        manager.load_settings()
