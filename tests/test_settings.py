# ABOUTME: Tests for the pydantic-settings configuration singleton
# ABOUTME: Validates defaults, the WIKI_FACETS_ environment prefix, validation, and reload behaviour

import pytest
from pydantic import ValidationError

from wiki_facets.config import Config, get_config, reload_config


def test_defaults():
    config = Config(_env_file=None)

    assert config.api_url == "https://en.wikipedia.org/w/api.php"
    assert config.retry_attempts == 3
    assert config.default_limit == 100
    assert config.log_level == "INFO"
    assert config.log_file is None


def test_environment_prefix(monkeypatch):
    monkeypatch.setenv("WIKI_FACETS_API_URL", "https://wiki.test/w/api.php")
    monkeypatch.setenv("WIKI_FACETS_DEFAULT_LIMIT", "25")

    config = reload_config()

    assert config.api_url == "https://wiki.test/w/api.php"
    assert config.default_limit == 25


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_reload_replaces_instance(monkeypatch):
    before = get_config()
    monkeypatch.setenv("WIKI_FACETS_LOG_LEVEL", "DEBUG")

    after = reload_config()

    assert after is not before
    assert get_config() is after
    assert after.log_level == "DEBUG"


@pytest.mark.parametrize("name,value", [("WIKI_FACETS_RETRY_ATTEMPTS", "0"), ("WIKI_FACETS_LOG_LEVEL", "LOUD")])
def test_invalid_values_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Config(_env_file=None)
