"""Tests for the CacheSettings model."""

import logging
from pathlib import Path

import pytest

from imgcache.config.defaults import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from imgcache.config.schema import CacheSettings


class TestDefaults:
    def test_field_defaults(self):
        settings = CacheSettings()
        assert settings.cache_dir is None
        assert settings.timeout == DEFAULT_TIMEOUT
        assert settings.user_agent == DEFAULT_USER_AGENT
        assert settings.max_concurrency == DEFAULT_MAX_CONCURRENCY
        assert settings.log_level == "WARNING"

    def test_source_behaviour_is_default(self):
        settings = CacheSettings()
        assert settings.coalesce is False
        assert settings.refetch_on_corrupt is False
        assert settings.cache_disabled is False


class TestCoercion:
    @pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
    def test_truthy_strings(self, value):
        assert CacheSettings(cache_disabled=value).cache_disabled is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off"])
    def test_falsy_strings(self, value):
        assert CacheSettings(coalesce=value).coalesce is False

    def test_numeric_strings(self):
        settings = CacheSettings(timeout="2.5", max_concurrency="4")
        assert settings.timeout == 2.5
        assert settings.max_concurrency == 4

    def test_cache_dir_becomes_path(self):
        assert CacheSettings(cache_dir="/tmp/imgs").cache_dir == Path("/tmp/imgs")

    def test_empty_cache_dir_is_none(self):
        assert CacheSettings(cache_dir="").cache_dir is None

    def test_unknown_keys_ignored(self):
        settings = CacheSettings(colour="blue", timeout=3)
        assert settings.timeout == 3.0
        assert not hasattr(settings, "colour")


class TestInvalidValuesFallBack:
    def test_non_numeric_timeout(self, caplog):
        with caplog.at_level(logging.WARNING, logger="imgcache.config.schema"):
            settings = CacheSettings(timeout="fast")
        assert settings.timeout == DEFAULT_TIMEOUT
        assert "timeout" in caplog.text

    @pytest.mark.parametrize("value", ["abc", "0", "-3", 2.5])
    def test_bad_max_concurrency(self, value):
        assert CacheSettings(max_concurrency=value).max_concurrency == DEFAULT_MAX_CONCURRENCY

    def test_negative_timeout(self):
        assert CacheSettings(timeout=-1).timeout == DEFAULT_TIMEOUT

    def test_bad_bool(self):
        assert CacheSettings(coalesce="maybe").coalesce is False

    def test_one_bad_value_keeps_the_others(self):
        settings = CacheSettings(timeout="fast", max_concurrency="3", user_agent="bot/1")
        assert settings.timeout == DEFAULT_TIMEOUT
        assert settings.max_concurrency == 3
        assert settings.user_agent == "bot/1"


class TestLogLevel:
    def test_case_insensitive(self):
        settings = CacheSettings(log_level="debug")
        assert settings.log_level == "DEBUG"
        assert settings.log_level_number == logging.DEBUG

    def test_unknown_level_uses_default(self, caplog):
        with caplog.at_level(logging.WARNING, logger="imgcache.config.schema"):
            settings = CacheSettings(log_level="loud")
        assert settings.log_level == "WARNING"
        assert settings.log_level_number == logging.WARNING
        assert "LOUD" in caplog.text
