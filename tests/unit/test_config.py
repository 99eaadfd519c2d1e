"""
Tests for settings and logger setup.
"""
import logging

import pytest

from refinery.config import Settings, configure, get_settings, reset_settings
from refinery.log import get_logger


def test_defaults():
    settings = get_settings()
    assert settings.degrade_fraction == 0.5
    assert settings.proof_cache_size == 1024


def test_configure_replaces_fields():
    updated = configure(degrade_fraction=0.25)
    assert updated.degrade_fraction == 0.25
    assert get_settings() is updated
    assert updated.proof_cache_size == 1024


def test_invalid_settings():
    with pytest.raises(ValueError):
        Settings(degrade_fraction=0.0)
    with pytest.raises(ValueError):
        Settings(degrade_fraction=1.5)
    with pytest.raises(ValueError):
        Settings(proof_cache_size=0)
    with pytest.raises(TypeError):
        configure(unknown=1)


def test_environment(monkeypatch):
    monkeypatch.setenv("REFINERY_DEGRADE_FRACTION", "0.75")
    reset_settings()
    assert get_settings().degrade_fraction == 0.75


def test_settings_are_frozen():
    with pytest.raises(AttributeError):
        get_settings().degrade_fraction = 0.1


def test_logger_level_from_environment(monkeypatch):
    monkeypatch.setenv("REFINERY_LOG_LEVEL", "debug")
    logger = get_logger("refinery.test.env_level")
    assert logger.level == logging.DEBUG


def test_logger_bad_level_falls_back(monkeypatch):
    monkeypatch.setenv("REFINERY_LOG_LEVEL", "chatty")
    logger = get_logger("refinery.test.bad_level")
    assert logger.level == logging.WARNING


def test_logger_configured_once():
    logger = get_logger("refinery.test.once")
    assert get_logger("refinery.test.once") is logger
    assert len(logger.handlers) == 1
