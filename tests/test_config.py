"""
Tests for SchedulerConfiguration, quality ratings and environment settings.
"""

import pytest

from loci import settings
from loci.supermemo import (
    BASIC_MAX_INTERVAL_DAYS,
    DEFAULT_CONFIGURATION,
    Quality,
    SchedulerConfiguration,
)
from loci.supermemo.constants import full_description, version_string


LOCI_VARS = [
    "LOCI_DATABASE_URL",
    "LOCI_TEST_MODE",
    "LOCI_SCHEDULER_MODE",
    "LOCI_MAX_INTERVAL_DAYS",
    "LOCI_MIN_EASE_FACTOR",
    "LOCI_USE_ACCURACY_BIAS",
    "LOCI_ACCURACY_BIAS_LOW",
    "LOCI_ACCURACY_BIAS_HIGH",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in LOCI_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ---- SchedulerConfiguration ----

def test_defaults():
    config = DEFAULT_CONFIGURATION

    assert config.max_interval_days == 90
    assert config.min_ease_factor == 1.3
    assert config.use_accuracy_bias is True
    assert config.accuracy_bias_range == (0.5, 1.0)
    assert config.bias_low == 0.5
    assert config.bias_high == 1.0


def test_basic_configuration():
    config = SchedulerConfiguration.basic()

    assert config.use_accuracy_bias is False
    assert config.max_interval_days == BASIC_MAX_INTERVAL_DAYS
    assert config.min_ease_factor == 1.3


@pytest.mark.parametrize("kwargs", [
    {"accuracy_bias_range": (1.0, 0.5)},
    {"accuracy_bias_range": (-1.0, -0.5)},
    {"accuracy_bias_range": (-0.5, 1.0)},
    {"max_interval_days": 0},
    {"max_interval_days": -5},
    {"min_ease_factor": 0},
    {"min_ease_factor": -1.3},
])
def test_invalid_configuration_rejected(kwargs):
    with pytest.raises(ValueError):
        SchedulerConfiguration(**kwargs)


def test_equal_bias_bounds_allowed():
    config = SchedulerConfiguration(accuracy_bias_range=(0.7, 0.7))

    assert config.accuracy_bias_range == (0.7, 0.7)


def test_configuration_is_immutable():
    with pytest.raises(ValueError):
        DEFAULT_CONFIGURATION.max_interval_days = 10

    assert DEFAULT_CONFIGURATION.max_interval_days == 90


# ---- Quality ----

def test_quality_success_threshold():
    assert [q.is_successful for q in Quality] == [False, False, False, True, True, True]


def test_quality_descriptions():
    assert Quality.BLACKOUT.description == "Complete blackout"
    assert Quality.INCORRECT_EASY.description == "Incorrect but easy"
    assert Quality.PERFECT.description == "Perfect recall"


def test_quality_coerce():
    assert Quality.coerce(3) is Quality.DIFFICULT
    assert Quality.coerce(Quality.PERFECT) is Quality.PERFECT
    with pytest.raises(ValueError):
        Quality.coerce(7)


def test_engine_version_info():
    assert version_string() == "SuperMemo engine v1.0.0"
    assert "90-day interval cap" in full_description()


# ---- Environment settings ----

def test_settings_defaults(clean_env):
    assert settings.load_scheduler_configuration() == DEFAULT_CONFIGURATION
    assert settings.get_database_url() == settings.DEFAULT_DATABASE_URL
    assert settings.is_test_mode() is False


def test_settings_test_mode_database(clean_env):
    clean_env.setenv("LOCI_TEST_MODE", "true")

    assert settings.get_database_url() == settings.TEST_DATABASE_URL


@pytest.mark.parametrize("value", ["1", "yes", "ON", "True"])
def test_settings_test_mode_accepts_boolean_spellings(clean_env, value):
    clean_env.setenv("LOCI_TEST_MODE", value)

    assert settings.is_test_mode() is True
    assert settings.get_database_url() == settings.TEST_DATABASE_URL


def test_settings_test_mode_off(clean_env):
    clean_env.setenv("LOCI_TEST_MODE", "0")

    assert settings.is_test_mode() is False
    assert settings.get_database_url() == settings.DEFAULT_DATABASE_URL


def test_settings_explicit_database_url(clean_env):
    clean_env.setenv("LOCI_TEST_MODE", "true")
    clean_env.setenv("LOCI_DATABASE_URL", "postgresql://loci@localhost/loci")

    assert settings.get_database_url() == "postgresql://loci@localhost/loci"


def test_settings_overrides(clean_env):
    clean_env.setenv("LOCI_MAX_INTERVAL_DAYS", "120")
    clean_env.setenv("LOCI_MIN_EASE_FACTOR", "1.5")
    clean_env.setenv("LOCI_USE_ACCURACY_BIAS", "no")
    clean_env.setenv("LOCI_ACCURACY_BIAS_LOW", "0.6")

    config = settings.load_scheduler_configuration()

    assert config.max_interval_days == 120
    assert config.min_ease_factor == 1.5
    assert config.use_accuracy_bias is False
    assert config.accuracy_bias_range == (0.6, 1.0)


def test_settings_basic_mode(clean_env):
    clean_env.setenv("LOCI_SCHEDULER_MODE", "basic")

    assert settings.load_scheduler_configuration() == SchedulerConfiguration.basic()


def test_settings_basic_mode_with_override(clean_env):
    clean_env.setenv("LOCI_SCHEDULER_MODE", "basic")
    clean_env.setenv("LOCI_MAX_INTERVAL_DAYS", "365")

    config = settings.load_scheduler_configuration()

    assert config.max_interval_days == 365
    assert config.use_accuracy_bias is False


@pytest.mark.parametrize("name, value", [
    ("LOCI_MAX_INTERVAL_DAYS", "ninety"),
    ("LOCI_MIN_EASE_FACTOR", "low"),
    ("LOCI_USE_ACCURACY_BIAS", "maybe"),
    ("LOCI_MAX_INTERVAL_DAYS", "0"),
    ("LOCI_ACCURACY_BIAS_LOW", "1.5"),
    ("LOCI_ACCURACY_BIAS_LOW", "-1.0"),
])
def test_settings_invalid_values(clean_env, name, value):
    clean_env.setenv(name, value)

    with pytest.raises(ValueError):
        settings.load_scheduler_configuration()
