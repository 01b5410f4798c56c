"""
Environment configuration.

Values come from the process environment, with a local .env file loaded
first when present.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from loci.supermemo.config import SchedulerConfiguration


logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///loci.db"
TEST_DATABASE_URL = "sqlite:///test_loci.db"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def is_test_mode() -> bool:
    """Check if running in test mode."""
    return _get_bool("LOCI_TEST_MODE") is True


def get_database_url() -> str:
    """
    Get the database URL from environment variables.

    LOCI_DATABASE_URL wins when set. Otherwise a local SQLite file is used,
    a separate one in test mode.
    """
    url = os.getenv("LOCI_DATABASE_URL")
    if url:
        return url
    return TEST_DATABASE_URL if is_test_mode() else DEFAULT_DATABASE_URL


def _get_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _get_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _get_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_scheduler_configuration() -> SchedulerConfiguration:
    """
    Build a SchedulerConfiguration from LOCI_* environment variables.

    Unset variables keep their defaults. LOCI_SCHEDULER_MODE=basic selects
    plain SM-2 before the individual overrides are applied.

    Raises:
        ValueError: if a variable cannot be parsed or the result is invalid
    """
    overrides: dict = {}

    mode = os.getenv("LOCI_SCHEDULER_MODE", "enhanced").strip().lower()
    if mode == "basic":
        overrides.update(SchedulerConfiguration.basic().model_dump())
    elif mode != "enhanced":
        logger.warning("Unknown LOCI_SCHEDULER_MODE %r, using enhanced", mode)

    max_interval = _get_int("LOCI_MAX_INTERVAL_DAYS")
    if max_interval is not None:
        overrides["max_interval_days"] = max_interval

    min_ease = _get_float("LOCI_MIN_EASE_FACTOR")
    if min_ease is not None:
        overrides["min_ease_factor"] = min_ease

    use_bias = _get_bool("LOCI_USE_ACCURACY_BIAS")
    if use_bias is not None:
        overrides["use_accuracy_bias"] = use_bias

    low = _get_float("LOCI_ACCURACY_BIAS_LOW")
    high = _get_float("LOCI_ACCURACY_BIAS_HIGH")
    if low is not None or high is not None:
        default_low, default_high = SchedulerConfiguration().accuracy_bias_range
        overrides["accuracy_bias_range"] = (
            default_low if low is None else low,
            default_high if high is None else high,
        )

    return SchedulerConfiguration(**overrides)
