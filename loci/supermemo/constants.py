"""
SuperMemo Constants and Parameters

All fixed parameters of the enhanced SuperMemo-2 algorithm in one place.
Tunable values (cap, minimum ease, accuracy bias) live on
SchedulerConfiguration; the defaults are defined here.
"""

from __future__ import annotations

from enum import IntEnum


# ---- Quality Ratings ----

class Quality(IntEnum):
    """Self-assessed recall quality for one review (0-5)."""
    BLACKOUT = 0        # Complete blackout
    INCORRECT = 1       # Incorrect response
    INCORRECT_EASY = 2  # Incorrect but felt easy
    DIFFICULT = 3       # Correct after significant difficulty
    HESITANT = 4        # Correct with some hesitation
    PERFECT = 5         # Perfect, immediate recall

    @property
    def is_successful(self) -> bool:
        """Whether this rating counts as a successful recall (>= 3)."""
        return self.value >= SUCCESS_THRESHOLD

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def coerce(cls, value: "Quality | int") -> "Quality":
        """
        Convert an int or Quality to a Quality.

        Raises:
            ValueError: if value is not one of the six ratings
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Quality must be an int between 0 and 5, got {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Quality must be between 0 and 5, got {value}") from None


_DESCRIPTIONS = {
    Quality.BLACKOUT: "Complete blackout",
    Quality.INCORRECT: "Incorrect",
    Quality.INCORRECT_EASY: "Incorrect but easy",
    Quality.DIFFICULT: "Correct but difficult",
    Quality.HESITANT: "Correct with hesitation",
    Quality.PERFECT: "Perfect recall",
}


# ---- Global Constants ----

SUCCESS_THRESHOLD = 3        # Ratings >= 3 are successful recalls
DEFAULT_EASE_FACTOR = 2.5    # Ease factor of a new item
INITIAL_INTERVAL_DAYS = 1    # Interval of a new item


# ---- Bootstrapping Intervals ----
# Fixed intervals for the first two successful repetitions (classic SM-2)

FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
FAILED_INTERVAL_DAYS = 1


# ---- Configuration Defaults ----

DEFAULT_MAX_INTERVAL_DAYS = 90
DEFAULT_MIN_EASE_FACTOR = 1.3
DEFAULT_USE_ACCURACY_BIAS = True
DEFAULT_ACCURACY_BIAS_RANGE = (0.5, 1.0)

# Cap used by the plain SM-2 configuration (effectively uncapped)
BASIC_MAX_INTERVAL_DAYS = 2**31 - 1


# ---- Engine Information ----

ENGINE_VERSION = "1.0.0"
ENGINE_FEATURES = (
    "90-day interval cap",
    "Accuracy bias multiplier",
    "Load balancing support",
    "Enhanced spaced repetition",
)


def version_string() -> str:
    return f"SuperMemo engine v{ENGINE_VERSION}"


def full_description() -> str:
    return f"{version_string()} - Enhanced SuperMemo with: {', '.join(ENGINE_FEATURES)}"
