"""
Scheduler configuration.

Immutable bundle of the tunable SuperMemo parameters, validated once at
construction.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from loci.supermemo.constants import (
    BASIC_MAX_INTERVAL_DAYS,
    DEFAULT_ACCURACY_BIAS_RANGE,
    DEFAULT_MAX_INTERVAL_DAYS,
    DEFAULT_MIN_EASE_FACTOR,
    DEFAULT_USE_ACCURACY_BIAS,
)


class SchedulerConfiguration(BaseModel):
    """
    Tunable parameters of the enhanced SuperMemo-2 scheduler.

    Plain SM-2 behavior is obtained with use_accuracy_bias=False and a very
    large max_interval_days (see basic()).
    """
    model_config = ConfigDict(frozen=True)

    max_interval_days: int = Field(
        DEFAULT_MAX_INTERVAL_DAYS, gt=0,
        description="Upper bound on the interval after a successful review"
    )
    min_ease_factor: float = Field(
        DEFAULT_MIN_EASE_FACTOR, gt=0,
        description="Lower bound on the ease factor after a successful review"
    )
    use_accuracy_bias: bool = Field(
        DEFAULT_USE_ACCURACY_BIAS,
        description="Shrink intervals of items with a poor review history"
    )
    accuracy_bias_range: tuple[float, float] = Field(
        DEFAULT_ACCURACY_BIAS_RANGE,
        description="Multiplier applied at 0% and at 100% accuracy"
    )

    @model_validator(mode="after")
    def _check_bias_range(self) -> "SchedulerConfiguration":
        low, high = self.accuracy_bias_range
        if low < 0:
            raise ValueError(f"accuracy_bias_range lower bound {low} must not be negative")
        if low > high:
            raise ValueError(
                f"accuracy_bias_range lower bound {low} exceeds upper bound {high}"
            )
        return self

    @property
    def bias_low(self) -> float:
        return self.accuracy_bias_range[0]

    @property
    def bias_high(self) -> float:
        return self.accuracy_bias_range[1]

    @classmethod
    def basic(cls) -> "SchedulerConfiguration":
        """Plain SM-2: no accuracy bias, no practical interval cap."""
        return cls(
            max_interval_days=BASIC_MAX_INTERVAL_DAYS,
            use_accuracy_bias=False,
        )


DEFAULT_CONFIGURATION = SchedulerConfiguration()
