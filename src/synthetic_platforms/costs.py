from __future__ import annotations

from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Interval(BaseModel):
    lower: float = Field(..., ge=0.0)
    upper: float = Field(..., ge=0.0)
    correctness_prob: float = Field(1.0, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _validate_bounds(self):  # noqa: ANN202
        if self.lower > self.upper:
            raise ValueError(f"lower bound {self.lower} exceeds upper bound {self.upper}")
        return self


class LoadEstimate(_Interval):
    @classmethod
    def exactly(cls, value: float) -> "LoadEstimate":
        return cls(lower=value, upper=value)


class LoadProfile(BaseModel):
    cpu: LoadEstimate = Field(default_factory=lambda: LoadEstimate.exactly(0.0))
    disk: LoadEstimate = Field(default_factory=lambda: LoadEstimate.exactly(0.0))
    network: LoadEstimate = Field(default_factory=lambda: LoadEstimate.exactly(0.0))

    model_config = ConfigDict(frozen=True, extra="forbid")


class TimeEstimate(_Interval):
    """Execution time in milliseconds."""

    def plus(self, other: "TimeEstimate") -> "TimeEstimate":
        return TimeEstimate(
            lower=self.lower + other.lower,
            upper=self.upper + other.upper,
            correctness_prob=min(self.correctness_prob, other.correctness_prob),
        )

    def times(self, factor: float) -> "TimeEstimate":
        return TimeEstimate(lower=self.lower * factor, upper=self.upper * factor, correctness_prob=self.correctness_prob)


class CostEstimate(_Interval):
    pass


class LoadToTimeConverter(BaseModel):
    ms_per_unit: float = Field(..., ge=0.0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def linear(cls, ms_per_unit: float) -> "LoadToTimeConverter":
        return cls(ms_per_unit=ms_per_unit)

    def convert(self, load: LoadEstimate) -> TimeEstimate:
        return TimeEstimate(
            lower=load.lower * self.ms_per_unit,
            upper=load.upper * self.ms_per_unit,
            correctness_prob=load.correctness_prob,
        )


TimeCombiner = Callable[[TimeEstimate, TimeEstimate, TimeEstimate], TimeEstimate]


def sum_estimates(cpu: TimeEstimate, disk: TimeEstimate, network: TimeEstimate) -> TimeEstimate:
    return cpu.plus(disk).plus(network)


class LoadProfileToTimeConverter(BaseModel):
    """Turns a load profile into a time estimate.

    Each resource is converted on its own, the partial estimates are merged by
    ``combiner`` and the result is scaled by ``stretch``.
    """

    cpu: LoadToTimeConverter
    disk: LoadToTimeConverter
    network: LoadToTimeConverter
    combiner: TimeCombiner = sum_estimates
    stretch: float = Field(1.0, ge=0.0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    def convert(self, profile: LoadProfile) -> TimeEstimate:
        estimate = self.combiner(
            self.cpu.convert(profile.cpu),
            self.disk.convert(profile.disk),
            self.network.convert(profile.network),
        )
        return estimate.times(self.stretch)


class TimeToCostConverter(BaseModel):
    fix_costs: float = Field(0.0, ge=0.0)
    costs_per_ms: float = Field(1.0, ge=0.0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    def convert(self, time: TimeEstimate) -> CostEstimate:
        return CostEstimate(
            lower=self.fix_costs + self.costs_per_ms * time.lower,
            upper=self.fix_costs + self.costs_per_ms * time.upper,
            correctness_prob=time.correctness_prob,
        )

    def convert_without_fix_costs(self, time: TimeEstimate) -> CostEstimate:
        return CostEstimate(
            lower=self.costs_per_ms * time.lower,
            upper=self.costs_per_ms * time.upper,
            correctness_prob=time.correctness_prob,
        )
