"""
Pacing Engine - Bell-curve shaped delays between log entries

A PacingProfile turns one base delay into a per-iteration delay that
follows an un-normalized Gaussian over a period, so output speeds up
towards the edges of the period and slows down around its middle.
"""
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Union

import numpy as np

from .exceptions import PacingConfigError

DEFAULT_MIN_FACTOR = 0.2
DEFAULT_MAX_FACTOR = 2.0
DEFAULT_PERIOD_LENGTH = 1000

# Longer runs get a closed-form duration estimate instead of a sum
EXACT_DURATION_LIMIT = 1_000_000
DURATION_CHUNK_SIZE = 100_000


@dataclass(frozen=True)
class Bounded:
    """A run that stops after a fixed number of iterations"""
    count: int

    def __str__(self) -> str:
        return str(self.count)


@dataclass(frozen=True)
class Unbounded:
    """A run that continues until the process is stopped"""

    def __str__(self) -> str:
        return "unbounded"


UNBOUNDED = Unbounded()

RunLength = Union[Bounded, Unbounded]


def as_run_length(value: Union[RunLength, int, float, None]) -> RunLength:
    """Normalize a line count, None or infinity into a RunLength"""
    if isinstance(value, (Bounded, Unbounded)):
        return value
    if value is None or (isinstance(value, float) and math.isinf(value) and value > 0):
        return UNBOUNDED
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PacingConfigError(f"Invalid iteration count: {value!r}")
    if not math.isfinite(value) or value <= 0 or value != int(value):
        raise PacingConfigError(f"Iteration count must be a positive integer, got {value!r}")
    return Bounded(int(value))


@dataclass(frozen=True)
class PacingProfile:
    """Immutable description of a bell-curve pacing run.

    Use ``PacingProfile.create`` to build one; it fills in the derived
    defaults and rejects parameters that would divide by zero or produce
    negative delays.
    """
    base_value: float
    run_length: RunLength
    min_factor: float
    max_factor: float
    period_length: float
    std_dev: float

    @classmethod
    def create(
        cls,
        base_value: float,
        total_iterations: Union[RunLength, int, float, None] = UNBOUNDED,
        min_factor: float = DEFAULT_MIN_FACTOR,
        max_factor: float = DEFAULT_MAX_FACTOR,
        period_length: Optional[float] = None,
        std_dev: Optional[float] = None,
    ) -> "PacingProfile":
        """Build a validated profile from a base delay and options"""
        run_length = as_run_length(total_iterations)

        if isinstance(run_length, Bounded):
            if period_length is not None:
                raise PacingConfigError(
                    "period_length only applies to unbounded runs; "
                    "a bounded run always spans a single period"
                )
            period = float(run_length.count)
        else:
            period = float(DEFAULT_PERIOD_LENGTH if period_length is None else period_length)

        deviation = period / 6.0 if std_dev is None else float(std_dev)

        profile = cls(
            base_value=float(base_value),
            run_length=run_length,
            min_factor=float(min_factor),
            max_factor=float(max_factor),
            period_length=period,
            std_dev=deviation,
        )
        profile.validate()
        return profile

    @classmethod
    def flat(cls, base_value: float, total_iterations: Union[RunLength, int, float, None] = UNBOUNDED) -> "PacingProfile":
        """Profile that always returns base_value"""
        return cls.create(base_value, total_iterations, min_factor=1.0, max_factor=1.0)

    def validate(self) -> None:
        """Raise PacingConfigError for parameters that break the formula"""
        for name in ("base_value", "min_factor", "max_factor", "period_length", "std_dev"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise PacingConfigError(f"{name} must be finite, got {value}")

        if self.base_value < 0:
            raise PacingConfigError(f"base_value must be >= 0, got {self.base_value}")
        if self.min_factor < 0:
            raise PacingConfigError(f"min_factor must be >= 0, got {self.min_factor}")
        if self.min_factor > self.max_factor:
            raise PacingConfigError(
                f"min_factor ({self.min_factor}) must not exceed max_factor ({self.max_factor})"
            )
        if self.period_length <= 0:
            raise PacingConfigError(f"period_length must be > 0, got {self.period_length}")
        if self.std_dev <= 0:
            raise PacingConfigError(f"std_dev must be > 0, got {self.std_dev}")

    @property
    def mean(self) -> float:
        return self.period_length / 2.0

    @property
    def is_unbounded(self) -> bool:
        return isinstance(self.run_length, Unbounded)

    @property
    def min_value(self) -> float:
        return self.base_value * self.min_factor

    @property
    def max_value(self) -> float:
        return self.base_value * self.max_factor

    def _position(self, iteration: int) -> float:
        if iteration < 0:
            raise ValueError(f"iteration must be >= 0, got {iteration}")
        # Unbounded runs repeat the curve every period
        if self.is_unbounded:
            return iteration % self.period_length
        return iteration

    def raw_factor(self, iteration: int) -> float:
        """Gaussian kernel value in [0, 1] for an iteration, unscaled"""
        z_score = (self._position(iteration) - self.mean) / self.std_dev
        # z * z overflows to inf where z ** 2 would raise
        return math.exp(-(z_score * z_score) / 2)

    def value_at(self, iteration: int) -> float:
        """Delay in seconds to wait after the given 0-based iteration"""
        factor = self.min_factor + (self.max_factor - self.min_factor) * self.raw_factor(iteration)
        return self.base_value * factor

    def values(self, iterations: Iterable[int]) -> np.ndarray:
        """Vectorized value_at over a sequence of iterations"""
        if isinstance(iterations, range):
            positions = np.arange(iterations.start, iterations.stop, iterations.step, dtype=float)
        else:
            positions = np.asarray(list(iterations), dtype=float)
        if positions.size and positions.min() < 0:
            raise ValueError("iterations must be >= 0")
        if self.is_unbounded:
            positions = np.mod(positions, self.period_length)

        with np.errstate(over="ignore"):
            z_scores = (positions - self.mean) / self.std_dev
            gaussian = np.exp(-(z_scores * z_scores) / 2)
        return self.base_value * (self.min_factor + (self.max_factor - self.min_factor) * gaussian)

    def expected_duration(self, iterations: Optional[int] = None) -> float:
        """Total seconds spent sleeping over a run.

        Bounded runs default to their full length, unbounded runs to one
        period. Up to EXACT_DURATION_LIMIT iterations the delays are summed
        in chunks; longer runs use approximate_duration.
        """
        if iterations is None:
            if isinstance(self.run_length, Bounded):
                iterations = self.run_length.count
            else:
                iterations = int(math.ceil(self.period_length))

        if iterations > EXACT_DURATION_LIMIT:
            return self.approximate_duration(iterations)

        total = 0.0
        for start in range(0, iterations, DURATION_CHUNK_SIZE):
            chunk = range(start, min(start + DURATION_CHUNK_SIZE, iterations))
            total += float(self.values(chunk).sum())
        return total

    def _kernel_area(self, start: float, stop: float) -> float:
        """Integral of the Gaussian kernel between two positions"""
        scale = self.std_dev * math.sqrt(2)
        return self.std_dev * math.sqrt(math.pi / 2) * (
            math.erf((stop - self.mean) / scale) - math.erf((start - self.mean) / scale)
        )

    def approximate_duration(self, iterations: int) -> float:
        """Closed-form estimate of expected_duration using the Gaussian integral.

        Each iteration is treated as the unit interval centered on it, so
        the estimate converges on the exact sum as the period grows.
        """
        if self.is_unbounded:
            full_periods, remainder = divmod(iterations, self.period_length)
            area = (
                full_periods * self._kernel_area(-0.5, self.period_length - 0.5)
                + self._kernel_area(-0.5, remainder - 0.5)
            )
        else:
            area = self._kernel_area(-0.5, iterations - 0.5)
        return self.base_value * (self.min_factor * iterations + (self.max_factor - self.min_factor) * area)

    def describe(self) -> str:
        """One-line human summary used in startup logging"""
        return (
            f"base={self.base_value:g}s range=[{self.min_value:g}s, {self.max_value:g}s] "
            f"period={self.period_length:g} std_dev={self.std_dev:g} run={self.run_length}"
        )
