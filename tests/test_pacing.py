"""Tests for the bell-curve pacing engine."""

import math

import numpy as np
import pytest

from imbusyyall.exceptions import ConfigError, PacingConfigError
from imbusyyall.pacing import UNBOUNDED, Bounded, PacingProfile, Unbounded, as_run_length


def test_unbounded_defaults():
    """An unbounded profile uses a 1000 iteration period and sigma of period / 6."""
    profile = PacingProfile.create(1.0)
    assert profile.is_unbounded
    assert profile.period_length == 1000
    assert profile.mean == 500
    assert profile.std_dev == pytest.approx(1000 / 6)
    assert profile.min_factor == 0.2
    assert profile.max_factor == 2.0


def test_unbounded_peak_edge_and_wrap():
    """Peak at the period midpoint, near-minimum at the edge, and wraparound."""
    profile = PacingProfile.create(1.0, min_factor=0.2, max_factor=2.0, period_length=1000)
    assert profile.value_at(500) == pytest.approx(2.0)
    assert profile.value_at(0) == pytest.approx(0.2 + 1.8 * math.exp(-4.5))
    assert profile.value_at(1000) == profile.value_at(0)


def test_bounded_run_spans_one_period():
    """A bounded run's period equals its count and peaks at the middle."""
    profile = PacingProfile.create(1.0, total_iterations=100)
    assert profile.run_length == Bounded(100)
    assert profile.period_length == 100
    assert profile.mean == 50
    assert profile.std_dev == pytest.approx(100 / 6)

    values = [profile.value_at(i) for i in range(100)]
    assert max(values) == profile.value_at(50)
    assert profile.value_at(0) == pytest.approx(profile.value_at(100))
    assert profile.value_at(0) < 0.23


def test_bounded_run_does_not_wrap():
    """Past the end of a bounded run the curve keeps decaying instead of repeating."""
    profile = PacingProfile.create(1.0, total_iterations=100)
    assert profile.value_at(150) < profile.value_at(50)
    assert profile.value_at(150) != pytest.approx(profile.value_at(50))


def test_values_stay_within_factor_range():
    """Every delay lies between base * min_factor and base * max_factor."""
    profile = PacingProfile.create(0.5, min_factor=0.3, max_factor=3.0, period_length=250)
    values = profile.values(range(2000))
    assert np.all(values >= 0.5 * 0.3 - 1e-12)
    assert np.all(values <= 0.5 * 3.0 + 1e-12)


def test_periodicity_and_symmetry():
    """Unbounded curves repeat every period and mirror around the mean."""
    profile = PacingProfile.create(2.0, period_length=400)
    for i in (0, 17, 199, 200, 333):
        assert profile.value_at(i) == pytest.approx(profile.value_at(i + 400))
    for d in (1, 50, 123, 200):
        assert profile.value_at(200 - d) == pytest.approx(profile.value_at(200 + d))


def test_value_at_is_deterministic():
    """Calling value_at twice with the same iteration gives the same result."""
    profile = PacingProfile.create(1.0, period_length=77, std_dev=9.5)
    assert profile.value_at(42) == profile.value_at(42)


def test_flat_profile_returns_base_value():
    """Equal min and max factors produce a constant delay."""
    profile = PacingProfile.create(0.75, min_factor=1.0, max_factor=1.0)
    assert all(profile.value_at(i) == pytest.approx(0.75) for i in range(0, 3000, 37))
    assert PacingProfile.flat(0.75, 10).value_at(5) == pytest.approx(0.75)


def test_raw_factor_peaks_at_one():
    """The unscaled kernel is 1.0 at the mean and tends towards 0 at the edges."""
    profile = PacingProfile.create(1.0, total_iterations=600)
    assert profile.raw_factor(300) == pytest.approx(1.0)
    assert profile.raw_factor(0) == pytest.approx(math.exp(-4.5))
    assert 0 < profile.raw_factor(0) < profile.raw_factor(150) < 1


def test_values_matches_value_at():
    """The vectorized curve agrees with the scalar one."""
    profile = PacingProfile.create(1.3, period_length=90, min_factor=0.1, max_factor=4.0)
    iterations = list(range(0, 400, 7))
    expected = [profile.value_at(i) for i in iterations]
    assert np.allclose(profile.values(iterations), expected)


def test_expected_duration():
    """Expected duration sums the delays of the run."""
    flat = PacingProfile.flat(0.5, 20)
    assert flat.expected_duration() == pytest.approx(10.0)

    curved = PacingProfile.create(1.0, total_iterations=50)
    assert curved.expected_duration() == pytest.approx(sum(curved.value_at(i) for i in range(50)))

    unbounded = PacingProfile.flat(0.1)
    assert unbounded.expected_duration() == pytest.approx(100.0)


def test_as_run_length():
    """Counts, None and infinity normalize into Bounded or Unbounded."""
    assert as_run_length(None) is UNBOUNDED
    assert as_run_length(float("inf")) is UNBOUNDED
    assert as_run_length(Unbounded()) == UNBOUNDED
    assert as_run_length(25) == Bounded(25)
    assert as_run_length(25.0) == Bounded(25)
    for bad in (0, -3, 2.5, "10", float("nan")):
        with pytest.raises(PacingConfigError):
            as_run_length(bad)


@pytest.mark.parametrize("kwargs", [
    {"base_value": -1.0},
    {"base_value": 1.0, "min_factor": 3.0, "max_factor": 2.0},
    {"base_value": 1.0, "min_factor": -0.1},
    {"base_value": 1.0, "period_length": 0},
    {"base_value": 1.0, "std_dev": 0},
    {"base_value": 1.0, "std_dev": -2.0},
    {"base_value": float("inf")},
    {"base_value": 1.0, "total_iterations": 10, "period_length": 50},
])
def test_invalid_profiles_fail_at_construction(kwargs):
    """Nonsensical parameters are rejected by create, not by value_at."""
    with pytest.raises(PacingConfigError):
        PacingProfile.create(**kwargs)


def test_pacing_error_is_config_error():
    assert issubclass(PacingConfigError, ConfigError)
    assert issubclass(PacingConfigError, ValueError)


def test_negative_iteration_rejected():
    profile = PacingProfile.create(1.0)
    with pytest.raises(ValueError):
        profile.value_at(-1)
    with pytest.raises(ValueError):
        profile.values([3, -2])


def test_profile_is_immutable():
    profile = PacingProfile.create(1.0)
    with pytest.raises(AttributeError):
        profile.base_value = 2.0


def test_tiny_std_dev_falls_to_minimum():
    """A vanishing std_dev gives the minimum delay away from the mean instead of overflowing."""
    profile = PacingProfile.create(1.0, std_dev=1e-200)
    assert profile.value_at(0) == pytest.approx(0.2)
    assert profile.value_at(500) == pytest.approx(2.0)
    assert profile.raw_factor(123) == 0.0
    assert np.allclose(profile.values([0, 500, 999]), [0.2, 2.0, 0.2])


def test_expected_duration_of_huge_run():
    """Billion-line runs are estimated from the Gaussian integral without building the sequence."""
    count = 10 ** 9
    profile = PacingProfile.create(0.05, total_iterations=count)
    std_dev = count / 6
    area = std_dev * math.sqrt(2 * math.pi) * math.erf(3 / math.sqrt(2))
    expected = 0.05 * (0.2 * count + 1.8 * area)
    assert profile.expected_duration() == pytest.approx(expected, rel=1e-6)

    unbounded = PacingProfile.create(1.0, period_length=1e12)
    assert unbounded.expected_duration() > 0.2 * 1e12


@pytest.mark.parametrize("profile, iterations", [
    (PacingProfile.create(1.0, total_iterations=5000), 5000),
    (PacingProfile.create(0.5, period_length=1000), 5500),
    (PacingProfile.create(2.0, period_length=300, std_dev=40, min_factor=0.1, max_factor=5.0), 1234),
])
def test_approximate_duration_tracks_exact_sum(profile, iterations):
    exact = profile.expected_duration(iterations)
    assert exact == pytest.approx(float(profile.values(range(iterations)).sum()))
    assert profile.approximate_duration(iterations) == pytest.approx(exact, rel=1e-3)


def test_values_accepts_ranges_with_step():
    profile = PacingProfile.create(1.0, period_length=100)
    assert np.allclose(profile.values(range(3, 250, 7)), [profile.value_at(i) for i in range(3, 250, 7)])
