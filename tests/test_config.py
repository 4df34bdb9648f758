"""Tests for YAML loading, overrides and validated run configuration."""

import logging

import pytest

from imbusyyall.__main__ import parse_args
from imbusyyall.config import RunConfig, apply_overrides, load_config, parse_lines
from imbusyyall.exceptions import ConfigError
from imbusyyall.pacing import UNBOUNDED, Bounded


def test_load_default_config():
    """The bundled config.yaml loads and validates."""
    data = load_config()
    assert data["generator"]["lines"] == 1000
    assert data["generator"]["data_source"] == "rails"
    assert data["pacing"]["min_factor"] == 0.2

    config = RunConfig.from_dict(data)
    assert config.generator.sleep == pytest.approx(0.05)
    assert config.output.color == "auto"


def test_load_missing_config(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "nope.yaml"))


def test_load_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("generator: [lines: 3\n")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_load_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(str(path))


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == {}
    assert RunConfig.from_dict({}).generator.lines == 1000


def test_parse_lines():
    """Counts become ints and INFINITY style tokens become None."""
    assert parse_lines("250") == 250
    assert parse_lines(" 12 ") == 12
    assert parse_lines(7) == 7
    assert parse_lines("INFINITY") is None
    assert parse_lines("infinity") is None
    assert parse_lines("inf") is None
    assert parse_lines(float("inf")) is None
    assert parse_lines(None) is None
    with pytest.raises(ValueError):
        parse_lines("lots")


def test_infinity_lines_gives_unbounded_run():
    config = RunConfig.from_dict({"generator": {"lines": "INFINITY"}})
    assert config.generator.lines is None
    assert config.run_length is UNBOUNDED


@pytest.mark.parametrize("data", [
    {"generator": {"lines": 0}},
    {"generator": {"lines": -5}},
    {"generator": {"lines": "lots"}},
    {"generator": {"sleep": -0.1}},
    {"generator": {"blank_line_chance": 1.5}},
    {"pacing": {"min_factor": 3.0, "max_factor": 2.0}},
    {"pacing": {"std_dev": 0}},
    {"pacing": {"period_length": -10}},
    {"output": {"color": "sometimes"}},
    {"generator": {"unknown": True}},
    {"extra_section": {}},
])
def test_invalid_config_raises_config_error(data):
    with pytest.raises(ConfigError):
        RunConfig.from_dict(data)


def test_build_pacing_bounded():
    """A bounded run gets a single bell curve over its length."""
    config = RunConfig.from_dict({"generator": {"lines": 200, "sleep": 0.5}})
    profile = config.build_pacing()
    assert profile.run_length == Bounded(200)
    assert profile.period_length == 200
    assert profile.base_value == pytest.approx(0.5)
    assert profile.value_at(100) == pytest.approx(1.0)


def test_build_pacing_unbounded_with_period():
    config = RunConfig.from_dict({
        "generator": {"lines": "INFINITY", "sleep": 1.0},
        "pacing": {"period_length": 300, "std_dev": 25, "min_factor": 0.5, "max_factor": 4.0},
    })
    profile = config.build_pacing()
    assert profile.is_unbounded
    assert profile.period_length == 300
    assert profile.std_dev == 25
    assert profile.value_at(150) == pytest.approx(4.0)


def test_build_pacing_disabled_is_flat():
    config = RunConfig.from_dict({"generator": {"lines": 50, "sleep": 0.3}, "pacing": {"enabled": False}})
    profile = config.build_pacing()
    assert profile.value_at(0) == pytest.approx(0.3)
    assert profile.value_at(25) == pytest.approx(0.3)


def test_build_pacing_ignores_period_for_bounded_run(caplog):
    """period_length only shapes unbounded runs; a bounded run warns and ignores it."""
    config = RunConfig.from_dict({"generator": {"lines": 40}, "pacing": {"period_length": 500}})
    with caplog.at_level(logging.WARNING, logger="imbusyyall.config"):
        profile = config.build_pacing()
    assert profile.period_length == 40
    assert "Ignoring period_length" in caplog.text


def test_apply_overrides_from_cli():
    """Command line flags replace YAML values."""
    args = parse_args([
        "-l", "INFINITY", "-s", "0.1", "-d", "nginx", "--seed", "9",
        "--min-factor", "0.5", "--max-factor", "3", "--period", "60",
        "--std-dev", "12", "--color", "never",
    ])
    config = apply_overrides(load_config(), args)
    run_config = RunConfig.from_dict(config)

    assert run_config.generator.lines is None
    assert run_config.generator.sleep == pytest.approx(0.1)
    assert run_config.generator.data_source == "nginx"
    assert run_config.generator.seed == 9
    assert run_config.pacing.min_factor == 0.5
    assert run_config.pacing.max_factor == 3.0
    assert run_config.pacing.period_length == 60
    assert run_config.pacing.std_dev == 12
    assert run_config.output.color == "never"


def test_apply_overrides_keeps_yaml_values():
    args = parse_args([])
    config = apply_overrides({"generator": {"lines": 42, "sleep": 0.2}}, args)
    assert config == {"generator": {"lines": 42, "sleep": 0.2}}


def test_steady_disables_pacing():
    args = parse_args(["--steady"])
    config = apply_overrides({}, args)
    assert config["pacing"]["enabled"] is False


def test_legacy_positional_lines():
    assert parse_args(["500"]).lines == "500"
    assert parse_args(["500", "-l", "20"]).lines == "20"
