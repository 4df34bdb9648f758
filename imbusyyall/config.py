"""
Configuration - YAML defaults, command line overrides and validation
"""
import argparse
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigError
from .pacing import Bounded, PacingProfile, RunLength, as_run_length

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

INFINITY_TOKENS = ("INFINITY", "INF", "UNBOUNDED")


def parse_lines(value: Union[str, int, float, None]) -> Optional[int]:
    """Turn a line count or the INFINITY token into an int, or None for unbounded"""
    if value is None:
        return None
    if isinstance(value, str):
        token = value.strip()
        if token.upper() in INFINITY_TOKENS:
            return None
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected a line count or INFINITY, got {value!r}")
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


class GeneratorSettings(BaseModel):
    """What to generate and how fast"""
    model_config = ConfigDict(extra="forbid")

    lines: Optional[int] = Field(default=1000, gt=0, description="Entries to emit; None runs forever")
    sleep: float = Field(default=0.05, ge=0.0, description="Base delay between entries in seconds")
    data_source: str = Field(default="rails")
    blank_line_chance: float = Field(default=0.5, ge=0.0, le=1.0)
    seed: Optional[int] = None

    @field_validator("lines", mode="before")
    @classmethod
    def _parse_lines(cls, value):
        return parse_lines(value)


class PacingSettings(BaseModel):
    """Bell-curve pacing options"""
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    min_factor: float = Field(default=0.2, ge=0.0)
    max_factor: float = Field(default=2.0, ge=0.0)
    period_length: Optional[float] = Field(default=None, gt=0.0)
    std_dev: Optional[float] = Field(default=None, gt=0.0)

    @model_validator(mode="after")
    def _check_factors(self) -> "PacingSettings":
        if self.min_factor > self.max_factor:
            raise ValueError(
                f"min_factor ({self.min_factor}) must not exceed max_factor ({self.max_factor})"
            )
        return self


class OutputSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    color: str = Field(default="auto", pattern="^(auto|always|never)$")


class RunConfig(BaseModel):
    """Validated configuration for a single run"""
    model_config = ConfigDict(extra="forbid")

    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    pacing: PacingSettings = Field(default_factory=PacingSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        """Validate a raw config dict, raising ConfigError on bad values"""
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    @property
    def run_length(self) -> RunLength:
        return as_run_length(self.generator.lines)

    def build_pacing(self) -> PacingProfile:
        """Create the pacing profile described by this config"""
        run_length = self.run_length
        base_value = self.generator.sleep

        if not self.pacing.enabled:
            return PacingProfile.flat(base_value, run_length)

        period_length = self.pacing.period_length
        if isinstance(run_length, Bounded) and period_length is not None:
            logger.warning(
                f"Ignoring period_length={period_length:g}: a run of {run_length.count} lines uses one period"
            )
            period_length = None

        return PacingProfile.create(
            base_value,
            run_length,
            min_factor=self.pacing.min_factor,
            max_factor=self.pacing.max_factor,
            period_length=period_length,
            std_dev=self.pacing.std_dev,
        )


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from a YAML file"""
    if config_path is None:
        path = DEFAULT_CONFIG_PATH
    else:
        path = Path(config_path)
        if not path.exists():
            # Try relative to package directory
            path = Path(__file__).parent / config_path

    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    logger.debug(f"Loaded configuration from {path}")
    return data


def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Apply command line overrides to config"""

    if args.lines is not None:
        config.setdefault("generator", {})["lines"] = args.lines

    if args.sleep is not None:
        config.setdefault("generator", {})["sleep"] = args.sleep

    if args.data_source is not None:
        config.setdefault("generator", {})["data_source"] = args.data_source

    if args.seed is not None:
        config.setdefault("generator", {})["seed"] = args.seed

    if args.min_factor is not None:
        config.setdefault("pacing", {})["min_factor"] = args.min_factor

    if args.max_factor is not None:
        config.setdefault("pacing", {})["max_factor"] = args.max_factor

    if args.period is not None:
        config.setdefault("pacing", {})["period_length"] = args.period

    if args.std_dev is not None:
        config.setdefault("pacing", {})["std_dev"] = args.std_dev

    if args.steady:
        config.setdefault("pacing", {})["enabled"] = False

    if args.color is not None:
        config.setdefault("output", {})["color"] = args.color

    return config
