"""Layered TOML configuration for the collection summary pipeline.

The packaged ``config.default.toml`` is always loaded first.  A user file
passed on the command line is deep-merged on top of it, and the result is
validated into a :class:`PipelineConfig`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt, ValidationError

if sys.version_info >= (3, 11):
    import tomllib as tomli
else:  # pragma: no cover
    import tomli  # type: ignore

# Intensity divisors used when ``pipeline.intensity_scale`` is not set
DEFAULT_INTENSITY_SCALES: Dict[str, float] = {
    "static": 3.0,
    "external": 10.0,
}


@dataclass
class ConfigError(Exception):
    """Raised when the merged configuration is invalid."""

    code: str
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code}: {self.message}"


class PipelineSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    intensity_scale: Optional[PositiveFloat] = None
    collector_name: Optional[str] = None


class ResolverSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    strategy: Literal["static", "external"] = "static"
    rate_limit_delay_ms: PositiveInt = 1000
    geocode_endpoint: str = "https://nominatim.openstreetmap.org/search"
    timeout: PositiveFloat = 10.0
    user_agent: str = "mineral-globe-data/0.1"
    throttle_policy: Literal["per_specimen", "per_request"] = "per_specimen"
    cache_file: str = "geocode-cache.json"


class OutputSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    summary_file: str = "collection-summary.json"


class PipelineConfig(BaseModel):
    """Validated view of the merged TOML configuration."""

    model_config = ConfigDict(extra="ignore")

    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    @property
    def intensity_scale(self) -> float:
        """Return the active intensity divisor ``K``."""
        if self.pipeline.intensity_scale is not None:
            return self.pipeline.intensity_scale
        return DEFAULT_INTENSITY_SCALES[self.resolver.strategy]

    @property
    def rate_limit_delay(self) -> float:
        """Delay between external lookups, in seconds."""
        return self.resolver.rate_limit_delay_ms / 1000.0

    def cache_path(self, output_dir: Path) -> Path:
        path = Path(self.resolver.cache_file)
        return path if path.is_absolute() else output_dir / path


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    cfg_path = resources.files("config").joinpath("config.default.toml")
    with cfg_path.open("rb") as f:
        config = tomli.load(f)
    if config_path:
        with config_path.open("rb") as f:
            user_cfg = tomli.load(f)
        _deep_update(config, user_cfg)
    return config


def _deep_update(d: Dict[str, Any], u: Dict[str, Any]) -> Dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict) and isinstance(d.get(k), dict):
            _deep_update(d[k], v)
        else:
            d[k] = v
    return d


def parse_config(cfg: Dict[str, Any]) -> PipelineConfig:
    """Validate a merged configuration mapping.

    Raises
    ------
    ConfigError
        If any value is of the wrong type or out of range.
    """

    try:
        return PipelineConfig.model_validate(cfg)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError("invalid_config", problems) from exc


def build_config(
    config_path: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None
) -> PipelineConfig:
    """Load defaults, merge the user file and ``overrides``, then validate."""
    cfg = load_config(config_path)
    if overrides:
        _deep_update(cfg, overrides)
    return parse_config(cfg)


__all__ = [
    "ConfigError",
    "DEFAULT_INTENSITY_SCALES",
    "PipelineConfig",
    "build_config",
    "load_config",
    "parse_config",
]
