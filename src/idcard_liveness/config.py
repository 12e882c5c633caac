"""
ID Card Liveness Simulator Configuration
========================================

This module handles configuration loading for the command-line front end.

The simulation core never reads configuration on its own: generators,
transformers and classifiers take explicit arguments. Settings are only
loaded when a caller asks for them (get_settings / load_config).

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. liveness.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    LIVENESS_CONFIG_PATH     -> config file location
    LIVENESS_SEED            -> generator.seed
    LIVENESS_DURATION        -> generator.duration_seconds
    LIVENESS_FPS             -> generator.frames_per_second
    LIVENESS_MOTION_PATTERN  -> generator.motion_pattern
    LIVENESS_LIVE_THRESHOLD  -> classifier.live_threshold
    LIVENESS_MIN_FRAMES      -> classifier.min_frames
    LIVENESS_LOG_LEVEL       -> logging.level

Example:
    from idcard_liveness.config import get_settings

    settings = get_settings()
    print(settings.generator.frames_per_second)
    print(settings.classifier.live_threshold)
"""

import os
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, model_validator

from idcard_liveness.analysis.layered import LayerThresholds
from idcard_liveness.analysis.scoring import MetricLadder, ScoreBand, ScoringThresholds
from idcard_liveness.models.generation import GenerationConfig, MotionPattern
from idcard_liveness.observability.report import ReviewWindow


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class GeneratorConfig(BaseModel):
    """Default generation parameters."""

    duration_seconds: float = Field(default=3.0, gt=0, description="Capture length (s)")
    frames_per_second: float = Field(default=15.0, gt=0, description="Capture rate")
    include_hologram: bool = Field(default=True, description="Simulate hologram")
    include_noise: bool = Field(default=True, description="Simulate hand tremor")
    motion_pattern: MotionPattern = Field(
        default=MotionPattern.COMPLETE,
        description="complete, tilt-only, rotate-only or distance-only",
    )
    seed: Optional[int] = Field(
        default=None,
        ge=0,
        description="Seed for tremor amplitudes (None = entropy)",
    )

    def to_generation_config(self) -> GenerationConfig:
        return GenerationConfig(
            duration_seconds=self.duration_seconds,
            frames_per_second=self.frames_per_second,
            include_hologram=self.include_hologram,
            include_noise=self.include_noise,
            motion_pattern=self.motion_pattern,
        )


class BandConfig(BaseModel):
    """One scoring band: strictly above threshold earns points."""

    threshold: float = Field(..., description="Exclusive lower bound")
    points: int = Field(..., ge=0, description="Points awarded")


def _bands(*pairs) -> List[BandConfig]:
    return [BandConfig(threshold=t, points=p) for t, p in pairs]


class ClassifierConfig(BaseModel):
    """Scoring ladders and verdict thresholds."""

    min_frames: int = Field(default=10, ge=1, description="Shorter sequences short-circuit")
    live_threshold: float = Field(
        default=0.65,
        ge=0,
        lt=1.0,
        description="Confidence must strictly exceed this to be live",
    )
    depth_variation: List[BandConfig] = Field(
        default_factory=lambda: _bands((0.5, 30), (0.3, 20), (0.1, 10)),
        min_length=1,
    )
    hologram_presence: List[BandConfig] = Field(
        default_factory=lambda: _bands((0.4, 25), (0.2, 15)),
        min_length=1,
    )
    motion_consistency: List[BandConfig] = Field(
        default_factory=lambda: _bands((0.7, 25), (0.5, 15)),
        min_length=1,
    )
    lighting_variation: List[BandConfig] = Field(
        default_factory=lambda: _bands((0.15, 20), (0.08, 10)),
        min_length=1,
    )

    @model_validator(mode="after")
    def validate_ladders(self) -> "ClassifierConfig":
        """Ensure at least one band awards points."""
        ladders = (
            self.depth_variation,
            self.hologram_presence,
            self.motion_consistency,
            self.lighting_variation,
        )
        if all(band.points == 0 for bands in ladders for band in bands):
            raise ValueError("At least one scoring band must award points")
        return self

    def to_scoring_thresholds(self) -> ScoringThresholds:
        def ladder(bands: List[BandConfig]) -> MetricLadder:
            return MetricLadder(tuple(ScoreBand(b.threshold, b.points) for b in bands))

        return ScoringThresholds(
            depth_variation=ladder(self.depth_variation),
            hologram_presence=ladder(self.hologram_presence),
            motion_consistency=ladder(self.motion_consistency),
            lighting_variation=ladder(self.lighting_variation),
            live_threshold=self.live_threshold,
            min_frames=self.min_frames,
        )


class LayeredConfig(BaseModel):
    """Layered detector thresholds."""

    depth_range: float = Field(default=0.4, ge=0)
    hologram_mean: float = Field(default=0.3, ge=0, le=1.0)
    hologram_peak: float = Field(default=0.5, ge=0, le=1.0)
    motion_max_step: float = Field(default=15.0, gt=0)
    motion_smoothness: float = Field(default=0.5, ge=0, le=1.0)
    lighting_range: float = Field(default=0.1, ge=0)
    min_layers: int = Field(default=3, ge=1, le=4)

    def to_layer_thresholds(self) -> LayerThresholds:
        return LayerThresholds(**self.model_dump())


class ReportConfig(BaseModel):
    """Verification report configuration."""

    review_lower: float = Field(
        default=0.4,
        ge=0,
        le=1.0,
        description="Manual review above this confidence (exclusive)",
    )
    review_upper: float = Field(
        default=0.8,
        ge=0,
        le=1.0,
        description="Manual review below this confidence (exclusive)",
    )

    def to_review_window(self) -> ReviewWindow:
        return ReviewWindow(lower=self.review_lower, upper=self.review_upper)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for the liveness simulator.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    layered: LayeredConfig = Field(default_factory=LayeredConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to liveness.yaml. If None, uses
            LIVENESS_CONFIG_PATH or searches the working directory.

    Returns:
        Settings: Loaded configuration

    Raises:
        FileNotFoundError: If an explicitly given path does not exist
        pydantic.ValidationError: If the merged configuration is invalid
    """
    if config_path is None:
        config_path = os.environ.get("LIVENESS_CONFIG_PATH")
    elif not Path(config_path).exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    if config_path is None:
        for path in (Path("liveness.yaml"), Path("liveness.yml")):
            if path.exists():
                config_path = str(path)
                break

    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Generator settings
    if env_seed := os.environ.get("LIVENESS_SEED"):
        config_data.setdefault("generator", {})["seed"] = int(env_seed)
    if env_duration := os.environ.get("LIVENESS_DURATION"):
        config_data.setdefault("generator", {})["duration_seconds"] = float(env_duration)
    if env_fps := os.environ.get("LIVENESS_FPS"):
        config_data.setdefault("generator", {})["frames_per_second"] = float(env_fps)
    if env_pattern := os.environ.get("LIVENESS_MOTION_PATTERN"):
        config_data.setdefault("generator", {})["motion_pattern"] = env_pattern

    # Classifier settings
    if env_live := os.environ.get("LIVENESS_LIVE_THRESHOLD"):
        config_data.setdefault("classifier", {})["live_threshold"] = float(env_live)
    if env_min := os.environ.get("LIVENESS_MIN_FRAMES"):
        config_data.setdefault("classifier", {})["min_frames"] = int(env_min)

    # Logging settings
    if env_log := os.environ.get("LIVENESS_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return load_config()
