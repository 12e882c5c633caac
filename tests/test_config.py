"""
Tests for configuration loading.
"""

import logging

import pytest
from pydantic import ValidationError

from idcard_liveness.config import ClassifierConfig, Settings, get_settings, load_config, setup_logging
from idcard_liveness.models.generation import MotionPattern


class TestLoadConfig:
    """Tests for file, environment and default sources."""

    def test_defaults(self, isolated_env):
        """With no file and no overrides the defaults apply."""
        settings = load_config()
        assert settings.generator.frames_per_second == 15
        assert settings.generator.seed is None
        assert settings.classifier.live_threshold == 0.65
        assert settings.classifier.min_frames == 10
        assert settings.logging.format == "text"

    def test_yaml_file(self, isolated_env):
        """Values are read from liveness.yaml in the working directory."""
        (isolated_env / "liveness.yaml").write_text(
            "generator:\n"
            "  frames_per_second: 30\n"
            "  motion_pattern: tilt-only\n"
            "classifier:\n"
            "  live_threshold: 0.8\n"
        )
        settings = load_config()
        assert settings.generator.frames_per_second == 30
        assert settings.generator.motion_pattern == MotionPattern.TILT_ONLY
        assert settings.classifier.live_threshold == 0.8

    def test_explicit_path(self, isolated_env):
        """An explicit path wins over the working directory search."""
        path = isolated_env / "custom.yaml"
        path.write_text("classifier:\n  min_frames: 20\n")
        assert load_config(str(path)).classifier.min_frames == 20

    def test_path_from_environment(self, isolated_env, monkeypatch):
        """LIVENESS_CONFIG_PATH points at the config file."""
        path = isolated_env / "elsewhere.yml"
        path.write_text("report:\n  review_lower: 0.3\n")
        monkeypatch.setenv("LIVENESS_CONFIG_PATH", str(path))
        assert load_config().report.review_lower == 0.3

    def test_missing_explicit_path(self, isolated_env):
        """A named file that does not exist is an error."""
        with pytest.raises(FileNotFoundError):
            load_config(str(isolated_env / "nope.yaml"))

    def test_empty_file(self, isolated_env):
        """An empty YAML file falls back to defaults."""
        (isolated_env / "liveness.yaml").write_text("")
        assert load_config() == Settings()

    def test_env_overrides_file(self, isolated_env, monkeypatch):
        """Environment variables take precedence over the file."""
        (isolated_env / "liveness.yaml").write_text("generator:\n  duration_seconds: 5\n")
        monkeypatch.setenv("LIVENESS_DURATION", "2")
        monkeypatch.setenv("LIVENESS_SEED", "11")
        monkeypatch.setenv("LIVENESS_MIN_FRAMES", "4")
        monkeypatch.setenv("LIVENESS_LOG_LEVEL", "DEBUG")
        settings = load_config()
        assert settings.generator.duration_seconds == 2
        assert settings.generator.seed == 11
        assert settings.classifier.min_frames == 4
        assert settings.logging.level == "DEBUG"

    @pytest.mark.parametrize(
        "content",
        [
            "generator:\n  frames_per_second: 0\n",
            "generator:\n  motion_pattern: spiral\n",
            "classifier:\n  live_threshold: 1.5\n",
            "layered:\n  min_layers: 7\n",
            (
                "classifier:\n"
                "  depth_variation: [{threshold: 0.1, points: 0}]\n"
                "  hologram_presence: [{threshold: 0.1, points: 0}]\n"
                "  motion_consistency: [{threshold: 0.1, points: 0}]\n"
                "  lighting_variation: [{threshold: 0.1, points: 0}]\n"
            ),
        ],
    )
    def test_invalid_values(self, isolated_env, content):
        """Out-of-range values fail validation."""
        (isolated_env / "liveness.yaml").write_text(content)
        with pytest.raises(ValidationError):
            load_config()


class TestSettingsConversion:
    """Tests for building runtime objects from settings."""

    def test_generation_config(self):
        """Generator settings become a GenerationConfig."""
        config = Settings().generator.to_generation_config()
        assert config.total_frames == 45

    def test_scoring_thresholds(self):
        """Default classifier settings rebuild the default ladders."""
        thresholds = Settings().classifier.to_scoring_thresholds()
        assert thresholds.max_score == 100
        assert thresholds.depth_variation.award(0.4) == 20
        assert thresholds.live_threshold == 0.65

    def test_custom_bands(self):
        """Ladders can be reshaped from configuration."""
        settings = Settings.model_validate(
            {"classifier": {"lighting_variation": [{"threshold": 0.2, "points": 40}]}}
        )
        assert settings.classifier.to_scoring_thresholds().max_score == 120

    def test_all_zero_ladders_rejected(self):
        """A classifier section that can never score is invalid."""
        zero = [{"threshold": 0.1, "points": 0}]
        with pytest.raises(ValidationError, match="must award points"):
            ClassifierConfig(
                depth_variation=zero,
                hologram_presence=zero,
                motion_consistency=zero,
                lighting_variation=zero,
            )

    def test_single_scoring_ladder_allowed(self):
        """One ladder with points is enough."""
        zero = [{"threshold": 0.1, "points": 0}]
        config = ClassifierConfig(
            depth_variation=zero, hologram_presence=zero, motion_consistency=zero
        )
        assert config.to_scoring_thresholds().max_score == 20

    def test_layer_thresholds_and_window(self):
        """Layered and report sections convert to their runtime types."""
        settings = Settings()
        assert settings.layered.to_layer_thresholds().min_layers == 3
        window = settings.report.to_review_window()
        assert (window.lower, window.upper) == (0.4, 0.8)

    def test_setup_logging(self, monkeypatch):
        """Logging is configured at the requested level."""
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
        settings = Settings.model_validate({"logging": {"level": "warning", "format": "json"}})
        setup_logging(settings)
        assert calls["level"] == logging.WARNING
        assert calls["format"].startswith('{"time"')

    def test_get_settings_is_cached(self, isolated_env):
        """Settings are loaded once per process."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
