"""
Test Configuration
==================

Pytest fixtures and test configuration for the liveness simulator.
"""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Provide a seeded random source for reproducible tremor amplitudes."""
    return np.random.default_rng(1234)


@pytest.fixture
def genuine_frames(rng):
    """Provide a standard genuine sequence (3 s at 15 fps, all models on)."""
    from idcard_liveness.models.generation import GenerationConfig
    from idcard_liveness.motion.generator import MotionFrameGenerator

    return MotionFrameGenerator(rng=rng).generate(GenerationConfig())


@pytest.fixture
def spoof_baseline(rng):
    """Provide the historical spoof baseline (hologram off, noise on)."""
    from idcard_liveness.motion.generator import MotionFrameGenerator
    from idcard_liveness.spoof.transformer import DEFAULT_SPOOF_BASELINE

    return MotionFrameGenerator(rng=rng).generate(DEFAULT_SPOOF_BASELINE)


@pytest.fixture
def make_frame():
    """Provide a factory for hand-built frames with controlled metrics."""
    from idcard_liveness.models.frame import (
        CardFrame,
        DepthCues,
        FrameMetadata,
        Reflectivity,
    )

    def _make(
        index: int,
        depth_confidence: float = 0.0,
        angle_y: float = 0.0,
        lighting: float = 1.0,
        intensity: float = 0.0,
    ) -> CardFrame:
        return CardFrame(
            timestamp=index * 100.0,
            frame_index=index,
            angle_x=0.0,
            angle_y=angle_y,
            rotation_z=0.0,
            distance=1.0,
            lighting=lighting,
            reflectivity=Reflectivity(intensity=intensity, specular_angle=0.0),
            depth=DepthCues(
                card_thickness=0.0,
                edge_shadow=0.0,
                parallax_factor=2.0,
                perspective_distortion=0.0,
                depth_confidence=depth_confidence,
            ),
            metadata=FrameMetadata(motion_phase="tilt-left-right", progress=0),
        )

    return _make


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run in an empty directory with no LIVENESS_* overrides."""
    import os

    for key in list(os.environ):
        if key.startswith("LIVENESS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
