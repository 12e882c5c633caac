"""
Tests for the motion frame generator, kinematics and surface physics.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from idcard_liveness.models.generation import GenerationConfig, MotionPattern, MotionPhase
from idcard_liveness.motion.generator import MotionFrameGenerator, generate_frames
from idcard_liveness.motion.kinematics import (
    PHASE_KINEMATICS,
    compute_pose,
    phase_local_progress,
    select_phase,
)
from idcard_liveness.motion.physics import compute_hand_noise, is_key_frame


class TestGenerationConfig:
    """Tests for generation configuration validation."""

    def test_defaults(self):
        """Default config is 3 s at 15 fps with everything enabled."""
        config = GenerationConfig()
        assert config.duration_seconds == 3
        assert config.frames_per_second == 15
        assert config.include_hologram is True
        assert config.include_noise is True
        assert config.motion_pattern == MotionPattern.COMPLETE
        assert config.total_frames == 45

    def test_camel_case_keys_accepted(self):
        """Config parses the camelCase wire form."""
        config = GenerationConfig.model_validate(
            {"durationSeconds": 2, "framesPerSecond": 10, "motionPattern": "tilt-only"}
        )
        assert config.total_frames == 20
        assert config.motion_pattern == MotionPattern.TILT_ONLY

    @pytest.mark.parametrize(
        "overrides",
        [
            {"duration_seconds": 0},
            {"duration_seconds": -1},
            {"frames_per_second": 0},
            {"frames_per_second": float("nan")},
            {"motion_pattern": "zigzag"},
        ],
    )
    def test_invalid_config_rejected(self, overrides):
        """Non-positive durations/rates and unknown patterns are rejected."""
        with pytest.raises(ValidationError):
            GenerationConfig(**overrides)

    def test_frame_count_floors(self):
        """Frame count is floor(duration * fps)."""
        assert GenerationConfig(duration_seconds=1.5, frames_per_second=7).total_frames == 10
        assert GenerationConfig(duration_seconds=0.05, frames_per_second=10).total_frames == 0


class TestSequenceShape:
    """Tests for frame count, ordering and timing."""

    @pytest.mark.parametrize(
        "duration,fps,expected",
        [(3, 15, 45), (1, 10, 10), (2, 1, 2), (1, 60, 60), (3, 30, 90)],
    )
    def test_frame_count(self, rng, duration, fps, expected):
        """Generator emits floor(duration * fps) frames."""
        frames = MotionFrameGenerator(rng=rng).generate(
            GenerationConfig(duration_seconds=duration, frames_per_second=fps)
        )
        assert len(frames) == expected

    def test_indices_and_timestamps(self, genuine_frames):
        """Frame i sits at i and is stamped at i * 1000 / fps ms."""
        for i, frame in enumerate(genuine_frames):
            assert frame.frame_index == i
            assert frame.timestamp == pytest.approx(i * 1000 / 15)

    def test_timestamps_strictly_increase(self, genuine_frames):
        """Timestamps are strictly increasing."""
        stamps = [f.timestamp for f in genuine_frames]
        assert all(b > a for a, b in zip(stamps, stamps[1:]))

    def test_zero_frame_config_returns_empty(self, rng):
        """A duration shorter than one interval yields no frames."""
        generator = MotionFrameGenerator(rng=rng)
        frames = generator.generate(
            GenerationConfig(duration_seconds=0.05, frames_per_second=10)
        )
        assert frames == ()
        assert generator.sequences_generated == 0

    def test_sequences_generated_counter(self, rng):
        """Counter increments per non-empty sequence."""
        generator = MotionFrameGenerator(rng=rng)
        generator.generate()
        generator.generate(GenerationConfig(duration_seconds=1, frames_per_second=10))
        assert generator.sequences_generated == 2

    def test_returns_immutable_tuple(self, genuine_frames):
        """Sequences are tuples of frozen frames."""
        assert isinstance(genuine_frames, tuple)
        with pytest.raises(ValidationError):
            genuine_frames[0].lighting = 2.0


class TestKeyFramesAndProgress:
    """Tests for key frame flags and progress annotation."""

    def test_key_frames_standard_sequence(self, genuine_frames):
        """45 frames: first, last, and the 25/50/75% transitions."""
        keys = {f.frame_index for f in genuine_frames if f.metadata.is_key_frame}
        assert keys == {0, 11, 22, 33, 44}

    def test_key_frames_twenty_frames(self):
        """20 frames: transitions at 5, 10 and 15."""
        keys = {i for i in range(20) if is_key_frame(i, 20)}
        assert keys == {0, 5, 10, 15, 19}

    def test_progress_is_rounded_percent(self, genuine_frames):
        """Progress is round(100 * i / N)."""
        assert genuine_frames[0].metadata.progress == 0
        assert genuine_frames[20].metadata.progress == 44
        assert genuine_frames[44].metadata.progress == 98

    def test_progress_half_rounds_up(self, rng):
        """An exact half percent rounds up."""
        # 1/8 = 12.5%
        frames = MotionFrameGenerator(rng=rng).generate(
            GenerationConfig(duration_seconds=1, frames_per_second=8)
        )
        assert frames[1].metadata.progress == 13


class TestKinematics:
    """Tests for phase selection and pose computation."""

    def test_complete_pattern_phase_order(self, genuine_frames):
        """Complete sequences walk through the four phases in order."""
        assert genuine_frames[0].metadata.motion_phase == "tilt-left-right"
        assert genuine_frames[11].metadata.motion_phase == "tilt-left-right"
        assert genuine_frames[12].metadata.motion_phase == "rotate-clockwise"
        assert genuine_frames[23].metadata.motion_phase == "move-closer-farther"
        assert genuine_frames[34].metadata.motion_phase == "combined-motion"

    def test_select_phase_boundaries(self):
        """Phase boundaries sit at 25, 50 and 75 percent."""
        assert select_phase(0.2499, MotionPattern.COMPLETE) == MotionPhase.TILT_LEFT_RIGHT
        assert select_phase(0.25, MotionPattern.COMPLETE) == MotionPhase.ROTATE_CLOCKWISE
        assert select_phase(0.5, MotionPattern.COMPLETE) == MotionPhase.MOVE_CLOSER_FARTHER
        assert select_phase(0.75, MotionPattern.COMPLETE) == MotionPhase.COMBINED_MOTION

    def test_fixed_pattern_phases(self):
        """Single-phase patterns stay in their phase."""
        assert select_phase(0.9, MotionPattern.TILT_ONLY) == MotionPhase.TILT_LEFT_RIGHT
        assert select_phase(0.1, MotionPattern.ROTATE_ONLY) == MotionPhase.ROTATE_CLOCKWISE
        assert select_phase(0.6, MotionPattern.DISTANCE_ONLY) == MotionPhase.MOVE_CLOSER_FARTHER

    def test_phase_local_progress(self):
        """Complete-pattern phases re-base progress; fixed patterns do not."""
        assert phase_local_progress(0.3, MotionPhase.TILT_LEFT_RIGHT, MotionPattern.COMPLETE) == 0.3
        assert phase_local_progress(
            0.375, MotionPhase.ROTATE_CLOCKWISE, MotionPattern.COMPLETE
        ) == pytest.approx(0.5)
        assert phase_local_progress(
            0.375, MotionPhase.ROTATE_CLOCKWISE, MotionPattern.ROTATE_ONLY
        ) == 0.375

    def test_every_phase_has_a_model(self):
        """No phase falls back to a static pose."""
        assert set(PHASE_KINEMATICS) == set(MotionPhase)

    def test_rotate_phase_pose(self, genuine_frames):
        """Frame 20 of the standard sequence sits mid-rotation."""
        frame = genuine_frames[20]
        assert frame.angle_x == pytest.approx(3.21)
        assert frame.angle_y == 0
        assert frame.rotation_z == pytest.approx(8.33)
        assert frame.distance == pytest.approx(1.0)
        assert frame.lighting == pytest.approx(0.923)
        assert frame.reflectivity.intensity == pytest.approx(0.313)
        assert frame.depth.depth_confidence == pytest.approx(0.107)

    def test_tilt_yaw_series_start(self, genuine_frames):
        """Tilt phase yaw follows 25 sin(4 pi t)."""
        yaws = [f.angle_y for f in genuine_frames[:7]]
        assert yaws == pytest.approx([0, 6.89, 13.25, 18.58, 22.47, 24.62, 24.86])

    def test_pose_within_bounds(self, rng):
        """Every pattern stays within its physical envelope."""
        generator = MotionFrameGenerator(rng=rng)
        for pattern in MotionPattern:
            frames = generator.generate(GenerationConfig(motion_pattern=pattern))
            for f in frames:
                assert abs(f.angle_x) <= 30
                assert abs(f.angle_y) <= 30
                assert abs(f.rotation_z) <= 15
                assert 0.8 <= f.distance <= 1.2
                assert 0.7 <= f.lighting <= 1.3
                assert 0 <= f.reflectivity.intensity <= 1
                assert 0 <= f.depth.depth_confidence <= 1

    def test_rotate_only_keeps_yaw_still(self, rng):
        """Pure rotation sweeps roll from -15 and never yaws."""
        frames = generate_frames(
            GenerationConfig(motion_pattern=MotionPattern.ROTATE_ONLY), rng=rng
        )
        assert all(f.angle_y == 0 for f in frames)
        assert frames[0].rotation_z == -15
        assert frames[-1].rotation_z > 14
        assert {f.metadata.motion_phase for f in frames} == {"rotate-clockwise"}

    def test_distance_only_keeps_pitch_still(self, rng):
        """Pure distance motion never pitches."""
        frames = generate_frames(
            GenerationConfig(motion_pattern=MotionPattern.DISTANCE_ONLY), rng=rng
        )
        assert all(f.angle_x == 0 for f in frames)
        assert max(f.distance for f in frames) > 1.15
        assert min(f.distance for f in frames) < 0.85

    def test_compute_pose_is_pure(self):
        """Pose depends only on progress, phase and pattern."""
        a = compute_pose(0.6, MotionPhase.MOVE_CLOSER_FARTHER, MotionPattern.COMPLETE)
        b = compute_pose(0.6, MotionPhase.MOVE_CLOSER_FARTHER, MotionPattern.COMPLETE)
        assert a == b


class TestSurfacePhysics:
    """Tests for hologram, tremor and depth models."""

    def test_hologram_disabled(self, rng):
        """Without a hologram reflectivity is flat and hue fields absent."""
        frames = generate_frames(GenerationConfig(include_hologram=False), rng=rng)
        for f in frames:
            assert f.reflectivity.intensity == 0
            assert f.reflectivity.specular_angle == 0
            assert f.reflectivity.color_shift is None
            assert f.reflectivity.iridescence is None
        assert "colorShift" not in frames[5].to_payload()["reflectivity"]

    def test_hologram_follows_tilt(self, genuine_frames):
        """Hue shift and iridescence rise with viewing angle."""
        flat = genuine_frames[0]
        tilted = genuine_frames[4]
        assert flat.reflectivity.color_shift == 0
        assert flat.reflectivity.iridescence == pytest.approx(0.5)
        assert tilted.reflectivity.color_shift > 20
        assert tilted.reflectivity.iridescence > 0.7
        assert tilted.reflectivity.intensity > flat.reflectivity.intensity

    def test_noise_disabled(self, rng):
        """Disabled tremor zeroes every noise field."""
        frames = generate_frames(GenerationConfig(include_noise=False), rng=rng)
        for f in frames:
            assert f.noise.translation_x == 0
            assert f.noise.translation_y == 0
            assert f.noise.micro_rotation == 0
            assert f.noise.amplitude == 0

    def test_noise_amplitude_range(self, genuine_frames):
        """Tremor amplitude is drawn from [2.0, 2.5]."""
        for f in genuine_frames:
            assert 2.0 <= f.noise.amplitude <= 2.5

    def test_tremor_waveform_ignores_frame_rate(self):
        """The tremor clock is fixed, so frame i is the same at any fps."""
        a = compute_hand_noise(7, True, np.random.default_rng(1))
        b = compute_hand_noise(7, True, np.random.default_rng(2))
        assert a.translation_x == b.translation_x
        assert a.translation_y == b.translation_y
        assert a.micro_rotation == b.micro_rotation

    def test_depth_flat_when_facing_camera(self, genuine_frames):
        """A card squarely facing the camera shows no thickness."""
        depth = genuine_frames[0].depth
        assert depth.card_thickness == 0
        assert depth.edge_shadow == 0
        assert depth.depth_confidence == 0
        assert depth.parallax_factor == pytest.approx(2.0)

    def test_max_depth_confidence(self, genuine_frames):
        """Peak depth confidence of the standard sequence."""
        assert max(f.depth.depth_confidence for f in genuine_frames) == pytest.approx(0.865)


class TestDeterminism:
    """Tests for reproducibility."""

    def test_same_seed_same_sequence(self):
        """Equal seeds give identical sequences."""
        a = generate_frames(rng=np.random.default_rng(42))
        b = generate_frames(rng=np.random.default_rng(42))
        assert a == b

    def test_only_amplitude_is_random(self):
        """Different seeds differ only in tremor amplitude."""
        a = generate_frames(rng=np.random.default_rng(1))
        b = generate_frames(rng=np.random.default_rng(2))
        exclude = {"noise": {"amplitude"}}
        assert [f.model_dump(exclude=exclude) for f in a] == [
            f.model_dump(exclude=exclude) for f in b
        ]

    def test_payload_uses_camel_case(self, genuine_frames):
        """Serialized frames use the camelCase wire keys."""
        payload = genuine_frames[11].to_payload()
        assert payload["frameIndex"] == 11
        assert payload["metadata"]["isKeyFrame"] is True
        assert payload["metadata"]["motionPhase"] == "tilt-left-right"
        assert payload["metadata"]["isSpoofed"] is False
        assert "depthConfidence" in payload["depth"]
        assert "spoofType" not in payload["metadata"]
