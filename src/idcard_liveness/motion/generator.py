"""
Motion Frame Generator
======================

Produces synthetic "genuine" card-motion sequences.

This generator:
    - Takes a validated GenerationConfig
    - Selects a motion phase per frame and computes the card pose
    - Adds hologram reflectance, hand tremor and depth cues
    - Flags key frames and annotates progress
    - Returns an immutable tuple of CardFrame records

Determinism:
    Everything except the tremor amplitude is a pure function of the
    configuration and frame index. The amplitude is drawn from an
    injectable numpy Generator; pass a seeded one for reproducible
    output.
"""

import logging
import math
from typing import Optional

import numpy as np

from idcard_liveness.models.frame import CardFrame, FrameMetadata, FrameSequence
from idcard_liveness.models.generation import GenerationConfig
from idcard_liveness.motion.kinematics import compute_pose, select_phase
from idcard_liveness.motion.physics import (
    compute_depth_cues,
    compute_hand_noise,
    compute_reflectivity,
    is_key_frame,
)


logger = logging.getLogger(__name__)


class MotionFrameGenerator:
    """
    Generator for synthetic card-motion frame sequences.

    Attributes:
        rng: Random source used for tremor amplitudes

    Example:
        generator = MotionFrameGenerator(rng=np.random.default_rng(7))
        frames = generator.generate(GenerationConfig(duration_seconds=3))
        print(len(frames))  # 45
    """

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        """
        Initialize the generator.

        Args:
            rng: Random source for tremor amplitudes. Defaults to a
                freshly seeded-from-entropy numpy Generator.
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self._sequences_generated: int = 0
        logger.info(
            f"MotionFrameGenerator initialized: rng={type(self.rng).__name__}"
        )

    def generate(self, config: Optional[GenerationConfig] = None) -> FrameSequence:
        """
        Generate a frame sequence.

        Args:
            config: Generation configuration (defaults to 3 s at 15 fps,
                hologram and noise on, complete motion)

        Returns:
            Tuple of frames ordered by frame_index. Empty when the
            configured duration is shorter than one frame interval.
        """
        if config is None:
            config = GenerationConfig()

        total_frames = config.total_frames
        if total_frames == 0:
            logger.warning(
                f"Configuration yields no frames: duration={config.duration_seconds}s, "
                f"fps={config.frames_per_second}"
            )
            return ()

        frames = tuple(
            self._build_frame(config, index, total_frames)
            for index in range(total_frames)
        )

        self._sequences_generated += 1
        logger.debug(
            f"Generated {total_frames} frames: pattern={config.motion_pattern.value}, "
            f"hologram={config.include_hologram}, noise={config.include_noise}"
        )
        return frames

    def _build_frame(
        self,
        config: GenerationConfig,
        index: int,
        total_frames: int,
    ) -> CardFrame:
        """Assemble a single frame record."""
        progress = index / total_frames

        phase = select_phase(progress, config.motion_pattern)
        pose = compute_pose(progress, phase, config.motion_pattern)

        return CardFrame(
            timestamp=index * config.frame_interval_ms,
            frame_index=index,
            angle_x=pose.angle_x,
            angle_y=pose.angle_y,
            rotation_z=pose.rotation_z,
            distance=pose.distance,
            lighting=pose.lighting,
            reflectivity=compute_reflectivity(pose, config.include_hologram),
            noise=compute_hand_noise(index, config.include_noise, self.rng),
            depth=compute_depth_cues(pose),
            metadata=FrameMetadata(
                motion_phase=phase.value,
                is_key_frame=is_key_frame(index, total_frames),
                # Half-up rounding to an integer percent
                progress=math.floor(progress * 100 + 0.5),
            ),
        )

    @property
    def sequences_generated(self) -> int:
        """Number of non-empty sequences produced."""
        return self._sequences_generated


def generate_frames(
    config: Optional[GenerationConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> FrameSequence:
    """
    Generate a frame sequence with a one-off generator.

    Args:
        config: Generation configuration
        rng: Random source for tremor amplitudes

    Returns:
        Tuple of frames
    """
    return MotionFrameGenerator(rng=rng).generate(config)
