"""
Generation Models
=================

Input configuration for the motion frame generator.

Core Concepts:
    - MotionPattern: Which scenario the caller asked for
    - MotionPhase: Which kinematic regime produced a given frame
    - GenerationConfig: The validated, immutable generator input

Phase Windows (motion_pattern == "complete"):
    tilt-left-right      progress in [0.00, 0.25)
    rotate-clockwise     progress in [0.25, 0.50)
    move-closer-farther  progress in [0.50, 0.75)
    combined-motion      progress in [0.75, 1.00)

Example:
    from idcard_liveness.models.generation import GenerationConfig

    config = GenerationConfig(duration_seconds=3, frames_per_second=15)
    print(config.total_frames)  # 45
"""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MotionPattern(str, Enum):
    """
    Scenario requested by the caller.

    Attributes:
        COMPLETE: All four phases in order
        TILT_ONLY: Tilt phase for the whole sequence
        ROTATE_ONLY: Rotation phase for the whole sequence
        DISTANCE_ONLY: Closer/farther phase for the whole sequence
    """

    COMPLETE = "complete"
    TILT_ONLY = "tilt-only"
    ROTATE_ONLY = "rotate-only"
    DISTANCE_ONLY = "distance-only"


class MotionPhase(str, Enum):
    """
    Kinematic regime that produced a frame.

    The value doubles as the `metadata.motionPhase` label.
    """

    TILT_LEFT_RIGHT = "tilt-left-right"
    ROTATE_CLOCKWISE = "rotate-clockwise"
    MOVE_CLOSER_FARTHER = "move-closer-farther"
    COMBINED_MOTION = "combined-motion"

    @property
    def window_start(self) -> float:
        """Progress at which this phase begins in a complete sequence."""
        return _PHASE_WINDOW_STARTS[self]


_PHASE_WINDOW_STARTS = {
    MotionPhase.TILT_LEFT_RIGHT: 0.0,
    MotionPhase.ROTATE_CLOCKWISE: 0.25,
    MotionPhase.MOVE_CLOSER_FARTHER: 0.50,
    MotionPhase.COMBINED_MOTION: 0.75,
}

# Phase used for the whole sequence by the single-phase patterns
FIXED_PATTERN_PHASES = {
    MotionPattern.TILT_ONLY: MotionPhase.TILT_LEFT_RIGHT,
    MotionPattern.ROTATE_ONLY: MotionPhase.ROTATE_CLOCKWISE,
    MotionPattern.DISTANCE_ONLY: MotionPhase.MOVE_CLOSER_FARTHER,
}


class GenerationConfig(BaseModel):
    """
    Validated generator configuration.

    Built once by the caller and never mutated. Invalid values
    (non-positive duration or fps, unknown motion pattern) are rejected
    here with a pydantic ValidationError, before any frame is produced.

    Attributes:
        duration_seconds: Length of the simulated capture
        frames_per_second: Capture rate
        include_hologram: Simulate the foil/hologram response
        include_noise: Simulate hand tremor
        motion_pattern: Scenario to simulate
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    duration_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Simulated capture length in seconds",
    )

    frames_per_second: float = Field(
        default=15.0,
        gt=0,
        description="Simulated capture rate",
    )

    include_hologram: bool = Field(
        default=True,
        description="Simulate hologram/foil reflectance",
    )

    include_noise: bool = Field(
        default=True,
        description="Simulate natural hand tremor",
    )

    motion_pattern: MotionPattern = Field(
        default=MotionPattern.COMPLETE,
        description="Motion scenario to simulate",
    )

    @property
    def total_frames(self) -> int:
        """Number of frames this configuration produces."""
        return math.floor(self.duration_seconds * self.frames_per_second)

    @property
    def frame_interval_ms(self) -> float:
        """Milliseconds between consecutive frames."""
        return 1000 / self.frames_per_second
