"""
Sequence Metrics
================

Aggregate liveness metrics computed over a whole frame sequence.

Key Metrics:
    - Depth Variation: Range of depth confidence (flat media stay at 0)
    - Hologram Presence: Mean reflectivity intensity
    - Motion Consistency: Share of smooth yaw steps, over sequence length
    - Lighting Variation: Range of ambient lighting

Formulas:
    depth_variation     = max(depth_confidence) - min(depth_confidence)
    hologram_presence   = mean(reflectivity.intensity)
    motion_consistency  = |{i : 0 < |Δyaw_i| < 10}| / N
    lighting_variation  = max(lighting) - min(lighting)

Design Note:
    Metrics operate on the values stored in the frames. No additional
    rounding is applied before thresholding.
"""

from typing import Sequence

import numpy as np

from idcard_liveness.models.frame import CardFrame
from idcard_liveness.models.output import LivenessAnalysis


# Yaw change per frame (degrees) above which motion counts as a jump
MAX_SMOOTH_YAW_STEP = 10.0


def _column(frames: Sequence[CardFrame], getter) -> np.ndarray:
    return np.array([getter(frame) for frame in frames], dtype=np.float64)


def compute_depth_variation(frames: Sequence[CardFrame]) -> float:
    """Range of depth confidence across the sequence."""
    if not frames:
        return 0.0
    depths = _column(frames, lambda f: f.depth.depth_confidence)
    return float(np.ptp(depths))


def compute_hologram_presence(frames: Sequence[CardFrame]) -> float:
    """Mean hologram intensity across the sequence."""
    if not frames:
        return 0.0
    intensities = _column(frames, lambda f: f.reflectivity.intensity)
    return float(np.mean(intensities))


def count_smooth_yaw_steps(
    frames: Sequence[CardFrame],
    max_step: float = MAX_SMOOTH_YAW_STEP,
) -> int:
    """
    Count consecutive-frame pairs whose yaw changed, but not abruptly.

    A zero step (static card) and a step of max_step or more (jump)
    both count as unnatural.
    """
    if len(frames) < 2:
        return 0
    steps = np.abs(np.diff(_column(frames, lambda f: f.angle_y)))
    return int(np.count_nonzero((steps > 0) & (steps < max_step)))


def compute_motion_consistency(frames: Sequence[CardFrame]) -> float:
    """
    Share of smooth yaw transitions.

    Normalized by the sequence length, not the number of pairs, so the
    maximum achievable value is (N - 1) / N.
    """
    if not frames:
        return 0.0
    return count_smooth_yaw_steps(frames) / len(frames)


def compute_lighting_variation(frames: Sequence[CardFrame]) -> float:
    """Range of ambient lighting across the sequence."""
    if not frames:
        return 0.0
    lighting = _column(frames, lambda f: f.lighting)
    return float(np.ptp(lighting))


def analyze_sequence(frames: Sequence[CardFrame]) -> LivenessAnalysis:
    """
    Compute all four liveness metrics.

    Args:
        frames: Validated frame sequence

    Returns:
        LivenessAnalysis with the four metrics
    """
    return LivenessAnalysis(
        depth_variation=compute_depth_variation(frames),
        hologram_presence=compute_hologram_presence(frames),
        motion_consistency=compute_motion_consistency(frames),
        lighting_variation=compute_lighting_variation(frames),
    )
