"""
Phase Kinematics
================

Card pose as a function of sequence progress.

A complete sequence walks through four phases of equal length. Each
phase is a closed-form motion of the card:

    tilt-left-right:      angleY = 25·sin(4πt)       angleX = 10·sin(2πt)
                          lighting = 1 + 0.15·sin(4πt)
    rotate-clockwise:     rotationZ = -15 + 30p      angleX = 5·sin(πp)
                          lighting = 1 + 0.1·cos(πp)
    move-closer-farther:  distance = 1 + 0.2·sin(2πp)
                          lighting = 0.9 + 0.2·distance
                          angleY = 10·sin(πp)
    combined-motion:      angleX = 15·sin(3πp)       angleY = 20·cos(2πp)
                          rotationZ = 10·sin(πp)     distance = 1 + 0.15·sin(2πp)
                          lighting = 1 + 0.2·cos(3πp)

Where t is global progress in [0, 1) and p is phase-local progress. In a
complete sequence p = (t - phase_start)·4; in a single-phase pattern the
phase spans the whole sequence and p = t. The tilt phase is defined on
global progress in both cases.

Angles are rounded to 2 decimals, distance and lighting to 3.
"""

import math
from typing import Callable, Dict

from idcard_liveness.models.generation import (
    FIXED_PATTERN_PHASES,
    MotionPattern,
    MotionPhase,
)
from idcard_liveness.models.pose import CardPose


ANGLE_DECIMALS = 2
SCALAR_DECIMALS = 3

# Each complete-pattern phase covers a quarter of the sequence
PHASES_PER_SEQUENCE = 4


def select_phase(progress: float, pattern: MotionPattern) -> MotionPhase:
    """
    Determine the motion phase for a point in the sequence.

    Args:
        progress: Sequence progress in [0, 1)
        pattern: Requested motion pattern

    Returns:
        Phase producing the frame at this progress
    """
    if pattern in FIXED_PATTERN_PHASES:
        return FIXED_PATTERN_PHASES[pattern]

    if progress < 0.25:
        return MotionPhase.TILT_LEFT_RIGHT
    if progress < 0.50:
        return MotionPhase.ROTATE_CLOCKWISE
    if progress < 0.75:
        return MotionPhase.MOVE_CLOSER_FARTHER
    return MotionPhase.COMBINED_MOTION


def phase_local_progress(
    progress: float,
    phase: MotionPhase,
    pattern: MotionPattern,
) -> float:
    """Re-base global progress onto the phase's own [0, 1) window."""
    if pattern != MotionPattern.COMPLETE or phase == MotionPhase.TILT_LEFT_RIGHT:
        return progress
    return (progress - phase.window_start) * PHASES_PER_SEQUENCE


def _tilt_left_right(t: float) -> CardPose:
    return _pose(
        angle_x=10 * math.sin(t * math.pi * 2),
        angle_y=25 * math.sin(t * math.pi * 4),
        lighting=1.0 + 0.15 * math.sin(t * math.pi * 4),
    )


def _rotate_clockwise(p: float) -> CardPose:
    return _pose(
        angle_x=5 * math.sin(p * math.pi),
        rotation_z=-15 + 30 * p,
        lighting=1.0 + 0.1 * math.cos(p * math.pi),
    )


def _move_closer_farther(p: float) -> CardPose:
    distance = 1.0 + 0.2 * math.sin(p * math.pi * 2)
    return _pose(
        angle_y=10 * math.sin(p * math.pi),
        distance=distance,
        # Closer card catches more light
        lighting=0.9 + 0.2 * distance,
    )


def _combined_motion(p: float) -> CardPose:
    return _pose(
        angle_x=15 * math.sin(p * math.pi * 3),
        angle_y=20 * math.cos(p * math.pi * 2),
        rotation_z=10 * math.sin(p * math.pi),
        distance=1.0 + 0.15 * math.sin(p * math.pi * 2),
        lighting=1.0 + 0.2 * math.cos(p * math.pi * 3),
    )


def _pose(
    angle_x: float = 0.0,
    angle_y: float = 0.0,
    rotation_z: float = 0.0,
    distance: float = 1.0,
    lighting: float = 1.0,
) -> CardPose:
    return CardPose(
        angle_x=round(angle_x, ANGLE_DECIMALS),
        angle_y=round(angle_y, ANGLE_DECIMALS),
        rotation_z=round(rotation_z, ANGLE_DECIMALS),
        distance=round(distance, SCALAR_DECIMALS),
        lighting=round(lighting, SCALAR_DECIMALS),
    )


PHASE_KINEMATICS: Dict[MotionPhase, Callable[[float], CardPose]] = {
    MotionPhase.TILT_LEFT_RIGHT: _tilt_left_right,
    MotionPhase.ROTATE_CLOCKWISE: _rotate_clockwise,
    MotionPhase.MOVE_CLOSER_FARTHER: _move_closer_farther,
    MotionPhase.COMBINED_MOTION: _combined_motion,
}

# Every phase must have a motion model; no silent zero-pose fallback
if set(PHASE_KINEMATICS) != set(MotionPhase):
    raise RuntimeError(
        f"Unmapped motion phases: {set(MotionPhase) - set(PHASE_KINEMATICS)}"
    )


def compute_pose(
    progress: float,
    phase: MotionPhase,
    pattern: MotionPattern,
) -> CardPose:
    """
    Compute the card pose for one frame.

    Args:
        progress: Sequence progress in [0, 1)
        phase: Phase selected for this frame
        pattern: Requested motion pattern

    Returns:
        Rounded CardPose
    """
    local = phase_local_progress(progress, phase, pattern)
    return PHASE_KINEMATICS[phase](local)
