"""
Motion Simulation Module
========================

Synthetic generation of genuine card-motion sequences.

This module provides:
    - Phase kinematics (tilt, rotate, closer/farther, combined)
    - Hologram reflectance, hand tremor and depth cue models
    - The frame generator assembling complete sequences

No image data, only per-frame numeric records.
"""

from idcard_liveness.motion.generator import MotionFrameGenerator, generate_frames
from idcard_liveness.motion.kinematics import compute_pose, select_phase
from idcard_liveness.motion.physics import (
    compute_depth_cues,
    compute_hand_noise,
    compute_reflectivity,
    is_key_frame,
)

__all__ = [
    # Generation
    "MotionFrameGenerator",
    "generate_frames",
    # Kinematics
    "compute_pose",
    "select_phase",
    # Physics
    "compute_depth_cues",
    "compute_hand_noise",
    "compute_reflectivity",
    "is_key_frame",
]
