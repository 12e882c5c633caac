"""
Data Models
===========

Pydantic models and frozen dataclasses for the liveness simulator.

This module re-exports all data models for convenient access.

Models:
    Generation:
        - MotionPattern: Requested motion scenario
        - MotionPhase: Kinematic regime of a frame
        - GenerationConfig: Validated generator input

    Frame:
        - CardFrame: One simulated instant
        - Reflectivity, HandNoise, DepthCues, FrameMetadata: Frame parts
        - SpoofType: Reproduction media

    Pose:
        - CardPose: Kinematic state between pipeline stages

    Output:
        - ClassificationResult, InsufficientFramesResult: Classifier verdicts
        - LayeredVerdict: Multi-layer detector verdict
        - VerificationReport: Integration payload
"""

from idcard_liveness.models.generation import GenerationConfig, MotionPattern, MotionPhase
from idcard_liveness.models.frame import (
    CardFrame,
    DepthCues,
    FrameMetadata,
    HandNoise,
    Reflectivity,
    SpoofType,
)
from idcard_liveness.models.pose import CardPose
from idcard_liveness.models.output import (
    CheckStatus,
    ClassificationResult,
    InsufficientFramesResult,
    LayeredVerdict,
    LayerName,
    LayerOutcome,
    LivenessAnalysis,
    LivenessResult,
    ReportChecks,
    VerificationReport,
)

__all__ = [
    # Generation
    "GenerationConfig",
    "MotionPattern",
    "MotionPhase",
    # Frame
    "CardFrame",
    "DepthCues",
    "FrameMetadata",
    "HandNoise",
    "Reflectivity",
    "SpoofType",
    # Pose
    "CardPose",
    # Output
    "CheckStatus",
    "ClassificationResult",
    "InsufficientFramesResult",
    "LayeredVerdict",
    "LayerName",
    "LayerOutcome",
    "LivenessAnalysis",
    "LivenessResult",
    "ReportChecks",
    "VerificationReport",
]
