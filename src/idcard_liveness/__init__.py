"""
ID Card Liveness Simulator
==========================

Synthetic test data and rule-based scoring for ID card liveness checks.

A liveness check decides whether a sequence of document-motion frames
came from a genuine physical card moved by a hand in front of a camera,
or from a flat reproduction (paper, photo or screen replay) waved to
imitate that motion. This package exercises such a detector without
camera hardware.

Components:
    - motion: Genuine card-motion frame generator
    - spoof: Paper / screen / photo variants of a sequence
    - analysis: Point-based classifier and layered detector
    - observability: Verification reports, evaluation and benchmarks

Data flows one way: generate -> (degrade) -> classify.

Example:
    import numpy as np
    from idcard_liveness import GenerationConfig, classify, degrade, generate_frames

    frames = generate_frames(GenerationConfig(), rng=np.random.default_rng(7))
    print(classify(frames).is_live)                    # True
    print(classify(degrade(frames, "paper")).is_live)  # False
"""

__version__ = "0.1.0"

from idcard_liveness.analysis import LayeredLivenessDetector, LivenessClassifier, classify
from idcard_liveness.models import (
    CardFrame,
    ClassificationResult,
    GenerationConfig,
    InsufficientFramesResult,
    MotionPattern,
    SpoofType,
)
from idcard_liveness.motion import MotionFrameGenerator, generate_frames
from idcard_liveness.spoof import degrade, generate_spoofed_sequence

__all__ = [
    "__version__",
    # Models
    "CardFrame",
    "ClassificationResult",
    "GenerationConfig",
    "InsufficientFramesResult",
    "MotionPattern",
    "SpoofType",
    # Components
    "MotionFrameGenerator",
    "generate_frames",
    "degrade",
    "generate_spoofed_sequence",
    "LivenessClassifier",
    "LayeredLivenessDetector",
    "classify",
]
