"""
Analysis Module
===============

Liveness metrics, scoring and detectors.

This module provides:
    - Sequence metrics (depth, hologram, motion, lighting)
    - Band-ladder scoring
    - LivenessClassifier (point-based verdict)
    - LayeredLivenessDetector (majority-vote verdict)
"""

from idcard_liveness.analysis.classifier import LivenessClassifier, classify, coerce_frames
from idcard_liveness.analysis.layered import LayeredLivenessDetector, LayerThresholds
from idcard_liveness.analysis.metrics import (
    analyze_sequence,
    compute_depth_variation,
    compute_hologram_presence,
    compute_lighting_variation,
    compute_motion_consistency,
)
from idcard_liveness.analysis.scoring import (
    MetricLadder,
    ScoreBand,
    ScoringThresholds,
    score_analysis,
)

__all__ = [
    # Detectors
    "LivenessClassifier",
    "LayeredLivenessDetector",
    "LayerThresholds",
    "classify",
    "coerce_frames",
    # Metrics
    "analyze_sequence",
    "compute_depth_variation",
    "compute_hologram_presence",
    "compute_lighting_variation",
    "compute_motion_consistency",
    # Scoring
    "MetricLadder",
    "ScoreBand",
    "ScoringThresholds",
    "score_analysis",
]
