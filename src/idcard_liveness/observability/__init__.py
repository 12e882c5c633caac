"""
Observability Module
====================

Reporting and offline evaluation for the liveness simulator.

This module provides:
    - build_verification_report: Integration payload for a verdict
    - evaluate_detection: Detection rates over synthetic scenarios
    - benchmark: Generation and classification timing

DESIGN RULES:
    - Does NOT change classifier verdicts
    - Reads results, never frames in place
"""

from idcard_liveness.observability.evaluation import (
    DEFAULT_PROFILES,
    BenchmarkResult,
    CaptureProfile,
    EvaluationReport,
    ScenarioStats,
    benchmark,
    evaluate_detection,
)
from idcard_liveness.observability.report import ReviewWindow, build_verification_report


__all__ = [
    "DEFAULT_PROFILES",
    "BenchmarkResult",
    "CaptureProfile",
    "EvaluationReport",
    "ScenarioStats",
    "benchmark",
    "evaluate_detection",
    "ReviewWindow",
    "build_verification_report",
]
