"""
Verification Report
===================

Packages a classifier verdict into the payload an integrating
verification service returns to its client.

Checks are labelled PASS when the metric clears the top band of its
ladder, i.e. when it earned full points. Confidence strictly inside the
manual-review window flags the request for a human reviewer.

Output Contract:
    {
        "success": true,
        "isLive": true,
        "confidence": 0.9,
        "requiresManualReview": false,
        "checks": {
            "depthDetection": "PASS",
            "hologramDetection": "PASS",
            "motionAnalysis": "FAIL",
            "lightingAnalysis": "PASS"
        },
        "recommendation": "Likely authentic ID card"
    }
"""

from dataclasses import dataclass
from typing import Optional

from idcard_liveness.analysis.scoring import ScoringThresholds
from idcard_liveness.models.output import (
    CheckStatus,
    ClassificationResult,
    InsufficientFramesResult,
    LivenessResult,
    ReportChecks,
    VerificationReport,
)


@dataclass(frozen=True, slots=True)
class ReviewWindow:
    """Open confidence interval that requires manual review."""

    lower: float = 0.4
    upper: float = 0.8

    def __post_init__(self) -> None:
        if not 0 <= self.lower < self.upper <= 1:
            raise ValueError("review window must satisfy 0 <= lower < upper <= 1")

    def contains(self, confidence: float) -> bool:
        return self.lower < confidence < self.upper


def _status(passed: bool) -> CheckStatus:
    return CheckStatus.PASS if passed else CheckStatus.FAIL


def build_verification_report(
    result: LivenessResult,
    thresholds: Optional[ScoringThresholds] = None,
    review_window: Optional[ReviewWindow] = None,
) -> VerificationReport:
    """
    Build the integration payload for a classifier result.

    Args:
        result: Output of LivenessClassifier.classify
        thresholds: Ladders used to label each check (defaults)
        review_window: Manual-review confidence window (0.4, 0.8)

    Returns:
        VerificationReport
    """
    thresholds = thresholds or ScoringThresholds()
    review_window = review_window or ReviewWindow()

    if isinstance(result, InsufficientFramesResult):
        failed = CheckStatus.FAIL
        return VerificationReport(
            success=False,
            is_live=False,
            confidence=result.confidence,
            requires_manual_review=False,
            checks=ReportChecks(
                depth_detection=failed,
                hologram_detection=failed,
                motion_analysis=failed,
                lighting_analysis=failed,
            ),
            recommendation=result.reason,
        )

    if not isinstance(result, ClassificationResult):
        raise TypeError(f"Unsupported result type: {type(result).__name__}")

    analysis = result.analysis
    checks = ReportChecks(
        depth_detection=_status(
            analysis.depth_variation > thresholds.depth_variation.top_threshold
        ),
        hologram_detection=_status(
            analysis.hologram_presence > thresholds.hologram_presence.top_threshold
        ),
        motion_analysis=_status(
            analysis.motion_consistency > thresholds.motion_consistency.top_threshold
        ),
        lighting_analysis=_status(
            analysis.lighting_variation > thresholds.lighting_variation.top_threshold
        ),
    )

    return VerificationReport(
        success=True,
        is_live=result.is_live,
        confidence=result.confidence,
        requires_manual_review=review_window.contains(result.confidence),
        checks=checks,
        recommendation=result.recommendation,
    )
