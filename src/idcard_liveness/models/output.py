"""
Output Models
=============

Result contracts returned to callers of the classifier and detectors.

The classifier returns one of two shapes:

    Full result (>= min_frames frames):
        {
            "isLive": true,
            "confidence": 0.9,
            "score": 90,
            "maxScore": 100,
            "analysis": {
                "depthVariation": 0.865,
                "hologramPresence": 0.482,
                "motionConsistency": 0.667,
                "lightingVariation": 0.379
            },
            "recommendation": "Likely authentic ID card"
        }

    Short-circuit result (too few frames):
        {"isLive": false, "confidence": 0.0, "reason": "Insufficient frames"}

Callers branch on `reason` versus `analysis`.
"""

from enum import Enum
from typing import Dict, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


_OUTPUT_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)

RECOMMENDATION_LIVE = "Likely authentic ID card"
RECOMMENDATION_SPOOF = "Possible spoofing attempt detected"
REASON_INSUFFICIENT_FRAMES = "Insufficient frames"


class LivenessAnalysis(BaseModel):
    """
    The four intermediate metrics behind a score.

    Attributes:
        depth_variation: Range of depth confidence across the sequence
        hologram_presence: Mean reflectivity intensity
        motion_consistency: Share of smooth yaw transitions
        lighting_variation: Range of lighting across the sequence
    """

    model_config = _OUTPUT_MODEL_CONFIG

    depth_variation: float = Field(..., ge=0.0)
    hologram_presence: float = Field(..., ge=0.0)
    motion_consistency: float = Field(..., ge=0.0, le=1.0)
    lighting_variation: float = Field(..., ge=0.0)


class ClassificationResult(BaseModel):
    """
    Full classifier verdict.

    Attributes:
        is_live: Whether confidence cleared the live threshold
        confidence: score / max_score
        score: Points earned
        max_score: Points possible
        analysis: Metrics the score was computed from
        recommendation: Human-readable label
    """

    model_config = _OUTPUT_MODEL_CONFIG

    is_live: bool
    confidence: float = Field(..., ge=0.0, le=1.0)
    score: int = Field(..., ge=0)
    max_score: int = Field(..., gt=0)
    analysis: LivenessAnalysis
    recommendation: str

    def to_payload(self) -> dict:
        """Export as a camelCase dictionary for JSON serialization."""
        return self.model_dump(mode="json", by_alias=True)


class InsufficientFramesResult(BaseModel):
    """Short-circuit verdict for sequences too short to analyze."""

    model_config = _OUTPUT_MODEL_CONFIG

    is_live: Literal[False] = False
    confidence: float = 0.0
    reason: str = REASON_INSUFFICIENT_FRAMES

    def to_payload(self) -> dict:
        """Export as a camelCase dictionary for JSON serialization."""
        return self.model_dump(mode="json", by_alias=True)


LivenessResult = Union[ClassificationResult, InsufficientFramesResult]


class LayerName(str, Enum):
    """Independent checks of the layered detector."""

    DEPTH = "depth"
    HOLOGRAM = "hologram"
    MOTION = "motion"
    LIGHTING = "lighting"


class LayerOutcome(BaseModel):
    """
    Result of a single detector layer.

    Attributes:
        layer: Which layer produced this outcome
        passed: Whether the measured value cleared its threshold
        measurements: Values the decision was made on
    """

    model_config = _OUTPUT_MODEL_CONFIG

    layer: LayerName
    passed: bool
    measurements: Dict[str, float] = Field(default_factory=dict)


class LayeredVerdict(BaseModel):
    """
    Multi-layer detector verdict.

    Attributes:
        is_authentic: True when enough layers passed
        passed_layers: Number of layers that passed
        total_layers: Number of layers evaluated
        confidence: passed_layers / total_layers
        layers: Per-layer outcomes in evaluation order
    """

    model_config = _OUTPUT_MODEL_CONFIG

    is_authentic: bool
    passed_layers: int = Field(..., ge=0)
    total_layers: int = Field(..., gt=0)
    confidence: float = Field(..., ge=0.0, le=1.0)
    layers: Tuple[LayerOutcome, ...]


class CheckStatus(str, Enum):
    """Outcome label for a single report check."""

    PASS = "PASS"
    FAIL = "FAIL"


class ReportChecks(BaseModel):
    """Per-metric PASS/FAIL labels of a verification report."""

    model_config = _OUTPUT_MODEL_CONFIG

    depth_detection: CheckStatus
    hologram_detection: CheckStatus
    motion_analysis: CheckStatus
    lighting_analysis: CheckStatus


class VerificationReport(BaseModel):
    """
    Payload an integrating service returns for a verification request.

    Attributes:
        success: Whether a full analysis was performed
        is_live: Classifier verdict
        confidence: Classifier confidence
        requires_manual_review: Confidence falls in the review window
        checks: Per-metric PASS/FAIL labels
        recommendation: Human-readable label or short-circuit reason
    """

    model_config = _OUTPUT_MODEL_CONFIG

    success: bool
    is_live: bool
    confidence: float = Field(..., ge=0.0, le=1.0)
    requires_manual_review: bool
    checks: ReportChecks
    recommendation: str

    def to_payload(self) -> dict:
        """Export as a camelCase dictionary for JSON serialization."""
        return self.model_dump(mode="json", by_alias=True)
