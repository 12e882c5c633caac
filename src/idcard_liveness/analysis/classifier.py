"""
Liveness Classifier
===================

Rule-based verdict on whether a frame sequence shows a genuine card.

Pipeline:
    1. Validate input frames (dicts are parsed into CardFrame)
    2. Short-circuit sequences shorter than min_frames
    3. Extract depth, hologram, motion and lighting metrics
    4. Score each metric against its band ladder
    5. confidence = score / max_score; live when confidence > threshold

Input may be a generated sequence, a spoofed sequence, or frames derived
from a real camera that follow the same record layout. Malformed frames
raise pydantic.ValidationError rather than producing NaN metrics.
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from idcard_liveness.analysis.metrics import analyze_sequence
from idcard_liveness.analysis.scoring import ScoringThresholds, score_analysis
from idcard_liveness.models.frame import CardFrame
from idcard_liveness.models.output import (
    RECOMMENDATION_LIVE,
    RECOMMENDATION_SPOOF,
    ClassificationResult,
    InsufficientFramesResult,
    LivenessResult,
)


logger = logging.getLogger(__name__)

FrameLike = Union[CardFrame, Mapping[str, Any]]


def coerce_frames(sequence: Iterable[FrameLike]) -> Tuple[CardFrame, ...]:
    """
    Validate a sequence of frames.

    CardFrame instances pass through; mappings (e.g. decoded JSON with
    camelCase or snake_case keys) are validated into CardFrame.

    Raises:
        pydantic.ValidationError: If a frame is malformed
    """
    return tuple(
        frame if isinstance(frame, CardFrame) else CardFrame.model_validate(frame)
        for frame in sequence
    )


class LivenessClassifier:
    """
    Multi-factor scoring classifier.

    Attributes:
        thresholds: Band ladders, live threshold and minimum length

    Example:
        classifier = LivenessClassifier()
        result = classifier.classify(frames)
        if result.is_live:
            print(result.recommendation)
    """

    def __init__(self, thresholds: Optional[ScoringThresholds] = None) -> None:
        """
        Initialize classifier.

        Args:
            thresholds: Scoring configuration (defaults to the standard
                30/25/25/20 ladders and a 0.65 live threshold)
        """
        self.thresholds = thresholds or ScoringThresholds()
        if self.thresholds.min_frames < 1:
            raise ValueError("min_frames must be at least 1")
        if not 0 <= self.thresholds.live_threshold < 1:
            raise ValueError("live_threshold must be in [0, 1)")
        if self.thresholds.max_score <= 0:
            raise ValueError("max_score must be positive")

        logger.info(
            f"LivenessClassifier initialized: max_score={self.thresholds.max_score}, "
            f"live_threshold={self.thresholds.live_threshold}, "
            f"min_frames={self.thresholds.min_frames}"
        )

    def classify(self, sequence: Iterable[FrameLike]) -> LivenessResult:
        """
        Classify a frame sequence.

        Args:
            sequence: Frames as CardFrame or mappings

        Returns:
            ClassificationResult, or InsufficientFramesResult when the
            sequence is shorter than min_frames
        """
        frames = coerce_frames(sequence)

        if len(frames) < self.thresholds.min_frames:
            logger.debug(
                f"Insufficient frames: {len(frames)} < {self.thresholds.min_frames}"
            )
            return InsufficientFramesResult()

        analysis = analyze_sequence(frames)
        breakdown = score_analysis(analysis, self.thresholds)

        confidence = breakdown.confidence
        is_live = confidence > self.thresholds.live_threshold

        logger.debug(
            f"Classified {len(frames)} frames: {breakdown!r}, live={is_live}"
        )

        return ClassificationResult(
            is_live=is_live,
            confidence=round(confidence, 3),
            score=breakdown.score,
            max_score=breakdown.max_score,
            analysis=analysis,
            recommendation=RECOMMENDATION_LIVE if is_live else RECOMMENDATION_SPOOF,
        )


def classify(sequence: Iterable[FrameLike]) -> LivenessResult:
    """Classify a sequence with the default scoring configuration."""
    return LivenessClassifier().classify(sequence)
