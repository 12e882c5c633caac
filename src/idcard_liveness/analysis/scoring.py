"""
Liveness Scoring
================

Point-based scoring of liveness metrics.

Each metric earns points from a ladder of bands. Bands are evaluated
highest threshold first and the first band the metric strictly exceeds
wins; a metric below every band earns nothing.

Default Bands:
    depth_variation      > 0.5: 30   > 0.3: 20   > 0.1: 10
    hologram_presence    > 0.4: 25   > 0.2: 15
    motion_consistency   > 0.7: 25   > 0.5: 15
    lighting_variation   > 0.15: 20  > 0.08: 10

The maximum score is the sum of each ladder's top band (100 by default).
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from idcard_liveness.models.output import LivenessAnalysis


@dataclass(frozen=True, slots=True)
class ScoreBand:
    """A single rung of a metric ladder: strictly above threshold earns points."""

    threshold: float
    points: int

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.points < 0:
            raise ValueError("points must be non-negative")


@dataclass(frozen=True, slots=True)
class MetricLadder:
    """
    Ordered bands for one metric.

    Bands are sorted by descending threshold on construction so that the
    first match is always the highest band.
    """

    bands: Tuple[ScoreBand, ...]

    def __post_init__(self) -> None:
        if not self.bands:
            raise ValueError("a ladder needs at least one band")
        ordered = tuple(sorted(self.bands, key=lambda b: b.threshold, reverse=True))
        object.__setattr__(self, "bands", ordered)

    @property
    def max_points(self) -> int:
        return max(band.points for band in self.bands)

    @property
    def top_threshold(self) -> float:
        return self.bands[0].threshold

    def award(self, value: float) -> int:
        """Points for a metric value (strict greater-than comparison)."""
        for band in self.bands:
            if value > band.threshold:
                return band.points
        return 0


def _ladder(*bands: Tuple[float, int]) -> MetricLadder:
    return MetricLadder(tuple(ScoreBand(threshold, points) for threshold, points in bands))


@dataclass
class ScoringThresholds:
    """
    Ladders and verdict threshold for the classifier.

    Loaded from configuration file.
    """

    depth_variation: MetricLadder = field(
        default_factory=lambda: _ladder((0.5, 30), (0.3, 20), (0.1, 10))
    )
    hologram_presence: MetricLadder = field(
        default_factory=lambda: _ladder((0.4, 25), (0.2, 15))
    )
    motion_consistency: MetricLadder = field(
        default_factory=lambda: _ladder((0.7, 25), (0.5, 15))
    )
    lighting_variation: MetricLadder = field(
        default_factory=lambda: _ladder((0.15, 20), (0.08, 10))
    )

    # Confidence must strictly exceed this to be judged live
    live_threshold: float = 0.65

    # Shorter sequences short-circuit to an insufficient-frames result
    min_frames: int = 10

    def ladders(self) -> Dict[str, MetricLadder]:
        """Ladders keyed by LivenessAnalysis field name."""
        return {
            "depth_variation": self.depth_variation,
            "hologram_presence": self.hologram_presence,
            "motion_consistency": self.motion_consistency,
            "lighting_variation": self.lighting_variation,
        }

    @property
    def max_score(self) -> int:
        return sum(ladder.max_points for ladder in self.ladders().values())


@dataclass
class ScoreBreakdown:
    """Points per metric plus totals."""

    points: Dict[str, int]
    score: int
    max_score: int

    @property
    def confidence(self) -> float:
        return self.score / self.max_score

    def __repr__(self) -> str:
        return f"ScoreBreakdown({self.score}/{self.max_score}, {self.points})"


def score_analysis(
    analysis: LivenessAnalysis,
    thresholds: ScoringThresholds,
) -> ScoreBreakdown:
    """
    Award points to each metric and total them.

    Args:
        analysis: Metrics of the sequence
        thresholds: Ladders to score against

    Returns:
        ScoreBreakdown with per-metric points and totals
    """
    points = {
        name: ladder.award(getattr(analysis, name))
        for name, ladder in thresholds.ladders().items()
    }
    return ScoreBreakdown(
        points=points,
        score=sum(points.values()),
        max_score=thresholds.max_score,
    )
