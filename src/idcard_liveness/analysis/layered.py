"""
Layered Liveness Detector
=========================

Independent pass/fail checks combined by majority vote.

Unlike the point-based classifier, each layer is binary:

    Layer 1 - Depth:     depth confidence range > 0.4
    Layer 2 - Hologram:  mean intensity > 0.3 AND peak intensity > 0.5
    Layer 3 - Motion:    smooth yaw ratio > 0.5, where smooth means
                         0 < |Δyaw| < 15 and the ratio is over N - 1 pairs
    Layer 4 - Lighting:  lighting range > 0.1

The card is judged authentic when at least 3 of the 4 layers pass.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from idcard_liveness.analysis.classifier import FrameLike, coerce_frames
from idcard_liveness.analysis.metrics import (
    compute_depth_variation,
    compute_lighting_variation,
    count_smooth_yaw_steps,
)
from idcard_liveness.models.output import LayeredVerdict, LayerName, LayerOutcome


logger = logging.getLogger(__name__)


@dataclass
class LayerThresholds:
    """
    Thresholds for the layered detector.

    Loaded from configuration file.
    """

    depth_range: float = 0.4
    hologram_mean: float = 0.3
    hologram_peak: float = 0.5
    motion_max_step: float = 15.0
    motion_smoothness: float = 0.5
    lighting_range: float = 0.1
    min_layers: int = 3


class LayeredLivenessDetector:
    """
    Majority-vote detector over four independent layers.

    Example:
        detector = LayeredLivenessDetector()
        verdict = detector.evaluate(frames)
        print(f"{verdict.passed_layers}/{verdict.total_layers} layers passed")
    """

    def __init__(self, thresholds: Optional[LayerThresholds] = None) -> None:
        """
        Initialize detector.

        Args:
            thresholds: Layer thresholds and required passing layers
        """
        self.thresholds = thresholds or LayerThresholds()
        if not 1 <= self.thresholds.min_layers <= len(LayerName):
            raise ValueError(f"min_layers must be in [1, {len(LayerName)}]")

        logger.info(
            f"LayeredLivenessDetector initialized: min_layers={self.thresholds.min_layers}, "
            f"depth_range={self.thresholds.depth_range}, "
            f"motion_max_step={self.thresholds.motion_max_step}"
        )

    def evaluate(self, sequence: Iterable[FrameLike]) -> LayeredVerdict:
        """
        Run all layers and combine them.

        Sequences with fewer than two frames fail every layer.

        Args:
            sequence: Frames as CardFrame or mappings

        Returns:
            LayeredVerdict with per-layer outcomes
        """
        frames = coerce_frames(sequence)
        th = self.thresholds

        if len(frames) < 2:
            layers = tuple(LayerOutcome(layer=name, passed=False) for name in LayerName)
        else:
            layers = (
                self._depth_layer(frames),
                self._hologram_layer(frames),
                self._motion_layer(frames),
                self._lighting_layer(frames),
            )

        passed = sum(1 for layer in layers if layer.passed)
        total = len(layers)
        is_authentic = passed >= th.min_layers

        logger.debug(
            f"Layered verdict: {passed}/{total} layers passed, authentic={is_authentic}"
        )

        return LayeredVerdict(
            is_authentic=is_authentic,
            passed_layers=passed,
            total_layers=total,
            confidence=passed / total,
            layers=layers,
        )

    def _depth_layer(self, frames) -> LayerOutcome:
        depth_range = compute_depth_variation(frames)
        return LayerOutcome(
            layer=LayerName.DEPTH,
            passed=depth_range > self.thresholds.depth_range,
            measurements={"depth_range": depth_range},
        )

    def _hologram_layer(self, frames) -> LayerOutcome:
        intensities = np.array([f.reflectivity.intensity for f in frames])
        mean_intensity = float(np.mean(intensities))
        peak_intensity = float(np.max(intensities))
        return LayerOutcome(
            layer=LayerName.HOLOGRAM,
            passed=(
                mean_intensity > self.thresholds.hologram_mean
                and peak_intensity > self.thresholds.hologram_peak
            ),
            measurements={
                "mean_intensity": mean_intensity,
                "peak_intensity": peak_intensity,
            },
        )

    def _motion_layer(self, frames) -> LayerOutcome:
        smooth = count_smooth_yaw_steps(frames, max_step=self.thresholds.motion_max_step)
        ratio = smooth / (len(frames) - 1)
        return LayerOutcome(
            layer=LayerName.MOTION,
            passed=ratio > self.thresholds.motion_smoothness,
            measurements={"smoothness_ratio": ratio},
        )

    def _lighting_layer(self, frames) -> LayerOutcome:
        lighting_range = compute_lighting_variation(frames)
        return LayerOutcome(
            layer=LayerName.LIGHTING,
            passed=lighting_range > self.thresholds.lighting_range,
            measurements={"lighting_range": lighting_range},
        )
