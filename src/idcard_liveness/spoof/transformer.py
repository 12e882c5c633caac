"""
Spoof Variant Transformer
=========================

Rewrites a genuine sequence to look like a reproduction of the card.

Each spoof medium erases or fakes specific physical cues:

    paper:  Perfectly flat, no depth of any kind, no hologram
    screen: No thickness or edge shadow, uniform backlight,
            minimal glare, refresh/pixel-grid artifacts
    photo:  Thick matte print, slight thickness and shadow, no hologram

The overrides are a content rewrite applied identically to every frame,
not a new physical simulation. The input sequence is never mutated;
a new tuple of frames is returned.
"""

import logging
from typing import Callable, Dict, Optional, Union

import numpy as np

from idcard_liveness.models.frame import CardFrame, DepthCues, FrameSequence, SpoofType
from idcard_liveness.models.generation import GenerationConfig, MotionPattern
from idcard_liveness.motion.generator import MotionFrameGenerator


logger = logging.getLogger(__name__)


# Baseline the spoof wrapper regenerates when no sequence is supplied
DEFAULT_SPOOF_BASELINE = GenerationConfig(
    duration_seconds=3,
    frames_per_second=15,
    include_hologram=False,
    include_noise=True,
    motion_pattern=MotionPattern.COMPLETE,
)

SCREEN_REFRESH_RATE_HZ = 60
SCREEN_GLARE_INTENSITY = 0.1
PHOTO_CARD_THICKNESS_MM = 0.2
PHOTO_EDGE_SHADOW = 0.05

_FLAT_DEPTH = DepthCues(
    card_thickness=0.0,
    edge_shadow=0.0,
    parallax_factor=0.0,
    perspective_distortion=0.0,
    depth_confidence=0.0,
)


def _as_paper(frame: CardFrame) -> Dict[str, object]:
    return {
        "depth": _FLAT_DEPTH,
        "reflectivity": frame.reflectivity.model_copy(
            update={"intensity": 0.0, "iridescence": 0.0}
        ),
    }


def _as_screen(frame: CardFrame) -> Dict[str, object]:
    return {
        "depth": frame.depth.model_copy(
            update={"card_thickness": 0.0, "edge_shadow": 0.0}
        ),
        # Uniform backlight
        "lighting": 1.0,
        "reflectivity": frame.reflectivity.model_copy(
            update={"intensity": SCREEN_GLARE_INTENSITY}
        ),
        "metadata": frame.metadata.model_copy(
            update={
                "screen_refresh_rate": SCREEN_REFRESH_RATE_HZ,
                "pixel_grid_visible": True,
            }
        ),
    }


def _as_photo(frame: CardFrame) -> Dict[str, object]:
    return {
        "depth": frame.depth.model_copy(
            update={
                "card_thickness": PHOTO_CARD_THICKNESS_MM,
                "edge_shadow": PHOTO_EDGE_SHADOW,
            }
        ),
        "reflectivity": frame.reflectivity.model_copy(update={"intensity": 0.0}),
        "metadata": frame.metadata.model_copy(update={"surface_texture": "matte"}),
    }


SPOOF_OVERRIDES: Dict[SpoofType, Callable[[CardFrame], Dict[str, object]]] = {
    SpoofType.PAPER: _as_paper,
    SpoofType.SCREEN: _as_screen,
    SpoofType.PHOTO: _as_photo,
}


def parse_spoof_type(value: Union[SpoofType, str]) -> SpoofType:
    """
    Coerce a spoof type label.

    Raises:
        ValueError: If the label is not a known spoof medium
    """
    try:
        return SpoofType(value)
    except ValueError:
        accepted = ", ".join(s.value for s in SpoofType)
        raise ValueError(
            f"Unknown spoof type: {value!r} (expected one of: {accepted})"
        ) from None


def degrade_frame(frame: CardFrame, spoof_type: SpoofType) -> CardFrame:
    """
    Apply the overrides of one spoof medium to a single frame.

    Args:
        frame: Source frame (left untouched)
        spoof_type: Medium to emulate

    Returns:
        New frame marked as spoofed
    """
    update = SPOOF_OVERRIDES[spoof_type](frame)
    metadata = update.get("metadata", frame.metadata)
    update["metadata"] = metadata.model_copy(
        update={"spoof_type": spoof_type, "is_spoofed": True}
    )
    return frame.model_copy(update=update)


def degrade(
    baseline: FrameSequence,
    spoof_type: Union[SpoofType, str],
) -> FrameSequence:
    """
    Rewrite a sequence as seen through a spoofing medium.

    Args:
        baseline: Genuine sequence to degrade
        spoof_type: 'paper', 'screen' or 'photo'

    Returns:
        New sequence with every frame degraded

    Raises:
        ValueError: If spoof_type is unknown
    """
    spoof_type = parse_spoof_type(spoof_type)
    degraded = tuple(degrade_frame(frame, spoof_type) for frame in baseline)
    logger.debug(f"Degraded {len(degraded)} frames as {spoof_type.value} spoof")
    return degraded


def generate_spoofed_sequence(
    spoof_type: Union[SpoofType, str] = SpoofType.PAPER,
    rng: Optional[np.random.Generator] = None,
    baseline_config: GenerationConfig = DEFAULT_SPOOF_BASELINE,
) -> FrameSequence:
    """
    Generate a baseline sequence and degrade it in one call.

    The default baseline is 3 s at 15 fps with the hologram disabled and
    hand tremor enabled.

    Args:
        spoof_type: Medium to emulate
        rng: Random source for the baseline tremor amplitudes
        baseline_config: Configuration of the regenerated baseline

    Returns:
        Degraded sequence
    """
    spoof_type = parse_spoof_type(spoof_type)
    baseline = MotionFrameGenerator(rng=rng).generate(baseline_config)
    return degrade(baseline, spoof_type)
