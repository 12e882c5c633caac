"""
Surface Physics
===============

Per-frame optical and physical cues derived from the card pose.

Three models are provided:
    - Hologram reflectance: foil brightness and hue follow viewing angle
    - Hand tremor: small translations and rotations of a held card
    - Depth cues: thickness, edge shadows and parallax of a 3-D object

Formulas:
    angle_intensity = |sin((angleX + angleY)·π/180)|
    intensity       = min((0.3 + 0.7·angle_intensity)·lighting, 1)
    specular_angle  = atan2(angleY, angleX) in degrees

    tilt            = sqrt(angleX² + angleY²)
    card_thickness  = 0.76·tilt/30   (ID-1 cards are 0.76 mm thick)
    edge_shadow     = min(tilt/20, 1)
    parallax        = (1.2 - distance)·10
    depth_conf      = tilt/30

Tremor Model:
    Human physiological tremor sits around 8-12 Hz. The waveform is a
    sum of sinusoids evaluated on a nominal 15 Hz clock, independent of
    the configured frame rate. Only the amplitude is random.
"""

import math
from typing import Optional

import numpy as np

from idcard_liveness.models.frame import DepthCues, HandNoise, Reflectivity
from idcard_liveness.models.pose import CardPose


# Nominal clock for the tremor waveform (Hz)
TREMOR_REFERENCE_FPS = 15
# Dominant hand shake frequency
SHAKE_FREQUENCY = 10
AMPLITUDE_RANGE = (2.0, 2.5)

ID_CARD_THICKNESS_MM = 0.76
MAX_TILT_DEGREES = 30
EDGE_SHADOW_SATURATION_DEGREES = 20
PERSPECTIVE_SCALE_DEGREES = 90
PARALLAX_REFERENCE_DISTANCE = 1.2


def compute_reflectivity(pose: CardPose, include_hologram: bool = True) -> Reflectivity:
    """
    Compute the hologram response for a pose.

    Paper prints and screens show no angle-dependent response, so with
    the hologram disabled only a flat zero intensity is reported.

    Args:
        pose: Card pose of the frame
        include_hologram: Whether the card carries a hologram

    Returns:
        Reflectivity record
    """
    if not include_hologram:
        return Reflectivity(intensity=0.0, specular_angle=0.0)

    angle_intensity = abs(math.sin(math.radians(pose.angle_x + pose.angle_y)))
    specular_angle = math.degrees(math.atan2(pose.angle_y, pose.angle_x))
    base_intensity = 0.3 + angle_intensity * 0.7
    intensity = min(base_intensity * pose.lighting, 1.0)

    return Reflectivity(
        intensity=round(intensity, 3),
        specular_angle=round(specular_angle, 2),
        # Wavelength-dependent diffraction, 0-60 degree hue shift
        color_shift=round(angle_intensity * 60, 1),
        iridescence=round(0.5 + angle_intensity * 0.5, 3),
    )


def compute_hand_noise(
    frame_index: int,
    include_noise: bool = True,
    rng: Optional[np.random.Generator] = None,
) -> HandNoise:
    """
    Compute hand tremor for a frame.

    Args:
        frame_index: Zero-based frame position
        include_noise: Whether to simulate tremor
        rng: Random source for the amplitude draw

    Returns:
        HandNoise record (all zero when disabled)
    """
    if not include_noise:
        return HandNoise()
    if rng is None:
        rng = np.random.default_rng()

    t = frame_index / TREMOR_REFERENCE_FPS
    translation_x = (
        2.5 * math.sin(t * SHAKE_FREQUENCY)
        + 0.5 * math.cos(t * SHAKE_FREQUENCY * 3)
    )
    translation_y = (
        2.0 * math.cos(t * SHAKE_FREQUENCY)
        + 0.7 * math.sin(t * SHAKE_FREQUENCY * 2.5)
    )
    # Wrist contribution
    micro_rotation = 0.5 * math.sin(t * SHAKE_FREQUENCY * 1.5)

    low, high = AMPLITUDE_RANGE
    amplitude = float(rng.uniform(low, high))

    return HandNoise(
        translation_x=round(translation_x, 2),
        translation_y=round(translation_y, 2),
        micro_rotation=round(micro_rotation, 3),
        amplitude=round(amplitude, 2),
    )


def compute_depth_cues(pose: CardPose) -> DepthCues:
    """
    Compute the 3-D cues a physical card shows at this pose.

    Always computed; spoof transforms overwrite these afterwards.

    Args:
        pose: Card pose of the frame

    Returns:
        DepthCues record
    """
    tilt = math.hypot(pose.angle_x, pose.angle_y)

    return DepthCues(
        card_thickness=round(ID_CARD_THICKNESS_MM * (tilt / MAX_TILT_DEGREES), 3),
        edge_shadow=round(min(tilt / EDGE_SHADOW_SATURATION_DEGREES, 1.0), 3),
        parallax_factor=round((PARALLAX_REFERENCE_DISTANCE - pose.distance) * 10, 2),
        perspective_distortion=round(tilt / PERSPECTIVE_SCALE_DEGREES, 3),
        depth_confidence=round(tilt / MAX_TILT_DEGREES, 3),
    )


def is_key_frame(frame_index: int, total_frames: int) -> bool:
    """
    Check whether a frame marks a sequence boundary or phase transition.

    Key frames are the first and last frame plus the frames at 25%, 50%
    and 75% of the sequence.
    """
    if frame_index == 0 or frame_index == total_frames - 1:
        return True

    transitions = {
        math.floor(total_frames * 0.25),
        math.floor(total_frames * 0.50),
        math.floor(total_frames * 0.75),
    }
    return frame_index in transitions
