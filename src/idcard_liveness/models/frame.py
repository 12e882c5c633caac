"""
Frame Record Models
===================

The atomic unit of the simulator: one record per simulated instant.

Frames are immutable pydantic models. Python attributes are snake_case;
serialized payloads use camelCase so that sequences round-trip with the
frame format consumed by detector test suites:

    {
        "timestamp": 1333.33,
        "frameIndex": 20,
        "angleX": 3.21,
        "angleY": 0.0,
        "rotationZ": 8.33,
        "distance": 1.0,
        "lighting": 0.923,
        "reflectivity": {"intensity": 0.313, "specularAngle": 0.0,
                         "colorShift": 3.4, "iridescence": 0.528},
        "noise": {"translationX": 1.4, "translationY": 2.1,
                  "microRotation": 0.456, "amplitude": 2.32},
        "depth": {"cardThickness": 0.081, "edgeShadow": 0.161,
                  "parallaxFactor": 2.0, "perspectiveDistortion": 0.036,
                  "depthConfidence": 0.107},
        "metadata": {"motionPhase": "rotate-clockwise",
                     "isKeyFrame": false, "progress": 44}
    }

Non-finite numbers are rejected so that malformed external input fails
validation instead of leaking NaN into the classifier.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


_FRAME_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    allow_inf_nan=False,
)


class SpoofType(str, Enum):
    """
    Reproduction media an attacker may present instead of a real card.

    Attributes:
        PAPER: Flat printout, no depth and no hologram
        SCREEN: Phone or laptop replay with uniform backlight
        PHOTO: Photographic print on thicker matte paper
    """

    PAPER = "paper"
    SCREEN = "screen"
    PHOTO = "photo"


class Reflectivity(BaseModel):
    """
    Hologram/foil response.

    `color_shift` and `iridescence` are absent when hologram simulation
    is disabled.
    """

    model_config = _FRAME_MODEL_CONFIG

    intensity: float = Field(..., ge=0.0, le=1.0)
    specular_angle: float = Field(...)
    color_shift: Optional[float] = Field(default=None, ge=0.0)
    iridescence: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class HandNoise(BaseModel):
    """Natural hand tremor. All zero when noise simulation is disabled."""

    model_config = _FRAME_MODEL_CONFIG

    translation_x: float = 0.0
    translation_y: float = 0.0
    micro_rotation: float = 0.0
    amplitude: float = 0.0


class DepthCues(BaseModel):
    """
    3-D cues only a physical card can produce.

    Attributes:
        card_thickness: Perceived thickness in mm
        edge_shadow: Shadow intensity at card edges [0, 1]
        parallax_factor: Parallax strength, higher when closer
        perspective_distortion: Keystone distortion from tilt
        depth_confidence: How much 3-D evidence the frame carries [0, 1]
    """

    model_config = _FRAME_MODEL_CONFIG

    card_thickness: float = Field(..., ge=0.0)
    edge_shadow: float = Field(..., ge=0.0, le=1.0)
    parallax_factor: float
    perspective_distortion: float = Field(..., ge=0.0)
    depth_confidence: float = Field(..., ge=0.0, le=1.0)


class FrameMetadata(BaseModel):
    """
    Per-frame annotations.

    The spoof-only fields stay None on genuine frames and are dropped
    from serialized output.
    """

    model_config = _FRAME_MODEL_CONFIG

    motion_phase: str = Field(..., description="Kinematic phase label")
    is_key_frame: bool = Field(default=False)
    progress: int = Field(..., ge=0, le=100, description="Percent complete")

    spoof_type: Optional[SpoofType] = None
    is_spoofed: bool = False
    screen_refresh_rate: Optional[int] = None
    pixel_grid_visible: Optional[bool] = None
    surface_texture: Optional[str] = None


class CardFrame(BaseModel):
    """
    One simulated instant of a card held in front of a camera.

    Attributes:
        timestamp: Elapsed milliseconds since sequence start
        frame_index: Zero-based sequence position
        angle_x: Pitch in degrees
        angle_y: Yaw in degrees
        rotation_z: Roll in degrees
        distance: Camera distance multiplier (1.0 = baseline)
        lighting: Ambient intensity multiplier (1.0 = baseline)
        reflectivity: Hologram response
        noise: Hand tremor
        depth: Depth/parallax cues
        metadata: Phase, key-frame and spoof annotations
    """

    model_config = _FRAME_MODEL_CONFIG

    timestamp: float = Field(..., ge=0.0)
    frame_index: int = Field(..., ge=0)
    angle_x: float
    angle_y: float
    rotation_z: float
    distance: float = Field(..., gt=0.0)
    lighting: float = Field(..., ge=0.0)
    reflectivity: Reflectivity
    noise: HandNoise = Field(default_factory=HandNoise)
    depth: DepthCues
    metadata: FrameMetadata

    def to_payload(self) -> dict:
        """Export as a camelCase dictionary for JSON serialization."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def __repr__(self) -> str:
        return (
            f"CardFrame(#{self.frame_index}, t={self.timestamp:.1f}ms, "
            f"phase={self.metadata.motion_phase}, "
            f"angles=({self.angle_x:+.2f}, {self.angle_y:+.2f}, {self.rotation_z:+.2f}))"
        )


FrameSequence = Tuple[CardFrame, ...]
