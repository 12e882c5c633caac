"""
Pose Models
===========

Intermediate kinematic state passed between the motion model and the
frame assembler.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CardPose:
    """
    Card orientation, distance and lighting at one instant.

    Produced by the phase kinematics, consumed by the hologram and depth
    models. Values are already rounded to serialization precision.

    Attributes:
        angle_x: Pitch in degrees
        angle_y: Yaw in degrees
        rotation_z: Roll in degrees
        distance: Camera distance multiplier
        lighting: Ambient intensity multiplier
    """

    angle_x: float = 0.0
    angle_y: float = 0.0
    rotation_z: float = 0.0
    distance: float = 1.0
    lighting: float = 1.0

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.distance <= 0:
            raise ValueError("distance must be positive")
        if self.lighting < 0:
            raise ValueError("lighting must be non-negative")

    def __repr__(self) -> str:
        return (
            f"CardPose(x={self.angle_x:+.2f}, y={self.angle_y:+.2f}, "
            f"z={self.rotation_z:+.2f}, d={self.distance:.3f}, "
            f"l={self.lighting:.3f})"
        )
