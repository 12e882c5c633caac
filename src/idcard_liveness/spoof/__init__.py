"""
Spoof Module
============

Adversarial variants of genuine sequences (paper, screen, photo).
"""

from idcard_liveness.spoof.transformer import (
    DEFAULT_SPOOF_BASELINE,
    degrade,
    degrade_frame,
    generate_spoofed_sequence,
    parse_spoof_type,
)

__all__ = [
    "DEFAULT_SPOOF_BASELINE",
    "degrade",
    "degrade_frame",
    "generate_spoofed_sequence",
    "parse_spoof_type",
]
