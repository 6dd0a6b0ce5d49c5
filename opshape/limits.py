"""Shape limits shared by every validating routine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShapeLimits:
    """Bounds a tensor shape must satisfy to be accepted."""
    min_rank: int = 1
    max_rank: int = 6
    max_dim: int = 2_147_483_647  # int32 max


DEFAULT_LIMITS = ShapeLimits()
