"""Utility helpers shared across cosmicengine modules."""

from __future__ import annotations

from .angles import forward_separation, norm360, round_half_up

__all__ = ["forward_separation", "norm360", "round_half_up"]
