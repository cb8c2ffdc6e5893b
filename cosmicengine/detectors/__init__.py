"""Sign ingress detectors."""

from __future__ import annotations

from .timeline import build_timeline, iter_transitions
from .transitions import TransitionSearch, find_next_transition

__all__ = [
    "TransitionSearch",
    "build_timeline",
    "find_next_transition",
    "iter_transitions",
]
