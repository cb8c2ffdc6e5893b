"""Logging helpers for cosmicengine services and CLIs."""

from __future__ import annotations

import logging
import os
from typing import Any

__all__ = ["configure_logging"]

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _coerce_level(value: str | int | None) -> int:
    """Return a logging level derived from ``value``.

    Accepts standard level names (case insensitive) or a numeric level.
    Invalid inputs fall back to :data:`logging.INFO`.
    """

    if value is None:
        return logging.INFO

    if isinstance(value, int):
        return value

    candidate = value.strip()
    if not candidate:
        return logging.INFO

    if candidate.isdigit():
        return int(candidate)

    resolved = logging.getLevelName(candidate.upper())
    if isinstance(resolved, int):
        return resolved

    return logging.INFO


def configure_logging(*, level: str | int | None = None, **kwargs: Any) -> int:
    """Configure the root logger for cosmicengine entry points.

    ``LOG_LEVEL`` in the environment wins over ``level`` so operators can
    raise verbosity without touching the configuration file. ``kwargs`` are
    forwarded to :func:`logging.basicConfig`.

    Returns the effective level applied to the root logger.
    """

    env_level = os.environ.get("LOG_LEVEL")
    effective_level = _coerce_level(env_level if env_level else level)

    logging.basicConfig(
        level=effective_level,
        format=kwargs.pop("format", _DEFAULT_FORMAT),
        datefmt=kwargs.pop("datefmt", _DEFAULT_DATEFMT),
        force=kwargs.pop("force", True),
        **kwargs,
    )

    return effective_level
