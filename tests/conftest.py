"""Shared fixtures for cosmicengine tests."""

from __future__ import annotations

import importlib.util
import logging
from datetime import datetime
from typing import Callable, Iterator

import pytest
from prometheus_client import CollectorRegistry

from cosmicengine.db.base import Base
from cosmicengine.db.session import SessionFactory, build_engine, make_session_factory
from cosmicengine.observability import ensure_metrics_registered

from .helpers import FIXED_NOW, LinearOracle


def _have_pyswisseph() -> bool:
    return importlib.util.find_spec("swisseph") is not None


def pytest_collection_modifyitems(config, items):
    """Skip Swiss-marked tests when pyswisseph is not installed."""

    if _have_pyswisseph():
        return
    skip_swiss = pytest.mark.skip(reason="Swiss Ephemeris unavailable (no pyswisseph).")
    for item in items:
        if "swiss" in item.keywords:
            item.add_marker(skip_swiss)


@pytest.fixture
def oracle() -> LinearOracle:
    return LinearOracle()


@pytest.fixture
def make_oracle() -> Callable[..., LinearOracle]:
    return LinearOracle


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def session_factory() -> Iterator[SessionFactory]:
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    try:
        yield make_session_factory(engine)
    finally:
        engine.dispose()


@pytest.fixture
def metrics_registry() -> CollectorRegistry:
    registry = CollectorRegistry()
    ensure_metrics_registered(registry)
    return registry


@pytest.fixture
def restore_root_logging() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    try:
        yield root
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
