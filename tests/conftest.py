"""Shared pytest fixtures for the validation engine tests."""

from __future__ import annotations

import logging
from typing import Any, Callable
from uuid import uuid4

import pytest
import structlog


@pytest.fixture
def new_id() -> Callable[[], str]:
    """Factory for fresh canonical UUID strings."""
    return lambda: str(uuid4())


@pytest.fixture
def period_payload() -> dict[str, Any]:
    """Valid academic period creation payload."""
    return {
        "name": "Semestre 2025-1",
        "code": "2025-1",
        "type": "semestre",
        "year": 2025,
        "start_date": "2025-02-01",
        "end_date": "2025-06-30",
    }


@pytest.fixture
def restore_logging():
    """Undo configure_logging() so later tests see structlog defaults."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        yield
    finally:
        structlog.reset_defaults()
        structlog.contextvars.clear_contextvars()
        root.handlers = handlers
        root.setLevel(level)
