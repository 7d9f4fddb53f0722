"""Fixtures for infrastructure.logging tests."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog_context():
    """Clear structlog context variables between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
