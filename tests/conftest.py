"""Pytest configuration and fixtures."""

import pytest
from formpost.models import Response

FIXED_BOUNDARY = "12345678901234567890123456789"


@pytest.fixture
def boundary():
    """A deterministic 29-digit boundary token."""
    return FIXED_BOUNDARY


@pytest.fixture
def fixed_boundary(boundary):
    """Boundary source that always returns the fixed token."""
    return lambda: boundary


@pytest.fixture
def sample_response():
    """Create a sample Response object."""
    return Response(
        url="https://example.com/upload",
        status=200,
        status_text="OK",
        headers=[
            ("Content-Type", "application/json"),
            ("Content-Length", "13"),
        ],
        body=b'{"key":"val"}',
    )
