"""Pytest configuration and shared fixtures for Rehab Estimator tests."""

import os
import sys
import pytest
from unittest.mock import AsyncMock, MagicMock


# ============================================================================
# Ensure local imports work (agents/, models/, services/, config/)
# ============================================================================
#
# The codebase uses absolute imports like `from models...` / `from services...`.
# This guarantees the repository root is importable as the top-level module root.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


from tests.fixtures.mock_responses import (  # noqa: E402
    make_response,
    SAMPLE_ESTIMATE_MARKDOWN,
)


# ============================================================================
# Settings
# ============================================================================

@pytest.fixture
def test_settings():
    """Settings with an injected API key (no environment lookup)."""
    from config.settings import Settings

    return Settings(
        gemini_model="gemini-2.5-flash",
        estimate_temperature=0.0,
        analysis_temperature=0.1,
        enable_search_grounding=True,
        log_level="INFO",
        api_key="test-api-key",
    )


# ============================================================================
# Gemini Mocks
# ============================================================================

@pytest.fixture
def mock_genai_client():
    """Mock google-genai client exposing client.aio.models.generate_content."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=make_response("Mock response content", total_tokens=100)
    )
    return client


@pytest.fixture
def gemini_service(test_settings, mock_genai_client):
    """GeminiService wired to the mock client."""
    from services.gemini_service import GeminiService

    service = GeminiService(settings=test_settings)
    service._client = mock_genai_client
    return service


# ============================================================================
# Estimation Fixtures
# ============================================================================

@pytest.fixture
def sample_estimation():
    """Structured estimate matching SAMPLE_ESTIMATE_MARKDOWN."""
    from models.estimation import Estimation, EstimationSummary, RepairItem

    return Estimation(
        summary=EstimationSummary(total_estimated_cost="$12,500 - $13,800"),
        repairs=[
            RepairItem(
                area="Kitchen",
                observations="Dated oak cabinets, laminate countertops are peeling.",
                recommendations="Replace cabinets and countertops.",
                estimated_cost="$8,000 - $8,800",
                difficulty=3,
            ),
            RepairItem(
                area="Bathroom 1",
                observations="Cracked tile around the tub.",
                recommendations="Retile tub surround.",
                estimated_cost="$4,500 - $5,000",
                difficulty=2,
            ),
        ],
    )


@pytest.fixture
def sample_estimate_markdown():
    return SAMPLE_ESTIMATE_MARKDOWN


@pytest.fixture
def sample_files():
    """Two small uploaded photos."""
    from models.estimation import UploadedFile

    return [
        UploadedFile.from_bytes(b"\xff\xd8\xff\xe0jpeg-bytes", "image/jpeg"),
        UploadedFile.from_bytes(b"\x89PNGpng-bytes", "image/png"),
    ]
