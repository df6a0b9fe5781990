"""Rehab Estimator configuration.

This package contains:
- settings: Environment variables and configuration
- secrets: Unified secret access (environment or Secret Manager)
- errors: Custom exceptions and error codes
"""

from config.settings import settings, Settings
from config.errors import (
    RehabEstimatorError,
    ConfigurationError,
    EmptyResponseError,
    MissingStructuredBlockError,
    MalformedStructuredBlockError,
    EstimateParseError,
)
from config.secrets import get_secret, get_gemini_api_key

__all__ = [
    "settings",
    "Settings",
    "RehabEstimatorError",
    "ConfigurationError",
    "EmptyResponseError",
    "MissingStructuredBlockError",
    "MalformedStructuredBlockError",
    "EstimateParseError",
    "get_secret",
    "get_gemini_api_key",
]
