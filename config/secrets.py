"""Unified secret access for Rehab Estimator.

This module provides a consistent interface for reading secrets that works
both for local development and for deployments backed by Google Cloud
Secret Manager.

Locally (default): secrets are read from environment variables (and .env)
With USE_SECRET_MANAGER=true: secrets are read from Secret Manager

Usage:
    from config.secrets import get_gemini_api_key, get_secret

    api_key = get_gemini_api_key()
    custom_secret = get_secret('MY_SECRET_NAME')
"""

import os
from functools import lru_cache
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)

GEMINI_API_KEY_NAME = "GEMINI_API_KEY"


def use_secret_manager() -> bool:
    """Check if secrets should be loaded from Google Cloud Secret Manager."""
    return os.environ.get("USE_SECRET_MANAGER", "false").lower() == "true"


def _read_from_secret_manager(secret_id: str) -> Optional[str]:
    from google.cloud import secretmanager

    client = secretmanager.SecretManagerServiceClient()
    project_id = os.environ.get("GOOGLE_CLOUD_PROJECT") or os.environ.get("GCLOUD_PROJECT")
    if not project_id:
        logger.warning("secret_manager_project_missing", secret_id=secret_id)
        return None

    name = f"projects/{project_id}/secrets/{secret_id}/versions/latest"
    response = client.access_secret_version(request={"name": name})
    return response.payload.data.decode("UTF-8")


def get_secret(secret_id: str) -> Optional[str]:
    """
    Get a secret from the environment or from Secret Manager.

    Args:
        secret_id: The name of the secret (e.g., 'GEMINI_API_KEY')

    Returns:
        The secret value, or None if not found
    """
    if not use_secret_manager():
        value = os.environ.get(secret_id)
        if value:
            logger.debug("secret_loaded", secret_id=secret_id, source="environment")
        else:
            logger.warning("secret_not_found", secret_id=secret_id, source="environment")
        return value or None

    value = _read_from_secret_manager(secret_id)
    logger.debug("secret_loaded", secret_id=secret_id, source="secret_manager", found=bool(value))
    return value or None


@lru_cache(maxsize=1)
def get_gemini_api_key() -> Optional[str]:
    """Get Gemini API key from secrets."""
    return get_secret(GEMINI_API_KEY_NAME)


def clear_secret_cache() -> None:
    """Clear cached secrets. Useful for testing or when secrets are rotated."""
    get_gemini_api_key.cache_clear()
