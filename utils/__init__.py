"""Utility modules for Rehab Estimator."""

from utils.response_logger import (
    configure_logging,
    log_raw_response,
    response_to_dict,
)

__all__ = [
    "configure_logging",
    "log_raw_response",
    "response_to_dict",
]
