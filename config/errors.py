"""Rehab Estimator error handling.

Custom exceptions and error codes for the estimate and investment analysis calls.
Transport faults raised by the Gemini SDK are not wrapped here; they reach the
caller unmodified.
"""

from typing import Optional, Dict, Any


# Error Codes
class ErrorCode:
    """Error code constants."""

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Model Response Errors
    EMPTY_RESPONSE = "EMPTY_RESPONSE"
    MISSING_STRUCTURED_BLOCK = "MISSING_STRUCTURED_BLOCK"
    MALFORMED_STRUCTURED_BLOCK = "MALFORMED_STRUCTURED_BLOCK"

    # Estimate Parsing Errors
    ESTIMATE_PARSE_ERROR = "ESTIMATE_PARSE_ERROR"


class RehabEstimatorError(Exception):
    """Base exception for Rehab Estimator errors.

    Provides structured error information for the calling service layer.
    The message is a stable, user-safe string; diagnostic payloads such as
    raw model output belong in ``details``.

    Attributes:
        code: Error code from ErrorCode constants
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize RehabEstimatorError.

        Args:
            code: Error code from ErrorCode constants
            message: Human-readable error message
            details: Additional error context
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self, include_details: bool = False) -> Dict[str, Any]:
        """Convert error to dictionary for a caller-facing response.

        Args:
            include_details: Include diagnostic details (operator use only).

        Returns:
            Dictionary with code, message, and optionally details.
        """
        result: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if include_details:
            result["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationError(RehabEstimatorError):
    """Required configuration (the Gemini API key) is missing."""

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(
            code=ErrorCode.CONFIGURATION_ERROR,
            message=message,
            details={"setting": setting} if setting else None
        )
        self.setting = setting


class EmptyResponseError(RehabEstimatorError):
    """The model call succeeded but returned no usable text."""

    def __init__(self, operation: str, details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.EMPTY_RESPONSE,
            message=(
                f"The AI model returned an empty response for the {operation}. "
                "This may be due to a content filter or an internal error."
            ),
            details={**(details or {}), "operation": operation}
        )
        self.operation = operation


class MissingStructuredBlockError(RehabEstimatorError):
    """No fenced ```json block was found in the response text."""

    def __init__(self, details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.MISSING_STRUCTURED_BLOCK,
            message="Could not find JSON in the model's response for investment analysis.",
            details=details
        )


class MalformedStructuredBlockError(RehabEstimatorError):
    """A fenced JSON block was found but is not a usable JSON object.

    The raw response text is kept in ``details["raw_text"]`` for operators and
    never appears in the message.
    """

    def __init__(
        self,
        reason: str,
        raw_text: Optional[str] = None,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=ErrorCode.MALFORMED_STRUCTURED_BLOCK,
            message="Failed to get a valid investment analysis from the AI.",
            details={**(details or {}), "reason": reason, "raw_text": raw_text}
        )
        self.reason = reason


class EstimateParseError(RehabEstimatorError):
    """Estimate markdown could not be turned into an Estimation."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.ESTIMATE_PARSE_ERROR,
            message=message,
            details=details
        )
