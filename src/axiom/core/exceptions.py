"""
Axiom Custom Exceptions

This module defines all custom exceptions used throughout the Axiom system.
Exceptions are organized by layer/responsibility.

The analysis validator, paper-type detector and gamification calculators do
not raise for their documented inputs; these exceptions belong to the
plumbing around them (configuration, LLM calls, audit orchestration, API).
"""

from typing import Any


class AxiomError(Exception):
    """Base exception for all Axiom errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigurationError(AxiomError):
    """Error in system configuration."""

    pass


class MissingAPIKeyError(ConfigurationError):
    """Required API key is missing."""

    def __init__(self, key_name: str):
        super().__init__(f"Missing required API key: {key_name}", {"key_name": key_name})


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(AxiomError):
    """Error in caller-supplied data validation."""

    pass


class InvalidPaperTypeError(ValidationError):
    """Paper type is not one of the supported categories."""

    def __init__(self, value: Any):
        super().__init__(f"Invalid paper type: {value!r}", {"value": value})


# =============================================================================
# LLM ERRORS
# =============================================================================


class LLMError(AxiomError):
    """Base error for LLM operations."""

    pass


class LLMProviderError(LLMError):
    """Error from LLM provider."""

    def __init__(
        self, message: str, provider: str, status_code: int | None = None, retryable: bool = False
    ):
        super().__init__(
            message, {"provider": provider, "status_code": status_code, "retryable": retryable}
        )
        self.retryable = retryable


class LLMRateLimitError(LLMProviderError):
    """Rate limit exceeded."""

    def __init__(self, provider: str, retry_after: float | None = None):
        super().__init__(f"Rate limit exceeded for {provider}", provider=provider, retryable=True)
        self.retry_after = retry_after


class EmptyLLMResponseError(LLMError):
    """Provider answered without any content."""

    def __init__(self, provider: str):
        super().__init__(f"Empty response from {provider}", {"provider": provider})


# =============================================================================
# AUDIT ERRORS
# =============================================================================


class AuditError(AxiomError):
    """Base error for manuscript audits."""

    pass


class ManuscriptTextMissingError(AuditError):
    """No manuscript text available for analysis."""

    def __init__(self) -> None:
        super().__init__("No manuscript text available for analysis")


class AuditFailedError(AuditError):
    """The LLM call failed after every retry attempt."""

    def __init__(self, attempts: int, last_error: str | None = None):
        super().__init__(
            f"Analysis failed after {attempts} attempts",
            {"attempts": attempts, "last_error": last_error},
        )


# =============================================================================
# API ERRORS
# =============================================================================


class RateLimitExceededError(AxiomError):
    """Caller exceeded the request budget for the current window."""

    def __init__(self, key: str, limit: int, reset_at: float, message: str | None = None):
        super().__init__(
            message or f"Rate limit of {limit} requests exceeded",
            {"key": key, "limit": limit, "reset_at": reset_at},
        )
        self.limit = limit
        self.reset_at = reset_at
