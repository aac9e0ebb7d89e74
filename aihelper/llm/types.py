"""
Type definitions for the provider-abstracted LLM client layer.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


ChatRole = Literal["system", "user", "assistant"]


class LLMMessage(BaseModel):
    """A message in the conversation history."""

    role: ChatRole = Field(..., description="Message role: 'system', 'user', or 'assistant'")
    content: str = Field(..., description="Message content")

    class Config:
        frozen = True  # Immutable

    def to_wire(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


ChatHistory = List[LLMMessage]


class RequestPayload(BaseModel):
    """Provider-specific request body plus the endpoint path it must be posted to."""

    path: str = Field(..., description="Endpoint path relative to the provider base URL")
    body: Dict[str, Any] = Field(..., description="JSON body")

    class Config:
        frozen = True


# ============================================================
# Retry outcomes
# ============================================================


@dataclass(frozen=True)
class RetrySuccess:
    body: str


@dataclass(frozen=True)
class RetriableFailure:
    reason: str
    retry_after: Optional[float] = None
    status_code: Optional[int] = None


@dataclass(frozen=True)
class TerminalFailure:
    error: "LLMError"


RetryOutcome = Union[RetrySuccess, RetriableFailure, TerminalFailure]


# ============================================================
# Exceptions
# ============================================================


class LLMError(Exception):
    """Base exception for LLM client errors."""
    pass


class InvalidArgumentError(LLMError, ValueError):
    """Blank or missing input, rejected before any network call."""
    pass


class UnknownModelError(LLMError):
    """Model selector is not in the registry."""
    pass


class UnsupportedModelForChatError(LLMError):
    """Model cannot take a multi-turn messages array."""
    pass


class UnsupportedProviderError(LLMError):
    """No client implementation exists for the configured provider."""
    pass


class TemplateNotFoundError(LLMError, KeyError):
    """Prompt template key is not registered."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class LLMRateLimitError(LLMError):
    """LLM rate limit exceeded error (HTTP 429). Absorbed into a retry."""

    def __init__(self, message: str, retry_after: float = 1.0):
        super().__init__(message)
        self.retry_after = retry_after


class TransientFailureError(LLMError):
    """Network error, 5xx or timeout. Retried."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class LLMTimeoutError(TransientFailureError):
    """LLM request timeout error."""
    pass


class LLMConnectionError(TransientFailureError):
    """LLM connection/network error."""
    pass


class TerminalHTTPError(LLMError):
    """Non-retriable 4xx response (anything except 429)."""

    def __init__(self, status_code: int, body: str, provider: str = "provider"):
        super().__init__(f"{provider} API error: HTTP {status_code}. {body}")
        self.status_code = status_code
        self.body = body


class LLMAuthenticationError(TerminalHTTPError):
    """LLM authentication error (invalid API key, 401/403)."""
    pass


class RetriesExhaustedError(LLMError):
    """Every attempt failed transiently."""

    def __init__(self, message: str, attempts: int, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class MalformedResponseError(LLMError):
    """The remote service answered with an unrecognised JSON shape."""
    pass
