"""
Retrying HTTP transport shared by all provider clients.

Executes one POST per attempt on a shared httpx.AsyncClient and classifies the
outcome:
- 2xx: success, body returned
- 429: rate limited, wait `retry-after` seconds (default 1s) and retry
- other 4xx: terminal, raised immediately with status and body
- 5xx / network error / timeout: wait `retry_delay_s` and retry

Attempts are bounded by `max_retry_count` (rate-limit waits included).
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
)

from aihelper.config.logging_config import get_logger
from aihelper.config.provider_config import ProviderConfiguration
from aihelper.llm.types import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMRateLimitError,
    LLMTimeoutError,
    RequestPayload,
    RetriableFailure,
    RetriesExhaustedError,
    RetryOutcome,
    RetrySuccess,
    TerminalFailure,
    TerminalHTTPError,
    TransientFailureError,
)

logger = get_logger(__name__)

DEFAULT_RETRY_AFTER_S = 1.0

HeaderFactory = Callable[[], Dict[str, str]]
SleepFunc = Callable[[float], Awaitable[None]]


def parse_retry_after(value: Optional[str]) -> float:
    """Parse a `retry-after` header in seconds; anything unparsable gives 1s."""
    if not value:
        return DEFAULT_RETRY_AFTER_S
    try:
        seconds = float(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER_S
    if seconds < 0:
        return DEFAULT_RETRY_AFTER_S
    return seconds


def classify_response(response: httpx.Response, provider: str = "provider") -> RetryOutcome:
    """
    Classify an HTTP response into success, retriable or terminal failure.

    Args:
        response: Completed httpx response
        provider: Provider label used in error messages

    Returns:
        RetrySuccess | RetriableFailure | TerminalFailure
    """
    status = response.status_code

    if 200 <= status < 300:
        return RetrySuccess(body=response.text)

    if status == 429:
        return RetriableFailure(
            reason="rate limited",
            retry_after=parse_retry_after(response.headers.get("retry-after")),
            status_code=status,
        )

    if 400 <= status < 500:
        if status in (401, 403):
            return TerminalFailure(
                error=LLMAuthenticationError(status, response.text, provider=provider)
            )
        return TerminalFailure(error=TerminalHTTPError(status, response.text, provider=provider))

    return RetriableFailure(reason=f"HTTP {status}", status_code=status)


class RetryingTransport:
    """
    POSTs JSON request payloads with the configured retry policy.

    One instance owns one httpx.AsyncClient; it is safe to share across
    concurrent calls from the same LLM client.
    """

    def __init__(
        self,
        config: ProviderConfiguration,
        header_factory: HeaderFactory,
        provider_label: str = "provider",
        client: Optional[httpx.AsyncClient] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        """
        Initialize transport.

        Args:
            config: Client configuration (timeouts, retry policy, proxy, headers)
            header_factory: Returns auth/version headers; called before every attempt
            provider_label: Name used in logs and errors (e.g. "openai")
            client: Pre-built httpx client (for testing)
            sleep: Awaitable sleep used between attempts (for testing)
        """
        self.config = config
        self.base_url = config.resolved_base_url
        self.provider_label = provider_label
        self._header_factory = header_factory
        self._sleep = sleep or asyncio.sleep

        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.request_timeout_s),
            proxy=config.proxy,
            follow_redirects=True,
        )

        logger.info(
            f"🤖 LLM [{self.provider_label}]: Transport ready (base_url={self.base_url}, "
            f"max_attempts={self.max_attempts}, retry_delay={config.retry_delay_s}s, "
            f"proxy={'yes' if config.proxy else 'no'})"
        )

    @property
    def max_attempts(self) -> int:
        # max_retry_count=0 still sends the request once
        return max(1, self.config.max_retry_count)

    def build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        headers.update(self._header_factory())
        headers.update(self.config.custom_headers)
        return headers

    async def execute(self, payload: RequestPayload) -> str:
        """
        Send a request with retry and return the raw response body.

        Raises:
            TerminalHTTPError: 4xx other than 429 (not retried)
            RetriesExhaustedError: Every attempt failed transiently or was rate limited
        """
        url = f"{self.base_url}{payload.path}"

        if self.config.enable_logging:
            logger.debug(f"🤖 LLM [{self.provider_label}]: Request to {url}: {json.dumps(payload.body)}")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait_seconds,
            retry=retry_if_exception_type((LLMRateLimitError, TransientFailureError)),
            before_sleep=self._log_retry,
            sleep=self._sleep,
        )

        try:
            body = await retrying(self._send_once, url, payload.body)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            logger.error(
                f"🤖 LLM [{self.provider_label}]: All retry attempts exhausted "
                f"({self.max_attempts}): {last_error}"
            )
            raise RetriesExhaustedError(
                f"Exceeded maximum retry attempts for {self.provider_label} API.",
                attempts=self.max_attempts,
                last_error=last_error,
            ) from last_error

        if self.config.enable_logging:
            logger.debug(f"🤖 LLM [{self.provider_label}]: Response: {body}")

        return body

    async def _send_once(self, url: str, body: Dict[str, Any]) -> str:
        headers = self.build_headers()

        try:
            response = await self.client.post(url, headers=headers, json=body)
        except httpx.TimeoutException as e:
            raise LLMTimeoutError(f"{self.provider_label} request timeout: {e}") from e
        except httpx.RequestError as e:
            raise LLMConnectionError(f"{self.provider_label} connection error: {e}") from e

        logger.trace(f"🤖 LLM [{self.provider_label}]: HTTP {response.status_code}")

        outcome = classify_response(response, provider=self.provider_label)

        if isinstance(outcome, RetrySuccess):
            return outcome.body

        if isinstance(outcome, TerminalFailure):
            logger.error(f"🤖 LLM [{self.provider_label}]: Non-retriable error: {outcome.error}")
            raise outcome.error

        if outcome.retry_after is not None:
            raise LLMRateLimitError(
                f"{self.provider_label} rate limit exceeded", retry_after=outcome.retry_after
            )
        raise TransientFailureError(
            f"{self.provider_label} {outcome.reason}", status_code=outcome.status_code
        )

    def _wait_seconds(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, LLMRateLimitError):
            return error.retry_after
        return self.config.retry_delay_s

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        wait = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            f"🤖 LLM [{self.provider_label}]: Retry {retry_state.attempt_number}/{self.max_attempts} "
            f"failed, retrying in {wait}s: {error}"
        )

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()
