"""
Abstract base class for LLM clients.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Awaitable, Dict, List, Optional, TypeVar

import httpx

from aihelper.config.logging_config import get_logger
from aihelper.config.provider_config import ProviderConfiguration
from aihelper.llm.chat_sessions import ChatSessionStore, truncate_history
from aihelper.llm.models import resolve_model
from aihelper.llm.request_builder import combine_template
from aihelper.llm.response_parser import parse_response
from aihelper.llm.transport import RetryingTransport, SleepFunc
from aihelper.llm.types import (
    InvalidArgumentError,
    LLMError,
    LLMMessage,
    LLMTimeoutError,
    RequestPayload,
    UnknownModelError,
)

if TYPE_CHECKING:
    from aihelper.prompts import TemplateStore

logger = get_logger(__name__)

T = TypeVar("T")


def require_text(value: Optional[str], name: str) -> str:
    """
    Raises:
        InvalidArgumentError: Value is None, not a string, or blank
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{name} cannot be null or empty.")
    return value


class LLMClient(ABC):
    """
    Abstract base class for LLM clients.

    Implements the four caller-facing operations (generate, generate_with_template,
    generate_with_dynamic_template, chat) on top of the shared transport, parser
    and chat session store. Subclasses supply auth headers and request shapes.

    Chat turns are atomic: the user message and the assistant reply are written
    to the session together after a successful call. A failed, timed-out or
    cancelled turn leaves the session untouched.
    """

    def __init__(
        self,
        api_key: str,
        config: ProviderConfiguration,
        session_store: Optional[ChatSessionStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        """
        Initialize LLM client.

        Args:
            api_key: API key for authentication
            config: Client configuration (fixed for the client's lifetime)
            session_store: Chat history store (None = private store sized from config)
            http_client: Pre-built httpx client (for testing)
            sleep: Awaitable sleep used between retries (for testing)

        Raises:
            InvalidArgumentError: Blank API key or missing configuration
            UnknownModelError: Model selector unknown or owned by another provider
        """
        require_text(api_key, "api_key")
        if config is None:
            raise InvalidArgumentError("config cannot be null.")

        self.api_key = api_key
        self.config = config

        self.model_id, model_provider = resolve_model(config.model_selector)
        if model_provider != config.provider:
            raise UnknownModelError(
                f"Model '{config.model_selector}' is not available for provider "
                f"'{config.provider.value}'"
            )

        self.sessions = (
            session_store
            if session_store is not None
            else ChatSessionStore(config.max_chat_history_size)
        )
        self.transport = RetryingTransport(
            config,
            header_factory=self._auth_headers,
            provider_label=self.provider_name,
            client=http_client,
            sleep=sleep,
        )

        logger.info(f"🤖 LLM [{self.provider_name}]: Client initialized (model={self.model_id})")

    @property
    def provider_name(self) -> str:
        """Return provider name (for logging)."""
        return self.config.provider.value

    # ============================================================
    # Provider hooks
    # ============================================================

    @abstractmethod
    def _auth_headers(self) -> Dict[str, str]:
        """Authentication (and version) headers, assembled before every attempt."""
        pass

    @abstractmethod
    def _build_prompt_request(self, prompt: str) -> RequestPayload:
        pass

    @abstractmethod
    def _build_dynamic_template_request(self, template: str, user_input: str) -> RequestPayload:
        pass

    @abstractmethod
    def _build_chat_request(
        self, messages: List[LLMMessage], system_prompt: Optional[str]
    ) -> RequestPayload:
        pass

    def _ensure_chat_supported(self) -> None:
        """Raise if the configured model cannot hold a multi-turn conversation."""
        pass

    def _seed_history(
        self, history: List[LLMMessage], system_prompt: Optional[str]
    ) -> List[LLMMessage]:
        """Prepare the stored history before the new user message is added."""
        return history

    # ============================================================
    # Operations
    # ============================================================

    async def generate(self, prompt: str, timeout: Optional[float] = None) -> str:
        """
        Generate a response for a single prompt.

        Args:
            prompt: User prompt
            timeout: Optional bound (seconds) on the whole call, retries included

        Returns:
            str: Generated text

        Raises:
            InvalidArgumentError: Blank prompt (no request is sent)
            TerminalHTTPError: Non-retriable 4xx response
            RetriesExhaustedError: Transient failures on every attempt
            MalformedResponseError: Unrecognised response body
            LLMTimeoutError: `timeout` elapsed
        """
        require_text(prompt, "prompt")
        payload = self._build_prompt_request(prompt)
        return await self._with_timeout(self._execute(payload), timeout)

    async def generate_with_template(
        self, template: str, user_input: str, timeout: Optional[float] = None
    ) -> str:
        """Generate from a template and user input joined by a newline."""
        require_text(template, "template")
        require_text(user_input, "user_input")
        return await self.generate(combine_template(template, user_input), timeout=timeout)

    async def generate_with_dynamic_template(
        self,
        template_store: TemplateStore,
        key: str,
        user_input: str,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Generate from a template looked up by key.

        Raises:
            InvalidArgumentError: Missing store, blank key/input, or blank template
            TemplateNotFoundError: Key not registered in the store
        """
        if template_store is None:
            raise InvalidArgumentError("template_store cannot be null.")
        require_text(key, "key")
        require_text(user_input, "user_input")

        template = require_text(template_store.get(key), "template")
        payload = self._build_dynamic_template_request(template, user_input)
        return await self._with_timeout(self._execute(payload), timeout)

    async def chat(
        self,
        session_key: str,
        user_message: str,
        initial_system_prompt: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Send one turn of a multi-turn conversation.

        Args:
            session_key: Caller-chosen conversation identifier
            user_message: The user's message
            initial_system_prompt: System prompt (None = configuration default)
            timeout: Optional bound (seconds) on the whole turn

        Returns:
            str: Assistant reply (also appended to the session history)

        Raises:
            InvalidArgumentError: Blank session key or message
            UnsupportedModelForChatError: Configured model is not chat-capable
        """
        require_text(session_key, "session_key")
        require_text(user_message, "user_message")
        self._ensure_chat_supported()

        return await self._with_timeout(
            self._chat_turn(session_key, user_message, initial_system_prompt), timeout
        )

    async def _chat_turn(
        self, session_key: str, user_message: str, system_prompt: Optional[str]
    ) -> str:
        async with self.sessions.lock(session_key):
            history = self._seed_history(self.sessions.get(session_key), system_prompt)
            candidate = truncate_history(
                history + [LLMMessage(role="user", content=user_message)],
                self.sessions.max_history_size,
            )

            payload = self._build_chat_request(candidate, system_prompt)
            reply = await self._execute(payload)

            self.sessions.replace(
                session_key, candidate + [LLMMessage(role="assistant", content=reply)]
            )
            logger.debug(f"💬 LLM [{self.provider_name}]: Session '{session_key}' updated")
            return reply

    async def _execute(self, payload: RequestPayload) -> str:
        logger.info(f"🤖 LLM [{self.provider_name}]: Request to model '{self.model_id}' ({payload.path})")

        try:
            body = await self.transport.execute(payload)
            return parse_response(body, self.config.provider)
        except LLMError:
            raise
        except Exception as e:
            logger.error(f"🤖 LLM [{self.provider_name}]: Unexpected error - {e}")
            raise LLMError(f"{self.provider_name} unexpected error: {e}") from e

    async def _with_timeout(self, awaitable: Awaitable[T], timeout: Optional[float]) -> T:
        if timeout is None:
            return await awaitable
        try:
            return await asyncio.wait_for(awaitable, timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"🤖 LLM [{self.provider_name}]: Call exceeded {timeout}s")
            raise LLMTimeoutError(f"{self.provider_name} call exceeded {timeout}s") from e

    # ============================================================
    # Lifecycle
    # ============================================================

    async def close(self):
        """Close HTTP client."""
        await self.transport.close()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
