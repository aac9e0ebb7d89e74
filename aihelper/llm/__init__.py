"""
Provider-abstracted LLM client layer for AIHelper

This package provides a unified interface for generating text with different LLM
providers (OpenAI, Anthropic) with retry, response parsing and bounded chat history.
"""

from aihelper.llm.anthropic_client import AnthropicClient
from aihelper.llm.base import LLMClient
from aihelper.llm.chat_sessions import ChatSessionStore
from aihelper.llm.factory import LLMClientFactory
from aihelper.llm.models import resolve_model
from aihelper.llm.openai_client import OpenAIClient
from aihelper.llm.types import (
    LLMMessage,
    LLMError,
    InvalidArgumentError,
    UnknownModelError,
    UnsupportedModelForChatError,
    UnsupportedProviderError,
    TemplateNotFoundError,
    TerminalHTTPError,
    LLMAuthenticationError,
    TransientFailureError,
    LLMTimeoutError,
    LLMConnectionError,
    RetriesExhaustedError,
    MalformedResponseError,
)

__all__ = [
    "LLMClient",
    "LLMClientFactory",
    "OpenAIClient",
    "AnthropicClient",
    "ChatSessionStore",
    "resolve_model",
    "LLMMessage",
    "LLMError",
    "InvalidArgumentError",
    "UnknownModelError",
    "UnsupportedModelForChatError",
    "UnsupportedProviderError",
    "TemplateNotFoundError",
    "TerminalHTTPError",
    "LLMAuthenticationError",
    "TransientFailureError",
    "LLMTimeoutError",
    "LLMConnectionError",
    "RetriesExhaustedError",
    "MalformedResponseError",
]
