"""
Factory for creating LLM client instances.

Selects the client implementation from the configuration's declared provider.
"""

import os
from typing import Dict, Optional, Type

from aihelper.config.logging_config import get_logger
from aihelper.config.provider_config import Provider, ProviderConfiguration, load_provider_config
from aihelper.llm.anthropic_client import AnthropicClient
from aihelper.llm.base import LLMClient
from aihelper.llm.chat_sessions import ChatSessionStore
from aihelper.llm.openai_client import OpenAIClient
from aihelper.llm.types import InvalidArgumentError, UnsupportedProviderError

logger = get_logger(__name__)


CLIENT_CLASSES: Dict[Provider, Type[LLMClient]] = {
    Provider.OPENAI: OpenAIClient,
    Provider.ANTHROPIC: AnthropicClient,
}

API_KEY_ENV_VARS: Dict[Provider, str] = {
    Provider.OPENAI: "OPENAI_API_KEY",
    Provider.ANTHROPIC: "ANTHROPIC_API_KEY",
}


class LLMClientFactory:
    """
    Factory for creating LLM client instances.

    Supports:
    - 'openai': OpenAI API (chat completions and legacy completions)
    - 'anthropic': Anthropic Messages API
    """

    @staticmethod
    def create_client(
        api_key: str,
        config: Optional[ProviderConfiguration],
        session_store: Optional[ChatSessionStore] = None,
    ) -> LLMClient:
        """
        Create LLM client instance.

        Args:
            api_key: API key for the provider
            config: Client configuration (its provider selects the implementation)
            session_store: Optional shared chat session store

        Returns:
            LLMClient: Initialized client instance

        Raises:
            InvalidArgumentError: Missing configuration or blank API key
            UnsupportedProviderError: No implementation for config.provider
        """
        if config is None:
            raise InvalidArgumentError("config cannot be null.")
        if not isinstance(api_key, str) or not api_key.strip():
            raise InvalidArgumentError("API key cannot be null or empty.")

        client_cls = CLIENT_CLASSES.get(config.provider)
        if client_cls is None:
            raise UnsupportedProviderError(
                f"Unsupported AI provider: '{config.provider.value}'. "
                f"Supported providers: {', '.join(p.value for p in CLIENT_CLASSES)}"
            )

        logger.info(f"🤖 LLM Factory: Creating {config.provider.value} client")
        return client_cls(api_key, config, session_store=session_store)

    @staticmethod
    def create_client_from_env(
        provider: Provider,
        api_key: Optional[str] = None,
        **overrides,
    ) -> LLMClient:
        """
        Create a client from environment configuration.

        Args:
            provider: Provider to create a client for
            api_key: API key (or None to read OPENAI_API_KEY / ANTHROPIC_API_KEY)
            **overrides: Configuration values that win over AIHELPER_* variables

        Raises:
            InvalidArgumentError: No API key given or found in the environment
        """
        provider = Provider(provider)
        env_var = API_KEY_ENV_VARS.get(provider)
        api_key = api_key or (os.getenv(env_var) if env_var else None)
        if not api_key:
            raise InvalidArgumentError(
                f"{provider.value} API key not found. "
                f"Set {env_var or 'the provider API key'} environment variable or pass api_key parameter."
            )

        config = load_provider_config(provider, **overrides)
        return LLMClientFactory.create_client(api_key, config)
