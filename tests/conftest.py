"""
Pytest configuration and shared fixtures for AIHelper tests
"""
import pytest
import os
from unittest.mock import AsyncMock

import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from aihelper.config.provider_config import Provider, ProviderConfiguration
from aihelper.llm.chat_sessions import ChatSessionStore


# ============================================================
# Configurations
# ============================================================

@pytest.fixture
def openai_config() -> ProviderConfiguration:
    """OpenAI configuration with fast retries"""
    return ProviderConfiguration(
        provider=Provider.OPENAI,
        model="gpt-4o-mini",
        max_retry_count=3,
        retry_delay_s=0.01,
    )


@pytest.fixture
def anthropic_config() -> ProviderConfiguration:
    """Anthropic configuration with fast retries"""
    return ProviderConfiguration(
        provider=Provider.ANTHROPIC,
        model="claude-3-5-sonnet",
        max_retry_count=3,
        retry_delay_s=0.01,
    )


# ============================================================
# Mock Services
# ============================================================

@pytest.fixture
def mock_sleep() -> AsyncMock:
    """
    Awaitable stand-in for asyncio.sleep

    Inject into clients/transports so retry delays are recorded, not waited.

    Usage:
        client = OpenAIClient("test_key", openai_config, sleep=mock_sleep)
        ...
        assert mock_sleep.await_count == 2
    """
    return AsyncMock(return_value=None)


@pytest.fixture
def session_store() -> ChatSessionStore:
    """Small chat session store (cap of 4 messages)"""
    return ChatSessionStore(max_history_size=4)
