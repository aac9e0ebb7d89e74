"""
Provider Configuration Module

Immutable per-client settings (token limits, sampling, timeouts, retry policy,
proxy, custom headers, chat-history cap). Can be built directly or loaded from
environment variables with sensible fallback defaults.

Architecture:
- Environment / caller values → ProviderConfiguration → LLM client (fixed for its lifetime)
"""

from enum import Enum
from typing import Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class Provider(str, Enum):
    """Supported LLM vendor families"""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    COHERE = "cohere"


DEFAULT_MODELS: Dict[Provider, str] = {
    Provider.OPENAI: "gpt-3.5-turbo",
    Provider.ANTHROPIC: "claude-3-sonnet",
}

DEFAULT_BASE_URLS: Dict[Provider, str] = {
    Provider.OPENAI: "https://api.openai.com/v1",
    Provider.ANTHROPIC: "https://api.anthropic.com/v1",
}

DEFAULT_SYSTEM_INSTRUCTIONS: Dict[Provider, str] = {
    Provider.OPENAI: "You are an AI assistant.",
    Provider.ANTHROPIC: "You are Claude, an AI assistant created by Anthropic.",
}

GENERIC_SYSTEM_INSTRUCTIONS = "You are an AI assistant."


class ProviderConfiguration(BaseModel):
    """
    Settings for one LLM client.

    Created once per client and never mutated; use with_overrides() to derive
    a new, re-validated configuration.
    """

    provider: Provider = Field(..., description="LLM vendor family")

    # Model selector (None = provider default, see DEFAULT_MODELS)
    model: Optional[str] = Field(default=None, description="Model selector")

    # Generation limits and sampling
    max_tokens: int = Field(default=150, gt=0, description="Maximum tokens per response")
    temperature: float = Field(default=0.7, ge=0.0, le=1.0, description="Sampling temperature")
    top_p: float = Field(default=1.0, ge=0.0, le=1.0, description="Nucleus sampling mass")

    # Transport and retry policy
    request_timeout_s: float = Field(default=10.0, gt=0, description="Per-attempt HTTP timeout")
    max_retry_count: int = Field(default=3, ge=0, description="Maximum attempts per call")
    retry_delay_s: float = Field(default=2.0, ge=0, description="Delay between transient retries")
    custom_headers: Dict[str, str] = Field(default_factory=dict, description="Extra request headers")
    proxy_url: Optional[str] = Field(default=None, description="Proxy host or URL")
    proxy_port: Optional[int] = Field(default=None, ge=1, le=65535, description="Proxy port")
    base_url: Optional[str] = Field(default=None, description="Override API base URL")

    # Conversation
    max_chat_history_size: int = Field(default=20, gt=0, description="Chat history cap per session")
    system_instructions: Optional[str] = Field(default=None, description="Default system prompt")

    # Anthropic only
    stop_sequences: List[str] = Field(default_factory=list, description="Stop sequences")
    api_version: str = Field(default="2023-06-01", description="anthropic-version header")

    enable_logging: bool = Field(default=False, description="Log request and response bodies")

    class Config:
        frozen = True  # Immutable

    @field_validator("proxy_url", "base_url")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def model_selector(self) -> str:
        """Configured selector, or the provider's default."""
        if self.model:
            return self.model
        return DEFAULT_MODELS.get(self.provider, "")

    @property
    def resolved_base_url(self) -> str:
        return (self.base_url or DEFAULT_BASE_URLS.get(self.provider, "")).rstrip("/")

    @property
    def default_system_prompt(self) -> str:
        if self.system_instructions:
            return self.system_instructions
        return DEFAULT_SYSTEM_INSTRUCTIONS.get(self.provider, GENERIC_SYSTEM_INSTRUCTIONS)

    @property
    def proxy(self) -> Optional[str]:
        """
        Proxy URL for httpx, or None.

        A bare host gets an http:// scheme; proxy_port is appended only when
        the URL carries no port of its own.
        """
        if not self.proxy_url:
            return None
        url = self.proxy_url.rstrip("/")
        if "://" not in url:
            url = f"http://{url}"
        if self.proxy_port and httpx.URL(url).port is None:
            url = f"{url}:{self.proxy_port}"
        return url

    def with_overrides(self, **changes) -> "ProviderConfiguration":
        """
        Return a new configuration with the given fields replaced.

        Raises:
            pydantic.ValidationError: If an override breaks a constraint
        """
        data = self.model_dump()
        data.update(changes)
        return ProviderConfiguration.model_validate(data)


class ProviderSettings(BaseSettings):
    """
    Environment-backed defaults for ProviderConfiguration.

    Every field maps to AIHELPER_<FIELD> (e.g. AIHELPER_MAX_TOKENS).
    Mappings and lists are given as JSON (AIHELPER_CUSTOM_HEADERS='{"X-Team": "ml"}').
    """

    model: Optional[str] = None
    max_tokens: int = 150
    temperature: float = 0.7
    top_p: float = 1.0
    request_timeout_s: float = 10.0
    max_retry_count: int = 3
    retry_delay_s: float = 2.0
    custom_headers: Dict[str, str] = {}
    proxy_url: Optional[str] = None
    proxy_port: Optional[int] = None
    base_url: Optional[str] = None
    max_chat_history_size: int = 20
    system_instructions: Optional[str] = None
    stop_sequences: List[str] = []
    api_version: str = "2023-06-01"
    enable_logging: bool = False

    class Config:
        env_prefix = "AIHELPER_"
        env_file = ".env"
        extra = "ignore"


def load_provider_config(provider: Provider, **overrides) -> ProviderConfiguration:
    """
    Load a provider configuration from environment variables.

    Args:
        provider: Provider the configuration is for
        **overrides: Explicit values that win over the environment

    Returns:
        Validated ProviderConfiguration
    """
    settings = ProviderSettings()
    data = settings.model_dump()
    data.update(overrides)
    data["provider"] = Provider(provider)
    return ProviderConfiguration.model_validate(data)
