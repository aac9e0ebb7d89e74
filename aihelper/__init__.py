"""
AIHelper: one client contract for several LLM providers.
"""

from aihelper.config import Provider, ProviderConfiguration
from aihelper.llm import LLMClient, LLMClientFactory
from aihelper.prompts import DynamicPromptStore, PromptTemplates

__all__ = [
    "Provider",
    "ProviderConfiguration",
    "LLMClient",
    "LLMClientFactory",
    "DynamicPromptStore",
    "PromptTemplates",
]
