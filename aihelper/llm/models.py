"""
Model catalog: maps model selectors to wire identifiers and owning providers.

Selectors are the names callers configure. Several selectors may resolve to the
same wire identifier (dated snapshots of a base model).
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from aihelper.config.provider_config import Provider
from aihelper.llm.types import UnknownModelError


@dataclass(frozen=True)
class ModelInfo:
    wire_id: str
    provider: Provider


def _openai(wire_id: str) -> ModelInfo:
    return ModelInfo(wire_id=wire_id, provider=Provider.OPENAI)


def _anthropic(wire_id: str) -> ModelInfo:
    return ModelInfo(wire_id=wire_id, provider=Provider.ANTHROPIC)


MODEL_REGISTRY: Dict[str, ModelInfo] = {
    # OpenAI general-purpose chat / text
    "gpt-3.5-turbo": _openai("gpt-3.5-turbo"),
    "gpt-3.5-turbo-16k": _openai("gpt-3.5-turbo-16k"),
    "gpt-3.5-turbo-0125": _openai("gpt-3.5-turbo-0125"),
    "gpt-3.5-turbo-instruct": _openai("gpt-3.5-turbo-instruct"),
    "gpt-3.5-turbo-instruct-0914": _openai("gpt-3.5-turbo-instruct-0914"),
    "gpt-3.5-turbo-1106": _openai("gpt-3.5-turbo-1106"),
    "gpt-4": _openai("gpt-4"),
    "gpt-4-turbo": _openai("gpt-4-turbo"),
    "gpt-4-turbo-2024-04-09": _openai("gpt-4-turbo-2024-04-09"),
    "gpt-4-turbo-preview": _openai("gpt-4-turbo-preview"),
    "gpt-4-0613": _openai("gpt-4-0613"),
    "gpt-4-0125-preview": _openai("gpt-4-0125-preview"),
    "gpt-4-1106-preview": _openai("gpt-4-1106-preview"),

    # OpenAI GPT-4.1
    "gpt-4.1": _openai("gpt-4.1"),
    "gpt-4.1-2025-04-14": _openai("gpt-4.1-2025-04-14"),
    "gpt-4.1-mini": _openai("gpt-4.1-mini"),
    "gpt-4.1-mini-2025-04-14": _openai("gpt-4.1-mini-2025-04-14"),
    "gpt-4.1-nano": _openai("gpt-4.1-nano"),
    "gpt-4.1-nano-2025-04-14": _openai("gpt-4.1-nano-2025-04-14"),

    # OpenAI GPT-4o
    "gpt-4o": _openai("gpt-4o"),
    "gpt-4o-2024-05-13": _openai("gpt-4o-2024-05-13"),
    "gpt-4o-2024-08-06": _openai("gpt-4o-2024-08-06"),
    "gpt-4o-2024-11-20": _openai("gpt-4o-2024-11-20"),
    "chatgpt-4o-latest": _openai("chatgpt-4o-latest"),
    "gpt-4o-mini": _openai("gpt-4o-mini"),
    "gpt-4o-mini-2024-07-18": _openai("gpt-4o-mini-2024-07-18"),
    "gpt-4o-realtime-preview": _openai("gpt-4o-realtime-preview"),
    "gpt-4o-realtime-preview-2024-10-01": _openai("gpt-4o-realtime-preview-2024-10-01"),
    "gpt-4o-realtime-preview-2024-12-17": _openai("gpt-4o-realtime-preview-2024-12-17"),
    "gpt-4o-mini-realtime-preview": _openai("gpt-4o-mini-realtime-preview"),
    "gpt-4o-mini-realtime-preview-2024-12-17": _openai("gpt-4o-mini-realtime-preview-2024-12-17"),
    "gpt-4o-audio-preview": _openai("gpt-4o-audio-preview"),
    "gpt-4o-audio-preview-2024-12-17": _openai("gpt-4o-audio-preview-2024-12-17"),
    "gpt-4o-mini-audio-preview": _openai("gpt-4o-mini-audio-preview"),
    "gpt-4o-mini-audio-preview-2024-12-17": _openai("gpt-4o-mini-audio-preview-2024-12-17"),
    "gpt-4.5-preview": _openai("gpt-4.5-preview"),
    "gpt-4.5-preview-2025-02-27": _openai("gpt-4.5-preview-2025-02-27"),

    # OpenAI o-series reasoning (dated snapshots collapse to the base id)
    "o1": _openai("o1"),
    "o1-2024-12-17": _openai("o1"),
    "o1-preview": _openai("o1-preview"),
    "o1-preview-2024-09-12": _openai("o1-preview"),
    "o1-mini": _openai("o1-mini"),
    "o1-mini-2024-09-12": _openai("o1-mini"),
    "o3-mini": _openai("o3-mini"),
    "o3-mini-2025-01-31": _openai("o3-mini"),
    "o4-mini": _openai("o4-mini"),
    "o4-mini-2025-04-16": _openai("o4-mini"),

    # OpenAI legacy completion models (flat prompt, no messages array)
    "davinci-002": _openai("davinci-002"),
    "babbage-002": _openai("babbage-002"),

    # Anthropic Claude
    "claude-3-7-sonnet": _anthropic("claude-3-7-sonnet-20250219"),
    "claude-3-5-sonnet": _anthropic("claude-3-5-sonnet-20240620"),
    "claude-3-5-haiku": _anthropic("claude-3-5-haiku-20241022"),
    "claude-3-opus": _anthropic("claude-3-opus-20240229"),
    "claude-3-sonnet": _anthropic("claude-3-sonnet-20240229"),
    "claude-3-haiku": _anthropic("claude-3-haiku-20240307"),
    "claude-2.1": _anthropic("claude-2.1"),
    "claude-2": _anthropic("claude-2"),
    "claude-instant-1.2": _anthropic("claude-instant-1.2"),
    "claude-instant-1": _anthropic("claude-instant-1"),
}


def _normalize_selector(selector: str) -> str:
    return selector.strip().lower()


def resolve_model(selector: str) -> Tuple[str, Provider]:
    """
    Resolve a model selector to its wire identifier and owning provider.

    Args:
        selector: Model selector (case-insensitive, e.g. "gpt-4o-mini")

    Returns:
        tuple: (wire identifier, Provider)

    Raises:
        UnknownModelError: Selector is not in the registry
    """
    if not isinstance(selector, str) or not selector.strip():
        raise UnknownModelError(f"Unknown model: {selector!r}")

    info = MODEL_REGISTRY.get(_normalize_selector(selector))
    if info is None:
        raise UnknownModelError(f"Unknown model: '{selector}'")
    return info.wire_id, info.provider


def models_for_provider(provider: Provider) -> List[str]:
    """List every selector owned by a provider, in catalog order."""
    return [name for name, info in MODEL_REGISTRY.items() if info.provider == provider]
