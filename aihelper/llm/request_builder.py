"""
Request construction for each provider's wire format.

OpenAI-shaped requests pick between the chat-completions and legacy completions
endpoints from the model id; reasoning models (o1/o3/o4) use
`max_completion_tokens` and take no sampling parameters. Anthropic requests
always carry a `messages` array plus a top-level `system` field.
"""

from typing import Any, Dict, List, Optional, Sequence

from aihelper.config.provider_config import Provider, ProviderConfiguration
from aihelper.llm.types import (
    LLMMessage,
    RequestPayload,
    UnsupportedModelForChatError,
    UnsupportedProviderError,
)


CHAT_MODEL_PREFIXES = ("gpt-", "chatgpt-", "o1", "o3", "o4")
REASONING_MODEL_PREFIXES = ("o1", "o3", "o4")

OPENAI_CHAT_PATH = "/chat/completions"
OPENAI_COMPLETIONS_PATH = "/completions"
ANTHROPIC_MESSAGES_PATH = "/messages"


def is_chat_model(model_id: Optional[str]) -> bool:
    """True if the wire id accepts a multi-turn `messages` array."""
    if not model_id or not model_id.strip():
        return False
    return model_id.strip().lower().startswith(CHAT_MODEL_PREFIXES)


def is_reasoning_model(model_id: Optional[str]) -> bool:
    """True for o-series models, which reject temperature/top_p."""
    if not model_id or not model_id.strip():
        return False
    return model_id.strip().lower().startswith(REASONING_MODEL_PREFIXES)


def ensure_chat_model(model_id: Optional[str]) -> None:
    """
    Raises:
        UnsupportedModelForChatError: Model is not chat-capable
    """
    if not is_chat_model(model_id):
        raise UnsupportedModelForChatError(
            f"Model '{model_id}' is not a chat-capable model. "
            "Please use a chat-supported model (e.g., gpt-4o, gpt-4.1, o1, o3-mini)."
        )


def combine_template(template: str, user_input: str) -> str:
    return f"{template}\n{user_input}"


def _wire_messages(messages: Sequence[LLMMessage]) -> List[Dict[str, str]]:
    return [m.to_wire() for m in messages]


def build_openai_request(
    config: ProviderConfiguration,
    model_id: str,
    prompt: Optional[str] = None,
    messages: Optional[Sequence[LLMMessage]] = None,
) -> RequestPayload:
    """
    Build an OpenAI request for a single prompt or a message list.

    Args:
        config: Client configuration (token limit, sampling)
        model_id: Resolved wire identifier
        prompt: Single user prompt (mutually exclusive with messages)
        messages: Full message list for multi-turn chat

    Returns:
        RequestPayload targeting /chat/completions or /completions

    Raises:
        UnsupportedModelForChatError: Message list given for a completion-only model
    """
    if (prompt is None) == (messages is None):
        raise ValueError("Exactly one of prompt or messages must be given")

    if not is_chat_model(model_id):
        if messages is not None:
            ensure_chat_model(model_id)
        return RequestPayload(
            path=OPENAI_COMPLETIONS_PATH,
            body={
                "model": model_id,
                "prompt": prompt,
                "max_tokens": config.max_tokens,
                "temperature": config.temperature,
                "top_p": config.top_p,
            },
        )

    if messages is None:
        messages = [LLMMessage(role="user", content=prompt)]

    body: Dict[str, Any] = {
        "model": model_id,
        "messages": _wire_messages(messages),
    }
    if is_reasoning_model(model_id):
        body["max_completion_tokens"] = config.max_tokens
    else:
        body["max_tokens"] = config.max_tokens
        body["temperature"] = config.temperature
        body["top_p"] = config.top_p

    return RequestPayload(path=OPENAI_CHAT_PATH, body=body)


def build_anthropic_request(
    config: ProviderConfiguration,
    model_id: str,
    messages: Sequence[LLMMessage],
    system: Optional[str] = None,
) -> RequestPayload:
    """
    Build an Anthropic Messages API request.

    `system` falls back to the configuration's default system prompt.
    `stop_sequences` is omitted entirely when empty.
    """
    body: Dict[str, Any] = {
        "model": model_id,
        "messages": _wire_messages(messages),
        "system": system if system else config.default_system_prompt,
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
        "top_p": config.top_p,
    }
    if config.stop_sequences:
        body["stop_sequences"] = list(config.stop_sequences)

    return RequestPayload(path=ANTHROPIC_MESSAGES_PATH, body=body)


def build_request(
    config: ProviderConfiguration,
    model_id: str,
    prompt: Optional[str] = None,
    messages: Optional[Sequence[LLMMessage]] = None,
    system: Optional[str] = None,
) -> RequestPayload:
    """Dispatch to the builder for the configuration's provider."""
    if config.provider == Provider.OPENAI:
        return build_openai_request(config, model_id, prompt=prompt, messages=messages)

    if config.provider == Provider.ANTHROPIC:
        if messages is None:
            messages = [LLMMessage(role="user", content=prompt or "")]
        return build_anthropic_request(config, model_id, messages, system=system)

    raise UnsupportedProviderError(f"Unsupported AI provider: {config.provider.value}")
