"""
Response parsing for each provider's JSON shape.

Bodies are validated into explicit result models; any missing field the text
extraction depends on raises MalformedResponseError.
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ValidationError, field_validator

from aihelper.config.provider_config import Provider
from aihelper.llm.types import MalformedResponseError, UnsupportedProviderError


# ============================================================
# OpenAI shapes
# ============================================================


class OpenAIChatMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class OpenAIChoice(BaseModel):
    message: Optional[OpenAIChatMessage] = None  # chat completions
    text: Optional[str] = None  # legacy completions


class OpenAIResponse(BaseModel):
    choices: List[OpenAIChoice]


# ============================================================
# Anthropic shapes
# ============================================================


class AnthropicTextBlock(BaseModel):
    type: Literal["text"]
    text: str


class AnthropicOtherBlock(BaseModel):
    """Non-text block (tool_use, thinking, ...); a text block must carry `text`."""

    type: str

    @field_validator("type")
    @classmethod
    def _not_text(cls, value: str) -> str:
        if value == "text":
            raise ValueError("text block without text")
        return value


class AnthropicResponse(BaseModel):
    content: List[Union[AnthropicTextBlock, AnthropicOtherBlock]]


def _preview(raw_body: Union[str, bytes]) -> str:
    if isinstance(raw_body, bytes):
        raw_body = raw_body.decode("utf-8", errors="replace")
    return raw_body[:200]


def parse_openai_response(raw_body: Union[str, bytes]) -> str:
    """
    Extract generated text from an OpenAI response.

    Prefers choices[0].message.content and falls back to choices[0].text.

    Raises:
        MalformedResponseError: Neither field is present
    """
    try:
        response = OpenAIResponse.model_validate_json(raw_body)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Unexpected OpenAI response format: {_preview(raw_body)}"
        ) from e

    if not response.choices:
        raise MalformedResponseError("Unexpected OpenAI response format: no choices")

    first = response.choices[0]
    if first.message is not None and first.message.content is not None:
        return first.message.content
    if first.text is not None:
        return first.text

    raise MalformedResponseError(
        f"Unexpected OpenAI response format: {_preview(raw_body)}"
    )


def parse_anthropic_response(raw_body: Union[str, bytes]) -> str:
    """
    Concatenate the text of every `text` block, in order, skipping other block types.

    Raises:
        MalformedResponseError: `content` is absent or not a block list
    """
    try:
        response = AnthropicResponse.model_validate_json(raw_body)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Unexpected response format from Claude API: {_preview(raw_body)}"
        ) from e

    return "".join(
        block.text for block in response.content if isinstance(block, AnthropicTextBlock)
    )


def parse_response(raw_body: Union[str, bytes], provider: Provider) -> str:
    """Parse a raw response body according to the provider's shape."""
    if provider == Provider.OPENAI:
        return parse_openai_response(raw_body)
    if provider == Provider.ANTHROPIC:
        return parse_anthropic_response(raw_body)
    raise UnsupportedProviderError(f"Unsupported AI provider: {Provider(provider).value}")
