"""
Anthropic Claude LLM client implementation.

Talks to the Anthropic Messages API directly over httpx. The system prompt is
never stored in the chat history; it travels in the top-level `system` field of
every request.
"""

from typing import Dict, List, Optional

from aihelper.llm.base import LLMClient
from aihelper.llm.request_builder import build_anthropic_request
from aihelper.llm.types import LLMMessage, RequestPayload


class AnthropicClient(LLMClient):
    """
    Anthropic Claude LLM client.

    Dynamic templates are sent as the `system` field with the user input as the
    only message, unlike OpenAI which joins them into one prompt.
    """

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.config.api_version,
        }

    def _build_prompt_request(self, prompt: str) -> RequestPayload:
        return build_anthropic_request(
            self.config,
            self.model_id,
            [LLMMessage(role="user", content=prompt)],
        )

    def _build_dynamic_template_request(self, template: str, user_input: str) -> RequestPayload:
        return build_anthropic_request(
            self.config,
            self.model_id,
            [LLMMessage(role="user", content=user_input)],
            system=template,
        )

    def _build_chat_request(
        self, messages: List[LLMMessage], system_prompt: Optional[str]
    ) -> RequestPayload:
        return build_anthropic_request(self.config, self.model_id, messages, system=system_prompt)
