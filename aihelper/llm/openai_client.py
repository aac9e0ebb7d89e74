"""
OpenAI LLM client implementation.

Talks to the OpenAI REST API (or any endpoint with the same shape) directly over
httpx. Chat-capable models use /chat/completions, legacy models /completions.
"""

from typing import Dict, List, Optional

from aihelper.llm.base import LLMClient
from aihelper.llm.request_builder import (
    build_openai_request,
    combine_template,
    ensure_chat_model,
)
from aihelper.llm.types import LLMMessage, RequestPayload


class OpenAIClient(LLMClient):
    """
    OpenAI LLM client.

    Multi-turn chat seeds each new session with a system message built from the
    caller's initial prompt (or the configured system instructions); that
    message stays at the head of the history through truncation.
    """

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _build_prompt_request(self, prompt: str) -> RequestPayload:
        return build_openai_request(self.config, self.model_id, prompt=prompt)

    def _build_dynamic_template_request(self, template: str, user_input: str) -> RequestPayload:
        return self._build_prompt_request(combine_template(template, user_input))

    def _build_chat_request(
        self, messages: List[LLMMessage], system_prompt: Optional[str]
    ) -> RequestPayload:
        return build_openai_request(self.config, self.model_id, messages=messages)

    def _ensure_chat_supported(self) -> None:
        ensure_chat_model(self.model_id)

    def _seed_history(
        self, history: List[LLMMessage], system_prompt: Optional[str]
    ) -> List[LLMMessage]:
        if history:
            return history
        return [
            LLMMessage(
                role="system",
                content=system_prompt if system_prompt else self.config.default_system_prompt,
            )
        ]
