"""
Canned provider responses for LLM client tests

Build real httpx.Response objects so the transport classifies them exactly as it
would a live reply.
"""
import json
from typing import Any, Dict, Optional

import httpx


def make_response(
    status_code: int,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Response:
    """
    Build a real httpx.Response for stubbing AsyncClient.post

    Dict/list bodies are JSON-encoded; strings are sent verbatim.
    """
    if isinstance(body, (dict, list)):
        content = json.dumps(body).encode("utf-8")
    else:
        content = (body or "").encode("utf-8")
    return httpx.Response(status_code, content=content, headers=headers or {})


def openai_chat_body(text: str) -> Dict[str, Any]:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": text}, "finish_reason": "stop"}
        ],
    }


def openai_completion_body(text: str) -> Dict[str, Any]:
    """Legacy /completions shape (choices[0].text)"""
    return {
        "id": "cmpl-123",
        "object": "text_completion",
        "choices": [{"index": 0, "text": text, "finish_reason": "stop"}],
    }


def anthropic_body(*texts: str) -> Dict[str, Any]:
    return {
        "id": "msg_123",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": t} for t in texts],
        "stop_reason": "end_turn",
    }
