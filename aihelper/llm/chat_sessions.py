"""
In-memory chat history store keyed by caller-chosen session keys.

Key Features:
- Ordered message history per session key, capped at a maximum size
- Eviction from the front; a system message at index 0 is always kept
- Per-key async locks so read-modify-append of one session is serialized
- Sessions live for the lifetime of the store (no expiry)

The store is owned by one LLM client (injected or created by it), never a
module-level global.
"""

import asyncio
from typing import Dict, Iterable, List

from aihelper.config.logging_config import get_logger
from aihelper.llm.types import ChatHistory, LLMMessage

logger = get_logger(__name__)


def truncate_history(messages: List[LLMMessage], max_size: int) -> ChatHistory:
    """
    Trim a history to at most `max_size` entries.

    Oldest non-system entries are evicted first; a leading system message is
    preserved while the cap leaves room for it. The newest entry is never
    evicted, so a cap of one keeps only the last message. Returns a new list.
    """
    if max_size <= 0:
        raise ValueError("max_size must be positive")

    if len(messages) <= max_size:
        return list(messages)

    if max_size > 1 and messages[0].role == "system":
        return [messages[0]] + list(messages[len(messages) - (max_size - 1):])

    return list(messages[len(messages) - max_size:])


class ChatSessionStore:
    """
    Maps session keys to bounded chat histories.

    Usage:
        store = ChatSessionStore(max_history_size=20)

        async with store.lock(session_key):
            history = store.get(session_key)
            ...
            store.extend(session_key, [user_message, assistant_message])
    """

    def __init__(self, max_history_size: int = 20):
        """
        Initialize ChatSessionStore.

        Args:
            max_history_size: Maximum messages kept per session (default: 20)
        """
        if max_history_size <= 0:
            raise ValueError("max_history_size must be positive")

        self._histories: Dict[str, List[LLMMessage]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._max_size = max_history_size

        logger.debug(f"💬 ChatSessionStore initialized: max_history={max_history_size}")

    @property
    def max_history_size(self) -> int:
        return self._max_size

    def lock(self, session_key: str) -> asyncio.Lock:
        """
        Get or create the asyncio.Lock for a session key.

        Hold it across read, dispatch and write-back of one chat turn so two
        concurrent turns on the same key cannot interleave.
        """
        if session_key not in self._locks:
            self._locks[session_key] = asyncio.Lock()
        return self._locks[session_key]

    def has_session(self, session_key: str) -> bool:
        return session_key in self._histories

    def get(self, session_key: str) -> ChatHistory:
        """Return a copy of the session history (empty if unseen)."""
        return list(self._histories.get(session_key, []))

    def append(self, session_key: str, message: LLMMessage) -> ChatHistory:
        """
        Append one message and truncate to the cap.

        Returns:
            The post-append, post-truncation history (copy)
        """
        return self.extend(session_key, [message])

    def extend(self, session_key: str, messages: Iterable[LLMMessage]) -> ChatHistory:
        history = self._histories.get(session_key, [])
        history = truncate_history(history + list(messages), self._max_size)
        self._histories[session_key] = history

        logger.trace(f"💬 Session '{session_key}': {len(history)} messages")
        return list(history)

    def replace(self, session_key: str, messages: Iterable[LLMMessage]) -> ChatHistory:
        """Overwrite a session's history (truncated to the cap)."""
        history = truncate_history(list(messages), self._max_size)
        self._histories[session_key] = history
        return list(history)

    def clear(self, session_key: str) -> None:
        """Forget a session's history. Only ever called explicitly."""
        self._histories.pop(session_key, None)
        logger.debug(f"💬 Session '{session_key}' cleared")

    def session_keys(self) -> List[str]:
        return list(self._histories.keys())

    def __len__(self) -> int:
        return len(self._histories)
