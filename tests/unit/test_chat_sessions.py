"""
Unit tests for ChatSessionStore

Tests bounded history, system message preservation, session isolation and
per-key locking.
"""

import asyncio

import pytest

from aihelper.llm.chat_sessions import ChatSessionStore, truncate_history
from aihelper.llm.types import LLMMessage


def user(n: int) -> LLMMessage:
    return LLMMessage(role="user", content=f"message {n}")


# ============================================================
# truncate_history
# ============================================================


@pytest.mark.unit
def test_truncate_under_cap_unchanged():
    """Test histories within the cap are returned as-is"""
    # ARRANGE
    messages = [user(i) for i in range(3)]

    # ACT
    result = truncate_history(messages, 5)

    # ASSERT
    assert result == messages
    assert result is not messages


@pytest.mark.unit
def test_truncate_keeps_most_recent():
    """Test the oldest entries are evicted first"""
    # ARRANGE
    messages = [user(i) for i in range(10)]

    # ACT
    result = truncate_history(messages, 4)

    # ASSERT
    assert [m.content for m in result] == ["message 6", "message 7", "message 8", "message 9"]


@pytest.mark.unit
def test_truncate_preserves_leading_system_message():
    """Test a system message at index 0 survives truncation"""
    # ARRANGE
    system = LLMMessage(role="system", content="Be kind")
    messages = [system] + [user(i) for i in range(6)]

    # ACT
    result = truncate_history(messages, 3)

    # ASSERT
    assert len(result) == 3
    assert result[0] == system
    assert [m.content for m in result[1:]] == ["message 4", "message 5"]


@pytest.mark.unit
def test_truncate_cap_of_one_keeps_newest_message():
    """Test a cap of one keeps the newest message, even over a system message"""
    # ARRANGE
    system = LLMMessage(role="system", content="Be kind")

    # ACT
    with_system = truncate_history([system, user(1)], 1)
    without_system = truncate_history([user(1), user(2)], 1)

    # ASSERT
    assert with_system == [user(1)]
    assert without_system == [user(2)]


@pytest.mark.unit
def test_truncate_rejects_non_positive_cap():
    """Test max_size must be positive"""
    with pytest.raises(ValueError):
        truncate_history([user(1)], 0)


# ============================================================
# ChatSessionStore
# ============================================================


@pytest.mark.unit
def test_store_rejects_non_positive_cap():
    """Test ChatSessionStore requires a positive cap"""
    with pytest.raises(ValueError):
        ChatSessionStore(max_history_size=0)


@pytest.mark.unit
def test_store_unknown_session_is_empty():
    """Test an unseen key has an empty history"""
    # ARRANGE
    store = ChatSessionStore()

    # ASSERT
    assert store.get("nobody") == []
    assert store.has_session("nobody") is False
    assert len(store) == 0


@pytest.mark.unit
def test_store_append_caps_history(session_store):
    """Test appending more than the cap keeps the most recent messages"""
    # ACT
    for i in range(7):
        history = session_store.append("alice", user(i))

    # ASSERT
    assert len(history) == 4
    assert [m.content for m in session_store.get("alice")] == [
        "message 3", "message 4", "message 5", "message 6"
    ]


@pytest.mark.unit
def test_store_sessions_are_isolated(session_store):
    """Test histories under different keys never mix"""
    # ACT
    session_store.append("alice", user(1))
    session_store.append("bob", user(2))

    # ASSERT
    assert [m.content for m in session_store.get("alice")] == ["message 1"]
    assert [m.content for m in session_store.get("bob")] == ["message 2"]
    assert sorted(session_store.session_keys()) == ["alice", "bob"]


@pytest.mark.unit
def test_store_get_returns_copy(session_store):
    """Test mutating a returned history does not touch the store"""
    # ARRANGE
    session_store.append("alice", user(1))

    # ACT
    history = session_store.get("alice")
    history.append(user(2))

    # ASSERT
    assert len(session_store.get("alice")) == 1


@pytest.mark.unit
def test_store_replace_and_clear(session_store):
    """Test replace overwrites and clear forgets a session"""
    # ARRANGE
    session_store.extend("alice", [user(1), user(2)])

    # ACT
    session_store.replace("alice", [user(9)])

    # ASSERT
    assert [m.content for m in session_store.get("alice")] == ["message 9"]

    # ACT
    session_store.clear("alice")

    # ASSERT
    assert session_store.has_session("alice") is False


@pytest.mark.unit
def test_store_lock_is_per_key(session_store):
    """Test the same key always yields the same lock, different keys differ"""
    # ASSERT
    assert session_store.lock("alice") is session_store.lock("alice")
    assert session_store.lock("alice") is not session_store.lock("bob")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_store_lock_serializes_turns_on_one_key():
    """Test concurrent read-modify-write under the key lock loses no messages"""
    # ARRANGE
    store = ChatSessionStore(max_history_size=50)

    async def turn(n: int):
        async with store.lock("shared"):
            history = store.get("shared")
            await asyncio.sleep(0)
            store.replace("shared", history + [user(n)])

    # ACT
    await asyncio.gather(*(turn(i) for i in range(10)))

    # ASSERT
    assert len(store.get("shared")) == 10
