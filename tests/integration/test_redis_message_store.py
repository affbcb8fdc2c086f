"""Integration tests for the Redis message history backend."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

pytest.importorskip("redis")

from chauffeur_memory.models import BOT_SENDER_ID, Message
from chauffeur_memory.storage.messages.redis import RedisMessageStore


@pytest.fixture
def store(skip_if_no_redis):
    # Separate DB and a unique prefix so runs never collide
    store = RedisMessageStore(
        url="redis://localhost:6379/15",
        max_messages=3,
        key_prefix=f"test:{uuid.uuid4().hex[:8]}:",
    )
    yield store
    for participant in ("client-ana", "client-ben"):
        store.clear_participant_messages(participant)


@pytest.mark.integration
def test_add_and_list_messages(store):
    start = datetime(2025, 3, 14, 9, 0, tzinfo=timezone.utc)
    store.add_message(
        Message(sender_id="client-ana", receiver_id=BOT_SENDER_ID, content="Need a car", timestamp=start)
    )
    store.add_message(
        Message(
            sender_id=BOT_SENDER_ID,
            receiver_id="client-ana",
            content="Where to?",
            timestamp=start + timedelta(seconds=5),
        )
    )

    messages = store.list_messages("client-ana")

    assert [m.content for m in messages] == ["Need a car", "Where to?"]
    assert messages[1].sender_id == BOT_SENDER_ID
    assert store.list_messages(BOT_SENDER_ID) == []


@pytest.mark.integration
def test_history_is_capped_and_limited(store):
    for i in range(5):
        store.add_message(Message(sender_id="client-ben", receiver_id=BOT_SENDER_ID, content=f"m{i}"))

    assert [m.content for m in store.list_messages("client-ben")] == ["m2", "m3", "m4"]
    assert [m.content for m in store.list_messages("client-ben", limit=2)] == ["m3", "m4"]
    assert store.list_messages("client-ben", limit=0) == []


@pytest.mark.integration
def test_clear_participant_messages(store):
    store.add_message(Message(sender_id="client-ana", receiver_id=BOT_SENDER_ID, content="hi"))

    assert store.clear_participant_messages("client-ana") == 1
    assert store.list_messages("client-ana") == []
