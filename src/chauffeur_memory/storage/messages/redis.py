"""
Redis message history implementation.

Keeps each participant's recent messages in a capped Redis list, so several
concierge replicas share one conversation window without hitting the
relational database on every turn.
"""

import logging
from typing import List, Optional

import redis

from chauffeur_memory.models import BOT_SENDER_ID, Message

logger = logging.getLogger(__name__)


class RedisMessageStore:
    """
    Redis implementation of the MessageStore protocol.

    A message is pushed onto both the sender's and the receiver's list;
    the "bot" side is not tracked.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        max_messages: int = 100,
        key_prefix: str = "chauffeur:messages:",
        client: Optional["redis.Redis"] = None,
    ):
        """
        Initialize the Redis store.

        Args:
            url: Redis connection URL
            max_messages: Maximum number of messages kept per participant
            key_prefix: Prefix for Redis keys
            client: Pre-built Redis client (takes precedence over url)
        """
        self.client = client or redis.Redis.from_url(url, decode_responses=True)
        self._max_messages = max_messages
        self._key_prefix = key_prefix

        try:
            self.client.ping()
            logger.info(f"RedisMessageStore initialized (max_messages={max_messages})")
        except redis.ConnectionError as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise

    def _get_key(self, participant_id: str) -> str:
        return f"{self._key_prefix}{participant_id}"

    def add_message(self, message: Message) -> Message:
        message_json = message.model_dump_json()
        pipeline = self.client.pipeline()

        for participant_id in {message.sender_id, message.receiver_id}:
            if participant_id == BOT_SENDER_ID:
                continue
            key = self._get_key(participant_id)
            pipeline.rpush(key, message_json)
            pipeline.ltrim(key, -self._max_messages, -1)

        pipeline.execute()
        logger.debug(f"Stored message {message.id} ({message.sender_id} -> {message.receiver_id})")
        return message

    def list_messages(self, participant_id: str, limit: Optional[int] = None) -> List[Message]:
        key = self._get_key(participant_id)
        if limit is not None and limit <= 0:
            return []
        start = -limit if limit is not None else 0
        messages_json = self.client.lrange(key, start, -1)

        messages = []
        for msg_json in messages_json:
            try:
                messages.append(Message.model_validate_json(msg_json))
            except Exception as e:
                logger.warning(f"Failed to deserialize message: {e}")
                continue

        return messages

    def clear_participant_messages(self, participant_id: str) -> int:
        key = self._get_key(participant_id)
        count = self.client.llen(key)
        self.client.delete(key)

        logger.info(f"Cleared {count} messages for participant {participant_id}")
        return count
