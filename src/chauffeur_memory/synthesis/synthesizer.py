import logging
from datetime import datetime
from typing import List, Optional

from casual_llm import (
    AssistantMessage,
    ChatMessage,
    LLMProvider,
    ModelConfig,
    Provider,
    SystemMessage,
    UserMessage,
    create_provider,
)

from chauffeur_memory.config import MemorySettings
from chauffeur_memory.exceptions import ReplyGenerationError
from chauffeur_memory.memory_service import MemoryService
from chauffeur_memory.models import (
    BOT_SENDER_ID,
    NEW_CLIENT_NAME,
    ChatReply,
    Client,
    Message,
    ProfileDelta,
    ProfileUpdate,
    StructuredProfile,
)
from chauffeur_memory.storage.protocols import CRMStore, MessageStore
from chauffeur_memory.synthesis.context import render_profile_context, render_semantic_context
from chauffeur_memory.synthesis.extractors import ProfileDeltaExtracter
from chauffeur_memory.synthesis.prompts import CONCIERGE_REPLY_PROMPT
from chauffeur_memory.utils.time import utcnow

logger = logging.getLogger(__name__)

APOLOGY_REPLY = "I apologize, I'm having trouble processing that request. Please try again."

_PROVIDERS = {
    "openai": Provider.OPENAI,
    "ollama": Provider.OLLAMA,
}


def build_message_store(settings: MemorySettings, crm: CRMStore) -> MessageStore:
    """Conversation history backend: Redis when ``redis_url`` is set, else the CRM."""
    if not settings.redis_url:
        return crm

    # Optional extra
    from chauffeur_memory.storage.messages.redis import RedisMessageStore

    logger.info("Keeping conversation history in Redis")
    return RedisMessageStore(url=settings.redis_url)


def build_completion_provider(settings: MemorySettings) -> LLMProvider:
    """Create the casual-llm provider the concierge talks to."""
    try:
        provider = _PROVIDERS[settings.llm_provider.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown LLM provider {settings.llm_provider!r}, expected one of {', '.join(_PROVIDERS)}"
        ) from None

    return create_provider(
        ModelConfig(
            name=settings.llm_model,
            provider=provider,
            base_url=settings.llm_base_url,
            api_key=settings.llm_api_key,
        )
    )


def apply_profile_delta(
    profile: StructuredProfile, delta: Optional[ProfileDelta], now: datetime
) -> ProfileUpdate:
    """
    Merge an extracted delta into a profile update.

    Preferences and notes only ever grow: new entries are appended after the
    existing ones, duplicates included. The summary is replaced only by a
    non-empty proposal. ``last_interaction`` is always set to ``now``, and is
    the only field written when there is no delta.
    """
    if delta is None:
        return ProfileUpdate(last_interaction=now)

    summary = profile.summary
    if delta.updated_summary and delta.updated_summary.strip():
        summary = delta.updated_summary

    return ProfileUpdate(
        summary=summary,
        preferences=[*profile.preferences, *delta.new_preferences],
        notes=[*profile.notes, *delta.new_notes],
        last_interaction=now,
    )


class ContextSynthesizer:
    """
    Answers client messages with the structured profile and recalled memories
    in context, then folds what was learned back into the profile.

    Example:
        >>> synthesizer = ContextSynthesizer(crm, memory, llm_provider)
        >>> result = await synthesizer.handle_message("+1-555-0000", "Book me a car to JFK")
        >>> print(result.reply_text)
    """

    def __init__(
        self,
        crm: CRMStore,
        memory: MemoryService,
        llm_provider: LLMProvider,
        settings: Optional[MemorySettings] = None,
        message_store: Optional[MessageStore] = None,
    ):
        """
        Args:
            crm: Client, profile and message records
            memory: Long-term vector memory
            llm_provider: Completion provider for replies and extraction
            settings: Completion parameters and context limits (defaults apply when None)
            message_store: Where conversation history is kept (default: Redis when
                ``settings.redis_url`` is set, otherwise the CRM)
        """
        self.crm = crm
        self.memory = memory
        self.llm_provider = llm_provider
        self.settings = settings or MemorySettings()
        self.messages = message_store or build_message_store(self.settings, crm)
        self.extracter = ProfileDeltaExtracter(
            llm_provider,
            temperature=self.settings.extraction_temperature,
            max_tokens=self.settings.extraction_max_tokens,
        )

    def _resolve_client(self, phone: str) -> Client:
        client = self.crm.get_client_by_phone(phone)
        if client is not None:
            return client

        client = self.crm.create_client(Client(name=NEW_CLIENT_NAME, phone=phone))
        self.crm.create_profile(StructuredProfile(client_id=client.id, last_interaction=utcnow()))
        logger.info(f"Created client {client.id} for new phone number")
        return client

    async def _semantic_context(self, client: Client, query: str) -> str:
        try:
            snippets = await self.memory.fetch_context(
                client.id, query, limit=self.settings.context_snippet_limit
            )
        except Exception as e:
            logger.error(f"Semantic context fetch failed for {client.id}: {e}")
            return ""
        return render_semantic_context(snippets)

    def _history(self, client: Client) -> List[ChatMessage]:
        recent = self.messages.list_messages(client.id, limit=self.settings.history_turns)
        return [
            AssistantMessage(content=message.content)
            if message.sender_id == BOT_SENDER_ID
            else UserMessage(content=message.content)
            for message in recent
        ]

    async def _update_profile(
        self, client: Client, profile: StructuredProfile, user_message: str, reply_text: str
    ) -> None:
        delta = await self.extracter.extract(profile, user_message, reply_text)
        update = apply_profile_delta(profile, delta, utcnow())
        try:
            self.crm.update_profile(client.id, update)
        except Exception as e:
            logger.error(f"Failed to update profile for {client.id}: {e}")

    async def generate_reply(self, phone: str, message: str) -> ChatReply:
        """
        Answer one inbound client message.

        Unknown phone numbers get a new client record and an empty profile.

        Raises:
            ReplyGenerationError: If the completion provider fails
        """
        client = self._resolve_client(phone)
        profile = self.crm.get_profile(client.id)

        now = utcnow()
        system_prompt = CONCIERGE_REPLY_PROMPT.format(
            profile_context=render_profile_context(client, profile),
            semantic_context=await self._semantic_context(client, message),
            today_natural=now.strftime("%A, %B %d, %Y"),
        )

        messages: List[ChatMessage] = [
            SystemMessage(content=system_prompt),
            *self._history(client),
            UserMessage(content=message),
        ]

        try:
            response = await self.llm_provider.chat(
                messages,
                response_format="text",
                temperature=self.settings.reply_temperature,
                max_tokens=self.settings.reply_max_tokens,
            )
        except Exception as e:
            logger.error(f"Reply generation failed for {client.id}: {e}")
            raise ReplyGenerationError(f"Reply generation failed: {e}") from e

        reply_text = (response.content or "").strip() or APOLOGY_REPLY

        if profile is not None:
            await self._update_profile(client, profile, message, reply_text)

        return ChatReply(reply_text=reply_text, client=client)

    async def handle_message(
        self, phone: str, message: str, message_type: str = "sms"
    ) -> ChatReply:
        """
        Full chat turn: reply, record both messages, remember the exchange.

        Recording and remembering never fail the turn; only reply generation
        raises.
        """
        result = await self.generate_reply(phone, message)
        client = result.client

        inbound = Message(
            sender_id=client.id, receiver_id=BOT_SENDER_ID, content=message, type=message_type
        )
        outbound = Message(
            sender_id=BOT_SENDER_ID,
            receiver_id=client.id,
            content=result.reply_text,
            type=message_type,
        )
        try:
            self.messages.add_message(inbound)
            self.messages.add_message(outbound)
        except Exception as e:
            logger.error(f"Failed to save messages for {client.id}: {e}")

        await self.memory.ingest_message(client, inbound, result.reply_text)
        return result
