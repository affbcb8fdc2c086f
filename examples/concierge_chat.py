"""
Concierge Chat Example

Runs a few chat turns through the full stack: SQLAlchemy CRM (SQLite),
on-disk Qdrant memory, the OpenAI-compatible embedding gateway and a
casual-llm completion provider. Credentials come from the environment or a
.env file (XAI_API_KEY, AI_INTEGRATIONS_OPENAI_API_KEY, ...).
"""

import asyncio

from dotenv import load_dotenv
from sqlalchemy import create_engine

from chauffeur_memory import MemoryService, MemorySettings, ReplyGenerationError
from chauffeur_memory.logging_config import setup_logging
from chauffeur_memory.storage.crm import SQLAlchemyCRMStore
from chauffeur_memory.synthesis import ContextSynthesizer, build_completion_provider

load_dotenv()


async def main():
    settings = MemorySettings()
    setup_logging(settings)

    crm = SQLAlchemyCRMStore(create_engine(settings.database_url))
    crm.create_tables()

    memory = MemoryService.from_settings(settings)
    stats = memory.initialize()
    if not stats.embeddings_enabled:
        print("No embedding key configured: replies will use the profile only.\n")

    synthesizer = ContextSynthesizer(crm, memory, build_completion_provider(settings), settings)

    phone = "+1-555-0000"
    turns = [
        "Hi, I need a car from JFK to the Plaza Hotel tomorrow at 9am.",
        "Please have still water in the car, and I prefer no music.",
        "Actually, can you make it 10am instead?",
    ]

    try:
        for text in turns:
            print(f"Client: {text}")
            try:
                result = await synthesizer.handle_message(phone, text)
            except ReplyGenerationError as e:
                print(f"  (reply failed: {e})")
                continue
            print(f"Concierge: {result.reply_text}\n")

        client = crm.get_client_by_phone(phone)
        profile = crm.get_profile(client.id)
        print("=== Profile ===")
        print(f"Summary: {profile.summary}")
        print(f"Preferences: {profile.preferences}")
        print(f"Notes: {profile.notes}")

        history = memory.get_history(client.id)
        print(f"\nConversations remembered: {len(history.conversations)}")
    finally:
        memory.close()


if __name__ == "__main__":
    asyncio.run(main())
