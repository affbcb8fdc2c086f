"""
Dispatch Memory Example

Shows what the dispatch side writes into memory (trips, driver notes,
manual preferences) and how it reads it back: semantic recall, grouped
history, stats and a per-entity purge.

Uses in-memory indexes with the local E5 model, so no API key is needed:
    pip install chauffeur-memory[embeddings-transformers]
"""

import asyncio
from datetime import datetime, timedelta, timezone

from chauffeur_memory import Client, Driver, MemoryService, Trip
from chauffeur_memory.embeddings import E5Embedding
from chauffeur_memory.storage.vector import InMemoryVectorIndex


async def main():
    print("=== Dispatch Memory Example ===\n")

    memory = MemoryService(
        InMemoryVectorIndex("clients"),
        InMemoryVectorIndex("drivers"),
        E5Embedding(model_name="intfloat/e5-small-v2"),
    )

    client = Client(name="Ana Reyes", phone="+1-555-0101")
    driver = Driver(name="Marco Silva", phone="+1-555-0201")
    trip = Trip(
        client_id=client.id,
        driver_id=driver.id,
        pickup_location="JFK Terminal 4",
        dropoff_location="The Plaza Hotel",
        pickup_time=datetime.now(timezone.utc) + timedelta(days=1),
        price=180,
        notes="Meet at arrivals with a sign",
    )

    # The trip changes status twice; memory keeps one item per trip
    for status in ("scheduled", "in-progress", "completed"):
        trip = trip.model_copy(update={"status": status})
        await memory.ingest_trip(client, trip, driver.name)
        await memory.ingest_trip(driver, trip, client.name)

    await memory.ingest_preference(client, "Keeps the cabin at 68F", source="manual")
    await memory.ingest_preference(client, "Likes jazz on airport runs", source="manual")
    await memory.ingest_driver_note(driver, "Always 10 minutes early", "performance")
    await memory.ingest_driver_note(driver, "Off on Sundays", "availability")

    print("Recall for 'what temperature does she like':")
    for snippet in await memory.fetch_context(client.id, "what temperature does she like", limit=2):
        print(f"  • {snippet}")

    history = memory.get_history(client.id)
    print(f"\nClient history: {len(history.trips)} trip(s), {len(history.preferences)} preference(s)")
    print(f"  {history.trips[0]}")

    driver_history = memory.get_history(driver.id, entity_type="driver")
    print(f"Driver notes: {driver_history.notes}")

    print(f"\nStats: {memory.get_stats()}")
    print(f"Purged {memory.delete_entity_memory(client.id)} item(s) for {client.name}")
    print(f"Stats: {memory.get_stats()}")

    memory.close()
    print("\n=== Example Complete ===")


if __name__ == "__main__":
    asyncio.run(main())
