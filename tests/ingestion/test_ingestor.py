"""Tests for MemoryIngestor routing and failure handling."""

from unittest.mock import AsyncMock, Mock

import pytest

from chauffeur_memory.ingestion import MemoryIngestor
from chauffeur_memory.models import Message


@pytest.fixture
def client_memory():
    memory = Mock()
    memory.remember = AsyncMock(return_value="client-item")
    return memory


@pytest.fixture
def driver_memory():
    memory = Mock()
    memory.remember = AsyncMock(return_value="driver-item")
    return memory


@pytest.fixture
def ingestor(client_memory, driver_memory):
    return MemoryIngestor(client_memory, driver_memory)


@pytest.mark.asyncio
async def test_client_message_goes_to_client_memory(ingestor, client_memory, driver_memory, client):
    message = Message(sender_id=client.id, receiver_id="bot", content="Hello")

    item_id = await ingestor.ingest_message(client, message, "Hi Ana")

    assert item_id == "client-item"
    driver_memory.remember.assert_not_called()
    args, kwargs = client_memory.remember.call_args
    assert args == (client.id, "conversation", "Client Ana Reyes: Hello\nAI Response: Hi Ana")
    assert kwargs["key"] is None


@pytest.mark.asyncio
async def test_driver_message_goes_to_driver_memory(ingestor, client_memory, driver_memory, driver):
    message = Message(sender_id=driver.id, receiver_id="dispatch", content="On my way")

    assert await ingestor.ingest_message(driver, message) == "driver-item"
    client_memory.remember.assert_not_called()
    assert driver_memory.remember.call_args.args[1] == "communication"


@pytest.mark.asyncio
async def test_trip_is_keyed_by_trip_id(ingestor, client_memory, client, trip):
    await ingestor.ingest_trip(client, trip, "Marco Silva")

    kwargs = client_memory.remember.call_args.kwargs
    assert kwargs["key"] == "trip-1"
    assert kwargs["timestamp"] == trip.pickup_time
    assert kwargs["trip_id"] == "trip-1"


@pytest.mark.asyncio
async def test_driver_trip(ingestor, driver_memory, driver, trip):
    await ingestor.ingest_trip(driver, trip, "Ana Reyes")

    args, kwargs = driver_memory.remember.call_args
    assert args[0] == driver.id
    assert "for client Ana Reyes" in args[2]
    assert kwargs["key"] == "trip-1"


@pytest.mark.asyncio
async def test_preference_source(ingestor, client_memory, client):
    await ingestor.ingest_preference(client, "Jazz on the radio", source="manual")

    args, kwargs = client_memory.remember.call_args
    assert args[1] == "preference"
    assert kwargs["extraction_source"] == "manual"


@pytest.mark.asyncio
async def test_driver_note(ingestor, driver_memory, driver):
    await ingestor.ingest_driver_note(driver, "Late twice this week", "performance")

    assert driver_memory.remember.call_args.args[1] == "performance"


@pytest.mark.asyncio
async def test_invalid_note_type_raises(ingestor, driver_memory, driver):
    with pytest.raises(ValueError):
        await ingestor.ingest_driver_note(driver, "Great", "rating")
    driver_memory.remember.assert_not_called()


@pytest.mark.asyncio
async def test_unavailable_memory_returns_none(ingestor, client_memory, client):
    client_memory.remember.return_value = None

    assert await ingestor.ingest_preference(client, "Still water") is None
