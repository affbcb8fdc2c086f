"""Shared fixtures: a deterministic embedding and ready-made domain records."""

import re
import zlib
from datetime import datetime, timezone
from typing import List, Optional

import pytest

from chauffeur_memory.models import Client, Driver, Trip

DIMENSION = 64


class KeywordEmbedding:
    """
    Deterministic bag-of-words embedding for tests.

    Each lowercase word is hashed into one of DIMENSION buckets, so texts that
    share words are more similar than texts that do not. Bucket 0 is a constant
    bias so no vector is ever all zeros.
    """

    def __init__(self, available: bool = True):
        self._available = available
        self.calls: List[str] = []

    @property
    def model_name(self) -> str:
        return "keyword-test"

    @property
    def available(self) -> bool:
        return self._available

    async def embed(self, text: str) -> Optional[List[float]]:
        self.calls.append(text)
        if not self._available or not text.strip():
            return None

        vector = [0.0] * DIMENSION
        vector[0] = 1.0
        for word in re.findall(r"[a-z0-9]+", text.lower()):
            vector[1 + zlib.crc32(word.encode()) % (DIMENSION - 1)] += 1.0
        return vector

    async def embed_document(self, text: str) -> Optional[List[float]]:
        return await self.embed(text)

    async def embed_query(self, text: str) -> Optional[List[float]]:
        return await self.embed(text)


@pytest.fixture
def embedding():
    return KeywordEmbedding()


@pytest.fixture
def disabled_embedding():
    return KeywordEmbedding(available=False)


@pytest.fixture
def client():
    return Client(id="client-ana", name="Ana Reyes", phone="+1-555-0101", email="ana@example.com")


@pytest.fixture
def other_client():
    return Client(id="client-ben", name="Ben Okafor", phone="+1-555-0102")


@pytest.fixture
def driver():
    return Driver(id="driver-marco", name="Marco Silva", phone="+1-555-0201")


@pytest.fixture
def trip(client, driver):
    return Trip(
        id="trip-1",
        client_id=client.id,
        driver_id=driver.id,
        pickup_location="JFK Terminal 4",
        dropoff_location="The Plaza Hotel",
        pickup_time=datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc),
        status="scheduled",
        price=180,
        notes="Meet at arrivals with a sign",
    )
