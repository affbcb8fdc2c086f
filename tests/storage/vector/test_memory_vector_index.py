"""
Unit tests for the in-memory vector index.

Covers upsert-by-id, metadata filtering, bulk deletion and similarity ordering.
"""

import pytest

from chauffeur_memory.storage.vector.memory import InMemoryVectorIndex


@pytest.fixture
def index():
    return InMemoryVectorIndex(name="clients")


def payload(entity_id: str, source: str = "conversation", **extra):
    return {
        "entity_id": entity_id,
        "entity_type": "client",
        "source": source,
        "timestamp": "2025-03-14T09:30:00+00:00",
        **extra,
    }


def test_insert_generates_id(index):
    item_id = index.insert([1.0, 0.0], payload("ana"), "Client Ana: hello")

    assert item_id
    item = index.get_by_id(item_id)
    assert item.payload.text == "Client Ana: hello"
    assert item.payload.entity_id == "ana"


def test_insert_with_existing_id_replaces_item(index):
    index.insert([1.0, 0.0], payload("ana", "trip", trip_status="scheduled"), "v1", item_id="k1")
    index.insert([0.0, 1.0], payload("ana", "trip", trip_status="completed"), "v2", item_id="k1")

    assert index.count() == 1
    item = index.get_by_id("k1")
    assert item.payload.text == "v2"
    assert item.payload.trip_status == "completed"
    assert item.vector == [0.0, 1.0]


def test_extra_payload_fields_survive(index):
    item_id = index.insert([1.0], payload("ana", client_phone="+1-555-0101"), "text")

    assert index.get_by_id(item_id).payload.client_phone == "+1-555-0101"


def test_query_orders_by_similarity(index):
    index.insert([1.0, 0.0, 0.0], payload("ana"), "far")
    index.insert([0.9, 0.1, 0.0], payload("ana"), "near")
    index.insert([0.0, 1.0, 0.0], payload("ana"), "orthogonal")

    results = index.query([0.9, 0.1, 0.0], k=3)

    assert [item.payload.text for item, _ in results] == ["near", "far", "orthogonal"]
    scores = [score for _, score in results]
    assert scores == sorted(scores, reverse=True)


def test_query_respects_k_and_filters(index):
    for i in range(5):
        index.insert([1.0, float(i)], payload("ana"), f"ana {i}")
    index.insert([1.0, 0.0], payload("ben"), "ben 0")

    results = index.query([1.0, 0.0], k=3, filters={"entity_id": "ben"})

    assert [item.payload.text for item, _ in results] == ["ben 0"]
    assert len(index.query([1.0, 0.0], k=3)) == 3


def test_query_ties_keep_insertion_order(index):
    for name in ("first", "second", "third"):
        index.insert([1.0, 0.0], payload("ana"), name)

    results = index.query([1.0, 0.0], k=3)

    assert [item.payload.text for item, _ in results] == ["first", "second", "third"]


def test_query_skips_mismatched_dimensions(index):
    index.insert([1.0, 0.0], payload("ana"), "2d")
    index.insert([1.0, 0.0, 0.0], payload("ana"), "3d")

    results = index.query([1.0, 0.0], k=5)

    assert [item.payload.text for item, _ in results] == ["2d"]


def test_delete_by_id(index):
    item_id = index.insert([1.0], payload("ana"), "text")

    assert index.delete_by_id(item_id) is True
    assert index.get_by_id(item_id) is None
    assert index.delete_by_id(item_id) is False


def test_delete_by_metadata_only_touches_matches(index):
    index.insert([1.0], payload("ana"), "a1")
    index.insert([1.0], payload("ana", "trip"), "a2")
    index.insert([1.0], payload("ben"), "b1")

    assert index.delete_by_metadata({"entity_id": "ana"}) == 2
    assert index.count() == 1
    assert index.list_by_metadata({"entity_id": "ben"})[0].payload.text == "b1"


def test_list_by_metadata_with_limit(index):
    for i in range(4):
        index.insert([1.0], payload("ana"), f"a{i}")

    assert len(index.list_by_metadata({"entity_id": "ana"})) == 4
    assert [i.payload.text for i in index.list_by_metadata({"entity_id": "ana"}, limit=2)] == [
        "a0",
        "a1",
    ]


def test_clear(index):
    index.insert([1.0], payload("ana"), "a")
    index.clear()

    assert index.count() == 0
