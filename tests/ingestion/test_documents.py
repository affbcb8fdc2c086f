"""Tests for the per-event document builders."""

import pytest

from chauffeur_memory.ingestion.documents import (
    client_message_document,
    client_preference_document,
    client_trip_document,
    driver_message_document,
    driver_note_document,
    driver_trip_document,
)
from chauffeur_memory.models import Message


@pytest.fixture
def message(client):
    return Message(id="msg-1", sender_id=client.id, receiver_id="bot", content="Pick me up at 9")


def test_client_message_with_reply(client, message):
    doc = client_message_document(client, message, "Confirmed, 9 AM.")

    assert doc.text == "Client Ana Reyes: Pick me up at 9\nAI Response: Confirmed, 9 AM."
    assert doc.source == "conversation"
    assert doc.key is None
    assert doc.fields["client_phone"] == "+1-555-0101"
    assert doc.fields["message_id"] == "msg-1"


def test_client_message_without_reply(client, message):
    doc = client_message_document(client, message)

    assert doc.text == "Client Ana Reyes: Pick me up at 9"


def test_client_trip(client, trip):
    doc = client_trip_document(client, trip, "Marco Silva")

    assert doc.text == (
        "Trip for Ana Reyes: From JFK Terminal 4 to The Plaza Hotel on 03/14/2025. "
        "Status: scheduled. Price: $180. Driver: Marco Silva. Meet at arrivals with a sign"
    )
    assert doc.source == "trip"
    assert doc.key == "trip-1"
    assert doc.timestamp == trip.pickup_time
    assert doc.fields["trip_status"] == "scheduled"


def test_client_trip_unassigned_without_notes(client, trip):
    trip = trip.model_copy(update={"notes": None})

    doc = client_trip_document(client, trip)

    assert doc.text.endswith("Price: $180. Unassigned.")


def test_driver_trip(driver, trip):
    doc = driver_trip_document(driver, trip, "Ana Reyes")

    assert doc.text.startswith("Trip assigned to Marco Silva for client Ana Reyes: From JFK Terminal 4")
    assert "Price" not in doc.text
    assert doc.key == "trip-1"


def test_driver_trip_unknown_client(driver, trip):
    assert "for client Unknown:" in driver_trip_document(driver, trip).text


def test_client_preference(client):
    doc = client_preference_document(client, "Prefers still water", "manual")

    assert doc.text == "Client Ana Reyes preference: Prefers still water"
    assert doc.source == "preference"
    assert doc.fields["extraction_source"] == "manual"


@pytest.mark.parametrize("note_type", ["performance", "availability", "feedback", "communication"])
def test_driver_note_types(driver, note_type):
    doc = driver_note_document(driver, "Always on time", note_type)

    assert doc.text == f"{note_type.capitalize()} note for driver Marco Silva: Always on time"
    assert doc.source == note_type


def test_driver_note_rejects_unknown_type(driver):
    with pytest.raises(ValueError):
        driver_note_document(driver, "Great", "rating")


def test_driver_message_with_context(driver):
    message = Message(sender_id=driver.id, receiver_id="dispatch", content="Running 5 min late")

    doc = driver_message_document(driver, message, "Re: trip-1")

    assert doc.text == "Re: trip-1\nDriver Marco Silva message: Running 5 min late"
    assert doc.source == "communication"


def test_builders_are_deterministic(client, trip):
    assert client_trip_document(client, trip, "Marco").text == client_trip_document(client, trip, "Marco").text
