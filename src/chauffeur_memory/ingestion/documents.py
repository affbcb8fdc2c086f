"""
Document builders for each kind of domain event.

Retrieval hands raw document text to the language model, which never sees
metadata, so every document names its entity inline. Builders are pure and
deterministic: the same event always yields the same text.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from chauffeur_memory.models import (
    DRIVER_NOTE_TYPES,
    Client,
    Driver,
    Message,
    MemorySource,
    Trip,
)
from chauffeur_memory.utils.time import format_date


class MemoryDocument(BaseModel):
    """Text to embed plus the metadata envelope it is stored with."""

    text: str
    source: MemorySource
    fields: Dict[str, Any] = Field(default_factory=dict)
    key: Optional[str] = Field(
        default=None, description="Natural key for mutable records; one item per key"
    )
    timestamp: Optional[datetime] = None


def _trip_notes(trip: Trip) -> str:
    return trip.notes or ""


def client_message_document(
    client: Client, message: Message, reply_text: Optional[str] = None
) -> MemoryDocument:
    text = f"Client {client.name}: {message.content}"
    if reply_text:
        text = f"{text}\nAI Response: {reply_text}"

    return MemoryDocument(
        text=text,
        source="conversation",
        fields={
            "client_name": client.name,
            "client_phone": client.phone,
            "message_type": message.type,
            "message_id": message.id,
        },
    )


def client_trip_document(
    client: Client, trip: Trip, driver_name: Optional[str] = None
) -> MemoryDocument:
    driver = f"Driver: {driver_name}" if driver_name else "Unassigned"
    text = (
        f"Trip for {client.name}: From {trip.pickup_location} to {trip.dropoff_location} "
        f"on {format_date(trip.pickup_time)}. Status: {trip.status}. Price: ${trip.price}. "
        f"{driver}. {_trip_notes(trip)}"
    ).strip()

    return MemoryDocument(
        text=text,
        source="trip",
        key=trip.id,
        timestamp=trip.pickup_time,
        fields={
            "trip_id": trip.id,
            "trip_status": trip.status,
            "payment_status": trip.payment_status,
            "pickup_location": trip.pickup_location,
            "dropoff_location": trip.dropoff_location,
        },
    )


def driver_trip_document(
    driver: Driver, trip: Trip, client_name: Optional[str] = None
) -> MemoryDocument:
    client_name = client_name or "Unknown"
    text = (
        f"Trip assigned to {driver.name} for client {client_name}: "
        f"From {trip.pickup_location} to {trip.dropoff_location} "
        f"on {format_date(trip.pickup_time)}. Status: {trip.status}. {_trip_notes(trip)}"
    ).strip()

    return MemoryDocument(
        text=text,
        source="trip",
        key=trip.id,
        timestamp=trip.pickup_time,
        fields={
            "trip_id": trip.id,
            "trip_status": trip.status,
            "client_name": client_name,
        },
    )


def client_preference_document(
    client: Client, preference: str, extraction_source: str = "extracted"
) -> MemoryDocument:
    return MemoryDocument(
        text=f"Client {client.name} preference: {preference}",
        source="preference",
        fields={
            "client_name": client.name,
            "extraction_source": extraction_source,
        },
    )


def driver_note_document(driver: Driver, note: str, note_type: str) -> MemoryDocument:
    if note_type not in DRIVER_NOTE_TYPES:
        raise ValueError(
            f"Invalid driver note type {note_type!r}, expected one of {', '.join(DRIVER_NOTE_TYPES)}"
        )

    return MemoryDocument(
        text=f"{note_type.capitalize()} note for driver {driver.name}: {note}",
        source=note_type,
        fields={
            "driver_name": driver.name,
            "driver_phone": driver.phone,
        },
    )


def driver_message_document(
    driver: Driver, message: Message, context: Optional[str] = None
) -> MemoryDocument:
    text = f"Driver {driver.name} message: {message.content}"
    if context:
        text = f"{context}\n{text}"

    return MemoryDocument(
        text=text,
        source="communication",
        fields={
            "driver_name": driver.name,
            "message_type": message.type,
            "message_id": message.id,
        },
    )
