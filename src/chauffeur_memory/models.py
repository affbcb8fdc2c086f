import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chauffeur_memory.utils.time import utcnow

EntityType = Literal["client", "driver"]

MemorySource = Literal[
    "conversation",
    "trip",
    "preference",
    "performance",
    "availability",
    "feedback",
    "communication",
]

DriverNoteType = Literal["performance", "availability", "feedback", "communication"]

DRIVER_NOTE_TYPES = ("performance", "availability", "feedback", "communication")

BOT_SENDER_ID = "bot"

NEW_CLIENT_NAME = "New Client"
NEW_CLIENT_SUMMARY = "New client, building profile from interactions."


def new_id() -> str:
    return str(uuid.uuid4())


class Client(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    phone: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class Driver(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    phone: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    status: Literal["available", "busy", "offline"] = "available"
    created_at: datetime = Field(default_factory=utcnow)


class Trip(BaseModel):
    id: str = Field(default_factory=new_id)
    client_id: str
    driver_id: Optional[str] = None
    pickup_location: str
    dropoff_location: str
    pickup_time: datetime
    status: Literal["scheduled", "in-progress", "completed", "cancelled"] = "scheduled"
    price: int = Field(..., description="Fare in whole dollars")
    payment_status: Literal["paid", "pending", "unpaid"] = "unpaid"
    notes: Optional[str] = None


class Message(BaseModel):
    """A single SMS/WhatsApp/internal message between an entity and the bot or staff."""

    id: str = Field(default_factory=new_id)
    sender_id: str = Field(..., description="'bot' or the id of a client, driver or user")
    receiver_id: str
    content: str
    type: Literal["sms", "whatsapp", "internal"] = "sms"
    timestamp: datetime = Field(default_factory=utcnow)


class StructuredProfile(BaseModel):
    """Relational summary of what we know about a client."""

    id: str = Field(default_factory=new_id)
    client_id: str
    summary: str = NEW_CLIENT_SUMMARY
    preferences: List[str] = Field(
        default_factory=list, description="Append-only, duplicates are kept"
    )
    notes: List[str] = Field(default_factory=list, description="Append-only, duplicates are kept")
    last_interaction: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ProfileUpdate(BaseModel):
    """Partial profile update. Fields left as None are not written."""

    summary: Optional[str] = None
    preferences: Optional[List[str]] = None
    notes: Optional[List[str]] = None
    last_interaction: Optional[datetime] = None


class ProfileDelta(BaseModel):
    """Changes the extraction completion proposes against the current profile."""

    model_config = ConfigDict(populate_by_name=True)

    new_preferences: List[str] = Field(default_factory=list, alias="newPreferences")
    new_notes: List[str] = Field(default_factory=list, alias="newNotes")
    updated_summary: Optional[str] = Field(default=None, alias="updatedSummary")

    @field_validator("new_preferences", "new_notes", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        # Models often answer null instead of []
        return [] if value is None else value


class BookingDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    pickup_time: Optional[str] = Field(default=None, alias="datetime")
    special_requests: Optional[str] = Field(default=None, alias="specialRequests")


class ClientHistory(BaseModel):
    conversations: List[str] = Field(default_factory=list)
    trips: List[str] = Field(default_factory=list)
    preferences: List[str] = Field(default_factory=list)


class DriverHistory(BaseModel):
    trips: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    communications: List[str] = Field(default_factory=list)


class MemoryStats(BaseModel):
    client_docs: int = 0
    driver_docs: int = 0
    embeddings_enabled: bool = False


class ChatReply(BaseModel):
    reply_text: str
    client: Client
