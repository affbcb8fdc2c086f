"""
In-memory CRM storage implementation.

Holds clients, drivers, Structured Profiles and message history in
dictionaries, suitable for tests and demos. Data is lost on restart.
"""

import logging
from typing import Dict, List, Optional

from chauffeur_memory.models import (
    Client,
    Driver,
    Message,
    ProfileUpdate,
    StructuredProfile,
)
from chauffeur_memory.utils.time import utcnow

logger = logging.getLogger(__name__)


class InMemoryCRMStore:
    """In-memory implementation of the CRMStore protocol."""

    def __init__(self):
        self._clients: Dict[str, Client] = {}
        self._drivers: Dict[str, Driver] = {}
        self._profiles: Dict[str, StructuredProfile] = {}  # client_id -> profile
        self._messages: List[Message] = []

        logger.info("InMemoryCRMStore initialized")

    def get_client(self, client_id: str) -> Optional[Client]:
        return self._clients.get(client_id)

    def get_client_by_phone(self, phone: str) -> Optional[Client]:
        for client in self._clients.values():
            if client.phone == phone:
                return client
        return None

    def create_client(self, client: Client) -> Client:
        if self.get_client_by_phone(client.phone) is not None:
            raise ValueError(f"A client with phone {client.phone} already exists")
        self._clients[client.id] = client
        logger.info(f"Created client {client.id} ({client.phone})")
        return client

    def get_driver(self, driver_id: str) -> Optional[Driver]:
        return self._drivers.get(driver_id)

    def create_driver(self, driver: Driver) -> Driver:
        self._drivers[driver.id] = driver
        logger.info(f"Created driver {driver.id} ({driver.name})")
        return driver

    def get_profile(self, client_id: str) -> Optional[StructuredProfile]:
        profile = self._profiles.get(client_id)
        # Copies keep callers from mutating stored lists in place
        return profile.model_copy(deep=True) if profile else None

    def create_profile(self, profile: StructuredProfile) -> StructuredProfile:
        self._profiles[profile.client_id] = profile.model_copy(deep=True)
        logger.info(f"Created profile for client {profile.client_id}")
        return profile

    def update_profile(
        self, client_id: str, update: ProfileUpdate
    ) -> Optional[StructuredProfile]:
        profile = self._profiles.get(client_id)
        if profile is None:
            logger.warning(f"Cannot update profile for client {client_id}: not found")
            return None

        changes = update.model_dump(exclude_none=True)
        updated = profile.model_copy(update={**changes, "updated_at": utcnow()}, deep=True)
        self._profiles[client_id] = updated

        logger.debug(f"Updated profile for client {client_id}: {sorted(changes)}")
        return updated.model_copy(deep=True)

    def add_message(self, message: Message) -> Message:
        self._messages.append(message)
        return message

    def list_messages(self, participant_id: str, limit: Optional[int] = None) -> List[Message]:
        messages = [
            m
            for m in self._messages
            if m.sender_id == participant_id or m.receiver_id == participant_id
        ]
        messages.sort(key=lambda m: m.timestamp)
        if limit is not None:
            messages = messages[-limit:] if limit > 0 else []
        return messages
