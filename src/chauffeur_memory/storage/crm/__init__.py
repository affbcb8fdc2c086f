"""CRM store implementations (clients, drivers, Structured Profiles, messages)."""

from chauffeur_memory.storage.crm.memory import InMemoryCRMStore
from chauffeur_memory.storage.crm.sqlalchemy import SQLAlchemyCRMStore

__all__ = [
    "InMemoryCRMStore",
    "SQLAlchemyCRMStore",
]
