"""
Configuration for the memory engine.

Values come from keyword arguments, environment variables prefixed with
``CHAUFFEUR_MEMORY_`` or a ``.env`` file. The embedding and completion
credentials also accept the variable names the dispatch app already uses
(``XAI_API_KEY``, ``AI_INTEGRATIONS_OPENAI_API_KEY``).
"""

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MemorySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHAUFFEUR_MEMORY_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # Vector indexes
    data_dir: Path = Path(".rag-data")
    qdrant_url: Optional[str] = None
    index_fanout_factor: int = Field(default=4, ge=1)

    # Embedding gateway
    embedding_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("CHAUFFEUR_MEMORY_EMBEDDING_API_KEY", "XAI_API_KEY"),
    )
    embedding_base_url: Optional[str] = "https://api.x.ai/v1"
    embedding_model: str = "v1"
    embedding_timeout: float = 30.0

    # Completion provider (casual-llm)
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "CHAUFFEUR_MEMORY_LLM_API_KEY", "AI_INTEGRATIONS_OPENAI_API_KEY"
        ),
    )
    llm_base_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "CHAUFFEUR_MEMORY_LLM_BASE_URL", "AI_INTEGRATIONS_OPENAI_BASE_URL"
        ),
    )

    reply_temperature: float = 0.7
    reply_max_tokens: int = 300
    extraction_temperature: float = 0.3
    extraction_max_tokens: int = 500

    # Context assembly
    context_snippet_limit: int = 5
    history_turns: int = 10

    # Relational and message stores
    database_url: str = "sqlite:///chauffeur_memory.db"
    redis_url: Optional[str] = None

    log_level: str = "INFO"

    @property
    def client_index_path(self) -> Path:
        return self.data_dir / "clients"

    @property
    def driver_index_path(self) -> Path:
        return self.data_dir / "drivers"
