"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Ingestion
    documents_dir: str = Field(default="documents", description="Flat directory scanned at startup")
    ingest_on_startup: bool = True
    chunk_size: int = Field(
        default=0,
        ge=0,
        description="Split converted pages into chunks of this many characters. 0 keeps page-level segments.",
    )
    chunk_overlap: int = Field(default=64, ge=0)

    # Vector store
    vector_store: str = Field(default="chroma", description="'chroma' or 'memory'")
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "dev_assistant"

    # Embedding
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key (or dummy value for local vLLM)")
    llm_model_name: str = Field(default="gpt-4o-mini", description="LLM model identifier")
    llm_base_url: str = Field(
        default="",
        description=(
            "Base URL for an OpenAI-compatible API. Leave empty to use OpenAI cloud, "
            "e.g. 'http://localhost:8000/v1' for a local vLLM server."
        ),
    )
    llm_temperature: float = 0.0

    # Retrieval
    retrieval_k: int = 5
    retrieval_score_threshold: float = 0.0

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
