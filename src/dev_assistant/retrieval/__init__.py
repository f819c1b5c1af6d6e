"""
Retrieval — vector stores, semantic search, and citation models.

The ingestion pipeline writes into a :class:`VectorStoreBase`; the
assistant reads from it through :class:`SemanticRetriever`.  Neither
side needs to know which database backs the store.

Public surface
--------------
- :class:`VectorStoreBase` — abstract backend (subclass for Pinecone, etc.).
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`InMemoryVectorStore` — process-local backend for dev and tests.
- :class:`SemanticRetriever` — search with citations.
- :class:`Citation`, :class:`RetrievalResult` — data models.
"""

from dev_assistant.retrieval.base import VectorStoreBase
from dev_assistant.retrieval.memory_store import InMemoryVectorStore
from dev_assistant.retrieval.models import Citation, RetrievalResult
from dev_assistant.retrieval.retriever import SemanticRetriever

__all__ = [
    "Citation",
    "ChromaVectorStore",
    "InMemoryVectorStore",
    "RetrievalResult",
    "SemanticRetriever",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from dev_assistant.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
