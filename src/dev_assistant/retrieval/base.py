"""Abstract base class for vector-store backends.

Adding a new backend (Pinecone, Weaviate, Qdrant …) only requires
subclassing :class:`VectorStoreBase` and implementing the abstract
methods.  Stores are append-only: the ingestion pipeline only ever
calls :meth:`add`; the retrieval stack only calls the search methods.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from langchain_core.documents import Document


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / index / namespace.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    @abstractmethod
    def add(self, embedding: list[float], segment: Document) -> str:
        """Append one (embedding, segment) pair and return its new id.

        The pair is written as a single record.  Implementations never
        de-duplicate: adding the same segment twice stores two records.
        """
        ...

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored records."""
        ...

    @abstractmethod
    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[dict[str, Any]]:
        """Return the top-*k* results matching *query_embedding*.

        Each result dict **must** contain at least:

        * ``"id"`` – record identifier
        * ``"content"`` – the textual content
        * ``"score"`` – similarity score (higher = more similar)
        * ``"metadata"`` – associated metadata dict
        """
        ...

    @abstractmethod
    def similarity_search_by_text(self, query: str, *, k: int = 5) -> list[dict[str, Any]]:
        """Embed *query* internally and delegate to :meth:`similarity_search`."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...
