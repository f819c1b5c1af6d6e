"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import chromadb

from dev_assistant.config import settings
from dev_assistant.retrieval.base import VectorStoreBase

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


def _flatten_metadata(metadata: dict[str, Any]) -> dict[str, Any]:
    """Chroma metadata values must be flat str/int/float/bool."""
    return {k: v for k, v in metadata.items() if isinstance(v, (str, int, float, bool))}


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    embeddings:
        LangChain embedding model used to embed text queries.  Must be
        the same model the ingestion pipeline embeds segments with.
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
    ) -> None:
        super().__init__(collection_name)
        self._host = host
        self._port = port
        self._client = chromadb.HttpClient(host=host, port=port)
        self._collection = self._client.get_or_create_collection(
            collection_name,
            metadata={"hnsw:space": "cosine"},
        )
        self._embeddings = embeddings

    # -- VectorStoreBase overrides --------------------------------------------

    def add(self, embedding: list[float], segment: Document) -> str:
        record_id = uuid4().hex
        metadata = _flatten_metadata(segment.metadata)
        self._collection.add(
            ids=[record_id],
            embeddings=[embedding],
            documents=[segment.page_content],
            metadatas=[metadata] if metadata else None,
        )
        return record_id

    def count(self) -> int:
        return self._collection.count()

    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[dict[str, Any]]:
        results = self._collection.query(
            query_embeddings=[query_embedding],
            n_results=k,
            include=["documents", "metadatas", "distances"],
        )

        hits: list[dict[str, Any]] = []
        ids = results.get("ids", [[]])[0]
        docs = results.get("documents", [[]])[0]
        metas = results.get("metadatas", [[]])[0]
        distances = results.get("distances", [[]])[0]

        for doc_id, content, meta, dist in zip(ids, docs, metas, distances):
            # Cosine space: distance = 1 - cosine similarity.
            hits.append(
                {
                    "id": doc_id,
                    "content": content or "",
                    "score": 1.0 - dist,
                    "metadata": meta or {},
                }
            )
        return hits

    def similarity_search_by_text(self, query: str, *, k: int = 5) -> list[dict[str, Any]]:
        embedding = self._embeddings.embed_query(query)
        return self.similarity_search(embedding, k=k)

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
