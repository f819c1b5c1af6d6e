"""In-process vector store for local runs and tests."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from dev_assistant.retrieval.base import VectorStoreBase

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


@dataclass(frozen=True)
class StoredRecord:
    record_id: str
    embedding: list[float]
    content: str
    metadata: dict[str, Any]


class InMemoryVectorStore(VectorStoreBase):
    """List-backed store with brute-force cosine search.

    Contents live only as long as the process; nothing is persisted.
    """

    def __init__(self, embeddings: Embeddings | None = None, collection_name: str = "in-memory") -> None:
        super().__init__(collection_name)
        self._embeddings = embeddings
        self._records: list[StoredRecord] = []

    @property
    def records(self) -> list[StoredRecord]:
        return list(self._records)

    def add(self, embedding: list[float], segment: Document) -> str:
        record = StoredRecord(
            record_id=uuid4().hex,
            embedding=list(embedding),
            content=segment.page_content,
            metadata=dict(segment.metadata),
        )
        self._records.append(record)
        return record.record_id

    def count(self) -> int:
        return len(self._records)

    def similarity_search(self, query_embedding: list[float], *, k: int = 5) -> list[dict[str, Any]]:
        hits = [
            {
                "id": record.record_id,
                "content": record.content,
                "score": _cosine(query_embedding, record.embedding),
                "metadata": record.metadata,
            }
            for record in self._records
        ]
        hits.sort(key=lambda hit: hit["score"], reverse=True)
        return hits[:k]

    def similarity_search_by_text(self, query: str, *, k: int = 5) -> list[dict[str, Any]]:
        if self._embeddings is None:
            raise RuntimeError("InMemoryVectorStore was created without an embedding model")
        return self.similarity_search(self._embeddings.embed_query(query), k=k)

    def health_check(self) -> bool:
        return True
