"""Segment embedding on top of LangChain embedding models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from langchain_huggingface import HuggingFaceEmbeddings

from dev_assistant.config import settings

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings


class EmbeddingError(RuntimeError):
    pass


class Embedder(Protocol):
    def embed(self, segment: Document) -> list[float]: ...


def get_embedding_function(model_name: str | None = None) -> HuggingFaceEmbeddings:
    """Return the sentence-transformer embedding function.

    *model_name* defaults to ``settings.embedding_model`` as it is at call time.
    """
    return HuggingFaceEmbeddings(model_name=model_name or settings.embedding_model)


class LangChainEmbedder:
    """Embed one segment at a time with any LangChain ``Embeddings``.

    The vector dimension is pinned by the first successful call; a later
    vector of a different length raises :class:`EmbeddingError` so that
    mismatched vectors never reach the store.
    """

    def __init__(self, embeddings: Embeddings) -> None:
        self._embeddings = embeddings
        self.dimension: int | None = None

    def embed(self, segment: Document) -> list[float]:
        try:
            vectors = self._embeddings.embed_documents([segment.page_content])
        except Exception as exc:
            raise EmbeddingError(f"Embedding provider failed: {exc}") from exc

        if len(vectors) != 1 or not vectors[0]:
            raise EmbeddingError("Invalid embeddings payload: expected exactly one non-empty vector")

        vector = [float(value) for value in vectors[0]]
        if self.dimension is None:
            self.dimension = len(vector)
        elif len(vector) != self.dimension:
            raise EmbeddingError(
                f"Embedding dimension changed: expected {self.dimension}, got {len(vector)}"
            )
        return vector
