"""Semantic retriever — search with citation tracking.

Usage::

    from dev_assistant.retrieval.retriever import SemanticRetriever

    retriever = SemanticRetriever(store, default_k=5)
    results   = retriever.search("How do I configure a health check?")
    for r in results:
        print(r.citation.short_ref(), r.content[:80])
"""

from __future__ import annotations

import logging
from typing import Any

from dev_assistant.retrieval.base import VectorStoreBase
from dev_assistant.retrieval.models import Citation, RetrievalResult

logger = logging.getLogger(__name__)


class SemanticRetriever:
    """High-level retriever that wraps any :class:`VectorStoreBase`.

    Parameters
    ----------
    store:
        A concrete vector-store backend.
    default_k:
        Default number of results returned by :meth:`search`.
    score_threshold:
        Minimum similarity score; results below this are discarded.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        *,
        default_k: int = 5,
        score_threshold: float = 0.0,
    ) -> None:
        self._store = store
        self.default_k = default_k
        self.score_threshold = score_threshold

    # -- public API -----------------------------------------------------------

    def search(self, query: str, *, k: int | None = None) -> list[RetrievalResult]:
        """Run a semantic search and return results with citations.

        Parameters
        ----------
        query:
            Natural-language query string.
        k:
            Number of results (defaults to ``self.default_k``).
        """
        k = k or self.default_k
        raw_hits = self._store.similarity_search_by_text(query, k=k)
        results = self._to_results(raw_hits)
        logger.debug("Retrieved %d/%d results for query %r", len(results), len(raw_hits), query[:80])
        return results

    # -- internals ------------------------------------------------------------

    def _to_results(self, raw_hits: list[dict[str, Any]]) -> list[RetrievalResult]:
        results: list[RetrievalResult] = []
        for hit in raw_hits:
            score = hit.get("score")
            if score is not None and score < self.score_threshold:
                continue

            meta = hit.get("metadata", {})
            citation = Citation(
                document_id=hit.get("id"),
                source=meta.get("source", "unknown"),
                segment_index=meta.get("segment_index"),
                page=meta.get("page"),
                score=score,
                metadata=meta,
            )
            results.append(RetrievalResult(content=hit.get("content", ""), citation=citation))
        return results
