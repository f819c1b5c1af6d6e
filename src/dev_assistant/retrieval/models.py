"""Domain models for retrieval results and citation tracking."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field


class Citation(BaseModel):
    """Provenance record linking a retrieved segment back to its source file.

    Attributes
    ----------
    citation_id:
        Unique identifier for this citation instance.
    document_id:
        The vector-store ID of the record (``None`` when unknown).
    source:
        Name of the source file.
    segment_index:
        Ordinal position of the segment within the source file.
    page:
        Page number (if applicable, e.g. PDF sources).
    score:
        Similarity score returned by the vector store.
    metadata:
        Arbitrary extra metadata attached to the segment.
    retrieved_at:
        UTC timestamp of when the retrieval happened.
    """

    citation_id: str = Field(default_factory=lambda: uuid4().hex[:12])
    document_id: str | None = None
    source: str = "unknown"
    segment_index: int | None = None
    page: int | None = None
    score: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    retrieved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def short_ref(self) -> str:
        """Return a compact ``[source§segment]`` reference string."""
        segment = self.segment_index if self.segment_index is not None else "?"
        return f"[{self.source}§{segment}]"


class RetrievalResult(BaseModel):
    """A single retrieved passage together with its citation."""

    content: str
    citation: Citation

    def __str__(self) -> str:  # noqa: D105
        return f"{self.citation.short_ref()} {self.content[:120]}…"
