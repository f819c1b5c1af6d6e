"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from langchain_core.documents import Document

from dev_assistant.retrieval.memory_store import InMemoryVectorStore


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fake collaborators ─────────────────────────────────────────────────


class FakeConverter:
    """Returns canned segments per file name, or raises the canned exception."""

    def __init__(self, outputs: dict[str, list[str] | Exception] | None = None) -> None:
        self.outputs = outputs or {}
        self.calls: list[str] = []

    def convert(self, path: Path) -> list[Document]:
        self.calls.append(path.name)
        output = self.outputs.get(path.name, [])
        if isinstance(output, Exception):
            raise output
        return [
            Document(page_content=text, metadata={"source": path.name, "page": i, "segment_index": i})
            for i, text in enumerate(output)
        ]


class FakeEmbedder:
    """Deterministic 3-dim vectors derived from the text; fails on chosen texts."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    def embed(self, segment: Document) -> list[float]:
        self.calls.append(segment.page_content)
        if segment.page_content in self.fail_on:
            raise RuntimeError(f"embedding service unavailable for {segment.page_content!r}")
        return vector_for(segment.page_content)


class FlakyStore(InMemoryVectorStore):
    """In-memory store whose ``add`` raises once it holds *capacity* records."""

    def __init__(self, capacity: int) -> None:
        super().__init__()
        self.capacity = capacity

    def add(self, embedding: list[float], segment: Document) -> str:
        if self.count() >= self.capacity:
            raise OSError("vector store write failed")
        return super().add(embedding, segment)


def vector_for(text: str) -> list[float]:
    return [float(len(text)), float(sum(map(ord, text)) % 97), 1.0]


@pytest.fixture()
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture()
def docs_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "documents"
    directory.mkdir()
    return directory
