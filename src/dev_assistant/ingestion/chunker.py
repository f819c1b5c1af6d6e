"""Text chunking strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_text_splitters import RecursiveCharacterTextSplitter

if TYPE_CHECKING:
    from pathlib import Path

    from langchain_core.documents import Document

    from dev_assistant.ingestion.loader import Converter


def chunk_documents(
    documents: list[Document],
    chunk_size: int = 512,
    chunk_overlap: int = 64,
) -> list[Document]:
    """Split *documents* into smaller chunks for embedding.

    Parameters
    ----------
    documents:
        Segments produced by a converter.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of overlapping characters between consecutive chunks.

    Returns
    -------
    list[Document]
        Chunks in source order, with ``segment_index`` renumbered.
    """
    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        length_function=len,
        separators=["\n\n", "\n", ". ", " ", ""],
    )
    chunks = splitter.split_documents(documents)
    for index, chunk in enumerate(chunks):
        chunk.metadata["segment_index"] = index
    return chunks


class SplittingConverter:
    """Wrap a converter and split each of its segments into chunks."""

    def __init__(self, inner: Converter, *, chunk_size: int, chunk_overlap: int = 64) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        if chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        self._inner = inner
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def convert(self, path: Path) -> list[Document]:
        return chunk_documents(
            self._inner.convert(path),
            chunk_size=self.chunk_size,
            chunk_overlap=self.chunk_overlap,
        )
