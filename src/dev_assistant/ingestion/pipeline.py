"""Directory → vector-store ingestion with per-file fault isolation.

One call to :meth:`IngestionPipeline.run` scans a flat documents
directory and, for every supported file, converts it to segments,
embeds each segment, and appends the (embedding, segment) pairs to the
vector store.  A file that fails at any step is counted and logged; it
never stops the rest of the run.

Commit granularity
------------------
All segments of a file are embedded before any of them is stored, so an
embedding failure leaves nothing of that file behind.  Storage itself is
pair-by-pair and append-only: if the store fails mid-file, the pairs
already written stay in the store (no rollback), and the file is still
counted as failed.

An entry that can be listed but not inspected is logged and left out of
the counters; it is neither skipped nor failed.

Re-running over a persistent store duplicates records; there is no
de-duplication against existing contents.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from dev_assistant.ingestion.models import IngestionReport, SourceFile, file_extension

if TYPE_CHECKING:
    from langchain_core.documents import Document

    from dev_assistant.ingestion.embedder import Embedder
    from dev_assistant.ingestion.loader import Converter
    from dev_assistant.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset({".pdf", ".docx", ".html"})


@dataclass
class _RunCounters:
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    total_segments: int = 0
    failed_files: list[str] = field(default_factory=list)

    def freeze(self, elapsed_seconds: float) -> IngestionReport:
        return IngestionReport(
            succeeded=self.succeeded,
            failed=self.failed,
            skipped=self.skipped,
            total_segments=self.total_segments,
            failed_files=tuple(self.failed_files),
            elapsed_seconds=round(elapsed_seconds, 3),
        )


class IngestionPipeline:
    """Populate a vector store from a directory of documents.

    The pipeline keeps no state between runs; every collaborator is
    passed in explicitly.

    Parameters
    ----------
    converter:
        Turns one file into an ordered list of segments.
    embedder:
        Turns one segment into a fixed-dimension vector.
    store:
        Append-only destination for (embedding, segment) pairs.
    supported_extensions:
        Lower-cased extensions (with dot) eligible for conversion.
    """

    def __init__(
        self,
        converter: Converter,
        embedder: Embedder,
        store: VectorStoreBase,
        *,
        supported_extensions: Iterable[str] = SUPPORTED_EXTENSIONS,
    ) -> None:
        self._converter = converter
        self._embedder = embedder
        self._store = store
        self.supported_extensions = frozenset(ext.lower() for ext in supported_extensions)

    def run(self, directory: str | Path) -> IngestionReport:
        """Ingest every supported file directly inside *directory*.

        Never raises: a missing directory yields an empty report with a
        warning, an unreadable directory is logged and yields an empty
        report, and per-file problems are folded into the counters.
        """
        directory = Path(directory)
        started = time.monotonic()
        counters = _RunCounters()

        try:
            if not directory.exists():
                logger.warning("Documents directory not found: %s", directory)
                return counters.freeze(time.monotonic() - started)
            entries = list(directory.iterdir())
        except OSError:
            logger.exception("Error loading documents: cannot list %s", directory)
            return _RunCounters().freeze(time.monotonic() - started)

        for entry in entries:
            try:
                is_regular_file = entry.is_file()
            except OSError:
                # Listed but not stat-able (e.g. directory without execute permission).
                logger.exception("Cannot inspect directory entry: %s", entry.name)
                continue
            if not is_regular_file:
                continue

            if file_extension(entry.name) not in self.supported_extensions:
                logger.info("Skipping unsupported file: %s", entry.name)
                counters.skipped += 1
                continue

            try:
                stored = self._ingest_file(SourceFile.from_path(entry))
            except Exception as exc:
                logger.error("Failed to process document: %s - %s", entry.name, exc, exc_info=True)
                counters.failed += 1
                counters.failed_files.append(entry.name)
                continue

            counters.succeeded += 1
            counters.total_segments += stored

        report = counters.freeze(time.monotonic() - started)
        logger.info("Document loading completed. %s", report.summary())
        return report

    # -- internals ------------------------------------------------------------

    def _ingest_file(self, source: SourceFile) -> int:
        """Convert, embed and store one file; return the number of segments stored."""
        logger.info("Processing document: %s (size: %.2f MB)", source.name, source.size_mb)

        segments = self._converter.convert(source.path)
        logger.info("Extracted %d segments from: %s", len(segments), source.name)

        pairs: list[tuple[list[float], Document]] = [
            (self._embedder.embed(segment), segment) for segment in segments
        ]
        for embedding, segment in pairs:
            self._store.add(embedding, segment)

        logger.info("Successfully processed: %s (%d segments)", source.name, len(pairs))
        return len(pairs)
