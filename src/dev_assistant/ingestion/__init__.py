"""
Ingestion — document conversion, embedding, and vector-store population.

This module turns a flat directory of PDF, DOCX and HTML files into
(embedding, segment) records in a vector store, isolating failures per
file so one bad document never aborts a run.
"""

from dev_assistant.ingestion.models import IngestionReport, SourceFile
from dev_assistant.ingestion.pipeline import SUPPORTED_EXTENSIONS, IngestionPipeline

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "IngestionPipeline",
    "IngestionReport",
    "SourceFile",
]
