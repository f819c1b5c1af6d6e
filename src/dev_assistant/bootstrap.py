"""Explicit wiring of collaborators and the startup ingestion hook.

Entry points (FastAPI lifespan, KServe ``load()``, the ingest CLI) call
:func:`build_components` once and :func:`run_startup_ingestion` before
they start serving questions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dev_assistant.assistant.service import QueryFacade, RetrievalAugmentedAssistant
from dev_assistant.ingestion.pipeline import IngestionPipeline
from dev_assistant.retrieval.retriever import SemanticRetriever

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings
    from langchain_core.language_models import BaseChatModel

    from dev_assistant.config import Settings
    from dev_assistant.ingestion.models import IngestionReport
    from dev_assistant.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


@dataclass
class Components:
    pipeline: IngestionPipeline
    store: VectorStoreBase
    facade: QueryFacade


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_vector_store(settings: Settings, embeddings: Embeddings) -> VectorStoreBase:
    """Return the backend selected by ``settings.vector_store``."""
    backend = settings.vector_store.lower()
    if backend == "memory":
        from dev_assistant.retrieval.memory_store import InMemoryVectorStore

        return InMemoryVectorStore(embeddings, collection_name=settings.chroma_collection)
    if backend == "chroma":
        from dev_assistant.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore(
            embeddings,
            settings.chroma_collection,
            host=settings.chroma_host,
            port=settings.chroma_port,
        )
    raise ValueError(f"Unsupported vector_store={settings.vector_store!r}; expected 'chroma' or 'memory'")


def build_components(
    settings: Settings,
    *,
    embeddings: Embeddings | None = None,
    llm: BaseChatModel | None = None,
) -> Components:
    """Construct every collaborator from *settings*.

    *embeddings* and *llm* may be injected (tests, notebooks); otherwise
    the configured HuggingFace model and chat model are created.
    """
    from dev_assistant.ingestion.embedder import LangChainEmbedder, get_embedding_function
    from dev_assistant.ingestion.loader import LoaderConverter

    if embeddings is None:
        embeddings = get_embedding_function(settings.embedding_model)
    if llm is None:
        from dev_assistant.assistant.llm import get_llm

        llm = get_llm(settings)

    converter = LoaderConverter()
    if settings.chunk_size > 0:
        from dev_assistant.ingestion.chunker import SplittingConverter

        converter = SplittingConverter(
            converter,
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
        )

    store = build_vector_store(settings, embeddings)
    pipeline = IngestionPipeline(converter, LangChainEmbedder(embeddings), store)
    retriever = SemanticRetriever(
        store,
        default_k=settings.retrieval_k,
        score_threshold=settings.retrieval_score_threshold,
    )
    assistant = RetrievalAugmentedAssistant(retriever, llm, k=settings.retrieval_k)
    return Components(pipeline=pipeline, store=store, facade=QueryFacade(assistant))


def run_startup_ingestion(components: Components, settings: Settings) -> IngestionReport | None:
    """Run the pipeline once over ``settings.documents_dir`` if enabled."""
    if not settings.ingest_on_startup:
        logger.info("Startup ingestion disabled; serving existing store contents")
        return None
    return components.pipeline.run(settings.documents_dir)
