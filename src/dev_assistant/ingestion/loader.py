"""Document converters — thin wrappers around LangChain document loaders.

A converter turns one source file into an ordered list of text segments
(LangChain ``Document`` objects).  Loader failures are surfaced as
:class:`ConversionError`; a converter never returns a silently truncated
result.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Protocol

from langchain_community.document_loaders import (
    BSHTMLLoader,
    Docx2txtLoader,
    PyPDFLoader,
)
from langchain_core.documents import Document

from dev_assistant.ingestion.models import file_extension

if TYPE_CHECKING:
    from langchain_core.document_loaders import BaseLoader

logger = logging.getLogger(__name__)


class ConversionError(RuntimeError):
    """Raised when a source file cannot be converted to text segments."""


class Converter(Protocol):
    def convert(self, path: Path) -> list[Document]: ...


def _pdf_loader(path: Path) -> BaseLoader:
    return PyPDFLoader(str(path))


def _docx_loader(path: Path) -> BaseLoader:
    return Docx2txtLoader(str(path))


def _html_loader(path: Path) -> BaseLoader:
    # html.parser ships with the stdlib, so lxml is not required.
    return BSHTMLLoader(str(path), bs_kwargs={"features": "html.parser"}, get_text_separator="\n")


DEFAULT_LOADERS: dict[str, Callable[[Path], BaseLoader]] = {
    ".pdf": _pdf_loader,
    ".docx": _docx_loader,
    ".html": _html_loader,
}

CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".html": "text/html",
}


def normalise_text(text: str) -> str:
    """Unicode NFC, collapse whitespace, strip control chars."""
    text = unicodedata.normalize("NFC", text)
    text = re.sub(r"[^\S\n]+", " ", text)  # collapse spaces (keep \n)
    text = re.sub(r"\n{3,}", "\n\n", text)  # max two consecutive newlines
    text = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f]", "", text)
    return text.strip()


class LoaderConverter:
    """Convert PDF, DOCX and HTML files with LangChain community loaders.

    PDFs yield one segment per page; DOCX and HTML files yield a single
    segment.  Every segment carries ``source``, ``page``,
    ``segment_index`` and ``content_type`` metadata.  Pages that are
    empty after normalisation are dropped.

    Parameters
    ----------
    loaders:
        Mapping of lower-cased extension (with dot) to a loader factory.
        Defaults to :data:`DEFAULT_LOADERS`.
    """

    def __init__(self, loaders: dict[str, Callable[[Path], BaseLoader]] | None = None) -> None:
        self._loaders = dict(loaders if loaders is not None else DEFAULT_LOADERS)

    @property
    def supported_extensions(self) -> frozenset[str]:
        return frozenset(self._loaders)

    def convert(self, path: Path) -> list[Document]:
        extension = file_extension(path.name)
        factory = self._loaders.get(extension)
        if factory is None:
            raise ConversionError(f"No loader registered for {extension or 'files without extension'!r}")

        try:
            raw_pages = factory(path).load()
        except Exception as exc:
            raise ConversionError(f"{path.name}: {exc}") from exc

        segments: list[Document] = []
        for page_index, page in enumerate(raw_pages):
            text = normalise_text(page.page_content)
            if not text:
                logger.debug("Dropping empty page %d of %s", page_index, path.name)
                continue
            metadata: dict[str, Any] = {
                **page.metadata,
                "source": path.name,
                "page": page.metadata.get("page", page_index),
                "segment_index": len(segments),
                "content_type": CONTENT_TYPES.get(extension, "text/plain"),
            }
            segments.append(Document(page_content=text, metadata=metadata))
        return segments
