"""Question answering over the ingested documents.

:class:`RetrievalAugmentedAssistant` is the answering capability: it
prompts the chat model with retrieved segments.  :class:`QueryFacade` is
the thin layer the HTTP and KServe surfaces call; it rejects blank
questions and wraps the answer in a :class:`ChatResponse`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel

from dev_assistant.assistant.prompts import build_rag_prompt

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from dev_assistant.retrieval.retriever import SemanticRetriever

logger = logging.getLogger(__name__)

GUIDANCE_MESSAGE = "Please provide a question about development topics."


class AnsweringCapability(Protocol):
    def answer(self, question: str) -> str: ...


class ChatResponse(BaseModel):
    """Single-field answer envelope."""

    answer: str


class RetrievalAugmentedAssistant:
    """Answer a question from the segments most similar to it."""

    def __init__(self, retriever: SemanticRetriever, llm: BaseChatModel, *, k: int = 5) -> None:
        self._retriever = retriever
        self._llm = llm
        self.k = k

    def answer(self, question: str) -> str:
        results = self._retriever.search(question, k=self.k)
        logger.info("Answering with %d retrieved segments", len(results))
        response = self._llm.invoke(build_rag_prompt(question, results))
        return response.content


class QueryFacade:
    def __init__(self, assistant: AnsweringCapability) -> None:
        self._assistant = assistant

    def ask(self, question: str | None) -> ChatResponse:
        # Answering errors propagate to the caller untouched.
        if question is None or not question.strip():
            return ChatResponse(answer=GUIDANCE_MESSAGE)
        return ChatResponse(answer=self._assistant.answer(question))
