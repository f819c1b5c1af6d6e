"""
Assistant — retrieval-augmented answering over the ingested documents.

Public API
----------
- :class:`QueryFacade` — blank-question guard + response envelope.
- :class:`RetrievalAugmentedAssistant` — answers from retrieved segments.
- :class:`ChatResponse` — ``{"answer": ...}`` envelope.
- :data:`GUIDANCE_MESSAGE` — returned for empty questions.
"""

from dev_assistant.assistant.service import (
    GUIDANCE_MESSAGE,
    ChatResponse,
    QueryFacade,
    RetrievalAugmentedAssistant,
)

__all__ = [
    "GUIDANCE_MESSAGE",
    "ChatResponse",
    "QueryFacade",
    "RetrievalAugmentedAssistant",
]
