"""LLM initialisation — single place to swap providers.

Supports two modes:

1. **OpenAI cloud** (default) — set ``OPENAI_API_KEY``.
2. **OpenAI-compatible endpoint** — set ``LLM_BASE_URL`` to a vLLM /
   Ollama / LiteLLM server exposing ``/v1/chat/completions``;
   ``ChatOpenAI`` works unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_openai import ChatOpenAI

if TYPE_CHECKING:
    from dev_assistant.config import Settings

logger = logging.getLogger(__name__)


def get_llm(settings: Settings) -> ChatOpenAI:
    """Return the configured chat model.

    When ``settings.llm_base_url`` is set the client is pointed at that
    endpoint instead of the OpenAI cloud API.  A dummy API key
    (``"EMPTY"``) is used because local servers do not require
    authentication.
    """
    kwargs: dict = {
        "model": settings.llm_model_name,
        "temperature": settings.llm_temperature,
    }

    if settings.llm_base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", settings.llm_base_url)
        kwargs["base_url"] = settings.llm_base_url
        # Local servers don't need a real key; LangChain requires a non-empty value.
        kwargs["api_key"] = settings.openai_api_key or "EMPTY"
    else:
        kwargs["api_key"] = settings.openai_api_key

    return ChatOpenAI(**kwargs)
