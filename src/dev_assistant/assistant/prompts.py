"""Prompt templates for the retrieval-augmented assistant."""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage, SystemMessage

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

    from dev_assistant.retrieval.models import RetrievalResult

SYSTEM_PROMPT = """\
You are an expert Python software architect and developer advocate. Your goal
is to help developers build, test, and deploy reliable Python services,
referencing the documentation excerpts supplied with each question.

### RESPONSE GUIDELINES
1. Prefer the standard tooling of the ecosystem (pip / pyproject.toml,
   pytest, type hints) over custom setups.
2. Give runnable code snippets when they help, with the imports they need.
3. Show configuration through environment variables or settings classes
   rather than hard-coded values.
4. Suggest how to test the solution.

### CONSTRAINTS
- Ground your answer in the provided context and cite it with [n] markers.
- If the retrieved context does not cover the question, say so plainly and
  answer from general best practice, marking that part as such.
"""


def format_context(results: list[RetrievalResult]) -> str:
    """Numbered listing suitable for citation references [1], [2], …"""
    if not results:
        return "(no relevant documents found)"
    parts: list[str] = []
    for i, result in enumerate(results, 1):
        citation = result.citation
        page = f", page={citation.page}" if citation.page is not None else ""
        parts.append(f"[{i}] source={citation.source}{page}\n{result.content}")
    return "\n\n".join(parts)


def build_rag_prompt(question: str, results: list[RetrievalResult]) -> list[BaseMessage]:
    """Assemble the prompt messages for a retrieval-augmented generation call.

    Parameters
    ----------
    question:
        The user question.
    results:
        Retrieved segments, best first.

    Returns
    -------
    list[BaseMessage]
        A list of LangChain message objects ready for ``.invoke()``.
    """
    user_msg = (
        f"Context:\n{format_context(results)}\n\n"
        f"Question: {question}\n\n"
        "Provide a detailed answer based on the context above."
    )
    return [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=user_msg),
    ]
