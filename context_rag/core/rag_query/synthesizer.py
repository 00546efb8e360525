"""
Answer synthesis from ranked chunks.

Builds a bounded context window from the ranked chunks and asks the
generation backend for a concise answer. Without a generation backend the
answer is extractive: the most relevant sentences of each chunk, labelled
by filename.

Dependencies: context_rag.boundary.llm, context_rag.core.rag_query.prompts
System role: Final stage of the RAG query pipeline
"""

import asyncio
import json
import logging
import re

from context_rag.boundary.llm.base import GenerationBackend
from context_rag.core.exceptions import GenerationFailure
from context_rag.core.rag_query.keyword_search import KeywordSearch
from context_rag.core.rag_query.prompts import ANSWER_PROMPT, FOLLOW_UP_PROMPT, render
from context_rag.models.search import SearchResult

logger = logging.getLogger(__name__)

NO_RELEVANT_INFORMATION = "No relevant information found in the documents for your query."

CONTEXT_SEPARATOR = "\n\n---\n\n"
DEFAULT_CONTEXT_CHAR_BUDGET = 2000
DEFAULT_MAX_TOKENS = 150
DEFAULT_TEMPERATURE = 0.1
DEFAULT_TIMEOUT_SECONDS = 30.0

FOLLOW_UP_MAX_TOKENS = 500
FOLLOW_UP_TEMPERATURE = 0.7

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


def build_context(ranked: list[SearchResult], char_budget: int = DEFAULT_CONTEXT_CHAR_BUDGET) -> str:
    """
    Join ranked chunks into a labelled context block.

    Args:
        ranked: Ranked search results
        char_budget: Maximum characters returned

    Returns:
        str: "From {filename}:" blocks separated by rules, truncated to the budget
    """
    blocks = [
        f"From {result.chunk.metadata.filename}:\n{result.chunk.content}"
        for result in ranked
    ]
    return CONTEXT_SEPARATOR.join(blocks)[:char_budget]


def parse_suggestions(text: str) -> list[str]:
    """
    Parse follow-up questions from model output.

    Accepts a JSON array of strings, or an object with a "suggestions" array,
    optionally wrapped in a markdown code fence.

    Raises:
        ValueError: Output is not one of the accepted shapes
    """
    data = json.loads(_CODE_FENCE.sub("", text.strip()))
    if isinstance(data, dict):
        data = data.get("suggestions")
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of questions")
    return [item.strip() for item in data if isinstance(item, str) and item.strip()]


class AnswerSynthesizer:
    """Generate answers from ranked chunks."""

    def __init__(
        self,
        backend: GenerationBackend | None = None,
        context_char_budget: int = DEFAULT_CONTEXT_CHAR_BUDGET,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        keyword_search: KeywordSearch | None = None,
    ) -> None:
        """
        Initialize synthesizer.

        Args:
            backend: Generation backend (None for extractive answers)
            context_char_budget: Maximum context characters sent to the model
            max_tokens: Completion token limit
            temperature: Sampling temperature
            timeout_seconds: Upper bound for one generation call
            keyword_search: Sentence highlighter for extractive answers
        """
        self._backend = backend
        self._context_char_budget = context_char_budget
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout_seconds = timeout_seconds
        self._keyword_search = keyword_search or KeywordSearch()

    @property
    def backend(self) -> GenerationBackend | None:
        """Configured generation backend."""
        return self._backend

    async def generate(self, query: str, ranked: list[SearchResult]) -> str:
        """
        Produce an answer for query from the ranked chunks.

        Args:
            query: User query
            ranked: Ranked chunks, best first

        Returns:
            str: Answer text

        Raises:
            GenerationFailure: Backend errored, timed out or returned nothing
        """
        if not ranked:
            return NO_RELEVANT_INFORMATION

        if self._backend is None:
            return self.extractive_answer(query, ranked)

        context = build_context(ranked, self._context_char_budget)
        system_prompt, user_prompt = render(ANSWER_PROMPT, context=context, question=query)
        logger.info(
            f"{__name__}:generate - Calling {self._backend.name} with {len(ranked)} chunks, "
            f"{len(context)} context chars"
        )

        answer = await self._complete(
            system_prompt,
            user_prompt,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        if not answer.strip():
            logger.error(f"{__name__}:generate - {self._backend.name} returned an empty completion")
            raise GenerationFailure("Empty completion", provider=self._backend.name)
        return answer.strip()

    def extractive_answer(self, query: str, ranked: list[SearchResult]) -> str:
        """
        Build an answer from the most relevant sentences of each chunk.

        Args:
            query: User query
            ranked: Ranked chunks, best first

        Returns:
            str: Answer quoting each chunk under its filename
        """
        if not ranked:
            return NO_RELEVANT_INFORMATION

        parts = [f'Based on the documents, here\'s what I found about "{query}":']
        for result in ranked:
            highlight = self._keyword_search.highlight(query, result.chunk.content)
            parts.append(f"From {result.chunk.metadata.filename}:\n{highlight}")
        return "\n\n".join(parts)

    async def suggest_follow_ups(self, query: str, answer: str, count: int = 3) -> list[str]:
        """
        Suggest follow-up questions for a previous answer.

        Args:
            query: Original question
            answer: Answer that was shown
            count: Number of questions requested

        Returns:
            list[str]: Up to count questions; empty on any failure
        """
        if self._backend is None:
            return []

        system_prompt, user_prompt = render(
            FOLLOW_UP_PROMPT, count=count, question=query, answer=answer
        )
        try:
            text = await self._complete(
                system_prompt,
                user_prompt,
                max_tokens=FOLLOW_UP_MAX_TOKENS,
                temperature=FOLLOW_UP_TEMPERATURE,
            )
            return parse_suggestions(text)[:count]
        except (GenerationFailure, ValueError) as e:
            logger.warning(f"{__name__}:suggest_follow_ups - No suggestions: {e}")
            return []

    async def _complete(
        self, system_prompt: str, user_prompt: str, max_tokens: int, temperature: float
    ) -> str:
        """Call the backend under the timeout, wrapping failures in GenerationFailure."""
        backend = self._backend
        try:
            return await asyncio.wait_for(
                backend.complete(system_prompt, user_prompt, max_tokens, temperature),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                f"{__name__}:_complete - {backend.name} timed out after {self._timeout_seconds}s"
            )
            raise GenerationFailure(
                f"Generation timed out after {self._timeout_seconds}s",
                provider=backend.name,
            ) from e
        except GenerationFailure:
            raise
        except Exception as e:
            logger.error(f"{__name__}:_complete - {backend.name} failed: {type(e).__name__}: {e}")
            raise GenerationFailure(f"Generation failed: {e}", provider=backend.name) from e
