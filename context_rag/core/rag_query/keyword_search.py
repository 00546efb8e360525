"""
Keyword ranking and sentence highlighting.

Scores chunks by case-insensitive term frequency with a bonus for the full
query phrase. Used as the fallback ranking when embeddings find nothing and
to build extractive answers.

Dependencies: re
System role: Lexical retrieval strategy
"""

import re

from context_rag.models.chunk import DocumentChunk
from context_rag.models.search import SearchResult

PHRASE_BONUS = 10
HIGHLIGHT_SENTENCES = 3
HIGHLIGHT_FALLBACK_CHARS = 200

_SENTENCE_END = re.compile(r"[.!?]+")


def query_terms(query: str) -> list[str]:
    """Lowercased whitespace-separated query terms."""
    return query.lower().split()


class KeywordSearch:
    """Term-frequency ranking with a full-phrase bonus."""

    name = "keyword"

    def score(self, query: str, content: str) -> int:
        """
        Keyword score of content for query.

        Args:
            query: User query
            content: Chunk text

        Returns:
            int: Sum of term match counts, plus PHRASE_BONUS if the whole query appears
        """
        total = 0
        for term in query_terms(query):
            total += len(re.findall(re.escape(term), content, flags=re.IGNORECASE))

        phrase = query.strip().lower()
        if phrase and phrase in content.lower():
            total += PHRASE_BONUS
        return total

    def rank(self, query: str, chunks: list[DocumentChunk], limit: int = 3) -> list[SearchResult]:
        """
        Rank chunks by keyword score.

        Args:
            query: User query
            chunks: Candidate chunks
            limit: Maximum results

        Returns:
            list[SearchResult]: Chunks with a positive score, best first
        """
        if limit <= 0:
            return []

        scored = []
        for chunk in chunks:
            value = self.score(query, chunk.content)
            if value > 0:
                scored.append(SearchResult(chunk=chunk, score=float(value), strategy=self.name))

        scored.sort(key=lambda result: result.score, reverse=True)
        return scored[:limit]

    def highlight(self, query: str, content: str) -> str:
        """
        Pick the sentences of content most relevant to query.

        Args:
            query: User query
            content: Chunk text

        Returns:
            str: Up to three sentences mentioning a query term, else the opening of the chunk
        """
        terms = query_terms(query)
        sentences = [s for s in _SENTENCE_END.split(content) if s.strip()]
        relevant = [s for s in sentences if any(term in s.lower() for term in terms)]

        if relevant:
            return ". ".join(relevant[:HIGHLIGHT_SENTENCES]).strip() + "."

        suffix = "..." if len(content) > HIGHLIGHT_FALLBACK_CHARS else ""
        return content[:HIGHLIGHT_FALLBACK_CHARS] + suffix
