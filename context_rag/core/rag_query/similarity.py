"""
Cosine similarity ranking over embedded chunks.

Dependencies: numpy
System role: Vector ranking for the embedding search strategy
"""

import numpy as np

from context_rag.models.chunk import DocumentChunk
from context_rag.models.search import SearchResult


def cosine_similarity(a: list[float] | None, b: list[float] | None) -> float:
    """
    Cosine similarity between two vectors.

    Returns 0.0 when either vector is missing or has zero norm, or when the
    dimensions differ. Never NaN.

    Args:
        a: First vector
        b: Second vector

    Returns:
        float: Similarity in [-1, 1]
    """
    if not a or not b or len(a) != len(b):
        return 0.0

    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(vec_a)
    norm_b = np.linalg.norm(vec_b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    score = float(np.dot(vec_a, vec_b) / (norm_a * norm_b))
    if np.isnan(score):
        return 0.0
    return max(-1.0, min(1.0, score))


class SimilaritySearch:
    """Rank chunks by cosine similarity to a query vector."""

    name = "embedding"

    def rank(
        self,
        query_vector: list[float],
        chunks: list[DocumentChunk],
        limit: int,
        min_score: float | None = None,
    ) -> list[SearchResult]:
        """
        Score and order chunks.

        Args:
            query_vector: Query embedding
            chunks: Candidate chunks
            limit: Maximum results
            min_score: Drop results scoring at or below this value

        Returns:
            list[SearchResult]: Best first; ties keep chunk order
        """
        if not chunks or limit <= 0:
            return []

        scored = [
            SearchResult(
                chunk=chunk,
                score=cosine_similarity(query_vector, chunk.embedding),
                strategy=self.name,
            )
            for chunk in chunks
        ]
        if min_score is not None:
            scored = [result for result in scored if result.score > min_score]

        # sorted() is stable, so equal scores stay in insertion order
        scored = sorted(scored, key=lambda result: result.score, reverse=True)
        return scored[:limit]
