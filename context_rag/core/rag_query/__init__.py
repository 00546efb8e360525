"""RAG query business logic.

Includes quick-match shortcuts, ranking strategies, answer synthesis
and the per-query orchestrator.
"""

from .keyword_search import KeywordSearch
from .orchestrator import RAGOrchestrator
from .quick_match import DEFAULT_RULES, QuickMatch, QuickMatcher, QuickMatchRule
from .similarity import SimilaritySearch, cosine_similarity
from .strategies import ChainedStrategy, EmbeddingStrategy, KeywordStrategy, SearchStrategy, build_strategy
from .synthesizer import AnswerSynthesizer

__all__ = [
    "AnswerSynthesizer",
    "ChainedStrategy",
    "DEFAULT_RULES",
    "EmbeddingStrategy",
    "KeywordSearch",
    "KeywordStrategy",
    "QuickMatch",
    "QuickMatchRule",
    "QuickMatcher",
    "RAGOrchestrator",
    "SearchStrategy",
    "SimilaritySearch",
    "build_strategy",
    "cosine_similarity",
]
