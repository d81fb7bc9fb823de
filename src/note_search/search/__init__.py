"""Similarity ranking and semantic search over notes."""

from .cache import EmbeddingCache
from .ranker import ScoredDocument, rank, rank_documents, similarity
from .semantic import SemanticSearchEngine

__all__ = [
    "EmbeddingCache",
    "ScoredDocument",
    "rank",
    "rank_documents",
    "similarity",
    "SemanticSearchEngine",
]
