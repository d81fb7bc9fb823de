"""
Similarity scoring and ranking of documents against a query embedding.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..models import Document


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredDocument:
    """Document paired with its similarity to the query."""

    document: Document
    score: float
    position: int


def similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Dot product of two unit-normalized embeddings (their cosine similarity).

    Embeddings of different dimension score 0.0 so that ranking stays total.
    """
    if len(a) != len(b):
        logger.debug("Dimension mismatch in similarity: %d != %d", len(a), len(b))
        return 0.0
    return float(sum(x * y for x, y in zip(a, b)))


def rank_documents(documents: list[ScoredDocument]) -> list[ScoredDocument]:
    """Sort by descending score; equal scores keep their input position."""
    return sorted(documents, key=lambda doc: (-doc.score, doc.position))


def rank(
    query_embedding: Sequence[float],
    candidates: Sequence[tuple[Document, Sequence[float] | None]],
) -> list[Document]:
    """Order documents by similarity to the query, skipping missing embeddings."""
    scored = [
        ScoredDocument(
            document=document,
            score=similarity(query_embedding, embedding),
            position=position,
        )
        for position, (document, embedding) in enumerate(candidates)
        if embedding is not None
    ]
    return [doc.document for doc in rank_documents(scored)]
