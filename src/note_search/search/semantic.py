"""
Embedding-based semantic search over notes.

Tokenizes and embeds the query and every document, then orders documents by
similarity to the query, falling back to the input order when the query
cannot be embedded.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from ..embeddings import EmbeddingProvider
from ..models import Document
from ..tokenizer import Tokenizer
from .cache import EmbeddingCache
from .ranker import rank


logger = logging.getLogger(__name__)


class SemanticSearchEngine:
    """Rank documents by relevance to a free-text query."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        embedding_provider: EmbeddingProvider,
        *,
        cache: EmbeddingCache | None = None,
        max_workers: int = 1,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.tokenizer = tokenizer
        self.embedding_provider = embedding_provider
        self.cache = cache
        self.max_workers = max_workers

    def embed_text(self, text: str) -> list[float] | None:
        """Tokenize and embed text; None when no embedding can be produced."""
        tokenized = self.tokenizer.tokenize(text)
        try:
            return self.embedding_provider.embed(
                tokenized.ids, tokenized.attention_mask
            )
        except Exception:
            logger.warning("Embedding provider raised", exc_info=True)
            return None

    def embed_document(self, document: Document) -> list[float] | None:
        if self.cache is not None:
            cached = self.cache.get(document)
            if cached is not None:
                return cached
        embedding = self.embed_text(document.text)
        if embedding is not None and self.cache is not None:
            self.cache.put(document, embedding)
        return embedding

    def search(self, query: str, documents: Sequence[Document]) -> list[Document]:
        """
        Return documents ordered by descending similarity to the query.

        An empty query, or a query that cannot be embedded, returns the
        documents in their original order. Documents that cannot be embedded
        are left out of the result.
        """
        if not query:
            return list(documents)

        query_embedding = self.embed_text(query)
        if query_embedding is None:
            logger.info("Query embedding unavailable; keeping original order")
            return list(documents)

        embeddings = self._embed_documents(documents)
        skipped = sum(1 for embedding in embeddings if embedding is None)
        if skipped:
            logger.info("Omitting %d document(s) without an embedding", skipped)

        return rank(query_embedding, list(zip(documents, embeddings)))

    def _embed_documents(
        self, documents: Sequence[Document]
    ) -> list[list[float] | None]:
        if self.max_workers == 1 or len(documents) < 2:
            return [self.embed_document(document) for document in documents]
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(self.embed_document, documents))
