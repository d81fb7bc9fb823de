"""
Content-keyed cache of document embeddings.
"""

from __future__ import annotations

import hashlib
import threading

from ..models import Document


def content_sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class EmbeddingCache:
    """
    In-memory embeddings keyed by document id and a hash of the document text.

    Editing a document changes its hash, so the stale entry misses and is
    replaced on the next ``put``. The cache is unbounded: entries for deleted
    documents stay until ``invalidate`` or ``clear`` is called. Callers get
    copies of the stored vectors.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, tuple[float, ...]]] = {}
        self._lock = threading.Lock()

    def get(self, document: Document) -> list[float] | None:
        digest = content_sha256(document.text)
        with self._lock:
            entry = self._entries.get(document.id)
        if entry is None or entry[0] != digest:
            return None
        return list(entry[1])

    def put(self, document: Document, embedding: list[float]) -> None:
        digest = content_sha256(document.text)
        with self._lock:
            self._entries[document.id] = (digest, tuple(embedding))

    def invalidate(self, doc_id: str) -> None:
        with self._lock:
            self._entries.pop(doc_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
